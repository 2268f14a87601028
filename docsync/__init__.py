"""Documentation sync and skill audit tooling for Encore skill documents."""

__version__ = "1.0.0"
