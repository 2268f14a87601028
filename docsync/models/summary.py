"""Summary index entry model."""

from dataclasses import dataclass


@dataclass(frozen=True)
class SummaryEntry:
    """A curated description of one documentation page."""
    url: str
    description: str
    bucket: str

    def to_line(self) -> str:
        """Render as a summary file bullet."""
        description = " ".join(self.description.split())
        if not description:
            return f"- {self.url}"
        return f"- {self.url} - {description}"
