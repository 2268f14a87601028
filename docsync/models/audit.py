"""Audit result models."""

from dataclasses import dataclass, field
from enum import Enum

from docsync.models.skill import SkillDocument


class Category(str, Enum):
    """Kind of divergence between a skill and the docs."""
    OUTDATED = "Outdated"
    MISSING = "Missing"
    INCORRECT = "Incorrect"


@dataclass(frozen=True)
class AuditRecommendation:
    """One suggested change to a skill document."""
    skill_name: str
    category: Category
    current_text: str
    docs_text: str
    suggested_change: str


@dataclass
class MatchResult:
    """Outcome of auditing one skill against its matched pages."""
    skill: SkillDocument
    sources: list[str] = field(default_factory=list)
    recommendations: list[AuditRecommendation] = field(default_factory=list)
