"""Data models for links, summaries, skills and audit results."""

from docsync.models.audit import AuditRecommendation, Category, MatchResult
from docsync.models.skill import CodeBlock, Dialect, SkillDocument
from docsync.models.summary import SummaryEntry

__all__ = [
    "AuditRecommendation",
    "Category",
    "CodeBlock",
    "Dialect",
    "MatchResult",
    "SkillDocument",
    "SummaryEntry",
]
