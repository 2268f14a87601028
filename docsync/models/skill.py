"""Skill document model."""

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path


class Dialect(str, Enum):
    """Encore product variant a skill document targets."""
    TS = "ts"
    GO = "go"
    AMBIGUOUS = "ambiguous"

    @property
    def buckets(self) -> tuple[str, ...]:
        """Summary buckets worth searching for this dialect."""
        if self is Dialect.AMBIGUOUS:
            return ("ts", "go")
        return (self.value,)


@dataclass(frozen=True)
class CodeBlock:
    """A fenced code block from a skill body."""
    language: str
    code: str


@dataclass
class SkillDocument:
    """A skill document loaded from the static corpus."""
    name: str
    dialect: Dialect
    keywords: frozenset[str]
    body: str
    description: str = ""
    path: Path | None = None
    code_blocks: list[CodeBlock] = field(default_factory=list)
