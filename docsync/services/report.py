"""Render audit results into the skill update report."""

import logging
from datetime import datetime
from pathlib import Path

from docsync.models import MatchResult

logger = logging.getLogger(__name__)


def _indent(text: str) -> str:
    """Keep multi-line fields inside their numbered list item."""
    return "\n   ".join(text.strip().splitlines()) if text.strip() else "(none)"


def render_report(results: list[MatchResult], generated_at: datetime | None = None) -> str:
    """Render one markdown section per audited skill.

    Recommendations are grouped by skill name; skills appear in the order
    they were first audited.
    """
    grouped: dict[str, MatchResult] = {}
    for result in results:
        name = result.skill.name
        if name not in grouped:
            grouped[name] = MatchResult(skill=result.skill)
        merged = grouped[name]
        merged.sources.extend(url for url in result.sources if url not in merged.sources)
        merged.recommendations.extend(result.recommendations)

    lines = ["# Skill Update Recommendations", ""]
    if generated_at is not None:
        lines += [f"Generated: {generated_at.isoformat(timespec='seconds')}", ""]

    total = sum(len(r.recommendations) for r in grouped.values())
    lines += [f"{total} recommendations across {len(grouped)} skills.", ""]

    for name, result in grouped.items():
        lines += [f"## {name}", "", f"**Dialect:** {result.skill.dialect.value}", ""]

        lines += ["### Sources checked", ""]
        if result.sources:
            lines += [f"- {url}" for url in result.sources]
        else:
            lines.append("- (no matching documentation pages)")
        lines.append("")

        lines += ["### Recommended Updates", ""]
        if not result.recommendations:
            lines += ["No updates recommended.", ""]
            continue

        for i, rec in enumerate(result.recommendations, 1):
            lines += [
                f"{i}. **Category:** {rec.category.value}",
                f"   **Current:** {_indent(rec.current_text)}",
                f"   **Docs say:** {_indent(rec.docs_text)}",
                f"   **Recommended change:** {_indent(rec.suggested_change)}",
                "",
            ]

    return "\n".join(lines).rstrip("\n") + "\n"


class ReportEmitter:
    """Writes the report as a fresh artifact; earlier reports are replaced."""

    def __init__(self, path: Path):
        self.path = Path(path)

    def write(self, results: list[MatchResult], generated_at: datetime | None = None) -> Path:
        content = render_report(results, generated_at)
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(content, encoding="utf-8")
        logger.info(f"Wrote report for {len(results)} skills to {self.path}")
        return self.path
