"""Tests for the skill update report."""

from datetime import datetime, timezone
from pathlib import Path

from docsync.models import AuditRecommendation, Category, Dialect, MatchResult, SkillDocument
from docsync.services.report import ReportEmitter, render_report


def skill(name: str, dialect: Dialect = Dialect.TS) -> SkillDocument:
    return SkillDocument(name=name, dialect=dialect, keywords=frozenset(), body="")


def rec(skill_name: str, category: Category = Category.OUTDATED) -> AuditRecommendation:
    return AuditRecommendation(
        skill_name=skill_name,
        category=category,
        current_text="handler: async (event) => {",
        docs_text="`handler` does not appear in any matched documentation page",
        suggested_change="Update the example.",
    )


class TestRenderReport:
    """Tests for render_report."""

    def test_renders_section_per_skill(self) -> None:
        results = [
            MatchResult(
                skill=skill("encore-pubsub"),
                sources=["https://encore.dev/docs/ts/primitives/pubsub"],
                recommendations=[rec("encore-pubsub"), rec("encore-pubsub", Category.INCORRECT)],
            ),
            MatchResult(skill=skill("encore-go-api", Dialect.GO), sources=["https://encore.dev/docs/go/primitives/apis"]),
        ]

        report = render_report(results)

        assert report.startswith("# Skill Update Recommendations\n")
        assert "2 recommendations across 2 skills." in report
        assert "## encore-pubsub\n\n**Dialect:** ts\n" in report
        assert "### Sources checked\n\n- https://encore.dev/docs/ts/primitives/pubsub\n" in report
        assert "1. **Category:** Outdated\n   **Current:** handler: async (event) => {\n" in report
        assert "2. **Category:** Incorrect\n" in report
        assert "   **Recommended change:** Update the example.\n" in report
        assert "## encore-go-api\n\n**Dialect:** go\n" in report
        assert report.endswith("### Recommended Updates\n\nNo updates recommended.\n")

    def test_groups_results_by_skill_name(self) -> None:
        results = [
            MatchResult(skill=skill("encore-pubsub"), sources=["https://a.dev/1"], recommendations=[rec("encore-pubsub")]),
            MatchResult(skill=skill("encore-pubsub"), sources=["https://a.dev/1", "https://a.dev/2"], recommendations=[rec("encore-pubsub")]),
        ]

        report = render_report(results)

        assert report.count("## encore-pubsub") == 1
        assert report.count("- https://a.dev/1") == 1
        assert "2. **Category:** Outdated" in report

    def test_skill_without_sources(self) -> None:
        report = render_report([MatchResult(skill=skill("encore-cron", Dialect.AMBIGUOUS))])

        assert "**Dialect:** ambiguous" in report
        assert "- (no matching documentation pages)" in report

    def test_multiline_fields_stay_in_list_item(self) -> None:
        multi = AuditRecommendation("s", Category.INCORRECT, "line one\nline two", "docs", "change")

        report = render_report([MatchResult(skill=skill("s"), recommendations=[multi])])

        assert "   **Current:** line one\n   line two\n" in report

    def test_generated_timestamp(self) -> None:
        report = render_report([], generated_at=datetime(2026, 1, 2, 3, 4, 5, tzinfo=timezone.utc))

        assert "Generated: 2026-01-02T03:04:05+00:00" in report
        assert "0 recommendations across 0 skills." in report


class TestReportEmitter:
    """Tests for ReportEmitter."""

    def test_overwrites_previous_report(self, tmp_path: Path) -> None:
        path = tmp_path / "update-skills.md"
        path.write_text("old report\n", encoding="utf-8")

        ReportEmitter(path).write([MatchResult(skill=skill("encore-pubsub"))])

        content = path.read_text(encoding="utf-8")
        assert "old report" not in content
        assert "## encore-pubsub" in content
