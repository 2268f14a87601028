"""Tests for the docsync command line."""

import openai
import pytest
from typer.testing import CliRunner

from docsync import cli
from docsync.config import Settings
from docsync.services.llm_collaborator import LLMCollaborator

from tests.conftest import GO_PUBSUB_URL, SITEMAP_URL, TS_PUBSUB_SKILL, TS_PUBSUB_URL, FakeFetcher, sitemap_xml, write_skill

runner = CliRunner()


@pytest.fixture
def configure(monkeypatch, settings: Settings):
    def _configure(pages: dict[str, str]) -> FakeFetcher:
        fetcher = FakeFetcher(pages)
        monkeypatch.setattr(cli, "get_settings", lambda: settings)
        monkeypatch.setattr(cli, "build_fetcher", lambda s: fetcher)
        monkeypatch.setattr(cli, "configure_logging", lambda *args, **kwargs: None)
        return fetcher

    return _configure


class TestFetchCommand:
    """Tests for `docsync fetch`."""

    def test_writes_link_lists(self, configure, settings: Settings) -> None:
        configure({SITEMAP_URL: sitemap_xml(TS_PUBSUB_URL, GO_PUBSUB_URL)})

        result = runner.invoke(cli.app, ["fetch"])

        assert result.exit_code == 0
        assert "ts.txt: 1 URLs" in result.output
        assert "platform.txt: 0 URLs" in result.output
        assert (settings.docs_dir / "go.txt").read_text(encoding="utf-8") == GO_PUBSUB_URL

    def test_fetch_error_exits_non_zero(self, configure) -> None:
        configure({})

        result = runner.invoke(cli.app, ["fetch"])

        assert result.exit_code == 1
        assert f"Failed to fetch {SITEMAP_URL}" in result.output

    def test_docs_dir_option(self, configure, tmp_path) -> None:
        configure({SITEMAP_URL: sitemap_xml(TS_PUBSUB_URL)})
        target = tmp_path / "elsewhere"

        result = runner.invoke(cli.app, ["fetch", "--docs-dir", str(target)])

        assert result.exit_code == 0
        assert (target / "ts.txt").read_text(encoding="utf-8") == TS_PUBSUB_URL


class TestDiffCommand:
    """Tests for `docsync diff`."""

    def test_lists_missing_urls(self, configure) -> None:
        configure({SITEMAP_URL: sitemap_xml(TS_PUBSUB_URL, GO_PUBSUB_URL)})
        runner.invoke(cli.app, ["fetch"])

        result = runner.invoke(cli.app, ["diff"])

        assert result.exit_code == 0
        assert "## ts (1 missing)" in result.output
        assert TS_PUBSUB_URL in result.output


class TestAuditCommand:
    """Tests for `docsync audit`."""

    def test_writes_report(self, configure, settings: Settings) -> None:
        configure({})
        write_skill(settings.skills_dir, "encore-pubsub", TS_PUBSUB_SKILL)

        result = runner.invoke(cli.app, ["audit"])

        assert result.exit_code == 0
        assert f"1 recommendations written to {settings.report_path}" in result.output
        assert "Missing" in settings.report_path.read_text(encoding="utf-8")


class TestSummarizeCommand:
    """Tests for `docsync summarize`."""

    def test_llm_failure_exits_non_zero(self, configure, monkeypatch, settings: Settings) -> None:
        """Test that a provider error is reported as an error line, not a traceback."""
        configure({SITEMAP_URL: sitemap_xml(TS_PUBSUB_URL), TS_PUBSUB_URL: "<html><main><p>Topics.</p></main></html>"})

        def fail(self, prompt, model):
            raise openai.OpenAIError("The api_key client option must be set")

        monkeypatch.setattr(LLMCollaborator, "_call_openai", fail)
        runner.invoke(cli.app, ["fetch"])

        result = runner.invoke(cli.app, ["summarize"])

        assert result.exit_code == 1
        assert "Error: openai request failed" in result.output
        assert not (settings.docs_dir / "ts-docs-summary.md").exists()
