"""docsync command line.

Examples:
    docsync fetch
    docsync diff
    docsync summarize
    docsync audit --llm
    docsync sync
"""

from pathlib import Path

import typer

from docsync.config import Settings, get_settings
from docsync.exceptions import DocSyncError
from docsync.logging_config import configure_logging
from docsync.pipeline import SyncPipeline
from docsync.services.fetcher import HttpFetcher
from docsync.services.llm_collaborator import LLMCollaborator

app = typer.Typer(name="docsync", help="Sync Encore docs summaries and audit skill documents", add_completion=False)


def build_fetcher(settings: Settings) -> HttpFetcher:
    return HttpFetcher.from_settings(settings)


def _settings(
    docs_dir: Path | None = None,
    skills_dir: Path | None = None,
    report: Path | None = None,
) -> Settings:
    update = {}
    if docs_dir is not None:
        update["docs_dir"] = docs_dir
    if skills_dir is not None:
        update["skills_dir"] = skills_dir
    if report is not None:
        update["report_path"] = report
    return get_settings().model_copy(update=update)


def _run(settings: Settings, stage, use_llm: bool = False) -> None:
    collaborator = LLMCollaborator(settings) if use_llm else None
    fetcher = build_fetcher(settings)
    try:
        pipeline = SyncPipeline(settings, fetcher, summarizer=collaborator, auditor=collaborator)
        stage(pipeline)
    except DocSyncError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1)
    finally:
        fetcher.close()


@app.callback()
def main(verbose: bool = typer.Option(False, "--verbose", "-v", help="Debug logging")):
    settings = get_settings()
    configure_logging("DEBUG" if verbose else settings.log_level, settings.log_json)


@app.command()
def fetch(
    docs_dir: Path = typer.Option(None, "--docs-dir", help="Directory for link lists and summaries"),
):
    """Fetch the sitemap and rewrite the ts/go/platform link lists."""
    settings = _settings(docs_dir=docs_dir)

    def stage(pipeline: SyncPipeline) -> None:
        partitions = pipeline.fetch_links()
        for bucket, urls in partitions.items():
            typer.echo(f"{bucket}.txt: {len(urls)} URLs")

    _run(settings, stage)


@app.command()
def diff(
    docs_dir: Path = typer.Option(None, "--docs-dir", help="Directory for link lists and summaries"),
):
    """List URLs from the link lists that have no summary yet."""
    settings = _settings(docs_dir=docs_dir)

    def stage(pipeline: SyncPipeline) -> None:
        missing = pipeline.diff()
        for bucket, urls in missing.items():
            typer.echo(f"## {bucket} ({len(urls)} missing)")
            for url in urls:
                typer.echo(url)
            stale = pipeline.stale.get(bucket)
            if stale:
                typer.echo(f"({len(stale)} summarized URLs no longer in the sitemap)")

    _run(settings, stage)


@app.command()
def summarize(
    docs_dir: Path = typer.Option(None, "--docs-dir", help="Directory for link lists and summaries"),
):
    """Summarize missing URLs with the configured LLM and append them."""
    settings = _settings(docs_dir=docs_dir)

    def stage(pipeline: SyncPipeline) -> None:
        pipeline.diff()
        written = pipeline.update_summaries()
        for bucket, entries in written.items():
            typer.echo(f"{bucket}: {len(entries)} summaries appended")

    _run(settings, stage, use_llm=True)


@app.command()
def audit(
    docs_dir: Path = typer.Option(None, "--docs-dir", help="Directory for link lists and summaries"),
    skills_dir: Path = typer.Option(None, "--skills-dir", help="Skill document corpus"),
    report: Path = typer.Option(None, "--report", help="Report output path"),
    llm: bool = typer.Option(False, "--llm", help="Also ask the LLM to compare each page"),
):
    """Audit skill documents against the docs and write the update report."""
    settings = _settings(docs_dir=docs_dir, skills_dir=skills_dir, report=report)

    def stage(pipeline: SyncPipeline) -> None:
        path = pipeline.audit()
        total = sum(len(r.recommendations) for r in pipeline.results)
        typer.echo(f"{total} recommendations written to {path}")

    _run(settings, stage, use_llm=llm)


@app.command()
def sync(
    docs_dir: Path = typer.Option(None, "--docs-dir", help="Directory for link lists and summaries"),
    skills_dir: Path = typer.Option(None, "--skills-dir", help="Skill document corpus"),
    report: Path = typer.Option(None, "--report", help="Report output path"),
):
    """Run fetch, diff, summarize and audit in one go."""
    settings = _settings(docs_dir=docs_dir, skills_dir=skills_dir, report=report)

    def stage(pipeline: SyncPipeline) -> None:
        path = pipeline.run()
        typer.echo(f"Report written to {path}")

    _run(settings, stage, use_llm=True)


if __name__ == "__main__":
    app()
