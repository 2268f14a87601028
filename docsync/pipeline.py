"""Documentation sync pipeline.

Runs the stages strictly in order, one fetch at a time:

    Init -> SitemapFetched -> Partitioned -> Diffed -> SummaryUpdated
         -> Matched -> ReportWritten

Any error moves the run to Aborted and no later stage runs.
"""

import logging
from contextlib import contextmanager
from datetime import datetime, timezone
from enum import Enum
from pathlib import Path

from docsync.config import Settings
from docsync.exceptions import DocSyncError
from docsync.models import MatchResult, SummaryEntry
from docsync.services.cross_reference import CrossReferenceMatcher
from docsync.services.diff_engine import diff_buckets
from docsync.services.fetcher import Fetcher
from docsync.services.link_store import LinkStore
from docsync.services.llm_collaborator import Auditor, Summarizer
from docsync.services.page_content import PageContentExtractor
from docsync.services.partitioner import LinkPartitioner
from docsync.services.report import ReportEmitter
from docsync.services.sitemap import SitemapParser
from docsync.services.skill_index import SkillIndex
from docsync.services.summary_index import SummaryIndex

logger = logging.getLogger(__name__)

DIALECT_BUCKETS = ("ts", "go")


class RunState(str, Enum):
    INIT = "init"
    SITEMAP_FETCHED = "sitemap_fetched"
    PARTITIONED = "partitioned"
    DIFFED = "diffed"
    SUMMARY_UPDATED = "summary_updated"
    MATCHED = "matched"
    REPORT_WRITTEN = "report_written"
    ABORTED = "aborted"


class SyncPipeline:
    """Sitemap sync, summary diff and skill audit for one invocation."""

    def __init__(
        self,
        settings: Settings,
        fetcher: Fetcher,
        summarizer: Summarizer | None = None,
        auditor: Auditor | None = None,
    ):
        self.settings = settings
        self.fetcher = fetcher
        self.summarizer = summarizer
        self.auditor = auditor

        self.link_store = LinkStore(settings.docs_dir)
        self.summary_index = SummaryIndex(settings.docs_dir)
        self.extractor = PageContentExtractor()

        self.state = RunState.INIT
        self.partitions: dict[str, list[str]] = {}
        self.missing: dict[str, list[str]] = {}
        self.stale: dict[str, list[str]] = {}
        self.results: list[MatchResult] = []

    @contextmanager
    def _abort_on_error(self):
        try:
            yield
        except DocSyncError as e:
            self.state = RunState.ABORTED
            logger.error(f"Run aborted: {e}")
            raise
        except Exception:
            self.state = RunState.ABORTED
            logger.exception("Run aborted by an unexpected error")
            raise

    def fetch_links(self) -> dict[str, list[str]]:
        """Fetch the sitemap, partition it and overwrite the link list files."""
        with self._abort_on_error():
            urls = SitemapParser(self.fetcher).get_urls(self.settings.sitemap_url)
            self.state = RunState.SITEMAP_FETCHED

            self.partitions = LinkPartitioner(self.settings.buckets).partition(urls)
            self.link_store.write(self.partitions)
            self.state = RunState.PARTITIONED
        return self.partitions

    def diff(self, partitions: dict[str, list[str]] | None = None) -> dict[str, list[str]]:
        """Find URLs without a summary.

        Uses the partitions from fetch_links, or the link list files on disk
        when the fetch stage ran in an earlier invocation.
        """
        with self._abort_on_error():
            if partitions is None:
                partitions = self.partitions or {
                    bucket: self.link_store.read(bucket) for bucket in self.settings.buckets
                }
            self.partitions = partitions
            self.missing = diff_buckets(partitions, self.summary_index)

            # Stale entries are reported, never pruned
            for bucket, urls in partitions.items():
                stale = self.summary_index.stale_urls(bucket, urls)
                if stale:
                    logger.info(f"Bucket {bucket}: {len(stale)} summarized URLs no longer in the sitemap")
                self.stale[bucket] = stale

            self.state = RunState.DIFFED
        return self.missing

    def update_summaries(self, missing: dict[str, list[str]] | None = None) -> dict[str, list[SummaryEntry]]:
        """Summarize missing URLs with the summarizer and append them.

        Every summary is produced before anything is written, so a failure
        leaves the summary files as they were.
        """
        missing = self.missing if missing is None else missing
        written: dict[str, list[SummaryEntry]] = {}

        with self._abort_on_error():
            if self.summarizer is None:
                pending = sum(len(urls) for urls in missing.values())
                if pending:
                    logger.warning(f"No summarizer configured; {pending} URLs left without a summary")
                self.state = RunState.SUMMARY_UPDATED
                return written

            new_entries: dict[str, list[SummaryEntry]] = {}
            for bucket, urls in missing.items():
                entries = []
                for i, url in enumerate(urls, 1):
                    logger.info(f"Summarizing {bucket} {i}/{len(urls)}: {url}")
                    content = self.extractor.extract(self.fetcher.fetch_text(url))
                    description = self.summarizer.summarize(url, content.text)
                    entries.append(SummaryEntry(url=url, description=description, bucket=bucket))
                new_entries[bucket] = entries

            for bucket, entries in new_entries.items():
                written[bucket] = self.summary_index.append(bucket, entries)

            self.state = RunState.SUMMARY_UPDATED
        return written

    def audit(self, generated_at: datetime | None = None) -> Path:
        """Audit every skill against its matched pages and write the report."""
        with self._abort_on_error():
            skills = SkillIndex.load(self.settings.skills_dir)
            shared = tuple(b for b in self.settings.buckets if b not in DIALECT_BUCKETS)
            matcher = CrossReferenceMatcher(
                self.summary_index,
                self.fetcher,
                auditor=self.auditor,
                shared_buckets=shared,
            )

            self.results = [matcher.match(skill) for skill in skills]
            self.state = RunState.MATCHED

            emitter = ReportEmitter(self.settings.report_path)
            path = emitter.write(self.results, generated_at or datetime.now(timezone.utc))
            self.state = RunState.REPORT_WRITTEN
        return path

    def run(self) -> Path:
        """Run every stage in order."""
        self.fetch_links()
        self.diff()
        self.update_summaries()
        return self.audit()
