"""Append-only summary index stored as one markdown file per bucket."""

import logging
import re
from pathlib import Path

from docsync.models import SummaryEntry

logger = logging.getLogger(__name__)

# - https://encore.dev/docs/ts/primitives/pubsub - Pub/Sub topics and subscriptions.
BULLET_PATTERN = re.compile(r"^-\s+(https?://\S+)(?:\s+-(?:\s+(.*))?)?$")
# - [Pub/Sub](https://encore.dev/docs/ts/primitives/pubsub): Topics and subscriptions.
LINK_PATTERN = re.compile(r"^-\s*\[[^\]]*\]\(([^)\s]+)\)(?::\s*(.*))?$")


def parse_summary_line(line: str, bucket: str) -> SummaryEntry | None:
    """Parse a summary bullet, or return None for any other line."""
    stripped = line.strip()
    match = LINK_PATTERN.match(stripped) or BULLET_PATTERN.match(stripped)
    if not match:
        return None
    return SummaryEntry(
        url=match.group(1),
        description=(match.group(2) or "").strip(),
        bucket=bucket,
    )


class SummaryIndex:
    """Persisted URL -> description index, partitioned per bucket.

    Entries are only ever appended. Existing lines are never rewritten,
    reordered or removed, even when their URL has left the sitemap.
    """

    def __init__(self, directory: Path):
        self.directory = Path(directory)

    def path_for(self, bucket: str) -> Path:
        return self.directory / f"{bucket}-docs-summary.md"

    def load(self, bucket: str) -> list[SummaryEntry]:
        """Load a bucket's entries in file order."""
        path = self.path_for(bucket)
        if not path.exists():
            return []

        entries = []
        for line in path.read_text(encoding="utf-8").splitlines():
            entry = parse_summary_line(line, bucket)
            if entry:
                entries.append(entry)
        logger.debug(f"Loaded {len(entries)} summary entries for {bucket}")
        return entries

    def urls(self, bucket: str) -> set[str]:
        return {entry.url for entry in self.load(bucket)}

    def append(self, bucket: str, entries: list[SummaryEntry]) -> list[SummaryEntry]:
        """Append entries whose URL is not yet in the bucket.

        Entries with a blank description are not written; their URL stays
        missing and is picked up again by the next run.

        Returns:
            The entries actually written, in input order.
        """
        seen = self.urls(bucket)
        new_entries = []
        for entry in entries:
            if not entry.description.strip():
                logger.warning(f"Not appending blank summary for {entry.url}")
                continue
            if entry.url in seen:
                logger.info(f"Skipping already summarized URL: {entry.url}")
                continue
            seen.add(entry.url)
            new_entries.append(entry)

        if not new_entries:
            return []

        path = self.path_for(bucket)
        path.parent.mkdir(parents=True, exist_ok=True)

        prefix = ""
        if path.exists():
            existing = path.read_bytes()
            if existing and not existing.endswith(b"\n"):
                prefix = "\n"

        with path.open("a", encoding="utf-8") as f:
            f.write(prefix + "".join(f"{entry.to_line()}\n" for entry in new_entries))

        logger.info(f"Appended {len(new_entries)} entries to {path.name}")
        return new_entries

    def stale_urls(self, bucket: str, fresh_urls: list[str]) -> list[str]:
        """URLs summarized earlier that are no longer in the fresh bucket."""
        fresh = set(fresh_urls)
        return [entry.url for entry in self.load(bucket) if entry.url not in fresh]
