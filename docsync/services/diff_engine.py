"""Find bucket URLs that have no summary yet."""

import logging

from docsync.models import SummaryEntry
from docsync.services.summary_index import SummaryIndex

logger = logging.getLogger(__name__)


def find_missing(fresh_urls: list[str], entries: list[SummaryEntry]) -> list[str]:
    """URLs in ``fresh_urls`` with no summary entry.

    Matching is exact on the URL string: trailing slashes and query strings
    are not normalized. The result keeps fresh order without duplicates.
    """
    summarized = {entry.url for entry in entries}
    missing = []
    for url in fresh_urls:
        if url in summarized:
            continue
        summarized.add(url)
        missing.append(url)
    return missing


def diff_buckets(partitions: dict[str, list[str]], index: SummaryIndex) -> dict[str, list[str]]:
    """Compute the missing URLs of every bucket against the summary index."""
    result = {}
    for bucket, urls in partitions.items():
        result[bucket] = find_missing(urls, index.load(bucket))
        logger.info(f"Bucket {bucket}: {len(result[bucket])}/{len(urls)} URLs missing a summary")
    return result
