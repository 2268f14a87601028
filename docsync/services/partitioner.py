"""Split sitemap URLs into product-area buckets."""

import logging

logger = logging.getLogger(__name__)


def filter_urls(urls: list[str], pattern: str) -> list[str]:
    """Return the URLs containing ``pattern`` as a substring, order preserved."""
    return [url for url in urls if pattern in url]


class LinkPartitioner:
    """Partition URLs by substring pattern.

    Buckets are computed independently, so a URL matching two patterns
    lands in both buckets.
    """

    def __init__(self, buckets: dict[str, str]):
        self.buckets = dict(buckets)

    def partition(self, urls: list[str]) -> dict[str, list[str]]:
        partitions = {
            name: filter_urls(urls, pattern)
            for name, pattern in self.buckets.items()
        }
        for name, bucket_urls in partitions.items():
            logger.info(f"Bucket {name}: {len(bucket_urls)} URLs")
        return partitions
