"""Sitemap parsing service."""

import logging
import re

from docsync.services.fetcher import Fetcher

logger = logging.getLogger(__name__)

LOC_PATTERN = re.compile(r"<loc>([^<]+)</loc>")


def extract_urls(xml: str) -> list[str]:
    """Extract every <loc> value in document order.

    Duplicates are kept. Sitemap index entries are returned like page
    entries; nested sitemaps are not followed.
    """
    return [match.group(1).strip() for match in LOC_PATTERN.finditer(xml)]


class SitemapParser:
    """Service for fetching and parsing sitemap.xml files."""

    def __init__(self, fetcher: Fetcher):
        self.fetcher = fetcher

    def get_urls(self, sitemap_url: str) -> list[str]:
        """Get all URLs from a sitemap.

        Returns:
            List of URLs found in the sitemap, possibly empty.

        Raises:
            FetchError: If the sitemap could not be fetched.
        """
        logger.info(f"Fetching sitemap from {sitemap_url}...")
        xml = self.fetcher.fetch_text(sitemap_url)

        urls = extract_urls(xml)
        if not urls:
            logger.warning(f"No <loc> entries found in sitemap {sitemap_url}")
        logger.info(f"Found {len(urls)} URLs in sitemap")
        return urls
