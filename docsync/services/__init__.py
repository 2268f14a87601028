"""Pipeline services."""

from docsync.services.cross_reference import CrossReferenceMatcher
from docsync.services.diff_engine import diff_buckets, find_missing
from docsync.services.fetcher import Fetcher, HttpFetcher
from docsync.services.link_store import LinkStore
from docsync.services.llm_collaborator import Auditor, LLMCollaborator, Summarizer
from docsync.services.partitioner import LinkPartitioner, filter_urls
from docsync.services.report import ReportEmitter, render_report
from docsync.services.sitemap import SitemapParser, extract_urls
from docsync.services.skill_index import SkillIndex
from docsync.services.summary_index import SummaryIndex

__all__ = [
    "Auditor",
    "CrossReferenceMatcher",
    "Fetcher",
    "HttpFetcher",
    "LLMCollaborator",
    "LinkPartitioner",
    "LinkStore",
    "ReportEmitter",
    "SitemapParser",
    "SkillIndex",
    "Summarizer",
    "SummaryIndex",
    "diff_buckets",
    "extract_urls",
    "filter_urls",
    "find_missing",
    "render_report",
]
