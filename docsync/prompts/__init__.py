"""LLM prompts for the summarizer and auditor collaborators."""

from docsync.prompts.page_summary import PAGE_SUMMARY_PROMPT
from docsync.prompts.skill_audit import SKILL_AUDIT_PROMPT

__all__ = [
    "PAGE_SUMMARY_PROMPT",
    "SKILL_AUDIT_PROMPT",
]
