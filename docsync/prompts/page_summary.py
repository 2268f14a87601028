"""Prompt for summarizing a single documentation page."""

PAGE_SUMMARY_PROMPT = """Summarize this Encore documentation page for an index that helps an AI coding agent decide which page to read.

## Page

URL: {url}

Content:
{page_text}

## Output Format

Return ONLY a valid JSON object:
{{"description": "One or two sentences describing what the page teaches"}}

## Important

- Name the concrete APIs, options or concepts the page covers
- No marketing language, no "This page"
- Return ONLY valid JSON, no markdown code fences"""
