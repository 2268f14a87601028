"""LLM-backed summarizer and auditor collaborators.

The deterministic pipeline only depends on the narrow Summarizer and Auditor
protocols; LLMCollaborator is the production implementation of both.
"""

import hashlib
import json
import logging
from typing import Protocol

import anthropic
import openai

from docsync.config import Settings
from docsync.exceptions import CollaboratorError
from docsync.models import AuditRecommendation, Category
from docsync.prompts import PAGE_SUMMARY_PROMPT, SKILL_AUDIT_PROMPT

logger = logging.getLogger(__name__)

# Fixed seed for deterministic output (OpenAI only)
DETERMINISTIC_SEED = 42


class Summarizer(Protocol):
    def summarize(self, url: str, page_text: str) -> str: ...


class Auditor(Protocol):
    def compare(self, skill_name: str, skill_body: str, page_text: str) -> list[AuditRecommendation]: ...


class LLMCollaborator:
    """Summarizes pages and audits skills using LLM APIs."""

    def __init__(self, settings: Settings):
        self.settings = settings
        self._openai_client = None
        self._anthropic_client = None

    def _get_openai_client(self):
        """Lazy load OpenAI client."""
        if self._openai_client is None:
            from openai import OpenAI
            self._openai_client = OpenAI(api_key=self.settings.openai_api_key)
        return self._openai_client

    def _get_anthropic_client(self):
        """Lazy load Anthropic client."""
        if self._anthropic_client is None:
            from anthropic import Anthropic
            self._anthropic_client = Anthropic(api_key=self.settings.anthropic_api_key)
        return self._anthropic_client

    def _call_openai(self, prompt: str, model: str) -> str:
        """Call OpenAI API with deterministic settings."""
        client = self._get_openai_client()

        response = client.chat.completions.create(
            model=model,
            messages=[{"role": "user", "content": prompt}],
            temperature=0,
            seed=DETERMINISTIC_SEED,
            response_format={"type": "json_object"},
        )

        logger.debug(f"OpenAI fingerprint: {response.system_fingerprint}")
        return response.choices[0].message.content

    def _call_anthropic(self, prompt: str, model: str) -> str:
        """Call Anthropic API."""
        client = self._get_anthropic_client()

        response = client.messages.create(
            model=model,
            max_tokens=4096,
            messages=[{"role": "user", "content": prompt}],
            temperature=0,
        )

        return response.content[0].text

    def _call_llm(self, prompt: str) -> str:
        """Call configured LLM provider."""
        provider = self.settings.llm_provider
        model = self.settings.llm_model

        prompt_hash = hashlib.md5(prompt.encode()).hexdigest()[:8]
        logger.info(f"Calling {provider} {model} (prompt {prompt_hash})...")

        try:
            if provider == "openai":
                return self._call_openai(prompt, model)
            elif provider == "anthropic":
                return self._call_anthropic(prompt, model)
        except (openai.OpenAIError, anthropic.AnthropicError) as e:
            raise CollaboratorError(f"{provider} request failed: {e}") from e

        raise ValueError(f"Unknown LLM provider: {provider}")

    def _parse_json(self, response: str) -> dict:
        """Parse JSON from LLM response, handling code fences."""
        content = (response or "").strip()

        # Remove markdown code fences if present
        if content.startswith("```"):
            first_newline = content.find("\n")
            if first_newline != -1:
                content = content[first_newline + 1:]
            if content.endswith("```"):
                content = content[:-3].rstrip()

        try:
            data = json.loads(content)
        except json.JSONDecodeError as e:
            raise CollaboratorError(f"LLM returned invalid JSON: {e}") from e
        if not isinstance(data, dict):
            raise CollaboratorError("LLM returned JSON that is not an object")
        return data

    def _truncate(self, text: str) -> str:
        limit = self.settings.page_text_limit
        if len(text) <= limit:
            return text
        return text[:limit] + "..."

    def summarize(self, url: str, page_text: str) -> str:
        """Produce a one or two sentence description of a page."""
        prompt = PAGE_SUMMARY_PROMPT.format(url=url, page_text=self._truncate(page_text))
        data = self._parse_json(self._call_llm(prompt))

        description = " ".join(str(data.get("description", "")).split())
        if not description:
            raise CollaboratorError(f"LLM returned an empty description for {url}")
        return description

    def compare(self, skill_name: str, skill_body: str, page_text: str) -> list[AuditRecommendation]:
        """Ask the LLM for divergences between a skill and one page."""
        prompt = SKILL_AUDIT_PROMPT.format(
            skill_name=skill_name,
            skill_body=skill_body,
            page_text=self._truncate(page_text),
        )
        data = self._parse_json(self._call_llm(prompt))

        items = data.get("recommendations") or []
        if not isinstance(items, list):
            raise CollaboratorError("LLM returned recommendations that are not a list")

        def field(item: dict, key: str) -> str:
            value = item.get(key)
            return "" if value is None else str(value)

        recommendations = []
        for item in items:
            if not isinstance(item, dict):
                logger.warning(f"Dropping malformed recommendation: {item!r}")
                continue
            try:
                category = Category(field(item, "category").strip().capitalize())
            except ValueError:
                logger.warning(f"Dropping recommendation with unknown category: {item.get('category')}")
                continue
            recommendations.append(AuditRecommendation(
                skill_name=skill_name,
                category=category,
                current_text=field(item, "current"),
                docs_text=field(item, "docs"),
                suggested_change=field(item, "change"),
            ))
        return recommendations
