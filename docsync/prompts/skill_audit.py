"""Prompt for comparing a skill document against current documentation."""

SKILL_AUDIT_PROMPT = """Compare a skill document that teaches an AI coding agent how to use Encore against the current Encore documentation.

## Skill: {skill_name}

{skill_body}

## Current Documentation

{page_text}

## What to Report

Report only real divergences:
- "Outdated" - the skill shows an API, option or pattern the docs no longer describe
- "Incorrect" - the skill contradicts the docs (wrong name, wrong signature, wrong behavior)
- "Missing" - the docs describe something important for this skill's topic that the skill omits

Do NOT report style differences, wording preferences, or things the docs do not mention at all.

## Output Format

Return ONLY a valid JSON object:
{{
  "recommendations": [
    {{
      "category": "Outdated",
      "current": "exact text or code from the skill",
      "docs": "what the documentation says",
      "change": "the concrete edit to make"
    }}
  ]
}}

Return {{"recommendations": []}} when the skill matches the documentation."""
