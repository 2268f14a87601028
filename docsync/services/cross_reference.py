"""Cross-reference skill documents with documentation pages.

Candidate pages come from the summary index by keyword overlap. The
comparison itself is structural: API and option names used in a skill's
code examples must still appear somewhere in the matched documentation,
and each section heading of the skill must name a topic the pages cover.
"""

import difflib
import logging
import re
from urllib.parse import urlparse

from docsync.models import (
    AuditRecommendation,
    Category,
    CodeBlock,
    MatchResult,
    SkillDocument,
    SummaryEntry,
)
from docsync.services.fetcher import Fetcher
from docsync.services.llm_collaborator import Auditor
from docsync.services.page_content import PageContent, PageContentExtractor
from docsync.services.skill_index import (
    DIALECT_WORDS,
    FENCE_PATTERN,
    GO_FENCES,
    STOP_WORDS,
    TS_FENCES,
    tokenize,
)
from docsync.services.summary_index import SummaryIndex

logger = logging.getLogger(__name__)

CODE_LANGUAGES = GO_FENCES | TS_FENCES | {""}

OPTION_LINE_PATTERN = re.compile(r"^([A-Za-z_]\w*)\s*:(?!:)\s*(.*)$")
NOT_OPTIONS = {"case", "default", "http", "https"}

TS_IMPORT_PATTERN = re.compile(r"import\s*(?:type\s*)?\{([^}]*)\}\s*from\s*[\"'](encore\.dev[^\"']*)[\"']")
GO_IMPORT_PATTERN = re.compile(r"(?:(\w+)\s+)?\"(encore\.dev/[\w/.-]+)\"")

# Minimum similarity for a docs identifier to count as the renamed version
RENAME_CUTOFF = 0.8

SECTION_HEADING_PATTERN = re.compile(r"^##+\s+(.+?)\s*#*\s*$", re.M)
CAMEL_BOUNDARY_PATTERN = re.compile(r"([a-z0-9])([A-Z])")
# Heading words that name a kind of section rather than a topic
GENERIC_HEADING_WORDS = {
    "example", "usage", "overview", "setup", "note", "reference", "introduction",
    "quick", "start", "getting", "started", "best", "practice", "common",
    "pattern", "tip", "basic", "advanced", "more", "information", "see", "also",
}


def entry_tokens(entry: SummaryEntry) -> set[str]:
    """Tokens of an entry's description and URL path."""
    return tokenize(entry.description) | tokenize(urlparse(entry.url).path)


def _topic_token(token: str) -> str:
    if len(token) > 3 and token.endswith("s") and not token.endswith("ss"):
        return token[:-1]
    return token


def section_claims(skill: SkillDocument) -> dict[str, set[str]]:
    """Topic tokens of each ``##`` section heading in a skill's prose."""
    prose = FENCE_PATTERN.sub("", skill.body)
    claims: dict[str, set[str]] = {}
    for match in SECTION_HEADING_PATTERN.finditer(prose):
        heading = match.group(1).strip()
        tokens = {
            _topic_token(t) for t in tokenize(heading)
            if len(t) > 2 and t not in STOP_WORDS and t not in DIALECT_WORDS
        }
        tokens -= GENERIC_HEADING_WORDS
        if tokens:
            claims[heading] = tokens
    return claims


def _code_lines(blocks: list[CodeBlock]):
    for block in blocks:
        if block.language not in CODE_LANGUAGES:
            continue
        for line in block.code.splitlines():
            yield line


def extract_api_names(skill: SkillDocument) -> dict[str, str]:
    """API and option names used in a skill's code, mapped to a source line.

    Covers line-leading ``name:`` keys (object literal keys, Go struct
    literal fields), symbols imported from ``encore.dev`` modules, and Go
    ``pkg.Symbol`` selectors on packages imported from ``encore.dev``.
    """
    names: dict[str, str] = {}

    def add(name: str, line: str) -> None:
        if name and name not in names:
            names[name] = line.strip()

    for block in skill.code_blocks:
        if block.language not in CODE_LANGUAGES:
            continue

        for match in TS_IMPORT_PATTERN.finditer(block.code):
            line = match.group(0).replace("\n", " ")
            for part in match.group(1).split(","):
                symbol = part.strip()
                if symbol.startswith("type "):
                    symbol = symbol[5:].strip()
                symbol = symbol.split(" as ")[0].strip()
                add(symbol, line)

        if block.language in TS_FENCES:
            continue

        aliases = set()
        for match in GO_IMPORT_PATTERN.finditer(block.code):
            alias = match.group(1)
            if alias in (None, "import", "from"):
                alias = match.group(2).split("/")[-1]
            aliases.add(alias)
        for alias in sorted(aliases):
            for match in re.finditer(rf"\b{re.escape(alias)}\.([A-Z]\w*)", block.code):
                line_start = block.code.rfind("\n", 0, match.start()) + 1
                line_end = block.code.find("\n", match.end())
                add(match.group(1), block.code[line_start:line_end if line_end != -1 else None])

    for line in _code_lines(skill.code_blocks):
        stripped = line.strip()
        if stripped.startswith(("//", "#", "*", "/*")):
            continue
        match = OPTION_LINE_PATTERN.match(stripped)
        if not match:
            continue
        name, rest = match.group(1), match.group(2).strip()
        # Skip labels and TS type members
        if name in NOT_OPTIONS or not rest or rest.endswith(";"):
            continue
        add(name, line)

    return names


class CrossReferenceMatcher:
    """Match skills to summary entries and detect divergences."""

    def __init__(
        self,
        index: SummaryIndex,
        fetcher: Fetcher,
        auditor: Auditor | None = None,
        shared_buckets: tuple[str, ...] = ("platform",),
    ):
        self.index = index
        self.fetcher = fetcher
        self.auditor = auditor
        self.shared_buckets = shared_buckets
        self.extractor = PageContentExtractor()

    def candidates(self, skill: SkillDocument) -> list[SummaryEntry]:
        """Summary entries whose description or URL path shares a keyword token.

        Searches the skill's dialect bucket(s) plus the shared buckets.
        All overlapping entries are kept, in file order, one per URL.
        """
        keyword_tokens: set[str] = set()
        for keyword in skill.keywords:
            keyword_tokens |= tokenize(keyword)
        if not keyword_tokens:
            return []

        matches = []
        seen: set[str] = set()
        for bucket in skill.dialect.buckets + self.shared_buckets:
            for entry in self.index.load(bucket):
                if entry.url in seen:
                    continue
                if entry_tokens(entry) & keyword_tokens:
                    seen.add(entry.url)
                    matches.append(entry)

        logger.info(f"Skill {skill.name}: {len(matches)} candidate pages")
        return matches

    def audit(self, skill: SkillDocument, candidates: list[SummaryEntry]) -> MatchResult:
        """Fetch each candidate page and compare it with the skill.

        Pages are fetched one at a time; a FetchError aborts the audit.
        Missing is reported once when no page has any content, and once per
        skill section whose topic none of the pages mention.
        """
        result = MatchResult(skill=skill)
        pages: list[PageContent] = []

        for entry in candidates:
            raw = self.fetcher.fetch_text(entry.url)
            content = self.extractor.extract(raw)
            result.sources.append(entry.url)
            pages.append(content)

            if self.auditor is not None:
                page_text = "\n\n".join([content.text, *content.code_blocks])
                result.recommendations.extend(self.auditor.compare(skill.name, skill.body, page_text))

        if not any(page.text or page.code_blocks for page in pages):
            result.recommendations.append(self._missing_backing(skill))
            return result

        result.recommendations.extend(self.compare_code(skill, pages))
        result.recommendations.extend(self.compare_claims(skill, pages))
        return result

    def match(self, skill: SkillDocument) -> MatchResult:
        return self.audit(skill, self.candidates(skill))

    def compare_code(self, skill: SkillDocument, pages: list[PageContent]) -> list[AuditRecommendation]:
        """Flag skill API/option names that no matched page mentions."""
        docs_identifiers: set[str] = set()
        for page in pages:
            docs_identifiers |= page.identifiers
        vocabulary = sorted(docs_identifiers)

        recommendations = []
        for name, line in extract_api_names(skill).items():
            if name in docs_identifiers:
                continue

            close = difflib.get_close_matches(name, vocabulary, n=1, cutoff=RENAME_CUTOFF)
            if close:
                recommendations.append(AuditRecommendation(
                    skill_name=skill.name,
                    category=Category.INCORRECT,
                    current_text=line,
                    docs_text=f"The documentation uses `{close[0]}`",
                    suggested_change=f"Replace `{name}` with `{close[0]}`.",
                ))
            else:
                recommendations.append(AuditRecommendation(
                    skill_name=skill.name,
                    category=Category.OUTDATED,
                    current_text=line,
                    docs_text=f"`{name}` does not appear in any matched documentation page",
                    suggested_change=f"Check whether `{name}` is still supported and update or remove the example.",
                ))
            logger.info(f"Skill {skill.name}: {recommendations[-1].category.value} `{name}`")

        return recommendations

    def compare_claims(self, skill: SkillDocument, pages: list[PageContent]) -> list[AuditRecommendation]:
        """Flag skill sections whose heading topic no matched page mentions."""
        docs_tokens: set[str] = set()
        for page in pages:
            for text in [page.text, *page.code_blocks]:
                words = CAMEL_BOUNDARY_PATTERN.sub(r"\1 \2", text)
                docs_tokens |= {_topic_token(t) for t in tokenize(words)}

        recommendations = []
        for heading, tokens in section_claims(skill).items():
            if tokens & docs_tokens:
                continue
            recommendations.append(AuditRecommendation(
                skill_name=skill.name,
                category=Category.MISSING,
                current_text=f"## {heading}",
                docs_text="None of the matched documentation pages cover this section",
                suggested_change=f"Find the documentation backing \"{heading}\" or remove the section.",
            ))
            logger.info(f"Skill {skill.name}: Missing backing for section \"{heading}\"")

        return recommendations

    def _missing_backing(self, skill: SkillDocument) -> AuditRecommendation:
        return AuditRecommendation(
            skill_name=skill.name,
            category=Category.MISSING,
            current_text=skill.description or skill.name,
            docs_text="No documentation page in the summary index covers this skill's topic",
            suggested_change="Verify the skill against the documentation, then add keywords or summary entries that link it to its source pages.",
        )
