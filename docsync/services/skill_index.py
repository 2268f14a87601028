"""Load skill documents and classify them by dialect and topic."""

import logging
import re
from pathlib import Path

import yaml

from docsync.exceptions import ParseError
from docsync.models import CodeBlock, Dialect, SkillDocument

logger = logging.getLogger(__name__)

FRONTMATTER_PATTERN = re.compile(r"\A---\s*\n(.*?)\n---\s*(?:\n|\Z)", re.S)
FENCE_PATTERN = re.compile(r"^```([\w+-]*)[^\n]*\n(.*?)^```", re.M | re.S)
TOKEN_PATTERN = re.compile(r"[a-z0-9]+")

GO_FENCES = {"go", "golang"}
TS_FENCES = {"ts", "typescript", "tsx", "js", "javascript"}

GO_METADATA_TOKENS = {"go", "golang"}
TS_METADATA_TOKENS = {"ts", "typescript"}

GO_CODE_PATTERNS = [
    re.compile(r"^package\s+\w+", re.M),
    re.compile(r"\bfunc\s+[\w(]"),
    re.compile(r"//encore:api"),
]
TS_CODE_PATTERNS = [
    re.compile(r"\bimport\s+.*?\bfrom\s+[\"']encore\.dev", re.S),
    re.compile(r"=>"),
]

# Prose outside code fences. A bare "go" is not a signal.
GO_PROSE_PATTERNS = [
    re.compile(r"\bgolang\b", re.I),
    re.compile(r"\bgoroutines?\b", re.I),
    re.compile(r"\bgo\.mod\b"),
    re.compile(r"\bEncore\.go\b"),
    re.compile(r"\bGo (?:service|package|struct|module|function|code|type)s?\b"),
]
TS_PROSE_PATTERNS = [
    re.compile(r"\bTypeScript\b", re.I),
    re.compile(r"\bpackage\.json\b"),
    re.compile(r"\bEncore\.ts\b"),
    re.compile(r"\bnpm\b"),
]

STOP_WORDS = {
    "a", "an", "and", "the", "for", "with", "how", "use", "using", "to", "in",
    "of", "on", "or", "your", "when", "this", "that", "from", "into", "by",
    "is", "are", "be", "it", "as", "at", "app", "apps", "skill", "guide",
    "encore", "docs",
}
DIALECT_WORDS = GO_METADATA_TOKENS | TS_METADATA_TOKENS


def tokenize(text: str) -> set[str]:
    """Lowercase alphanumeric tokens of ``text``."""
    return set(TOKEN_PATTERN.findall(text.lower()))


def split_frontmatter(text: str) -> tuple[dict, str]:
    """Split a markdown document into YAML frontmatter and body."""
    match = FRONTMATTER_PATTERN.match(text)
    if not match:
        return {}, text
    try:
        metadata = yaml.safe_load(match.group(1)) or {}
    except yaml.YAMLError as e:
        raise ParseError(f"Invalid frontmatter: {e}") from e
    if not isinstance(metadata, dict):
        raise ParseError("Frontmatter must be a mapping")
    return metadata, text[match.end():]


def extract_code_blocks(body: str) -> list[CodeBlock]:
    return [
        CodeBlock(language=match.group(1).lower(), code=match.group(2))
        for match in FENCE_PATTERN.finditer(body)
    ]


def detect_dialect(metadata_text: str, code_blocks: list[CodeBlock], body: str = "") -> Dialect:
    """Classify a skill as TS, Go, or ambiguous.

    Signals come from the name and description, the code blocks, and the
    body prose outside code fences. Conflicting signals, or no signals at
    all, give AMBIGUOUS.
    """
    go_signal = False
    ts_signal = False

    metadata_tokens = tokenize(metadata_text)
    if metadata_tokens & GO_METADATA_TOKENS:
        go_signal = True
    if metadata_tokens & TS_METADATA_TOKENS:
        ts_signal = True

    for block in code_blocks:
        if block.language in GO_FENCES:
            go_signal = True
        elif block.language in TS_FENCES:
            ts_signal = True
        else:
            # Untagged block, fall back to code shape
            if any(p.search(block.code) for p in GO_CODE_PATTERNS):
                go_signal = True
            if any(p.search(block.code) for p in TS_CODE_PATTERNS):
                ts_signal = True

    prose = FENCE_PATTERN.sub("", body)
    if any(p.search(prose) for p in GO_PROSE_PATTERNS):
        go_signal = True
    if any(p.search(prose) for p in TS_PROSE_PATTERNS):
        ts_signal = True

    if go_signal and not ts_signal:
        return Dialect.GO
    if ts_signal and not go_signal:
        return Dialect.TS
    return Dialect.AMBIGUOUS


def extract_keywords(metadata: dict, name: str) -> frozenset[str]:
    """Declared keywords, or topic tokens of the name and description."""
    declared = metadata.get("keywords")
    if declared:
        if isinstance(declared, str):
            declared = declared.split(",")
        return frozenset(str(k).strip().lower() for k in declared if str(k).strip())

    tokens = tokenize(f"{name} {metadata.get('description', '')}")
    return frozenset(
        t for t in tokens
        if len(t) > 2 and t not in STOP_WORDS and t not in DIALECT_WORDS
    )


def load_skill(path: Path) -> SkillDocument:
    """Load one skill document from disk."""
    try:
        metadata, body = split_frontmatter(path.read_text(encoding="utf-8"))
    except ParseError as e:
        raise ParseError(f"{path}: {e}") from e

    default_name = path.parent.name if path.name == "SKILL.md" else path.stem
    name = str(metadata.get("name") or default_name)
    description = str(metadata.get("description") or "")
    code_blocks = extract_code_blocks(body)

    return SkillDocument(
        name=name,
        dialect=detect_dialect(f"{name} {description}", code_blocks, body),
        keywords=extract_keywords(metadata, name),
        body=body,
        description=description,
        path=path,
        code_blocks=code_blocks,
    )


class SkillIndex:
    """In-memory index of the skill corpus."""

    def __init__(self, skills: list[SkillDocument]):
        self.skills = skills
        self._by_name = {skill.name: skill for skill in skills}

    @classmethod
    def load(cls, skills_dir: Path) -> "SkillIndex":
        """Load every SKILL.md below ``skills_dir`` plus top-level markdown files."""
        skills_dir = Path(skills_dir)
        if not skills_dir.is_dir():
            logger.warning(f"Skills directory not found: {skills_dir}")
            return cls([])

        paths = sorted(skills_dir.glob("*/SKILL.md"))
        paths += sorted(p for p in skills_dir.glob("*.md") if p.name.lower() != "readme.md")

        skills = []
        names: set[str] = set()
        for path in paths:
            skill = load_skill(path)
            if skill.name in names:
                raise ParseError(f"Duplicate skill name '{skill.name}' in {path}")
            names.add(skill.name)
            logger.info(f"Loaded skill {skill.name} (dialect={skill.dialect.value}, {len(skill.keywords)} keywords)")
            skills.append(skill)

        return cls(skills)

    def get(self, name: str) -> SkillDocument | None:
        return self._by_name.get(name)

    def __iter__(self):
        return iter(self.skills)

    def __len__(self) -> int:
        return len(self.skills)
