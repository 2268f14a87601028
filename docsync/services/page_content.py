"""Extract comparable content from documentation pages.

Strips navigation chrome and scripts from HTML so that page text and code
examples can be compared against skill documents.
"""

import re
from dataclasses import dataclass, field

from bs4 import BeautifulSoup

IDENTIFIER_PATTERN = re.compile(r"[A-Za-z_][A-Za-z0-9_]*")


@dataclass
class PageContent:
    """Visible text and code of a documentation page."""
    text: str
    code_blocks: list[str] = field(default_factory=list)

    @property
    def identifiers(self) -> set[str]:
        """Every identifier-like token in the text and code."""
        tokens = set(IDENTIFIER_PATTERN.findall(self.text))
        for block in self.code_blocks:
            tokens.update(IDENTIFIER_PATTERN.findall(block))
        return tokens


class PageContentExtractor:
    """Extract text and code blocks from fetched documentation."""

    # Elements to remove entirely
    NOISY_TAGS = [
        'script', 'style', 'noscript', 'iframe', 'svg', 'canvas',
        'nav', 'header', 'footer', 'aside', 'form',
    ]

    def extract(self, raw: str) -> PageContent:
        """Extract content from an HTML page.

        Markdown and plain text (e.g. ``.md`` docs endpoints) are returned
        as-is, with fenced blocks as code.
        """
        if not self._looks_like_html(raw):
            return PageContent(text=raw.strip(), code_blocks=self._fenced_blocks(raw))

        soup = BeautifulSoup(raw, 'html.parser')

        for tag in self.NOISY_TAGS:
            for element in soup.find_all(tag):
                element.decompose()

        code_blocks = []
        for pre in soup.find_all('pre'):
            code_blocks.append(pre.get_text())
        for code in soup.find_all('code'):
            if code.find_parent('pre') is None:
                code_blocks.append(code.get_text())

        main = soup.select_one("main, article, [role='main']") or soup.body or soup
        text = self._normalize_text(main.get_text(separator=' '))

        return PageContent(text=text, code_blocks=code_blocks)

    def _looks_like_html(self, raw: str) -> bool:
        head = raw.lstrip()[:500].lower()
        return head.startswith('<!doctype html') or '<html' in head or '<body' in head

    def _fenced_blocks(self, text: str) -> list[str]:
        return re.findall(r"```[^\n]*\n(.*?)```", text, re.S)

    def _normalize_text(self, text: str) -> str:
        """Collapse whitespace."""
        return re.sub(r'\s+', ' ', text).strip()


def extract_page_content(raw: str) -> PageContent:
    return PageContentExtractor().extract(raw)
