"""Shared fixtures for docsync tests."""

from pathlib import Path
from textwrap import dedent

import pytest

from docsync.config import Settings
from docsync.exceptions import FetchError

SITEMAP_URL = "https://encore.dev/sitemap.xml"

TS_PUBSUB_URL = "https://encore.dev/docs/ts/primitives/pubsub"
GO_PUBSUB_URL = "https://encore.dev/docs/go/primitives/pubsub"
TS_DATABASES_URL = "https://encore.dev/docs/ts/primitives/databases"

TS_PUBSUB_SKILL = dedent('''\
    ---
    name: encore-pubsub
    description: Publish and subscribe to Pub/Sub topics in Encore TypeScript apps
    keywords: [pubsub, topic, subscription]
    ---
    # Pub/Sub

    ```typescript
    import { Topic, Subscription } from "encore.dev/pubsub";

    export const orders = new Topic<OrderEvent>("orders", {
      deliveryGuarantee: "at-least-once",
    });

    const _ = new Subscription(orders, "send-email", {
      handler: async (event) => {
        await sendEmail(event.orderId);
      },
    });
    ```
    ''')

GO_PUBSUB_SKILL = dedent('''\
    ---
    name: encore-go-pubsub
    description: Pub/Sub topics in Encore Go services
    ---
    ```go
    package email

    import "encore.dev/pubsub"

    var Signups = pubsub.NewTopic[*SignupEvent]("signups", pubsub.TopicConfig{
        DeliveryGuarantee: pubsub.AtLeastOnce,
    })
    ```
    ''')


def pubsub_page(body: str) -> str:
    return f"<!DOCTYPE html><html><head><title>Pub/Sub</title></head><body><nav>Docs Blog</nav><main>{body}</main></body></html>"


class FakeFetcher:
    """In-memory fetcher; unknown URLs fail like a 404."""

    def __init__(self, pages: dict[str, str] | None = None):
        self.pages = dict(pages or {})
        self.calls: list[str] = []

    def fetch_text(self, url: str) -> str:
        self.calls.append(url)
        if url not in self.pages:
            raise FetchError(url, "HTTP 404", status_code=404)
        return self.pages[url]

    def close(self) -> None:
        pass


class FakeSummarizer:
    def __init__(self):
        self.calls: list[tuple[str, str]] = []

    def summarize(self, url: str, page_text: str) -> str:
        self.calls.append((url, page_text))
        return f"Summary of {url.rsplit('/', 1)[-1]}."


def write_skill(skills_dir: Path, name: str, content: str) -> Path:
    path = skills_dir / name / "SKILL.md"
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content, encoding="utf-8")
    return path


def sitemap_xml(*urls: str) -> str:
    entries = "".join(f"<url><loc>{url}</loc></url>" for url in urls)
    return f'<?xml version="1.0" encoding="UTF-8"?><urlset xmlns="http://www.sitemaps.org/schemas/sitemap/0.9">{entries}</urlset>'


@pytest.fixture
def settings(tmp_path: Path) -> Settings:
    return Settings(
        _env_file=None,
        sitemap_url=SITEMAP_URL,
        docs_dir=tmp_path / "docs-summaries",
        skills_dir=tmp_path / "skills",
        report_path=tmp_path / "update-skills.md",
    )
