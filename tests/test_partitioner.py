"""Tests for URL bucket partitioning."""

from docsync.services.partitioner import LinkPartitioner, filter_urls

DEFAULT_BUCKETS = {"ts": "/ts", "go": "/go", "platform": "/platform"}


class TestFilterUrls:
    """Tests for filter_urls."""

    def test_keeps_matching_subsequence_in_order(self) -> None:
        urls = [
            "https://encore.dev/docs/ts/b",
            "https://encore.dev/docs/go/a",
            "https://encore.dev/docs/ts/a",
        ]

        assert filter_urls(urls, "/ts") == [
            "https://encore.dev/docs/ts/b",
            "https://encore.dev/docs/ts/a",
        ]

    def test_no_match_gives_empty_list(self) -> None:
        assert filter_urls(["https://encore.dev/blog"], "/platform") == []

    def test_substring_match_is_literal(self) -> None:
        """Test that matching is plain substring, not path-segment aware."""
        assert filter_urls(["https://encore.dev/docs/tsconfig"], "/ts") == ["https://encore.dev/docs/tsconfig"]


class TestLinkPartitioner:
    """Tests for LinkPartitioner."""

    def test_partitions_by_pattern(self) -> None:
        urls = [
            "https://encore.dev/docs/ts/primitives/pubsub",
            "https://encore.dev/docs/go/primitives/pubsub",
            "https://encore.dev/docs/platform/deploy",
            "https://encore.dev/blog/launch",
        ]

        partitions = LinkPartitioner(DEFAULT_BUCKETS).partition(urls)

        assert partitions == {
            "ts": ["https://encore.dev/docs/ts/primitives/pubsub"],
            "go": ["https://encore.dev/docs/go/primitives/pubsub"],
            "platform": ["https://encore.dev/docs/platform/deploy"],
        }

    def test_url_matching_two_patterns_lands_in_both(self) -> None:
        """Test that buckets are non-exclusive."""
        url = "https://encore.dev/docs/platform/go/ts-migration"

        partitions = LinkPartitioner(DEFAULT_BUCKETS).partition([url])

        assert partitions["platform"] == [url]
        assert partitions["go"] == [url]
        assert partitions["ts"] == [url]

    def test_bucket_order_follows_configuration(self) -> None:
        partitions = LinkPartitioner({"platform": "/platform", "ts": "/ts"}).partition([])

        assert list(partitions) == ["platform", "ts"]
