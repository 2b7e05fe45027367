"""Unit tests for contributor ranking."""

from __future__ import annotations

from update_feed.services.github.types import CommitRecord
from update_feed.services.updates.contributors import aggregate_contributors, is_platform_login
from update_feed.services.updates.feed import to_update
from update_feed.services.updates.types import Contributor


def _updates(*handles: str) -> list:
    return [
        to_update(
            CommitRecord(
                short_hash=f"{i:07x}",
                timestamp=1_750_000_000 - i,
                author_handle=handle,
                raw_message="chore: tidy",
                source_tag="frontend",
            )
        )
        for i, handle in enumerate(handles)
    ]


class TestIsPlatformLogin:
    def test_login(self):
        assert is_platform_login("octocat") is True
        assert is_platform_login("mona-lisa_99") is True

    def test_display_name(self):
        assert is_platform_login("Jane Doe") is False
        assert is_platform_login("Jane\tDoe") is False

    def test_empty(self):
        assert is_platform_login("") is False


class TestAggregateContributors:
    def test_counts_and_ranks(self):
        result = aggregate_contributors(_updates("alice", "bob", "bob", "carol", "bob", "alice"))

        assert result == [
            Contributor("bob", 3),
            Contributor("alice", 2),
            Contributor("carol", 1),
        ]

    def test_ties_keep_first_seen_order(self):
        result = aggregate_contributors(_updates("zed", "amy", "amy", "zed", "kim"))

        assert [c.handle for c in result] == ["zed", "amy", "kim"]

    def test_excludes_display_names(self):
        result = aggregate_contributors(_updates("Jane Doe", "octocat", "Jane Doe"))

        assert result == [Contributor("octocat", 1)]

    def test_handles_are_case_sensitive(self):
        result = aggregate_contributors(_updates("Octocat", "octocat"))

        assert len(result) == 2

    def test_is_idempotent(self):
        updates = _updates("zed", "Jane Doe", "amy", "amy", "zed", "kim", "Jane Doe")

        first = aggregate_contributors(updates)
        second = aggregate_contributors(updates)

        assert first == second
        assert [c.handle for c in first] == ["zed", "amy", "kim"]

    def test_empty(self):
        assert aggregate_contributors([]) == []
