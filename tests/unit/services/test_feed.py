"""Unit tests for feed assembly, pagination and incremental reveal."""

from __future__ import annotations

from zoneinfo import ZoneInfo

import pytest

from update_feed.services.github.types import CommitRecord
from update_feed.services.updates.feed import FeedReveal, build_feed, paginate, to_update
from update_feed.services.updates.types import UpdateType

# 2025-06-16T12:48:55Z
TIMESTAMP = 1750078135


def _commit(
    short_hash: str = "abc1234",
    timestamp: int = TIMESTAMP,
    message: str = "fix(auth): handle expired token",
    source_tag: str = "backend",
) -> CommitRecord:
    return CommitRecord(
        short_hash=short_hash,
        timestamp=timestamp,
        author_handle="octocat",
        raw_message=message,
        source_tag=source_tag,
    )


def _feed(size: int) -> list:
    return build_feed([_commit(f"{i:07x}", TIMESTAMP - i) for i in range(size)])


# ═══════════════════════════════════════════════════════════════════════════
# to_update / build_feed
# ═══════════════════════════════════════════════════════════════════════════


class TestToUpdate:
    def test_copies_commit_and_classifies(self):
        update = to_update(_commit())

        assert update.short_hash == "abc1234"
        assert update.timestamp == TIMESTAMP
        assert update.author_handle == "octocat"
        assert update.raw_message == "fix(auth): handle expired token"
        assert update.source_tag == "backend"
        assert update.type == UpdateType.FIX
        assert update.category == "Authentication"
        assert update.summary == "Handle expired token"
        assert update.id == "backend:abc1234"

    def test_formats_date_and_time_in_utc(self):
        update = to_update(_commit())

        assert update.date_iso == "2025-06-16"
        assert update.time_hhmm == "12:48"

    def test_formats_in_configured_zone(self):
        update = to_update(_commit(), ZoneInfo("Asia/Kolkata"))

        assert update.date_iso == "2025-06-16"
        assert update.time_hhmm == "18:18"

    def test_zone_can_change_the_date(self):
        update = to_update(_commit(timestamp=1750030200), ZoneInfo("America/New_York"))

        # 2025-06-15T23:30:00Z
        assert update.date_iso == "2025-06-15"
        assert update.time_hhmm == "19:30"


class TestBuildFeed:
    def test_sorts_newest_first(self):
        feed = build_feed([_commit("old0000", 100), _commit("new0000", 300), _commit("mid0000", 200)])

        assert [u.short_hash for u in feed] == ["new0000", "mid0000", "old0000"]

    def test_ties_are_deterministic(self):
        commits = [
            _commit("bbbbbbb", 100, source_tag="frontend"),
            _commit("aaaaaaa", 100, source_tag="frontend"),
            _commit("ccccccc", 100, source_tag="backend"),
        ]

        first = build_feed(commits)
        second = build_feed(list(reversed(commits)))

        assert [u.id for u in first] == [u.id for u in second] == [
            "backend:ccccccc",
            "frontend:aaaaaaa",
            "frontend:bbbbbbb",
        ]

    def test_empty(self):
        assert build_feed([]) == []


# ═══════════════════════════════════════════════════════════════════════════
# paginate
# ═══════════════════════════════════════════════════════════════════════════


class TestPaginate:
    def test_first_page(self):
        feed = _feed(40)

        assert paginate(feed, 0) == feed[:15]

    def test_last_partial_page(self):
        feed = _feed(40)

        assert paginate(feed, 2) == feed[30:]

    def test_past_the_end_is_empty(self):
        assert paginate(_feed(10), 5) == []

    def test_custom_page_size(self):
        feed = _feed(10)

        assert paginate(feed, 1, page_size=4) == feed[4:8]

    def test_rejects_negative_page(self):
        with pytest.raises(ValueError):
            paginate(_feed(3), -1)

    def test_rejects_empty_page_size(self):
        with pytest.raises(ValueError):
            paginate(_feed(3), 0, page_size=0)


# ═══════════════════════════════════════════════════════════════════════════
# FeedReveal
# ═══════════════════════════════════════════════════════════════════════════


class TestFeedReveal:
    def test_reveals_first_page(self):
        feed = _feed(40)
        reveal = FeedReveal(feed)

        assert reveal.revealed == 15
        assert reveal.total == 40
        assert reveal.visible == feed[:15]
        assert reveal.has_more is True

    def test_load_more_grows_by_one_page(self):
        feed = _feed(40)
        reveal = FeedReveal(feed)

        assert reveal.load_more() == feed[:30]
        assert reveal.load_more() == feed
        assert reveal.has_more is False

    def test_never_reveals_past_the_end(self):
        reveal = FeedReveal(_feed(20))

        reveal.load_more()
        reveal.load_more()

        assert reveal.revealed == 20

    def test_small_feed(self):
        reveal = FeedReveal(_feed(3), page_size=15)

        assert reveal.revealed == 3
        assert reveal.has_more is False

    def test_empty_feed(self):
        reveal = FeedReveal([])

        assert reveal.visible == []
        assert reveal.load_more() == []

    def test_not_affected_by_later_list_changes(self):
        feed = _feed(5)
        reveal = FeedReveal(feed, page_size=2)

        feed.clear()

        assert len(reveal.load_more()) == 4
