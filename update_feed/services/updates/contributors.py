"""Contributor ranking over the update feed."""

from update_feed.services.updates.types import Contributor, Update


def is_platform_login(handle: str) -> bool:
    """
    Heuristic: GitHub logins never contain whitespace, display names often do.

    Commits not linked to a GitHub account carry the git author name
    ("Jane Doe"), which would otherwise split one person across two entries.
    """
    return bool(handle) and not any(ch.isspace() for ch in handle)


def aggregate_contributors(updates: list[Update]) -> list[Contributor]:
    """
    Count commits per author login, most active first.

    Handles that look like display names are excluded. Ties keep the order
    in which authors first appear in ``updates``.
    """
    counts: dict[str, int] = {}
    for update in updates:
        handle = update.author_handle
        if not is_platform_login(handle):
            continue
        counts[handle] = counts.get(handle, 0) + 1

    contributors = [Contributor(handle=h, commit_count=c) for h, c in counts.items()]
    # sort() is stable, so first-seen order breaks ties
    contributors.sort(key=lambda c: c.commit_count, reverse=True)
    return contributors
