"""
Commit message classifier.

Maps a free-text commit message to a change type and a functional category,
and derives a display summary. Classification is a pure function of the
message, so results are memoised in an LRU cache shared by all feeds.

Type precedence: conventional prefix → leading verb → keyword → "update".
Category precedence: prefix routing → keyword buckets → "General".
"""

import logging
import re

from cachetools import LRUCache, cached  # type: ignore[import-untyped]

from update_feed.services.updates.rules import (
    CATEGORY_RULES,
    FEATURE_CATEGORY_RULES,
    FEATURE_DEFAULT_CATEGORY,
    FIX_CATEGORY_RULES,
    FIX_DEFAULT_CATEGORY,
    KEYWORD_TYPE_RULES,
    PREFIX_CATEGORIES,
    PREFIX_TYPES,
    VERB_PHRASE_TYPES,
    VERB_TYPES,
    Rule,
)
from update_feed.services.updates.types import (
    DEFAULT_CATEGORY,
    DEFAULT_TYPE,
    Classification,
    UpdateType,
)

logger = logging.getLogger(__name__)

# "feat", "feat(api)", "feat!" - whatever precedes the first colon
_PREFIX_HEAD = re.compile(r"^(?P<type>[a-z]+)\s*(?:\([^)]*\))?\s*!?$")

_WORD_PUNCTUATION = ".,;:!?()[]{}\"'`"

_classification_cache: LRUCache[str, Classification] = LRUCache(maxsize=4096)


def conventional_prefix(message: str) -> str | None:
    """
    Return the conventional-commit type of a message, or None.

    Only types in the known prefix vocabulary count, so "Note: ..." or
    "TODO: ..." are not treated as prefixes.
    """
    if ":" not in message:
        return None

    head = message.split(":", 1)[0].strip().lower()
    match = _PREFIX_HEAD.match(head)
    if match and match.group("type") in PREFIX_TYPES:
        return match.group("type")
    return None


def _leading_words(lower_message: str) -> list[str]:
    words = [w.strip(_WORD_PUNCTUATION) for w in lower_message.split()[:2]]
    return [w for w in words if w]


def _first_match(rules: list[Rule], lower_message: str, default: str) -> str:
    for pattern, result in rules:
        if pattern.search(lower_message):
            return result
    return default


def classify_type(message: str) -> UpdateType:
    """Derive the change type of a commit message."""
    prefix = conventional_prefix(message)
    if prefix:
        return PREFIX_TYPES[prefix]

    lower_message = message.lower()

    words = _leading_words(lower_message)
    if words:
        phrase = " ".join(words)
        for phrases, update_type in VERB_PHRASE_TYPES:
            if phrase in phrases:
                return update_type
        for verbs, update_type in VERB_TYPES:
            if words[0] in verbs:
                return update_type

    for pattern, update_type in KEYWORD_TYPE_RULES:
        if pattern.search(lower_message):
            return update_type

    return DEFAULT_TYPE


def classify_category(message: str) -> str:
    """Derive the functional category of a commit message."""
    lower_message = message.lower()
    prefix = conventional_prefix(message)

    if prefix in ("feat", "feature"):
        return _first_match(FEATURE_CATEGORY_RULES, lower_message, FEATURE_DEFAULT_CATEGORY)
    if prefix == "fix":
        return _first_match(FIX_CATEGORY_RULES, lower_message, FIX_DEFAULT_CATEGORY)
    if prefix in PREFIX_CATEGORIES:
        return PREFIX_CATEGORIES[prefix]

    return _first_match(CATEGORY_RULES, lower_message, DEFAULT_CATEGORY)


def summarize(message: str) -> str:
    """
    Build the display summary for a commit message.

    Strips a conventional prefix ("fix(auth): ") and capitalises the first
    letter. Messages without a prefix pass through unchanged.
    """
    if conventional_prefix(message) is None:
        return message

    summary = message.split(":", 1)[1].strip()
    if not summary:
        return message
    return summary[0].upper() + summary[1:]


@cached(_classification_cache)
def classify(message: str) -> Classification:
    """
    Classify a commit message into (type, category).

    Total: every message gets a result, unmatched ones fall back to
    "update" / "General".
    """
    return Classification(type=classify_type(message), category=classify_category(message))


def clear_classification_cache() -> None:
    """Clear memoised classifications. Useful for testing."""
    _classification_cache.clear()
    logger.debug("Cleared classification cache")


def get_classification_cache_stats() -> dict[str, int]:
    """Get current classification cache size for monitoring."""
    return {
        "size": len(_classification_cache),
        "maxsize": int(_classification_cache.maxsize),
    }
