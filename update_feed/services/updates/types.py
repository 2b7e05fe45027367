"""Data types for the update feed."""

from dataclasses import dataclass
from enum import Enum


class UpdateType(str, Enum):
    """Change-kind tag assigned to every update."""

    FEATURE = "feature"
    FIX = "fix"
    DOCS = "docs"
    STYLE = "style"
    REFACTOR = "refactor"
    TEST = "test"
    CHORE = "chore"
    PERFORMANCE = "performance"
    CI = "ci"
    REVERT = "revert"
    SECURITY = "security"
    CONFIG = "config"
    DEPLOY = "deploy"
    HOTFIX = "hotfix"
    BREAKING = "breaking"
    DEPS = "deps"
    WIP = "wip"
    INIT = "init"
    RELEASE = "release"
    MERGE = "merge"
    CRITICAL = "critical"
    IMPROVEMENT = "improvement"
    UPDATE = "update"


# Fallbacks for messages no rule recognises
DEFAULT_TYPE = UpdateType.UPDATE
DEFAULT_CATEGORY = "General"


@dataclass(frozen=True)
class Classification:
    """Result of classifying one commit message."""

    type: UpdateType
    category: str


@dataclass(frozen=True)
class Update:
    """A commit enriched with classification and display fields."""

    short_hash: str
    timestamp: int
    author_handle: str
    raw_message: str
    source_tag: str
    type: UpdateType
    category: str
    date_iso: str  # YYYY-MM-DD
    time_hhmm: str  # HH:MM
    summary: str

    @property
    def id(self) -> str:
        return f"{self.source_tag}:{self.short_hash}"


@dataclass(frozen=True)
class Contributor:
    """Commit count for one platform login."""

    handle: str
    commit_count: int
