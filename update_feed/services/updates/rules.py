"""
Rule tables for commit message classification.

Every table is ordered and evaluated top-to-bottom with first match winning,
so precedence lives here as data rather than in control flow. Many messages
hit several buckets ("fix: auth database migration"); table order decides.

Keywords match at the start of a word: "auth" matches "authentication",
"ui" does not match "build". Terms passed as ``anywhere`` also match inside
a word, so "auth" still finds "OAuth" and "userAuth".
"""

import re

from update_feed.services.updates.types import UpdateType

Rule = tuple[re.Pattern[str], str]
TypeRule = tuple[re.Pattern[str], UpdateType]


def keywords(*words: str, anywhere: tuple[str, ...] = ()) -> re.Pattern[str]:
    """Compile a pattern matching any keyword at a word start, or any ``anywhere`` term."""
    parts = []
    if words:
        alternatives = "|".join(re.escape(w) for w in words)
        parts.append(rf"\b(?:{alternatives})")
    if anywhere:
        parts.append("|".join(re.escape(w) for w in anywhere))
    return re.compile("|".join(parts))


# ---------------------------------------------------------------------------
# Type: conventional prefixes ("feat: ...", "fix(api): ...")
# ---------------------------------------------------------------------------

PREFIX_TYPES: dict[str, UpdateType] = {
    "feat": UpdateType.FEATURE,
    "feature": UpdateType.FEATURE,
    "fix": UpdateType.FIX,
    "docs": UpdateType.DOCS,
    "style": UpdateType.STYLE,
    "refactor": UpdateType.REFACTOR,
    "test": UpdateType.TEST,
    "chore": UpdateType.CHORE,
    "perf": UpdateType.PERFORMANCE,
    "ci": UpdateType.CI,
    "build": UpdateType.CI,
    "revert": UpdateType.REVERT,
    "security": UpdateType.SECURITY,
    "config": UpdateType.CONFIG,
    "deploy": UpdateType.DEPLOY,
    "hotfix": UpdateType.HOTFIX,
    "patch": UpdateType.HOTFIX,
    "breaking": UpdateType.BREAKING,
    "deps": UpdateType.DEPS,
    "wip": UpdateType.WIP,
    "init": UpdateType.INIT,
    "release": UpdateType.RELEASE,
    "merge": UpdateType.MERGE,
    "crit": UpdateType.CRITICAL,
}

# ---------------------------------------------------------------------------
# Type: leading verbs ("Add ...", "Merge pull request ...")
# ---------------------------------------------------------------------------

# Checked against the first two words before single-word verbs
VERB_PHRASE_TYPES: list[tuple[frozenset[str], UpdateType]] = [
    (frozenset({"merge pull", "merge branch"}), UpdateType.MERGE),
]

VERB_TYPES: list[tuple[frozenset[str], UpdateType]] = [
    (frozenset({"add", "implement", "create", "build", "introduce"}), UpdateType.FEATURE),
    (frozenset({"fix", "resolve", "correct", "repair", "patch"}), UpdateType.FIX),
    (frozenset({"improve", "enhance", "upgrade", "refine"}), UpdateType.IMPROVEMENT),
    (frozenset({"optimize"}), UpdateType.PERFORMANCE),
    (
        frozenset(
            {"refactor", "restructure", "reorganize", "cleanup", "simplify", "remove", "delete", "drop"}
        ),
        UpdateType.REFACTOR,
    ),
    (frozenset({"update", "modify", "change", "adjust", "revise"}), UpdateType.UPDATE),
    (frozenset({"merge"}), UpdateType.MERGE),
    (frozenset({"document", "readme"}), UpdateType.DOCS),
    (frozenset({"configure", "setup", "set", "install"}), UpdateType.CONFIG),
    (
        frozenset({"initial", "initialize", "init", "bootstrap", "scaffolding"}),
        UpdateType.INIT,
    ),
]

# ---------------------------------------------------------------------------
# Type: keyword fallback over the whole message
# ---------------------------------------------------------------------------

KEYWORD_TYPE_RULES: list[TypeRule] = [
    (keywords("security", "vulnerability", "permission", anywhere=("auth",)), UpdateType.SECURITY),
    (keywords("test", "spec", "unit test"), UpdateType.TEST),
    (keywords("style", "css", "design", "ui", "layout"), UpdateType.STYLE),
    (keywords("performance", "optimize", "speed", "efficiency"), UpdateType.PERFORMANCE),
    (keywords("deploy", "ci/cd", "build", "pipeline", "workflow"), UpdateType.CI),
    (keywords("dependency", "package", "deps", "npm", "yarn", "upgrade"), UpdateType.DEPS),
    (keywords("breaking", "major", "incompatible"), UpdateType.BREAKING),
    (keywords("hotfix", "critical", "urgent", "emergency"), UpdateType.HOTFIX),
    (keywords("wip", "work in progress", "partial", "incomplete"), UpdateType.WIP),
    (keywords("revert", "rollback", "undo"), UpdateType.REVERT),
    (keywords("enhance", "improve", "better", "modernize", "revamp"), UpdateType.IMPROVEMENT),
]

# ---------------------------------------------------------------------------
# Category: prefix routing
# ---------------------------------------------------------------------------

FEATURE_CATEGORY_RULES: list[Rule] = [
    (keywords("admin"), "Admin Panel"),
    (keywords("dashboard"), "Dashboard"),
    (keywords("login", anywhere=("auth",)), "Authentication"),
    (keywords("learning", "resource"), "Learning Platform"),
    (keywords("ui", "component"), "UI Components"),
    (keywords("leaderboard", "league"), "Gamification"),
    (keywords("search", "filter"), "Search & Filtering"),
    (keywords("deploy", "ci/cd"), "DevOps"),
    (keywords("api", "backend"), "Backend API"),
    (keywords("doc", "readme"), "Documentation"),
]
FEATURE_DEFAULT_CATEGORY = "Features"

FIX_CATEGORY_RULES: list[Rule] = [
    (keywords("deploy", "docker", "ci/cd"), "DevOps"),
    (keywords("prisma", "schema", "database"), "Database"),
    (keywords("login", "permission", anywhere=("auth",)), "Authentication"),
    (keywords("ui", "component", "modal"), "UI Components"),
    (keywords("api", "backend", "endpoint"), "Backend API"),
    (keywords("routing", "navigation"), "Navigation"),
    (keywords("focus", "textarea", "keyboard"), "User Experience"),
    (keywords("styling", "css", "layout"), "Design & Styling"),
    (keywords("package", "dependency", "build"), "Configuration"),
]
FIX_DEFAULT_CATEGORY = "Bug Fixes"

PREFIX_CATEGORIES: dict[str, str] = {
    "chore": "Maintenance",
    "refactor": "Code Quality",
    "docs": "Documentation",
    "test": "Testing",
    "crit": "Critical",
}

# ---------------------------------------------------------------------------
# Category: keyword buckets
# ---------------------------------------------------------------------------

CATEGORY_RULES: list[Rule] = [
    (
        keywords(
            "deploy", "ci/cd", "workflow", "docker", "aws", "render", "vercel", "ec2",
            "production", "staging", "pipeline",
        ),
        "DevOps",
    ),
    (
        keywords(
            "prisma", "schema", "migration", "database", "db", "health check", "keepalive",
            "status", "monitoring",
        ),
        "Database",
    ),
    (
        keywords(
            "login", "signin", "signup", "permission", "role", "security", "approval", "access",
            anywhere=("auth",),
        ),
        "Authentication",
    ),
    (
        keywords(
            "admin", "management", "crud", "user management", "section management",
            "resource management", "week management", "cohort", "assignment",
        ),
        "Admin Panel",
    ),
    (
        keywords(
            "learning", "resource", "section", "progress", "badge", "completion", "enrollment",
            "specialization", "week",
        ),
        "Learning Platform",
    ),
    (
        keywords(
            "leaderboard", "league", "rank", "social", "sharing", "badge", "achievement",
            "statistics", "pathfinder",
        ),
        "Gamification",
    ),
    (
        keywords(
            "component", "modal", "portal", "layout", "hero", "banner", "card", "button", "form",
            "dropdown", "tooltip", "animation", "framer motion", "ui",
        ),
        "UI Components",
    ),
    (
        keywords(
            "styling", "css", "tailwind", "font", "typography", "color", "spacing", "layout",
            "design", "background", "scrollbar", "hover", "visual", "favicon", "icon",
        ),
        "Design & Styling",
    ),
    (keywords("routing", "navigation", "redirect", "route", "page", "spa"), "Navigation"),
    (
        keywords("search", "filter", "pagination", "sorting", "limit", "query"),
        "Search & Filtering",
    ),
    (
        keywords(
            "keyboard", "shortcut", "focus", "accessibility", "ux", "experience", "interaction",
            "responsive", "mobile",
        ),
        "User Experience",
    ),
    (
        keywords(
            "api", "endpoint", "service", "controller", "backend", "server", "middleware",
            "validation", "error handling",
        ),
        "Backend API",
    ),
    (
        keywords(
            "doc", "readme", "contributing", "license", "guide", "changelog", "comment", "jsdoc",
            "documentation",
        ),
        "Documentation",
    ),
    (
        keywords(
            "refactor", "cleanup", "optimize", "performance", "lint", "format", "remove unused",
            "console log", "maintainability", "code structure", "readability",
        ),
        "Code Quality",
    ),
    (
        keywords(
            "test", "testing", "bug", "issue", "template", "qa", "quality", "validation",
            "integrity",
        ),
        "Quality Assurance",
    ),
    (
        keywords(
            "merge", "pull request", "branch", "conflict", "upstream", "git", "commit",
        ),
        "Version Control",
    ),
    (
        keywords(
            "integration", "twitter", "instagram", "github", "linkedin", "external", "cdn",
            "dependency",
        ),
        "Integrations",
    ),
    (
        keywords(
            "config", "setup", "init", "package", "dependency", "env", "environment", "build",
            "vite", "webpack", "babel",
        ),
        "Configuration",
    ),
    (
        keywords(
            "error", "exception", "debug", "troubleshoot", "logging", "catch", "handling",
            "fallback",
        ),
        "Error Handling",
    ),
    (
        keywords("privacy", "terms", "policy", "legal", "compliance", "gdpr"),
        "Legal & Privacy",
    ),
    (
        keywords(
            "performance", "optimization", "speed", "loading", "cache", "lazy", "bundle",
            "compress",
        ),
        "Performance",
    ),
]
