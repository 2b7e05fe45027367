"""Source configuration - the upstream repositories polled for commit history."""

from dataclasses import dataclass


@dataclass(frozen=True)
class RepoSource:
    """A GitHub repository whose history feeds the update timeline."""

    owner: str
    name: str
    tag: str = ""  # Short label stamped on every commit; defaults to the repo name
    branch: str | None = None  # None = repository's default branch

    @property
    def full_name(self) -> str:
        return f"{self.owner}/{self.name}"

    @property
    def source_tag(self) -> str:
        return self.tag or self.name


# Repositories behind the platform dashboard (frontend + backend)
DEFAULT_SOURCES: list[RepoSource] = [
    RepoSource(owner="openlearnnitj", name="openlearn-frontend", tag="frontend"),
    RepoSource(owner="openlearnnitj", name="openlearn-backend", tag="backend"),
]
