"""
Analyzer configuration.

Fixed at construction and never mutated. Environment variables
override the defaults when built through `from_env()`:

    GIT_SHAME_REPO       repository path
    GIT_SHAME_MAX_COUNT  number of commits read from the log
"""
import os
from dataclasses import dataclass
from typing import Mapping, Optional

DEFAULT_MAX_COUNT = 100
DEFAULT_FAME_MIN_COMMITS = 5
DEFAULT_RECENT_REVERTS = 5
DEFAULT_REVERT_POINTS = 10
DEFAULT_CI_FAILURE_POINTS = 5

ENV_REPO = "GIT_SHAME_REPO"
ENV_MAX_COUNT = "GIT_SHAME_MAX_COUNT"


@dataclass(frozen=True)
class AnalyzerConfig:
    repo_path:         str = "."
    max_count:         int = DEFAULT_MAX_COUNT
    all_refs:          bool = True
    fame_min_commits:  int = DEFAULT_FAME_MIN_COMMITS
    recent_reverts:    int = DEFAULT_RECENT_REVERTS
    revert_points:     int = DEFAULT_REVERT_POINTS
    ci_failure_points: int = DEFAULT_CI_FAILURE_POINTS

    def __post_init__(self):
        if self.max_count <= 0:
            raise ValueError(f"max_count must be positive, got {self.max_count}")
        if self.fame_min_commits < 1:
            raise ValueError(
                f"fame_min_commits must be at least 1, got {self.fame_min_commits}"
            )
        if self.recent_reverts < 0:
            raise ValueError(
                f"recent_reverts must not be negative, got {self.recent_reverts}"
            )

    @classmethod
    def from_env(
        cls,
        repo_path: Optional[str] = None,
        environ: Optional[Mapping[str, str]] = None,
    ) -> "AnalyzerConfig":
        """
        Build a config from the environment.

        An explicit `repo_path` wins over GIT_SHAME_REPO.
        """
        if environ is None:
            environ = os.environ

        if repo_path is None:
            repo_path = environ.get(ENV_REPO) or "."

        raw_count = environ.get(ENV_MAX_COUNT)
        if raw_count:
            try:
                max_count = int(raw_count)
            except ValueError:
                raise ValueError(
                    f"{ENV_MAX_COUNT} must be an integer, got {raw_count!r}"
                ) from None
        else:
            max_count = DEFAULT_MAX_COUNT

        return cls(repo_path=repo_path, max_count=max_count)
