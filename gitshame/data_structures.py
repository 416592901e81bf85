"""
Data structures for commit history and analysis results.

Commits are immutable. Result records are built fresh on every call
and expose `to_dict()` with the JSON field names the CLI prints.
"""
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from .keywords import KeywordSet


@dataclass(frozen=True)
class Commit:
    """A single log record: `hash|author|email|subject`."""

    hash: str
    author: str
    email: str
    message: str

    def matches(self, keywords: KeywordSet) -> bool:
        """Check if the message matches a KeywordSet."""
        return keywords.matches(self.message)

    def to_dict(self) -> Dict[str, str]:
        return {
            "hash": self.hash,
            "author": self.author,
            "email": self.email,
            "message": self.message,
        }


@dataclass(frozen=True)
class GitLog:
    """
    Outcome of running `git log`.

    Either the raw text (`ok`) or the reason it could not be read
    (`unavailable`). An unavailable log parses to zero commits.
    """

    text: str = ""
    reason: Optional[str] = None

    @classmethod
    def ok(cls, text: str) -> "GitLog":
        return cls(text=text)

    @classmethod
    def unavailable(cls, reason: str) -> "GitLog":
        return cls(text="", reason=reason)

    @property
    def available(self) -> bool:
        return self.reason is None


@dataclass
class AuthorStats:
    """Per-author counters. Lives for one aggregation pass."""

    reverts: int = 0
    fixes: int = 0
    changes: int = 0


@dataclass(frozen=True)
class LeaderboardEntry:
    rank: int
    author: str
    score: int
    reverts: int
    fixes: int
    changes: int

    def to_dict(self) -> Dict[str, Any]:
        return {
            "rank": self.rank,
            "author": self.author,
            "score": self.score,
            "reverts": self.reverts,
            "fixes": self.fixes,
            "changes": self.changes,
        }


@dataclass(frozen=True)
class FameEntry:
    author: str
    commits: int
    reverts: int
    quality: str  # percentage, one decimal place

    def to_dict(self) -> Dict[str, Any]:
        return {
            "author": self.author,
            "commits": self.commits,
            "reverts": self.reverts,
            "quality": self.quality,
        }


@dataclass(frozen=True)
class ShameReport:
    leaderboard: List[LeaderboardEntry]
    timestamp: str
    total_commits: int

    def to_dict(self) -> Dict[str, Any]:
        return {
            "leaderboard": [entry.to_dict() for entry in self.leaderboard],
            "timestamp": self.timestamp,
            "totalCommits": self.total_commits,
        }


@dataclass(frozen=True)
class CIFailureStats:
    total_breaking: int
    by_author: Dict[str, int] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "totalBreaking": self.total_breaking,
            "byAuthor": dict(self.by_author),
        }


@dataclass(frozen=True)
class RevertStats:
    total_reverts: int
    by_author: Dict[str, int] = field(default_factory=dict)
    recent_reverts: List[Commit] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "totalReverts": self.total_reverts,
            "byAuthor": dict(self.by_author),
            "recentReverts": [c.to_dict() for c in self.recent_reverts],
        }
