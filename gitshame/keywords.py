"""
Keyword Classification

Every commit classification is a case-insensitive substring match
against a named keyword set. The sets are data so that each
aggregation states exactly which words it looks for.
"""
from dataclasses import dataclass
from typing import Tuple


@dataclass(frozen=True)
class KeywordSet:
    name:     str
    keywords: Tuple[str, ...]

    def matches(self, message: str) -> bool:
        message_lower = message.lower()
        return any(keyword in message_lower for keyword in self.keywords)


# Shame score
REVERT_LIKE     = KeywordSet("revert_like",     ("revert", "fix:", "hotfix"))
CI_FAILURE_LIKE = KeywordSet("ci_failure_like", ("ci", "fix", "emergency"))

# CI failure stats.
# NOTE: the per-author tally uses a narrower set than the total, so
# "hotfix" and "rollback" commits count toward totalBreaking but toward
# no author. Kept as observed; unify only once the intent is known.
BREAKING           = KeywordSet("breaking",           ("break", "emergency", "hotfix", "rollback"))
BREAKING_BY_AUTHOR = KeywordSet("breaking_by_author", ("break", "emergency"))

# Revert stats, hall of fame
REVERT = KeywordSet("revert", ("revert",))

# Streaks end at the first of these
STREAK_BREAKER = KeywordSet("streak_breaker", ("revert", "rollback"))


ALL_KEYWORD_SETS = (
    REVERT_LIKE,
    CI_FAILURE_LIKE,
    BREAKING,
    BREAKING_BY_AUTHOR,
    REVERT,
    STREAK_BREAKER,
)
