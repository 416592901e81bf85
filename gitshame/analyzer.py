"""
History Analyzer

Each public operation reads the log, parses it, and runs one
aggregation pass. Nothing is cached between calls.

The aggregations are plain functions over a list of Commits so they
can be exercised without a repository.
"""
import logging
from collections import defaultdict
from dataclasses import replace
from datetime import datetime, timezone
from decimal import ROUND_HALF_UP, Decimal
from typing import Dict, List, Optional

from .config import AnalyzerConfig
from .data_structures import (
    AuthorStats,
    CIFailureStats,
    Commit,
    FameEntry,
    LeaderboardEntry,
    RevertStats,
    ShameReport,
)
from .git_history import GitLogReader, LogSource, parse_commits
from .keywords import (
    BREAKING,
    BREAKING_BY_AUTHOR,
    CI_FAILURE_LIKE,
    REVERT,
    REVERT_LIKE,
    STREAK_BREAKER,
)

logger = logging.getLogger(__name__)


class AnalysisError(RuntimeError):
    """Raised when the shame report cannot be produced."""


def _timestamp(now: Optional[datetime] = None) -> str:
    if now is None:
        now = datetime.now(timezone.utc)
    return now.astimezone(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


# ---------------------------------------------------------------------------
# Aggregations
# ---------------------------------------------------------------------------

def shame_leaderboard(
    commits: List[Commit],
    revert_points: int = 10,
    ci_failure_points: int = 5,
) -> List[LeaderboardEntry]:
    """
    Rank authors by shame score.

    A commit can be both revert-like and CI-failure-like and then earns
    both amounts. Authors with no matching commit are left out even if
    they have commits. Equal scores keep first-seen order.
    """
    scores: Dict[str, int] = {}
    details: Dict[str, AuthorStats] = defaultdict(AuthorStats)

    # Revert pass runs first; it fixes the order used for ties.
    for c in commits:
        if c.matches(REVERT_LIKE):
            scores[c.author] = scores.get(c.author, 0) + revert_points
            details[c.author].reverts += 1

    for c in commits:
        if c.matches(CI_FAILURE_LIKE):
            scores[c.author] = scores.get(c.author, 0) + ci_failure_points
            details[c.author].fixes += 1

    for c in commits:
        details[c.author].changes += 1

    ranked = sorted(scores.items(), key=lambda item: -item[1])

    return [
        LeaderboardEntry(
            rank=rank,
            author=author,
            score=score,
            reverts=details[author].reverts,
            fixes=details[author].fixes,
            changes=details[author].changes,
        )
        for rank, (author, score) in enumerate(ranked, 1)
    ]


def ci_failure_stats(commits: List[Commit]) -> CIFailureStats:
    # The total and the per-author tally use different keyword sets;
    # see keywords.BREAKING_BY_AUTHOR.
    total = sum(1 for c in commits if c.matches(BREAKING))

    by_author: Dict[str, int] = {}
    for c in commits:
        if c.matches(BREAKING_BY_AUTHOR):
            by_author[c.author] = by_author.get(c.author, 0) + 1

    return CIFailureStats(total_breaking=total, by_author=by_author)


def revert_stats(commits: List[Commit], recent: int = 5) -> RevertStats:
    reverts = [c for c in commits if c.matches(REVERT)]

    by_author: Dict[str, int] = {}
    for c in reverts:
        by_author[c.author] = by_author.get(c.author, 0) + 1

    return RevertStats(
        total_reverts=len(reverts),
        by_author=by_author,
        recent_reverts=reverts[:recent],
    )


def streak(commits: List[Commit], author: str) -> int:
    """
    Count the author's newest commits before the first revert/rollback.

    Author names are matched exactly. Unknown authors have a streak of 0.
    """
    count = 0
    for c in commits:
        if c.author != author:
            continue
        if c.matches(STREAK_BREAKER):
            break
        count += 1
    return count


def _quality(commits: int, reverts: int) -> str:
    # Exact ties round up (1 of 16 → 6.25 → "6.3"); format() rounds them to even
    pct = Decimal((commits - reverts) / commits * 100)
    return str(pct.quantize(Decimal("0.1"), rounding=ROUND_HALF_UP))


def hall_of_fame(
    commits: List[Commit],
    limit: int = 10,
    min_commits: int = 5,
) -> List[FameEntry]:
    """
    Rank authors by share of commits that are not reverts.

    Authors with fewer than `min_commits` commits are not eligible.
    Equal quality keeps first-seen order.
    """
    stats: Dict[str, List[int]] = {}
    for c in commits:
        counts = stats.setdefault(c.author, [0, 0])
        counts[0] += 1
        if c.matches(REVERT):
            counts[1] += 1

    entries = [
        FameEntry(
            author=author,
            commits=total,
            reverts=reverted,
            quality=_quality(total, reverted),
        )
        for author, (total, reverted) in stats.items()
        if total >= min_commits
    ]
    entries.sort(key=lambda e: -float(e.quality))
    return entries[:limit]


# ---------------------------------------------------------------------------
# Analyzer
# ---------------------------------------------------------------------------

class HistoryAnalyzer:
    """
    Shame and fame statistics for one repository.

    `repo_path`, when given, overrides `config.repo_path`. `reader` is
    any LogSource; by default a GitLogReader over the repository.
    """

    def __init__(
        self,
        repo_path: Optional[str] = None,
        config: Optional[AnalyzerConfig] = None,
        reader: Optional[LogSource] = None,
    ):
        if config is None:
            config = AnalyzerConfig(repo_path=repo_path or ".")
        elif repo_path is not None:
            config = replace(config, repo_path=repo_path)
        self.config = config

        if reader is None:
            reader = GitLogReader(
                config.repo_path,
                max_count=config.max_count,
                all_refs=config.all_refs,
            )
        self.reader = reader

    @property
    def repo_path(self) -> str:
        return self.config.repo_path

    def get_commits(self) -> List[Commit]:
        return parse_commits(self.reader.fetch())

    def get_shame_scores(self) -> ShameReport:
        try:
            commits = self.get_commits()
            leaderboard = shame_leaderboard(
                commits,
                revert_points=self.config.revert_points,
                ci_failure_points=self.config.ci_failure_points,
            )
            report = ShameReport(
                leaderboard=leaderboard,
                timestamp=_timestamp(),
                total_commits=len(commits),
            )
        except Exception as e:
            raise AnalysisError(f"Failed to analyze git history: {e}") from e

        logger.debug(
            "Shame report: %d ranked authors over %d commits",
            len(report.leaderboard),
            report.total_commits,
        )
        return report

    def get_hall_of_shame(self, limit: int = 10) -> List[LeaderboardEntry]:
        return self.get_shame_scores().leaderboard[:limit]

    def get_ci_failure_stats(self) -> CIFailureStats:
        return ci_failure_stats(self.get_commits())

    def get_revert_stats(self) -> RevertStats:
        return revert_stats(self.get_commits(), recent=self.config.recent_reverts)

    def get_streak(self, author: str) -> int:
        return streak(self.get_commits(), author)

    def get_hall_of_fame(self, limit: int = 10) -> List[FameEntry]:
        return hall_of_fame(
            self.get_commits(),
            limit=limit,
            min_commits=self.config.fame_min_commits,
        )
