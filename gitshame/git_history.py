"""
Git log retrieval and parsing.

Handles:
- Running `git log` via subprocess (no GitPython dependency)
- Degrading to an empty history when git cannot be run
- Splitting `hash|author|email|subject` lines into Commits

Retrieval never raises; the outcome is a GitLog value.
"""
import logging
import subprocess
from pathlib import Path
from typing import List, Protocol, Union

from .data_structures import Commit, GitLog

logger = logging.getLogger(__name__)

LOG_FORMAT = "%H|%an|%ae|%s"
FIELD_SEPARATOR = "|"
UNKNOWN_AUTHOR = "unknown"


class LogSource(Protocol):
    """Anything that can produce a GitLog."""

    def fetch(self) -> GitLog:
        ...


class GitLogReader:
    """Reads the most recent commits of a repository."""

    def __init__(self, repo_path: str = ".", max_count: int = 100, all_refs: bool = True):
        self.repo_path = Path(repo_path)
        self.max_count = max_count
        self.all_refs = all_refs

    def command(self) -> List[str]:
        args = ["git", "log", f"--pretty=format:{LOG_FORMAT}"]
        if self.all_refs:
            args.append("--all")
        args.append(f"-{self.max_count}")
        return args

    def fetch(self) -> GitLog:
        """
        Run git log in the repository.

        Returns GitLog.unavailable(...) instead of raising when git is
        missing, the path is not a directory, or git exits non-zero.
        """
        args = self.command()
        logger.debug("Running %s in %s", " ".join(args), self.repo_path)

        try:
            result = subprocess.run(
                args,
                cwd=self.repo_path,
                capture_output=True,
                text=True,
                encoding="utf-8",
                errors="replace",
            )
        except OSError as e:
            # FileNotFoundError (no git, no cwd), NotADirectoryError, PermissionError
            return self._unavailable(f"could not run git: {e}")

        if result.returncode != 0:
            stderr = result.stderr.strip() or f"exit status {result.returncode}"
            return self._unavailable(f"git log failed: {stderr}")

        return GitLog.ok(result.stdout)

    def _unavailable(self, reason: str) -> GitLog:
        logger.warning("Git history unavailable for %s: %s", self.repo_path, reason)
        return GitLog.unavailable(reason)


def parse_line(line: str) -> Commit:
    """
    Parse one `hash|author|email|subject` line.

    The subject keeps any further `|` characters.
    """
    sha, *rest = line.split(FIELD_SEPARATOR)
    author = rest[0] if len(rest) > 0 else ""
    email = rest[1] if len(rest) > 1 else ""
    message = FIELD_SEPARATOR.join(rest[2:])

    return Commit(
        hash=sha,
        author=author or UNKNOWN_AUTHOR,
        email=email,
        message=message,
    )


def parse_commits(log: Union[GitLog, str]) -> List[Commit]:
    """
    Parse log output into Commits.

    Returns commits in log order (newest first). Blank lines are
    skipped; an unavailable log yields no commits.
    """
    if isinstance(log, GitLog):
        if not log.available:
            return []
        text = log.text
    else:
        text = log

    commits = [parse_line(line) for line in text.split("\n") if line.strip()]
    logger.debug("Parsed %d commits", len(commits))
    return commits


def get_commit_history(repo_path: str = ".", max_count: int = 100) -> List[Commit]:
    reader = GitLogReader(repo_path, max_count=max_count)
    return parse_commits(reader.fetch())
