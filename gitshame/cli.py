#!/usr/bin/env python3
"""
git-shame CLI

Thin wrapper over HistoryAnalyzer.
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from dataclasses import replace
from pathlib import Path

from colorama import init as colorama_init

from gitshame import __version__
from gitshame.analyzer import HistoryAnalyzer
from gitshame.config import AnalyzerConfig
from gitshame.report import (
    render_ci_stats,
    render_fame,
    render_leaderboard,
    render_revert_stats,
    render_streak,
)

COMMANDS = ("shame", "ci", "reverts", "fame", "streak", "json", "all")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="git-shame",
        description="Rank committers by reverts, emergency fixes and breaking changes.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  git-shame
  git-shame -C /path/to/repo fame
  git-shame streak "Jane Doe"
  git-shame json > shame.json
        """,
    )
    parser.add_argument(
        "-C",
        "--repo",
        dest="repo",
        default=None,
        help="Path to Git repository (default: $GIT_SHAME_REPO or current directory)",
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Log git invocations and parse details to stderr",
    )
    parser.add_argument(
        "--no-color",
        action="store_true",
        help="Never colour output (default: colour only when stdout is a terminal)",
    )
    parser.add_argument(
        "-v",
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )

    subparsers = parser.add_subparsers(
        dest="command",
        metavar="{" + ",".join(COMMANDS) + "}",
    )

    shame_parser = subparsers.add_parser("shame", help="Show hall of shame (default)")
    shame_parser.add_argument(
        "--limit", type=int, default=None, help="Show only the top N authors"
    )
    subparsers.add_parser("ci", help="Show CI failure stats")
    subparsers.add_parser("reverts", help="Show revert statistics")

    fame_parser = subparsers.add_parser(
        "fame", help="Show hall of fame (quality contributors)"
    )
    fame_parser.add_argument(
        "--limit", type=int, default=10, help="Number of authors to show (default: 10)"
    )

    streak_parser = subparsers.add_parser("streak", help="Show commit streak for author")
    streak_parser.add_argument("author", help="Author name, matched exactly")

    subparsers.add_parser("json", help="Output the shame report as JSON")
    subparsers.add_parser("all", help="Show all stats (shame + CI + reverts + fame)")

    return parser


def _configure_logging(debug: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if debug else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )


def _use_color(args: argparse.Namespace) -> bool:
    return not args.no_color and sys.stdout.isatty()


def _print_shame(
    analyzer: HistoryAnalyzer, limit: int | None = None, color: bool = False
) -> None:
    report = analyzer.get_shame_scores()
    if limit is not None:
        report = replace(report, leaderboard=report.leaderboard[:limit])
    print(render_leaderboard(report, color=color))


def _run(args: argparse.Namespace, analyzer: HistoryAnalyzer, color: bool = False) -> None:
    command = args.command or "shame"

    if command == "shame":
        _print_shame(analyzer, getattr(args, "limit", None), color)
    elif command == "ci":
        print(render_ci_stats(analyzer.get_ci_failure_stats(), color))
    elif command == "reverts":
        print(render_revert_stats(analyzer.get_revert_stats(), color))
    elif command == "fame":
        print(render_fame(analyzer.get_hall_of_fame(limit=args.limit), color))
    elif command == "streak":
        print(render_streak(args.author, analyzer.get_streak(args.author), color))
    elif command == "json":
        print(json.dumps(analyzer.get_shame_scores().to_dict(), indent=2, ensure_ascii=False))
    elif command == "all":
        _print_shame(analyzer, color=color)
        print(render_ci_stats(analyzer.get_ci_failure_stats(), color))
        print(render_revert_stats(analyzer.get_revert_stats(), color))
        print(render_fame(analyzer.get_hall_of_fame(), color))


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    _configure_logging(args.debug)

    try:
        config = AnalyzerConfig.from_env(repo_path=args.repo)
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    repo_path = Path(config.repo_path).resolve()
    if not repo_path.exists():
        print(f"Error: Path does not exist: {repo_path}", file=sys.stderr)
        return 1

    analyzer = HistoryAnalyzer(config=config)
    color = _use_color(args)
    if color:
        colorama_init()

    try:
        _run(args, analyzer, color)
    except Exception as e:
        if args.debug:
            logging.getLogger(__name__).exception("Command failed")
        print(f"Error: {e}", file=sys.stderr)
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
