"""
Report Layer

Turn analysis results into printable text.
Every function is pure: result in, string out. With `color=True`
headings, table heads and borders carry colorama ANSI styles; the
plain text is identical otherwise.
"""
import unicodedata
from datetime import datetime
from typing import List, Sequence

from colorama import Fore, Style

from .data_structures import CIFailureStats, FameEntry, RevertStats, ShameReport

_RULE = "═" * 59

SHAME = Fore.RED + Style.BRIGHT
FAME = Fore.GREEN + Style.BRIGHT
OK = Fore.GREEN
BORDER = Fore.CYAN
MUTED = Style.DIM


def _paint(text: str, style: str, color: bool) -> str:
    if not color or not text:
        return text
    return f"{style}{text}{Style.RESET_ALL}"


def display_width(text: str) -> int:
    """Terminal columns taken by `text` (wide emoji count as two)."""
    width = 0
    for ch in text:
        if unicodedata.combining(ch) or unicodedata.category(ch) in ("Mn", "Me", "Cf"):
            continue
        width += 2 if unicodedata.east_asian_width(ch) in ("W", "F") else 1
    return width


def _pad(text: str, width: int) -> str:
    return text + " " * (width - display_width(text))


def _table(
    headers: Sequence[str],
    rows: List[Sequence[str]],
    color: bool = False,
    head_style: str = SHAME,
) -> str:
    widths = [display_width(h) for h in headers]
    for row in rows:
        for i, cell in enumerate(row):
            widths[i] = max(widths[i], display_width(cell))

    bar = _paint("│", BORDER, color)

    def line(cells: Sequence[str], style: str = "") -> str:
        padded = [_paint(_pad(c, w), style, color and bool(style)) for c, w in zip(cells, widths)]
        return f"{bar} " + f" {bar} ".join(padded) + f" {bar}"

    border = _paint("─" * (sum(widths) + 3 * len(widths) + 1), BORDER, color)
    out = [border, line(headers, head_style), border]
    out.extend(line(row) for row in rows)
    out.append(border)
    return "\n".join(out)


def _shame_badge(rank: int) -> str:
    if rank == 1:
        return "🏆"
    if rank <= 3:
        return "🥇"
    return "😅"


_FAME_BADGES = {0: "👑", 1: "⭐"}


def _local_time(timestamp: str) -> str:
    # fromisoformat() only accepts a trailing "Z" from 3.11 on
    parsed = datetime.fromisoformat(timestamp.replace("Z", "+00:00"))
    return parsed.astimezone().strftime("%Y-%m-%d %H:%M:%S")


def render_leaderboard(report: ShameReport, color: bool = False) -> str:
    rows = [
        [
            f"{_shame_badge(e.rank)} #{e.rank}",
            e.author,
            str(e.score),
            str(e.reverts),
            str(e.fixes),
            str(e.changes),
        ]
        for e in report.leaderboard
    ]
    table = _table(
        ["RANK", "AUTHOR", "SHAME SCORE", "REVERTS", "FIXES", "TOTAL COMMITS"],
        rows,
        color=color,
    )
    return "\n".join([
        "",
        _paint(_RULE, SHAME, color),
        _paint("🔴 GIT SHAME - HALL OF SHAME 🔴", SHAME, color),
        _paint(_RULE, SHAME, color),
        "",
        table,
        "",
        _paint(f"📊 Total commits analyzed: {report.total_commits}", MUTED, color),
        _paint(f"⏰ Updated: {_local_time(report.timestamp)}", MUTED, color),
        "",
    ])


def _by_count(counts: dict) -> List[Sequence[str]]:
    ordered = sorted(counts.items(), key=lambda item: -item[1])
    return [[author, str(count)] for author, count in ordered]


def render_ci_stats(stats: CIFailureStats, color: bool = False) -> str:
    lines = ["", _paint("🚨 CI FAILURE STATS 🚨", SHAME, color), ""]

    if stats.total_breaking == 0:
        lines.extend([_paint("✅ No CI-breaking commits detected! Great work!", OK, color), ""])
        return "\n".join(lines)

    lines.append(
        _table(["AUTHOR", "BREAKING COMMITS"], _by_count(stats.by_author), color=color)
    )
    lines.append("")
    return "\n".join(lines)


def render_revert_stats(stats: RevertStats, color: bool = False) -> str:
    lines = ["", _paint("↩️  REVERT STATS ↩️", SHAME, color), ""]

    if stats.total_reverts == 0:
        lines.extend([_paint("✅ No reverts detected! Pristine history!", OK, color), ""])
        return "\n".join(lines)

    lines.append(_table(["AUTHOR", "REVERTS"], _by_count(stats.by_author), color=color))

    if stats.recent_reverts:
        lines.extend(["", _paint("📝 Recent reverts:", MUTED, color)])
        lines.extend(
            _paint(f'   • {c.author}: "{c.message}"', MUTED, color)
            for c in stats.recent_reverts
        )

    lines.append("")
    return "\n".join(lines)


def render_fame(entries: List[FameEntry], color: bool = False) -> str:
    lines = ["", _paint("🌟 HALL OF FAME 🌟", FAME, color), ""]

    if not entries:
        lines.extend([_paint("No eligible contributors yet. Keep it up!", MUTED, color), ""])
        return "\n".join(lines)

    rows = [
        [
            f"{_FAME_BADGES.get(i, '✨')} #{i + 1}",
            e.author,
            f"{e.quality}%",
            str(e.commits),
            str(e.reverts),
        ]
        for i, e in enumerate(entries)
    ]
    lines.append(_table(
        ["RANK", "AUTHOR", "QUALITY %", "COMMITS", "REVERTS"],
        rows,
        color=color,
        head_style=FAME,
    ))
    lines.append("")
    return "\n".join(lines)


def render_streak(author: str, streak: int, color: bool = False) -> str:
    return f"\n🔥 {author} has a {_paint(str(streak), SHAME, color)} commit streak!\n"
