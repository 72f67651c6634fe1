"""
Console rendering for recorded queries and analyzer totals.

All formatting decisions are centralized here.
Color output uses ANSI codes via colorama for Windows compatibility.
Console width is detected dynamically from the terminal.
"""

import shutil
from datetime import datetime
from typing import Optional

from ..core.analyzer import Analyzer
from ..core.records import Query
from .colors import Color


def _console_width() -> int:
    """Return current terminal width, with a sensible fallback."""
    return shutil.get_terminal_size(fallback=(80, 24)).columns


def _separator(char: str = "-") -> str:
    """Return a separator line sized to the current terminal width."""
    return char * _console_width()


_THRESHOLD_FAST_S   = 0.001     # under 1 ms   -> green
_THRESHOLD_MEDIUM_S = 0.010     # under 10 ms  -> yellow
                                # 10 ms and above -> red

_SQL_WIDTH = 60


def _color_for_duration(seconds: float) -> str:
    """Return the appropriate color code based on how slow the query is."""
    if seconds < _THRESHOLD_FAST_S:
        return Color.GREEN
    if seconds < _THRESHOLD_MEDIUM_S:
        return Color.YELLOW
    return Color.RED


def _format_duration(seconds: float) -> str:
    """Return a human-readable string for a duration in seconds."""
    if abs(seconds) < 0.001:
        return f"{seconds * 1_000_000:.3f} us"
    if abs(seconds) < 1:
        return f"{seconds * 1_000:.3f} ms"
    return f"{seconds:.6f} s"


def _colored_duration(seconds: float) -> str:
    return f"{_color_for_duration(seconds)}{_format_duration(seconds)}{Color.RESET}"


def _shorten(sql: str, width: int = _SQL_WIDTH) -> str:
    """Collapse whitespace and truncate long statements for one-line display."""
    flat = " ".join(sql.split())
    if len(flat) <= width:
        return flat
    return flat[: width - 3] + "..."


def _format_query_line(query: Query) -> str:
    """Render a single query as a compact colored one-line string."""
    value, unit = query.best_human_duration()
    raw_duration = f"{value:>10} {unit}"
    colored_duration = f"{_color_for_duration(query.time_elapsed)}{raw_duration}{Color.RESET}"

    sql_str = f"{Color.CYAN}{_shorten(query.sql):<{_SQL_WIDTH}}{Color.RESET}"

    params_str = ""
    if query.params:
        params_str = f"  {Color.DIM}[{', '.join(str(p) for p in query.params)}]{Color.RESET}"

    return f"  {sql_str} {colored_duration}{params_str}"


def _format_totals_block(sql: str, totals: dict) -> str:
    """Render aggregate totals for all executions of one statement."""
    count = totals["count"]
    elapsed = totals["time_elapsed"]
    lines = [
        f"  {Color.CYAN}{Color.BOLD}{_shorten(sql)}{Color.RESET}",
        f"    calls : {Color.WHITE}{count}{Color.RESET}",
        f"    total : {_colored_duration(elapsed)}",
        f"    avg   : {_colored_duration(elapsed / count)}",
    ]
    return "\n".join(lines)


def _print_totals(totaled: dict, limit: Optional[int]) -> None:
    thin = _separator("-")
    ordered = sorted(totaled.items(), key=lambda item: item[1]["time_elapsed"], reverse=True)
    if limit is not None:
        ordered = ordered[:limit]
    for sql, totals in ordered:
        if totals["count"] == 1:
            print(_format_query_line(totals["queries"][0]))
        else:
            print(_format_totals_block(sql, totals))
        print(f"{Color.DIM}{thin}{Color.RESET}")


def print_query(query: Query) -> None:
    """Print a single query record to stdout immediately."""
    print(_format_query_line(query))


def print_summary(querylog, honor_buckets: bool = False, limit: Optional[int] = None) -> None:
    """
    Print a totals report for a QueryLog to stdout.

    Args:
        querylog: The QueryLog to report on
        honor_buckets: Print a separate section per bucket
        limit: Show at most this many statements per section
    """
    thick = _separator("=")

    if querylog.count() == 0:
        print(f"  {Color.DIM}[querylog] No queries recorded.{Color.RESET}")
        return

    print(f"{Color.MAGENTA}{thick}{Color.RESET}")
    print(f"  {Color.BOLD}{Color.WHITE}querylog{Color.RESET} | Query Summary")
    print(f"  {Color.DIM}{datetime.now().strftime('%Y-%m-%d %H:%M:%S')}{Color.RESET}")
    print(f"{Color.MAGENTA}{thick}{Color.RESET}")

    analyzer = Analyzer(querylog)
    if honor_buckets:
        for bucket, totaled in analyzer.get_totaled_queries_by_bucket().items():
            print(f"  {Color.BOLD}{Color.YELLOW}bucket: {bucket}{Color.RESET}")
            _print_totals(totaled, limit)
    else:
        _print_totals(analyzer.get_totaled_queries(), limit)

    print(f"  Total query time : {_colored_duration(querylog.time_elapsed())}")
    print(f"  Total queries    : {Color.WHITE}{querylog.count()}{Color.RESET}")
    print(f"{Color.MAGENTA}{thick}{Color.RESET}")
