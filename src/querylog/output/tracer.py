"""
Default statement tracer used when a QueryLog runs in passthrough mode.

Prints each transaction boundary and each statement with its bind values,
the way a data-access layer's debug trace normally does.
"""

import sys
from typing import Optional, TextIO

from ..core.tracing import Tracer
from .colors import Color

__all__ = ["ConsoleTracer", "Tracer"]


def _format_params(params) -> str:
    """Render bind values as a comma-separated, single-quoted list."""
    return ", ".join(f"'{p}'" for p in params)


class ConsoleTracer:
    """
    Writes a plain trace line per event to a text stream.

    Output:
        BEGIN WORK
        SELECT * FROM foo WHERE id = ?: '1'
        COMMIT
    """

    def __init__(self, stream: Optional[TextIO] = None):
        """
        Args:
            stream: Where trace lines go; defaults to sys.stderr at write time
        """
        self._stream = stream

    def _write(self, line: str, color: str = "") -> None:
        stream = self._stream or sys.stderr
        stream.write(f"{color}{line}{Color.RESET if color else ''}\n")

    def txn_begin(self) -> None:
        self._write("BEGIN WORK", Color.MAGENTA)

    def txn_commit(self) -> None:
        self._write("COMMIT", Color.GREEN)

    def txn_rollback(self) -> None:
        self._write("ROLLBACK", Color.RED)

    def query_start(self, sql: str, *params) -> None:
        self._write(f"{sql}: {_format_params(params)}", Color.CYAN)

    def query_end(self, *args) -> None:
        """Statement completion is not traced."""
