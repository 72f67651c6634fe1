"""
querylog - Record executed SQL statements and transactions for later analysis.

Provides:
  - QueryLog            : recorder driven by query/transaction notifications
  - Analyzer            : sorted and totaled views over a finished QueryLog
  - Query, Transaction  : completed log entries
  - watch_query()       : context manager recording a block as one query
  - watch_transaction() : context manager recording a block as a transaction
  - watch_bucket()      : context manager switching the bucket for a block
  - ConsoleTracer       : default passthrough tracer
  - summary()           : print a totals report to stdout

Example:
    ql = QueryLog()
    ql.query_start("SELECT * FROM foo WHERE id = ?", 1)
    ql.query_end()
    Analyzer(ql).get_sorted_queries()
"""

from .core.records import Elapsed, OpenQuery, OpenTransaction, Query, Transaction
from .core.querylog import QueryLog
from .core.analyzer import Analyzer
from .core.tracing import Tracer

from .interfaces.blocks import watch_query, watch_transaction, watch_bucket

from .output.formatter import print_query, print_summary
from .output.tracer import ConsoleTracer


def summary(querylog: QueryLog, honor_buckets: bool = False) -> None:
    """Print a formatted totals report for the given QueryLog."""
    print_summary(querylog, honor_buckets=honor_buckets)


__all__ = [
    "QueryLog",
    "Analyzer",
    "Query",
    "Transaction",
    "OpenQuery",
    "OpenTransaction",
    "Elapsed",
    "watch_query",
    "watch_transaction",
    "watch_bucket",
    "ConsoleTracer",
    "Tracer",
    "print_query",
    "print_summary",
    "summary",
]
