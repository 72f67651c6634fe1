"""
Context managers that drive a QueryLog around a block of code.

Usage:
    with watch_transaction(ql):
        with watch_query(ql, "UPDATE foo SET name = ?", "Gorch"):
            cursor.execute("UPDATE foo SET name = ?", ("Gorch",))

    with watch_bucket(ql, "reports"):
        run_reports()
"""

from contextlib import contextmanager

from ..core.querylog import QueryLog


@contextmanager
def watch_query(querylog: QueryLog, sql: str, *params):
    """
    Record the enclosed block as one execution of sql.

    The query is completed even if the block raises.
    """
    querylog.query_start(sql, *params)
    try:
        yield querylog
    finally:
        querylog.query_end(sql, *params)


@contextmanager
def watch_transaction(querylog: QueryLog):
    """
    Record the enclosed block as a transaction.

    Commits on normal exit; rolls back and re-raises if the block raises.
    """
    querylog.txn_begin()
    try:
        yield querylog
    except BaseException:
        querylog.txn_rollback()
        raise
    querylog.txn_commit()


@contextmanager
def watch_bucket(querylog: QueryLog, name: str):
    """Switch to bucket name for the block, then restore the previous bucket."""
    previous = querylog.bucket
    querylog.set_bucket(name)
    try:
        yield querylog
    finally:
        querylog.set_bucket(previous)
