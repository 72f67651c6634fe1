"""
querylog demo script.

Run this directly to see recording and analysis in action:
    python demo.py
"""

import random
import sqlite3
import time

import querylog
from querylog import (
    Analyzer,
    QueryLog,
    watch_bucket,
    watch_query,
    watch_transaction,
)


def execute(ql, conn, sql, *params):
    """Run one statement on conn while recording it in ql."""
    with watch_query(ql, sql, *params):
        return conn.execute(sql, params).fetchall()


def main():
    conn = sqlite3.connect(":memory:")
    ql = QueryLog(passthrough=True)

    # --- 1. Schema setup in its own bucket -------------------------------------

    with watch_bucket(ql, "setup"):
        execute(ql, conn, "CREATE TABLE foo (id INTEGER PRIMARY KEY, name TEXT)")

    # --- 2. Inserts inside a committed transaction -----------------------------

    with watch_bucket(ql, "writes"):
        with watch_transaction(ql):
            for i in range(20):
                execute(ql, conn, "INSERT INTO foo (name) VALUES (?)", f"name-{i}")

    # --- 3. A transaction that rolls back --------------------------------------

    with watch_bucket(ql, "writes"):
        try:
            with watch_transaction(ql):
                execute(ql, conn, "UPDATE foo SET name = ? WHERE id = ?", "Gorch", 1)
                raise RuntimeError("simulated failure")
        except RuntimeError:
            pass

    # --- 4. Reads driven through the raw event API -----------------------------

    ql.set_bucket("reads")
    for _ in range(10):
        ident = random.randint(1, 20)
        ql.query_start("SELECT * FROM foo WHERE id = ?", ident)
        conn.execute("SELECT * FROM foo WHERE id = ?", (ident,)).fetchall()
        time.sleep(random.random() / 1000)
        ql.query_end()

    # --- 5. Analysis -----------------------------------------------------------

    analyzer = Analyzer(ql)
    print("\nSlowest three queries:")
    for query in analyzer.get_sorted_queries()[:3]:
        querylog.print_query(query)

    print("\nFastest lookup by id:")
    querylog.print_query(analyzer.get_fastest_query_executions("SELECT * FROM foo WHERE id = ?")[0])

    print()
    querylog.summary(ql, honor_buckets=True)


if __name__ == "__main__":
    main()
