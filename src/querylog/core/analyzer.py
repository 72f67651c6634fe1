"""
Read-only reports over a finished QueryLog.

Transactions are treated as bundles of leaf queries: every report works
on the individual queries, whether they ran inside a transaction or not.
"""

from collections import defaultdict
from typing import Union

from .records import Query, flatten


def _new_totals() -> dict:
    return {"count": 0, "time_elapsed": 0, "queries": []}


def _accumulate(totals: dict, query: Query) -> None:
    totals["count"] += 1
    totals["time_elapsed"] += query.time_elapsed
    totals["queries"].append(query)


def _sql_of(sql_or_query: Union[str, Query]) -> str:
    """Return the SQL text from a string or any object with a .sql attribute."""
    if isinstance(sql_or_query, str):
        return sql_or_query
    sql = getattr(sql_or_query, "sql", None)
    if not isinstance(sql, str):
        raise TypeError(f"Expected SQL text or a query, got {type(sql_or_query).__name__}")
    return sql


class Analyzer:
    """
    Produces sorted and totaled views of the queries in a QueryLog.

    Example:
        analyzer = Analyzer(query_log)
        slowest = analyzer.get_sorted_queries()[:10]
        totals = analyzer.get_totaled_queries()
    """

    def __init__(self, querylog):
        """
        Args:
            querylog: The QueryLog to analyze; it is never modified
        """
        self.querylog = querylog

    def _leaves(self, sql=None) -> list[Query]:
        return flatten(self.querylog.log, sql)

    def get_sorted_queries(self) -> list[Query]:
        """Return every query in the log, slowest first. Ties keep log order."""
        return sorted(self._leaves(), key=lambda q: q.time_elapsed, reverse=True)

    def get_fastest_query_executions(self, sql_or_query: Union[str, Query]) -> list[Query]:
        """
        Return executions of one statement, fastest first.

        Args:
            sql_or_query: SQL text, or a query whose .sql is used. Matching
                is exact, placeholders included.
        """
        sql = _sql_of(sql_or_query)
        return sorted(self._leaves(sql), key=lambda q: q.time_elapsed)

    def get_slowest_query_executions(self, sql_or_query: Union[str, Query]) -> list[Query]:
        """Return the reverse of get_fastest_query_executions for the same statement."""
        return list(reversed(self.get_fastest_query_executions(sql_or_query)))

    def get_totaled_queries(self, honor_buckets: bool = False) -> dict[str, dict]:
        """
        Combine executions of identical SQL into one entry each.

        Returns:
            {sql: {"count": int, "time_elapsed": float, "queries": [Query, ...]}}
            with queries in execution order. When honor_buckets is true the
            result of get_totaled_queries_by_bucket() is returned instead.
        """
        if honor_buckets:
            return self.get_totaled_queries_by_bucket()

        totaled: dict[str, dict] = defaultdict(_new_totals)
        for query in self._leaves():
            _accumulate(totaled[query.sql], query)
        return dict(totaled)

    def get_totaled_queries_by_bucket(self) -> dict[str, dict[str, dict]]:
        """Same totals as get_totaled_queries, keyed first by each query's bucket."""
        totaled: dict[str, dict[str, dict]] = defaultdict(lambda: defaultdict(_new_totals))
        for query in self._leaves():
            _accumulate(totaled[query.bucket][query.sql], query)
        return {bucket: dict(by_sql) for bucket, by_sql in totaled.items()}

    def get_totaled_queries_sorted(self, key: str = "time_elapsed") -> list[tuple[str, dict]]:
        """
        Return (sql, totals) pairs from get_totaled_queries, largest first.

        Args:
            key: "time_elapsed" or "count"
        """
        if key not in ("time_elapsed", "count"):
            raise ValueError(f"Cannot sort totals by {key!r}")
        totaled = self.get_totaled_queries()
        return sorted(totaled.items(), key=lambda item: item[1][key], reverse=True)
