"""
Query and transaction records captured by a QueryLog.

Each record exists in two stages: an open variant that is built up while
the statement or transaction is running, and a frozen completed variant
produced when the matching end event fires.
"""

from dataclasses import dataclass, field
from typing import Optional, Protocol, Sequence, runtime_checkable


def _human_duration(seconds: float) -> tuple[float, str]:
    """Return a duration in seconds expressed in the most readable unit."""
    if abs(seconds) < 1e-3:
        return round(seconds * 1_000_000, 3), "us"
    if abs(seconds) < 1:
        return round(seconds * 1_000, 3), "ms"
    return round(seconds, 6), "s"


@runtime_checkable
class Elapsed(Protocol):
    """Anything that can sit in a QueryLog: a bare Query or a Transaction."""

    @property
    def time_elapsed(self) -> float: ...

    @property
    def queries(self) -> tuple["Query", ...]: ...

    def count(self) -> int: ...

    def leaf_queries(self, sql: Optional[str] = None) -> list["Query"]: ...


@dataclass(frozen=True)
class Query:
    """
    Completed record of a single executed statement.

    Stores the SQL text, positional bind values, start/end timestamps in
    seconds and the bucket that was current when the statement finished.
    """

    sql: str
    params: tuple = ()
    start_time: float = 0.0
    end_time: float = 0.0
    bucket: str = "default"

    @property
    def time_elapsed(self) -> float:
        """Return end_time - start_time, uncorrected for clock skew."""
        return self.end_time - self.start_time

    @property
    def queries(self) -> tuple["Query", ...]:
        """Return this query as its own single leaf."""
        return (self,)

    def count(self) -> int:
        return 1

    def leaf_queries(self, sql: Optional[str] = None) -> list["Query"]:
        """Return [self], or [] when sql is given and does not match exactly."""
        if sql is not None and self.sql != sql:
            return []
        return [self]

    def get_sorted_queries(self, sql: Optional[str] = None) -> list["Query"]:
        return self.leaf_queries(sql)

    def best_human_duration(self) -> tuple[float, str]:
        return _human_duration(self.time_elapsed)


@dataclass(frozen=True)
class Transaction:
    """
    Completed record of a transaction and the queries run inside it.

    time_elapsed is the sum of the inner queries' elapsed times, not
    end_time - start_time, so application work between statements does
    not count towards the transaction's cost.
    """

    start_time: float
    end_time: float
    committed: bool
    rolledback: bool
    bucket: str = "default"
    queries: tuple[Query, ...] = ()

    @property
    def time_elapsed(self) -> float:
        """Return the summed elapsed time of all contained queries."""
        return sum(q.time_elapsed for q in self.queries)

    def count(self) -> int:
        """Return the number of contained queries."""
        return len(self.queries)

    def leaf_queries(self, sql: Optional[str] = None) -> list[Query]:
        """Return contained queries in execution order, optionally filtered by exact SQL."""
        if sql is None:
            return list(self.queries)
        return [q for q in self.queries if q.sql == sql]

    def get_sorted_queries(self, sql: Optional[str] = None) -> list[Query]:
        """
        Return contained queries sorted by elapsed time, slowest first.

        Args:
            sql: If given, only queries whose SQL matches exactly are considered
        """
        return sorted(self.leaf_queries(sql), key=lambda q: q.time_elapsed, reverse=True)

    def best_human_duration(self) -> tuple[float, str]:
        return _human_duration(self.time_elapsed)


@dataclass(frozen=True)
class OpenQuery:
    """A statement that has started but not yet finished."""

    sql: str
    params: tuple = ()
    start_time: float = 0.0

    def finish(self, end_time: float, bucket: str) -> Query:
        """Return the completed Query stamped with end_time and bucket."""
        return Query(
            sql=self.sql,
            params=self.params,
            start_time=self.start_time,
            end_time=end_time,
            bucket=bucket,
        )


@dataclass
class OpenTransaction:
    """A transaction that has begun but not yet committed or rolled back."""

    start_time: float
    queries: list[Query] = field(default_factory=list)

    def add_query(self, query: Query) -> None:
        """Append a completed query in execution order."""
        self.queries.append(query)

    def count(self) -> int:
        return len(self.queries)

    def finish(self, end_time: float, bucket: str, committed: bool) -> Transaction:
        """
        Return the completed Transaction.

        Args:
            end_time: Timestamp of the commit or rollback
            bucket: Bucket current at the moment of completion
            committed: True for commit, False for rollback
        """
        return Transaction(
            start_time=self.start_time,
            end_time=end_time,
            committed=committed,
            rolledback=not committed,
            bucket=bucket,
            queries=tuple(self.queries),
        )


def flatten(entries: Sequence[Elapsed], sql: Optional[str] = None) -> list[Query]:
    """Return every leaf query across entries in log order."""
    leaves: list[Query] = []
    for entry in entries:
        leaves.extend(entry.leaf_queries(sql))
    return leaves
