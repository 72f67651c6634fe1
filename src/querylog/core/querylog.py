"""
Recorder that captures queries and transactions in execution order.

A QueryLog is driven by statement/transaction notifications from a
data-access layer. Queries finished while a transaction is open are
stored inside that transaction; everything else goes straight into the
log. Whatever bucket is current when an entry completes is stamped on it.
"""

import dataclasses
import logging
import time
from typing import Callable, Optional, Union

from .records import OpenQuery, OpenTransaction, Query, Transaction
from .tracing import Tracer

logger = logging.getLogger(__name__)

LogEntry = Union[Query, Transaction]

DEFAULT_BUCKET = "default"


class QueryLog:
    """
    Session-scoped store of completed Query and Transaction entries.

    Not thread-safe: one recording session feeds it sequentially.
    """

    def __init__(
        self,
        bucket: str = DEFAULT_BUCKET,
        passthrough: bool = False,
        tracer: Optional[Tracer] = None,
        clock: Callable[[], float] = time.time,
    ):
        """
        Args:
            bucket: Initial bucket label
            passthrough: Forward every event to tracer as well as recording it
            tracer: Passthrough target; a ConsoleTracer is created on first use if omitted
            clock: Timestamp source returning seconds as a float
        """
        self.bucket = bucket
        self.passthrough = passthrough
        self.tracer: Optional[Tracer] = tracer
        self._clock = clock
        self._log: list[LogEntry] = []
        self._current_query: Optional[OpenQuery] = None
        self._current_transaction: Optional[OpenTransaction] = None

    @property
    def log(self) -> list[LogEntry]:
        """Return completed entries in completion order."""
        return list(self._log)

    @property
    def current_query(self) -> Optional[OpenQuery]:
        return self._current_query

    @property
    def current_transaction(self) -> Optional[OpenTransaction]:
        return self._current_transaction

    def set_bucket(self, name: str) -> None:
        """Set the bucket stamped on entries completed from now on."""
        self.bucket = name

    def add_to_log(self, entry: LogEntry) -> None:
        """Append a completed entry, stamped with the current bucket."""
        self._log.append(dataclasses.replace(entry, bucket=self.bucket))

    def reset(self) -> None:
        """Drop every logged entry. Open query/transaction state is kept."""
        self._log.clear()

    def time_elapsed(self) -> float:
        """Return total elapsed time over all logged entries."""
        return sum(entry.time_elapsed for entry in self._log)

    def count(self) -> int:
        """Return the number of queries logged, including those inside transactions."""
        return sum(entry.count() for entry in self._log)

    # Event API ---------------------------------------------------------

    def txn_begin(self) -> None:
        if self.passthrough:
            self._passthrough_tracer().txn_begin()
        if self._current_transaction is not None:
            logger.debug("Discarding unterminated transaction started at %s",
                         self._current_transaction.start_time)
        self._current_transaction = OpenTransaction(start_time=self._clock())

    def txn_commit(self) -> None:
        if self.passthrough:
            self._passthrough_tracer().txn_commit()
        if self._current_transaction is None:
            logger.warning("Unknown transaction committed.")
            return
        self._finish_transaction(committed=True)

    def txn_rollback(self) -> None:
        if self.passthrough:
            self._passthrough_tracer().txn_rollback()
        if self._current_transaction is None:
            logger.warning("Unknown transaction rolled back.")
            return
        self._finish_transaction(committed=False)

    def query_start(self, sql: str, *params) -> None:
        if self.passthrough:
            self._passthrough_tracer().query_start(sql, *params)
        if self._current_query is not None:
            logger.debug("Discarding unfinished query: %s", self._current_query.sql)
        self._current_query = OpenQuery(
            sql=sql,
            params=tuple(params),
            start_time=self._clock(),
        )

    def query_end(self, *args) -> None:
        """Complete the open query. Arguments are only forwarded to the tracer."""
        if self.passthrough:
            self._passthrough_tracer().query_end(*args)
        if self._current_query is None:
            logger.warning("Completed unknown query.")
            return
        query = self._current_query.finish(end_time=self._clock(), bucket=self.bucket)
        if self._current_transaction is not None:
            self._current_transaction.add_query(query)
        else:
            self.add_to_log(query)
        self._current_query = None

    def _finish_transaction(self, committed: bool) -> None:
        txn = self._current_transaction.finish(
            end_time=self._clock(),
            bucket=self.bucket,
            committed=committed,
        )
        self.add_to_log(txn)
        self._current_transaction = None

    def _passthrough_tracer(self) -> Tracer:
        if self.tracer is None:
            from ..output.tracer import ConsoleTracer

            self.tracer = ConsoleTracer()
        return self.tracer
