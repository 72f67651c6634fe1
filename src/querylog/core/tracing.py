"""Interface a QueryLog forwards raw notifications to in passthrough mode."""

from typing import Protocol


class Tracer(Protocol):
    """Receiver of the raw statement/transaction notifications."""

    def txn_begin(self) -> None: ...

    def txn_commit(self) -> None: ...

    def txn_rollback(self) -> None: ...

    def query_start(self, sql: str, *params) -> None: ...

    def query_end(self, *args) -> None: ...
