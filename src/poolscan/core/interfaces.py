from __future__ import annotations

from pathlib import Path
from typing import List, Protocol, runtime_checkable

from poolscan.core.filters import LogFilterSpec
from poolscan.core.models import EventLog, PoolInfoRecord


# ---------------------------------------------------------------------------
# IEvmLogsProvider
# ---------------------------------------------------------------------------

@runtime_checkable
class IEvmLogsProvider(Protocol):
    """
    Abstract provider for fetching EVM logs.

    Domain expectations:
    - It returns EventLog objects already mapped into internal domain models.
    - It is a one-shot historical query, not a subscription.
    - Failures are fatal: ChainConnectionError / LogFilterError.
    """

    async def get_logs(self, log_filter: LogFilterSpec) -> List[EventLog]:
        """
        Return all logs matching `log_filter`, in chain order.

        Implementations:
        - RPC-based (`RPC` class)
        - In-memory provider for testing
        """
        ...


# ---------------------------------------------------------------------------
# ITokenCaller
# ---------------------------------------------------------------------------

@runtime_checkable
class ITokenCaller(Protocol):
    """
    Read-only caller for token contract methods returning a string.

    Domain expectations:
    - `method` is a canonical signature such as "name()" or "symbol()".
    - Any failure (revert, empty return, bad encoding, transport) is raised
      as MetadataResolutionError and never crosses the metadata cache.
    """

    async def call_string(self, address: str, method: str) -> str:
        ...


# ---------------------------------------------------------------------------
# IPoolInfoSink
# ---------------------------------------------------------------------------

@runtime_checkable
class IPoolInfoSink(Protocol):
    """
    Abstract sink for output rows.

    Domain expectations:
    - Records are added one by one, in order.
    - Nothing is visible at the final location before `close()`.
    """

    def add(self, record: PoolInfoRecord) -> None:
        ...

    def close(self) -> Path:
        """
        Flush buffered rows and persist the output.

        Returns
        -------
        Path
            Final location of the written file.
        """
        ...
