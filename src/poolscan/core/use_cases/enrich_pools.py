from __future__ import annotations

import asyncio
import logging
from collections.abc import AsyncIterator, Iterable, Sized
from dataclasses import dataclass

from poolscan.core.errors import DecodeError
from poolscan.core.models import EventLog, PoolInfoRecord
from poolscan.decoding.decoder import decode_pool_created
from poolscan.decoding.specs import EventSpec
from poolscan.metadata.cache import TokenMetadataCache

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Stats
# ---------------------------------------------------------------------------


@dataclass(kw_only=True)
class PipelineStats:
    """
    Counters for one enrichment run.

    - `total`: raw logs handed to the pipeline (None when the input is unsized)
    - `processed`: raw logs consumed so far
    - `decoded` / `skipped`: decode outcomes
    - `emitted`: records yielded downstream
    """

    total: int | None = None
    processed: int = 0
    decoded: int = 0
    skipped: int = 0
    emitted: int = 0


# ---------------------------------------------------------------------------
# Domain service – EnrichmentPipeline
# ---------------------------------------------------------------------------


class EnrichmentPipeline:
    """
    Turn raw `PoolCreated` logs into `PoolInfoRecord` rows.

    Entries are processed strictly in input order: decode, resolve both
    tokens through the shared cache, build the record and yield it right
    away. A log that does not decode is reported and skipped; nothing else
    is caught here.
    """

    def __init__(
        self,
        spec: EventSpec,
        cache: TokenMetadataCache,
        *,
        progress_every: int = 10,
    ) -> None:
        if progress_every < 1:
            raise ValueError("progress_every must be >= 1")
        self._spec = spec
        self._cache = cache
        self._progress_every = progress_every
        self.stats = PipelineStats()

    def _report_progress(self, i: int) -> None:
        if i % self._progress_every:
            return
        if self.stats.total:
            logger.info("processed %d/%d (%.2f)", i, self.stats.total, i / self.stats.total)
        else:
            logger.info("processed %d", i)

    async def run(self, logs: Iterable[EventLog]) -> AsyncIterator[PoolInfoRecord]:
        """
        Yield one record per decodable log, in order.

        The returned async generator is one-shot.
        """
        self.stats = PipelineStats(total=len(logs) if isinstance(logs, Sized) else None)
        logger.info("enriching %s logs", self.stats.total if self.stats.total is not None else "?")

        for i, log in enumerate(logs):
            self._report_progress(i)
            self.stats.processed += 1

            # 1) Decode
            try:
                event = decode_pool_created(log, self._spec)
            except DecodeError as e:
                self.stats.skipped += 1
                logger.warning(
                    "skipping log (block=%s tx=%s index=%s): %s",
                    log.block_number,
                    log.tx_hash or "?",
                    log.log_index,
                    e,
                )
                continue
            self.stats.decoded += 1

            # 2) Resolve both tokens (cache guarantees one resolution per address)
            await asyncio.gather(
                self._cache.resolve(event.token0),
                self._cache.resolve(event.token1),
            )

            # 3) Join and emit
            record = PoolInfoRecord.from_pool_created_event(event, self._cache)
            self.stats.emitted += 1
            yield record
