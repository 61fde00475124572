"""Scan orchestrator: fetch → decode → enrich → write.

This module provides two layers:

1) `run_scan(...)`:
   - Pure application-layer use case.
   - Depends ONLY on interfaces (IEvmLogsProvider, ITokenCaller, IPoolInfoSink).
   - Does NOT instantiate RPC or TabularWriter, nor close them.

2) `scan_pools(...)` (convenience wrapper):
   - Wires concrete implementations (RPC, TabularWriter) from a `ScanConfig`
     for typical CLI / script usage.
   - Calls `run_scan(...)` under the hood.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path

from poolscan.clients.rpc import RPC
from poolscan.core.config import ScanConfig
from poolscan.core.filters import LogFilterSpec
from poolscan.core.interfaces import IEvmLogsProvider, IPoolInfoSink, ITokenCaller
from poolscan.core.use_cases.enrich_pools import EnrichmentPipeline, PipelineStats
from poolscan.decoding.registries import make_pool_created_spec
from poolscan.decoding.specs import EventSpec
from poolscan.metadata.cache import TokenMetadataCache
from poolscan.storage.tabular import TabularWriter

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Output DTO
# ---------------------------------------------------------------------------


@dataclass(kw_only=True)
class ScanOutput:
    """High-level output of a scan."""
    stats: PipelineStats
    resolutions: int
    out_path: Path


# ---------------------------------------------------------------------------
# 1) Pure application use case (no concrete instantiation)
# ---------------------------------------------------------------------------


async def run_scan(
    *,
    log_filter: LogFilterSpec,
    spec: EventSpec,
    logs_provider: IEvmLogsProvider,
    token_caller: ITokenCaller,
    sink: IPoolInfoSink,
    progress_every: int = 10,
) -> ScanOutput:
    """Fetch logs once, stream enriched records into `sink`, then close it.

    Fatal errors from the log source or the sink propagate unchanged.
    """
    # 1) One-shot historical fetch
    logs = await logs_provider.get_logs(log_filter)
    logger.info("fetched %d logs from %s since block %d", len(logs), log_filter.address, log_filter.from_block)

    # 2) Enrich, with a cache owned by this run
    cache = TokenMetadataCache(token_caller)
    pipeline = EnrichmentPipeline(spec, cache, progress_every=progress_every)
    async for record in pipeline.run(logs):
        sink.add(record)

    # 3) Persist
    out_path = sink.close()

    return ScanOutput(
        stats=pipeline.stats,
        resolutions=cache.resolutions,
        out_path=out_path,
    )


# ---------------------------------------------------------------------------
# 2) Convenience wrapper
# ---------------------------------------------------------------------------


async def scan_pools(config: ScanConfig) -> ScanOutput:
    """Run a full scan against a live node and write `config.out_path`."""
    spec = make_pool_created_spec()
    log_filter = LogFilterSpec(
        address=config.factory_address,
        from_block=config.start_block,
        topic0=spec.topic0,
    )
    rpc = RPC(config.rpc_url, timeout_s=config.timeout_s)
    try:
        writer = TabularWriter(config.out_path, batch_rows=config.batch_rows)
        try:
            return await run_scan(
                log_filter=log_filter,
                spec=spec,
                logs_provider=rpc,
                token_caller=rpc,
                sink=writer,
                progress_every=config.progress_every,
            )
        except Exception:
            writer.abort()
            raise
    finally:
        await rpc.aclose()
