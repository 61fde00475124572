import asyncio
import logging
import time
from pathlib import Path

import click
from rich.console import Console
from rich.logging import RichHandler

from poolscan.constants import UNISWAP_V3_FACTORY, UNISWAP_V3_FACTORY_START_BLOCK
from poolscan.core.config import ScanConfig, resolve_rpc_url
from poolscan.core.errors import PoolscanError

console = Console()


def _setup_logging(level: str) -> None:
    logging.basicConfig(
        level=level.upper(),
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=console, rich_tracebacks=True, show_path=False)],
        force=True,
    )


@click.group()
def cli() -> None:
    """poolscan — list Uniswap v3 pools with their token names and symbols."""


@cli.command("scan")
@click.option("--rpc", default=None, help="RPC endpoint URL (default: $INFURA_URL or $RPC_URL)")
@click.option("--factory", default=UNISWAP_V3_FACTORY, show_default=True, help="Pool factory address")
@click.option(
    "--from-block",
    type=int,
    default=UNISWAP_V3_FACTORY_START_BLOCK,
    show_default=True,
    help="First block to scan (scan runs to the chain head)",
)
@click.option(
    "--out",
    "out_path",
    type=click.Path(dir_okay=False, path_type=Path),
    default=Path("pools.csv"),
    show_default=True,
    help="Output file (.csv or .parquet)",
)
@click.option("--progress-every", type=click.IntRange(min=1), default=10, show_default=True, help="Log progress every N logs")
@click.option("--timeout", "timeout_s", type=int, default=20, show_default=True, help="HTTP timeout in seconds")
@click.option(
    "--log-level",
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"], case_sensitive=False),
    default="INFO",
    show_default=True,
)
def scan_cmd(
    rpc: str | None,
    factory: str,
    from_block: int,
    out_path: Path,
    progress_every: int,
    timeout_s: int,
    log_level: str,
) -> None:
    """Scan PoolCreated events from the factory and write one row per pool."""
    _setup_logging(log_level)

    from poolscan.orchestration.orchestrator import scan_pools

    try:
        config = ScanConfig(
            rpc_url=resolve_rpc_url(rpc),
            factory_address=factory,
            start_block=from_block,
            out_path=out_path,
            progress_every=progress_every,
            timeout_s=timeout_s,
        )
        t0 = time.time()
        output = asyncio.run(scan_pools(config))
    except PoolscanError as e:
        raise click.ClickException(f"{type(e).__name__}: {e}") from e

    elapsed = time.time() - t0
    stats = output.stats
    console.print(f"[bold]done[/]: {stats.emitted} pools → {output.out_path} • {elapsed:.2f}s")
    console.print(
        f"[bold]summary[/]: "
        f"logs={stats.processed}  "
        f"[green]decoded[/]={stats.decoded}  "
        f"[red]skipped[/]={stats.skipped}  "
        f"[yellow]tokens_resolved[/]={output.resolutions}"
    )
