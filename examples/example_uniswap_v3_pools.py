import asyncio
import os
from pathlib import Path

from dotenv import load_dotenv

from poolscan.core.config import ScanConfig
from poolscan.orchestration.orchestrator import scan_pools
from poolscan.storage.tabular import read_pool_infos

EXAMPLES_ROOT = Path(__file__).parent
OUT_PATH = EXAMPLES_ROOT.parent / "data_examples" / "pools.parquet"

load_dotenv()

config = ScanConfig(
    rpc_url=os.environ["INFURA_URL"],
    start_block=12_369_621,
    out_path=OUT_PATH,
    progress_every=50,
)


async def main():
    output = await scan_pools(config)
    print(output.stats)

    pools = read_pool_infos(output.out_path)
    print(len(pools))
    for pool in pools[:5]:
        print(f"{pool.token0_symbol}/{pool.token1_symbol} {pool.fee / 10_000:.2f}% → {pool.pool_addr}")


asyncio.run(main())
