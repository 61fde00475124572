"""Output sinks.

This package provides:
- TabularWriter: streaming CSV / Parquet writer for PoolInfoRecord rows
- read_pool_infos: parse a written file back into records
"""

from poolscan.storage.tabular import TabularWriter, read_pool_infos, write_pool_infos

__all__ = [
    "TabularWriter",
    "read_pool_infos",
    "write_pool_infos",
]
