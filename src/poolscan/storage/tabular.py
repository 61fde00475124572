from __future__ import annotations

import logging
import os
from pathlib import Path

import pyarrow as pa
import pyarrow.csv as pacsv
import pyarrow.parquet as pq

from poolscan.core.errors import SerializationError
from poolscan.core.interfaces import IPoolInfoSink
from poolscan.core.models import PoolInfoRecord

logger = logging.getLogger(__name__)

POOL_INFO_SCHEMA = pa.schema(
    [
        ("pool_addr", pa.string()),
        ("token0_name", pa.string()),
        ("token0_symbol", pa.string()),
        ("token1_name", pa.string()),
        ("token1_symbol", pa.string()),
        ("fee", pa.uint32()),
        ("token0_addr", pa.string()),
        ("token1_addr", pa.string()),
        ("block_number", pa.uint64()),
    ]
)


def _format_for(path: Path) -> str:
    suffix = path.suffix.lower()
    if suffix == ".parquet":
        return "parquet"
    if suffix == ".csv":
        return "csv"
    raise SerializationError(f"unsupported output format {suffix!r} (use .csv or .parquet)")


class TabularWriter(IPoolInfoSink):
    """
    Stream `PoolInfoRecord` rows into a CSV or Parquet file.

    - Rows are buffered and flushed as Arrow record batches of `batch_rows`.
    - Data goes to `<out_path>.tmp`; `close()` moves it to `out_path`, so the
      output appears once, complete.
    - An empty run still produces a valid file (header only for CSV).
    """

    def __init__(self, out_path: Path, *, batch_rows: int = 1_000, codec: str = "zstd") -> None:
        self.out_path = Path(out_path)
        self.fmt = _format_for(self.out_path)
        self.batch_rows = batch_rows
        self.codec = codec
        self.rows_written = 0

        self._buf: list[dict] = []
        self._tmp = self.out_path.with_name(self.out_path.name + ".tmp")
        self._closed = False
        try:
            self.out_path.parent.mkdir(parents=True, exist_ok=True)
            if self.fmt == "parquet":
                self._writer = pq.ParquetWriter(str(self._tmp), POOL_INFO_SCHEMA, compression=codec)
            else:
                self._writer = pacsv.CSVWriter(str(self._tmp), POOL_INFO_SCHEMA)
        except (OSError, pa.ArrowException) as e:
            raise SerializationError(f"cannot open {self._tmp}: {e}") from e

    def add(self, record: PoolInfoRecord) -> None:
        """Buffer one record, flushing a batch when full."""
        if self._closed:
            raise SerializationError("writer already closed")
        self._buf.append(record.to_row())
        if len(self._buf) >= self.batch_rows:
            self._flush()

    def _flush(self) -> None:
        if not self._buf:
            return
        try:
            batch = pa.RecordBatch.from_pylist(self._buf, schema=POOL_INFO_SCHEMA)
            self._writer.write_batch(batch)
        except (OSError, pa.ArrowException) as e:
            raise SerializationError(f"cannot write rows to {self._tmp}: {e}") from e
        self.rows_written += len(self._buf)
        self._buf = []

    def close(self) -> Path:
        """Flush remaining rows and atomically publish the file."""
        if self._closed:
            return self.out_path
        self._flush()
        try:
            self._writer.close()
            os.replace(self._tmp, self.out_path)
        except (OSError, pa.ArrowException) as e:
            raise SerializationError(f"cannot persist {self.out_path}: {e}") from e
        self._closed = True
        logger.info("wrote %s (rows=%d)", self.out_path, self.rows_written)
        return self.out_path

    def abort(self) -> None:
        """Drop the partial output (used when the run fails before `close`)."""
        if self._closed:
            return
        self._closed = True
        try:
            self._writer.close()
        except (OSError, pa.ArrowException):
            logger.debug("ignoring error while closing aborted writer", exc_info=True)
        self._tmp.unlink(missing_ok=True)


def write_pool_infos(records: list[PoolInfoRecord], out_path: Path, **kwargs) -> Path:
    """Write all `records` to `out_path` in one go."""
    writer = TabularWriter(out_path, **kwargs)
    try:
        for record in records:
            writer.add(record)
    except Exception:
        writer.abort()
        raise
    return writer.close()


def read_pool_infos(path: Path) -> list[PoolInfoRecord]:
    """Parse a file written by `TabularWriter` back into records."""
    path = Path(path)
    if _format_for(path) == "parquet":
        table = pq.read_table(str(path))
    else:
        table = pacsv.read_csv(
            str(path),
            parse_options=pacsv.ParseOptions(newlines_in_values=True),
            convert_options=pacsv.ConvertOptions(
                column_types=POOL_INFO_SCHEMA,
                strings_can_be_null=False,
                quoted_strings_can_be_null=False,
            ),
        )
    return [PoolInfoRecord(**row) for row in table.select(POOL_INFO_SCHEMA.names).to_pylist()]
