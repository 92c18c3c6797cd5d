"""
================================================================================
WRITER.PY - BATCHED GRID WRITER
================================================================================
PURPOSE: Write a grid into a worksheet in fixed-size, strictly sequential
         batches. The Sheets values API rejects or crawls on very large
         payloads, so every call carries at most ``batch_size`` rows.

RULES:
  - rows are never reordered or split; batch K starts at row 1 + (K-1)*size
  - a failed batch raises WriteError and the remaining batches are skipped
  - USER_ENTERED input so the sheet parses numbers, dates and formulas
================================================================================
"""

from __future__ import annotations

import time
from dataclasses import dataclass
from typing import Any, Iterator, List

import requests
from gspread.exceptions import APIError
from gspread.utils import ValueInputOption

from core.errors import WriteError
from core.logger import log_msg
from core.transform import Grid, grid_shape

MAX_ROWS_PER_BATCH = 1000


@dataclass
class Batch:
    number: int
    start_row: int
    rows: List[List[Any]]

    @property
    def size(self) -> int:
        return len(self.rows)

    @property
    def range_name(self) -> str:
        return f"A{self.start_row}"


def iter_batches(grid: Grid, batch_size: int = MAX_ROWS_PER_BATCH) -> Iterator[Batch]:
    """Yield consecutive slices of ``grid`` (header included) in row order."""
    if batch_size < 1:
        raise ValueError(f"batch_size must be at least 1 (got {batch_size})")
    for number, offset in enumerate(range(0, len(grid), batch_size), start=1):
        yield Batch(number=number, start_row=offset + 1, rows=grid[offset:offset + batch_size])


def write_grid(
    worksheet,
    grid: Grid,
    batch_size: int = MAX_ROWS_PER_BATCH,
    resize: bool = True,
    delay: float = 0.0,
) -> List[Batch]:
    """
    PURPOSE: Replace the worksheet's top-left block with ``grid``.

    LOGIC:
      - No rows -> nothing to do
      - Resize the sheet to exactly rows x cols when supported
      - One ``worksheet.update`` call per batch, in order

    RETURNS:
      list[Batch]: the batches that were written

    RAISES:
      WriteError: the destination rejected a batch
    """
    if not grid:
        log_msg("[WRITE] Empty grid, nothing to write")
        return []

    rows, cols = grid_shape(grid)
    total = (rows + batch_size - 1) // batch_size

    if resize and hasattr(worksheet, "resize"):
        try:
            worksheet.resize(rows=rows, cols=cols)
        except (APIError, requests.RequestException) as exc:
            raise WriteError(0, 1, f"resize to {rows}x{cols} failed ({exc})") from exc
        log_msg(f"[WRITE] Resized '{worksheet.title}' to {rows} rows x {cols} columns")

    written = []
    for batch in iter_batches(grid, batch_size):
        try:
            worksheet.update(
                values=batch.rows,
                range_name=batch.range_name,
                value_input_option=ValueInputOption.user_entered,
            )
        except (APIError, requests.RequestException) as exc:
            raise WriteError(batch.number, batch.start_row, str(exc)) from exc

        written.append(batch)
        log_msg(f"[WRITE] Batch {batch.number}/{total}: {batch.size} rows @ {batch.range_name}")

        if delay and batch.number < total:
            time.sleep(delay)

    return written
