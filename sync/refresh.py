"""
================================================================================
REFRESH.PY - END-TO-END REFRESH RUN
================================================================================
PURPOSE: Sequence one refresh of the destination sheet from the source table.

WORKFLOW:
  1. Prepare destination (clear live sheet, or clean hidden staging sheet)
  2. Fetch every record from the source
  3. Empty result -> "No new data - <timestamp>" marker in A1 of the
     destination (swapped in for the swap strategy), stop
  4. Transform records into a grid
  5. Write the grid in batches
  6. Finalize (swap staging into place for the swap strategy)

Nothing here is retried. Any failure aborts the run and is re-raised to the
caller; with the swap strategy the live sheet is untouched in that case.
================================================================================
"""

from __future__ import annotations

import time
from dataclasses import dataclass, field
from datetime import datetime
from typing import List, Optional

from config import NO_DATA_PREFIX, STRATEGIES, STRATEGY_SWAP
from core.errors import ConfigError
from core.fetcher import fetch_records
from core.logger import (
    format_duration,
    get_local_time,
    get_timestamp_full,
    log_msg,
    print_error,
)
from core.sheets import SheetsManager
from core.transform import grid_shape, records_to_grid
from core.writer import Batch, write_grid

STATUS_SYNCED = "synced"
STATUS_NO_DATA = "no_data"


@dataclass
class RefreshReport:
    strategy: str
    sheet: str
    status: str = STATUS_SYNCED
    records: int = 0
    rows: int = 0
    columns: int = 0
    batches: List[Batch] = field(default_factory=list)
    started_at: Optional[datetime] = None
    duration: float = 0.0
    marker: str = ""


class RefreshOrchestrator:
    """
    PURPOSE: Run fetch -> transform -> write -> finalize against one document.

    ATTRIBUTES:
      config (SyncConfig): settings for this run
      sheets (SheetsManager): management over the explicit spreadsheet handle
      session (requests.Session, optional): HTTP session for the fetch
    """

    def __init__(self, config, spreadsheet, session=None):
        self.config = config
        self.sheets = SheetsManager(spreadsheet, config)
        self.session = session

    def run(self, strategy: Optional[str] = None) -> RefreshReport:
        strategy = strategy or self.config.strategy
        if strategy not in STRATEGIES:
            raise ConfigError(f"Unknown strategy '{strategy}' (expected one of {', '.join(STRATEGIES)})")

        report = RefreshReport(strategy=strategy, sheet=self.config.sheet_name, started_at=get_local_time())
        start = time.time()
        log_msg(f"[INFO] Refresh of '{report.sheet}' started @ {get_timestamp_full()} (strategy: {strategy})")

        try:
            self._run(strategy, report)
        except Exception as exc:
            print_error(f"Refresh aborted after {format_duration(time.time() - start)}: {exc}")
            raise

        report.duration = time.time() - start
        log_msg(f"[COMPLETE] Refresh finished in {format_duration(report.duration)} ({report.status})")
        return report

    def _run(self, strategy: str, report: RefreshReport):
        target = self.config.sheet_name

        log_msg("[INFO] Preparing destination...")
        if strategy == STRATEGY_SWAP:
            ws = self.sheets.prepare_staging(self.config.staging_sheet_name)
        else:
            ws = self.sheets.clear_in_place(target)

        log_msg(f"[INFO] Fetching '{self.config.table_name}'...")
        records = fetch_records(self.config, session=self.session).unwrap()
        report.records = len(records)
        if not records:
            report.status = STATUS_NO_DATA
            report.marker = f"{NO_DATA_PREFIX}{get_timestamp_full()}"
            self.sheets.write_marker(ws, report.marker)
            if strategy == STRATEGY_SWAP:
                self.sheets.swap_in(target, self.config.staging_sheet_name)
            log_msg(f"[INFO] Source returned no records; marker written to '{target}'")
            return

        grid = records_to_grid(records)
        report.rows, report.columns = grid_shape(grid)
        log_msg(f"[INFO] Writing {report.rows} rows x {report.columns} columns into '{ws.title}'...")

        report.batches = write_grid(
            ws,
            grid,
            batch_size=self.config.write_batch_size,
            resize=self.config.resize_sheet,
            delay=self.config.write_delay,
        )

        if self.config.freeze_header:
            self.sheets.freeze_header(ws)

        if strategy == STRATEGY_SWAP:
            self.sheets.swap_in(target, self.config.staging_sheet_name)
