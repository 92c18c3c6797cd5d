"""Clear-in-place refresh: empty the live sheet, then write into it."""

from __future__ import annotations

from typing import Optional

from config import STRATEGY_CLEAR, SyncConfig
from core.logger import log_msg
from sync.refresh import RefreshOrchestrator, RefreshReport
from sync.utils import log_report, open_destination


def run_clear_mode(
    config: Optional[SyncConfig] = None,
    spreadsheet=None,
    session=None,
) -> RefreshReport:
    """
    Refresh the live sheet directly. A failed batch leaves it truncated until
    the next successful run; use swap mode when readers must never see that.
    """
    config = config or SyncConfig.from_env()
    log_msg("[INFO] Starting clear-in-place refresh")

    if spreadsheet is None:
        spreadsheet = open_destination(config)

    report = RefreshOrchestrator(config, spreadsheet, session=session).run(STRATEGY_CLEAR)
    log_report(report)
    return report
