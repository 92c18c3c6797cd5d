"""Staging + swap refresh: build a hidden copy, then swap it in."""

from __future__ import annotations

from typing import Optional

from config import STRATEGY_SWAP, SyncConfig
from core.logger import log_msg
from sync.refresh import RefreshOrchestrator, RefreshReport
from sync.utils import log_report, open_destination


def run_swap_mode(
    config: Optional[SyncConfig] = None,
    spreadsheet=None,
    session=None,
) -> RefreshReport:
    """
    Write into ``<sheet>_tmp`` while it is hidden and swap it over the live
    sheet only after every batch landed. Until then readers keep seeing the
    previous contents.

    NOTE: overlapping runs against the same sheet are not guarded; two swaps
    racing on the delete/rename pair can lose one run's data.
    """
    config = config or SyncConfig.from_env()
    log_msg("[INFO] Starting staging + swap refresh")

    if spreadsheet is None:
        spreadsheet = open_destination(config)

    report = RefreshOrchestrator(config, spreadsheet, session=session).run(STRATEGY_SWAP)
    log_report(report)
    return report
