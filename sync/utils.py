"""Utility helpers shared across refresh modes."""

from __future__ import annotations

from config import SyncConfig
from core.logger import format_duration, log_msg, print_separator, print_success
from core.sheets import authenticate_google, open_spreadsheet


def open_destination(config: SyncConfig):
    """Authenticate once and return the destination spreadsheet handle."""
    client = authenticate_google(config)
    spreadsheet = open_spreadsheet(client, config)
    print_success(f"Opened spreadsheet '{spreadsheet.title}'")
    return spreadsheet


def log_report(report) -> None:
    print_separator()
    log_msg(f"[COMPLETE] Refresh of '{report.sheet}' ({report.strategy}) finished")
    log_msg(f"  Status:    {report.status}")
    log_msg(f"  Records:   {report.records}")
    log_msg(f"  Grid:      {report.rows} rows x {report.columns} columns")
    log_msg(f"  Batches:   {len(report.batches)}")
    log_msg(f"  Duration:  {format_duration(report.duration)}")
    print_separator()
