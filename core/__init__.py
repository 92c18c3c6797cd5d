"""
================================================================================
core/__init__.py - Package Initialization
================================================================================
PURPOSE: Makes the core folder a Python package and exposes the lightweight
         pieces (errors, logging) shared by config.py, main.py and the sync
         modes. The Google Sheets and HTTP modules are imported directly
         (core.sheets, core.fetcher, core.writer) so loading settings does
         not pull in gspread, google-auth or requests.

EXPORTS:
  - SyncError and subclasses (from errors)
  - log_msg and friends (from logger)
================================================================================
"""

from core.errors import (
    SyncError, ConfigError, FetchError, DecodeError, WriteError, SwapError
)

from core.logger import (
    log_msg, get_local_time, get_timestamp_full, format_duration,
    print_header, print_separator, print_success, print_error
)

__all__ = [
    'SyncError', 'ConfigError', 'FetchError', 'DecodeError', 'WriteError', 'SwapError',
    'log_msg', 'get_local_time', 'get_timestamp_full', 'format_duration',
    'print_header', 'print_separator', 'print_success', 'print_error',
]
