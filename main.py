#!/usr/bin/env python3
"""
================================================================================
MAIN.PY - ENTRY POINT
================================================================================
PURPOSE: Single parameterless entry point for an external trigger (cron,
         GitHub Actions schedule, manual run). Everything comes from the
         environment / .env file.

WORKFLOW:
  1. Build SyncConfig from the environment
  2. Validate configuration
  3. Show run header
  4. Run the configured strategy (clear or swap)
  5. Report; any failure propagates so the trigger marks the run failed

USAGE:
  python main.py
  SYNC_STRATEGY=clear python main.py
================================================================================
"""

import sys

from config import STRATEGY_CLEAR, SyncConfig, validate_config
from core.logger import print_error, print_header, print_separator
from sync import run_clear_mode, run_swap_mode


def main():
    """
    PURPOSE: Run one refresh with the environment configuration.

    RETURNS:
      int: 0 on success; failures raise
    """
    config = SyncConfig.from_env()
    validate_config(config)

    print_header("Table → Sheet Sync", {
        "Source Table": config.table_name,
        "Target Sheet": config.sheet_name,
        "Strategy": config.strategy,
        "Write Batch": config.write_batch_size,
        "Clear Batch": config.clear_batch_size,
    })
    print_separator()

    try:
        if config.strategy == STRATEGY_CLEAR:
            run_clear_mode(config)
        else:
            run_swap_mode(config)
    except KeyboardInterrupt:
        print_error("Interrupted by user")
        raise

    return 0


if __name__ == '__main__':
    sys.exit(main())
