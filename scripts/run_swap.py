#!/usr/bin/env python3
"""
Run one staging + swap refresh of the target sheet.
Intended for a scheduler; takes no arguments.
"""

import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parent.parent
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from config import STRATEGY_SWAP, SyncConfig, validate_config  # noqa: E402
from sync import run_swap_mode  # noqa: E402


def main():
    config = SyncConfig.from_env()
    config.strategy = STRATEGY_SWAP
    validate_config(config)
    run_swap_mode(config)


if __name__ == "__main__":
    main()
