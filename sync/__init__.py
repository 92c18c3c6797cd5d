"""High-level refresh modes exposed for the table to sheet sync."""

from .clear_mode import run_clear_mode
from .swap_mode import run_swap_mode
from .refresh import RefreshOrchestrator, RefreshReport

__all__ = [
    "run_clear_mode",
    "run_swap_mode",
    "RefreshOrchestrator",
    "RefreshReport",
]
