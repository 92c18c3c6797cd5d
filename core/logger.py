"""
================================================================================
LOGGER.PY - LOGGING & CONSOLE OUTPUT
================================================================================
PURPOSE: Centralized logging system with rich formatting for console output.
         Handles the refresh log levels (INFO, OK, ERROR, FETCH, WRITE, ...)

FEATURES:
  - Color-coded messages based on log type
  - Emoji icons for visual distinction
  - Timestamp formatting (configurable UTC offset)
  - CI/CD mode support (plain text output for GitHub Actions)
  - Rich console formatting for local development
================================================================================
"""

import os
import sys
from datetime import datetime, timedelta, timezone

from colorama import init as colorama_init
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

# Initialize colorama for Windows compatibility
colorama_init(autoreset=True)

# Rich console for fancy formatting
console = Console()

IS_CI = bool(os.getenv('GITHUB_ACTIONS'))
TZ_OFFSET_HOURS = float(os.getenv('TZ_OFFSET_HOURS', '0'))

# Tag -> (rich style, icon)
LEVEL_STYLES = (
    ("[OK]", "green", "✅"),
    ("[ERROR]", "red", "❌"),
    ("FATAL", "red", "❌"),
    ("[FETCH]", "cyan", "🌐"),
    ("[WRITE]", "blue", "📝"),
    ("[CLEAR]", "yellow", "🧹"),
    ("[SWAP]", "magenta", "🔁"),
    ("[COMPLETE]", "magenta", "🏁"),
)

# ==================== TIME UTILITIES ====================

def get_local_time():
    """
    PURPOSE: Get current time shifted by TZ_OFFSET_HOURS (UTC by default)

    RETURNS:
      datetime: naive datetime in the configured offset
    """
    return datetime.now(timezone.utc).replace(tzinfo=None) + timedelta(hours=TZ_OFFSET_HOURS)


def get_timestamp_short():
    """Short timestamp format (HH:MM:SS)"""
    return get_local_time().strftime('%H:%M:%S')


def get_timestamp_full():
    """Full timestamp format (DD-MMM-YY HH:MM:SS)"""
    return get_local_time().strftime('%d-%b-%y %H:%M:%S')


def format_duration(seconds: float) -> str:
    """Return a human-readable duration (e.g. "2m 5s")."""
    if seconds < 60:
        return f"{seconds:.1f}s"
    if seconds < 3600:
        return f"{int(seconds // 60)}m {int(seconds % 60)}s"
    hours = int(seconds // 3600)
    minutes = int((seconds % 3600) // 60)
    return f"{hours}h {minutes}m"

# ==================== LOGGING FUNCTIONS ====================

def log_msg(message: str, style: str = None):
    """
    PURPOSE: Log a message with automatic level detection and formatting

    LOGIC:
      - Parse message for log level indicators ([OK], [ERROR], etc.)
      - Assign color and emoji based on level
      - Output to console with formatting or plain text (if CI/CD)

    ARGS:
      message (str): Message to log
      style (str, optional): Rich style override
    """
    ts = get_timestamp_short()
    text = str(message)
    detected_style = style
    icon = "ℹ️ "

    upper = text.upper()
    for tag, tag_style, tag_icon in LEVEL_STYLES:
        if tag in upper:
            detected_style = style or tag_style
            icon = tag_icon
            break

    if IS_CI:
        # Plain text for GitHub Actions
        print(f"[{ts}] {text}")
        sys.stdout.flush()
    else:
        console.print(f"[bold]{ts}[/bold] {icon}  {escape(text)}", style=detected_style)


def print_header(title: str, data: dict = None):
    """
    PURPOSE: Print a formatted header panel with configuration/status info

    ARGS:
      title (str): Header title
      data (dict, optional): Key-value pairs to display
    """
    if IS_CI:
        print(f"\n{'=' * 70}")
        print(f"  {title}")
        print(f"{'=' * 70}")
        if data:
            for key, value in data.items():
                print(f"  {key}: {value}")
        return

    header = Table.grid(padding=(0, 2))
    header.add_column(justify="left")
    if data:
        for key, value in data.items():
            header.add_row(f"{key}: {value}")

    console.print(Panel(header, title=title, border_style="magenta"))


def print_separator(char: str = "="):
    """Print a separator line for visual clarity"""
    print(char * 70)


def print_success(message: str):
    log_msg(f"[OK] {message}")


def print_error(message: str):
    log_msg(f"[ERROR] {message}")

