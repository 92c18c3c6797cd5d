"""
================================================================================
SHEETS.PY - GOOGLE SHEETS OPERATIONS
================================================================================
PURPOSE: Handle all Google Sheets API interactions for a refresh run:
         authentication, opening the destination document, and the sheet
         management the two refresh strategies need.

FEATURES:
  - Google Sheets API authentication (file + raw JSON)
  - Get-or-create worksheets by name
  - Clear-in-place in bounded row chunks
  - Hidden staging sheet + single batch_update swap
  - "No new data" marker cell
================================================================================
"""

import json
from pathlib import Path
from typing import Tuple

import gspread
from google.auth.exceptions import GoogleAuthError
from google.oauth2.service_account import Credentials
from gspread.exceptions import APIError, WorksheetNotFound
from gspread.utils import ValueInputOption, rowcol_to_a1

from core.errors import ConfigError, SwapError
from core.logger import log_msg, print_error

SCOPES = [
    "https://www.googleapis.com/auth/spreadsheets",
    "https://www.googleapis.com/auth/drive",
]

DEFAULT_ROWS = 1000
DEFAULT_COLS = 26

# ==================== GOOGLE AUTH ====================

def authenticate_google(config):
    """
    PURPOSE: Authenticate with Google Sheets API using a service account.
             Supports both a local credentials file and raw JSON (CI secrets).

    LOGIC:
      - Use the credentials file if it exists
      - Fall back to raw JSON from the environment
      - Authorize gspread client with required scopes

    RETURNS:
      gspread.Client: Authenticated Sheets client

    RAISES:
      ConfigError: credentials missing, malformed or rejected
    """
    log_msg("[INFO] Authenticating with Google Sheets API...")
    cred_path = config.credentials_path

    try:
        if cred_path and Path(cred_path).exists():
            log_msg(f"[INFO] Using credentials from: {cred_path}")
            credentials = Credentials.from_service_account_file(str(cred_path), scopes=SCOPES)
            cred_source = "local file"
        elif config.credentials_json:
            log_msg("[INFO] Using credentials from GOOGLE_CREDENTIALS_JSON")
            credentials = Credentials.from_service_account_info(
                json.loads(config.credentials_json), scopes=SCOPES
            )
            cred_source = "environment"
        else:
            raise ConfigError(
                f"Google credentials not found (checked {cred_path} and GOOGLE_CREDENTIALS_JSON)"
            )
    except json.JSONDecodeError as e:
        print_error(f"Invalid JSON in credentials: {e}")
        raise ConfigError(f"Invalid JSON in credentials: {e}") from e
    except (ValueError, GoogleAuthError) as e:
        print_error(f"Google authentication failed: {e}")
        raise ConfigError(f"Google authentication failed: {e}") from e

    client = gspread.authorize(credentials)
    log_msg(f"[OK] Google Sheets authenticated ({cred_source})")
    return client


def open_spreadsheet(client, config):
    """Open the destination document by URL or by key."""
    target = config.spreadsheet
    if target.startswith("http"):
        return client.open_by_url(target)
    return client.open_by_key(target)


def used_extent(worksheet) -> Tuple[int, int]:
    """
    PURPOSE: Rows/columns actually holding values (not the grid size).

    RETURNS:
      tuple: (rows, cols), (0, 0) for an empty sheet
    """
    values = worksheet.get_all_values()
    if not values:
        return 0, 0
    return len(values), max(len(row) for row in values)

# ==================== SHEETS MANAGER CLASS ====================

class SheetsManager:
    """
    PURPOSE: Sheet management over one explicit spreadsheet handle.

    ATTRIBUTES:
      ss (Spreadsheet): destination document (gspread or a compatible fake)
      config (SyncConfig): clear batch size
    """

    def __init__(self, spreadsheet, config):
        self.ss = spreadsheet
        self.config = config

    def get_or_create_sheet(self, name: str, rows: int = DEFAULT_ROWS, cols: int = DEFAULT_COLS):
        """Get existing worksheet or create it if missing."""
        try:
            return self.ss.worksheet(name)
        except WorksheetNotFound:
            log_msg(f"[INFO] Creating new sheet: {name}")
            return self.ss.add_worksheet(title=name, rows=rows, cols=cols)

    def get_sheet_if_exists(self, name: str):
        try:
            return self.ss.worksheet(name)
        except WorksheetNotFound:
            return None

    def flush(self, name: str):
        """
        Re-read the worksheet so later steps work on post-clear properties.
        Each Sheets API call is applied before it returns, so this is the
        synchronization point between the clear and the write.
        """
        return self.ss.worksheet(name)

    def clear_in_place(self, name: str):
        """
        PURPOSE: Empty the live sheet in bounded row chunks.

        LOGIC:
          - Get or create the sheet
          - Nothing to do when no cell holds a value
          - batch_clear A{start}:{lastcol}{end} per chunk of clear_batch_size
          - flush before returning

        RETURNS:
          Worksheet: the cleared sheet
        """
        ws = self.get_or_create_sheet(name)
        rows, cols = used_extent(ws)
        if rows == 0 or cols == 0:
            log_msg(f"[CLEAR] '{name}' is already empty")
            return ws

        chunk = self.config.clear_batch_size
        for start in range(1, rows + 1, chunk):
            end = min(start + chunk - 1, rows)
            rng = f"{rowcol_to_a1(start, 1)}:{rowcol_to_a1(end, cols)}"
            ws.batch_clear([rng])
            log_msg(f"[CLEAR] Cleared {name}!{rng}")

        log_msg(f"[OK] Cleared {rows} rows x {cols} columns from '{name}'")
        return self.flush(name)

    def prepare_staging(self, name: str):
        """
        PURPOSE: Get a clean, hidden staging sheet called ``name`` to write into.

        RETURNS:
          Worksheet: the staging sheet
        """
        ws = self.get_sheet_if_exists(name)
        if ws is None:
            log_msg(f"[INFO] Creating staging sheet: {name}")
            ws = self.ss.add_worksheet(title=name, rows=DEFAULT_ROWS, cols=DEFAULT_COLS)
        else:
            log_msg(f"[CLEAR] Clearing leftover staging sheet '{name}'")
            ws.clear()

        ws.hide()
        return ws

    def swap_in(self, target: str, staging_name: str):
        """
        PURPOSE: Replace the live sheet with the staging sheet.

        LOGIC:
          One spreadsheet batch_update (applied all-or-nothing by the API):
            1. show the staging sheet
            2. delete the live sheet, if any
            3. rename the staging sheet to ``target``

        RETURNS:
          Worksheet: the new live sheet

        RAISES:
          SwapError: no staging sheet, or the API rejected the update
        """
        staging = self.get_sheet_if_exists(staging_name)
        if staging is None:
            raise SwapError(f"Staging sheet '{staging_name}' does not exist; nothing to swap in")

        live = self.get_sheet_if_exists(target)
        reqs = [{
            "updateSheetProperties": {
                "properties": {"sheetId": staging.id, "hidden": False},
                "fields": "hidden",
            }
        }]
        if live is not None:
            reqs.append({"deleteSheet": {"sheetId": live.id}})
        reqs.append({
            "updateSheetProperties": {
                "properties": {"sheetId": staging.id, "title": target},
                "fields": "title",
            }
        })

        try:
            self.ss.batch_update({"requests": reqs})
        except APIError as e:
            raise SwapError(f"Swapping '{staging_name}' into '{target}' failed: {e}") from e

        log_msg(f"[SWAP] '{staging_name}' is now '{target}'")
        return self.ss.worksheet(target)

    def write_marker(self, worksheet, text: str):
        """Write ``text`` into A1 only, as a literal string."""
        worksheet.update(values=[[text]], range_name="A1", value_input_option=ValueInputOption.raw)
        log_msg(f"[WRITE] Marker written to {worksheet.title}!A1: {text}")

    def freeze_header(self, worksheet, rows: int = 1):
        worksheet.freeze(rows=rows)

