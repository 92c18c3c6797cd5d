"""
Pytest configuration and shared fixtures.

The fakes below implement the subset of the gspread Spreadsheet / Worksheet
API the refresh uses, backed by in-memory lists, plus a fake requests
session for the source table.
"""
import copy
import json
from unittest.mock import MagicMock

import pytest
from gspread.exceptions import APIError, WorksheetNotFound
from gspread.utils import a1_range_to_grid_range, a1_to_rowcol

from config import SyncConfig


def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line("markers", "unit: Fast unit tests")


def make_api_error(message="boom", code=400):
    response = MagicMock()
    response.json.return_value = {
        "error": {"code": code, "message": message, "status": "INVALID_ARGUMENT"}
    }
    response.text = message
    return APIError(response)


class FakeWorksheet:
    def __init__(self, spreadsheet, sheet_id, title, rows=1000, cols=26, values=None):
        self.spreadsheet = spreadsheet
        self.id = sheet_id
        self.title = title
        self.row_count = rows
        self.col_count = cols
        self.hidden = False
        self.frozen_rows = 0
        self.values = [list(r) for r in (values or [])]
        self.update_calls = []
        self.clear_calls = []
        self.fail_on_update = None

    # --- reads ---
    def get_all_values(self):
        rows = [list(r) for r in self.values]
        while rows and all(c == "" for c in rows[-1]):
            rows.pop()
        if not rows:
            return []
        width = 0
        for r in rows:
            for idx, cell in enumerate(r):
                if cell != "":
                    width = max(width, idx + 1)
        return [(r + [""] * width)[:width] for r in rows]

    # --- writes ---
    def _ensure(self, rows, cols):
        while len(self.values) < rows:
            self.values.append([])
        for r in self.values:
            while len(r) < cols:
                r.append("")

    def update(self, values=None, range_name=None, value_input_option=None, **kwargs):
        number = len(self.update_calls) + 1
        self.update_calls.append({
            "range_name": range_name,
            "values": [list(r) for r in values],
            "value_input_option": value_input_option,
        })
        if self.fail_on_update == number:
            raise make_api_error(f"update {number} rejected", code=500)

        row, col = a1_to_rowcol(range_name)
        last_row = row + len(values) - 1
        width = max((len(r) for r in values), default=0)
        if last_row > self.row_count or col + width - 1 > self.col_count:
            raise make_api_error(f"Range {range_name} exceeds grid limits")

        self._ensure(last_row, col + width - 1)
        for r_off, r in enumerate(values):
            for c_off, v in enumerate(r):
                self.values[row - 1 + r_off][col - 1 + c_off] = v
        return {"updatedRange": f"{self.title}!{range_name}"}

    def batch_clear(self, ranges):
        for rng in ranges:
            self.clear_calls.append(rng)
            grid = a1_range_to_grid_range(rng)
            for r in range(grid["startRowIndex"], min(grid["endRowIndex"], len(self.values))):
                row = self.values[r]
                for c in range(grid["startColumnIndex"], min(grid["endColumnIndex"], len(row))):
                    row[c] = ""

    def clear(self):
        self.clear_calls.append("ALL")
        self.values = []

    def resize(self, rows=None, cols=None):
        if rows is not None:
            self.row_count = rows
            self.values = self.values[:rows]
        if cols is not None:
            self.col_count = cols
            self.values = [r[:cols] for r in self.values]

    def hide(self):
        self.hidden = True

    def show(self):
        self.hidden = False

    def freeze(self, rows=None, cols=None):
        if rows is not None:
            self.frozen_rows = rows


class FakeSpreadsheet:
    def __init__(self, title="Sync Test"):
        self.title = title
        self.sheets = []
        self.batch_update_calls = []
        self._next_id = 100
        self.add_worksheet(title="Sheet1", rows=1000, cols=26)

    def worksheets(self):
        return list(self.sheets)

    def worksheet(self, title):
        for ws in self.sheets:
            if ws.title == title:
                return ws
        raise WorksheetNotFound(title)

    def add_worksheet(self, title, rows, cols, index=None):
        if any(ws.title == title for ws in self.sheets):
            raise make_api_error(f"A sheet with the name \"{title}\" already exists")
        ws = FakeWorksheet(self, self._next_id, title, rows=rows, cols=cols)
        self._next_id += 1
        self.sheets.append(ws)
        return ws

    def del_worksheet(self, worksheet):
        self.sheets.remove(worksheet)

    def _by_id(self, sheet_id):
        for ws in self.sheets:
            if ws.id == sheet_id:
                return ws
        raise make_api_error(f"No sheet with id: {sheet_id}")

    def batch_update(self, body):
        """Apply all requests or none of them, like the Sheets API."""
        self.batch_update_calls.append(copy.deepcopy(body))
        saved = [(ws, ws.title, ws.hidden) for ws in self.sheets]
        try:
            for req in body["requests"]:
                if "deleteSheet" in req:
                    ws = self._by_id(req["deleteSheet"]["sheetId"])
                    if not any(not s.hidden for s in self.sheets if s is not ws):
                        raise make_api_error("You can't remove all the visible sheets in a document.")
                    self.sheets.remove(ws)
                elif "updateSheetProperties" in req:
                    props = req["updateSheetProperties"]["properties"]
                    ws = self._by_id(props["sheetId"])
                    if "hidden" in props:
                        ws.hidden = props["hidden"]
                    if "title" in props:
                        if any(s.title == props["title"] for s in self.sheets if s is not ws):
                            raise make_api_error(f"A sheet with the name \"{props['title']}\" already exists")
                        ws.title = props["title"]
                else:
                    raise make_api_error(f"Unsupported request {list(req)}")
        except APIError:
            self.sheets = [ws for ws, _, _ in saved]
            for ws, title, hidden in saved:
                ws.title = title
                ws.hidden = hidden
            raise
        return {"replies": [{} for _ in body["requests"]]}

    def add_values(self, title, values):
        """Test helper: a visible sheet pre-filled with ``values``."""
        ws = self.add_worksheet(title=title, rows=max(len(values), 1000), cols=26)
        ws.values = [list(r) for r in values]
        return ws


class FakeResponse:
    def __init__(self, status_code=200, payload=None, text=None):
        self.status_code = status_code
        self.text = text if text is not None else json.dumps(payload)


class FakeSession:
    def __init__(self, response=None, exc=None):
        self.response = response
        self.exc = exc
        self.calls = []

    def get(self, url, headers=None, timeout=None):
        self.calls.append({"url": url, "headers": headers, "timeout": timeout})
        if self.exc is not None:
            raise self.exc
        return self.response


@pytest.fixture
def sync_config():
    return SyncConfig(
        source_url="https://example.supabase.co",
        api_key="secret-key",
        table_name="orders",
        sheet_name="Data",
        spreadsheet="spreadsheet-key",
        credentials_json='{"type": "service_account"}',
    )


@pytest.fixture
def spreadsheet():
    return FakeSpreadsheet()


@pytest.fixture
def make_session():
    """Factory: a session whose GET answers ``records`` with ``status``."""
    def _make(records=None, status=200, text=None, exc=None):
        if exc is not None:
            return FakeSession(exc=exc)
        return FakeSession(FakeResponse(status, payload=records, text=text))
    return _make
