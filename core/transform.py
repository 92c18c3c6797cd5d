"""Records -> rectangular grid (header row + data rows)."""

from typing import Any, Dict, List, Sequence, Tuple

Grid = List[List[Any]]

EMPTY_CELL = ""


def records_to_grid(records: Sequence[Dict[str, Any]]) -> Grid:
    """
    PURPOSE: Build the sheet payload from a list of records.

    LOGIC:
      - Header = keys of the first record, in its own order
      - One row per record, aligned to the header
      - Missing fields and None values become ""; extra fields are dropped
      - Every other value passes through untouched

    RETURNS:
      Grid: [] when there are no records
    """
    if not records:
        return []

    header = list(records[0].keys())
    grid = [header]
    for record in records:
        row = []
        for name in header:
            value = record.get(name)
            row.append(EMPTY_CELL if value is None else value)
        grid.append(row)
    return grid


def grid_shape(grid: Grid) -> Tuple[int, int]:
    """(rows, cols) of a grid; the header fixes the column count."""
    if not grid:
        return 0, 0
    return len(grid), len(grid[0])
