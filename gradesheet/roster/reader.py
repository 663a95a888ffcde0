from __future__ import annotations

from pathlib import Path
from typing import Any

import pandas as pd

"""Roster loading.

Reads the external roster (a Massar export saved as .xlsx, or a .csv copy)
into plain rows of raw cell values: no header inference, empty cells as None,
row 0 is the first sheet row. Writing back to the file is the spreadsheet
collaborator's job, not ours.
"""

__all__ = [
    "RosterReadError",
    "SUPPORTED_SUFFIXES",
    "read_roster",
    "frame_to_rows",
]

SUPPORTED_SUFFIXES = (".xlsx", ".csv")


class RosterReadError(Exception):
    """Raised when the roster file is missing, unsupported or unreadable."""


def frame_to_rows(df: pd.DataFrame) -> list[list[Any]]:
    """DataFrame (header=None) -> list of rows, NaN -> None."""
    cleaned = df.astype(object).where(pd.notna(df), None)
    return [list(row) for row in cleaned.itertuples(index=False, name=None)]


def read_roster(path: Path, sheet: str | None = None) -> list[list[Any]]:
    """Load a roster file as raw rows.

    Parameters
    ----------
    path: .xlsx or .csv file
    sheet: sheet name for workbooks (None -> first sheet)
    """
    if not path.exists():
        raise RosterReadError(f"roster file not found: {path}")
    suffix = path.suffix.lower()
    if suffix not in SUPPORTED_SUFFIXES:
        raise RosterReadError(f"unsupported roster format: {path.suffix}")
    try:
        if suffix == ".csv":
            # keep_default_na=False: "NA" style strings stay text, blanks become NaN
            df = pd.read_csv(path, header=None, dtype=object, keep_default_na=False, na_values=[""])
        else:
            xls = pd.ExcelFile(path)
            name = sheet if sheet is not None else xls.sheet_names[0]
            if name not in xls.sheet_names:
                raise RosterReadError(f"sheet '{name}' not found in {path.name}")
            df = xls.parse(name, header=None)
    except RosterReadError:
        raise
    except (OSError, ValueError) as e:
        raise RosterReadError(f"failed to read roster {path}: {e}") from e
    return frame_to_rows(df)
