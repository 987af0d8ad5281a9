"""Offline return-series loading."""
from __future__ import annotations

from pathlib import Path
from typing import Iterable

import pandas as pd

DATE_COLUMN = "date"


def load_returns(path: Path, columns: Iterable[str]) -> pd.DataFrame:
    """Load periodic returns from a wide-format CSV.

    The CSV must contain a ``date`` column (YYYY-MM-DD) and every requested
    return column. Dates are parsed to naive ``Timestamp`` values normalized to
    midnight and become the (sorted) index. Values that fail numeric parsing are
    dropped row-wise so every returned column has the same dates. A
    ``ValueError`` is raised when required columns are absent.
    """

    wanted = [column for column in columns if column]
    df = pd.read_csv(path)
    missing = [col for col in [DATE_COLUMN, *wanted] if col not in df.columns]
    if missing:
        raise ValueError(f"Returns file {path} is missing columns: {', '.join(missing)}")

    df = df[[DATE_COLUMN, *wanted]].copy()
    df[DATE_COLUMN] = pd.to_datetime(df[DATE_COLUMN], utc=False).dt.normalize()
    for column in wanted:
        df[column] = pd.to_numeric(df[column], errors="coerce")
    df = df.dropna(subset=wanted)
    return df.set_index(DATE_COLUMN).sort_index()
