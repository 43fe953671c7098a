"""
Tabular views of the history, built on pandas.

Used by the command line to print the history, export it as CSV and
summarize it.
"""

import os
from typing import Any, Iterable

import pandas as pd

from .category import Category
from .engine import round_half_up
from .record import STORED_FIELDS, ResultRecord

# Columns shown by `bmilog history`, in order
DISPLAY_COLUMNS = ["id", "displayDate", "name", "bmi", "category", "idealWeightLabel"]


def records_to_frame(records: Iterable[ResultRecord]) -> pd.DataFrame:
    """
    One row per record, newest first, with the stored field names as columns.
    """
    rows = [record.to_dict() for record in records]
    return pd.DataFrame(rows, columns=list(STORED_FIELDS))


def write_history_csv(records: Iterable[ResultRecord], path: str | os.PathLike) -> int:
    """Write the history to `path` as CSV and return the number of rows written."""
    df = records_to_frame(records)
    df.to_csv(path, index=False)
    return len(df)


def summarize(records: Iterable[ResultRecord]) -> dict[str, Any]:
    """
    Aggregate statistics over the history:
      - count of records
      - latest, lowest, highest and mean BMI (ignoring 0, the not-applicable sentinel)
      - count per category label, every category present
    """
    df = records_to_frame(records)
    counts = {category.value: 0 for category in Category}
    counts.update(df["category"].value_counts().to_dict())

    measured = df.loc[df["bmi"] > 0, "bmi"]
    if measured.empty:
        stats = {"latest_bmi": None, "min_bmi": None, "max_bmi": None, "mean_bmi": None}
    else:
        stats = {
            "latest_bmi": float(measured.iloc[0]),
            "min_bmi": float(measured.min()),
            "max_bmi": float(measured.max()),
            "mean_bmi": round_half_up(float(measured.mean())),
        }
    return {"count": len(df), **stats, "categories": {k: int(v) for k, v in counts.items()}}
