"""Cell highlighting and table conversion for the timetable view"""

import sys
import os
import pandas as pd
from typing import List, Optional

# Add parent directory to path to import backend
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '../..')))

from backend.timetable_parser import cell_class

CELL_COLORS = {
    "default": "#ffffff",
    "highlighted": "#fef9c3",
    "quiz": "#e5e7eb",
    "doubts": "#f9fafb",
}

LABEL_COLUMNS = ("Days", "Time Slot")


def cell_css(content: Optional[str]) -> str:
    return f"background-color: {CELL_COLORS[cell_class(content)]}"


def rows_to_dataframe(rows, layout) -> pd.DataFrame:
    """One DataFrame row per parsed row; absent cells render as empty text"""
    data: List[List[str]] = [
        [value if value is not None else "" for value in row.values(layout)]
        for row in rows
    ]
    return pd.DataFrame(data, columns=layout.labels)


def style_timetable(df: pd.DataFrame):
    """Apply keyword highlighting to every day column"""
    day_columns = [column for column in df.columns if column not in LABEL_COLUMNS]
    return df.style.map(cell_css, subset=day_columns)
