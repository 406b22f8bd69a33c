import logging
from pydantic import BaseModel, Field
from typing import Dict, List, Optional, Tuple, Union

from backend.schemas import Layout

logger = logging.getLogger(__name__)

HEADER_LINES = 2  # header row + separator row


class Column(BaseModel):
    key: str
    label: str


class TimetableLayout(BaseModel):
    """Explicit column order and count expected from the model's table"""
    name: Layout
    columns: List[Column]

    @property
    def keys(self) -> List[str]:
        return [column.key for column in self.columns]

    @property
    def labels(self) -> List[str]:
        return [column.label for column in self.columns]

    def __len__(self) -> int:
        return len(self.columns)


def _columns(*labels: str) -> List[Column]:
    return [Column(key=label.lower().replace(" ", "_"), label=label) for label in labels]


LAYOUTS: Dict[Layout, TimetableLayout] = {
    Layout.WEEKDAY: TimetableLayout(
        name=Layout.WEEKDAY,
        columns=_columns("Time Slot", "Sunday", "Monday", "Tuesday", "Wednesday", "Thursday", "Friday"),
    ),
    Layout.FULL_WEEK: TimetableLayout(
        name=Layout.FULL_WEEK,
        columns=_columns("Days", "Time Slot", "Monday", "Tuesday", "Wednesday", "Thursday", "Friday",
                         "Saturday", "Sunday"),
    ),
}


def get_layout(layout: Union[Layout, str]) -> TimetableLayout:
    """Look up a layout by enum member or name"""
    return LAYOUTS[Layout(layout)]


class TimetableRow(BaseModel):
    """One data line of the table; absent cells are None"""
    cells: Dict[str, Optional[str]]
    line_number: int

    def get(self, key: str) -> Optional[str]:
        return self.cells.get(key)

    def values(self, layout: TimetableLayout) -> List[Optional[str]]:
        return [self.cells.get(key) for key in layout.keys]


class ParseFailure(BaseModel):
    """Where and how a row disagreed with the expected layout"""
    line_number: int = Field(description="1-based line number in the source text, 0 if not line specific")
    expected_columns: int
    actual_columns: int
    message: str


class TimetableParseResult(BaseModel):
    """Tagged parse outcome: ok with rows, or a failure"""
    ok: bool
    layout: Layout
    rows: List[TimetableRow] = Field(default_factory=list)
    mismatches: List[ParseFailure] = Field(default_factory=list)
    failure: Optional[ParseFailure] = None


def split_cells(line: str) -> List[str]:
    """Split one pipe-table line into trimmed cells.

    Only the single empty field produced by a leading or trailing pipe is
    dropped; empty cells in between are kept.
    """
    parts = line.split("|")
    if parts and not parts[0].strip():
        parts = parts[1:]
    if parts and not parts[-1].strip():
        parts = parts[:-1]
    return [part.strip() for part in parts]


def _data_lines(markdown: str) -> List[Tuple[int, str]]:
    lines = markdown.split("\n")
    return [
        (number, line)
        for number, line in enumerate(lines[HEADER_LINES:], start=HEADER_LINES + 1)
        if line.strip() and "|" in line
    ]


def parse_timetable(
    markdown: str,
    layout: Union[Layout, str] = Layout.FULL_WEEK,
    strict: bool = False
) -> TimetableParseResult:
    """
    Parse the markdown pipe-table returned by the model into rows.

    The first two lines are taken as header and separator. Every later
    non-blank line holding a pipe becomes a row whose cells are mapped onto
    the layout's columns by position.

    Args:
        markdown: Raw text returned by the model
        layout: Expected column layout
        strict: Fail on the first row whose cell count differs from the layout

    Returns:
        TimetableParseResult; in lenient mode every mismatch is listed in
        ``mismatches`` and missing cells are None
    """
    table_layout = get_layout(layout)
    expected = len(table_layout)
    rows: List[TimetableRow] = []
    mismatches: List[ParseFailure] = []

    for line_number, line in _data_lines(markdown or ""):
        cells = split_cells(line)
        if len(cells) != expected:
            mismatch = ParseFailure(
                line_number=line_number,
                expected_columns=expected,
                actual_columns=len(cells),
                message=f"Line {line_number} has {len(cells)} cells, expected {expected}",
            )
            if strict:
                logger.warning("Strict parse failed: %s", mismatch.message)
                return TimetableParseResult(
                    ok=False, layout=table_layout.name, rows=rows, mismatches=[mismatch], failure=mismatch
                )
            mismatches.append(mismatch)

        values = {key: (cells[i] if i < len(cells) else None) for i, key in enumerate(table_layout.keys)}
        rows.append(TimetableRow(cells=values, line_number=line_number))

    if not rows:
        failure = ParseFailure(
            line_number=0,
            expected_columns=expected,
            actual_columns=0,
            message="No table rows found in the generated text",
        )
        return TimetableParseResult(ok=False, layout=table_layout.name, failure=failure)

    if mismatches:
        logger.info("Parsed %d rows with %d column mismatches", len(rows), len(mismatches))

    return TimetableParseResult(ok=True, layout=table_layout.name, rows=rows, mismatches=mismatches)


# Checked in order; the first keyword found decides the class
CELL_KEYWORDS = [
    ("school", "default"),
    ("break", "highlighted"),
    ("quiz", "quiz"),
    ("list the doubts", "doubts"),
]


def cell_class(content: Optional[str]) -> str:
    """Display class for one cell, by case-insensitive keyword match"""
    if not content:
        return "default"
    lowered = content.lower()
    for keyword, css_class in CELL_KEYWORDS:
        if keyword in lowered:
            return css_class
    return "default"
