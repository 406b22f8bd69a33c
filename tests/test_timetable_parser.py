from backend.timetable_parser import cell_class, get_layout, parse_timetable, split_cells
from conftest import FULL_WEEK_TABLE, WEEKDAY_TABLE


def test_parses_one_row_per_data_line():
    result = parse_timetable(FULL_WEEK_TABLE, "full_week")
    assert result.ok is True
    assert len(result.rows) == 3
    assert result.mismatches == []

    first = result.rows[0]
    assert first.get("days") == "Day 1-7"
    assert first.get("time_slot") == "09:00-11:00"
    assert first.get("monday") == "Physics: Units and Measurements"
    assert first.get("sunday") == "Quiz: Week 1"


def test_cells_are_trimmed():
    markdown = "| Time Slot | Sunday |\n|---|---|\n|   09:00-10:00   |  Physics  |   Chemistry |  x | y | z | w |"
    result = parse_timetable(markdown, "weekday")
    row = result.rows[0]
    assert row.values(get_layout("weekday")) == ["09:00-10:00", "Physics", "Chemistry", "x", "y", "z", "w"]


def test_weekday_layout_maps_sunday_first():
    result = parse_timetable(WEEKDAY_TABLE, "weekday")
    assert result.ok is True
    assert [row.get("sunday") for row in result.rows] == ["Rest", "Break", "Quiz"]
    assert result.rows[0].get("friday") == "Review/Practice"
    assert "saturday" not in result.rows[0].cells


def test_short_row_leaves_missing_fields_unset():
    markdown = "header\nseparator\n| 09:00-10:00 | Physics |"
    result = parse_timetable(markdown, "weekday")
    assert result.ok is True
    row = result.rows[0]
    assert row.get("time_slot") == "09:00-10:00"
    assert row.get("sunday") == "Physics"
    assert row.get("monday") is None
    assert row.get("friday") is None
    assert len(result.mismatches) == 1
    assert result.mismatches[0].line_number == 3
    assert result.mismatches[0].actual_columns == 2


def test_excess_cells_are_dropped():
    markdown = "h\ns\n| a | b | c | d | e | f | g | h | i |"
    result = parse_timetable(markdown, "weekday")
    assert list(result.rows[0].cells.values()) == ["a", "b", "c", "d", "e", "f", "g"]
    assert result.mismatches[0].actual_columns == 9


def test_strict_mode_reports_the_mismatching_row():
    markdown = WEEKDAY_TABLE + "| 13:00-14:00 | Lunch |\n"
    result = parse_timetable(markdown, "weekday", strict=True)
    assert result.ok is False
    assert result.failure.line_number == 6
    assert result.failure.expected_columns == 7
    assert result.failure.actual_columns == 2


def test_strict_mode_accepts_well_formed_table():
    result = parse_timetable(WEEKDAY_TABLE, "weekday", strict=True)
    assert result.ok is True
    assert len(result.rows) == 3


def test_blank_lines_and_prose_are_skipped():
    markdown = WEEKDAY_TABLE.replace("| 11:00", "\n   \nA short break follows.\n| 11:00")
    result = parse_timetable(markdown, "weekday")
    assert len(result.rows) == 3


def test_first_two_lines_are_always_skipped():
    markdown = "| 09:00 | a | b | c | d | e | f |\n| 10:00 | a | b | c | d | e | f |\n| 11:00 | a | b | c | d | e | f |"
    result = parse_timetable(markdown, "weekday")
    assert [row.get("time_slot") for row in result.rows] == ["11:00"]


def test_no_rows_is_a_failure():
    result = parse_timetable("Sorry, I cannot help with that.", "full_week")
    assert result.ok is False
    assert result.rows == []
    assert "No table rows" in result.failure.message


def test_split_cells_keeps_inner_empty_cells():
    assert split_cells("|     | 09:00-17:00 |  |") == ["", "09:00-17:00", ""]
    assert split_cells("a | b") == ["a", "b"]


def test_break_is_highlighted_regardless_of_case():
    assert cell_class("Break") == "highlighted"
    assert cell_class("SHORT BREAK (15 min)") == "highlighted"
    assert cell_class("tea break") == "highlighted"


def test_cell_class_keywords():
    assert cell_class("School hours") == "default"
    assert cell_class("School break") == "default"
    assert cell_class("Weekly Quiz") == "quiz"
    assert cell_class("List the doubts for Physics") == "doubts"
    assert cell_class("Physics: Laws of Motion") == "default"
    assert cell_class("") == "default"
    assert cell_class(None) == "default"
