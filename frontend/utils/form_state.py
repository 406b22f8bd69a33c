"""Timetable form state and client-side validation"""

import sys
import os
from pydantic import BaseModel, ConfigDict
from typing import Optional, Tuple

# Add parent directory to path to import backend
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '../..')))

from backend.schemas import ALL_FIELDS_REQUIRED, TIME_RANGE_ERROR, Layout, missing_fields, parse_wall_clock

CLASS_LEVEL_OPTIONS = ["10", "11", "12", "Repeater"]
STREAM_OPTIONS = ["Science", "Commerce"]
TARGET_EXAM_OPTIONS = ["JEE", "NEET", "Others"]
PURPOSE_OPTIONS = ["Revisions", "Syllabus completion", "Clearing Backlogs", "Competative-exams"]
SUBJECT_OPTIONS = [
    "Physics", "Chemistry", "Mathematics", "Biology", "English",
    "Accountancy", "Business Studies", "Economics", "Computer Science"
]


class FormState(BaseModel):
    """Every field of the timetable form; replaced, never mutated"""
    model_config = ConfigDict(frozen=True)

    class_level: str = ""
    stream: str = ""
    target_exam: str = ""
    start_time: str = "09:00"
    end_time: str = "17:00"
    number_of_days: int = 30
    purpose: str = ""
    subjects: Tuple[str, ...] = ()
    chapters: Tuple[str, ...] = ()
    layout: str = Layout.FULL_WEEK.value


def update_form(state: FormState, field: str, value) -> FormState:
    """Return a new state with one field changed"""
    if field not in FormState.model_fields:
        raise KeyError(field)
    if field in ("subjects", "chapters"):
        value = tuple(value or ())
    return state.model_copy(update={field: value})


def validate_time_range(start_time: str, end_time: str) -> Optional[str]:
    """Error message unless end is strictly after start on the same day"""
    try:
        start = parse_wall_clock(start_time)
        end = parse_wall_clock(end_time)
    except (ValueError, AttributeError):
        return "Please enter valid start and end times"
    if end <= start:
        return TIME_RANGE_ERROR
    return None


def to_payload(state: FormState) -> dict:
    """JSON body for the generate-timetable endpoint"""
    return {
        "classLevel": state.class_level,
        "stream": state.stream,
        "targetExam": state.target_exam,
        "startTime": state.start_time,
        "endTime": state.end_time,
        "numberOfDays": state.number_of_days,
        "purpose": state.purpose,
        "subjects": list(state.subjects),
        "chapters": list(state.chapters),
        "layout": state.layout,
    }


def validate_form(state: FormState) -> Optional[str]:
    """First client-side problem with the form, or None when it can be submitted"""
    if missing_fields(to_payload(state)):
        return ALL_FIELDS_REQUIRED
    return validate_time_range(state.start_time, state.end_time)
