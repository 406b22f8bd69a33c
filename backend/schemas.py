from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator, model_validator
from typing import Any, Dict, List, Optional
from datetime import datetime, time
from enum import Enum


class ClassLevel(str, Enum):
    CLASS_10 = "10"
    CLASS_11 = "11"
    CLASS_12 = "12"
    REPEATER = "Repeater"


class Stream(str, Enum):
    SCIENCE = "Science"
    COMMERCE = "Commerce"


class TargetExam(str, Enum):
    JEE = "JEE"
    NEET = "NEET"
    OTHERS = "Others"


class Purpose(str, Enum):
    REVISIONS = "Revisions"
    SYLLABUS_COMPLETION = "Syllabus completion"
    CLEARING_BACKLOGS = "Clearing Backlogs"
    COMPETITIVE_EXAMS = "Competative-exams"


class Layout(str, Enum):
    """Column layout of the generated markdown table"""
    WEEKDAY = "weekday"
    FULL_WEEK = "full_week"


# Fields that must be present and non-empty in every request, by JSON name
REQUIRED_FIELDS = ["classLevel", "targetExam", "startTime", "endTime", "numberOfDays", "purpose"]

# Class 10 has no stream split
STREAMLESS_CLASS_LEVELS = {ClassLevel.CLASS_10.value}

ALL_FIELDS_REQUIRED = "All fields are required"
TIME_RANGE_ERROR = "End time must be after start time"
TIME_FORMAT = "%H:%M"


def parse_wall_clock(value: str) -> time:
    """Parse an HH:MM string as a time of day"""
    return datetime.strptime(value.strip(), TIME_FORMAT).time()


def missing_fields(payload: Dict[str, Any]) -> List[str]:
    """Return JSON names of required fields that are absent or empty.

    Zero counts as empty, matching a falsy check on the submitted value.
    """
    missing = [name for name in REQUIRED_FIELDS if not payload.get(name)]
    if str(payload.get("classLevel") or "") not in STREAMLESS_CLASS_LEVELS and not payload.get("stream"):
        missing.append("stream")
    return missing


def describe_validation_error(exc: ValidationError) -> str:
    """Condense a pydantic ValidationError into one readable message"""
    messages = []
    for error in exc.errors():
        message = error["msg"]
        if message.startswith("Value error, "):
            message = message[len("Value error, "):]
        location = ".".join(str(part) for part in error.get("loc", ()))
        messages.append(f"{location}: {message}" if location else message)
    return "; ".join(messages)


class TimetableRequest(BaseModel):
    """Schema for a timetable generation request"""
    model_config = ConfigDict(populate_by_name=True, use_enum_values=True)

    class_level: ClassLevel = Field(alias="classLevel")
    stream: Optional[Stream] = None
    target_exam: TargetExam = Field(alias="targetExam")
    start_time: str = Field(alias="startTime")
    end_time: str = Field(alias="endTime")
    number_of_days: int = Field(alias="numberOfDays", ge=1, le=365)
    purpose: Purpose
    subjects: List[str] = Field(default_factory=list)
    chapters: List[str] = Field(default_factory=list)
    layout: Layout = Layout.FULL_WEEK

    @field_validator("stream", mode="before")
    @classmethod
    def empty_stream_is_none(cls, value):
        return value or None

    @field_validator("subjects", "chapters", mode="before")
    @classmethod
    def null_list_is_empty(cls, value):
        return [] if value is None else value

    @field_validator("start_time", "end_time")
    @classmethod
    def check_time_format(cls, value: str) -> str:
        try:
            parse_wall_clock(value)
        except ValueError:
            raise ValueError(f"'{value}' is not a valid HH:MM time")
        return value.strip()

    @field_validator("subjects")
    @classmethod
    def dedupe_subjects(cls, value: List[str]) -> List[str]:
        seen = []
        for subject in value:
            subject = subject.strip()
            if subject and subject not in seen:
                seen.append(subject)
        return seen

    @field_validator("chapters")
    @classmethod
    def drop_blank_chapters(cls, value: List[str]) -> List[str]:
        return [chapter.strip() for chapter in value if chapter.strip()]

    @model_validator(mode="after")
    def check_window_and_stream(self):
        if parse_wall_clock(self.end_time) <= parse_wall_clock(self.start_time):
            raise ValueError(TIME_RANGE_ERROR)
        if self.stream is None and self.class_level not in STREAMLESS_CLASS_LEVELS:
            raise ValueError(ALL_FIELDS_REQUIRED)
        return self

    @property
    def daily_minutes(self) -> int:
        start = parse_wall_clock(self.start_time)
        end = parse_wall_clock(self.end_time)
        return (end.hour * 60 + end.minute) - (start.hour * 60 + start.minute)


class TimetableResponse(BaseModel):
    """Successful generation: the raw model text"""
    timetable: str


class ErrorResponse(BaseModel):
    """Error body returned with 4xx/5xx responses"""
    error: str
