"""Prompt rendering for timetable generation"""

from backend.schemas import TimetableRequest
from backend.timetable_parser import get_layout


def _format_hours(minutes: int) -> str:
    hours = minutes / 60
    return f"{hours:g}"


def _table_row(cells) -> str:
    return "| " + " | ".join(cells) + " |"


def _example_table(request: TimetableRequest) -> str:
    """Header, separator and one empty row with the study window filled in"""
    layout = get_layout(request.layout)
    window = f"{request.start_time}-{request.end_time}"
    separator = ["-" * max(len(label), 3) for label in layout.labels]
    first_row = ["" for _ in layout.labels]
    first_row[layout.keys.index("time_slot")] = window
    return "\n".join([_table_row(layout.labels), _table_row(separator), _table_row(first_row)])


def _format_profile(request: TimetableRequest) -> str:
    lines = [
        f"- **Class Level**: {request.class_level}",
        f"- **Stream**: {request.stream or 'Not applicable'}",
        f"- **Target Exam**: {request.target_exam}",
        f"- **Daily Schedule**: From {request.start_time} to {request.end_time} "
        f"({_format_hours(request.daily_minutes)} hours per day)",
        f"- **Purpose**: {request.purpose}",
    ]
    if request.subjects:
        lines.append(f"- **Subjects**: {', '.join(request.subjects)}")
    if request.chapters:
        lines.append("- **Chapters to Cover**:")
        lines.extend(f"  - {chapter}" for chapter in request.chapters)
    return "\n".join(lines)


def build_prompt(request: TimetableRequest) -> str:
    """Render the full instruction block for one request.

    Field values are embedded verbatim; the same request always renders the
    same text.
    """
    layout = get_layout(request.layout)
    subject_scope = (
        "the listed subjects" if request.subjects else "NCERT subjects for the given class and stream"
    )

    prompt = f"""You are an expert in education planning for Indian students based on the NCERT syllabus. Create a detailed study timetable for a student with the following details:
{_format_profile(request)}

### Instructions:
1. Allocate study hours equally across {subject_scope}.
2. Incorporate logical sequencing of chapters/topics from NCERT, starting with fundamentals and progressively moving to advanced concepts.
3. Divide daily hours among subjects, ensuring:
   - Balanced distribution for core subjects (e.g., Math, Physics, Chemistry).
   - Logical time intervals for each chapter/topic.
   - Include short breaks for better productivity.
4. Include a "Review/Practice" day every Friday.
5. Use these columns in the timetable:
   {_table_row(layout.labels)}
6. For each day, provide:
   - Subject
   - Chapter/Topic
7. Base your plan on NCERT guidelines and the target exam's requirements."""

    if request.chapters:
        prompt += "\n8. Make sure every chapter listed under Chapters to Cover appears in the timetable."

    prompt += f"""

Example format:
{_example_table(request)}

Based on the student's stream and target exam, create an appropriate curriculum that covers all necessary topics for {request.number_of_days} days.
Ensure topics are sequenced properly with fundamentals first, then advanced concepts."""

    return prompt
