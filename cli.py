import typer
from rich.console import Console
from rich.table import Table
from rich.markup import escape
from pydantic import ValidationError
from typing import Optional, List
from pathlib import Path
import logging

from backend.config import settings
from backend.logger import setup_logging
from backend.prompt import build_prompt
from backend.scheduler import get_scheduler, TimetableGenerationError
from backend.schemas import (
    Layout, TimetableRequest, describe_validation_error, missing_fields, ALL_FIELDS_REQUIRED
)
from backend.timetable_parser import parse_timetable, get_layout, cell_class

logger = logging.getLogger(__name__)

app = typer.Typer(help="Study Timetable CLI - NCERT study timetables from a language model")
console = Console()

CELL_STYLES = {
    "default": "",
    "highlighted": "black on yellow",
    "quiz": "black on grey70",
    "doubts": "grey50",
}


@app.callback()
def main(verbose: bool = typer.Option(False, "--verbose", "-v", help="Log debug output")):
    setup_logging("DEBUG" if verbose else settings.log_level)


def _build_request(
    class_level: str,
    stream: Optional[str],
    target_exam: str,
    start_time: str,
    end_time: str,
    days: int,
    purpose: str,
    subjects: Optional[str],
    chapters: Optional[List[str]],
    layout: Layout
) -> TimetableRequest:
    payload = {
        "classLevel": class_level,
        "stream": stream,
        "targetExam": target_exam,
        "startTime": start_time,
        "endTime": end_time,
        "numberOfDays": days,
        "purpose": purpose,
        "subjects": [s.strip() for s in subjects.split(",")] if subjects else [],
        "chapters": chapters or [],
        "layout": layout.value,
    }
    if missing_fields(payload):
        console.print(f"[red]✗[/red] {ALL_FIELDS_REQUIRED}")
        raise typer.Exit(code=1)
    try:
        return TimetableRequest.model_validate(payload)
    except ValidationError as e:
        console.print(f"[red]✗[/red] {describe_validation_error(e)}")
        raise typer.Exit(code=1)


def _print_table(result):
    layout = get_layout(result.layout)

    table = Table(show_header=True, header_style="bold magenta", show_lines=True)
    for column in layout.columns:
        if column.key in ("days", "time_slot"):
            table.add_column(column.label, style="cyan", no_wrap=True)
        else:
            table.add_column(column.label)

    for row in result.rows:
        cells = []
        for key, value in zip(layout.keys, row.values(layout)):
            style = CELL_STYLES[cell_class(value)] if key not in ("days", "time_slot") else ""
            text = escape(value or "")
            cells.append(f"[{style}]{text}[/]" if style and text else text)
        table.add_row(*cells)

    console.print(table)

    for mismatch in result.mismatches:
        console.print(f"[yellow]⚠[/yellow] {mismatch.message}")


# Shared options
CLASS_LEVEL = typer.Option(..., "--class-level", prompt="Class level (10, 11, 12, Repeater)")
STREAM = typer.Option(None, "--stream", help="Science or Commerce (not needed for class 10)")
TARGET_EXAM = typer.Option(..., "--target-exam", prompt="Target exam (JEE, NEET, Others)")
START_TIME = typer.Option("09:00", "--start-time", help="Study start time (HH:MM)")
END_TIME = typer.Option("17:00", "--end-time", help="Study end time (HH:MM)")
DAYS = typer.Option(30, "--days", min=1, max=365, help="Number of days to plan")
PURPOSE = typer.Option(..., "--purpose", prompt="Purpose (Revisions, Syllabus completion, Clearing Backlogs, Competative-exams)")
SUBJECTS = typer.Option(None, "--subjects", help="Subjects (comma-separated, e.g., Physics,Chemistry)")
CHAPTERS = typer.Option(None, "--chapter", help="Chapter to cover; repeat for more")
LAYOUT = typer.Option(Layout.FULL_WEEK, "--layout", help="Table column layout")


@app.command()
def serve(
    host: str = typer.Option("127.0.0.1", help="Bind address"),
    port: int = typer.Option(8000, help="Port"),
    reload: bool = typer.Option(False, help="Reload on code changes")
):
    """Run the timetable API server"""
    import uvicorn

    console.print(f"[green]✓[/green] Serving on http://{host}:{port} using {settings.ai_provider} ({settings.active_model})")
    uvicorn.run("backend.api:app", host=host, port=port, reload=reload, log_level=settings.log_level.lower())


@app.command()
def prompt(
    class_level: str = CLASS_LEVEL,
    stream: Optional[str] = STREAM,
    target_exam: str = TARGET_EXAM,
    start_time: str = START_TIME,
    end_time: str = END_TIME,
    days: int = DAYS,
    purpose: str = PURPOSE,
    subjects: Optional[str] = SUBJECTS,
    chapters: Optional[List[str]] = CHAPTERS,
    layout: Layout = LAYOUT
):
    """Print the prompt that would be sent to the model"""
    request = _build_request(class_level, stream, target_exam, start_time, end_time, days, purpose,
                             subjects, chapters, layout)
    console.print(build_prompt(request), markup=False, highlight=False)


@app.command()
def generate(
    class_level: str = CLASS_LEVEL,
    stream: Optional[str] = STREAM,
    target_exam: str = TARGET_EXAM,
    start_time: str = START_TIME,
    end_time: str = END_TIME,
    days: int = DAYS,
    purpose: str = PURPOSE,
    subjects: Optional[str] = SUBJECTS,
    chapters: Optional[List[str]] = CHAPTERS,
    layout: Layout = LAYOUT,
    raw: bool = typer.Option(False, "--raw", help="Print the model's markdown instead of a table"),
    strict: bool = typer.Option(False, "--strict", help="Fail when a row does not match the layout")
):
    """Generate a study timetable with the configured AI provider"""
    request = _build_request(class_level, stream, target_exam, start_time, end_time, days, purpose,
                             subjects, chapters, layout)

    console.print(f"\n[bold]Generating {days}-day timetable with {settings.active_model}...[/bold]")
    try:
        scheduler = get_scheduler()
        markdown = scheduler.generate_timetable(request)
    except (ValueError, TimetableGenerationError) as e:
        logger.debug("Generation failed", exc_info=True)
        console.print(f"[red]✗[/red] Failed to generate timetable: {e}")
        raise typer.Exit(code=1)

    if raw:
        console.print(markdown, markup=False, highlight=False)
        return

    result = parse_timetable(markdown, layout, strict=strict)
    if not result.ok:
        console.print(f"[red]✗[/red] {result.failure.message}")
        console.print(markdown, markup=False, highlight=False)
        raise typer.Exit(code=1)

    console.print(f"[green]✓[/green] {len(result.rows)} rows generated")
    _print_table(result)


@app.command()
def parse(
    file_path: Path = typer.Argument(..., exists=True, dir_okay=False, help="Markdown file with the table"),
    layout: Layout = LAYOUT,
    strict: bool = typer.Option(False, "--strict", help="Fail when a row does not match the layout")
):
    """Parse a saved markdown timetable and print it"""
    result = parse_timetable(file_path.read_text(encoding="utf-8"), layout, strict=strict)
    if not result.ok:
        console.print(f"[red]✗[/red] {result.failure.message}")
        raise typer.Exit(code=1)

    _print_table(result)


if __name__ == "__main__":
    app()
