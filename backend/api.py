import json
import logging
from fastapi import Depends, FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pydantic import ValidationError
from starlette.concurrency import run_in_threadpool

from backend.config import settings
from backend.logger import setup_logging
from backend.scheduler import get_scheduler
from backend.schemas import (
    ALL_FIELDS_REQUIRED,
    ErrorResponse,
    TimetableRequest,
    TimetableResponse,
    describe_validation_error,
    missing_fields,
)

logger = logging.getLogger(__name__)

GENERATION_FAILED = "Failed to generate timetable"

setup_logging(settings.log_level)

app = FastAPI(
    title="Study Timetable Generator",
    description="NCERT-based study timetables generated by a language model",
    version="1.0"
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


def get_scheduler_factory():
    """Dependency returning the scheduler factory; tests override it"""
    return get_scheduler


def _error(message: str, status_code: int) -> JSONResponse:
    return JSONResponse(status_code=status_code, content=ErrorResponse(error=message).model_dump())


@app.get("/")
def home():
    return {"message": "Welcome to the Study Timetable Generator! POST to /api/generate-timetable"}


@app.get("/health")
def health():
    return {"status": "ok", "provider": settings.ai_provider, "model": settings.active_model}


@app.post(
    "/api/generate-timetable",
    response_model=TimetableResponse,
    responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
)
async def generate_timetable(request: Request, scheduler_factory=Depends(get_scheduler_factory)):
    try:
        payload = await request.json()
    except (json.JSONDecodeError, UnicodeDecodeError):
        return _error("Request body must be JSON", 400)

    if not isinstance(payload, dict):
        return _error("Request body must be a JSON object", 400)

    missing = missing_fields(payload)
    if missing:
        logger.info("Rejected request, missing fields: %s", ", ".join(missing))
        return _error(ALL_FIELDS_REQUIRED, 400)

    try:
        timetable_request = TimetableRequest.model_validate(payload)
    except ValidationError as e:
        message = describe_validation_error(e)
        logger.info("Rejected request: %s", message)
        return _error(message, 400)

    try:
        scheduler = scheduler_factory()
        timetable = await run_in_threadpool(scheduler.generate_timetable, timetable_request)
    except Exception:
        logger.exception("Error generating timetable")
        return _error(GENERATION_FAILED, 500)

    return TimetableResponse(timetable=timetable)
