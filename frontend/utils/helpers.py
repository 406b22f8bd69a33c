"""Helper functions for timetable generation from the form"""

import sys
import os

# Add parent directory to path to import backend
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '../..')))

from backend.config import settings
from backend.timetable_parser import parse_timetable
from utils.api_client import TimetableAPIError, request_timetable
from utils.form_state import to_payload, validate_form


def generate_timetable_for_form(state, base_url=None, strict=False):
    """Validate the form, call the API and parse the answer

    Args:
        state: FormState to submit
        base_url: API root; defaults to settings.api_base_url
        strict: Reject tables whose rows do not match the layout

    Returns:
        tuple: (success: bool, message: str, result: TimetableParseResult or None)
    """
    error = validate_form(state)
    if error:
        return False, error, None

    try:
        markdown = request_timetable(to_payload(state), base_url or settings.api_base_url)
    except TimetableAPIError as e:
        return False, str(e), None

    result = parse_timetable(markdown, state.layout, strict=strict)
    if not result.ok:
        return False, f"Could not read the generated timetable: {result.failure.message}", None

    message = f"✓ Timetable with {len(result.rows)} rows generated for {state.number_of_days} days"
    return True, message, result
