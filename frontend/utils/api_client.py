"""HTTP client for the timetable API"""

import logging
import requests

logger = logging.getLogger(__name__)

ENDPOINT = "/api/generate-timetable"
DEFAULT_ERROR = "Failed to generate timetable"


class TimetableAPIError(RuntimeError):
    """The server rejected the request or could not be reached"""


def request_timetable(payload: dict, base_url: str, timeout=None) -> str:
    """POST the form payload and return the raw markdown timetable

    Raises:
        TimetableAPIError: on a non-2xx response or a network failure
    """
    url = base_url.rstrip("/") + ENDPOINT
    try:
        response = requests.post(url, json=payload, timeout=timeout)
    except requests.RequestException as e:
        logger.error("Could not reach %s: %s", url, e)
        raise TimetableAPIError(DEFAULT_ERROR) from e

    try:
        data = response.json()
    except ValueError:
        data = {}
    if not isinstance(data, dict):
        data = {}

    if not response.ok:
        raise TimetableAPIError(data.get("error") or DEFAULT_ERROR)

    timetable = data.get("timetable")
    if not isinstance(timetable, str):
        raise TimetableAPIError(DEFAULT_ERROR)
    return timetable
