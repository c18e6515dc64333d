"""Classification of error responses into the typed exception hierarchy."""

import json
from typing import Any, Optional, Type

from pydantic import ValidationError

from ..core.exceptions import (
    InvalidAPIKeyException,
    QuotaExceededException,
    ServerException,
    ServerStatusException,
    UnsupportedUserLocationException,
)
from ..core.logger import get_logger
from ..schema.responses import ErrorDetails, ErrorResponse

logger = get_logger(__name__)

_UNSUPPORTED_LOCATION_MESSAGE = "User location is not supported"


def _unwrap(payload: Any) -> Any:
    # Error bodies of the streaming endpoint are wrapped in an array.
    if isinstance(payload, list) and len(payload) == 1:
        return payload[0]
    return payload


def parse_error_details(payload: Any) -> Optional[ErrorDetails]:
    """Return the ``error`` object of a parsed body, or None if the body carries no error."""
    payload = _unwrap(payload)
    if not isinstance(payload, dict) or "error" not in payload:
        return None
    try:
        return ErrorResponse.model_validate(payload).error
    except ValidationError:
        return None


def exception_from_details(details: ErrorDetails, status_code: Optional[int] = None) -> ServerStatusException:
    """Pick the most specific exception for a structured server error."""
    code = status_code if status_code is not None else details.code
    reasons = {entry.get("reason") for entry in details.details or [] if isinstance(entry, dict)}
    message = f"{details.status or code}: {details.message}"

    exc_type: Type[ServerStatusException] = ServerStatusException
    if "API_KEY_INVALID" in reasons or "API key not valid" in details.message or details.status == "UNAUTHENTICATED":
        exc_type = InvalidAPIKeyException
    elif details.status == "RESOURCE_EXHAUSTED" or code == 429:
        exc_type = QuotaExceededException
    elif _UNSUPPORTED_LOCATION_MESSAGE in details.message:
        exc_type = UnsupportedUserLocationException

    return exc_type(message, status_code=code, status=details.status, details=details.details)


def exception_from_response(status_code: int, body: str) -> ServerException:
    """
    Build the exception for a non-2xx response.

    A body in the service's error format yields a ``ServerStatusException``
    subclass; anything else yields a plain ``ServerException``, except for
    authentication failures which always map to ``InvalidAPIKeyException``.

    Args:
        status_code: HTTP status code.
        body: Response body as text.

    Returns:
        The exception to raise.
    """
    try:
        details = parse_error_details(json.loads(body))
    except ValueError:
        details = None

    if details is not None:
        exc: ServerException = exception_from_details(details, status_code)
    elif status_code in (401, 403):
        exc = InvalidAPIKeyException(f"Authentication rejected ({status_code}): {body[:500]}", status_code=status_code)
    else:
        exc = ServerException(f"Unexpected response ({status_code}): {body[:500]}", status_code=status_code)

    logger.error(f"Request failed with HTTP {status_code}: {exc.message}")
    return exc
