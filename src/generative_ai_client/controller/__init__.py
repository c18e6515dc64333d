"""HTTP controller and error classification."""

from .api_controller import APIController, full_model_name
from .errors import exception_from_response, exception_from_details, parse_error_details

__all__ = [
    "APIController",
    "full_model_name",
    "exception_from_response",
    "exception_from_details",
    "parse_error_details",
]
