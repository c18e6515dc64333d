"""Public exports for logging, configuration and the exception hierarchy."""

from .exceptions import (
    GenerativeAIException,
    SerializationException,
    ClientException,
    InvalidFunctionDeclarationException,
    RequestTimeoutException,
    InvalidStateException,
    ServerException,
    ServerStatusException,
    InvalidAPIKeyException,
    QuotaExceededException,
    UnsupportedUserLocationException,
)
from .logger import get_logger, setup_logging
from .options import RequestOptions, DEFAULT_ENDPOINT, DEFAULT_API_VERSION, DEFAULT_TIMEOUT

__all__ = [
    "GenerativeAIException",
    "SerializationException",
    "ClientException",
    "InvalidFunctionDeclarationException",
    "RequestTimeoutException",
    "InvalidStateException",
    "ServerException",
    "ServerStatusException",
    "InvalidAPIKeyException",
    "QuotaExceededException",
    "UnsupportedUserLocationException",
    "get_logger",
    "setup_logging",
    "RequestOptions",
    "DEFAULT_ENDPOINT",
    "DEFAULT_API_VERSION",
    "DEFAULT_TIMEOUT",
]
