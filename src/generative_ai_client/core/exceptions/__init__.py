"""Export the exception hierarchy shared by the serializer and the controller."""

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
]
