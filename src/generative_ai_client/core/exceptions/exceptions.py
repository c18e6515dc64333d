"""
Exception hierarchy raised by the generative AI client.

Every failure detected while building, sending or decoding a request is
converted into one of these types before it reaches the caller. A response
whose prompt was blocked by safety filters is *not* an error; callers inspect
``GenerateContentResponse.prompt_feedback`` for that.
"""

from typing import Any, List, Optional


class GenerativeAIException(Exception):
    """Base exception for all client errors."""

    def __init__(self, message: str, cause: Optional[BaseException] = None):
        super().__init__(message)
        self.message = message
        self.cause = cause


class SerializationException(GenerativeAIException):
    """Raised when JSON cannot be encoded or does not match the expected shape.

    Also covers a streamed array that ended before its closing bracket.
    """

    pass


class ClientException(GenerativeAIException):
    """Raised when the service could not be reached or the client was misused."""

    pass


class InvalidFunctionDeclarationException(ClientException):
    """Raised when a Python callable cannot be turned into a function declaration."""

    pass


class RequestTimeoutException(GenerativeAIException):
    """Raised when a call does not complete before its deadline."""

    pass


class InvalidStateException(GenerativeAIException):
    """Raised when a successful response violates the protocol, e.g. carries no candidates."""

    pass


class ServerException(GenerativeAIException):
    """Raised for a non-2xx response.

    Attributes:
        status_code: HTTP status code of the response, if one was received.
    """

    def __init__(self, message: str, status_code: Optional[int] = None, cause: Optional[BaseException] = None):
        super().__init__(message, cause)
        self.status_code = status_code


class ServerStatusException(ServerException):
    """Raised when the server returned a structured error body.

    Attributes:
        status: Canonical status name reported by the server, e.g. ``INVALID_ARGUMENT``.
        details: Raw ``details`` entries of the error body.
    """

    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        status: Optional[str] = None,
        details: Optional[List[Any]] = None,
    ):
        super().__init__(message, status_code)
        self.status = status
        self.details = details or []


class InvalidAPIKeyException(ServerStatusException):
    """Raised when the server rejects the API key."""

    pass


class QuotaExceededException(ServerStatusException):
    """Raised when the request exceeds the project's quota or rate limit."""

    pass


class UnsupportedUserLocationException(ServerStatusException):
    """Raised when the API is not available in the caller's region."""

    pass
