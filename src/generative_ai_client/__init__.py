"""Generative AI Client - typed asyncio access to the Generative Language API."""

from .version import __version__
from .core import (
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
    RequestOptions,
    get_logger,
    setup_logging,
)
from .schema import (
    Content,
    TextPart,
    BlobPart,
    FunctionCallPart,
    FunctionResponsePart,
    FileDataPart,
    GenerationConfig,
    SafetySetting,
    HarmCategory,
    HarmBlockThreshold,
    Tool,
    FunctionDeclaration,
    ToolConfig,
    FunctionCallingConfig,
    FunctionCallingMode,
    GenerateContentRequest,
    CountTokensRequest,
    GenerateContentResponse,
    CountTokensResponse,
)
from .controller import APIController
from .tools import declare_function, tool_from_functions

__all__ = [
    "__version__",
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
    "RequestOptions",
    "get_logger",
    "setup_logging",
    "Content",
    "TextPart",
    "BlobPart",
    "FunctionCallPart",
    "FunctionResponsePart",
    "FileDataPart",
    "GenerationConfig",
    "SafetySetting",
    "HarmCategory",
    "HarmBlockThreshold",
    "Tool",
    "FunctionDeclaration",
    "ToolConfig",
    "FunctionCallingConfig",
    "FunctionCallingMode",
    "GenerateContentRequest",
    "CountTokensRequest",
    "GenerateContentResponse",
    "CountTokensResponse",
    "APIController",
    "declare_function",
    "tool_from_functions",
]
