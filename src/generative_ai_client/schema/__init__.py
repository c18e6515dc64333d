"""Request and response data model."""

from .base import WireModel, ServerEnum
from .content import (
    Blob,
    FunctionCall,
    FunctionResponse,
    FileData,
    TextPart,
    BlobPart,
    FunctionCallPart,
    FunctionResponsePart,
    FileDataPart,
    Part,
    PartType,
    Content,
)
from .config import (
    HarmCategory,
    HarmBlockThreshold,
    SafetySetting,
    GenerationConfig,
    FunctionDeclaration,
    Tool,
    FunctionCallingMode,
    FunctionCallingConfig,
    ToolConfig,
)
from .requests import GenerateContentRequest, CountTokensRequest
from .responses import (
    FinishReason,
    BlockReason,
    HarmProbability,
    SafetyRating,
    CitationSource,
    CitationMetadata,
    Candidate,
    PromptFeedback,
    UsageMetadata,
    GenerateContentResponse,
    ModalityTokenCount,
    CountTokensResponse,
    ErrorDetails,
    ErrorResponse,
)

__all__ = [
    "WireModel",
    "ServerEnum",
    "Blob",
    "FunctionCall",
    "FunctionResponse",
    "FileData",
    "TextPart",
    "BlobPart",
    "FunctionCallPart",
    "FunctionResponsePart",
    "FileDataPart",
    "Part",
    "PartType",
    "Content",
    "HarmCategory",
    "HarmBlockThreshold",
    "SafetySetting",
    "GenerationConfig",
    "FunctionDeclaration",
    "Tool",
    "FunctionCallingMode",
    "FunctionCallingConfig",
    "ToolConfig",
    "GenerateContentRequest",
    "CountTokensRequest",
    "FinishReason",
    "BlockReason",
    "HarmProbability",
    "SafetyRating",
    "CitationSource",
    "CitationMetadata",
    "Candidate",
    "PromptFeedback",
    "UsageMetadata",
    "GenerateContentResponse",
    "ModalityTokenCount",
    "CountTokensResponse",
    "ErrorDetails",
    "ErrorResponse",
]
