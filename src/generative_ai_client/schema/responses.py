"""Typed responses returned by the service."""

from typing import Any, Dict, List, Optional

from pydantic import Field

from .base import ServerEnum, WireModel
from .config import HarmCategory
from .content import Content, FunctionCall, FunctionCallPart


class FinishReason(ServerEnum):
    UNKNOWN = "UNKNOWN"
    FINISH_REASON_UNSPECIFIED = "FINISH_REASON_UNSPECIFIED"
    STOP = "STOP"
    MAX_TOKENS = "MAX_TOKENS"
    SAFETY = "SAFETY"
    RECITATION = "RECITATION"
    LANGUAGE = "LANGUAGE"
    BLOCKLIST = "BLOCKLIST"
    PROHIBITED_CONTENT = "PROHIBITED_CONTENT"
    SPII = "SPII"
    MALFORMED_FUNCTION_CALL = "MALFORMED_FUNCTION_CALL"
    OTHER = "OTHER"


class BlockReason(ServerEnum):
    UNKNOWN = "UNKNOWN"
    BLOCK_REASON_UNSPECIFIED = "BLOCK_REASON_UNSPECIFIED"
    SAFETY = "SAFETY"
    BLOCKLIST = "BLOCKLIST"
    PROHIBITED_CONTENT = "PROHIBITED_CONTENT"
    OTHER = "OTHER"


class HarmProbability(ServerEnum):
    UNKNOWN = "UNKNOWN"
    HARM_PROBABILITY_UNSPECIFIED = "HARM_PROBABILITY_UNSPECIFIED"
    NEGLIGIBLE = "NEGLIGIBLE"
    LOW = "LOW"
    MEDIUM = "MEDIUM"
    HIGH = "HIGH"


class SafetyRating(WireModel):
    category: HarmCategory
    probability: HarmProbability
    blocked: Optional[bool] = None


class CitationSource(WireModel):
    start_index: Optional[int] = None
    end_index: Optional[int] = None
    uri: Optional[str] = None
    license: Optional[str] = None


class CitationMetadata(WireModel):
    citation_sources: List[CitationSource] = Field(default_factory=list)


class Candidate(WireModel):
    """One generated completion.

    ``content`` is absent when the candidate was stopped before producing
    anything, e.g. with ``finish_reason == SAFETY``.
    """

    content: Optional[Content] = None
    finish_reason: Optional[FinishReason] = None
    safety_ratings: Optional[List[SafetyRating]] = None
    citation_metadata: Optional[CitationMetadata] = None
    index: Optional[int] = None


class PromptFeedback(WireModel):
    """Safety verdict on the prompt. ``block_reason`` is set when the prompt was blocked."""

    block_reason: Optional[BlockReason] = None
    safety_ratings: Optional[List[SafetyRating]] = None


class UsageMetadata(WireModel):
    prompt_token_count: Optional[int] = None
    candidates_token_count: Optional[int] = None
    total_token_count: Optional[int] = None


class GenerateContentResponse(WireModel):
    """
    Result of a generate-content call, or one element of a streamed result.

    A blocked prompt is a regular response: ``candidates`` is empty and
    ``prompt_feedback.block_reason`` says why.
    """

    candidates: Optional[List[Candidate]] = None
    prompt_feedback: Optional[PromptFeedback] = None
    usage_metadata: Optional[UsageMetadata] = None

    @property
    def text(self) -> Optional[str]:
        """Text of the first candidate, or None if there is no candidate content."""
        if not self.candidates or self.candidates[0].content is None:
            return None
        return self.candidates[0].content.text

    @property
    def function_calls(self) -> List[FunctionCall]:
        """Function calls requested by the first candidate."""
        if not self.candidates or self.candidates[0].content is None:
            return []
        return [p.function_call for p in self.candidates[0].content.parts if isinstance(p, FunctionCallPart)]

    @property
    def is_blocked(self) -> bool:
        """Whether the prompt was blocked by safety filters."""
        return self.prompt_feedback is not None and self.prompt_feedback.block_reason is not None


class ModalityTokenCount(WireModel):
    modality: str
    token_count: int = 0


class CountTokensResponse(WireModel):
    total_tokens: int
    prompt_tokens_details: Optional[List[ModalityTokenCount]] = None


class ErrorDetails(WireModel):
    """The ``error`` object of a failed call.

    Attributes:
        code: HTTP status code as reported by the server.
        message: Human readable description.
        status: Canonical status name, e.g. ``INVALID_ARGUMENT``.
        details: Typed detail entries, kept as plain dicts.
    """

    code: Optional[int] = None
    message: str = ""
    status: Optional[str] = None
    details: Optional[List[Dict[str, Any]]] = None


class ErrorResponse(WireModel):
    error: ErrorDetails
