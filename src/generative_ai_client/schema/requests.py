"""Request bodies for the generateContent, streamGenerateContent and countTokens methods."""

from typing import List, Optional

from pydantic import model_validator

from .base import WireModel
from .config import GenerationConfig, SafetySetting, Tool, ToolConfig
from .content import Content

# API versions that still expect count-tokens fields at the top level of the body.
LEGACY_COUNT_TOKENS_VERSIONS = frozenset({"v1"})


class GenerateContentRequest(WireModel):
    """
    Body of a generate-content call.

    ``model`` is kept for callers that want to carry the model name along
    with the request; the controller never sends it, the model travels in the
    URL path.

    Attributes:
        model: Optional model identifier.
        contents: The conversation so far, oldest turn first.
        safety_settings: Per-category blocking thresholds.
        generation_config: Sampling parameters.
        tools: Functions the model may call.
        tool_config: Function-calling behaviour.
        system_instruction: Instructions applied to the whole conversation.
    """

    model: Optional[str] = None
    contents: List[Content]
    safety_settings: Optional[List[SafetySetting]] = None
    generation_config: Optional[GenerationConfig] = None
    tools: Optional[List[Tool]] = None
    tool_config: Optional[ToolConfig] = None
    system_instruction: Optional[Content] = None

    def without_model(self) -> "GenerateContentRequest":
        """Return a copy with ``model`` cleared."""
        return self.model_copy(update={"model": None})


class CountTokensRequest(WireModel):
    """
    Body of a count-tokens call.

    Newer API versions take the whole generate-content request embedded in
    ``generate_content_request``; older ones take ``contents`` and friends at
    the top level. Exactly one of the two shapes must be populated, use
    ``for_api_version`` to pick the right one.
    """

    generate_content_request: Optional[GenerateContentRequest] = None
    model: Optional[str] = None
    contents: Optional[List[Content]] = None
    tools: Optional[List[Tool]] = None
    tool_config: Optional[ToolConfig] = None
    system_instruction: Optional[Content] = None

    @model_validator(mode="after")
    def _check_single_shape(self) -> "CountTokensRequest":
        embedded = self.generate_content_request is not None
        legacy = any(
            value is not None for value in (self.contents, self.tools, self.tool_config, self.system_instruction)
        )
        if embedded and legacy:
            raise ValueError("Use either generate_content_request or the top-level contents fields, not both")
        if not embedded and self.contents is None:
            raise ValueError("Either generate_content_request or contents is required")
        return self

    @property
    def is_embedded(self) -> bool:
        return self.generate_content_request is not None

    @classmethod
    def for_api_version(cls, request: GenerateContentRequest, api_version: str) -> "CountTokensRequest":
        """Wrap a generate-content request in the shape ``api_version`` expects.

        Args:
            request: The request whose tokens should be counted.
            api_version: Target API version, e.g. ``v1beta``.

        Returns:
            A count-tokens request in embedded or legacy shape.
        """
        if api_version in LEGACY_COUNT_TOKENS_VERSIONS:
            return cls(
                model=request.model,
                contents=request.contents,
                tools=request.tools,
                tool_config=request.tool_config,
                system_instruction=request.system_instruction,
            )
        return cls(generate_content_request=request)

    def without_model(self) -> "CountTokensRequest":
        """Return a copy with the top-level and embedded ``model`` fields cleared."""
        embedded = self.generate_content_request
        if embedded is not None:
            embedded = embedded.model_copy(update={"model": None})
        return self.model_copy(update={"model": None, "generate_content_request": embedded})
