"""Generation parameters, safety settings and tool declarations sent with a request."""

from enum import Enum
from typing import Any, Dict, List, Optional

from pydantic import Field

from .base import ServerEnum, WireModel


class HarmCategory(ServerEnum):
    UNKNOWN = "UNKNOWN"
    HARM_CATEGORY_UNSPECIFIED = "HARM_CATEGORY_UNSPECIFIED"
    HARM_CATEGORY_HARASSMENT = "HARM_CATEGORY_HARASSMENT"
    HARM_CATEGORY_HATE_SPEECH = "HARM_CATEGORY_HATE_SPEECH"
    HARM_CATEGORY_SEXUALLY_EXPLICIT = "HARM_CATEGORY_SEXUALLY_EXPLICIT"
    HARM_CATEGORY_DANGEROUS_CONTENT = "HARM_CATEGORY_DANGEROUS_CONTENT"
    HARM_CATEGORY_CIVIC_INTEGRITY = "HARM_CATEGORY_CIVIC_INTEGRITY"


class HarmBlockThreshold(str, Enum):
    HARM_BLOCK_THRESHOLD_UNSPECIFIED = "HARM_BLOCK_THRESHOLD_UNSPECIFIED"
    BLOCK_LOW_AND_ABOVE = "BLOCK_LOW_AND_ABOVE"
    BLOCK_MEDIUM_AND_ABOVE = "BLOCK_MEDIUM_AND_ABOVE"
    BLOCK_ONLY_HIGH = "BLOCK_ONLY_HIGH"
    BLOCK_NONE = "BLOCK_NONE"


class SafetySetting(WireModel):
    """Blocking threshold for one harm category."""

    category: HarmCategory
    threshold: HarmBlockThreshold


class GenerationConfig(WireModel):
    """
    Sampling parameters for generation.

    Every field is optional; a field left unset is not sent and the server
    default applies.

    Attributes:
        temperature: Randomness of the output, typically between 0.0 and 2.0.
        top_k: Number of highest-probability tokens considered at each step.
        top_p: Cumulative probability cut-off for nucleus sampling.
        candidate_count: Number of candidates to generate.
        max_output_tokens: Upper bound on tokens per candidate.
        stop_sequences: Sequences that stop generation when produced.
        response_mime_type: Media type of the generated text, e.g. ``application/json``.
    """

    temperature: Optional[float] = Field(default=None, ge=0.0)
    top_k: Optional[int] = Field(default=None, gt=0)
    top_p: Optional[float] = Field(default=None, ge=0.0, le=1.0)
    candidate_count: Optional[int] = Field(default=None, gt=0)
    max_output_tokens: Optional[int] = Field(default=None, gt=0)
    stop_sequences: Optional[List[str]] = None
    response_mime_type: Optional[str] = None


class FunctionDeclaration(WireModel):
    """A function the model may ask the client to call.

    Attributes:
        name: Function name, as the model will reference it.
        description: What the function does.
        parameters: JSON schema of the arguments object. ``None`` for functions without arguments.
    """

    name: str
    description: str
    parameters: Optional[Dict[str, Any]] = None


class Tool(WireModel):
    function_declarations: List[FunctionDeclaration]


class FunctionCallingMode(str, Enum):
    AUTO = "AUTO"
    ANY = "ANY"
    NONE = "NONE"


class FunctionCallingConfig(WireModel):
    """How the model is allowed to use the declared functions.

    Attributes:
        mode: ``AUTO`` lets the model choose, ``ANY`` forces a function call,
            ``NONE`` disables function calling.
        allowed_function_names: With ``ANY``, restricts the functions the model may call.
    """

    mode: FunctionCallingMode
    allowed_function_names: Optional[List[str]] = None


class ToolConfig(WireModel):
    function_calling_config: FunctionCallingConfig
