"""Conversation content: turns and the parts they are made of."""

import base64
import binascii
from typing import Annotated, Any, ClassVar, Dict, List, Optional, Union

from pydantic import Discriminator, Field, Tag

from .base import WireModel
from ..core.exceptions import SerializationException
from ..core.logger import get_logger
from ..serialization.naming import field_name

logger = get_logger(__name__)

PART_KEYS = ("text", "inline_data", "function_call", "function_response", "file_data")


class Blob(WireModel):
    """Inline binary data.

    Attributes:
        mime_type: IANA media type of the data, e.g. ``image/png``.
        data: The bytes, base64 encoded.
    """

    mime_type: str
    data: str

    def raw_bytes(self) -> bytes:
        """Return the decoded bytes.

        Raises:
            SerializationException: If ``data`` is not valid base64.
        """
        try:
            return base64.b64decode(self.data, validate=True)
        except binascii.Error as e:
            msg = f"Blob data is not valid base64: {e}"
            logger.error(msg)
            raise SerializationException(msg, cause=e) from e


class FunctionCall(WireModel):
    """A call the model asks the client to perform."""

    name: str
    args: Optional[Dict[str, Any]] = None


class FunctionResponse(WireModel):
    """The result of a function call, sent back to the model."""

    name: str
    response: Dict[str, Any]


class FileData(WireModel):
    """Reference to a file previously uploaded to the service."""

    file_uri: str
    mime_type: Optional[str] = None


class TextPart(WireModel):
    part_key: ClassVar[str] = "text"

    text: str


class BlobPart(WireModel):
    part_key: ClassVar[str] = "inline_data"

    inline_data: Blob

    @classmethod
    def from_bytes(cls, mime_type: str, data: bytes) -> "BlobPart":
        """Build a part from raw bytes, base64 encoding them."""
        return cls(inline_data=Blob(mime_type=mime_type, data=base64.b64encode(data).decode("ascii")))


class FunctionCallPart(WireModel):
    part_key: ClassVar[str] = "function_call"

    function_call: FunctionCall


class FunctionResponsePart(WireModel):
    part_key: ClassVar[str] = "function_response"

    function_response: FunctionResponse


class FileDataPart(WireModel):
    part_key: ClassVar[str] = "file_data"

    file_data: FileData


def _part_variant(value: Any) -> Optional[str]:
    """Pick the Part variant from the single variant key present.

    Returns None, which fails validation, when zero or several variant keys
    are present.
    """
    if isinstance(value, dict):
        present = {field_name(key) for key in value} & set(PART_KEYS)
        if len(present) != 1:
            return None
        return present.pop()
    return getattr(value, "part_key", None)


PartType = Union[TextPart, BlobPart, FunctionCallPart, FunctionResponsePart, FileDataPart]

Part = Annotated[
    Union[
        Annotated[TextPart, Tag("text")],
        Annotated[BlobPart, Tag("inline_data")],
        Annotated[FunctionCallPart, Tag("function_call")],
        Annotated[FunctionResponsePart, Tag("function_response")],
        Annotated[FileDataPart, Tag("file_data")],
    ],
    Discriminator(
        _part_variant,
        custom_error_type="invalid_part",
        custom_error_message=f"A part must contain exactly one of {', '.join(PART_KEYS)}",
    ),
]


class Content(WireModel):
    """One turn of a conversation.

    Attributes:
        role: Author of the turn, ``user`` or ``model``. The server decides when omitted.
        parts: Ordered parts of the turn.
    """

    role: Optional[str] = None
    parts: List[Part] = Field(default_factory=list)

    @classmethod
    def build(cls, *parts: Union[str, PartType], role: Optional[str] = "user") -> "Content":
        """Build a turn, wrapping plain strings into text parts."""
        return cls(role=role, parts=[TextPart(text=p) if isinstance(p, str) else p for p in parts])

    @property
    def text(self) -> str:
        """Concatenated text of all text parts."""
        return "".join(p.text for p in self.parts if isinstance(p, TextPart))
