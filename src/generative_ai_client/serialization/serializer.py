"""Encode schema models to wire JSON and decode wire JSON back into typed models."""

import json
from typing import Any, Dict, Type, TypeVar, Union

from pydantic import BaseModel, ValidationError

from ..core.exceptions import SerializationException
from ..core.logger import get_logger

logger = get_logger(__name__)

ModelT = TypeVar("ModelT", bound=BaseModel)


def encode(model: BaseModel) -> str:
    """Serialize a schema model to JSON text.

    Keys use their snake_case wire names and unset optional fields are left
    out entirely instead of being written as ``null``.

    Args:
        model: The model to serialize.

    Returns:
        The JSON document as text.

    Raises:
        SerializationException: If a value cannot be represented as JSON.
    """
    try:
        return model.model_dump_json(by_alias=True, exclude_none=True)
    except (ValueError, TypeError) as e:
        msg = f"Could not encode {type(model).__name__}: {e}"
        logger.error(msg)
        raise SerializationException(msg, cause=e) from e


def to_wire_dict(model: BaseModel) -> Dict[str, Any]:
    """Same as ``encode`` but returns the JSON-compatible dict."""
    try:
        return model.model_dump(mode="json", by_alias=True, exclude_none=True)
    except (ValueError, TypeError) as e:
        msg = f"Could not encode {type(model).__name__}: {e}"
        logger.error(msg)
        raise SerializationException(msg, cause=e) from e


def decode_payload(text: Union[str, bytes]) -> Any:
    """Parse raw JSON text without binding it to a model.

    Raises:
        SerializationException: If the text is not valid JSON.
    """
    try:
        return json.loads(text)
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        msg = f"Malformed JSON: {e}"
        logger.error(msg)
        raise SerializationException(msg, cause=e) from e


def validate(payload: Any, model_type: Type[ModelT]) -> ModelT:
    """Bind an already parsed JSON value to ``model_type``.

    Unknown keys are ignored. Missing required fields, mismatched types and
    content parts with zero or several variant keys are rejected.

    Raises:
        SerializationException: If the payload does not match the model.
    """
    try:
        return model_type.model_validate(payload)
    except ValidationError as e:
        msg = f"Unexpected shape for {model_type.__name__}: {e}"
        logger.error(msg)
        raise SerializationException(msg, cause=e) from e


def decode(text: Union[str, bytes], model_type: Type[ModelT]) -> ModelT:
    """Parse JSON text into ``model_type``.

    Args:
        text: The JSON document.
        model_type: The schema model to produce.

    Returns:
        The decoded model.

    Raises:
        SerializationException: If the text is malformed or does not match the model.
    """
    return validate(decode_payload(text), model_type)
