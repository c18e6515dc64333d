"""Shared base model for everything that travels over the wire."""

from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict

from ..core.logger import get_logger
from ..serialization.naming import WIRE_ALIASES

logger = get_logger(__name__)


class WireModel(BaseModel):
    """Immutable model with snake_case wire keys.

    Decoding accepts the snake_case key, its camelCase form and the Python
    field name. Unknown keys are ignored.
    """

    model_config = ConfigDict(
        frozen=True,
        populate_by_name=True,
        alias_generator=WIRE_ALIASES,
        extra="ignore",
    )


class ServerEnum(str, Enum):
    """String enum that maps values it does not know to its ``UNKNOWN`` member.

    Used for values the server reports, so that a new category or reason
    added on the server side does not break decoding.
    """

    @classmethod
    def _missing_(cls, value: Any) -> Any:
        unknown = cls.__members__.get("UNKNOWN")
        if unknown is None:
            return None
        logger.warning(f"Unrecognized {cls.__name__} value {value!r}, using UNKNOWN.")
        return unknown
