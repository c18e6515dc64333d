"""
Bidirectional mapping between Python field names and JSON wire keys.

Requests are written with snake_case keys (``generation_config``,
``tool_config``...). The server answers with camelCase keys
(``usageMetadata``, ``finishReason``...), so decoding accepts both spellings.
Every schema field registers itself here through ``WIRE_ALIASES`` when its
model class is built, which keeps the lookup table complete.
"""

from typing import Dict

from pydantic import AliasChoices, AliasGenerator
from pydantic.alias_generators import to_camel, to_snake

_FIELD_TO_WIRE: Dict[str, str] = {}
_FIELD_TO_CAMEL: Dict[str, str] = {}
_KEY_TO_FIELD: Dict[str, str] = {}


def register(field: str) -> None:
    """Record both wire spellings of ``field`` in the lookup tables."""
    if field in _FIELD_TO_WIRE:
        return
    snake = to_snake(field)
    camel = to_camel(snake)
    _FIELD_TO_WIRE[field] = snake
    _FIELD_TO_CAMEL[field] = camel
    _KEY_TO_FIELD[snake] = field
    _KEY_TO_FIELD[camel] = field


def wire_key(field: str) -> str:
    """Return the snake_case key written on the wire for ``field``."""
    register(field)
    return _FIELD_TO_WIRE[field]


def camel_key(field: str) -> str:
    """Return the camelCase key the server uses for ``field``."""
    register(field)
    return _FIELD_TO_CAMEL[field]


def field_name(key: str) -> str:
    """Return the Python field name for a wire key in either spelling."""
    try:
        return _KEY_TO_FIELD[key]
    except KeyError:
        return to_snake(key)


def _validation_alias(field: str) -> AliasChoices:
    return AliasChoices(wire_key(field), camel_key(field))


WIRE_ALIASES = AliasGenerator(validation_alias=_validation_alias, serialization_alias=wire_key)
