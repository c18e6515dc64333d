"""Wire naming, JSON encoding/decoding and incremental array decoding."""

from .naming import WIRE_ALIASES, wire_key, camel_key, field_name
from .serializer import encode, to_wire_dict, decode, decode_payload, validate
from .stream_decoder import JsonArrayStreamDecoder, iter_json_array

__all__ = [
    "WIRE_ALIASES",
    "wire_key",
    "camel_key",
    "field_name",
    "encode",
    "to_wire_dict",
    "decode",
    "decode_payload",
    "validate",
    "JsonArrayStreamDecoder",
    "iter_json_array",
]
