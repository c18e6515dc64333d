"""
Reduce pydantic-generated JSON schemas to the subset accepted in function declarations.

The API understands an OpenAPI-style subset of JSON schema: no ``$ref``,
no ``additionalProperties``, no ``allOf`` wrappers, no ``anyOf`` for optional values (``nullable``
is used instead) and no metadata keys such as ``title``.
"""

from functools import singledispatch
from typing import Any, Dict, Set, cast

from ..core.exceptions import InvalidFunctionDeclarationException
from ..core.logger import get_logger

logger = get_logger(__name__)

_DROPPED_KEYS = frozenset({"$defs", "definitions", "$schema", "$id", "title", "additionalProperties"})


def assert_no_recursive_refs(schema: Dict[str, Any]) -> None:
    """Reject schemas whose ``$ref`` graph contains a cycle.

    Such schemas cannot be inlined, and the API has no way to express them.

    Raises:
        InvalidFunctionDeclarationException: If a recursive reference is found.
    """
    defs = schema.get("$defs") or schema.get("definitions") or {}

    def visit(node: Any, trail: Set[str]) -> None:
        if isinstance(node, dict):
            ref = node.get("$ref")
            if isinstance(ref, str):
                if ref in trail:
                    msg = f"Recursive structure detected: {ref}. Function arguments must not be recursive."
                    logger.error(msg)
                    raise InvalidFunctionDeclarationException(msg)
                target = defs.get(ref.rsplit("/", 1)[-1]) if ref.startswith("#/") else None
                if target is not None:
                    visit(target, trail | {ref})
                return
            for value in node.values():
                visit(value, trail)
        elif isinstance(node, list):
            for item in node:
                visit(item, trail)

    visit(schema, set())


def sanitize(schema: Dict[str, Any]) -> Dict[str, Any]:
    """Return a sanitized copy of an already ref-free schema."""
    return cast(Dict[str, Any], _sanitize(schema))


@singledispatch
def _sanitize(node: Any) -> Any:
    return node


@_sanitize.register(list)
def _(node: list) -> list:
    return [_sanitize(item) for item in node]


@_sanitize.register(dict)
def _(node: dict) -> dict:
    node = _collapse_optional(_collapse_single_all_of(node))
    result: Dict[str, Any] = {}
    for key, value in node.items():
        if key in _DROPPED_KEYS:
            continue
        if key == "properties" and isinstance(value, dict):
            # keys here are argument names, not schema keywords
            result[key] = {name: _sanitize(prop) for name, prop in value.items()}
        else:
            result[key] = _sanitize(value)
    return _prune_required(result)


def _collapse_single_all_of(node: Dict[str, Any]) -> Dict[str, Any]:
    """Merge ``allOf: [X]``, which pydantic emits around described references, into the node."""
    all_of = node.get("allOf")
    if not isinstance(all_of, list) or len(all_of) != 1 or not isinstance(all_of[0], dict):
        return node

    merged = {key: value for key, value in node.items() if key != "allOf"}
    merged.update({key: value for key, value in all_of[0].items() if key not in merged})
    return merged


def _collapse_optional(node: Dict[str, Any]) -> Dict[str, Any]:
    """Turn ``anyOf: [X, {type: null}]`` into ``X`` with ``nullable: true``."""
    any_of = node.get("anyOf")
    if not isinstance(any_of, list):
        return node
    non_null = [option for option in any_of if not (isinstance(option, dict) and option.get("type") == "null")]
    if len(non_null) != 1 or len(non_null) == len(any_of) or not isinstance(non_null[0], dict):
        return node

    merged = {key: value for key, value in node.items() if key != "anyOf"}
    merged.update({key: value for key, value in non_null[0].items() if key not in merged})
    merged["nullable"] = True
    return merged


def _prune_required(node: Dict[str, Any]) -> Dict[str, Any]:
    """Keep only required names that are declared in ``properties``."""
    if "required" not in node or "properties" not in node:
        return node
    declared = node["properties"].keys()
    required = [name for name in node["required"] if name in declared]
    if required:
        node["required"] = required
    else:
        node.pop("required")
    return node
