"""Build function declarations from annotated Python callables."""

import inspect
from typing import Annotated, Any, Callable, Optional, Tuple, get_args, get_origin

import jsonref  # type: ignore
from pydantic import Field, create_model
from pydantic.fields import FieldInfo

from ..core.exceptions import InvalidFunctionDeclarationException
from ..core.logger import get_logger
from ..schema.config import FunctionDeclaration, Tool
from . import schema_sanitizer

logger = get_logger(__name__)


def declare_function(
    func: Callable[..., Any], name: Optional[str] = None, description: Optional[str] = None
) -> FunctionDeclaration:
    """Describe ``func`` as a function the model may call.

    Every parameter must be annotated as ``Annotated[T, Field(description=...)]``;
    the description tells the model what to pass. The docstring becomes the
    function description unless ``description`` is given.

    Args:
        func: The callable to describe.
        name: Overrides ``func.__name__``.
        description: Overrides the docstring.

    Returns:
        The function declaration.

    Raises:
        InvalidFunctionDeclarationException: If the docstring or a parameter description is missing,
            or the arguments are recursive.
    """
    function_name = name or func.__name__
    function_description = description or inspect.getdoc(func)
    if not function_description:
        msg = f"Function '{function_name}' has no docstring. The model needs a description of what it does."
        logger.error(msg)
        raise InvalidFunctionDeclarationException(msg)

    fields = {
        param_name: _field_for(param_name, param, function_name)
        for param_name, param in inspect.signature(func).parameters.items()
        if param_name not in ("self", "cls")
    }
    if not fields:
        return FunctionDeclaration(name=function_name, description=function_description)

    args_model = create_model(f"{function_name}_args", **fields)  # type: ignore[call-overload]
    raw_schema = args_model.model_json_schema()
    schema_sanitizer.assert_no_recursive_refs(raw_schema)

    # proxies=False gives plain dicts, merge_props keeps descriptions set next to a $ref
    inlined = jsonref.replace_refs(raw_schema, proxies=False, merge_props=True)
    parameters = schema_sanitizer.sanitize(inlined)
    logger.debug(f"Declared function '{function_name}' with parameters {sorted(fields)}")

    return FunctionDeclaration(name=function_name, description=function_description, parameters=parameters)


def tool_from_functions(*funcs: Callable[..., Any]) -> Tool:
    """Bundle several callables into one ``Tool``."""
    return Tool(function_declarations=[declare_function(func) for func in funcs])


def _field_for(param_name: str, param: inspect.Parameter, function_name: str) -> Tuple[Any, FieldInfo]:
    annotation = param.annotation
    if param.kind in (inspect.Parameter.VAR_POSITIONAL, inspect.Parameter.VAR_KEYWORD):
        msg = f"Function '{function_name}' uses *{param_name}; only named parameters can be declared."
        logger.error(msg)
        raise InvalidFunctionDeclarationException(msg)

    description = _description_of(annotation)
    if description is None:
        msg = (
            f"Parameter '{param_name}' of function '{function_name}' is missing a description.\n"
            f"Usage: {param_name}: Annotated[Type, Field(description='...')]"
        )
        logger.error(msg)
        raise InvalidFunctionDeclarationException(msg)

    default = param.default if param.default is not inspect.Parameter.empty else ...
    return annotation, Field(default=default, description=description)


def _description_of(annotation: Any) -> Optional[str]:
    if get_origin(annotation) is not Annotated:
        return None
    for metadata in get_args(annotation)[1:]:
        if isinstance(metadata, FieldInfo) and metadata.description:
            return metadata.description
    return None

