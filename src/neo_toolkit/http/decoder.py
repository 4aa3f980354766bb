"""JSON request body decoding.

ONLY JSON decoding - turns a request body into a validated Python value and
classifies every failure into one of the ``JSONBodyError`` subclasses.

Decoding runs in four steps:

1. syntax: the first JSON value is parsed with the standard library parser,
   whose ``JSONDecodeError`` carries the failing position. ``NaN`` and
   ``Infinity`` are refused, they are not JSON;
2. unknown keys: unless allowed, object keys the target does not declare
   are reported in document order, before any other shape error;
3. shape: the value is validated against the target with pydantic, whose
   ``ValidationError`` entries carry a structured error ``type`` and ``loc``;
4. trailing content: anything but whitespace after the first value rejects
   the body, so ``{"a":1}{"b":2}`` is not silently truncated.
"""

import dataclasses
import json
import logging
import types
import typing
from collections import abc
from functools import lru_cache
from typing import Any, Callable, Dict, Optional, Tuple, Type, TypeVar, Union

from pydantic import BaseModel, RootModel, TypeAdapter, ValidationError
from pydantic.errors import PydanticUserError
from starlette.requests import Request

from ..config.settings import ToolkitSettings, get_settings
from ..core.exceptions import (
    DecodeTargetError,
    EmptyBodyError,
    JSONBodyError,
    JSONTypeMismatchError,
    MalformedJSONError,
    MissingFieldError,
    MultipleJSONValuesError,
    UnclassifiedJSONError,
    UnexpectedEOFError,
    UnknownFieldError,
)
from .reader import read_body

logger = logging.getLogger(__name__)

T = TypeVar("T")

JSON_WHITESPACE = " \t\n\r"

# pydantic-core error types that mean "the JSON value has the wrong type"
TYPE_MISMATCH_ERRORS = frozenset({
    "string_type", "bytes_type",
    "int_type", "int_parsing", "int_from_float",
    "float_type", "float_parsing",
    "bool_type", "bool_parsing",
    "decimal_type", "decimal_parsing",
    "dict_type", "list_type", "tuple_type", "set_type", "frozen_set_type",
    "iterable_type", "mapping_type",
    "model_type", "model_attributes_type", "dataclass_type",
    "none_required",
    "date_type", "date_parsing", "datetime_type", "datetime_parsing",
    "time_type", "time_parsing", "timedelta_type", "timedelta_parsing",
    "uuid_type", "uuid_parsing", "url_type",
})


def format_location(loc: Tuple[Any, ...]) -> str:
    """Render a pydantic error location as ``items[0].name``."""
    path = ""
    for part in loc:
        if isinstance(part, int):
            path += f"[{part}]"
        else:
            path = f"{path}.{part}" if path else str(part)
    return path


def classify_syntax_error(error: json.JSONDecodeError, text: str) -> JSONBodyError:
    """Classify a parser failure by where it happened.

    A failure at the end of the meaningful input means the body stopped in
    the middle of a value; anywhere else it is a syntax error.
    """
    if error.pos >= len(text.rstrip(JSON_WHITESPACE)):
        return UnexpectedEOFError()
    return MalformedJSONError(error.pos)


def classify_validation_error(error: ValidationError, value_offset: int) -> JSONBodyError:
    """Classify the first pydantic validation error by its structured type.

    Args:
        error: Validation error raised for the decoded value
        value_offset: Character offset where the JSON value starts, used
            when the failure has no field location
    """
    details = error.errors(include_url=False)
    if not details:
        return UnclassifiedJSONError(str(error))

    first = details[0]
    kind = first["type"]
    field = format_location(tuple(first.get("loc", ())))

    if kind == "json_invalid":
        return MalformedJSONError(value_offset)
    if kind == "extra_forbidden":
        return UnknownFieldError(field)
    if kind == "missing":
        return MissingFieldError(field)
    if kind in TYPE_MISMATCH_ERRORS:
        if field:
            return JSONTypeMismatchError(field=field)
        return JSONTypeMismatchError(offset=value_offset)

    message = f"body contains invalid JSON: {first['msg']}"
    if field:
        message = f'body contains invalid value for field "{field}": {first["msg"]}'
    return UnclassifiedJSONError(message, details={"type": kind, "field": field})


SEQUENCE_ORIGINS = (
    list, tuple, set, frozenset,
    abc.Sequence, abc.MutableSequence, abc.Set, abc.MutableSet, abc.Iterable,
)
MAPPING_ORIGINS = (dict, abc.Mapping, abc.MutableMapping)


class NonFiniteLiteralError(ValueError):
    """Raised by the parser when it meets ``NaN``, ``Infinity`` or ``-Infinity``."""


def _reject_constant(name: str) -> Any:
    raise NonFiniteLiteralError(name)


def locate_non_finite_literal(text: str, start: int) -> int:
    """Return the offset of the first bare ``NaN``/``Infinity`` after ``start``.

    Only called once the parser has refused such a literal, so everything
    before it is valid JSON and the only capital letters outside strings
    belong to these literals.
    """
    in_string = escaped = False
    for index in range(start, len(text)):
        char = text[index]
        if in_string:
            if escaped:
                escaped = False
            elif char == '\\':
                escaped = True
            elif char == '"':
                in_string = False
        elif char == '"':
            in_string = True
        elif char in "NI":
            return index
    return start


def declared_keys(target: Any) -> Optional[Dict[str, Any]]:
    """Map every object key a model or dataclass accepts to its annotation.

    Returns:
        The key map, or None when ``target`` does not declare keys
    """
    if isinstance(target, type) and issubclass(target, BaseModel):
        keys: Dict[str, Any] = {}
        for name, info in target.model_fields.items():
            keys[name] = info.annotation
            if info.alias:
                keys[info.alias] = info.annotation
            if isinstance(info.validation_alias, str):
                keys[info.validation_alias] = info.annotation
            for choice in getattr(info.validation_alias, "choices", ()):
                if isinstance(choice, str):
                    keys[choice] = info.annotation
        return keys
    if isinstance(target, type) and dataclasses.is_dataclass(target):
        return {
            item.name: Any if isinstance(item.type, str) else item.type
            for item in dataclasses.fields(target)
        }
    return None


def find_unknown_key(target: Any, raw: Any, path: str = "") -> Optional[str]:
    """Find the first JSON object key the target type does not declare.

    Walks the raw parsed JSON in document order alongside the target's
    annotations, descending into nested models, dataclasses, sequences,
    mappings and optional values.

    Returns:
        Dotted path of the first unknown key (``items[1].name``), or None
    """
    origin = typing.get_origin(target)
    args = typing.get_args(target)

    if origin is typing.Annotated:
        return find_unknown_key(args[0], raw, path)
    if origin is Union or origin is types.UnionType:
        arms = [arm for arm in args if arm is not type(None)]
        # Ambiguous unions are left to validation
        return find_unknown_key(arms[0], raw, path) if len(arms) == 1 else None
    if isinstance(target, type) and issubclass(target, RootModel):
        return find_unknown_key(target.model_fields["root"].annotation, raw, path)

    keys = declared_keys(target)
    if keys is not None:
        if not isinstance(raw, dict):
            return None
        open_model = (
            isinstance(target, type)
            and issubclass(target, BaseModel)
            and target.model_config.get("extra") == "allow"
        )
        for key, item in raw.items():
            key_path = f"{path}.{key}" if path else key
            if key not in keys:
                if open_model:
                    continue
                return key_path
            found = find_unknown_key(keys[key], item, key_path)
            if found:
                return found
        return None

    if isinstance(raw, list) and origin in SEQUENCE_ORIGINS:
        positional = origin is tuple and bool(args) and args[-1] is not Ellipsis
        for index, item in enumerate(raw):
            if positional:
                if index >= len(args):
                    break
                item_type = args[index]
            else:
                item_type = args[0] if args else Any
            found = find_unknown_key(item_type, item, f"{path}[{index}]")
            if found:
                return found
        return None

    if isinstance(raw, dict) and origin in MAPPING_ORIGINS and len(args) == 2:
        for key, item in raw.items():
            key_path = f"{path}.{key}" if path else key
            found = find_unknown_key(args[1], item, key_path)
            if found:
                return found
    return None


@lru_cache(maxsize=256)
def _type_adapter(target: Any) -> TypeAdapter:
    return TypeAdapter(target)


class JSONBodyDecoder:
    """Decodes a JSON body into a pydantic model or any pydantic-supported type."""

    def __init__(self, allow_unknown_fields: bool = False, strict: bool = True):
        """Initialize JSON body decoder.

        Args:
            allow_unknown_fields: Accept object keys the target does not declare
            strict: Validate in pydantic strict mode (no ``"1"`` -> ``1`` coercion)
        """
        self._allow_unknown_fields = allow_unknown_fields
        self._strict = strict
        self._parser = json.JSONDecoder(parse_constant=_reject_constant)

    def decode(self, body: bytes, target: Type[T]) -> T:
        """Decode exactly one JSON value from ``body`` into ``target``.

        Args:
            body: Raw request body
            target: Pydantic model class, or a type such as ``dict`` or
                ``list[int]``

        Returns:
            The validated value

        Raises:
            JSONBodyError: A subclass describing why the body was rejected
        """
        validate = self._validator_for(target)

        try:
            text = body.decode("utf-8")
        except UnicodeDecodeError as e:
            raise MalformedJSONError(e.start) from e

        start = len(text) - len(text.lstrip(JSON_WHITESPACE))
        if start == len(text):
            raise EmptyBodyError()

        try:
            raw, end = self._parser.raw_decode(text, start)
        except json.JSONDecodeError as e:
            raise classify_syntax_error(e, text) from e
        except NonFiniteLiteralError as e:
            raise MalformedJSONError(locate_non_finite_literal(text, start)) from e

        if not self._allow_unknown_fields:
            unknown = find_unknown_key(target, raw)
            if unknown:
                raise UnknownFieldError(unknown)

        try:
            value = validate(text[start:end], strict=self._strict)
        except ValidationError as e:
            raise classify_validation_error(e, start) from e

        if text[end:].strip(JSON_WHITESPACE):
            raise MultipleJSONValuesError()

        return value

    def _validator_for(self, target: Any) -> Callable[..., Any]:
        """Resolve the validation callable for a decode target."""
        if isinstance(target, BaseModel):
            raise DecodeTargetError(target, "pass the model class, not an instance")
        if isinstance(target, type) and issubclass(target, BaseModel):
            return target.model_validate_json
        try:
            return _type_adapter(target).validate_json
        except (PydanticUserError, TypeError) as e:
            raise DecodeTargetError(target, str(e)) from e


async def read_json(
    request: Request,
    target: Type[T],
    settings: Optional[ToolkitSettings] = None,
) -> T:
    """Read and decode a JSON request body.

    The body is limited to ``settings.json_limit`` bytes and decoded with the
    settings' unknown-field and strictness policies.

    Args:
        request: Incoming request
        target: Pydantic model class or other pydantic-supported type
        settings: Toolkit settings; environment settings when omitted

    Returns:
        The decoded value

    Raises:
        JSONBodyError: A subclass describing why the body was rejected
    """
    settings = settings or get_settings()
    body = await read_body(request, settings.json_limit)
    decoder = JSONBodyDecoder(
        allow_unknown_fields=settings.allow_unknown_json_fields,
        strict=settings.strict_json_types,
    )
    try:
        return decoder.decode(body, target)
    except JSONBodyError as e:
        logger.debug(f"Rejected JSON body on {request.url.path}: {e.error_code}")
        raise
