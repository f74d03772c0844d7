"""JSON encoding and decoding of request and response payloads.

Payload types can be:

- model classes following ``ModelProtocol`` (``from_dict``/``to_dict``),
  usually ``SchemaModel`` dataclasses validated by marshmallow
- plain JSON types (``dict``, ``list``, ``str``, ``int``, ``float``, ``bool``),
  optionally parameterized (``List[int]``, ``Dict[str, Model]``)
- ``Optional``/``Union`` of the above, tried in order
- ``typing.Any``, in which case decoded JSON is returned as is
"""

__all__ = [
    "deserialize_json",
    "from_json_value",
    "serialize_json",
    "is_model_class",
]

import inspect
import json
import logging
import types
from typing import Any, List, Optional, Type, TypeVar, Union, cast, get_args, get_origin

import marshmallow as mm
from aibs_informatics_core.models.base import ModelProtocol
from aibs_informatics_core.utils.json import JSON

from lambda_gateway_tools.common.exceptions import DeserializationError, SerializationError

logger = logging.getLogger(__name__)

T = TypeVar("T")

JSON_TYPES = (dict, list, str, int, float, bool)

# `X | Y` unions are only available on 3.10+
UNION_TYPES = tuple(_ for _ in (Union, getattr(types, "UnionType", None)) if _ is not None)

# Compact separators, e.g. '{"result":42}'
JSON_SEPARATORS = (",", ":")


def is_model_class(cls: Any) -> bool:
    return inspect.isclass(cls) and callable(getattr(cls, "from_dict", None))


def _is_model_instance(value: Any) -> bool:
    return not inspect.isclass(value) and callable(getattr(value, "to_dict", None))


def _reject_constant(constant: str) -> Any:
    raise ValueError(f"{constant} is not a valid JSON value")


def deserialize_json(body: Optional[Union[str, bytes]], target_cls: Type[T]) -> T:
    """Decode a JSON document into an instance of ``target_cls``.

    ``NaN``, ``Infinity`` and ``-Infinity`` are rejected, as they are not JSON.

    Args:
        body (Optional[Union[str, bytes]]): The raw JSON text.
        target_cls (Type[T]): The expected type of the decoded value.

    Raises:
        DeserializationError: If the body is missing or empty, is not valid JSON,
            or does not match the shape of ``target_cls``.

    Returns:
        T: The decoded value.
    """
    if body is None:
        raise DeserializationError("Cannot deserialize a missing body.")
    if isinstance(body, bytes):
        try:
            body = body.decode("utf-8")
        except UnicodeDecodeError as e:
            raise DeserializationError(f"Body is not valid UTF-8: {e}") from e
    if not body.strip():
        raise DeserializationError("Cannot deserialize an empty body.")

    try:
        data = json.loads(body, parse_constant=_reject_constant)
    except ValueError as e:
        raise DeserializationError(f"Body is not valid JSON: {e}") from e

    return from_json_value(data, target_cls)


def from_json_value(data: JSON, target_cls: Type[T]) -> T:
    """Convert already decoded JSON into an instance of ``target_cls``.

    Element types of parameterized ``list`` and ``dict`` types are checked
    recursively. Dictionary keys must be typed as ``str`` (or ``Any``).

    Raises:
        DeserializationError: If ``data`` does not match the shape of ``target_cls``.
    """
    if target_cls is None or target_cls is Any:  # type: ignore[comparison-overlap]
        return cast(T, data)

    if target_cls is type(None):
        if data is not None:
            raise DeserializationError(f"Expected null, got {type(data).__name__}.")
        return cast(T, data)

    origin = get_origin(target_cls)
    if origin in UNION_TYPES:
        errors: List[str] = []
        for option in get_args(target_cls):
            try:
                return cast(T, from_json_value(data, option))
            except DeserializationError as e:
                errors.append(str(e))
        raise DeserializationError(
            f"{data!r} does not match any of {target_cls}: {'; '.join(errors)}"
        )

    if is_model_class(target_cls):
        if not isinstance(data, dict):
            raise DeserializationError(
                f"Expected a JSON object for {target_cls.__name__}, "
                f"got {type(data).__name__}."
            )
        model_cls = cast(Type[ModelProtocol], target_cls)
        try:
            return cast(T, model_cls.from_dict(data))
        except (mm.ValidationError, TypeError, ValueError, KeyError) as e:
            raise DeserializationError(
                f"Could not deserialize {data} into {target_cls.__name__}: {e}"
            ) from e

    expected_type = origin or target_cls
    if expected_type not in JSON_TYPES:
        raise DeserializationError(f"Cannot deserialize JSON into unsupported type {target_cls}")

    # bool is a subclass of int, but `true` is not a number
    if isinstance(data, bool) and expected_type is not bool:
        raise DeserializationError(f"Expected {expected_type.__name__}, got bool.")
    if expected_type is float and isinstance(data, int):
        return cast(T, float(data))
    if not isinstance(data, expected_type):
        raise DeserializationError(
            f"Expected {expected_type.__name__}, got {type(data).__name__}."
        )

    type_args = get_args(target_cls)
    if expected_type is list and type_args:
        item_cls = type_args[0]
        return cast(T, [from_json_value(item, item_cls) for item in data])
    if expected_type is dict and type_args:
        key_cls, value_cls = type_args
        if key_cls not in (str, Any):
            raise DeserializationError(
                f"JSON object keys are strings, cannot deserialize into {target_cls}"
            )
        return cast(T, {key: from_json_value(value, value_cls) for key, value in data.items()})
    return cast(T, data)


def _encode_model(value: Any) -> JSON:
    if _is_model_instance(value):
        try:
            return value.to_dict()
        except (mm.ValidationError, TypeError, ValueError) as e:
            raise SerializationError(f"Could not serialize {value!r}: {e}") from e
    raise TypeError(f"Object of type {type(value).__name__} is not JSON serializable")


def serialize_json(value: Any) -> str:
    """Encode a value as compact JSON text.

    Models (anything with ``to_dict``) are converted at any nesting level.

    Raises:
        SerializationError: If the value cannot be represented as JSON.
    """
    try:
        serialized = json.dumps(
            value, default=_encode_model, separators=JSON_SEPARATORS, allow_nan=False
        )
    except (TypeError, ValueError) as e:
        raise SerializationError(f"Could not serialize {value!r} to JSON: {e}") from e
    logger.debug(f"Serialized {type(value).__name__} into {len(serialized)} characters")
    return serialized
