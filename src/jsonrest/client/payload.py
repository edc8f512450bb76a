"""
Request bodies and response targets

A request body is one of RawBody, JsonBody or EMPTY. Plain Python values
passed to the verb helpers are sorted into one of those by ``to_body``.
Response bodies are decoded into a caller supplied target by ``decode_into``.
"""

import dataclasses
import json
import typing
from dataclasses import dataclass
from functools import lru_cache
from typing import IO, Any, Union

from pydantic import BaseModel, PydanticSchemaGenerationError, TypeAdapter
from pydantic_core import to_json


JSON_CONTENT_TYPE = "application/json"
RAW_CONTENT_TYPE = "text/plain"


@dataclass(frozen=True)
class RawBody:
    """Bytes or a readable stream, sent as-is"""
    data: Union[bytes, bytearray, memoryview, IO[bytes]]

    content_type = RAW_CONTENT_TYPE


@dataclass(frozen=True)
class JsonBody:
    """Any value pydantic can serialize, sent as JSON"""
    value: Any

    content_type = JSON_CONTENT_TYPE

    def encode(self) -> bytes:
        """
        Serialize the value

        Raises:
            pydantic_core.PydanticSerializationError: value is not serializable
        """
        return to_json(self.value, by_alias=True)


class EmptyBody:
    """No request body"""

    content_type = None

    def __repr__(self) -> str:
        return "EMPTY"


EMPTY = EmptyBody()

RequestBody = Union[RawBody, JsonBody, EmptyBody]


def is_raw(payload: Any) -> bool:
    """True for bytes-like values and readable streams"""
    if isinstance(payload, (bytes, bytearray, memoryview)):
        return True
    return callable(getattr(payload, "read", None))


def to_body(payload: Any) -> RequestBody:
    """Sort a caller payload into a request body variant"""
    if payload is None:
        return EMPTY
    if isinstance(payload, (RawBody, JsonBody, EmptyBody)):
        return payload
    if is_raw(payload):
        return RawBody(payload)
    return JsonBody(payload)


def check_target(out: Any) -> None:
    """
    Reject output targets decode_into cannot fill

    Raises:
        TypeError: target is not supported
    """
    if out is None or isinstance(out, (TypeAdapter, dict, list)):
        return

    if isinstance(out, BaseModel):
        if out.model_config.get("frozen"):
            raise TypeError(f"Cannot decode into frozen model {type(out).__name__}")
        return

    if dataclasses.is_dataclass(out) and not isinstance(out, type):
        if out.__dataclass_params__.frozen:
            raise TypeError(
                f"Cannot decode into frozen dataclass {type(out).__name__}"
            )
        return

    if isinstance(out, type) or typing.get_origin(out) is not None:
        try:
            _adapter_for(out)
        except PydanticSchemaGenerationError as e:
            raise TypeError(f"Unsupported output target {out!r}: {e}") from e
        return

    raise TypeError(
        f"Unsupported output target {out!r}: pass a type, a pydantic model, "
        "a dataclass instance, a dict or a list"
    )


@lru_cache(maxsize=128)
def _cached_adapter(tp: Any) -> TypeAdapter:
    return TypeAdapter(tp)


def _adapter_for(tp: Any) -> TypeAdapter:
    try:
        return _cached_adapter(tp)
    except TypeError:
        # unhashable type expression
        return TypeAdapter(tp)


def _load_object(raw: bytes) -> dict:
    data = json.loads(raw)
    if not isinstance(data, dict):
        raise ValueError(f"expected a JSON object, got {type(data).__name__}")
    return data


def decode_into(raw: bytes, out: Any) -> Any:
    """
    Decode a JSON document into ``out``

    Types are validated into a new value which is returned. Instances are
    updated in place: keys present in the document overwrite the instance,
    everything else keeps its current value. The instance itself is returned.

    Raises:
        ValueError: invalid JSON or the document does not fit the target
            (pydantic's ValidationError is a ValueError)
    """
    if isinstance(out, TypeAdapter):
        return out.validate_json(raw)

    if isinstance(out, BaseModel):
        model_cls = type(out)
        current = out.model_dump(by_alias=True)
        decoded = model_cls.model_validate({**current, **_load_object(raw)})
        for name in model_cls.model_fields:
            setattr(out, name, getattr(decoded, name))
        return out

    if dataclasses.is_dataclass(out) and not isinstance(out, type):
        names = [f.name for f in dataclasses.fields(out) if f.init]
        current = {name: getattr(out, name) for name in names}
        data = _load_object(raw)
        current.update({k: v for k, v in data.items() if k in names})
        decoded = _adapter_for(type(out)).validate_python(current)
        for name in names:
            setattr(out, name, getattr(decoded, name))
        return out

    if isinstance(out, dict):
        out.update(_load_object(raw))
        return out

    if isinstance(out, list):
        data = json.loads(raw)
        if not isinstance(data, list):
            raise ValueError(f"expected a JSON array, got {type(data).__name__}")
        out[:] = data
        return out

    return _adapter_for(out).validate_json(raw)
