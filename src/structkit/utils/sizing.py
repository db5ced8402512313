"""Encoded size calculation utilities.

This module provides functions to calculate the encoded size of values
without actually encoding them.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel

from ..codec.base import Codec, MappedCodec
from ..codec.context import Scope
from ..codec.record import Record
from ..codec.registry import get_type
from ..exceptions import SchemaError


def encoded_size(codec_or_model: Any, value: Any = None) -> int:
    """Calculate the encoded size of a value in bytes.

    Args:
        codec_or_model: Codec, type name, record model class or model instance
        value: Value to measure; omit for a model instance or a static-size codec

    Returns:
        Size in bytes

    Example:
        >>> encoded_size("uint32")
        4
        >>> encoded_size(dynstring(uint8), "hello")
        6
        >>> encoded_size(Packet(has_crc=False, length=2, payload=b"hi"))
        5
    """
    if isinstance(codec_or_model, BaseModel):
        value, codec = codec_or_model, get_type(type(codec_or_model))
    else:
        codec = get_type(codec_or_model)
    return codec.size(value)


def field_sizes(record_or_model: Any, value: Any = None) -> dict[str, int]:
    """Get the size in bytes of each field of a record.

    Unnamed fields (padding, embedded records) are reported under
    ``"<unnamed N>"`` where N is their position, so the sizes always add up
    to the record size.

    Args:
        record_or_model: Record, record model class or model instance
        value: Record value; omit for a model instance

    Returns:
        Dictionary mapping field names to their size in bytes

    Raises:
        SchemaError: If the codec is not a record

    Example:
        >>> field_sizes(Record([("n", uint8), skip(3), ("s", dynstring(uint8))]), {"n": 1, "s": "ab"})
        {'n': 1, '<unnamed 1>': 3, 's': 3}
    """
    if isinstance(record_or_model, BaseModel):
        value, record_or_model = record_or_model, type(record_or_model)

    codec = get_type(record_or_model)
    if isinstance(codec, MappedCodec):
        value = codec.unmap(value)
        codec = codec.inner
    if not isinstance(codec, Record):
        raise SchemaError(f"field_sizes() needs a record codec, got {codec!r}")

    scope = Scope(value)
    sizes: dict[str, int] = {}
    for index, (name, field_codec) in enumerate(codec.fields):
        key = name if name is not None else f"<unnamed {index}>"
        if field_codec.static_size is not None:
            sizes[key] = field_codec.static_size
        elif name is None:
            sizes[key] = field_codec.size(value, scope)
        else:
            sizes[key] = field_codec.size(Record.field_value(value, name, field_codec), scope)
    return sizes


def is_static(codec_or_model: Any) -> bool:
    """Return True if the codec's size never depends on the value."""
    codec: Codec = get_type(codec_or_model)
    return codec.static_size is not None
