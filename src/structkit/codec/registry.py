"""Named type registry and field type resolution.

The registry maps type names such as ``"uint32"`` or ``"bool"`` to codecs.
It is populated with the primitive library when structkit is imported and
can be extended with register_type(); after initialization it is read-only
in practice.

get_type() is the single point where anything accepted as a field type
(codec, name, model class, duck-typed object, foreign codec) is turned into
a Codec. Records call it once per field at construction.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

from ..exceptions import SchemaError, UnknownTypeError
from .adapters import CustomCodec, ExternalCodec
from .base import Codec

logger = logging.getLogger(__name__)

# Global registry: type name -> codec
TYPE_REGISTRY: dict[str, Codec] = {}


def register_type(name: str, codec: Any, *, replace: bool = False) -> Codec:
    """Register a codec under a type name.

    Args:
        name: Type name to use in field definitions
        codec: Anything get_type() accepts
        replace: Allow overriding an existing, different registration

    Returns:
        The registered Codec

    Raises:
        SchemaError: If the name is taken by a different codec and replace is False
        UnknownTypeError: If codec cannot be turned into a Codec

    Example:
        >>> register_type("u24", Codec.define(read=read_u24, write=write_u24, size=3))
        >>> Record({"length": "u24"})
    """
    if not isinstance(name, str) or not name:
        raise SchemaError(f"Type name must be a non-empty string, got {name!r}")

    resolved = get_type(codec)

    existing = TYPE_REGISTRY.get(name)
    if existing is not None and existing is not resolved and not replace:
        raise SchemaError(
            f"Type name {name!r} already registered to {existing!r}. "
            f"Pass replace=True to override it."
        )

    TYPE_REGISTRY[name] = resolved
    logger.debug("Registered type %r -> %r", name, resolved)
    return resolved


def registered_types() -> list[str]:
    """Return the registered type names in registration order."""
    return list(TYPE_REGISTRY)


def get_type(type_spec: Any) -> Codec:
    """Turn a field type (name, codec, model or foreign codec) into a Codec.

    Accepted forms, in order:

    - a Codec instance (returned as is)
    - a registered type name
    - a class providing ``struct_codec()`` (e.g. a BaseRecord model)
    - an object or mapping exposing ``read`` (and optionally ``write``/``size``)
    - a foreign codec exposing ``encode``/``decode``

    Raises:
        UnknownTypeError: If type_spec matches none of the above
    """
    if isinstance(type_spec, Codec):
        return type_spec

    if isinstance(type_spec, str):
        try:
            return TYPE_REGISTRY[type_spec]
        except KeyError:
            raise UnknownTypeError(
                f"Unknown type name: {type_spec!r}. "
                f"Registered types: {registered_types()}. "
                f"Did you forget to call register_type()?"
            ) from None

    if isinstance(type_spec, type) and callable(getattr(type_spec, "struct_codec", None)):
        return get_type(type_spec.struct_codec())

    if isinstance(type_spec, Mapping):
        if callable(type_spec.get("read")):
            return CustomCodec(type_spec["read"], type_spec.get("write"), type_spec.get("size"))
    elif callable(getattr(type_spec, "read", None)):
        return CustomCodec(
            type_spec.read, getattr(type_spec, "write", None), getattr(type_spec, "size", None)
        )
    elif callable(getattr(type_spec, "encode", None)) and callable(
        getattr(type_spec, "decode", None)
    ):
        return ExternalCodec(type_spec)

    raise UnknownTypeError(f"No such type: {type_spec!r}")
