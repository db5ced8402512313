"""Record (struct) composition.

A Record combines an ordered list of named and unnamed field codecs into a
single codec producing ``dict`` values. Unnamed fields either embed another
record, whose keys are merged into the result, or are side-effect-only codecs
such as padding.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any, Iterable, Optional, Tuple

from ..exceptions import FieldReadError, MissingFieldError, SchemaError
from .base import Codec
from .context import Context, Scope
from .registry import get_type

logger = logging.getLogger(__name__)

FieldDef = Tuple[Optional[str], Codec]


class Record(Codec):
    """Codec for an ordered sequence of fields.

    Fields can be given as a mapping of name to type, or as a sequence whose
    items are ``(name, type)`` pairs (named) or bare types (unnamed). Types are
    anything get_type() accepts and are resolved once, here.

    Example:
        >>> header = Record([
        ...     ("size", uint8),
        ...     skip(1),
        ...     ("data", array("size", "uint16")),
        ... ])
        >>> header.decode(b"\\x02\\x00\\x01\\x00\\x02\\x00")
        {'size': 2, 'data': [1, 2]}
        >>> Record().add_field("a", int8).add_field("b", int8).decode(b"\\x01\\x02")
        {'a': 1, 'b': 2}
    """

    def __init__(self, fields: Mapping[str, Any] | Iterable[Any] | None = None) -> None:
        """Initialize a record codec.

        Args:
            fields: Mapping of name to type, or sequence of (name, type)
                pairs and bare (unnamed) types

        Raises:
            SchemaError: If a field definition is malformed
            UnknownTypeError: If a field type cannot be resolved
        """
        self._fields: list[FieldDef] = []
        if fields is None:
            return
        if isinstance(fields, Mapping):
            for name, type_spec in fields.items():
                self.add_field(name, type_spec)
            return
        for item in fields:
            if isinstance(item, tuple) and len(item) == 2 and isinstance(item[0], (str, type(None))):
                self.add_field(item[0], item[1])
            else:
                self.add_field(item)

    @property
    def fields(self) -> tuple[FieldDef, ...]:
        """Return the (name, codec) pairs in declaration order."""
        return tuple(self._fields)

    @property
    def names(self) -> list[str]:
        """Return the names of the named fields in declaration order."""
        return [name for name, _ in self._fields if name is not None]

    @property
    def static_size(self) -> int | None:  # type: ignore[override]
        sizes = [codec.static_size for _, codec in self._fields]
        if any(size is None for size in sizes):
            return None
        return sum(sizes)  # type: ignore[arg-type]

    def add_field(self, name: Any, type_spec: Any = None) -> Record:
        """Append a field and return this record.

        ``add_field(name, type)`` adds a named field, ``add_field(type)`` an
        unnamed one.

        Raises:
            SchemaError: If the name is not a string or is already used
        """
        if type_spec is None:
            name, type_spec = None, name
        if name is not None:
            if not isinstance(name, str) or not name:
                raise SchemaError(f"Field name must be a non-empty string, got {name!r}")
            if name in self.names:
                raise SchemaError(f"Duplicate field name: {name!r}")
        self._fields.append((name, get_type(type_spec)))
        return self

    field = add_field

    def read(self, ctx: Context) -> dict[str, Any]:
        result: dict[str, Any] = {}
        with ctx.enter(result):
            for index, (name, codec) in enumerate(self._fields):
                try:
                    value = codec.read(ctx)
                except FieldReadError as e:
                    if name is None:
                        raise
                    raise e.prepend(name) from e.cause
                except Exception as e:
                    label = name if name is not None else f"<unnamed {index}>"
                    logger.debug("Failed reading field %r at offset %d: %s", label, ctx.offset, e)
                    raise FieldReadError((label,), e) from e

                if name is not None:
                    result[name] = value
                elif isinstance(value, Mapping):
                    result.update(value)
        return result

    def write(self, ctx: Context, value: Any) -> None:
        with ctx.enter(value):
            for name, codec in self._fields:
                codec.write(ctx, value if name is None else self.field_value(value, name, codec))

    def size(self, value: Any = None, parent: Scope | None = None) -> int:
        static = self.static_size
        if static is not None:
            return static
        scope = Scope(value, parent)
        return sum(
            codec.size(value if name is None else self.field_value(value, name, codec), scope)
            for name, codec in self._fields
        )

    @staticmethod
    def field_value(value: Any, name: str, codec: Codec) -> Any:
        """Return ``value[name]``; absent optional fields read as None."""
        if isinstance(value, Mapping):
            if name in value:
                return value[name]
        elif hasattr(value, name):
            return getattr(value, name)
        if codec.optional:
            return None
        raise MissingFieldError(f"Cannot write record: missing field {name!r}")

    def __repr__(self) -> str:
        parts = [f"{name}={codec!r}" if name else repr(codec) for name, codec in self._fields]
        return f"Record({', '.join(parts)})"
