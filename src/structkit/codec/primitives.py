"""Primitive codec library.

Fixed-width numbers and booleans, byte buffers, fixed and length-prefixed
strings, arrays, conditional codecs and padding. The fixed-width numbers
and ``bool`` are registered by name in the type registry when the module is
imported. Parameterized codecs (``buffer``, ``string``, ``array``, ``when``,
``skip`` and the rest) are built by calling their factory functions.

Multi-byte numbers without a suffix are little-endian; the ``be`` variants
are big-endian.
"""

from __future__ import annotations

import struct
from typing import Any

from ..config import get_config
from ..exceptions import DecodeError, EncodeError, LengthMismatchError, SizeMismatchError
from .base import Codec
from .context import Context, Scope
from .registry import get_type, register_type
from .resolve import resolve


class NumberCodec(Codec):
    """Fixed-width integer or IEEE float, backed by a struct format."""

    def __init__(self, name: str, fmt: str) -> None:
        self.name = name
        self._struct = struct.Struct(fmt)
        self.static_size = self._struct.size

    def read(self, ctx: Context) -> Any:
        ctx.require(self._struct.size)
        (value,) = self._struct.unpack_from(ctx.buffer, ctx.offset)
        ctx.offset += self._struct.size
        return value

    def write(self, ctx: Context, value: Any) -> None:
        try:
            ctx.write_bytes(self._struct.pack(value))
        except struct.error as e:
            raise EncodeError(f"{self.name}: cannot encode {value!r}: {e}") from e

    def __repr__(self) -> str:
        return self.name


class BoolCodec(Codec):
    """One byte per boolean: 0 reads as False, anything else as True."""

    static_size = 1

    def read(self, ctx: Context) -> bool:
        return ctx.read_bytes(1)[0] != 0

    def write(self, ctx: Context, value: Any) -> None:
        ctx.write_bytes(b"\x01" if value else b"\x00")

    def __repr__(self) -> str:
        return "bool"


int8 = NumberCodec("int8", "<b")
uint8 = NumberCodec("uint8", "<B")
# little endians
int16 = NumberCodec("int16", "<h")
uint16 = NumberCodec("uint16", "<H")
int32 = NumberCodec("int32", "<i")
uint32 = NumberCodec("uint32", "<I")
int64 = NumberCodec("int64", "<q")
uint64 = NumberCodec("uint64", "<Q")
float32 = NumberCodec("float", "<f")
float64 = NumberCodec("double", "<d")
# big endians
int16be = NumberCodec("int16be", ">h")
uint16be = NumberCodec("uint16be", ">H")
int32be = NumberCodec("int32be", ">i")
uint32be = NumberCodec("uint32be", ">I")
int64be = NumberCodec("int64be", ">q")
uint64be = NumberCodec("uint64be", ">Q")
float32be = NumberCodec("floatbe", ">f")
float64be = NumberCodec("doublebe", ">d")

boolean = BoolCodec()


def _static(spec: Any) -> int | None:
    """Return spec as a byte count if it is a literal, else None."""
    if isinstance(spec, int) and not isinstance(spec, bool):
        return spec
    return None


def _count(scope: Scope | None, spec: Any, what: str) -> int:
    value = resolve(scope, spec)
    try:
        count = int(value)
    except (TypeError, ValueError) as e:
        raise DecodeError(f"{what} {spec!r} resolved to non-integer {value!r}") from e
    if count < 0:
        raise DecodeError(f"{what} {spec!r} resolved to negative value {count}")
    return count


class BufferCodec(Codec):
    """Raw bytes of a resolved length.

    Reads return an independent copy. Writes copy at most ``length`` bytes
    and zero-fill the rest; longer values are truncated.
    """

    def __init__(self, length: Any) -> None:
        self.length = length
        self.static_size = _static(length)

    def read(self, ctx: Context) -> bytes:
        return ctx.read_bytes(_count(ctx.scope, self.length, "buffer length"))

    def write(self, ctx: Context, value: Any) -> None:
        if not isinstance(value, (bytes, bytearray, memoryview)):
            raise EncodeError(
                f"Cannot write value of incorrect type, expected bytes, got {type(value).__name__}"
            )
        length = _count(ctx.scope, self.length, "buffer length")
        data = bytes(value[:length])
        ctx.write_bytes(data)
        ctx.fill(length - len(data))

    def size(self, value: Any = None, parent: Scope | None = None) -> int:
        if self.static_size is not None:
            return self.static_size
        return _count(parent, self.length, "buffer length")

    def __repr__(self) -> str:
        return f"buffer({self.length!r})"


class StringCodec(Codec):
    """Text stored in a resolved number of bytes.

    Writes require the encoded value to be exactly that many bytes long.
    """

    def __init__(self, length: Any, encoding: str | None = None) -> None:
        self.length = length
        self.encoding = encoding or get_config().default_encoding
        self.static_size = _static(length)

    def read(self, ctx: Context) -> str:
        raw = ctx.read_bytes(_count(ctx.scope, self.length, "string size"))
        return _decode_text(raw, self.encoding)

    def write(self, ctx: Context, value: Any) -> None:
        length = _count(ctx.scope, self.length, "string size")
        data = _encode_text(value, self.encoding)
        if len(data) != length:
            raise SizeMismatchError(
                f"Cannot write incorrect string size, expected {length} bytes, "
                f"got {len(data)} bytes ({self.encoding})"
            )
        ctx.write_bytes(data)

    def size(self, value: Any = None, parent: Scope | None = None) -> int:
        if self.static_size is not None:
            return self.static_size
        return _count(parent, self.length, "string size")

    def __repr__(self) -> str:
        return f"string({self.length!r}, {self.encoding!r})"


class DynamicStringCodec(Codec):
    """Text preceded by its encoded byte length."""

    def __init__(self, length_type: Any, encoding: str | None = None) -> None:
        self.length_type = get_type(length_type)
        self.encoding = encoding or get_config().default_encoding

    def read(self, ctx: Context) -> str:
        length = self.length_type.read(ctx)
        return _decode_text(ctx.read_bytes(length), self.encoding)

    def write(self, ctx: Context, value: Any) -> None:
        data = _encode_text(value, self.encoding)
        self.length_type.write(ctx, len(data))
        ctx.write_bytes(data)

    def size(self, value: Any = None, parent: Scope | None = None) -> int:
        data = _encode_text(value, self.encoding)
        return self.length_type.size(len(data), parent) + len(data)

    def __repr__(self) -> str:
        return f"dynstring({self.length_type!r}, {self.encoding!r})"


def _decode_text(raw: bytes, encoding: str) -> str:
    try:
        return raw.decode(encoding)
    except UnicodeDecodeError as e:
        raise DecodeError(f"Invalid {encoding} text: {e}") from e


def _encode_text(value: Any, encoding: str) -> bytes:
    if not isinstance(value, str):
        raise EncodeError(f"Expected str, got {type(value).__name__}")
    try:
        return value.encode(encoding)
    except UnicodeEncodeError as e:
        raise EncodeError(f"Cannot encode {value!r} as {encoding}: {e}") from e


class ArrayCodec(Codec):
    """A resolved number of elements of one type."""

    def __init__(self, length: Any, element_type: Any) -> None:
        self.length = length
        self.element_type = get_type(element_type)

    @property
    def static_size(self) -> int | None:  # type: ignore[override]
        # element records may still grow through add_field
        count = _static(self.length)
        element_size = self.element_type.static_size
        if count is None or element_size is None:
            return None
        return count * element_size

    def read(self, ctx: Context) -> list[Any]:
        count = _count(ctx.scope, self.length, "array length")
        return [self.element_type.read(ctx) for _ in range(count)]

    def write(self, ctx: Context, value: Any) -> None:
        count = _count(ctx.scope, self.length, "array length")
        if len(value) != count:
            raise LengthMismatchError(
                f"Cannot write incorrect array length, expected {count}, got {len(value)}"
            )
        for element in value:
            self.element_type.write(ctx, element)

    def size(self, value: Any = None, parent: Scope | None = None) -> int:
        if self.static_size is not None:
            return self.static_size
        return sum(self.element_type.size(element, parent) for element in value)

    def __repr__(self) -> str:
        return f"array({self.length!r}, {self.element_type!r})"


class DynamicArrayCodec(Codec):
    """Elements preceded by their count."""

    def __init__(self, length_type: Any, element_type: Any) -> None:
        self.length_type = get_type(length_type)
        self.element_type = get_type(element_type)

    def read(self, ctx: Context) -> list[Any]:
        count = self.length_type.read(ctx)
        return [self.element_type.read(ctx) for _ in range(count)]

    def write(self, ctx: Context, value: Any) -> None:
        self.length_type.write(ctx, len(value))
        for element in value:
            self.element_type.write(ctx, element)

    def size(self, value: Any = None, parent: Scope | None = None) -> int:
        return self.length_type.size(len(value), parent) + sum(
            self.element_type.size(element, parent) for element in value
        )

    def __repr__(self) -> str:
        return f"dynarray({self.length_type!r}, {self.element_type!r})"


class WhenCodec(Codec):
    """Conditional codec: one type when a condition holds, an alternate otherwise.

    Without an alternate, a false condition reads as None, writes nothing
    and has size 0.
    """

    def __init__(self, condition: Any, then_type: Any, else_type: Any = None) -> None:
        self.condition = condition
        self.then_type = get_type(then_type)
        self.else_type = get_type(else_type) if else_type is not None else None
        self.optional = self.else_type is None

    def else_(self, else_type: Any) -> WhenCodec:
        """Return a new conditional codec with ``else_type`` as the alternate."""
        return WhenCodec(self.condition, self.then_type, else_type)

    otherwise = else_

    def _branch(self, scope: Scope | None) -> Codec | None:
        if resolve(scope, self.condition):
            return self.then_type
        return self.else_type

    def read(self, ctx: Context) -> Any:
        branch = self._branch(ctx.scope)
        return branch.read(ctx) if branch is not None else None

    def write(self, ctx: Context, value: Any) -> None:
        branch = self._branch(ctx.scope)
        if branch is not None:
            branch.write(ctx, value)

    def size(self, value: Any = None, parent: Scope | None = None) -> int:
        branch = self._branch(parent)
        return branch.size(value, parent) if branch is not None else 0

    def __repr__(self) -> str:
        if self.else_type is None:
            return f"when({self.condition!r}, {self.then_type!r})"
        return f"when({self.condition!r}, {self.then_type!r}).else_({self.else_type!r})"


class SkipCodec(Codec):
    """Padding: advances the cursor by a resolved byte count, produces no value."""

    optional = True

    def __init__(self, length: Any) -> None:
        self.length = length
        self.static_size = _static(length)

    def read(self, ctx: Context) -> None:
        length = _count(ctx.scope, self.length, "skip length")
        ctx.require(length)
        ctx.skip(length)

    def write(self, ctx: Context, value: Any = None) -> None:
        ctx.reserve(_count(ctx.scope, self.length, "skip length"))

    def size(self, value: Any = None, parent: Scope | None = None) -> int:
        if self.static_size is not None:
            return self.static_size
        return _count(parent, self.length, "skip length")

    def __repr__(self) -> str:
        return f"skip({self.length!r})"


def buffer(length: Any) -> BufferCodec:
    """Raw bytes of ``length`` bytes (literal, path or function)."""
    return BufferCodec(length)


def string(length: Any, encoding: str | None = None) -> StringCodec:
    """Text of exactly ``length`` encoded bytes."""
    return StringCodec(length, encoding)


# short alias kept for single-byte-charset formats
char = string


def dynstring(length_type: Any, encoding: str | None = None) -> DynamicStringCodec:
    """Text prefixed by its byte length, written with ``length_type``."""
    return DynamicStringCodec(length_type, encoding)


def array(length: Any, element_type: Any) -> ArrayCodec:
    """``length`` elements (literal, path or function) of ``element_type``."""
    return ArrayCodec(length, element_type)


def dynarray(length_type: Any, element_type: Any) -> DynamicArrayCodec:
    """Elements of ``element_type`` prefixed by their count, written with ``length_type``."""
    return DynamicArrayCodec(length_type, element_type)


def when(condition: Any, then_type: Any) -> WhenCodec:
    """``then_type`` if ``condition`` resolves truthy; chain ``.else_()`` for an alternate."""
    return WhenCodec(condition, then_type)


if_ = when


def skip(length: Any) -> SkipCodec:
    """Padding of ``length`` bytes (literal, path or function)."""
    return SkipCodec(length)


PRIMITIVES: dict[str, Codec] = {
    "int8": int8,
    "uint8": uint8,
    "bool": boolean,
    "int16": int16,
    "uint16": uint16,
    "int16be": int16be,
    "uint16be": uint16be,
    "int32": int32,
    "uint32": uint32,
    "int32be": int32be,
    "uint32be": uint32be,
    "int64": int64,
    "uint64": uint64,
    "int64be": int64be,
    "uint64be": uint64be,
    "float": float32,
    "floatbe": float32be,
    "double": float64,
    "doublebe": float64be,
}

for _name, _codec in PRIMITIVES.items():
    register_type(_name, _codec)
