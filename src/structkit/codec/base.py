"""Codec abstraction shared by every primitive and composite type.

A codec knows how to read one binary shape from a Context, write it back, and
compute how many bytes a given value occupies. The entry points
(decode/encode/encode_into) and the transform combinators (map_read,
map_write, map) are derived from those three operations.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Callable, Iterable

from ..exceptions import UnimplementedError
from .context import BytesLike, Context, Scope, to_context

if TYPE_CHECKING:
    from .adapters import AbstractEncoding

Mapper = Callable[[Any], Any]


class Codec:
    """Base class for all codecs.

    Subclasses override read(), write() and size(). A codec whose size never
    depends on the value sets ``static_size``; the default size() returns it.

    Attributes:
        static_size: Byte size independent of value and context, or None
        optional: True if the codec may legitimately produce no value
            (records then accept the field being absent on write)

    Example:
        >>> data = uint16be.encode(0x0102)
        >>> data
        b'\\x01\\x02'
        >>> uint16be.decode(data)
        258
    """

    static_size: int | None = None
    optional: bool = False

    def read(self, ctx: Context) -> Any:
        """Read a value at the cursor and advance it."""
        raise UnimplementedError(f"{self!r} does not implement read")

    def write(self, ctx: Context, value: Any) -> None:
        """Write ``value`` at the cursor and advance it."""
        raise UnimplementedError(f"{self!r} does not implement write")

    def size(self, value: Any = None, parent: Scope | None = None) -> int:
        """Return the number of bytes ``value`` occupies.

        Args:
            value: Value to measure
            parent: Scope of the enclosing record, used for value paths
        """
        if self.static_size is not None:
            return self.static_size
        raise UnimplementedError(f"{self!r} does not implement size")

    # -- entry points -----------------------------------------------------

    def decode(self, data: BytesLike | Context, parent: Any = None) -> Any:
        """Decode a value from a buffer or an existing Context.

        Args:
            data: Bytes-like buffer (read from offset 0) or a Context
            parent: Explicit parent record so ``../`` paths resolve at the top level

        Raises:
            InvalidInputKindError: If data is neither bytes-like nor a Context
            DecodeError: If the data does not match the layout
        """
        ctx = to_context(data)
        if parent is None:
            return self.read(ctx)
        with ctx.enter(parent):
            return self.read(ctx)

    def encode(self, value: Any, parent: Any = None) -> bytes:
        """Encode a value into a new bytes object."""
        buffer, _ = self.encode_into(value, parent=parent)
        return bytes(buffer)

    def encode_into(
        self,
        value: Any,
        buffer: bytearray | memoryview | None = None,
        offset: int = 0,
        parent: Any = None,
    ) -> tuple[bytearray | memoryview, int]:
        """Encode a value into a buffer.

        If no buffer is given, one of exactly ``offset + size(value)`` zero
        bytes is allocated.

        Args:
            value: Value to encode
            buffer: Optional pre-allocated destination
            offset: Position in the buffer to start writing at
            parent: Explicit parent record so ``../`` paths resolve at the top level

        Returns:
            Tuple of (buffer, number of bytes written)

        Raises:
            EncodeError: If the value does not fit the layout
        """
        scope = Scope(parent) if parent is not None else None
        if buffer is None:
            buffer = bytearray(offset + self.size(value, scope))

        ctx = Context(buffer, offset, scope)
        self.write(ctx, value)
        return buffer, ctx.offset - offset

    def as_encoding(self) -> AbstractEncoding:
        """Expose this codec as an encode/decode/encoding_length triple."""
        from .adapters import AbstractEncoding

        return AbstractEncoding(self)

    # -- transforms -------------------------------------------------------

    def map_read(self, fn: Mapper) -> MappedCodec:
        """Return a new codec that applies ``fn`` to every decoded value."""
        return MappedCodec(self, read_mappers=(fn,))

    def map_write(self, fn: Mapper) -> MappedCodec:
        """Return a new codec that applies ``fn`` to every value before writing."""
        return MappedCodec(self, write_mappers=(fn,))

    def map(self, read: Mapper | None = None, write: Mapper | None = None) -> MappedCodec:
        """Return a new codec with both a read and a write mapper."""
        return MappedCodec(
            self,
            read_mappers=(read,) if read else (),
            write_mappers=(write,) if write else (),
        )

    def transform(self, fn: Mapper) -> MappedCodec:
        """Alias of map_read()."""
        return self.map_read(fn)

    @staticmethod
    def define(
        read: Callable[[Context], Any],
        write: Callable[[Context, Any], None] | None = None,
        size: int | Callable[..., int] | None = None,
    ) -> Codec:
        """Build a codec from plain functions.

        Args:
            read: ``read(ctx) -> value``
            write: ``write(ctx, value)``, omit for a read-only codec
            size: Constant byte size or ``size(value, record) -> int``

        Example:
            >>> thousands = Codec.define(
            ...     read=lambda ctx: int8.read(ctx) * 1000,
            ...     write=lambda ctx, v: int8.write(ctx, v // 1000),
            ...     size=1,
            ... )
        """
        from .adapters import CustomCodec

        return CustomCodec(read, write, size)


class MappedCodec(Codec):
    """A codec with value mappers around another codec.

    Read mappers run in registration order after the inner read. Write
    mappers run in reverse registration order before the inner write, so
    ``c.map(f1, g1).map(f2, g2)`` reads ``f2(f1(x))`` and writes ``g1(g2(v))``.
    Size is computed on the write-mapped value. Offsets are never affected.
    """

    def __init__(
        self,
        inner: Codec,
        read_mappers: Iterable[Mapper] = (),
        write_mappers: Iterable[Mapper] = (),
    ) -> None:
        self.inner = inner
        self.read_mappers = tuple(read_mappers)
        self.write_mappers = tuple(write_mappers)

    @property
    def static_size(self) -> int | None:  # type: ignore[override]
        return self.inner.static_size

    @property
    def optional(self) -> bool:  # type: ignore[override]
        return self.inner.optional

    def read(self, ctx: Context) -> Any:
        value = self.inner.read(ctx)
        for fn in self.read_mappers:
            value = fn(value)
        return value

    def write(self, ctx: Context, value: Any) -> None:
        self.inner.write(ctx, self.unmap(value))

    def size(self, value: Any = None, parent: Scope | None = None) -> int:
        if self.static_size is not None:
            return self.static_size
        return self.inner.size(self.unmap(value), parent)

    def unmap(self, value: Any) -> Any:
        """Apply the write mappers to a value."""
        for fn in reversed(self.write_mappers):
            value = fn(value)
        return value

    def map_read(self, fn: Mapper) -> MappedCodec:
        return MappedCodec(self.inner, (*self.read_mappers, fn), self.write_mappers)

    def map_write(self, fn: Mapper) -> MappedCodec:
        return MappedCodec(self.inner, self.read_mappers, (*self.write_mappers, fn))

    def map(self, read: Mapper | None = None, write: Mapper | None = None) -> MappedCodec:
        return MappedCodec(
            self.inner,
            (*self.read_mappers, read) if read else self.read_mappers,
            (*self.write_mappers, write) if write else self.write_mappers,
        )

    def __repr__(self) -> str:
        return f"{self.inner!r}.map(read={len(self.read_mappers)}, write={len(self.write_mappers)})"
