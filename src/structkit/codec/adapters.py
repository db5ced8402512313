"""Adapters between structkit codecs and other codec shapes.

- CustomCodec: a codec assembled from plain read/write/size functions
- ExternalCodec: wraps a foreign codec exposing encode/decode/encoding_length
  so it can be used as a field type
- AbstractEncoding: the reverse direction, exposing any structkit codec as an
  encode/decode/encoding_length triple
"""

from __future__ import annotations

from typing import Any, Callable

from ..exceptions import UnimplementedError
from .base import Codec
from .context import BytesLike, Context, Scope


class CustomCodec(Codec):
    """Codec built from user-supplied functions.

    ``write`` and ``size`` are optional; invoking a missing one raises
    UnimplementedError, so read-only codecs are legal.
    """

    def __init__(
        self,
        read: Callable[[Context], Any],
        write: Callable[[Context, Any], None] | None = None,
        size: int | Callable[..., int] | None = None,
    ) -> None:
        if not callable(read):
            raise TypeError(f"read must be callable, got {type(read).__name__}")
        self._read = read
        self._write = write
        self._size = size
        if isinstance(size, int) and not isinstance(size, bool):
            self.static_size = size

    def read(self, ctx: Context) -> Any:
        return self._read(ctx)

    def write(self, ctx: Context, value: Any) -> None:
        if self._write is None:
            raise UnimplementedError(f"{self!r} is read-only: write is not implemented")
        self._write(ctx, value)

    def size(self, value: Any = None, parent: Scope | None = None) -> int:
        if self.static_size is not None:
            return self.static_size
        if self._size is None:
            raise UnimplementedError(f"{self!r} does not implement size")
        return self._size(value, parent.record if parent is not None else None)

    def __repr__(self) -> str:
        return f"CustomCodec({getattr(self._read, '__qualname__', self._read)!r})"


class ExternalCodec(Codec):
    """Field type backed by a foreign encode/decode/encoding_length codec.

    The foreign codec reads and writes directly in the shared buffer at the
    cursor offset; ``decode.bytes`` / ``encode.bytes`` (or the encoding
    length of the value) tell how far to advance the cursor.
    """

    def __init__(self, external: Any) -> None:
        self.external = external
        self._length = getattr(external, "encoding_length", None) or getattr(
            external, "encodingLength", None
        )

    def read(self, ctx: Context) -> Any:
        decoder = self.external.decode
        value = decoder(ctx.buffer, ctx.offset)
        consumed = getattr(decoder, "bytes", None)
        if consumed is None:
            consumed = self.size(value)
        ctx.require(consumed)
        ctx.skip(consumed)
        return value

    def write(self, ctx: Context, value: Any) -> None:
        encoder = self.external.encode
        encoder(value, ctx.buffer, ctx.offset)
        written = getattr(encoder, "bytes", None)
        if written is None:
            written = self.size(value)
        ctx.reserve(written)

    def size(self, value: Any = None, parent: Scope | None = None) -> int:
        if self._length is None:
            raise UnimplementedError(
                f"{type(self.external).__name__} has no encoding_length; size is unknown"
            )
        return int(self._length(value))

    def __repr__(self) -> str:
        return f"ExternalCodec({self.external!r})"


class _EncodeFunction:
    """Callable ``encode(value, buffer=None, offset=0)`` recording ``bytes``."""

    def __init__(self, codec: Codec) -> None:
        self._codec = codec
        self.bytes = 0

    def __call__(
        self, value: Any, buffer: bytearray | memoryview | None = None, offset: int = 0
    ) -> bytearray | memoryview:
        buffer, written = self._codec.encode_into(value, buffer, offset)
        self.bytes = written
        return buffer


class _DecodeFunction:
    """Callable ``decode(buffer, start=0, end=None)`` recording ``bytes``."""

    def __init__(self, codec: Codec) -> None:
        self._codec = codec
        self.bytes = 0

    def __call__(self, buffer: BytesLike, start: int = 0, end: int | None = None) -> Any:
        view = buffer if end is None else memoryview(buffer)[:end]
        ctx = Context(view, start)
        value = self._codec.read(ctx)
        self.bytes = ctx.offset - start
        return value


class AbstractEncoding:
    """A structkit codec exposed as an encode/decode/encoding_length triple.

    Example:
        >>> enc = Record([("a", int8), ("b", int8)]).as_encoding()
        >>> enc.encode({"a": 1, "b": 2})
        bytearray(b'\\x01\\x02')
        >>> enc.encode.bytes
        2
        >>> enc.decode(b"\\x01\\x02")
        {'a': 1, 'b': 2}
    """

    def __init__(self, codec: Codec) -> None:
        self.codec = codec
        self.encode = _EncodeFunction(codec)
        self.decode = _DecodeFunction(codec)

    def encoding_length(self, value: Any) -> int:
        return self.codec.size(value)

    def __repr__(self) -> str:
        return f"AbstractEncoding({self.codec!r})"
