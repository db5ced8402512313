"""Cursor context threaded through every read and write call.

A Context pairs a byte buffer with a mutable cursor offset and the Scope of
the record currently being decoded or encoded. Scopes form the parent chain
used by value paths such as ``../size``.
"""

from __future__ import annotations

from contextlib import contextmanager
from dataclasses import dataclass
from typing import Any, Iterator, Optional, Union

from ..exceptions import EncodeError, InvalidInputKindError, TruncatedDataError

BytesLike = Union[bytes, bytearray, memoryview]


@dataclass(frozen=True)
class Scope:
    """One link of the record chain.

    Attributes:
        record: Record being decoded/encoded at this level (a mapping, or any
            object for explicit parents)
        parent: Enclosing scope, or None at the outermost level
    """

    record: Any
    parent: Optional[Scope] = None

    @property
    def root(self) -> Scope:
        """Return the outermost scope of the chain."""
        scope = self
        while scope.parent is not None:
            scope = scope.parent
        return scope


class Context:
    """Buffer, cursor and record scope for one decode or encode pass.

    Example:
        >>> ctx = Context(b"\\x01\\x02")
        >>> uint8.read(ctx)
        1
        >>> ctx.offset
        1
    """

    __slots__ = ("buffer", "offset", "scope")

    def __init__(self, buffer: BytesLike, offset: int = 0, scope: Scope | None = None) -> None:
        """Initialize a context.

        Args:
            buffer: Source (decode) or destination (encode) buffer
            offset: Starting cursor position
            scope: Record scope in effect, None at the root
        """
        if not isinstance(buffer, (bytes, bytearray, memoryview)):
            raise InvalidInputKindError(
                f"Context buffer must be bytes-like, got {type(buffer).__name__}"
            )
        if offset < 0:
            raise ValueError(f"offset must be >= 0, got {offset}")
        self.buffer = buffer
        self.offset = offset
        self.scope = scope

    @property
    def record(self) -> Any:
        """Return the record of the current scope, or None at the root."""
        return self.scope.record if self.scope is not None else None

    def remaining(self) -> int:
        """Return the number of bytes left after the cursor."""
        return len(self.buffer) - self.offset

    def read_bytes(self, num_bytes: int) -> bytes:
        """Read raw bytes at the cursor and advance it.

        Args:
            num_bytes: Number of bytes to read

        Returns:
            An independent copy of the bytes

        Raises:
            TruncatedDataError: If not enough bytes are available
        """
        self.require(num_bytes)
        start = self.offset
        self.offset += num_bytes
        return bytes(self.buffer[start : self.offset])

    def require(self, num_bytes: int) -> None:
        """Check that ``num_bytes`` can be read at the cursor.

        Raises:
            TruncatedDataError: If not enough bytes are available
        """
        if num_bytes < 0:
            raise ValueError(f"Cannot read a negative number of bytes: {num_bytes}")
        if num_bytes > self.remaining():
            raise TruncatedDataError(
                f"Truncated data: need {num_bytes} bytes at offset {self.offset}, "
                f"have {max(self.remaining(), 0)}"
            )

    def write_bytes(self, data: BytesLike) -> None:
        """Copy bytes into the buffer at the cursor and advance it.

        Raises:
            EncodeError: If the buffer is read-only or too small
        """
        end = self.offset + len(data)
        self._check_writable(end)
        self.buffer[self.offset : end] = data  # type: ignore[index]
        self.offset = end

    def fill(self, num_bytes: int, value: int = 0) -> None:
        """Write ``num_bytes`` copies of ``value`` and advance the cursor."""
        self.write_bytes(bytes([value]) * num_bytes)

    def skip(self, num_bytes: int) -> None:
        """Advance the cursor without touching the buffer."""
        if num_bytes < 0:
            raise ValueError(f"Cannot skip a negative number of bytes: {num_bytes}")
        self.offset += num_bytes

    def reserve(self, num_bytes: int) -> None:
        """Advance the cursor over output bytes that are left as they are.

        Raises:
            EncodeError: If the buffer is read-only or too small
        """
        if num_bytes < 0:
            raise ValueError(f"Cannot skip a negative number of bytes: {num_bytes}")
        self._check_writable(self.offset + num_bytes)
        self.offset += num_bytes

    def _check_writable(self, end: int) -> None:
        if isinstance(self.buffer, bytes) or (
            isinstance(self.buffer, memoryview) and self.buffer.readonly
        ):
            raise EncodeError("Cannot write into a read-only buffer")
        if end > len(self.buffer):
            raise EncodeError(
                f"Buffer too small: need {end} bytes, buffer has {len(self.buffer)}"
            )

    @contextmanager
    def enter(self, record: Any) -> Iterator[Scope]:
        """Push a scope for ``record`` for the duration of the block.

        Nested codecs see ``record`` as the current record and the previous
        scope as its parent. The previous scope is restored on exit, also when
        a field fails.
        """
        outer = self.scope
        self.scope = Scope(record, outer)
        try:
            yield self.scope
        finally:
            self.scope = outer

    def __repr__(self) -> str:
        return f"Context(offset={self.offset}, length={len(self.buffer)})"


def to_context(data: Any) -> Context:
    """Build a Context for a decode entry point.

    Args:
        data: Raw bytes-like buffer (read from offset 0) or an existing Context

    Returns:
        Context ready for reading

    Raises:
        InvalidInputKindError: If data is neither bytes-like nor a Context
    """
    if isinstance(data, Context):
        return data
    if isinstance(data, (bytes, bytearray, memoryview)):
        return Context(data)
    raise InvalidInputKindError(
        f"First argument to decode must be bytes or a Context, got {type(data).__name__}"
    )
