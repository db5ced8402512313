"""Property-based tests using hypothesis."""

from __future__ import annotations

from typing import Annotated, Any

from hypothesis import given
from hypothesis import strategies as st

from structkit import (
    BaseRecord,
    Context,
    Record,
    array,
    boolean,
    buffer,
    dynarray,
    dynstring,
    int16,
    uint8,
    uint16be,
    uint32,
    when,
)


class Telemetry(BaseRecord):
    """Model for property testing."""

    flag: Annotated[bool, boolean]
    value: Annotated[int, uint16be]
    extra: Annotated[int | None, when("flag", uint32)] = None


Frame = Record(
    [
        ("kind", uint8),
        ("count", uint8),
        ("samples", array("count", int16)),
        ("name", dynstring(uint8)),
        ("blob", dynarray(uint8, uint8)),
    ]
)

frames = st.fixed_dictionaries(
    {
        "kind": st.integers(min_value=0, max_value=255),
        "samples": st.lists(st.integers(min_value=-32768, max_value=32767), max_size=20),
        "name": st.text(max_size=20).filter(lambda s: len(s.encode("utf-8")) < 256),
        "blob": st.lists(st.integers(min_value=0, max_value=255), max_size=20),
    }
).map(lambda d: {**d, "count": len(d["samples"])})


def _ordered(value: dict[str, Any]) -> dict[str, Any]:
    return {name: value[name] for name in Frame.names}


class TestCodecProperties:
    """Property-based tests for codecs."""

    @given(value=frames)
    def test_record_roundtrip(self, value: dict[str, Any]) -> None:
        """Test decode(encode(v)) == v for well-formed values."""
        assert Frame.decode(Frame.encode(value)) == _ordered(value)

    @given(value=frames)
    def test_size_matches_encoding(self, value: dict[str, Any]) -> None:
        """Test size() is exactly the number of bytes written."""
        assert Frame.size(value) == len(Frame.encode(value))

    @given(value=frames, prefix=st.binary(max_size=8))
    def test_cursor_advances_by_size(self, value: dict[str, Any], prefix: bytes) -> None:
        """Test reading at an offset consumes exactly size() bytes."""
        data = prefix + Frame.encode(value)
        ctx = Context(data, offset=len(prefix))
        Frame.read(ctx)
        assert ctx.offset == len(data)

    @given(value=st.binary(max_size=16), length=st.integers(min_value=0, max_value=16))
    def test_buffer_always_exact_length(self, value: bytes, length: int) -> None:
        """Test buffers are truncated or zero-filled to the declared length."""
        data = buffer(length).encode(value)
        assert len(data) == length
        assert data == value[:length] + bytes(length - min(length, len(value)))

    @given(flag=st.booleans(), value=st.integers(min_value=0, max_value=0xFFFF), extra=st.integers(min_value=0, max_value=0xFFFFFFFF))
    def test_model_roundtrip(self, flag: bool, value: int, extra: int) -> None:
        """Test model encode/decode is invertible."""
        msg = Telemetry(flag=flag, value=value, extra=extra if flag else None)
        data = msg.encode()
        assert len(data) == (7 if flag else 3)
        assert Telemetry.decode(data) == msg

    @given(value=frames)
    def test_encode_deterministic(self, value: dict[str, Any]) -> None:
        """Test encoding the same value twice gives the same bytes."""
        assert Frame.encode(value) == Frame.encode(dict(value))
