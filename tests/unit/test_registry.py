"""Unit tests for the named type registry."""

from __future__ import annotations

import pytest

from structkit import (
    Codec,
    Record,
    SchemaError,
    UnknownTypeError,
    get_type,
    register_type,
    registered_types,
    uint8,
    uint32,
)


class TestGetType:
    """Test field type resolution."""

    def test_codec_passthrough(self) -> None:
        """Test codecs are returned unchanged."""
        assert get_type(uint8) is uint8

    def test_builtin_names(self) -> None:
        """Test the primitive library is registered by name."""
        assert get_type("uint32") is uint32
        for name in ("int8", "uint8", "bool", "int16be", "uint64", "float", "doublebe"):
            assert name in registered_types()

    def test_unknown_name(self) -> None:
        """Test unknown names list what is registered."""
        with pytest.raises(UnknownTypeError, match="Registered types"):
            get_type("uint7")

    def test_unknown_object(self) -> None:
        """Test objects with no codec interface are rejected."""
        with pytest.raises(UnknownTypeError, match="No such type"):
            get_type(42)

    def test_unknown_type_is_schema_error(self) -> None:
        """Test UnknownTypeError can be caught as SchemaError."""
        with pytest.raises(SchemaError):
            get_type(object())


class TestRegisterType:
    """Test adding named types."""

    def test_register_and_use(self, clean_registry: dict) -> None:
        """Test a registered name is usable in records."""
        u24 = Codec.define(
            read=lambda ctx: int.from_bytes(ctx.read_bytes(3), "little"),
            write=lambda ctx, v: ctx.write_bytes(v.to_bytes(3, "little")),
            size=3,
        )
        assert register_type("u24", u24) is u24

        rec = Record({"length": "u24"})
        assert rec.decode(b"\x01\x00\x01") == {"length": 0x010001}
        assert rec.encode({"length": 5}) == b"\x05\x00\x00"

    def test_register_record(self, clean_registry: dict) -> None:
        """Test records can be registered and referenced by name."""
        point = register_type("point", Record([("x", uint8), ("y", uint8)]))
        rec = Record([("a", "point"), ("b", "point")])
        assert rec.decode(b"\x01\x02\x03\x04") == {"a": {"x": 1, "y": 2}, "b": {"x": 3, "y": 4}}
        assert get_type("point") is point

    def test_conflict(self, clean_registry: dict) -> None:
        """Test a name cannot be silently rebound."""
        with pytest.raises(SchemaError, match="already registered"):
            register_type("uint8", uint32)

    def test_replace(self, clean_registry: dict) -> None:
        """Test replace=True allows rebinding."""
        register_type("uint8", uint32, replace=True)
        assert get_type("uint8") is uint32

    def test_same_codec_twice(self, clean_registry: dict) -> None:
        """Test re-registering the same codec is harmless."""
        assert register_type("uint8", uint8) is uint8

    def test_invalid_name(self, clean_registry: dict) -> None:
        """Test names must be non-empty strings."""
        with pytest.raises(SchemaError):
            register_type("", uint8)
