"""Unit tests for record composition."""

from __future__ import annotations

import pytest

from structkit import (
    Context,
    DecodeError,
    FieldReadError,
    MissingFieldError,
    NoParentRecordError,
    Record,
    SchemaError,
    TruncatedDataError,
    UnknownTypeError,
    array,
    int8,
    string,
    uint8,
)


class TestRecordDefinition:
    """Test the ways of declaring fields."""

    def test_mapping(self) -> None:
        """Test a mapping of name to type."""
        rec = Record({"name": int8, "other_name": int8})
        assert rec.decode(b"\x01\x02") == {"name": 1, "other_name": 2}

    def test_pairs(self) -> None:
        """Test a sequence of (name, type) pairs."""
        rec = Record([("a", int8), ("b", int8), ("c", int8)])
        assert rec.decode(b"\x01\x02\x03") == {"a": 1, "b": 2, "c": 3}
        assert rec.names == ["a", "b", "c"]

    def test_add_field(self) -> None:
        """Test incremental definition with add_field()/field()."""
        rec = Record().field("name", int8)
        assert rec.decode(b"\x01\x02") == {"name": 1}

        rec.add_field("other_name", int8)
        assert rec.decode(b"\x01\x02") == {"name": 1, "other_name": 2}

    def test_add_field_returns_self(self) -> None:
        """Test add_field() chains."""
        rec = Record()
        assert rec.add_field("a", int8).add_field("b", "uint16") is rec
        assert rec.static_size == 3

    def test_duplicate_name(self) -> None:
        """Test a field name can only be used once."""
        with pytest.raises(SchemaError, match="Duplicate field name"):
            Record([("a", int8), ("a", uint8)])

    def test_invalid_name(self) -> None:
        """Test field names must be non-empty strings."""
        with pytest.raises(SchemaError):
            Record().add_field("", int8)

    def test_unknown_type(self) -> None:
        """Test unknown type names fail at definition time."""
        with pytest.raises(UnknownTypeError, match="int7"):
            Record({"a": "int7"})

    def test_fields_is_read_only_view(self) -> None:
        """Test the fields property exposes resolved codecs in order."""
        rec = Record([("a", "int8"), ("b", uint8)])
        assert rec.fields == (("a", int8), ("b", uint8))


class TestNesting:
    """Test nested records and cursor continuity."""

    def test_continues_after_nested(self) -> None:
        """Test reading resumes after a nested record."""
        rec = Record([("nested", Record([("value", int8)])), ("value", int8)])
        assert rec.decode(b"\x01\x02") == {"nested": {"value": 1}, "value": 2}

    def test_continues_after_array_of_records(self) -> None:
        """Test reading resumes after records inside an array."""
        rec = Record([("array", array(1, Record([("value", int8)]))), ("value", int8)])
        assert rec.decode(b"\x01\x02") == {"array": [{"value": 1}], "value": 2}

    def test_parent_path_inside_array(self) -> None:
        """Test array elements see the enclosing record as parent."""
        rec = Record(
            [
                ("size", int8),
                ("array", array(1, Record([("array", array("../size", int8))]))),
            ]
        )
        assert rec.decode(b"\x01\x02") == {"size": 1, "array": [{"array": [2]}]}

    def test_parent_path(self) -> None:
        """Test ../ from a nested record."""
        rec = Record(
            [
                ("size", int8),
                ("b", Record([("text1", string("../size")), ("text2", string("../size"))])),
            ]
        )
        assert rec.decode(b"\x02  hi") == {"size": 2, "b": {"text1": "  ", "text2": "hi"}}

    def test_parent_path_through_embedded(self) -> None:
        """Test embedded (unnamed) records add a level to the parent chain."""
        rec = Record(
            [
                ("size", int8),
                ("b", Record([Record([("text1", string("../../size"))])])),
                ("c", array(2, Record([("text2", string("../size"))]))),
            ]
        )
        assert rec.decode(b"\x05helloworldabcde") == {
            "size": 5,
            "b": {"text1": "hello"},
            "c": [{"text2": "world"}, {"text2": "abcde"}],
        }

    def test_root_path(self) -> None:
        """Test / reaches the outermost record from any depth."""
        inner = Record([("text", string("/size"))])
        rec = Record([("size", int8), ("a", Record([("b", inner)]))])
        value = {"size": 2, "a": {"b": {"text": "ok"}}}
        assert rec.decode(b"\x02ok") == value
        assert rec.encode(value) == b"\x02ok"

    def test_function_spec(self) -> None:
        """Test a callable length computed from the current record."""
        rec = Record([("size", int8), ("double", array(lambda record: record["size"] * 2, int8))])
        assert rec.decode(b"\x02  hi") == {"size": 2, "double": [0x20, 0x20, 0x68, 0x69]}


class TestExplicitParent:
    """Test decoding with a caller-supplied parent record."""

    def test_missing_parent(self) -> None:
        """Test ../ at the top level without a parent fails clearly."""
        rec = Record({"value": array("../length", int8)})
        with pytest.raises(FieldReadError, match="cannot access nonexistent parent") as exc_info:
            rec.decode(b"\x00\x01\x02")
        assert isinstance(exc_info.value.cause, NoParentRecordError)

    def test_parent_argument(self) -> None:
        """Test the parent record resolves ../ paths."""
        rec = Record({"value": array("../length", int8)})
        assert rec.decode(b"\x00\x01\x02", parent={"length": 2}) == {"value": [0, 1]}

    def test_parent_on_encode(self) -> None:
        """Test encoding with a parent record."""
        rec = Record({"value": array("../length", int8)})
        assert rec.encode({"value": [4, 5]}, parent={"length": 2}) == b"\x04\x05"


class TestReadErrors:
    """Test error reporting for failed reads."""

    def test_nested_path_in_message(self) -> None:
        """Test the failing field is named by its full dotted path."""
        rec = Record(
            [
                (
                    "nesting",
                    Record([("a", int8), ("b", Record([("fails", array(1000, int8))]))]),
                )
            ]
        )
        with pytest.raises(FieldReadError, match="Error reading 'nesting.b.fails'") as exc_info:
            rec.decode(bytes([1, 2, 3, 4, 5, 6]))

        err = exc_info.value
        assert err.path == ("nesting", "b", "fails")
        assert isinstance(err.cause, TruncatedDataError)
        assert isinstance(err, DecodeError)

    def test_unnamed_field_label(self) -> None:
        """Test failures in unnamed fields are labelled by position."""
        rec = Record([("a", int8), array(4, int8)])
        with pytest.raises(FieldReadError, match="<unnamed 1>"):
            rec.decode(b"\x01\x02")

    def test_embedded_record_path(self) -> None:
        """Test embedded records do not add their own name."""
        rec = Record([("outer", Record([Record([("x", array(8, int8))])]))])
        with pytest.raises(FieldReadError, match="Error reading 'outer.x'"):
            rec.decode(b"\x00")

    def test_scope_restored_after_error(self) -> None:
        """Test a failed read leaves the context at the root scope."""
        ctx = Context(b"\x01")
        with pytest.raises(FieldReadError):
            Record([("a", int8), ("b", int8)]).read(ctx)
        assert ctx.scope is None


class TestRecordWrite:
    """Test encoding records."""

    def test_encode(self) -> None:
        """Test fields are written in declaration order."""
        rec = Record([("a", int8), ("b", uint8)])
        assert rec.encode({"b": 2, "a": -1}) == b"\xff\x02"

    def test_missing_field(self) -> None:
        """Test a missing required field raises MissingFieldError."""
        rec = Record([("a", int8), ("b", int8)])
        with pytest.raises(MissingFieldError, match="missing field 'b'"):
            rec.encode({"a": 1})

    def test_missing_field_is_key_error(self) -> None:
        """Test MissingFieldError can be caught as KeyError."""
        with pytest.raises(KeyError):
            Record({"a": int8}).encode({})

    def test_extra_keys_ignored(self) -> None:
        """Test keys that are not fields are not written."""
        assert Record({"a": int8}).encode({"a": 1, "zzz": 9}) == b"\x01"

    def test_size_matches_encoding(self) -> None:
        """Test size() equals the length of encode()."""
        rec = Record([("n", uint8), ("items", array("n", Record([("len", uint8), ("s", string("len"))])))])
        value = {"n": 2, "items": [{"len": 1, "s": "a"}, {"len": 3, "s": "bcd"}]}
        data = rec.encode(value)
        assert rec.size(value) == len(data) == 7
        assert rec.decode(data) == value

    def test_repr(self) -> None:
        """Test the representation lists the fields."""
        assert repr(Record([("a", int8)])) == "Record(a=int8)"
