#!/usr/bin/env python3
"""Record models example for structkit.

This example demonstrates:
1. Declaring binary records as Pydantic models
2. Nested models sized by fields of the enclosing record
3. A custom registered type (24-bit integer)
4. Using the models from the command line

Try:
    structkit --decode examples/model_records.py:Message 010000020301414243 --sizes
"""

from __future__ import annotations

from typing import Annotated, List

from pydantic import Field

from structkit import BaseRecord, Codec, array, register_type, string, uint8


def _read_u24(ctx):
    return int.from_bytes(ctx.read_bytes(3), "big")


def _write_u24(ctx, value):
    ctx.write_bytes(value.to_bytes(3, "big"))


uint24be = register_type("uint24be", Codec.define(read=_read_u24, write=_write_u24, size=3), replace=True)


class Tag(BaseRecord):
    """Fixed-width tag; its width comes from the enclosing message."""

    text: Annotated[str, string("../tag_size")]


class Message(BaseRecord):
    """Message with a 24-bit sequence number and a list of tags."""

    version: Annotated[int, uint8, Field(ge=1, le=3)]
    sequence: Annotated[int, "uint24be"]
    tag_size: Annotated[int, uint8]
    tag_count: Annotated[int, uint8] = 0
    tags: Annotated[List[Tag], array("tag_count", Tag)] = []


def main() -> None:
    """Run the record models example."""
    print("=" * 60)
    print("structkit Record Models Example")
    print("=" * 60)
    print()

    msg = Message(
        version=1,
        sequence=70000,
        tag_size=3,
        tag_count=2,
        tags=[Tag(text="abc"), Tag(text="xyz")],
    )
    print(f"1. Message: {msg}")
    print(f"   Encoded size: {msg.encoded_size()} bytes")

    data = msg.encode()
    print(f"2. Encoded: {data.hex()}")

    decoded = Message.decode(data)
    print(f"3. Decoded: {decoded}")
    assert decoded == msg
    print("   Round trip OK")


if __name__ == "__main__":
    main()
