#!/usr/bin/env python3
"""Basic usage example for structkit.

This example demonstrates:
1. Declaring a record whose layout depends on its own fields
2. Encoding a value to bytes
3. Decoding it back
4. Calculating sizes
"""

from __future__ import annotations

from structkit import Record, array, encoded_size, field_sizes, skip, string, uint8, uint16be, when

# A directory listing: fixed header, then `count` names of `name_size` bytes each.
Listing = Record(
    [
        ("version", uint8),
        ("has_owner", uint8),
        ("owner", when("has_owner", uint16be)),
        ("count", uint8),
        ("name_size", uint8),
        skip(2),
        ("names", array("count", string("name_size"))),
    ]
)


def main() -> None:
    """Run the basic usage example."""
    print("=" * 60)
    print("structkit Basic Usage Example")
    print("=" * 60)
    print()

    value = {
        "version": 1,
        "has_owner": 1,
        "owner": 1000,
        "count": 3,
        "name_size": 4,
        "names": ["boot", "home", "var "],
    }

    print("1. Value to encode...")
    for key, item in value.items():
        print(f"   {key}: {item!r}")
    print()

    print("2. Analyzing field sizes...")
    for field_name, size in field_sizes(Listing, value).items():
        print(f"   {field_name}: {size} bytes")
    print(f"   Total: {encoded_size(Listing, value)} bytes")
    print()

    print("3. Encoding...")
    data = Listing.encode(value)
    print(f"   Hex: {data.hex()}")
    print()

    print("4. Decoding...")
    decoded = Listing.decode(data)
    print(f"   {decoded}")
    assert decoded == value
    print("   Round trip OK")
    print()

    print("5. Without an owner the field is skipped entirely...")
    no_owner = {**value, "has_owner": 0, "owner": None}
    print(f"   {len(Listing.encode(no_owner))} bytes (was {len(data)})")


if __name__ == "__main__":
    main()
