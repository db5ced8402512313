"""Decode CLI command."""

from __future__ import annotations

import importlib.util
import json
import sys
from pathlib import Path
from typing import Any

from pydantic import BaseModel

from ..codec.base import Codec
from ..codec.registry import get_type
from ..exceptions import DecodeError, SchemaError
from ..utils.sizing import field_sizes


def load_codec(file_path: Path, name: str) -> Any:
    """Load a codec or record model by name from a Python file.

    Args:
        file_path: Path to Python file containing codec definitions
        name: Module-level name of the codec or BaseRecord subclass

    Returns:
        The object bound to ``name`` in the loaded module

    Raises:
        SchemaError: If the module cannot be loaded or has no such name
    """
    spec = importlib.util.spec_from_file_location("user_module", file_path)
    if spec is None or spec.loader is None:
        raise SchemaError(f"Could not load module from {file_path}")

    module = importlib.util.module_from_spec(spec)
    sys.modules["user_module"] = module
    spec.loader.exec_module(module)

    if not hasattr(module, name):
        raise SchemaError(f"{file_path} defines no codec named {name!r}")
    return getattr(module, name)


def to_jsonable(value: Any) -> Any:
    """Convert a decoded value into something json.dumps accepts.

    Bytes become hex strings and record models become dicts.
    """
    if isinstance(value, BaseModel):
        value = value.model_dump()
    if isinstance(value, (bytes, bytearray)):
        return value.hex()
    if isinstance(value, dict):
        return {key: to_jsonable(item) for key, item in value.items()}
    if isinstance(value, (list, tuple)):
        return [to_jsonable(item) for item in value]
    return value


def decode_hex(file_path: Path, name: str, hex_data: str, show_sizes: bool = False) -> None:
    """Decode hex-encoded bytes with a codec loaded from a file and print JSON.

    Args:
        file_path: Path to Python file containing the codec
        name: Name of the codec within the file
        hex_data: Input bytes as a hex string (whitespace allowed)
        show_sizes: Also print the per-field size breakdown
    """
    codec: Codec = get_type(load_codec(file_path, name))

    try:
        data = bytes.fromhex(hex_data)
    except ValueError as e:
        raise DecodeError(f"Invalid hex input: {e}") from e

    value = codec.decode(data)
    print(json.dumps(to_jsonable(value), indent=2))

    if show_sizes:
        print_size_table(name, codec, value, len(data))


def print_size_table(name: str, codec: Codec, value: Any, input_length: int) -> None:
    """Print the size of each field of a decoded record."""
    sizes = field_sizes(codec, value)
    total = sum(sizes.values())

    print()
    print(f"{'=' * 19} {name} {'=' * 19}")
    for i, (field_name, size) in enumerate(sizes.items(), 1):
        field_desc = f"{i}. {field_name}"
        dots = "." * max(1, 40 - len(field_desc) - len(str(size)))
        print(f"        {field_desc}{dots}{size} bytes")
    print(f"Total: {total} bytes ({input_length} bytes of input)")
