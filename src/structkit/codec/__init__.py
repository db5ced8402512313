"""Binary codec combinator engine for structkit.

This package provides the cursor context, the value resolver, the codec
abstraction with its transform combinators, the primitive codec library,
record composition and the named type registry.
"""

from __future__ import annotations

from .adapters import AbstractEncoding, CustomCodec, ExternalCodec
from .base import Codec, MappedCodec
from .context import Context, Scope, to_context
from .primitives import (
    ArrayCodec,
    BoolCodec,
    BufferCodec,
    DynamicArrayCodec,
    DynamicStringCodec,
    NumberCodec,
    SkipCodec,
    StringCodec,
    WhenCodec,
    array,
    boolean,
    buffer,
    char,
    dynarray,
    dynstring,
    float32,
    float32be,
    float64,
    float64be,
    if_,
    int8,
    int16,
    int16be,
    int32,
    int32be,
    int64,
    int64be,
    skip,
    string,
    uint8,
    uint16,
    uint16be,
    uint32,
    uint32be,
    uint64,
    uint64be,
    when,
)
from .record import Record
from .registry import TYPE_REGISTRY, get_type, register_type, registered_types
from .resolve import resolve
from .schema import FieldSchema, RecordSchema

__all__ = [
    # Core
    "Codec",
    "MappedCodec",
    "Record",
    "Context",
    "Scope",
    "to_context",
    "resolve",
    # Registry
    "TYPE_REGISTRY",
    "get_type",
    "register_type",
    "registered_types",
    # Adapters
    "AbstractEncoding",
    "CustomCodec",
    "ExternalCodec",
    # Schema
    "RecordSchema",
    "FieldSchema",
    # Codec classes
    "NumberCodec",
    "BoolCodec",
    "BufferCodec",
    "StringCodec",
    "DynamicStringCodec",
    "ArrayCodec",
    "DynamicArrayCodec",
    "WhenCodec",
    "SkipCodec",
    # Primitives
    "int8",
    "uint8",
    "int16",
    "uint16",
    "int16be",
    "uint16be",
    "int32",
    "uint32",
    "int32be",
    "uint32be",
    "int64",
    "uint64",
    "int64be",
    "uint64be",
    "float32",
    "float32be",
    "float64",
    "float64be",
    "boolean",
    # Factories
    "buffer",
    "string",
    "char",
    "dynstring",
    "array",
    "dynarray",
    "when",
    "if_",
    "skip",
]
