"""structkit: Declarative Binary Record Codecs

A Python library for describing fixed- and variable-layout binary record
formats once and getting a consistent decoder, encoder and size calculator
from that single description.

Key Features:
- Composable codecs: numbers, buffers, strings, arrays, conditionals, padding
- Records whose layout depends on sibling or ancestor fields ("len", "../len")
- Transform combinators (map_read / map_write) and custom codec registration
- Interop with foreign encode/decode/encoding_length codecs
- Optional Pydantic models as record definitions

Quick Start:
    >>> from structkit import Record, array, string, uint8
    >>>
    >>> Greeting = Record([
    ...     ("count", uint8),
    ...     ("size", uint8),
    ...     ("names", array("count", string("size"))),
    ... ])
    >>>
    >>> data = Greeting.encode({"count": 2, "size": 2, "names": ["hi", "yo"]})
    >>> Greeting.decode(data)
    {'count': 2, 'size': 2, 'names': ['hi', 'yo']}
"""

from __future__ import annotations

from .codec import (
    AbstractEncoding,
    Codec,
    Context,
    CustomCodec,
    ExternalCodec,
    MappedCodec,
    Record,
    RecordSchema,
    Scope,
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
    get_type,
    if_,
    int8,
    int16,
    int16be,
    int32,
    int32be,
    int64,
    int64be,
    register_type,
    registered_types,
    resolve,
    skip,
    string,
    to_context,
    uint8,
    uint16,
    uint16be,
    uint32,
    uint32be,
    uint64,
    uint64be,
    when,
)
from .config import CodecConfig, configure, get_config, reset_config
from .exceptions import (
    DecodeError,
    EncodeError,
    FieldReadError,
    InvalidInputKindError,
    LengthMismatchError,
    MissingFieldError,
    NoParentRecordError,
    PathResolutionError,
    SchemaError,
    SizeMismatchError,
    StructkitError,
    TruncatedDataError,
    UnimplementedError,
    UnknownTypeError,
)
from .models import BaseRecord
from .utils import encoded_size, field_sizes, is_static

__version__ = "0.1.0"

__all__ = [
    # Core API
    "Codec",
    "Record",
    "MappedCodec",
    "Context",
    "Scope",
    "to_context",
    "resolve",
    "BaseRecord",
    "RecordSchema",
    # Registry
    "get_type",
    "register_type",
    "registered_types",
    # Adapters
    "AbstractEncoding",
    "CustomCodec",
    "ExternalCodec",
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
    # Configuration
    "CodecConfig",
    "configure",
    "get_config",
    "reset_config",
    # Exceptions
    "StructkitError",
    "SchemaError",
    "UnknownTypeError",
    "InvalidInputKindError",
    "PathResolutionError",
    "NoParentRecordError",
    "UnimplementedError",
    "EncodeError",
    "SizeMismatchError",
    "LengthMismatchError",
    "MissingFieldError",
    "DecodeError",
    "TruncatedDataError",
    "FieldReadError",
    # Sizing
    "encoded_size",
    "field_sizes",
    "is_static",
    # Version
    "__version__",
]
