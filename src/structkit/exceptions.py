"""Exception hierarchy for structkit.

This module defines all custom exceptions used throughout the package.
All exceptions inherit from StructkitError for easy catching of any structkit-specific error.
"""

from __future__ import annotations

from typing import Sequence


class StructkitError(Exception):
    """Base exception for all structkit errors."""

    pass


class SchemaError(StructkitError):
    """Raised when a codec or record definition is invalid.

    Examples:
        - Conflicting registration of a named type
        - Model field without a codec annotation
        - Malformed field list passed to Record()
    """

    pass


class UnknownTypeError(SchemaError):
    """Raised when a field type cannot be resolved to a codec.

    Examples:
        - A type name that is not in the registry
        - An object that exposes neither read/size nor encode/decode
    """

    pass


class InvalidInputKindError(StructkitError, TypeError):
    """Raised when decode() receives something that is neither bytes nor a Context."""

    pass


class PathResolutionError(StructkitError, LookupError):
    """Raised when a value path cannot be resolved against the current record."""

    pass


class NoParentRecordError(PathResolutionError):
    """Raised when an ascend path tries to go above the outermost record."""

    pass


class UnimplementedError(StructkitError, NotImplementedError):
    """Raised when a codec operation that was never defined is invoked.

    Read-only codecs are legal; this fires only when write() (or size())
    is actually called on one.
    """

    pass


class EncodeError(StructkitError):
    """Raised when encoding a value fails.

    Examples:
        - Integer out of range for its width
        - Destination buffer too small
        - Value of the wrong kind for the codec (e.g. str for a buffer)
    """

    pass


class SizeMismatchError(EncodeError):
    """Raised when a fixed-size string does not encode to exactly the required byte count."""

    pass


class LengthMismatchError(EncodeError):
    """Raised when an array's element count differs from the resolved length."""

    pass


class MissingFieldError(EncodeError, KeyError):
    """Raised when a record value lacks a required named field."""

    def __str__(self) -> str:
        # KeyError quotes its message; keep the plain text
        return str(self.args[0]) if self.args else ""


class DecodeError(StructkitError):
    """Raised when decoding binary data fails.

    Examples:
        - Truncated data (insufficient bytes)
        - Bytes that are not valid in the configured text encoding
    """

    pass


class TruncatedDataError(DecodeError):
    """Raised when a read needs more bytes than the buffer has left."""

    pass


class FieldReadError(DecodeError):
    """Raised when a field of a record fails to decode.

    The dotted path of the failing field is accumulated as the error crosses
    record boundaries, so ``nesting.b.fails`` names the innermost field.

    Attributes:
        path: Field names from the outermost record down to the failing field
        cause: The original exception
    """

    def __init__(self, path: Sequence[str], cause: BaseException) -> None:
        self.path = tuple(path)
        self.cause = cause
        super().__init__(f"Error reading '{self.dotted_path}': {cause}")

    @property
    def dotted_path(self) -> str:
        return ".".join(self.path)

    def prepend(self, name: str) -> FieldReadError:
        """Return a copy of this error with ``name`` in front of the path."""
        return FieldReadError((name, *self.path), self.cause)
