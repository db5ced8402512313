"""Base record model and structkit-specific Pydantic configuration.

This module provides the BaseRecord class. Subclasses declare their binary
layout with codec annotations and get a validated Pydantic model that decodes
from and encodes to bytes.
"""

from __future__ import annotations

from typing import Any, ClassVar, TypeVar

from pydantic import BaseModel, ConfigDict

from ..codec.base import Codec
from ..codec.schema import RecordSchema

R = TypeVar("R", bound="BaseRecord")


def _dump(value: Any) -> Any:
    """Turn a model instance into the mapping a Record writes."""
    if isinstance(value, BaseModel):
        return value.model_dump()
    return value


class BaseRecord(BaseModel):
    """Base class for binary record models.

    Fields are declared with ``Annotated[<type>, <codec>]``; a field whose
    annotation is itself a BaseRecord subclass is encoded as a nested record.
    Value paths (``"size"``, ``"../size"``) refer to sibling and ancestor
    fields by name, exactly as in a hand-written Record.

    Example:
        >>> from typing import Annotated, Optional
        >>> class Packet(BaseRecord):
        ...     has_crc: Annotated[bool, boolean]
        ...     length: Annotated[int, uint16be]
        ...     payload: Annotated[bytes, buffer("length")]
        ...     crc: Annotated[Optional[int], when("has_crc", uint32be)] = None
        >>>
        >>> pkt = Packet(has_crc=False, length=2, payload=b"hi")
        >>> data = pkt.encode()
        >>> Packet.decode(data) == pkt
        True
    """

    model_config = ConfigDict(
        # Allow arbitrary types (codec objects live in Annotated metadata)
        arbitrary_types_allowed=True,
        # Validate on assignment
        validate_assignment=True,
        # Forbid extra fields not defined in schema
        extra="forbid",
    )

    # Built lazily per class by struct_codec()
    __struct_codec__: ClassVar[Codec | None] = None

    @classmethod
    def struct_codec(cls) -> Codec:
        """Return the codec reading and writing instances of this model.

        The codec is the model's Record mapped through ``model_validate`` on
        read and ``model_dump`` on write. It is built once per class.

        Raises:
            SchemaError: If a field has no codec
        """
        codec = cls.__dict__.get("__struct_codec__")
        if codec is None:
            record = RecordSchema.from_model(cls).build_record()
            codec = record.map(read=cls.model_validate, write=_dump)
            cls.__struct_codec__ = codec
        return codec

    @classmethod
    def decode(cls: type[R], data: Any, parent: Any = None) -> R:
        """Decode an instance from bytes or a Context.

        Raises:
            DecodeError: If the data does not match the layout
            pydantic.ValidationError: If decoded values fail model validation
        """
        return cls.struct_codec().decode(data, parent=parent)

    def encode(self) -> bytes:
        """Encode this instance to bytes.

        Raises:
            EncodeError: If a value does not fit the layout
        """
        return type(self).struct_codec().encode(self)

    def encoded_size(self) -> int:
        """Return the number of bytes encode() produces for this instance."""
        return type(self).struct_codec().size(self)
