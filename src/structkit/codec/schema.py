"""Schema introspection for Pydantic models.

This module analyzes Pydantic models whose fields carry codec annotations and
builds the equivalent Record codec. A field's codec is taken from its
``Annotated`` metadata (a Codec instance or a registered type name) or, for
plain annotations, from a nested model class providing ``struct_codec()``.

Example:
    >>> class Header(BaseRecord):
    ...     size: Annotated[int, uint8]
    ...     name: Annotated[str, string("size")]
    >>> schema = RecordSchema.from_model(Header)
    >>> [f.name for f in schema.fields]
    ['size', 'name']
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, List, Type

from pydantic import BaseModel
from pydantic.fields import FieldInfo

from ..exceptions import SchemaError, UnknownTypeError
from .base import Codec
from .record import Record
from .registry import TYPE_REGISTRY, get_type


@dataclass(frozen=True)
class FieldSchema:
    """Schema information for a single model field.

    Attributes:
        name: Field name
        python_type: Python type annotation (metadata stripped)
        codec: Codec used to read and write the field
        required: Whether the model requires the field
    """

    name: str
    python_type: Any
    codec: Codec
    required: bool

    def static_size(self) -> int | None:
        """Return the field's byte size if it does not depend on the value."""
        return self.codec.static_size


class RecordSchema:
    """Schema information for an entire record model.

    This class introspects a Pydantic model and extracts the codec of each
    field, in declaration order.

    Example:
        >>> schema = RecordSchema.from_model(Header)
        >>> for field in schema.fields:
        ...     print(f"{field.name}: {field.codec!r}")
    """

    def __init__(self, model_class: Type[BaseModel]) -> None:
        """Initialize schema from a Pydantic model.

        Args:
            model_class: Pydantic model class to introspect
        """
        self.model_class = model_class
        self.fields: List[FieldSchema] = []
        self._introspect()

    @classmethod
    def from_model(cls, model_class: Type[BaseModel]) -> RecordSchema:
        """Create a schema from a Pydantic model.

        Args:
            model_class: Pydantic model class

        Returns:
            RecordSchema instance
        """
        return cls(model_class)

    def _introspect(self) -> None:
        """Introspect the model and populate field schemas."""
        for field_name, field_info in self.model_class.model_fields.items():
            self.fields.append(self._extract_field_schema(field_name, field_info))

    def _extract_field_schema(self, name: str, field_info: FieldInfo) -> FieldSchema:
        """Extract the codec of one field.

        Raises:
            SchemaError: If the field has no usable codec
        """
        annotation = field_info.annotation
        if annotation is None:
            raise SchemaError(f"Field {name} has no type annotation")

        codec = None
        for item in field_info.metadata:
            if isinstance(item, Codec) or (isinstance(item, str) and item in TYPE_REGISTRY):
                codec = get_type(item)
                break

        if codec is None:
            try:
                codec = get_type(annotation)
            except UnknownTypeError as e:
                raise SchemaError(
                    f"Field {name} of {self.model_class.__name__}: no codec. "
                    f"Annotate it, e.g. Annotated[int, uint8]."
                ) from e

        return FieldSchema(
            name=name,
            python_type=annotation,
            codec=codec,
            required=field_info.is_required(),
        )

    def build_record(self) -> Record:
        """Return a Record codec with one named field per model field."""
        return Record([(field.name, field.codec) for field in self.fields])

    def static_size(self) -> int | None:
        """Return the record size if no field depends on its value, else None."""
        return self.build_record().static_size
