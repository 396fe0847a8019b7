"""Description of an index built over one field of a table."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional, Protocol

from .errors import InvalidArgumentError, MetaFormatError, SchemaFieldMissingError
from .field_meta import FieldMeta, _is_blank


class _FieldLookup(Protocol):
    def field(self, name: str | None) -> Optional[FieldMeta]: ...


@dataclass(frozen=True)
class IndexMeta:
    """An index's name and the name of the field it covers."""

    name: str
    field: str

    def __post_init__(self) -> None:
        if _is_blank(self.name):
            raise InvalidArgumentError("index name cannot be empty")

    def desc(self) -> str:
        """One-line human readable description."""
        return f"index name={self.name}, field={self.field}"

    def to_json(self) -> dict[str, Any]:
        """JSON-ready mapping of this index."""
        return {"name": self.name, "field_name": self.field}

    @classmethod
    def from_json(cls, table: _FieldLookup, value: Any) -> "IndexMeta":
        """Build an index from its mapping, checking the field exists in ``table``."""
        if not isinstance(value, dict):
            raise MetaFormatError(f"index is not an object: {value!r}")
        name = value.get("name")
        field_name = value.get("field_name")
        if not isinstance(name, str):
            raise MetaFormatError(f"index name is not a string: {name!r}")
        if not isinstance(field_name, str):
            raise MetaFormatError(
                f"field name of index [{name}] is not a string: {field_name!r}"
            )
        field = table.field(field_name)
        if field is None:
            raise SchemaFieldMissingError(
                f"deserialize index [{name}]: no such field: {field_name}"
            )
        return cls(name, field.name)