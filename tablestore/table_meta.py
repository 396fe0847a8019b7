"""Schema of a table: its fields, indexes and record layout."""

from __future__ import annotations

import json
from dataclasses import dataclass, field as dc_field
from typing import Any, Iterable, Optional, Sequence

from .errors import InvalidArgumentError, MetaFormatError, StorageError
from .field_meta import AttrType, FieldMeta, _is_blank
from .index_meta import IndexMeta


@dataclass(frozen=True)
class AttrInfo:
    """A user-declared column: name, type and length in bytes."""

    name: str
    attr_type: AttrType
    length: int


def _json_empty(value: Any) -> bool:
    return value is None or (isinstance(value, (list, dict)) and not value)


@dataclass
class TableMeta:
    """Fields (system fields first), indexes and record size of a table."""

    name: str
    fields: list[FieldMeta]
    indexes: list[IndexMeta] = dc_field(default_factory=list)
    record_size: int = 0
    sys_field_num: int = 0

    @classmethod
    def create(
        cls, name: str, attributes: Sequence[AttrInfo], sys_fields: Sequence[FieldMeta]
    ) -> "TableMeta":
        """Lay out ``attributes`` after ``sys_fields`` in a new table schema."""
        if _is_blank(name):
            raise InvalidArgumentError("table name cannot be empty")
        if not attributes:
            raise InvalidArgumentError(f"invalid argument. name={name}, no attributes")

        fields = list(sys_fields)
        offset = fields[-1].offset + fields[-1].length if fields else 0
        for attr in attributes:
            fields.append(FieldMeta(attr.name, attr.attr_type, offset, attr.length, True))
            offset += attr.length

        return cls(
            name=name,
            fields=fields,
            record_size=offset,
            sys_field_num=len(sys_fields),
        )

    @property
    def field_num(self) -> int:
        """Number of fields, system fields included."""
        return len(self.fields)

    @property
    def index_num(self) -> int:
        return len(self.indexes)

    @property
    def trx_field(self) -> FieldMeta:
        """The first field of every record."""
        return self.fields[0]

    def add_index(self, index: IndexMeta) -> None:
        self.indexes.append(index)

    def field(self, name: str | None) -> Optional[FieldMeta]:
        """Field called ``name``, or ``None``."""
        if name is None:
            return None
        return next((f for f in self.fields if f.name == name), None)

    def field_at(self, index: int) -> FieldMeta:
        return self.fields[index]

    def find_field_by_offset(self, offset: int) -> Optional[FieldMeta]:
        return next((f for f in self.fields if f.offset == offset), None)

    def index(self, name: str) -> Optional[IndexMeta]:
        """Index called ``name``, or ``None``."""
        return next((i for i in self.indexes if i.name == name), None)

    def index_at(self, i: int) -> IndexMeta:
        return self.indexes[i]

    def find_index_by_field(self, field: str) -> Optional[IndexMeta]:
        """Index built over the field called ``field``, or ``None``."""
        return next((i for i in self.indexes if i.field == field), None)

    def serialize(self) -> str:
        """JSON text of this schema."""
        document = {
            "table_name": self.name,
            "fields": [f.to_json() for f in self.fields],
            "indexes": [i.to_json() for i in self.indexes] or None,
        }
        return json.dumps(
            document, indent="\t", sort_keys=True, separators=(",", " : "), ensure_ascii=False
        )

    @classmethod
    def deserialize(cls, text: str | bytes, sys_fields: Iterable[FieldMeta]) -> "TableMeta":
        """Rebuild a schema from the text produced by :meth:`serialize`."""
        try:
            document = json.loads(text)
        except (ValueError, TypeError) as exc:
            raise MetaFormatError(f"failed to parse table meta: {exc}") from exc
        if not isinstance(document, dict):
            raise MetaFormatError("table meta is not an object")

        name = document.get("table_name")
        if not isinstance(name, str):
            raise MetaFormatError(f"invalid table name: {name!r}")

        fields_value = document.get("fields")
        if not isinstance(fields_value, list) or not fields_value:
            raise MetaFormatError(f"invalid table meta, fields is not an array: {fields_value!r}")
        try:
            fields = [FieldMeta.from_json(v) for v in fields_value]
        except StorageError as exc:
            raise MetaFormatError(f"failed to deserialize table meta. table name={name}") from exc
        fields.sort(key=lambda f: f.offset)

        meta = cls(
            name=name,
            fields=fields,
            record_size=fields[-1].offset + fields[-1].length - fields[0].offset,
            sys_field_num=len(list(sys_fields)),
        )

        indexes_value = document.get("indexes")
        if not _json_empty(indexes_value):
            if not isinstance(indexes_value, list):
                raise MetaFormatError(
                    f"invalid table meta, indexes is not an array: {indexes_value!r}"
                )
            try:
                meta.indexes = [IndexMeta.from_json(meta, v) for v in indexes_value]
            except StorageError as exc:
                raise MetaFormatError(
                    f"failed to deserialize table meta. table name={name}"
                ) from exc
        return meta

    def desc(self) -> str:
        """Multi-line human readable description."""
        lines = [f"{self.name}("]
        lines.extend(f"\t{f.desc()}" for f in self.fields)
        lines.extend(f"\t{i.desc()}" for i in self.indexes)
        lines.append(")")
        return "\n".join(lines) + "\n"