"""Field types and the description of one field of a table record."""

from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import Any

from .errors import InvalidArgumentError, MetaFormatError

_INT32_MIN = -(2**31)
_INT32_MAX = 2**31 - 1


class AttrType(enum.IntEnum):
    """Type of a field's value."""

    UNDEFINED = 0
    CHARS = 1
    INTS = 2
    FLOATS = 3


_ATTR_TYPE_NAMES = ("undefined", "chars", "ints", "floats")


def attr_type_to_string(attr_type: Any) -> str:
    """Name of a type, or ``"unknown"`` for a value that is no type."""
    try:
        return _ATTR_TYPE_NAMES[AttrType(attr_type)]
    except ValueError:
        return "unknown"


def attr_type_from_string(s: str) -> AttrType:
    """Type of the given name, ``AttrType.UNDEFINED`` if the name is unknown."""
    try:
        return AttrType(_ATTR_TYPE_NAMES.index(s))
    except ValueError:
        return AttrType.UNDEFINED


def _is_blank(s: str | None) -> bool:
    return s is None or not str(s).strip()


def _is_json_int(value: Any) -> bool:
    if isinstance(value, bool):
        return False
    if isinstance(value, float):
        if not value.is_integer():
            return False
        value = int(value)
    return isinstance(value, int) and _INT32_MIN <= value <= _INT32_MAX


@dataclass(frozen=True)
class FieldMeta:
    """Name, type and position of one field inside a record."""

    name: str
    attr_type: AttrType
    offset: int
    length: int
    visible: bool

    def __post_init__(self) -> None:
        if _is_blank(self.name):
            raise InvalidArgumentError("field name cannot be empty")
        try:
            attr_type = AttrType(self.attr_type)
        except ValueError as exc:
            raise InvalidArgumentError(f"invalid attribute type {self.attr_type!r}") from exc
        object.__setattr__(self, "attr_type", attr_type)
        if attr_type is AttrType.UNDEFINED or self.offset < 0 or self.length <= 0:
            raise InvalidArgumentError(
                f"invalid field. name={self.name}, attr_type={int(attr_type)}, "
                f"attr_offset={self.offset}, attr_len={self.length}"
            )

    def desc(self) -> str:
        """One-line human readable description."""
        return (
            f"field name={self.name}, type={attr_type_to_string(self.attr_type)}, "
            f"len={self.length}, visible={'yes' if self.visible else 'no'}"
        )

    def to_json(self) -> dict[str, Any]:
        """JSON-ready mapping of this field."""
        return {
            "name": self.name,
            "type": attr_type_to_string(self.attr_type),
            "offset": self.offset,
            "len": self.length,
            "visible": self.visible,
        }

    @classmethod
    def from_json(cls, value: Any) -> "FieldMeta":
        """Build a field from the mapping produced by :meth:`to_json`."""
        if not isinstance(value, dict):
            raise MetaFormatError(f"field is not an object: {value!r}")
        name = value.get("name")
        type_name = value.get("type")
        offset = value.get("offset")
        length = value.get("len")
        visible = value.get("visible")
        if not isinstance(name, str):
            raise MetaFormatError(f"field name is not a string: {name!r}")
        if not isinstance(type_name, str):
            raise MetaFormatError(f"field type is not a string: {type_name!r}")
        if not _is_json_int(offset):
            raise MetaFormatError(f"offset is not an integer: {offset!r}")
        if not _is_json_int(length):
            raise MetaFormatError(f"len is not an integer: {length!r}")
        if not isinstance(visible, bool):
            raise MetaFormatError(f"visible is not a bool value: {visible!r}")
        attr_type = attr_type_from_string(type_name)
        if attr_type is AttrType.UNDEFINED:
            raise MetaFormatError(f"invalid field type: {type_name!r}")
        return cls(name, attr_type, int(offset), int(length), visible)