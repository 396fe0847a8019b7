"""Predicates that decide whether a stored record matches a condition."""

from __future__ import annotations

import abc
import enum
import math
import struct
from dataclasses import dataclass, field as dc_field
from typing import Any, Iterable, Optional, Union

from .errors import (
    InvalidArgumentError,
    SchemaFieldMissingError,
    SchemaFieldTypeMismatchError,
)
from .field_meta import AttrType
from .table_meta import TableMeta

_INT32 = struct.Struct("<i")
_FLOAT32 = struct.Struct("<f")


class CompOp(enum.IntEnum):
    """Comparison operator of a condition."""

    EQUAL_TO = 0
    LESS_EQUAL = 1
    NOT_EQUAL = 2
    LESS_THAN = 3
    GREAT_EQUAL = 4
    GREAT_THAN = 5
    NO_OP = 6


@dataclass(frozen=True)
class Value:
    """A typed constant: an ``int``, a ``float`` or a string (``str`` or ``bytes``)."""

    attr_type: AttrType
    data: Any


@dataclass(frozen=True)
class ConDesc:
    """One side of a comparison: a field of the record or a constant."""

    is_attr: bool
    attr_length: int = 0
    attr_offset: int = 0
    value: Any = None


Operand = Union[str, Value]


@dataclass(frozen=True)
class Condition:
    """``left comp right``; a ``str`` side names a field, a :class:`Value` is a constant."""

    left: Operand
    comp: CompOp
    right: Operand


def _record_bytes(record: Any) -> bytes:
    data = getattr(record, "data", record)
    return bytes(data)


def _to_float32(value: float) -> float:
    return _FLOAT32.unpack(_FLOAT32.pack(value))[0]


def _to_int32(value: int) -> int:
    # Subtraction of two 32-bit ints wraps around.
    return (value + 2**31) % 2**32 - 2**31


def _c_string(data: Any) -> bytes:
    raw = data.encode("utf-8") if isinstance(data, str) else bytes(data)
    end = raw.find(b"\0")
    return raw if end < 0 else raw[:end]


def _sign(x: Any) -> int:
    return (x > 0) - (x < 0)


class ConditionFilter(abc.ABC):
    """Something that accepts or rejects a record."""

    @abc.abstractmethod
    def filter(self, record: Any) -> bool:
        """Return ``True`` when ``record`` matches."""


@dataclass(frozen=True)
class DefaultConditionFilter(ConditionFilter):
    """Compares two operands of one type with one operator."""

    left: ConDesc
    right: ConDesc
    attr_type: AttrType
    comp_op: CompOp

    def __post_init__(self) -> None:
        try:
            attr_type = AttrType(self.attr_type)
        except ValueError as exc:
            raise InvalidArgumentError(f"unsupported attribute type: {self.attr_type!r}") from exc
        if attr_type < AttrType.CHARS or attr_type > AttrType.FLOATS:
            raise InvalidArgumentError(f"unsupported attribute type: {int(attr_type)}")
        try:
            comp_op = CompOp(self.comp_op)
        except ValueError as exc:
            raise InvalidArgumentError(f"unsupported compare operation: {self.comp_op!r}") from exc
        if comp_op >= CompOp.NO_OP:
            raise InvalidArgumentError(f"unsupported compare operation: {int(comp_op)}")
        object.__setattr__(self, "attr_type", attr_type)
        object.__setattr__(self, "comp_op", comp_op)

    @classmethod
    def from_condition(cls, table_meta: TableMeta, condition: Condition) -> "DefaultConditionFilter":
        """Resolve the field names of ``condition`` against ``table_meta``."""
        left, left_type = cls._describe(table_meta, condition.left)
        right, right_type = cls._describe(table_meta, condition.right)
        if left_type != right_type:
            raise SchemaFieldTypeMismatchError(
                f"cannot compare {left_type.name.lower()} with {right_type.name.lower()}"
            )
        return cls(left, right, left_type, condition.comp)

    @staticmethod
    def _describe(table_meta: TableMeta, operand: Operand) -> tuple[ConDesc, AttrType]:
        if isinstance(operand, Value):
            return ConDesc(is_attr=False, value=operand.data), AttrType(operand.attr_type)
        field = table_meta.field(operand)
        if field is None:
            raise SchemaFieldMissingError(f"no such field in condition. {table_meta.name}.{operand}")
        desc = ConDesc(is_attr=True, attr_length=field.length, attr_offset=field.offset)
        return desc, field.attr_type

    def _operand(self, desc: ConDesc, data: bytes) -> Any:
        if self.attr_type is AttrType.CHARS:
            if desc.is_attr:
                return _c_string(data[desc.attr_offset : desc.attr_offset + desc.attr_length])
            return _c_string(desc.value)
        if self.attr_type is AttrType.INTS:
            if desc.is_attr:
                return _INT32.unpack_from(data, desc.attr_offset)[0]
            return int(desc.value)
        if desc.is_attr:
            return _FLOAT32.unpack_from(data, desc.attr_offset)[0]
        return _to_float32(float(desc.value))

    def _compare(self, left: Any, right: Any) -> int:
        if self.attr_type is AttrType.CHARS:
            return _sign((left > right) - (left < right))
        if self.attr_type is AttrType.INTS:
            return _to_int32(left - right)
        # The float difference is truncated towards zero before its sign is taken.
        diff = _to_float32(left - right) if math.isfinite(left - right) else left - right
        if math.isnan(diff):
            return 0
        if math.isinf(diff):
            return 1 if diff > 0 else -1
        return int(diff)

    def filter(self, record: Any) -> bool:
        data = _record_bytes(record) if (self.left.is_attr or self.right.is_attr) else b""
        cmp = self._compare(self._operand(self.left, data), self._operand(self.right, data))
        op = self.comp_op
        if op is CompOp.EQUAL_TO:
            return cmp == 0
        if op is CompOp.LESS_EQUAL:
            return cmp <= 0
        if op is CompOp.NOT_EQUAL:
            return cmp != 0
        if op is CompOp.LESS_THAN:
            return cmp < 0
        if op is CompOp.GREAT_EQUAL:
            return cmp >= 0
        return cmp > 0


@dataclass(frozen=True)
class CompositeConditionFilter(ConditionFilter):
    """Conjunction of filters: a record matches when every filter accepts it."""

    filters: tuple[ConditionFilter, ...] = dc_field(default_factory=tuple)

    def __post_init__(self) -> None:
        object.__setattr__(self, "filters", tuple(self.filters))

    @property
    def filter_num(self) -> int:
        return len(self.filters)

    @classmethod
    def from_conditions(
        cls, table_meta: TableMeta, conditions: Optional[Iterable[Condition]]
    ) -> "CompositeConditionFilter":
        """One :class:`DefaultConditionFilter` per condition, all of which must hold."""
        if conditions is None:
            return cls()
        return cls(tuple(DefaultConditionFilter.from_condition(table_meta, c) for c in conditions))

    def filter(self, record: Any) -> bool:
        return all(f.filter(record) for f in self.filters)