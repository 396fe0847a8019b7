import json

import pytest

from tablestore.errors import InvalidArgumentError, MetaFormatError
from tablestore.field_meta import AttrType, FieldMeta
from tablestore.index_meta import IndexMeta
from tablestore.table_meta import AttrInfo, TableMeta

SYS_FIELDS = (FieldMeta("__trx", AttrType.INTS, 0, 4, False),)
ATTRS = [
    AttrInfo("id", AttrType.INTS, 4),
    AttrInfo("name", AttrType.CHARS, 8),
    AttrInfo("score", AttrType.FLOATS, 4),
]


@pytest.fixture
def meta():
    return TableMeta.create("people", ATTRS, SYS_FIELDS)


def test_system_fields_come_first(meta):
    assert meta.field_num == len(ATTRS) + len(SYS_FIELDS)
    assert meta.sys_field_num == len(SYS_FIELDS)
    assert meta.field_at(0) == SYS_FIELDS[0]
    assert meta.trx_field == SYS_FIELDS[0]


def test_fields_are_contiguous(meta):
    for prev, cur in zip(meta.fields, meta.fields[1:]):
        assert cur.offset == prev.offset + prev.length
    assert meta.record_size == sum(f.length for f in meta.fields)


def test_user_fields_visible_and_typed(meta):
    user_fields = meta.fields[meta.sys_field_num:]
    assert [f.name for f in user_fields] == [a.name for a in ATTRS]
    assert [f.attr_type for f in user_fields] == [a.attr_type for a in ATTRS]
    assert all(f.visible for f in user_fields)


def test_field_lookup(meta):
    assert meta.field("name").attr_type is AttrType.CHARS
    assert meta.field("missing") is None
    assert meta.field(None) is None


def test_find_field_by_offset(meta):
    score = meta.field("score")
    assert meta.find_field_by_offset(score.offset) == score
    assert meta.find_field_by_offset(meta.record_size) is None


def test_indexes(meta):
    assert meta.index_num == 0
    meta.add_index(IndexMeta("i_id", "id"))
    meta.add_index(IndexMeta("i_name", "name"))
    assert meta.index_num == 2
    assert meta.index("i_name") == IndexMeta("i_name", "name")
    assert meta.index_at(0).name == "i_id"
    assert meta.find_index_by_field("id").name == "i_id"
    assert meta.find_index_by_field("score") is None
    assert meta.index("nope") is None


@pytest.mark.parametrize(
    "name, attrs",
    [
        ("", ATTRS),
        ("t", []),
        ("t", [AttrInfo("a", AttrType.UNDEFINED, 4)]),
        ("t", [AttrInfo("a", AttrType.INTS, 0)]),
        ("t", [AttrInfo(" ", AttrType.INTS, 4)]),
    ],
)
def test_create_rejects_invalid_input(name, attrs):
    with pytest.raises(InvalidArgumentError):
        TableMeta.create(name, attrs, SYS_FIELDS)


def test_create_without_sys_fields_starts_at_zero():
    meta = TableMeta.create("t", ATTRS, ())
    assert meta.field_at(0).offset == 0
    assert meta.sys_field_num == 0


def test_round_trip_without_indexes(meta):
    text = meta.serialize()
    assert json.loads(text)["indexes"] is None
    assert TableMeta.deserialize(text, SYS_FIELDS) == meta


def test_round_trip_with_indexes(meta):
    meta.add_index(IndexMeta("i_score", "score"))
    restored = TableMeta.deserialize(meta.serialize(), SYS_FIELDS)
    assert restored == meta
    assert restored.find_index_by_field("score").name == "i_score"


def test_deserialize_sorts_fields_by_offset(meta):
    document = json.loads(meta.serialize())
    document["fields"].reverse()
    restored = TableMeta.deserialize(json.dumps(document), SYS_FIELDS)
    assert [f.offset for f in restored.fields] == sorted(f.offset for f in meta.fields)
    assert restored.record_size == meta.record_size


def test_deserialize_accepts_empty_index_list(meta):
    document = json.loads(meta.serialize())
    document["indexes"] = []
    assert TableMeta.deserialize(json.dumps(document), SYS_FIELDS).indexes == []


def _document(meta, **changes):
    document = json.loads(meta.serialize())
    document.update(changes)
    return json.dumps(document)


@pytest.mark.parametrize(
    "changes",
    [
        {"table_name": 7},
        {"fields": []},
        {"fields": {"a": 1}},
        {"fields": [{"name": "a"}]},
        {"indexes": "i_id"},
        {"indexes": [{"name": "i_x", "field_name": "missing"}]},
        {"indexes": [{"name": "", "field_name": "id"}]},
    ],
)
def test_deserialize_rejects_bad_documents(meta, changes):
    with pytest.raises(MetaFormatError):
        TableMeta.deserialize(_document(meta, **changes), SYS_FIELDS)


@pytest.mark.parametrize("text", ["not json", "[]", "null"])
def test_deserialize_rejects_non_objects(text):
    with pytest.raises(MetaFormatError):
        TableMeta.deserialize(text, SYS_FIELDS)


def test_desc_lists_fields_and_indexes(meta):
    meta.add_index(IndexMeta("i_id", "id"))
    lines = meta.desc().splitlines()
    assert lines[0] == "people("
    assert lines[-1] == ")"
    assert len(lines) == meta.field_num + meta.index_num + 2
    assert lines[1:-1] == ["\t" + f.desc() for f in meta.fields] + [
        "\t" + i.desc() for i in meta.indexes
    ]