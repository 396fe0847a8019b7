# tablestore

The schema and predicate layer of a small relational storage engine. It is a
plain Python library with no runtime dependencies.

It provides:

- **Field and index metadata** in `tablestore.field_meta` and
  `tablestore.index_meta`. `AttrType` lists the value types: `CHARS`, `INTS`
  and `FLOATS`. `FieldMeta` gives one field's name, type, byte offset, length
  and visibility. `IndexMeta` names an index and the field it covers. Both
  convert to and from JSON-ready mappings with `to_json` and `from_json`.
- **Table metadata** in `tablestore.table_meta`. `TableMeta.create` lays out
  user columns (`AttrInfo`) after a list of system fields in a fixed-width
  record, and computes `record_size`. `serialize` writes the schema as JSON
  text and `TableMeta.deserialize` reads it back. Lookups include `field`,
  `field_at`, `find_field_by_offset`, `index`, `index_at` and
  `find_index_by_field`. `desc` returns a readable description.
- **File naming** in `tablestore.meta_util`. `table_meta_file`,
  `table_data_file` and `table_index_file` build the paths of a table's
  `.table`, `.data` and `.index` files.
- **Condition filters** in `tablestore.condition_filter`.
  `DefaultConditionFilter` compares a record field or a constant `Value`
  against another with a `CompOp`. It reads 32-bit little-endian ints and
  floats, and NUL-terminated strings, straight from the raw record bytes.
  `CompositeConditionFilter` accepts a record only when all of its filters
  do. `Condition` names fields by string and holds constants as `Value`.

Failures raise exceptions derived from `tablestore.errors.StorageError`. These
are `InvalidArgumentError`, `SchemaFieldMissingError`,
`SchemaFieldTypeMismatchError`, `MetaFormatError` and `BufferPoolError`. Each
one carries an `rc` string that names the kind of failure.

## Installation

```
pip install .
```

To run the tests:

```
pip install ".[test]"
pytest
```

## Example

```python
import struct

from tablestore.condition_filter import (
    CompOp,
    CompositeConditionFilter,
    Condition,
    Value,
)
from tablestore.field_meta import AttrType, FieldMeta
from tablestore.meta_util import table_meta_file
from tablestore.table_meta import AttrInfo, TableMeta

sys_fields = [FieldMeta("__trx", AttrType.INTS, 0, 4, False)]
meta = TableMeta.create(
    "student",
    [AttrInfo("id", AttrType.INTS, 4), AttrInfo("name", AttrType.CHARS, 16)],
    sys_fields,
)

text = meta.serialize()
again = TableMeta.deserialize(text, sys_fields)
assert again.record_size == meta.record_size == 24

record = struct.pack("<ii16s", 0, 7, b"alice")
matches = CompositeConditionFilter.from_conditions(
    meta,
    [
        Condition("id", CompOp.EQUAL_TO, Value(AttrType.INTS, 7)),
        Condition("name", CompOp.NOT_EQUAL, Value(AttrType.CHARS, "bob")),
    ],
)
assert matches.filter(record)

print(table_meta_file("/data/db/sys", "student"))  # /data/db/sys/student.table
```

## What it does not do

The package describes tables and tests records. It does not store them. It
has no paged data files, no buffer pool or page cache, no record manager, no
index structures, no transactions, no SQL parsing and no server or command
line. `table_data_file` and `table_index_file` only build paths. Nothing in
the package reads or writes those files.