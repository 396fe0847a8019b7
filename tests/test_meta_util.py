import re

from tablestore.meta_util import (
    TABLE_DATA_SUFFIX,
    TABLE_INDEX_SUFFIX,
    TABLE_META_FILE_PATTERN,
    TABLE_META_SUFFIX,
    table_data_file,
    table_index_file,
    table_meta_file,
)


def test_meta_file_name():
    assert table_meta_file("/data/db/sys", "t1") == "/data/db/sys/t1.table"


def test_data_file_name():
    assert table_data_file("/data/db/sys", "t1") == "/data/db/sys/t1.data"


def test_index_file_name():
    assert table_index_file("/base", "t", "idx") == "/base/t-idx.index"


def test_suffixes_end_the_names():
    assert table_meta_file("d", "x").endswith(TABLE_META_SUFFIX)
    assert table_data_file("d", "x").endswith(TABLE_DATA_SUFFIX)
    assert table_index_file("d", "x", "i").endswith(TABLE_INDEX_SUFFIX)


def test_pattern_matches_only_meta_files():
    assert re.search(TABLE_META_FILE_PATTERN, table_meta_file("d", "orders"))
    assert re.search(TABLE_META_FILE_PATTERN, table_data_file("d", "orders")) is None
    assert re.search(TABLE_META_FILE_PATTERN, table_index_file("d", "o", "i")) is None
    assert re.search(TABLE_META_FILE_PATTERN, "orders.table.tmp") is None