"""File names used for a table's metadata, data and index files."""

from __future__ import annotations

FILE_PATH_SPLIT_STR = "/"

TABLE_META_SUFFIX = ".table"
TABLE_META_FILE_PATTERN = r".*\.table$"
TABLE_DATA_SUFFIX = ".data"
TABLE_INDEX_SUFFIX = ".index"


def table_meta_file(base_dir: str, table_name: str) -> str:
    """Path of the metadata file of ``table_name`` under ``base_dir``."""
    return f"{base_dir}{FILE_PATH_SPLIT_STR}{table_name}{TABLE_META_SUFFIX}"


def table_data_file(base_dir: str, table_name: str) -> str:
    """Path of the record data file of ``table_name`` under ``base_dir``."""
    return f"{base_dir}{FILE_PATH_SPLIT_STR}{table_name}{TABLE_DATA_SUFFIX}"


def table_index_file(base_dir: str, table_name: str, index_name: str) -> str:
    """Path of the file holding index ``index_name`` of ``table_name``."""
    return f"{base_dir}{FILE_PATH_SPLIT_STR}{table_name}-{index_name}{TABLE_INDEX_SUFFIX}"