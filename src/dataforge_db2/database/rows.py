"""
Row helpers - Read values from result rows returned by DB2Connection.select()
"""

from typing import Any, Mapping


def row_value(row: Mapping[str, Any], column: str) -> Any:
    """
    Read a column from a result row, falling back to its upper-cased name.

    DB2 reports unquoted column names in upper case, while callers usually
    use lower case names.

    Raises:
        KeyError: If the column is missing under both names
    """
    if column in row:
        return row[column]
    if column.upper() in row:
        return row[column.upper()]
    raise KeyError(column)
