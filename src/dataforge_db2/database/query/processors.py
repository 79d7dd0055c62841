"""
Insert-Id Processors - Read generated keys back from DB2 inserts

DB2 has no "last insert id" call. Inserts are wrapped in a data-change
table reference and run as a SELECT:

    select id from new table (insert into users (name) values (?))
"""

import math
import re
from decimal import Decimal
from typing import TYPE_CHECKING, Any, List, Optional, Sequence, Union

from ..errors import InsertIdLookupError
from ..grammar import Grammar
from ..rows import row_value

if TYPE_CHECKING:
    from ..connection import DB2Connection

import logging
logger = logging.getLogger(__name__)

_INTEGER_RE = re.compile(r"^\s*[+-]?\d+\s*$")
_NUMERIC_RE = re.compile(r"^\s*[+-]?(\d+(\.\d*)?|\.\d+)([eE][+-]?\d+)?\s*$")


def cast_key(value: Any) -> Any:
    """Cast numeric keys (including numeric strings) to int, return others unchanged."""
    if isinstance(value, bool):
        return value
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return int(value) if math.isfinite(value) else value
    if isinstance(value, Decimal):
        return int(value) if value.is_finite() else value
    if isinstance(value, str):
        if _INTEGER_RE.match(value):
            return int(value)
        if _NUMERIC_RE.match(value):
            return int(Decimal(value.strip()))
    return value


class DB2Processor:
    """
    Insert-id processor for DB2 for i and LUW.

    Usage:
        processor = DB2Processor()
        new_id = processor.process_insert_get_id(
            connection, "insert into users (name) values (?)", ["bob"], "id"
        )
    """

    # Data-change table reference wrapping the insert
    data_change_table = "new table"

    def __init__(self, grammar: Optional[Grammar] = None):
        self.grammar = grammar or Grammar()

    def compile_insert_get_id(self, sql: str, sequence: Union[str, Sequence[str], None] = None) -> str:
        columns = self.grammar.columnize(self._key_columns(sequence))
        return f"select {columns} from {self.data_change_table} ({sql})"

    def process_insert_get_id(
        self,
        connection: "DB2Connection",
        sql: str,
        values: Sequence[Any],
        sequence: Union[str, Sequence[str], None] = None
    ) -> Union[Any, List[Any]]:
        """
        Run an insert and return its generated key(s).

        Args:
            connection: Connection executing the rewritten insert
            sql: The INSERT statement
            values: Bindings of the INSERT statement
            sequence: Key column name (default "id") or a list of key columns

        Returns:
            The key (cast to int when numeric), or the ordered list of key
            values for a composite key

        Raises:
            InsertIdLookupError: If the insert returned no row or no key column
        """
        final_sql = self.compile_insert_get_id(sql, sequence)
        logger.debug(f"Reading generated key with: {final_sql}")
        results = connection.select(final_sql, values)

        if not results:
            raise InsertIdLookupError(f"Insert returned no generated key: {final_sql}")

        row = results[0]

        if self._is_composite(sequence):
            return list(row.values())

        key = self._key_columns(sequence)[0]
        try:
            value = row_value(row, key)
        except KeyError:
            raise InsertIdLookupError(
                f"Generated key column '{key}' not found in insert result (columns: {', '.join(row)})"
            )

        return cast_key(value)

    @staticmethod
    def _is_composite(sequence: Union[str, Sequence[str], None]) -> bool:
        return sequence is not None and not isinstance(sequence, str)

    def _key_columns(self, sequence: Union[str, Sequence[str], None]) -> List[str]:
        if self._is_composite(sequence):
            return list(sequence)
        return [sequence or "id"]


class DB2ZOSProcessor(DB2Processor):
    """Insert-id processor for DB2 for z/OS, which only supports FINAL TABLE."""

    data_change_table = "final table"
