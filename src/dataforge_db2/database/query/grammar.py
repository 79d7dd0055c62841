"""
DB2 Query Grammar - DB2-specific SELECT syntax and date formatting

Row limiting uses "fetch first N rows only". Servers that predate
"offset N rows" (IBM i before 7.1 TR11) are served by a row_number()
emulation when offset compatibility mode is on.
"""

from datetime import date, datetime
from typing import List, Optional, Union

from ...constants import DEFAULT_DATE_FORMAT
from ..grammar import Grammar

import logging
logger = logging.getLogger(__name__)


class DB2QueryGrammar(Grammar):
    """
    Query grammar for DB2.

    Args:
        date_format: strftime format used to render dates in bindings
        offset_compatibility_mode: Emulate OFFSET with row_number()
    """

    def __init__(self, date_format: Optional[str] = None, offset_compatibility_mode: bool = False):
        self.date_format = date_format or DEFAULT_DATE_FORMAT
        self.offset_compatibility_mode = offset_compatibility_mode

    def format_date(self, value: Union[date, datetime]) -> str:
        """Render a date/datetime with the configured format."""
        return value.strftime(self.date_format)

    def generate_select_query(
        self,
        table_name: str,
        schema_name: Optional[str] = None,
        columns: Optional[List[str]] = None,
        limit: Optional[int] = None,
        offset: Optional[int] = None
    ) -> str:
        """
        Generate a SELECT query.

        Args:
            table_name: Table or view name (may be schema-qualified)
            schema_name: Optional schema name
            columns: Columns to select (None = all)
            limit: Optional row limit
            offset: Optional number of rows to skip

        Returns:
            Complete SELECT statement
        """
        cols = self.columnize(columns) if columns else "*"
        table = f"{schema_name}.{table_name}" if schema_name else table_name
        query = f"select {cols} from {self.wrap_table(table)}"

        if offset and self.offset_compatibility_mode:
            return self._compile_row_number_offset(cols, table, limit, offset)

        if offset:
            query += f" offset {int(offset)} rows"

        if limit:
            query += f" fetch first {int(limit)} rows only"

        return query

    def _compile_row_number_offset(
        self,
        cols: str,
        table: str,
        limit: Optional[int],
        offset: int
    ) -> str:
        wrapped = self.wrap_table(table)
        if cols == "*":
            # A bare * cannot be combined with other select items
            cols = f"{wrapped}.*"
        inner = f"select {cols}, row_number() over () as row_num from {wrapped}"

        if limit:
            condition = f"row_num between {int(offset) + 1} and {int(offset) + int(limit)}"
        else:
            condition = f"row_num > {int(offset)}"

        return f"select * from ({inner}) as temp_table where {condition}"
