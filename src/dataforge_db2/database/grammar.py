"""
Base Grammar - Identifier wrapping shared by the DB2 schema and query grammars

DB2 identifier rules handled here:
- Table references are quoted per segment: app.users -> "app"."users"
- Column references are emitted bare, with embedded quotes doubled
- "*" is never wrapped
"""

from typing import Iterable, List, Union


class Grammar:
    """
    Identifier wrapping helpers.

    Usage:
        grammar = Grammar()
        grammar.wrap_table("app.users")        # "app"."users"
        grammar.columnize(["id", "name"])      # id, name
    """

    quote_char = '"'

    def wrap_value(self, value: str) -> str:
        """Escape a single identifier segment. "*" passes through."""
        if value == "*":
            return value
        return value.replace('"', '""')

    def quote_identifier(self, value: str) -> str:
        """Escape and quote a single identifier segment."""
        if value == "*":
            return value
        return f"{self.quote_char}{self.wrap_value(value)}{self.quote_char}"

    def wrap(self, value: str) -> str:
        """Wrap a (possibly dotted) column reference."""
        return ".".join(self.wrap_value(segment) for segment in str(value).split("."))

    def wrap_table(self, table: str) -> str:
        """Wrap a (possibly schema-qualified) table reference."""
        return ".".join(self.quote_identifier(segment) for segment in str(table).split("."))

    def wrap_array(self, values: Iterable[str]) -> List[str]:
        return [self.wrap(value) for value in values]

    def columnize(self, columns: Union[str, Iterable[str]]) -> str:
        """Convert a list of column names into a comma separated, wrapped list."""
        if isinstance(columns, str):
            columns = [columns]
        return ", ".join(self.wrap_array(columns))

    @staticmethod
    def quote_string(value: str) -> str:
        """Render a SQL string literal, doubling embedded single quotes."""
        return "'" + str(value).replace("'", "''") + "'"
