"""
DB2 Connection - Session context around a DB-API connection

Owns the per-connection schema state (current and default schema), the
grammar and processor of the configured variant, and the few statements
this layer runs itself: SET SCHEMA, QSYS2.QCMDEXC calls, catalog lookups,
blueprint statements and insert-as-select.
"""

from typing import Any, Dict, List, Optional, Sequence, Union

from ..constants import SYSTEM_COMMAND_PROCEDURE
from .models.connection_config import DB2ConnectionConfig
from .query.grammar import DB2QueryGrammar
from .rows import row_value
from .schema.blueprint import Blueprint

import logging
logger = logging.getLogger(__name__)


class DB2Connection:
    """
    DB2 session context.

    Not thread-safe: schema switches mutate state read by qualified-name
    resolution, so a connection must not be shared between threads.

    Usage:
        connection = DB2Connection(pyodbc_connection, config)
        connection.set_current_schema("app")
        connection.run_blueprint(blueprint)
        new_id = connection.insert_get_id("insert into users (name) values (?)", ["bob"])
    """

    def __init__(self, connection: Any, config: DB2ConnectionConfig):
        """
        Initialize the context.

        Args:
            connection: Open DB-API connection (pyodbc or compatible)
            config: Configuration the connection was opened with
        """
        self.connection = connection
        self.config = config

        variant = config.variant()
        self.variant_name = variant.name
        self.schema_grammar = variant.grammar_class()
        self.post_processor = variant.processor_class()
        self.query_grammar = DB2QueryGrammar(
            date_format=config.date_format,
            offset_compatibility_mode=config.offset_compatibility_mode,
        )

        self._default_schema = (config.schema or "").upper()
        self._current_schema = self._default_schema

    # ==================== Schema state ====================

    @property
    def default_schema(self) -> str:
        return self._default_schema

    @property
    def current_schema(self) -> str:
        return self._current_schema

    def set_current_schema(self, schema: str) -> None:
        """Switch the session schema (SET SCHEMA) and remember it."""
        schema = schema.upper()
        self.statement("set schema ?", [schema])
        self._current_schema = schema
        logger.info(f"Current schema set to {schema}")

    def reset_current_schema(self) -> None:
        """Switch back to the configured default schema."""
        self.set_current_schema(self._default_schema)

    def qualify_table(self, table: str) -> str:
        """Prefix an unqualified table name with the current schema."""
        if "." in table or not self._current_schema:
            return table
        return f"{self._current_schema}.{table}"

    # ==================== System commands ====================

    def execute_command(self, command: str) -> bool:
        """Run an IBM i CL command through QSYS2.QCMDEXC."""
        return self.statement(f"CALL {SYSTEM_COMMAND_PROCEDURE}(?)", [command])

    # ==================== Execution ====================

    def statement(self, query: str, bindings: Sequence[Any] = ()) -> bool:
        """Execute a statement that returns no rows."""
        logger.debug(f"Executing: {query}")
        cursor = self.connection.cursor()
        try:
            if bindings:
                cursor.execute(query, tuple(bindings))
            else:
                cursor.execute(query)
        finally:
            cursor.close()
        return True

    def select(self, query: str, bindings: Sequence[Any] = ()) -> List[Dict[str, Any]]:
        """
        Execute a query and return its rows as dicts keyed by column name.

        Column names are kept as reported by the driver (DB2 upper-cases
        unquoted names).
        """
        logger.debug(f"Selecting: {query}")
        cursor = self.connection.cursor()
        try:
            if bindings:
                cursor.execute(query, tuple(bindings))
            else:
                cursor.execute(query)
            columns = [description[0] for description in cursor.description or []]
            return [dict(zip(columns, row)) for row in cursor.fetchall()]
        finally:
            cursor.close()

    def select_one(self, query: str, bindings: Sequence[Any] = ()) -> Optional[Dict[str, Any]]:
        rows = self.select(query, bindings)
        return rows[0] if rows else None

    def insert_get_id(
        self,
        query: str,
        values: Sequence[Any] = (),
        sequence: Union[str, Sequence[str], None] = None
    ) -> Any:
        """
        Run an insert and return the generated key(s).

        Args:
            query: INSERT statement
            values: INSERT bindings
            sequence: Key column (default "id") or list of key columns
        """
        return self.post_processor.process_insert_get_id(self, query, values, sequence)

    def run_blueprint(self, blueprint: Blueprint) -> List[str]:
        """
        Compile a blueprint and execute its statements in order.

        Returns:
            The executed statements
        """
        statements = blueprint.to_sql(self, self.schema_grammar)
        for sql in statements:
            self.statement(sql)
        return statements

    # ==================== Catalog ====================

    def _split_table(self, table: str) -> List[str]:
        parts = table.split(".")
        if len(parts) > 1:
            return [parts[0], parts[-1]]
        return [self._current_schema, table]

    def has_table(self, table: str) -> bool:
        """Whether the table exists (unqualified names use the current schema)."""
        return bool(self.select(self.schema_grammar.compile_table_exists(), self._split_table(table)))

    def get_column_listing(self, table: str) -> List[str]:
        rows = self.select(self.schema_grammar.compile_column_exists(), self._split_table(table))
        return [row_value(row, "column_name") for row in rows]

    def close(self) -> None:
        self.connection.close()
