"""
DB2 Schema Grammar - Compiles blueprint commands into DB2 DDL

Handles DB2 specifics such as:
- "for system name" clauses (IBM i short names)
- Unqualified constraint names (schema prefix stripped)
- Boolean emulation via check constraints
- Identity columns declared inline as primary keys
- QSYS2.QCMDEXC system calls and reply-list entries around column drops/renames
"""

from typing import TYPE_CHECKING, Callable, Dict, List, Union

from ...constants import (
    REPLY_LIST_MAX_SEQUENCE,
    REPLY_LIST_MESSAGE_ID,
    REPLY_LIST_MIN_SEQUENCE,
    SYSTEM_COMMAND_PROCEDURE,
)
from ..errors import SchemaCompileError
from ..grammar import Grammar
from ..models.column import ColumnDefinition
from ..models.command import Command, CommandName
from ..rows import row_value
from .blueprint import Blueprint, CompileContext
from .column_types import compile_type
from .modifiers import MODIFIERS, PRE_MODIFIERS, apply_modifiers

if TYPE_CHECKING:
    from ..connection import DB2Connection

import logging
logger = logging.getLogger(__name__)

CommandCompiler = Callable[
    [Blueprint, Command, "DB2Connection", CompileContext], Union[str, List[str]]
]

# Lowest reply-list sequence number not used by an existing entry
REPLY_LIST_SEQUENCE_QUERY = f"""
    with reply_list_info(sequence_number) as (
        values({REPLY_LIST_MIN_SEQUENCE})
        union all
        select sequence_number + 1
        from reply_list_info
        where sequence_number + 1 between {REPLY_LIST_MIN_SEQUENCE + 1} and {REPLY_LIST_MAX_SEQUENCE}
    )
    select min(sequence_number) sequence_number
    from reply_list_info
    where not exists (
        select 1
        from qsys2.reply_list_info rli
        where rli.sequence_number = reply_list_info.sequence_number
    )
"""


def _command_label(command: Command) -> str:
    return getattr(command.name, "value", command.name)


class DB2Grammar(Grammar):
    """
    Schema grammar for DB2 (IBM i, LUW, z/OS).

    Usage:
        grammar = DB2Grammar()
        statements = blueprint.to_sql(connection, grammar)
    """

    # enum(...) fragments are emitted for symmetry with other engines only
    supports_enum = False

    def __init__(self):
        self._compilers: Dict[CommandName, CommandCompiler] = {
            CommandName.CREATE_TABLE: self.compile_create,
            CommandName.DROP_TABLE: self.compile_drop,
            CommandName.DROP_TABLE_IF_EXISTS: self.compile_drop_if_exists,
            CommandName.ADD_COLUMN: self.compile_add,
            CommandName.DROP_COLUMN: self.compile_drop_column,
            CommandName.RENAME_COLUMN: self.compile_rename_column,
            CommandName.ADD_INDEX: self.compile_index,
            CommandName.ADD_PRIMARY: self.compile_primary,
            CommandName.ADD_UNIQUE: self.compile_unique,
            CommandName.ADD_FOREIGN: self.compile_foreign,
            CommandName.DROP_INDEX: self.compile_drop_index,
            CommandName.DROP_PRIMARY: self.compile_drop_primary,
            CommandName.DROP_UNIQUE: self.compile_drop_unique,
            CommandName.DROP_FOREIGN: self.compile_drop_foreign,
            CommandName.RENAME_TABLE: self.compile_rename,
            CommandName.LABEL: self.compile_label,
            CommandName.RAW_SYSTEM_COMMAND: self.compile_execute_command,
            CommandName.ADD_REPLY_LIST_ENTRY: self.compile_add_reply_list_entry,
            CommandName.REMOVE_REPLY_LIST_ENTRY: self.compile_remove_reply_list_entry,
            CommandName.CHANGE_JOB: self.compile_change_job,
        }

    # ==================== Dispatch ====================

    def compile(
        self,
        blueprint: Blueprint,
        command: Command,
        connection: "DB2Connection",
        context: CompileContext
    ) -> List[str]:
        """
        Compile one command into one or more statements.

        Raises:
            SchemaCompileError: If the command or one of its columns cannot be compiled
        """
        compiler = self._compilers.get(command.name)
        if compiler is None:
            raise SchemaCompileError(
                "Unsupported schema command", table=blueprint.table, command=_command_label(command)
            )

        sql = compiler(blueprint, command, connection, context)
        return [sql] if isinstance(sql, str) else list(sql)

    # ==================== Catalog queries ====================

    def compile_table_exists(self) -> str:
        return (
            "select * from information_schema.tables "
            "where table_schema = upper(?) and table_name = upper(?)"
        )

    def compile_column_exists(self) -> str:
        return (
            "select column_name from information_schema.columns "
            "where table_schema = upper(?) and table_name = upper(?)"
        )

    # ==================== Columns ====================

    def get_column(self, blueprint: Blueprint, column: ColumnDefinition) -> str:
        """Compile one column definition: name, pre-modifiers, type, modifiers."""
        sql = self.wrap(column.name)
        sql += apply_modifiers(PRE_MODIFIERS, self, blueprint, column)
        sql += " " + compile_type(column)
        return sql + apply_modifiers(MODIFIERS, self, blueprint, column)

    def get_columns(self, blueprint: Blueprint) -> List[str]:
        return [self.get_column(blueprint, column) for column in blueprint.columns]

    def strip_schema_prefix(self, blueprint: Blueprint, index: str) -> str:
        """
        Remove the leading schema from a constraint name.

        DB2 constraint names are unqualified: with table app.users the name
        app_users_email_unique becomes users_email_unique. The match ignores
        case and follows the blueprint's table prefix (tmp_app_users_... ->
        tmp_users_...). Unqualified tables leave the name unchanged.
        """
        schema = blueprint.schema.lower()
        if not schema:
            return index

        prefix = blueprint.prefix.lower()
        lowered = index.lower()

        for separator in ("_", "."):
            head = f"{prefix}{schema}{separator}"
            if lowered.startswith(head):
                return index[:len(prefix)] + index[len(head):]
        return index

    # ==================== Tables ====================

    def compile_create(self, blueprint, command, connection, context) -> str:
        sql = f"create table {self.wrap_table(blueprint.table)}"

        if blueprint.system_name:
            sql += f" for system name {blueprint.system_name}"

        columns = ", ".join(self.get_columns(blueprint))
        return f"{sql} ({columns})"

    def compile_drop(self, blueprint, command, connection, context) -> str:
        return f"drop table {self.wrap_table(blueprint.table)}"

    def compile_drop_if_exists(self, blueprint, command, connection, context) -> str:
        return f"drop table if exists {self.wrap_table(blueprint.table)}"

    def compile_rename(self, blueprint, command, connection, context) -> str:
        return f"rename table {self.wrap_table(blueprint.table)} to {self.wrap_table(command.to)}"

    def compile_label(self, blueprint, command, connection, context) -> str:
        return f"label on table {self.wrap_table(blueprint.table)} is {self.quote_string(command.label)}"

    # ==================== Column commands ====================

    def compile_add(self, blueprint, command, connection, context) -> List[str]:
        """One "alter table ... add" statement per column."""
        table = self.wrap_table(blueprint.table)
        return [f"alter table {table} add {column}" for column in self.get_columns(blueprint)]

    def compile_drop_column(self, blueprint, command, connection, context) -> str:
        columns = ", ".join(f"drop {column}" for column in self.wrap_array(command.columns))
        return f"alter table {self.wrap_table(blueprint.table)} {columns}"

    def compile_rename_column(self, blueprint, command, connection, context) -> str:
        return (
            f"alter table {self.wrap_table(blueprint.table)} "
            f"rename column {self.wrap(command.rename_from)} to {self.wrap(command.to)}"
        )

    # ==================== Keys and indexes ====================

    def compile_primary(self, blueprint, command, connection, context) -> str:
        table = self.wrap_table(blueprint.table)
        index = self.strip_schema_prefix(blueprint, command.index)
        return f"alter table {table} add constraint {index} primary key ({self.columnize(command.columns)})"

    def compile_unique(self, blueprint, command, connection, context) -> str:
        table = self.wrap_table(blueprint.table)
        index = self.strip_schema_prefix(blueprint, command.index)
        return f"alter table {table} add constraint {index} unique({self.columnize(command.columns)})"

    def compile_foreign(self, blueprint, command, connection, context) -> str:
        table = self.wrap_table(blueprint.table)
        index = self.strip_schema_prefix(blueprint, command.index)

        sql = f"alter table {table} add constraint {index} "
        sql += (
            f"foreign key ({self.columnize(command.columns)}) "
            f"references {self.wrap_table(command.on)} ({self.columnize(command.references)})"
        )

        if command.on_delete is not None:
            sql += f" on delete {command.on_delete}"

        if command.on_update is not None:
            sql += f" on update {command.on_update}"

        return sql

    def compile_index(self, blueprint, command, connection, context) -> str:
        # Plain index names keep their schema prefix
        sql = f"create index {command.index}"

        if command.index_system:
            sql += f" for system name {command.index_system}"

        return sql + f" on {self.wrap_table(blueprint.table)}({self.columnize(command.columns)})"

    def compile_drop_primary(self, blueprint, command, connection, context) -> str:
        return f"alter table {self.wrap_table(blueprint.table)} drop primary key"

    def compile_drop_unique(self, blueprint, command, connection, context) -> str:
        # Unique constraints are indexes on DB2, hence the same syntax as compile_drop_index
        index = self.strip_schema_prefix(blueprint, command.index)
        return f"alter table {self.wrap_table(blueprint.table)} drop index {index}"

    def compile_drop_index(self, blueprint, command, connection, context) -> str:
        index = self.strip_schema_prefix(blueprint, command.index)
        return f"alter table {self.wrap_table(blueprint.table)} drop index {index}"

    def compile_drop_foreign(self, blueprint, command, connection, context) -> str:
        index = self.strip_schema_prefix(blueprint, command.index)
        return f"alter table {self.wrap_table(blueprint.table)} drop foreign key {index}"

    # ==================== System commands ====================

    def compile_system_call(self, command_text: str) -> str:
        return f"CALL {SYSTEM_COMMAND_PROCEDURE}({self.quote_string(command_text)})"

    def compile_execute_command(self, blueprint, command, connection, context) -> str:
        return self.compile_system_call(command.command)

    def compile_change_job(self, blueprint, command, connection, context) -> str:
        return self.compile_system_call("CHGJOB INQMSGRPY(*SYSRPYL)")

    def compile_add_reply_list_entry(
        self,
        blueprint: Blueprint,
        command: Command,
        connection: "DB2Connection",
        context: CompileContext
    ) -> str:
        """
        Add a reply-list entry answering the CPA32B2 inquiry with "I" (ignore).

        Queries the server for the lowest free sequence number and stores it
        in the compile context for compile_remove_reply_list_entry.

        Raises:
            SchemaCompileError: If every sequence number is already in use
        """
        row = connection.select_one(REPLY_LIST_SEQUENCE_QUERY)
        sequence_number = row_value(row, "sequence_number") if row else None

        if sequence_number is None:
            raise SchemaCompileError(
                "No free reply list sequence number", table=blueprint.table, command=_command_label(command)
            )

        context.reply_list_sequence_number = int(sequence_number)
        logger.debug(f"Using reply list sequence number {context.reply_list_sequence_number}")

        return self.compile_system_call(
            f"ADDRPYLE SEQNBR({context.reply_list_sequence_number}) "
            f"MSGID({REPLY_LIST_MESSAGE_ID}) RPY('I')"
        )

    def compile_remove_reply_list_entry(self, blueprint, command, connection, context) -> str:
        """
        Raises:
            SchemaCompileError: If no reply-list entry was added earlier in the blueprint
        """
        if context.reply_list_sequence_number is None:
            raise SchemaCompileError(
                "Reply list sequence number read before it was assigned",
                table=blueprint.table,
                command=_command_label(command),
            )
        return self.compile_system_call(f"RMVRPYLE SEQNBR({context.reply_list_sequence_number})")


class DB2ExpressCGrammar(DB2Grammar):
    """Schema grammar for DB2 Express-C, whose catalog lives in SYSPUBLIC."""

    def compile_table_exists(self) -> str:
        return (
            "select * from syspublic.all_tables "
            "where table_schema = upper(?) and table_name = upper(?)"
        )

    def compile_column_exists(self) -> str:
        return (
            "select column_name from syspublic.all_ind_columns "
            "where table_schema = upper(?) and table_name = upper(?)"
        )
