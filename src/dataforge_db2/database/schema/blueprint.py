"""
Blueprint - Abstract description of the schema changes for one DB2 table

A blueprint records columns and commands; nothing is rendered until
to_sql() hands every command to a schema grammar.

Usage:
    blueprint = Blueprint("app.users")
    blueprint.create()
    blueprint.increments("id")
    blueprint.string("name", 50)
    statements = blueprint.to_sql(connection, DB2Grammar())
"""

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, List, Optional, Sequence, Union

from ...constants import (
    NUMERIC_DEFAULT_PLACES,
    NUMERIC_DEFAULT_TOTAL,
    STRING_DEFAULT_LENGTH,
)
from ..errors import SchemaCompileError
from ..models.column import ColumnDefinition
from ..models.command import Command, CommandName
from .column_types import is_supported_type

if TYPE_CHECKING:
    from ..connection import DB2Connection
    from .grammar import DB2Grammar

import logging
logger = logging.getLogger(__name__)

# Commands that make IBM i raise the CPA32B2 inquiry message
_REPLY_LIST_TRIGGERS = (CommandName.DROP_COLUMN, CommandName.RENAME_COLUMN)


@dataclass
class CompileContext:
    """
    State shared by the commands of a single to_sql() call.

    Attributes:
        reply_list_sequence_number: Set by addReplyListEntry, read by
            removeReplyListEntry
    """
    reply_list_sequence_number: Optional[int] = None


def sequence_commands(commands: Sequence[Command]) -> List[Command]:
    """
    Bracket destructive column commands with reply-list commands.

    When a dropColumn or renameColumn command is present the result is
    [addReplyListEntry, changeJob, *commands, removeReplyListEntry].
    Lists without such commands, or already bracketed ones, are returned
    unchanged (as a new list).
    """
    commands = list(commands)

    if any(c.name == CommandName.ADD_REPLY_LIST_ENTRY for c in commands):
        return commands

    if not any(c.name in _REPLY_LIST_TRIGGERS for c in commands):
        return commands

    return [
        Command(CommandName.ADD_REPLY_LIST_ENTRY),
        Command(CommandName.CHANGE_JOB),
        *commands,
        Command(CommandName.REMOVE_REPLY_LIST_ENTRY),
    ]


class Blueprint:
    """
    Columns and commands for one table.

    Args:
        table: Table name, optionally schema-qualified (schema.table)
        prefix: Table prefix prepended to generated index names
        system_name: IBM i short (system) name for the table
    """

    def __init__(self, table: str, prefix: str = "", system_name: Optional[str] = None):
        self.table = table
        self.prefix = prefix
        self.system_name = system_name
        self.columns: List[ColumnDefinition] = []
        self.commands: List[Command] = []

    # ==================== Naming ====================

    @property
    def schema(self) -> str:
        """Schema part of the table name, or "" when unqualified."""
        parts = self.table.split(".")
        return parts[0] if len(parts) > 1 else ""

    @property
    def table_name(self) -> str:
        """Table name without its schema."""
        return self.table.split(".")[-1]

    def create_index_name(self, index_type: str, columns: Sequence[str]) -> str:
        """
        Build a default index name: <prefix><table>_<columns>_<type>.

        Dots and dashes become underscores, so app.users gives app_users_...
        """
        index = f"{self.prefix}{self.table}_{'_'.join(columns)}_{index_type}".lower()
        return index.replace("-", "_").replace(".", "_")

    # ==================== SQL ====================

    def creating(self) -> bool:
        return any(c.name == CommandName.CREATE_TABLE for c in self.commands)

    def to_commands(self) -> List[Command]:
        """
        Return the commands to compile, including implied and bracketing ones.

        The blueprint itself is not modified.
        """
        commands = list(self.commands)

        if self.columns and not self.creating():
            commands.insert(0, Command(CommandName.ADD_COLUMN))

        return sequence_commands(commands)

    def to_sql(self, connection: "DB2Connection", grammar: "DB2Grammar") -> List[str]:
        """
        Compile the blueprint into DB2 statements.

        Args:
            connection: Connection used by commands that query the server
                (addReplyListEntry)
            grammar: Schema grammar of the connection's variant

        Returns:
            Statements in execution order
        """
        context = CompileContext()
        statements: List[str] = []

        for command in self.to_commands():
            statements.extend(grammar.compile(self, command, connection, context))

        logger.debug(f"Compiled {len(statements)} statement(s) for table {self.table}")
        return statements

    # ==================== Table commands ====================

    def add_command(self, name: CommandName, **parameters: Any) -> Command:
        command = Command(name, **parameters)
        self.commands.append(command)
        return command

    def create(self) -> Command:
        return self.add_command(CommandName.CREATE_TABLE)

    def drop(self) -> Command:
        return self.add_command(CommandName.DROP_TABLE)

    def drop_if_exists(self) -> Command:
        return self.add_command(CommandName.DROP_TABLE_IF_EXISTS)

    def rename(self, to: str) -> Command:
        return self.add_command(CommandName.RENAME_TABLE, to=to)

    def for_system_name(self, system_name: str) -> None:
        """Specify the IBM i system name used when the table is created."""
        self.system_name = system_name

    def label(self, label: str) -> Command:
        return self.add_command(CommandName.LABEL, label=label)

    def execute_command(self, command: str) -> Command:
        """Run an IBM i CL command as part of the blueprint."""
        return self.add_command(CommandName.RAW_SYSTEM_COMMAND, command=command)

    # ==================== Column commands ====================

    def drop_column(self, *columns: Union[str, Sequence[str]]) -> Command:
        names: List[str] = []
        for column in columns:
            if isinstance(column, str):
                names.append(column)
            else:
                names.extend(column)
        return self.add_command(CommandName.DROP_COLUMN, columns=names)

    def rename_column(self, rename_from: str, to: str) -> Command:
        return self.add_command(CommandName.RENAME_COLUMN, rename_from=rename_from, to=to)

    # ==================== Index commands ====================

    def _index_command(
        self,
        name: CommandName,
        index_type: str,
        columns: Union[str, Sequence[str]],
        index: Optional[str] = None,
        **parameters: Any
    ) -> Command:
        columns = [columns] if isinstance(columns, str) else list(columns)
        if index is None:
            index = self.create_index_name(index_type, columns)
        return self.add_command(name, columns=columns, index=index, **parameters)

    def primary(self, columns: Union[str, Sequence[str]], name: Optional[str] = None) -> Command:
        return self._index_command(CommandName.ADD_PRIMARY, "primary", columns, name)

    def unique(self, columns: Union[str, Sequence[str]], name: Optional[str] = None) -> Command:
        return self._index_command(CommandName.ADD_UNIQUE, "unique", columns, name)

    def index(
        self,
        columns: Union[str, Sequence[str]],
        name: Optional[str] = None,
        system_name: Optional[str] = None
    ) -> Command:
        """Add a plain index, optionally with an IBM i system name."""
        return self._index_command(
            CommandName.ADD_INDEX, "index", columns, name, index_system=system_name
        )

    def foreign(
        self,
        columns: Union[str, Sequence[str]],
        references: Union[str, Sequence[str]],
        on: str,
        name: Optional[str] = None,
        on_delete: Optional[str] = None,
        on_update: Optional[str] = None
    ) -> Command:
        references = [references] if isinstance(references, str) else list(references)
        return self._index_command(
            CommandName.ADD_FOREIGN, "foreign", columns, name,
            references=references, on=on, on_delete=on_delete, on_update=on_update,
        )

    def _drop_index_command(
        self,
        name: CommandName,
        index_type: str,
        index: Union[str, Sequence[str], None]
    ) -> Command:
        """A list of columns is turned into the conventional index name."""
        columns: List[str] = []
        if index is None or not isinstance(index, str):
            columns = list(index or [])
            index = self.create_index_name(index_type, columns)
        return self.add_command(name, columns=columns, index=index)

    def drop_primary(self, index: Union[str, Sequence[str], None] = None) -> Command:
        return self._drop_index_command(CommandName.DROP_PRIMARY, "primary", index)

    def drop_unique(self, index: Union[str, Sequence[str]]) -> Command:
        return self._drop_index_command(CommandName.DROP_UNIQUE, "unique", index)

    def drop_index(self, index: Union[str, Sequence[str]]) -> Command:
        return self._drop_index_command(CommandName.DROP_INDEX, "index", index)

    def drop_foreign(self, index: Union[str, Sequence[str]]) -> Command:
        return self._drop_index_command(CommandName.DROP_FOREIGN, "foreign", index)

    # ==================== Synchronisation ====================

    def synchro(self, index: Optional[str] = None, masterizable: bool = False) -> None:
        """
        Add the columns used to synchronise rows with another system.

        Adds id_sync varchar(20) (indexed), hashcode varchar(32) and, when
        masterizable, a data_master boolean defaulting to true.

        Args:
            index: Name of the id_sync index (generated when None)
            masterizable: Whether rows can be flagged as master data
        """
        self.string("id_sync", 20)
        self.index("id_sync", index)
        self.string("hashcode", 32)

        if masterizable:
            self.boolean("data_master", default=True)

    def drop_synchro(self, index: Union[str, Sequence[str]]) -> None:
        """Drop the synchronisation columns and the id_sync index."""
        self.drop_column("id_sync", "hashcode")
        self.drop_index(index)

    # ==================== Columns ====================

    def add_column(self, column_type: str, name: str, **attributes: Any) -> ColumnDefinition:
        """
        Add a column definition.

        Raises:
            SchemaCompileError: If the column type is not supported by DB2
        """
        if not is_supported_type(column_type):
            raise SchemaCompileError(
                f"Unsupported column type '{column_type}'", table=self.table, column=name
            )
        column = ColumnDefinition(type=column_type, name=name, **attributes)
        self.columns.append(column)
        return column

    def char(self, name: str, length: int = STRING_DEFAULT_LENGTH, **modifiers: Any) -> ColumnDefinition:
        return self.add_column("char", name, length=length, **modifiers)

    def string(self, name: str, length: int = STRING_DEFAULT_LENGTH, **modifiers: Any) -> ColumnDefinition:
        return self.add_column("string", name, length=length, **modifiers)

    def text(self, name: str, length: Optional[int] = None, **modifiers: Any) -> ColumnDefinition:
        return self.add_column("text", name, length=length, **modifiers)

    def medium_text(self, name: str, length: Optional[int] = None, **modifiers: Any) -> ColumnDefinition:
        return self.add_column("mediumText", name, length=length, **modifiers)

    def long_text(self, name: str, length: Optional[int] = None, **modifiers: Any) -> ColumnDefinition:
        return self.add_column("longText", name, length=length, **modifiers)

    def big_integer(self, name: str, auto_increment: bool = False, **modifiers: Any) -> ColumnDefinition:
        return self.add_column("bigInteger", name, auto_increment=auto_increment, **modifiers)

    def integer(self, name: str, auto_increment: bool = False, **modifiers: Any) -> ColumnDefinition:
        return self.add_column("integer", name, auto_increment=auto_increment, **modifiers)

    def small_integer(self, name: str, auto_increment: bool = False, **modifiers: Any) -> ColumnDefinition:
        return self.add_column("smallInteger", name, auto_increment=auto_increment, **modifiers)

    def increments(self, name: str, **modifiers: Any) -> ColumnDefinition:
        """Auto-incrementing integer identity, which is also the primary key."""
        return self.integer(name, auto_increment=True, **modifiers)

    def big_increments(self, name: str, **modifiers: Any) -> ColumnDefinition:
        return self.big_integer(name, auto_increment=True, **modifiers)

    def numeric(
        self,
        name: str,
        total: int = NUMERIC_DEFAULT_TOTAL,
        places: int = NUMERIC_DEFAULT_PLACES,
        **modifiers: Any
    ) -> ColumnDefinition:
        return self.add_column("numeric", name, total=total, places=places, **modifiers)

    def decimal(
        self,
        name: str,
        total: int = NUMERIC_DEFAULT_TOTAL,
        places: int = NUMERIC_DEFAULT_PLACES,
        **modifiers: Any
    ) -> ColumnDefinition:
        return self.add_column("decimal", name, total=total, places=places, **modifiers)

    def float(
        self,
        name: str,
        total: int = NUMERIC_DEFAULT_TOTAL,
        places: int = NUMERIC_DEFAULT_PLACES,
        **modifiers: Any
    ) -> ColumnDefinition:
        return self.add_column("float", name, total=total, places=places, **modifiers)

    def double(
        self,
        name: str,
        total: Optional[int] = None,
        places: Optional[int] = None,
        **modifiers: Any
    ) -> ColumnDefinition:
        return self.add_column("double", name, total=total, places=places, **modifiers)

    def boolean(self, name: str, **modifiers: Any) -> ColumnDefinition:
        # The check constraint is named after the table without its schema
        return self.add_column("boolean", name, prefix=self.table_name, **modifiers)

    def enum(self, name: str, allowed: Sequence[str], **modifiers: Any) -> ColumnDefinition:
        return self.add_column("enum", name, allowed=list(allowed), **modifiers)

    def date(self, name: str, **modifiers: Any) -> ColumnDefinition:
        return self.add_column("date", name, **modifiers)

    def date_time(self, name: str, **modifiers: Any) -> ColumnDefinition:
        return self.add_column("dateTime", name, **modifiers)

    def time(self, name: str, **modifiers: Any) -> ColumnDefinition:
        return self.add_column("time", name, **modifiers)

    def timestamp(self, name: str, **modifiers: Any) -> ColumnDefinition:
        return self.add_column("timestamp", name, **modifiers)

    def binary(self, name: str, **modifiers: Any) -> ColumnDefinition:
        return self.add_column("binary", name, **modifiers)
