"""
Command model - Abstract schema commands recorded on a blueprint
"""
from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional


class CommandName(str, Enum):
    """Tags of the schema commands understood by the DB2 grammar."""
    CREATE_TABLE = "createTable"
    DROP_TABLE = "dropTable"
    DROP_TABLE_IF_EXISTS = "dropTableIfExists"
    ADD_COLUMN = "addColumn"
    DROP_COLUMN = "dropColumn"
    RENAME_COLUMN = "renameColumn"
    ADD_INDEX = "addIndex"
    ADD_PRIMARY = "addPrimary"
    ADD_UNIQUE = "addUnique"
    ADD_FOREIGN = "addForeign"
    DROP_INDEX = "dropIndex"
    DROP_PRIMARY = "dropPrimary"
    DROP_UNIQUE = "dropUnique"
    DROP_FOREIGN = "dropForeign"
    RENAME_TABLE = "renameTable"
    LABEL = "label"
    RAW_SYSTEM_COMMAND = "rawSystemCommand"
    ADD_REPLY_LIST_ENTRY = "addReplyListEntry"
    REMOVE_REPLY_LIST_ENTRY = "removeReplyListEntry"
    CHANGE_JOB = "changeJob"


@dataclass
class Command:
    """
    A single schema command.

    Only the fields relevant to the command's tag are set; the others keep
    their defaults.
    """
    name: CommandName
    columns: List[str] = field(default_factory=list)
    index: Optional[str] = None
    index_system: Optional[str] = None
    on: Optional[str] = None
    references: List[str] = field(default_factory=list)
    on_delete: Optional[str] = None
    on_update: Optional[str] = None
    rename_from: Optional[str] = None
    to: Optional[str] = None
    label: Optional[str] = None
    command: Optional[str] = None
