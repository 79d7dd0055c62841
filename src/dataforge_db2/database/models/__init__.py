"""
Database Models - Dataclasses for schema and connection entities

All models are re-exported here for convenience:
    from dataforge_db2.database.models import ColumnDefinition, Command, ...
"""

from .column import ColumnDefinition, Expression
from .command import Command, CommandName
from .connection_config import DB2ConnectionConfig

__all__ = [
    "ColumnDefinition",
    "Expression",
    "Command",
    "CommandName",
    "DB2ConnectionConfig",
]
