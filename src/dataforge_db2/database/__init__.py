"""
Database - DB2 schema grammar, query processors, connectors and session context

Usage:
    from dataforge_db2.database import Blueprint, DB2Connector

    connection = DB2Connector().connect(config)

    blueprint = Blueprint("app.users")
    blueprint.create()
    blueprint.increments("id")
    blueprint.string("name", 50)
    connection.run_blueprint(blueprint)
"""

from .connection import DB2Connection
from .connectors import DB2Connector, connect_db2
from .errors import ConfigurationError, InsertIdLookupError, SchemaCompileError
from .models import ColumnDefinition, Command, CommandName, DB2ConnectionConfig, Expression
from .query import DB2Processor, DB2QueryGrammar, DB2ZOSProcessor
from .schema import Blueprint, CompileContext, DB2ExpressCGrammar, DB2Grammar, sequence_commands
from .variants import DriverVariant, VariantFactory

__all__ = [
    # Session
    "DB2Connection",
    "DB2Connector",
    "connect_db2",

    # Errors
    "ConfigurationError",
    "InsertIdLookupError",
    "SchemaCompileError",

    # Models
    "ColumnDefinition",
    "Command",
    "CommandName",
    "DB2ConnectionConfig",
    "Expression",

    # Grammars and processors
    "Blueprint",
    "CompileContext",
    "sequence_commands",
    "DB2Grammar",
    "DB2ExpressCGrammar",
    "DB2QueryGrammar",
    "DB2Processor",
    "DB2ZOSProcessor",

    # Variants
    "DriverVariant",
    "VariantFactory",
]
