"""
Schema - Blueprints and the DB2 schema grammar

Usage:
    from dataforge_db2.database.schema import Blueprint, DB2Grammar

    blueprint = Blueprint("app.users")
    blueprint.create()
    blueprint.increments("id")
    statements = blueprint.to_sql(connection, DB2Grammar())
"""

from .blueprint import Blueprint, CompileContext, sequence_commands
from .grammar import DB2ExpressCGrammar, DB2Grammar

__all__ = [
    "Blueprint",
    "CompileContext",
    "sequence_commands",
    "DB2Grammar",
    "DB2ExpressCGrammar",
]
