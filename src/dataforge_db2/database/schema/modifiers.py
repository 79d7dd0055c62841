"""
Column Modifier Compiler - Trailing clauses of a DB2 column definition

Modifiers are applied from explicit, ordered (predicate, compiler) tables.
The order matters: DB2 expects the identity clause right after the
nullability and default clauses.

    <name>[PRE_MODIFIERS] <type>[MODIFIERS]
"""

from typing import TYPE_CHECKING, Callable, List, Tuple

from ...constants import SERIAL_TYPES
from ..errors import SchemaCompileError
from ..grammar import Grammar
from ..models.column import ColumnDefinition, Expression

if TYPE_CHECKING:
    from .blueprint import Blueprint

Predicate = Callable[[ColumnDefinition], bool]
ModifierCompiler = Callable[[Grammar, "Blueprint", ColumnDefinition], str]


def is_identity(column: ColumnDefinition) -> bool:
    """Whether the column compiles to an identity primary key."""
    return column.auto_increment and column.type in SERIAL_TYPES


def default_value(value) -> str:
    """
    Format a value for a "default" clause.

    Booleans become quoted integers, Expressions are emitted raw and anything
    else becomes a string literal with embedded quotes doubled.
    """
    if isinstance(value, Expression):
        return str(value)
    if isinstance(value, bool):
        return f"'{int(value)}'"
    return Grammar.quote_string(value)


# ==================== Modifiers ====================

def modify_for_column(grammar: Grammar, blueprint: "Blueprint", column: ColumnDefinition) -> str:
    return f" for column {grammar.wrap(column.for_column)}"


def modify_nullable(grammar: Grammar, blueprint: "Blueprint", column: ColumnDefinition) -> str:
    # Identity columns are implicitly not null
    if column.nullable or is_identity(column):
        return ""
    return " not null"


def modify_default(grammar: Grammar, blueprint: "Blueprint", column: ColumnDefinition) -> str:
    return f" default {default_value(column.default)}"


def modify_generated(grammar: Grammar, blueprint: "Blueprint", column: ColumnDefinition) -> str:
    if column.generated is True:
        return " generated always"
    return f" generated {grammar.wrap(column.generated)}"


def modify_increment(grammar: Grammar, blueprint: "Blueprint", column: ColumnDefinition) -> str:
    """
    Declare an identity column, which is also the table's primary key.

    Raises:
        SchemaCompileError: If the column is not one of the integer types
    """
    if column.type not in SERIAL_TYPES:
        raise SchemaCompileError(
            f"Auto-increment is only supported on {', '.join(SERIAL_TYPES)} columns, "
            f"not '{column.type}'",
            table=blueprint.table,
            column=column.name,
        )
    return (
        " generated by default as identity constraint "
        f"{blueprint.table_name}-{column.name}_primary primary key"
    )


def modify_start_with(grammar: Grammar, blueprint: "Blueprint", column: ColumnDefinition) -> str:
    return f" (start with {column.start_with})"


def modify_before(grammar: Grammar, blueprint: "Blueprint", column: ColumnDefinition) -> str:
    return f" before {grammar.wrap(column.before)}"


def modify_implicitly_hidden(grammar: Grammar, blueprint: "Blueprint", column: ColumnDefinition) -> str:
    return " implicitly hidden"


PRE_MODIFIERS: List[Tuple[Predicate, ModifierCompiler]] = [
    (lambda column: column.for_column is not None, modify_for_column),
]

MODIFIERS: List[Tuple[Predicate, ModifierCompiler]] = [
    (lambda column: True, modify_nullable),
    (lambda column: column.default is not None, modify_default),
    (lambda column: column.generated is not None, modify_generated),
    (lambda column: column.auto_increment, modify_increment),
    (lambda column: column.start_with is not None, modify_start_with),
    (lambda column: column.before is not None, modify_before),
    (lambda column: column.implicitly_hidden, modify_implicitly_hidden),
]


def apply_modifiers(
    table: List[Tuple[Predicate, ModifierCompiler]],
    grammar: Grammar,
    blueprint: "Blueprint",
    column: ColumnDefinition,
) -> str:
    """Concatenate, in table order, every modifier whose predicate holds."""
    return "".join(
        compiler(grammar, blueprint, column)
        for predicate, compiler in table
        if predicate(column)
    )
