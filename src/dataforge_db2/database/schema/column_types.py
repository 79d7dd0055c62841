"""
Column Type Compiler - Maps abstract column descriptors to DB2 type fragments

Each supported type tag has one compiler function in TYPE_COMPILERS. The
functions are pure: their output only depends on the descriptor.
"""

from typing import Callable, Dict

from ...constants import (
    LONG_TEXT_DEFAULT_LENGTH,
    MEDIUM_TEXT_DEFAULT_LENGTH,
    TEXT_DEFAULT_LENGTH,
)
from ..grammar import Grammar
from ..models.column import ColumnDefinition


def type_char(column: ColumnDefinition) -> str:
    return f"char({column.length})"


def type_string(column: ColumnDefinition) -> str:
    return f"varchar({column.length})"


def type_text(column: ColumnDefinition) -> str:
    return f"varchar({column.length or TEXT_DEFAULT_LENGTH})"


def type_medium_text(column: ColumnDefinition) -> str:
    return f"varchar({column.length or MEDIUM_TEXT_DEFAULT_LENGTH})"


def type_long_text(column: ColumnDefinition) -> str:
    return f"varchar({column.length or LONG_TEXT_DEFAULT_LENGTH})"


def type_big_integer(column: ColumnDefinition) -> str:
    return "bigint"


def type_integer(column: ColumnDefinition) -> str:
    return "int"


def type_small_integer(column: ColumnDefinition) -> str:
    return "smallint"


def type_numeric(column: ColumnDefinition) -> str:
    return f"numeric({column.total}, {column.places})"


def type_decimal(column: ColumnDefinition) -> str:
    return f"decimal({column.total}, {column.places})"


def type_float(column: ColumnDefinition) -> str:
    # DB2 has no sized float; emulated as decimal
    return f"decimal({column.total}, {column.places})"


def type_double(column: ColumnDefinition) -> str:
    if column.total and column.places:
        return f"double({column.total}, {column.places})"
    return "double"


def type_boolean(column: ColumnDefinition) -> str:
    """
    Booleans are smallint columns restricted to 0/1 by a named check constraint.

    The constraint is named boolean_<table>_<column>, so it is unique per
    table. A default of 0 is added when the column has no explicit default.
    """
    sql = (
        f"smallint constraint {column.type}_{column.prefix}_{column.name} "
        f"check({column.name} in(0, 1))"
    )
    if column.default is None:
        sql += " default 0"
    return sql


def type_enum(column: ColumnDefinition) -> str:
    return "enum(" + ", ".join(Grammar.quote_string(value) for value in column.allowed) + ")"


def type_date(column: ColumnDefinition) -> str:
    if not column.nullable:
        return "date default current_date"
    return "date"


def type_time(column: ColumnDefinition) -> str:
    if not column.nullable:
        return "time default current_time"
    return "time"


def type_timestamp(column: ColumnDefinition) -> str:
    if not column.nullable:
        return "timestamp default current_timestamp"
    return "timestamp"


def type_binary(column: ColumnDefinition) -> str:
    return "blob"


TYPE_COMPILERS: Dict[str, Callable[[ColumnDefinition], str]] = {
    "char": type_char,
    "string": type_string,
    "text": type_text,
    "mediumText": type_medium_text,
    "longText": type_long_text,
    "bigInteger": type_big_integer,
    "integer": type_integer,
    "smallInteger": type_small_integer,
    "numeric": type_numeric,
    "decimal": type_decimal,
    "float": type_float,
    "double": type_double,
    "boolean": type_boolean,
    "enum": type_enum,
    "date": type_date,
    "dateTime": type_timestamp,
    "time": type_time,
    "timestamp": type_timestamp,
    "binary": type_binary,
}


def is_supported_type(type_name: str) -> bool:
    return type_name in TYPE_COMPILERS


def compile_type(column: ColumnDefinition) -> str:
    """
    Compile the type fragment of a column.

    Raises:
        KeyError: If the type tag has no compiler (blueprints reject these earlier)
    """
    return TYPE_COMPILERS[column.type](column)
