"""
ColumnDefinition model - Abstract column descriptor compiled by the DB2 grammar
"""
from dataclasses import dataclass, field
from typing import Any, List, Optional, Union


class Expression:
    """Raw SQL fragment that must be emitted without quoting (e.g. in defaults)."""

    def __init__(self, value: str):
        self.value = value

    def __str__(self) -> str:
        return self.value

    def __repr__(self) -> str:
        return f"Expression({self.value!r})"

    def __eq__(self, other: object) -> bool:
        return isinstance(other, Expression) and other.value == self.value

    def __hash__(self) -> int:
        return hash(self.value)


@dataclass
class ColumnDefinition:
    """
    Column descriptor.

    Attributes:
        type: Abstract type tag (string, integer, boolean, ...)
        name: Column name
        length: Length for char/string/text types
        total: Total digits for numeric types
        places: Decimal places for numeric types
        allowed: Allowed values for enum columns
        prefix: Table name (without schema) used to name boolean check constraints
        nullable: Whether NULL is allowed
        default: Default value (bool, Expression or any value rendered as a string literal)
        auto_increment: Declare the column as identity primary key
        generated: True for "generated always", or a generation expression
        start_with: Identity start value
        before: Column to insert this one before
        implicitly_hidden: Hide the column from SELECT *
        for_column: System (short) column name
    """
    type: str
    name: str
    length: Optional[int] = None
    total: Optional[int] = None
    places: Optional[int] = None
    allowed: List[str] = field(default_factory=list)
    prefix: str = ""
    nullable: bool = False
    default: Any = None
    auto_increment: bool = False
    generated: Union[bool, str, None] = None
    start_with: Optional[int] = None
    before: Optional[str] = None
    implicitly_hidden: bool = False
    for_column: Optional[str] = None
