"""
DB2 errors - Exceptions raised while building SQL for DB2.

Database errors raised by the driver are never wrapped: they propagate
unchanged from the DB-API connection.
"""


class SchemaCompileError(ValueError):
    """A blueprint command or column cannot be compiled to DB2 SQL."""

    def __init__(self, message: str, table: str = "", command: str = "", column: str = ""):
        self.table = table
        self.command = command
        self.column = column

        context = []
        if command:
            context.append(f"command '{command}'")
        if column:
            context.append(f"column '{column}'")
        if table:
            context.append(f"table '{table}'")

        if context:
            message = f"{message} ({', '.join(context)})"
        super().__init__(message)


class ConfigurationError(ValueError):
    """Connection configuration is incomplete or names an unknown driver."""


class InsertIdLookupError(LookupError):
    """The generated key could not be read back from an insert."""
