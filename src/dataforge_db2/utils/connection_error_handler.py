"""
Connection Error Handler - User-friendly DB2 connection error messages

Translates DB2 SQLSTATEs, SQLCODEs and IBM i message ids into readable
messages with suggestions. Only used for logging and display: the original
exception is always re-raised by the caller.
"""

import re
from dataclasses import dataclass

import logging
logger = logging.getLogger(__name__)


@dataclass
class ConnectionErrorInfo:
    """Structured connection error information."""
    title: str  # Short error title
    message: str  # User-friendly message
    suggestion: str  # What to do to fix it
    original_error: str  # Original error for debugging

    def format_full(self) -> str:
        """Format complete error message for display."""
        parts = [self.title, "", self.message]
        if self.suggestion:
            parts.extend(["", "Suggestion:", self.suggestion])
        return "\n".join(parts)

    def format_short(self) -> str:
        return f"{self.title}\n\n{self.message}"


# Format: (regex_pattern, title, message_template, suggestion)
# Use {match} in message_template to include regex group(1)

DB2_PATTERNS = [
    # Invalid user profile or password (SQL30082, CWBSY messages)
    (
        r"(?:SQL30082|CWBSY100[0-9]|password (?:is )?(?:not )?(?:correct|valid))",
        "Authentication failed",
        "The user profile or password was rejected by the server.",
        "Check the user profile and password. On IBM i, also check that the "
        "profile is not disabled (WRKUSRPRF)."
    ),
    # Database / RDB not found
    (
        r"(?:SQL1013N|SQL0950|relational database ['\"]?(\w+)['\"]? not found)",
        "Database not found",
        "The database '{match}' could not be found.",
        "Check the database name (WRKRDBDIRE on IBM i, LIST DB DIRECTORY on LUW)."
    ),
    # Host unreachable
    (
        r"(?:SQL30081N|CWBCO100[0-9]|communication error)",
        "Server unreachable",
        "The DB2 server could not be reached.",
        "Check that:\n"
        "  - The host name is correct\n"
        "  - The host server (STRHOSTSVR) or DB2 instance is started\n"
        "  - The firewall allows the database port"
    ),
    # Driver missing
    (
        r"(?:IM002|data source name not found|driver.*not (?:found|installed))",
        "ODBC driver missing",
        "The configured ODBC driver is not installed.",
        "Install the IBM i Access ODBC driver or the IBM Data Server Driver, "
        "and check driver_name against the installed driver list."
    ),
    # Schema not found (SET SCHEMA)
    (
        r"SQL0204\W*(\w+) in \S+ type \*LIB",
        "Schema not found",
        "The schema '{match}' does not exist.",
        "Check the schema setting of the connection."
    ),
    # Authority
    (
        r"(?:SQL0551|not authorized|authority)",
        "Access denied",
        "The user profile lacks authority on the requested object.",
        "Ask the system administrator to grant the required authority."
    ),
]

# Generic patterns (for all database types)
GENERIC_PATTERNS = [
    (
        r"(?:timeout|timed out|HYT00)",
        "Timeout",
        "The connection took too long.",
        "Check the network connection and try again."
    ),
    (
        r"refused",
        "Connection refused",
        "The server refused the connection.",
        "Check that the database server is started."
    ),
]


def parse_connection_error(error: Exception) -> ConnectionErrorInfo:
    """
    Parse a DB2 connection error and return user-friendly information.

    Args:
        error: The exception raised by the driver

    Returns:
        ConnectionErrorInfo with message and suggestion
    """
    original_error = str(error)

    for pattern, title, message_template, suggestion in DB2_PATTERNS + GENERIC_PATTERNS:
        match = re.search(pattern, original_error, re.IGNORECASE)
        if match:
            message = message_template
            if "{match}" in message:
                captured = next((g for g in match.groups() if g), "")
                message = message.replace("{match}", captured or "?")

            return ConnectionErrorInfo(
                title=title,
                message=message,
                suggestion=suggestion,
                original_error=original_error
            )

    return ConnectionErrorInfo(
        title="Connection error",
        message="An error occurred while connecting to the DB2 server.",
        suggestion="Check the connection settings and try again.",
        original_error=original_error
    )


def format_connection_error(error: Exception, include_original: bool = True) -> str:
    """
    Format a connection error for display or logging.

    Args:
        error: The exception that occurred
        include_original: Whether to include the driver's message
    """
    info = parse_connection_error(error)
    parts = [info.format_full()]

    if include_original:
        parts.extend(["", "---", "Technical details:", info.original_error[:500]])

    return "\n".join(parts)
