"""
Centralized constants for DataForge DB2.

Eliminates magic numbers scattered across the grammar, connector and processors.
Import from here instead of hardcoding values.
"""

# ===========================================================================
# Timeouts (seconds)
# ===========================================================================
CONNECTION_TIMEOUT_S = 5        # Login timeout handed to the ODBC driver

# ===========================================================================
# Column types
# ===========================================================================
TEXT_DEFAULT_LENGTH = 16369         # varchar length used for "text"
MEDIUM_TEXT_DEFAULT_LENGTH = 16000  # varchar length used for "mediumText"
LONG_TEXT_DEFAULT_LENGTH = 16000    # varchar length used for "longText"
STRING_DEFAULT_LENGTH = 255

NUMERIC_DEFAULT_TOTAL = 8
NUMERIC_DEFAULT_PLACES = 2

# Column types that may carry an identity (auto-increment) clause
SERIAL_TYPES = ("smallInteger", "integer", "bigInteger")

# ===========================================================================
# IBM i system commands
# ===========================================================================
SYSTEM_COMMAND_PROCEDURE = "QSYS2.QCMDEXC"

REPLY_LIST_MIN_SEQUENCE = 1
REPLY_LIST_MAX_SEQUENCE = 9999
# Inquiry raised by RMVM/ALTER TABLE when data could be lost
REPLY_LIST_MESSAGE_ID = "CPA32B2"

# ===========================================================================
# Query grammar
# ===========================================================================
DEFAULT_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"
