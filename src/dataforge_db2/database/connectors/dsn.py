"""
DSN Strategies - Connection strings for each DB2 driver family

Each builder is a pure function of the connection configuration. The
variant table (see ..variants) selects one per driver identifier.
"""

import re
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from ..models.connection_config import DB2ConnectionConfig

ODBC_SCHEME = "odbc:"
IBM_SCHEME = "ibm:"

_PASSWORD_RE = re.compile(r"((?:Password|PWD)=)([^;]*)", re.IGNORECASE)


def build_ibm_dsn(config: "DB2ConnectionConfig") -> str:
    """Native IBM driver, catalogued database: ibm:<database>"""
    return f"{IBM_SCHEME}{config.database}"


def build_ibm_driver_dsn(config: "DB2ConnectionConfig") -> str:
    """Native IBM driver with explicit driver, host and port."""
    return (
        f"{IBM_SCHEME}DRIVER={{{config.driver_name}}};"
        f"DATABASE={{{config.database}}};"
        f"HOSTNAME={{{config.host}}};"
        f"PORT={{{config.port}}};"
        "PROTOCOL=TCPIP;"
    )


def build_odbc_dsn(config: "DB2ConnectionConfig") -> str:
    """
    ODBC driver (IBM i Access, DB2 CLI).

    Extra keywords from config.odbc_keywords are appended in their
    original order.
    """
    parts = [
        f"{ODBC_SCHEME}DRIVER={config.driver_name}",
        f"System={config.host}",
        f"Database={config.database}",
        f"UserID={config.username}",
        f"Password={config.password}",
    ]
    parts.extend(f"{key}={value}" for key, value in config.odbc_keywords.items())
    return ";".join(parts)


def strip_scheme(dsn: str) -> str:
    """Remove the odbc:/ibm: scheme, leaving the driver connection string."""
    for scheme in (ODBC_SCHEME, IBM_SCHEME):
        if dsn.startswith(scheme):
            return dsn[len(scheme):]
    return dsn


def mask_password(dsn: str) -> str:
    """Hide the password of a DSN before it is logged."""
    return _PASSWORD_RE.sub(r"\1***", dsn)
