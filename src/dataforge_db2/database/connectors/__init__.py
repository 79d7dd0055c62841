"""
Connectors - DSN strategies and the DB2 connector
"""

from .dsn import build_ibm_driver_dsn, build_ibm_dsn, build_odbc_dsn
from .db2_connector import DB2Connector, connect_db2, resolve_credentials

__all__ = [
    "build_ibm_dsn",
    "build_ibm_driver_dsn",
    "build_odbc_dsn",
    "DB2Connector",
    "connect_db2",
    "resolve_credentials",
]
