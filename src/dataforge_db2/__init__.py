"""
DataForge DB2 - DB2 dialect layer (IBM i, LUW, z/OS, Express-C)
"""

from importlib.metadata import version, PackageNotFoundError

try:
    __version__ = version("dataforge-db2")
except PackageNotFoundError:
    # Package not installed
    __version__ = "0.1.0"

__author__ = "Lestat2Lioncourt"

from .database import Blueprint, DB2Connection, DB2Connector, connect_db2

__all__ = ["Blueprint", "DB2Connection", "DB2Connector", "connect_db2", "__version__"]
