"""
DB2 Connector - Opens DB2 connections for any registered driver variant.

ODBC variants are opened with pyodbc. Native IBM variants (ibm: DSNs) need
an opener callable, e.g. a small wrapper around ibm_db_dbi.connect().
"""

import dataclasses
from typing import Any, Callable, Mapping, Optional, Union

from ...constants import CONNECTION_TIMEOUT_S
from ...utils.connection_error_handler import format_connection_error
from ...utils.credential_manager import CredentialManager
from ..connection import DB2Connection
from ..errors import ConfigurationError
from ..models.connection_config import DB2ConnectionConfig
from .dsn import mask_password, strip_scheme

import logging
logger = logging.getLogger(__name__)

Opener = Callable[[str], Any]


def resolve_credentials(config: DB2ConnectionConfig) -> DB2ConnectionConfig:
    """
    Fill a missing username/password from the keyring.

    Only configurations carrying a connection_id are looked up; explicit
    values always win over stored ones.
    """
    if not config.connection_id or (config.username and config.password):
        return config

    username, password = CredentialManager.get_credentials(config.connection_id)
    return dataclasses.replace(
        config,
        username=config.username or username,
        password=config.password or password,
    )


class DB2Connector:
    """
    Builds the DSN of a configuration, opens it and applies the default schema.

    Usage:
        connector = DB2Connector()
        connection = connector.connect({
            "driver": "db2_ibmi_odbc",
            "driver_name": "IBM i Access ODBC Driver",
            "host": "PUB400.COM",
            "database": "*LOCAL",
            "username": "BOB",
            "password": "secret",
            "schema": "app",
        })
    """

    def __init__(self, opener: Optional[Opener] = None, timeout: int = CONNECTION_TIMEOUT_S):
        """
        Args:
            opener: Callable receiving the DSN and returning a DB-API connection.
                Defaults to pyodbc for ODBC variants.
            timeout: Login timeout in seconds (pyodbc only)
        """
        self.opener = opener
        self.timeout = timeout

    def connect(self, config: Union[Mapping[str, Any], DB2ConnectionConfig]) -> DB2Connection:
        """
        Open a connection.

        Raises:
            ConfigurationError: If the configuration is incomplete, before any DSN is built
            Exception: Any connection error from the underlying driver, unchanged
        """
        if not isinstance(config, DB2ConnectionConfig):
            config = DB2ConnectionConfig.from_dict(config)

        config = resolve_credentials(config)
        config.validate()

        variant = config.variant()
        dsn = variant.dsn_builder(config)
        logger.info(f"Connecting to DB2 ({variant.name}): {mask_password(dsn)}")

        try:
            raw_connection = self._open(dsn, variant.odbc)
        except ConfigurationError:
            raise
        except Exception as e:
            logger.error(format_connection_error(e))
            raise

        connection = DB2Connection(raw_connection, config)

        if config.schema:
            connection.set_current_schema(config.schema)

        return connection

    def _open(self, dsn: str, odbc: bool) -> Any:
        if self.opener is not None:
            return self.opener(dsn)

        if not odbc:
            raise ConfigurationError(
                "Native IBM DSNs need an opener (for example a wrapper around ibm_db_dbi.connect)"
            )

        import pyodbc
        return pyodbc.connect(strip_scheme(dsn), timeout=self.timeout)


def connect_db2(
    config: Union[Mapping[str, Any], DB2ConnectionConfig],
    opener: Optional[Opener] = None,
    timeout: int = CONNECTION_TIMEOUT_S
) -> DB2Connection:
    """Connect with a one-off DB2Connector."""
    return DB2Connector(opener=opener, timeout=timeout).connect(config)
