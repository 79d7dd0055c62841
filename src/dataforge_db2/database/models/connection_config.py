"""
DB2ConnectionConfig model - Connection parameters for a DB2 variant
"""
from dataclasses import dataclass, field, fields
from typing import Any, Dict, List, Mapping, Optional

from ..errors import ConfigurationError


@dataclass(frozen=True)
class DB2ConnectionConfig:
    """
    Immutable connection configuration.

    Attributes:
        driver: Variant identifier (db2_ibmi_odbc, db2_zos_odbc, ...)
        driver_name: ODBC / CLI driver name written into the DSN
        host: Server host name (the IBM i "System")
        port: Server port (native driver only)
        database: Database / RDB name
        username: Login user
        password: Login password
        schema: Default schema, applied with SET SCHEMA on connect
        date_format: strftime format used by the query grammar
        offset_compatibility_mode: Emulate OFFSET with row_number() for old servers
        odbc_keywords: Extra ODBC keywords appended to the DSN, in order
        connection_id: Keyring key used to look up missing credentials
    """
    driver: str
    driver_name: str = ""
    host: str = ""
    port: Optional[int] = None
    database: str = ""
    username: str = ""
    password: str = ""
    schema: str = ""
    date_format: Optional[str] = None
    offset_compatibility_mode: bool = False
    odbc_keywords: Dict[str, Any] = field(default_factory=dict)
    connection_id: str = ""

    @classmethod
    def from_dict(cls, config: Mapping[str, Any]) -> "DB2ConnectionConfig":
        """
        Build a configuration from a plain mapping.

        Unknown keys are ignored. The driver must be registered in the
        variant table.

        Raises:
            ConfigurationError: If the driver is missing or unsupported
        """
        if not config.get("driver"):
            raise ConfigurationError("Missing required connection field: driver")

        known = {f.name for f in fields(cls)}
        values = {key: value for key, value in config.items() if key in known}

        if values.get("port") not in (None, ""):
            try:
                values["port"] = int(values["port"])
            except (TypeError, ValueError):
                raise ConfigurationError(f"Invalid port: {values['port']!r}")
        else:
            values["port"] = None

        values["odbc_keywords"] = dict(values.get("odbc_keywords") or {})
        values["offset_compatibility_mode"] = bool(values.get("offset_compatibility_mode", False))

        instance = cls(**values)
        instance.variant()
        return instance

    def variant(self):
        """
        Return the DriverVariant registered for this configuration's driver.

        Raises:
            ConfigurationError: If the driver is not supported
        """
        from ..variants import VariantFactory

        variant = VariantFactory.get(self.driver)
        if variant is None:
            supported = ", ".join(VariantFactory.supported_types())
            raise ConfigurationError(
                f"Unsupported DB2 driver '{self.driver}' (supported: {supported})"
            )
        return variant

    def missing_fields(self, required: List[str]) -> List[str]:
        """Return the names of required fields that are empty."""
        return [name for name in required if getattr(self, name) in (None, "")]

    def validate(self) -> None:
        """
        Check that every field the driver's DSN needs is present.

        Raises:
            ConfigurationError: If the driver is unsupported or fields are missing
        """
        missing = self.missing_fields(list(self.variant().required_fields))
        if missing:
            raise ConfigurationError(
                f"Missing required connection field(s) for driver '{self.driver}': "
                + ", ".join(missing)
            )
