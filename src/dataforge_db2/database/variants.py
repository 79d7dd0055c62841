"""
Driver Variants - One entry per supported DB2 driver identifier

A variant bundles everything that differs between DB2 products: the DSN
builder, the schema grammar, the insert-id processor and the configuration
fields the DSN needs. It is chosen once, when the connection is built.

Usage:
    from dataforge_db2.database.variants import VariantFactory

    variant = VariantFactory.get("db2_ibmi_odbc")
    dsn = variant.dsn_builder(config)
"""

from dataclasses import dataclass
from typing import TYPE_CHECKING, Callable, Dict, Optional, Tuple, Type

from .query.processors import DB2Processor, DB2ZOSProcessor
from .schema.grammar import DB2ExpressCGrammar, DB2Grammar
from .connectors.dsn import build_ibm_driver_dsn, build_ibm_dsn, build_odbc_dsn

if TYPE_CHECKING:
    from .models.connection_config import DB2ConnectionConfig

import logging
logger = logging.getLogger(__name__)

ODBC_REQUIRED_FIELDS = ("driver_name", "host", "database", "username", "password")
IBM_REQUIRED_FIELDS = ("database",)
IBM_DRIVER_REQUIRED_FIELDS = ("driver_name", "database", "host", "port")


@dataclass(frozen=True)
class DriverVariant:
    """
    Strategies of one DB2 driver.

    Attributes:
        name: Driver identifier used in configurations
        dsn_builder: Builds the DSN from the configuration
        grammar_class: Schema grammar class
        processor_class: Insert-id processor class
        required_fields: Configuration fields the DSN builder needs
        odbc: Whether the DSN targets an ODBC driver (opened through pyodbc)
    """
    name: str
    dsn_builder: Callable[["DB2ConnectionConfig"], str]
    grammar_class: Type[DB2Grammar]
    processor_class: Type[DB2Processor]
    required_fields: Tuple[str, ...]
    odbc: bool


class VariantFactory:
    """
    Registry of driver variants.

    Usage:
        variant = VariantFactory.get("db2_zos_odbc")
        processor = variant.processor_class()
    """

    _variants: Dict[str, DriverVariant] = {}

    @classmethod
    def get(cls, driver: str) -> Optional[DriverVariant]:
        """
        Return the variant registered for a driver identifier.

        Returns:
            DriverVariant or None if the driver is not supported
        """
        variant = cls._variants.get((driver or "").lower())
        if variant is None:
            logger.warning(f"No DB2 variant for driver: {driver}")
        return variant

    @classmethod
    def is_supported(cls, driver: str) -> bool:
        return (driver or "").lower() in cls._variants

    @classmethod
    def supported_types(cls) -> list:
        return list(cls._variants.keys())

    @classmethod
    def register(cls, variant: DriverVariant):
        """Register (or replace) a variant under its name."""
        cls._variants[variant.name.lower()] = variant
        logger.debug(f"Registered DB2 variant: {variant.name}")


def _register_default_variants():
    """Register built-in variants. Called on module import."""
    VariantFactory.register(DriverVariant(
        "db2_ibmi_odbc", build_odbc_dsn, DB2Grammar, DB2Processor, ODBC_REQUIRED_FIELDS, True
    ))
    VariantFactory.register(DriverVariant(
        "db2_ibmi_ibm", build_ibm_dsn, DB2Grammar, DB2Processor, IBM_REQUIRED_FIELDS, False
    ))
    VariantFactory.register(DriverVariant(
        "db2_luw_ibm", build_ibm_driver_dsn, DB2Grammar, DB2Processor, IBM_DRIVER_REQUIRED_FIELDS, False
    ))
    VariantFactory.register(DriverVariant(
        "db2_zos_ibm", build_ibm_driver_dsn, DB2Grammar, DB2ZOSProcessor, IBM_DRIVER_REQUIRED_FIELDS, False
    ))
    VariantFactory.register(DriverVariant(
        "db2_zos_odbc", build_odbc_dsn, DB2Grammar, DB2ZOSProcessor, ODBC_REQUIRED_FIELDS, True
    ))
    VariantFactory.register(DriverVariant(
        "db2_expressc_odbc", build_odbc_dsn, DB2ExpressCGrammar, DB2Processor, ODBC_REQUIRED_FIELDS, True
    ))


# Register on module import
_register_default_variants()
