"""
Query - DB2 query grammar and insert-id processors
"""

from .grammar import DB2QueryGrammar
from .processors import DB2Processor, DB2ZOSProcessor, cast_key

__all__ = [
    "DB2QueryGrammar",
    "DB2Processor",
    "DB2ZOSProcessor",
    "cast_key",
]
