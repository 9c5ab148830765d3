from __future__ import annotations

"""
Console Logging Configuration Models.

Defines the data structures required to bootstrap developer console output
for the logging service, including severity name mappings.
"""

import logging
from dataclasses import dataclass
from typing import Dict

# Mapping of string identifiers to native logging constants
_LEVEL_MAP: Dict[str, int] = {
    "DEBUG": logging.DEBUG,
    "INFO": logging.INFO,
    "WARNING": logging.WARNING,
    "WARN": logging.WARNING,
    "ERROR": logging.ERROR,
    "CRITICAL": logging.CRITICAL,
}


@dataclass(frozen=True)
class ConsoleConfig:
    """
    Immutable settings for the developer console output.

    Attributes:
        level: Minimum severity level to print.
        fmt: Structural format for terminal lines. The logger name carries
             the tag under the 'sandesh.' prefix.
        datefmt: Chronological format for timestamp generation.
        propagate: Whether records also bubble up to the root logger.
    """
    level: str = "DEBUG"
    fmt: str = "%(asctime)s %(levelname).1s/%(name)s: %(message)s"
    datefmt: str = "%H:%M:%S"
    propagate: bool = False
