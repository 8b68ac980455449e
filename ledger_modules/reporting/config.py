"""
Reporting Configuration Schema.

Formatting options for rendered reports.  Parsed from the ``reporting``
section of the ledger configuration.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Self

from ledger_kernel.logging_config import get_logger

logger = get_logger("modules.reporting.config")


@dataclass
class ReportingConfig:
    """
    Configuration schema for the reporting module.

    Controls how amounts are rendered by the serializers.
    """

    # Prefix for formatted amounts
    currency_symbol: str = "$"

    # Rounding precision for display
    display_precision: int = 2

    def __post_init__(self):
        if self.display_precision < 0:
            raise ValueError("display_precision cannot be negative")

    @classmethod
    def with_defaults(cls) -> Self:
        """Create config with standard defaults."""
        logger.info("reporting_config_created_with_defaults")
        return cls()

    @classmethod
    def from_dict(cls, data: dict) -> Self:
        """Create config from dictionary."""
        logger.info(
            "reporting_config_loading_from_dict",
            extra={"keys": sorted(data.keys())},
        )
        return cls(**data)
