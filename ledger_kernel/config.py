"""
Ledger Configuration (``ledger_kernel.config``).

Responsibility
--------------
Typed configuration for the kernel: posting rules, database connection,
and the raw ``reporting`` section handed to the reporting module.  Values
come from code defaults, a dict, or a YAML file.

Architecture position
---------------------
**Kernel** -- infrastructure.  Imports nothing from services or modules;
the ``reporting`` section is kept as a plain dict so that
``ledger_modules.reporting.config.ReportingConfig.from_dict`` can parse it
without the kernel depending on the module.

Failure modes
-------------
* Missing YAML file  -> ``FileNotFoundError`` propagates.
* Malformed YAML  -> ``yaml.YAMLError`` propagates.
* Unknown keys in a section  -> ``TypeError`` from the dataclass constructor.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Self

import yaml

from ledger_kernel.logging_config import get_logger

logger = get_logger("config")

DATABASE_URL_ENV = "LEDGER_DATABASE_URL"
DEFAULT_DATABASE_URL = "sqlite:///ledger.db"


@dataclass(frozen=True)
class PostingConfig:
    """Rules applied by the posting service before an entry is written."""

    # Refuse entries whose memo is blank
    require_memo: bool = True


@dataclass(frozen=True)
class DatabaseConfig:
    """Connection settings for ledger_kernel.db.engine."""

    url: str = DEFAULT_DATABASE_URL
    echo: bool = False


@dataclass(frozen=True)
class LedgerConfig:
    """Top-level configuration."""

    posting: PostingConfig = field(default_factory=PostingConfig)
    database: DatabaseConfig = field(default_factory=DatabaseConfig)
    reporting: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def with_defaults(cls) -> Self:
        """Create config with standard defaults (environment overrides apply)."""
        return cls.from_dict({})

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Self:
        """
        Create config from a dictionary.

        The ``LEDGER_DATABASE_URL`` environment variable, when set, wins
        over ``database.url``.
        """
        posting = PostingConfig(**(data.get("posting") or {}))

        database_data = dict(data.get("database") or {})
        env_url = os.environ.get(DATABASE_URL_ENV)
        if env_url:
            database_data["url"] = env_url
        database = DatabaseConfig(**database_data)

        logger.info(
            "ledger_config_loading_from_dict",
            extra={"keys": sorted(data.keys())},
        )
        return cls(
            posting=posting,
            database=database,
            reporting=dict(data.get("reporting") or {}),
        )


def load_config(path: str | Path) -> LedgerConfig:
    """
    Load a LedgerConfig from a YAML file.

    Raises:
        FileNotFoundError: if the file does not exist.
        yaml.YAMLError: if the file contains invalid YAML.
    """
    with open(path) as f:
        data = yaml.safe_load(f) or {}
    logger.info("ledger_config_loaded", extra={"path": str(path)})
    return LedgerConfig.from_dict(data)
