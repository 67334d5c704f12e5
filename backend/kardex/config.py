"""Runtime configuration model.

This module owns all environment variable parsing and validation.
Other modules consume a typed config object instead of raw env reads.
"""

from __future__ import annotations

import logging
import os
import re
from dataclasses import dataclass

from kardex.errors import KardexConfigError

DEFAULT_DATABASE_URL = "sqlite:///./kardex.db"
DEFAULT_EMAIL_DOMAIN = "example.com"
DEFAULT_LOG_LEVEL = "INFO"


@dataclass(frozen=True)
class KardexConfig:
    """Validated runtime configuration.

    Attributes:
        database_url: SQLAlchemy URL of the catalog database.
        email_domain: Domain used for placeholder student emails.
        log_level: Minimum structlog level name.
    """

    database_url: str = DEFAULT_DATABASE_URL
    email_domain: str = DEFAULT_EMAIL_DOMAIN
    log_level: str = DEFAULT_LOG_LEVEL

    @classmethod
    def from_env(cls) -> "KardexConfig":
        """Build config from process environment variables.

        Raises:
            KardexConfigError: If environment values are invalid.
        """
        database_url = os.getenv("KARDEX_DATABASE_URL", DEFAULT_DATABASE_URL).strip()
        if not database_url:
            raise KardexConfigError("KARDEX_DATABASE_URL is set but empty.")
        return cls(
            database_url=database_url,
            email_domain=_parse_email_domain(os.getenv("KARDEX_EMAIL_DOMAIN", DEFAULT_EMAIL_DOMAIN)),
            log_level=_parse_log_level(os.getenv("KARDEX_LOG_LEVEL", DEFAULT_LOG_LEVEL)),
        )


def _parse_email_domain(raw_value: str) -> str:
    value = raw_value.strip().lstrip("@").lower()
    if not re.fullmatch(r"[a-z0-9-]+(\.[a-z0-9-]+)+", value):
        raise KardexConfigError(
            "Invalid KARDEX_EMAIL_DOMAIN value: "
            f"expected a domain like 'example.com', got '{raw_value}'."
        )
    return value


def _parse_log_level(raw_value: str) -> str:
    value = raw_value.strip().upper()
    if not isinstance(logging.getLevelName(value), int):
        raise KardexConfigError(
            "Invalid KARDEX_LOG_LEVEL value: "
            f"expected one of DEBUG, INFO, WARNING, ERROR, got '{raw_value}'."
        )
    return value
