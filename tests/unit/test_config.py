"""Unit tests for runtime config parsing."""

from __future__ import annotations

import pytest

from kardex.config import KardexConfig
from kardex.errors import KardexConfigError


def test_from_env_defaults(monkeypatch: pytest.MonkeyPatch) -> None:
    """Unset variables fall back to defaults."""
    for name in ("KARDEX_DATABASE_URL", "KARDEX_EMAIL_DOMAIN", "KARDEX_LOG_LEVEL"):
        monkeypatch.delenv(name, raising=False)

    config = KardexConfig.from_env()

    assert config == KardexConfig()


def test_from_env_reads_values(monkeypatch: pytest.MonkeyPatch) -> None:
    """Environment values are normalized."""
    monkeypatch.setenv("KARDEX_DATABASE_URL", "sqlite:///./other.db")
    monkeypatch.setenv("KARDEX_EMAIL_DOMAIN", "@Alumnos.Uni.MX")
    monkeypatch.setenv("KARDEX_LOG_LEVEL", "debug")

    config = KardexConfig.from_env()

    assert config.database_url == "sqlite:///./other.db"
    assert config.email_domain == "alumnos.uni.mx"
    assert config.log_level == "DEBUG"


@pytest.mark.parametrize(
    ("name", "value"),
    [("KARDEX_EMAIL_DOMAIN", "not a domain"), ("KARDEX_LOG_LEVEL", "LOUD"), ("KARDEX_DATABASE_URL", "  ")],
)
def test_from_env_rejects_invalid_values(monkeypatch: pytest.MonkeyPatch, name: str, value: str) -> None:
    """Invalid environment values raise a config error."""
    monkeypatch.setenv(name, value)

    with pytest.raises(KardexConfigError):
        KardexConfig.from_env()
