# src/config/settings.py - v1
"""Typed configuration loaded from .env and the environment via pydantic-settings.

Single source of truth for the server address, the scanned tree and logging.
"""

from __future__ import annotations

from pathlib import Path
from typing import Literal

from pydantic import ValidationError, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class ConfigurationError(Exception):
    """Raised when configuration is internally inconsistent."""


class Settings(BaseSettings):
    """Application settings loaded from .env file."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="ANNOSYNC_",
        extra="ignore",
    )

    # === Server ===
    listen_addr: str = ":6969"

    # === Documents ===
    scan_root: Path = Path(".")
    document_extension: str = ".pdf"

    # === Logging ===
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"
    log_format: Literal["json", "text"] = "json"
    log_file: Path | None = None
    log_rotation: str = "10MB"
    log_retention: int = 30

    # --- Validators ---

    @field_validator("document_extension")
    @classmethod
    def validate_extension(cls, v: str) -> str:  # noqa: N805
        """The extension is matched exactly, so it must include the dot."""
        if not v.startswith(".") or len(v) < 2:
            raise ValueError("document_extension must look like '.pdf'")
        return v

    @field_validator("log_retention")
    @classmethod
    def validate_retention(cls, v: int) -> int:  # noqa: N805
        if v < 0:
            raise ValueError("log_retention must be >= 0")
        return v

    @model_validator(mode="after")
    def validate_listen_addr(self) -> Settings:
        """Reject addresses whose port part is not a usable TCP port."""
        _split_addr(self.listen_addr)
        return self

    # --- Helpers ---

    @property
    def listen_host(self) -> str:
        """Host part of listen_addr; an empty host means all interfaces."""
        return _split_addr(self.listen_addr)[0]

    @property
    def listen_port(self) -> int:
        return _split_addr(self.listen_addr)[1]


def _split_addr(addr: str) -> tuple[str, int]:
    """Split 'host:port' (or ':port') into its parts."""
    host, sep, port = addr.rpartition(":")
    if not sep:
        raise ConfigurationError(f"listen address must be host:port, got {addr!r}")
    try:
        port_num = int(port)
    except ValueError:
        raise ConfigurationError(f"invalid port in listen address {addr!r}") from None
    if not 0 < port_num < 65536:
        raise ConfigurationError(f"port out of range in listen address {addr!r}")
    host = host.strip("[]") or "0.0.0.0"
    return host, port_num


def load_settings(**overrides: object) -> Settings:
    """Load settings from .env with optional overrides.

    Args:
        **overrides: Field-level overrides (CLI flags, tests).

    Returns:
        Validated Settings instance.

    Raises:
        ConfigurationError: If the listen address is unusable or a field
            fails validation.
    """
    try:
        return Settings(**overrides)  # type: ignore[arg-type]
    except ValidationError as exc:
        raise ConfigurationError(_describe(exc)) from exc


def _describe(exc: ValidationError) -> str:
    parts = []
    for error in exc.errors(include_url=False):
        field = ".".join(str(part) for part in error.get("loc", ())) or "settings"
        parts.append(f"{field}: {error.get('msg', 'invalid value')}")
    return "; ".join(parts) or str(exc)
