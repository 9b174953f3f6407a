from __future__ import annotations

import logging
from enum import Enum
from pathlib import Path

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from exceptions import ConfigurationError


class Flavor(str, Enum):
    """Anchor formatting convention of the generated markdown."""

    GENERIC = "generic"
    STRICT_HEADER_SLUG = "strict-header-slug"


# Older configurations named the strict flavor after the host that uses it.
FLAVOR_ALIASES = {"bitbucket": Flavor.STRICT_HEADER_SLUG}


def parse_flavor(value: str | Flavor) -> Flavor:
    """Return the Flavor for *value*, raising ConfigurationError if unknown."""
    if isinstance(value, Flavor):
        return value
    key = str(getattr(value, "value", value)).strip().lower()
    if key in FLAVOR_ALIASES:
        return FLAVOR_ALIASES[key]
    try:
        return Flavor(key)
    except ValueError:
        allowed = ", ".join(f.value for f in Flavor)
        raise ConfigurationError(
            f"Unknown markdown flavor {value!r} (expected one of: {allowed})",
            {"flavor": value},
        ) from None


class Config(BaseSettings):
    """Centralized, type-safe configuration loaded from environment variables.

    Uses pydantic-settings to support .env files and runtime validation.
    """

    # Output convention
    MD_FLAVOUR: Flavor = Field(
        default=Flavor.GENERIC,
        description="Anchor format: 'generic' or 'strict-header-slug' ('bitbucket' is accepted as an alias).",
    )

    PROJECT_NAME: str | None = Field(
        default=None,
        description="Overrides the project display name taken from the analyzer entry point.",
    )

    # Index document
    README: str = Field(
        default="README.md",
        description="Readme shown on the index document, or 'none' to hide it.",
    )

    INDEX_TEMPLATE: str = Field(
        default="reflection.hbs",
        description="Template name passed to the renderer for the index document.",
    )

    OUTPUT_DIR: str = Field(
        default="./docs",
        description="Directory the renderer writes generated documents to.",
    )

    # API configuration
    API_CORS_ORIGINS: list[str] = Field(
        default_factory=list,
        description="Allowed CORS origins for FastAPI (comma-separated env or JSON list).",
    )

    LOG_LEVEL: str = Field(default="INFO")

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    @field_validator("MD_FLAVOUR", mode="before")
    @classmethod
    def normalize_flavour(cls, v):  # type: ignore[no-redef]
        if v is None or v == "":
            return Flavor.GENERIC
        try:
            return parse_flavor(v)
        except ConfigurationError as exc:
            raise ValueError(exc.message) from exc

    @field_validator("OUTPUT_DIR")
    @classmethod
    def normalize_output_dir(cls, v: str) -> str:
        """
        Normalize OUTPUT_DIR to an absolute path.

        Examples:
            - "~/site/api" → "/Users/me/site/api"
            - "./docs" → "<cwd>/docs"
        """
        return str(Path(v).expanduser().resolve())

    @field_validator("LOG_LEVEL")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        level = v.strip().upper()
        if not isinstance(logging.getLevelName(level), int):
            raise ValueError(f"LOG_LEVEL must be a logging level name, got {v!r}")
        return level

    @field_validator("API_CORS_ORIGINS", mode="before")
    @classmethod
    def parse_cors_origins(cls, v):  # type: ignore[no-redef]
        """
        Accept list[str], JSON array string, or comma-separated string.

        Examples:
            - None or "" → []
            - '["http://localhost:3000"]' → ["http://localhost:3000"]
            - "http://localhost:3000,http://127.0.0.1:5173" → ["http://localhost:3000", "http://127.0.0.1:5173"]
        """
        if v is None or v == "":
            return []
        if isinstance(v, list):
            return [str(s).strip() for s in v if str(s).strip()]
        if isinstance(v, str):
            s = v.strip()
            if s.startswith("["):
                import json

                try:
                    arr = json.loads(s)
                    return [str(x).strip() for x in arr if str(x).strip()]
                except json.JSONDecodeError:
                    pass
            return [p.strip() for p in s.split(",") if p.strip()]
        return [str(v).strip()]

    # Convenience helpers
    @property
    def output_path(self) -> Path:
        return Path(self.OUTPUT_DIR)

    @property
    def display_readme(self) -> bool:
        return self.README.strip().lower() != "none"


# Eagerly load configuration at import time for convenience across modules
config = Config()
