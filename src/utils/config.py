"""Centralized configuration management for EVE Local Scanner.

This module provides application-level configuration from environment variables.

Features:
- Environment variable support via .env files
- Fallback priority: .env → hardcoded defaults
- Automatic .env.example generation from defaults
- Type-safe configuration using Pydantic
- Singleton pattern for global access

Usage:
    from utils import global_config

    client = ZKillboardClient(
        base_url=global_config.zkill.base_url,
        request_timeout=global_config.zkill.request_timeout,
    )
"""

from __future__ import annotations

import threading
import tomllib
from logging import getLogger
from pathlib import Path
from typing import Literal

from pydantic import Field, SecretStr, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

logger = getLogger(__name__)

PROJECT_ROOT = Path(__file__).parent.parent.parent


def _read_pyproject() -> dict:
    """Read pyproject.toml and extract project metadata."""
    pyproject_path = PROJECT_ROOT / "pyproject.toml"
    try:
        with open(pyproject_path, "rb") as f:
            data = tomllib.load(f)
    except Exception as e:
        logger.warning(f"Could not read pyproject.toml: {e}")
        return {
            "name": "eve-local-scanner",
            "version": "?.?.?",
            "urls": {},
            "discord": None,
            "eve": None,
        }

    project = data.get("project", {})

    urls = {}
    if isinstance(project.get("urls"), dict):
        for k, v in project["urls"].items():
            if isinstance(v, str):
                urls[str(k).lower()] = v

    tool_meta = {}
    tool_table = data.get("tool", {})
    if isinstance(tool_table, dict):
        tool_meta = tool_table.get("additional_contact") or {}

    return {
        "name": project.get("name", "eve-local-scanner"),
        "version": project.get("version", "?.?.?"),
        "urls": urls,
        "discord": tool_meta.get("discord") if isinstance(tool_meta, dict) else None,
        "eve": tool_meta.get("eve") if isinstance(tool_meta, dict) else None,
    }


# Read project metadata once at module load
_PROJECT_METADATA = _read_pyproject()


class ESIConfig(BaseSettings):
    """EVE ESI (EVE Swagger Interface) API configuration."""

    esi_base_url: str = Field(
        default="https://esi.evetech.net/latest",
        description="Base URL for ESI API endpoints",
    )
    image_base_url: str = Field(
        default="https://images.evetech.net",
        description="Base URL for character portraits, logos and type icons",
    )
    request_timeout: float = Field(
        default=5.0,
        description="HTTP request timeout in seconds",
        gt=0,
    )

    model_config = SettingsConfigDict(
        env_prefix="ESI_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        case_sensitive=False,
    )


class ZKillConfig(BaseSettings):
    """zKillboard API configuration."""

    base_url: str = Field(
        default="https://zkillboard.com/api",
        description="Base URL for zKillboard API endpoints",
    )
    site_url: str = Field(
        default="https://zkillboard.com",
        description="Base URL for zKillboard character pages",
    )
    request_timeout: float = Field(
        default=5.0,
        description="HTTP request timeout in seconds",
        gt=0,
    )
    request_delay: float = Field(
        default=1.1,
        description="Seconds to wait after every zKillboard call",
        ge=0,
    )
    recent_kill_window: int = Field(
        default=5,
        description="Number of most recent killmails inspected per character",
        ge=1,
    )

    model_config = SettingsConfigDict(
        env_prefix="ZKILL_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        case_sensitive=False,
    )


class OpenAIConfig(BaseSettings):
    """Chat-completion settings for pilot profiles."""

    api_key: SecretStr | None = Field(
        default=None,
        description="OpenAI API key; pilot profiles are disabled when unset",
    )
    model: str = Field(
        default="gpt-3.5-turbo",
        description="Chat-completion model used for pilot profiles",
    )
    temperature: float = Field(
        default=0.7,
        description="Sampling temperature",
        ge=0,
        le=2,
    )
    max_tokens: int = Field(
        default=150,
        description="Maximum generated tokens per profile",
        ge=1,
    )

    model_config = SettingsConfigDict(
        env_prefix="OPENAI_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        case_sensitive=False,
    )

    @field_validator("api_key", mode="before")
    @classmethod
    def blank_key_is_unset(cls, v):
        """Treat an empty or whitespace-only key as not configured."""
        if isinstance(v, str) and not v.strip():
            return None
        return v


class AppConfig(BaseSettings):
    """Application-wide configuration."""

    name: str = Field(
        default_factory=lambda: _PROJECT_METADATA["name"],
        description="Application name (from pyproject.toml)",
    )
    version: str = Field(
        default_factory=lambda: _PROJECT_METADATA["version"],
        description="Application version (from pyproject.toml)",
    )
    user_agent: str = Field(
        default="",
        description="HTTP User-Agent header (auto-generated if empty)",
    )
    contact_discord: str | None = Field(
        default_factory=lambda: _PROJECT_METADATA.get("discord"),
        description="Optional Discord contact from pyproject [tool.additional_contact]",
    )
    contact_eve: str | None = Field(
        default_factory=lambda: _PROJECT_METADATA.get("eve"),
        description="Optional EVE character contact from pyproject [tool.additional_contact]",
    )

    # Logging
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        default="WARNING",
        description="Logging level",
    )
    log_to_file: bool = Field(
        default=True,
        description="Write rotating log files under the data directory",
    )

    # HTTP server
    host: str = Field(default="127.0.0.1", description="HTTP server bind address")
    port: int = Field(default=3000, description="HTTP server port", ge=1, le=65535)

    # Project paths
    project_root: Path = Field(
        default_factory=lambda: PROJECT_ROOT,
        description="Project root directory",
    )
    data_dir: Path = Field(
        default_factory=lambda: PROJECT_ROOT / "data",
        description="Directory for logs and other writable files",
    )

    model_config = SettingsConfigDict(
        env_prefix="APP_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        case_sensitive=False,
    )

    @field_validator("log_level", mode="before")
    @classmethod
    def normalize_log_level(cls, v):
        if isinstance(v, str):
            return v.upper()
        return v

    @property
    def user_data_dir(self) -> Path:
        """Writable data directory, created on first access."""
        self.data_dir.mkdir(parents=True, exist_ok=True)
        return self.data_dir

    @property
    def computed_user_agent(self) -> str:
        """Generate User-Agent header if not explicitly set."""
        if self.user_agent:
            return self.user_agent
        parts = [f"{self.name}/{self.version}"]

        extra_parts = []
        urls = _PROJECT_METADATA.get("urls") or {}
        primary = urls.get("repository") or urls.get("homepage")
        if primary:
            extra_parts.append(primary)
        if self.contact_discord:
            extra_parts.append(f"discord:{self.contact_discord}")
        if self.contact_eve:
            extra_parts.append(f"eve:{self.contact_eve}")

        if extra_parts:
            parts.append(f"(+{'; '.join(extra_parts)})")

        return " ".join(parts)


_SECTIONS: tuple[tuple[str, str, type[BaseSettings]], ...] = (
    ("Application Settings", "APP_", AppConfig),
    ("ESI API Settings", "ESI_", ESIConfig),
    ("zKillboard Settings", "ZKILL_", ZKillConfig),
    ("Pilot Profile (OpenAI) Settings", "OPENAI_", OpenAIConfig),
)


class Config:
    """Main configuration container with auto-initialization."""

    def __init__(self) -> None:
        """Initialize configuration from environment and defaults."""
        self.app = AppConfig()
        self.esi = ESIConfig()
        self.zkill = ZKillConfig()
        self.openai = OpenAIConfig()

        self._update_env_example()

    def _update_env_example(self) -> None:
        """Update .env.example with current default values."""
        env_example_path = self.app.project_root / ".env.example"

        lines = [
            "# EVE Local Scanner - Environment Configuration",
            "# Copy this file to .env and customize the values",
            "#",
            "# Priority: .env > hardcoded defaults",
            "",
        ]

        for title, prefix, section in _SECTIONS:
            lines.extend(
                [
                    "# " + "=" * 76,
                    f"# {title}",
                    "# " + "=" * 76,
                    "",
                ]
            )
            for field_name, field_info in section.model_fields.items():
                if field_name in ("project_root", "data_dir"):
                    continue  # Skip computed paths

                if field_info.default_factory:
                    try:
                        default = field_info.default_factory()
                    except Exception:
                        default = None
                else:
                    default = field_info.default

                env_var = f"{prefix}{field_name.upper()}"
                lines.append(f"# {field_info.description or ''}")
                if field_name == "user_agent":
                    lines.append(f"# {env_var}={self.app.computed_user_agent}")
                elif default is None or default == "":
                    lines.append(f"# {env_var}=")
                else:
                    lines.append(f"# {env_var}={default}")
                lines.append("")

        try:
            env_example_path.write_text("\n".join(lines), encoding="utf-8")
        except OSError as e:
            logger.warning(f"Could not write .env.example to {env_example_path}: {e}")

    def reload(self) -> None:
        """Reload configuration from environment variables."""
        self.__init__()

    def __repr__(self) -> str:
        """String representation of config."""
        return (
            f"Config(\n  app={self.app},\n  esi={self.esi},\n"
            f"  zkill={self.zkill},\n  openai={self.openai}\n)"
        )


# Global configuration instance (singleton)
_config_instance: Config | None = None
_config_lock = threading.Lock()


def get_config(config: Config | None = None) -> Config:
    """Get the global configuration instance (lazy initialization).

    Args:
        config: Optional config instance to use instead of singleton.
                If provided, replaces the singleton.

    Returns:
        Global Config instance
    """
    global _config_instance  # noqa: PLW0603

    if config is not None:
        with _config_lock:
            _config_instance = config
        return _config_instance

    if _config_instance is None:
        with _config_lock:
            if _config_instance is None:
                _config_instance = Config()

    assert _config_instance is not None
    return _config_instance


def reload_config() -> Config:
    """Reload configuration from environment.

    Returns:
        Reloaded Config instance
    """
    global _config_instance  # noqa: PLW0603
    with _config_lock:
        _config_instance = Config()
    return _config_instance


def reset_config() -> None:
    """Reset the global config instance.

    Primarily for testing.
    """
    global _config_instance  # noqa: PLW0603
    with _config_lock:
        _config_instance = None


# Create the global config instance for convenience
global_config = get_config()
