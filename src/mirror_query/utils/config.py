"""Configuration file support for mirror-query."""

from __future__ import annotations

import os
from pathlib import Path

import yaml
from pydantic import BaseModel, Field, ValidationError

from mirror_query.utils.errors import ConfigurationError

DEFAULT_USER_AGENT = "image-mirror"
DEFAULT_ACCEPT = [
    "application/vnd.docker.distribution.manifest.list.v2+json",
    "application/vnd.oci.image.index.v1+json",
    "application/vnd.oci.image.manifest.v1+json",
]


class QueryConfig(BaseModel):
    """Outbound request configuration."""

    user_agent: str = Field(default=DEFAULT_USER_AGENT, description="User-Agent header value")
    accept: list[str] = Field(
        default_factory=lambda: list(DEFAULT_ACCEPT),
        description="Media types advertised in the Accept header",
    )
    content_type: str = Field(default="application/json", description="Content-Type header value")
    timeout: float | None = Field(
        default=None, description="Request timeout in seconds (None disables it)"
    )
    follow_redirects: bool = Field(default=True, description="Follow HTTP redirects")
    max_redirects: int = Field(default=10, description="Redirect limit for clients created per call")

    @property
    def accept_header(self) -> str:
        return ",".join(self.accept)


class LoggingConfig(BaseModel):
    """Logging configuration."""

    level: str = Field(default="INFO", description="Log level")
    structured: bool = Field(default=False, description="Use structured log format")


class MirrorQueryConfig(BaseModel):
    """Main configuration for mirror-query."""

    query: QueryConfig = Field(default_factory=QueryConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)


def get_config_paths() -> list[Path]:
    """Get possible configuration file paths.

    Returns:
        List of paths to check for configuration files
    """
    paths = []

    paths.append(Path.cwd() / ".mirror-query.yaml")
    paths.append(Path.cwd() / ".mirror-query.yml")

    home = Path.home()
    paths.append(home / ".mirror-query.yaml")
    paths.append(home / ".config" / "mirror-query" / "config.yaml")

    xdg_config = os.environ.get("XDG_CONFIG_HOME")
    if xdg_config:
        paths.append(Path(xdg_config) / "mirror-query" / "config.yaml")

    return paths


def load_config(config_path: Path | str | None = None) -> MirrorQueryConfig:
    """Load configuration from file.

    Args:
        config_path: Explicit path to config file. If None, searches default locations.

    Returns:
        Loaded configuration

    Raises:
        ConfigurationError: If the file is missing, not valid YAML, or fails validation
    """
    if config_path is not None:
        path = Path(config_path)
        if path.exists():
            return _load_config_file(path)
        raise ConfigurationError(f"Config file not found: {config_path}")

    for path in get_config_paths():
        if path.exists():
            return _load_config_file(path)

    return MirrorQueryConfig()


def _load_config_file(path: Path) -> MirrorQueryConfig:
    try:
        data = yaml.safe_load(path.read_text())
    except yaml.YAMLError as e:
        raise ConfigurationError(f"Invalid YAML in config file: {e}") from e

    if data is None:
        return MirrorQueryConfig()
    try:
        return MirrorQueryConfig.model_validate(data)
    except ValidationError as e:
        raise ConfigurationError(f"Failed to load config file {path}: {e}") from e


def save_config(config: MirrorQueryConfig, config_path: Path | str | None = None) -> Path:
    """Save configuration to file.

    Args:
        config: Configuration to save
        config_path: Path to save to. Defaults to ~/.config/mirror-query/config.yaml

    Returns:
        Path where config was saved
    """
    if config_path is None:
        config_path = Path.home() / ".config" / "mirror-query" / "config.yaml"
    else:
        config_path = Path(config_path)

    config_path.parent.mkdir(parents=True, exist_ok=True)

    data = config.model_dump(mode="json", exclude_defaults=True)
    config_path.write_text(yaml.dump(data, default_flow_style=False, sort_keys=False))

    return config_path


def get_default_config() -> MirrorQueryConfig:
    """Get the default configuration."""
    return MirrorQueryConfig()


# Global config instance
_config: MirrorQueryConfig | None = None


def get_config() -> MirrorQueryConfig:
    """Get the global configuration instance.

    Loads from file on first call.
    """
    global _config
    if _config is None:
        _config = load_config()
    return _config


def set_config(config: MirrorQueryConfig | None) -> None:
    """Set (or with None, reset) the global configuration instance."""
    global _config
    _config = config
