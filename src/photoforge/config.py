"""Application configuration loading."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from ruamel.yaml import YAML

# Default configuration values
DEFAULT_PROVIDER = "gemini/gemini-2.5-flash-image-preview"
DEFAULT_OUTPUT_DIR = Path("output")
DEFAULT_CONFIG_FILE = "photoforge.yaml"


@dataclass
class AppConfig:
    """Configuration for Photoforge.

    Resolution order for overridable fields:
    1. Environment variable (PHOTOFORGE_PROVIDER, PHOTOFORGE_OUTPUT_DIR)
    2. Config file value
    3. Built-in default

    CLI flags take precedence over all of these and are applied by the CLI.

    Attributes:
        provider: Image provider spec (e.g., "gemini/gemini-2.5-flash-image").
        output_dir: Directory generated images are written to.
        max_concurrency: Cap on parallel requests per run. None = no cap.
        request_timeout: Per-request timeout in seconds. None = SDK default.
    """

    provider: str = DEFAULT_PROVIDER
    output_dir: Path = DEFAULT_OUTPUT_DIR
    max_concurrency: int | None = None
    request_timeout: float | None = None

    def get_provider(self) -> str:
        """Get the effective provider spec, honouring PHOTOFORGE_PROVIDER."""
        return os.getenv("PHOTOFORGE_PROVIDER") or self.provider

    def get_output_dir(self) -> Path:
        """Get the effective output directory, honouring PHOTOFORGE_OUTPUT_DIR."""
        env_dir = os.getenv("PHOTOFORGE_OUTPUT_DIR")
        return Path(env_dir) if env_dir else self.output_dir

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> AppConfig:
        """Create config from dictionary.

        Raises:
            ValueError: If a numeric field is not a positive number.
        """
        max_concurrency = data.get("max_concurrency")
        if max_concurrency is not None:
            max_concurrency = int(max_concurrency)
            if max_concurrency < 1:
                raise ValueError("max_concurrency must be at least 1")

        request_timeout = data.get("request_timeout")
        if request_timeout is not None:
            request_timeout = float(request_timeout)
            if request_timeout <= 0:
                raise ValueError("request_timeout must be positive")

        return cls(
            provider=str(data.get("provider", DEFAULT_PROVIDER)),
            output_dir=Path(data.get("output_dir", DEFAULT_OUTPUT_DIR)),
            max_concurrency=max_concurrency,
            request_timeout=request_timeout,
        )


class ConfigError(Exception):
    """Raised when the configuration file cannot be loaded."""

    def __init__(self, path: Path, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"Failed to load config at {path}: {reason}")


def load_config(config_path: Path | None = None) -> AppConfig:
    """Load configuration from a YAML file.

    Args:
        config_path: Explicit config file. When None, ``photoforge.yaml`` in the
            current directory is used if it exists, otherwise defaults.

    Returns:
        AppConfig instance.

    Raises:
        ConfigError: If an explicit file is missing or any file is invalid.
    """
    if config_path is None:
        config_path = Path(DEFAULT_CONFIG_FILE)
        if not config_path.exists():
            return AppConfig()
    elif not config_path.exists():
        raise ConfigError(config_path, "File not found")

    yaml = YAML(typ="safe")
    try:
        with config_path.open("r", encoding="utf-8") as f:
            data = yaml.load(f)

        if data is None:
            return AppConfig()
        if not isinstance(data, dict):
            raise ConfigError(config_path, "Top level must be a mapping")

        return AppConfig.from_dict(dict(data))
    except Exception as e:
        if isinstance(e, ConfigError):
            raise
        raise ConfigError(config_path, str(e)) from e
