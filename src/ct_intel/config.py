"""
Configuration management for CT Intelligence.

Supports YAML configuration files with environment variable interpolation.
"""

from __future__ import annotations

import os
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Optional, Union

import yaml

DEFAULT_DATA_DIR = "${CT_DATA_DIR:-~/ct-scanner/data}"
DEFAULT_PORT = "${PORT:-3500}"


def _interpolate_env_vars(value: Any) -> Any:
    """
    Interpolate environment variables in string values.

    Supports formats:
        - ${VAR} - Required variable
        - ${VAR:-default} - Variable with default
    """
    if isinstance(value, str):
        pattern = r"\$\{([^}:]+)(?::-([^}]*))?\}"

        def replacer(match):
            var_name = match.group(1)
            default = match.group(2)
            env_value = os.environ.get(var_name)

            if env_value is not None:
                return env_value
            elif default is not None:
                return default
            else:
                raise ValueError(f"Environment variable '{var_name}' not set")

        return re.sub(pattern, replacer, value)

    elif isinstance(value, dict):
        return {k: _interpolate_env_vars(v) for k, v in value.items()}

    elif isinstance(value, list):
        return [_interpolate_env_vars(item) for item in value]

    return value


@dataclass
class DataConfig:
    """Scan data locations."""

    data_dir: Path = field(default_factory=lambda: Path("~/ct-scanner/data").expanduser())
    bundle_path: Path = field(default_factory=lambda: Path("scans-bundle.json"))


@dataclass
class ServerConfig:
    """HTTP server configuration."""

    host: str = "0.0.0.0"
    port: int = 3500


@dataclass
class BriefConfig:
    """Brief generation settings."""

    default_window_hours: int = 24
    display_timezone: str = "America/New_York"
    meta: dict[str, str] = field(default_factory=lambda: {
        "source": "CT Scanner: periodic Crypto Twitter scans",
        "description": "Automated intelligence from Crypto Twitter monitoring",
        "frequency": "~30 min scan interval",
    })

    def __post_init__(self):
        if self.default_window_hours < 0:
            raise ValueError(
                f"brief.default_window_hours must be non-negative, got {self.default_window_hours}"
            )


@dataclass
class LoggingConfig:
    """Logging configuration."""

    level: str = "INFO"
    format: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    file: Optional[str] = None
    json_file: Optional[str] = None


@dataclass
class CTIntelConfig:
    """
    Main CT Intelligence configuration.

    Can be loaded from YAML files with environment variable interpolation.
    """

    data: DataConfig = field(default_factory=DataConfig)
    server: ServerConfig = field(default_factory=ServerConfig)
    brief: BriefConfig = field(default_factory=BriefConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "CTIntelConfig":
        """Create config from dictionary."""
        data = _interpolate_env_vars(data)

        data_section = _interpolate_env_vars({
            "data_dir": DEFAULT_DATA_DIR,
            "bundle_path": "scans-bundle.json",
            **(data.get("data") or {}),
        })
        data_cfg = DataConfig(
            data_dir=Path(data_section["data_dir"]).expanduser(),
            bundle_path=Path(data_section["bundle_path"]).expanduser(),
        )

        server_data = data.get("server") or {}
        server = ServerConfig(
            host=server_data.get("host", "0.0.0.0"),
            port=int(server_data.get("port", _interpolate_env_vars(DEFAULT_PORT))),
        )

        brief_data = data.get("brief") or {}
        brief = BriefConfig(
            default_window_hours=int(brief_data.get("default_window_hours", 24)),
            display_timezone=brief_data.get("display_timezone", "America/New_York"),
        )
        if brief_data.get("meta"):
            brief.meta = {str(k): str(v) for k, v in brief_data["meta"].items()}

        logging_data = data.get("logging") or {}
        logging_cfg = LoggingConfig(
            level=logging_data.get("level", "INFO"),
            format=logging_data.get("format", "%(asctime)s - %(name)s - %(levelname)s - %(message)s"),
            file=logging_data.get("file"),
            json_file=logging_data.get("json_file"),
        )

        return cls(data=data_cfg, server=server, brief=brief, logging=logging_cfg)

    @classmethod
    def default(cls) -> "CTIntelConfig":
        """Create default configuration, honouring CT_DATA_DIR and PORT."""
        return cls.from_dict({})

    def to_dict(self) -> dict[str, Any]:
        """Convert config to dictionary."""
        return {
            "data": {
                "data_dir": str(self.data.data_dir),
                "bundle_path": str(self.data.bundle_path),
            },
            "server": {
                "host": self.server.host,
                "port": self.server.port,
            },
            "brief": {
                "default_window_hours": self.brief.default_window_hours,
                "display_timezone": self.brief.display_timezone,
                "meta": dict(self.brief.meta),
            },
            "logging": {
                "level": self.logging.level,
                "format": self.logging.format,
                "file": self.logging.file,
                "json_file": self.logging.json_file,
            },
        }


def load_config(path: Union[str, Path]) -> CTIntelConfig:
    """
    Load configuration from a YAML file.

    Args:
        path: Path to YAML configuration file

    Returns:
        CTIntelConfig instance
    """
    path = Path(path)

    if not path.exists():
        raise FileNotFoundError(f"Configuration file not found: {path}")

    with open(path) as f:
        data = yaml.safe_load(f)

    return CTIntelConfig.from_dict(data or {})


def save_config(config: CTIntelConfig, path: Union[str, Path]) -> None:
    """
    Save configuration to a YAML file.

    Args:
        config: CTIntelConfig instance
        path: Path to save configuration
    """
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)

    with open(path, "w") as f:
        yaml.dump(config.to_dict(), f, default_flow_style=False, sort_keys=False)
