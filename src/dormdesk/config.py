"""
Configuration management for DormDesk

Dataclass sections with sensible defaults, an optional JSON config file and
environment variable overrides. Dormitory limits are read once when a store
is built and are not changed at runtime.
"""

import json
import logging
import os
from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Any, Dict, List, Optional

DEFAULT_ADMIN_EMAIL = "admin@dorm.com"
DEFAULT_ADMIN_PASSWORD = "password123"


@dataclass
class DormConfig:
    """Dormitory limits and domain behaviour."""

    total_rooms: int = 10
    max_tenants_per_room: int = 2
    admin_email: str = DEFAULT_ADMIN_EMAIL
    admin_password: str = DEFAULT_ADMIN_PASSWORD
    seed_demo_data: bool = True
    simulated_latency_ms: int = 0  # Artificial delay before each facade call


@dataclass
class ServerConfig:
    """Server configuration."""

    host: str = "127.0.0.1"
    port: int = 8000
    debug: bool = False
    auto_reload: bool = False
    cors_origins: List[str] = field(
        default_factory=lambda: ["http://127.0.0.1:3000", "http://localhost:3000"]
    )


@dataclass
class ReportConfig:
    """External text-generation service used for narrative reports."""

    api_key: str = ""
    model: str = "gemini-2.5-flash"
    base_url: str = "https://generativelanguage.googleapis.com/v1beta"
    timeout_seconds: float = 30.0


@dataclass
class LoggingConfig:
    """Logging configuration."""

    log_level: str = "INFO"
    log_to_file: bool = False
    log_dir: str = "logs"


@dataclass
class DormDeskConfig:
    """Complete configuration for DormDesk."""

    dorm: DormConfig = field(default_factory=DormConfig)
    server: ServerConfig = field(default_factory=ServerConfig)
    report: ReportConfig = field(default_factory=ReportConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "DormDeskConfig":
        """Create from dictionary. Unknown keys are logged and ignored."""
        return cls(
            dorm=_build_section(DormConfig, "dorm", data),
            server=_build_section(ServerConfig, "server", data),
            report=_build_section(ReportConfig, "report", data),
            logging=_build_section(LoggingConfig, "logging", data),
        )


def _build_section(section_cls: type, name: str, data: Dict[str, Any]) -> Any:
    values = data.get(name) or {}
    known = {f.name for f in fields(section_cls)}
    for key in sorted(set(values) - known):
        logging.warning(f"Ignoring unknown config key '{name}.{key}'")
    return section_cls(**{k: v for k, v in values.items() if k in known})


def _as_bool(value: str) -> bool:
    return value.strip().lower() in ("1", "true", "yes", "on")


# Environment variable -> (section, field, converter)
ENV_OVERRIDES: Dict[str, tuple] = {
    "DORMDESK_TOTAL_ROOMS": ("dorm", "total_rooms", int),
    "DORMDESK_MAX_TENANTS_PER_ROOM": ("dorm", "max_tenants_per_room", int),
    "DORMDESK_ADMIN_EMAIL": ("dorm", "admin_email", str),
    "DORMDESK_ADMIN_PASSWORD": ("dorm", "admin_password", str),
    "DORMDESK_SEED_DEMO_DATA": ("dorm", "seed_demo_data", _as_bool),
    "DORMDESK_LATENCY_MS": ("dorm", "simulated_latency_ms", int),
    "DORMDESK_HOST": ("server", "host", str),
    "DORMDESK_PORT": ("server", "port", int),
    "DORMDESK_DEBUG": ("server", "debug", _as_bool),
    "GEMINI_API_KEY": ("report", "api_key", str),
    "DORMDESK_REPORT_API_KEY": ("report", "api_key", str),
    "DORMDESK_REPORT_MODEL": ("report", "model", str),
    "DORMDESK_REPORT_BASE_URL": ("report", "base_url", str),
    "DORMDESK_LOG_LEVEL": ("logging", "log_level", str),
    "DORMDESK_LOG_TO_FILE": ("logging", "log_to_file", _as_bool),
    "DORMDESK_LOG_DIR": ("logging", "log_dir", str),
}


class ConfigManager:
    """Manages configuration loading and environment overrides."""

    def __init__(self):
        self.config_file: Optional[Path] = None
        self.config: Optional[DormDeskConfig] = None

    def get_config_file_path(self) -> Optional[Path]:
        """Get the path of the JSON config file, if one is configured."""
        path = os.getenv("DORMDESK_CONFIG_FILE")
        return Path(path) if path else None

    def apply_environment(self, data: Dict[str, Any]) -> Dict[str, Any]:
        """Overlay environment variables onto a config dictionary."""
        for env_name, (section, key, convert) in ENV_OVERRIDES.items():
            raw = os.getenv(env_name)
            if raw is None or raw == "":
                continue
            try:
                data.setdefault(section, {})[key] = convert(raw)
            except ValueError:
                logging.warning(f"Ignoring invalid value for {env_name}: {raw!r}")

        if data.get("server", {}).get("debug"):
            data.setdefault("logging", {}).setdefault("log_level", "DEBUG")
        return data

    def load_config(self) -> DormDeskConfig:
        """Load configuration from file and environment, caching the result."""
        if self.config is not None:
            return self.config

        data: Dict[str, Any] = {}
        self.config_file = self.get_config_file_path()

        if self.config_file is not None:
            if self.config_file.exists():
                try:
                    with open(self.config_file, "r", encoding="utf-8") as f:
                        data = json.load(f)
                    if not isinstance(data, dict):
                        raise ValueError("top level must be a JSON object")
                    logging.info(f"Loaded configuration from {self.config_file}")
                    for section in [k for k, v in data.items() if not isinstance(v, dict)]:
                        logging.warning(f"Ignoring config section '{section}': expected an object")
                        del data[section]
                except (OSError, ValueError) as e:
                    logging.warning(f"Failed to load config from {self.config_file}: {e}")
                    data = {}
            else:
                logging.warning(f"Config file not found: {self.config_file}")

        self.config = DormDeskConfig.from_dict(self.apply_environment(data))
        return self.config

        try:
            with open(path, "w", encoding="utf-8") as f:
                json.dump(config.to_dict(), f, indent=2, ensure_ascii=False)
            logging.info(f"Saved configuration to {path}")
            return True
        except OSError as e:
            logging.error(f"Failed to save config to {path}: {e}")
            return False

    def validate_config(self) -> List[str]:
        """Validate configuration and return list of warnings/errors."""
        config = self.load_config()
        issues = []

        if config.dorm.total_rooms < 1:
            issues.append(f"total_rooms must be positive, got {config.dorm.total_rooms}")
        if config.dorm.max_tenants_per_room < 0:
            issues.append(
                f"max_tenants_per_room must not be negative, got {config.dorm.max_tenants_per_room}"
            )
        if config.dorm.simulated_latency_ms < 0:
            issues.append("simulated_latency_ms must not be negative")
        if not config.dorm.admin_email or not config.dorm.admin_password:
            issues.append("Admin credentials are not configured")
        if not config.report.api_key:
            issues.append("Report API key not set; narrative reports will fail")

        return issues

    def reset(self) -> None:
        """Forget the cached configuration."""
        self.config = None
        self.config_file = None


# Global config manager instance
config_manager = ConfigManager()


def get_config() -> DormDeskConfig:
    """Get the current configuration."""
    return config_manager.load_config()


def reset_config() -> None:
    """Drop the cached configuration so the next call reloads it."""
    config_manager.reset()


def validate_config() -> List[str]:
    """Validate the current configuration."""
    return config_manager.validate_config()
