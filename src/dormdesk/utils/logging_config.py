"""
Centralized logging configuration for DormDesk.
Provides component-specific loggers with optional separate log files.
"""

import logging
import logging.handlers
import sys
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, Optional

from ..config import get_config

ROOT_LOGGER_NAME = "dormdesk"

DETAILED_FORMAT = (
    "%(asctime)s - %(name)s - %(levelname)s - [%(filename)s:%(lineno)d] - %(funcName)s() - %(message)s"
)
SIMPLE_FORMAT = "%(asctime)s - %(levelname)s - %(name)s - %(message)s"


class ComponentLogger:
    """Manages component-specific logging."""

    _loggers: Dict[str, logging.Logger] = {}
    _initialized = False
    _log_dir: Optional[Path] = None

    # Component definitions with their log files
    COMPONENTS = {
        "api": {"level": logging.INFO, "file": "api.log"},
        "store": {"level": logging.INFO, "file": "store.log"},
        "audit": {"level": logging.INFO, "file": "audit.log"},
        "auth": {"level": logging.INFO, "file": "auth.log"},
        "reports": {"level": logging.INFO, "file": "reports.log"},
        "main": {"level": logging.INFO, "file": "main.log"},
        "error": {"level": logging.ERROR, "file": "errors.log"},
    }

    # Module subpackage -> component
    MODULE_COMPONENTS = {
        "api": "api",
        "main": "api",
        "store": "store",
        "auth": "auth",
        "services": "reports",
        "facade": "main",
    }

    @classmethod
    def initialize(
        cls,
        log_dir: Optional[str] = None,
        debug: bool = False,
        log_to_file: Optional[bool] = None,
    ) -> None:
        """
        Initialize the logging system with component-specific loggers.

        Args:
            log_dir: Directory for log files. Defaults to config.logging.log_dir
            debug: Enable debug logging for all components
            log_to_file: Write rotating per-component files. Defaults to config
        """
        if cls._initialized:
            return

        config = get_config()
        if log_to_file is None:
            log_to_file = config.logging.log_to_file

        configured_level = logging.getLevelName(config.logging.log_level.upper())
        if not isinstance(configured_level, int):
            configured_level = logging.INFO
        root_level = logging.DEBUG if debug else configured_level

        root_logger = logging.getLogger(ROOT_LOGGER_NAME)
        root_logger.setLevel(root_level)
        root_logger.handlers.clear()

        console_handler = logging.StreamHandler(sys.stderr)
        console_handler.setLevel(root_level)
        console_handler.setFormatter(logging.Formatter(SIMPLE_FORMAT, datefmt="%H:%M:%S"))
        root_logger.addHandler(console_handler)

        if log_to_file:
            base_dir = Path(log_dir or config.logging.log_dir)
            # Session-specific subdirectory
            cls._log_dir = base_dir / datetime.now().strftime("%Y%m%d_%H%M%S")
            cls._log_dir.mkdir(parents=True, exist_ok=True)

            unified_handler = logging.handlers.RotatingFileHandler(
                cls._log_dir / "unified.log",
                maxBytes=20 * 1024 * 1024,  # 20MB
                backupCount=3,
                encoding="utf-8",
            )
            unified_handler.setLevel(root_level)
            unified_handler.setFormatter(
                logging.Formatter(DETAILED_FORMAT, datefmt="%Y-%m-%d %H:%M:%S")
            )
            root_logger.addHandler(unified_handler)

        for component_name, component_config in cls.COMPONENTS.items():
            logger = logging.getLogger(f"{ROOT_LOGGER_NAME}.{component_name}")
            logger.handlers.clear()
            level = logging.DEBUG if debug else max(component_config["level"], root_level)
            logger.setLevel(level)

            if log_to_file and cls._log_dir is not None:
                file_handler = logging.handlers.RotatingFileHandler(
                    cls._log_dir / component_config["file"],
                    maxBytes=10 * 1024 * 1024,  # 10MB
                    backupCount=5,
                    encoding="utf-8",
                )
                file_handler.setLevel(level)
                file_handler.setFormatter(
                    logging.Formatter(DETAILED_FORMAT, datefmt="%Y-%m-%d %H:%M:%S")
                )
                logger.addHandler(file_handler)

            cls._loggers[component_name] = logger

        cls._initialized = True

        main_logger = cls._loggers["main"]
        main_logger.debug("DormDesk logging initialized (debug=%s, log_dir=%s)", debug, cls._log_dir)

    @classmethod
    def component_for(cls, name: str) -> str:
        """
        Map a component name or a module path to a component.

        ``dormdesk.store.audit`` maps to ``audit``; other ``dormdesk.<sub>``
        paths map through MODULE_COMPONENTS and default to ``main``.
        """
        if name in cls.COMPONENTS:
            return name
        parts = name.split(".")
        if parts[0] != ROOT_LOGGER_NAME or len(parts) < 2:
            return name
        if parts[-1] == "audit":
            return "audit"
        return cls.MODULE_COMPONENTS.get(parts[1], "main")

    @classmethod
    def get_logger(cls, component: str) -> logging.Logger:
        """
        Get a logger for a specific component.

        Args:
            component: Component name (api, store, audit, auth, ...) or a
                       module path such as ``__name__``

        Returns:
            Logger instance for the component
        """
        if not cls._initialized:
            cls.initialize()

        component = cls.component_for(component)
        if component not in cls._loggers:
            logger = logging.getLogger(f"{ROOT_LOGGER_NAME}.{component}")
            cls._loggers[component] = logger
        return cls._loggers[component]

    @classmethod
    def log_exception(
        cls, component: str, exc: Exception, context: Optional[Dict[str, Any]] = None
    ) -> None:
        """
        Log an exception with context to both component and error logs.

        Args:
            component: Component where the exception occurred
            exc: The exception to log
            context: Additional context information
        """
        component_logger = cls.get_logger(component)
        error_logger = cls.get_logger("error")

        context_str = ""
        if context:
            context_str = " | Context: " + ", ".join(f"{k}={v}" for k, v in context.items())

        component_logger.error(
            f"Exception in {component}: {type(exc).__name__}: {exc}{context_str}",
            exc_info=exc,
        )
        error_logger.error(f"[{component}] {type(exc).__name__}: {exc}{context_str}")

    @classmethod
    def get_log_directory(cls) -> Optional[Path]:
        """Get the current log directory path."""
        return cls._log_dir

    @classmethod
    def reset(cls) -> None:
        """Tear down handlers so the next call re-initializes."""
        for logger in list(cls._loggers.values()) + [logging.getLogger(ROOT_LOGGER_NAME)]:
            for handler in list(logger.handlers):
                handler.close()
                logger.removeHandler(handler)
        cls._loggers = {}
        cls._initialized = False
        cls._log_dir = None


# Convenience functions
def get_logger(component: str) -> logging.Logger:
    """Get a logger for a specific component or module path."""
    return ComponentLogger.get_logger(component)


def initialize_logging(
    log_dir: Optional[str] = None, debug: bool = False, log_to_file: Optional[bool] = None
) -> None:
    """Initialize the logging system."""
    ComponentLogger.initialize(log_dir=log_dir, debug=debug, log_to_file=log_to_file)


def log_exception(component: str, exc: Exception, context: Optional[Dict[str, Any]] = None) -> None:
    """Log an exception with context."""
    ComponentLogger.log_exception(component, exc, context)


def get_log_directory() -> Optional[Path]:
    """Get the current log directory path."""
    return ComponentLogger.get_log_directory()
