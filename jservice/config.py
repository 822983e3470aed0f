"""
Client configuration and logging setup.

Settings come from a plain dict or from a JSON / YAML file.
"""

import json
import logging
from dataclasses import dataclass
from typing import Any, Dict, Optional

import yaml

DEFAULT_BASE_URL = "http://jservice.io/api/"
DEFAULT_LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"

LOG_LEVELS = {
    "CRITICAL": logging.CRITICAL,
    "ERROR": logging.ERROR,
    "WARNING": logging.WARNING,
    "INFO": logging.INFO,
    "DEBUG": logging.DEBUG,
}


class ConfigError(ValueError):
    """Invalid client configuration."""


@dataclass
class ClientConfig:
    """
    Settings for a JServiceClient.

    Attributes:
        base_url: API root, always ending in "/"
        timeout: Request timeout in seconds (None waits forever)
        log_level: Logging level name
        log_file: Log file path (None logs to stderr)
        log_format: Format string for log records
    """

    base_url: str = DEFAULT_BASE_URL
    timeout: Optional[float] = None
    log_level: str = "INFO"
    log_file: Optional[str] = None
    log_format: str = DEFAULT_LOG_FORMAT

    def __post_init__(self) -> None:
        if not isinstance(self.base_url, str) or not self.base_url.strip():
            raise ConfigError("base_url must be a non-empty string")
        self.base_url = self.base_url.strip()
        if not self.base_url.endswith("/"):
            self.base_url += "/"

        if self.timeout is not None:
            if isinstance(self.timeout, bool) or not isinstance(self.timeout, (int, float)):
                raise ConfigError(f"timeout must be a number, got {self.timeout!r}")
            if self.timeout <= 0:
                raise ConfigError(f"timeout must be positive, got {self.timeout}")
            self.timeout = float(self.timeout)

        level = str(self.log_level).upper()
        if level not in LOG_LEVELS:
            raise ConfigError(f"Unknown log level: {self.log_level}")
        self.log_level = level

    @property
    def level(self) -> int:
        """Numeric logging level."""
        return LOG_LEVELS[self.log_level]

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> "ClientConfig":
        """
        Build config from a dict, ignoring unknown keys.

        Raises:
            ConfigError: If a value is invalid or data is not a mapping
        """
        if data is None:
            return cls()
        if not isinstance(data, dict):
            raise ConfigError(f"Config must be a mapping, got {type(data).__name__}")

        known = ("base_url", "timeout", "log_level", "log_file", "log_format")
        return cls(**{key: data[key] for key in known if key in data})


def load_config(config_file: str) -> ClientConfig:
    """Load configuration from a JSON or YAML file.

    Args:
        config_file: Path ending in .yaml/.yml for YAML, anything else is JSON

    Returns:
        ClientConfig instance

    Raises:
        FileNotFoundError: If the file does not exist
        ConfigError: If the file holds invalid settings
    """
    with open(config_file, 'r', encoding='utf-8') as fp:
        if config_file.endswith(('.yaml', '.yml')):
            conf = yaml.safe_load(fp)
        else:
            conf = json.load(fp)

    # The client settings may sit under a "jservice" section
    if isinstance(conf, dict) and isinstance(conf.get("jservice"), dict):
        conf = conf["jservice"]

    return ClientConfig.from_dict(conf)


PACKAGE_LOGGER = "jservice"


def configure_logger(logger=PACKAGE_LOGGER,
                     log_file=None,
                     log_format=None,
                     log_level=logging.INFO,
                     propagate=False):
    """Send the client's log records to a file or stream.

    The client logs under the "jservice" namespace (for example
    "jservice.client.JServiceClient"), so configuring the package logger
    covers every client instance. A handler attached by an earlier call is
    closed and replaced, so reconfiguring never duplicates output.

    Args:
        logger: Logger instance or name (default "jservice")
        log_file: File path string or file-like object (None for stderr)
        log_format: Format string for log records
        log_level: Logging level (e.g., logging.INFO, logging.DEBUG)
        propagate: Also pass records to the root logger's handlers

    Returns:
        Configured logger instance
    """
    if isinstance(logger, str):
        logger = logging.getLogger(logger)

    for old in [h for h in logger.handlers if getattr(h, "_jservice_handler", False)]:
        logger.removeHandler(old)
        old.close()

    if isinstance(log_file, str):
        handler = logging.FileHandler(log_file, mode='a', encoding='utf-8', errors='replace')
    else:
        handler = logging.StreamHandler(log_file)

    handler.setFormatter(logging.Formatter(log_format or DEFAULT_LOG_FORMAT))
    handler._jservice_handler = True

    logger.addHandler(handler)
    logger.setLevel(log_level)
    logger.propagate = propagate

    return logger


def configure_from(config: ClientConfig, logger=PACKAGE_LOGGER, propagate=False):
    """Apply a ClientConfig's logging settings to a logger."""
    return configure_logger(
        logger,
        log_file=config.log_file,
        log_format=config.log_format,
        log_level=config.level,
        propagate=propagate,
    )
