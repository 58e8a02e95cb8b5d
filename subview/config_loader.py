"""Handles loading configuration from YAML files."""

import yaml
import os
import logging
from dataclasses import dataclass, field
from typing import Any, Dict

from .companion_script import default_script_path
from .exceptions import ConfigurationError

logger = logging.getLogger(__name__)

DEFAULT_FEED_PATH = "/tmp/mpv-subtitles.json"
MIN_DISPLAY_COUNT = 1
MAX_DISPLAY_COUNT = 50

@dataclass
class Settings:
    """Validated runtime settings."""
    feed_path: str = DEFAULT_FEED_PATH
    script_path: str = field(default_factory=default_script_path)
    poll_interval: float = 0.25
    display_count: int = 10
    log_dir: str = "logs"
    log_file: str = "subview.log"


class ConfigLoader:
    """Loads configuration settings from a YAML file."""

    def load_config(self, config_path: str) -> dict:
        """
        Loads configuration from the specified YAML file path.

        Args:
            config_path: The path to the YAML configuration file.

        Returns:
            A dictionary containing the loaded configuration settings.

        Raises:
            FileNotFoundError: If the configuration file does not exist.
            ConfigurationError: If the file cannot be parsed as YAML or
                              if there are other reading errors.
        """
        logger.info(f"Attempting to load configuration from: {config_path}")
        if not os.path.exists(config_path):
            logger.error(f"Configuration file not found at path: {config_path}")
            raise FileNotFoundError(f"Configuration file not found: {config_path}")
        if not os.path.isfile(config_path):
            logger.error(f"Configuration path is not a file: {config_path}")
            raise ConfigurationError(f"Configuration path is not a file: {config_path}")

        try:
            with open(config_path, 'r', encoding='utf-8') as f:
                config = yaml.safe_load(f)
        except yaml.YAMLError as e:
            logger.error(f"Error parsing YAML configuration file {config_path}: {e}", exc_info=True)
            raise ConfigurationError(f"Invalid YAML format in {config_path}: {e}") from e
        except IOError as e:
            logger.error(f"Error reading configuration file {config_path}: {e}", exc_info=True)
            raise ConfigurationError(f"Could not read configuration file {config_path}: {e}") from e

        if config is None:
            # An empty file means "all defaults"
            config = {}
        if not isinstance(config, dict):
            logger.error(f"Configuration file {config_path} did not load as a dictionary (root object).")
            raise ConfigurationError(f"Invalid YAML structure in {config_path}. Root must be a mapping (dictionary).")
        logger.info(f"Configuration loaded successfully from {config_path}")
        return config


def build_settings(config: Dict[str, Any]) -> Settings:
    """
    Merges a loaded configuration onto the defaults and validates it.

    Unknown keys are ignored. `display_count` is clamped into the range the
    viewer supports.

    Raises:
        ConfigurationError: If a value has the wrong type or is out of range.
    """
    settings = Settings()
    try:
        if config.get('feed_path'):
            settings.feed_path = os.path.expanduser(str(config['feed_path']))
        if config.get('script_path'):
            settings.script_path = os.path.expanduser(str(config['script_path']))
        if config.get('poll_interval') is not None:
            settings.poll_interval = float(config['poll_interval'])
        if config.get('display_count') is not None:
            settings.display_count = int(config['display_count'])
        if config.get('log_dir'):
            settings.log_dir = str(config['log_dir'])
        if config.get('log_file'):
            settings.log_file = str(config['log_file'])
    except (TypeError, ValueError) as e:
        raise ConfigurationError(f"Invalid configuration value: {e}") from e

    if settings.poll_interval <= 0:
        raise ConfigurationError(f"'poll_interval' must be positive, got {settings.poll_interval}.")
    settings.display_count = max(MIN_DISPLAY_COUNT, min(MAX_DISPLAY_COUNT, settings.display_count))
    return settings
