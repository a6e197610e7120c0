"""Configuration service - loads Fusion Agent settings from YAML.

The pipeline runs on defaults when no config file exists; the file is only
ever read, never created.
"""

import logging
import os
from pathlib import Path
from typing import Optional, Union

import yaml

from fusionagent.core.config_schema import FusionAgentConfig

logger = logging.getLogger(__name__)

CONFIG_ENV_VAR = "FUSIONAGENT_CONFIG"


def get_default_config_file() -> Path:
    """Get the config file path: $FUSIONAGENT_CONFIG or ~/.fusionagent/config.yaml."""
    env_path = os.environ.get(CONFIG_ENV_VAR)
    if env_path:
        return Path(env_path).expanduser()
    return Path.home() / ".fusionagent" / "config.yaml"


class ConfigService:
    """Service for loading Fusion Agent configuration."""

    def __init__(self, config_file: Optional[Union[str, Path]] = None):
        """Initialize config service.

        Args:
            config_file: Path to config file. Defaults to get_default_config_file()
        """
        if config_file is None:
            self.config_file = get_default_config_file()
        else:
            self.config_file = Path(config_file)

    def load(self) -> FusionAgentConfig:
        """Load configuration from YAML file.

        Returns:
            FusionAgentConfig; defaults when the file is missing or malformed

        Raises:
            ConfigError: If the file holds invalid values
        """
        if not self.config_file.exists():
            logger.debug(f"No config file at {self.config_file}, using defaults")
            return FusionAgentConfig.create_default()

        try:
            with open(self.config_file, "r") as f:
                data = yaml.safe_load(f) or {}
        except (yaml.YAMLError, IOError) as e:
            logger.warning(f"Could not read config {self.config_file}: {e}")
            return FusionAgentConfig.create_default()

        if not isinstance(data, dict):
            logger.warning(f"Config {self.config_file} is not a mapping, ignoring")
            return FusionAgentConfig.create_default()

        config = FusionAgentConfig.from_dict(data)
        logger.info(f"Loaded config from {self.config_file}")
        return config
