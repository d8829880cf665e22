"""Configuration management for Gutti."""

import logging
import os
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Optional

import yaml


logger = logging.getLogger(__name__)

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")
DEFAULT_CONFIG_PATH = Path("~/.gutti/config.yaml")


@dataclass
class ConfigModel:
    """Global configuration model for Gutti."""

    # Persistence
    data_file: str = "./data/gutti.txt"

    # Console presentation
    bot_name: str = "Gutti"
    separator: str = "_" * 60
    show_greeting: bool = True
    no_color: bool = False

    # Diagnostics
    log_level: str = "WARNING"

    def __post_init__(self):
        """Post-initialization setup."""
        self.data_file = os.path.expanduser(str(self.data_file))

        level = str(self.log_level).upper()
        if level not in LOG_LEVELS:
            logger.warning(f"Unknown log level {self.log_level!r}, using WARNING")
            level = "WARNING"
        self.log_level = level

    def to_yaml(self) -> str:
        """Serialize config to YAML."""
        data = {
            "data_file": self.data_file,
            "bot_name": self.bot_name,
            "separator": self.separator,
            "show_greeting": self.show_greeting,
            "no_color": self.no_color,
            "log_level": self.log_level,
        }
        return yaml.dump(data, default_flow_style=False)

    @classmethod
    def from_yaml(cls, yaml_str: str) -> "ConfigModel":
        """Deserialize config from YAML."""
        data = yaml.safe_load(yaml_str) or {}
        if not isinstance(data, dict):
            raise ValueError("Configuration must be a YAML mapping")

        known = {f.name for f in fields(cls)}
        for key in list(data):
            if key not in known:
                logger.warning(f"Ignoring unknown configuration key: {key}")
                data.pop(key)

        return cls(**data)

    def get_data_path(self) -> Path:
        """Get the task file path."""
        return Path(self.data_file)


class Config:
    """Configuration manager for Gutti."""

    _instance: Optional[ConfigModel] = None

    @classmethod
    def load(cls, config_path: Optional[Path] = None) -> ConfigModel:
        """Load configuration from file or create default."""
        if cls._instance is not None:
            return cls._instance

        config = ConfigModel()

        if config_path is None:
            config_path = DEFAULT_CONFIG_PATH
        config_path = Path(config_path).expanduser()

        if config_path.exists():
            try:
                with open(config_path, "r", encoding="utf-8") as f:
                    yaml_content = f.read()
                config = ConfigModel.from_yaml(yaml_content)
                logger.debug(f"Loaded configuration from {config_path}")
            except (OSError, ValueError, TypeError, yaml.YAMLError) as e:
                logger.warning(f"Failed to load config from {config_path}: {e}")
                logger.warning("Using default configuration.")
        else:
            cls.save(config, config_path)

        cls._instance = config
        return config

    @classmethod
    def save(cls, config: ConfigModel, config_path: Optional[Path] = None) -> bool:
        """Save configuration to file."""
        if config_path is None:
            config_path = DEFAULT_CONFIG_PATH
        config_path = Path(config_path).expanduser()

        try:
            config_path.parent.mkdir(parents=True, exist_ok=True)
            with open(config_path, "w", encoding="utf-8") as f:
                f.write(config.to_yaml())
            logger.debug(f"Configuration saved to {config_path}")
            return True
        except OSError as e:
            logger.error(f"Failed to save config to {config_path}: {e}")
            return False

    @classmethod
    def get(cls) -> ConfigModel:
        """Get the current configuration instance."""
        if cls._instance is None:
            cls._instance = cls.load()
        return cls._instance

    @classmethod
    def reload(cls, config_path: Optional[Path] = None) -> ConfigModel:
        """Reload configuration from file."""
        cls._instance = None
        return cls.load(config_path)


def load_config(config_path: Optional[Path] = None) -> ConfigModel:
    """Load configuration from file."""
    return Config.load(config_path)


def save_config(config: ConfigModel, config_path: Optional[Path] = None) -> bool:
    """Save configuration to file."""
    return Config.save(config, config_path)
