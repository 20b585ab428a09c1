import copy
import os
import yaml
from typing import Dict, Any, Optional
import logging

logger = logging.getLogger(__name__)

# Default configuration
DEFAULT_CONFIG = {
    "inference": {
        "context_filter": "*/*",
        "max_depth": 2,
        "max_iterations": 2
    }
}

class Config:
    """Configuration manager for the inference engine."""

    _instance = None
    _config_dict = None
    _config_file = None

    @classmethod
    def get_instance(cls) -> 'Config':
        """Get the singleton instance of Config."""
        if cls._instance is None:
            cls._instance = Config()
        return cls._instance

    def __init__(self):
        """Initialize with default configuration."""
        if Config._instance is not None:
            raise RuntimeError("Config is a singleton. Use Config.get_instance() instead.")
        self._config_dict = copy.deepcopy(DEFAULT_CONFIG)

    def reset(self) -> None:
        """Drop loaded or overridden values and go back to the defaults."""
        self._config_dict = copy.deepcopy(DEFAULT_CONFIG)
        self._config_file = None

    def load_from_file(self, config_file: str) -> None:
        """Load configuration from a YAML file."""
        if not os.path.exists(config_file):
            logger.warning(f"Config file {config_file} not found. Using default configuration.")
            return

        with open(config_file, 'r') as f:
            config = yaml.safe_load(f)

        if not config:
            logger.warning("Empty config file. Using default configuration.")
            return
        if not isinstance(config, dict):
            raise ValueError(f"Config file {config_file} must contain a mapping, got {type(config).__name__}")

        # Merge into a copy, maintaining defaults for missing values
        merged = copy.deepcopy(self._config_dict)
        self._update_dict_recursive(merged, config)
        self._validate(merged)
        self._config_dict = merged
        self._config_file = config_file
        logger.info(f"Loaded configuration from {config_file}")

    def _update_dict_recursive(self, target: Dict, source: Dict) -> None:
        """Recursively update a dictionary, preserving keys not in source."""
        for key, value in source.items():
            if key in target and isinstance(target[key], dict) and isinstance(value, dict):
                self._update_dict_recursive(target[key], value)
            else:
                target[key] = value

    def _validate(self, config_dict: Optional[Dict] = None) -> None:
        if config_dict is None:
            config_dict = self._config_dict
        inference = config_dict.get('inference')
        if not isinstance(inference, dict):
            raise ValueError(f"inference must be a mapping, got {inference!r}")
        max_depth = inference.get('max_depth')
        max_iterations = inference.get('max_iterations')
        # bool is an int subclass
        if isinstance(max_depth, bool) or not isinstance(max_depth, int) or max_depth < 0:
            raise ValueError(f"inference.max_depth must be a non-negative integer, got {max_depth!r}")
        if isinstance(max_iterations, bool) or not isinstance(max_iterations, int) or max_iterations < 1:
            raise ValueError(f"inference.max_iterations must be a positive integer, got {max_iterations!r}")

    def get(self, path: str, default: Any = None) -> Any:
        """Get configuration value by dot-notation path."""
        parts = path.split('.')
        current = self._config_dict

        for part in parts:
            if isinstance(current, dict) and part in current:
                current = current[part]
            else:
                return default

        return current

    def set(self, path: str, value: Any) -> None:
        """Set configuration value by dot-notation path."""
        parts = path.split('.')
        current = self._config_dict

        # Navigate to the parent of the target
        for part in parts[:-1]:
            if part not in current or not isinstance(current[part], dict):
                current[part] = {}
            current = current[part]

        missing = object()
        previous = current.get(parts[-1], missing)
        current[parts[-1]] = value
        if parts[0] == 'inference':
            try:
                self._validate()
            except ValueError:
                if previous is missing:
                    del current[parts[-1]]
                else:
                    current[parts[-1]] = previous
                raise

    def get_context_filter(self) -> str:
        return self.get('inference.context_filter', '*/*')

    def get_max_depth(self) -> int:
        return self.get('inference.max_depth', 2)

    def get_max_iterations(self) -> int:
        return self.get('inference.max_iterations', 2)

    def save(self, config_file: Optional[str] = None) -> None:
        """Save current configuration to a YAML file."""
        file_path = config_file or self._config_file

        if not file_path:
            logger.warning("No config file specified for saving.")
            return

        with open(file_path, 'w') as f:
            yaml.dump(self._config_dict, f, default_flow_style=False)
        logger.info(f"Saved configuration to {file_path}")

# Singleton instance
config = Config.get_instance()
