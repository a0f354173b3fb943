"""Simple YAML configuration loader for Gemini Scribe."""

import os
import copy
import yaml
from pathlib import Path
from typing import Dict, Any, Optional
import logging

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_FILENAME = "geminiscribe.yaml"

DEFAULT_CONFIG: Dict[str, Any] = {
    "gemini": {
        "model": "gemini-flash-latest",
        "api_key_env": "GEMINI_API_KEY",
        "base_url": "https://generativelanguage.googleapis.com/v1beta",
        "timeout_seconds": None,
    },
    "upload": {
        "max_file_size_mb": 20,
    },
    "export": {
        "output_directory": "downloads",
        "pdf_font_path": None,
    },
    "logging": {
        "level": "INFO",
        "file_path": "data/logs/geminiscribe.log",
        "console_output": True,
    },
}


class GeminiScribeConfig:
    """Gemini Scribe configuration loader."""

    def __init__(self, config_path: Optional[str] = None):
        """Initialize configuration loader.

        Args:
            config_path: Path to YAML config file. If None, uses geminiscribe.yaml
                        from the current directory when present, else built-in defaults.
        """
        if config_path is None and Path(DEFAULT_CONFIG_FILENAME).exists():
            config_path = DEFAULT_CONFIG_FILENAME

        if config_path is None:
            self.config_file = None
            self.config = copy.deepcopy(DEFAULT_CONFIG)
            logger.info("No configuration file found, using built-in defaults")
            return

        self.config_file = Path(config_path)

        if not self.config_file.exists():
            raise FileNotFoundError(f"Configuration file not found: {self.config_file}")

        logger.info(f"Loading configuration from: {self.config_file}")
        self.config = self._load_config()

    def _load_config(self) -> Dict[str, Any]:
        """Load and parse YAML configuration file, layered over the defaults."""
        try:
            with open(self.config_file, 'r', encoding='utf-8') as f:
                loaded = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ValueError(f"Invalid YAML in configuration file: {e}")

        if not loaded:
            raise ValueError("Configuration file is empty")
        if not isinstance(loaded, dict):
            raise ValueError("Configuration file must contain a mapping at the top level")

        config = _merge(copy.deepcopy(DEFAULT_CONFIG), loaded)

        # Resolve relative paths
        self._resolve_paths(config)

        logger.info("Configuration loaded successfully")
        return config

    def _resolve_paths(self, config: Dict[str, Any]) -> None:
        """Resolve relative paths in configuration relative to config file location."""
        config_dir = self.config_file.parent

        for section, key in (('export', 'output_directory'),
                             ('export', 'pdf_font_path'),
                             ('logging', 'file_path')):
            value = config.get(section, {}).get(key)
            if value and not os.path.isabs(value):
                config[section][key] = str(config_dir / value)

    def get(self, key_path: str, default: Any = None) -> Any:
        """Get configuration value using dot notation (e.g., 'gemini.model').

        Args:
            key_path: Dot-separated key path (e.g., 'export.output_directory')
            default: Default value if key not found

        Returns:
            Configuration value or default
        """
        keys = key_path.split('.')
        value = self.config

        for key in keys:
            if isinstance(value, dict) and key in value:
                value = value[key]
            else:
                return default

        return value

    def set(self, key_path: str, value: Any) -> None:
        """Set configuration value using dot notation.

        Args:
            key_path: Dot-separated path to config value (e.g., 'gemini.model')
            value: Value to set
        """
        keys = key_path.split('.')
        config_dict = self.config

        # Navigate to the parent dictionary
        for key in keys[:-1]:
            if key not in config_dict:
                config_dict[key] = {}
            config_dict = config_dict[key]

        # Set the final value
        config_dict[keys[-1]] = value
        logger.debug(f"Configuration key '{key_path}' set to: {value}")

    def get_max_upload_bytes(self) -> int:
        """Get the upload size ceiling in bytes."""
        return int(float(self.get('upload.max_file_size_mb', 20)) * 1024 * 1024)

    def get_output_directory(self) -> str:
        """Get downloads directory path."""
        output_dir = self.get('export.output_directory', 'downloads')
        return str(Path(output_dir).absolute())


def _merge(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(base.get(key), dict):
            _merge(base[key], value)
        else:
            base[key] = value
    return base
