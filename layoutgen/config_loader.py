#!/usr/bin/env python3
"""
Configuration loader for the layout generator and evaluator.

Provides unified configuration management using YAML files.
Handles merging of common settings with tool-specific settings.
"""

import yaml
from pathlib import Path
from typing import Dict, Any, Optional, List

DEFAULT_CONFIG_PATH = Path(__file__).parent / "config.yaml"

# Sections that configure something other than a tool
NON_TOOL_SECTIONS = {'common', 'output_formats'}


class ConfigLoader:
    """Handles loading and processing of YAML configuration files."""

    def __init__(self, config_path: str = str(DEFAULT_CONFIG_PATH)):
        """
        Initialize configuration loader.

        Args:
            config_path: Path to the YAML configuration file
        """
        self.config_path = Path(config_path)
        self._config_cache: Optional[Dict[str, Any]] = None

    def load_config(self) -> Dict[str, Any]:
        """
        Load YAML configuration file.

        Returns:
            Full configuration dictionary

        Raises:
            FileNotFoundError: If configuration file doesn't exist
            yaml.YAMLError: If YAML parsing fails
        """
        if self._config_cache is not None:
            return self._config_cache

        if not self.config_path.exists():
            raise FileNotFoundError(f"Configuration file not found: {self.config_path}")

        try:
            with open(self.config_path, 'r', encoding='utf-8') as f:
                config = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise yaml.YAMLError(f"Error parsing YAML configuration: {e}")

        if config is None:
            config = {}

        self._config_cache = config
        return config

    def get_tool_config(self, tool_name: str) -> Dict[str, Any]:
        """
        Get configuration for a tool with common settings merged.

        Args:
            tool_name: Name of the tool section (e.g., 'generator')

        Returns:
            Merged configuration dictionary; tool settings take precedence

        Raises:
            ValueError: If tool not found in configuration
        """
        full_config = self.load_config()

        if tool_name not in full_config:
            raise ValueError(
                f"Tool '{tool_name}' not found in configuration. "
                f"Available tools: {self.get_available_tools()}"
            )

        common_config = full_config.get('common', {}) or {}
        tool_config = dict(full_config[tool_name] or {})

        merged_config = {**common_config, **tool_config}
        merged_config['output_formats'] = full_config.get('output_formats', {}) or {}
        return merged_config

    def get_available_tools(self) -> List[str]:
        """Names of the tool sections found in the configuration."""
        return [k for k in self.load_config().keys() if k not in NON_TOOL_SECTIONS]


# Global configuration loader instance
_config_loader: Optional[ConfigLoader] = None


def get_config_loader(config_path: str = str(DEFAULT_CONFIG_PATH)) -> ConfigLoader:
    """
    Get global configuration loader instance (singleton pattern).

    Args:
        config_path: Path to configuration file
    """
    global _config_loader

    if _config_loader is None or _config_loader.config_path != Path(config_path):
        _config_loader = ConfigLoader(config_path)

    return _config_loader


def load_tool_config(tool_name: str, config_path: str = str(DEFAULT_CONFIG_PATH)) -> Dict[str, Any]:
    """
    Convenience function to load configuration for a specific tool.

    Args:
        tool_name: Name of the tool section
        config_path: Path to configuration file
    """
    return get_config_loader(config_path).get_tool_config(tool_name)


def get_search_options(config: Dict[str, Any]) -> Dict[str, int]:
    """Search settings of a generator config, with defaults filled in."""
    search = config.get('search', {}) or {}
    workers = int(search.get('workers', 1))
    batch_size = int(search.get('batch_size', 1 << 16))
    if workers < 1:
        raise ValueError(f"search.workers must be at least 1, got {workers}")
    if batch_size < 1:
        raise ValueError(f"search.batch_size must be at least 1, got {batch_size}")
    return {'workers': workers, 'batch_size': batch_size}
