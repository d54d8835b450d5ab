"""
Configuration Management

Loads engine configuration from a YAML file and environment variables.
"""

import os
from pathlib import Path
from typing import Any, Callable, Dict, Optional, Tuple, Union
from dotenv import load_dotenv

from .utils.file_utils import load_config as load_yaml_config
from .utils.logging_utils import get_logger

logger = get_logger(__name__)

PROJECT_ROOT = Path(__file__).parent.parent
DEFAULT_CONFIG_FILE = PROJECT_ROOT / 'config' / 'engine_config.yaml'

# Environment variable -> (config key, parser)
ENV_OVERRIDES: Dict[str, Tuple[str, Callable[[str], Any]]] = {
    'INSIGHT_LOG_LEVEL': ('logging.level', str),
    'INSIGHT_TYPE_THRESHOLD': ('type_inference.type_threshold', float),
    'INSIGHT_MAX_AGGREGATIONS': ('aggregation.max_aggregations', int),
    'INSIGHT_MAX_SCATTER_POINTS': ('correlation.max_scatter_points', int),
    'INSIGHT_MAX_CONTEXT_ROWS': ('context.max_context_rows', int),
    'INSIGHT_SUMMARY_MAX_CHARS': ('summary_text.max_chars', int),
}


class Config:
    """
    Engine configuration manager.

    Loads configuration from:
    1. YAML file (config/engine_config.yaml)
    2. Environment variables (.env)

    Sections map onto component configs: 'type_inference', 'statistics',
    'correlation', 'aggregation', 'relevance', 'summary_text', 'context',
    'widgets', 'logging'. Anything not set falls back to the component defaults.

    Example:
        >>> config = Config()
        >>> config.get('aggregation.max_aggregations')
        30
    """

    def __init__(self, config_file: Optional[Union[str, Path]] = None):
        """
        Initialize configuration.

        Args:
            config_file: Path to YAML config file (optional)

        Raises:
            FileNotFoundError: If an explicitly given config file doesn't exist
        """
        env_path = PROJECT_ROOT / '.env'
        if env_path.exists():
            load_dotenv(env_path)
            logger.info(f"Loaded environment variables from: {env_path}")

        self.config: Dict[str, Any] = {}
        if config_file is not None:
            self.config = load_yaml_config(config_file)
        elif DEFAULT_CONFIG_FILE.exists():
            self.config = load_yaml_config(DEFAULT_CONFIG_FILE)
        else:
            logger.warning(f"Config file not found: {DEFAULT_CONFIG_FILE}; using defaults")

        self._apply_env_overrides()

    def _apply_env_overrides(self):
        """Apply environment variable overrides to config."""
        for env_name, (key, parser) in ENV_OVERRIDES.items():
            raw = os.getenv(env_name)
            if raw is None or raw == '':
                continue
            try:
                self.set(key, parser(raw))
            except ValueError:
                logger.warning(f"Ignoring {env_name}={raw!r}: expected {parser.__name__}")

    def get(self, key: str, default: Any = None) -> Any:
        """
        Get a configuration value using dot notation.

        Args:
            key: Config key (e.g., 'correlation.max_scatter_points')
            default: Default value if key not found

        Returns:
            Configuration value
        """
        value = self.config

        for k in key.split('.'):
            if isinstance(value, dict) and k in value:
                value = value[k]
            else:
                return default

        return value

    def set(self, key: str, value: Any):
        """
        Set a configuration value using dot notation.

        Args:
            key: Config key (e.g., 'aggregation.max_aggregations')
            value: Value to set
        """
        keys = key.split('.')
        config = self.config

        for k in keys[:-1]:
            if not isinstance(config.get(k), dict):
                config[k] = {}
            config = config[k]

        config[keys[-1]] = value

    def get_stage_config(self, stage: str) -> Dict[str, Any]:
        """
        Get configuration for one component.

        Args:
            stage: Section name (e.g. 'aggregation')

        Returns:
            Copy of the section dictionary (empty if absent)
        """
        return dict(self.config.get(stage) or {})

    def to_dict(self) -> Dict[str, Any]:
        """Get the full configuration as a dictionary."""
        return self.config.copy()


# Global config instance
_global_config = None


def get_config(config_file: Optional[Union[str, Path]] = None) -> Config:
    """
    Get or create the global configuration instance.

    Args:
        config_file: Path to config file (only used on first call)

    Returns:
        Config instance
    """
    global _global_config

    if _global_config is None:
        _global_config = Config(config_file)

    return _global_config


def reset_config():
    """Drop the global configuration so the next get_config() reloads it."""
    global _global_config
    _global_config = None
