"""Configuration manager for loading and validating .dailyphrase.yml"""

import copy
import logging
import os
from pathlib import Path
from typing import Any, Dict, Optional

import yaml
from pydantic import ValidationError

from dailyphrase.domain.config import (
    AppConfig,
    CacheConfig,
    DatabaseConfig,
    LLMConfig,
    RetryConfig,
)

logger = logging.getLogger(__name__)

CONFIG_FILE_NAME = ".dailyphrase.yml"


class ConfigurationError(Exception):
    """Configuration validation error."""

    pass


class ConfigManager:
    """Manages configuration from .dailyphrase.yml and environment variables

    Configuration priority:
    1. Default values
    2. .dailyphrase.yml file (searched from current directory upwards)
    3. Environment variables (DAILYPHRASE_*, DATABASE_URL)
    4. CLI arguments (handled by CLI layer)
    """

    DEFAULT_CONFIG = {
        "llm": {
            "provider": "mock",
            "model": "gemini-2.5-flash",
            "temperature": 1.0,
            "max_tokens": 256,
            "timeout": 30.0,
        },
        "retry": {
            "max_attempts": 5,
            "initial_delay_ms": 1000,
            "max_delay_ms": 10000,
            "backoff_multiplier": 2,
            "jitter_factor": 0.15,
        },
        "database": {
            "url": "sqlite:///dailyphrase.db",
            "echo": False,
        },
        "cache": {
            "duration_hours": 24,
        },
    }

    def __init__(self, config_path: Optional[Path] = None):
        """Initialize config manager

        Args:
            config_path: Path to .dailyphrase.yml (searches from current dir if None)

        Raises:
            ConfigurationError: If configuration validation fails
        """
        if isinstance(config_path, str):
            config_path = Path(config_path)
        self.config_path = config_path or self._find_config_file()
        try:
            self.config: AppConfig = self._load_config()
        except ValidationError as e:
            errors = []
            for error in e.errors():
                field = ".".join(str(x) for x in error["loc"])
                errors.append(f"  - {field}: {error['msg']}")
            raise ConfigurationError(
                "Configuration validation failed:\n" + "\n".join(errors)
            ) from e

    def _find_config_file(self) -> Optional[Path]:
        current = Path.cwd()
        for parent in [current] + list(current.parents):
            config_file = parent / CONFIG_FILE_NAME
            if config_file.exists():
                logger.info(f"Found config file: {config_file}")
                return config_file
        logger.debug(f"No {CONFIG_FILE_NAME} found, using defaults")
        return None

    def _load_config(self) -> AppConfig:
        """Load configuration from file and validate with Pydantic

        Raises:
            ConfigurationError: If the file cannot be read or parsed
            ValidationError: If configuration is invalid
        """
        config_dict = copy.deepcopy(self.DEFAULT_CONFIG)

        if self.config_path and self.config_path.exists():
            try:
                with open(self.config_path, "r", encoding="utf-8") as f:
                    file_config = yaml.safe_load(f) or {}
            except (OSError, yaml.YAMLError) as e:
                raise ConfigurationError(f"Failed to load config from {self.config_path}: {e}") from e
            if not isinstance(file_config, dict):
                raise ConfigurationError(f"Config file {self.config_path} must contain a mapping")
            config_dict = self._merge_config(config_dict, file_config)
            logger.info(f"Loaded configuration from {self.config_path}")

        config_dict = self._apply_env_overrides(config_dict)
        return AppConfig(**config_dict)

    def _merge_config(self, base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
        """Recursively merge configuration dictionaries"""
        result = base.copy()
        for key, value in override.items():
            if key in result and isinstance(result[key], dict) and isinstance(value, dict):
                result[key] = self._merge_config(result[key], value)
            else:
                result[key] = value
        return result

    def _apply_env_overrides(self, config: Dict[str, Any]) -> Dict[str, Any]:
        if os.getenv("DAILYPHRASE_LLM_PROVIDER"):
            config["llm"]["provider"] = os.getenv("DAILYPHRASE_LLM_PROVIDER")

        if os.getenv("DAILYPHRASE_LLM_MODEL"):
            config["llm"]["model"] = os.getenv("DAILYPHRASE_LLM_MODEL")

        if os.getenv("DATABASE_URL"):
            config["database"]["url"] = os.getenv("DATABASE_URL")

        # API keys are handled by providers themselves
        return config

    def get_llm_config(self) -> LLMConfig:
        return self.config.llm

    def get_retry_config(self) -> RetryConfig:
        return self.config.retry

    def get_database_config(self) -> DatabaseConfig:
        return self.config.database

    def get_cache_config(self) -> CacheConfig:
        return self.config.cache
