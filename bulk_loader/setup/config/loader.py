"""
Configuration loader with environment variable mapping.
"""

import logging
import os
from typing import List, Optional

from dotenv import load_dotenv
from pydantic import ValidationError

from ...core.exceptions import ConfigurationError
from .models import AppConfig, DatabaseConfig, DataSourceConfig, Environment, LoadingConfig

logger = logging.getLogger(__name__)


class ConfigLoader:
    """Configuration loader with environment variable mapping and validation."""

    def __init__(self, env_file: Optional[str] = None):
        """
        Initialize configuration loader.

        Args:
            env_file: Path to .env file (defaults to .env in current directory)
        """
        self.env_file = env_file or ".env"
        self._loaded_config: Optional[AppConfig] = None

    def load_configuration(self, **overrides) -> AppConfig:
        """
        Load configuration from environment variables.

        Args:
            **overrides: Loading/source values that take precedence over the
                environment (``file_path``, ``table_name``, ``workers``)

        Returns:
            Validated AppConfig instance

        Raises:
            ConfigurationError: If a value is malformed or fails validation
        """
        self._load_env_file()

        try:
            config = self._load_typed_config(overrides)
        except (ValidationError, ValueError) as e:
            raise ConfigurationError(f"Invalid configuration: {e}") from e

        self._loaded_config = config
        return config

    def get_loaded_config(self) -> Optional[AppConfig]:
        return self._loaded_config

    def _load_env_file(self):
        """Load environment variables from .env file."""
        if os.path.exists(self.env_file):
            load_dotenv(self.env_file, override=False)
            logger.debug(f"Loaded environment variables from {self.env_file}")
        else:
            logger.debug(f"Environment file {self.env_file} not found")

    def _load_typed_config(self, overrides: dict) -> AppConfig:
        env_str = os.getenv("ENVIRONMENT", "development").lower()
        environment = Environment(env_str) if env_str in Environment.__members__.values() else Environment.DEVELOPMENT

        return AppConfig(
            environment=environment,
            database=self._load_database_config("POSTGRES"),
            source=self._load_source_config(overrides),
            loading=self._load_loading_config(overrides),
        )

    def _load_database_config(self, prefix: str) -> DatabaseConfig:
        return DatabaseConfig(
            driver=os.getenv("LOADER_DB_DRIVER", "postgresql"),
            host=os.getenv(f"{prefix}_HOST", "localhost"),
            port=int(os.getenv(f"{prefix}_PORT", "5432")),
            user=os.getenv(f"{prefix}_USER", "postgres"),
            password=os.getenv(f"{prefix}_PASSWORD", "postgres"),
            database_name=os.getenv(f"{prefix}_DBNAME", "test"),
        )

    def _load_source_config(self, overrides: dict) -> DataSourceConfig:
        return DataSourceConfig(
            file_path=_override(overrides, "file_path", os.getenv("LOADER_FILE", "majestic_million.csv")),
            delimiter=os.getenv("ETL_DELIMITER", ","),
            encoding=os.getenv("ETL_ENCODING", "utf-8"),
        )

    def _load_loading_config(self, overrides: dict) -> LoadingConfig:
        workers = overrides.get("workers")
        if workers is None:
            workers = int(os.getenv("LOADER_WORKERS", "100"))
        return LoadingConfig(
            table_name=_override(overrides, "table_name", os.getenv("LOADER_TABLE", "domain")),
            columns=_split_list(os.getenv("LOADER_COLUMNS", "")),
            workers=workers,
            queue_size=int(os.getenv("LOADER_QUEUE_SIZE", "100")),
            retry_delay_seconds=float(os.getenv("LOADER_RETRY_DELAY_SECONDS", "1.0")),
            progress_interval=int(os.getenv("LOADER_PROGRESS_INTERVAL", "100")),
            max_open_connections=int(os.getenv("LOADER_MAX_OPEN_CONNECTIONS", "100")),
            max_idle_connections=int(os.getenv("LOADER_MAX_IDLE_CONNECTIONS", "4")),
            pool_timeout_seconds=float(os.getenv("LOADER_POOL_TIMEOUT_SECONDS", "30")),
        )


def _override(overrides: dict, key: str, default):
    """Override value for ``key`` when one was given, even a falsy one."""
    value = overrides.get(key)
    return default if value is None else value


def _split_list(raw: str) -> Optional[List[str]]:
    items = [item.strip() for item in raw.split(",") if item.strip()]
    return items or None


def load_config(env_file: Optional[str] = None, **overrides) -> AppConfig:
    """Load and validate configuration from the environment."""
    return ConfigLoader(env_file).load_configuration(**overrides)
