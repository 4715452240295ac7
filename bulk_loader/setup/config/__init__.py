"""
Pydantic configuration for the bulk loader.
"""

from .models import (
    Environment,
    DatabaseConfig,
    DataSourceConfig,
    LoadingConfig,
    AppConfig,
)
from .loader import ConfigLoader, load_config


def get_config(env_file=None, file_path=None, table_name=None, workers=None):
    """
    Load the application configuration.

    Args:
        env_file: Optional .env file to read before the process environment
        file_path: Input file override
        table_name: Target table override
        workers: Worker pool size override

    Returns:
        AppConfig: Fully configured application settings
    """
    return load_config(
        env_file=env_file,
        file_path=file_path,
        table_name=table_name,
        workers=workers,
    )


__all__ = [
    "Environment",
    "DatabaseConfig",
    "DataSourceConfig",
    "LoadingConfig",
    "AppConfig",
    "ConfigLoader",
    "load_config",
    "get_config",
]
