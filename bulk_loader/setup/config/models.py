"""
Pydantic configuration models with validation.

Configuration Architecture:
==========================

DatabaseConfig: Row sink connection settings (driver, host, credentials)
DataSourceConfig: Delimited input file settings (path, delimiter, encoding)
LoadingConfig: Worker pool, channel, retry and connection-cap settings
AppConfig: Top-level application configuration (combines the three above)
"""

from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, Field, field_validator, model_validator


class Environment(str, Enum):
    """Application environment enumeration."""
    DEVELOPMENT = "development"
    PRODUCTION = "production"
    TESTING = "testing"


class DatabaseConfig(BaseModel):
    """Database connection configuration with validation."""

    driver: str = Field(default="postgresql", description="SQLAlchemy dialect+driver")
    host: str = Field(default="localhost", description="Database host")
    port: int = Field(default=5432, ge=1, le=65535, description="Database port")
    user: str = Field(default="postgres", description="Database username")
    password: str = Field(default="postgres", description="Database password")
    database_name: str = Field(default="test", description="Database name")

    @field_validator('host')
    @classmethod
    def validate_host(cls, v):
        if not v.strip():
            raise ValueError('Host cannot be empty')
        return v.strip()

    @field_validator('driver')
    @classmethod
    def validate_driver(cls, v):
        if not v.strip():
            raise ValueError('Driver cannot be empty')
        return v.strip()

    def get_connection_string(self, db_name: Optional[str] = None) -> str:
        """Get SQLAlchemy connection string."""
        if self.driver.startswith("sqlite"):
            return f"{self.driver}:///{db_name or self.database_name}"
        target_db = db_name or self.database_name
        return f"{self.driver}://{self.user}:{self.password}@{self.host}:{self.port}/{target_db}"


class DataSourceConfig(BaseModel):
    """Delimited input file configuration."""

    file_path: str = Field(
        default="majestic_million.csv",
        description="Path of the delimited file to load"
    )
    delimiter: str = Field(
        default=",",
        description="Field delimiter"
    )
    encoding: str = Field(
        default="utf-8",
        description="Text encoding of the input file"
    )

    @field_validator('delimiter')
    @classmethod
    def validate_delimiter(cls, v):
        if len(v) != 1:
            raise ValueError('Delimiter must be a single character')
        return v

    @field_validator('file_path')
    @classmethod
    def validate_file_path(cls, v):
        if not v.strip():
            raise ValueError('File path cannot be empty')
        return v


class LoadingConfig(BaseModel):
    """Worker pool and insert retry configuration."""

    table_name: str = Field(
        default="domain",
        description="Target table for every insert"
    )
    columns: Optional[List[str]] = Field(
        default=None,
        description="Target column order; defaults to the file header"
    )
    workers: int = Field(
        default=100,
        ge=1,
        le=1024,
        description="Number of concurrent insert workers"
    )
    queue_size: int = Field(
        default=100,
        ge=1,
        le=1_000_000,
        description="Capacity of the job channel between reader and workers"
    )
    retry_delay_seconds: float = Field(
        default=1.0,
        ge=0.0,
        le=3600.0,
        description="Fixed wait between failed insert attempts"
    )
    progress_interval: int = Field(
        default=100,
        ge=1,
        description="Log progress every N rows inserted by a worker"
    )
    max_open_connections: int = Field(
        default=100,
        ge=1,
        le=10_000,
        description="Hard cap on concurrently open sink connections"
    )
    max_idle_connections: int = Field(
        default=4,
        ge=1,
        le=10_000,
        description="Connections kept open in the pool while idle"
    )
    pool_timeout_seconds: float = Field(
        default=30.0,
        gt=0.0,
        description="Wait for a free connection before the attempt fails"
    )

    @field_validator('table_name')
    @classmethod
    def validate_table_name(cls, v):
        if not v.strip():
            raise ValueError('Table name cannot be empty')
        return v.strip()

    @field_validator('columns')
    @classmethod
    def validate_columns(cls, v):
        if v is None:
            return v
        cleaned = [c.strip() for c in v if c.strip()]
        if not cleaned:
            return None
        if len(set(cleaned)) != len(cleaned):
            raise ValueError('Columns must be unique')
        return cleaned

    @model_validator(mode='after')
    def validate_connection_caps(self):
        if self.max_idle_connections > self.max_open_connections:
            raise ValueError('Idle connections cannot exceed max open connections')
        return self


class AppConfig(BaseModel):
    """Top-level application configuration."""

    environment: Environment = Field(default=Environment.DEVELOPMENT)
    database: DatabaseConfig = Field(default_factory=DatabaseConfig)
    source: DataSourceConfig = Field(default_factory=DataSourceConfig)
    loading: LoadingConfig = Field(default_factory=LoadingConfig)
