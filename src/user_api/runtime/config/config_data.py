"""Pydantic models for parsing the config.yaml configuration file.

This module contains Pydantic models that correspond to the structure of config.yaml.
These models handle validation and type conversion of the YAML configuration data.
"""

from __future__ import annotations

import os
from typing import Literal

from loguru import logger
from pydantic import BaseModel, Field


class CORSConfig(BaseModel):
    """CORS configuration for the application."""

    origins: list[str] = Field(default=["*"])
    allow_credentials: bool = False
    allow_methods: list[str] = Field(
        default=["GET", "POST", "PUT", "DELETE", "OPTIONS"]
    )
    allow_headers: list[str] = Field(default=["*"])


class LoggingConfig(BaseModel):
    """Logging configuration model."""

    level: str = Field(default="INFO", description="Logging level")
    format: Literal["json", "plain"] = Field(default="json", description="Log format")
    file: str | None = Field(default=None, description="Log file path")
    max_size_mb: int = Field(default=10, description="Maximum log file size in MB")
    backup_count: int = Field(
        default=5, description="Number of backup log files to keep"
    )


class MongoConfig(BaseModel):
    """MongoDB connection and collection configuration."""

    url: str = Field(
        default="mongodb://localhost:27017",
        description="MongoDB connection string",
    )
    database: str = Field(default="user_api", description="Database name")
    collection: str = Field(default="users", description="User collection name")
    app_name: str = Field(
        default="user-api", description="Application name reported to the server"
    )
    server_selection_timeout_ms: int = Field(
        default=5000, description="How long to wait for a reachable server"
    )
    max_pool_size: int = Field(default=100, description="Connection pool size")
    create_indexes: bool = Field(
        default=True, description="Ensure collection indexes on startup"
    )
    username: str | None = Field(
        default=None, description="Username when credentials are not in the URL"
    )
    password_env_var: str | None = Field(
        default=None,
        description="Environment variable name containing the database password",
    )
    password_file: str | None = Field(
        default=None,
        description="Path to file containing the database password",
    )

    @property
    def password(self) -> str | None:
        """Resolve the password from the mounted secret file or environment variable.

        Returns None when neither source is configured; credentials embedded in
        ``url`` are then used as-is by the driver.
        """
        if self.password_file:
            try:
                with open(self.password_file) as f:
                    return f.read().strip()
            except OSError as e:
                raise ValueError("Failed to read database password from file.") from e
        if self.password_env_var:
            password = os.getenv(self.password_env_var)
            if password:
                return password
            raise ValueError(f"Environment variable {self.password_env_var} not set")
        return None

    def client_kwargs(self) -> dict:
        """Keyword arguments passed to ``pymongo.MongoClient`` alongside the URL."""
        kwargs: dict = {
            "serverSelectionTimeoutMS": self.server_selection_timeout_ms,
            "maxPoolSize": self.max_pool_size,
            "appname": self.app_name,
        }
        password = self.password
        if password is not None:
            if "@" in self.url:
                logger.warning(
                    "MongoDB URL already contains credentials; "
                    "the configured password takes precedence."
                )
            if self.username is not None:
                kwargs["username"] = self.username
            kwargs["password"] = password
        return kwargs


class PaginationConfig(BaseModel):
    """Page window limits applied at the HTTP boundary."""

    default_page_size: int = Field(
        default=10, ge=1, description="Page size used when the requested one is out of range"
    )
    max_page_size: int = Field(default=100, ge=1, description="Largest allowed page size")


class AppConfig(BaseModel):
    """Application configuration model."""

    environment: Literal["development", "production", "test"] = Field(
        default="development", description="Application environment"
    )
    host: str = Field(default="localhost", description="Application host")
    port: int = Field(default=8000, description="Application port")
    docs_enabled: bool = Field(
        default=True, description="Serve the OpenAPI docs outside production"
    )
    cors: CORSConfig = Field(
        default_factory=CORSConfig, description="CORS configuration"
    )

    @property
    def base_url(self) -> str:
        """Construct the base URL from host and port."""
        scheme = "https" if self.environment == "production" else "http"
        return f"{scheme}://{self.host}:{self.port}"


class ConfigData(BaseModel):
    """Root configuration model that matches the config.yaml structure."""

    logging: LoggingConfig = Field(
        default_factory=LoggingConfig, description="Logging configuration"
    )
    mongo: MongoConfig = Field(
        default_factory=MongoConfig, description="MongoDB configuration"
    )
    pagination: PaginationConfig = Field(
        default_factory=PaginationConfig, description="Pagination limits"
    )
    app: AppConfig = Field(
        default_factory=AppConfig, description="Application configuration"
    )
