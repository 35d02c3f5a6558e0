"""Configuration management for the short-link registry."""

from typing import Literal, Optional
from pydantic_settings import BaseSettings
from pydantic import Field


class Config(BaseSettings):
    """Application configuration."""
    
    # Storage settings
    store_backend: Literal["memory", "file", "redis"] = Field(
        default="file",
        description="Where link records are persisted: memory, file or redis"
    )
    
    store_path: str = Field(
        default="short_links.json",
        description="JSON document used by the file backend"
    )
    
    redis_url: Optional[str] = Field(
        default=None,
        description="Redis connection URL (required for the redis backend)"
    )
    
    links_key: str = Field(
        default="__short_links__",
        description="Namespace key holding the link collection"
    )
    
    events_key: str = Field(
        default="__logs__",
        description="Namespace key holding the stored event log"
    )
    
    store_events: bool = Field(
        default=True,
        description="Append registry events to the backend under events_key"
    )
    
    # Short link settings
    base_url: str = Field(
        default="http://localhost:3000",
        description="Base URL for displaying short URLs"
    )
    
    short_code_length: int = Field(
        default=6,
        ge=1,
        description="Length of generated short codes"
    )
    
    default_validity_minutes: int = Field(
        default=30,
        ge=1,
        description="Validity applied when a request gives none"
    )
    
    max_collision_retries: int = Field(
        default=10,
        ge=1,
        description="Random codes tried per link before giving up"
    )
    
    max_batch_size: int = Field(
        default=5,
        ge=1,
        description="Maximum number of URLs shortened in one batch"
    )
    
    # Logging settings
    log_level: str = Field(
        default="WARNING",
        description="Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)"
    )
    
    log_file: Optional[str] = Field(
        default=None,
        description="Log file path (logs to stderr if not specified)"
    )
    
    log_json: bool = Field(
        default=False,
        description="Use JSON format for logs"
    )
    
    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "env_prefix": "SHORTLINKS_",
        "case_sensitive": False,
        "extra": "ignore",  # Ignore extra environment variables
    }


def load_config(**overrides) -> Config:
    """Load configuration from environment."""
    return Config(**overrides)
