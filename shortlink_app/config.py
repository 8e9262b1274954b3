from pydantic_settings import BaseSettings, SettingsConfigDict
from typing import Optional


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.
    
    Loading priority (highest to lowest):
    1. Environment variables
    2. .env file
    3. Default values below
    """
    
    # Environment
    environment: str = "development"
    debug: bool = False
    
    # Application
    app_name: str = "URL Shortener"
    app_version: str = "1.0.0"
    
    # Server
    host: str = "127.0.0.1"
    port: int = 8000
    
    # Public base for short links, e.g. "https://sho.rt".
    # When unset, scheme and host are taken from the incoming request.
    base_url: Optional[str] = None
    
    # Store settings
    store_backend: str = "memory"  # Options: "memory", "sql", "redis"
    database_url: str = "sqlite:///./shortlinks.db"
    redis_url: str = "redis://localhost:6379/0"
    redis_key_prefix: str = "shortlink"
    lock_shards: int = 64  # Lock map size for the in-memory store
    
    # Short code generation strategy
    short_code_strategy: str = "hashed_uuid"  # Options: "hashed_uuid", "random"
    short_code_length: int = 8  # Used by the "random" strategy
    max_retries: int = 5  # Regenerate-and-retry attempts on collision
    
    # Logging
    log_level: str = "INFO"
    log_json: bool = False
    
    # Pydantic v2 configuration
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore"
    )


# Create settings instance
settings = Settings()
