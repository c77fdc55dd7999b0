"""
Configuration management using environment variables.
Handles service-wide settings (storage, logging, tokens, jobs) with validation and defaults.
"""

from typing import Optional
from pydantic import Field, validator
from pydantic_settings import BaseSettings
from pathlib import Path

# Digest size in bytes of each supported HMAC algorithm
MIN_SECRET_LENGTHS = {'HS256': 32, 'HS384': 48, 'HS512': 64}


class ServiceConfig(BaseSettings):
    """
    Configuration class for the books service.
    Uses pydantic BaseSettings for environment variable management.
    """

    # MongoDB Configuration
    mongodb_url: str = Field(default="mongodb://localhost:27017", env="MONGODB_URL")
    mongodb_database: str = Field(default="books_api", env="MONGODB_DATABASE")

    # Logging Configuration
    log_level: str = Field(default="INFO", env="LOG_LEVEL")
    log_format: str = Field(default="json", env="LOG_FORMAT")
    log_file: Optional[str] = Field(default=None, env="LOG_FILE")

    # Token Signing
    token_secret: str = Field(default="change-me-books-api-signing-secret", env="TOKEN_SECRET")
    token_algorithm: str = Field(default="HS256", env="TOKEN_ALGORITHM")

    # Background Jobs
    max_pending_jobs: int = Field(default=100, env="MAX_PENDING_JOBS")
    sku_index_url: Optional[str] = Field(default=None, env="SKU_INDEX_URL")
    sku_index_timeout: float = Field(default=10.0, env="SKU_INDEX_TIMEOUT")

    # Development/Testing
    debug: bool = Field(default=False, env="DEBUG")

    @validator('log_level')
    def validate_log_level(cls, v):
        """Ensure log level is valid."""
        valid_levels = ['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL']
        if v.upper() not in valid_levels:
            raise ValueError(f'log_level must be one of: {valid_levels}')
        return v.upper()

    @validator('log_format')
    def validate_log_format(cls, v):
        """Ensure log format is valid."""
        valid_formats = ['json', 'console']
        if v.lower() not in valid_formats:
            raise ValueError(f'log_format must be one of: {valid_formats}')
        return v.lower()

    @validator('token_algorithm')
    def validate_token_algorithm(cls, v, values):
        """
        Only shared-secret HMAC algorithms make sense with a static secret.
        The secret must be at least as long as the algorithm's digest.
        """
        algorithm = v.upper()
        if algorithm not in MIN_SECRET_LENGTHS:
            raise ValueError(f'token_algorithm must be one of: {list(MIN_SECRET_LENGTHS)}')

        # token_secret is missing here when it failed its own validation
        secret = values.get('token_secret')
        min_length = MIN_SECRET_LENGTHS[algorithm]
        if secret is not None and len(secret.encode('utf-8')) < min_length:
            raise ValueError(f'token_secret must be at least {min_length} bytes for {algorithm}')
        return algorithm

    @validator('token_secret')
    def validate_token_secret(cls, v):
        """Ensure the signing secret is not empty."""
        if not v or not v.strip():
            raise ValueError('token_secret must not be empty')
        return v

    @validator('max_pending_jobs')
    def validate_max_pending_jobs(cls, v):
        """Ensure the job queue bound is reasonable."""
        if v < 1 or v > 1000:
            raise ValueError('max_pending_jobs must be between 1 and 1000')
        return v

    @validator('sku_index_timeout')
    def validate_sku_index_timeout(cls, v):
        """Ensure timeout is reasonable."""
        if v <= 0 or v > 300:
            raise ValueError('sku_index_timeout must be between 0 and 300 seconds')
        return v

    class Config:
        """Pydantic configuration."""
        env_file = ".env"
        env_file_encoding = "utf-8"
        case_sensitive = False
        extra = "ignore"  # Ignore extra fields from .env

    def get_log_file_path(self) -> Optional[Path]:
        """Get log file path as Path object."""
        if self.log_file:
            return Path(self.log_file)
        return None


# Global configuration instance
config = ServiceConfig()
