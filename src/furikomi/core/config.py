"""Application configuration using pydantic-settings with grouped env prefixes."""

from __future__ import annotations

from typing import Literal

from pydantic_settings import BaseSettings


class ReferenceDataConfig(BaseSettings):
    """Where the bank/branch reference tables are read from."""

    model_config = {"env_prefix": "FURIKOMI_REFERENCE_"}

    source: Literal["local", "s3"] = "local"
    base_path: str = "./data"  # used when source == "local"
    banks_file: str = "banks.json"
    branches_dir: str = "branches"


class S3Config(BaseSettings):
    """S3 reference-data storage configuration."""

    model_config = {"env_prefix": "FURIKOMI_S3_"}

    bucket: str = "furikomi-reference-data"
    prefix: str = ""
    region: str = "ap-northeast-1"
    endpoint_url: str | None = None  # LocalStack override


class RedisConfig(BaseSettings):
    """Shared reference-data cache configuration."""

    model_config = {"env_prefix": "FURIKOMI_REDIS_"}

    enabled: bool = False
    host: str = "localhost"
    port: int = 6379
    db: int = 0
    ttl: int = 3600


class APIConfig(BaseSettings):
    """HTTP surface configuration."""

    model_config = {"env_prefix": "FURIKOMI_API_"}

    cors_allow_origins: list[str] = []
    reference_error_status: int = 400


class AppSettings(BaseSettings):
    """Root application settings aggregating all sub-configs."""

    model_config = {"env_prefix": "FURIKOMI_"}

    environment: Literal["dev", "uat", "prod"] = "dev"
    log_level: str = "INFO"
    timezone: str = "Asia/Tokyo"

    reference: ReferenceDataConfig = ReferenceDataConfig()
    s3: S3Config = S3Config()
    redis: RedisConfig = RedisConfig()
    api: APIConfig = APIConfig()
