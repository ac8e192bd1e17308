"""Configuration management using Pydantic Settings."""

import logging
from functools import lru_cache
from pathlib import Path

import yaml
from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

logger = logging.getLogger(__name__)


class SettlementConfig(BaseModel):
    """Settlement and recovery parameters."""

    default_outcome_labels: list[str] = Field(
        default_factory=lambda: ["win", "lose", "draw", "penalty"]
    )
    resettle_interval_seconds: float = 300.0
    resettle_max_retries: int = 5
    resettle_retry_delay_seconds: int = 300


class PayoutConfig(BaseModel):
    """Async payout worker parameters."""

    queue: str = "payouts"
    max_retries: int = 5
    retry_delay_seconds: int = 60


class Settings(BaseSettings):
    """Main configuration class."""

    environment: str = "development"
    log_level: str = "INFO"
    config_path: Path = Path("config.yaml")

    # Storage and messaging
    database_url: str = "sqlite:///wagerline.db"
    redis_url: str = "redis://localhost:6379/0"
    celery_broker_url: str = "redis://localhost:6379/1"
    celery_result_backend: str = "redis://localhost:6379/2"

    # Observability
    logfire_token: str = ""

    # Nested configuration sections
    settlement: SettlementConfig = Field(default_factory=SettlementConfig)
    payouts: PayoutConfig = Field(default_factory=PayoutConfig)

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_nested_delimiter="__",
        case_sensitive=False,
        extra="ignore",
    )

    @property
    def is_production(self) -> bool:
        """Check if running in production mode."""
        return self.environment.lower() == "production"

    def load_yaml_config(self) -> None:
        """Merge the optional YAML overlay into the nested sections."""
        config_path = self.config_path

        if not config_path.exists():
            logger.debug(f"Config file not found: {config_path}. Using defaults.")
            return

        try:
            with open(config_path, "r", encoding="utf-8") as f:
                yaml_config = yaml.safe_load(f)

            if not yaml_config:
                logger.warning(f"Empty config file: {config_path}")
                return

            for section_name in ["settlement", "payouts"]:
                if section_name in yaml_config:
                    section = getattr(self, section_name)
                    section_dict = section.model_dump()
                    section_dict.update(yaml_config[section_name])
                    setattr(self, section_name, section.__class__(**section_dict))

            logger.info(f"Loaded configuration from {config_path}")

        except yaml.YAMLError as e:
            logger.error(f"Failed to parse YAML config: {e}")
            raise


@lru_cache()
def get_settings() -> Settings:
    """Get singleton Settings instance."""
    settings = Settings()
    settings.load_yaml_config()
    return settings
