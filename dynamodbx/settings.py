from __future__ import annotations

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


# DynamoDB rejects BatchWriteItem calls carrying more than 25 write requests.
MAX_BATCH_WRITE_ITEMS = 25


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=None, extra="ignore")

    # AWS / client
    aws_region: str = Field(default="us-east-1", validation_alias="AWS_REGION")
    # Point at DynamoDB Local (eg http://localhost:8000) for development and tests.
    ddb_endpoint_url: str | None = Field(default=None, validation_alias="DDB_ENDPOINT_URL")
    ddb_max_attempts: int = Field(default=10, ge=1, validation_alias="DDB_MAX_ATTEMPTS")
    ddb_connect_timeout_s: float = Field(default=2, gt=0, validation_alias="DDB_CONNECT_TIMEOUT_S")
    ddb_read_timeout_s: float = Field(default=10, gt=0, validation_alias="DDB_READ_TIMEOUT_S")

    # Batch writes
    batch_write_max_items: int = Field(
        default=MAX_BATCH_WRITE_ITEMS,
        ge=1,
        le=MAX_BATCH_WRITE_ITEMS,
        validation_alias="DDB_BATCH_WRITE_MAX_ITEMS",
    )

    # Table creation
    create_table_poll_interval_s: float = Field(
        default=0.1, gt=0, validation_alias="DDB_CREATE_TABLE_POLL_INTERVAL_S"
    )

    # Observability
    log_level: str = Field(default="INFO", validation_alias="LOG_LEVEL")

    def to_log_safe_dict(self) -> dict[str, object]:
        """
        A representation safe for structured logs / diagnostics.
        """
        return {
            "aws": {
                "aws_region": self.aws_region,
                "ddb_endpoint_url": self.ddb_endpoint_url,
                "ddb_max_attempts": self.ddb_max_attempts,
                "ddb_connect_timeout_s": self.ddb_connect_timeout_s,
                "ddb_read_timeout_s": self.ddb_read_timeout_s,
            },
            "batch_write_max_items": self.batch_write_max_items,
            "create_table_poll_interval_s": self.create_table_poll_interval_s,
            "log_level": self.log_level,
        }


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()


# Module-level singleton.
settings = get_settings()
