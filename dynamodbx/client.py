from __future__ import annotations

from functools import lru_cache

import boto3
from botocore.config import Config

from .settings import settings


@lru_cache(maxsize=1)
def botocore_config() -> Config:
    # Transport-level retries stay with botocore (adaptive is best-effort); the
    # batcher only resubmits items DynamoDB reports back as unprocessed.
    return Config(
        retries={"max_attempts": settings.ddb_max_attempts, "mode": "adaptive"},
        connect_timeout=settings.ddb_connect_timeout_s,
        read_timeout=settings.ddb_read_timeout_s,
    )


@lru_cache(maxsize=1)
def dynamodb_client():
    return boto3.client(
        "dynamodb",
        region_name=settings.aws_region,
        endpoint_url=settings.ddb_endpoint_url or None,
        config=botocore_config(),
    )
