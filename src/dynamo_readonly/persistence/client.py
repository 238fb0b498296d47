"""Store client handle: the one boto3 DynamoDB resource shared by every call."""

from __future__ import annotations

import logging
from typing import Any

import boto3
from botocore.config import Config

from dynamo_readonly.core.config import AppSettings

logger = logging.getLogger(__name__)


def create_dynamodb_resource(settings: AppSettings) -> Any:
    """Build the DynamoDB resource from settings.

    Called once at startup; the result is passed to every component that
    needs it and is never rebuilt for the life of the process.
    """
    aws = settings.aws
    server = settings.server
    kwargs: dict = {
        "region_name": aws.region,
        "aws_access_key_id": aws.access_key_id,
        "aws_secret_access_key": aws.secret_access_key.get_secret_value(),
        "config": Config(
            connect_timeout=server.connect_timeout,
            read_timeout=server.read_timeout,
            retries={"max_attempts": server.max_attempts, "mode": "standard"},
        ),
    }
    if server.endpoint_url:
        kwargs["endpoint_url"] = server.endpoint_url

    logger.info(
        "DynamoDB client configured: region=%s endpoint=%s access_key=%s secret_key=%s",
        aws.region,
        server.endpoint_url or "default",
        "set" if aws.access_key_id else "not set",
        "set" if aws.secret_access_key.get_secret_value() else "not set",
    )
    return boto3.resource("dynamodb", **kwargs)
