"""DynamoDB persistence: the shared client handle and the table reader."""

from __future__ import annotations

from dynamo_readonly.core.config import AppSettings, load_settings
from dynamo_readonly.persistence.client import create_dynamodb_resource
from dynamo_readonly.persistence.dynamodb_backend import DynamoDBTableReader


def create_persistence(settings: AppSettings | None = None) -> DynamoDBTableReader:
    """Create the table reader wired to a freshly built client handle."""
    if settings is None:
        settings = load_settings()

    resource = create_dynamodb_resource(settings)
    return DynamoDBTableReader(resource, max_pages=settings.server.max_pages)
