"""Unit test fixtures: moto-backed DynamoDB seeded with the sample tables."""

from __future__ import annotations

import sys
from pathlib import Path

import boto3
import pytest
from moto import mock_aws

# Make scripts/ importable
sys.path.insert(0, str(Path(__file__).resolve().parent.parent.parent / "scripts"))

from seed_dynamodb import create_tables, seed_sample_data  # noqa: E402

from dynamo_readonly.persistence.dynamodb_backend import DynamoDBTableReader  # noqa: E402
from dynamo_readonly.skills.table_tools import TableTools  # noqa: E402

REGION = "us-east-1"


@pytest.fixture
def ddb():
    with mock_aws():
        yield boto3.resource("dynamodb", region_name=REGION)


@pytest.fixture
def seeded(ddb):
    """Sample ``orders`` (3 customers x 25 orders) and ``customers`` tables."""
    create_tables(ddb)
    seed_sample_data(ddb)
    return ddb


@pytest.fixture
def reader(seeded):
    return DynamoDBTableReader(seeded)


@pytest.fixture
def tools(reader):
    return TableTools(reader)
