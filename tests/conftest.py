"""Shared test fixtures for Tripwiser."""

import os
import sys
from pathlib import Path

import pytest
from dotenv import load_dotenv

# Load .env file for test configuration
load_dotenv()

# Unset AWS_PROFILE for local testing (DynamoDB Local doesn't need it)
if "AWS_PROFILE" in os.environ:
    del os.environ["AWS_PROFILE"]

# Add src directory to Python path for imports
src_path = Path(__file__).parent.parent / "src"
sys.path.insert(0, str(src_path))


# DynamoDB fixtures
@pytest.fixture
def dynamodb_client():
    """Provide a DynamoDB client pointed at DynamoDB Local."""
    import boto3
    from tripwiser.config import get_config

    config = get_config()

    return boto3.client(
        "dynamodb",
        endpoint_url=config.dynamodb_endpoint or "http://localhost:8000",
        region_name=config.aws_region,
        aws_access_key_id="dummy",
        aws_secret_access_key="dummy",
    )


def _clear_table(dynamodb_client, table_name: str, range_key: str) -> None:
    response = dynamodb_client.scan(TableName=table_name)
    for item in response.get("Items", []):
        dynamodb_client.delete_item(
            TableName=table_name,
            Key={"userId": item["userId"], range_key: item[range_key]},
        )


@pytest.fixture
def groups_table(dynamodb_client):
    """Provide the Splitly groups table name, emptied after the test."""
    from tripwiser.config import get_config

    table_name = get_config().groups_table
    yield table_name

    _clear_table(dynamodb_client, table_name, "groupId")


@pytest.fixture
def trips_table(dynamodb_client):
    """Provide the trips table name, emptied after the test."""
    from tripwiser.config import get_config

    table_name = get_config().trips_table
    yield table_name

    _clear_table(dynamodb_client, table_name, "tripId")
