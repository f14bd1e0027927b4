"""DynamoDB access for booking form storage.

Table names are ``<prefix>-<table>``. The prefix defaults to
``booking-form-<environment>`` and can be overridden with
DYNAMODB_TABLE_PREFIX (tests use this to point at moto tables).
"""

import os
from typing import Any

import boto3
from botocore.exceptions import ClientError

from booking_form.utils.logging import get_logger

logger = get_logger(__name__)

# Module-level singleton for connection reuse
_dynamodb_service_instance: "DynamoDBService | None" = None


def get_dynamodb_service(environment: str | None = None) -> "DynamoDBService":
    """Shared DynamoDBService; environment only matters on the first call."""
    global _dynamodb_service_instance
    if _dynamodb_service_instance is None:
        _dynamodb_service_instance = DynamoDBService(environment)
    return _dynamodb_service_instance


def reset_dynamodb_service() -> None:
    """Drop the shared instance so the next call builds a fresh one (tests)."""
    global _dynamodb_service_instance
    _dynamodb_service_instance = None


class DynamoDBService:
    """Key-value item access on prefixed DynamoDB tables."""

    def __init__(self, environment: str | None = None, region_name: str | None = None) -> None:
        self.environment = environment or os.getenv("ENVIRONMENT", "dev")
        self.name_prefix = os.getenv("DYNAMODB_TABLE_PREFIX") or f"booking-form-{self.environment}"
        self._resource = boto3.resource("dynamodb", region_name=region_name)
        self._tables: dict[str, Any] = {}

    def table_name(self, table: str) -> str:
        return f"{self.name_prefix}-{table}"

    def table(self, table: str) -> Any:
        """boto3 Table for a short table name, cached per service."""
        if table not in self._tables:
            self._tables[table] = self._resource.Table(self.table_name(table))
        return self._tables[table]

    def get_item(self, table: str, key: dict[str, Any]) -> dict[str, Any] | None:
        """Fetch one item by primary key, or None when absent."""
        item: dict[str, Any] | None = self.table(table).get_item(Key=key).get("Item")
        return item

    def put_item(self, table: str, item: dict[str, Any]) -> None:
        """Write an item, replacing any item with the same key."""
        self.table(table).put_item(Item=item)

    def delete_item(self, table: str, key: dict[str, Any]) -> bool:
        """Delete an item by key.

        Returns:
            True if an item was removed, False if there was none
        """
        response = self.table(table).delete_item(Key=key, ReturnValues="ALL_OLD")
        return bool(response.get("Attributes"))

    def ensure_table(
        self,
        table: str,
        key_attribute: str,
        ttl_attribute: str | None = None,
    ) -> bool:
        """Create a single-key, on-demand table if it does not exist yet.

        Used for local development and tests; deployed tables come from
        infrastructure code.

        Returns:
            True if the table was created
        """
        name = self.table_name(table)
        client = self._resource.meta.client

        try:
            client.describe_table(TableName=name)
            return False
        except ClientError as e:
            if e.response["Error"]["Code"] != "ResourceNotFoundException":
                raise

        client.create_table(
            TableName=name,
            KeySchema=[{"AttributeName": key_attribute, "KeyType": "HASH"}],
            AttributeDefinitions=[{"AttributeName": key_attribute, "AttributeType": "S"}],
            BillingMode="PAY_PER_REQUEST",
        )
        client.get_waiter("table_exists").wait(TableName=name)

        if ttl_attribute:
            client.update_time_to_live(
                TableName=name,
                TimeToLiveSpecification={"AttributeName": ttl_attribute, "Enabled": True},
            )

        logger.info("Created DynamoDB table %s", name)
        return True
