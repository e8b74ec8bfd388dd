"""DynamoDB access for Splitly groups and trips.

Documents are keyed by ``userId`` (HASH) and ``groupId``/``tripId`` (RANGE) and
stored as native DynamoDB maps in the camelCase wire shape of the models.
"""

import logging
from decimal import Decimal
from typing import Any

import pydantic
from boto3.dynamodb.types import TypeDeserializer, TypeSerializer
from botocore.exceptions import ClientError

from tripwiser.errors import ConflictError, ErrorCode, NotFoundError, ValidationError
from tripwiser.models import Group, Trip
from tripwiser.services.splits import ensure_member_removable

logger = logging.getLogger(__name__)

_deserializer = TypeDeserializer()
_serializer = TypeSerializer()


def _to_python(value: Any) -> Any:
    """Replace the Decimals DynamoDB returns with floats."""
    if isinstance(value, Decimal):
        return float(value)
    if isinstance(value, dict):
        return {k: _to_python(v) for k, v in value.items()}
    if isinstance(value, list):
        return [_to_python(v) for v in value]
    return value


# Attributes whose contents decide whether a member may be removed.
_MEMBER_GUARD_ATTRIBUTES = ("members", "expenses", "settlements")


def _get_item(dynamo_client: Any, table: str, user_id: str, key_name: str, key_value: str) -> dict[str, Any] | None:
    response = dynamo_client.get_item(
        TableName=table,
        Key={"userId": {"S": user_id}, key_name: {"S": key_value}},
        ConsistentRead=True,
    )
    return response.get("Item")


def _to_document(item: dict[str, Any]) -> dict[str, Any]:
    return {k: _to_python(_deserializer.deserialize(v)) for k, v in item.items()}


def _group_from_item(item: dict[str, Any] | None, user_id: str, group_id: str) -> Group:
    if item is None:
        raise NotFoundError(f"Group '{group_id}' not found for user '{user_id}'", code=ErrorCode.GROUP_NOT_FOUND)

    doc = _to_document(item)
    doc.setdefault("id", group_id)
    try:
        return Group.model_validate(doc)
    except pydantic.ValidationError as e:
        raise ValidationError(f"Group '{group_id}' document is invalid: {e}") from e


def load_group(user_id: str, group_id: str, dynamo_client: Any, groups_table: str) -> Group:
    item = _get_item(dynamo_client, groups_table, user_id, "groupId", group_id)
    return _group_from_item(item, user_id, group_id)


def load_trip(user_id: str, trip_id: str, dynamo_client: Any, trips_table: str) -> Trip:
    item = _get_item(dynamo_client, trips_table, user_id, "tripId", trip_id)
    if item is None:
        raise NotFoundError(f"Trip '{trip_id}' not found for user '{user_id}'", code=ErrorCode.TRIP_NOT_FOUND)

    doc = _to_document(item)
    doc.setdefault("id", trip_id)
    try:
        return Trip.model_validate(doc)
    except pydantic.ValidationError as e:
        raise ValidationError(f"Trip '{trip_id}' document is invalid: {e}") from e


def _unchanged_condition(item: dict[str, Any]) -> tuple[str, dict[str, Any]]:
    """Condition that holds only while the guard attributes still equal their values in ``item``."""
    clauses = ["attribute_exists(groupId)"]
    values = {}
    for name in _MEMBER_GUARD_ATTRIBUTES:
        if name in item:
            clauses.append(f"{name} = :read_{name}")
            values[f":read_{name}"] = item[name]
        else:
            clauses.append(f"attribute_not_exists({name})")
    return " AND ".join(clauses), values


def remove_member(user_id: str, group_id: str, member_id: str, dynamo_client: Any, groups_table: str) -> Group:
    """Remove a member that no expense or settlement refers to.

    The write only succeeds if members, expenses and settlements are unchanged
    since the read, so a reference added concurrently cannot be orphaned.
    """
    item = _get_item(dynamo_client, groups_table, user_id, "groupId", group_id)
    group = _group_from_item(item, user_id, group_id)
    ensure_member_removable(group, member_id)

    remaining = [m for m in group.members if m.id != member_id]
    members_attr = _serializer.serialize([m.model_dump(by_alias=True, exclude_none=True) for m in remaining])
    condition, expected = _unchanged_condition(item)

    try:
        dynamo_client.update_item(
            TableName=groups_table,
            Key={"userId": {"S": user_id}, "groupId": {"S": group_id}},
            UpdateExpression="SET members = :members",
            ConditionExpression=condition,
            ExpressionAttributeValues={":members": members_attr, **expected},
        )
    except ClientError as e:
        if e.response["Error"]["Code"] == "ConditionalCheckFailedException":
            raise ConflictError(
                f"Group '{group_id}' was deleted or changed while removing member '{member_id}'",
                code=ErrorCode.GROUP_CHANGED,
            ) from e
        raise

    logger.info("Removed member %s from group %s", member_id, group_id)
    return group.model_copy(update={"members": remaining})
