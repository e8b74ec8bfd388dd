"""Unit tests for the DynamoDB document store service."""

from decimal import Decimal
from unittest.mock import MagicMock

import pytest
from boto3.dynamodb.types import TypeSerializer
from botocore.exceptions import ClientError

from tripwiser.errors import ConflictError, ErrorCode, NotFoundError, ValidationError
from tripwiser.services.store import load_group, load_trip, remove_member

_serializer = TypeSerializer()

GROUP_DOC = {
    "userId": "user-1",
    "groupId": "g1",
    "name": "Lisbon",
    "baseCurrency": "USD",
    "members": [
        {"id": "a", "name": "Ana"},
        {"id": "b", "name": "Ben", "email": "ben@example.com"},
        {"id": "c", "name": "Cy"},
    ],
    "expenses": [
        {
            "id": "e1",
            "title": "Dinner",
            "amount": Decimal("60.50"),
            "currency": "USD",
            "paidBy": "a",
            "date": "2025-06-01",
            "participants": [
                {"memberId": "a", "amount": Decimal("30.25")},
                {"memberId": "b", "amount": Decimal("30.25")},
            ],
            "splitType": "equal",
        }
    ],
    "settlements": [],
}

TRIP_DOC = {
    "userId": "user-1",
    "tripId": "t1",
    "name": "Summer",
    "destination": "Lisbon",
    "startDate": "2025-07-01",
    "endDate": "2025-07-14",
    "budget": 1000,
    "miscellaneousFunds": 200,
    "safetyFunds": 100,
    "expenses": [],
}


def to_item(doc):
    return {k: _serializer.serialize(v) for k, v in doc.items()}


def client_returning(doc):
    client = MagicMock()
    client.get_item.return_value = {"Item": to_item(doc)} if doc is not None else {}
    return client


def test_load_group():
    client = client_returning(GROUP_DOC)

    group = load_group("user-1", "g1", client, "SplitlyGroups")

    client.get_item.assert_called_once_with(
        TableName="SplitlyGroups",
        Key={"userId": {"S": "user-1"}, "groupId": {"S": "g1"}},
        ConsistentRead=True,
    )
    assert group.id == "g1"
    assert [m.id for m in group.members] == ["a", "b", "c"]
    assert group.expenses[0].amount == 60.5
    assert isinstance(group.expenses[0].participants[0].amount, float)


def test_load_group_missing_raises_not_found():
    with pytest.raises(NotFoundError) as exc_info:
        load_group("user-1", "nope", client_returning(None), "SplitlyGroups")
    assert exc_info.value.code == ErrorCode.GROUP_NOT_FOUND


def test_load_group_invalid_document_raises_validation_error():
    bad = {**GROUP_DOC, "baseCurrency": "dollars"}
    with pytest.raises(ValidationError):
        load_group("user-1", "g1", client_returning(bad), "SplitlyGroups")


def test_load_trip():
    trip = load_trip("user-1", "t1", client_returning(TRIP_DOC), "Trips")
    assert trip.id == "t1"
    assert trip.budget == 1000.0
    assert trip.expenses == []


def test_load_trip_missing_raises_not_found():
    with pytest.raises(NotFoundError) as exc_info:
        load_trip("user-1", "t9", client_returning(None), "Trips")
    assert exc_info.value.code == ErrorCode.TRIP_NOT_FOUND


def test_remove_unreferenced_member():
    client = client_returning(GROUP_DOC)

    group = remove_member("user-1", "g1", "c", client, "SplitlyGroups")

    assert [m.id for m in group.members] == ["a", "b"]
    client.update_item.assert_called_once()
    kwargs = client.update_item.call_args.kwargs
    assert kwargs["TableName"] == "SplitlyGroups"
    assert kwargs["Key"] == {"userId": {"S": "user-1"}, "groupId": {"S": "g1"}}
    members = kwargs["ExpressionAttributeValues"][":members"]["L"]
    assert [m["M"]["id"]["S"] for m in members] == ["a", "b"]
    assert "email" not in members[0]["M"]


def test_remove_referenced_member_is_refused():
    client = client_returning(GROUP_DOC)

    with pytest.raises(ValidationError) as exc_info:
        remove_member("user-1", "g1", "b", client, "SplitlyGroups")

    assert exc_info.value.code == ErrorCode.MEMBER_IN_USE
    client.update_item.assert_not_called()


def test_remove_member_write_is_conditioned_on_the_read_document():
    client = client_returning(GROUP_DOC)

    remove_member("user-1", "g1", "c", client, "SplitlyGroups")

    kwargs = client.update_item.call_args.kwargs
    assert kwargs["ConditionExpression"] == (
        "attribute_exists(groupId) AND members = :read_members"
        " AND expenses = :read_expenses AND settlements = :read_settlements"
    )
    values = kwargs["ExpressionAttributeValues"]
    item = to_item(GROUP_DOC)
    assert values[":read_members"] == item["members"]
    assert values[":read_expenses"] == item["expenses"]
    assert values[":read_settlements"] == item["settlements"]


def test_remove_member_requires_absent_attributes_to_stay_absent():
    doc = {k: v for k, v in GROUP_DOC.items() if k != "settlements"}
    client = client_returning(doc)

    remove_member("user-1", "g1", "c", client, "SplitlyGroups")

    kwargs = client.update_item.call_args.kwargs
    assert kwargs["ConditionExpression"].endswith("AND attribute_not_exists(settlements)")
    assert ":read_settlements" not in kwargs["ExpressionAttributeValues"]


def test_remove_member_from_group_changed_since_read():
    client = client_returning(GROUP_DOC)
    client.update_item.side_effect = ClientError(
        {"Error": {"Code": "ConditionalCheckFailedException", "Message": "condition failed"}}, "UpdateItem"
    )

    with pytest.raises(ConflictError) as exc_info:
        remove_member("user-1", "g1", "c", client, "SplitlyGroups")

    assert exc_info.value.code == ErrorCode.GROUP_CHANGED


def test_remove_member_from_missing_group():
    client = client_returning(None)

    with pytest.raises(NotFoundError):
        remove_member("user-1", "g1", "c", client, "SplitlyGroups")

    client.update_item.assert_not_called()


def test_remove_member_propagates_other_client_errors():
    client = client_returning(GROUP_DOC)
    client.update_item.side_effect = ClientError(
        {"Error": {"Code": "ProvisionedThroughputExceededException", "Message": "slow down"}}, "UpdateItem"
    )

    with pytest.raises(ClientError):
        remove_member("user-1", "g1", "c", client, "SplitlyGroups")
