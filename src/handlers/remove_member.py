"""DELETE /groups/{groupId}/members/{memberId}."""

from typing import Any

from tripwiser.clients import get_dynamo_client
from tripwiser.config import get_config
from tripwiser.errors import TripwiserError
from tripwiser.responses import api_response, caller_id, error_response, path_param
from tripwiser.services.store import remove_member


def handler(event: dict[str, Any], context: object) -> dict[str, Any]:
    """Refuses with 422 while the member is referenced by expenses or settlements."""
    try:
        user_id = caller_id(event)
        group_id = path_param(event, "groupId")
        member_id = path_param(event, "memberId")

        config = get_config()
        group = remove_member(user_id, group_id, member_id, get_dynamo_client(), config.groups_table)
    except TripwiserError as e:
        return error_response(e)

    return api_response(
        200,
        {"groupId": group.id, "members": [m.model_dump(mode="json", by_alias=True) for m in group.members]},
    )
