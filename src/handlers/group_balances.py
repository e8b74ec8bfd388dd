"""GET /groups/{groupId}/balances: settling transfers for a Splitly group."""

import logging
from typing import Any

from tripwiser.clients import get_dynamo_client
from tripwiser.config import get_config
from tripwiser.errors import TripwiserError
from tripwiser.responses import api_response, caller_id, error_response, path_param
from tripwiser.services.balances import compute_net_positions, settle_net_positions
from tripwiser.services.store import load_group

logger = logging.getLogger(__name__)


def handler(event: dict[str, Any], context: object) -> dict[str, Any]:
    """Recompute balances from the group's current expenses and settlements."""
    try:
        user_id = caller_id(event)
        group_id = path_param(event, "groupId")

        config = get_config()
        group = load_group(user_id, group_id, get_dynamo_client(), config.groups_table)

        net = compute_net_positions(
            group.members,
            group.expenses,
            group.settlements,
            group.base_currency,
            share_tolerance=config.share_tolerance,
        )
        balances = settle_net_positions(net, order=[m.id for m in group.members], epsilon=config.balance_epsilon)
    except TripwiserError as e:
        return error_response(e)

    logger.info("Computed %d transfers for group %s", len(balances), group_id)

    return api_response(
        200,
        {
            "groupId": group.id,
            "baseCurrency": group.base_currency,
            "balances": [b.model_dump(mode="json", by_alias=True) for b in balances],
            "netPositions": net,
        },
    )
