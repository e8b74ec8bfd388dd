"""GET /trips/{tripId}/funds: fund depletion status for a trip."""

import logging
from typing import Any

from tripwiser.clients import get_dynamo_client
from tripwiser.config import get_config
from tripwiser.errors import TripwiserError
from tripwiser.responses import api_response, caller_id, error_response, path_param
from tripwiser.services.funds import budget_alerts, calculate_total_spent, compute_fund_status
from tripwiser.services.store import load_trip
from tripwiser.services.trips import get_trip_status, trip_progress

logger = logging.getLogger(__name__)


def handler(event: dict[str, Any], context: object) -> dict[str, Any]:
    try:
        user_id = caller_id(event)
        trip_id = path_param(event, "tripId")

        config = get_config()
        trip = load_trip(user_id, trip_id, get_dynamo_client(), config.trips_table)
    except TripwiserError as e:
        return error_response(e)

    total_spent = calculate_total_spent(trip.expenses)
    fund_status = compute_fund_status(trip, total_spent)
    alerts = budget_alerts(trip, fund_status, trip.name)

    logger.info("Trip %s drawing from %s funds", trip_id, fund_status.status.value)

    return api_response(
        200,
        {
            "tripId": trip.id,
            "homeCurrency": trip.home_currency,
            "fundStatus": fund_status.model_dump(mode="json", by_alias=True),
            "spent": {
                "total": total_spent,
                "budget": calculate_total_spent(trip.expenses, "budget"),
                "miscellaneous": calculate_total_spent(trip.expenses, "miscellaneous"),
                "safety": calculate_total_spent(trip.expenses, "safety"),
            },
            "alerts": [a.model_dump(mode="json", by_alias=True) for a in alerts],
            "tripStatus": get_trip_status(trip),
            "progress": trip_progress(trip),
        },
    )
