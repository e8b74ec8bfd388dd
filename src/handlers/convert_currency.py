"""GET /currency/convert?amount=&from=&to=: static-table conversion."""

import math
from typing import Any

from tripwiser.errors import ErrorCode, TripwiserError, ValidationError
from tripwiser.responses import api_response, error_response, query_param
from tripwiser.services.currency import convert_currency, format_currency, get_exchange_rate


def handler(event: dict[str, Any], context: object) -> dict[str, Any]:
    try:
        raw_amount = query_param(event, "amount")
        from_currency = query_param(event, "from").upper()
        to_currency = query_param(event, "to").upper()
        try:
            amount = float(raw_amount)
        except ValueError as e:
            raise ValidationError(f"Amount '{raw_amount}' is not a number", code=ErrorCode.INVALID_REQUEST) from e
        if not math.isfinite(amount):
            raise ValidationError(f"Amount '{raw_amount}' is not finite", code=ErrorCode.INVALID_REQUEST)
    except TripwiserError as e:
        return error_response(e)

    converted = convert_currency(amount, from_currency, to_currency)
    return api_response(
        200,
        {
            "amount": amount,
            "from": from_currency,
            "to": to_currency,
            "rate": get_exchange_rate(from_currency, to_currency),
            "converted": converted,
            "formatted": format_currency(converted, to_currency),
        },
    )
