"""API Gateway proxy request/response helpers shared by the Lambda handlers."""

import json
import logging
from typing import Any

from tripwiser.errors import ConflictError, ErrorCode, NotFoundError, TripwiserError, ValidationError

logger = logging.getLogger(__name__)

_JSON_HEADERS = {"Content-Type": "application/json"}


def api_response(status_code: int, body: Any) -> dict[str, Any]:
    return {"statusCode": status_code, "headers": dict(_JSON_HEADERS), "body": json.dumps(body)}


def error_response(error: TripwiserError) -> dict[str, Any]:
    """Map an error to a response carrying only the client-safe message."""
    if isinstance(error, NotFoundError):
        status_code = 404
    elif isinstance(error, ConflictError):
        status_code = 409
    elif error.code == ErrorCode.INVALID_REQUEST:
        status_code = 400
    elif isinstance(error, ValidationError):
        status_code = 422
    else:
        status_code = 500

    logger.warning("Request failed with %s: %s", error.code.value, error.message)
    return api_response(status_code, {"error": error.code.value, "message": error.user_message})


def caller_id(event: dict[str, Any]) -> str:
    """User id injected by the API Gateway authorizer."""
    try:
        return str(event["requestContext"]["authorizer"]["userId"])
    except (KeyError, TypeError) as e:
        raise ValidationError("Missing authorizer userId", code=ErrorCode.INVALID_REQUEST) from e


def path_param(event: dict[str, Any], name: str) -> str:
    value = (event.get("pathParameters") or {}).get(name)
    if not value:
        raise ValidationError(f"Missing path parameter '{name}'", code=ErrorCode.INVALID_REQUEST)
    return str(value)


def query_param(event: dict[str, Any], name: str) -> str:
    value = (event.get("queryStringParameters") or {}).get(name)
    if not value:
        raise ValidationError(f"Missing query parameter '{name}'", code=ErrorCode.INVALID_REQUEST)
    return str(value)
