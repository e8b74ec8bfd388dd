import json

import pytest

from handlers.convert_currency import handler


def event(**params):
    return {"queryStringParameters": params}


def test_convert_currency_handler():
    result = handler(event(amount="100", **{"from": "usd", "to": "EUR"}), None)

    assert result["statusCode"] == 200
    body = json.loads(result["body"])
    assert body["from"] == "USD"
    assert body["rate"] == 0.92
    assert body["converted"] == pytest.approx(92.0)
    assert body["formatted"] == "€92.00"


def test_convert_currency_same_currency():
    body = json.loads(handler(event(amount="12.5", **{"from": "JPY", "to": "JPY"}), None)["body"])
    assert body["converted"] == 12.5


@pytest.mark.parametrize("amount", ["abc", "nan", "inf"])
def test_convert_currency_bad_amount_returns_400(amount):
    result = handler(event(amount=amount, **{"from": "USD", "to": "EUR"}), None)
    assert result["statusCode"] == 400


def test_convert_currency_missing_params_returns_400():
    assert handler({"queryStringParameters": None}, None)["statusCode"] == 400
