"""Static-table currency conversion used by the balance and fund services."""

import logging
import math
from typing import Mapping

logger = logging.getLogger(__name__)

RateTable = Mapping[str, Mapping[str, float]]

# Fallback rates; live rate fetching is out of scope.
FALLBACK_RATES: dict[str, dict[str, float]] = {
    "USD": {
        "EUR": 0.92,
        "GBP": 0.79,
        "JPY": 149.82,
        "THB": 35.76,
        "AUD": 1.52,
        "CAD": 1.36,
        "CHF": 0.89,
        "CNY": 7.24,
        "INR": 83.12,
    },
    "EUR": {
        "USD": 1.09,
        "GBP": 0.86,
        "JPY": 162.85,
        "THB": 38.87,
        "AUD": 1.65,
        "CAD": 1.48,
        "CHF": 0.97,
        "CNY": 7.87,
        "INR": 90.35,
    },
}

CURRENCIES: dict[str, tuple[str, str]] = {
    "USD": ("US Dollar", "$"),
    "EUR": ("Euro", "€"),
    "GBP": ("British Pound", "£"),
    "JPY": ("Japanese Yen", "¥"),
    "THB": ("Thai Baht", "฿"),
    "AUD": ("Australian Dollar", "A$"),
    "CAD": ("Canadian Dollar", "C$"),
    "CHF": ("Swiss Franc", "CHF"),
    "CNY": ("Chinese Yuan", "¥"),
    "INR": ("Indian Rupee", "₹"),
}


def _lookup(rates: RateTable, from_currency: str, to_currency: str) -> float | None:
    rate = rates.get(from_currency, {}).get(to_currency)
    if rate is None or not math.isfinite(rate) or rate <= 0:
        return None
    return float(rate)


def get_exchange_rate(from_currency: str, to_currency: str, rates: RateTable | None = None) -> float:
    """Rate to multiply an amount in ``from_currency`` by to get ``to_currency``.

    Falls back to the inverse pair, then to 1.0 when neither direction is known.
    """
    if from_currency == to_currency:
        return 1.0

    table = FALLBACK_RATES if rates is None else rates

    direct = _lookup(table, from_currency, to_currency)
    if direct is not None:
        return direct

    inverse = _lookup(table, to_currency, from_currency)
    if inverse is not None:
        return 1.0 / inverse

    logger.debug("No rate for %s->%s, using 1.0", from_currency, to_currency)
    return 1.0


def convert_currency(amount: float, from_currency: str, to_currency: str, rates: RateTable | None = None) -> float:
    return amount * get_exchange_rate(from_currency, to_currency, rates)


def format_currency(amount: float, currency_code: str) -> str:
    """Render an amount with its currency symbol, e.g. ``$1,234.50``."""
    symbol = CURRENCIES[currency_code][1] if currency_code in CURRENCIES else currency_code
    sign = "-" if amount < 0 else ""
    return f"{sign}{symbol}{abs(amount):,.2f}"
