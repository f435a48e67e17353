"""
Locale Resolver for the coaching engine.

Maps a country selection to a currency code and a currency code to its
presentation: symbol, PPP-adjusted goal baselines and annual income
brackets. Every lookup is total; anything outside the known tables
falls back to the default currency.
"""

import logging
from typing import Dict, List, Optional, Tuple

from app.core.config import settings
from app.engine.models import GoalBaselines, IncomeBracket, LocalePresentation

logger = logging.getLogger(__name__)


COUNTRY_CURRENCY: Dict[str, str] = {
    "us": "USD",
    "canada": "CAD",
    "uk": "GBP",
    "germany": "EUR",
    "france": "EUR",
    "australia": "AUD",
    "japan": "JPY",
    "singapore": "SGD",
    "india": "INR",
    "brazil": "BRL",
    "mexico": "MXN",
    "south-africa": "ZAR",
    "netherlands": "EUR",
    "sweden": "SEK",
    "switzerland": "CHF",
    "other": "USD",
}

CURRENCY_SYMBOLS: Dict[str, str] = {
    "USD": "$",
    "CAD": "C$",
    "GBP": "£",
    "EUR": "€",
    "AUD": "A$",
    "JPY": "¥",
    "SGD": "S$",
    "INR": "₹",
    "BRL": "R$",
    "MXN": "MX$",
    "ZAR": "R",
    "SEK": "kr",
    "CHF": "CHF",
}

SUPPORTED_CURRENCIES = tuple(CURRENCY_SYMBOLS)

# emergency current/target, debt current, investment current/target
GOAL_BASELINES: Dict[str, Tuple[int, int, int, int, int]] = {
    "USD": (2500, 10000, 3500, 1200, 5000),
    "CAD": (3200, 13000, 4500, 1500, 6500),
    "GBP": (2000, 8000, 2800, 1000, 4000),
    "EUR": (2200, 9000, 3100, 1100, 4500),
    "AUD": (3500, 14000, 5000, 1700, 7000),
    "JPY": (300000, 1200000, 420000, 144000, 600000),
    "SGD": (3200, 13000, 4500, 1500, 6500),
    "INR": (200000, 800000, 280000, 96000, 400000),
}

# Upper bounds of each closed bracket; the last bracket is open-ended
INCOME_THRESHOLDS: Dict[str, List[int]] = {
    "USD": [25000, 50000, 75000, 100000, 150000],
    "CAD": [30000, 60000, 90000, 120000, 180000],
    "GBP": [20000, 35000, 50000, 75000, 100000],
    "EUR": [22000, 40000, 60000, 80000, 120000],
    "AUD": [35000, 65000, 90000, 120000, 180000],
    "JPY": [3000000, 6000000, 9000000, 12000000, 18000000],
    "SGD": [30000, 60000, 90000, 120000, 180000],
    "INR": [500000, 1000000, 2000000, 3000000, 5000000],
}

LAKH_GROUPED_CURRENCIES = {"INR"}


def resolve_currency(country_code: Optional[str]) -> str:
    """Return the currency for a country selection, or the default currency."""
    key = (country_code or "").strip().lower()
    currency = COUNTRY_CURRENCY.get(key)
    if currency is None:
        logger.debug(f"Unknown country '{country_code}', using {settings.DEFAULT_CURRENCY}")
        return settings.DEFAULT_CURRENCY
    return currency


def normalize_currency(currency_code: Optional[str]) -> str:
    code = (currency_code or "").strip().upper()
    if code not in CURRENCY_SYMBOLS:
        logger.debug(f"Unsupported currency '{currency_code}', using {settings.DEFAULT_CURRENCY}")
        return settings.DEFAULT_CURRENCY
    return code


def _group_digits(value: int, lakh: bool) -> str:
    digits = str(value)
    if not lakh or len(digits) <= 3:
        return f"{value:,}"
    head, tail = digits[:-3], digits[-3:]
    pairs = []
    while len(head) > 2:
        pairs.insert(0, head[-2:])
        head = head[:-2]
    if head:
        pairs.insert(0, head)
    return ",".join(pairs + [tail])


def format_amount(amount: float, currency_code: str) -> str:
    """Format an amount with the currency symbol and local digit grouping."""
    code = normalize_currency(currency_code)
    value = int(round(amount))
    sign = "-" if value < 0 else ""
    grouped = _group_digits(abs(value), code in LAKH_GROUPED_CURRENCIES)
    return f"{sign}{CURRENCY_SYMBOLS[code]}{grouped}"


def income_brackets(currency_code: str) -> List[IncomeBracket]:
    """
    Build the ordered income brackets for a currency.

    Currencies without their own thresholds use the default currency's
    thresholds, labelled with their own symbol.
    """
    code = normalize_currency(currency_code)
    thresholds = INCOME_THRESHOLDS.get(code) or INCOME_THRESHOLDS[settings.DEFAULT_CURRENCY]

    brackets = [
        IncomeBracket(
            id=f"under-{thresholds[0]}",
            lower_bound=0,
            upper_bound=thresholds[0],
            label=f"Under {format_amount(thresholds[0], code)}",
        )
    ]
    for lower, upper in zip(thresholds, thresholds[1:]):
        brackets.append(
            IncomeBracket(
                id=f"{lower}-{upper}",
                lower_bound=lower,
                upper_bound=upper,
                label=f"{format_amount(lower, code)} - {format_amount(upper, code)}",
            )
        )
    brackets.append(
        IncomeBracket(
            id=f"over-{thresholds[-1]}",
            lower_bound=thresholds[-1],
            upper_bound=None,
            label=f"Over {format_amount(thresholds[-1], code)}",
        )
    )
    return brackets


def goal_baselines(currency_code: str) -> GoalBaselines:
    code = normalize_currency(currency_code)
    values = GOAL_BASELINES.get(code) or GOAL_BASELINES[settings.DEFAULT_CURRENCY]
    emergency, emergency_target, debt, investment, investment_target = values
    return GoalBaselines(
        emergency_fund_current=emergency,
        emergency_fund_target=emergency_target,
        debt_current=debt,
        investment_current=investment,
        investment_target=investment_target,
    )


def currency_presentation(currency_code: Optional[str]) -> LocalePresentation:
    code = normalize_currency(currency_code)
    return LocalePresentation(
        currency_code=code,
        symbol=CURRENCY_SYMBOLS[code],
        goal_baselines=goal_baselines(code),
        income_brackets=income_brackets(code),
    )


def resolve_locale(country_code: Optional[str]) -> Dict[str, object]:
    """Resolve a country selection into its currency code and presentation."""
    currency = resolve_currency(country_code)
    return {
        "currency_code": currency,
        "presentation": currency_presentation(currency),
    }
