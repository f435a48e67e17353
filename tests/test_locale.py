"""
Tests for country, currency and income-bracket resolution.
"""
import pytest

from app.engine.locale import (
    COUNTRY_CURRENCY,
    currency_presentation,
    format_amount,
    income_brackets,
    resolve_currency,
    resolve_locale,
)


@pytest.mark.parametrize(
    "country, currency",
    [
        ("japan", "JPY"),
        ("india", "INR"),
        ("germany", "EUR"),
        ("netherlands", "EUR"),
        ("south-africa", "ZAR"),
        ("other", "USD"),
        (" Japan ", "JPY"),
    ],
)
def test_resolve_currency(country, currency):
    assert resolve_currency(country) == currency


@pytest.mark.parametrize("country", ["narnia", "", None])
def test_unknown_country_defaults_to_usd(country):
    assert resolve_currency(country) == "USD"


def test_every_country_maps_to_a_presentable_currency():
    for currency in COUNTRY_CURRENCY.values():
        assert currency_presentation(currency).currency_code == currency


def test_jpy_presentation():
    presentation = currency_presentation("JPY")

    assert presentation.symbol == "¥"
    assert presentation.goal_baselines.emergency_fund_target == 1200000
    assert [b.id for b in presentation.income_brackets] == [
        "under-3000000",
        "3000000-6000000",
        "6000000-9000000",
        "9000000-12000000",
        "12000000-18000000",
        "over-18000000",
    ]
    assert presentation.income_brackets[0].label == "Under ¥3,000,000"
    assert presentation.income_brackets[1].label == "¥3,000,000 - ¥6,000,000"
    assert presentation.income_brackets[-1].label == "Over ¥18,000,000"


def test_brackets_are_ordered_and_open_ended():
    brackets = income_brackets("GBP")

    assert brackets[0].lower_bound == 0
    assert brackets[-1].upper_bound is None
    for previous, current in zip(brackets, brackets[1:]):
        assert previous.upper_bound == current.lower_bound


def test_unsupported_currency_falls_back_to_usd():
    presentation = currency_presentation("XYZ")
    assert presentation == currency_presentation("USD")


def test_currency_without_tables_uses_usd_amounts_with_own_symbol():
    presentation = currency_presentation("BRL")

    assert presentation.symbol == "R$"
    assert presentation.goal_baselines == currency_presentation("USD").goal_baselines
    assert presentation.income_brackets[0].label == "Under R$25,000"


def test_currency_code_is_case_insensitive():
    assert currency_presentation("eur").currency_code == "EUR"


def test_format_amount_grouping():
    assert format_amount(1234567, "USD") == "$1,234,567"
    assert format_amount(420000, "JPY") == "¥420,000"
    assert format_amount(999, "INR") == "₹999"
    assert format_amount(500000, "INR") == "₹5,00,000"
    assert format_amount(5000000, "INR") == "₹50,00,000"


def test_inr_bracket_labels_use_lakh_grouping():
    labels = [b.label for b in income_brackets("INR")]
    assert labels[0] == "Under ₹5,00,000"
    assert labels[1] == "₹5,00,000 - ₹10,00,000"


def test_resolve_locale():
    resolved = resolve_locale("japan")
    assert resolved["currency_code"] == "JPY"
    assert resolved["presentation"].symbol == "¥"
