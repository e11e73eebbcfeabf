"""
Test cases for formatting.py.
"""

from real_estate_budget.formatting import format_currency, format_percentage, format_ratio


def test_currency_english():
    assert format_currency(796_000) == "SAR 796,000"
    assert format_currency(1_234.6) == "SAR 1,235"
    assert format_currency(0) == "SAR 0"


def test_currency_arabic():
    assert format_currency(1_500, locale="ar") == "١٬٥٠٠ ر.س"


def test_percentage():
    assert format_percentage(5.5) == "5.5%"
    assert format_percentage(4, 2) == "4.00%"
    assert format_percentage(5.5, locale="ar") == "٥٫٥٪"


def test_ratio():
    assert format_ratio(0.35) == "35.0%"
    assert format_ratio(0.062) == "6.2%"
