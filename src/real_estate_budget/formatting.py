"""
Currency and percentage rendering for SAR amounts.

locale="en" -> "SAR 796,000"
locale="ar" -> "٧٩٦٬٠٠٠ ر.س" (Arabic-Indic digits, Arabic thousands separator)
"""

_ARABIC_DIGITS = str.maketrans("0123456789,.", "٠١٢٣٤٥٦٧٨٩٬٫")


def _to_arabic(text: str) -> str:
    return text.translate(_ARABIC_DIGITS)


def format_currency(amount: float, locale: str = "en") -> str:
    """Whole riyals, grouped thousands."""
    text = f"{round(amount):,.0f}"
    if locale == "ar":
        return f"{_to_arabic(text)} ر.س"
    return f"SAR {text}"


def format_percentage(value: float, decimals: int = 1, locale: str = "en") -> str:
    """Render a value that is already a percentage, e.g. 5.5 -> '5.5%'."""
    text = f"{value:.{decimals}f}"
    if locale == "ar":
        return f"{_to_arabic(text)}٪"
    return f"{text}%"


def format_ratio(ratio: float, decimals: int = 1, locale: str = "en") -> str:
    """Render a fraction as a percentage, e.g. 0.35 -> '35.0%'."""
    return format_percentage(ratio * 100, decimals, locale)
