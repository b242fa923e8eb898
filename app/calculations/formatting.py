"""
Numeric Parsing and Display Formatting

Converts the free-text values typed into the calculator forms into numbers,
and numbers back into en-US display strings.
"""

import math
import re
from typing import Optional, Union

_NON_NUMERIC = re.compile(r"[^0-9.\-]")
_LEADING_FLOAT = re.compile(r"-?(\d+\.?\d*|\.\d+)")
_LEADING_INT = re.compile(r"-?\d+")

DEFAULT_CURRENCY_DECIMALS = 2
MAX_NUMBER_DECIMALS = 3


def parse_formatted_number(value: Union[str, float, int, None]) -> float:
    """
    Parse a formatted numeric string into a float.

    Strips every character except digits, '.' and '-', then reads the longest
    leading number, so "$2,500,000.50" parses as 2500000.5 and "1-2" as 1.

    Args:
        value: Raw form value (currency symbols, commas and spaces allowed)

    Returns:
        Parsed value, or 0.0 when nothing numeric can be read
    """
    if value is None:
        return 0.0
    if isinstance(value, (int, float)):
        number = float(value)
        return number if math.isfinite(number) else 0.0

    clean = _NON_NUMERIC.sub("", str(value))
    match = _LEADING_FLOAT.match(clean)
    if not match:
        return 0.0

    number = float(match.group(0))
    if not math.isfinite(number):
        return 0.0
    return number


def format_currency(amount: float, decimals: Optional[int] = None) -> str:
    """
    Format an amount as US dollars.

    Args:
        amount: Dollar amount
        decimals: Fixed number of decimal places (default 2)

    Returns:
        Display string, e.g. "$1,234.57" or "-$500"
    """
    places = DEFAULT_CURRENCY_DECIMALS if decimals is None else decimals
    sign = "-" if amount < 0 else ""
    return f"{sign}${abs(amount):,.{places}f}"


def format_percentage(value: float) -> str:
    """Format a percent value with two decimals, e.g. 7.2 -> "7.20%"."""
    return f"{value:.2f}%"


def format_number(value: float, decimals: Optional[int] = None) -> str:
    """
    Format a number with thousands separators.

    Without `decimals`, up to three fraction digits are kept and trailing
    zeros dropped ("3500" -> "3,500", "0.12345" -> "0.123").
    """
    if decimals is not None:
        return f"{value:,.{decimals}f}"

    formatted = f"{value:,.{MAX_NUMBER_DECIMALS}f}"
    return formatted.rstrip("0").rstrip(".")


def format_string_value(value: str) -> str:
    """
    Regroup a partially typed numeric string for display.

    Keeps what the user is in the middle of typing:
    "3500" -> "3,500", "3500.5" -> "3,500.5", "3500." -> "3,500.".
    """
    if not value:
        return "0"

    has_trailing_dot = value.endswith(".")
    numeric_part = _NON_NUMERIC.sub("", value)
    if numeric_part in ("", "-", "."):
        return value

    int_part, _, dec_part = numeric_part.partition(".")
    int_match = _LEADING_INT.match(int_part)
    formatted = format_number(int(int_match.group(0)) if int_match else 0)

    if has_trailing_dot:
        formatted += "."
    elif "." in numeric_part:
        formatted += "." + dec_part.split(".")[0]

    return formatted
