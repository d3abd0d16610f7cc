"""
es-AR display formatting for dates and numbers.
"""

from datetime import date
from decimal import Decimal, ROUND_HALF_UP
from typing import Optional, Union

Number = Union[int, float]

# Short month names as rendered by the es-AR locale
MONTHS_ES_SHORT = {
    1: "ene",
    2: "feb",
    3: "mar",
    4: "abr",
    5: "may",
    6: "jun",
    7: "jul",
    8: "ago",
    9: "sep",
    10: "oct",
    11: "nov",
    12: "dic",
}

THOUSANDS_SEPARATOR = "."
DECIMAL_SEPARATOR = ","


def format_number(value: Optional[Number], max_decimals: int = 3) -> str:
    """
    Format a number the way es-AR does.

    Thousands grouped with '.', decimals with ',', trailing zeros dropped.
    1234567.5 → '1.234.567,5', 1500 → '1.500', None → '0'.
    """
    if value is None:
        value = 0

    rounded = round(float(value), max_decimals)
    if rounded == 0:
        rounded = 0.0  # avoid "-0"

    text = f"{abs(rounded):,.{max_decimals}f}"
    if max_decimals:
        text = text.rstrip("0").rstrip(".")

    # Swap separators: ',' → '.' (thousands), '.' → ',' (decimal)
    text = text.replace(",", "\0").replace(".", DECIMAL_SEPARATOR).replace("\0", THOUSANDS_SEPARATOR)

    return f"-{text}" if rounded < 0 else text


def format_fixed(value: Number, decimals: int = 1) -> str:
    """
    Fixed-point text with a '.' decimal point, like JS toFixed().

    Ties round away from zero on the exact binary value:
    0.25 → '0.3', 1.25 → '1.3', 2.46 → '2.5'.
    """
    step = Decimal(1).scaleb(-decimals)
    return f"{Decimal(float(value)).quantize(step, rounding=ROUND_HALF_UP):f}"


def format_date(day: date) -> str:
    """dd/mm/yyyy"""
    return day.strftime("%d/%m/%Y")


def format_day_month(day: date) -> str:
    """dd/mm"""
    return day.strftime("%d/%m")


def month_abbreviation(day: date) -> str:
    return MONTHS_ES_SHORT[day.month]
