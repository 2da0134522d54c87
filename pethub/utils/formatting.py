"""
Display formatting shared by the API responses and the print builders.
Money is stored as integer cents everywhere except Service.price (decimal dollars).
"""

import re
from datetime import date, datetime
from decimal import ROUND_HALF_UP, Decimal
from typing import Optional, Union

DateLike = Union[str, date, datetime]

STATE_TAX = "State Tax"
MUNICIPAL_TAX = "Municipal Tax"

# Legacy Puerto Rico tax labels (lowercased) mapped to the canonical ones
LEGACY_TAX_LABELS = {
    "ivu": STATE_TAX,
    "state (ivu)": STATE_TAX,
    "state(ivu)": STATE_TAX,
    "state tax": STATE_TAX,
    "municipal": MUNICIPAL_TAX,
    "municipal tax": MUNICIPAL_TAX,
}


def format_phone_number(value: Optional[str]) -> str:
    """
    Format a US phone number as the user types: "787" -> "787",
    "787555" -> "(787) 555", "7875555555" -> "(787) 555-5555".
    """
    if not value:
        return ""

    digits = re.sub(r"\D", "", value)
    if len(digits) == 11 and digits.startswith("1"):
        digits = digits[1:]
    digits = digits[:10]

    if len(digits) <= 3:
        return digits
    if len(digits) <= 6:
        return f"({digits[:3]}) {digits[3:]}"
    return f"({digits[:3]}) {digits[3:6]}-{digits[6:]}"


def to_cents(dollars: Union[int, float, str, Decimal]) -> int:
    """Convert a dollar amount to integer cents, rounding half up"""
    amount = Decimal(str(dollars)) * 100
    return int(amount.quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def from_cents(cents: int) -> float:
    return cents / 100


def format_money(cents: Optional[int]) -> str:
    """12345 -> "$123.45" """
    return f"${from_cents(cents or 0):.2f}"


def _to_datetime(value: DateLike) -> datetime:
    if isinstance(value, datetime):
        return value
    if isinstance(value, date):
        return datetime(value.year, value.month, value.day)
    text = value.strip()
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"
    return datetime.fromisoformat(text)


def format_display_date(value: Optional[DateLike]) -> str:
    """Long US date used on invoices, e.g. "January 5, 2026" """
    if not value:
        return ""
    dt = _to_datetime(value)
    return f"{dt.strftime('%B')} {dt.day}, {dt.year}"


def format_time_12h(value: Optional[str]) -> str:
    """ "14:30" or "14:30:00" -> "2:30 PM" """
    if not value:
        return ""
    parts = value.split(":")
    hour, minute = int(parts[0]), int(parts[1])
    suffix = "AM" if hour < 12 else "PM"
    display_hour = hour % 12 or 12
    return f"{display_hour}:{minute:02d} {suffix}"


def format_receipt_datetime(value: Optional[DateLike]) -> str:
    """Short date and time printed on receipts, e.g. "01/05/2026 2:30 PM" """
    if not value:
        return ""
    dt = _to_datetime(value)
    return f"{dt.strftime('%m/%d/%Y')} {format_time_12h(dt.strftime('%H:%M'))}"


def normalize_tax_label(label: Optional[str]) -> Optional[str]:
    """Map legacy tax labels (IVU, Municipal, "State (IVU)") to canonical ones"""
    if not label or not isinstance(label, str):
        return label
    trimmed = label.strip()
    return LEGACY_TAX_LABELS.get(trimmed.lower(), trimmed)


def calculate_pet_age(
    birth_month: Optional[int], birth_year: Optional[int], today: Optional[date] = None
) -> Optional[int]:
    """Age in whole years; the birthday counts as reached from the start of its month"""
    if birth_month is None or birth_year is None:
        return None

    today = today or date.today()
    age = today.year - birth_year
    if today.month < birth_month:
        age -= 1
    return max(0, age)


def calculate_vaccination_status(
    last_vaccination_date: Optional[DateLike], today: Optional[date] = None
) -> str:
    """Vaccines are considered valid for 12 months"""
    if not last_vaccination_date:
        return "unknown"

    vaccinated_on = _to_datetime(last_vaccination_date).date()
    today = today or date.today()
    try:
        twelve_months_ago = today.replace(year=today.year - 1)
    except ValueError:
        # Feb 29
        twelve_months_ago = today.replace(year=today.year - 1, day=28)

    if vaccinated_on >= twelve_months_ago:
        return "up_to_date"
    return "out_of_date"


def percent_of_cents(cents: int, rate: Union[int, float]) -> int:
    """Percentage of an amount in cents, rounded half up to a whole cent"""
    amount = Decimal(cents) * Decimal(str(rate)) / 100
    return int(amount.quantize(Decimal("1"), rounding=ROUND_HALF_UP))
