"""
Day-view calendar layout math and business hours helpers.

Appointment cards are placed on a vertical grid where each hour is one row of
``row_height_px`` pixels, starting at ``day_start_hour``. Positions are plain
linear arithmetic: cards that overlap or fall outside the rendered hours are
not clamped or rearranged.
"""

import json
import logging
import re
from dataclasses import dataclass
from typing import Any, Optional

from ...config import CALENDAR_ROW_HEIGHT_PX, DEFAULT_DAY_END_HOUR, DEFAULT_DAY_START_HOUR

logger = logging.getLogger(__name__)

DAYS_OF_WEEK = ("monday", "tuesday", "wednesday", "thursday", "friday", "saturday", "sunday")
DEFAULT_OPEN = "09:00"
DEFAULT_CLOSE = "18:00"
DEFAULT_DURATION_MINUTES = 60

SERVICE_SIZE_PATTERN = re.compile(r"\b(Small|Medium|Large|X-Large|XL)\b", re.IGNORECASE)


@dataclass(frozen=True)
class AppointmentPosition:
    top: float
    height: float


@dataclass(frozen=True)
class TimeSlot:
    hour: int
    label: str
    time: str


@dataclass(frozen=True)
class WeekTimeRange:
    start_hour: int
    start_minute: int
    end_hour: int
    end_minute: int
    start_minutes: int
    end_minutes: int


def time_to_minutes(time_value: str) -> int:
    """ "HH:MM" or "HH:MM:SS" -> minutes since midnight (seconds are ignored)"""
    parts = time_value.split(":")
    return int(parts[0]) * 60 + int(parts[1])


def minutes_to_time(minutes: int) -> str:
    """Minutes since midnight -> zero-padded "HH:MM" (hours may exceed 23)"""
    return f"{minutes // 60:02d}:{minutes % 60:02d}"


def calculate_appointment_position(
    start_time: str,
    end_time: str,
    day_start_hour: int = DEFAULT_DAY_START_HOUR,
    row_height_px: int = CALENDAR_ROW_HEIGHT_PX,
) -> AppointmentPosition:
    start_minutes = time_to_minutes(start_time)
    end_minutes = time_to_minutes(end_time)
    day_start_minutes = day_start_hour * 60

    top = (start_minutes - day_start_minutes) / 60 * row_height_px
    height = (end_minutes - start_minutes) / 60 * row_height_px
    return AppointmentPosition(top=top, height=height)


def hour_label(hour: int) -> str:
    if hour == 12:
        return "12PM"
    if hour < 12:
        return f"{hour}AM"
    return f"{hour - 12}PM"


def generate_time_slots(
    start_hour: int = DEFAULT_DAY_START_HOUR, end_hour: int = DEFAULT_DAY_END_HOUR
) -> list[TimeSlot]:
    """One slot per hour, both ends inclusive"""
    return [
        TimeSlot(hour=hour, label=hour_label(hour), time=f"{hour:02d}:00")
        for hour in range(start_hour, end_hour + 1)
    ]


def normalize_time(value: Optional[str], default: str = "09:00") -> str:
    """Drop seconds from a stored time: "14:30:00" -> "14:30" """
    if not value or ":" not in str(value):
        return default
    return ":".join(str(value).split(":")[:2])


def compute_end_time(start_time: str, duration_minutes: Optional[int]) -> str:
    """End time for an appointment stored without one, from the service duration"""
    duration = duration_minutes or DEFAULT_DURATION_MINUTES
    return minutes_to_time(time_to_minutes(start_time) + duration)


def extract_service_size(service_name: Optional[str]) -> str:
    """ "Dog Haircut - Large" -> "Large" """
    if not service_name:
        return ""
    match = SERVICE_SIZE_PATTERN.search(service_name)
    return match.group(1) if match else ""


def _clamped_minutes(time_value: str, fallback: str) -> int:
    try:
        minutes = time_to_minutes(time_value)
    except (ValueError, IndexError, AttributeError):
        minutes = time_to_minutes(fallback)
    return max(0, min(23 * 60 + 59, minutes))


def default_business_hours() -> dict[str, dict[str, Any]]:
    return {day: {"closed": False, "open": DEFAULT_OPEN, "close": DEFAULT_CLOSE} for day in DAYS_OF_WEEK}


def parse_business_hours(value: Optional[str]) -> dict[str, dict[str, Any]]:
    """
    Parse the business_hours JSON column into per-day open/close times.
    Anything that is not a JSON object falls back to 09:00-18:00 every day.
    """
    if not value or not isinstance(value, str):
        return default_business_hours()

    trimmed = value.strip()
    if not trimmed.startswith("{"):
        return default_business_hours()

    try:
        parsed = json.loads(trimmed)
    except json.JSONDecodeError:
        logger.warning("Invalid business_hours JSON, using defaults")
        return default_business_hours()

    hours = {}
    for day in DAYS_OF_WEEK:
        day_value = parsed.get(day) or {}
        hours[day] = {
            "closed": bool(day_value.get("closed", False)),
            "open": day_value.get("open") or DEFAULT_OPEN,
            "close": day_value.get("close") or DEFAULT_CLOSE,
        }
    return hours


def serialize_business_hours(hours: dict[str, dict[str, Any]]) -> str:
    return json.dumps(hours)


def get_week_time_range(hours: dict[str, dict[str, Any]]) -> WeekTimeRange:
    """Earliest open and latest close across the open days of the week"""
    start_minutes = 24 * 60
    end_minutes = 0

    for day in DAYS_OF_WEEK:
        day_hours = hours.get(day) or {}
        if day_hours.get("closed"):
            continue
        open_minutes = _clamped_minutes(day_hours.get("open") or DEFAULT_OPEN, DEFAULT_OPEN)
        close_minutes = _clamped_minutes(day_hours.get("close") or DEFAULT_CLOSE, DEFAULT_CLOSE)
        start_minutes = min(start_minutes, open_minutes)
        end_minutes = max(end_minutes, close_minutes)

    if start_minutes >= end_minutes:
        start_minutes = time_to_minutes(DEFAULT_OPEN)
        end_minutes = time_to_minutes(DEFAULT_CLOSE)

    return WeekTimeRange(
        start_hour=start_minutes // 60,
        start_minute=start_minutes % 60,
        end_hour=end_minutes // 60,
        end_minute=end_minutes % 60,
        start_minutes=start_minutes,
        end_minutes=end_minutes,
    )


def build_calendar_card(
    appointment: Any,
    day_start_hour: int = DEFAULT_DAY_START_HOUR,
    row_height_px: int = CALENDAR_ROW_HEIGHT_PX,
) -> dict[str, Any]:
    """
    Flatten an Appointment row (with its pet, client and service relations) into
    the card the day view renders.
    """
    pet = appointment.pet
    client = appointment.client
    service = appointment.service

    start_time = normalize_time(appointment.start_time)
    duration = service.duration_minutes if service else DEFAULT_DURATION_MINUTES
    if appointment.end_time:
        end_time = normalize_time(appointment.end_time)
    else:
        end_time = compute_end_time(start_time, duration)

    owner_name = "Unknown Owner"
    if client:
        owner_name = f"{client.first_name or ''} {client.last_name or ''}".strip() or owner_name

    service_name = service.name if service else "Unknown Service"
    position = calculate_appointment_position(start_time, end_time, day_start_hour, row_height_px)

    return {
        "id": appointment.id,
        "pet_id": appointment.pet_id,
        "pet_name": pet.name if pet else "Unknown Pet",
        "breed": (pet.breed if pet else None) or "",
        "pet_photo": pet.photo_url if pet else None,
        "owner_name": owner_name,
        "owner_phone": client.phone if client else "",
        "service": service_name,
        "service_size": extract_service_size(service_name),
        "duration": duration,
        "start_time": start_time,
        "end_time": end_time,
        "color": (service.color if service else None) or "blue",
        "employee_id": appointment.employee_id or "",
        "status": appointment.status,
        "notes": appointment.notes,
        "price": appointment.total_price or (service.price if service else 0) or 0,
        "top": position.top,
        "height": position.height,
    }


def build_day_layout(
    appointments: list[Any],
    day_start_hour: int = DEFAULT_DAY_START_HOUR,
    row_height_px: int = CALENDAR_ROW_HEIGHT_PX,
) -> list[dict[str, Any]]:
    """Calendar cards for one day, ordered by start time"""
    cards = [build_calendar_card(a, day_start_hour, row_height_px) for a in appointments]
    return sorted(cards, key=lambda card: time_to_minutes(card["start_time"]))
