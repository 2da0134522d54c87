"""Field checks for services and appointments"""

from typing import Any

from ...shared.validators import (
    VALID,
    ValidationResult,
    invalid,
    is_blank,
    is_negative,
    is_uuid,
    is_valid_date,
    is_valid_time,
)

APPOINTMENT_STATUSES = {"scheduled", "confirmed", "in_progress", "completed", "canceled", "no_show"}


def validate_service_payload(payload: dict[str, Any]) -> ValidationResult:
    if is_blank(payload.get("name")):
        return invalid("Service name is required.")

    price = payload.get("price")
    if price is None or price < 0:
        return invalid("Price must be zero or greater.")

    duration = payload.get("duration_minutes")
    if duration is None or duration < 1:
        return invalid("Duration must be at least 1 minute.")

    return VALID


def validate_appointment_payload(payload: dict[str, Any]) -> ValidationResult:
    if not is_uuid(payload.get("client_id")):
        return invalid("Valid client is required.")
    if not is_uuid(payload.get("pet_id")):
        return invalid("Valid pet is required.")
    if not is_uuid(payload.get("service_id")):
        return invalid("Valid service is required.")

    if is_blank(payload.get("appointment_date")) or not is_valid_date(payload["appointment_date"]):
        return invalid("Appointment date must be YYYY-MM-DD.")
    if is_blank(payload.get("start_time")) or not is_valid_time(payload["start_time"]):
        return invalid("Start time must be HH:MM or HH:MM:SS.")
    if is_blank(payload.get("end_time")) or not is_valid_time(payload["end_time"]):
        return invalid("End time must be HH:MM or HH:MM:SS.")

    status = payload.get("status")
    if status is not None and status not in APPOINTMENT_STATUSES:
        return invalid("Invalid appointment status.")

    if is_negative(payload.get("total_price")):
        return invalid("Total price cannot be negative.")

    return VALID
