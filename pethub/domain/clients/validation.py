"""
Field checks for client and pet records, run before anything is written.
Each validator returns the first failing rule's message.
"""

from datetime import date
from typing import Any

from ...shared.validators import (
    VALID,
    ValidationResult,
    invalid,
    is_blank,
    is_negative,
    is_uuid,
    is_valid_email,
)

PET_SPECIES = {"dog", "cat", "other"}
PET_VACCINATION_STATUSES = {"up_to_date", "out_of_date", "unknown"}
MIN_BIRTH_YEAR = 1900


def validate_client_payload(payload: dict[str, Any]) -> ValidationResult:
    if is_blank(payload.get("first_name")):
        return invalid("First name is required.")
    if is_blank(payload.get("last_name")):
        return invalid("Last name is required.")
    if is_blank(payload.get("phone")):
        return invalid("Phone is required.")

    email = payload.get("email")
    if email is not None and email != "" and not is_valid_email(email):
        return invalid("Invalid email format.")

    return VALID


def validate_pet_payload(payload: dict[str, Any]) -> ValidationResult:
    if not is_uuid(payload.get("client_id")):
        return invalid("Valid client is required.")
    if is_blank(payload.get("name")):
        return invalid("Pet name is required.")
    if payload.get("species") not in PET_SPECIES:
        return invalid("Species must be dog, cat, or other.")

    birth_month = payload.get("birth_month")
    if birth_month is not None and not 1 <= birth_month <= 12:
        return invalid("Birth month must be 1-12.")

    birth_year = payload.get("birth_year")
    if birth_year is not None and not MIN_BIRTH_YEAR <= birth_year <= date.today().year:
        return invalid("Birth year is invalid.")

    if is_negative(payload.get("weight")):
        return invalid("Weight cannot be negative.")

    vaccination_status = payload.get("vaccination_status")
    if vaccination_status and vaccination_status not in PET_VACCINATION_STATUSES:
        return invalid("Invalid vaccination status.")

    return VALID
