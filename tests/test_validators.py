import uuid

import pytest

from pethub.domain.clients.validation import validate_client_payload, validate_pet_payload
from pethub.domain.scheduling.validation import validate_appointment_payload, validate_service_payload
from pethub.shared.validators import (
    VALID,
    invalid,
    is_blank,
    is_uuid,
    is_uuid_or_null,
    is_valid_date,
    is_valid_email,
    is_valid_time,
)


def new_id() -> str:
    return str(uuid.uuid4())


class TestSharedValidators:
    """Format checks shared by every payload validator"""

    def test_validation_result_truthiness(self):
        assert VALID
        assert not invalid("nope")
        assert invalid("nope").as_dict() == {"valid": False, "error": "nope"}
        assert VALID.as_dict() == {"valid": True}

    def test_uuid(self):
        assert is_uuid(new_id())
        assert is_uuid(new_id().upper())
        assert not is_uuid("not-a-uuid")
        assert not is_uuid(None)
        assert not is_uuid(123)
        # Version nibble must be 1-5
        assert not is_uuid("00000000-0000-0000-0000-000000000000")

    def test_uuid_or_null(self):
        assert is_uuid_or_null(None)
        assert is_uuid_or_null("")
        assert is_uuid_or_null(new_id())
        assert not is_uuid_or_null("abc")

    def test_blank(self):
        assert is_blank(None)
        assert is_blank("   ")
        assert is_blank(42)
        assert not is_blank(" Ana ")

    def test_email(self):
        assert is_valid_email("ana@example.com")
        assert not is_valid_email("ana@example")
        assert not is_valid_email("ana example@x.com")

    @pytest.mark.parametrize("value", ["9:00", "09:00", "9:00:00", "23:59", "0:00", "14:30:15"])
    def test_valid_times(self, value):
        assert is_valid_time(value)

    @pytest.mark.parametrize("value", ["25:00", "24:00", "9:60", "9", "09:00:60", "", None, "9am"])
    def test_invalid_times(self, value):
        assert not is_valid_time(value)

    def test_date(self):
        assert is_valid_date("2026-01-05")
        assert not is_valid_date("01/05/2026")
        assert not is_valid_date("2026-1-5")


class TestClientValidation:
    @pytest.fixture
    def client_payload(self):
        return {"first_name": "Ana", "last_name": "Rivera", "phone": "(787) 555-0101", "email": "ana@example.com"}

    def test_valid_client(self, client_payload):
        assert validate_client_payload(client_payload)

    def test_email_is_optional(self, client_payload):
        client_payload["email"] = ""
        assert validate_client_payload(client_payload)
        del client_payload["email"]
        assert validate_client_payload(client_payload)

    @pytest.mark.parametrize(
        "field,message",
        [
            ("first_name", "First name is required."),
            ("last_name", "Last name is required."),
            ("phone", "Phone is required."),
        ],
    )
    def test_missing_required_field(self, client_payload, field, message):
        del client_payload[field]
        result = validate_client_payload(client_payload)
        assert not result
        assert result.error == message

    def test_whitespace_only_name_is_missing(self, client_payload):
        client_payload["first_name"] = "   "
        assert validate_client_payload(client_payload).error == "First name is required."

    def test_bad_email(self, client_payload):
        client_payload["email"] = "ana-at-example.com"
        assert validate_client_payload(client_payload).error == "Invalid email format."


class TestPetValidation:
    @pytest.fixture
    def pet_payload(self):
        return {"client_id": new_id(), "name": "Coco", "species": "dog", "birth_month": 3, "birth_year": 2020}

    def test_valid_pet(self, pet_payload):
        assert validate_pet_payload(pet_payload)

    def test_client_must_be_uuid(self, pet_payload):
        pet_payload["client_id"] = "42"
        assert validate_pet_payload(pet_payload).error == "Valid client is required."

    def test_species(self, pet_payload):
        pet_payload["species"] = "parrot"
        assert validate_pet_payload(pet_payload).error == "Species must be dog, cat, or other."

    @pytest.mark.parametrize("month", [0, 13])
    def test_birth_month_range(self, pet_payload, month):
        pet_payload["birth_month"] = month
        assert validate_pet_payload(pet_payload).error == "Birth month must be 1-12."

    @pytest.mark.parametrize("year", [1899, 3000])
    def test_birth_year_range(self, pet_payload, year):
        pet_payload["birth_year"] = year
        assert validate_pet_payload(pet_payload).error == "Birth year is invalid."

    def test_negative_weight(self, pet_payload):
        pet_payload["weight"] = -1
        assert validate_pet_payload(pet_payload).error == "Weight cannot be negative."

    def test_vaccination_status(self, pet_payload):
        pet_payload["vaccination_status"] = ""
        assert validate_pet_payload(pet_payload)
        pet_payload["vaccination_status"] = "maybe"
        assert validate_pet_payload(pet_payload).error == "Invalid vaccination status."


class TestServiceValidation:
    def test_valid_service(self):
        assert validate_service_payload({"name": "Bath", "price": 0, "duration_minutes": 1})

    def test_price_required(self):
        assert validate_service_payload({"name": "Bath", "duration_minutes": 30}).error == (
            "Price must be zero or greater."
        )

    def test_negative_price(self):
        result = validate_service_payload({"name": "Bath", "price": -5, "duration_minutes": 30})
        assert result.error == "Price must be zero or greater."

    def test_duration(self):
        result = validate_service_payload({"name": "Bath", "price": 20, "duration_minutes": 0})
        assert result.error == "Duration must be at least 1 minute."

    def test_name(self):
        assert validate_service_payload({"name": "", "price": 20, "duration_minutes": 30}).error == (
            "Service name is required."
        )


class TestAppointmentValidation:
    @pytest.fixture
    def appointment_payload(self):
        return {
            "client_id": new_id(),
            "pet_id": new_id(),
            "service_id": new_id(),
            "appointment_date": "2026-03-14",
            "start_time": "09:00",
            "end_time": "10:30",
        }

    def test_valid_appointment(self, appointment_payload):
        assert validate_appointment_payload(appointment_payload)

    def test_start_time_without_leading_zero_and_with_seconds(self, appointment_payload):
        appointment_payload["start_time"] = "9:00:00"
        assert validate_appointment_payload(appointment_payload)

    def test_start_time_hour_out_of_range(self, appointment_payload):
        appointment_payload["start_time"] = "25:00"
        result = validate_appointment_payload(appointment_payload)
        assert not result
        assert result.error == "Start time must be HH:MM or HH:MM:SS."

    def test_end_time_checked(self, appointment_payload):
        appointment_payload["end_time"] = "10:75"
        assert validate_appointment_payload(appointment_payload).error == "End time must be HH:MM or HH:MM:SS."

    @pytest.mark.parametrize(
        "field,message",
        [
            ("client_id", "Valid client is required."),
            ("pet_id", "Valid pet is required."),
            ("service_id", "Valid service is required."),
        ],
    )
    def test_references_must_be_uuids(self, appointment_payload, field, message):
        appointment_payload[field] = "abc"
        assert validate_appointment_payload(appointment_payload).error == message

    def test_date_format(self, appointment_payload):
        appointment_payload["appointment_date"] = "03/14/2026"
        assert validate_appointment_payload(appointment_payload).error == "Appointment date must be YYYY-MM-DD."

    def test_status(self, appointment_payload):
        appointment_payload["status"] = "no_show"
        assert validate_appointment_payload(appointment_payload)
        appointment_payload["status"] = "lost"
        assert validate_appointment_payload(appointment_payload).error == "Invalid appointment status."

    def test_total_price(self, appointment_payload):
        appointment_payload["total_price"] = -0.01
        assert validate_appointment_payload(appointment_payload).error == "Total price cannot be negative."
