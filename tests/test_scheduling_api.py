import json

import pytest

from pethub.models import Appointment


@pytest.fixture
def appointment_payload(sample_client, sample_pet, sample_service):
    return {
        "client_id": sample_client.id,
        "pet_id": sample_pet.id,
        "service_id": sample_service.id,
        "appointment_date": "2026-03-14",
        "start_time": "09:00",
    }


class TestServicesApi:
    def test_create_and_list(self, api, auth_headers):
        response = api.post(
            "/services", json={"name": "Nail Trim", "price": 15, "duration_minutes": 15}, headers=auth_headers
        )
        assert response.status_code == 201

        api.post(
            "/services",
            json={"name": "Old Package", "price": 40, "duration_minutes": 60, "is_active": False},
            headers=auth_headers,
        )

        assert len(api.get("/services", headers=auth_headers).json()) == 2
        active = api.get("/services", params={"active_only": True}, headers=auth_headers).json()
        assert [s["name"] for s in active] == ["Nail Trim"]

    def test_create_rejects_zero_duration(self, api, auth_headers):
        response = api.post("/services", json={"name": "Bath", "price": 20, "duration_minutes": 0}, headers=auth_headers)
        assert response.status_code == 400
        assert response.json()["detail"] == "Duration must be at least 1 minute."

    def test_update_and_delete(self, api, auth_headers, sample_service):
        response = api.patch(f"/services/{sample_service.id}", json={"price": 70}, headers=auth_headers)
        assert response.json()["price"] == 70
        assert response.json()["duration_minutes"] == 90

        assert api.patch(f"/services/{sample_service.id}", json={"price": -1}, headers=auth_headers).status_code == 400
        assert api.delete(f"/services/{sample_service.id}", headers=auth_headers).status_code == 200
        assert api.get("/services", headers=auth_headers).json() == []


class TestAppointmentsApi:
    def test_end_time_from_service_duration(self, api, auth_headers, appointment_payload):
        response = api.post("/appointments", json=appointment_payload, headers=auth_headers)

        assert response.status_code == 201
        body = response.json()
        assert body["end_time"] == "10:30"
        assert body["total_price"] == 65.0
        assert body["status"] == "scheduled"

    def test_explicit_end_time_and_price(self, api, auth_headers, appointment_payload):
        appointment_payload.update({"start_time": "9:00:00", "end_time": "11:00", "total_price": 80})
        body = api.post("/appointments", json=appointment_payload, headers=auth_headers).json()
        assert body["end_time"] == "11:00"
        assert body["total_price"] == 80

    def test_invalid_start_time(self, api, auth_headers, appointment_payload):
        appointment_payload["start_time"] = "25:00"
        response = api.post("/appointments", json=appointment_payload, headers=auth_headers)
        assert response.status_code == 400
        assert response.json()["detail"] == "Start time must be HH:MM or HH:MM:SS."

    def test_unknown_pet(self, api, auth_headers, appointment_payload, random_uuid):
        appointment_payload["pet_id"] = random_uuid
        response = api.post("/appointments", json=appointment_payload, headers=auth_headers)
        assert response.status_code == 404
        assert response.json()["detail"] == "Pet not found"

    def test_list_by_date(self, api, auth_headers, appointment_payload):
        api.post("/appointments", json=appointment_payload, headers=auth_headers)
        api.post("/appointments", json={**appointment_payload, "appointment_date": "2026-03-15"}, headers=auth_headers)

        assert len(api.get("/appointments", headers=auth_headers).json()) == 2
        day = api.get("/appointments", params={"date": "2026-03-15"}, headers=auth_headers).json()
        assert [a["appointment_date"] for a in day] == ["2026-03-15"]

        assert api.get("/appointments", params={"date": "15/03/2026"}, headers=auth_headers).status_code == 400

    def test_update_status_and_delete(self, api, auth_headers, appointment_payload):
        appointment_id = api.post("/appointments", json=appointment_payload, headers=auth_headers).json()["id"]

        response = api.patch(f"/appointments/{appointment_id}", json={"status": "completed"}, headers=auth_headers)
        assert response.json()["status"] == "completed"
        assert api.patch(f"/appointments/{appointment_id}", json={"status": "lost"}, headers=auth_headers).status_code == 400

        assert api.delete(f"/appointments/{appointment_id}", headers=auth_headers).status_code == 200
        assert api.get(f"/appointments/{appointment_id}", headers=auth_headers).status_code == 404

    def test_explicit_null_clears_optional_fields(self, api, auth_headers, appointment_payload, random_uuid):
        appointment_payload.update({"notes": "Sensitive ears", "employee_id": random_uuid})
        appointment_id = api.post("/appointments", json=appointment_payload, headers=auth_headers).json()["id"]

        response = api.patch(
            f"/appointments/{appointment_id}",
            json={"notes": None, "employee_id": None, "status": None},
            headers=auth_headers,
        )

        assert response.status_code == 200
        body = response.json()
        assert (body["notes"], body["employee_id"]) == (None, None)
        assert body["status"] == "scheduled"


class TestDayView:
    def test_cards_positioned_and_sorted(self, api, auth_headers, appointment_payload):
        api.post("/appointments", json={**appointment_payload, "start_time": "13:00"}, headers=auth_headers)
        api.post("/appointments", json=appointment_payload, headers=auth_headers)

        response = api.get("/appointments/day-view", params={"date": "2026-03-14"}, headers=auth_headers)

        assert response.status_code == 200
        view = response.json()
        assert view["day_start_hour"] == 7
        assert view["row_height_px"] == 80
        assert view["time_slots"][0] == {"hour": 7, "label": "7AM", "time": "07:00"}

        cards = view["appointments"]
        assert [c["start_time"] for c in cards] == ["09:00", "13:00"]
        assert (cards[0]["top"], cards[0]["height"]) == (160, 120)
        assert cards[0]["pet_name"] == "Coco"
        assert cards[0]["owner_name"] == "Ana Rivera"
        assert cards[0]["service_size"] == "Large"

    def test_custom_start_hour(self, api, auth_headers, appointment_payload):
        api.post("/appointments", json=appointment_payload, headers=auth_headers)
        view = api.get(
            "/appointments/day-view", params={"date": "2026-03-14", "day_start_hour": 9}, headers=auth_headers
        ).json()
        assert view["appointments"][0]["top"] == 0

    def test_stored_seconds_are_dropped(self, api, auth_headers, db_session, business, sample_client, sample_pet, sample_service):
        db_session.add(
            Appointment(
                business_id=business.id,
                client_id=sample_client.id,
                pet_id=sample_pet.id,
                service_id=sample_service.id,
                appointment_date="2026-03-14",
                start_time="08:30:00",
                end_time="09:15:00",
            )
        )
        db_session.commit()

        card = api.get("/appointments/day-view", params={"date": "2026-03-14"}, headers=auth_headers).json()[
            "appointments"
        ][0]
        assert (card["start_time"], card["end_time"]) == ("08:30", "09:15")
        assert (card["top"], card["height"]) == (120, 60)

    @pytest.mark.parametrize("params", [{"date": "tomorrow"}, {"date": "2026-03-14", "day_start_hour": 24}])
    def test_bad_params(self, api, auth_headers, params):
        assert api.get("/appointments/day-view", params=params, headers=auth_headers).status_code == 400


class TestBusinessHoursApi:
    def test_defaults(self, api, auth_headers):
        body = api.get("/appointments/business-hours", headers=auth_headers).json()
        assert body["hours"]["monday"] == {"closed": False, "open": "09:00", "close": "18:00"}
        assert (body["start_hour"], body["end_hour"]) == (9, 18)

    def test_update_merges_days(self, api, auth_headers, db_session, business):
        response = api.put(
            "/appointments/business-hours",
            json={"saturday": {"open": "08:00", "close": "14:30"}, "sunday": {"closed": True}},
            headers=auth_headers,
        )

        assert response.status_code == 200
        body = response.json()
        assert body["hours"]["sunday"]["closed"] is True
        assert body["hours"]["monday"]["open"] == "09:00"
        assert (body["start_hour"], body["start_minute"]) == (8, 0)
        assert (body["end_hour"], body["end_minute"]) == (18, 0)

        db_session.refresh(business)
        assert json.loads(business.business_hours)["saturday"]["close"] == "14:30"

    def test_update_rejects_unknown_day(self, api, auth_headers):
        response = api.put("/appointments/business-hours", json={"funday": {"open": "08:00"}}, headers=auth_headers)
        assert response.status_code == 400
        assert response.json()["detail"] == "Unknown day: funday"

    def test_update_rejects_bad_time(self, api, auth_headers):
        response = api.put("/appointments/business-hours", json={"monday": {"open": "8am"}}, headers=auth_headers)
        assert response.status_code == 400
