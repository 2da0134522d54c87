"""Scheduling service - services catalog, appointments, day view and business hours"""

import logging
from dataclasses import asdict
from typing import Any, Optional

from fastapi import HTTPException
from sqlalchemy.orm import Session

from ...config import CALENDAR_ROW_HEIGHT_PX, DEFAULT_DAY_END_HOUR
from ...models import Appointment, Service
from ...shared.validators import is_valid_date, is_valid_time
from ...utils.sanitization import clean_text_input
from .calendar import (
    DAYS_OF_WEEK,
    build_day_layout,
    compute_end_time,
    generate_time_slots,
    get_week_time_range,
    parse_business_hours,
    serialize_business_hours,
)
from .repository import AppointmentRepository, BusinessRepository, ServiceRepository
from .schemas import AppointmentCreate, AppointmentUpdate, ServiceCreate, ServiceUpdate
from .validation import validate_appointment_payload, validate_service_payload

logger = logging.getLogger(__name__)

SERVICE_FIELDS = ("name", "description", "price", "duration_minutes", "is_active", "category", "color")
APPOINTMENT_FIELDS = (
    "client_id",
    "pet_id",
    "service_id",
    "employee_id",
    "appointment_date",
    "start_time",
    "end_time",
    "status",
    "notes",
    "total_price",
)


def _reject_if_invalid(result, entity: str) -> None:
    if not result:
        logger.warning(f"Rejected {entity} payload: {result.error}")
        raise HTTPException(status_code=400, detail=result.error)


def _clean_notes(value: Optional[str]) -> Optional[str]:
    try:
        return clean_text_input(value, max_length=2000)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e)) from e


class ServiceCatalogService:
    """Grooming/daycare services offered by a business"""

    def __init__(self, db: Session):
        self.db = db
        self.repo = ServiceRepository()

    def get_services(self, business_id: str, active_only: bool = False) -> list[Service]:
        return self.repo.get_services(self.db, business_id, active_only)

    def get_service(self, service_id: str, business_id: str) -> Service:
        service = self.repo.get_service_by_id(self.db, service_id, business_id)
        if not service:
            raise HTTPException(status_code=404, detail="Service not found")
        return service

    def create_service(self, data: ServiceCreate, business_id: str) -> Service:
        payload = data.model_dump()
        _reject_if_invalid(validate_service_payload(payload), "service")

        payload["name"] = payload["name"].strip()
        service = self.repo.create_service(self.db, business_id, **payload)
        logger.info(f"Created service {service.id} ({service.name}) for business {business_id}")
        return service

    def update_service(self, service_id: str, data: ServiceUpdate, business_id: str) -> Service:
        service = self.get_service(service_id, business_id)
        updates = data.model_dump(exclude_unset=True)

        merged = {**{f: getattr(service, f) for f in SERVICE_FIELDS}, **updates}
        _reject_if_invalid(validate_service_payload(merged), "service")

        service = self.repo.update_service(self.db, service, **updates)
        logger.info(f"Updated service {service.id}")
        return service

    def delete_service(self, service_id: str, business_id: str) -> dict:
        service = self.get_service(service_id, business_id)
        self.repo.delete_service(self.db, service)
        logger.info(f"Deleted service {service_id}")
        return {"message": "Service deleted"}


class AppointmentService:
    def __init__(self, db: Session):
        self.db = db
        self.repo = AppointmentRepository()
        self.services = ServiceRepository()
        self.businesses = BusinessRepository()

    def get_appointments(self, business_id: str, appointment_date: Optional[str] = None) -> list[Appointment]:
        if appointment_date and not is_valid_date(appointment_date):
            raise HTTPException(status_code=400, detail="Appointment date must be YYYY-MM-DD.")
        return self.repo.get_appointments(self.db, business_id, appointment_date)

    def get_appointment(self, appointment_id: str, business_id: str) -> Appointment:
        appointment = self.repo.get_appointment_by_id(self.db, appointment_id, business_id)
        if not appointment:
            raise HTTPException(status_code=404, detail="Appointment not found")
        return appointment

    def _check_references(self, payload: dict[str, Any], business_id: str) -> Optional[Service]:
        if not self.repo.client_exists(self.db, payload["client_id"], business_id):
            raise HTTPException(status_code=404, detail="Client not found")
        if not self.repo.pet_exists(self.db, payload["pet_id"], business_id):
            raise HTTPException(status_code=404, detail="Pet not found")
        service = self.services.get_service_by_id(self.db, payload["service_id"], business_id)
        if not service:
            raise HTTPException(status_code=404, detail="Service not found")
        return service

    def create_appointment(self, data: AppointmentCreate, business_id: str) -> Appointment:
        payload = data.model_dump()

        if not payload["end_time"] and payload["start_time"] and is_valid_time(payload["start_time"]):
            service = self.services.get_service_by_id(self.db, payload["service_id"] or "", business_id)
            payload["end_time"] = compute_end_time(
                payload["start_time"], service.duration_minutes if service else None
            )

        _reject_if_invalid(validate_appointment_payload(payload), "appointment")
        service = self._check_references(payload, business_id)

        if payload["total_price"] is None:
            payload["total_price"] = service.price
        payload["notes"] = _clean_notes(payload["notes"])

        appointment = self.repo.create_appointment(self.db, business_id, **payload)
        logger.info(
            f"Created appointment {appointment.id} on {appointment.appointment_date} "
            f"{appointment.start_time}-{appointment.end_time}"
        )
        return appointment

    def update_appointment(self, appointment_id: str, data: AppointmentUpdate, business_id: str) -> Appointment:
        appointment = self.get_appointment(appointment_id, business_id)
        updates = data.model_dump(exclude_unset=True)

        merged = {**{f: getattr(appointment, f) for f in APPOINTMENT_FIELDS}, **updates}
        _reject_if_invalid(validate_appointment_payload(merged), "appointment")
        if {"client_id", "pet_id", "service_id"} & updates.keys():
            self._check_references(merged, business_id)
        if "notes" in updates:
            updates["notes"] = _clean_notes(updates["notes"])

        appointment = self.repo.update_appointment(self.db, appointment, **updates)
        logger.info(f"Updated appointment {appointment.id} (status: {appointment.status})")
        return appointment

    def delete_appointment(self, appointment_id: str, business_id: str) -> dict:
        appointment = self.get_appointment(appointment_id, business_id)
        self.repo.delete_appointment(self.db, appointment)
        logger.info(f"Deleted appointment {appointment_id}")
        return {"message": "Appointment deleted"}

    def get_day_view(self, appointment_date: str, business_id: str, day_start_hour: int) -> dict[str, Any]:
        """Appointments of one day laid out on the hourly grid"""
        if not is_valid_date(appointment_date or ""):
            raise HTTPException(status_code=400, detail="Appointment date must be YYYY-MM-DD.")
        if not 0 <= day_start_hour <= 23:
            raise HTTPException(status_code=400, detail="Day start hour must be 0-23.")

        appointments = self.repo.get_appointments(self.db, business_id, appointment_date)
        end_hour = max(day_start_hour, DEFAULT_DAY_END_HOUR)
        return {
            "date": appointment_date,
            "day_start_hour": day_start_hour,
            "row_height_px": CALENDAR_ROW_HEIGHT_PX,
            "time_slots": [asdict(slot) for slot in generate_time_slots(day_start_hour, end_hour)],
            "appointments": build_day_layout(appointments, day_start_hour, CALENDAR_ROW_HEIGHT_PX),
        }

    def get_business_hours(self, business_id: str) -> dict[str, Any]:
        business = self.businesses.get_business(self.db, business_id)
        if not business:
            raise HTTPException(status_code=404, detail="Business not found")
        return self._hours_response(parse_business_hours(business.business_hours))

    def update_business_hours(self, business_id: str, hours: dict[str, dict[str, Any]]) -> dict[str, Any]:
        business = self.businesses.get_business(self.db, business_id)
        if not business:
            raise HTTPException(status_code=404, detail="Business not found")

        for day, day_hours in hours.items():
            if day not in DAYS_OF_WEEK:
                raise HTTPException(status_code=400, detail=f"Unknown day: {day}")
            if not is_valid_time(day_hours.get("open")) or not is_valid_time(day_hours.get("close")):
                raise HTTPException(status_code=400, detail=f"Invalid hours for {day}.")

        merged = {**parse_business_hours(business.business_hours), **hours}
        self.businesses.save_business_hours(self.db, business, serialize_business_hours(merged))
        logger.info(f"Updated business hours for business {business_id}")
        return self._hours_response(merged)

    @staticmethod
    def _hours_response(hours: dict[str, dict[str, Any]]) -> dict[str, Any]:
        week_range = get_week_time_range(hours)
        return {
            "hours": hours,
            "start_hour": week_range.start_hour,
            "start_minute": week_range.start_minute,
            "end_hour": week_range.end_hour,
            "end_minute": week_range.end_minute,
        }
