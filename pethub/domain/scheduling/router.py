"""Scheduling router - services catalog, appointments and the calendar day view"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from ...auth import get_current_business_id
from ...config import DEFAULT_DAY_START_HOUR
from ...database import get_db
from .schemas import (
    AppointmentCreate,
    AppointmentResponse,
    AppointmentUpdate,
    BusinessHoursResponse,
    DayHours,
    DayViewResponse,
    ServiceCreate,
    ServiceResponse,
    ServiceUpdate,
)
from .service import AppointmentService, ServiceCatalogService

logger = logging.getLogger(__name__)

services_router = APIRouter(prefix="/services", tags=["Services"])
router = APIRouter(prefix="/appointments", tags=["Appointments"])


def get_catalog_service(db: Session = Depends(get_db)) -> ServiceCatalogService:
    return ServiceCatalogService(db)


def get_appointment_service(db: Session = Depends(get_db)) -> AppointmentService:
    return AppointmentService(db)


# ============================================================================
# SERVICES CATALOG
# ============================================================================


@services_router.get("", response_model=list[ServiceResponse])
async def get_services(
    active_only: bool = Query(False),
    business_id: str = Depends(get_current_business_id),
    service: ServiceCatalogService = Depends(get_catalog_service),
):
    return service.get_services(business_id, active_only)


@services_router.post("", response_model=ServiceResponse, status_code=201)
async def create_service(
    data: ServiceCreate,
    business_id: str = Depends(get_current_business_id),
    service: ServiceCatalogService = Depends(get_catalog_service),
):
    return service.create_service(data, business_id)


@services_router.patch("/{service_id}", response_model=ServiceResponse)
async def update_service(
    service_id: str,
    data: ServiceUpdate,
    business_id: str = Depends(get_current_business_id),
    service: ServiceCatalogService = Depends(get_catalog_service),
):
    return service.update_service(service_id, data, business_id)


@services_router.delete("/{service_id}")
async def delete_service(
    service_id: str,
    business_id: str = Depends(get_current_business_id),
    service: ServiceCatalogService = Depends(get_catalog_service),
):
    return service.delete_service(service_id, business_id)


# ============================================================================
# APPOINTMENTS
# ============================================================================


@router.get("", response_model=list[AppointmentResponse])
async def get_appointments(
    date: Optional[str] = Query(None, description="YYYY-MM-DD"),
    business_id: str = Depends(get_current_business_id),
    service: AppointmentService = Depends(get_appointment_service),
):
    return service.get_appointments(business_id, date)


@router.get("/day-view", response_model=DayViewResponse)
async def get_day_view(
    date: str = Query(..., description="YYYY-MM-DD"),
    day_start_hour: int = Query(DEFAULT_DAY_START_HOUR),
    business_id: str = Depends(get_current_business_id),
    service: AppointmentService = Depends(get_appointment_service),
):
    """Appointments of one day with their pixel positions on the calendar grid"""
    return service.get_day_view(date, business_id, day_start_hour)


@router.get("/business-hours", response_model=BusinessHoursResponse)
async def get_business_hours(
    business_id: str = Depends(get_current_business_id),
    service: AppointmentService = Depends(get_appointment_service),
):
    return service.get_business_hours(business_id)


@router.put("/business-hours", response_model=BusinessHoursResponse)
async def update_business_hours(
    hours: dict[str, DayHours],
    business_id: str = Depends(get_current_business_id),
    service: AppointmentService = Depends(get_appointment_service),
):
    return service.update_business_hours(
        business_id, {day: value.model_dump() for day, value in hours.items()}
    )


@router.get("/{appointment_id}", response_model=AppointmentResponse)
async def get_appointment(
    appointment_id: str,
    business_id: str = Depends(get_current_business_id),
    service: AppointmentService = Depends(get_appointment_service),
):
    return service.get_appointment(appointment_id, business_id)


@router.post("", response_model=AppointmentResponse, status_code=201)
async def create_appointment(
    data: AppointmentCreate,
    business_id: str = Depends(get_current_business_id),
    service: AppointmentService = Depends(get_appointment_service),
):
    return service.create_appointment(data, business_id)


@router.patch("/{appointment_id}", response_model=AppointmentResponse)
async def update_appointment(
    appointment_id: str,
    data: AppointmentUpdate,
    business_id: str = Depends(get_current_business_id),
    service: AppointmentService = Depends(get_appointment_service),
):
    return service.update_appointment(appointment_id, data, business_id)


@router.delete("/{appointment_id}")
async def delete_appointment(
    appointment_id: str,
    business_id: str = Depends(get_current_business_id),
    service: AppointmentService = Depends(get_appointment_service),
):
    return service.delete_appointment(appointment_id, business_id)
