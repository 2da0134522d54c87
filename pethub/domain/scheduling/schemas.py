"""Scheduling domain schemas - services, appointments and the day view"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict


class ServiceCreate(BaseModel):
    name: str
    description: Optional[str] = None
    price: Optional[float] = None  # dollars
    duration_minutes: Optional[int] = None
    is_active: bool = True
    category: Optional[str] = None
    color: Optional[str] = None


class ServiceUpdate(BaseModel):
    name: Optional[str] = None
    description: Optional[str] = None
    price: Optional[float] = None
    duration_minutes: Optional[int] = None
    is_active: Optional[bool] = None
    category: Optional[str] = None
    color: Optional[str] = None


class ServiceResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str
    description: Optional[str] = None
    price: float
    duration_minutes: int
    is_active: bool = True
    category: Optional[str] = None
    color: Optional[str] = None


class AppointmentCreate(BaseModel):
    client_id: Optional[str] = None
    pet_id: Optional[str] = None
    service_id: Optional[str] = None
    employee_id: Optional[str] = None
    appointment_date: Optional[str] = None
    start_time: Optional[str] = None
    end_time: Optional[str] = None  # computed from the service duration when omitted
    status: str = "scheduled"
    notes: Optional[str] = None
    total_price: Optional[float] = None


class AppointmentUpdate(BaseModel):
    client_id: Optional[str] = None
    pet_id: Optional[str] = None
    service_id: Optional[str] = None
    employee_id: Optional[str] = None
    appointment_date: Optional[str] = None
    start_time: Optional[str] = None
    end_time: Optional[str] = None
    status: Optional[str] = None
    notes: Optional[str] = None
    total_price: Optional[float] = None


class AppointmentResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    client_id: str
    pet_id: str
    service_id: str
    employee_id: Optional[str] = None
    appointment_date: str
    start_time: str
    end_time: str
    status: str
    notes: Optional[str] = None
    total_price: Optional[float] = None
    created_at: Optional[datetime] = None


class CalendarCard(BaseModel):
    id: str
    pet_id: str
    pet_name: str
    breed: str
    pet_photo: Optional[str] = None
    owner_name: str
    owner_phone: str
    service: str
    service_size: str
    duration: int
    start_time: str
    end_time: str
    color: str
    employee_id: str
    status: str
    notes: Optional[str] = None
    price: float
    top: float
    height: float


class TimeSlotResponse(BaseModel):
    hour: int
    label: str
    time: str


class DayViewResponse(BaseModel):
    date: str
    day_start_hour: int
    row_height_px: int
    time_slots: list[TimeSlotResponse]
    appointments: list[CalendarCard]


class DayHours(BaseModel):
    closed: bool = False
    open: str = "09:00"
    close: str = "18:00"


class BusinessHoursResponse(BaseModel):
    hours: dict[str, DayHours]
    start_hour: int
    start_minute: int
    end_hour: int
    end_minute: int
