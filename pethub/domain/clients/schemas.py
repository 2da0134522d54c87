"""Client domain schemas - Pydantic models for clients and their pets"""

from datetime import date, datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict


class ClientCreate(BaseModel):
    """Schema for creating a new client"""

    first_name: str
    last_name: str
    phone: str
    email: Optional[str] = None
    address: Optional[str] = None
    city: Optional[str] = None
    state: Optional[str] = None
    zip_code: Optional[str] = None
    notes: Optional[str] = None


class ClientUpdate(BaseModel):
    """Schema for updating an existing client"""

    first_name: Optional[str] = None
    last_name: Optional[str] = None
    phone: Optional[str] = None
    email: Optional[str] = None
    address: Optional[str] = None
    city: Optional[str] = None
    state: Optional[str] = None
    zip_code: Optional[str] = None
    notes: Optional[str] = None


class ClientResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    first_name: str
    last_name: str
    phone: str
    email: Optional[str] = None
    address: Optional[str] = None
    city: Optional[str] = None
    state: Optional[str] = None
    zip_code: Optional[str] = None
    notes: Optional[str] = None
    created_at: Optional[datetime] = None


class PetCreate(BaseModel):
    client_id: Optional[str] = None
    name: str
    species: str = "dog"
    breed: Optional[str] = None
    birth_month: Optional[int] = None
    birth_year: Optional[int] = None
    weight: Optional[float] = None
    color: Optional[str] = None
    notes: Optional[str] = None
    special_instructions: Optional[str] = None
    vaccination_status: Optional[str] = None
    last_vaccination_date: Optional[date] = None
    photo_url: Optional[str] = None


class PetUpdate(BaseModel):
    client_id: Optional[str] = None
    name: Optional[str] = None
    species: Optional[str] = None
    breed: Optional[str] = None
    birth_month: Optional[int] = None
    birth_year: Optional[int] = None
    weight: Optional[float] = None
    color: Optional[str] = None
    notes: Optional[str] = None
    special_instructions: Optional[str] = None
    vaccination_status: Optional[str] = None
    last_vaccination_date: Optional[date] = None
    photo_url: Optional[str] = None


class PetResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    client_id: Optional[str] = None
    name: str
    species: str
    breed: Optional[str] = None
    birth_month: Optional[int] = None
    birth_year: Optional[int] = None
    age: Optional[int] = None
    weight: Optional[float] = None
    color: Optional[str] = None
    notes: Optional[str] = None
    special_instructions: Optional[str] = None
    vaccination_status: Optional[str] = None
    last_vaccination_date: Optional[date] = None
    photo_url: Optional[str] = None
    created_at: Optional[datetime] = None
