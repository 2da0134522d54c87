"""Client router - FastAPI endpoints for clients and their pets"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from ...auth import get_current_business_id
from ...database import get_db
from ...models import Pet
from ...utils.formatting import calculate_pet_age
from .schemas import (
    ClientCreate,
    ClientResponse,
    ClientUpdate,
    PetCreate,
    PetResponse,
    PetUpdate,
)
from .service import ClientService, PetService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/clients", tags=["Clients"])
pets_router = APIRouter(prefix="/pets", tags=["Pets"])


def get_client_service(db: Session = Depends(get_db)) -> ClientService:
    """Dependency injection for ClientService"""
    return ClientService(db)


def get_pet_service(db: Session = Depends(get_db)) -> PetService:
    """Dependency injection for PetService"""
    return PetService(db)


def to_pet_response(pet: Pet) -> PetResponse:
    response = PetResponse.model_validate(pet)
    response.age = calculate_pet_age(pet.birth_month, pet.birth_year)
    return response


# ============================================================================
# CLIENTS
# ============================================================================


@router.get("", response_model=list[ClientResponse])
async def get_clients(
    business_id: str = Depends(get_current_business_id),
    service: ClientService = Depends(get_client_service),
):
    return service.get_clients(business_id)


@router.get("/{client_id}", response_model=ClientResponse)
async def get_client(
    client_id: str,
    business_id: str = Depends(get_current_business_id),
    service: ClientService = Depends(get_client_service),
):
    return service.get_client(client_id, business_id)


@router.get("/{client_id}/pets", response_model=list[PetResponse])
async def get_client_pets(
    client_id: str,
    business_id: str = Depends(get_current_business_id),
    service: ClientService = Depends(get_client_service),
    pets: PetService = Depends(get_pet_service),
):
    """Pets owned by one client"""
    service.get_client(client_id, business_id)
    return [to_pet_response(p) for p in pets.get_pets(business_id, client_id)]


@router.post("", response_model=ClientResponse, status_code=201)
async def create_client(
    data: ClientCreate,
    business_id: str = Depends(get_current_business_id),
    service: ClientService = Depends(get_client_service),
):
    return service.create_client(data, business_id)


@router.patch("/{client_id}", response_model=ClientResponse)
async def update_client(
    client_id: str,
    data: ClientUpdate,
    business_id: str = Depends(get_current_business_id),
    service: ClientService = Depends(get_client_service),
):
    return service.update_client(client_id, data, business_id)


@router.delete("/{client_id}")
async def delete_client(
    client_id: str,
    business_id: str = Depends(get_current_business_id),
    service: ClientService = Depends(get_client_service),
):
    return service.delete_client(client_id, business_id)


# ============================================================================
# PETS
# ============================================================================


@pets_router.get("", response_model=list[PetResponse])
async def get_pets(
    client_id: Optional[str] = Query(None),
    business_id: str = Depends(get_current_business_id),
    service: PetService = Depends(get_pet_service),
):
    return [to_pet_response(p) for p in service.get_pets(business_id, client_id)]


@pets_router.get("/{pet_id}", response_model=PetResponse)
async def get_pet(
    pet_id: str,
    business_id: str = Depends(get_current_business_id),
    service: PetService = Depends(get_pet_service),
):
    return to_pet_response(service.get_pet(pet_id, business_id))


@pets_router.post("", response_model=PetResponse, status_code=201)
async def create_pet(
    data: PetCreate,
    business_id: str = Depends(get_current_business_id),
    service: PetService = Depends(get_pet_service),
):
    return to_pet_response(service.create_pet(data, business_id))


@pets_router.patch("/{pet_id}", response_model=PetResponse)
async def update_pet(
    pet_id: str,
    data: PetUpdate,
    business_id: str = Depends(get_current_business_id),
    service: PetService = Depends(get_pet_service),
):
    return to_pet_response(service.update_pet(pet_id, data, business_id))


@pets_router.delete("/{pet_id}")
async def delete_pet(
    pet_id: str,
    business_id: str = Depends(get_current_business_id),
    service: PetService = Depends(get_pet_service),
):
    return service.delete_pet(pet_id, business_id)
