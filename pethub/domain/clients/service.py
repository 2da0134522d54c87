"""Client service - Business logic for client and pet operations"""

import logging
from typing import Any, Optional

from fastapi import HTTPException
from sqlalchemy.orm import Session

from ...models import Client, Pet
from ...utils.formatting import calculate_vaccination_status, format_phone_number
from ...utils.sanitization import clean_text_input
from .repository import ClientRepository, PetRepository
from .schemas import ClientCreate, ClientUpdate, PetCreate, PetUpdate
from .validation import validate_client_payload, validate_pet_payload

logger = logging.getLogger(__name__)

CLIENT_FIELDS = ("first_name", "last_name", "phone", "email", "address", "city", "state", "zip_code", "notes")
PET_FIELDS = (
    "client_id",
    "name",
    "species",
    "breed",
    "birth_month",
    "birth_year",
    "weight",
    "color",
    "notes",
    "special_instructions",
    "vaccination_status",
    "last_vaccination_date",
    "photo_url",
)
LONG_TEXT_FIELDS = ("notes", "special_instructions")


def _record(row: Any, fields: tuple[str, ...]) -> dict[str, Any]:
    return {field: getattr(row, field) for field in fields}


def _clean_long_text(data: dict[str, Any]) -> dict[str, Any]:
    cleaned = dict(data)
    for field in LONG_TEXT_FIELDS:
        if field in cleaned:
            try:
                cleaned[field] = clean_text_input(cleaned[field], max_length=2000)
            except ValueError as e:
                raise HTTPException(status_code=400, detail=str(e)) from e
    return cleaned


def _reject_if_invalid(result, entity: str) -> None:
    if not result:
        logger.warning(f"Rejected {entity} payload: {result.error}")
        raise HTTPException(status_code=400, detail=result.error)


class ClientService:
    """Service layer for client business logic"""

    def __init__(self, db: Session):
        self.db = db
        self.repo = ClientRepository()

    def get_clients(self, business_id: str) -> list[Client]:
        return self.repo.get_clients(self.db, business_id)

    def get_client(self, client_id: str, business_id: str) -> Client:
        client = self.repo.get_client_by_id(self.db, client_id, business_id)
        if not client:
            raise HTTPException(status_code=404, detail="Client not found")
        return client

    def create_client(self, data: ClientCreate, business_id: str) -> Client:
        payload = data.model_dump()
        _reject_if_invalid(validate_client_payload(payload), "client")

        payload = _clean_long_text(payload)
        payload["first_name"] = payload["first_name"].strip()
        payload["last_name"] = payload["last_name"].strip()
        payload["phone"] = format_phone_number(payload["phone"]) or payload["phone"].strip()
        payload["email"] = (payload.get("email") or "").strip() or None

        client = self.repo.create_client(self.db, business_id, **payload)
        logger.info(f"Created client {client.id} for business {business_id}")
        return client

    def update_client(self, client_id: str, data: ClientUpdate, business_id: str) -> Client:
        client = self.get_client(client_id, business_id)
        updates = data.model_dump(exclude_unset=True)

        merged = {**_record(client, CLIENT_FIELDS), **updates}
        _reject_if_invalid(validate_client_payload(merged), "client")

        updates = _clean_long_text(updates)
        if updates.get("phone"):
            updates["phone"] = format_phone_number(updates["phone"]) or updates["phone"].strip()

        client = self.repo.update_client(self.db, client, **updates)
        logger.info(f"Updated client {client.id}")
        return client

    def delete_client(self, client_id: str, business_id: str) -> dict:
        client = self.get_client(client_id, business_id)
        self.repo.delete_client(self.db, client)
        logger.info(f"Deleted client {client_id}")
        return {"message": "Client deleted"}


class PetService:
    """Service layer for pet business logic"""

    def __init__(self, db: Session):
        self.db = db
        self.repo = PetRepository()
        self.clients = ClientRepository()

    def get_pets(self, business_id: str, client_id: Optional[str] = None) -> list[Pet]:
        return self.repo.get_pets(self.db, business_id, client_id)

    def get_pet(self, pet_id: str, business_id: str) -> Pet:
        pet = self.repo.get_pet_by_id(self.db, pet_id, business_id)
        if not pet:
            raise HTTPException(status_code=404, detail="Pet not found")
        return pet

    def _require_client(self, client_id: str, business_id: str) -> None:
        if not self.clients.get_client_by_id(self.db, client_id, business_id):
            raise HTTPException(status_code=404, detail="Client not found")

    def create_pet(self, data: PetCreate, business_id: str) -> Pet:
        payload = data.model_dump()
        _reject_if_invalid(validate_pet_payload(payload), "pet")
        self._require_client(payload["client_id"], business_id)

        payload = _clean_long_text(payload)
        payload["name"] = payload["name"].strip()
        if payload["last_vaccination_date"] and not payload["vaccination_status"]:
            payload["vaccination_status"] = calculate_vaccination_status(payload["last_vaccination_date"])

        pet = self.repo.create_pet(self.db, business_id, **payload)
        logger.info(f"Created pet {pet.id} for client {pet.client_id}")
        return pet

    def update_pet(self, pet_id: str, data: PetUpdate, business_id: str) -> Pet:
        pet = self.get_pet(pet_id, business_id)
        updates = data.model_dump(exclude_unset=True)

        merged = {**_record(pet, PET_FIELDS), **updates}
        _reject_if_invalid(validate_pet_payload(merged), "pet")
        if "client_id" in updates:
            self._require_client(updates["client_id"], business_id)

        updates = _clean_long_text(updates)
        if updates.get("last_vaccination_date") and "vaccination_status" not in updates:
            updates["vaccination_status"] = calculate_vaccination_status(updates["last_vaccination_date"])

        pet = self.repo.update_pet(self.db, pet, **updates)
        logger.info(f"Updated pet {pet.id}")
        return pet

    def delete_pet(self, pet_id: str, business_id: str) -> dict:
        pet = self.get_pet(pet_id, business_id)
        self.repo.delete_pet(self.db, pet)
        logger.info(f"Deleted pet {pet_id}")
        return {"message": "Pet deleted"}
