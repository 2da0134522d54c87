"""Client repository - Database operations for clients and pets"""

from typing import Optional

from sqlalchemy.orm import Session

from ...models import Client, Pet


class ClientRepository:
    """Repository for client database operations"""

    @staticmethod
    def get_clients(db: Session, business_id: str) -> list[Client]:
        return (
            db.query(Client)
            .filter(Client.business_id == business_id)
            .order_by(Client.last_name, Client.first_name)
            .all()
        )

    @staticmethod
    def get_client_by_id(db: Session, client_id: str, business_id: str) -> Optional[Client]:
        return (
            db.query(Client)
            .filter(Client.id == client_id, Client.business_id == business_id)
            .first()
        )

    @staticmethod
    def create_client(db: Session, business_id: str, **client_data) -> Client:
        client = Client(business_id=business_id, **client_data)
        db.add(client)
        db.commit()
        db.refresh(client)
        return client

    @staticmethod
    def update_client(db: Session, client: Client, **updates) -> Client:
        """Update a client with provided fields"""
        for key, value in updates.items():
            if value is not None and hasattr(client, key):
                setattr(client, key, value)

        db.commit()
        db.refresh(client)
        return client

    @staticmethod
    def delete_client(db: Session, client: Client) -> None:
        """Delete a client; their pets stay on file unassigned"""
        for pet in client.pets:
            pet.client_id = None
        db.delete(client)
        db.commit()


class PetRepository:
    """Repository for pet database operations"""

    @staticmethod
    def get_pets(db: Session, business_id: str, client_id: Optional[str] = None) -> list[Pet]:
        query = db.query(Pet).filter(Pet.business_id == business_id)
        if client_id:
            query = query.filter(Pet.client_id == client_id)
        return query.order_by(Pet.name).all()

    @staticmethod
    def get_pet_by_id(db: Session, pet_id: str, business_id: str) -> Optional[Pet]:
        return db.query(Pet).filter(Pet.id == pet_id, Pet.business_id == business_id).first()

    @staticmethod
    def create_pet(db: Session, business_id: str, **pet_data) -> Pet:
        pet = Pet(business_id=business_id, **pet_data)
        db.add(pet)
        db.commit()
        db.refresh(pet)
        return pet

    @staticmethod
    def update_pet(db: Session, pet: Pet, **updates) -> Pet:
        for key, value in updates.items():
            if value is not None and hasattr(pet, key):
                setattr(pet, key, value)

        db.commit()
        db.refresh(pet)
        return pet

    @staticmethod
    def delete_pet(db: Session, pet: Pet) -> None:
        db.delete(pet)
        db.commit()
