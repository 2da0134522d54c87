"""Scheduling repository - Database operations for services and appointments"""

from typing import Optional

from sqlalchemy.orm import Session, joinedload

from ...models import Appointment, Business, Client, Pet, Service


class ServiceRepository:
    @staticmethod
    def get_services(db: Session, business_id: str, active_only: bool = False) -> list[Service]:
        query = db.query(Service).filter(Service.business_id == business_id)
        if active_only:
            query = query.filter(Service.is_active.is_(True))
        return query.order_by(Service.name).all()

    @staticmethod
    def get_service_by_id(db: Session, service_id: str, business_id: str) -> Optional[Service]:
        return (
            db.query(Service)
            .filter(Service.id == service_id, Service.business_id == business_id)
            .first()
        )

    @staticmethod
    def create_service(db: Session, business_id: str, **service_data) -> Service:
        service = Service(business_id=business_id, **service_data)
        db.add(service)
        db.commit()
        db.refresh(service)
        return service

    @staticmethod
    def update_service(db: Session, service: Service, **updates) -> Service:
        for key, value in updates.items():
            if value is not None and hasattr(service, key):
                setattr(service, key, value)

        db.commit()
        db.refresh(service)
        return service

    @staticmethod
    def delete_service(db: Session, service: Service) -> None:
        db.delete(service)
        db.commit()


class AppointmentRepository:
    # Nullable columns an explicit null in a PATCH clears
    CLEARABLE_FIELDS = ("employee_id", "notes", "total_price")

    @staticmethod
    def get_appointments(
        db: Session, business_id: str, appointment_date: Optional[str] = None
    ) -> list[Appointment]:
        """Appointments with pet, client and service loaded, ordered by date and start time"""
        query = (
            db.query(Appointment)
            .options(
                joinedload(Appointment.pet),
                joinedload(Appointment.client),
                joinedload(Appointment.service),
            )
            .filter(Appointment.business_id == business_id)
        )
        if appointment_date:
            query = query.filter(Appointment.appointment_date == appointment_date)
        return query.order_by(Appointment.appointment_date, Appointment.start_time).all()

    @staticmethod
    def get_appointment_by_id(db: Session, appointment_id: str, business_id: str) -> Optional[Appointment]:
        return (
            db.query(Appointment)
            .filter(Appointment.id == appointment_id, Appointment.business_id == business_id)
            .first()
        )

    @staticmethod
    def create_appointment(db: Session, business_id: str, **appointment_data) -> Appointment:
        appointment = Appointment(business_id=business_id, **appointment_data)
        db.add(appointment)
        db.commit()
        db.refresh(appointment)
        return appointment

    @classmethod
    def update_appointment(cls, db: Session, appointment: Appointment, **updates) -> Appointment:
        for key, value in updates.items():
            if value is None and key not in cls.CLEARABLE_FIELDS:
                continue
            if hasattr(appointment, key):
                setattr(appointment, key, value)

        db.commit()
        db.refresh(appointment)
        return appointment

    @staticmethod
    def delete_appointment(db: Session, appointment: Appointment) -> None:
        db.delete(appointment)
        db.commit()

    @staticmethod
    def client_exists(db: Session, client_id: str, business_id: str) -> bool:
        return (
            db.query(Client.id).filter(Client.id == client_id, Client.business_id == business_id).first()
            is not None
        )

    @staticmethod
    def pet_exists(db: Session, pet_id: str, business_id: str) -> bool:
        return db.query(Pet.id).filter(Pet.id == pet_id, Pet.business_id == business_id).first() is not None


class BusinessRepository:
    @staticmethod
    def get_business(db: Session, business_id: str) -> Optional[Business]:
        return db.query(Business).filter(Business.id == business_id).first()

    @staticmethod
    def save_business_hours(db: Session, business: Business, business_hours: str) -> Business:
        business.business_hours = business_hours
        db.commit()
        db.refresh(business)
        return business
