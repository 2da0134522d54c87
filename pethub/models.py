import uuid

from sqlalchemy import (
    Boolean,
    Column,
    Date,
    DateTime,
    Float,
    ForeignKey,
    Integer,
    String,
    Text,
)
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from .database import Base


def generate_id():
    """Generate a UUID primary key"""
    return str(uuid.uuid4())


class Business(Base):
    __tablename__ = "businesses"

    id = Column(String(36), primary_key=True, default=generate_id)
    name = Column(String(255), nullable=False)
    phone = Column(String(50), nullable=True)
    address = Column(String(500), nullable=True)
    logo_url = Column(String(500), nullable=True)
    business_hours = Column(Text, nullable=True)  # JSON string keyed by weekday
    created_at = Column(DateTime, server_default=func.now())
    updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now())

    profiles = relationship("Profile", back_populates="business", cascade="all, delete-orphan")


class Profile(Base):
    """Links an authenticated user (JWT subject) to the business they work for"""

    __tablename__ = "profiles"

    id = Column(String(36), primary_key=True, default=generate_id)
    user_id = Column(String(255), unique=True, index=True, nullable=False)
    business_id = Column(String(36), ForeignKey("businesses.id"), nullable=False, index=True)
    email = Column(String(255), nullable=True)
    full_name = Column(String(255), nullable=True)
    role = Column(String(50), default="owner")  # owner, manager, employee
    created_at = Column(DateTime, server_default=func.now())

    business = relationship("Business", back_populates="profiles")


class Client(Base):
    __tablename__ = "clients"

    id = Column(String(36), primary_key=True, default=generate_id)
    business_id = Column(String(36), ForeignKey("businesses.id"), nullable=False, index=True)
    first_name = Column(String(100), nullable=False)
    last_name = Column(String(100), nullable=False)
    email = Column(String(255), nullable=True)
    phone = Column(String(50), nullable=False)
    address = Column(String(500), nullable=True)
    city = Column(String(100), nullable=True)
    state = Column(String(100), nullable=True)
    zip_code = Column(String(20), nullable=True)
    notes = Column(Text, nullable=True)
    created_at = Column(DateTime, server_default=func.now())
    updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now())

    pets = relationship("Pet", back_populates="client")


class Pet(Base):
    __tablename__ = "pets"

    id = Column(String(36), primary_key=True, default=generate_id)
    business_id = Column(String(36), ForeignKey("businesses.id"), nullable=False, index=True)
    # Null client_id means the pet is not assigned to an owner
    client_id = Column(String(36), ForeignKey("clients.id"), nullable=True, index=True)
    name = Column(String(100), nullable=False)
    species = Column(String(20), nullable=False, default="dog")  # dog, cat, other
    breed = Column(String(100), nullable=True)
    birth_month = Column(Integer, nullable=True)
    birth_year = Column(Integer, nullable=True)
    weight = Column(Float, nullable=True)
    color = Column(String(50), nullable=True)
    notes = Column(Text, nullable=True)
    special_instructions = Column(Text, nullable=True)
    vaccination_status = Column(String(20), nullable=True)  # up_to_date, out_of_date, unknown
    last_vaccination_date = Column(Date, nullable=True)
    photo_url = Column(String(500), nullable=True)
    created_at = Column(DateTime, server_default=func.now())
    updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now())

    client = relationship("Client", back_populates="pets")


class Service(Base):
    __tablename__ = "services"

    id = Column(String(36), primary_key=True, default=generate_id)
    business_id = Column(String(36), ForeignKey("businesses.id"), nullable=False, index=True)
    name = Column(String(255), nullable=False)
    description = Column(Text, nullable=True)
    price = Column(Float, nullable=False, default=0)  # Decimal dollars
    duration_minutes = Column(Integer, nullable=False, default=60)
    is_active = Column(Boolean, default=True)
    category = Column(String(100), nullable=True)
    color = Column(String(20), nullable=True)  # Calendar card color
    created_at = Column(DateTime, server_default=func.now())
    updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now())


class Appointment(Base):
    __tablename__ = "appointments"

    id = Column(String(36), primary_key=True, default=generate_id)
    business_id = Column(String(36), ForeignKey("businesses.id"), nullable=False, index=True)
    client_id = Column(String(36), ForeignKey("clients.id"), nullable=False)
    pet_id = Column(String(36), ForeignKey("pets.id"), nullable=False)
    service_id = Column(String(36), ForeignKey("services.id"), nullable=False)
    employee_id = Column(String(36), nullable=True)
    appointment_date = Column(String(10), nullable=False, index=True)  # YYYY-MM-DD
    start_time = Column(String(8), nullable=False)  # HH:MM or HH:MM:SS
    end_time = Column(String(8), nullable=False)
    # scheduled, confirmed, in_progress, completed, canceled, no_show
    status = Column(String(20), default="scheduled")
    notes = Column(Text, nullable=True)
    total_price = Column(Float, nullable=True)
    created_at = Column(DateTime, server_default=func.now())
    updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now())

    client = relationship("Client")
    pet = relationship("Pet")
    service = relationship("Service")


class Product(Base):
    """Inventory item sold at the point of sale"""

    __tablename__ = "products"

    id = Column(String(36), primary_key=True, default=generate_id)
    business_id = Column(String(36), ForeignKey("businesses.id"), nullable=False, index=True)
    sku = Column(String(100), nullable=False, index=True)
    barcode = Column(String(20), nullable=True, index=True)  # UPC/EAN/GTIN
    name = Column(String(255), nullable=False)
    quantity = Column(Integer, nullable=False, default=0)
    price = Column(Integer, nullable=False, default=0)  # cents
    cost = Column(Integer, nullable=True)  # cents
    reorder_level = Column(Integer, nullable=True)
    category = Column(String(100), nullable=True)
    supplier = Column(String(255), nullable=True)
    description = Column(Text, nullable=True)
    photo_url = Column(String(500), nullable=True)
    created_at = Column(DateTime, server_default=func.now())
    updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now())


class StockMovement(Base):
    __tablename__ = "stock_movements"

    id = Column(String(36), primary_key=True, default=generate_id)
    business_id = Column(String(36), ForeignKey("businesses.id"), nullable=False, index=True)
    product_id = Column(String(36), ForeignKey("products.id"), nullable=False, index=True)
    quantity = Column(Integer, nullable=False)  # positive = in, negative = out
    movement_type = Column(String(30), nullable=False)  # sale, adjustment, received
    notes = Column(String(255), nullable=True)
    created_at = Column(DateTime, server_default=func.now())
