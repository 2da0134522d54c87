"""Inventory domain schemas - Pydantic models for requests and responses"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict


class BarcodeProduct(BaseModel):
    """Product details returned by an upstream barcode database"""

    name: str
    brand: Optional[str] = None
    category: Optional[str] = None
    description: Optional[str] = None
    image_url: Optional[str] = None
    barcode: str


class BarcodeLookupRequest(BaseModel):
    barcode: Optional[str] = None


class ProductCreate(BaseModel):
    name: str
    sku: Optional[str] = None
    barcode: Optional[str] = None
    quantity: int = 0
    price: int = 0  # cents
    cost: Optional[int] = None
    reorder_level: Optional[int] = None
    category: Optional[str] = None
    supplier: Optional[str] = None
    description: Optional[str] = None
    photo_url: Optional[str] = None


class ProductUpdate(BaseModel):
    name: Optional[str] = None
    sku: Optional[str] = None
    barcode: Optional[str] = None
    quantity: Optional[int] = None
    price: Optional[int] = None
    cost: Optional[int] = None
    reorder_level: Optional[int] = None
    category: Optional[str] = None
    supplier: Optional[str] = None
    description: Optional[str] = None
    photo_url: Optional[str] = None


class ProductResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    sku: str
    barcode: Optional[str] = None
    name: str
    quantity: int
    price: int
    cost: Optional[int] = None
    reorder_level: Optional[int] = None
    category: Optional[str] = None
    supplier: Optional[str] = None
    description: Optional[str] = None
    photo_url: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class StockAdjustment(BaseModel):
    quantity: int  # signed change: positive adds stock, negative removes it
    notes: Optional[str] = None


class StockMovementResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    product_id: str
    quantity: int
    movement_type: str
    notes: Optional[str] = None
    created_at: Optional[datetime] = None
