"""Inventory router - products, barcode matching and stock movements"""

import logging

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from ...auth import get_current_business_id
from ...config import DEFAULT_LOW_STOCK_THRESHOLD
from ...database import get_db
from .schemas import (
    ProductCreate,
    ProductResponse,
    ProductUpdate,
    StockAdjustment,
    StockMovementResponse,
)
from .service import InventoryService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/products", tags=["Inventory"])


def get_inventory_service(db: Session = Depends(get_db)) -> InventoryService:
    return InventoryService(db)


@router.get("", response_model=list[ProductResponse])
async def get_products(
    business_id: str = Depends(get_current_business_id),
    service: InventoryService = Depends(get_inventory_service),
):
    return service.get_products(business_id)


@router.get("/low-stock", response_model=list[ProductResponse])
async def get_low_stock_products(
    threshold: int = Query(DEFAULT_LOW_STOCK_THRESHOLD, ge=0),
    business_id: str = Depends(get_current_business_id),
    service: InventoryService = Depends(get_inventory_service),
):
    """Products at or below their reorder level"""
    return service.get_low_stock(business_id, threshold)


@router.get("/by-barcode/{barcode}", response_model=ProductResponse)
async def get_product_by_barcode(
    barcode: str,
    business_id: str = Depends(get_current_business_id),
    service: InventoryService = Depends(get_inventory_service),
):
    """Match a scanned code; a 12-digit UPC also matches its 13-digit EAN"""
    return service.get_product_by_barcode(barcode, business_id)


@router.get("/{product_id}", response_model=ProductResponse)
async def get_product(
    product_id: str,
    business_id: str = Depends(get_current_business_id),
    service: InventoryService = Depends(get_inventory_service),
):
    return service.get_product(product_id, business_id)


@router.post("", response_model=ProductResponse, status_code=201)
async def create_product(
    data: ProductCreate,
    business_id: str = Depends(get_current_business_id),
    service: InventoryService = Depends(get_inventory_service),
):
    return service.create_product(data, business_id)


@router.patch("/{product_id}", response_model=ProductResponse)
async def update_product(
    product_id: str,
    data: ProductUpdate,
    business_id: str = Depends(get_current_business_id),
    service: InventoryService = Depends(get_inventory_service),
):
    return service.update_product(product_id, data, business_id)


@router.delete("/{product_id}")
async def delete_product(
    product_id: str,
    business_id: str = Depends(get_current_business_id),
    service: InventoryService = Depends(get_inventory_service),
):
    return service.delete_product(product_id, business_id)


@router.post("/{product_id}/adjust", response_model=ProductResponse)
async def adjust_stock(
    product_id: str,
    data: StockAdjustment,
    business_id: str = Depends(get_current_business_id),
    service: InventoryService = Depends(get_inventory_service),
):
    return service.adjust_stock(product_id, data, business_id)


@router.get("/{product_id}/movements", response_model=list[StockMovementResponse])
async def get_stock_movements(
    product_id: str,
    business_id: str = Depends(get_current_business_id),
    service: InventoryService = Depends(get_inventory_service),
):
    return service.get_movements(product_id, business_id)
