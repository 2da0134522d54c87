"""Inventory service - products, barcode matching and stock adjustments"""

import logging

from fastapi import HTTPException
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from ...config import DEFAULT_LOW_STOCK_THRESHOLD
from ...models import Product, StockMovement
from ...utils.sanitization import clean_text_input
from .barcode import generate_sku_for_barcode, normalize_barcode_for_match, validate_barcode
from .repository import ProductRepository, StockRepository
from .schemas import ProductCreate, ProductUpdate, StockAdjustment
from .validation import validate_product_payload

logger = logging.getLogger(__name__)

PRODUCT_FIELDS = (
    "name",
    "sku",
    "barcode",
    "quantity",
    "price",
    "cost",
    "reorder_level",
    "category",
    "supplier",
    "description",
    "photo_url",
)


def barcode_match_variants(barcode: str) -> set[str]:
    """Stored forms a scanned code may match: 12-digit UPC and its 13-digit EAN"""
    trimmed = barcode.strip()
    normalized = normalize_barcode_for_match(trimmed)
    variants = {trimmed, normalized}
    if len(normalized) == 13 and normalized.startswith("0"):
        variants.add(normalized[1:])
    return variants


class InventoryService:
    def __init__(self, db: Session):
        self.db = db
        self.repo = ProductRepository()
        self.stock = StockRepository()

    def get_products(self, business_id: str) -> list[Product]:
        return self.repo.get_products(self.db, business_id)

    def get_product(self, product_id: str, business_id: str) -> Product:
        product = self.repo.get_product_by_id(self.db, product_id, business_id)
        if not product:
            raise HTTPException(status_code=404, detail="Product not found")
        return product

    def get_product_by_barcode(self, barcode: str, business_id: str) -> Product:
        result = validate_barcode(barcode)
        if not result:
            raise HTTPException(status_code=400, detail=result.error)

        matches = self.repo.get_products_by_barcodes(self.db, business_id, barcode_match_variants(barcode))
        if not matches:
            raise HTTPException(status_code=404, detail="Product not found")
        return matches[0]

    def get_low_stock(self, business_id: str, threshold: int = DEFAULT_LOW_STOCK_THRESHOLD) -> list[Product]:
        return self.repo.get_low_stock(self.db, business_id, threshold)

    def _ensure_unique_sku(self, sku: str, business_id: str, exclude_id: str = None) -> None:
        for product in self.repo.get_products(self.db, business_id):
            if product.id != exclude_id and product.sku.lower() == sku.lower():
                raise HTTPException(status_code=400, detail="SKU already exists.")

    def create_product(self, data: ProductCreate, business_id: str) -> Product:
        payload = data.model_dump()
        payload["barcode"] = (payload["barcode"] or "").strip() or None
        payload["sku"] = (payload["sku"] or "").strip() or None

        if not payload["sku"] and payload["barcode"]:
            payload["sku"] = generate_sku_for_barcode(payload["barcode"], self.repo.get_skus(self.db, business_id))

        result = validate_product_payload(payload)
        if not result:
            logger.warning(f"Rejected product payload: {result.error}")
            raise HTTPException(status_code=400, detail=result.error)
        self._ensure_unique_sku(payload["sku"], business_id)

        try:
            payload["description"] = clean_text_input(payload["description"], max_length=2000)
        except ValueError as e:
            raise HTTPException(status_code=400, detail=str(e)) from e

        product = self.repo.create_product(self.db, business_id, **payload)
        logger.info(f"Created product {product.id} (SKU {product.sku}) for business {business_id}")
        return product

    def update_product(self, product_id: str, data: ProductUpdate, business_id: str) -> Product:
        product = self.get_product(product_id, business_id)
        updates = data.model_dump(exclude_unset=True)
        if "barcode" in updates:
            updates["barcode"] = (updates["barcode"] or "").strip() or None

        merged = {**{f: getattr(product, f) for f in PRODUCT_FIELDS}, **updates}
        result = validate_product_payload(merged)
        if not result:
            logger.warning(f"Rejected product update: {result.error}")
            raise HTTPException(status_code=400, detail=result.error)
        if updates.get("sku"):
            self._ensure_unique_sku(updates["sku"], business_id, exclude_id=product.id)

        product = self.repo.update_product(self.db, product, **updates)
        logger.info(f"Updated product {product.id}")
        return product

    def delete_product(self, product_id: str, business_id: str) -> dict:
        product = self.get_product(product_id, business_id)
        self.repo.delete_product(self.db, product)
        logger.info(f"Deleted product {product_id}")
        return {"message": "Product deleted"}

    def adjust_stock(self, product_id: str, data: StockAdjustment, business_id: str) -> Product:
        """Manual count correction or received shipment"""
        product = self.get_product(product_id, business_id)
        if data.quantity == 0:
            raise HTTPException(status_code=400, detail="Adjustment quantity cannot be zero.")

        movement_type = "received" if data.quantity > 0 else "adjustment"
        self.stock.apply_movement(self.db, product, data.quantity, movement_type, data.notes)
        try:
            self.db.commit()
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"Failed to adjust stock for product {product.id}: {e}")
            raise HTTPException(status_code=500, detail="Failed to adjust stock") from e
        self.db.refresh(product)
        logger.info(f"Stock {movement_type} of {data.quantity} for product {product.id} (now {product.quantity})")
        return product

    def get_movements(self, product_id: str, business_id: str) -> list[StockMovement]:
        self.get_product(product_id, business_id)
        return self.stock.get_movements(self.db, product_id, business_id)
