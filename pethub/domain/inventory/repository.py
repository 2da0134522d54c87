"""Inventory repository - Database operations for products and stock movements"""

from typing import Optional

from sqlalchemy import or_
from sqlalchemy.orm import Session

from ...models import Product, StockMovement


class ProductRepository:
    @staticmethod
    def get_products(db: Session, business_id: str) -> list[Product]:
        return db.query(Product).filter(Product.business_id == business_id).order_by(Product.name).all()

    @staticmethod
    def get_product_by_id(db: Session, product_id: str, business_id: str) -> Optional[Product]:
        return (
            db.query(Product)
            .filter(Product.id == product_id, Product.business_id == business_id)
            .first()
        )

    @staticmethod
    def get_products_by_barcodes(db: Session, business_id: str, barcodes: set[str]) -> list[Product]:
        return (
            db.query(Product)
            .filter(Product.business_id == business_id, Product.barcode.in_(barcodes))
            .all()
        )

    @staticmethod
    def get_low_stock(db: Session, business_id: str, default_threshold: int) -> list[Product]:
        """Quantity at or below the product's reorder level (or the default threshold)"""
        return (
            db.query(Product)
            .filter(
                Product.business_id == business_id,
                or_(
                    Product.quantity <= Product.reorder_level,
                    (Product.reorder_level.is_(None)) & (Product.quantity <= default_threshold),
                ),
            )
            .order_by(Product.quantity, Product.name)
            .all()
        )

    @staticmethod
    def get_skus(db: Session, business_id: str) -> list[str]:
        return [row.sku for row in db.query(Product.sku).filter(Product.business_id == business_id).all()]

    @staticmethod
    def create_product(db: Session, business_id: str, **product_data) -> Product:
        product = Product(business_id=business_id, **product_data)
        db.add(product)
        db.commit()
        db.refresh(product)
        return product

    @staticmethod
    def update_product(db: Session, product: Product, **updates) -> Product:
        for key, value in updates.items():
            if value is not None and hasattr(product, key):
                setattr(product, key, value)

        db.commit()
        db.refresh(product)
        return product

    @staticmethod
    def delete_product(db: Session, product: Product) -> None:
        db.query(StockMovement).filter(StockMovement.product_id == product.id).delete(
            synchronize_session=False
        )
        db.delete(product)
        db.commit()


class StockRepository:
    @staticmethod
    def get_movements(db: Session, product_id: str, business_id: str) -> list[StockMovement]:
        return (
            db.query(StockMovement)
            .filter(StockMovement.product_id == product_id, StockMovement.business_id == business_id)
            .order_by(StockMovement.created_at.desc())
            .all()
        )

    @staticmethod
    def apply_movement(
        db: Session,
        product: Product,
        quantity: int,
        movement_type: str,
        notes: Optional[str] = None,
    ) -> StockMovement:
        """
        Change on-hand quantity (never below zero) and log the movement.
        Does not commit; callers commit once their whole unit of work is staged.
        """
        product.quantity = max(0, (product.quantity or 0) + quantity)
        movement = StockMovement(
            business_id=product.business_id,
            product_id=product.id,
            quantity=quantity,
            movement_type=movement_type,
            notes=notes,
        )
        db.add(movement)
        return movement
