"""Transaction repository - Database operations for the point-of-sale ledger"""

from typing import Optional

from sqlalchemy import func
from sqlalchemy.orm import Session, joinedload

from ...models import Business, Client, Product
from ...models_transaction import (
    ReceiptSetting,
    TaxSetting,
    Transaction,
    TransactionLineItem,
    TransactionRefund,
)


class TransactionRepository:
    @staticmethod
    def get_transactions(
        db: Session, business_id: str, status: Optional[str] = None, limit: int = 100
    ) -> list[Transaction]:
        query = db.query(Transaction).filter(Transaction.business_id == business_id)
        if status:
            query = query.filter(Transaction.status == status)
        return query.order_by(Transaction.created_at.desc(), Transaction.transaction_number.desc()).limit(limit).all()

    @staticmethod
    def get_transaction_by_id(db: Session, transaction_id: str, business_id: str) -> Optional[Transaction]:
        return (
            db.query(Transaction)
            .options(joinedload(Transaction.line_items), joinedload(Transaction.customer))
            .filter(Transaction.id == transaction_id, Transaction.business_id == business_id)
            .first()
        )

    @staticmethod
    def next_transaction_number(db: Session, business_id: str) -> int:
        current = (
            db.query(func.max(Transaction.transaction_number))
            .filter(Transaction.business_id == business_id)
            .scalar()
        )
        return (current or 0) + 1

    @staticmethod
    def add_transaction(db: Session, transaction: Transaction, line_items: list[TransactionLineItem]) -> Transaction:
        """Stage a transaction with its line items; the caller commits"""
        transaction.line_items = line_items
        db.add(transaction)
        db.flush()
        return transaction

    @staticmethod
    def add_refund(db: Session, refund: TransactionRefund) -> TransactionRefund:
        db.add(refund)
        db.flush()
        return refund

    @staticmethod
    def get_refunds(db: Session, transaction_id: str) -> list[TransactionRefund]:
        return (
            db.query(TransactionRefund)
            .filter(TransactionRefund.transaction_id == transaction_id)
            .order_by(TransactionRefund.created_at)
            .all()
        )

    @staticmethod
    def get_product(db: Session, product_id: str, business_id: str) -> Optional[Product]:
        return (
            db.query(Product)
            .filter(Product.id == product_id, Product.business_id == business_id)
            .first()
        )

    @staticmethod
    def get_customer(db: Session, customer_id: str, business_id: str) -> Optional[Client]:
        return (
            db.query(Client)
            .filter(Client.id == customer_id, Client.business_id == business_id)
            .first()
        )

    @staticmethod
    def get_business(db: Session, business_id: str) -> Optional[Business]:
        return db.query(Business).filter(Business.id == business_id).first()


class SettingsRepository:
    @staticmethod
    def get_tax_settings(db: Session, business_id: str) -> list[TaxSetting]:
        return (
            db.query(TaxSetting)
            .filter(TaxSetting.business_id == business_id)
            .order_by(TaxSetting.sort_order, TaxSetting.label)
            .all()
        )

    @staticmethod
    def replace_tax_settings(db: Session, business_id: str, rows: list[dict]) -> list[TaxSetting]:
        db.query(TaxSetting).filter(TaxSetting.business_id == business_id).delete(synchronize_session=False)
        for row in rows:
            db.add(TaxSetting(business_id=business_id, **row))
        db.commit()
        return SettingsRepository.get_tax_settings(db, business_id)

    @staticmethod
    def get_receipt_settings(db: Session, business_id: str) -> Optional[ReceiptSetting]:
        return db.query(ReceiptSetting).filter(ReceiptSetting.business_id == business_id).first()

    @staticmethod
    def save_receipt_settings(db: Session, business_id: str, **values) -> ReceiptSetting:
        settings = SettingsRepository.get_receipt_settings(db, business_id)
        if settings is None:
            settings = ReceiptSetting(business_id=business_id)
            db.add(settings)
        for key, value in values.items():
            setattr(settings, key, value)
        db.commit()
        db.refresh(settings)
        return settings
