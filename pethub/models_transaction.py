"""
Point-of-sale transaction models. All money columns are integer cents.
"""

from sqlalchemy import JSON, Boolean, Column, DateTime, Float, ForeignKey, Integer, String, Text
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from .database import Base
from .models import generate_id


class Transaction(Base):
    __tablename__ = "transactions"

    id = Column(String(36), primary_key=True, default=generate_id)
    business_id = Column(String(36), ForeignKey("businesses.id"), nullable=False, index=True)
    # Per-business sequential number shown on receipts
    transaction_number = Column(Integer, nullable=True)
    customer_id = Column(String(36), ForeignKey("clients.id"), nullable=True)
    appointment_id = Column(String(36), ForeignKey("appointments.id"), nullable=True)
    staff_id = Column(String(255), nullable=True)

    # pending, in_progress, paid, partial, refunded, partial_refund, void
    status = Column(String(20), nullable=False, default="pending")
    payment_method = Column(String(20), nullable=False, default="cash")  # cash, card, ath_movil, other
    payment_method_secondary = Column(String(20), nullable=True)

    subtotal = Column(Integer, nullable=False, default=0)
    discount_amount = Column(Integer, nullable=False, default=0)
    discount_label = Column(String(100), nullable=True)
    tax_snapshot = Column(JSON, nullable=True)  # [{label, rate, amount}]
    tip_amount = Column(Integer, nullable=False, default=0)
    total = Column(Integer, nullable=False, default=0)
    amount_tendered = Column(Integer, nullable=True)
    change_given = Column(Integer, nullable=True)
    notes = Column(Text, nullable=True)

    created_at = Column(DateTime, server_default=func.now())
    updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now())

    line_items = relationship(
        "TransactionLineItem", back_populates="transaction", cascade="all, delete-orphan"
    )
    refunds = relationship(
        "TransactionRefund", back_populates="transaction", cascade="all, delete-orphan"
    )
    customer = relationship("Client")


class TransactionLineItem(Base):
    __tablename__ = "transaction_line_items"

    id = Column(String(36), primary_key=True, default=generate_id)
    transaction_id = Column(String(36), ForeignKey("transactions.id"), nullable=False, index=True)
    type = Column(String(20), nullable=False)  # service, product
    reference_id = Column(String(36), nullable=True)
    name = Column(String(255), nullable=False)
    quantity = Column(Integer, nullable=False, default=1)
    unit_price = Column(Integer, nullable=False, default=0)
    line_total = Column(Integer, nullable=False, default=0)

    transaction = relationship("Transaction", back_populates="line_items")


class TransactionRefund(Base):
    __tablename__ = "transaction_refunds"

    id = Column(String(36), primary_key=True, default=generate_id)
    transaction_id = Column(String(36), ForeignKey("transactions.id"), nullable=False, index=True)
    amount = Column(Integer, nullable=False)
    reason = Column(Text, nullable=True)
    staff_id = Column(String(255), nullable=True)
    restock_applied = Column(Boolean, default=False)
    created_at = Column(DateTime, server_default=func.now())

    transaction = relationship("Transaction", back_populates="refunds")


class TaxSetting(Base):
    __tablename__ = "tax_settings"

    id = Column(String(36), primary_key=True, default=generate_id)
    business_id = Column(String(36), ForeignKey("businesses.id"), nullable=False, index=True)
    label = Column(String(100), nullable=False)
    rate = Column(Float, nullable=False)  # percent, e.g. 10.5
    enabled = Column(Boolean, default=True)
    region = Column(String(100), nullable=True)
    sort_order = Column(Integer, default=0)


class ReceiptSetting(Base):
    __tablename__ = "receipt_settings"

    id = Column(String(36), primary_key=True, default=generate_id)
    business_id = Column(String(36), ForeignKey("businesses.id"), unique=True, nullable=False)
    header_text = Column(Text, nullable=True)
    footer_text = Column(Text, nullable=True)
    logo_url = Column(String(500), nullable=True)
