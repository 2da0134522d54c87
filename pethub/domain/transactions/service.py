"""
Transaction service - point-of-sale checkout, refunds and printable documents.

Totals are computed here, never trusted from the client:

    subtotal = sum of line totals
    taxable  = max(0, subtotal - discount)
    tax      = one row per enabled tax setting, rate percent of taxable
    total    = taxable + tax + tip

A business without tax settings is charged the Puerto Rico defaults.
"""

import logging
from typing import Any, Optional

from fastapi import HTTPException
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from ...models import Appointment
from ...models_transaction import Transaction, TransactionLineItem, TransactionRefund
from ...shared.validators import is_blank
from ...utils.formatting import normalize_tax_label, percent_of_cents
from ..inventory.repository import StockRepository
from .print_service import build_invoice_html, build_receipt_html
from .repository import SettingsRepository, TransactionRepository
from .schemas import (
    LineItemResponse,
    ReceiptSettingInput,
    RefundCreate,
    TaxSettingInput,
    TransactionCreate,
    TransactionResponse,
    TransactionUpdate,
)
from .validation import (
    PAYMENT_METHODS,
    get_payment_status_from_amount,
    validate_create_payload,
    validate_refund_payload,
    validate_update_payload,
)

logger = logging.getLogger(__name__)

DEFAULT_TAX_SETTINGS = (
    {"label": "State (IVU)", "rate": 10.5},
    {"label": "Municipal", "rate": 1.0},
)
WALK_IN_CUSTOMER = "Walk-in"

# NOT NULL columns a PATCH may change but never clear
UNCLEARABLE_UPDATE_FIELDS = {
    "status": "Status cannot be empty.",
    "total": "Total cannot be empty.",
}


def compute_tax(taxable_cents: int, tax_rows: list[dict[str, Any]]) -> tuple[list[dict[str, Any]], int]:
    """Tax snapshot rows ({label, rate, amount}) and their sum, in cents"""
    snapshot = []
    total_tax = 0
    for row in tax_rows:
        rate = float(row["rate"])
        amount = percent_of_cents(taxable_cents, rate)
        snapshot.append({"label": normalize_tax_label(row["label"]), "rate": rate, "amount": amount})
        total_tax += amount
    return snapshot, total_tax


def compute_totals(
    line_totals: list[int], discount_amount: int, tip_amount: int, tax_rows: list[dict[str, Any]]
) -> dict[str, Any]:
    subtotal = sum(line_totals)
    taxable = max(0, subtotal - discount_amount)
    tax_snapshot, total_tax = compute_tax(taxable, tax_rows)
    return {
        "subtotal": subtotal,
        "tax_snapshot": tax_snapshot,
        "total": taxable + total_tax + tip_amount,
    }


def display_id(transaction: Transaction) -> str:
    """TXN-00042, or the first 8 characters of the id for unnumbered rows"""
    if transaction.transaction_number is not None:
        return f"TXN-{transaction.transaction_number:05d}"
    return transaction.id[:8]


def _reject_if_invalid(result) -> None:
    if not result:
        logger.warning(f"Rejected transaction payload: {result.error}")
        raise HTTPException(status_code=400, detail=result.error)


def _check_payment_method(method: Optional[str], allow_none: bool = False) -> None:
    if method is None and allow_none:
        return
    if method not in PAYMENT_METHODS:
        raise HTTPException(status_code=400, detail="Invalid payment method.")


class TransactionService:
    def __init__(self, db: Session):
        self.db = db
        self.repo = TransactionRepository()
        self.settings = SettingsRepository()
        self.stock = StockRepository()

    def get_transactions(self, business_id: str, status: Optional[str] = None, limit: int = 100) -> list[Transaction]:
        return self.repo.get_transactions(self.db, business_id, status, limit)

    def get_transaction(self, transaction_id: str, business_id: str) -> Transaction:
        transaction = self.repo.get_transaction_by_id(self.db, transaction_id, business_id)
        if not transaction:
            raise HTTPException(status_code=404, detail="Transaction not found")
        return transaction

    def effective_tax_rows(self, business_id: str) -> list[dict[str, Any]]:
        rows = self.settings.get_tax_settings(self.db, business_id)
        if not rows:
            return list(DEFAULT_TAX_SETTINGS)
        return [{"label": r.label, "rate": r.rate} for r in rows if r.enabled]

    def _commit(self, action: str) -> None:
        try:
            self.db.commit()
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"Failed to {action}: {e}")
            raise HTTPException(status_code=500, detail=f"Failed to {action}") from e

    def _check_create_references(self, data: TransactionCreate, business_id: str) -> dict[str, Any]:
        if data.customer_id and not self.repo.get_customer(self.db, data.customer_id, business_id):
            raise HTTPException(status_code=404, detail="Customer not found")
        if data.appointment_id:
            appointment = (
                self.db.query(Appointment)
                .filter(Appointment.id == data.appointment_id, Appointment.business_id == business_id)
                .first()
            )
            if not appointment:
                raise HTTPException(status_code=404, detail="Appointment not found")

        products = {}
        for item in data.line_items:
            if item.type != "product" or item.reference_id in products:
                continue
            product = self.repo.get_product(self.db, item.reference_id, business_id)
            if not product:
                raise HTTPException(status_code=404, detail=f"Product not found: {item.name}")
            products[item.reference_id] = product
        return products

    def create_transaction(self, data: TransactionCreate, business_id: str, staff_id: str) -> Transaction:
        payload = data.model_dump()
        _reject_if_invalid(validate_create_payload(payload))
        _check_payment_method(data.payment_method)
        _check_payment_method(data.payment_method_secondary, allow_none=True)
        if data.status is not None:
            _reject_if_invalid(validate_update_payload({"status": data.status}))

        products = self._check_create_references(data, business_id)

        totals = compute_totals(
            [item.line_total for item in data.line_items],
            data.discount_amount,
            data.tip_amount,
            self.effective_tax_rows(business_id),
        )
        status = data.status or get_payment_status_from_amount(data.amount_tendered or 0, totals["total"])
        change_given = data.change_given
        if change_given is None and data.amount_tendered is not None:
            change_given = max(0, data.amount_tendered - totals["total"])

        number = self.repo.next_transaction_number(self.db, business_id)
        transaction = Transaction(
            business_id=business_id,
            transaction_number=number,
            customer_id=data.customer_id or None,
            appointment_id=data.appointment_id or None,
            staff_id=staff_id,
            status=status,
            payment_method=data.payment_method,
            payment_method_secondary=data.payment_method_secondary,
            subtotal=totals["subtotal"],
            discount_amount=data.discount_amount,
            discount_label=data.discount_label,
            tax_snapshot=totals["tax_snapshot"],
            tip_amount=data.tip_amount,
            total=totals["total"],
            amount_tendered=data.amount_tendered,
            change_given=change_given,
            notes=data.notes,
        )
        line_items = [
            TransactionLineItem(
                type=item.type,
                reference_id=item.reference_id or None,
                name=item.name.strip(),
                quantity=item.quantity,
                unit_price=item.unit_price,
                line_total=item.line_total,
            )
            for item in data.line_items
        ]
        self.repo.add_transaction(self.db, transaction, line_items)

        for item in data.line_items:
            if item.type == "product":
                self.stock.apply_movement(
                    self.db, products[item.reference_id], -item.quantity, "sale", f"Transaction {number}"
                )

        self._commit("create transaction")
        self.db.refresh(transaction)
        logger.info(
            f"Created transaction {display_id(transaction)} for business {business_id}: "
            f"total {transaction.total} cents, status {transaction.status}"
        )
        return transaction

    def update_transaction(self, transaction_id: str, data: TransactionUpdate, business_id: str) -> Transaction:
        transaction = self.get_transaction(transaction_id, business_id)
        updates = data.model_dump(exclude_unset=True)
        _reject_if_invalid(validate_update_payload(updates))
        for field, message in UNCLEARABLE_UPDATE_FIELDS.items():
            if field in updates and updates[field] is None:
                raise HTTPException(status_code=400, detail=message)
        if "payment_method" in updates:
            _check_payment_method(updates["payment_method"])
        if "payment_method_secondary" in updates:
            _check_payment_method(updates["payment_method_secondary"], allow_none=True)

        for key, value in updates.items():
            setattr(transaction, key, value)

        self._commit("update transaction")
        self.db.refresh(transaction)
        logger.info(f"Updated transaction {display_id(transaction)}: {sorted(updates)}")
        return transaction

    def void_transaction(self, transaction_id: str, business_id: str) -> Transaction:
        transaction = self.get_transaction(transaction_id, business_id)
        transaction.status = "void"
        self._commit("void transaction")
        self.db.refresh(transaction)
        logger.info(f"Voided transaction {display_id(transaction)}")
        return transaction

    def refund_transaction(
        self, transaction_id: str, data: RefundCreate, business_id: str, staff_id: str
    ) -> TransactionRefund:
        """Record a refund, put the selected products back on the shelf and update the status"""
        transaction = self.get_transaction(transaction_id, business_id)
        if transaction.status == "void":
            raise HTTPException(status_code=400, detail="A void transaction cannot be refunded.")

        product_items = [li for li in transaction.line_items if li.type == "product" and li.reference_id]
        _reject_if_invalid(
            validate_refund_payload(
                data.amount,
                transaction.total,
                data.restock_product_ids,
                [li.reference_id for li in product_items],
            )
        )

        refund = TransactionRefund(
            transaction_id=transaction.id,
            amount=data.amount,
            reason=data.reason,
            staff_id=staff_id,
            restock_applied=bool(data.restock_product_ids),
        )
        self.repo.add_refund(self.db, refund)

        restock_ids = set(data.restock_product_ids)
        for item in product_items:
            if item.reference_id not in restock_ids:
                continue
            product = self.repo.get_product(self.db, item.reference_id, business_id)
            if product is None:
                logger.warning(f"Skipping restock of deleted product {item.reference_id}")
                continue
            self.stock.apply_movement(self.db, product, item.quantity, "adjustment", "Refund restock")

        transaction.status = "refunded" if data.amount >= transaction.total else "partial_refund"
        self._commit("refund transaction")
        self.db.refresh(refund)
        logger.info(
            f"Refunded {data.amount} cents on {display_id(transaction)} "
            f"(status {transaction.status}, restocked {len(restock_ids)} product(s))"
        )
        return refund

    def get_refunds(self, transaction_id: str, business_id: str) -> list[TransactionRefund]:
        self.get_transaction(transaction_id, business_id)
        return self.repo.get_refunds(self.db, transaction_id)

    # ------------------------------------------------------------------
    # Printing
    # ------------------------------------------------------------------

    def _print_context(self, transaction_id: str, business_id: str) -> dict[str, Any]:
        transaction = self.get_transaction(transaction_id, business_id)
        business = self.repo.get_business(self.db, business_id)
        return {
            "row": transaction,
            "transaction": TransactionResponse.model_validate(transaction),
            "line_items": [LineItemResponse.model_validate(li) for li in transaction.line_items],
            "business": business,
            "business_name": business.name if business else "",
            "receipt_settings": self.settings.get_receipt_settings(self.db, business_id),
        }

    def render_receipt(self, transaction_id: str, business_id: str) -> str:
        context = self._print_context(transaction_id, business_id)
        settings = context["receipt_settings"]
        return build_receipt_html(
            context["transaction"],
            context["line_items"],
            context["business_name"],
            display_id(context["row"]),
            header_text=settings.header_text if settings else None,
            footer_text=settings.footer_text if settings else None,
        )

    def render_invoice(self, transaction_id: str, business_id: str) -> str:
        context = self._print_context(transaction_id, business_id)
        row = context["row"]
        business = context["business"]
        settings = context["receipt_settings"]

        customer_name = WALK_IN_CUSTOMER
        if row.customer:
            customer_name = f"{row.customer.first_name} {row.customer.last_name}".strip() or WALK_IN_CUSTOMER

        return build_invoice_html(
            context["transaction"],
            context["line_items"],
            context["business_name"],
            display_id(row),
            customer_name,
            business_phone=business.phone if business else None,
            business_address=business.address if business else None,
            logo_url=(settings.logo_url if settings else None) or (business.logo_url if business else None),
        )

    # ------------------------------------------------------------------
    # Settings
    # ------------------------------------------------------------------

    def get_tax_settings(self, business_id: str):
        return self.settings.get_tax_settings(self.db, business_id)

    def replace_tax_settings(self, business_id: str, rows: list[TaxSettingInput]):
        for row in rows:
            if is_blank(row.label):
                raise HTTPException(status_code=400, detail="Tax label is required.")
            if row.rate < 0:
                raise HTTPException(status_code=400, detail="Tax rate cannot be negative.")

        saved = self.settings.replace_tax_settings(
            self.db, business_id, [{**row.model_dump(), "label": row.label.strip()} for row in rows]
        )
        logger.info(f"Saved {len(saved)} tax setting(s) for business {business_id}")
        return saved

    def get_receipt_settings(self, business_id: str) -> dict[str, Any]:
        settings = self.settings.get_receipt_settings(self.db, business_id)
        if settings is None:
            return {"header_text": None, "footer_text": None, "logo_url": None}
        return settings

    def save_receipt_settings(self, business_id: str, data: ReceiptSettingInput):
        settings = self.settings.save_receipt_settings(self.db, business_id, **data.model_dump())
        logger.info(f"Saved receipt settings for business {business_id}")
        return settings
