"""
Checks for transaction create, update and refund, plus the payment status helpers.
Money values are integer cents.
"""

from collections.abc import Iterable
from typing import Any

from ...shared.validators import (
    VALID,
    ValidationResult,
    invalid,
    is_blank,
    is_negative,
    is_uuid,
    is_uuid_or_null,
)

TRANSACTION_STATUSES = (
    "pending",
    "in_progress",
    "paid",
    "partial",
    "refunded",
    "partial_refund",
    "void",
)
PAYMENT_METHODS = ("cash", "card", "ath_movil", "other")
LINE_ITEM_TYPES = ("service", "product")


def _validate_line_item(item: dict[str, Any]) -> ValidationResult:
    quantity = item.get("quantity")
    if quantity is None or quantity < 1:
        return invalid("Each line item must have quantity at least 1.")
    if is_negative(item.get("unit_price")):
        return invalid("Line item price cannot be negative.")
    if is_negative(item.get("line_total")):
        return invalid("Line item total cannot be negative.")
    if is_blank(item.get("name")):
        return invalid("Line item name is required.")
    # Service lines may carry a non-UUID token such as "appointment"
    if item.get("type") == "product" and not is_uuid(item.get("reference_id")):
        return invalid("Product line item must have a valid product reference.")
    return VALID


def validate_create_payload(payload: dict[str, Any]) -> ValidationResult:
    line_items = payload.get("line_items") or []
    if not line_items:
        return invalid("Add at least one line item.")

    for item in line_items:
        result = _validate_line_item(item)
        if not result:
            return result

    if is_negative(payload.get("discount_amount")):
        return invalid("Discount cannot be negative.")
    if is_negative(payload.get("tip_amount")):
        return invalid("Tip cannot be negative.")
    if is_negative(payload.get("amount_tendered")):
        return invalid("Amount tendered cannot be negative.")
    if is_negative(payload.get("change_given")):
        return invalid("Change given cannot be negative.")

    if not is_uuid_or_null(payload.get("customer_id")):
        return invalid("Invalid customer ID.")
    if not is_uuid_or_null(payload.get("appointment_id")):
        return invalid("Invalid appointment ID.")

    return VALID


def validate_refund_payload(
    amount: int,
    transaction_total: int,
    restock_product_ids: Iterable[str],
    product_line_item_reference_ids: Iterable[str],
) -> ValidationResult:
    """
    A refund must be positive and no larger than the transaction total. Products
    picked for restock must be product line items of the same transaction.
    """
    if amount <= 0:
        return invalid("Refund amount must be greater than zero.")
    if amount > transaction_total:
        return invalid("Refund amount cannot exceed transaction total.")

    valid_reference_ids = set(product_line_item_reference_ids)
    for product_id in restock_product_ids:
        if not is_uuid(product_id):
            return invalid("Invalid product ID for restock.")
        if product_id not in valid_reference_ids:
            return invalid("Restock product must be a product line item on this transaction.")

    return VALID


def validate_update_payload(patch: dict[str, Any]) -> ValidationResult:
    if is_negative(patch.get("total")):
        return invalid("Total cannot be negative.")
    if is_negative(patch.get("amount_tendered")):
        return invalid("Amount tendered cannot be negative.")
    if is_negative(patch.get("change_given")):
        return invalid("Change given cannot be negative.")

    status = patch.get("status")
    if status is not None and status not in TRANSACTION_STATUSES:
        return invalid("Invalid status.")

    return VALID


def get_payment_status_label(amount_paid: int, total: int) -> str:
    if amount_paid <= 0:
        return "Unpaid"
    if amount_paid < total:
        return "Partial"
    return "Paid"


def get_payment_status_from_amount(amount_paid: int, total: int) -> str:
    if amount_paid <= 0:
        return "pending"
    if amount_paid < total:
        return "partial"
    return "paid"
