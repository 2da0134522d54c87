"""Field checks for inventory products (money in cents)"""

from typing import Any

from ...shared.validators import VALID, ValidationResult, invalid, is_blank, is_negative
from .barcode import is_valid_barcode_format


def validate_product_payload(payload: dict[str, Any]) -> ValidationResult:
    if is_blank(payload.get("name")):
        return invalid("Product name is required.")
    if is_blank(payload.get("sku")):
        return invalid("SKU is required.")

    barcode = payload.get("barcode")
    if barcode and not is_valid_barcode_format(barcode):
        return invalid("Barcode length must be 8, 12, 13, or 14 digits.")

    if is_negative(payload.get("quantity")):
        return invalid("Quantity cannot be negative.")
    if is_negative(payload.get("price")):
        return invalid("Price cannot be negative.")
    if is_negative(payload.get("cost")):
        return invalid("Cost cannot be negative.")
    if is_negative(payload.get("reorder_level")):
        return invalid("Reorder level cannot be negative.")

    return VALID
