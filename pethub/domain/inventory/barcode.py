"""
Barcode (UPC/EAN/GTIN) checks and SKU generation.

The barcode is what scanners read; the SKU is the internal identifier every
product must have. Products created from a scan get a "BC-<barcode>" SKU.
"""

from collections.abc import Iterable

from ...shared.validators import VALID, ValidationResult, invalid

VALID_BARCODE_LENGTHS = (8, 12, 13, 14)
MAX_BARCODE_LENGTH = 20
SKU_PREFIX = "BC"


def is_valid_barcode_format(value: str) -> bool:
    trimmed = (value or "").strip()
    return trimmed.isdigit() and trimmed.isascii() and len(trimmed) in VALID_BARCODE_LENGTHS


def validate_barcode(value: str) -> ValidationResult:
    trimmed = (value or "").strip()
    if not trimmed:
        return invalid("Barcode is required")
    if len(trimmed) > MAX_BARCODE_LENGTH:
        return invalid("Barcode too long")
    if not (trimmed.isdigit() and trimmed.isascii()):
        return invalid("Barcode must contain only digits")
    if len(trimmed) not in VALID_BARCODE_LENGTHS:
        return invalid("Barcode length must be 8, 12, 13, or 14 digits")
    return VALID


def normalize_barcode_for_match(value: str) -> str:
    """Pad a 12-digit UPC to 13 digits so it matches the equivalent EAN"""
    trimmed = (value or "").strip()
    if not trimmed.isdigit():
        return trimmed
    if len(trimmed) == 12:
        return "0" + trimmed
    return trimmed


def generate_sku_for_barcode(barcode: str, existing_skus: Iterable[str]) -> str:
    """BC-{barcode}, with -1, -2, ... appended on (case-insensitive) collision"""
    base = f"{SKU_PREFIX}-{barcode}"
    taken = {sku.lower() for sku in existing_skus if sku}
    if base.lower() not in taken:
        return base

    suffix = 1
    while f"{base}-{suffix}".lower() in taken:
        suffix += 1
    return f"{base}-{suffix}"
