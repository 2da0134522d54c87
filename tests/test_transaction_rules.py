import uuid

import pytest

from pethub.domain.transactions.service import DEFAULT_TAX_SETTINGS, compute_tax, compute_totals
from pethub.domain.transactions.validation import (
    get_payment_status_from_amount,
    get_payment_status_label,
    validate_create_payload,
    validate_refund_payload,
    validate_update_payload,
)


def line_item(**overrides):
    item = {"type": "service", "reference_id": "appointment", "name": "Bath", "quantity": 1, "unit_price": 2500, "line_total": 2500}
    item.update(overrides)
    return item


class TestCreatePayload:
    def test_empty_line_items(self):
        result = validate_create_payload({"line_items": []})
        assert not result
        assert "at least one line item" in result.error

    def test_missing_line_items(self):
        assert "at least one line item" in validate_create_payload({}).error

    def test_service_line_with_token_reference(self):
        assert validate_create_payload({"line_items": [line_item()]})

    def test_product_reference_must_be_uuid(self):
        result = validate_create_payload({"line_items": [line_item(type="product", reference_id="not-a-uuid")]})
        assert not result
        assert "product" in result.error.lower()

    def test_product_with_uuid_reference(self):
        assert validate_create_payload({"line_items": [line_item(type="product", reference_id=str(uuid.uuid4()))]})

    def test_quantity_at_least_one(self):
        result = validate_create_payload({"line_items": [line_item(quantity=0)]})
        assert result.error == "Each line item must have quantity at least 1."

    def test_negative_amounts(self):
        items = [line_item()]
        assert validate_create_payload({"line_items": items, "discount_amount": -1}).error == "Discount cannot be negative."
        assert validate_create_payload({"line_items": items, "tip_amount": -1}).error == "Tip cannot be negative."

    def test_customer_reference(self):
        items = [line_item()]
        assert validate_create_payload({"line_items": items, "customer_id": ""})
        assert validate_create_payload({"line_items": items, "customer_id": "walk-in"}).error == "Invalid customer ID."


class TestRefundPayload:
    def test_partial_refund_is_valid(self):
        assert validate_refund_payload(500, 1000, [], [])

    def test_refund_cannot_exceed_total(self):
        result = validate_refund_payload(1500, 1000, [], [])
        assert not result
        assert "exceed" in result.error

    def test_refund_must_be_positive(self):
        result = validate_refund_payload(0, 1000, [], [])
        assert not result
        assert "greater than zero" in result.error

    def test_full_refund_is_valid(self):
        assert validate_refund_payload(1000, 1000, [], [])

    def test_restock_product_must_be_on_transaction(self):
        product_a = str(uuid.uuid4())
        product_b = str(uuid.uuid4())

        result = validate_refund_payload(500, 1000, [product_a], [product_b])
        assert not result
        assert result.error == "Restock product must be a product line item on this transaction."

        assert validate_refund_payload(500, 1000, [product_a], [product_a, product_b])

    def test_restock_id_must_be_uuid(self):
        assert validate_refund_payload(500, 1000, ["shampoo"], ["shampoo"]).error == "Invalid product ID for restock."


class TestUpdatePayload:
    def test_status_must_be_known(self):
        assert validate_update_payload({"status": "paid"})
        assert validate_update_payload({"status": "lost"}).error == "Invalid status."

    def test_negative_total(self):
        assert validate_update_payload({"total": -1}).error == "Total cannot be negative."

    def test_empty_patch(self):
        assert validate_update_payload({})


class TestPaymentStatus:
    @pytest.mark.parametrize(
        "paid,total,label",
        [(0, 100, "Unpaid"), (50, 100, "Partial"), (100, 100, "Paid"), (150, 100, "Paid")],
    )
    def test_label(self, paid, total, label):
        assert get_payment_status_label(paid, total) == label

    @pytest.mark.parametrize(
        "paid,total,status",
        [(0, 100, "pending"), (-5, 100, "pending"), (50, 100, "partial"), (100, 100, "paid"), (150, 100, "paid")],
    )
    def test_status(self, paid, total, status):
        assert get_payment_status_from_amount(paid, total) == status


class TestTotals:
    """Checkout math in integer cents"""

    def test_default_puerto_rico_taxes(self):
        snapshot, total_tax = compute_tax(10000, list(DEFAULT_TAX_SETTINGS))

        assert snapshot == [
            {"label": "State Tax", "rate": 10.5, "amount": 1050},
            {"label": "Municipal Tax", "rate": 1.0, "amount": 100},
        ]
        assert total_tax == 1150

    def test_tax_rounds_half_up(self):
        # 10.5% of 10 cents is 1.05 -> 1; 1% of 50 cents is 0.5 -> 1
        assert compute_tax(10, [{"label": "IVU", "rate": 10.5}])[1] == 1
        assert compute_tax(50, [{"label": "Municipal", "rate": 1}])[1] == 1

    def test_totals_with_discount_and_tip(self):
        totals = compute_totals([6500, 1299], 799, 1000, list(DEFAULT_TAX_SETTINGS))

        # taxable = 7799 - 799 = 7000; tax = 735 + 70
        assert totals["subtotal"] == 7799
        assert [row["amount"] for row in totals["tax_snapshot"]] == [735, 70]
        assert totals["total"] == 7000 + 805 + 1000

    def test_discount_larger_than_subtotal(self):
        totals = compute_totals([1000], 5000, 200, list(DEFAULT_TAX_SETTINGS))
        assert totals["total"] == 200
        assert all(row["amount"] == 0 for row in totals["tax_snapshot"])

    def test_no_tax_rows(self):
        assert compute_totals([1000], 0, 0, [])["total"] == 1000
