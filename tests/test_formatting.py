from datetime import date, datetime

import pytest

from pethub.utils.formatting import (
    calculate_pet_age,
    calculate_vaccination_status,
    format_display_date,
    format_money,
    format_phone_number,
    format_receipt_datetime,
    format_time_12h,
    from_cents,
    normalize_tax_label,
    percent_of_cents,
    to_cents,
)
from pethub.utils.sanitization import clean_text_input, escape_html


class TestPhoneFormatting:
    @pytest.mark.parametrize(
        "raw,formatted",
        [
            ("", ""),
            ("787", "787"),
            ("787555", "(787) 555"),
            ("7875555555", "(787) 555-5555"),
            ("787-555-5555 ext 9", "(787) 555-5555"),
            ("1 787 555 5555", "(787) 555-5555"),
        ],
    )
    def test_progressive_format(self, raw, formatted):
        assert format_phone_number(raw) == formatted


class TestMoney:
    def test_cents_round_trip(self):
        for cents in list(range(0, 2000)) + [99999, 123456789]:
            assert to_cents(from_cents(cents)) == cents

    def test_to_cents_rounds_half_up(self):
        assert to_cents("12.345") == 1235
        assert to_cents(0.1 + 0.2) == 30
        assert to_cents(65) == 6500

    def test_format_money(self):
        assert format_money(123456) == "$1234.56"
        assert format_money(5) == "$0.05"
        assert format_money(None) == "$0.00"

    def test_percent_of_cents(self):
        assert percent_of_cents(10000, 10.5) == 1050
        assert percent_of_cents(50, 1) == 1


class TestDates:
    def test_display_date(self):
        assert format_display_date("2026-01-05T14:30:00Z") == "January 5, 2026"
        assert format_display_date(date(2026, 12, 25)) == "December 25, 2026"
        assert format_display_date(None) == ""

    @pytest.mark.parametrize(
        "value,expected",
        [("14:30", "2:30 PM"), ("00:05", "12:05 AM"), ("12:00:00", "12:00 PM"), ("9:15", "9:15 AM")],
    )
    def test_time_12h(self, value, expected):
        assert format_time_12h(value) == expected

    def test_receipt_datetime(self):
        assert format_receipt_datetime(datetime(2026, 1, 5, 14, 30)) == "01/05/2026 2:30 PM"


class TestTaxLabels:
    @pytest.mark.parametrize(
        "label,expected",
        [
            ("IVU", "State Tax"),
            ("State (IVU)", "State Tax"),
            (" municipal ", "Municipal Tax"),
            ("County Tax", "County Tax"),
            (None, None),
        ],
    )
    def test_normalize(self, label, expected):
        assert normalize_tax_label(label) == expected


class TestPetHelpers:
    def test_age_before_and_after_birth_month(self):
        today = date(2026, 6, 15)
        assert calculate_pet_age(3, 2020, today) == 6
        assert calculate_pet_age(6, 2020, today) == 6
        assert calculate_pet_age(7, 2020, today) == 5
        assert calculate_pet_age(None, 2020, today) is None

    def test_vaccination_status(self):
        today = date(2026, 6, 15)
        assert calculate_vaccination_status("2026-01-10", today) == "up_to_date"
        assert calculate_vaccination_status(date(2025, 6, 15), today) == "up_to_date"
        assert calculate_vaccination_status(date(2025, 6, 14), today) == "out_of_date"
        assert calculate_vaccination_status(None, today) == "unknown"

    def test_vaccination_status_on_leap_day(self):
        assert calculate_vaccination_status(date(2023, 2, 28), date(2024, 2, 29)) == "up_to_date"


class TestSanitization:
    def test_escape_html(self):
        assert escape_html('<b>"Coco" & Max</b>') == "&lt;b&gt;&quot;Coco&quot; &amp; Max&lt;/b&gt;"
        assert escape_html("it's") == "it's"
        assert escape_html(None) == ""
        assert escape_html(12) == "12"

    def test_clean_text_input(self):
        assert clean_text_input("  Nervous\x00 with dryers  ") == "Nervous with dryers"
        assert clean_text_input(None) is None
        with pytest.raises(ValueError):
            clean_text_input("x" * 11, max_length=10)
