"""Unit tests for currency helpers"""

from decimal import Decimal

from src.domain.money import line_total, tax_for, to_money


class TestMoney:

    def test_to_money_rounds_half_up(self):
        assert to_money("10.005") == Decimal("10.01")
        assert to_money("10.004") == Decimal("10.00")

    def test_to_money_handles_floats_and_none(self):
        assert to_money(0.1) == Decimal("0.10")
        assert to_money(None) == Decimal("0.00")

    def test_line_total(self):
        assert line_total(3, "100") == Decimal("300.00")
        assert line_total(1, Decimal("50")) == Decimal("50.00")

    def test_tax_for_twenty_percent(self):
        assert tax_for(Decimal("3500.00"), 20) == Decimal("700.00")

    def test_tax_for_rounds_to_cents(self):
        # 33.33 * 18% = 5.9994
        assert tax_for("33.33", "18") == Decimal("6.00")
