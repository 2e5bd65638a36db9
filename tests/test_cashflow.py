import pytest

from engine.cashflow import (
    amortize_year,
    annual_mortgage_outlay,
    annual_pmi,
    calculate_mortgage_payment,
    compute_tax_savings,
)


class TestMortgagePayment:
    def test_standard_loan(self):
        assert calculate_mortgage_payment(400000, 7.0, 30) == pytest.approx(2661.21, abs=0.005)

    def test_rounded_to_cents(self):
        payment = calculate_mortgage_payment(123456, 6.375, 15)
        assert round(payment, 2) == pytest.approx(payment, abs=1e-9)

    def test_zero_rate_is_straight_line(self):
        assert calculate_mortgage_payment(360000, 0.0, 30) == pytest.approx(1000.0)

    def test_zero_principal(self):
        assert calculate_mortgage_payment(0, 7.0, 30) == 0.0


class TestAnnualPmi:
    def test_charged_above_threshold(self):
        assert annual_pmi(450000, 500000, 0.5) == pytest.approx(2250.0)

    def test_not_charged_at_threshold(self):
        assert annual_pmi(400000, 500000, 0.5) == 0.0


class TestAmortizeYear:
    def test_first_year(self):
        interest, principal, balance = amortize_year(400000, 2661.21 * 12, 7.0)
        assert interest == pytest.approx(28000.0)
        assert principal == pytest.approx(3934.52)
        assert balance == pytest.approx(396065.48)

    def test_principal_capped_at_balance(self):
        _, principal, balance = amortize_year(1000, 100000, 7.0)
        assert principal == 1000
        assert balance == 0.0

    def test_final_term_year_retires_balance(self):
        _, principal, balance = amortize_year(30000, 31934.52, 7.0, final_term_year=True)
        assert principal == 30000
        assert balance == 0.0


class TestMortgageOutlay:
    def test_regular_year(self):
        assert annual_mortgage_outlay(56333.38, 31934.52, 7.0) == 31934.52

    def test_final_term_year_pays_off_balance(self):
        outlay = annual_mortgage_outlay(56333.38, 31934.52, 7.0, final_term_year=True)
        assert outlay == pytest.approx(56333.38 * 1.07)

    def test_final_term_year_never_below_regular_payment(self):
        assert annual_mortgage_outlay(100.0, 31934.52, 7.0, final_term_year=True) == 31934.52


class TestTaxSavings:
    def test_itemizing_beats_standard_deduction(self):
        # property tax capped at 10k: 20000 + 10000 + 5000 - 29200 = 5800
        assert compute_tax_savings(20000, 15000, 5000, 24.0) == pytest.approx(1392.0)

    def test_floored_at_zero(self):
        assert compute_tax_savings(1000, 1000, 0, 24.0) == 0.0
