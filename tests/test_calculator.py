"""
Numerical test cases for calculator.py.
"""

import pytest

from real_estate_budget.calculator import (
    affordability_band,
    calculate_max_budget,
    max_loan_amount,
    mortgage_payment,
    net_income,
    retirement_impact,
    retirement_proximity_factor,
)
from real_estate_budget.data.cities import DIRECT_INSTALLMENT_RATE
from real_estate_budget.errors import InvalidInputError
from real_estate_budget.models import FinancingOption


# ── Helpers ───────────────────────────────────────────────────────────────────

def budget_for(option, net=12_000.0, age=30, raise_pct=3.0, rate=4.0):
    return calculate_max_budget(net, option, age, raise_pct, rate)


def annuity_pv(payment: float, annual_rate_pct: float, months: int) -> float:
    r = annual_rate_pct / 100 / 12
    return payment * (1 - (1 + r) ** -months) / r


# ── Net income ────────────────────────────────────────────────────────────────

def test_net_income_basic():
    assert net_income(15_000, 3_000) == 12_000


def test_net_income_never_negative():
    assert net_income(5_000, 8_000) == 0.0


@pytest.mark.parametrize("income,obligations", [
    (1_000, 0), (15_000, 3_000), (15_000, 15_000), (4_000, 9_999),
])
def test_net_income_bounds(income, obligations):
    result = net_income(income, obligations)
    assert 0 <= result <= income


def test_net_income_rejects_negative_inputs():
    with pytest.raises(InvalidInputError):
        net_income(-1, 0)
    with pytest.raises(InvalidInputError):
        net_income(10_000, -5)


# ── Retirement impact ─────────────────────────────────────────────────────────

def test_retirement_impact_compound_growth():
    impact = retirement_impact(30, 12_000, 3.0)
    pre = 12_000 * 1.03 ** 35

    assert impact.years_until_retirement == 35
    assert impact.pre_retirement_income == pytest.approx(pre, abs=0.01)
    assert impact.post_retirement_income == pytest.approx(0.6 * pre, abs=0.01)
    # Linear approximation: average of start and end income for every month
    assert impact.total_pre_retirement_income == pytest.approx(
        (12_000 + pre) / 2 * 12 * 35, abs=0.05
    )


def test_retirement_impact_past_retirement_age():
    impact = retirement_impact(70, 12_000, 5.0)
    assert impact.years_until_retirement == 0
    assert impact.pre_retirement_income == 12_000
    assert impact.post_retirement_income == pytest.approx(7_200)
    assert impact.total_pre_retirement_income == 0


def test_retirement_impact_zero_raise():
    impact = retirement_impact(40, 10_000, 0.0)
    assert impact.pre_retirement_income == 10_000
    assert impact.total_pre_retirement_income == pytest.approx(10_000 * 12 * 25)


# ── Annuity helpers ───────────────────────────────────────────────────────────

def test_mortgage_payment_formula():
    """Standard annuity payment: P*r/(1-(1+r)^-n)."""
    P = 1_000_000
    r = 0.04 / 12
    n = 25 * 12
    expected = P * r / (1 - (1 + r) ** -n)
    assert mortgage_payment(P, 4.0, 25) == pytest.approx(expected, abs=0.01)


def test_mortgage_payment_zero_rate():
    assert mortgage_payment(120_000, 0.0, 10) == pytest.approx(1_000)


def test_mortgage_payment_requires_term():
    with pytest.raises(InvalidInputError):
        mortgage_payment(100_000, 4.0, 0)


def test_max_loan_amount_inverts_payment():
    loan = max_loan_amount(4_200, 4.0, 25)
    assert mortgage_payment(loan, 4.0, 25) == pytest.approx(4_200, abs=0.01)


def test_max_loan_amount_edge_cases():
    assert max_loan_amount(4_200, 4.0, 0) == 0.0
    assert max_loan_amount(4_200, 0.0, 25) == pytest.approx(4_200 * 300)


# ── Retirement proximity factor ───────────────────────────────────────────────

@pytest.mark.parametrize("years,expected", [
    (35, 1.0),
    (15, 1.0),
    (14, 0.94),
    (10, 0.90),
    (2, 0.82),
    (1, 0.81),
    (0, 0.80),
])
def test_retirement_proximity_factor(years, expected):
    assert retirement_proximity_factor(years) == pytest.approx(expected)


# ── Mortgage budget ───────────────────────────────────────────────────────────

def test_mortgage_example_scenario():
    """Net 12,000, age 30, 4%: 25-year cap, no proximity reduction."""
    result = budget_for(FinancingOption.MORTGAGE)

    assert result.monthly_payment == pytest.approx(4_200)
    assert result.loan_term_years == 25
    assert result.max_budget == pytest.approx(annuity_pv(4_200, 4.0, 300), abs=0.01)
    assert 790_000 < result.max_budget < 800_000
    assert result.loan_amount == result.max_budget
    assert result.interest_rate == 4.0
    assert result.affordability_ratio == pytest.approx(0.35)


def test_mortgage_steps_in_order():
    result = budget_for(FinancingOption.MORTGAGE)
    labels = [s.label for s in result.calculation_steps]
    assert labels == [
        "Net monthly income",
        "Years until retirement",
        "Net income at retirement",
        "Maximum monthly payment",
        "Loan term (years)",
        "Maximum loan amount",
        "Maximum budget",
    ]
    assert result.calculation_steps[-1].value == result.max_budget


def test_mortgage_near_retirement_is_reduced():
    """Age 55: 10 years left, term 15, factor 0.90."""
    result = budget_for(FinancingOption.MORTGAGE, age=55)

    assert result.loan_term_years == 15
    assert result.max_budget == pytest.approx(
        annuity_pv(4_200, 4.0, 180) * 0.90, abs=0.01
    )
    labels = [s.label for s in result.calculation_steps]
    assert "Retirement proximity adjustment" in labels
    # The payment is still the full debt-burden cap
    assert result.monthly_payment == pytest.approx(4_200)


def test_mortgage_at_retirement_uses_floor_factor():
    result = budget_for(FinancingOption.MORTGAGE, age=65)
    assert result.loan_term_years == 5
    assert result.max_budget == pytest.approx(
        annuity_pv(4_200, 4.0, 60) * 0.80, abs=0.01
    )


def test_mortgage_zero_rate():
    result = budget_for(FinancingOption.MORTGAGE, rate=0.0)
    assert result.max_budget == pytest.approx(4_200 * 300)


@pytest.mark.parametrize("net", [3_000, 12_000, 40_000])
@pytest.mark.parametrize("age", [25, 45, 60])
def test_mortgage_ratio_matches_payment(net, age):
    result = budget_for(FinancingOption.MORTGAGE, net=net, age=age)
    assert result.monthly_payment == pytest.approx(0.35 * net)
    assert result.affordability_ratio == pytest.approx(result.monthly_payment / net)


def test_zero_net_income_has_zero_ratio():
    result = budget_for(FinancingOption.MORTGAGE, net=0.0)
    assert result.max_budget == 0
    assert result.affordability_ratio == 0


# ── Cash budget ───────────────────────────────────────────────────────────────

def test_cash_example_scenario():
    """Age 60: 5 years to retirement, savings capped at 4 years."""
    result = budget_for(FinancingOption.CASH, age=60)
    assert result.max_budget == pytest.approx(201_600)
    assert result.monthly_payment == 0
    assert result.affordability_ratio == 0
    assert result.loan_amount == 0
    assert result.loan_term_years == 0


def test_cash_at_retirement_has_no_saving_period():
    result = budget_for(FinancingOption.CASH, age=65)
    assert result.max_budget == 0


@pytest.mark.parametrize("age", [20, 40, 62, 80])
def test_cash_never_has_payment(age):
    result = budget_for(FinancingOption.CASH, age=age)
    assert result.monthly_payment == 0
    assert result.affordability_ratio == 0


# ── Direct installment budget ─────────────────────────────────────────────────

def test_installment_uses_fixed_rate_and_ten_year_cap():
    result = budget_for(FinancingOption.DIRECT_INSTALLMENT, rate=2.0)
    assert result.interest_rate == DIRECT_INSTALLMENT_RATE
    assert result.loan_term_years == 10
    assert result.max_budget == pytest.approx(
        annuity_pv(4_200, DIRECT_INSTALLMENT_RATE, 120), abs=0.01
    )


def test_installment_term_follows_retirement():
    result = budget_for(FinancingOption.DIRECT_INSTALLMENT, age=60)
    assert result.loan_term_years == 5


def test_installment_fallback_at_retirement():
    result = budget_for(FinancingOption.DIRECT_INSTALLMENT, age=65)
    assert result.max_budget == pytest.approx(12_000 * 12 * 2)
    assert result.monthly_payment == 0
    assert result.calculation_steps[-2].label == "Income ceiling"


# ── Cross-option properties ───────────────────────────────────────────────────

@pytest.mark.parametrize("option", list(FinancingOption))
@pytest.mark.parametrize("age", [25, 52, 63])
def test_budget_monotonic_in_net_income(option, age):
    budgets = [
        budget_for(option, net=net, age=age).max_budget
        for net in (0, 1_000, 5_000, 12_000, 30_000, 75_000)
    ]
    assert budgets == sorted(budgets)


def test_string_option_is_accepted():
    assert budget_for("cash", age=60).max_budget == pytest.approx(201_600)


def test_rejects_unknown_option_and_bad_rate():
    with pytest.raises(InvalidInputError):
        budget_for("gold")
    with pytest.raises(InvalidInputError):
        budget_for(FinancingOption.MORTGAGE, rate=16.0)
    with pytest.raises(InvalidInputError):
        budget_for(FinancingOption.MORTGAGE, net=-1.0)


# ── Affordability band ────────────────────────────────────────────────────────

def test_affordability_band():
    assert affordability_band(0.41) == "high"
    assert affordability_band(0.40) == "moderate"
    assert affordability_band(0.36) == "moderate"
    assert affordability_band(0.35) == "comfortable"
    assert affordability_band(0.0) == "comfortable"


def test_high_burden_flag():
    assert not budget_for(FinancingOption.MORTGAGE).is_high_burden
