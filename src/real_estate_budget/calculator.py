"""
Financial core: net income, retirement horizon, annuity math, maximum budget.

Key conventions:
- Rates are passed as annual percentages (4.0 means 4%) and converted to a
  monthly fraction inside the annuity helpers.
- Every financing option pays at most DEBT_BURDEN_RATIO of net income.
- Calculation steps are appended in computation order while the budget is
  computed; the returned tuple is the audit trail shown to the user.
"""

import logging

from real_estate_budget.data.cities import (
    CASH_MAX_SAVING_YEARS,
    DEBT_BURDEN_RATIO,
    DIRECT_INSTALLMENT_RATE,
    HIGH_BURDEN_RATIO,
    INSTALLMENT_FALLBACK_INCOME_YEARS,
    MAX_INSTALLMENT_TERM_YEARS,
    MAX_MORTGAGE_TERM_YEARS,
    MODERATE_BURDEN_RATIO,
    MORTGAGE_FALLBACK_INCOME_YEARS,
    PENSION_REPLACEMENT_RATIO,
    POST_RETIREMENT_REPAYMENT_YEARS,
    PROXIMITY_BASE_FACTOR,
    PROXIMITY_FLOOR,
    PROXIMITY_STEP,
    PROXIMITY_THRESHOLD_YEARS,
    RETIREMENT_AGE,
)
from real_estate_budget.errors import InvalidInputError
from real_estate_budget.formatting import format_currency, format_percentage
from real_estate_budget.models import (
    BudgetResult,
    CalculationStep,
    FinancingOption,
    RetirementImpact,
)

logger = logging.getLogger(__name__)


def net_income(monthly_income: float, monthly_obligations: float) -> float:
    """Monthly income left after fixed obligations, never negative."""
    if monthly_income < 0 or monthly_obligations < 0:
        raise InvalidInputError("income and obligations cannot be negative")
    return max(0.0, monthly_income - monthly_obligations)


def years_until_retirement(age: int) -> int:
    if age < 0:
        raise InvalidInputError(f"age cannot be negative, got {age}")
    return max(0, RETIREMENT_AGE - age)


def retirement_impact(
    age: int,
    net_income: float,
    salary_increase_pct: float,
) -> RetirementImpact:
    """
    Project monthly income up to retirement at a compound annual raise.

    total_pre_retirement_income uses the average of today's and the final
    income times the number of months remaining. This is a linear
    approximation of the geometric series, not an exact sum.
    """
    if net_income < 0:
        raise InvalidInputError("net_income cannot be negative")
    if salary_increase_pct < 0:
        raise InvalidInputError("salary increase cannot be negative")

    years = years_until_retirement(age)
    if years == 0 or salary_increase_pct == 0:
        pre = net_income
    else:
        pre = net_income * (1 + salary_increase_pct / 100) ** years

    post = PENSION_REPLACEMENT_RATIO * pre
    total = (net_income + pre) / 2 * 12 * years

    return RetirementImpact(
        years_until_retirement=years,
        pre_retirement_income=round(pre, 2),
        post_retirement_income=round(post, 2),
        total_pre_retirement_income=round(total, 2),
    )


def mortgage_payment(loan_amount: float, annual_rate_pct: float, term_years: int) -> float:
    """
    Standard amortised monthly payment: P*r/(1-(1+r)^-n).
    A zero rate spreads the principal evenly over the term.
    """
    if term_years <= 0:
        raise InvalidInputError("term_years must be positive")
    if loan_amount == 0:
        return 0.0
    n = term_years * 12
    r = annual_rate_pct / 100 / 12
    if r == 0:
        return loan_amount / n
    return loan_amount * r / (1 - (1 + r) ** (-n))


def max_loan_amount(monthly_payment: float, annual_rate_pct: float, term_years: int) -> float:
    """
    Annuity present value: the largest principal a fixed monthly payment
    can amortise, PMT*(1-(1+r)^-n)/r. Returns 0 when there is no term.
    """
    n = term_years * 12
    if n <= 0 or monthly_payment == 0:
        return 0.0
    r = annual_rate_pct / 100 / 12
    if r == 0:
        return monthly_payment * n
    return monthly_payment * (1 - (1 + r) ** (-n)) / r


def retirement_proximity_factor(years_until_retirement: int) -> float:
    """
    Lenders shave the loan for borrowers close to retirement.

    >= 15 years -> 1.0
    <  15 years -> 0.95 - 0.01 per year short of 15, floored at 0.80
    """
    if years_until_retirement >= PROXIMITY_THRESHOLD_YEARS:
        return 1.0
    shortfall = PROXIMITY_THRESHOLD_YEARS - years_until_retirement
    return max(PROXIMITY_FLOOR, PROXIMITY_BASE_FACTOR - PROXIMITY_STEP * shortfall)


def affordability_band(ratio: float) -> str:
    """Classify a debt-burden ratio as 'high', 'moderate' or 'comfortable'."""
    if ratio > HIGH_BURDEN_RATIO:
        return "high"
    if ratio > MODERATE_BURDEN_RATIO:
        return "moderate"
    return "comfortable"


# ── Per-option budget rules ───────────────────────────────────────────────────

def _mortgage_budget(
    net: float,
    years: int,
    rate_pct: float,
    steps: list[CalculationStep],
) -> tuple[float, float, float, int, float]:
    payment = DEBT_BURDEN_RATIO * net
    steps.append(CalculationStep(
        label="Maximum monthly payment",
        value=round(payment, 2),
        explanation=(
            f"{DEBT_BURDEN_RATIO:.0%} of net income {format_currency(net)} "
            "(bank debt-burden cap)"
        ),
    ))

    term = min(MAX_MORTGAGE_TERM_YEARS, years + POST_RETIREMENT_REPAYMENT_YEARS)
    steps.append(CalculationStep(
        label="Loan term (years)",
        value=term,
        explanation=(
            f"min({MAX_MORTGAGE_TERM_YEARS}, {years} years to retirement + "
            f"{POST_RETIREMENT_REPAYMENT_YEARS})"
        ),
    ))

    if term <= 0:
        budget = net * 12 * MORTGAGE_FALLBACK_INCOME_YEARS
        steps.append(CalculationStep(
            label="Income ceiling",
            value=round(budget, 2),
            explanation=(
                f"No loan term available; {MORTGAGE_FALLBACK_INCOME_YEARS} years "
                "of net income"
            ),
        ))
        return budget, 0.0, 0.0, 0, 0.0

    loan = max_loan_amount(payment, rate_pct, term)
    steps.append(CalculationStep(
        label="Maximum loan amount",
        value=round(loan, 2),
        explanation=(
            f"Present value of {format_currency(payment)}/month over "
            f"{term * 12} months at {format_percentage(rate_pct, 2)}"
        ),
    ))

    if years < PROXIMITY_THRESHOLD_YEARS:
        factor = retirement_proximity_factor(years)
        loan *= factor
        steps.append(CalculationStep(
            label="Retirement proximity adjustment",
            value=round(factor, 4),
            explanation=(
                f"{years} years to retirement (< {PROXIMITY_THRESHOLD_YEARS}); "
                f"loan reduced to {format_currency(loan)}"
            ),
        ))

    return loan, payment, loan, term, rate_pct


def _cash_budget(
    net: float,
    years: int,
    steps: list[CalculationStep],
) -> tuple[float, float, float, int, float]:
    savings = DEBT_BURDEN_RATIO * net
    steps.append(CalculationStep(
        label="Monthly savings",
        value=round(savings, 2),
        explanation=f"{DEBT_BURDEN_RATIO:.0%} of net income {format_currency(net)}",
    ))

    saving_years = min(years, CASH_MAX_SAVING_YEARS)
    steps.append(CalculationStep(
        label="Saving period (years)",
        value=saving_years,
        explanation=f"min({years} years to retirement, {CASH_MAX_SAVING_YEARS})",
    ))

    budget = savings * 12 * saving_years
    return budget, 0.0, 0.0, 0, 0.0


def _installment_budget(
    net: float,
    years: int,
    steps: list[CalculationStep],
) -> tuple[float, float, float, int, float]:
    rate_pct = DIRECT_INSTALLMENT_RATE
    payment = DEBT_BURDEN_RATIO * net
    steps.append(CalculationStep(
        label="Maximum monthly installment",
        value=round(payment, 2),
        explanation=f"{DEBT_BURDEN_RATIO:.0%} of net income {format_currency(net)}",
    ))

    term = min(MAX_INSTALLMENT_TERM_YEARS, years)
    steps.append(CalculationStep(
        label="Installment term (years)",
        value=term,
        explanation=f"min({MAX_INSTALLMENT_TERM_YEARS}, {years} years to retirement)",
    ))

    if term <= 0:
        budget = net * 12 * INSTALLMENT_FALLBACK_INCOME_YEARS
        steps.append(CalculationStep(
            label="Income ceiling",
            value=round(budget, 2),
            explanation=(
                f"No installment term available; {INSTALLMENT_FALLBACK_INCOME_YEARS} "
                "years of net income"
            ),
        ))
        return budget, 0.0, 0.0, 0, 0.0

    loan = max_loan_amount(payment, rate_pct, term)
    steps.append(CalculationStep(
        label="Maximum financed amount",
        value=round(loan, 2),
        explanation=(
            f"Present value of {format_currency(payment)}/month over "
            f"{term * 12} months at the fixed {format_percentage(rate_pct, 2)} "
            "installment rate"
        ),
    ))
    return loan, payment, loan, term, rate_pct


def calculate_max_budget(
    net_income: float,
    financing_option: FinancingOption,
    age: int,
    salary_increase_pct: float,
    mortgage_rate_pct: float,
) -> BudgetResult:
    """
    Maximum property budget for one financing option.

    Mortgage           : annuity PV of 35% of net income, term tied to retirement.
    Cash               : 35% of net income saved for up to 4 years.
    Direct installment : annuity PV at a fixed 5.5% over at most 10 years.
    """
    if net_income < 0:
        raise InvalidInputError("net_income cannot be negative")
    try:
        financing_option = FinancingOption(financing_option)
    except ValueError:
        raise InvalidInputError(
            f"unsupported financing option {financing_option!r}"
        ) from None
    if not 0 <= mortgage_rate_pct <= 15:
        raise InvalidInputError(
            f"mortgage rate must be between 0 and 15 percent, got {mortgage_rate_pct}"
        )

    retirement = retirement_impact(age, net_income, salary_increase_pct)
    years = retirement.years_until_retirement

    steps: list[CalculationStep] = [
        CalculationStep(
            label="Net monthly income",
            value=round(net_income, 2),
            explanation="Monthly income minus monthly obligations",
        ),
        CalculationStep(
            label="Years until retirement",
            value=years,
            explanation=f"Retirement age {RETIREMENT_AGE} minus current age {age}",
        ),
        CalculationStep(
            label="Net income at retirement",
            value=retirement.pre_retirement_income,
            explanation=(
                f"{format_percentage(salary_increase_pct)} annual raise "
                f"compounded over {years} years"
            ),
        ),
    ]

    if financing_option == FinancingOption.MORTGAGE:
        budget, payment, loan, term, rate = _mortgage_budget(
            net_income, years, mortgage_rate_pct, steps
        )
    elif financing_option == FinancingOption.CASH:
        budget, payment, loan, term, rate = _cash_budget(net_income, years, steps)
    else:
        budget, payment, loan, term, rate = _installment_budget(net_income, years, steps)

    steps.append(CalculationStep(
        label="Maximum budget",
        value=round(budget, 2),
        explanation=f"Highest affordable property price: {format_currency(budget)}",
    ))

    ratio = payment / net_income if net_income > 0 else 0.0

    logger.debug(
        "budget option=%s net=%.2f years=%d max_budget=%.2f payment=%.2f",
        financing_option.value, net_income, years, budget, payment,
    )

    return BudgetResult(
        financing_option=financing_option,
        max_budget=round(budget, 2),
        monthly_payment=round(payment, 2),
        affordability_ratio=round(ratio, 4),
        loan_amount=round(loan, 2),
        loan_term_years=term,
        interest_rate=rate,
        calculation_steps=tuple(steps),
    )
