"""Loan financing: annuity payment and amortization schedule.

Residential solar loans are fixed-rate, fixed-term and paid monthly, so
the annuity is evaluated per month and the schedule is rolled up into
calendar-style loan years for display.
"""
from __future__ import annotations

import math

from ..models import CalculationInputError, LoanSummary, LoanYear, require_number

MONTHS_PER_YEAR = 12


def monthly_payment(principal: float, annual_rate: float, term_months: int) -> float:
    """Level monthly payment for a fully amortizing loan.

    payment = P * r * (1 + r)^n / ((1 + r)^n - 1), with r = APR / 12.
    A zero rate degenerates to P / n.
    """
    require_number("principal", principal)
    require_number("annual_rate", annual_rate)
    if isinstance(term_months, bool) or not isinstance(term_months, int) or term_months < 1:
        raise CalculationInputError(f"term_months must be a positive integer, got {term_months!r}")

    if principal == 0:
        return 0.0

    r = annual_rate / MONTHS_PER_YEAR
    n = term_months
    if r == 0:
        return principal / n

    growth = (1 + r) ** n
    return principal * r * growth / (growth - 1)


def loan_amortization(
    principal: float,
    annual_rate: float,
    term_months: int,
) -> list[LoanYear]:
    """Generate a yearly roll-up of a monthly amortization schedule.

    The final year is shorter when *term_months* is not a multiple of 12.
    """
    if principal <= 0 or term_months <= 0:
        return []

    payment = monthly_payment(principal, annual_rate, term_months)
    r = annual_rate / MONTHS_PER_YEAR

    schedule: list[LoanYear] = []
    balance = principal
    year_paid = year_principal = year_interest = 0.0

    for month in range(1, term_months + 1):
        interest = balance * r
        principal_pmt = payment - interest
        balance -= principal_pmt

        year_paid += payment
        year_principal += principal_pmt
        year_interest += interest

        if month % MONTHS_PER_YEAR == 0 or month == term_months:
            schedule.append(LoanYear(
                year=math.ceil(month / MONTHS_PER_YEAR),
                payment=round(year_paid, 2),
                principal_payment=round(year_principal, 2),
                interest_payment=round(year_interest, 2),
                remaining_balance=round(max(balance, 0.0), 2),
            ))
            year_paid = year_principal = year_interest = 0.0

    return schedule


def summarize_loan(
    financed_cost: float,
    annual_rate: float,
    term_months: int,
    down_payment_percent: float = 0.0,
) -> LoanSummary:
    """Loan on *financed_cost* less a down payment.

    Callers pass the post-incentive net cost as *financed_cost*.
    """
    require_number("financed_cost", financed_cost)
    down_payment = financed_cost * down_payment_percent / 100.0
    principal = financed_cost - down_payment

    payment = monthly_payment(principal, annual_rate, term_months)
    total_paid = payment * term_months

    return LoanSummary(
        principal=principal,
        apr=annual_rate,
        term_months=term_months,
        down_payment=down_payment,
        monthly_payment=payment,
        total_paid=total_paid,
        total_interest=total_paid - principal,
        schedule=tuple(loan_amortization(principal, annual_rate, term_months)),
    )
