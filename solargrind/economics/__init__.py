"""Economic analysis module."""

from .financing import loan_amortization, monthly_payment, summarize_loan
from .incentives import compute_incentives, net_cost, system_cost
from .projection import (
    internal_rate_of_return,
    net_present_value,
    payback_period,
    project_financials,
    yearly_projection,
)

__all__ = [
    "monthly_payment",
    "loan_amortization",
    "summarize_loan",
    "system_cost",
    "compute_incentives",
    "net_cost",
    "payback_period",
    "net_present_value",
    "internal_rate_of_return",
    "yearly_projection",
    "project_financials",
]
