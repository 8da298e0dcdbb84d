"""Lending rules: repayment allocation, payoff quotes and guarantor checks."""

from coop_loans.lending.guarantor import (
    EligibilityResult,
    add_guarantor,
    check_eligibility,
    count_active_guarantees,
    remove_guarantor,
)
from coop_loans.lending.repayment import (
    allocate_loan_repayment,
    allocate_repayment,
    apply_allocation,
    daily_interest,
    monthly_interest,
    quote_payoff,
)

__all__ = [
    "EligibilityResult",
    "add_guarantor",
    "allocate_loan_repayment",
    "allocate_repayment",
    "apply_allocation",
    "check_eligibility",
    "count_active_guarantees",
    "daily_interest",
    "monthly_interest",
    "quote_payoff",
    "remove_guarantor",
]
