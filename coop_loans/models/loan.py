"""Loan models for the cooperative."""

from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal

from coop_loans.models.enums import LoanStatus, LoanType


@dataclass(frozen=True)
class Loan:
    """Loan contract entity.

    ``principal_amount`` is fixed at disbursement. ``remaining_balance`` is the
    outstanding principal and only ever decreases after that.
    """

    loan_id: str
    member_id: str  # Borrower
    principal_amount: Decimal
    remaining_balance: Decimal
    interest_rate: Decimal  # Nominal annual percent (e.g., 6.5)
    term_months: int
    status: LoanStatus
    guarantor_ids: frozenset[str] = frozenset()
    loan_type: LoanType = LoanType.COMMON
    start_date: date | None = None
    contract_no: str | None = None


@dataclass
class LoanApplication:
    """Loan application being drafted, before it reaches the backend."""

    member_id: str
    principal_amount: Decimal
    term_months: int
    loan_type: LoanType = LoanType.COMMON
    purpose: str = ""
    interest_rate: Decimal = Decimal("12.0")
    guarantor_ids: list[str] = field(default_factory=list)
