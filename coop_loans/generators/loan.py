"""Loan generator."""

from __future__ import annotations

import itertools
import random
from decimal import Decimal

from coop_loans.generators.base import BaseGenerator
from coop_loans.models import Loan, LoanStatus, LoanType


class LoanGenerator(BaseGenerator):
    """Generate cooperative loans with sequential IDs (``L001``, ``L002``, ...)."""

    LOAN_TYPES = list(LoanType)
    LOAN_TYPE_WEIGHTS = [0.25, 0.55, 0.20]

    # Annual percent
    INTEREST_RATES = {
        LoanType.EMERGENCY: (6.0, 8.0),
        LoanType.COMMON: (6.0, 7.5),
        LoanType.INVESTMENT: (7.0, 9.0),
    }

    # Principal in thousands (THB)
    PRINCIPAL_RANGES = {
        LoanType.EMERGENCY: (5, 30),
        LoanType.COMMON: (10, 100),
        LoanType.INVESTMENT: (30, 200),
    }

    TERMS = {
        LoanType.EMERGENCY: [6, 12],
        LoanType.COMMON: [12, 24, 36],
        LoanType.INVESTMENT: [24, 36, 48, 60],
    }

    STATUSES = [
        LoanStatus.PENDING,
        LoanStatus.APPROVED,
        LoanStatus.REJECTED,
        LoanStatus.ACTIVE,
        LoanStatus.PAID,
    ]
    STATUS_WEIGHTS = [0.05, 0.05, 0.05, 0.70, 0.15]

    def __init__(
        self,
        seed: int | None = None,
        default_rate: float = 0.05,
        start: int = 1,
    ) -> None:
        super().__init__(seed)
        self.default_rate = default_rate
        self._ids = itertools.count(start)

    def generate(
        self,
        member_id: str,
        loan_type: LoanType | None = None,
        status: LoanStatus | None = None,
        guarantor_ids: frozenset[str] = frozenset(),
    ) -> Loan:
        """Generate a loan for a borrower.

        Parameters
        ----------
        member_id : str
            Borrower ID.
        loan_type : LoanType | None
            Loan type (random by weight if omitted).
        status : LoanStatus | None
            Loan status (random by weight if omitted, with ``default_rate``
            of loans DEFAULTED).
        guarantor_ids : frozenset[str]
            Guarantors of the loan.

        Returns
        -------
        Loan
            Generated loan.
        """
        if loan_type is None:
            loan_type = random.choices(self.LOAN_TYPES, weights=self.LOAN_TYPE_WEIGHTS, k=1)[0]
        if status is None:
            status = self._pick_status()

        principal = Decimal(random.randint(*self.PRINCIPAL_RANGES[loan_type]) * 1000)
        rate = Decimal(str(round(random.uniform(*self.INTEREST_RATES[loan_type]) * 2) / 2))
        term = random.choice(self.TERMS[loan_type])

        return Loan(
            loan_id=f"L{next(self._ids):03d}",
            member_id=member_id,
            principal_amount=principal,
            remaining_balance=self._remaining_balance(principal, status),
            interest_rate=rate,
            term_months=term,
            status=status,
            guarantor_ids=frozenset(guarantor_ids),
            loan_type=loan_type,
            start_date=self.fake.date_between(start_date="-3y", end_date="today"),
            contract_no=f"CNT-{random.randint(20, 25)}-{random.randint(1, 999):03d}",
        )

    def _pick_status(self) -> LoanStatus:
        if random.random() < self.default_rate:
            return LoanStatus.DEFAULTED
        return random.choices(self.STATUSES, weights=self.STATUS_WEIGHTS, k=1)[0]

    def _remaining_balance(self, principal: Decimal, status: LoanStatus) -> Decimal:
        """Outstanding principal consistent with the loan's status."""
        if status == LoanStatus.PAID:
            return Decimal(0)
        if status in (LoanStatus.ACTIVE, LoanStatus.DEFAULTED):
            # Round down to the nearest 100, keeping at least 100 outstanding
            repaid_share = random.uniform(0.0, 0.9)
            balance = int(principal * Decimal(str(round(1 - repaid_share, 4)))) // 100 * 100
            return Decimal(max(100, balance))
        return principal
