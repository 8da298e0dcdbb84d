"""Member and loan snapshot with referential integrity."""

import logging
from collections import Counter
from dataclasses import dataclass, field
from decimal import Decimal
from typing import Iterable

from coop_loans.config import GuarantorPolicy
from coop_loans.exceptions import (
    EntityNotFoundError,
    InvalidEntityStateError,
    ReferentialIntegrityError,
)
from coop_loans.lending.guarantor import EligibilityResult, check_eligibility
from coop_loans.lending.repayment import allocate_loan_repayment, apply_allocation
from coop_loans.models import Loan, LoanStatus, Member, PaymentAllocation

logger = logging.getLogger(__name__)


@dataclass
class CoopDataStore:
    """In-memory snapshot of members and loans with relationship tracking."""

    members: dict[str, Member] = field(default_factory=dict)
    loans: dict[str, Loan] = field(default_factory=dict)

    # Relationship indexes
    _member_loans: dict[str, list[str]] = field(default_factory=dict)
    _guarantor_loans: dict[str, list[str]] = field(default_factory=dict)

    def add_member(self, member: Member) -> None:
        """Add a member to the store."""
        self.members[member.member_id] = member
        self._member_loans.setdefault(member.member_id, [])
        self._guarantor_loans.setdefault(member.member_id, [])

    def add_loan(self, loan: Loan) -> None:
        """Add a loan to the store."""
        if loan.member_id not in self.members:
            raise ReferentialIntegrityError(f"Member {loan.member_id} not found")

        for guarantor_id in loan.guarantor_ids:
            if guarantor_id not in self.members:
                raise ReferentialIntegrityError(f"Guarantor {guarantor_id} not found")

        self.loans[loan.loan_id] = loan
        _index(self._member_loans, loan.member_id, loan.loan_id)
        for guarantor_id in loan.guarantor_ids:
            _index(self._guarantor_loans, guarantor_id, loan.loan_id)

    def add_members(self, members: Iterable[Member]) -> None:
        """Add several members."""
        for member in members:
            self.add_member(member)

    # Query methods
    def get_member(self, member_id: str) -> Member:
        """Get a member by ID."""
        try:
            return self.members[member_id]
        except KeyError:
            raise EntityNotFoundError(f"Member {member_id} not found") from None

    def get_loan(self, loan_id: str) -> Loan:
        """Get a loan by ID."""
        try:
            return self.loans[loan_id]
        except KeyError:
            raise EntityNotFoundError(f"Loan {loan_id} not found") from None

    def get_member_loans(self, member_id: str) -> list[Loan]:
        """Get all loans a member has borrowed."""
        loan_ids = self._member_loans.get(member_id, [])
        return [self.loans[lid] for lid in loan_ids]

    def get_guaranteed_loans(self, member_id: str) -> list[Loan]:
        """Get all loans a member guarantees."""
        loan_ids = self._guarantor_loans.get(member_id, [])
        return [self.loans[lid] for lid in loan_ids]

    def check_guarantor(
        self,
        candidate_id: str,
        borrower_id: str,
        current_guarantor_ids: Iterable[str] = (),
        policy: GuarantorPolicy | None = None,
    ) -> EligibilityResult:
        """Check a guarantor candidate against this snapshot."""
        return check_eligibility(
            candidate_id,
            borrower_id,
            current_guarantor_ids,
            self.members,
            self.loans.values(),
            policy,
        )

    def record_repayment(self, loan_id: str, cash_received: Decimal) -> PaymentAllocation:
        """Allocate a repayment and apply it to the stored loan.

        Raises
        ------
        EntityNotFoundError
            If the loan does not exist.
        InvalidEntityStateError
            If the loan is not ACTIVE.
        """
        loan = self.get_loan(loan_id)
        if loan.status != LoanStatus.ACTIVE:
            raise InvalidEntityStateError(
                f"Loan {loan_id} is {loan.status.value} and cannot take repayments"
            )

        allocation = allocate_loan_repayment(loan, cash_received)
        if allocation.is_overpayment:
            logger.warning(
                "Repayment on %s exceeds payoff by %s; excess not applied",
                loan_id,
                allocation.excess_cash,
            )

        updated = apply_allocation(loan, allocation)
        self.loans[loan_id] = updated
        if updated.status == LoanStatus.PAID:
            logger.info("Loan %s settled", loan_id)
        return allocation

    def summary(self) -> dict[str, int]:
        """Return summary counts of all entities."""
        by_status = Counter(loan.status for loan in self.loans.values())
        summary = {"members": len(self.members), "loans": len(self.loans)}
        for status in LoanStatus:
            summary[f"loans_{status.value.lower()}"] = by_status[status]
        return summary


def _index(index: dict[str, list[str]], key: str, loan_id: str) -> None:
    ids = index.setdefault(key, [])
    if loan_id not in ids:
        ids.append(loan_id)
