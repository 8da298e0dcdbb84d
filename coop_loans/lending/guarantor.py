"""Guarantor eligibility rules for loan applications."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from typing import Any

from coop_loans.config import GuarantorPolicy
from coop_loans.models import (
    Loan,
    LoanApplication,
    LoanStatus,
    Member,
    MemberStatus,
    RejectionReason,
)

logger = logging.getLogger(__name__)

DEFAULT_POLICY = GuarantorPolicy()


@dataclass(frozen=True)
class EligibilityResult:
    """Outcome of a guarantor check.

    A rejected result carries the first failing ``reason`` plus the detail the
    message needs (the member's status or current guarantee count).
    """

    candidate_id: str
    eligible: bool
    reason: RejectionReason | None = None
    candidate_name: str = ""
    member_status: str | None = None
    guarantee_count: int | None = None

    def __bool__(self) -> bool:
        return self.eligible

    @property
    def message(self) -> str:
        """User-facing message, distinct per rejection reason."""
        name = self.candidate_name or self.candidate_id
        if self.eligible:
            return f"{name} can guarantee this loan."
        if self.reason == RejectionReason.ALREADY_ADDED:
            return "Member is already added."
        if self.reason == RejectionReason.SELF_GUARANTEE:
            return "Borrower cannot guarantee themselves."
        if self.reason == RejectionReason.NOT_FOUND:
            return f"Member ID {self.candidate_id} not found in database."
        if self.reason == RejectionReason.INELIGIBLE_STATUS:
            return f"Guarantor is {self.member_status} and ineligible."
        if self.reason == RejectionReason.FROZEN:
            return "Guarantor account is FROZEN due to policy violation."
        if self.reason == RejectionReason.CREDIT_RISK:
            return f"Credit Risk: {name} has defaulted loans."
        return f"Limit Exceeded: {name} already guarantees {self.guarantee_count} loans."


def check_eligibility(
    candidate_id: str,
    borrower_id: str,
    current_guarantor_ids: Iterable[str],
    all_members: Iterable[Member] | Mapping[str, Member],
    all_loans: Iterable[Loan],
    policy: GuarantorPolicy | None = None,
) -> EligibilityResult:
    """Decide whether a member may guarantee the loan being drafted.

    Checks run in review order and the first failure wins: duplicate,
    self-guarantee, existence, member status, frozen account, defaulted loans
    as borrower, then the concurrent-guarantee limit.

    Never raises. Records missing the fields a check needs are skipped.

    Parameters
    ----------
    candidate_id : str
        Member proposed as guarantor. Surrounding whitespace is ignored.
    borrower_id : str
        Member applying for the loan.
    current_guarantor_ids : Iterable[str]
        Guarantors already on the application.
    all_members : Iterable[Member] | Mapping[str, Member]
        Member snapshot.
    all_loans : Iterable[Loan]
        Loan snapshot (every status).
    policy : GuarantorPolicy | None
        Limit and status sets (default: two guarantees across ACTIVE,
        APPROVED and DEFAULTED loans).

    Returns
    -------
    EligibilityResult
        Accept, or the first rejection reason.
    """
    policy = policy or DEFAULT_POLICY
    candidate = _normalize_id(candidate_id)

    if candidate in {_normalize_id(g) for g in current_guarantor_ids or ()}:
        return _reject(candidate, RejectionReason.ALREADY_ADDED)

    if candidate == _normalize_id(borrower_id):
        return _reject(candidate, RejectionReason.SELF_GUARANTEE)

    member = _find_member(candidate, all_members)
    if member is None:
        return _reject(candidate, RejectionReason.NOT_FOUND)

    name = getattr(member, "full_name", "") or ""
    status = getattr(member, "status", None)
    if status != MemberStatus.ACTIVE:
        return _reject(
            candidate,
            RejectionReason.INELIGIBLE_STATUS,
            candidate_name=name,
            member_status=getattr(status, "value", status),
        )

    if getattr(member, "is_frozen", False):
        return _reject(candidate, RejectionReason.FROZEN, candidate_name=name)

    loans = list(all_loans or ())
    for loan in loans:
        if (
            _normalize_id(getattr(loan, "member_id", None)) == candidate
            and _status_of(loan) in policy.credit_risk_statuses
        ):
            return _reject(candidate, RejectionReason.CREDIT_RISK, candidate_name=name)

    count = count_active_guarantees(candidate, loans, policy)
    if count >= policy.max_guarantees:
        return _reject(
            candidate,
            RejectionReason.LIMIT_EXCEEDED,
            candidate_name=name,
            guarantee_count=count,
        )

    return EligibilityResult(candidate_id=candidate, eligible=True, candidate_name=name)


def count_active_guarantees(
    candidate_id: str,
    all_loans: Iterable[Loan],
    policy: GuarantorPolicy | None = None,
) -> int:
    """Count loans the member guarantees that still expose them to liability."""
    policy = policy or DEFAULT_POLICY
    candidate = _normalize_id(candidate_id)
    count = 0
    for loan in all_loans or ():
        guarantors = getattr(loan, "guarantor_ids", None) or ()
        if candidate in {_normalize_id(g) for g in guarantors} and (
            _status_of(loan) in policy.exposure_statuses
        ):
            count += 1
    return count


def add_guarantor(
    application: LoanApplication,
    candidate_id: str,
    all_members: Iterable[Member] | Mapping[str, Member],
    all_loans: Iterable[Loan],
    policy: GuarantorPolicy | None = None,
) -> EligibilityResult | None:
    """Check a candidate and, if eligible, append them to the application.

    Returns ``None`` without checking when the candidate id is blank.
    """
    candidate = _normalize_id(candidate_id)
    if not candidate:
        return None

    result = check_eligibility(
        candidate,
        application.member_id,
        application.guarantor_ids,
        all_members,
        all_loans,
        policy,
    )
    if result.eligible:
        application.guarantor_ids.append(candidate)
        logger.info("Added guarantor %s to application for %s", candidate, application.member_id)
    else:
        logger.info("Rejected guarantor %s: %s", candidate, result.reason.value)
    return result


def remove_guarantor(application: LoanApplication, candidate_id: str) -> None:
    """Remove a guarantor from the application, if present."""
    candidate = _normalize_id(candidate_id)
    application.guarantor_ids[:] = [g for g in application.guarantor_ids if g != candidate]


def _reject(candidate: str, reason: RejectionReason, **detail: Any) -> EligibilityResult:
    return EligibilityResult(candidate_id=candidate, eligible=False, reason=reason, **detail)


def _normalize_id(value: Any) -> str:
    if value is None:
        return ""
    return str(value).strip()


def _find_member(
    candidate: str,
    all_members: Iterable[Member] | Mapping[str, Member],
) -> Member | None:
    if isinstance(all_members, Mapping):
        return all_members.get(candidate)
    for member in all_members or ():
        if _normalize_id(getattr(member, "member_id", None)) == candidate:
            return member
    return None


def _status_of(loan: Any) -> LoanStatus | None:
    try:
        return LoanStatus(getattr(loan, "status", None))
    except ValueError:
        return None
