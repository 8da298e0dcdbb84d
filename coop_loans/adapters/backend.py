"""Mapping between backend REST payloads and domain models.

The backend speaks its own DTO vocabulary (``uuid``, ``outstandingBalance``,
``isActive``). Everything that knows those names lives here so the lending
rules only ever see ``Member`` and ``Loan``.
"""

from __future__ import annotations

from typing import Any

from coop_loans.adapters.fields import parse_date, parse_decimal, parse_enum, parse_int, require
from coop_loans.exceptions import MappingError
from coop_loans.models import Loan, LoanApplication, LoanStatus, LoanType, Member, MemberStatus


def page_content(payload: Any) -> list[dict[str, Any]]:
    """Unwrap a paged response (``{"content": [...]}``) or a bare list."""
    if isinstance(payload, list):
        return payload
    if isinstance(payload, dict):
        content = payload.get("content")
        if content is None:
            return []
        if isinstance(content, list):
            return content
    raise MappingError(f"Expected a list or page payload, got {type(payload).__name__}")


def member_from_backend(dto: dict[str, Any]) -> Member:
    """Map a backend member DTO to a ``Member``."""
    if "isActive" in dto:
        status = MemberStatus.ACTIVE if dto["isActive"] else MemberStatus.INACTIVE
    else:
        status = parse_enum(MemberStatus, dto.get("status", MemberStatus.ACTIVE.value), "status")

    income = dto.get("monthlyIncome")
    return Member(
        member_id=_entity_id(dto, "member"),
        status=status,
        is_frozen=bool(dto.get("isFrozen", False)),
        full_name=dto.get("name") or dto.get("fullName") or "",
        monthly_income=parse_decimal(income, "monthlyIncome") if income is not None else None,
        joined_date=parse_date(dto.get("registrationDate")),
    )


def loan_from_backend(dto: dict[str, Any]) -> Loan:
    """Map a backend loan DTO to a ``Loan``."""
    member = dto.get("member") or {}
    # Members are keyed by uuid; memberId is the human-readable member code
    member_id = member.get("uuid") or dto.get("memberUuid") or dto.get("memberId")
    if not member_id:
        raise MappingError(f"Loan {dto.get('uuid')!r} has no borrower")

    balance = dto.get("outstandingBalance", dto.get("remainingBalance"))
    if balance is None:
        raise MappingError(f"Loan {dto.get('uuid')!r} has no outstandingBalance")

    return Loan(
        loan_id=_entity_id(dto, "loan"),
        member_id=str(member_id),
        principal_amount=parse_decimal(require(dto, "principalAmount"), "principalAmount"),
        remaining_balance=parse_decimal(balance, "outstandingBalance"),
        interest_rate=parse_decimal(require(dto, "interestRate"), "interestRate"),
        term_months=parse_int(require(dto, "termMonths"), "termMonths"),
        status=parse_enum(LoanStatus, require(dto, "status"), "status"),
        guarantor_ids=frozenset(_guarantor_ids(dto)),
        loan_type=parse_enum(LoanType, dto.get("loanType") or LoanType.COMMON.value, "loanType"),
        start_date=parse_date(dto.get("startDate")),
        contract_no=dto.get("loanNumber"),
    )


def loan_application_to_backend(application: LoanApplication) -> dict[str, Any]:
    """Build the backend's loan application request body."""
    return {
        "memberUuid": application.member_id,
        "principalAmount": float(application.principal_amount),
        "termMonths": application.term_months,
        "loanType": application.loan_type.value,
        "purpose": application.purpose,
        "interestRate": float(application.interest_rate),
        "guarantors": [{"memberUuid": gid} for gid in application.guarantor_ids],
    }


def _entity_id(dto: dict[str, Any], entity: str) -> str:
    value = dto.get("uuid", dto.get("id"))
    if value is None or value == "":
        raise MappingError(f"{entity.capitalize()} payload has no uuid")
    return str(value)


def _guarantor_ids(dto: dict[str, Any]) -> list[str]:
    if "guarantors" in dto:
        ids = []
        for g in dto["guarantors"] or []:
            if isinstance(g, dict):
                gid = g.get("memberUuid")
            else:
                gid = g
            if gid:
                ids.append(str(gid))
        return ids
    return [str(g) for g in dto.get("guarantorIds") or []]
