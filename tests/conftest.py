"""Pytest configuration and fixtures."""

import logging
from decimal import Decimal
from typing import Callable, Iterator

import pytest

from coop_loans.models import Loan, LoanStatus, Member, MemberStatus
from coop_loans.store import CoopDataStore


@pytest.fixture(autouse=True)
def restore_logging() -> Iterator[None]:
    """Undo any handler and level changes made by setup_logging."""
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)
    logging.getLogger("coop_loans").setLevel(logging.NOTSET)


@pytest.fixture
def seed() -> int:
    """Fixed seed for reproducible tests."""
    return 42


@pytest.fixture
def members() -> list[Member]:
    """Member snapshot covering every eligibility branch."""
    return [
        Member(member_id="M001", status=MemberStatus.ACTIVE, full_name="Somsak Jai-dee"),
        Member(member_id="M002", status=MemberStatus.ACTIVE, full_name="Malee Srikram"),
        Member(member_id="M003", status=MemberStatus.ACTIVE, full_name="Prasert Meekul"),
        Member(member_id="M004", status=MemberStatus.ACTIVE, full_name="Aree Sampun"),
        Member(member_id="M005", status=MemberStatus.INACTIVE, full_name="Wichai Dee"),
        Member(
            member_id="M006",
            status=MemberStatus.ACTIVE,
            is_frozen=True,
            full_name="Nok Sawang",
        ),
    ]


@pytest.fixture
def make_loan() -> Callable[..., Loan]:
    """Factory for loans with sensible defaults."""
    counter = iter(range(1, 1000))

    def _make(
        member_id: str = "M002",
        status: LoanStatus = LoanStatus.ACTIVE,
        guarantor_ids: tuple[str, ...] = (),
        principal: str = "20000",
        balance: str = "15000",
        rate: str = "6.5",
        term: int = 12,
        loan_id: str | None = None,
    ) -> Loan:
        return Loan(
            loan_id=loan_id or f"L{next(counter):03d}",
            member_id=member_id,
            principal_amount=Decimal(principal),
            remaining_balance=Decimal(balance),
            interest_rate=Decimal(rate),
            term_months=term,
            status=status,
            guarantor_ids=frozenset(guarantor_ids),
        )

    return _make


@pytest.fixture
def store(members: list[Member]) -> CoopDataStore:
    """Store seeded with the member snapshot and no loans."""
    s = CoopDataStore()
    s.add_members(members)
    return s
