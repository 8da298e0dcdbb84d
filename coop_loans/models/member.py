"""Member model for the cooperative."""

from dataclasses import dataclass
from datetime import date
from decimal import Decimal

from coop_loans.models.enums import MemberStatus


@dataclass(frozen=True)
class Member:
    """Cooperative member as seen by the lending rules."""

    member_id: str
    status: MemberStatus
    is_frozen: bool = False
    full_name: str = ""
    monthly_income: Decimal | None = None
    joined_date: date | None = None
