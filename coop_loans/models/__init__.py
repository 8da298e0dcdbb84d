"""Domain models for cooperative lending."""

from coop_loans.models.enums import (
    LoanStatus,
    LoanType,
    MemberStatus,
    NotificationStatus,
    PayoffMode,
    RejectionReason,
)
from coop_loans.models.loan import Loan, LoanApplication
from coop_loans.models.member import Member
from coop_loans.models.notification import PaymentNotification
from coop_loans.models.repayment import PaymentAllocation, PayoffQuote

__all__ = [
    "Loan",
    "LoanApplication",
    "LoanStatus",
    "LoanType",
    "Member",
    "MemberStatus",
    "NotificationStatus",
    "PaymentAllocation",
    "PaymentNotification",
    "PayoffMode",
    "PayoffQuote",
    "RejectionReason",
]
