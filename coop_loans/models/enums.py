"""Enumeration types for cooperative lending entities."""

from enum import Enum


class MemberStatus(str, Enum):
    ACTIVE = "ACTIVE"
    INACTIVE = "INACTIVE"


class LoanStatus(str, Enum):
    PENDING = "PENDING"
    APPROVED = "APPROVED"  # Approved but not yet disbursed
    REJECTED = "REJECTED"
    ACTIVE = "ACTIVE"  # Disbursed and accruing interest
    DEFAULTED = "DEFAULTED"
    PAID = "PAID"


class LoanType(str, Enum):
    EMERGENCY = "EMERGENCY"
    COMMON = "COMMON"
    INVESTMENT = "INVESTMENT"


class PayoffMode(str, Enum):
    INSTALLMENT = "INSTALLMENT"
    CLOSEOUT = "CLOSEOUT"


class RejectionReason(str, Enum):
    ALREADY_ADDED = "ALREADY_ADDED"
    SELF_GUARANTEE = "SELF_GUARANTEE"
    NOT_FOUND = "NOT_FOUND"
    INELIGIBLE_STATUS = "INELIGIBLE_STATUS"
    FROZEN = "FROZEN"
    CREDIT_RISK = "CREDIT_RISK"
    LIMIT_EXCEEDED = "LIMIT_EXCEEDED"


class NotificationStatus(str, Enum):
    PENDING = "PENDING"
    APPROVED = "APPROVED"
    REJECTED = "REJECTED"
