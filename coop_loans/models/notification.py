"""Payment notification model."""

from dataclasses import dataclass
from datetime import date, datetime
from decimal import Decimal

from coop_loans.models.enums import NotificationStatus


@dataclass
class PaymentNotification:
    """Member-submitted notice that a repayment was transferred."""

    notification_id: str
    member_id: str
    member_name: str
    loan_id: str
    amount: Decimal
    payment_date: date
    status: NotificationStatus
    created_at: datetime
    slip_url: str | None = None
    rejection_reason: str | None = None
