"""Payment notification store."""

import itertools
import logging
from dataclasses import replace
from datetime import date, datetime
from decimal import Decimal
from typing import Callable

from coop_loans.exceptions import EntityNotFoundError, InvalidEntityStateError
from coop_loans.models import NotificationStatus, PaymentNotification
from coop_loans.money import non_negative

logger = logging.getLogger(__name__)


class PaymentNotificationStore:
    """Holds payment notifications submitted by members until an officer reviews them.

    Parameters
    ----------
    clock : Callable[[], datetime] | None
        Source of creation timestamps (default: ``datetime.now``).
    id_factory : Callable[[], str] | None
        Source of notification IDs (default: ``PN-001``, ``PN-002``, ...).
    """

    def __init__(
        self,
        clock: Callable[[], datetime] | None = None,
        id_factory: Callable[[], str] | None = None,
    ) -> None:
        self._clock = clock or datetime.now
        if id_factory is None:
            counter = itertools.count(1)
            id_factory = lambda: f"PN-{next(counter):03d}"  # noqa: E731
        self._id_factory = id_factory
        self._notifications: dict[str, PaymentNotification] = {}

    def notify_payment(
        self,
        member_id: str,
        member_name: str,
        loan_id: str,
        amount: Decimal,
        payment_date: date,
        slip_url: str | None = None,
    ) -> PaymentNotification:
        """Record a new PENDING notification."""
        notification = PaymentNotification(
            notification_id=self._id_factory(),
            member_id=member_id,
            member_name=member_name,
            loan_id=loan_id,
            amount=non_negative(amount, "amount"),
            payment_date=payment_date,
            status=NotificationStatus.PENDING,
            created_at=self._clock(),
            slip_url=slip_url,
        )
        self._notifications[notification.notification_id] = notification
        logger.info(
            "Payment notification %s for loan %s (%s)",
            notification.notification_id,
            loan_id,
            notification.amount,
        )
        return notification

    def get(self, notification_id: str) -> PaymentNotification:
        """Get a notification by ID."""
        try:
            return self._notifications[notification_id]
        except KeyError:
            raise EntityNotFoundError(f"Notification {notification_id} not found") from None

    def list_all(self, status: NotificationStatus | None = None) -> list[PaymentNotification]:
        """List notifications in submission order, optionally by status."""
        return [
            n for n in self._notifications.values() if status is None or n.status == status
        ]

    def approve(self, notification_id: str) -> PaymentNotification:
        """Mark a PENDING notification as APPROVED."""
        return self._review(notification_id, NotificationStatus.APPROVED)

    def reject(self, notification_id: str, reason: str | None = None) -> PaymentNotification:
        """Mark a PENDING notification as REJECTED."""
        return self._review(notification_id, NotificationStatus.REJECTED, reason)

    def delete(self, notification_id: str) -> None:
        """Remove a notification."""
        self.get(notification_id)
        del self._notifications[notification_id]

    def __len__(self) -> int:
        return len(self._notifications)

    def _review(
        self,
        notification_id: str,
        status: NotificationStatus,
        reason: str | None = None,
    ) -> PaymentNotification:
        current = self.get(notification_id)
        if current.status != NotificationStatus.PENDING:
            raise InvalidEntityStateError(
                f"Notification {notification_id} is already {current.status.value}"
            )
        updated = replace(current, status=status, rejection_reason=reason)
        self._notifications[notification_id] = updated
        logger.info("Notification %s %s", notification_id, status.value.lower())
        return updated
