"""In-memory stores for members, loans and payment notifications."""

from coop_loans.store.cooperative import CoopDataStore
from coop_loans.store.notifications import PaymentNotificationStore

__all__ = ["CoopDataStore", "PaymentNotificationStore"]
