"""Adapters between external payloads and domain models."""

from coop_loans.adapters.backend import (
    loan_application_to_backend,
    loan_from_backend,
    member_from_backend,
    page_content,
)
from coop_loans.adapters.snapshot import dump_snapshot, load_snapshot

__all__ = [
    "dump_snapshot",
    "load_snapshot",
    "loan_application_to_backend",
    "loan_from_backend",
    "member_from_backend",
    "page_content",
]
