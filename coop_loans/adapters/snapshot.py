"""JSON snapshot files of members and loans."""

import json
import logging
from pathlib import Path
from typing import Any

from coop_loans.adapters.fields import parse_date, parse_decimal, parse_enum, parse_int, require
from coop_loans.exceptions import MappingError
from coop_loans.models import Loan, LoanStatus, LoanType, Member, MemberStatus
from coop_loans.serialization import to_dict
from coop_loans.store import CoopDataStore

logger = logging.getLogger(__name__)


def dump_snapshot(store: CoopDataStore, path: str | Path, pretty: bool = False) -> Path:
    """Write the store's members and loans to a JSON file."""
    file_path = Path(path)
    file_path.parent.mkdir(parents=True, exist_ok=True)

    data = {
        "members": [to_dict(m) for m in store.members.values()],
        "loans": [to_dict(loan) for loan in store.loans.values()],
    }
    with open(file_path, "w", encoding="utf-8") as f:
        if pretty:
            json.dump(data, f, indent=2, ensure_ascii=False)
        else:
            json.dump(data, f, ensure_ascii=False)

    logger.info(
        "Snapshot written to %s (%d members, %d loans)",
        file_path,
        len(store.members),
        len(store.loans),
    )
    return file_path


def load_snapshot(path: str | Path) -> CoopDataStore:
    """Read a JSON snapshot into a new store."""
    try:
        with open(path, encoding="utf-8") as f:
            data = json.load(f)
    except OSError as e:
        raise MappingError(f"Cannot read snapshot {path}: {e}") from e
    except json.JSONDecodeError as e:
        raise MappingError(f"Snapshot {path} is not valid JSON: {e}") from e

    if not isinstance(data, dict):
        raise MappingError(f"Snapshot {path} must be a JSON object, got {type(data).__name__}")

    store = CoopDataStore()
    for record in _records(data, "members"):
        store.add_member(member_from_record(record))
    for record in _records(data, "loans"):
        store.add_loan(loan_from_record(record))
    return store


def _records(data: dict[str, Any], key: str) -> list[dict[str, Any]]:
    records = data.get(key) or []
    if not isinstance(records, list):
        raise MappingError(f"Snapshot {key!r} must be a list")
    for record in records:
        if not isinstance(record, dict):
            raise MappingError(f"Snapshot {key!r} entries must be objects, got {record!r}")
    return records


def member_from_record(record: dict[str, Any]) -> Member:
    """Build a ``Member`` from its serialized form."""
    income = record.get("monthly_income")
    return Member(
        member_id=str(require(record, "member_id")),
        status=parse_enum(MemberStatus, require(record, "status"), "status"),
        is_frozen=bool(record.get("is_frozen", False)),
        full_name=record.get("full_name") or "",
        monthly_income=parse_decimal(income, "monthly_income") if income is not None else None,
        joined_date=parse_date(record.get("joined_date")),
    )


def loan_from_record(record: dict[str, Any]) -> Loan:
    """Build a ``Loan`` from its serialized form."""
    return Loan(
        loan_id=str(require(record, "loan_id")),
        member_id=str(require(record, "member_id")),
        principal_amount=parse_decimal(require(record, "principal_amount"), "principal_amount"),
        remaining_balance=parse_decimal(require(record, "remaining_balance"), "remaining_balance"),
        interest_rate=parse_decimal(require(record, "interest_rate"), "interest_rate"),
        term_months=parse_int(require(record, "term_months"), "term_months"),
        status=parse_enum(LoanStatus, require(record, "status"), "status"),
        guarantor_ids=frozenset(str(g) for g in record.get("guarantor_ids") or []),
        loan_type=parse_enum(LoanType, record.get("loan_type") or LoanType.COMMON, "loan_type"),
        start_date=parse_date(record.get("start_date")),
        contract_no=record.get("contract_no"),
    )
