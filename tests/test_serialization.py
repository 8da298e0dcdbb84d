"""Tests for serialization of domain objects."""

from datetime import date, datetime
from decimal import Decimal

from coop_loans.models import LoanStatus, Member, MemberStatus, PayoffMode, PayoffQuote
from coop_loans.serialization import serialize_value, to_dict


class TestSerializeValue:
    """Tests for serialize_value."""

    def test_decimal_keeps_exact_digits(self) -> None:
        assert serialize_value(Decimal("13081.25")) == "13081.25"

    def test_enum(self) -> None:
        assert serialize_value(LoanStatus.DEFAULTED) == "DEFAULTED"

    def test_dates(self) -> None:
        assert serialize_value(date(2024, 1, 15)) == "2024-01-15"
        assert serialize_value(datetime(2024, 1, 15, 8, 30)) == "2024-01-15T08:30:00"

    def test_sets_are_sorted(self) -> None:
        assert serialize_value(frozenset({"M004", "M001", "M003"})) == ["M001", "M003", "M004"]

    def test_nested(self) -> None:
        value = {"quotes": [(Decimal("1"), LoanStatus.PAID)], "none": None}

        assert serialize_value(value) == {"quotes": [["1", "PAID"]], "none": None}


class TestToDict:
    """Tests for to_dict."""

    def test_dataclass(self) -> None:
        quote = PayoffQuote(
            loan_id="L002",
            mode=PayoffMode.CLOSEOUT,
            total_due=Decimal("48277"),
            principal_component=Decimal("48000"),
            interest_component=Decimal("277"),
            as_of=date(2024, 1, 15),
        )

        assert to_dict(quote) == {
            "loan_id": "L002",
            "mode": "CLOSEOUT",
            "total_due": "48277",
            "principal_component": "48000",
            "interest_component": "277",
            "as_of": "2024-01-15",
        }

    def test_member_optional_fields(self) -> None:
        data = to_dict(Member(member_id="M001", status=MemberStatus.ACTIVE))

        assert data["monthly_income"] is None
        assert data["is_frozen"] is False

    def test_dict_passthrough(self) -> None:
        assert to_dict({"a": 1}) == {"a": 1}

    def test_other_values(self) -> None:
        assert to_dict(42) == {"value": "42"}
