"""Tests for repayment allocation and payoff quotes."""

import itertools
from datetime import date
from decimal import Decimal, localcontext

import pytest

from coop_loans.exceptions import InvalidArgumentError
from coop_loans.lending.repayment import (
    allocate_loan_repayment,
    allocate_repayment,
    apply_allocation,
    daily_interest,
    monthly_interest,
    quote_payoff,
)
from coop_loans.models import LoanStatus, PayoffMode

BALANCES = ["0", "1", "100", "15000", "48000", "123456.78"]
RATES = ["0", "6", "6.5", "7", "12.25"]
CASH = ["0", "0.01", "50", "81.25", "2000", "15081.25", "1000000"]


def _exact_sum(*values: Decimal) -> Decimal:
    with localcontext() as ctx:
        ctx.prec = 80
        return sum(values, Decimal(0))


class TestAllocationWorkedCases:
    """Worked examples from the cooperative's repayment screen."""

    def test_interest_then_principal(self) -> None:
        allocation = allocate_repayment(Decimal("15000"), Decimal("6.5"), Decimal("2000"))

        assert allocation.accrued_interest == Decimal("81.25")
        assert allocation.interest_portion == Decimal("81.25")
        assert allocation.principal_portion == Decimal("1918.75")
        assert allocation.new_balance == Decimal("13081.25")

    def test_small_balance(self) -> None:
        allocation = allocate_repayment(100, 6, 50)

        assert allocation.accrued_interest == Decimal("0.5")
        assert allocation.interest_portion == Decimal("0.5")
        assert allocation.principal_portion == Decimal("49.5")
        assert allocation.new_balance == Decimal("50.5")

    def test_accepts_floats_and_strings(self) -> None:
        """Floats are read by their printed value, not their binary expansion."""
        from_float = allocate_repayment(15000.0, 6.5, 2000.0)
        from_str = allocate_repayment("15000", "6.5", "2000")

        assert from_float == from_str
        assert from_float.new_balance == Decimal("13081.25")

    def test_cash_below_interest_pays_interest_only(self) -> None:
        allocation = allocate_repayment(15000, "6.5", 50)

        assert allocation.interest_portion == Decimal("50")
        assert allocation.principal_portion == 0
        assert allocation.new_balance == Decimal("15000")
        assert not allocation.is_overpayment

    def test_zero_cash(self) -> None:
        allocation = allocate_repayment(15000, "6.5", 0)

        assert allocation.interest_portion == 0
        assert allocation.principal_portion == 0
        assert allocation.new_balance == Decimal("15000")

    def test_zero_rate_goes_to_principal(self) -> None:
        allocation = allocate_repayment(1000, 0, 300)

        assert allocation.accrued_interest == 0
        assert allocation.principal_portion == Decimal("300")
        assert allocation.new_balance == Decimal("700")


class TestOverpayment:
    """Cash beyond balance plus interest is reported, never absorbed."""

    def test_principal_capped_at_balance(self) -> None:
        allocation = allocate_repayment(100, 6, 200)

        assert allocation.interest_portion == Decimal("0.5")
        assert allocation.principal_portion == Decimal("100")
        assert allocation.new_balance == 0
        assert allocation.excess_cash == Decimal("99.5")
        assert allocation.is_overpayment
        assert allocation.is_settled

    def test_exact_payoff_is_not_overpayment(self) -> None:
        allocation = allocate_repayment(100, 6, "100.5")

        assert allocation.new_balance == 0
        assert allocation.excess_cash == 0
        assert not allocation.is_overpayment
        assert allocation.is_settled

    def test_zero_balance_reports_all_cash_as_excess(self) -> None:
        allocation = allocate_repayment(0, "6.5", 100)

        assert allocation.interest_portion == 0
        assert allocation.principal_portion == 0
        assert allocation.excess_cash == Decimal("100")


class TestAllocationProperties:
    """Properties that hold for every valid input."""

    @pytest.mark.parametrize("balance,rate,cash", list(itertools.product(BALANCES, RATES, CASH)))
    def test_conservation_and_bounds(self, balance: str, rate: str, cash: str) -> None:
        allocation = allocate_repayment(balance, rate, cash)
        b, c = Decimal(balance), Decimal(cash)

        paid = _exact_sum(allocation.interest_portion, allocation.principal_portion)
        assert paid <= c
        if c <= _exact_sum(b, allocation.accrued_interest):
            assert paid == c
            assert not allocation.is_overpayment

        assert allocation.interest_portion >= 0
        assert 0 <= allocation.principal_portion <= b
        assert allocation.new_balance >= 0
        assert _exact_sum(allocation.new_balance, allocation.principal_portion) == b

    @pytest.mark.parametrize("cash", ["0", "1", "5.83", "81.25"])
    def test_interest_first(self, cash: str) -> None:
        allocation = allocate_repayment("15000", "6.5", cash)

        assert Decimal(cash) <= allocation.accrued_interest
        assert allocation.principal_portion == 0
        assert allocation.interest_portion == Decimal(cash)

    def test_repeating_interest_still_conserves_cash(self) -> None:
        """1000 at 7% accrues 5.8333...; portions must still add up to the cash."""
        allocation = allocate_repayment(1000, 7, 500)

        assert _exact_sum(allocation.interest_portion, allocation.principal_portion) == 500
        assert _exact_sum(allocation.new_balance, allocation.principal_portion) == 1000

    def test_idempotent(self) -> None:
        first = allocate_repayment("48000", "7", "3000")
        second = allocate_repayment("48000", "7", "3000")

        assert first == second
        assert str(first.new_balance) == str(second.new_balance)


class TestAllocationContract:
    """Caller contract violations."""

    @pytest.mark.parametrize(
        "balance,rate,cash",
        [(-1, 6, 10), (100, -0.5, 10), (100, 6, -10)],
    )
    def test_negative_input_rejected(self, balance: float, rate: float, cash: float) -> None:
        with pytest.raises(InvalidArgumentError, match="non-negative"):
            allocate_repayment(balance, rate, cash)

    @pytest.mark.parametrize("bad", ["abc", None, float("nan"), True, [1]])
    def test_non_numeric_input_rejected(self, bad: object) -> None:
        with pytest.raises(InvalidArgumentError):
            allocate_repayment(bad, 6, 10)

    def test_invalid_argument_is_value_error(self) -> None:
        with pytest.raises(ValueError):
            allocate_repayment(100, 6, -1)

    def test_missing_loan_rejected(self) -> None:
        with pytest.raises(InvalidArgumentError, match="loan is required"):
            allocate_loan_repayment(None, 100)


class TestInterestHelpers:
    """Tests for accrual building blocks."""

    def test_monthly_interest(self) -> None:
        assert monthly_interest(15000, "6.5") == Decimal("81.25")

    def test_daily_interest(self) -> None:
        assert daily_interest(36500, 10) == Decimal("10")


class TestApplyAllocation:
    """Tests for applying an allocation to a loan."""

    def test_reduces_balance(self, make_loan) -> None:
        loan = make_loan(balance="15000", rate="6.5")
        allocation = allocate_loan_repayment(loan, 2000)

        updated = apply_allocation(loan, allocation)

        assert updated.remaining_balance == Decimal("13081.25")
        assert updated.status == LoanStatus.ACTIVE
        assert loan.remaining_balance == Decimal("15000")  # original untouched

    def test_paid_when_balance_reaches_zero(self, make_loan) -> None:
        loan = make_loan(balance="100", rate="6")
        updated = apply_allocation(loan, allocate_loan_repayment(loan, "100.5"))

        assert updated.remaining_balance == 0
        assert updated.status == LoanStatus.PAID

    def test_not_paid_while_balance_remains(self, make_loan) -> None:
        loan = make_loan(balance="100", rate="6")
        updated = apply_allocation(loan, allocate_loan_repayment(loan, "100.49"))

        assert updated.remaining_balance == Decimal("0.01")
        assert updated.status == LoanStatus.ACTIVE


class TestQuotePayoff:
    """Tests for payoff quotes."""

    def test_closeout(self, make_loan) -> None:
        loan = make_loan(loan_id="L002", principal="50000", balance="48000", rate="7", term=24)

        quote = quote_payoff(loan, PayoffMode.CLOSEOUT, date(2024, 1, 15))

        assert quote.interest_component == Decimal("277")
        assert quote.principal_component == Decimal("48000")
        assert quote.total_due == Decimal("48277")
        assert quote.as_of == date(2024, 1, 15)
        assert quote.reference == "L002-FULL"

    def test_installment(self, make_loan) -> None:
        loan = make_loan(loan_id="L002", principal="50000", balance="48000", rate="7", term=24)

        quote = quote_payoff(loan, PayoffMode.INSTALLMENT, date(2024, 1, 15))

        # ceil(50000 / 24) = ceil(2083.33) = 2084
        assert quote.principal_component == Decimal("2084")
        assert quote.interest_component == Decimal("277")
        assert quote.total_due == Decimal("2361")
        assert quote.reference == "L002-INST"

    def test_rounds_up_never_down(self, make_loan) -> None:
        # 15000 * 6.5% / 365 * 30 = 80.14 -> 81; 20000 / 12 = 1666.67 -> 1667
        loan = make_loan(principal="20000", balance="15000", rate="6.5", term=12)

        installment = quote_payoff(loan, "installment", date(2024, 1, 1))
        closeout = quote_payoff(loan, "CLOSEOUT", date(2024, 1, 1))

        assert installment.interest_component == Decimal("81")
        assert installment.principal_component == Decimal("1667")
        assert installment.total_due == Decimal("1748")
        assert closeout.total_due == Decimal("15081")

    def test_whole_amounts_stay_whole(self, make_loan) -> None:
        loan = make_loan(principal="48000", balance="36500", rate="10", term=48)

        quote = quote_payoff(loan, PayoffMode.INSTALLMENT, date(2024, 1, 1))

        assert quote.principal_component == Decimal("1000")
        assert quote.interest_component == Decimal("300")

    def test_as_of_does_not_change_amounts(self, make_loan) -> None:
        loan = make_loan(balance="48000", rate="7")

        early = quote_payoff(loan, PayoffMode.CLOSEOUT, date(2024, 1, 1))
        late = quote_payoff(loan, PayoffMode.CLOSEOUT, date(2024, 6, 1))

        assert early.total_due == late.total_due

    def test_defaults_to_today(self, make_loan) -> None:
        quote = quote_payoff(make_loan(), PayoffMode.CLOSEOUT)

        assert quote.as_of == date.today()

    def test_zero_term_installment_rejected(self, make_loan) -> None:
        with pytest.raises(InvalidArgumentError, match="term_months"):
            quote_payoff(make_loan(term=0), PayoffMode.INSTALLMENT, date(2024, 1, 1))

    def test_zero_term_closeout_allowed(self, make_loan) -> None:
        quote = quote_payoff(make_loan(term=0), PayoffMode.CLOSEOUT, date(2024, 1, 1))

        assert quote.principal_component == Decimal("15000")

    def test_unknown_mode_rejected(self, make_loan) -> None:
        with pytest.raises(InvalidArgumentError, match="payoff mode"):
            quote_payoff(make_loan(), "WEEKLY", date(2024, 1, 1))

    def test_missing_loan_rejected(self) -> None:
        with pytest.raises(InvalidArgumentError):
            quote_payoff(None, PayoffMode.CLOSEOUT, date(2024, 1, 1))
