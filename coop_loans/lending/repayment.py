"""Repayment allocation and payoff quotes.

Interest accrues on a fixed window: one month (``rate / 12``) when a cash
repayment is allocated, and thirty days (``rate / 365 * 30``) when a payoff is
quoted. Neither looks at the date of the last payment.
"""

from __future__ import annotations

import logging
from dataclasses import replace
from datetime import date
from decimal import Decimal, localcontext
from typing import Any

from coop_loans.exceptions import InvalidArgumentError
from coop_loans.models import Loan, LoanStatus, PaymentAllocation, PayoffMode, PayoffQuote
from coop_loans.money import ceil_money, non_negative

logger = logging.getLogger(__name__)

MONTHS_PER_YEAR = Decimal(12)
DAYS_PER_YEAR = Decimal(365)
PAYOFF_ACCRUAL_DAYS = Decimal(30)

# Wide enough that subtracting a full-precision interest figure from any
# realistic cash amount is exact.
_EXACT_PRECISION = 64

_ZERO = Decimal(0)


def monthly_interest(remaining_balance: Any, interest_rate: Any) -> Decimal:
    """One month of simple interest on the outstanding balance."""
    balance = non_negative(remaining_balance, "remaining_balance")
    rate = non_negative(interest_rate, "interest_rate")
    return balance * (rate / 100) / MONTHS_PER_YEAR


def daily_interest(remaining_balance: Any, interest_rate: Any) -> Decimal:
    """One day of simple interest on the outstanding balance."""
    balance = non_negative(remaining_balance, "remaining_balance")
    rate = non_negative(interest_rate, "interest_rate")
    return balance * (rate / 100) / DAYS_PER_YEAR


def allocate_repayment(
    remaining_balance: Any,
    interest_rate: Any,
    cash_received: Any,
) -> PaymentAllocation:
    """Split a cash repayment between accrued interest and principal.

    Interest is paid first. Whatever is left reduces principal, capped at the
    outstanding balance. Cash beyond balance plus interest is not absorbed: it
    shows up as ``excess_cash`` on the result and the caller decides whether to
    refuse or record it.

    Parameters
    ----------
    remaining_balance : Decimal | int | float | str
        Outstanding principal.
    interest_rate : Decimal | int | float | str
        Nominal annual rate in percent.
    cash_received : Decimal | int | float | str
        Cash tendered.

    Returns
    -------
    PaymentAllocation
        Interest and principal portions and the resulting balance.

    Raises
    ------
    InvalidArgumentError
        If any argument is negative or not a number.
    """
    balance = non_negative(remaining_balance, "remaining_balance")
    cash = non_negative(cash_received, "cash_received")
    accrued = monthly_interest(balance, interest_rate)

    interest_portion = min(cash, accrued)
    with localcontext() as ctx:
        ctx.prec = max(ctx.prec, _EXACT_PRECISION)
        principal_portion = max(_ZERO, cash - interest_portion)
        principal_portion = min(principal_portion, balance)
        new_balance = balance - principal_portion

    allocation = PaymentAllocation(
        interest_portion=interest_portion,
        principal_portion=principal_portion,
        new_balance=new_balance,
        accrued_interest=accrued,
        cash_received=cash,
    )
    logger.debug(
        "Allocated %s: interest=%s principal=%s new_balance=%s",
        cash,
        interest_portion,
        principal_portion,
        new_balance,
    )
    return allocation


def allocate_loan_repayment(loan: Loan, cash_received: Any) -> PaymentAllocation:
    """Allocate a repayment against a loan's own balance and rate."""
    if loan is None:
        raise InvalidArgumentError("loan is required")
    return allocate_repayment(loan.remaining_balance, loan.interest_rate, cash_received)


def apply_allocation(loan: Loan, allocation: PaymentAllocation) -> Loan:
    """Return a copy of the loan with the allocation applied.

    The loan becomes PAID exactly when the new balance reaches zero.
    """
    status = LoanStatus.PAID if allocation.is_settled else loan.status
    return replace(loan, remaining_balance=allocation.new_balance, status=status)


def quote_payoff(
    loan: Loan,
    mode: PayoffMode | str,
    as_of: date | None = None,
) -> PayoffQuote:
    """Quote what a member must pay today.

    Amounts are rounded up to the whole currency unit so a quote never falls
    short of what is owed.

    Parameters
    ----------
    loan : Loan
        Loan being quoted.
    mode : PayoffMode | str
        ``INSTALLMENT`` for the next regular payment, ``CLOSEOUT`` to settle.
    as_of : date | None
        Quote date, recorded on the quote (default: today).

    Returns
    -------
    PayoffQuote
        Total due with its principal and interest components.
    """
    if loan is None:
        raise InvalidArgumentError("loan is required")
    try:
        payoff_mode = PayoffMode(str(getattr(mode, "value", mode)).upper())
    except ValueError as e:
        raise InvalidArgumentError(f"Unknown payoff mode: {mode!r}") from e

    per_day = daily_interest(loan.remaining_balance, loan.interest_rate)
    accrued = ceil_money(per_day * PAYOFF_ACCRUAL_DAYS)

    if payoff_mode == PayoffMode.CLOSEOUT:
        principal = non_negative(loan.remaining_balance, "remaining_balance")
    else:
        if loan.term_months <= 0:
            raise InvalidArgumentError(
                f"term_months must be positive for an installment quote, got {loan.term_months}"
            )
        principal_amount = non_negative(loan.principal_amount, "principal_amount")
        principal = ceil_money(principal_amount / loan.term_months)

    return PayoffQuote(
        loan_id=loan.loan_id,
        mode=payoff_mode,
        total_due=principal + accrued,
        principal_component=principal,
        interest_component=accrued,
        as_of=as_of or date.today(),
    )
