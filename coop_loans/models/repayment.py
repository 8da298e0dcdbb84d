"""Value objects produced by the repayment calculator."""

from dataclasses import dataclass
from datetime import date
from decimal import Decimal, localcontext

from coop_loans.models.enums import PayoffMode


@dataclass(frozen=True)
class PaymentAllocation:
    """Split of a cash repayment between interest and principal."""

    interest_portion: Decimal
    principal_portion: Decimal
    new_balance: Decimal
    accrued_interest: Decimal  # Interest due before allocation
    cash_received: Decimal

    @property
    def excess_cash(self) -> Decimal:
        """Cash left over after interest and all principal are covered."""
        with localcontext() as ctx:
            ctx.prec = max(ctx.prec, 64)
            return self.cash_received - self.interest_portion - self.principal_portion

    @property
    def is_overpayment(self) -> bool:
        """True when the cash exceeds the balance plus accrued interest."""
        return self.excess_cash > 0

    @property
    def is_settled(self) -> bool:
        return self.new_balance <= 0


@dataclass(frozen=True)
class PayoffQuote:
    """Amount required today to pay one installment or close the loan."""

    loan_id: str
    mode: PayoffMode
    total_due: Decimal
    principal_component: Decimal
    interest_component: Decimal
    as_of: date

    @property
    def reference(self) -> str:
        """Payment reference printed on the quote."""
        suffix = "FULL" if self.mode == PayoffMode.CLOSEOUT else "INST"
        return f"{self.loan_id}-{suffix}"
