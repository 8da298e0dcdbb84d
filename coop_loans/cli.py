"""Command line for repayment allocation, payoff quotes and guarantor checks.

Usage:
    coop-loans allocate --balance 15000 --rate 6.5 --cash 2000
    coop-loans quote --principal 50000 --balance 48000 --rate 7 --term 24 --mode closeout
    coop-loans sample --members 50 --seed 42 --output output/snapshot.json
    coop-loans check-guarantor --snapshot output/snapshot.json --candidate M003 --borrower M001
"""

import argparse
import json
import sys
from datetime import date
from decimal import Decimal

from coop_loans.adapters.snapshot import dump_snapshot, load_snapshot
from coop_loans.config import CoopConfig, ScenarioConfig
from coop_loans.exceptions import CoopLoansError
from coop_loans.lending import allocate_repayment, quote_payoff
from coop_loans.logging import get_logger, setup_logging
from coop_loans.models import Loan, LoanStatus, PayoffMode
from coop_loans.money import to_decimal
from coop_loans.scenarios import CooperativeScenario
from coop_loans.serialization import serialize_value, to_dict

logger = get_logger(__name__)


def amount(value: str) -> Decimal:
    """Parse a monetary argument; raises ValueError so argparse reports it."""
    return to_decimal(value)


def _print_json(data: dict) -> None:
    print(json.dumps(serialize_value(data), indent=2, ensure_ascii=False))


def cmd_allocate(args: argparse.Namespace, config: CoopConfig) -> int:
    """Split a repayment between interest and principal."""
    allocation = allocate_repayment(args.balance, args.rate, args.cash)
    data = to_dict(allocation)
    data["excess_cash"] = allocation.excess_cash
    data["is_overpayment"] = allocation.is_overpayment
    if allocation.is_overpayment:
        logger.warning(
            "Cash exceeds balance plus accrued interest by %s; refuse or record the excess",
            allocation.excess_cash,
        )
    _print_json(data)
    return 0


def cmd_quote(args: argparse.Namespace, config: CoopConfig) -> int:
    """Quote an installment or a full closeout."""
    loan = Loan(
        loan_id=args.loan_id,
        member_id="",
        principal_amount=args.principal,
        remaining_balance=args.balance,
        interest_rate=args.rate,
        term_months=args.term,
        status=LoanStatus.ACTIVE,
    )
    quote = quote_payoff(loan, args.mode, args.as_of)
    data = to_dict(quote)
    data["reference"] = quote.reference
    _print_json(data)
    return 0


def cmd_check_guarantor(args: argparse.Namespace, config: CoopConfig) -> int:
    """Check a guarantor candidate against a snapshot file."""
    store = load_snapshot(args.snapshot)
    result = store.check_guarantor(
        args.candidate, args.borrower, args.current, config.guarantor_policy
    )
    print(result.message)
    return 0 if result.eligible else 1


def cmd_sample(args: argparse.Namespace, config: CoopConfig) -> int:
    """Generate a sample cooperative snapshot."""
    scenario_config = ScenarioConfig(num_members=args.members)
    scenario = CooperativeScenario(
        config=scenario_config,
        seed=args.seed if args.seed is not None else config.seed,
        policy=config.guarantor_policy,
    )
    store = scenario.generate()
    output = args.output or config.output.snapshot_dir / "snapshot.json"
    dump_snapshot(store, output, pretty=args.pretty or config.output.pretty_json)
    _print_json(store.summary())
    return 0


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser."""
    parser = argparse.ArgumentParser(
        prog="coop-loans",
        description="Cooperative lending rules: repayments, payoff quotes and guarantors",
    )
    parser.add_argument(
        "--log-level",
        type=str,
        default=None,
        help="Log level (default: LOG_LEVEL or INFO)",
    )
    parser.add_argument(
        "--log-format",
        type=str,
        choices=["standard", "json"],
        default="standard",
        help="Log format (default: standard)",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    allocate = subparsers.add_parser("allocate", help="Allocate a cash repayment")
    allocate.add_argument("--balance", type=amount, required=True, help="Outstanding principal")
    allocate.add_argument("--rate", type=amount, required=True, help="Annual interest rate (%%)")
    allocate.add_argument("--cash", type=amount, required=True, help="Cash received")
    allocate.set_defaults(func=cmd_allocate)

    quote = subparsers.add_parser("quote", help="Quote an installment or closeout")
    quote.add_argument("--principal", type=amount, required=True, help="Amount disbursed")
    quote.add_argument("--balance", type=amount, required=True, help="Outstanding principal")
    quote.add_argument("--rate", type=amount, required=True, help="Annual interest rate (%%)")
    quote.add_argument("--term", type=int, required=True, help="Term in months")
    quote.add_argument(
        "--mode",
        type=str.upper,
        choices=[m.value for m in PayoffMode],
        default=PayoffMode.INSTALLMENT.value,
        help="INSTALLMENT or CLOSEOUT (default: INSTALLMENT)",
    )
    quote.add_argument(
        "--as-of",
        type=date.fromisoformat,
        default=None,
        help="Quote date, YYYY-MM-DD (default: today)",
    )
    quote.add_argument("--loan-id", type=str, default="LOAN", help="Loan ID for the reference")
    quote.set_defaults(func=cmd_quote)

    check = subparsers.add_parser("check-guarantor", help="Check a guarantor candidate")
    check.add_argument("--snapshot", type=str, required=True, help="Snapshot JSON file")
    check.add_argument("--candidate", type=str, required=True, help="Candidate member ID")
    check.add_argument("--borrower", type=str, required=True, help="Borrower member ID")
    check.add_argument(
        "--current",
        type=str,
        nargs="*",
        default=[],
        help="Guarantors already on the application",
    )
    check.set_defaults(func=cmd_check_guarantor)

    sample = subparsers.add_parser("sample", help="Generate a sample snapshot")
    sample.add_argument("--members", type=int, default=50, help="Number of members (default: 50)")
    sample.add_argument("--seed", type=int, default=None, help="Random seed")
    sample.add_argument("--output", type=str, default=None, help="Snapshot file to write")
    sample.add_argument("--pretty", action="store_true", help="Pretty-print the snapshot")
    sample.set_defaults(func=cmd_sample)

    return parser


def main(argv: list[str] | None = None) -> int:
    """Main entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    config = CoopConfig.from_env()
    setup_logging(level=args.log_level or config.log_level, format_type=args.log_format)

    try:
        return args.func(args, config)
    except CoopLoansError as e:
        logger.error("%s", e)
        return 2


if __name__ == "__main__":
    sys.exit(main())
