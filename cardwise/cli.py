"""CLI for installment schedules and bill reminders.

Usage:
    python -m cardwise.cli flat 5000000 --rate 21 --tenor 12
    python -m cardwise.cli annuity 1000000 --rate 1.75 --tenor 6
    python -m cardwise.cli compare 5000000 --rate 21 --tenors 3 6 12
    python -m cardwise.cli bills ledger.json --today 2024-06-10
    python -m cardwise.cli pay ledger.json card-1 250000
"""

import argparse
import sys
from datetime import date, datetime, timezone
from decimal import Decimal, InvalidOperation

from cardwise.api.schemas import TransactionSchema
from cardwise.config import settings
from cardwise.data.snapshot import JsonLedgerFile, SnapshotError
from cardwise.engine.amortization import annuity_schedule, flat_schedule
from cardwise.engine.effective_rate import flat_to_effective_annual_rate
from cardwise.engine.errors import InvalidArgument
from cardwise.engine.installments import DEFAULT_TENORS, compare_tenors, record_payment
from cardwise.engine.ledger import classify_bills, summarize_portfolio
from cardwise.models.results import InstallmentPlan, InterestConvention


def _decimal(value: str) -> Decimal:
    try:
        number = Decimal(value)
    except InvalidOperation:
        raise argparse.ArgumentTypeError(f"not a number: {value!r}")
    if not number.is_finite():
        raise argparse.ArgumentTypeError(f"not a finite number: {value!r}")
    return number


def _date(value: str) -> date:
    try:
        return date.fromisoformat(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"not an ISO date: {value!r}")


def print_plan(plan: InstallmentPlan) -> None:
    unit = "% / year, flat" if plan.convention is InterestConvention.FLAT else "% / month"
    print(f"\n{'=' * 60}")
    print(f"  {plan.convention.value.title()} plan: {plan.principal:,.0f} {settings.currency}")
    print(f"{'=' * 60}")
    print(f"  Rate:                {plan.rate_pct}{unit}")
    print(f"  Tenor:               {plan.tenor} months")
    print(f"  Monthly installment: {plan.monthly_installment:,.0f}")
    print(f"  Total interest:      {plan.total_interest:,.0f}")
    print(f"  Total payment:       {plan.total_payment:,.0f}")
    print()
    print(f"  {'Month':>5}  {'Principal':>14}  {'Interest':>12}  {'Balance':>14}")
    for p in plan.schedule:
        print(
            f"  {p.month:>5}  {p.principal_payment:>14,.0f}  "
            f"{p.interest_payment:>12,.0f}  {p.remaining_balance:>14,.0f}"
        )
    print()


def print_comparison(plans: list[InstallmentPlan]) -> None:
    print(f"\n  {'Tenor':>5}  {'Installment':>14}  {'Interest':>14}  {'Total':>14}  {'Eff. APR':>9}")
    for plan in plans:
        apr = flat_to_effective_annual_rate(plan.rate_pct, plan.tenor)
        print(
            f"  {plan.tenor:>5}  {plan.monthly_installment:>14,.0f}  "
            f"{plan.total_interest:>14,.0f}  {plan.total_payment:>14,.0f}  {apr:>8.2f}%"
        )
    print()


def print_bills(ledger: JsonLedgerFile, today: date) -> None:
    snapshot = ledger.load()
    cards = snapshot.card_models()
    transactions = snapshot.transaction_models()

    summary = summarize_portfolio(cards, transactions, today)
    bills = classify_bills(cards, transactions, today, window_days=settings.reminder_window_days)

    print(f"\n{'=' * 60}")
    print(f"  Debt overview as of {today.isoformat()}")
    print(f"{'=' * 60}")
    for debt in summary.cards:
        flag = "  (surplus)" if debt.has_surplus else ""
        print(f"  {debt.card.display_name:<30} {debt.outstanding_balance:>16,.0f}{flag}")
    print(f"  {'Total':<30} {summary.total_outstanding:>16,.0f}")
    if summary.next_due_date:
        print(f"  Nearest due date: {summary.next_due_date.isoformat()}")
    print()

    print("  Overdue:")
    for r in bills.overdue:
        print(f"    {r.card.display_name:<28} {r.outstanding_balance:>14,.0f}  due {r.due_date.isoformat()}")
    if not bills.overdue:
        print("    none")
    print("  Upcoming:")
    for r in bills.upcoming:
        print(f"    {r.card.display_name:<28} {r.outstanding_balance:>14,.0f}  due {r.due_date.isoformat()}")
    if not bills.upcoming:
        print("    none")
    print()


def add_payment(ledger: JsonLedgerFile, card_id: str, amount: Decimal) -> None:
    snapshot = ledger.load()
    card = next((c for c in snapshot.card_models() if c.id == card_id), None)
    if card is None:
        raise SnapshotError(f"Unknown card {card_id!r} in {ledger.path}")

    txn = record_payment(card, amount, datetime.now(timezone.utc))
    snapshot.transactions.append(TransactionSchema.from_model(txn))
    ledger.save(snapshot)
    print(f"Recorded payment of {amount:,.0f} on {card.display_name} ({txn.id})")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Credit card installment and debt CLI")
    sub = parser.add_subparsers(dest="command", required=True)

    flat = sub.add_parser("flat", help="Flat-rate installment schedule")
    flat.add_argument("principal", type=_decimal)
    flat.add_argument("--rate", type=_decimal, required=True, help="Annual flat rate in percent")
    flat.add_argument("--tenor", type=int, required=True, help="Months")

    annuity = sub.add_parser("annuity", help="Declining-balance installment schedule")
    annuity.add_argument("principal", type=_decimal)
    annuity.add_argument("--rate", type=_decimal, required=True, help="Monthly rate in percent")
    annuity.add_argument("--tenor", type=int, required=True, help="Months")

    compare = sub.add_parser("compare", help="Compare flat plans across tenors")
    compare.add_argument("principal", type=_decimal)
    compare.add_argument("--rate", type=_decimal, required=True, help="Annual flat rate in percent")
    compare.add_argument("--tenors", type=int, nargs="+", default=list(DEFAULT_TENORS))

    bills = sub.add_parser("bills", help="Balances and bill reminders from a ledger snapshot")
    bills.add_argument("snapshot", help="JSON ledger snapshot path")
    bills.add_argument("--today", type=_date, default=None, help="Override today's date (YYYY-MM-DD)")

    pay = sub.add_parser("pay", help="Append a payment to a ledger snapshot")
    pay.add_argument("snapshot", help="JSON ledger snapshot path")
    pay.add_argument("card_id")
    pay.add_argument("amount", type=_decimal)

    return parser


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        if args.command == "flat":
            print_plan(flat_schedule(args.principal, args.rate, args.tenor))
        elif args.command == "annuity":
            print_plan(annuity_schedule(args.principal, args.rate, args.tenor))
        elif args.command == "compare":
            print_comparison(compare_tenors(args.principal, args.rate, args.tenors))
        elif args.command == "bills":
            print_bills(JsonLedgerFile(args.snapshot), args.today or date.today())
        elif args.command == "pay":
            add_payment(JsonLedgerFile(args.snapshot), args.card_id, args.amount)
    except (InvalidArgument, SnapshotError) as e:
        print(f"error: {e}", file=sys.stderr)
        return 2
    return 0


if __name__ == "__main__":
    sys.exit(main())
