"""CLI for Smart Settle using Typer."""

import logging
import sys
from decimal import Decimal
from pathlib import Path
from typing import get_args

import typer
from pydantic import TypeAdapter
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from .balances import balance_for
from .config import load_settings
from .currency import format_amount, from_minor_units, to_minor_units
from .exceptions import InvalidAmountError, UnknownParticipantError
from .ledger import dump_ledger, load_ledger
from .models import BalanceEntry, PaymentMode, SettlementTransaction
from .service import SettlementService

app = typer.Typer(
    name="smart-settle",
    help="Work out who pays whom to settle a group's shared expenses",
)

console = Console()

_transactions_adapter = TypeAdapter(list[SettlementTransaction])


def setup_logging(verbose: bool = False):
    """Setup logging configuration."""
    level = logging.DEBUG if verbose else logging.WARNING
    logging.basicConfig(
        level=level, format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    )


def _fail(e: Exception, verbose: bool):
    console.print(f"\n[bold red]Error:[/bold red] {escape(str(e))}")
    if verbose:
        raise e
    sys.exit(1)


def _colored(amount: Decimal, currency: str) -> str:
    text = format_amount(amount, currency)
    if amount < 0:
        return f"[red]{text}[/red]"
    if amount > 0:
        return f"[green]{text}[/green]"
    return f"[dim]{text}[/dim]"


def display_balances(balances: list[BalanceEntry], currency: str):
    """Display net balances in a table."""
    table = Table(title="Net Balances")
    table.add_column("Participant")
    table.add_column("ID", style="dim")
    table.add_column("Net", justify="right")

    for entry in balances:
        table.add_row(
            entry.display_name,
            entry.participant_id,
            _colored(entry.net_amount, currency),
        )

    console.print(table)


def display_position(name: str, amount: Decimal, currency: str):
    """Display one participant's position as owes / is owed."""
    text = format_amount(abs(amount), currency)
    if amount < 0:
        console.print(f"{escape(name)} owes [red]{text}[/red]")
    elif amount > 0:
        console.print(f"{escape(name)} is owed [green]{text}[/green]")
    else:
        console.print(f"{escape(name)} is settled up")


def display_transactions(transactions: list[SettlementTransaction], currency: str):
    """Display suggested payments in a table."""
    if not transactions:
        console.print("[green]Everyone is settled up.[/green]")
        return

    table = Table(title="Suggested Payments")
    table.add_column("#", justify="right", style="dim")
    table.add_column("From")
    table.add_column("To")
    table.add_column("Amount", justify="right")

    for i, tx in enumerate(transactions, start=1):
        table.add_row(
            str(i),
            tx.from_display_name,
            tx.to_display_name,
            f"[cyan]{format_amount(tx.amount, currency)}[/cyan]",
        )

    console.print(table)


@app.command()
def balances(
    ledger_path: Path = typer.Argument(..., help="Path to a JSON ledger file"),
    participant: str | None = typer.Option(
        None, "--participant", "-p", help="Only show this participant's position"
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Verbose output"),
):
    """Show each participant's net balance."""
    setup_logging(verbose)

    try:
        settings = load_settings()
        ledger = load_ledger(ledger_path)
        currency = ledger.currency or settings.currency
        plan = SettlementService(settings).plan_for_ledger(ledger)

        console.print(f"\n[bold]{escape(ledger.name)}[/bold]")
        if participant is None:
            display_balances(plan.balances, currency)
            return

        names = {b.participant_id: b.display_name for b in plan.balances}
        if participant not in names:
            raise UnknownParticipantError(participant)
        display_position(
            names[participant], balance_for(plan.balances, participant), currency
        )
    except Exception as e:
        _fail(e, verbose)


@app.command()
def settle(
    ledger_path: Path = typer.Argument(..., help="Path to a JSON ledger file"),
    as_json: bool = typer.Option(
        False, "--json", help="Print the payments as JSON instead of a table"
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Verbose output"),
):
    """
    Suggest the payments that settle the group.

    Payments under one whole currency unit are left out.
    """
    setup_logging(verbose)

    try:
        settings = load_settings()
        ledger = load_ledger(ledger_path)
        plan = SettlementService(settings).plan_for_ledger(ledger)

        if as_json:
            typer.echo(_transactions_adapter.dump_json(plan.transactions).decode())
            return

        console.print(f"\n[bold]{escape(ledger.name)}[/bold]")
        display_transactions(
            plan.transactions, ledger.currency or settings.currency
        )
    except Exception as e:
        _fail(e, verbose)


@app.command()
def record(
    ledger_path: Path = typer.Argument(..., help="Path to a JSON ledger file"),
    payer: str = typer.Argument(..., help="ID of the participant who paid"),
    payee: str = typer.Argument(..., help="ID of the participant who was paid"),
    amount: str = typer.Argument(..., help="Amount paid, e.g. 250.50"),
    mode: str | None = typer.Option(
        None, "--mode", "-m", help="Payment mode: Cash, UPI or Card"
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Verbose output"),
):
    """Record a settle-up payment in the ledger file."""
    setup_logging(verbose)

    try:
        if mode is not None and mode not in get_args(PaymentMode):
            raise typer.BadParameter(
                f"Unknown payment mode {mode!r}; "
                f"choose from {', '.join(get_args(PaymentMode))}"
            )

        minor = to_minor_units(amount)
        if minor < 1:
            raise InvalidAmountError(
                amount, f"Payment must be at least one minor unit, got {amount!r}"
            )
        value = from_minor_units(minor)

        settings = load_settings()
        ledger = load_ledger(ledger_path)
        currency = ledger.currency or settings.currency
        names = {p.participant_id: p.display_name for p in ledger.participants}
        for participant_id in (payer, payee):
            if participant_id not in names:
                raise UnknownParticipantError(participant_id)

        transaction = SettlementTransaction(
            from_participant_id=payer,
            from_display_name=names[payer],
            to_participant_id=payee,
            to_display_name=names[payee],
            amount=value,
        )

        service = SettlementService(settings)
        updated = service.record_payment(ledger, transaction, payment_mode=mode)
        dump_ledger(updated, ledger_path)

        console.print(
            f"[bold green]✓ Recorded {format_amount(transaction.amount, currency)} "
            f"from {transaction.from_display_name} to "
            f"{transaction.to_display_name}[/bold green]"
        )

        remaining = service.plan_for_ledger(updated)
        display_transactions(remaining.transactions, currency)
    except Exception as e:
        _fail(e, verbose)


if __name__ == "__main__":
    app()
