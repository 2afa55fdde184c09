"""CLI bootstrap for rateio."""

import json
from pathlib import Path

import typer

from rateio.api.schemas.expenses import ExpenseListResponse
from rateio.domain.expenses import ExpenseRecord
from rateio.domain.money import format_money
from rateio.domain.services.person_debts import get_person_debts
from rateio.domain.services.settlement import get_settlement_balances

app = typer.Typer(help="CLI for settling shared group expenses.")
INPUT_FILE_OPTION = typer.Option(
    ...,
    exists=True,
    dir_okay=False,
    help="JSON file in the format returned by GET /v1/groups/{id}/expenses.",
)
PERSON_OPTION = typer.Option(..., help="Participant id whose debts are listed.")


def _load_expenses(input: Path) -> tuple[str, list[ExpenseRecord]]:
    payload = json.loads(input.read_text(encoding="utf-8"))
    expense_list = ExpenseListResponse.model_validate(payload)
    return expense_list.group_id, expense_list.to_records()


@app.command("healthcheck")
def healthcheck() -> None:
    """Verify that the CLI entrypoint is available."""
    typer.echo("rateio is ready")


@app.command("settle")
def settle(input: Path = INPUT_FILE_OPTION) -> None:
    """Print the settlement of the expenses stored in a JSON file."""
    group_id, expenses = _load_expenses(input)
    settlement = get_settlement_balances(expenses)

    typer.echo(f"Acerto do grupo {group_id}")
    typer.echo("Saldos:")
    for participant_id, balance in sorted(settlement.normal.balances.items()):
        typer.echo(
            f"  {participant_id}: pagou {format_money(balance.paid)} | "
            f"consumiu {format_money(balance.paid_for)} | "
            f"saldo {format_money(balance.total)}"
        )

    typer.echo("Reembolsos sugeridos:")
    if not settlement.normal.reimbursements:
        typer.echo("  nenhum")
    for reimbursement in settlement.normal.reimbursements:
        typer.echo(
            f"  {reimbursement.from_id} -> {reimbursement.to_id}: "
            f"{format_money(reimbursement.amount)}"
        )

    if settlement.straight:
        typer.echo("Diretos:")
        for item in settlement.straight:
            typer.echo(
                f"  {item.from_id} -> {item.to_id}: {format_money(item.amount)} "
                f"({item.expense_title})"
            )

    if settlement.lease:
        typer.echo("Locacoes:")
        for lease_item in settlement.lease:
            pending_buy_ins = [
                share for share in lease_item.buy_in_breakdown if not share.paid
            ]
            typer.echo(
                f"  {lease_item.item_name} (dono {lease_item.owner_id}): "
                f"{format_money(lease_item.total_cost)} | "
                f"entradas pendentes {len(pending_buy_ins)} | "
                f"recompra {'pendente' if lease_item.buyback_pending else '-'}"
            )

    typer.echo(f"Total devido: {format_money(settlement.totals.total_owed)}")


@app.command("debts")
def debts(
    input: Path = INPUT_FILE_OPTION,
    person: str = PERSON_OPTION,
) -> None:
    """Print what one participant owes, grouped by creditor."""
    _, expenses = _load_expenses(input)
    settlement = get_settlement_balances(expenses)
    creditor_debts = get_person_debts(
        person,
        settlement.normal.reimbursements,
        settlement.straight,
        settlement.lease,
    )

    typer.echo(f"Dividas de {person}")
    if not creditor_debts:
        typer.echo("  nenhuma")
    for creditor_debt in creditor_debts:
        typer.echo(
            f"  para {creditor_debt.creditor_id}: "
            f"{format_money(creditor_debt.total_amount)}"
        )
        for item in creditor_debt.items:
            label = item.expense_title or item.lease_item_name or "saldo do grupo"
            amount = format_money(item.amount)
            typer.echo(f"    - {item.type.value}: {amount} ({label})")
    total = sum(creditor_debt.total_amount for creditor_debt in creditor_debts)
    typer.echo(f"Total: {format_money(total)}")


@app.command("mcp")
def mcp() -> None:
    """Run the MCP server over stdio, backed by the REST API."""
    from rateio.mcp.server import create_mcp_server

    create_mcp_server().run()


def main() -> None:
    """Run the rateio CLI application."""
    app()


if __name__ == "__main__":
    main()
