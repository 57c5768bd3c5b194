"""Travel rule CLI - Main commands."""
import asyncio
import json
from typing import Optional

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from travelrule import (
    APIConfig,
    DepositQuestionnaire,
    TravelRuleClient,
    TravelRuleError,
    WithdrawalQuestionnaire,
    with_recv_window,
)

app = typer.Typer(
    name="travelrule",
    help="Travel rule compliance endpoints CLI",
    add_completion=False
)
console = Console()

TRAVEL_RULE_STATUS = {0: "completed", 1: "pending", 2: "failed"}


def get_client() -> TravelRuleClient:
    """Create a client from TRAVELRULE_* environment variables."""
    return TravelRuleClient(APIConfig.from_env())


def run_async(coro):
    """Run async function."""
    return asyncio.run(coro)


def _parse_questionnaire(raw: str, model):
    try:
        return model.from_json(raw)
    except ValueError as e:
        console.print(f"[red]Invalid questionnaire JSON: {escape(str(e))}[/red]")
        raise typer.Exit(1)
    except TravelRuleError as e:
        console.print(f"[red]Invalid questionnaire: {escape(str(e))}[/red]")
        raise typer.Exit(1)


def _options(recv_window: Optional[int]):
    return [with_recv_window(recv_window)] if recv_window is not None else []


@app.command()
def withdraw(
    coin: str = typer.Option(..., "--coin", "-c", help="Coin to withdraw"),
    address: str = typer.Option(..., "--address", "-a", help="Destination address"),
    amount: str = typer.Option(..., "--amount", help="Amount, as a decimal string"),
    questionnaire: str = typer.Option(..., "--questionnaire", "-q", help="Questionnaire JSON"),
    network: Optional[str] = typer.Option(None, "--network", "-n", help="Network"),
    address_tag: Optional[str] = typer.Option(None, "--address-tag", help="Memo / tag"),
    withdraw_order_id: Optional[str] = typer.Option(None, "--withdraw-order-id", help="Client withdraw id"),
    name: Optional[str] = typer.Option(None, "--name", help="Address book description"),
    wallet_type: Optional[int] = typer.Option(None, "--wallet-type", help="0 spot, 1 funding"),
    transaction_fee_flag: Optional[bool] = typer.Option(
        None, "--transaction-fee-flag/--no-transaction-fee-flag",
        help="Return the fee to the destination account on internal transfers"
    ),
    recv_window: Optional[int] = typer.Option(None, "--recv-window", help="recvWindow in ms"),
):
    """Submit a withdraw with travel rule information."""
    parsed = _parse_questionnaire(questionnaire, WithdrawalQuestionnaire)

    async def do_withdraw():
        async with get_client() as client:
            service = (
                client.new_create_travel_rule_withdraw_service()
                .coin(coin)
                .address(address)
                .amount(amount)
                .questionnaire(parsed)
                .network(network)
                .address_tag(address_tag)
                .withdraw_order_id(withdraw_order_id)
                .name(name)
                .wallet_type(wallet_type)
                .transaction_fee_flag(transaction_fee_flag)
            )
            return await service.do(*_options(recv_window))

    try:
        result = run_async(do_withdraw())
    except TravelRuleError as e:
        console.print(f"[red]Withdraw failed: {escape(str(e))}[/red]")
        raise typer.Exit(1)

    colour = "green" if result.accepted else "yellow"
    console.print(f"[{colour}]Withdraw {result.id}: accepted={result.accepted}[/{colour}] {escape(result.info)}")


@app.command()
def deposits(
    coin: Optional[str] = typer.Option(None, "--coin", "-c", help="Filter by coin"),
    network: Optional[str] = typer.Option(None, "--network", "-n", help="Filter by network"),
    tr_id: Optional[str] = typer.Option(None, "--tr-id", help="Travel rule record id(s)"),
    tx_id: Optional[str] = typer.Option(None, "--tx-id", help="On-chain transaction id(s)"),
    tran_id: Optional[str] = typer.Option(None, "--tran-id", help="Wallet transaction id(s)"),
    status: Optional[int] = typer.Option(None, "--status", help="0 completed, 1 pending, 2 failed"),
    pending: Optional[bool] = typer.Option(
        None, "--pending/--not-pending", help="Only deposits waiting for a questionnaire"
    ),
    start_time: Optional[int] = typer.Option(None, "--start-time", help="Start time (ms)"),
    end_time: Optional[int] = typer.Option(None, "--end-time", help="End time (ms)"),
    offset: Optional[int] = typer.Option(None, "--offset", help="Pagination offset"),
    limit: Optional[int] = typer.Option(None, "--limit", help="Page size"),
    as_json: bool = typer.Option(False, "--json", help="Print raw JSON"),
):
    """List deposits with their travel rule status."""

    async def list_deposits():
        async with get_client() as client:
            service = (
                client.new_list_travel_rule_deposits_service()
                .coin(coin)
                .network(network)
                .tr_id(tr_id)
                .tx_id(tx_id)
                .tran_id(tran_id)
                .travel_rule_status(status)
                .pending_questionnaire(pending)
                .start_time(start_time)
                .end_time(end_time)
                .offset(offset)
                .limit(limit)
            )
            return await service.do()

    try:
        records = run_async(list_deposits())
    except TravelRuleError as e:
        console.print(f"[red]Listing deposits failed: {escape(str(e))}[/red]")
        raise typer.Exit(1)

    if as_json:
        console.print_json(json.dumps([record.to_dict() for record in records]))
        return

    if not records:
        console.print("[yellow]No deposits found[/yellow]")
        return

    table = Table()
    table.add_column("Tran ID", style="cyan")
    table.add_column("TR ID", style="dim")
    table.add_column("Coin")
    table.add_column("Network")
    table.add_column("Amount", justify="right")
    table.add_column("Travel rule")
    table.add_column("Questionnaire")

    for record in records:
        table.add_row(
            str(record.tran_id),
            str(record.tr_id),
            record.coin,
            record.network,
            record.amount,
            TRAVEL_RULE_STATUS.get(record.travel_rule_status, str(record.travel_rule_status)),
            "[red]required[/red]" if record.pending_questionnaire else "-",
        )

    console.print(table)


@app.command("provide-info")
def provide_info(
    tran_id: int = typer.Option(..., "--tran-id", help="Wallet transaction id of the deposit"),
    questionnaire: str = typer.Option(..., "--questionnaire", "-q", help="Questionnaire JSON"),
    recv_window: Optional[int] = typer.Option(None, "--recv-window", help="recvWindow in ms"),
):
    """Provide travel rule information for a deposit."""
    parsed = _parse_questionnaire(questionnaire, DepositQuestionnaire)

    async def do_provide():
        async with get_client() as client:
            service = (
                client.new_provide_travel_rule_deposit_info_service()
                .tran_id(tran_id)
                .questionnaire(parsed)
            )
            return await service.do(*_options(recv_window))

    try:
        result = run_async(do_provide())
    except TravelRuleError as e:
        console.print(f"[red]Providing deposit info failed: {escape(str(e))}[/red]")
        raise typer.Exit(1)

    colour = "green" if result.accepted else "yellow"
    console.print(f"[{colour}]Deposit {tran_id}: accepted={result.accepted}[/{colour}] {escape(result.info)}")


@app.command("server-time")
def server_time():
    """Show the offset between local and exchange time."""

    async def do_sync():
        async with get_client() as client:
            return await client.sync_time()

    try:
        offset = run_async(do_sync())
    except TravelRuleError as e:
        console.print(f"[red]Server time request failed: {escape(str(e))}[/red]")
        raise typer.Exit(1)

    console.print(f"Server time offset: {offset} ms")


def main():
    app()


if __name__ == "__main__":
    main()
