#!/usr/bin/env python3
"""
Game Token SDK CLI - calldata generation from the command line

Provides one command per SDK operation:
- Complete create / burn flows
- Single approve, lock, create and burn calls
- Unit formatting helpers
- The HTTP API server
"""

from __future__ import annotations

import json
import logging
import sys
from typing import Any, Dict

import click
from rich import box
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from gametoken import __version__
from gametoken.core.config import LOG_LEVELS, load_settings
from gametoken.core.exceptions import ConfigurationError, SdkError
from gametoken.core.logging_config import setup_logging
from gametoken.sdk import GameTokenSdk

logger = logging.getLogger(__name__)
console = Console()


def _handle_cli_error(exc: Exception, exit_code: int = 1) -> None:
    """Centralized CLI error handler for consistent messaging/exit codes."""
    logger.debug("CLI error: %s", exc, exc_info=True)
    console.print(f"[bold red]Error:[/] {escape(str(exc))}")
    sys.exit(exit_code)


def _decimals(ctx: click.Context, decimals: int | None) -> int:
    """Explicit --decimals, else the configured default."""
    if decimals is not None:
        return decimals
    return ctx.obj["settings"].default_decimals


def _emit(ctx: click.Context, title: str, rows: Dict[str, Any]) -> None:
    """Print results as JSON or as a rich table."""
    if ctx.obj.get("json"):
        click.echo(json.dumps(rows, indent=2))
        return
    table = Table(title=title, show_header=False, box=box.ROUNDED)
    for label, value in rows.items():
        table.add_row(f"[bold cyan]{label}", str(value))
    console.print(table)


@click.group()
@click.version_option(__version__, prog_name="gametoken")
@click.option("--json", "as_json", is_flag=True, help="Print machine-readable JSON")
@click.option(
    "--log-level",
    default="WARNING",
    show_default=True,
    type=click.Choice(LOG_LEVELS, case_sensitive=False),
    help="Log level",
)
@click.pass_context
def cli(ctx: click.Context, as_json: bool, log_level: str) -> None:
    """Generate calldata for the game token contracts."""
    setup_logging(name="gametoken", level=log_level, enable_file=False)
    ctx.ensure_object(dict)
    if "settings" not in ctx.obj:
        try:
            ctx.obj["settings"] = load_settings()
        except ConfigurationError as exc:
            _handle_cli_error(exc)
    ctx.obj["json"] = as_json
    if "sdk" not in ctx.obj:
        ctx.obj["sdk"] = GameTokenSdk()


# ==================== Flows ====================


@cli.command("create-flow")
@click.option("--factory", required=True, help="GameTokenFactory contract address")
@click.option("--creda-amount", required=True, help="CREDA base units to lock")
@click.option("--name", required=True, help="Game token name")
@click.option("--symbol", required=True, help="Game token symbol")
@click.option(
    "--decimals",
    default=None,
    type=click.IntRange(0, 255),
    help="Game token decimals (default: GAMETOKEN_DEFAULT_DECIMALS, factory allows max 18)",
)
@click.option("--rate", default=None, help="XP per CREDA (defaults to 1:1)")
@click.pass_context
def create_flow(
    ctx: click.Context,
    factory: str,
    creda_amount: str,
    name: str,
    symbol: str,
    decimals: int | None,
    rate: str | None,
) -> None:
    """
    Calldata for the complete game token creation flow.

    Example:
        gametoken create-flow --factory 0x1234... \\
            --creda-amount 1000000000000000000000 --name "Test Game" --symbol TEST
    """
    sdk: GameTokenSdk = ctx.obj["sdk"]
    try:
        flow = sdk.create_flow(
            factory, creda_amount, name, symbol, _decimals(ctx, decimals), exchange_rate=rate
        )
    except SdkError as exc:
        _handle_cli_error(exc)
        return

    if ctx.obj.get("json"):
        _emit(ctx, "Game Token Creation Flow", flow.to_dict())
        return
    _emit(
        ctx,
        "Game Token Creation Flow",
        {
            "1. CREDA approve": flow.deposit_approve,
            "2. Lock CREDA": flow.lock_deposit,
            "3. XP amount received": str(flow.reward_amount),
            "4. XP approve": flow.reward_approve,
            "5. Create game token": flow.create_token,
        },
    )


@cli.command("burn-flow")
@click.option("--factory", required=True, help="GameTokenFactory contract address")
@click.option("--token", required=True, help="Game token contract address")
@click.option("--game-id", required=True, help="Game token ID")
@click.option("--amount", required=True, help="Game token base units to burn")
@click.pass_context
def burn_flow(ctx: click.Context, factory: str, token: str, game_id: str, amount: str) -> None:
    """Calldata for burning game tokens to get XP back."""
    sdk: GameTokenSdk = ctx.obj["sdk"]
    try:
        flow = sdk.burn_flow(factory, token, game_id, amount)
    except SdkError as exc:
        _handle_cli_error(exc)
        return

    if ctx.obj.get("json"):
        _emit(ctx, "Game Token Burning Flow", flow.to_dict())
        return
    _emit(
        ctx,
        "Game Token Burning Flow",
        {
            "1. Game token approve": flow.issued_token_approve,
            "2. Burn game token": flow.burn_issued_token,
        },
    )


# ==================== Single Calls ====================


@cli.command("approve-creda")
@click.option("--factory", required=True, help="GameTokenFactory contract address")
@click.option("--amount", required=True, help="CREDA base units to approve")
@click.pass_context
def approve_creda(ctx: click.Context, factory: str, amount: str) -> None:
    """Calldata approving CREDA tokens to the factory."""
    try:
        calldata = ctx.obj["sdk"].approve_deposit(factory, amount)
    except SdkError as exc:
        _handle_cli_error(exc)
        return
    _emit(ctx, "CREDA Approve", {"calldata": calldata})


@cli.command("lock-creda")
@click.option("--amount", required=True, help="CREDA base units to lock")
@click.pass_context
def lock_creda(ctx: click.Context, amount: str) -> None:
    """Calldata locking CREDA tokens to get XP."""
    try:
        calldata = ctx.obj["sdk"].encode_lock(amount)
    except SdkError as exc:
        _handle_cli_error(exc)
        return
    _emit(ctx, "Lock CREDA", {"calldata": calldata})


@cli.command("approve-xp")
@click.option("--factory", required=True, help="GameTokenFactory contract address")
@click.option("--amount", required=True, help="XP base units to approve")
@click.pass_context
def approve_xp(ctx: click.Context, factory: str, amount: str) -> None:
    """Calldata approving XP tokens to the factory."""
    try:
        calldata = ctx.obj["sdk"].approve_reward(factory, amount)
    except SdkError as exc:
        _handle_cli_error(exc)
        return
    _emit(ctx, "XP Approve", {"calldata": calldata})


@cli.command("create-token")
@click.option("--xp-amount", required=True, help="XP base units to lock")
@click.option("--name", required=True, help="Game token name")
@click.option("--symbol", required=True, help="Game token symbol")
@click.option(
    "--decimals",
    default=None,
    type=click.IntRange(0, 255),
    help="Game token decimals (default: GAMETOKEN_DEFAULT_DECIMALS, factory allows max 18)",
)
@click.pass_context
def create_token(ctx: click.Context, xp_amount: str, name: str, symbol: str, decimals: int | None) -> None:
    """Calldata creating a game token."""
    try:
        calldata = ctx.obj["sdk"].encode_create_token(
            xp_amount, name, symbol, _decimals(ctx, decimals)
        )
    except SdkError as exc:
        _handle_cli_error(exc)
        return
    _emit(ctx, "Create Game Token", {"calldata": calldata})


@cli.command("burn-token")
@click.option("--game-id", required=True, help="Game token ID")
@click.option("--amount", required=True, help="Game token base units to burn")
@click.pass_context
def burn_token(ctx: click.Context, game_id: str, amount: str) -> None:
    """Calldata burning game tokens through the factory."""
    try:
        calldata = ctx.obj["sdk"].encode_burn_token(game_id, amount)
    except SdkError as exc:
        _handle_cli_error(exc)
        return
    _emit(ctx, "Burn Game Token", {"calldata": calldata})


# ==================== Utilities ====================


@cli.command("format-units")
@click.argument("value")
@click.option(
    "--decimals",
    default=None,
    type=click.IntRange(0, 255),
    help="Token decimals (default: GAMETOKEN_DEFAULT_DECIMALS)",
)
@click.pass_context
def format_units_cmd(ctx: click.Context, value: str, decimals: int | None) -> None:
    """Render raw base units as a human decimal amount."""
    try:
        rendered = GameTokenSdk.format_units(value, _decimals(ctx, decimals))
    except SdkError as exc:
        _handle_cli_error(exc)
        return
    _emit(ctx, "Amount", {"value": rendered})


@cli.command("to-base-units")
@click.argument("amount")
@click.option(
    "--decimals",
    default=None,
    type=click.IntRange(0, 255),
    help="Token decimals (default: GAMETOKEN_DEFAULT_DECIMALS)",
)
@click.pass_context
def to_base_units_cmd(ctx: click.Context, amount: str, decimals: int | None) -> None:
    """Scale a human decimal amount into raw base units."""
    try:
        value = GameTokenSdk.to_base_units(amount, _decimals(ctx, decimals))
    except SdkError as exc:
        _handle_cli_error(exc)
        return
    _emit(ctx, "Base Units", {"value": str(value)})


@cli.command("catalog")
@click.pass_context
def catalog_cmd(ctx: click.Context) -> None:
    """List known function signatures and selectors."""
    listing = ctx.obj["sdk"].registry.describe()
    if ctx.obj.get("json"):
        click.echo(json.dumps(listing, indent=2))
        return
    table = Table(title="Function Catalog", box=box.ROUNDED)
    table.add_column("Contract", style="cyan")
    table.add_column("Signature")
    table.add_column("Selector", style="green")
    for role, functions in listing.items():
        for signature, selector in functions.items():
            table.add_row(role, signature, selector)
    console.print(table)


@cli.command("serve")
@click.pass_context
def serve(ctx: click.Context) -> None:
    """Run the calldata HTTP API (host/port from GAMETOKEN_* env vars)."""
    from gametoken.api.server import run

    try:
        run(ctx.obj["settings"])
    except ConfigurationError as exc:
        _handle_cli_error(exc)


def main() -> int:
    """Console script entry point."""
    cli(obj={})
    return 0


if __name__ == "__main__":
    sys.exit(main())
