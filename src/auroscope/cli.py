"""Typer CLI entry point for the AuroScope bot."""

from pathlib import Path

import typer
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from auroscope.access.decision import is_permitted
from auroscope.access.diagnostics import describe_posture
from auroscope.access.policy import AllowListPolicy
from auroscope.config import build_policy, load_config, read_environment
from auroscope.models import IdScheme, Posture, Provenance

app = typer.Typer(
    name="auroscope",
    help="AuroScope report bot",
    no_args_is_help=True,
)
console = Console()


def _get_config():
    return load_config(Path("config.yaml"))


@app.command()
def check(
    raw: str | None = typer.Option(None, "--raw", help="Parse this value instead of the environment"),
    ids: list[str] | None = typer.Option(None, "--id", "-i", help="Identifier to test against the allow-list"),
    env_file: Path | None = typer.Option(None, "--env-file", help="Path to .env (default: from config)"),
    scheme: IdScheme | None = typer.Option(None, "--scheme", help="Identifier scheme (overrides config)"),
    posture: Posture | None = typer.Option(None, "--posture", help="Empty-list posture (overrides config)"),
):
    """Show how the allow-list is parsed and who it admits."""
    config = _get_config()
    id_scheme = scheme or config.access.id_scheme
    empty_posture = posture or config.access.empty_posture
    var = config.access.env_var

    if raw is not None:
        policy = AllowListPolicy.from_config(raw, id_scheme)
    else:
        config.access.id_scheme = id_scheme
        environ = read_environment(env_file or config.env_file)
        policy = build_policy(config, environ)

    if policy.provenance is Provenance.ABSENT:
        console.print(f"[bold]{var}[/bold] is [yellow]not set[/yellow]")
    else:
        console.print(f"[bold]{var}[/bold] value: '{escape(policy.raw)}'")
    console.print(f"  Provenance: {policy.provenance.value}")
    console.print(f"  Scheme: {policy.scheme.value}")
    console.print(f"  Accepted: [bold]{len(policy)}[/bold] identifier(s)")

    if not policy.is_empty:
        table = Table(title="Allowed identifiers")
        table.add_column("#", justify="right", style="dim")
        table.add_column("ID", style="bold")
        for i, principal in enumerate(policy.ordered_ids, start=1):
            table.add_row(str(i), escape(str(principal)))
        console.print(table)

    if policy.malformed:
        table = Table(title="Malformed entries (skipped)")
        table.add_column("Position", justify="right", style="dim")
        table.add_column("Token", style="red")
        table.add_column("Reason")
        for entry in policy.malformed:
            table.add_row(str(entry.position), escape(entry.token), escape(entry.reason))
        console.print(table)

    console.print(f"  Access: {describe_posture(policy, empty_posture)}")

    for candidate in ids or []:
        if is_permitted(policy, candidate, empty_posture):
            console.print(f"  {escape(candidate)}: [green]allowed[/green]")
        else:
            console.print(f"  {escape(candidate)}: [red]denied[/red]")


@app.command()
def run():
    """Start the Telegram bot and poll until interrupted."""
    import asyncio
    import logging

    from dotenv import load_dotenv

    from auroscope.access.diagnostics import log_policy

    config = _get_config()
    load_dotenv(config.env_file)
    logging.basicConfig(format=config.logging.format, level=config.logging.level)

    policy = build_policy(config)
    log_policy(policy, config.access.empty_posture)

    if not config.telegram.effective_token:
        console.print("[red]Telegram token not configured. Set TELEGRAM_BOT_TOKEN.[/red]")
        raise typer.Exit(1)

    try:
        asyncio.run(_serve(config, policy))
    except KeyboardInterrupt:
        console.print("[dim]Stopped.[/dim]")


async def _serve(config, policy: AllowListPolicy) -> None:
    import asyncio

    from auroscope.telegram.bot import create_bot, start_bot, stop_bot

    bot_app = await create_bot(config, policy)
    await start_bot(bot_app)
    try:
        await asyncio.Event().wait()
    finally:
        await stop_bot(bot_app)


@app.command()
def config_cmd():
    """Show current configuration."""
    config = _get_config()
    data = config.model_dump(mode="json")
    if data["telegram"]["token"]:
        data["telegram"]["token"] = "***"
    console.print(Panel(escape(str(data)), title="Configuration"))


if __name__ == "__main__":
    app()
