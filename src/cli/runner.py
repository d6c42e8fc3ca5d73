# src/cli/runner.py

"""Operator commands run from main.py."""

import logging

from rich.console import Console
from rich.table import Table

from src.config.settings import Settings
from src.services.enrichment import format_usd
from src.services.gold_price_client import GoldPriceClient
from src.storage.gold_price_cache import GoldPriceCache

logger = logging.getLogger("jewelry_catalog.cli")

# Stderr console for status messages so stdout stays clean
_err = Console(stderr=True)


def run_server(host: str | None = None, port: int | None = None) -> int:
    """Serve the catalog API with uvicorn until interrupted."""
    import uvicorn

    from src.api.app import create_app

    bind_host = host or Settings.HOST
    bind_port = port or Settings.PORT
    logger.info("Server starting on %s:%d", bind_host, bind_port)
    _err.print(
        f"[bold]API endpoints available at "
        f"http://localhost:{bind_port}/api/[/bold]"
    )
    uvicorn.run(
        create_app(),
        host=bind_host,
        port=bind_port,
        log_config=None,
    )
    return 0


def show_gold_price() -> int:
    """Fetch and print the gold price per gram and per ounce."""
    cache = GoldPriceCache(GoldPriceClient().fetch_price_per_ounce)
    entry = cache.get_entry()

    table = Table(title="Gold Price (USD)", title_style="bold cyan")
    table.add_column("Per gram", justify="right")
    table.add_column("Per ounce", justify="right")
    table.add_column("Source", style="dim")
    table.add_row(
        f"${format_usd(entry.price)}",
        f"${format_usd(entry.price * Settings.TROY_OUNCE_GRAMS)}",
        "fallback" if entry.is_fallback else Settings.GOLD_API_URL,
    )
    Console().print(table)
    return 1 if entry.is_fallback else 0


async def run_health_check() -> int:
    """Run connectivity health check on all upstreams."""
    from src.services.health_checker import HealthChecker

    _err.print("[bold]Running upstream health check...[/bold]")
    checker = HealthChecker()
    results = await checker.check_all()

    table = Table(
        title="Upstream Health Check",
        show_lines=True,
        title_style="bold cyan",
    )
    table.add_column("Upstream", style="bold")
    table.add_column("Status", justify="center")
    table.add_column("Latency", justify="right")
    table.add_column("Notes", style="dim")

    any_down = False
    for r in results:
        if r.status == "ok":
            status = "[green]✅ OK[/green]"
        elif r.status == "slow":
            status = "[yellow]⚠️  SLOW[/yellow]"
        else:
            status = "[red]❌ DOWN[/red]"
            any_down = True

        latency = (
            f"{r.latency_ms:.0f}ms"
            if r.latency_ms > 0
            else "—"
        )
        table.add_row(
            r.upstream_id, status, latency, r.message,
        )

    Console().print(table)
    return 1 if any_down else 0
