"""Click-based CLI for commodity-tracker.

Thin wrapper around library modules. Every command delegates to the
catalog, the dashboard service, or the report builder.
"""

from __future__ import annotations

import asyncio
import json
import logging

import click
from rich.console import Console
from rich.table import Table

console = Console(stderr=True)


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _run_async(coro):
    """Run an async coroutine from synchronous Click code."""
    return asyncio.run(coro)


def _load_config(ctx: click.Context):
    """Load config lazily, caching on first call."""
    if "config" not in ctx.obj:
        from commodity_tracker.core import load_config

        ctx.obj["config"] = load_config(config_path=ctx.obj.get("config_path"))
    return ctx.obj["config"]


def _create_dashboard(ctx: click.Context):
    """Build a dashboard from config, or return one injected via ``ctx.obj``."""
    if "dashboard" in ctx.obj:
        return ctx.obj["dashboard"]

    from commodity_tracker.dashboard import Dashboard

    return Dashboard(_load_config(ctx))


def _split_ids(ids: str | None) -> list[str] | None:
    if not ids:
        return None
    return [i.strip() for i in ids.split(",") if i.strip()]


def _echo_json(payload) -> None:
    click.echo(json.dumps(payload, indent=2, default=str))


# ---------------------------------------------------------------------------
# CLI group
# ---------------------------------------------------------------------------


@click.group()
@click.option(
    "--config",
    "-c",
    type=click.Path(exists=True),
    envvar="COMMODITY_TRACKER_CONFIG",
    default=None,
    help="Path to commodity-tracker.yml config file.",
)
@click.option(
    "--verbose",
    "-v",
    is_flag=True,
    default=False,
    help="Enable verbose output.",
)
@click.version_option(package_name="commodity-tracker")
@click.pass_context
def cli(ctx: click.Context, config: str | None, verbose: bool) -> None:
    """Commodity Tracker: commodity prices, tariffs, and trade news."""
    ctx.ensure_object(dict)
    ctx.obj["config_path"] = config
    ctx.obj["verbose"] = verbose
    ctx.obj["console"] = console
    if verbose:
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        )


# ---------------------------------------------------------------------------
# prices
# ---------------------------------------------------------------------------


@cli.command()
@click.option(
    "--ids",
    "-i",
    type=str,
    default=None,
    help="Comma-separated commodity ids (default: configured dashboard set).",
)
@click.option("--json", "as_json", is_flag=True, default=False, help="Emit JSON.")
@click.pass_context
def prices(ctx: click.Context, ids: str | None, as_json: bool) -> None:
    """Resolve current prices once."""
    async def _run():
        async with _create_dashboard(ctx) as dashboard:
            return await dashboard.resolve_prices(_split_ids(ids))

    quotes = _run_async(_run())

    if as_json:
        _echo_json([q.model_dump(mode="json") for q in quotes])
        return

    from commodity_tracker.reports.builder import format_change, format_price

    table = Table(title="Commodity Prices")
    table.add_column("Commodity", style="bold")
    table.add_column("Price", justify="right")
    table.add_column("Unit")
    table.add_column("Change", justify="right")
    table.add_column("Source")

    for q in quotes:
        style = "green" if q.trend == "up" else "red"
        table.add_row(
            q.name,
            format_price(q.price, q.unit),
            q.unit,
            f"[{style}]{format_change(q.change_percent)}[/{style}]",
            q.provider or q.provenance.value,
        )

    console.print(table)


# ---------------------------------------------------------------------------
# news
# ---------------------------------------------------------------------------


@cli.command()
@click.option(
    "--country",
    type=click.Choice(["US", "CA", "MX"], case_sensitive=False),
    default=None,
    help="Only show articles about this country.",
)
@click.option(
    "--category",
    type=click.Choice(["tariff", "trade", "policy", "commodity"], case_sensitive=False),
    default=None,
    help="Only show articles in this category.",
)
@click.option("--json", "as_json", is_flag=True, default=False, help="Emit JSON.")
@click.pass_context
def news(ctx: click.Context, country: str | None, category: str | None, as_json: bool) -> None:
    """Show trade news (live when configured, curated otherwise)."""
    from commodity_tracker.news.filters import (
        format_time_ago,
        news_by_category,
        news_by_country,
    )

    async def _run():
        async with _create_dashboard(ctx) as dashboard:
            return await dashboard.resolve_news()

    articles = _run_async(_run())
    if country:
        articles = news_by_country(articles, country.upper())
    if category:
        articles = news_by_category(articles, category.lower())

    if as_json:
        _echo_json([a.model_dump(mode="json") for a in articles])
        return

    table = Table(title="Trade News")
    table.add_column("When")
    table.add_column("Country")
    table.add_column("Impact")
    table.add_column("Title", style="bold")
    table.add_column("Source")

    for a in articles:
        table.add_row(
            format_time_ago(a.published_at),
            a.country.value,
            a.impact.value,
            a.title,
            a.source,
        )

    console.print(table)


# ---------------------------------------------------------------------------
# tariffs
# ---------------------------------------------------------------------------


@cli.command()
@click.option("--search", "-s", type=str, default=None, help="HS code or description text.")
@click.option("--category", type=str, default=None, help="Tariff category.")
@click.option("--country", type=str, default=None, help="Jurisdiction code, e.g. US.")
@click.option(
    "--min-rate",
    type=float,
    default=0.0,
    help="Minimum rate for --country (percent).",
)
@click.option("--json", "as_json", is_flag=True, default=False, help="Emit JSON.")
def tariffs(
    search: str | None,
    category: str | None,
    country: str | None,
    min_rate: float,
    as_json: bool,
) -> None:
    """Browse the tariff schedule."""
    from commodity_tracker.catalog import (
        COUNTRY_NAMES,
        TARIFF_DATABASE,
        format_tariff_rate,
        search_tariffs,
        tariffs_by_category,
        tariffs_by_country_rate,
    )

    records = search_tariffs(search) if search else list(TARIFF_DATABASE.values())
    if category:
        allowed = {t.hs_code for t in tariffs_by_category(category)}
        records = [t for t in records if t.hs_code in allowed]
    if country:
        allowed = {t.hs_code for t in tariffs_by_country_rate(country.upper(), min_rate)}
        records = [t for t in records if t.hs_code in allowed]

    if as_json:
        _echo_json([t.model_dump(mode="json") for t in records])
        return

    table = Table(title="Tariff Schedule")
    table.add_column("HS Code", style="bold")
    table.add_column("Description")
    table.add_column("Category")
    for code in COUNTRY_NAMES:
        table.add_column(code, justify="right")

    for t in records:
        rates = [
            format_tariff_rate(t.current_rates[code].rate) if code in t.current_rates else "-"
            for code in COUNTRY_NAMES
        ]
        table.add_row(t.hs_code, t.description, t.category, *rates)

    console.print(table)


# ---------------------------------------------------------------------------
# commodities
# ---------------------------------------------------------------------------


@cli.command()
@click.option("--search", "-s", type=str, default=None, help="Search text.")
@click.option(
    "--category",
    type=click.Choice(
        ["metals", "energy", "agriculture", "precious_metals", "plastics"],
        case_sensitive=False,
    ),
    default=None,
    help="Catalog category.",
)
def commodities(search: str | None, category: str | None) -> None:
    """List the commodity reference catalog."""
    from commodity_tracker.catalog import (
        COMMODITY_CATEGORIES,
        COMMODITY_DATABASE,
        search_commodities,
    )

    items = search_commodities(search) if search else list(COMMODITY_DATABASE)
    if category:
        items = [c for c in items if c.category == category.lower()]

    table = Table(title="Commodity Catalog")
    table.add_column("ID", style="bold")
    table.add_column("Name")
    table.add_column("Category")
    table.add_column("Unit")
    table.add_column("Exchange")

    for c in items:
        table.add_row(c.id, c.name, COMMODITY_CATEGORIES[c.category], c.unit, c.exchange)

    console.print(table)


# ---------------------------------------------------------------------------
# status
# ---------------------------------------------------------------------------


@cli.command()
@click.option(
    "--probe",
    is_flag=True,
    default=False,
    help="Also make one live call per configured provider.",
)
@click.pass_context
def status(ctx: click.Context, probe: bool) -> None:
    """Show provider configuration (and connectivity with --probe)."""
    async def _run():
        async with _create_dashboard(ctx) as dashboard:
            configured = dashboard.check_provider_configuration()
            reachable = await dashboard.test_provider_connectivity() if probe else {}
            return configured, reachable

    configured, reachable = _run_async(_run())

    table = Table(title="Provider Status")
    table.add_column("Provider", style="bold")
    table.add_column("Configured")
    table.add_column("Key")
    if probe:
        table.add_column("Reachable")

    for name, st in configured.items():
        row = [name, "yes" if st.configured else "no", st.key]
        if probe:
            row.append("yes" if reachable.get(name) else "no")
        table.add_row(*row)

    console.print(table)


# ---------------------------------------------------------------------------
# report
# ---------------------------------------------------------------------------


@cli.command()
@click.option("--ids", "-i", type=str, default=None, help="Comma-separated commodity ids.")
@click.option("--json", "as_json", is_flag=True, default=False, help="Emit JSON.")
@click.pass_context
def report(ctx: click.Context, ids: str | None, as_json: bool) -> None:
    """Build the dashboard report."""
    async def _run():
        async with _create_dashboard(ctx) as dashboard:
            return await dashboard.build_report(_split_ids(ids))

    built = _run_async(_run())

    if as_json:
        _echo_json(built.model_dump(mode="json"))
        return

    console.print(f"[bold]{built.title}[/bold]  ({built.file_name})")
    console.print(built.executive_summary)

    table = Table(title="Commodities")
    table.add_column("Commodity", style="bold")
    table.add_column("Price", justify="right")
    table.add_column("Change", justify="right")
    table.add_column("Trend")
    for line in built.commodities:
        table.add_row(line.name, line.price, line.change, line.trend)
    console.print(table)

    console.print(built.market_analysis)


# ---------------------------------------------------------------------------
# serve
# ---------------------------------------------------------------------------


@cli.command()
@click.option("--host", type=str, default=None, help="Bind address. Default: api.host from config.")
@click.option("--port", "-p", type=int, default=None, help="Port number. Default: api.port from config.")
@click.option("--reload", is_flag=True, default=False, help="Auto-reload on code changes.")
@click.pass_context
def serve(ctx: click.Context, host: str | None, port: int | None, reload: bool) -> None:
    """Start the REST API server."""
    import os

    import uvicorn

    api = _load_config(ctx).api
    host = host if host is not None else api.host
    port = port if port is not None else api.port
    # The app factory runs inside uvicorn and loads its own config
    if ctx.obj.get("config_path"):
        os.environ["COMMODITY_TRACKER_CONFIG"] = os.path.abspath(ctx.obj["config_path"])

    console.print(f"Starting commodity-tracker API on [bold]{host}:{port}[/bold]")
    console.print(f"API docs: http://{host}:{port}/docs")

    uvicorn.run(
        "commodity_tracker.api.app:create_app",
        factory=True,
        host=host,
        port=port,
        reload=reload,
    )


# ---------------------------------------------------------------------------
# Entry point
# ---------------------------------------------------------------------------


def main() -> None:
    """Main entry point for the CLI."""
    cli()


if __name__ == "__main__":
    main()
