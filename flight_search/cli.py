"""
Flight Search CLI - multi-provider search from the terminal

Runs the aggregator in-process and renders its results with rich:
- search: merged, price-sorted flights plus per-provider status
- stampede: concurrent identical searches coalesced into one fan-out
- serve: the HTTP adapter under uvicorn
"""

import asyncio
import time
from datetime import datetime
from typing import List, Optional

import typer
from pydantic import ValidationError
from rich import box
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from .main import setup_logging
from .models import CabinClass, ProviderName, SearchParamsModel, SearchResponseModel
from .services import FlightAggregator, SearchEventType, create_flight_aggregator
from .utils.config import ConfigurationError, get_config

# Initialize typer app and rich console
app = typer.Typer(help="Flight search aggregation across GDS, NDC and meta-search providers")
console = Console()


def format_time(seconds: float) -> str:
    """Format time in appropriate units."""
    if seconds < 1:
        return f"{seconds * 1000:.0f}ms"
    return f"{seconds:.2f}s"


def format_duration(minutes: int) -> str:
    return f"{minutes // 60}h {minutes % 60:02d}m"


def build_aggregator() -> FlightAggregator:
    try:
        config = get_config()
    except ConfigurationError as e:
        console.print(f"[red]❌ {e}[/red]")
        raise typer.Exit(code=1)

    setup_logging(config.log_level)
    return create_flight_aggregator(config)


def parse_params(
    origin: str,
    destination: str,
    departure_date: datetime,
    return_date: Optional[datetime],
    passengers: int,
    cabin_class: CabinClass,
) -> SearchParamsModel:
    try:
        return SearchParamsModel(
            origin=origin,
            destination=destination,
            departure_date=departure_date.date(),
            return_date=return_date.date() if return_date else None,
            passengers=passengers,
            cabin_class=cabin_class,
        )
    except ValidationError as e:
        console.print("[red]❌ Invalid search:[/red]")
        for error in e.errors():
            location = ".".join(str(part) for part in error["loc"]) or "search"
            console.print(f"   [yellow]{location}[/yellow]: {error['msg']}")
        raise typer.Exit(code=2)


def create_flights_table(response: SearchResponseModel, limit: int) -> Table:
    """Create a rich table with the cheapest flights."""
    table = Table(
        title=f"✈️  Flights ({len(response.flights)} found)",
        box=box.ROUNDED,
    )

    table.add_column("Flight", style="cyan bold")
    table.add_column("Provider", style="magenta")
    table.add_column("Departure", style="white")
    table.add_column("Arrival", style="white")
    table.add_column("Duration", justify="right")
    table.add_column("Stops", justify="right")
    table.add_column("Seats", justify="right")
    table.add_column("Price", style="green bold", justify="right")

    for flight in response.flights[:limit]:
        table.add_row(
            flight.flight_number,
            flight.provider.value,
            flight.departure.strftime("%Y-%m-%d %H:%M"),
            flight.arrival.strftime("%Y-%m-%d %H:%M"),
            format_duration(flight.duration),
            str(flight.stops),
            str(flight.availability),
            f"{flight.price.amount:,.0f} {flight.price.currency}",
        )

    return table


def create_providers_table(response: SearchResponseModel) -> Table:
    """Create a rich table with per-provider outcomes."""
    table = Table(title="📡 Providers", box=box.ROUNDED)
    table.add_column("Provider", style="cyan bold")
    table.add_column("Status")
    table.add_column("Flights", justify="right")

    for provider in ProviderName:
        stats = response.providers.for_provider(provider)
        status = "[green]✓ ok[/green]" if stats.success else "[red]✗ failed[/red]"
        table.add_row(provider.value, status, str(stats.count))

    return table


def create_cache_table(aggregator: FlightAggregator) -> Table:
    stats = aggregator.get_cache_stats()
    table = Table(title="💾 Cache", box=box.ROUNDED, show_header=False)
    table.add_column("Metric", style="cyan")
    table.add_column("Value", justify="right")
    table.add_row("Entries", str(stats.size))
    table.add_row("Hits", f"[green]{stats.hits}[/green]")
    table.add_row("Misses", f"[yellow]{stats.misses}[/yellow]")
    table.add_row("Hit rate", f"{stats.hit_rate * 100:.1f}%")
    return table


async def run_searches(
    aggregator: FlightAggregator, params: SearchParamsModel, repeat: int
) -> List[SearchResponseModel]:
    responses = []
    for _ in range(repeat):
        start_time = time.perf_counter()
        response = await aggregator.search(params)
        elapsed = time.perf_counter() - start_time

        source = "[green]cache[/green]" if response.cached else "[yellow]providers[/yellow]"
        console.print(f"[dim]Search {response.request_id[:8]} served from[/dim] {source} [dim]in {format_time(elapsed)}[/dim]")
        responses.append(response)
    return responses


@app.command()
def search(
    origin: str = typer.Argument(..., help="Origin IATA code, e.g. JFK"),
    destination: str = typer.Argument(..., help="Destination IATA code, e.g. LAX"),
    departure_date: datetime = typer.Argument(..., formats=["%Y-%m-%d"], help="Departure date (YYYY-MM-DD)"),
    return_date: Optional[datetime] = typer.Option(None, formats=["%Y-%m-%d"], help="Return date (YYYY-MM-DD)"),
    passengers: int = typer.Option(1, "--passengers", "-p", help="Number of passengers (1-9)"),
    cabin_class: CabinClass = typer.Option(CabinClass.ECONOMY, "--cabin-class", "-c", help="Cabin class"),
    repeat: int = typer.Option(1, "--repeat", "-r", min=1, help="Run the same search several times"),
    limit: int = typer.Option(10, "--limit", "-n", min=1, help="Maximum flights to display"),
):
    """Search all providers and show the cheapest flights."""
    params = parse_params(origin, destination, departure_date, return_date, passengers, cabin_class)
    aggregator = build_aggregator()

    console.print(Panel.fit(
        f"[bold cyan]{params.origin} → {params.destination}[/bold cyan]  "
        f"{params.departure_date.isoformat()}"
        + (f" / {params.return_date.isoformat()}" if params.return_date else "")
        + f"  [dim]{params.passengers} pax, {params.cabin_class.value}[/dim]",
        box=box.DOUBLE,
    ))

    responses = asyncio.run(run_searches(aggregator, params, repeat))
    response = responses[-1]

    console.print()
    if response.flights:
        console.print(create_flights_table(response, limit))
    else:
        console.print("[yellow]⚠ No flights available from any provider[/yellow]")

    console.print()
    console.print(create_providers_table(response))
    console.print()
    console.print(create_cache_table(aggregator))


@app.command()
def stampede(
    requests: int = typer.Option(50, "--requests", "-n", min=1, help="Number of concurrent identical searches"),
    origin: str = typer.Option("JFK", help="Origin IATA code"),
    destination: str = typer.Option("LAX", help="Destination IATA code"),
):
    """Fire concurrent identical searches and show they share one fan-out."""
    params = parse_params(origin, destination, datetime.now(), None, 1, CabinClass.ECONOMY)
    aggregator = build_aggregator()

    async def fire() -> List[SearchResponseModel]:
        return await asyncio.gather(*(aggregator.search(params) for _ in range(requests)))

    console.print(f"[dim]Simulating {requests} concurrent searches for {params.origin} → {params.destination}...[/dim]")
    start_time = time.perf_counter()
    responses = asyncio.run(fire())
    total_time = time.perf_counter() - start_time

    request_ids = {response.request_id for response in responses}
    reused = len(aggregator.events.events_of(SearchEventType.DEDUP_REUSED))
    provider_calls = sum(provider.call_count for provider in aggregator.providers)

    table = Table(title="📊 Stampede Prevention Metrics", box=box.ROUNDED, show_lines=True)
    table.add_column("Metric", style="cyan bold")
    table.add_column("Value", style="white", justify="right")
    table.add_column("Details", style="dim")

    table.add_row("Total Requests", f"[white]{requests}[/white]", "Concurrent searches")
    table.add_row("Computations", f"[cyan bold]{len(request_ids)}[/cyan bold]", "🎯 Should be 1 for stampede prevention")
    table.add_row("Coalesced", f"[green]{reused}[/green]", "Requests that joined an in-flight search")
    table.add_row(
        "Provider Calls",
        f"[magenta]{provider_calls}[/magenta]",
        ", ".join(f"{p.name.value}={p.call_count}" for p in aggregator.providers),
    )
    table.add_row("Total Time", format_time(total_time), "Wall clock")

    console.print()
    console.print(table)


@app.command()
def serve(
    host: str = typer.Option("0.0.0.0", help="Bind address"),
    port: int = typer.Option(8000, help="Bind port"),
):
    """Run the HTTP API with uvicorn."""
    import uvicorn

    from .api import create_app

    aggregator = build_aggregator()
    uvicorn.run(create_app(aggregator), host=host, port=port)


if __name__ == "__main__":
    app()
