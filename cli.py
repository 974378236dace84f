"""Command line entry point: run the API or use it from a terminal.

``serve`` starts the FastAPI app under uvicorn. ``show`` fetches a month
(three concurrent requests) and prints the KPI cards, the spending-by-category
chart and both entry lists. ``add-income`` / ``add-expense`` post an entry and
print the refreshed month, like the web page does after each form submit.
"""
import asyncio
from datetime import date, datetime, timezone
from typing import Optional

import httpx
import typer
import uvicorn

from client import ApiError, MoneyApi, MonthCursor, MonthData
from client.view import render_month
from config import settings
from main import configure_logging

cli = typer.Typer(help="Money tracker API server and terminal client.")


def _cursor(year: Optional[int], month: Optional[int], offset: int) -> MonthCursor:
    today = MonthCursor.today()
    cursor = MonthCursor(year or today.year, month or today.month)
    return cursor.shifted(offset)


def _entry_date(on: Optional[datetime]) -> date:
    return on.date() if on else datetime.now(timezone.utc).date()


async def _show(data: MonthData) -> str:
    await data.load()
    if data.error:
        typer.echo(f"Error: {data.error}", err=True)
        raise typer.Exit(code=1)
    return render_month(data.cursor.label, data.summary, data.incomes, data.expenses)


def _run(coro_factory, base_url: Optional[str]):
    async def runner():
        async with MoneyApi(base_url=base_url) as api:
            return await coro_factory(api)

    try:
        return asyncio.run(runner())
    except (ApiError, httpx.HTTPError) as error:
        typer.echo(f"Error: {error}", err=True)
        raise typer.Exit(code=1) from error


@cli.command()
def serve(
    host: Optional[str] = typer.Option(None, help="Host interface to bind."),
    port: Optional[int] = typer.Option(None, help="Port to listen on."),
    reload: bool = typer.Option(False, help="Restart on code changes."),
) -> None:
    """Start the API using uvicorn."""

    configure_logging()
    effective_host = host or settings.HOST
    effective_port = port or settings.PORT
    typer.echo(f"Starting Money Tracker API on http://{effective_host}:{effective_port}")
    uvicorn.run("main:app", host=effective_host, port=effective_port, reload=reload)


@cli.command()
def show(
    year: Optional[int] = typer.Option(None, help="Year, defaults to the current UTC year."),
    month: Optional[int] = typer.Option(None, min=1, max=12, help="Month 1-12, defaults to the current UTC month."),
    offset: int = typer.Option(0, help="Months to move from the selection, e.g. -1 for the previous month."),
    base_url: Optional[str] = typer.Option(None, help="API base URL."),
) -> None:
    """Print the monthly summary and entries."""

    cursor = _cursor(year, month, offset)
    typer.echo(_run(lambda api: _show(MonthData(api=api, cursor=cursor)), base_url))


@cli.command("add-income")
def add_income(
    amount: float = typer.Argument(..., help="Positive amount."),
    source: str = typer.Argument(..., help="Where the money came from."),
    on: Optional[datetime] = typer.Option(None, formats=["%Y-%m-%d"], help="Date as YYYY-MM-DD, defaults to today (UTC)."),
    base_url: Optional[str] = typer.Option(None, help="API base URL."),
) -> None:
    """Record an income and print its month."""

    entry_date = _entry_date(on)

    async def add(api: MoneyApi) -> str:
        data = MonthData(api=api, cursor=MonthCursor(entry_date.year, entry_date.month))
        await data.add_income(amount, source, entry_date)
        return await _show(data)

    typer.echo(_run(add, base_url))


@cli.command("add-expense")
def add_expense(
    amount: float = typer.Argument(..., help="Positive amount."),
    category: str = typer.Argument(..., help="Spending category, e.g. Food."),
    description: str = typer.Argument(..., help="What it was for."),
    on: Optional[datetime] = typer.Option(None, formats=["%Y-%m-%d"], help="Date as YYYY-MM-DD, defaults to today (UTC)."),
    base_url: Optional[str] = typer.Option(None, help="API base URL."),
) -> None:
    """Record an expense and print its month."""

    entry_date = _entry_date(on)

    async def add(api: MoneyApi) -> str:
        data = MonthData(api=api, cursor=MonthCursor(entry_date.year, entry_date.month))
        await data.add_expense(amount, category, description, entry_date)
        return await _show(data)

    typer.echo(_run(add, base_url))


if __name__ == "__main__":
    cli()
