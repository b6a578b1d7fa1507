from __future__ import annotations

import asyncio
import json
from dataclasses import asdict
from pathlib import Path
from typing import Optional

import typer
from dotenv import find_dotenv, load_dotenv

load_dotenv(find_dotenv(usecwd=True))

from dealcheck.adapters.narrative_client import make_narrative_client  # noqa: E402
from dealcheck.domain.sdlt import sdlt_breakdown  # noqa: E402
from dealcheck.services.deal_analyzer import analyze_deal, defaults_from_config  # noqa: E402
from dealcheck.services.screening import screen_deals_csv  # noqa: E402
from dealcheck.services.validation import InvalidDealInput  # noqa: E402

app = typer.Typer(help="UK buy-to-let deal checks (SDLT, yield, cashflow).")


@app.command("sdlt")
def sdlt_cmd(
    price: float = typer.Argument(..., help="Purchase price in pounds"),
) -> None:
    """
    Show the company / additional-property SDLT working for a price.
    """
    b = sdlt_breakdown(price)
    for band in b.bands:
        upper = f"£{band.upper:,.0f}" if band.upper is not None else "above"
        typer.echo(f"£{band.lower:,.0f}–{upper} @ {band.rate * 100:.0f}%: £{band.tax:,.2f}")
    if b.flat_rule_tax is not None:
        typer.echo(f"Flat rule (17% of price): £{b.flat_rule_tax:,.2f}")
    typer.echo(f"SDLT: £{b.total:,.2f} ({b.effective_rate * 100:.2f}% effective)")


@app.command("analyse")
def analyse_cmd(
    price: float = typer.Option(..., "--price", help="Purchase price"),
    rent: float = typer.Option(..., "--rent", help="Monthly rent"),
    deposit: Optional[float] = typer.Option(None, "--deposit", help="Deposit percent (default 25)"),
    rate: Optional[float] = typer.Option(None, "--rate", help="Interest rate percent, interest-only (default 5.5)"),
    refurb: Optional[float] = typer.Option(None, "--refurb", help="Refurb cost"),
    sdlt: Optional[float] = typer.Option(None, "--sdlt", help="SDLT; estimated from the bands when omitted"),
    expenses: Optional[float] = typer.Option(None, "--expenses", help="Operating costs as percent of rent (default 15)"),
    narrative: bool = typer.Option(False, "--narrative/--no-narrative", help="Ask the narrative service for commentary"),
    as_json: bool = typer.Option(False, "--json", help="Print the full result as JSON"),
) -> None:
    """
    Evaluate a single deal.
    """
    payload = {
        "purchasePrice": price,
        "rent": rent,
        "depositPercent": deposit,
        "interestRate": rate,
        "refurb": refurb,
        "sdlt": sdlt,
        "expensePercent": expenses,
    }
    service = make_narrative_client() if narrative else None
    if narrative and service is None:
        typer.echo("Narrative service not configured (DEALCHECK_NARRATIVE_API_KEY); skipping.", err=True)

    try:
        result = asyncio.run(analyze_deal(payload, service))
    except InvalidDealInput as e:
        raise typer.BadParameter(str(e)) from e

    if as_json:
        typer.echo(json.dumps(asdict(result), indent=2))
        return

    sdlt_note = " (estimated)" if result.sdlt_estimated else ""
    typer.echo(f"Gross yield: {result.gross_yield_percent:.2f}%")
    typer.echo(
        f"Monthly interest: £{result.monthly_interest:,.0f} · "
        f"Other costs ({result.expense_percent:g}% of rent): £{result.other_monthly_costs:,.0f}"
    )
    typer.echo(f"Net monthly cashflow: £{result.net_monthly_cashflow:,.0f}")
    typer.echo(
        f"Total cash in: £{result.total_cash_in:,.0f} "
        f"(deposit £{result.deposit_amount:,.0f} + refurb £{result.refurb:,.0f} + SDLT £{result.sdlt:,.0f}{sdlt_note})"
    )
    typer.echo(f"Verdict [{result.tier}]: {result.summary}")
    if result.ai_summary:
        typer.echo("")
        typer.echo(result.ai_summary)


@app.command("screen")
def screen_cmd(
    input_csv: Path = typer.Argument(..., exists=True, dir_okay=False, help="CSV of candidate deals"),
    out: Path = typer.Option(Path("data/reports/screened_deals.csv"), "--out", help="Where to write evaluated rows"),
    auto_sdlt: bool = typer.Option(True, "--auto-sdlt/--no-auto-sdlt", help="Estimate blank SDLT from the bands"),
) -> None:
    """
    Evaluate every row of a CSV independently and write the metrics.
    """
    try:
        summary = screen_deals_csv(input_csv, out, defaults_from_config(), auto_sdlt=auto_sdlt)
    except ValueError as e:
        raise typer.BadParameter(str(e)) from e
    typer.echo(json.dumps(summary, indent=2))


if __name__ == "__main__":
    app()
