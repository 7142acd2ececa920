"""CLI for the loan analysis: prints a terminal report.

Usage:
    python -m mortgage_analyzer.cli 300000 --down 60000 --rate 6 --amortization 30
    python -m mortgage_analyzer.cli 300000 --down 60000 --rate 6 --frequency accelerated-biweekly --extra 200 --opp-cost
    python -m mortgage_analyzer.cli 300000 --down 60000 --rate 6 --api-url http://localhost:8000
"""

import argparse
import asyncio
import logging
import sys
from datetime import date
from decimal import Decimal

import httpx
from pydantic import ValidationError

from mortgage_analyzer.api.schemas import AnalysisResponse, LoanRequest, validation_message
from mortgage_analyzer.config import settings
from mortgage_analyzer.engine.analysis import run_analysis
from mortgage_analyzer.models.loan import CompoundingMode, PaymentFrequency


# ── Helpers ──────────────────────────────────────────────────────────────────

def _dollar(v) -> str:
    return f"${float(v):,.2f}"


def _header(title: str) -> None:
    print(f"\n{'=' * 64}")
    print(f"  {title}")
    print(f"{'=' * 64}")


# ── Report sections ──────────────────────────────────────────────────────────

def print_loan_summary(data: dict) -> None:
    actual = data["actual"]
    fp = data["first_payment"]
    _header("Loan Summary")
    print(f"  Mortgage Amount:      {_dollar(data['mortgage_amount'])}")
    print(f"  Periodic P & I:       {_dollar(actual['periodic_pi'])} ({actual['periods_per_year']}/yr)")
    print(f"  First Payment Total:  {_dollar(fp['total'])}")
    if float(fp["pmi"]) > 0:
        print(f"  PMI (first period):   {_dollar(fp['pmi'])}")
    print(f"  Paid Off In:          {data['paid_off_in']}")
    print(f"  Balance at Term:      {_dollar(data['balance_at_term'])}")
    print(f"  Total Interest:       {_dollar(actual['total_interest'])}")
    if float(actual["total_escrow"]) > 0:
        print(f"  Total Escrow:         {_dollar(actual['total_escrow'])}")
    if not actual["paid_off"]:
        print("  WARNING: loan is not paid off within the schedule horizon")


def print_strategy_comparison(data: dict) -> None:
    if not data["has_strategy"]:
        return
    base = data["baseline"]
    actual = data["actual"]
    _header("Strategy vs Standard Monthly")
    print(f"  {'':<22} {'Std Monthly':>14}  {'Actual':>14}")
    print(
        f"  {'Years to Payoff':<22} {float(data['baseline_years_to_payoff']):>14.1f}  "
        f"{float(data['actual_years_to_payoff']):>14.1f}"
    )
    print(f"  {'Total Interest':<22} {_dollar(base['total_interest']):>14}  {_dollar(actual['total_interest']):>14}")
    print(f"  {'Total Extra':<22} {_dollar(base['total_extra']):>14}  {_dollar(actual['total_extra']):>14}")
    print()
    print(f"  Interest & Escrow Saved: {_dollar(data['interest_and_escrow_saved'])}")


def print_yearly_table(data: dict) -> None:
    yearly = data.get("yearly", [])
    if not yearly:
        return
    _header("Annual Cash Flow Split")
    print(f"  {'Year':>5}  {'Principal':>12}  {'Interest':>12}  {'Extra':>10}  {'Escrow':>10}  {'Balance':>13}")
    print(f"  {'-' * 5}  {'-' * 12}  {'-' * 12}  {'-' * 10}  {'-' * 10}  {'-' * 13}")
    for y in yearly:
        print(
            f"  {y['year']:>5}  {_dollar(y['principal']):>12}  {_dollar(y['interest']):>12}  "
            f"{_dollar(y['extra']):>10}  {_dollar(y['escrow']):>10}  {_dollar(y['ending_balance']):>13}"
        )


def print_projection(data: dict) -> None:
    proj = data.get("projection")
    if not proj:
        return
    _header("Pay Debt vs Invest")
    print(f"  Horizon (year):       {float(proj['horizon']):.2f}")
    for path in (proj["payoff_first"], proj["invest_extra"]):
        final = path["net_worth"][-1] if path["net_worth"] else 0
        print(f"  {path['name'] + ':':<22}{_dollar(final)}")


def print_report(data: dict) -> None:
    print_loan_summary(data)
    print_strategy_comparison(data)
    print_yearly_table(data)
    print_projection(data)
    print()


# ── Main ─────────────────────────────────────────────────────────────────────

def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Mortgage amortization and pay-debt-vs-invest report")
    parser.add_argument("home_price", type=Decimal, help="Home price")
    parser.add_argument("--down", type=Decimal, default=Decimal("0"), help="Down payment (default: 0)")
    parser.add_argument("--rate", type=Decimal, default=Decimal("0"), help="Annual interest rate in %% (default: 0)")
    parser.add_argument(
        "--amortization", type=Decimal, default=Decimal(settings.default_amortization_years),
        help=f"Amortization in years (default: {settings.default_amortization_years})",
    )
    parser.add_argument(
        "--term", type=Decimal, default=Decimal(settings.default_term_years),
        help=f"Term in years (default: {settings.default_term_years})",
    )
    parser.add_argument(
        "--compounding", choices=[m.value for m in CompoundingMode], default=CompoundingMode.MONTHLY.value,
    )
    parser.add_argument(
        "--frequency", choices=[f.value for f in PaymentFrequency], default=PaymentFrequency.MONTHLY.value,
    )
    parser.add_argument("--extra", type=Decimal, default=Decimal("0"), help="Extra principal per period")
    parser.add_argument("--start", type=date.fromisoformat, help="First payment date (YYYY-MM-DD)")
    parser.add_argument("--tax", type=Decimal, help="Property tax, %% of price per year (enables PITI)")
    parser.add_argument("--insurance", type=Decimal, help="Home insurance per year (enables PITI)")
    parser.add_argument("--hoa", type=Decimal, help="HOA fees per month (enables PITI)")
    parser.add_argument("--pmi", type=Decimal, help="PMI rate, %% of loan per year (enables PITI)")
    parser.add_argument("--opp-cost", action="store_true", help="Project paying debt faster vs investing")
    parser.add_argument(
        "--invest-rate", type=Decimal, default=Decimal(str(settings.default_invest_rate_pct)),
        help=f"Annual investment return in %% (default: {settings.default_invest_rate_pct})",
    )
    parser.add_argument(
        "--api-url", nargs="?", const=settings.api_url,
        help=f"Run the analysis on an API server instead of locally (default server: {settings.api_url})",
    )
    return parser


def request_from_args(args: argparse.Namespace) -> LoanRequest:
    escrow = {"tax_rate_pct": args.tax, "insurance_annual": args.insurance,
              "hoa_monthly": args.hoa, "pmi_rate_pct": args.pmi}
    use_escrow = any(v is not None for v in escrow.values())
    return LoanRequest(
        home_price=args.home_price,
        down_payment=args.down,
        annual_rate_pct=args.rate,
        amortization_years=args.amortization,
        term_years=args.term,
        compounding=CompoundingMode(args.compounding),
        frequency=PaymentFrequency(args.frequency),
        use_escrow=use_escrow,
        use_opportunity_cost=args.opp_cost,
        invest_rate_pct=args.invest_rate,
        extra_payment=args.extra,
        start_date=args.start,
        **{k: v for k, v in escrow.items() if v is not None},
    )


async def fetch_analysis(api_url: str, req: LoanRequest) -> dict:
    url = f"{api_url}/api/v1/analyze"
    async with httpx.AsyncClient(timeout=30) as client:
        try:
            resp = await client.post(url, json=req.model_dump(mode="json"))
        except httpx.ConnectError:
            print(f"Error: Could not connect to API at {api_url}", file=sys.stderr)
            print(
                "Is the server running? Start with: uvicorn mortgage_analyzer.api.app:app --reload",
                file=sys.stderr,
            )
            sys.exit(1)
        except httpx.TimeoutException:
            print("Error: Request timed out", file=sys.stderr)
            sys.exit(1)

        if resp.status_code != 200:
            print(f"Error: API returned {resp.status_code}", file=sys.stderr)
            try:
                detail = resp.json().get("detail", resp.text)
            except ValueError:
                detail = resp.text
            print(f"  {detail}", file=sys.stderr)
            sys.exit(1)

        return resp.json()


async def main(argv: list[str] | None = None) -> None:
    logging.basicConfig(level=settings.log_level)
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.home_price <= 0:
        parser.error("Home Price must be a positive number.")
    if args.down > args.home_price:
        parser.error("Down payment cannot exceed home price.")

    try:
        req = request_from_args(args)
    except ValidationError as e:
        parser.error(validation_message(e))

    if args.api_url:
        data = await fetch_analysis(args.api_url, req)
    else:
        result = run_analysis(req.to_inputs())
        data = AnalysisResponse.from_result(result).model_dump(mode="json")

    print_report(data)


def run() -> None:
    asyncio.run(main())


if __name__ == "__main__":
    run()
