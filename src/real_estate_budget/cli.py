"""
Interactive Rich CLI for the Saudi Real-Estate Budget Planner.

6-step flow:
  1. Banner (data date + staleness warning)
  2. Household input prompts
  3. Budget panel + calculation steps
  4. Retirement and affordability panel
  5. Property recommendation panel
  6. Financing comparison table + optional plain-text export
"""

import logging
import sys
from datetime import date, datetime
from pathlib import Path

from pydantic import ValidationError
from rich.console import Console
from rich.logging import RichHandler
from rich.panel import Panel
from rich.prompt import Confirm, FloatPrompt, IntPrompt, Prompt
from rich.table import Table
from rich.text import Text

from real_estate_budget.calculator import affordability_band
from real_estate_budget.catalog import get_city, supported_cities
from real_estate_budget.data.cities import DATA_DATE, DIRECT_INSTALLMENT_RATE
from real_estate_budget.errors import BudgetPlannerError
from real_estate_budget.formatting import format_currency, format_percentage, format_ratio
from real_estate_budget.models import (
    BudgetReport,
    FinancingComparison,
    FinancingOption,
    HouseholdProfile,
    Ownership,
    PropertyType,
)
from real_estate_budget.planner import compare_financing_options, plan_budget

console = Console()
logger = logging.getLogger(__name__)

# Display labels live here; the engine only sees the enums
FINANCING_LABELS: dict[FinancingOption, str] = {
    FinancingOption.CASH: "Cash (نقدي)",
    FinancingOption.MORTGAGE: "Mortgage (تمويل عقاري)",
    FinancingOption.DIRECT_INSTALLMENT: "Direct installment (تقسيط مباشر)",
}

PROPERTY_LABELS: dict[PropertyType, str] = {
    PropertyType.STUDIO: "Studio (استوديو)",
    PropertyType.APARTMENT: "Apartment (شقة)",
    PropertyType.DUPLEX: "Duplex (دوبلكس)",
    PropertyType.VILLA: "Villa (فيلا)",
}

OWNERSHIP_LABELS: dict[Ownership, str] = {
    Ownership.BUY: "Buy (تملك)",
    Ownership.RENT: "Rent (إيجار)",
}

BAND_STYLES = {"high": "red", "moderate": "yellow", "comfortable": "green"}


def setup_logging(level: int = logging.WARNING) -> None:
    logging.basicConfig(
        level=level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=console, show_path=False)],
    )


# ── Step 1: Banner ────────────────────────────────────────────────────────────

def show_banner() -> None:
    data_date_obj = datetime.strptime(DATA_DATE, "%Y-%m-%d").date()
    age_days = (date.today() - data_date_obj).days

    title = Text("Saudi Real-Estate Budget Planner", style="bold cyan")
    subtitle = Text(
        f"Market data as of {DATA_DATE}  |  Cities: {', '.join(supported_cities())}",
        style="dim",
    )

    staleness = ""
    if age_days > 180:
        staleness = (
            f"\n[bold red]WARNING:[/bold red] Market data is {age_days} days old. "
            "Prices and inflation rates may have changed."
        )
    elif age_days > 90:
        staleness = (
            f"\n[yellow]Note:[/yellow] Market data is {age_days} days old. "
            "Consider verifying current prices."
        )

    body = f"[bold]{title}[/bold]\n{subtitle}{staleness}"
    console.print(Panel(body, expand=False, border_style="cyan"))
    console.print()


# ── Step 2: Household input ───────────────────────────────────────────────────

def prompt_profile() -> HouseholdProfile:
    console.print("[bold]Step 1: Household Details[/bold]\n")

    income = FloatPrompt.ask("  Monthly income (SAR)", default=15_000.0)
    obligations = FloatPrompt.ask("  Monthly obligations (SAR)", default=3_000.0)
    age = IntPrompt.ask("  Age", default=30)
    family_size = IntPrompt.ask("  Family size", default=4)
    rooms = IntPrompt.ask("  Required rooms", default=3)
    raise_pct = FloatPrompt.ask("  Expected annual salary increase (%)", default=3.0)

    cities = supported_cities()
    city = Prompt.ask("  City", choices=cities, default=cities[0])
    districts = [d.name for d in get_city(city).districts]
    console.print(f"  [dim]Districts: {', '.join(districts)}[/dim]")
    work_location = Prompt.ask("  Work location (district, optional)", default="")

    options = [o.value for o in FinancingOption]
    console.print(
        "\n  Financing: "
        + ", ".join(f"{o.value} = {FINANCING_LABELS[o]}" for o in FinancingOption)
    )
    financing = Prompt.ask("  Financing option", choices=options, default="mortgage")

    rate = 4.0
    if financing == FinancingOption.MORTGAGE.value:
        rate = FloatPrompt.ask("  Mortgage interest rate (%)", default=4.0)
    elif financing == FinancingOption.DIRECT_INSTALLMENT.value:
        console.print(
            f"  [dim]Direct installment uses a fixed "
            f"{format_percentage(DIRECT_INSTALLMENT_RATE)} rate.[/dim]"
        )

    preferred = Prompt.ask(
        "  Preferred property type (optional)",
        choices=["", *[t.value for t in PropertyType]],
        default="",
    )
    ownership = Prompt.ask(
        "  Ownership preference (optional)",
        choices=["", *[o.value for o in Ownership]],
        default="",
    )
    console.print()

    while True:
        try:
            return HouseholdProfile(
                monthly_income=income,
                monthly_obligations=obligations,
                age=age,
                family_size=family_size,
                required_rooms=rooms,
                expected_salary_increase=raise_pct,
                current_city=city,
                work_location=work_location,
                financing_option=financing,
                mortgage_interest_rate=rate,
                preferred_property_type=preferred or None,
                ownership_preference=ownership or None,
            )
        except ValidationError as e:
            console.print(f"[red]Invalid input: {e}[/red]")
            console.print("Please re-enter the household figures.")
            income = FloatPrompt.ask("  Monthly income (SAR)")
            obligations = FloatPrompt.ask("  Monthly obligations (SAR)")
            age = IntPrompt.ask("  Age")
            family_size = IntPrompt.ask("  Family size")
            rooms = IntPrompt.ask("  Required rooms")
            raise_pct = FloatPrompt.ask("  Expected annual salary increase (%)")
            if financing == FinancingOption.MORTGAGE.value:
                rate = FloatPrompt.ask("  Mortgage interest rate (%)", default=4.0)


def prompt_report() -> tuple[HouseholdProfile, BudgetReport]:
    """Prompt until the household can be planned; planner errors re-prompt."""
    while True:
        profile = prompt_profile()
        console.print("[dim]Computing budget...[/dim]")
        try:
            return profile, plan_budget(profile)
        except BudgetPlannerError as exc:
            logger.error("budget calculation failed: %s", exc)
            console.print(f"[red]{exc}[/red]")
            console.print("Please re-enter the household details.\n")


# ── Step 3: Budget ────────────────────────────────────────────────────────────

def show_budget(report: BudgetReport) -> None:
    console.print("[bold]Step 2: Maximum Budget[/bold]\n")
    budget = report.budget

    headline = (
        f"  Maximum budget:   [bold green]{format_currency(budget.max_budget)}[/bold green]\n"
        f"  Financing:        {FINANCING_LABELS[budget.financing_option]}"
    )
    if budget.monthly_payment > 0:
        headline += (
            f"\n  Monthly payment:  {format_currency(budget.monthly_payment)}"
            f" over {budget.loan_term_years} years at "
            f"{format_percentage(budget.interest_rate, 2)}"
        )
    console.print(Panel(headline, title="Budget", border_style="green"))

    table = Table(title="How this budget was calculated", border_style="blue")
    table.add_column("#", justify="right", style="dim")
    table.add_column("Step", min_width=24)
    table.add_column("Value", justify="right")
    table.add_column("Explanation")
    for i, step in enumerate(budget.calculation_steps, start=1):
        table.add_row(str(i), step.label, f"{step.value:,.2f}", step.explanation)
    console.print(table)
    console.print()


# ── Step 4: Retirement and affordability ──────────────────────────────────────

def show_financial_analysis(report: BudgetReport) -> None:
    console.print("[bold]Step 3: Financial Analysis[/bold]\n")
    budget = report.budget
    retirement = report.retirement
    band = affordability_band(budget.affordability_ratio)
    style = BAND_STYLES[band]

    text = (
        f"  Net monthly income:          {format_currency(report.net_income)}\n"
        f"  Debt-burden ratio:           [{style}]{format_ratio(budget.affordability_ratio)}"
        f" ({band})[/{style}]\n\n"
        f"  Years until retirement:      {retirement.years_until_retirement}\n"
        f"  Income at retirement:        {format_currency(retirement.pre_retirement_income)}\n"
        f"  Estimated pension:           {format_currency(retirement.post_retirement_income)}\n"
        f"  Income until retirement:     {format_currency(retirement.total_pre_retirement_income)}"
        f"  [dim](approximation)[/dim]\n\n"
        f"  [bold]{report.city.key}[/bold] property inflation: "
        f"{format_ratio(report.city.inflation_rate)} a year\n"
        f"  [dim]{report.city.description}[/dim]"
    )
    console.print(Panel(text, title="Retirement & Affordability", border_style="yellow"))
    console.print()


# ── Step 5: Recommendation ────────────────────────────────────────────────────

def show_recommendation(report: BudgetReport) -> None:
    console.print("[bold]Step 4: Property Recommendation[/bold]\n")
    rec = report.recommendation

    if not report.is_affordable:
        where = rec.recommended_district.name if rec.recommended_district else report.city.key
        console.print(Panel(
            f"Your budget ({format_currency(report.budget.max_budget)}) is below the "
            f"estimated {rec.property_type.value} price in {where} "
            f"({format_currency(rec.estimated_price)}).",
            title="[bold yellow]Over budget[/bold yellow]",
            border_style="yellow",
        ))

    district = rec.recommended_district
    district_line = (
        f"{district.name} ({district.name_ar})" if district else "[red]no affordable district[/red]"
    )
    lines = [
        f"  Recommendation:   [bold]{OWNERSHIP_LABELS[rec.ownership_recommendation]}[/bold]"
        f" - {PROPERTY_LABELS[rec.property_type]}",
        f"  Size:             {rec.property_size} m²  "
        f"({report.rooms.bedrooms} bedrooms, {report.rooms.bathrooms} bathrooms)",
        f"  District:         {district_line}",
        f"  Estimated price:  {format_currency(rec.estimated_price)}",
        f"  Estimated rent:   {format_currency(rec.monthly_rent_estimate)}/month",
        f"  City average:     {format_currency(report.city.average_rent)}/month rent, "
        f"{format_currency(report.city.price_per_sqm)}/m²",
        "",
        "  [bold]Why[/bold]",
        *[f"   • {r}" for r in rec.reasons],
        *[f"   • {r}" for r in rec.property_reasons],
    ]
    if report.notes:
        lines += ["", "  [bold]Notes[/bold]", *[f"   [yellow]![/yellow] {n}" for n in report.notes]]

    border = "dark_cyan" if rec.ownership_recommendation == Ownership.RENT else "magenta"
    console.print(Panel("\n".join(lines), title="Recommendation", border_style=border))
    console.print()


# ── Step 6: Financing comparison + export ─────────────────────────────────────

def show_financing_comparison(ranked: list[FinancingComparison], chosen: FinancingOption) -> None:
    console.print("[bold]Step 5: Financing Comparison[/bold]\n")

    table = Table(
        title="All Financing Options - Ranked by Maximum Budget",
        border_style="blue",
        show_lines=True,
    )
    table.add_column("Rank", justify="center", style="bold")
    table.add_column("Financing", min_width=22)
    table.add_column("Max Budget", justify="right")
    table.add_column("Monthly Payment", justify="right")
    table.add_column("Debt Burden", justify="right")
    table.add_column("Term (years)", justify="right")

    for r in ranked:
        style = "bold cyan" if r.financing_option == chosen else ""
        table.add_row(
            f"#{r.rank}",
            FINANCING_LABELS[r.financing_option],
            format_currency(r.max_budget),
            format_currency(r.monthly_payment) if r.monthly_payment else "—",
            format_ratio(r.affordability_ratio),
            str(r.result.loan_term_years) if r.result.loan_term_years else "—",
            style=style,
        )

    console.print(table)
    console.print("  [dim]cyan = your selected financing option[/dim]")
    console.print()


def generate_report_text(report: BudgetReport, ranked: list[FinancingComparison]) -> str:
    """Build the plain-text export. Returns the full report as a single string."""
    profile = report.profile
    budget = report.budget
    rec = report.recommendation
    district = rec.recommended_district

    lines = [
        "Saudi Real-Estate Budget Report",
        f"Generated: {date.today().isoformat()}",
        f"Market data: {DATA_DATE}",
        "=" * 60,
        "",
        "HOUSEHOLD",
        f"  Monthly income:      {format_currency(profile.monthly_income)}",
        f"  Obligations:         {format_currency(profile.monthly_obligations)}",
        f"  Net income:          {format_currency(report.net_income)}",
        f"  Age:                 {profile.age}",
        f"  Family size:         {profile.family_size}",
        f"  Required rooms:      {profile.required_rooms}",
        f"  City:                {report.city.key}",
        f"  Financing:           {budget.financing_option.value}",
        "",
        "BUDGET",
        f"  Maximum budget:      {format_currency(budget.max_budget)}",
        f"  Monthly payment:     {format_currency(budget.monthly_payment)}",
        f"  Debt-burden ratio:   {format_ratio(budget.affordability_ratio)}",
        f"  Loan amount:         {format_currency(budget.loan_amount)}",
        f"  Loan term:           {budget.loan_term_years} years",
        "",
        "CALCULATION STEPS",
    ]
    for i, step in enumerate(budget.calculation_steps, start=1):
        lines.append(f"  {i}. {step.label}: {step.value:,.2f} ({step.explanation})")

    lines += [
        "",
        "RETIREMENT",
        f"  Years until retirement:  {report.retirement.years_until_retirement}",
        f"  Income at retirement:    {format_currency(report.retirement.pre_retirement_income)}",
        f"  Estimated pension:       {format_currency(report.retirement.post_retirement_income)}",
        "",
        "RECOMMENDATION",
        f"  Ownership:           {rec.ownership_recommendation.value}",
        f"  Property type:       {rec.property_type.value}",
        f"  Size:                {rec.property_size} m²",
        f"  District:            {district.name if district else 'none affordable'}",
        f"  Estimated price:     {format_currency(rec.estimated_price)}",
        f"  Estimated rent:      {format_currency(rec.monthly_rent_estimate)}/month",
        f"  City average rent:   {format_currency(report.city.average_rent)}/month",
        f"  City price per m²:   {format_currency(report.city.price_per_sqm)}",
        f"  Affordable:          {'yes' if report.is_affordable else 'no'}",
        "",
        "REASONS",
        *[f"  - {r}" for r in rec.reasons + rec.property_reasons],
    ]
    if report.notes:
        lines += ["", "NOTES", *[f"  - {n}" for n in report.notes]]

    lines += ["", "FINANCING COMPARISON"]
    for r in ranked:
        lines.append(
            f"  #{r.rank} {r.financing_option.value:<20} "
            f"Budget: {format_currency(r.max_budget)}  "
            f"Payment: {format_currency(r.monthly_payment)}"
        )

    return "\n".join(lines)


def export_report(report: BudgetReport, ranked: list[FinancingComparison]) -> None:
    path = Path(Prompt.ask("  Output file path", default="budget_report.txt"))
    try:
        path.write_text(generate_report_text(report, ranked), encoding="utf-8")
    except OSError as exc:
        console.print(f"  [red]Export failed: {exc}[/red]")
        return
    console.print(f"  [green]Report saved to {path.resolve()}[/green]")


# ── Main entry point ──────────────────────────────────────────────────────────

def main() -> None:
    setup_logging()
    try:
        show_banner()
        profile, report = prompt_report()

        show_budget(report)
        show_financial_analysis(report)
        show_recommendation(report)

        ranked = compare_financing_options(profile)
        show_financing_comparison(ranked, profile.financing_option)

        if Confirm.ask("  Export plain-text report?", default=False):
            export_report(report, ranked)

        console.print("\n[bold cyan]Done.[/bold cyan]")

    except KeyboardInterrupt:
        console.print("\n[yellow]Interrupted.[/yellow]")
        sys.exit(0)


if __name__ == "__main__":
    main()
