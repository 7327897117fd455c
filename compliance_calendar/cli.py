"""
Command-line interface for the SME compliance calendar.

Provides subcommands for listing obligations, matching a business
profile, generating the 12-month calendar, and building a full report.
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from datetime import date
from pathlib import Path
from typing import Optional

from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table
from rich.panel import Panel
from rich import box

from compliance_calendar.calendar_generator import CalendarGenerator, Priority
from compliance_calendar.calendar_utils import (
    calendar_summary,
    filter_by_category,
    filter_by_month,
)
from compliance_calendar.catalog import CatalogUnavailableError, RuleCatalog
from compliance_calendar.config import settings
from compliance_calendar.cost_estimator import CostEstimator
from compliance_calendar.matcher import ComplianceMatcher
from compliance_calendar.profile import (
    BusinessProfile,
    BusinessType,
    EmployeeBracket,
    TurnoverBracket,
)
from compliance_calendar.report_generator import ReportGenerator
from compliance_calendar.risk_assessor import RiskAssessor

console = Console()
logger = logging.getLogger(__name__)

_PRIORITY_STYLE = {
    Priority.HIGH: "bold red",
    Priority.MEDIUM: "yellow",
    Priority.LOW: "green",
}


def _configure_logging(verbose: bool) -> None:
    level = logging.DEBUG if verbose else settings.log_level.upper()
    logging.basicConfig(
        level=level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
    )


def _load_catalog() -> RuleCatalog:
    try:
        return RuleCatalog.load(settings.catalog_path)
    except CatalogUnavailableError as e:
        logger.error("%s", e)
        console.print(
            "[red]Cannot generate compliance information right now.[/red]"
        )
        sys.exit(1)


def _load_profile(args: argparse.Namespace) -> BusinessProfile:
    """Build a profile from --profile JSON or the individual flags."""
    if args.profile:
        path = Path(args.profile)
        if not path.exists():
            console.print(f"[red]File not found: {args.profile}[/red]")
            sys.exit(1)
        try:
            data = json.loads(path.read_text(encoding="utf-8"))
        except json.JSONDecodeError as e:
            console.print(f"[red]Invalid JSON in {args.profile}: {e}[/red]")
            sys.exit(1)
    else:
        missing = [
            flag
            for flag, value in (
                ("--type", args.type),
                ("--state", args.state),
                ("--turnover", args.turnover),
                ("--employees", args.employees),
            )
            if not value
        ]
        if missing:
            console.print(
                f"[red]Provide --profile, or {', '.join(missing)}[/red]"
            )
            sys.exit(1)
        data = {
            "business_type": args.type,
            "state": args.state,
            "industry": args.industry or "",
            "turnover": args.turnover,
            "employees": args.employees,
            "msme_registered": args.msme,
            "owes_payment_to_msme": args.owes_msme,
        }

    try:
        return BusinessProfile.from_dict(data)
    except ValueError as e:
        console.print(f"[red]Invalid business profile: {e}[/red]")
        sys.exit(1)


def _parse_start(value: Optional[str]) -> Optional[date]:
    if not value:
        return None
    try:
        return date.fromisoformat(value)
    except ValueError:
        console.print(f"[red]Invalid --start date: {value}[/red]")
        sys.exit(1)


# -----------------------------------------------------------------------
# Subcommand: obligations
# -----------------------------------------------------------------------


def cmd_obligations(args: argparse.Namespace) -> None:
    """List every obligation in the rule catalog."""
    catalog = _load_catalog()

    table = Table(title="Compliance Obligations", box=box.ROUNDED)
    table.add_column("ID", style="dim")
    table.add_column("Name", style="bold")
    table.add_column("Category")
    table.add_column("Frequency")
    table.add_column("Forms")
    table.add_column("Applies when")

    for rule in catalog.obligations():
        table.add_row(
            rule.id,
            rule.name,
            rule.category.value,
            rule.frequency,
            ", ".join(f.name for f in rule.forms),
            rule.applicability.condition,
        )
    console.print(table)


# -----------------------------------------------------------------------
# Subcommand: match
# -----------------------------------------------------------------------


def cmd_match(args: argparse.Namespace) -> None:
    """Show which obligations apply to a business profile."""
    profile = _load_profile(args)
    catalog = _load_catalog()
    matched = ComplianceMatcher().match(profile)

    table = Table(title="Applicable Compliances", box=box.ROUNDED)
    table.add_column("ID", style="dim")
    table.add_column("Name", style="bold")
    table.add_column("Category")

    for oid in matched:
        rule = catalog.get(oid)
        table.add_row(
            oid,
            rule.name if rule else oid,
            rule.category.value if rule else "-",
        )
    console.print(table)
    console.print(
        f"\n[bold]Turnover basis:[/bold] Rs {profile.turnover_value:,} | "
        f"[bold]Employee basis:[/bold] {profile.employee_count}"
    )


# -----------------------------------------------------------------------
# Subcommand: calendar
# -----------------------------------------------------------------------


def cmd_calendar(args: argparse.Namespace) -> None:
    """Generate the compliance calendar for a business profile."""
    profile = _load_profile(args)
    catalog = _load_catalog()
    matched = ComplianceMatcher().match(profile)
    entries = CalendarGenerator(catalog).generate(
        matched,
        reference_date=_parse_start(args.start),
        months=settings.calendar_months,
    )

    shown = filter_by_category(entries, args.category)
    if args.month:
        shown = filter_by_month(shown, args.month)

    table = Table(
        title="Compliance Calendar",
        box=box.ROUNDED,
        show_lines=False,
    )
    table.add_column("Due", style="bold")
    table.add_column("Compliance")
    table.add_column("Form")
    table.add_column("Category")
    table.add_column("Priority", justify="center")

    for e in shown:
        table.add_row(
            e.due_date.strftime("%d %b %Y"),
            e.obligation_name,
            e.form_name,
            e.category,
            e.priority.value,
            style=_PRIORITY_STYLE.get(e.priority, ""),
        )
    console.print(table)

    summary = calendar_summary(matched, entries)
    console.print(
        Panel(
            f"[bold]Compliances:[/bold] {summary['total_compliances']}\n"
            f"[bold]Calendar Entries:[/bold] {summary['total_calendar_entries']}\n"
            f"[bold]High/Medium Priority:[/bold] {summary['urgent_entries']}\n"
            f"[bold]Est. Annual Cost:[/bold] Rs {summary['estimated_annual_cost']:,}",
            title="Calendar Summary",
            border_style="green",
        )
    )

    if args.export_json:
        rg = ReportGenerator(args.output_dir or settings.output_dir)
        report = rg.calendar_report(profile, matched, entries)
        rg.to_json(report, args.export_json)
        console.print(f"[green]Calendar exported to {args.export_json}[/green]")


# -----------------------------------------------------------------------
# Subcommand: report
# -----------------------------------------------------------------------


def cmd_report(args: argparse.Namespace) -> None:
    """Generate a full compliance report: overview, costs and risk."""
    profile = _load_profile(args)
    catalog = _load_catalog()
    matched = ComplianceMatcher().match(profile)
    entries = CalendarGenerator(catalog).generate(
        matched, months=settings.calendar_months
    )
    costs = CostEstimator(catalog).breakdown(matched, profile)
    risk = RiskAssessor().assess(profile, entries, matched)

    rg = ReportGenerator(args.output_dir or settings.output_dir)
    report = rg.compliance_report(profile, matched, entries, costs, risk)
    console.print(rg.format_text(report))

    if args.export_json:
        rg.to_json(report, args.export_json)
        console.print(f"[green]Report exported to {args.export_json}[/green]")


# -----------------------------------------------------------------------
# Argument parser
# -----------------------------------------------------------------------


def _add_profile_arguments(p: argparse.ArgumentParser) -> None:
    p.add_argument("--profile", "-p", help="JSON file with a business profile")
    p.add_argument(
        "--type",
        choices=[t.value for t in BusinessType],
        help="Business type",
    )
    p.add_argument("--state", help="State or union territory")
    p.add_argument("--industry", help="Industry sector")
    p.add_argument(
        "--turnover",
        choices=[t.value for t in TurnoverBracket],
        help="Annual turnover bracket",
    )
    p.add_argument(
        "--employees",
        choices=[e.value for e in EmployeeBracket],
        help="Employee count bracket",
    )
    p.add_argument(
        "--msme", action="store_true", help="Business is MSME registered"
    )
    p.add_argument(
        "--owes-msme",
        action="store_true",
        help="Business has payments overdue to MSME suppliers",
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="compliance-calendar",
        description="SME Compliance Calendar - applicable obligations, 12-month deadline calendar, costs and risk",
    )
    parser.add_argument(
        "--verbose", "-v", action="store_true", help="Enable debug logging"
    )
    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # obligations
    obl_p = subparsers.add_parser(
        "obligations", help="List obligations in the rule catalog"
    )
    obl_p.set_defaults(func=cmd_obligations)

    # match
    match_p = subparsers.add_parser(
        "match", help="Find obligations applicable to a business"
    )
    _add_profile_arguments(match_p)
    match_p.set_defaults(func=cmd_match)

    # calendar
    cal_p = subparsers.add_parser(
        "calendar", help="Generate the compliance calendar"
    )
    _add_profile_arguments(cal_p)
    cal_p.add_argument("--start", help="Window start date (YYYY-MM-DD)")
    cal_p.add_argument("--month", help='Only show one month, e.g. "January 2025"')
    cal_p.add_argument(
        "--category",
        help="Only show one category (Tax, Labor, Statutory, Environmental)",
    )
    cal_p.add_argument("--export-json", help="Export calendar to JSON file")
    cal_p.add_argument("--output-dir", help="Output directory for exports")
    cal_p.set_defaults(func=cmd_calendar)

    # report
    report_p = subparsers.add_parser(
        "report", help="Generate full compliance report"
    )
    _add_profile_arguments(report_p)
    report_p.add_argument("--export-json", help="Export to JSON filename")
    report_p.add_argument("--output-dir", help="Output directory")
    report_p.set_defaults(func=cmd_report)

    return parser


def main(argv: Optional[list[str]] = None) -> None:
    parser = build_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        sys.exit(0)

    _configure_logging(args.verbose)
    args.func(args)
