#!/usr/bin/env python3
"""
Ride Analytics CLI.

Training load, weekly trends and FTP progression from a JSON export of
session summaries.

Usage:
    ride-analytics pmc sessions.json --days 14
    ride-analytics weekly sessions.json
    ride-analytics ftp sessions.json
    ride-analytics ramp sessions.json
    ride-analytics zones --ftp 250 --max-hr 190
"""

import argparse
import json
import sys
from datetime import date
from pathlib import Path
from typing import List, Optional

from pydantic import ValidationError as PydanticValidationError
from rich import box
from rich.console import Console
from rich.table import Table
from rich.text import Text

from .analysis.trends import RampClassification
from .logging_config import configure_logging
from .metrics.fitness import get_form_status
from .metrics.zones import HR_ZONE_NAMES, POWER_ZONE_NAMES, get_hr_zones, get_power_zones
from .models.sessions import SessionConfig, SessionRecord
from .services.analytics import AnalyticsService

console = Console()


class JsonSessionSource:
    """Session source backed by a JSON array of session summaries."""

    def __init__(self, path: Path):
        self.path = path

    def list_sessions(self) -> List[SessionRecord]:
        with self.path.open(encoding="utf-8") as f:
            raw = json.load(f)
        return [SessionRecord.model_validate(item) for item in raw]


def format_tsb_rich(tsb: float) -> Text:
    """Format TSB with rich colors."""
    colors = {
        "fresh": "green",
        "positive": "green",
        "neutral": "yellow",
        "fatigued": "yellow",
        "very_fatigued": "red",
    }
    status = get_form_status(tsb)
    return Text(f"{tsb:+.1f} ({status.replace('_', ' ')})", style=colors[status])


def get_ramp_color(classification: RampClassification) -> str:
    """Get rich color for ramp classification."""
    colors = {
        RampClassification.RECOVERY: "blue",
        RampClassification.MAINTENANCE: "white",
        RampClassification.MODERATE: "green",
        RampClassification.AGGRESSIVE: "yellow",
        RampClassification.EXCESSIVE: "red",
    }
    return colors.get(classification, "white")


def _optional(value: Optional[float], fmt: str = "{:.0f}") -> str:
    return "-" if value is None else fmt.format(value)


def cmd_pmc(args, service: AnalyticsService, today: Optional[date]):
    """Show the Performance Management Chart."""
    pmc = service.refresh(today=today).pmc
    if not pmc:
        console.print("[yellow]No sessions found.[/yellow]")
        return

    table = Table(title="Performance Management Chart", box=box.ROUNDED)
    table.add_column("Date", style="cyan")
    table.add_column("TSS", justify="right")
    table.add_column("CTL", justify="right")
    table.add_column("ATL", justify="right")
    table.add_column("TSB", justify="right")

    for day in pmc[-args.days:]:
        table.add_row(
            day.date,
            f"{day.tss:.0f}",
            f"{day.ctl:.1f}",
            f"{day.atl:.1f}",
            format_tsb_rich(day.tsb),
        )
    console.print(table)


def cmd_weekly(args, service: AnalyticsService, today: Optional[date]):
    """Show weekly training volume."""
    weeks = service.refresh(today=today).weekly
    if not weeks:
        console.print("[yellow]No sessions found.[/yellow]")
        return

    table = Table(title="Weekly Trends", box=box.ROUNDED)
    table.add_column("Week of", style="cyan")
    table.add_column("Rides", justify="right")
    table.add_column("Hours", justify="right")
    table.add_column("TSS", justify="right")
    table.add_column("Avg W", justify="right")
    table.add_column("Avg HR", justify="right")

    for week in weeks[-args.weeks:]:
        table.add_row(
            week.week_start,
            str(week.session_count),
            f"{week.total_duration_secs / 3600:.1f}",
            f"{week.total_tss:.0f}",
            _optional(week.avg_power),
            _optional(week.avg_hr),
        )
    console.print(table)


def cmd_ftp(args, service: AnalyticsService, today: Optional[date]):
    """Show FTP change points."""
    points = service.refresh(today=today).ftp_progression
    if not points:
        console.print("[yellow]No sessions with FTP recorded.[/yellow]")
        return

    table = Table(title="FTP Progression", box=box.ROUNDED)
    table.add_column("Date", style="cyan")
    table.add_column("FTP", justify="right")
    for point in points:
        table.add_row(point.date, f"{point.ftp} W")
    console.print(table)


def cmd_ramp(args, service: AnalyticsService, today: Optional[date]):
    """Show the trailing CTL ramp rate."""
    ramp = service.refresh(today=today).ramp_rate
    if ramp is None:
        console.print("[yellow]Need at least 8 days of history for a ramp rate.[/yellow]")
        return

    color = get_ramp_color(ramp.classification)
    console.print(
        f"Ramp rate: [bold]{ramp.current:+.1f}[/bold] CTL/week "
        f"([{color}]{ramp.classification.value}[/{color}])"
    )


def cmd_zones(args):
    """Show power and HR zones for a configuration."""
    config = SessionConfig(ftp=args.ftp, max_hr=args.max_hr)

    table = Table(title=f"Power Zones (FTP {config.ftp} W)", box=box.ROUNDED)
    table.add_column("Zone", style="cyan")
    table.add_column("Name")
    table.add_column("Watts", justify="right")
    for zone, bounds in get_power_zones(config).items():
        table.add_row(f"Z{zone}", POWER_ZONE_NAMES[zone], f"{bounds.lower}-{bounds.upper}")
    console.print(table)

    table = Table(title="Heart Rate Zones", box=box.ROUNDED)
    table.add_column("Zone", style="cyan")
    table.add_column("Name")
    table.add_column("bpm", justify="right")
    for zone, bounds in get_hr_zones(config).items():
        table.add_row(f"Z{zone}", HR_ZONE_NAMES[zone], f"{bounds.lower}-{bounds.upper}")
    console.print(table)


def main(argv: Optional[List[str]] = None) -> int:
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(
        description="Ride Analytics - training load and zone analytics",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  ride-analytics pmc sessions.json --days 14
  ride-analytics weekly sessions.json --weeks 8
  ride-analytics ftp sessions.json
  ride-analytics ramp sessions.json --today 2025-03-01
  ride-analytics zones --ftp 250
        """,
    )
    parser.add_argument("--log-level", default=None, help="Logging level (default from settings)")

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    def add_history_command(name: str, help_text: str) -> argparse.ArgumentParser:
        p = subparsers.add_parser(name, help=help_text)
        p.add_argument("sessions", type=Path, help="JSON file with session summaries")
        p.add_argument("--today", type=date.fromisoformat, help="Last day of the PMC (YYYY-MM-DD)")
        return p

    pmc_p = add_history_command("pmc", "Show CTL/ATL/TSB per day")
    pmc_p.add_argument("--days", "-d", type=int, default=14, help="Number of days to show")

    weekly_p = add_history_command("weekly", "Show weekly training volume")
    weekly_p.add_argument("--weeks", "-w", type=int, default=8, help="Number of weeks to show")

    add_history_command("ftp", "Show FTP progression")
    add_history_command("ramp", "Show CTL ramp rate")

    zones_p = subparsers.add_parser("zones", help="Show zone bounds")
    zones_p.add_argument("--ftp", type=int, default=200, help="FTP in watts")
    zones_p.add_argument("--max-hr", type=int, default=None, help="Maximum heart rate")

    args = parser.parse_args(argv)
    configure_logging(args.log_level)

    if args.command == "zones":
        cmd_zones(args)
        return 0

    commands = {
        "pmc": cmd_pmc,
        "weekly": cmd_weekly,
        "ftp": cmd_ftp,
        "ramp": cmd_ramp,
    }
    handler = commands.get(args.command)
    if handler is None:
        parser.print_help()
        return 1

    service = AnalyticsService(JsonSessionSource(args.sessions))
    try:
        handler(args, service, args.today)
    except (OSError, json.JSONDecodeError, PydanticValidationError) as e:
        console.print(f"[red]Could not read sessions from {args.sessions}: {e}[/red]")
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
