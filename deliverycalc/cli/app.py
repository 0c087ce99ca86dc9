"""
Main CLI application using Typer.
"""

import logging
from pathlib import Path
from typing import Annotated, Optional

import pendulum
import typer
from pendulum import DateTime
from rich.console import Console
from rich.table import Table

from ..adapters.holiday_store import YamlHolidayStore
from ..config import AppConfig, get_default_config_path
from ..domain.exceptions import DeliveryCalculatorError
from ..services.delivery_calculator import DeliveryCalculator

app = typer.Typer(
    name="deliverycalc",
    help="Calculate delivery times and working durations on a business calendar",
    add_completion=False
)

console = Console()

ConfigOption = Annotated[
    Optional[Path],
    typer.Option("--config", "-c", help="Path to config file. Defaults to ./config.yaml")
]

OUTPUT_FORMAT = "ddd DD.MM.YYYY HH:mm"


@app.callback()
def main(
    verbose: Annotated[bool, typer.Option("--verbose", "-v", help="Enable debug logging.")] = False,
):
    """
    Delivery calculator - business hours, weekends and holidays.
    """
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s"
    )


def _load_config(config_file: Optional[Path]) -> AppConfig:
    """
    Load the configuration file.

    An explicitly given file must exist; without ``--config`` the defaults
    are used when no config.yaml can be found.
    """
    if config_file is not None:
        return AppConfig.load_from_yaml(config_file)

    config_path = get_default_config_path()
    if not config_path.exists():
        console.print("[yellow]⚠ Keine config.yaml gefunden, verwende Standardwerte.[/yellow]")
        return AppConfig()

    return AppConfig.load_from_yaml(config_path)


def _parse_timestamp(value: str, tz: str) -> DateTime:
    """Parse a timestamp argument in the configured timezone."""
    try:
        parsed = pendulum.parse(value, tz=tz)
    except ValueError as e:
        console.print(f"[red]Fehler beim Parsen des Zeitpunkts '{value}': {e}[/red]")
        raise typer.Exit(1)

    if not isinstance(parsed, DateTime):
        console.print(f"[red]'{value}' ist kein Zeitpunkt (erwartet z. B. 2024-11-25 10:00).[/red]")
        raise typer.Exit(1)

    return parsed


@app.command()
def deliver(
    order_time: Annotated[str, typer.Argument(help="Order timestamp, e.g. '2024-11-25 10:00'")],
    hours: Annotated[float, typer.Argument(help="Processing time in working hours")],
    config_file: ConfigOption = None,
):
    """
    Calculate when an order is ready after a number of working hours.

    Examples:

        deliverycalc deliver "2024-11-25 16:00" 2

        deliverycalc deliver "2024-11-22 16:00" 12.5 --config config.yaml
    """
    try:
        config = _load_config(config_file)
        order = _parse_timestamp(order_time, config.timezone)

        calculator = DeliveryCalculator.from_config(config)
        delivery = calculator.get_delivery_time(order, hours)

        console.print(f"[bold]Bestellung:[/bold]  {order.format(OUTPUT_FORMAT)}")
        console.print(f"[bold]Dauer:[/bold]       {hours:g} Arbeitsstunden")
        console.print(f"[bold green]✓ Lieferung:[/bold green] {delivery.format(OUTPUT_FORMAT)}")

    except (FileNotFoundError, DeliveryCalculatorError, ValueError) as e:
        console.print(f"[bold red]Fehler:[/bold red] {e}")
        raise typer.Exit(1)


@app.command()
def duration(
    start: Annotated[str, typer.Argument(help="Start timestamp")],
    end: Annotated[str, typer.Argument(help="End timestamp")],
    days: Annotated[bool, typer.Option("--days", help="Show the result in working days instead of hours.")] = False,
    config_file: ConfigOption = None,
):
    """
    Calculate the working time between two timestamps.

    Examples:

        deliverycalc duration "2024-11-22 15:00" "2024-11-25 11:00"

        deliverycalc duration "2024-11-01 09:00" "2024-11-30 17:00" --days
    """
    try:
        config = _load_config(config_file)
        start_time = _parse_timestamp(start, config.timezone)
        end_time = _parse_timestamp(end, config.timezone)

        calculator = DeliveryCalculator.from_config(config)

        if days:
            result = calculator.get_duration_in_working_days(start_time, end_time)
            console.print(f"[bold green]✓ {result:.2f} Arbeitstage[/bold green]")
        else:
            result = calculator.get_duration_in_working_hours(start_time, end_time)
            console.print(f"[bold green]✓ {result:.2f} Arbeitsstunden[/bold green]")

    except (FileNotFoundError, DeliveryCalculatorError, ValueError) as e:
        console.print(f"[bold red]Fehler:[/bold red] {e}")
        raise typer.Exit(1)


@app.command()
def check(
    timestamp: Annotated[str, typer.Argument(help="Timestamp to check")],
    config_file: ConfigOption = None,
):
    """
    Check whether a timestamp lies inside business time.
    """
    try:
        config = _load_config(config_file)
        moment = _parse_timestamp(timestamp, config.timezone)

        calculator = DeliveryCalculator.from_config(config)

        if calculator.is_business_time(moment):
            console.print(f"[green]✓ {moment.format(OUTPUT_FORMAT)} ist Geschäftszeit.[/green]")
        else:
            console.print(f"[yellow]✗ {moment.format(OUTPUT_FORMAT)} ist keine Geschäftszeit.[/yellow]")

    except (FileNotFoundError, DeliveryCalculatorError, ValueError) as e:
        console.print(f"[bold red]Fehler:[/bold red] {e}")
        raise typer.Exit(1)


@app.command()
def holidays(
    config_file: ConfigOption = None,
):
    """
    List all configured holiday periods.
    """
    try:
        config = _load_config(config_file)

        if config.holidays_file is not None:
            periods = YamlHolidayStore(config.holidays_file).fetch_periods()
        else:
            periods = config.get_holiday_periods()

        if not periods:
            console.print("[yellow]Keine Feiertage konfiguriert.[/yellow]")
            return

        table = Table(
            title="Konfigurierte Feiertage",
            show_header=True,
            header_style="bold cyan"
        )
        table.add_column("Name", style="bold yellow")
        table.add_column("Von")
        table.add_column("Bis")
        table.add_column("Tage", justify="right", style="dim")

        for period in sorted(periods, key=lambda p: p.start_date):
            table.add_row(
                period.name or "-",
                period.start_date.strftime("%d.%m.%Y"),
                period.end_date.strftime("%d.%m.%Y"),
                str(period.day_count())
            )

        console.print()
        console.print(table)
        console.print()

    except (FileNotFoundError, DeliveryCalculatorError, ValueError) as e:
        console.print(f"[bold red]Fehler:[/bold red] {e}")
        raise typer.Exit(1)


@app.command()
def version():
    """
    Show version information.
    """
    from .. import __version__
    console.print(f"\n[bold cyan]deliverycalc[/bold cyan] version [bold]{__version__}[/bold]\n")


if __name__ == "__main__":
    app()
