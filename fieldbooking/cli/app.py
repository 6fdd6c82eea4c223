"""
Main CLI application using Typer.
"""

import asyncio
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Annotated, List, Optional
from uuid import UUID

import pendulum
import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from ..adapters.json_store import JsonFileStore, parse_time
from ..config import AppConfig, get_default_config_path
from ..domain.exceptions import FieldBookingError
from ..domain.models import DayOfWeek
from ..domain.overlap import AvailabilityOverlapChecker
from ..services import (
    AvailabilityDeleteService,
    AvailabilityGetService,
    AvailabilityPostService,
    AvailabilityPutService,
    DefaultMapper,
    FieldGetService,
    FieldPostService,
    FieldPutService,
    FieldTypeGetService,
)
from ..services.schemas import (
    AvailabilityRequest,
    AvailabilityResponse,
    FieldRequest,
    FieldResponse,
)
from ..services.validators import (
    AvailabilityRequestValidator,
    FieldRequestValidator,
    GetFieldsRequestValidator,
)

app = typer.Typer(
    name="fieldbooking",
    help="Manage sports fields and their weekly availability",
    add_completion=False
)

console = Console()

ConfigOption = Annotated[
    Optional[Path],
    typer.Option("--config", "-c", help="Path to config file. Defaults to ./config.yaml"),
]


@dataclass
class Services:
    config: AppConfig
    store: JsonFileStore
    field_get: FieldGetService
    field_post: FieldPostService
    field_put: FieldPutService
    field_types: FieldTypeGetService
    availability_get: AvailabilityGetService


def build_services(config: AppConfig, data_file: Path) -> Services:
    """Wire the services against a JSON file store."""
    store = JsonFileStore(data_file)
    mapper = DefaultMapper()
    availability_validator = AvailabilityRequestValidator()
    field_validator = FieldRequestValidator(field_type_query=store)

    availability_get = AvailabilityGetService(store, mapper)
    field_put = FieldPutService(
        command=store,
        query=store,
        field_type_query=store,
        availability_post=AvailabilityPostService(mapper, store, availability_validator),
        availability_get=availability_get,
        availability_put=AvailabilityPutService(mapper, store, store, availability_validator),
        availability_delete=AvailabilityDeleteService(store, availability_get),
        validator=field_validator,
        mapper=mapper,
        availability_validator=availability_validator,
    )

    return Services(
        config=config,
        store=store,
        field_get=FieldGetService(
            store,
            GetFieldsRequestValidator(max_page_size=config.defaults.max_page_size),
            mapper,
        ),
        field_post=FieldPostService(store, store, store, field_validator, mapper),
        field_put=field_put,
        field_types=FieldTypeGetService(store, mapper),
        availability_get=availability_get,
    )


def _load(config_file: Optional[Path]) -> Services:
    config_path = config_file or get_default_config_path()
    try:
        config = AppConfig.load_from_yaml(config_path)
    except ValueError as exc:
        _fail(f"Invalid config {config_path}: {exc}")

    logging.basicConfig(
        level=config.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    return build_services(config, config.resolve_data_file(config_path.parent))


def _fail(error: object) -> None:
    console.print(f"[bold red]Error:[/bold red] {escape(str(error))}")
    raise typer.Exit(1)


def _availability_request(day: str, open_hour: str, close_hour: str) -> AvailabilityRequest:
    try:
        return AvailabilityRequest(
            day=day,
            open_hour=parse_time(open_hour),
            close_hour=parse_time(close_hour),
        )
    except ValueError as exc:
        _fail(exc)


def _print_field(field: FieldResponse) -> None:
    field_type = field.field_type.description if field.field_type else "-"
    console.print(f"\n[bold cyan]{field.name}[/bold cyan] ({field.size}, {field_type})")
    console.print(f"[dim]{field.id}[/dim]\n")

    _print_windows(field.availabilities)


def _print_windows(availabilities: List[AvailabilityResponse]) -> None:
    if not availabilities:
        console.print("[yellow]No availability configured.[/yellow]\n")
        return

    table = Table(show_header=True, header_style="bold cyan")
    table.add_column("Id", style="dim")
    table.add_column("Day", style="bold yellow")
    table.add_column("Open")
    table.add_column("Close")
    for availability in availabilities:
        table.add_row(
            str(availability.id),
            availability.day,
            f"{availability.open_hour:%H:%M}",
            f"{availability.close_hour:%H:%M}",
        )
    console.print(table)
    console.print()


@app.command()
def fields(
    config_file: ConfigOption = None,
    name: Annotated[Optional[str], typer.Option("--name", help="Filter by part of the name")] = None,
    size: Annotated[Optional[str], typer.Option("--size", help="Filter by field size")] = None,
    field_type: Annotated[Optional[int], typer.Option("--type", help="Filter by field type id")] = None,
    day: Annotated[Optional[str], typer.Option("--day", help="Only fields open on this day")] = None,
    offset: Annotated[int, typer.Option("--offset", help="Number of fields to skip")] = 0,
    limit: Annotated[Optional[int], typer.Option("--limit", help="Page size")] = None,
):
    """
    List fields, optionally filtered.
    """
    try:
        services = _load(config_file)
        day_number = int(DayOfWeek.parse(day)) if day else None
        page_size = limit if limit is not None else services.config.defaults.page_size

        results = asyncio.run(
            services.field_get.get_all_fields(name, size, field_type, day_number, offset, page_size)
        )
    except (FieldBookingError, ValueError) as exc:
        _fail(exc)

    if not results:
        console.print("[yellow]No fields found.[/yellow]")
        return

    table = Table(title="Fields", show_header=True, header_style="bold cyan")
    table.add_column("Name", style="bold yellow")
    table.add_column("Size")
    table.add_column("Type")
    table.add_column("Windows", justify="right")
    table.add_column("Id", style="dim")
    for result in results:
        table.add_row(
            result.name,
            result.size,
            result.field_type.description if result.field_type else "-",
            str(len(result.availabilities)),
            str(result.id),
        )

    console.print()
    console.print(table)
    console.print()


@app.command()
def field(
    field_id: Annotated[UUID, typer.Argument(help="Field id")],
    config_file: ConfigOption = None,
):
    """
    Show a field and its weekly schedule.
    """
    try:
        services = _load(config_file)
        result = asyncio.run(services.field_get.get_field_by_id(field_id))
    except FieldBookingError as exc:
        _fail(exc)

    _print_field(result)


@app.command()
def schedule(
    field_id: Annotated[UUID, typer.Argument(help="Field id")],
    config_file: ConfigOption = None,
):
    """
    List a field's availability windows, ordered by day and opening time.
    """
    try:
        services = _load(config_file)
        name = asyncio.run(services.field_get.get_field_by_id(field_id)).name
        results = asyncio.run(services.availability_get.get_field_availabilities(field_id))
    except FieldBookingError as exc:
        _fail(exc)

    console.print(f"\n[bold cyan]{escape(name)}[/bold cyan] weekly schedule\n")
    _print_windows(results)


@app.command()
def field_types(config_file: ConfigOption = None):
    """
    List all field types.
    """
    try:
        services = _load(config_file)
        results = asyncio.run(services.field_types.get_all())
    except FieldBookingError as exc:
        _fail(exc)

    table = Table(title="Field types", show_header=True, header_style="bold cyan")
    table.add_column("Id", style="dim")
    table.add_column("Description", style="bold yellow")
    for result in results:
        table.add_row(str(result.id), result.description)

    console.print()
    console.print(table)
    console.print()


@app.command()
def create_field(
    name: Annotated[str, typer.Argument(help="Field name")],
    size: Annotated[str, typer.Argument(help="Field size, e.g. Small")],
    field_type: Annotated[int, typer.Argument(help="Field type id")],
    config_file: ConfigOption = None,
):
    """
    Create a new field.
    """
    try:
        services = _load(config_file)
        result = asyncio.run(
            services.field_post.create_field(FieldRequest(name=name, size=size, field_type=field_type))
        )
    except FieldBookingError as exc:
        _fail(exc)

    console.print(f"[green]✓ Created field {result.name}[/green] [dim]({result.id})[/dim]")


@app.command()
def update_field(
    field_id: Annotated[UUID, typer.Argument(help="Field id")],
    name: Annotated[str, typer.Argument(help="New field name")],
    size: Annotated[str, typer.Argument(help="New field size")],
    field_type: Annotated[int, typer.Argument(help="New field type id")],
    config_file: ConfigOption = None,
):
    """
    Update a field's name, size and type.
    """
    try:
        services = _load(config_file)
        result = asyncio.run(
            services.field_put.update_field(
                field_id,
                FieldRequest(name=name, size=size, field_type=field_type),
            )
        )
    except FieldBookingError as exc:
        _fail(exc)

    console.print(f"[green]✓ Updated field {result.name}[/green]")


@app.command()
def add_availability(
    field_id: Annotated[UUID, typer.Argument(help="Field id")],
    day: Annotated[str, typer.Argument(help="Day name, e.g. Monday")],
    open_hour: Annotated[str, typer.Argument(help="Opening time (HH:mm)")],
    close_hour: Annotated[str, typer.Argument(help="Closing time (HH:mm)")],
    config_file: ConfigOption = None,
):
    """
    Add an availability window to a field.
    """
    request = _availability_request(day, open_hour, close_hour)
    try:
        services = _load(config_file)
        result = asyncio.run(services.field_put.create_availability(field_id, request))
    except FieldBookingError as exc:
        _fail(exc)

    console.print(
        f"[green]✓ Added availability {result.id}:[/green] "
        f"{result.day} {result.open_hour:%H:%M} - {result.close_hour:%H:%M}"
    )


@app.command()
def update_availability(
    availability_id: Annotated[int, typer.Argument(help="Availability id")],
    day: Annotated[str, typer.Argument(help="Day name, e.g. Monday")],
    open_hour: Annotated[str, typer.Argument(help="Opening time (HH:mm)")],
    close_hour: Annotated[str, typer.Argument(help="Closing time (HH:mm)")],
    config_file: ConfigOption = None,
):
    """
    Replace an existing availability window.
    """
    request = _availability_request(day, open_hour, close_hour)
    try:
        services = _load(config_file)
        result = asyncio.run(services.field_put.update_availability(availability_id, request))
    except FieldBookingError as exc:
        _fail(exc)

    console.print(
        f"[green]✓ Updated availability {result.id}:[/green] "
        f"{result.day} {result.open_hour:%H:%M} - {result.close_hour:%H:%M}"
    )


@app.command()
def remove_availability(
    availability_id: Annotated[int, typer.Argument(help="Availability id")],
    config_file: ConfigOption = None,
):
    """
    Delete an availability window.
    """
    try:
        services = _load(config_file)
        asyncio.run(services.field_put.delete_availability(availability_id))
    except FieldBookingError as exc:
        _fail(exc)

    console.print(f"[green]✓ Removed availability {availability_id}[/green]")


@app.command()
def check(
    field_id: Annotated[UUID, typer.Argument(help="Field id")],
    open_hour: Annotated[str, typer.Argument(help="Opening time (HH:mm)")],
    close_hour: Annotated[str, typer.Argument(help="Closing time (HH:mm)")],
    day: Annotated[Optional[str], typer.Option("--day", help="Day name. Defaults to today.")] = None,
    config_file: ConfigOption = None,
):
    """
    Check whether a window would fit a field's schedule, without saving it.
    """
    try:
        services = _load(config_file)
        day_value = day or DayOfWeek(int(pendulum.now(services.config.timezone).day_of_week)).label
        field = asyncio.run(services.store.get_field_by_id(field_id))
        if field is None:
            _fail(f"Field {field_id} not found")

        checker = AvailabilityOverlapChecker()
        result = checker.check_times(
            day_value,
            parse_time(open_hour),
            parse_time(close_hour),
            field.schedule(),
        )
    except (FieldBookingError, ValueError) as exc:
        _fail(exc)

    if result.ok:
        console.print(f"[green]✓ {result.candidate} fits {field.name}'s schedule[/green]")
        return

    console.print(f"[bold red]✗[/bold red] {result.error}")
    if result.candidate is not None:
        conflicts = checker.find_conflicts(result.candidate, field.schedule())
        for conflict in conflicts:
            console.print(f"  [yellow]conflicts with[/yellow] {conflict}")
    raise typer.Exit(1)


@app.command()
def version():
    """
    Show version information.
    """
    from .. import __version__
    console.print(f"\n[bold cyan]fieldbooking[/bold cyan] version [bold]{__version__}[/bold]\n")


if __name__ == "__main__":
    app()
