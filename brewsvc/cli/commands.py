"""CLI commands for brewsvc."""

import sys
from typing import NoReturn

import typer
from loguru import logger
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from brewsvc import __logo__, __version__
from brewsvc.daemon.base import RunState
from brewsvc.daemon.errors import BrewsvcError
from brewsvc.services.controller import ActionResult, Outcome, Selection, ServiceController

app = typer.Typer(
    name="brewsvc",
    help=f"{__logo__} brewsvc - Manage Homebrew formula services with systemctl",
    no_args_is_help=True,
)

console = Console()

_STATE_STYLES = {
    RunState.STARTED: "[green]started[/green]",
    RunState.STOPPED: "stopped",
    RunState.ERROR: "[red]error[/red]",
    RunState.UNKNOWN: "[yellow]unknown[/yellow]",
}

NamesArgument = typer.Argument(None, help="Formula names", show_default=False)
AllOption = typer.Option(False, "--all", "-a", help="Run <subcommand> on all services")


def version_callback(value: bool):
    if value:
        console.print(f"{__logo__} brewsvc v{__version__}")
        raise typer.Exit()


def _configure_logging(verbose: bool) -> None:
    logger.remove()
    logger.add(
        sys.stderr,
        level="DEBUG" if verbose else "WARNING",
        format="<level>{level: <8}</level> {message}",
    )
    logger.enable("brewsvc")


@app.callback()
def main(
    version: bool = typer.Option(None, "--version", callback=version_callback, is_eager=True),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Show every systemctl invocation"),
):
    """Manage background services with systemd.

    Operates on ~/.config/systemd/user (started at login), or on the
    system unit directory when run as root.
    """
    _configure_logging(verbose)


# ============================================================================
# Helpers
# ============================================================================


def _get_controller() -> ServiceController:
    """Create a ServiceController for the invoking user from config."""
    from brewsvc.config.loader import load_config
    from brewsvc.daemon.context import InvocationContext
    from brewsvc.daemon.manager import DriverFactory
    from brewsvc.formula import installed_formulae
    from brewsvc.utils.helpers import ensure_homebrew_owner

    config = load_config()
    context = InvocationContext.current(config.runtime_dir)
    if config.check_owner and config.homebrew_prefix.exists():
        ensure_homebrew_owner(config.homebrew_prefix, context.uid)

    driver = DriverFactory.create(config, context)
    return ServiceController(
        driver,
        installed_formulae(config.homebrew_prefix),
        context.user,
        progress=console.print,
    )


def _fail(message: object) -> NoReturn:
    console.print(f"[red]Error:[/red] {message}")
    raise typer.Exit(1)


def _report_selection(selection: Selection) -> None:
    if selection.non_service:
        console.print(f"Skipped non-service formulae: {', '.join(selection.non_service)}.")
    if selection.missing:
        console.print(f"Skipped missing formulae: {', '.join(selection.missing)}.")


_OUTCOME_STYLES = {
    Outcome.SKIPPED: "{}",
    Outcome.DONE: "[green]✓[/green] {}",
    Outcome.REFUSED: "[yellow]{}[/yellow]",
    Outcome.FAILED: "[red]Error:[/red] {}",
}


def _report_result(result: ActionResult) -> None:
    for outcome, message in result.entries:
        console.print(_OUTCOME_STYLES[outcome].format(escape(message)))


def _run_action(action: str, names: list[str] | None, all_services: bool, require_names: bool = True) -> None:
    """Run a controller action over names with standard error handling."""
    try:
        controller = _get_controller()
        if not controller.service_names:
            console.print("No services available to control with `brewsvc`.")
            return

        if all_services or not require_names:
            names = controller.service_names
        elif not names:
            _fail("Please provide formula(e) name(s) or use --all.")

        selection = controller.select(names)
        _report_selection(selection)
        results = controller.execute(action, selection.services)
    except (BrewsvcError, PermissionError) as e:
        _fail(e)

    for result in results:
        _report_result(result)
    if any(result.outcome == Outcome.FAILED for result in results):
        raise typer.Exit(1)


# ============================================================================
# Commands
# ============================================================================


@app.command("list")
def list_services(
    json_output: bool = typer.Option(False, "--json", help="Print services as a JSON array"),
):
    """List all services (from all users)."""
    try:
        controller = _get_controller()
        services = controller.list()
    except (BrewsvcError, PermissionError) as e:
        _fail(e)

    if json_output:
        console.print_json(data=[service.to_dict() for service in services])
        return
    if not services:
        console.print("No services available to control with `brewsvc`.")
        return

    table = Table(title="Services")
    table.add_column("Name", style="cyan")
    table.add_column("Status")
    table.add_column("User")
    table.add_column("File")
    for service in services:
        table.add_row(
            service.name,
            _STATE_STYLES[service.state],
            service.user_name or "",
            str(service.file) if service.file else "",
        )
    console.print(table)


@app.command("run")
def run_services(names: list[str] | None = NamesArgument, all_services: bool = AllOption):
    """Run the services of formulae without registering them to launch at login."""
    _run_action("run", names, all_services)


@app.command("start")
def start_services(names: list[str] | None = NamesArgument, all_services: bool = AllOption):
    """Start the services of formulae immediately and register them to launch at login."""
    _run_action("start", names, all_services)


@app.command("stop")
def stop_services(names: list[str] | None = NamesArgument, all_services: bool = AllOption):
    """Stop the services of formulae immediately and unregister them from launching at login."""
    _run_action("stop", names, all_services)


@app.command("restart")
def restart_services(names: list[str] | None = NamesArgument, all_services: bool = AllOption):
    """Stop (if necessary) and start the services of formulae, registering them to launch at login."""
    _run_action("restart", names, all_services)


@app.command("cleanup")
def cleanup_services():
    """Remove all unused services."""
    _run_action("cleanup", None, True, require_names=False)


@app.command("purge")
def purge_services():
    """Remove all services."""
    _run_action("purge", None, True, require_names=False)


_ALIASES = {
    list_services: ("ls",),
    start_services: ("launch", "load", "s", "l"),
    stop_services: ("unload", "terminate", "term", "t", "u"),
    restart_services: ("relaunch", "reload", "r"),
    cleanup_services: ("clean", "cl", "rm"),
}

for _command, _names in _ALIASES.items():
    for _alias in _names:
        app.command(_alias, hidden=True)(_command)


if __name__ == "__main__":
    app()
