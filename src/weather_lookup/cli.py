"""Command-line entry point: one command per invocation, or an interactive shell."""

from __future__ import annotations

import argparse
import logging
import shlex
import sys
from typing import NoReturn, TextIO

from rich.console import Console
from rich.table import Table

from .config import Settings, load_settings
from .exceptions import ConfigError, StateFileError, UnknownProviderError, WeatherLookupError
from .log_setup import setup_logger
from .registry import ProviderName, ProviderRegistry, load_credentials
from .router import WeatherRequestRouter
from .session import WeatherSession
from .state import MemoryStateStore, StateStore
from .weather.models import (
    OpenWeatherMapCurrent,
    OpenWeatherMapInfo,
    OpenWeatherMapTimed,
    WeatherApiCurrent,
    WeatherApiTimed,
    WeatherResult,
)

EXIT_OK = 0
EXIT_CONFIG = 2
EXIT_COMMAND = 4
EXIT_UNEXPECTED = 99

SHELL_EXIT_WORDS = {"exit", "quit"}

_UNIT_SYMBOLS = {"metric": "°C", "imperial": "°F", "standard": "K"}


class CommandLineError(Exception):
    """Raised by the shell parser instead of exiting the process."""


class HelpShown(Exception):
    """Raised by the shell parser after printing help."""


class _ShellArgumentParser(argparse.ArgumentParser):
    def error(self, message: str) -> NoReturn:
        raise CommandLineError(message)

    def exit(self, status: int = 0, message: str | None = None) -> NoReturn:
        if message:
            self._print_message(message, sys.stderr)
        raise HelpShown()


def build_parser(interactive: bool = False) -> argparse.ArgumentParser:
    """Build the command parser; the shell variant never calls sys.exit."""
    parser_class = _ShellArgumentParser if interactive else argparse.ArgumentParser
    parser = parser_class(
        prog="weather-lookup",
        description="Look up current, historical or forecast weather for an address.",
    )
    commands = parser.add_subparsers(dest="command", required=True, metavar="COMMAND")

    get_parser = commands.add_parser("get", help="Fetch weather for an address.")
    get_parser.add_argument("address", help="Place to look up, e.g. 'Lviv, Ukraine'.")
    get_parser.add_argument(
        "date",
        nargs="?",
        default=None,
        help="Day in YYYY-MM-DD format; omit for current weather.",
    )

    configure_parser = commands.add_parser("configure", help="Switch the active provider.")
    configure_parser.add_argument(
        "provider",
        help="Provider name: " + ", ".join(name.pretty_name for name in ProviderName) + ".",
    )

    commands.add_parser("current-provider", help="Print the active provider.")
    commands.add_parser("providers", help="List supported providers.")
    if not interactive:
        commands.add_parser("shell", help="Read commands from standard input, one per line.")
    return parser


def _echo(console: Console, text: str) -> None:
    console.print(text, markup=False, highlight=False, soft_wrap=True)


def _describe(info: OpenWeatherMapInfo, unit: str) -> str:
    conditions = ", ".join(condition.description for condition in info.weather) or "-"
    return f"{info.temp:g} {unit}, feels like {info.feels_like:g} {unit}, {conditions}"


def _summary_line(result: WeatherResult, units: str) -> str:
    payload = result.payload
    unit = _UNIT_SYMBOLS.get(units, "")
    when = f"on {result.requested_date.isoformat()}" if result.requested_date else "now"

    if isinstance(payload, OpenWeatherMapCurrent):
        place = f"{result.address} ({payload.lat:.4f}, {payload.lon:.4f})"
        return f"{place} {when}: {_describe(payload.current, unit)}"
    if isinstance(payload, OpenWeatherMapTimed):
        place = f"{result.address} ({payload.lat:.4f}, {payload.lon:.4f})"
        if not payload.data:
            return f"{place} {when}: no data points returned"
        return f"{place} {when}: {_describe(payload.data[0], unit)}"
    if isinstance(payload, WeatherApiCurrent):
        place = f"{payload.location.name}, {payload.location.country}"
        return (
            f"{place} {when}: {payload.current.temp_c:g} °C, "
            f"{payload.current.condition.text}"
        )
    if isinstance(payload, WeatherApiTimed):
        place = f"{payload.location.name}, {payload.location.country}"
        if not payload.forecast.forecastday:
            return f"{place} {when}: no forecast days returned"
        entry = payload.forecast.forecastday[0]
        if entry.date is not None:
            when = f"on {entry.date.isoformat()}"
        return (
            f"{place} {when}: avg {entry.day.avgtemp_c:g} °C, "
            f"max wind {entry.day.maxwind_kph:g} kph, {entry.day.condition.text}"
        )
    return f"{result.address} {when}"


def _print_result(console: Console, result: WeatherResult, settings: Settings) -> None:
    _echo(console, _summary_line(result, settings.weather_units))
    console.print_json(result.payload.model_dump_json())


def _print_providers(console: Console, session: WeatherSession) -> None:
    table = Table(title="Weather Providers")
    table.add_column("Name")
    table.add_column("API key variable")
    table.add_column("Active")
    active = session.current_provider()
    for name in ProviderName:
        table.add_row(name.pretty_name, name.value, "yes" if name == active else "")
    console.print(table)


def _execute(
    args: argparse.Namespace,
    session: WeatherSession,
    console: Console,
    settings: Settings,
) -> None:
    if args.command == "get":
        result = session.get(args.address, args.date)
        _print_result(console, result, settings)
    elif args.command == "configure":
        message = session.configure(ProviderName.parse(args.provider))
        _echo(console, message)
    elif args.command == "current-provider":
        _echo(console, session.current_provider().pretty_name)
    elif args.command == "providers":
        _print_providers(console, session)
    else:
        raise CommandLineError(f"unsupported command {args.command!r}")


def _run_shell(
    session: WeatherSession,
    console: Console,
    err_console: Console,
    settings: Settings,
    logger: logging.Logger,
    stream: TextIO,
) -> int:
    parser = build_parser(interactive=True)
    _echo(console, f"Provider {session.current_provider().pretty_name} will be used.")
    for line in stream:
        try:
            tokens = shlex.split(line)
        except ValueError as exc:
            _echo(err_console, f"Error: {exc}. Please, see help and try again!")
            continue
        if not tokens:
            continue
        if tokens[0].lower() in SHELL_EXIT_WORDS:
            break
        try:
            args = parser.parse_args(tokens)
        except HelpShown:
            continue
        except CommandLineError as exc:
            _echo(err_console, f"Error: {exc}. Please, see help and try again!")
            continue

        try:
            _execute(args, session, console, settings)
        except (WeatherLookupError, StateFileError) as exc:
            logger.debug("Shell command failed", exc_info=True)
            _echo(err_console, f"Error: {exc}")
    return EXIT_OK


def main(argv: list[str] | None = None) -> int:
    """Run one command (or the shell) and return the process exit code."""
    args = build_parser().parse_args(argv)
    logger = setup_logger()
    console = Console()
    err_console = Console(stderr=True)

    try:
        settings = load_settings()
        logger = setup_logger(level=settings.log_level, secrets=settings.secrets())
        logger.debug("Loaded settings: %s", settings.safe_summary())
        credentials = load_credentials(settings)
    except ConfigError as exc:
        logger.error("Configuration failure: %s", exc)
        return EXIT_CONFIG

    store: StateStore | MemoryStateStore
    if settings.weather_persist_provider:
        store = StateStore.from_settings(settings)
    else:
        store = MemoryStateStore()

    with ProviderRegistry(settings=settings, credentials=credentials, logger=logger) as registry:
        try:
            session = WeatherSession(
                registry=registry,
                router=WeatherRequestRouter(),
                store=store,
                logger=logger,
            )
        except (ConfigError, UnknownProviderError) as exc:
            logger.error("Startup failure: %s", exc)
            return EXIT_CONFIG

        try:
            if args.command == "shell":
                return _run_shell(session, console, err_console, settings, logger, sys.stdin)
            _execute(args, session, console, settings)
            return EXIT_OK
        except (WeatherLookupError, StateFileError) as exc:
            logger.error("Command failed: %s", exc)
            return EXIT_COMMAND
        except Exception as exc:  # pragma: no cover
            logger.exception("Unexpected failure: %s", exc)
            return EXIT_UNEXPECTED
        finally:
            session.close()


def run() -> None:
    """Console-script entry point."""
    sys.exit(main())


if __name__ == "__main__":
    run()
