"""Command-line entry point for icalimport."""

import json
import logging
import sys
from typing import Any, Callable, Dict, List, Optional

from ..config.settings import ImporterSettings
from ..delivery import CalendarImporter, DeliveryError, GoogleCalendarClient
from ..ics import Calendar, EventNormalizer, ICSError, parse_file
from ..timezone import TimezoneError
from ..utils.logging import apply_command_line_overrides, setup_logging
from .parser import create_parser

logger = logging.getLogger(__name__)


def choose_calendar_id(
    client: GoogleCalendarClient,
    input_func: Optional[Callable[[str], str]] = None,
    output: Optional[Callable[[str], None]] = None,
) -> str:
    """Ask the user to pick one of the token owner's calendars.

    Args:
        client: Client used to list the calendars
        input_func: Prompt function, defaults to input()
        output: Line printer, defaults to print()

    Raises:
        DeliveryError: If the calendar list cannot be retrieved or is empty
        ValueError: If the answer is not a listed index or stdin is closed
    """
    input_func = input_func or input
    output = output or print

    calendar_ids = client.list_calendars()
    if not calendar_ids:
        raise DeliveryError("No calendars available for this account")

    for index, calendar_id in enumerate(calendar_ids):
        output(f"{index}:  {calendar_id}")

    try:
        answer = input_func("Calendar to import: ").strip()
    except EOFError:
        raise ValueError("Invalid input: no answer on standard input") from None
    try:
        index = int(answer)
    except ValueError:
        raise ValueError(f"Invalid input: {answer!r}") from None
    if not 0 <= index < len(calendar_ids):
        raise ValueError(f"Invalid input: {index} is not a listed calendar")
    return calendar_ids[index]


def build_settings(args: Any) -> ImporterSettings:
    """Create settings with command-line values taking priority."""
    overrides: Dict[str, Any] = {}
    if args.config_path is not None:
        overrides["config_path"] = args.config_path
    if args.timezone:
        overrides["default_timezone"] = args.timezone
    if args.calendar_id:
        overrides["calendar_id"] = args.calendar_id
    if args.access_token:
        overrides["access_token"] = args.access_token

    settings = ImporterSettings(**overrides)
    return apply_command_line_overrides(settings, args)


def dry_run(calendar: Calendar, normalizer: EventNormalizer) -> List[Dict[str, Any]]:
    """Normalize every deliverable event without importing it."""
    payloads = []
    for outcome in normalizer.normalize_all(calendar):
        if outcome.normalized is not None and outcome.normalized.is_deliverable:
            payloads.append(outcome.normalized.to_api_payload())
    return payloads


def run(argv: Optional[List[str]] = None) -> int:
    """Run the importer.

    Returns:
        Process exit code
    """
    args = create_parser().parse_args(argv)

    try:
        settings = build_settings(args)
    except ValueError as e:
        print(f"Invalid configuration: {e}", file=sys.stderr)
        return 1

    setup_logging(settings)

    try:
        calendar = parse_file(args.file)
    except ICSError as e:
        logger.error(f"Unable to parse ics file: {e}")
        return 1

    if args.dump:
        print(calendar.to_ical(), end="")
        return 0

    try:
        normalizer = EventNormalizer(settings.default_timezone)
    except TimezoneError as e:
        logger.error(f"Invalid timezone: {e}")
        return 1

    if args.dry_run:
        print(json.dumps(dry_run(calendar, normalizer), indent=2, ensure_ascii=False))
        return 0

    try:
        client = GoogleCalendarClient.from_settings(settings)
    except (ValueError, DeliveryError) as e:
        logger.error(f"Unable to create api client: {e}")
        return 1

    with client:
        try:
            calendar_id = settings.calendar_id or choose_calendar_id(client)
        except (ValueError, DeliveryError) as e:
            logger.error(f"Unable to get calendar: {e}")
            return 1

        print(f"Import events into Google Calendar: {calendar_id}")
        CalendarImporter(client, normalizer).import_calendar(calendar, calendar_id)

    return 0


def main_entry() -> None:
    """Console script entry point."""
    sys.exit(run())


__all__ = ["build_settings", "choose_calendar_id", "create_parser", "dry_run", "main_entry", "run"]
