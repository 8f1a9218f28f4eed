"""Command-line argument parsing for icalimport."""

import argparse
from pathlib import Path
from typing import Optional

from .. import __version__


def create_parser(prog: Optional[str] = None) -> argparse.ArgumentParser:
    """Create the argument parser.

    Returns:
        Configured ArgumentParser
    """
    parser = argparse.ArgumentParser(
        prog=prog or "icalimport",
        description="Import the events of an iCalendar (.ics) file into Google Calendar",
        epilog=(
            "Examples:\n"
            "  icalimport --calendar primary events.ics\n"
            "  icalimport --dry-run --timezone Europe/Berlin events.ics\n"
            "  icalimport --dump events.ics"
        ),
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )

    parser.add_argument("file", type=Path, help="Path to the .ics file to import")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")

    import_group = parser.add_argument_group("import options")
    import_group.add_argument("--calendar", dest="calendar_id", help="Target calendar ID")
    import_group.add_argument(
        "--timezone", dest="timezone", help="Timezone applied to DTSTART/DTEND values"
    )
    import_group.add_argument("--token", dest="access_token", help="OAuth 2.0 access token")
    import_group.add_argument(
        "--config", dest="config_path", type=Path, help="Path to a YAML configuration file"
    )

    mode_group = parser.add_mutually_exclusive_group()
    mode_group.add_argument(
        "--dry-run",
        action="store_true",
        help="Print the normalized events as JSON instead of importing them",
    )
    mode_group.add_argument(
        "--dump", action="store_true", help="Print the parsed calendar as iCalendar text and exit"
    )

    logging_group = parser.add_argument_group("logging options")
    logging_group.add_argument(
        "--log-level",
        choices=["DEBUG", "VERBOSE", "INFO", "WARNING", "ERROR", "CRITICAL"],
        type=str.upper,
        help="Console and file log level",
    )
    verbosity = logging_group.add_mutually_exclusive_group()
    verbosity.add_argument("-v", "--verbose", action="store_true", help="Verbose logging")
    verbosity.add_argument("-q", "--quiet", action="store_true", help="Only log errors")
    logging_group.add_argument(
        "--no-log-colors", action="store_true", help="Disable colored console logs"
    )

    return parser
