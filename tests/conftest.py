"""Shared test fixtures for icalimport."""

import logging
import os
from collections.abc import Generator
from pathlib import Path

import pytest

from icalimport.config.settings import ENV_PREFIX, reset_settings
from icalimport.ics import Calendar, parse_string
from icalimport.utils.logging import ROOT_LOGGER_NAME

SAMPLE_ICS = r"""BEGIN:VCALENDAR
PRODID:-//Test//Test//EN
VERSION:2.0
X-WR-CALNAME:Team
BEGIN:VEVENT
UID:event-1@example.com
SUMMARY:Team Sync
DESCRIPTION:line1\nline2
LOCATION:Room 1
SEQUENCE:2
DTSTART;TZID=Asia/Tokyo:20240115T093000
DTEND;TZID=Asia/Tokyo:20240115T103000
RRULE:FREQ=WEEKLY;BYDAY=MO
EXDATE;TZID=Asia/Tokyo:20240122T093000
BEGIN:VALARM
ACTION:DISPLAY
TRIGGER:-PT15M
END:VALARM
END:VEVENT
BEGIN:VEVENT
UID:event-2@example.com
SUMMARY:Holiday
DTSTART;VALUE=DATE:20240211
DTEND;VALUE=DATE:20240212
END:VEVENT
BEGIN:VEVENT
UID:event-3@example.com
SUMMARY:
DTSTART:20240301T100000Z
END:VEVENT
END:VCALENDAR
"""

# Every value non-empty so that rendering and re-parsing is lossless
ROUND_TRIP_ICS = """BEGIN:VCALENDAR
PRODID:-//Test//Test//EN
VERSION:2.0
BEGIN:VTIMEZONE
TZID:Asia/Tokyo
BEGIN:STANDARD
DTSTART:19700101T000000
TZOFFSETFROM:+0900
TZOFFSETTO:+0900
END:STANDARD
END:VTIMEZONE
BEGIN:VEVENT
UID:rt-1@example.com
SUMMARY:Planning
 Meeting
ATTENDEE;CN=Alice;ROLE=REQ-PARTICIPANT:mailto:alice@example.com
DTSTART;TZID=Asia/Tokyo:20240115T093000
END:VEVENT
END:VCALENDAR
"""


@pytest.fixture
def sample_ics_content() -> str:
    """Calendar with a timed recurring event, an all-day event and an untitled event."""
    return SAMPLE_ICS


@pytest.fixture
def round_trip_ics_content() -> str:
    """Calendar without empty property values."""
    return ROUND_TRIP_ICS


@pytest.fixture
def sample_calendar(sample_ics_content: str) -> Calendar:
    """Parsed sample calendar."""
    return parse_string(sample_ics_content)


@pytest.fixture
def sample_ics_file(tmp_path: Path, sample_ics_content: str) -> Path:
    """Sample calendar written to disk with CRLF line endings."""
    path = tmp_path / "sample.ics"
    path.write_bytes(sample_ics_content.replace("\n", "\r\n").encode("utf-8"))
    return path


@pytest.fixture
def isolated_env(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> Generator[Path, None, None]:
    """Run with no ICALIMPORT_ variables, no local config.yaml and a temporary config_dir."""
    for key in list(os.environ):
        if key.upper().startswith(ENV_PREFIX):
            monkeypatch.delenv(key, raising=False)

    workdir = tmp_path / "work"
    workdir.mkdir()
    config_dir = tmp_path / "config"
    config_dir.mkdir()

    monkeypatch.chdir(workdir)
    monkeypatch.setenv(f"{ENV_PREFIX}CONFIG_DIR", str(config_dir))
    reset_settings()

    yield config_dir

    reset_settings()


@pytest.fixture
def clean_app_logger() -> Generator[logging.Logger, None, None]:
    """Remove handlers installed on the application logger by setup_logging."""
    logger = logging.getLogger(ROOT_LOGGER_NAME)
    original_level = logger.level

    yield logger

    for handler in list(logger.handlers):
        handler.close()
        logger.removeHandler(handler)
    logger.setLevel(original_level)
