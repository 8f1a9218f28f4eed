"""Unit tests for the stack-based ICS parser."""

import io
import logging
from pathlib import Path

import pytest

from icalimport.ics.components import Calendar
from icalimport.ics.exceptions import (
    ComponentFrozenError,
    ICSMalformedLineError,
    ICSNotFoundError,
    ICSReadError,
    ICSStructuralError,
    ICSUnmatchedBlockError,
)
from icalimport.ics.parser import ICSParser, parse, parse_file, parse_string


class TestICSParserTree:
    """Test building component trees."""

    def test_parse_sample_calendar(self, sample_calendar: Calendar) -> None:
        """Test top-level properties and events of the sample calendar."""
        assert sample_calendar.product_id == "-//Test//Test//EN"
        assert sample_calendar.version == "2.0"
        assert sample_calendar.get_value("X-WR-CALNAME") == "Team"
        assert [event.get_value("UID") for event in sample_calendar.events()] == [
            "event-1@example.com",
            "event-2@example.com",
            "event-3@example.com",
        ]

    def test_nested_components(self, sample_calendar: Calendar) -> None:
        """Test that VALARM is attached to its enclosing VEVENT."""
        first, second, _ = sample_calendar.events()

        assert [child.name for child in first.children] == ["VALARM"]
        assert first.children[0].get_value("TRIGGER") == "-PT15M"
        assert second.children == ()

    def test_properties_with_params(self, sample_calendar: Calendar) -> None:
        """Test that property parameters survive parsing."""
        event = sample_calendar.events()[0]
        dtstart = event.properties["DTSTART"]

        assert dtstart.value == "20240115T093000"
        assert dict(dtstart.params) == {"TZID": "Asia/Tokyo"}

    def test_folded_lines_unfolded(self) -> None:
        """Test that folded property values are joined."""
        calendar = parse_string(
            "BEGIN:VCALENDAR\nBEGIN:VEVENT\nSUMMARY:Hello\n World\nEND:VEVENT\nEND:VCALENDAR\n"
        )

        assert calendar.events()[0].summary == "Hello World"

    def test_duplicate_property_last_wins(self) -> None:
        """Test that a repeated property keeps its last value."""
        calendar = parse_string("BEGIN:VCALENDAR\nX-A:1\nX-A:2\nEND:VCALENDAR\n")

        assert calendar.get_value("X-A") == "2"
        assert len(calendar.properties) == 1

    def test_crlf_content(self) -> None:
        """Test that CRLF line endings are handled."""
        calendar = parse_string("BEGIN:VCALENDAR\r\nVERSION:2.0\r\nEND:VCALENDAR\r\n")

        assert calendar.version == "2.0"

    def test_blank_lines_skipped(self, caplog: pytest.LogCaptureFixture) -> None:
        """Test that blank lines are tolerated and logged at debug level."""
        with caplog.at_level(logging.DEBUG, logger="icalimport.ics.parser"):
            calendar = parse_string("BEGIN:VCALENDAR\n\nVERSION:2.0\n\nEND:VCALENDAR\n\n")

        assert calendar.version == "2.0"
        assert "Skipping blank line 2" in caplog.text

    def test_first_vcalendar_returned(self) -> None:
        """Test that only the first top-level VCALENDAR is returned."""
        calendar = parse_string(
            "BEGIN:VCALENDAR\nX-N:1\nEND:VCALENDAR\nBEGIN:VCALENDAR\nX-N:2\nEND:VCALENDAR\n"
        )

        assert calendar.get_value("X-N") == "1"

    def test_other_top_level_components_ignored(self) -> None:
        """Test that siblings of the VCALENDAR do not matter."""
        calendar = parse_string(
            "BEGIN:VTODO\nEND:VTODO\nBEGIN:VCALENDAR\nX-N:1\nEND:VCALENDAR\n"
        )

        assert calendar.get_value("X-N") == "1"

    def test_result_is_frozen(self, sample_calendar: Calendar) -> None:
        """Test that the returned tree is read-only."""
        assert sample_calendar.component.is_frozen

        with pytest.raises(ComponentFrozenError):
            sample_calendar.add_property("X-NEW", "1")
        with pytest.raises(ComponentFrozenError):
            sample_calendar.events()[0].add_property("LOCATION", "elsewhere")

    def test_deep_nesting(self) -> None:
        """Test that deep nesting does not hit the recursion limit."""
        depth = 5000
        content = (
            "BEGIN:VCALENDAR\n"
            + "BEGIN:X-NODE\n" * depth
            + "END:X-NODE\n" * depth
            + "END:VCALENDAR\n"
        )

        calendar = parse_string(content)

        assert calendar.stats() == {"X-NODE": depth}

    def test_build_tree_returns_root(self) -> None:
        """Test that build_tree returns the synthetic root with all top-level blocks."""
        root = ICSParser().build_tree(["BEGIN:VTODO", "END:VTODO", "BEGIN:VEVENT", "END:VEVENT"])

        assert root.name == "ROOT"
        assert [child.name for child in root.children] == ["VTODO", "VEVENT"]


class TestICSParserErrors:
    """Test that structural and syntax errors abort parsing."""

    def test_unmatched_end(self) -> None:
        """Test that END closing a different block is rejected."""
        with pytest.raises(ICSUnmatchedBlockError) as exc_info:
            parse_string("BEGIN:VCALENDAR\nBEGIN:VEVENT\nEND:VCALENDAR\n")

        assert exc_info.value.line_number == 3
        assert "END:VCALENDAR closes VEVENT" in str(exc_info.value)

    def test_unmatched_top_level_end(self) -> None:
        """Test BEGIN:VEVENT closed by END:VCALENDAR."""
        with pytest.raises(ICSUnmatchedBlockError):
            parse_string("BEGIN:VEVENT\nSUMMARY:x\nEND:VCALENDAR\n")

    def test_end_without_begin(self) -> None:
        """Test that END with nothing open is a structural error."""
        with pytest.raises(ICSStructuralError, match="without matching BEGIN"):
            parse_string("END:VCALENDAR\n")

    def test_unclosed_components(self) -> None:
        """Test that blocks left open at end of input are reported."""
        with pytest.raises(ICSStructuralError, match="unclosed components: VCALENDAR, VEVENT"):
            parse_string("BEGIN:VCALENDAR\nBEGIN:VEVENT\nSUMMARY:x\n")

    def test_missing_vcalendar(self) -> None:
        """Test that a document without VCALENDAR is rejected."""
        with pytest.raises(ICSNotFoundError, match='Could not find "VCALENDAR"'):
            parse_string("BEGIN:VEVENT\nSUMMARY:x\nEND:VEVENT\n")

    def test_nested_vcalendar_not_found(self) -> None:
        """Test that a VCALENDAR below the top level does not count."""
        with pytest.raises(ICSNotFoundError):
            parse_string("BEGIN:X-WRAP\nBEGIN:VCALENDAR\nEND:VCALENDAR\nEND:X-WRAP\n")

    def test_empty_document(self) -> None:
        """Test that empty input has no VCALENDAR."""
        with pytest.raises(ICSNotFoundError):
            parse_string("")

    def test_malformed_line(self) -> None:
        """Test that a line without a colon aborts with its line number."""
        with pytest.raises(ICSMalformedLineError) as exc_info:
            parse_string("BEGIN:VCALENDAR\nNOT A PROPERTY\nEND:VCALENDAR\n")

        assert exc_info.value.line_number == 2


class TestParseEntryPoints:
    """Test the module-level parse helpers."""

    def test_parse_text_stream(self, sample_ics_content: str) -> None:
        """Test parsing a text stream."""
        calendar = parse(io.StringIO(sample_ics_content))

        assert len(calendar.events()) == 3

    def test_parse_binary_stream(self, sample_ics_content: str) -> None:
        """Test parsing a binary stream."""
        calendar = parse(io.BytesIO(sample_ics_content.encode("utf-8")))

        assert len(calendar.events()) == 3

    def test_parse_file(self, sample_ics_file: Path, sample_calendar: Calendar) -> None:
        """Test that a CRLF file parses to the same tree as the text."""
        assert parse_file(sample_ics_file) == sample_calendar

    def test_parse_file_with_byte_order_mark(
        self, tmp_path: Path, sample_ics_content: str, sample_calendar: Calendar
    ) -> None:
        """Test that files exported with a UTF-8 byte-order mark parse normally."""
        path = tmp_path / "bom.ics"
        path.write_bytes(("\ufeff" + sample_ics_content).encode("utf-8"))

        assert parse_file(path) == sample_calendar

    def test_parse_file_accepts_str_path(self, sample_ics_file: Path) -> None:
        """Test that a string path is accepted."""
        assert parse_file(str(sample_ics_file)).version == "2.0"

    def test_parse_missing_file(self, tmp_path: Path) -> None:
        """Test that a missing file raises ICSReadError."""
        with pytest.raises(ICSReadError, match="Failed to open file"):
            parse_file(tmp_path / "missing.ics")

    def test_parser_encoding(self) -> None:
        """Test that the parser decodes bytes with its configured encoding."""
        content = "BEGIN:VCALENDAR\nX-NAME:Café\nEND:VCALENDAR\n".encode("latin-1")

        calendar = ICSParser(encoding="latin-1").parse(io.BytesIO(content))

        assert calendar.get_value("X-NAME") == "Café"
