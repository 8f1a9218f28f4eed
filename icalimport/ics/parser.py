"""Stack-based iCalendar parser building a component tree from BEGIN/END blocks."""

import logging
from collections.abc import Iterable
from pathlib import Path
from typing import List, Union

from .components import Calendar, Component, Property
from .exceptions import (
    ICSNotFoundError,
    ICSReadError,
    ICSStructuralError,
    ICSUnmatchedBlockError,
)
from .grammar import parse_property
from .reader import LineReader, PhysicalLine

logger = logging.getLogger(__name__)

ROOT_NAME = "ROOT"


class ICSParser:
    """iCalendar parser returning the first top-level VCALENDAR.

    Open components live on an explicit stack seeded with a synthetic root,
    so nesting depth never turns into recursion depth. Every error aborts the
    parse; no partial tree is returned.
    """

    def __init__(self, encoding: str = "utf-8") -> None:
        """Initialize ICS parser.

        Args:
            encoding: Encoding used when the source yields bytes
        """
        self.encoding = encoding

    def parse(self, source: Iterable[PhysicalLine]) -> Calendar:
        """Parse physical lines into a frozen Calendar.

        Args:
            source: Readable stream or iterable of str/bytes lines

        Returns:
            Calendar view over the first top-level VCALENDAR

        Raises:
            ICSReadError: If the source cannot be read
            ICSMalformedLineError: If a logical line cannot be parsed
            ICSUnmatchedBlockError: If END names another block than the open one
            ICSStructuralError: If END has no BEGIN or a block is left open
            ICSNotFoundError: If there is no top-level VCALENDAR
        """
        root = self.build_tree(source)

        for child in root.children:
            if child.name == Calendar.COMPONENT_NAME:
                child.freeze()
                logger.debug(f"Parsed calendar components: {Calendar(child).stats()}")
                return Calendar(child)

        raise ICSNotFoundError('Could not find "VCALENDAR" component')

    def build_tree(self, source: Iterable[PhysicalLine]) -> Component:
        """Parse physical lines into the synthetic root container."""
        root = Component(ROOT_NAME)
        stack: List[Component] = [root]
        reader = LineReader(source, encoding=self.encoding)

        for line in reader:
            if not line.strip():
                logger.debug(f"Skipping blank line {reader.line_number}")
                continue

            prop = parse_property(line, reader.line_number)
            head = stack[-1]

            if prop.name == "BEGIN":
                component = Component(prop.value)
                head.add_component(component)
                stack.append(component)
            elif prop.name == "END":
                self._close(stack, prop, reader.line_number)
            else:
                head.set_property(prop)

        if len(stack) > 1:
            unclosed = ", ".join(component.name for component in stack[1:])
            raise ICSStructuralError(f"Unexpected end of input, unclosed components: {unclosed}")

        return root

    @staticmethod
    def _close(stack: List[Component], prop: Property, line_number: int) -> None:
        if len(stack) == 1:
            raise ICSStructuralError(f"END:{prop.value} without matching BEGIN", line_number)

        component = stack.pop()
        if component.name != prop.value:
            raise ICSUnmatchedBlockError(
                f"Unmatched component: END:{prop.value} closes {component.name}", line_number
            )


def parse(source: Iterable[PhysicalLine]) -> Calendar:
    """Parse a readable stream or iterable of lines."""
    return ICSParser().parse(source)


def parse_string(content: str) -> Calendar:
    """Parse iCalendar text held in memory."""
    return ICSParser().parse(content.split("\n"))


def parse_file(path: Union[str, Path]) -> Calendar:
    """Parse an iCalendar file.

    Raises:
        ICSReadError: If the file cannot be opened or read
    """
    path = Path(path)
    logger.debug(f"Parsing ICS file: {path}")
    try:
        with path.open("rb") as f:
            return ICSParser().parse(f)
    except OSError as e:
        raise ICSReadError(f"Failed to open file: {path}: {e}") from e
