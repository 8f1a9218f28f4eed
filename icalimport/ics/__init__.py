"""iCalendar parsing, data model, serialization and event normalization."""

from .components import Calendar, Component, Event, Property
from .exceptions import (
    ComponentFrozenError,
    ComponentTypeError,
    ICSError,
    ICSMalformedLineError,
    ICSNotFoundError,
    ICSParseError,
    ICSReadError,
    ICSStructuralError,
    ICSUnmatchedBlockError,
    ICSUnsupportedFormatError,
)
from .grammar import parse_property
from .models import EventDateTime, ImportResult, ImportStatus, ImportSummary, NormalizedEvent
from .normalizer import EventNormalizer, NormalizationOutcome, resolve_date_time
from .parser import ICSParser, parse, parse_file, parse_string
from .reader import LineReader
from .serializer import render_component, render_property

__all__ = [
    "Calendar",
    "Component",
    "ComponentFrozenError",
    "ComponentTypeError",
    "Event",
    "EventDateTime",
    "EventNormalizer",
    "ICSError",
    "ICSMalformedLineError",
    "ICSNotFoundError",
    "ICSParseError",
    "ICSParser",
    "ICSReadError",
    "ICSStructuralError",
    "ICSUnmatchedBlockError",
    "ICSUnsupportedFormatError",
    "ImportResult",
    "ImportStatus",
    "ImportSummary",
    "LineReader",
    "NormalizationOutcome",
    "NormalizedEvent",
    "Property",
    "parse",
    "parse_file",
    "parse_property",
    "parse_string",
    "render_component",
    "render_property",
    "resolve_date_time",
]
