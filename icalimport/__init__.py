"""icalimport - parse iCalendar files and import their events into Google Calendar."""

__version__ = "1.0.0"
__author__ = "icalimport Team"
