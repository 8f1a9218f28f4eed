"""ICS-specific exceptions for error handling."""

from typing import Optional


class ICSError(Exception):
    """Base exception for ICS-related errors."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ICSReadError(ICSError):
    """Exception raised when ICS source cannot be read or decoded."""


class ICSParseError(ICSError):
    """Exception raised when ICS content cannot be parsed."""

    def __init__(self, message: str, line_number: Optional[int] = None):
        if line_number is not None:
            message = f"{message} (line {line_number})"
        super().__init__(message)
        self.line_number = line_number


class ICSMalformedLineError(ICSParseError):
    """Exception raised when a logical line is not NAME[;PARAM=VALUE]:VALUE."""


class ICSUnmatchedBlockError(ICSParseError):
    """Exception raised when END names a different component than the open one."""


class ICSStructuralError(ICSParseError):
    """Exception raised when BEGIN/END blocks are not properly nested."""


class ICSNotFoundError(ICSParseError):
    """Exception raised when the document has no top-level VCALENDAR."""


class ICSUnsupportedFormatError(ICSError):
    """Exception raised when a DTSTART/DTEND value has an unknown format."""

    def __init__(self, value: str, reason: Optional[str] = None):
        message = f"Unsupported datetime format: {value}"
        if reason:
            message = f"{message} ({reason})"
        super().__init__(message)
        self.value = value


class ComponentTypeError(ICSError):
    """Exception raised when a typed view wraps a component of the wrong name."""


class ComponentFrozenError(ICSError):
    """Exception raised when a frozen component is mutated."""
