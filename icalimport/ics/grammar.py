"""Property line grammar: NAME[;PARAM=VALUE...]:VALUE."""

from typing import Optional

from .components import Property
from .exceptions import ICSMalformedLineError


def parse_property(line: str, line_number: Optional[int] = None) -> Property:
    """Parse one logical line into a Property.

    Only the first colon separates the name/parameter segment from the value,
    and only the first equals sign separates a parameter name from its value,
    so both values may contain those characters. A repeated parameter name
    keeps the last value.

    Args:
        line: Unfolded logical line
        line_number: Source line number, used in error messages

    Returns:
        Parsed property

    Raises:
        ICSMalformedLineError: If the line has no colon, an empty name, or a
            parameter without an equals sign
    """
    head, sep, value = line.partition(":")
    if not sep:
        raise ICSMalformedLineError(f"Missing ':' in line: {line!r}", line_number)

    name, *param_specs = head.split(";")
    if not name:
        raise ICSMalformedLineError(f"Missing property name in line: {line!r}", line_number)

    params = {}
    for spec in param_specs:
        param_name, eq, param_value = spec.partition("=")
        if not eq:
            raise ICSMalformedLineError(
                f"Malformed parameter {spec!r} in property {name}", line_number
            )
        params[param_name] = param_value

    return Property(name, value, params)
