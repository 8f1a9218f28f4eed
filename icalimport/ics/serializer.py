"""Render component trees back to iCalendar text.

Properties and parameters are written in insertion order, so output is
reproducible. Long lines are not folded.
"""

from typing import TYPE_CHECKING, List, Tuple

if TYPE_CHECKING:
    from .components import Component, Property


def render_property(prop: "Property") -> str:
    """Render NAME[;PARAM=VALUE...][:VALUE]; an empty value drops the colon."""
    parts = [prop.name]
    parts.extend(f"{name}={value}" for name, value in prop.params.items())
    text = ";".join(parts)
    if prop.value:
        text = f"{text}:{prop.value}"
    return text


def render_component(component: "Component", line_ending: str = "\n") -> str:
    """Render a component and its subtree, children in document order."""
    lines: List[str] = []
    # (node, closing) pairs; nesting depth is unbounded, so no recursion
    stack: List[Tuple["Component", bool]] = [(component, False)]
    while stack:
        node, closing = stack.pop()
        if closing:
            lines.append(f"END:{node.name}")
            continue
        lines.append(f"BEGIN:{node.name}")
        lines.extend(render_property(prop) for prop in node.properties.values())
        stack.append((node, True))
        stack.extend((child, False) for child in reversed(node.children))
    return "".join(f"{line}{line_ending}" for line in lines)
