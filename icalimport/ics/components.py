"""In-memory iCalendar component tree and the typed Calendar/Event views over it."""

from collections.abc import Iterator, Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Dict, List, Optional, Sequence, Union

from .exceptions import ComponentFrozenError, ComponentTypeError
from .serializer import render_component, render_property

PRODUCT_ID = "-//icalimport//iCal Encoder/Decoder//EN"
ICALENDAR_VERSION = "2.0"


@dataclass(frozen=True)
class Property:
    """A single NAME;PARAM=VALUE:VALUE attribute line."""

    name: str
    value: str = ""
    params: Mapping[str, str] = field(default_factory=dict)

    def __post_init__(self) -> None:
        if not self.name:
            raise ValueError("Property name must not be empty")
        object.__setattr__(self, "params", MappingProxyType(dict(self.params)))

    def __hash__(self) -> int:
        return hash((self.name, self.value, frozenset(self.params.items())))

    def __str__(self) -> str:
        return render_property(self)


class Component:
    """A BEGIN:NAME ... END:NAME block with its properties and child blocks.

    Properties are keyed by name, so a later property with the same name
    replaces the earlier one. Children keep document order.
    """

    def __init__(self, name: str) -> None:
        self.name = name
        self.properties: Mapping[str, Property] = {}
        self.children: Sequence["Component"] = []
        self._frozen = False

    @property
    def is_frozen(self) -> bool:
        return self._frozen

    def add_property(
        self, name: str, value: str = "", params: Optional[Mapping[str, str]] = None
    ) -> Property:
        """Create a property and store it under its name."""
        prop = Property(name, value, params or {})
        self.set_property(prop)
        return prop

    def set_property(self, prop: Property) -> None:
        self._check_mutable()
        self.properties[prop.name] = prop  # type: ignore[index]

    def add_component(self, component: Union["Component", "_ComponentView"]) -> None:
        self._check_mutable()
        if isinstance(component, _ComponentView):
            component = component.component
        self.children.append(component)  # type: ignore[attr-defined]

    def get(self, name: str) -> Optional[Property]:
        return self.properties.get(name)

    def get_value(self, name: str, default: Optional[str] = None) -> Optional[str]:
        prop = self.properties.get(name)
        return prop.value if prop is not None else default

    def walk(self, name: Optional[str] = None) -> Iterator["Component"]:
        """Iterate over this component and its descendants, depth first in document order."""
        stack: List[Component] = [self]
        while stack:
            node = stack.pop()
            if name is None or node.name == name:
                yield node
            stack.extend(reversed(node.children))

    def freeze(self) -> "Component":
        """Make this component and its whole subtree read-only."""
        for node in self.walk():
            if node._frozen:
                continue
            node.properties = MappingProxyType(dict(node.properties))
            node.children = tuple(node.children)
            node._frozen = True
        return self

    def to_ical(self, line_ending: str = "\n") -> str:
        return render_component(self, line_ending)

    def _check_mutable(self) -> None:
        if self._frozen:
            raise ComponentFrozenError(f"Component {self.name} is frozen")

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Component):
            return NotImplemented
        return (
            self.name == other.name
            and dict(self.properties) == dict(other.properties)
            and list(self.children) == list(other.children)
        )

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return (
            f"Component(name={self.name!r}, properties={list(self.properties)!r}, "
            f"children={len(self.children)})"
        )

    def __str__(self) -> str:
        return self.to_ical()


class _ComponentView:
    """Name-checked wrapper around a Component."""

    COMPONENT_NAME = ""

    def __init__(self, component: Component) -> None:
        if component.name != self.COMPONENT_NAME:
            raise ComponentTypeError(
                f"Expected {self.COMPONENT_NAME} component, got {component.name!r}"
            )
        self.component = component

    @property
    def name(self) -> str:
        return self.component.name

    @property
    def properties(self) -> Mapping[str, Property]:
        return self.component.properties

    @property
    def children(self) -> Sequence[Component]:
        return self.component.children

    def add_property(
        self, name: str, value: str = "", params: Optional[Mapping[str, str]] = None
    ) -> Property:
        return self.component.add_property(name, value, params)

    def add_component(self, component: Union[Component, "_ComponentView"]) -> None:
        self.component.add_component(component)

    def get_value(self, name: str, default: Optional[str] = None) -> Optional[str]:
        return self.component.get_value(name, default)

    def to_ical(self, line_ending: str = "\n") -> str:
        return self.component.to_ical(line_ending)

    def __eq__(self, other: Any) -> bool:
        if isinstance(other, _ComponentView):
            return self.component == other.component
        return NotImplemented

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.component!r})"


class Event(_ComponentView):
    """VEVENT view. Its properties drive normalization."""

    COMPONENT_NAME = "VEVENT"

    @classmethod
    def new(cls) -> "Event":
        return cls(Component(cls.COMPONENT_NAME))

    @property
    def summary(self) -> Optional[str]:
        return self.get_value("SUMMARY")


class Calendar(_ComponentView):
    """VCALENDAR view exposing its VEVENT children."""

    COMPONENT_NAME = "VCALENDAR"

    @classmethod
    def new(cls) -> "Calendar":
        """Create an empty calendar carrying the product id and version."""
        calendar = cls(Component(cls.COMPONENT_NAME))
        calendar.add_property("PRODID", PRODUCT_ID)
        calendar.add_property("VERSION", ICALENDAR_VERSION)
        return calendar

    @property
    def product_id(self) -> Optional[str]:
        return self.get_value("PRODID")

    @property
    def version(self) -> Optional[str]:
        return self.get_value("VERSION")

    def events(self) -> List[Event]:
        return [Event(child) for child in self.children if child.name == Event.COMPONENT_NAME]

    def stats(self) -> Dict[str, int]:
        """Count components in the calendar by name."""
        counts: Dict[str, int] = {}
        for node in self.component.walk():
            if node is not self.component:
                counts[node.name] = counts.get(node.name, 0) + 1
        return counts
