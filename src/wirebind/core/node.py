"""Host element abstraction used by generated binding code."""

import logging
from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Optional, Protocol, runtime_checkable

logger = logging.getLogger(__name__)

EventHandler = Callable[["Event"], Any]


@runtime_checkable
class GenericNode(Protocol):
    """What generated code needs from an element."""

    def set_attribute(self, name: str, value: str) -> None: ...

    def set_property(self, name: str, value: Any) -> None: ...

    def register_event(self, name: str, handler: EventHandler) -> None: ...


@dataclass
class Event:
    type: str
    target: Any = None


class VirtualNode:
    """In-memory element.

    Attributes are strings, properties are native values. Assigning a property
    never dispatches an event; only :meth:`dispatch` (or the ``input``/
    ``toggle`` helpers standing in for user interaction) does.
    """

    def __init__(self, tag: str = "div") -> None:
        self.tag = tag
        self.attributes: Dict[str, str] = {}
        self.properties: Dict[str, Any] = {}
        self.listeners: Dict[str, List[EventHandler]] = {}
        self.attribute_writes: int = 0
        self.property_writes: int = 0

    def set_attribute(self, name: str, value: str) -> None:
        self.attribute_writes += 1
        self.attributes[name] = value

    def get_attribute(self, name: str) -> Optional[str]:
        return self.attributes.get(name)

    def set_property(self, name: str, value: Any) -> None:
        self.property_writes += 1
        self.properties[name] = value

    def get_property(self, name: str, default: Any = None) -> Any:
        return self.properties.get(name, default)

    def register_event(self, name: str, handler: EventHandler) -> None:
        if not callable(handler):
            raise TypeError(f"handler for '{name}' must be callable, got {type(handler).__name__}")
        self.listeners.setdefault(name, []).append(handler)

    def dispatch(self, name: str, event: Optional[Event] = None) -> Event:
        event = event or Event(type=name, target=self)
        handlers = list(self.listeners.get(name, ()))
        logger.debug("dispatch %s on <%s> to %d handlers", name, self.tag, len(handlers))
        for handler in handlers:
            handler(event)
        return event

    def input(self, text: str) -> Event:
        """Simulate typing: update ``value`` then fire ``input``."""
        self.properties["value"] = text
        return self.dispatch("input")

    def toggle(self, checked: Optional[bool] = None) -> Event:
        """Simulate a checkbox click: update ``checked`` then fire ``change``."""
        current = bool(self.properties.get("checked", False))
        self.properties["checked"] = (not current) if checked is None else checked
        return self.dispatch("change")

    def __repr__(self) -> str:
        return f"<{self.tag} attributes={self.attributes!r} properties={self.properties!r}>"
