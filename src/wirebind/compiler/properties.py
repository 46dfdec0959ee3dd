"""Property table for ``bind:`` directives.

The table is closed: supporting another property means adding a row to
``BIND_PROPERTIES``, never changing how lookups work.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Dict, Optional

from wirebind.compiler.exceptions import UnsupportedPropertyError
from wirebind.compiler.tokens import Span


class ValueKind(Enum):
    BOOLEAN = "bool"
    STRING = "str"

    @property
    def python_type(self) -> type:
        """Type held by a cell bound to a property of this kind."""
        return bool if self is ValueKind.BOOLEAN else str

    @property
    def to_native(self) -> str:
        """Runtime helper converting a cell value into a host value."""
        return f"to_native_{self.value}"

    @property
    def from_native(self) -> str:
        """Runtime helper converting a host value back into a cell value."""
        return f"from_native_{self.value}"

    @classmethod
    def coerce(cls, value: "ValueKind | type | str") -> "ValueKind":
        if isinstance(value, ValueKind):
            return value
        if value is bool:
            return cls.BOOLEAN
        if value is str:
            return cls.STRING
        if isinstance(value, str):
            for kind in cls:
                if value.lower() in (kind.value, kind.name.lower()):
                    return kind
        raise ValueError(f"not a bindable value kind: {value!r}")


@dataclass(frozen=True)
class PropertyDescriptor:
    event: str
    kind: ValueKind


BIND_PROPERTIES: Dict[str, PropertyDescriptor] = {
    "value": PropertyDescriptor(event="input", kind=ValueKind.STRING),
    "checked": PropertyDescriptor(event="change", kind=ValueKind.BOOLEAN),
}


def resolve_property(prop: str, span: Optional[Span] = None) -> PropertyDescriptor:
    """Look up the change event and value kind for a bindable property."""
    try:
        return BIND_PROPERTIES[prop]
    except KeyError:
        message = f"property `{prop}` is not supported with bind:"
        if span is None:
            raise UnsupportedPropertyError(message, prop=prop) from None
        raise UnsupportedPropertyError.at(message, span, prop=prop) from None
