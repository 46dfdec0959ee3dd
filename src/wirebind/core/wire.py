from typing import Any, Generic, Set, TypeVar

from wirebind.core.signals import (
    _TRACKING_STACK,
    Derived,
    ReactivityError,
    notify,
    track,
)

T = TypeVar("T")


class Wire(Generic[T]):
    """Reactive cell.

    Reads through ``get()``/``value`` register the running effect or derived
    as a dependent; writes of a different value re-run the dependents.
    Writing the value the cell already holds is a no-op.
    """

    def __init__(self, value: T):
        self._value = value
        self._subscribers: Set[Any] = set()  # Derived/Effect subscribers
        self._frozen = False

    @property
    def value(self) -> T:
        track(self)
        return self._value

    @value.setter
    def value(self, new_val: T) -> None:
        self._check_frozen()
        if self._value == new_val:
            return
        self._value = new_val
        self._notify_write()

    def get(self) -> T:
        return self.value

    def set(self, new_val: T) -> None:
        self.value = new_val

    def update(self, fn: Any) -> None:
        """Replace the value with ``fn(current)``."""
        self.value = fn(self._value)

    def peek(self) -> T:
        """Read value without tracking dependencies."""
        return self._value

    def freeze(self) -> None:
        """Make the wire read-only."""
        self._frozen = True

    def _check_frozen(self) -> None:
        if self._frozen:
            raise TypeError("Cannot mutate a frozen wire")

    def _notify_write(self) -> None:
        # Guard: No mutation allowed inside Derived
        if _TRACKING_STACK and isinstance(_TRACKING_STACK[-1], Derived):
            raise ReactivityError(
                f"Cannot modify wire state inside a derived (derived fn={_TRACKING_STACK[-1].fn.__name__})"
            )

        notify(self._subscribers)

    def __repr__(self) -> str:
        return f"Wire({self._value!r})"

    def __str__(self) -> str:
        return str(self.value)

    def __format__(self, spec: str) -> str:
        return format(self.value, spec)

    def __bool__(self) -> bool:
        return bool(self.value)

    def __hash__(self) -> int:
        return id(self)

    def __eq__(self, other: Any) -> bool:
        # Avoid recursion if comparing two wires
        if isinstance(other, Wire):
            return self is other
        return self.value == other

    def __ne__(self, other: Any) -> bool:
        if isinstance(other, Wire):
            return self is not other
        return self.value != other

    def __iadd__(self, other: Any) -> "Wire[T]":
        self.value += other
        return self

    def __isub__(self, other: Any) -> "Wire[T]":
        self.value -= other
        return self


def wire(value: T) -> Wire[T]:
    return Wire(value)
