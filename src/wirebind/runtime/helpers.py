"""Runtime helpers referenced by generated binding code as ``_wb.<name>``."""

from typing import Any

from wirebind.core.signals import create_effect

__all__ = [
    "create_effect",
    "display",
    "event_target_property",
    "from_native_bool",
    "from_native_str",
    "require_cell",
    "to_native_bool",
    "to_native_str",
]


def display(value: Any) -> str:
    """Uniform string form used for every reactive attribute value."""
    return format(value)


def to_native_bool(value: Any) -> bool:
    if not isinstance(value, bool):
        raise TypeError(f"bound cell must hold a bool, got {type(value).__name__}: {value!r}")
    return value


def to_native_str(value: Any) -> str:
    return format(value)


def from_native_bool(value: Any) -> bool:
    if not isinstance(value, bool):
        raise TypeError(f"expected a boolean property from the host, got {value!r}")
    return value


def from_native_str(value: Any) -> str:
    if not isinstance(value, str):
        raise TypeError(f"expected a string property from the host, got {value!r}")
    return value


def require_cell(value: Any) -> Any:
    """Reject ``bind:`` targets that cannot be both read and written."""
    for name in ("get", "set"):
        if not callable(getattr(value, name, None)):
            raise TypeError(
                f"bind: target must be a reactive cell with get() and set(), "
                f"got {type(value).__name__}"
            )
    return value


def event_target_property(event: Any, prop: str) -> Any:
    """Read ``prop`` off the element that fired ``event``."""
    target = getattr(event, "target", None)
    if target is None:
        raise RuntimeError(f"event {getattr(event, 'type', event)!r} has no target")
    getter = getattr(target, "get_property", None)
    if getter is not None:
        return getter(prop)
    return getattr(target, prop)
