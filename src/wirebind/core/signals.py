"""Dependency tracking for reactive cells, derived values and effects.

Everything here is synchronous and single-threaded: a write to a cell runs
its dependent effects before the write returns.
"""

from contextlib import contextmanager
from typing import Any, Callable, Iterator, List, Optional, Protocol, Set, runtime_checkable


class CircularDependencyError(Exception):
    """Raised when a derived value reads itself while computing."""

    pass


class ReactivityError(Exception):
    """Raised on invalid reactivity operations (e.g. writing state in a derived)."""

    pass


_TRACKING_STACK: list = []  # innermost running Derived/Effect last
_BATCH_DEPTH: int = 0
_PENDING_EFFECTS: List["Effect"] = []

MAX_EFFECT_RERUNS = 100


@runtime_checkable
class Subscriber(Protocol):
    dependencies: Set[Any]

    def execute(self) -> None: ...


def _name(fn: Callable) -> str:
    return getattr(fn, "__name__", repr(fn))


def track(source: Any) -> None:
    """Record a read of ``source`` by the innermost running derived/effect."""
    if _TRACKING_STACK:
        subscriber = _TRACKING_STACK[-1]
        source._subscribers.add(subscriber)
        subscriber.dependencies.add(source)


def notify(subscribers: Set[Any]) -> None:
    """Tell every subscriber that a source it read has changed."""
    start_batch()
    try:
        for sub in list(subscribers):
            sub.execute()
    finally:
        end_batch()


class _Tracker:
    """Shared bookkeeping for things that read reactive sources."""

    def __init__(self, fn: Callable):
        self.fn = fn
        self.dependencies: Set[Any] = set()

    def _forget_dependencies(self) -> None:
        for dep in list(self.dependencies):
            subscribers = getattr(dep, "_subscribers", None)
            if subscribers is not None:
                subscribers.discard(self)
        self.dependencies.clear()

    def _run_tracked(self) -> Any:
        self._forget_dependencies()
        _TRACKING_STACK.append(self)
        try:
            return self.fn()
        finally:
            _TRACKING_STACK.pop()


class Derived(_Tracker):
    """Lazy, memoized computed value. Auto-tracks wire dependencies."""

    def __init__(self, fn: Callable[[], Any]):
        super().__init__(fn)
        # Strong refs: effects stay alive while a source they read is alive
        self._subscribers: Set[Subscriber] = set()
        self._cache: Any = None
        self._dirty: bool = True
        self._computing: bool = False

    @property
    def value(self) -> Any:
        if self._computing:
            raise CircularDependencyError(
                f"Circular dependency detected in derived (fn={_name(self.fn)})"
            )

        if self._dirty:
            self._computing = True
            try:
                self._cache = self._run_tracked()
            finally:
                self._computing = False
            self._dirty = False

        track(self)
        return self._cache

    def get(self) -> Any:
        return self.value

    def peek(self) -> Any:
        """Last computed value, without tracking or recomputing."""
        return self._cache

    def execute(self) -> None:
        """Mark stale and pass the invalidation downstream."""
        if self._dirty:
            return
        self._dirty = True
        for sub in list(self._subscribers):
            sub.execute()

    def __str__(self) -> str:
        return str(self.value)

    def __format__(self, format_spec: str) -> str:
        return format(self.value, format_spec)

    def __bool__(self) -> bool:
        return bool(self.value)

    def __repr__(self) -> str:
        return f"derived({self._cache!r}, dirty={self._dirty})"


class Effect(_Tracker):
    """Side-effect that auto-runs when dependencies change.

    Runs once on creation, then synchronously on every change of a value it
    read during its previous run. A write made by the effect's own body to
    one of its dependencies queues a single follow-up run instead of
    recursing.
    """

    def __init__(self, fn: Callable[[], None]):
        super().__init__(fn)
        self.runs: int = 0
        self._disposed: bool = False
        self._running: bool = False
        self._rerun: bool = False
        self.execute()

    @property
    def disposed(self) -> bool:
        return self._disposed

    def execute(self) -> None:
        if self._disposed:
            return

        if self._running:
            self._rerun = True
            return

        if _BATCH_DEPTH > 0:
            if self not in _PENDING_EFFECTS:
                _PENDING_EFFECTS.append(self)
            return

        self._running = True
        try:
            self._run_until_settled()
        finally:
            self._running = False

    def _run_until_settled(self) -> None:
        for _ in range(MAX_EFFECT_RERUNS + 1):
            self._rerun = False
            self.runs += 1
            self._run_tracked()
            if not self._rerun or self._disposed:
                return
        raise ReactivityError(f"Effect keeps re-triggering itself (fn={_name(self.fn)})")

    def dispose(self) -> None:
        self._disposed = True
        self._forget_dependencies()


def derived(fn: Callable[[], Any]) -> Derived:
    return Derived(fn)


def effect(fn: Callable[[], None]) -> Effect:
    return Effect(fn)


create_effect = effect


def start_batch() -> None:
    global _BATCH_DEPTH
    _BATCH_DEPTH += 1


def end_batch() -> None:
    global _BATCH_DEPTH
    _BATCH_DEPTH -= 1
    if _BATCH_DEPTH == 0:
        # Effects queued while flushing run in the same loop. A failing
        # effect does not stop the rest of the queue; the first error is
        # raised once the queue is empty.
        error: Optional[BaseException] = None
        while _PENDING_EFFECTS:
            try:
                _PENDING_EFFECTS.pop(0).execute()
            except Exception as e:
                if error is None:
                    error = e
        if error is not None:
            raise error


@contextmanager
def batch() -> Iterator[None]:
    """Defer effects until the outermost ``batch()`` block exits."""
    start_batch()
    try:
        yield
    finally:
        end_batch()
