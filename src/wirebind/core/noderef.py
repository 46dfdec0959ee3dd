from typing import Generic, Optional, TypeVar

N = TypeVar("N")


class NodeRef(Generic[N]):
    """Holds a shared handle to an element once it is constructed."""

    def __init__(self) -> None:
        self._node: Optional[N] = None

    def assign(self, node: N) -> None:
        self._node = node

    def get(self) -> N:
        if self._node is None:
            raise RuntimeError("NodeRef has not been assigned an element yet")
        return self._node

    def is_set(self) -> bool:
        return self._node is not None

    def __repr__(self) -> str:
        return f"NodeRef({self._node!r})"


def node_ref() -> NodeRef:
    return NodeRef()
