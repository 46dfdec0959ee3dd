try:
    from ._version import __version__
except ImportError:
    from importlib.metadata import version, PackageNotFoundError

    try:
        __version__ = version("wirebind")
    except PackageNotFoundError:
        __version__ = "unknown"

from wirebind.compiler import CompileResult, compile_attributes
from wirebind.compiler.exceptions import (
    AttributeCompileError,
    DirectiveSyntaxError,
    NameParseError,
    TypeMismatchError,
    UnknownDirectiveError,
    UnsupportedPropertyError,
)
from wirebind.config import CompilerConfig
from wirebind.core.node import Event, VirtualNode
from wirebind.core.noderef import NodeRef, node_ref
from wirebind.core.signals import (
    derived,
    effect,
    CircularDependencyError,
    ReactivityError,
)
from wirebind.core.wire import Wire, wire
from wirebind.runtime.loader import BinderLoader

__all__ = [
    "AttributeCompileError",
    "BinderLoader",
    "CircularDependencyError",
    "CompileResult",
    "CompilerConfig",
    "DirectiveSyntaxError",
    "Event",
    "NameParseError",
    "NodeRef",
    "ReactivityError",
    "TypeMismatchError",
    "UnknownDirectiveError",
    "UnsupportedPropertyError",
    "VirtualNode",
    "Wire",
    "compile_attributes",
    "derived",
    "effect",
    "node_ref",
    "wire",
]
