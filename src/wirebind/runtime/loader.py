"""Binder loader - compiles attribute lists and executes the generated module."""

import hashlib
import linecache
import logging
from types import ModuleType
from typing import Any, Callable, Dict, Mapping, Optional, Tuple

from wirebind.compiler.build import CompileResult, compile_attributes
from wirebind.config import CompilerConfig
from wirebind.core.node import GenericNode

logger = logging.getLogger(__name__)

Binder = Callable[[GenericNode], None]


class BinderLoader:
    """Compiles attribute lists into callables that wire up one element."""

    def __init__(self, config: Optional[CompilerConfig] = None) -> None:
        self.config = config or CompilerConfig()
        self._cache: Dict[Tuple[str, tuple], Tuple[Any, str]] = {}  # -> (code, filename)

    def compile(self, source: str) -> CompileResult:
        return compile_attributes(source, self.config)

    def load(self, source: str, scope: Optional[Mapping[str, Any]] = None) -> Binder:
        """Compile ``source`` and return ``bind(element)``.

        Names used by the attribute expressions are looked up in ``scope``.
        Raises AttributeCompileError if any attribute fails to compile.
        """
        key = (source, self.config.cache_key())
        cached = self._cache.get(key)
        if cached is None:
            result = self.compile(source).raise_for_errors()
            generated = result.source + "\n"
            filename = self._filename(source)
            # Keep generated source visible in tracebacks
            linecache.cache[filename] = (
                len(generated),
                None,
                generated.splitlines(True),
                filename,
            )
            code = compile(generated, filename, "exec")
            cached = (code, filename)
            self._cache[key] = cached
            logger.debug("compiled binder %s", filename)

        code, filename = cached
        module = ModuleType("wirebind_binder")
        module.__dict__.update(scope or {})
        module.__dict__["__file__"] = filename
        exec(code, module.__dict__)
        return module.__dict__[self.config.function_name]

    def bind(
        self, source: str, element: GenericNode, scope: Optional[Mapping[str, Any]] = None
    ) -> None:
        """Compile (cached) and immediately apply the attribute list to element."""
        self.load(source, scope)(element)

    def clear_cache(self) -> None:
        for _, filename in self._cache.values():
            linecache.cache.pop(filename, None)
        self._cache.clear()

    def _filename(self, source: str) -> str:
        digest = hashlib.md5(source.encode("utf-8")).hexdigest()[:12]
        origin = self.config.file_path or "attributes"
        return f"<wirebind:{origin}:{digest}>"
