"""Base attribute code generator."""

import ast
import copy
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import List, Optional, Sequence, Tuple

from wirebind.compiler.ast_nodes import Attribute
from wirebind.compiler.properties import PropertyDescriptor
from wirebind.config import CompilerConfig


@dataclass(frozen=True)
class LoweringContext:
    """Names and per-attribute data available while lowering one attribute."""

    config: CompilerConfig
    index: int
    descriptor: Optional[PropertyDescriptor] = None

    def local(self, role: str) -> str:
        """Unique local name for this attribute's group."""
        return f"{self.config.runtime_alias}_{role}_{self.index}"

    def param(self, role: str) -> str:
        """Closure parameter name, kept inside the runtime alias namespace."""
        return f"{self.config.runtime_alias}_{role}"

    def element(self) -> ast.Name:
        return ast.Name(id=self.config.element_name, ctx=ast.Load())

    def runtime(self, helper: str) -> ast.Attribute:
        return ast.Attribute(
            value=ast.Name(id=self.config.runtime_alias, ctx=ast.Load()),
            attr=helper,
            ctx=ast.Load(),
        )


class AttributeCodegen(ABC):
    """Base class for attribute code generation."""

    kind: str

    @abstractmethod
    def generate(self, attr: Attribute, ctx: LoweringContext) -> List[ast.stmt]:
        """Generate the statements that wire attr into the element."""


def user_expr(attr: Attribute) -> ast.expr:
    """Fresh copy of the attribute's expression, safe to splice into a new tree."""
    return copy.deepcopy(attr.expr)


def call(func: ast.expr, *args: ast.expr) -> ast.Call:
    return ast.Call(func=func, args=list(args), keywords=[])


def method(obj: ast.expr, name: str, *args: ast.expr) -> ast.Call:
    return call(ast.Attribute(value=obj, attr=name, ctx=ast.Load()), *args)


def closure(
    name: str,
    body: List[ast.stmt],
    params: Sequence[str] = (),
    captures: Sequence[Tuple[str, ast.expr]] = (),
) -> ast.FunctionDef:
    """``def name(*params, capture=value, ...): body``.

    Captured values are bound through default arguments so the closure holds
    its own reference, independent of later rebinding in the enclosing scope.
    """
    args = [ast.arg(arg=p) for p in params] + [ast.arg(arg=c) for c, _ in captures]
    return ast.FunctionDef(
        name=name,
        args=ast.arguments(
            posonlyargs=[],
            args=args,
            vararg=None,
            kwonlyargs=[],
            kw_defaults=[],
            kwarg=None,
            defaults=[value for _, value in captures],
        ),
        body=body,
        decorator_list=[],
        returns=None,
        type_params=[],
    )
