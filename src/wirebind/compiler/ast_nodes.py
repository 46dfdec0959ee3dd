"""AST node definitions for attribute directives."""

import ast
from dataclasses import dataclass, field
from typing import List, Optional, Tuple, Union

from wirebind.compiler.exceptions import DirectiveSyntaxError
from wirebind.compiler.properties import PropertyDescriptor
from wirebind.compiler.tokens import Span


@dataclass(frozen=True)
class AttributeName:
    """A hyphenated attribute name such as ``class`` or ``data-foo-bar``."""

    segments: Tuple[str, ...]
    span: Span = field(compare=False)
    tag_span: Span = field(compare=False)

    @property
    def tag(self) -> str:
        return self.segments[0]

    def __str__(self) -> str:
        return "-".join(self.segments)


@dataclass(frozen=True)
class DomAttribute:
    """Syntax: ``name=expr``."""

    name: AttributeName

    def __str__(self) -> str:
        return f"DomAttribute(name={self.name})"


@dataclass(frozen=True)
class EventDirective:
    """Syntax: ``on:event=handler``."""

    event: str
    span: Span = field(compare=False)

    def __str__(self) -> str:
        return f"EventDirective(event={self.event})"


@dataclass(frozen=True)
class BindDirective:
    """Syntax: ``bind:prop=cell``."""

    prop: str
    span: Span = field(compare=False)

    def __str__(self) -> str:
        return f"BindDirective(prop={self.prop})"


@dataclass(frozen=True)
class RefDirective:
    """Syntax: ``ref=node_ref``."""

    span: Span = field(compare=False)

    def __str__(self) -> str:
        return "RefDirective()"


AttributeType = Union[DomAttribute, EventDirective, BindDirective, RefDirective]


@dataclass
class Attribute:
    """One ``directive=expression`` pair."""

    ty: AttributeType
    expr: ast.expr
    expr_source: str
    span: Span
    expr_span: Span

    def __str__(self) -> str:
        return f"{self.ty} = {self.expr_source}"


@dataclass
class ParsedAttributeList:
    """Result of parsing one parenthesised attribute list.

    ``errors`` holds the diagnostics of attributes that failed to parse; the
    remaining attributes are in ``attributes`` in source order.
    """

    attributes: List[Attribute] = field(default_factory=list)
    errors: List[DirectiveSyntaxError] = field(default_factory=list)
    file_path: str = ""


@dataclass
class LoweredAttribute:
    """Instruction group produced for one attribute.

    ``kind`` is one of ``attribute``, ``event``, ``bind`` or ``ref``.
    ``descriptor`` is only set for bindings.
    """

    attribute: Attribute
    kind: str
    statements: List[ast.stmt]
    descriptor: Optional[PropertyDescriptor] = None
