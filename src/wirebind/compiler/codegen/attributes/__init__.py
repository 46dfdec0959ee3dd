"""Attribute code generators."""

from wirebind.compiler.codegen.attributes.base import AttributeCodegen, LoweringContext
from wirebind.compiler.codegen.attributes.bind import BindAttributeCodegen
from wirebind.compiler.codegen.attributes.dom import DomAttributeCodegen
from wirebind.compiler.codegen.attributes.events import EventAttributeCodegen
from wirebind.compiler.codegen.attributes.ref import RefAttributeCodegen

__all__ = [
    "AttributeCodegen",
    "LoweringContext",
    "BindAttributeCodegen",
    "DomAttributeCodegen",
    "EventAttributeCodegen",
    "RefAttributeCodegen",
]
