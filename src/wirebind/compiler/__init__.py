"""Compiler module."""

from wirebind.compiler.build import CompileResult, compile_attributes, lower_attributes
from wirebind.compiler.codegen.generator import CodeGenerator
from wirebind.compiler.parser import AttributeParser, parse_attributes

__all__ = [
    "AttributeParser",
    "CodeGenerator",
    "CompileResult",
    "compile_attributes",
    "lower_attributes",
    "parse_attributes",
]
