"""Code generation for attribute directives."""

from wirebind.compiler.codegen.generator import CodeGenerator

__all__ = ["CodeGenerator"]
