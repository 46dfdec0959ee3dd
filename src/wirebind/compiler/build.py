"""Attribute list compilation pipeline: parse, classify, resolve, lower."""

import ast
import logging
from dataclasses import dataclass, field
from typing import List, Optional

from wirebind.compiler.ast_nodes import LoweredAttribute, ParsedAttributeList
from wirebind.compiler.codegen.generator import CodeGenerator
from wirebind.compiler.exceptions import AttributeCompileError, DirectiveSyntaxError
from wirebind.compiler.parser import AttributeParser
from wirebind.config import CompilerConfig

logger = logging.getLogger(__name__)


@dataclass
class CompileResult:
    """Instruction groups and diagnostics for one attribute list."""

    lowered: List[LoweredAttribute] = field(default_factory=list)
    errors: List[DirectiveSyntaxError] = field(default_factory=list)
    module: Optional[ast.Module] = None

    @property
    def ok(self) -> bool:
        return not self.errors

    @property
    def source(self) -> str:
        """Generated Python source, empty when nothing was generated."""
        if self.module is None:
            return ""
        return ast.unparse(self.module)

    def raise_for_errors(self) -> "CompileResult":
        if self.errors:
            raise AttributeCompileError(self.errors)
        return self


def lower_attributes(
    parsed: ParsedAttributeList, config: Optional[CompilerConfig] = None
) -> CompileResult:
    """Lower every parsed attribute independently.

    A failing attribute contributes one diagnostic and no statements; its
    siblings are lowered as usual. Parse errors carried by ``parsed`` are
    reported alongside, in source order.
    """
    codegen = CodeGenerator(config)
    result = CompileResult(errors=list(parsed.errors))

    for index, attr in enumerate(parsed.attributes):
        try:
            result.lowered.append(codegen.lower(attr, index))
        except DirectiveSyntaxError as e:
            logger.info("attribute error: %s", e)
            result.errors.append(e)

    result.errors.sort(key=lambda e: (e.line, e.column))
    result.module = codegen.generate(result.lowered)
    return result


def compile_attributes(source: str, config: Optional[CompilerConfig] = None) -> CompileResult:
    """Compile ``(name=expr, on:event=handler, bind:prop=cell, ref=node_ref)``."""
    config = config or CompilerConfig()
    parser = AttributeParser(file_path=config.file_path, line=config.line, column=config.column)
    parsed = parser.parse(source)
    result = lower_attributes(parsed, config)
    logger.debug(
        "compiled %d attributes with %d errors", len(result.lowered), len(result.errors)
    )
    return result
