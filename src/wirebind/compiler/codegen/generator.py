"""Main code generator orchestrator."""

import ast
import logging
from typing import Dict, List, Optional, Sequence, Type

from wirebind.compiler.ast_nodes import (
    Attribute,
    BindDirective,
    DomAttribute,
    EventDirective,
    LoweredAttribute,
    RefDirective,
)
from wirebind.compiler.codegen.attributes.base import AttributeCodegen, LoweringContext
from wirebind.compiler.codegen.attributes.bind import BindAttributeCodegen
from wirebind.compiler.codegen.attributes.dom import DomAttributeCodegen
from wirebind.compiler.codegen.attributes.events import EventAttributeCodegen
from wirebind.compiler.codegen.attributes.ref import RefAttributeCodegen
from wirebind.compiler.exceptions import TypeMismatchError
from wirebind.compiler.properties import PropertyDescriptor, resolve_property
from wirebind.config import CompilerConfig

logger = logging.getLogger(__name__)

RUNTIME_MODULE = "wirebind.runtime.helpers"

# Expression forms that can never evaluate to a reactive cell
_LITERAL_NODES = (
    ast.Constant,
    ast.JoinedStr,
    ast.List,
    ast.Tuple,
    ast.Dict,
    ast.Set,
    ast.ListComp,
    ast.SetComp,
    ast.DictComp,
    ast.Compare,
    ast.Lambda,
)


class CodeGenerator:
    """Lowers parsed attributes into Python statements."""

    def __init__(self, config: Optional[CompilerConfig] = None) -> None:
        self.config = config or CompilerConfig()
        self.attribute_handlers: Dict[type, AttributeCodegen] = {
            DomAttribute: DomAttributeCodegen(),
            EventDirective: EventAttributeCodegen(),
            BindDirective: BindAttributeCodegen(),
            RefDirective: RefAttributeCodegen(),
        }

    def resolve(self, attr: Attribute) -> Optional[PropertyDescriptor]:
        """Resolve a binding's property descriptor and check the bound cell.

        Returns None for attributes that are not bindings.
        """
        if not isinstance(attr.ty, BindDirective):
            return None

        descriptor = resolve_property(attr.ty.prop, attr.ty.span)
        self._check_cell(attr, descriptor)
        logger.debug("resolved bind:%s -> %s", attr.ty.prop, descriptor)
        return descriptor

    def _check_cell(self, attr: Attribute, descriptor: PropertyDescriptor) -> None:
        expr = attr.expr
        prop = attr.ty.prop  # type: ignore[union-attr]
        if isinstance(expr, _LITERAL_NODES):
            raise TypeMismatchError.at(
                f"bind:{prop} expects a reactive cell of "
                f"{descriptor.kind.python_type.__name__}, found `{attr.expr_source}`",
                attr.expr_span,
            )

        if isinstance(expr, ast.Name) and expr.id in self.config.cell_kinds:
            declared = self.config.cell_kinds[expr.id]
            if declared is not descriptor.kind:
                raise TypeMismatchError.at(
                    f"bind:{prop} expects a cell of {descriptor.kind.python_type.__name__}, "
                    f"but `{expr.id}` holds {declared.python_type.__name__}",
                    attr.expr_span,
                )

    def lower(self, attr: Attribute, index: int = 0) -> LoweredAttribute:
        """Lower one attribute into its instruction group.

        Raises DirectiveSyntaxError if the attribute cannot be resolved; nothing
        is emitted for it in that case.
        """
        handler = self._handler_for(type(attr.ty))
        descriptor = self.resolve(attr)
        ctx = LoweringContext(config=self.config, index=index, descriptor=descriptor)
        statements = handler.generate(attr, ctx)
        logger.debug("lowered %s into %d statements", attr, len(statements))
        return LoweredAttribute(
            attribute=attr,
            kind=handler.kind,
            statements=statements,
            descriptor=descriptor,
        )

    def _handler_for(self, ty: Type) -> AttributeCodegen:
        try:
            return self.attribute_handlers[ty]
        except KeyError:
            raise TypeError(f"no code generator registered for {ty.__name__}") from None

    def generate(self, lowered: Sequence[LoweredAttribute]) -> ast.Module:
        """Wrap instruction groups into an importable module.

        The module defines ``def <function_name>(<element_name>)`` which runs
        every group in order against one element.
        """
        config = self.config
        body: List[ast.stmt] = []
        for group in lowered:
            body.extend(group.statements)
        if not body:
            body.append(ast.Pass())

        func = ast.FunctionDef(
            name=config.function_name,
            args=ast.arguments(
                posonlyargs=[],
                args=[ast.arg(arg=config.element_name)],
                vararg=None,
                kwonlyargs=[],
                kw_defaults=[],
                kwarg=None,
                defaults=[],
            ),
            body=body,
            decorator_list=[],
            returns=None,
            type_params=[],
        )

        # from wirebind.runtime import helpers as _wb
        package, _, module = RUNTIME_MODULE.rpartition(".")
        import_stmt = ast.ImportFrom(
            module=package,
            names=[ast.alias(name=module, asname=config.runtime_alias)],
            level=0,
        )

        module_ast = ast.Module(body=[import_stmt, func], type_ignores=[])
        ast.fix_missing_locations(module_ast)
        return module_ast
