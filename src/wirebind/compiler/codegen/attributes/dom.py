"""Reactive DOM attribute code generator."""

import ast
from typing import List

from wirebind.compiler.ast_nodes import Attribute, DomAttribute
from wirebind.compiler.codegen.attributes.base import (
    AttributeCodegen,
    LoweringContext,
    call,
    closure,
    method,
    user_expr,
)


class DomAttributeCodegen(AttributeCodegen):
    """Keeps ``name=expr`` in sync with its expression through an effect.

    ``data-id=expr`` lowers to::

        def _wb_attr_0(_el=_el):
            _el.set_attribute('data-id', _wb.display(expr))
        _wb.create_effect(_wb_attr_0)
    """

    kind = "attribute"

    def generate(self, attr: Attribute, ctx: LoweringContext) -> List[ast.stmt]:
        assert isinstance(attr.ty, DomAttribute)
        el = ctx.config.element_name
        fn_name = ctx.local("attr")

        set_attr = ast.Expr(
            value=method(
                ast.Name(id=el, ctx=ast.Load()),
                "set_attribute",
                ast.Constant(value=str(attr.ty.name)),
                call(ctx.runtime("display"), user_expr(attr)),
            )
        )
        return [
            closure(fn_name, [set_attr], captures=[(el, ctx.element())]),
            ast.Expr(value=call(ctx.runtime("create_effect"), ast.Name(id=fn_name, ctx=ast.Load()))),
        ]
