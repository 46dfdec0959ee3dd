"""Event attribute code generator."""

import ast
from typing import List

from wirebind.compiler.ast_nodes import Attribute, EventDirective
from wirebind.compiler.codegen.attributes.base import (
    AttributeCodegen,
    LoweringContext,
    method,
    user_expr,
)


class EventAttributeCodegen(AttributeCodegen):
    """Registers ``on:event=handler`` once, at construction.

    The handler expression is evaluated a single time and is not tracked:
    later changes to whatever it reads do not re-register it.
    """

    kind = "event"

    def generate(self, attr: Attribute, ctx: LoweringContext) -> List[ast.stmt]:
        assert isinstance(attr.ty, EventDirective)
        # TODO: decide whether handlers should re-register when their expression changes
        return [
            ast.Expr(
                value=method(
                    ctx.element(),
                    "register_event",
                    ast.Constant(value=attr.ty.event),
                    user_expr(attr),
                )
            )
        ]
