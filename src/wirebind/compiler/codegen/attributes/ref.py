"""Node reference code generator."""

import ast
from typing import List

from wirebind.compiler.ast_nodes import Attribute, RefDirective
from wirebind.compiler.codegen.attributes.base import (
    AttributeCodegen,
    LoweringContext,
    method,
    user_expr,
)


class RefAttributeCodegen(AttributeCodegen):
    """``ref=node_ref`` lowers to ``node_ref.assign(_el)``."""

    kind = "ref"

    def generate(self, attr: Attribute, ctx: LoweringContext) -> List[ast.stmt]:
        assert isinstance(attr.ty, RefDirective)
        return [ast.Expr(value=method(user_expr(attr), "assign", ctx.element()))]
