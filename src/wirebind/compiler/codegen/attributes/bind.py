"""Two-way binding code generator."""

import ast
from typing import List

from wirebind.compiler.ast_nodes import Attribute, BindDirective
from wirebind.compiler.codegen.attributes.base import (
    AttributeCodegen,
    LoweringContext,
    call,
    closure,
    method,
    user_expr,
)


class BindAttributeCodegen(AttributeCodegen):
    """Keeps a reactive cell and an element property in sync.

    ``bind:value=name`` lowers to::

        _wb_cell_0 = _wb.require_cell(name)
        def _wb_bind_0(_el=_el, _wb_cell=_wb_cell_0):
            _el.set_property('value', _wb.to_native_str(_wb_cell.get()))
        _wb.create_effect(_wb_bind_0)
        def _wb_listen_0(_wb_event, _wb_cell=_wb_cell_0):
            _wb_cell.set(_wb.from_native_str(_wb.event_target_property(_wb_event, 'value')))
        _el.register_event('input', _wb_listen_0)

    The write-back only loops once: the cell ignores writes of its current
    value and the host does not fire events for property sets.
    """

    kind = "bind"

    def generate(self, attr: Attribute, ctx: LoweringContext) -> List[ast.stmt]:
        assert isinstance(attr.ty, BindDirective)
        descriptor = ctx.descriptor
        if descriptor is None:
            raise ValueError(f"bind:{attr.ty.prop} lowered without a resolved descriptor")

        prop = attr.ty.prop
        el = ctx.config.element_name
        cell_var = ctx.local("cell")
        effect_fn = ctx.local("bind")
        listener_fn = ctx.local("listen")
        cell_param = ctx.param("cell")
        event_param = ctx.param("event")

        def cell() -> ast.Name:
            return ast.Name(id=cell_param, ctx=ast.Load())

        bind_cell = ast.Assign(
            targets=[ast.Name(id=cell_var, ctx=ast.Store())],
            value=call(ctx.runtime("require_cell"), user_expr(attr)),
        )

        set_property = ast.Expr(
            value=method(
                ast.Name(id=el, ctx=ast.Load()),
                "set_property",
                ast.Constant(value=prop),
                call(ctx.runtime(descriptor.kind.to_native), method(cell(), "get")),
            )
        )

        write_back = ast.Expr(
            value=method(
                cell(),
                "set",
                call(
                    ctx.runtime(descriptor.kind.from_native),
                    call(
                        ctx.runtime("event_target_property"),
                        ast.Name(id=event_param, ctx=ast.Load()),
                        ast.Constant(value=prop),
                    ),
                ),
            )
        )

        return [
            bind_cell,
            closure(
                effect_fn,
                [set_property],
                captures=[
                    (el, ctx.element()),
                    (cell_param, ast.Name(id=cell_var, ctx=ast.Load())),
                ],
            ),
            ast.Expr(value=call(ctx.runtime("create_effect"), ast.Name(id=effect_fn, ctx=ast.Load()))),
            closure(
                listener_fn,
                [write_back],
                params=[event_param],
                captures=[(cell_param, ast.Name(id=cell_var, ctx=ast.Load()))],
            ),
            ast.Expr(
                value=method(
                    ctx.element(),
                    "register_event",
                    ast.Constant(value=descriptor.event),
                    ast.Name(id=listener_fn, ctx=ast.Load()),
                )
            ),
        ]
