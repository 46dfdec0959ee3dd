import ast

import pytest
from wirebind.compiler.ast_nodes import BindDirective
from wirebind.compiler.build import compile_attributes
from wirebind.compiler.codegen.generator import CodeGenerator
from wirebind.compiler.parser import parse_attributes
from wirebind.compiler.properties import PropertyDescriptor, ValueKind
from wirebind.config import CompilerConfig


def generate(source: str, config: CompilerConfig = None) -> str:
    result = compile_attributes(source, config)
    assert result.ok, result.errors
    code = result.source
    print("\nGenerated Code:\n", code)
    return code


def test_module_shape() -> None:
    code = generate("(class=cls)")
    assert "from wirebind.runtime import helpers as _wb" in code
    assert "def bind_attributes(_el):" in code
    # Round-trips through the Python parser
    ast.parse(code)


def test_dom_attribute_is_a_reactive_effect() -> None:
    code = generate("(data-id=computed_expr)")
    assert "def _wb_attr_0(_el=_el):" in code
    assert "_el.set_attribute('data-id', _wb.display(computed_expr))" in code
    assert "_wb.create_effect(_wb_attr_0)" in code


def test_event_is_registered_once() -> None:
    code = generate("(on:click=my_handler)")
    assert "_el.register_event('click', my_handler)" in code
    # Not wrapped in an effect: handlers are registered a single time
    assert "create_effect" not in code


def test_bind_value() -> None:
    code = generate("(bind:value=my_signal)")
    assert "_wb_cell_0 = _wb.require_cell(my_signal)" in code
    assert "def _wb_bind_0(_el=_el, _wb_cell=_wb_cell_0):" in code
    assert "_el.set_property('value', _wb.to_native_str(_wb_cell.get()))" in code
    assert "_wb.create_effect(_wb_bind_0)" in code
    assert "def _wb_listen_0(_wb_event, _wb_cell=_wb_cell_0):" in code
    assert "_wb_cell.set(_wb.from_native_str(_wb.event_target_property(_wb_event, 'value')))" in code
    assert "_el.register_event('input', _wb_listen_0)" in code


def test_bind_checked() -> None:
    code = generate("(bind:checked=agreed)")
    assert "_el.set_property('checked', _wb.to_native_bool(_wb_cell.get()))" in code
    assert "_wb.from_native_bool(_wb.event_target_property(_wb_event, 'checked'))" in code
    assert "_el.register_event('change', _wb_listen_0)" in code


def test_ref() -> None:
    code = generate("(ref=my_ref)")
    assert "my_ref.assign(_el)" in code
    assert "create_effect" not in code


def test_expressions_are_embedded_verbatim() -> None:
    code = generate("(title=f'{user.name}!', class='on' if active.get() else 'off', ref=refs['x'])")
    assert "_wb.display(f'{user.name}!')" in code
    assert "_wb.display('on' if active.get() else 'off')" in code
    assert "refs['x'].assign(_el)" in code


def test_end_to_end_groups_in_source_order() -> None:
    result = compile_attributes(
        "(bind:value=my_signal, on:click=my_handler, data-id=computed_expr, ref=my_ref)"
    )
    assert result.ok
    assert [group.kind for group in result.lowered] == ["bind", "event", "attribute", "ref"]

    bind = result.lowered[0]
    assert bind.descriptor == PropertyDescriptor(event="input", kind=ValueKind.STRING)
    assert isinstance(bind.attribute.ty, BindDirective)
    assert all(group.descriptor is None for group in result.lowered[1:])

    # Statements appear in the function body group after group
    func = result.module.body[1]
    expected = [stmt for group in result.lowered for stmt in group.statements]
    assert func.body == expected


def test_groups_do_not_share_locals() -> None:
    code = generate("(class=a, title=b, bind:value=c, bind:checked=d)")
    for name in ("_wb_attr_0", "_wb_attr_1", "_wb_cell_2", "_wb_cell_3", "_wb_listen_3"):
        assert f"{name}" in code
    tree = ast.parse(code)
    defined = [node.name for node in ast.walk(tree) if isinstance(node, ast.FunctionDef)]
    assert len(defined) == len(set(defined))


def test_configurable_names() -> None:
    config = CompilerConfig(element_name="node", runtime_alias="rt", function_name="wire_up")
    code = generate("(class=cls, bind:value=text)", config)
    assert "from wirebind.runtime import helpers as rt" in code
    assert "def wire_up(node):" in code
    assert "def rt_attr_0(node=node):" in code
    assert "node.set_attribute('class', rt.display(cls))" in code
    assert "def rt_bind_1(node=node, rt_cell=rt_cell_1):" in code
    assert "def rt_listen_1(rt_event, rt_cell=rt_cell_1):" in code


def test_element_name_may_match_closure_role_names() -> None:
    for element_name in ("_cell", "event"):
        code = generate("(bind:value=text)", CompilerConfig(element_name=element_name))
        assert f"def bind_attributes({element_name}):" in code
        compile(code, "<bind_attributes>", "exec")


def test_empty_list_generates_noop_binder() -> None:
    code = generate("()")
    assert "def bind_attributes(_el):\n    pass" in code


def test_parsed_expression_is_not_mutated_by_lowering() -> None:
    parsed = parse_attributes("(class=cls)")
    attr = parsed.attributes[0]
    before = ast.dump(attr.expr)
    lowered = CodeGenerator().lower(attr)
    assert ast.dump(attr.expr) == before
    assert lowered.statements


def test_unregistered_attribute_type() -> None:
    generator = CodeGenerator()
    attr = parse_attributes("(class=cls)").attributes[0]
    del generator.attribute_handlers[type(attr.ty)]
    with pytest.raises(TypeError, match="no code generator registered"):
        generator.lower(attr)
