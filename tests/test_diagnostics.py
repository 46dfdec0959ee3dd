from textwrap import dedent

import pytest
from wirebind.compiler.ast_nodes import DomAttribute, EventDirective
from wirebind.compiler.build import compile_attributes
from wirebind.compiler.exceptions import (
    AttributeCompileError,
    AttributeListSyntaxError,
    ExpressionSyntaxError,
    NameParseError,
    TypeMismatchError,
    UnknownDirectiveError,
    UnsupportedPropertyError,
)
from wirebind.compiler.parser import parse_attributes
from wirebind.config import CompilerConfig


def test_bad_attribute_does_not_stop_its_sibling() -> None:
    result = compile_attributes("(123=x, class=y)")
    assert len(result.errors) == 1
    assert isinstance(result.errors[0], NameParseError)
    assert len(result.lowered) == 1
    assert str(result.lowered[0].attribute.ty.name) == "class"
    assert "_el.set_attribute('class', _wb.display(y))" in result.source


def test_unsupported_property_emits_nothing() -> None:
    result = compile_attributes("(bind:unknownprop=cell, on:click=handler)")
    assert len(result.errors) == 1
    err = result.errors[0]
    assert isinstance(err, UnsupportedPropertyError)
    assert err.prop == "unknownprop"
    # Located at the property token
    assert (err.line, err.column) == (1, 6)
    assert [group.kind for group in result.lowered] == ["event"]
    assert "unknownprop" not in result.source
    assert "cell" not in result.source


def test_errors_accumulate_per_attribute() -> None:
    result = compile_attributes("(style:color=c, bind:text=t, class=, ok=1, data-1=2)")
    kinds = [type(e) for e in result.errors]
    assert kinds == [
        UnknownDirectiveError,
        UnsupportedPropertyError,
        ExpressionSyntaxError,
        NameParseError,
    ]
    assert [str(g.attribute.ty.name) for g in result.lowered] == ["ok"]


def test_hyphenated_directive_regression() -> None:
    result = compile_attributes("(data-on:click=handler, on:click=handler)")
    assert len(result.errors) == 1
    assert isinstance(result.errors[0], UnknownDirectiveError)
    assert result.errors[0].directive == "data-on"
    assert isinstance(result.lowered[0].attribute.ty, EventDirective)


def test_missing_equals() -> None:
    parsed = parse_attributes("(disabled, class=x)")
    assert isinstance(parsed.errors[0], AttributeListSyntaxError)
    assert "expected `=` after `disabled`" in parsed.errors[0].message
    assert isinstance(parsed.attributes[0].ty, DomAttribute)


def test_invalid_expression() -> None:
    parsed = parse_attributes("(class=a b, title=t)")
    assert isinstance(parsed.errors[0], ExpressionSyntaxError)
    assert "invalid expression `a b`" in parsed.errors[0].message
    assert len(parsed.attributes) == 1


def test_expression_may_contain_commas_in_brackets() -> None:
    parsed = parse_attributes("(class=fmt(a, b), data-xs=[1, 2], title={'k': v}[k])")
    assert not parsed.errors
    assert [a.expr_source for a in parsed.attributes] == ["fmt(a, b)", "[1, 2]", "{'k': v}[k]"]


def test_trailing_comma_and_empty_list() -> None:
    assert len(parse_attributes("(class=x,)").attributes) == 1
    assert parse_attributes("()").attributes == []


@pytest.mark.parametrize(
    "source, message",
    [
        ("class=x", r"expected `\(`"),
        ("(class=x", "cannot tokenize"),
        ("(class=x) extra", "unexpected `extra` after attribute list"),
        # Depending on the interpreter the tokenizer itself rejects the stray bracket
        ("(class=x])", r"expected `,` or `\)`|cannot tokenize"),
    ],
)
def test_list_delimiter_errors_are_raised(source: str, message: str) -> None:
    with pytest.raises(AttributeListSyntaxError, match=message):
        compile_attributes(source)


def test_multiline_list_locations() -> None:
    source = dedent(
        """
        (
            class=cls,
            bind:nope=value,
        )
        """
    )
    config = CompilerConfig(file_path="pages/form.wire", line=10, column=4)
    result = compile_attributes(source, config)
    err = result.errors[0]
    # `(` sits on template line 11; `nope` two lines further down
    assert (err.line, err.column) == (13, 9)
    assert str(err) == "pages/form.wire:13:9: property `nope` is not supported with bind:"


def test_first_line_is_shifted_by_column() -> None:
    config = CompilerConfig(line=5, column=10)
    result = compile_attributes("(bind:nope=v)", config)
    assert (result.errors[0].line, result.errors[0].column) == (5, 16)


def test_literal_is_never_a_cell() -> None:
    result = compile_attributes("(bind:value='text')")
    assert isinstance(result.errors[0], TypeMismatchError)
    assert "expects a reactive cell of str" in result.errors[0].message
    assert not result.lowered


def test_declared_cell_kind_mismatch() -> None:
    config = CompilerConfig(cell_kinds={"agreed": bool, "name": str})
    result = compile_attributes("(bind:value=agreed, bind:checked=agreed, bind:value=name)", config)
    assert len(result.errors) == 1
    assert isinstance(result.errors[0], TypeMismatchError)
    assert "`agreed` holds bool" in result.errors[0].message
    assert [g.attribute.ty.prop for g in result.lowered] == ["checked", "value"]


def test_raise_for_errors() -> None:
    result = compile_attributes("(style:x=1, bind:nope=2)")
    with pytest.raises(AttributeCompileError) as exc:
        result.raise_for_errors()
    assert len(exc.value.errors) == 2
    assert "2 attribute errors" in str(exc.value)
    assert compile_attributes("(class=x)").raise_for_errors().ok
