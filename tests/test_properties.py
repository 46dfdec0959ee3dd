import pytest
from wirebind.compiler.exceptions import UnsupportedPropertyError
from wirebind.compiler.properties import (
    BIND_PROPERTIES,
    PropertyDescriptor,
    ValueKind,
    resolve_property,
)
from wirebind.compiler.tokens import Span


def test_checked_descriptor() -> None:
    assert resolve_property("checked") == PropertyDescriptor(event="change", kind=ValueKind.BOOLEAN)


def test_value_descriptor() -> None:
    assert resolve_property("value") == PropertyDescriptor(event="input", kind=ValueKind.STRING)


def test_table_is_closed() -> None:
    assert set(BIND_PROPERTIES) == {"value", "checked"}


def test_unsupported_property_names_the_property() -> None:
    with pytest.raises(UnsupportedPropertyError, match="property `unknownprop` is not supported") as exc:
        resolve_property("unknownprop")
    assert exc.value.prop == "unknownprop"


def test_unsupported_property_location() -> None:
    span = Span(line=3, column=9, end_line=3, end_column=13, file_path="form.wire")
    with pytest.raises(UnsupportedPropertyError) as exc:
        resolve_property("text", span)
    assert (exc.value.line, exc.value.column) == (3, 9)
    assert str(exc.value).startswith("form.wire:3:9:")


def test_lookup_is_case_sensitive() -> None:
    with pytest.raises(UnsupportedPropertyError):
        resolve_property("Value")


def test_value_kinds() -> None:
    assert ValueKind.BOOLEAN.python_type is bool
    assert ValueKind.STRING.python_type is str
    assert ValueKind.BOOLEAN.to_native == "to_native_bool"
    assert ValueKind.STRING.from_native == "from_native_str"


@pytest.mark.parametrize(
    "value, expected",
    [
        (bool, ValueKind.BOOLEAN),
        (str, ValueKind.STRING),
        ("bool", ValueKind.BOOLEAN),
        ("string", ValueKind.STRING),
        (ValueKind.STRING, ValueKind.STRING),
    ],
)
def test_value_kind_coercion(value, expected) -> None:
    assert ValueKind.coerce(value) is expected


def test_value_kind_coercion_rejects_other_types() -> None:
    with pytest.raises(ValueError):
        ValueKind.coerce(int)
