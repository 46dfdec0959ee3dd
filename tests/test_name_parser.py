import pytest
from wirebind.compiler.exceptions import NameParseError
from wirebind.compiler.parser import AttributeParser
from wirebind.compiler.tokens import TokenStream


def parse_name(source: str):
    stream = TokenStream.from_source(source)
    name = AttributeParser().parse_attribute_name(stream)
    return name, stream


@pytest.mark.parametrize(
    "source, expected",
    [
        ("a", "a"),
        ("a-b", "a-b"),
        ("a-b-c", "a-b-c"),
        ("data-foo", "data-foo"),
        ("aria-label", "aria-label"),
    ],
)
def test_dashed_display_form(source: str, expected: str) -> None:
    name, stream = parse_name(source)
    assert str(name) == expected
    assert stream.at_end()


def test_segments_and_tag() -> None:
    name, _ = parse_name("data-user-id")
    assert name.segments == ("data", "user", "id")
    assert name.tag == "data"


def test_keyword_spellings_are_identifiers() -> None:
    for word in ("class", "for", "ref", "on", "bind", "None", "lambda"):
        name, _ = parse_name(word)
        assert str(name) == word


def test_hyphen_extension_is_greedy() -> None:
    name, stream = parse_name("x-y=1")
    assert str(name) == "x-y"
    assert stream.peek_op("=")


def test_name_stops_before_colon() -> None:
    name, stream = parse_name("on:click")
    assert str(name) == "on"
    assert stream.peek_op(":")


def test_first_token_must_be_identifier() -> None:
    with pytest.raises(NameParseError, match="expected attribute name"):
        parse_name("123")

    with pytest.raises(NameParseError, match="expected attribute name"):
        parse_name("'quoted'")


def test_dangling_hyphen_is_an_error_not_a_shorter_name() -> None:
    # A hyphen must be followed by an identifier; `data-` never parses as `data`
    with pytest.raises(NameParseError, match="after `-`"):
        parse_name("data-")

    with pytest.raises(NameParseError, match="after `-` in `data-`"):
        parse_name("data-1")


def test_name_spans() -> None:
    name, _ = parse_name("data-foo")
    assert (name.span.line, name.span.column) == (1, 0)
    assert name.span.end_column == 8
    assert name.tag_span.end_column == 4


def test_structural_equality() -> None:
    a, _ = parse_name("data-foo")
    b, _ = parse_name("data - foo")
    assert a == b
    assert str(b) == "data-foo"
