"""Attribute list parser.

Grammar::

    attribute-list      := '(' attribute (',' attribute)* ','? ')'
    attribute           := directive '=' expression
    directive           := 'ref' | qualified-directive | plain-name
    qualified-directive := identifier ':' identifier
    plain-name          := identifier ('-' identifier)*
"""

import ast
import logging
from typing import List, Optional

from wirebind.compiler.ast_nodes import (
    Attribute,
    AttributeName,
    AttributeType,
    BindDirective,
    DomAttribute,
    EventDirective,
    ParsedAttributeList,
    RefDirective,
)
from wirebind.compiler.exceptions import (
    AttributeListSyntaxError,
    DirectiveSyntaxError,
    ExpressionSyntaxError,
    NameParseError,
    UnknownDirectiveError,
)
from wirebind.compiler.tokens import CLOSERS, OP, OPENERS, Token, TokenStream

logger = logging.getLogger(__name__)


def _describe(tok: Token) -> str:
    if tok.kind == "end":
        return "end of input"
    return f"`{tok.text}`"


class AttributeParser:
    """Parses the parenthesised attribute list of a single element."""

    def __init__(self, file_path: str = "", line: int = 1, column: int = 0) -> None:
        self.file_path = file_path
        self.line = line
        self.column = column

    def parse(self, source: str) -> ParsedAttributeList:
        """Parse ``(a=x, on:click=y, ...)``.

        Errors inside one attribute are collected and parsing resumes at the
        next top-level comma. Delimiter errors abort the list and are raised.
        """
        stream = TokenStream.from_source(
            source, line=self.line, column=self.column, file_path=self.file_path
        )
        return self.parse_attribute_list(stream)

    def parse_attribute_list(self, stream: TokenStream) -> ParsedAttributeList:
        result = ParsedAttributeList(file_path=self.file_path)
        opener = stream.next()
        if not opener.is_op("("):
            raise AttributeListSyntaxError.at(
                f"expected `(` to open the attribute list, found {_describe(opener)}",
                opener.span,
            )

        while not stream.peek_op(")"):
            if stream.at_end():
                raise AttributeListSyntaxError.at(
                    "unclosed attribute list, expected `)`", stream.peek().span
                )
            try:
                attr = self.parse_attribute(stream)
                result.attributes.append(attr)
                logger.debug("parsed attribute %s", attr)
            except DirectiveSyntaxError as e:
                logger.info("attribute error: %s", e)
                result.errors.append(e)
                stream.skip_to_separator(")")

            if stream.peek_op(","):
                stream.next()
            elif not stream.peek_op(")"):
                tok = stream.peek()
                if stream.at_end():
                    raise AttributeListSyntaxError.at(
                        "unclosed attribute list, expected `)`", tok.span
                    )
                # Stray closer that does not belong to any attribute
                raise AttributeListSyntaxError.at(
                    f"expected `,` or `)`, found {_describe(tok)}", tok.span
                )

        stream.next()
        if not stream.at_end():
            tok = stream.peek()
            raise AttributeListSyntaxError.at(
                f"unexpected {_describe(tok)} after attribute list", tok.span
            )
        return result

    def parse_attribute(self, stream: TokenStream) -> Attribute:
        first = stream.peek()
        ty = self.parse_attribute_type(stream)

        equals = stream.peek()
        if not equals.is_op("="):
            raise AttributeListSyntaxError.at(
                f"expected `=` after `{self._directive_text(ty)}`, found {_describe(equals)}",
                equals.span,
            )
        stream.next()

        expr, expr_source, expr_span = self.parse_expression(stream)
        return Attribute(
            ty=ty,
            expr=expr,
            expr_source=expr_source,
            span=first.span.to(expr_span),
            expr_span=expr_span,
        )

    def parse_attribute_name(self, stream: TokenStream) -> AttributeName:
        """Parse ``ident ('-' ident)*``; hyphen extension is greedy."""
        tag = stream.peek()
        if not tag.is_identifier:
            raise NameParseError.at(
                f"expected attribute name, found {_describe(tag)}", tag.span
            )
        stream.next()

        segments = [tag.text]
        last = tag
        while stream.peek_op("-"):
            hyphen = stream.next()
            ident = stream.peek()
            if not ident.is_identifier:
                raise NameParseError.at(
                    f"expected identifier after `-` in `{'-'.join(segments)}-`, "
                    f"found {_describe(ident)}",
                    hyphen.span.to(ident.span),
                )
            stream.next()
            segments.append(ident.text)
            last = ident

        return AttributeName(
            segments=tuple(segments), span=tag.span.to(last.span), tag_span=tag.span
        )

    def parse_attribute_type(self, stream: TokenStream) -> AttributeType:
        """Classify the directive in front of ``=``."""
        name = self.parse_attribute_name(stream)
        name_str = str(name)

        if name_str == "ref":
            return RefDirective(span=name.span)

        if stream.peek_op(":"):
            stream.next()
            if name_str not in ("on", "bind"):
                raise UnknownDirectiveError.at(
                    f"unknown directive `{name_str}`", name.tag_span, directive=name_str
                )
            qualifier = stream.peek()
            if not qualifier.is_identifier:
                raise NameParseError.at(
                    f"expected {'event' if name_str == 'on' else 'property'} name "
                    f"after `{name_str}:`, found {_describe(qualifier)}",
                    qualifier.span,
                )
            stream.next()
            if name_str == "on":
                return EventDirective(event=qualifier.text, span=qualifier.span)
            return BindDirective(prop=qualifier.text, span=qualifier.span)

        return DomAttribute(name=name)

    def parse_expression(self, stream: TokenStream):
        """Collect tokens up to the next top-level ``,`` or ``)`` as one expression."""
        tokens: List[Token] = []
        depth: List[str] = []
        while not stream.at_end():
            tok = stream.peek()
            if tok.kind == OP:
                if not depth and tok.text in (",", ")"):
                    break
                if tok.text in OPENERS:
                    depth.append(OPENERS[tok.text])
                elif tok.text in CLOSERS:
                    if not depth or depth[-1] != tok.text:
                        break
                    depth.pop()
            tokens.append(stream.next())

        if not tokens:
            tok = stream.peek()
            raise ExpressionSyntaxError.at(
                f"expected expression after `=`, found {_describe(tok)}", tok.span
            )

        span = tokens[0].span.to(tokens[-1].span)
        if depth:
            raise ExpressionSyntaxError.at("unbalanced brackets in expression", span)

        source = stream.text_between(tokens[0], tokens[-1])
        try:
            # Parenthesised so that expressions may span lines
            tree = ast.parse(f"(\n{source}\n)", mode="eval")
        except SyntaxError as e:
            raise ExpressionSyntaxError.at(f"invalid expression `{source}`: {e.msg}", span)
        return tree.body, source, span

    @staticmethod
    def _directive_text(ty: AttributeType) -> str:
        if isinstance(ty, DomAttribute):
            return str(ty.name)
        if isinstance(ty, EventDirective):
            return f"on:{ty.event}"
        if isinstance(ty, BindDirective):
            return f"bind:{ty.prop}"
        return "ref"


def parse_attributes(
    source: str, file_path: str = "", line: int = 1, column: int = 0
) -> ParsedAttributeList:
    return AttributeParser(file_path=file_path, line=line, column=column).parse(source)


__all__ = ["AttributeParser", "parse_attributes"]
