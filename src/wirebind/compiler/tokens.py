"""Token stream over an attribute list.

Attribute lists use Python's own lexical grammar: identifiers, operators and
the embedded value expressions are all produced by :mod:`tokenize`.
Keyword spellings (``class``, ``for``) arrive as NAME tokens, which is what
lets ``ref``, ``on`` and ``bind`` double as plain attribute names.
"""

import io
import tokenize
from dataclasses import dataclass
from typing import List, Optional

from wirebind.compiler.exceptions import AttributeListSyntaxError

NAME = "name"
OP = "op"
NUMBER = "number"
STRING = "string"
ERROR = "error"
END = "end"

_KIND_BY_TYPE = {
    tokenize.NAME: NAME,
    tokenize.OP: OP,
    tokenize.NUMBER: NUMBER,
    tokenize.STRING: STRING,
    tokenize.ERRORTOKEN: ERROR,
}

# Produced by tokenize but meaningless inside a parenthesised list
_SKIPPED = {
    tokenize.NL,
    tokenize.NEWLINE,
    tokenize.COMMENT,
    tokenize.INDENT,
    tokenize.DEDENT,
    tokenize.ENCODING,
}

OPENERS = {"(": ")", "[": "]", "{": "}"}
CLOSERS = {")", "]", "}"}


@dataclass(frozen=True)
class Span:
    """Source location of a token or a run of tokens (1-based lines, 0-based columns)."""

    line: int
    column: int
    end_line: int
    end_column: int
    file_path: str = ""

    def to(self, other: "Span") -> "Span":
        """Span from the start of self to the end of other."""
        return Span(self.line, self.column, other.end_line, other.end_column, self.file_path)

    def __str__(self) -> str:
        prefix = f"{self.file_path}:" if self.file_path else ""
        return f"{prefix}{self.line}:{self.column}"


@dataclass(frozen=True)
class Token:
    kind: str
    text: str
    span: Span
    start: int  # offset into the tokenized source
    end: int

    def is_op(self, text: str) -> bool:
        return self.kind == OP and self.text == text

    @property
    def is_identifier(self) -> bool:
        return self.kind == NAME


class _LineIndex:
    """Maps tokenize (row, col) pairs to offsets and shifted spans."""

    def __init__(self, source: str, line: int, column: int, file_path: str):
        self.starts = [0]
        for i, ch in enumerate(source):
            if ch == "\n":
                self.starts.append(i + 1)
        self.line = line
        self.column = column
        self.file_path = file_path

    def offset(self, row: int, col: int) -> int:
        if row - 1 >= len(self.starts):
            return self.starts[-1] + col
        return self.starts[row - 1] + col

    def position(self, row: int, col: int) -> tuple:
        # Only the first source line is shifted horizontally
        shifted_col = col + self.column if row == 1 else col
        return row + self.line - 1, shifted_col

    def span(self, start: tuple, end: tuple) -> Span:
        line, column = self.position(*start)
        end_line, end_column = self.position(*end)
        return Span(line, column, end_line, end_column, self.file_path)


def tokenize_attributes(
    source: str, line: int = 1, column: int = 0, file_path: str = ""
) -> List[Token]:
    """Tokenize an attribute list.

    ``line`` and ``column`` give the position of ``source`` inside its template
    so spans point at the template, not at the isolated snippet.
    """
    stripped = source.lstrip()
    skipped = source[: len(source) - len(stripped)]
    if "\n" in skipped:
        line += skipped.count("\n")
        column = len(skipped) - skipped.rfind("\n") - 1
    else:
        column += len(skipped)
    source = stripped.rstrip()

    index = _LineIndex(source, line, column, file_path)
    tokens: List[Token] = []
    try:
        for tok in tokenize.generate_tokens(io.StringIO(source).readline):
            if tok.type in _SKIPPED:
                continue
            span = index.span(tok.start, tok.end)
            start = index.offset(*tok.start)
            end = index.offset(*tok.end)
            if tok.type == tokenize.ENDMARKER:
                tokens.append(Token(END, "", span, start, end))
                break
            kind = _KIND_BY_TYPE.get(tok.type, ERROR)
            tokens.append(Token(kind, tok.string, span, start, end))
    except (tokenize.TokenError, SyntaxError) as e:
        where = index.span((1, 0), (1, 0))
        raise AttributeListSyntaxError.at(f"cannot tokenize attribute list: {e}", where)

    if not tokens or tokens[-1].kind != END:
        last = tokens[-1].span if tokens else index.span((1, 0), (1, 0))
        tokens.append(Token(END, "", last, len(source), len(source)))
    return tokens


class TokenStream:
    """Cursor over a token list with single-token lookahead."""

    def __init__(self, tokens: List[Token], source: str):
        self.tokens = tokens
        self.source = source
        self.pos = 0

    @classmethod
    def from_source(
        cls, source: str, line: int = 1, column: int = 0, file_path: str = ""
    ) -> "TokenStream":
        tokens = tokenize_attributes(source, line=line, column=column, file_path=file_path)
        return cls(tokens, source.strip())

    def peek(self, ahead: int = 0) -> Token:
        index = min(self.pos + ahead, len(self.tokens) - 1)
        return self.tokens[index]

    def next(self) -> Token:
        tok = self.peek()
        if tok.kind != END:
            self.pos += 1
        return tok

    def peek_op(self, text: str) -> bool:
        return self.peek().is_op(text)

    def at_end(self) -> bool:
        return self.peek().kind == END

    def text_between(self, first: Token, last: Token) -> str:
        return self.source[first.start : last.end]

    def skip_to_separator(self, closer: Optional[str] = ")") -> None:
        """Advance to the next top-level ``,`` or to ``closer`` without consuming it."""
        depth: List[str] = []
        while not self.at_end():
            tok = self.peek()
            if tok.kind == OP:
                if not depth and (tok.text == "," or tok.text == closer):
                    return
                if tok.text in OPENERS:
                    depth.append(OPENERS[tok.text])
                elif tok.text in CLOSERS:
                    if depth and depth[-1] == tok.text:
                        depth.pop()
                    elif not depth:
                        return
            self.next()
