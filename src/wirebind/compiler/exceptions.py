"""Compiler exceptions."""

from __future__ import annotations

from typing import TYPE_CHECKING, List, Optional, Sequence

if TYPE_CHECKING:
    from wirebind.compiler.tokens import Span


class DirectiveSyntaxError(Exception):
    """Raised when an attribute directive is invalid."""

    def __init__(
        self,
        message: str,
        file_path: str = "",
        line: int = 0,
        column: int = 0,
        end_line: Optional[int] = None,
        end_column: Optional[int] = None,
    ):
        self.message = message
        self.file_path = file_path
        self.line = line
        self.column = column
        self.end_line = end_line if end_line is not None else line
        self.end_column = end_column if end_column is not None else column
        super().__init__(message)

    @classmethod
    def at(cls, message: str, span: Span, **kwargs) -> DirectiveSyntaxError:
        return cls(
            message,
            file_path=span.file_path,
            line=span.line,
            column=span.column,
            end_line=span.end_line,
            end_column=span.end_column,
            **kwargs,
        )

    def __str__(self) -> str:
        if self.file_path and self.line:
            return f"{self.file_path}:{self.line}:{self.column}: {self.message}"
        if self.line:
            return f"{self.line}:{self.column}: {self.message}"
        return self.message


class NameParseError(DirectiveSyntaxError):
    """Malformed identifier or hyphen sequence in a directive name."""


class UnknownDirectiveError(DirectiveSyntaxError):
    """A `prefix:` qualifier other than `on` or `bind`."""

    def __init__(self, message: str, directive: str = "", **kwargs):
        self.directive = directive
        super().__init__(message, **kwargs)


class UnsupportedPropertyError(DirectiveSyntaxError):
    """A `bind:` property that has no entry in the property table."""

    def __init__(self, message: str, prop: str = "", **kwargs):
        self.prop = prop
        super().__init__(message, **kwargs)


class TypeMismatchError(DirectiveSyntaxError):
    """A bound cell whose kind disagrees with the property's value kind."""


class ExpressionSyntaxError(DirectiveSyntaxError):
    """The value expression on the right of `=` is not valid Python."""


class AttributeListSyntaxError(DirectiveSyntaxError):
    """Structural error in the attribute list (delimiters, `=`, trailing input)."""


class AttributeCompileError(Exception):
    """Raised by callers that want every diagnostic of a list as one exception."""

    def __init__(self, errors: Sequence[DirectiveSyntaxError]):
        self.errors: List[DirectiveSyntaxError] = list(errors)
        lines = [str(err) for err in self.errors]
        noun = "error" if len(lines) == 1 else "errors"
        super().__init__(
            f"{len(lines)} attribute {noun}:\n" + "\n".join(f"  {line}" for line in lines)
        )

