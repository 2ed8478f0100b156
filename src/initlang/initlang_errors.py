"""
Structured lexing and parsing failures for the INITLANG front end.

Both stages are fail-fast: the first problem aborts the whole `tokenize()` or
`parse_program()` call. Errors derive from the builtin `SyntaxError` and carry
a machine-readable kind plus the `{line, column}` where the problem starts, so
a caller can render a source-pointing diagnostic with `render_diagnostic()`.

Classes:
    LexErrorKind, ParseErrorKind: Closed sets of failure kinds.
    SourceLocation: 1-based line/column pair.
    InitLangError: Common base for all front-end errors.
    LexError: Raised by the lexer.
    ParseError: Raised by the parser.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class LexErrorKind(str, Enum):
    UNEXPECTED_CHAR = "UnexpectedChar"
    UNTERMINATED_STRING = "UnterminatedString"


class ParseErrorKind(str, Enum):
    UNEXPECTED_TOKEN = "UnexpectedToken"
    EXPECTED_IDENTIFIER = "ExpectedIdentifier"
    EXPECTED_ARROW = "ExpectedArrow"
    MALFORMED_NUMBER = "MalformedNumber"
    NO_PREFIX_PARSE = "NoPrefixParse"
    UNTERMINATED_BLOCK = "UnterminatedBlock"
    NESTING_TOO_DEEP = "NestingTooDeep"


@dataclass(frozen=True, slots=True)
class SourceLocation:
    line: int
    column: int

    def __str__(self) -> str:
        return f"{self.line}:{self.column}"


class InitLangError(SyntaxError):
    """Base class for INITLANG front-end failures.

    Attributes:
        kind (LexErrorKind | ParseErrorKind): What went wrong.
        message (str): Human-readable description without the position.
        line (int): 1-based line of the offending input.
        column (int): 1-based column of the offending input.
    """

    kind: LexErrorKind | ParseErrorKind

    def __init__(
        self, kind: LexErrorKind | ParseErrorKind, message: str, line: int, column: int
    ) -> None:
        super().__init__(f"{message} at line {line}:{column}")
        self.kind = kind
        self.message = message
        self.line = line
        self.column = column

    @property
    def location(self) -> SourceLocation:
        return SourceLocation(self.line, self.column)

    def __str__(self) -> str:
        return f"{self.message} at line {self.line}:{self.column}"

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}({self.kind.value}, {self.message!r}, "
            f"line={self.line}, column={self.column})"
        )


class LexError(InitLangError):
    """Raised when the scanner cannot turn the input into a token."""

    def __init__(
        self,
        kind: LexErrorKind,
        message: str,
        line: int,
        column: int,
        char: str | None = None,
    ) -> None:
        super().__init__(kind, message, line, column)
        self.char = char

    @classmethod
    def unexpected_char(cls, char: str, line: int, column: int) -> LexError:
        return cls(
            LexErrorKind.UNEXPECTED_CHAR,
            f"Unexpected character {char!r}",
            line,
            column,
            char=char,
        )

    @classmethod
    def unterminated_string(cls, line: int, column: int) -> LexError:
        return cls(
            LexErrorKind.UNTERMINATED_STRING,
            f"Unterminated string starting on line {line}",
            line,
            column,
        )


class ParseError(InitLangError):
    """Raised when the token stream does not match the grammar.

    `expected` and `found` name token kinds for the "expected X, got Y"
    shapes; `text` holds the offending literal for malformed numbers.
    """

    def __init__(
        self,
        kind: ParseErrorKind,
        message: str,
        line: int,
        column: int,
        expected: str | None = None,
        found: str | None = None,
        text: str | None = None,
    ) -> None:
        super().__init__(kind, message, line, column)
        self.expected = expected
        self.found = found
        self.text = text


def render_diagnostic(error: InitLangError, source: str) -> str:
    """
    Formats an error as a multi-line diagnostic pointing into `source`.

    Example:
        error[ExpectedArrow]: Expected '==>' after variable name, got NUMBER
          --> 1:7
           |
         1 | let x 5
           |       ^
    """
    lines = source.splitlines()
    result = f"error[{error.kind.value}]: {error.message}\n"
    result += f"  --> {error.location}\n"

    if 1 <= error.line <= len(lines):
        text = lines[error.line - 1].expandtabs(1)
        gutter = " " * len(str(error.line))
        caret_pad = " " * max(error.column - 1, 0)
        result += f" {gutter} |\n"
        result += f" {error.line} | {text}\n"
        result += f" {gutter} | {caret_pad}^\n"

    return result


__all__ = [
    "InitLangError",
    "LexError",
    "LexErrorKind",
    "ParseError",
    "ParseErrorKind",
    "SourceLocation",
    "render_diagnostic",
]
