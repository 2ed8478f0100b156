"""Result-returning entry points for the INITLANG front end.

`tokenize_source()` and `parse_source()` never raise for malformed input;
they return a result carrier and the caller checks `ok` before using the
payload. The lexer and parser underneath stay exception-based.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from initlang.initlang_ast import Program
from initlang.initlang_errors import InitLangError, LexError, render_diagnostic
from initlang.initlang_lexer import CharacterStream, Lexer, Token
from initlang.initlang_parser import Parser


@dataclass(slots=True)
class LexResult:
    source_text: str
    tokens: list[Token] = field(default_factory=list)
    error: LexError | None = None

    @property
    def ok(self) -> bool:
        return self.error is None

    def diagnostic(self) -> str | None:
        if self.error is None:
            return None
        return render_diagnostic(self.error, self.source_text)


@dataclass(slots=True)
class ParseResult:
    source_text: str
    program: Program | None = None
    error: InitLangError | None = None

    @property
    def ok(self) -> bool:
        return self.error is None

    def diagnostic(self) -> str | None:
        if self.error is None:
            return None
        return render_diagnostic(self.error, self.source_text)

    def unwrap(self) -> Program:
        """Returns the program, re-raising the stored error on failure."""
        if self.error is not None:
            raise self.error
        return self.program  # type: ignore[return-value]


def tokenize_source(source: str) -> LexResult:
    try:
        tokens = Lexer(CharacterStream(source)).tokenize()
    except LexError as e:
        return LexResult(source, error=e)
    return LexResult(source, tokens=tokens)


def parse_source(source: str) -> ParseResult:
    """Lex and parse `source`; the error is either a LexError or a ParseError."""
    try:
        program = Parser(Lexer(CharacterStream(source))).parse_program()
    except InitLangError as e:
        return ParseResult(source, error=e)
    return ParseResult(source, program=program)


__all__ = ["LexResult", "ParseResult", "parse_source", "tokenize_source"]
