"""
Lexical analyzer for the INITLANG scripting language.

This module converts raw source text into a token stream:

Classes:
    CharacterStream: Cursor over the source text that tracks line and column.
    Token: A single token with kind, literal text, and source location.
    Lexer: Converts a CharacterStream into a sequence of tokens.

Features:
    - Skips whitespace, tracking line and column across newlines
    - Greedy identifier scanning that includes `.`, so `a.b.c` is one identifier
    - Dotted pseudo-keywords `init.ger` / `init.log`
    - Numbers with at most one decimal point (a second `.` ends the number)
    - Single- or double-quoted strings with `\\n`, `\\t`, `\\r` escapes
    - Fixed-lookahead operators: `==>` beats `=>` beats `==` beats `=`

Raises:
    LexError: On an unexpected character or an unterminated string.

Example:
    >>> lexer = Lexer(CharacterStream("let x ==> 5"))
    >>> [tok.kind.value for tok in lexer.tokenize()]
    ['LET', 'IDENTIFIER', 'ARROW', 'NUMBER', 'EOF']

Exports:
    - CharacterStream
    - Token
    - Lexer
"""

from collections.abc import Callable, Iterator
from typing import Any

from initlang.initlang_constants import (
    DOTTED_KEYWORDS,
    EQUALS_SUFFIXED_TOKENS,
    KEYWORDS,
    SIMPLE_TOKENS,
    TokenType,
)
from initlang.initlang_errors import LexError, SourceLocation

WHITESPACE = " \t\r\n\v\f"
ESCAPES = {"n": "\n", "t": "\t", "r": "\r"}

# Checked in order, so the longer spelling wins.
ARROWS = (("==>", TokenType.ARROW), ("=>", TokenType.DOUBLE_ARROW))


def is_ident_start(ch: str) -> bool:
    return ch == "_" or (ch.isascii() and ch.isalpha())


def is_ident_part(ch: str) -> bool:
    return ch in "_." or (ch.isascii() and ch.isalnum())


def is_digit(ch: str) -> bool:
    return ch != "" and ch in "0123456789"


class CharacterStream:
    """
    Cursor over INITLANG source text.

    Every consumed character moves the cursor's line/column, so the lexer can
    ask for `location()` before reading a token and stamp the token with it.
    Lookahead never fails: reading past either end yields "".

    Attributes:
        source (str): The input source string.
        position (int): Index of the next unread character.
        line (int): Line of the next unread character (1-indexed).
        column (int): Column of the next unread character (1-indexed).
    """

    def __init__(self, source: str, position: int = 0, line: int = 1, column: int = 1):
        self.source = source
        self.position = position
        self.line = line
        self.column = column

    def remaining(self) -> int:
        """Number of characters not yet consumed."""
        return max(len(self.source) - self.position, 0)

    def location(self) -> SourceLocation:
        return SourceLocation(self.line, self.column)

    def end_of_file(self) -> bool:
        return self.remaining() == 0

    def peek(self, offset: int = 0) -> str:
        """Returns the character `offset` places ahead, or "" when out of bounds."""
        index = self.position + offset
        if 0 <= index < len(self.source):
            return self.source[index]
        return ""

    def startswith(self, text: str) -> bool:
        return self.source.startswith(text, self.position)

    def next(self) -> str:
        """
        Consumes one character and returns it.

        Raises:
            EOFError: If the stream is already exhausted.
        """
        if self.end_of_file():
            raise EOFError(
                f"Attempted to read past end of source at position=<{self.position}>, line=<{self.line}>"
            )
        ch = self.source[self.position]
        self.position += 1
        if ch == "\n":
            self.line, self.column = self.line + 1, 1
        else:
            self.column += 1
        return ch

    def advance_by(self, count: int) -> str:
        """Consumes `count` characters and returns them as one string."""
        return "".join(self.next() for _ in range(count))

    def take_while(self, predicate: Callable[[str], bool]) -> str:
        """Consumes the longest run of characters accepted by `predicate`."""
        start = self.position
        while not self.end_of_file() and predicate(self.peek()):
            self.next()
        return self.source[start : self.position]


class Token:
    """A single lexical token.

    Attributes:
        kind (TokenType): The token kind.
        text (str): The literal text; for strings, the text with escapes resolved.
        line (int): The 1-based line where the token starts.
        column (int): The 1-based column where the token starts.
    """

    def __init__(self, kind: TokenType, text: str, line: int = 1, column: int = 1):
        self.kind = kind
        self.text = text
        self.line = line
        self.column = column

    def __repr__(self) -> str:
        return f"Token({self.kind.value}, {self.text})"

    def __eq__(self, other: Any) -> bool:
        return (
            isinstance(other, Token)
            and self.kind == other.kind
            and self.text == other.text
            and self.line == other.line
            and self.column == other.column
        )

    def __hash__(self) -> int:
        return hash((self.kind, self.text, self.line, self.column))

    def to_dict(self) -> dict[str, Any]:
        return {
            "kind": self.kind.value,
            "text": self.text,
            "line": self.line,
            "column": self.column,
        }


class Lexer:
    """Single-pass scanner for INITLANG source.

    The lexer owns its cursor only while tokenizing; every emitted Token is an
    independent value. Once `next_token()` has returned the EOF token the lexer
    is exhausted and keeps returning EOF.

    Attributes:
        stream (CharacterStream): The source stream to tokenize.
    """

    def __init__(self, stream: CharacterStream | str) -> None:
        if isinstance(stream, str):
            stream = CharacterStream(stream)
        self.stream = stream

    def peek(self, offset: int = 0) -> str:
        return self.stream.peek(offset)

    def advance(self) -> str:
        return self.stream.next()

    def skip_whitespace(self) -> None:
        self.stream.take_while(lambda ch: ch in WHITESPACE)

    def read_identifier(self, start: SourceLocation) -> Token:
        ident = self.stream.take_while(is_ident_part)
        kind = DOTTED_KEYWORDS.get(ident, KEYWORDS.get(ident, TokenType.IDENTIFIER))
        return Token(kind, ident, start.line, start.column)

    def read_number(self, start: SourceLocation) -> Token:
        num = self.stream.take_while(is_digit)
        # one decimal point at most; a second `.` is scanned again as DOT
        if self.peek() == ".":
            num += self.advance() + self.stream.take_while(is_digit)
        return Token(TokenType.NUMBER, num, start.line, start.column)

    def read_string(self, start: SourceLocation) -> Token:
        quote = self.advance()
        val = ""
        while not self.stream.end_of_file() and self.peek() != quote:
            ch = self.advance()
            if ch == "\\":
                if self.stream.end_of_file():
                    break
                escaped = self.advance()
                val += ESCAPES.get(escaped, escaped)
            else:
                val += ch

        if self.stream.end_of_file():
            raise LexError.unterminated_string(start.line, start.column)

        self.advance()  # closing quote
        return Token(TokenType.STRING, val, start.line, start.column)

    def read_operator(self, start: SourceLocation) -> Token:
        for text, kind in ARROWS:
            if self.stream.startswith(text):
                self.stream.advance_by(len(text))
                return Token(kind, text, start.line, start.column)

        ch = self.peek()
        if ch in EQUALS_SUFFIXED_TOKENS:
            single, double = EQUALS_SUFFIXED_TOKENS[ch]
            self.advance()
            if self.peek() == "=":
                self.advance()
                return Token(double, ch + "=", start.line, start.column)
            return Token(single, ch, start.line, start.column)

        if ch in SIMPLE_TOKENS:
            self.advance()
            return Token(SIMPLE_TOKENS[ch], ch, start.line, start.column)

        raise LexError.unexpected_char(ch, start.line, start.column)

    def next_token(self) -> Token:
        """Consumes and returns the next Token from the stream.

        Raises:
            LexError: On an unexpected character or an unterminated string.
        """
        self.skip_whitespace()

        start = self.stream.location()
        if self.stream.end_of_file():
            return Token(TokenType.EOF, "", start.line, start.column)

        ch = self.peek()
        if is_ident_start(ch):
            return self.read_identifier(start)
        if is_digit(ch):
            return self.read_number(start)
        if ch in ('"', "'"):
            return self.read_string(start)
        return self.read_operator(start)

    def tokenize(self) -> list[Token]:
        """Scans the remaining input into tokens ending with exactly one EOF token.

        Stops at the first LexError and propagates it; no partial list is returned.
        """
        return list(self)

    def __iter__(self) -> Iterator[Token]:
        while True:
            tok = self.next_token()
            yield tok
            if tok.kind is TokenType.EOF:
                return


__all__ = ["CharacterStream", "Lexer", "Token"]
