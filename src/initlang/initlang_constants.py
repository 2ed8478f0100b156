"""
Static lexical and grammatical tables for the INITLANG front end.

Everything here is built once at import time and never mutated afterwards:

    TokenType:        Closed set of token kinds produced by the lexer.
    KEYWORDS:         Reserved words recognized by exact identifier match.
    DOTTED_KEYWORDS:  Dotted pseudo-keywords (`init.ger`, `init.log`).
    SIMPLE_TOKENS:    Single-character punctuation and operators.
    Precedence:       Ascending binding levels used by the expression parser.
    PRECEDENCES:      Infix token kind -> binding level.
    TOKEN_TYPE_NAMES: Diagnostic names for every token kind.

Exports:
    - TokenType
    - Precedence
    - KEYWORDS
    - DOTTED_KEYWORDS
    - SIMPLE_TOKENS
    - PRECEDENCES
    - TOKEN_TYPE_NAMES
    - token_type_name
"""

from enum import Enum, IntEnum
from types import MappingProxyType
from typing import Any, Mapping


class TokenType(str, Enum):
    """Kinds of lexical tokens. The value doubles as the diagnostic name."""

    # Literals
    IDENTIFIER = "IDENTIFIER"
    NUMBER = "NUMBER"
    STRING = "STRING"

    # Keywords
    LET = "LET"
    FI = "FI"
    INIT = "INIT"
    CONST = "CONST"
    ASYNC = "ASYNC"
    SPAWN = "SPAWN"
    AWAIT = "AWAIT"
    STRUCT = "STRUCT"
    ENUM = "ENUM"
    MATCH = "MATCH"
    RETURN = "RETURN"
    IF = "IF"
    ELSE = "ELSE"
    WHILE = "WHILE"
    FOR = "FOR"

    # Arrows and separators
    ARROW = "ARROW"  # ==>
    DOUBLE_ARROW = "DOUBLE_ARROW"  # =>
    DOT = "DOT"
    COLON = "COLON"
    COMMA = "COMMA"
    SEMICOLON = "SEMICOLON"

    # Delimiters
    LPAREN = "LPAREN"
    RPAREN = "RPAREN"
    LBRACE = "LBRACE"
    RBRACE = "RBRACE"
    LBRACKET = "LBRACKET"
    RBRACKET = "RBRACKET"

    # Arithmetic
    PLUS = "PLUS"
    MINUS = "MINUS"
    STAR = "STAR"
    SLASH = "SLASH"
    PERCENT = "PERCENT"

    # Comparison
    EQ = "EQ"
    NEQ = "NEQ"
    LT = "LT"
    GT = "GT"
    LTE = "LTE"
    GTE = "GTE"
    ASSIGN = "ASSIGN"

    # Logic
    AND = "AND"
    OR = "OR"
    NOT = "NOT"

    # Dotted pseudo-keywords
    INIT_LOG = "INIT_LOG"
    INIT_GER = "INIT_GER"

    EOF = "EOF"

    def __str__(self) -> str:
        return self.value


KEYWORDS: Mapping[str, TokenType] = MappingProxyType(
    {
        "let": TokenType.LET,
        "fi": TokenType.FI,
        "const": TokenType.CONST,
        "return": TokenType.RETURN,
        "async": TokenType.ASYNC,
        "spawn": TokenType.SPAWN,
        "await": TokenType.AWAIT,
    }
)

# Matched before KEYWORDS, on the full greedy identifier text.
DOTTED_KEYWORDS: Mapping[str, TokenType] = MappingProxyType(
    {
        "init.ger": TokenType.INIT_GER,
        "init.log": TokenType.INIT_LOG,
    }
)

SIMPLE_TOKENS: Mapping[str, TokenType] = MappingProxyType(
    {
        "+": TokenType.PLUS,
        "-": TokenType.MINUS,
        "*": TokenType.STAR,
        "/": TokenType.SLASH,
        "%": TokenType.PERCENT,
        "(": TokenType.LPAREN,
        ")": TokenType.RPAREN,
        "{": TokenType.LBRACE,
        "}": TokenType.RBRACE,
        "[": TokenType.LBRACKET,
        "]": TokenType.RBRACKET,
        ",": TokenType.COMMA,
        ";": TokenType.SEMICOLON,
        ":": TokenType.COLON,
        ".": TokenType.DOT,
    }
)

# One-character operator -> (kind alone, kind when followed by "=")
EQUALS_SUFFIXED_TOKENS: Mapping[str, tuple[TokenType, TokenType]] = MappingProxyType(
    {
        "=": (TokenType.ASSIGN, TokenType.EQ),
        "!": (TokenType.NOT, TokenType.NEQ),
        "<": (TokenType.LT, TokenType.LTE),
        ">": (TokenType.GT, TokenType.GTE),
    }
)


class Precedence(IntEnum):
    """Binding levels for precedence climbing, weakest first."""

    LOWEST = 1
    EQUALS = 2  # == !=
    LESSGREATER = 3  # < > <= >=
    SUM = 4  # + -
    PRODUCT = 5  # * /
    PREFIX = 6  # -x !x
    CALL = 7  # f(x)


PRECEDENCES: Mapping[TokenType, Precedence] = MappingProxyType(
    {
        TokenType.EQ: Precedence.EQUALS,
        TokenType.NEQ: Precedence.EQUALS,
        TokenType.LT: Precedence.LESSGREATER,
        TokenType.GT: Precedence.LESSGREATER,
        TokenType.LTE: Precedence.LESSGREATER,
        TokenType.GTE: Precedence.LESSGREATER,
        TokenType.PLUS: Precedence.SUM,
        TokenType.MINUS: Precedence.SUM,
        TokenType.SLASH: Precedence.PRODUCT,
        TokenType.STAR: Precedence.PRODUCT,
        TokenType.LPAREN: Precedence.CALL,
    }
)

BINARY_OPERATORS: frozenset[TokenType] = frozenset(
    kind for kind in PRECEDENCES if kind is not TokenType.LPAREN
)

TOKEN_TYPE_NAMES: Mapping[TokenType, str] = MappingProxyType(
    {kind: kind.value for kind in TokenType}
)


def token_type_name(kind: Any) -> str:
    """Returns the diagnostic name of a token kind, or "UNKNOWN"."""
    if isinstance(kind, TokenType):
        return TOKEN_TYPE_NAMES.get(kind, "UNKNOWN")
    return "UNKNOWN"


__all__ = [
    "BINARY_OPERATORS",
    "DOTTED_KEYWORDS",
    "EQUALS_SUFFIXED_TOKENS",
    "KEYWORDS",
    "PRECEDENCES",
    "Precedence",
    "SIMPLE_TOKENS",
    "TOKEN_TYPE_NAMES",
    "TokenType",
    "token_type_name",
]
