import pytest

from initlang.initlang_constants import TOKEN_TYPE_NAMES, TokenType, token_type_name
from initlang.initlang_errors import (
    InitLangError,
    LexError,
    LexErrorKind,
    ParseError,
    ParseErrorKind,
    SourceLocation,
    render_diagnostic,
)


def test_lex_error_fields() -> None:
    err = LexError.unexpected_char("@", 2, 7)
    assert err.kind is LexErrorKind.UNEXPECTED_CHAR
    assert err.char == "@"
    assert err.location == SourceLocation(2, 7)
    assert str(err) == "Unexpected character '@' at line 2:7"


def test_unterminated_string_message() -> None:
    err = LexError.unterminated_string(4, 1)
    assert err.kind is LexErrorKind.UNTERMINATED_STRING
    assert "line 4" in err.message


def test_errors_are_syntax_errors() -> None:
    err = ParseError(ParseErrorKind.EXPECTED_ARROW, "Expected '==>'", 1, 7)
    assert isinstance(err, InitLangError)
    assert isinstance(err, SyntaxError)
    with pytest.raises(SyntaxError, match="Expected '==>' at line 1:7"):
        raise err


def test_repr_names_kind() -> None:
    err = ParseError(ParseErrorKind.UNTERMINATED_BLOCK, "boom", 3, 1)
    assert repr(err) == "ParseError(UnterminatedBlock, 'boom', line=3, column=1)"


def test_render_diagnostic_points_at_column() -> None:
    source = "let x ==> 1\nlet y 5\n"
    err = ParseError(ParseErrorKind.EXPECTED_ARROW, "Expected '==>'", 2, 7)
    assert render_diagnostic(err, source) == (
        "error[ExpectedArrow]: Expected '==>'\n"
        "  --> 2:7\n"
        "   |\n"
        " 2 | let y 5\n"
        "   |       ^\n"
    )


def test_render_diagnostic_past_last_line() -> None:
    err = ParseError(ParseErrorKind.UNTERMINATED_BLOCK, "Expected '}'", 5, 1)
    text = render_diagnostic(err, "fi f() {\n")
    assert text == "error[UnterminatedBlock]: Expected '}'\n  --> 5:1\n"


def test_source_location_str() -> None:
    assert str(SourceLocation(3, 14)) == "3:14"


def test_every_token_type_has_a_name() -> None:
    for kind in TokenType:
        assert token_type_name(kind) == kind.value
    assert set(TOKEN_TYPE_NAMES) == set(TokenType)


def test_unknown_token_type_name() -> None:
    assert token_type_name("ARROW") == "UNKNOWN"
    assert token_type_name(None) == "UNKNOWN"
