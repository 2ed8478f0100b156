"""
INITLANG Language Parser

Turns the token stream of an INITLANG `Lexer` into a `Program` AST.

Statements are parsed by recursive descent; expressions by precedence
climbing (Pratt parsing) over the binding levels in `Precedence`.

Supported Constructs
--------------------
- Statements:
    * Declarations: `let x ==> 5`, `const pi ==> 3.14`
    * Functions: `fi add(a, b) { return a + b }`
    * Returns: `return`, `return expr`
    * Expression statements: `init.ger("hi")`, `add(1, 2)`
- Expressions:
    * Literals and identifiers: `42`, `1.5`, `"text"`, `name`, `a.b.c`
    * Binary operators: `== != < > <= >= + - * /`
    * Calls, including chained calls: `f(1)(2)`
    * Grouping: `(a + b) * c`
    * Prefix operators: `-x` (desugared to `0 - x`), `!x`
    * `init.ger(expr)`, which yields `expr` itself

Parser Behavior
---------------
- Two-token lookahead (`current` and `peek`), pulled from the lexer on demand.
- Fail-fast: the first mismatch raises `ParseError` and no partial program is
  returned. Lexing errors propagate unchanged as `LexError`.
- A `;` after any statement is optional.
- Nesting of expressions and blocks is capped at `MAX_NESTING_DEPTH` levels;
  deeper input raises `ParseError` instead of exhausting the call stack.

Raises
------
ParseError
    When a required token is missing, a token cannot start an expression,
    a number literal cannot be converted, a block is never closed, or
    nesting goes deeper than `MAX_NESTING_DEPTH`.
"""

from __future__ import annotations

from typing import Callable

from initlang.initlang_ast import (
    BinaryExpression,
    BlockStatement,
    CallExpression,
    Expression,
    ExpressionStatement,
    FunctionDeclaration,
    Identifier,
    NumberLiteral,
    Program,
    ReturnStatement,
    Statement,
    StringLiteral,
    VariableDeclaration,
)
from initlang.initlang_constants import (
    BINARY_OPERATORS,
    PRECEDENCES,
    Precedence,
    TokenType,
    token_type_name,
)
from initlang.initlang_errors import ParseError, ParseErrorKind
from initlang.initlang_lexer import Lexer, Token

# Shown in "expected X" messages instead of the bare kind name.
DISPLAY = {
    TokenType.ARROW: "'==>'",
    TokenType.LPAREN: "'('",
    TokenType.RPAREN: "')'",
    TokenType.LBRACE: "'{'",
    TokenType.RBRACE: "'}'",
    TokenType.COMMA: "','",
}

# Tokens after `return` that mean there is no return value.
RETURN_TERMINATORS = frozenset(
    {TokenType.RBRACE, TokenType.SEMICOLON, TokenType.EOF}
)

# Each level costs a few stack frames; 128 keeps deep input well inside
# the default recursion limit.
MAX_NESTING_DEPTH = 128


class Parser:
    """
    INITLANG Parser Class

    Pulls tokens from a `Lexer` and builds a `Program`. Construction primes the
    lookahead pair by reading two tokens. The parser is exhausted once
    `parse_program()` returns or raises.

    Attributes
    ----------
    lexer : Lexer
        Source of tokens, borrowed for the lifetime of the parser.
    current : Token
        The token being examined.
    peek : Token
        The token after `current`.
    depth : int
        How many expressions and blocks are currently open.
    """

    def __init__(self, lexer: Lexer) -> None:
        self.lexer = lexer
        self.current: Token = Token(TokenType.EOF, "")
        self.peek: Token = Token(TokenType.EOF, "")
        self.depth = 0

        self.prefix_parsers: dict[TokenType, Callable[[], Expression]] = {
            TokenType.IDENTIFIER: self.parse_identifier,
            TokenType.NUMBER: self.parse_number_literal,
            TokenType.STRING: self.parse_string_literal,
            TokenType.INIT_GER: self.parse_init_ger,
            TokenType.LPAREN: self.parse_grouped_expression,
            TokenType.MINUS: self.parse_prefix_expression,
            TokenType.NOT: self.parse_prefix_expression,
        }

        self.next_token()
        self.next_token()

    # Token helpers

    def next_token(self) -> None:
        self.current = self.peek
        self.peek = self.lexer.next_token()

    def current_is(self, kind: TokenType) -> bool:
        return self.current.kind is kind

    def peek_is(self, kind: TokenType) -> bool:
        return self.peek.kind is kind

    def expect_peek(
        self,
        kind: TokenType,
        context: str,
        error_kind: ParseErrorKind = ParseErrorKind.UNEXPECTED_TOKEN,
    ) -> Token:
        """Advances onto `peek` if it has the given kind, otherwise raises."""
        if self.peek_is(kind):
            self.next_token()
            return self.current
        raise self.error_at(self.peek, kind, context, error_kind)

    def error_at(
        self,
        tok: Token,
        expected: TokenType,
        context: str,
        error_kind: ParseErrorKind = ParseErrorKind.UNEXPECTED_TOKEN,
    ) -> ParseError:
        expected_name = DISPLAY.get(expected, token_type_name(expected).lower())
        found = token_type_name(tok.kind)
        return ParseError(
            error_kind,
            f"Expected {expected_name} {context}, got {found}",
            tok.line,
            tok.column,
            expected=token_type_name(expected),
            found=found,
        )

    def enter_nesting(self) -> None:
        """Opens one nesting level; callers close it with `leave_nesting()`."""
        if self.depth >= MAX_NESTING_DEPTH:
            raise ParseError(
                ParseErrorKind.NESTING_TOO_DEEP,
                f"Nesting deeper than {MAX_NESTING_DEPTH} levels at {token_type_name(self.current.kind)}",
                self.current.line,
                self.current.column,
                found=token_type_name(self.current.kind),
            )
        self.depth += 1

    def leave_nesting(self) -> None:
        self.depth -= 1

    def peek_precedence(self) -> Precedence:
        return PRECEDENCES.get(self.peek.kind, Precedence.LOWEST)

    def current_precedence(self) -> Precedence:
        return PRECEDENCES.get(self.current.kind, Precedence.LOWEST)

    # Statements

    def parse_program(self) -> Program:
        """Parse the whole token stream into a Program."""
        program = Program()
        while not self.current_is(TokenType.EOF):
            program.statements.append(self.parse_statement())
            self.next_token()
        return program

    def parse_statement(self) -> Statement:
        kind = self.current.kind
        if kind is TokenType.LET:
            stmt: Statement = self.parse_variable_declaration(is_const=False)
        elif kind is TokenType.CONST:
            stmt = self.parse_variable_declaration(is_const=True)
        elif kind is TokenType.FI:
            stmt = self.parse_function_declaration()
        elif kind is TokenType.RETURN:
            stmt = self.parse_return_statement()
        else:
            stmt = self.parse_expression_statement()

        if self.peek_is(TokenType.SEMICOLON):
            self.next_token()
        return stmt

    def parse_variable_declaration(self, is_const: bool) -> VariableDeclaration:
        """Parse `let NAME ==> expr` (or `const NAME ==> expr`)."""
        keyword = self.current
        name = self.expect_peek(
            TokenType.IDENTIFIER,
            f"after '{keyword.text}'",
            ParseErrorKind.EXPECTED_IDENTIFIER,
        )
        self.expect_peek(
            TokenType.ARROW, "after variable name", ParseErrorKind.EXPECTED_ARROW
        )
        self.next_token()
        value = self.parse_expression(Precedence.LOWEST)
        return VariableDeclaration(
            name.text, value, is_const, line=keyword.line, col=keyword.column
        )

    def parse_function_declaration(self) -> FunctionDeclaration:
        """Parse `fi NAME(params) { body }`."""
        keyword = self.current
        name = self.expect_peek(
            TokenType.IDENTIFIER,
            "as function name after 'fi'",
            ParseErrorKind.EXPECTED_IDENTIFIER,
        )
        self.expect_peek(TokenType.LPAREN, "after function name")
        params = self.parse_function_parameters()
        self.expect_peek(TokenType.LBRACE, "after function parameters")
        body = self.parse_block_statement()
        return FunctionDeclaration(
            name.text, params, body, line=keyword.line, col=keyword.column
        )

    def parse_function_parameters(self) -> list[str]:
        params: list[str] = []
        if self.peek_is(TokenType.RPAREN):
            self.next_token()
            return params

        tok = self.expect_peek(
            TokenType.IDENTIFIER,
            "as parameter name",
            ParseErrorKind.EXPECTED_IDENTIFIER,
        )
        params.append(tok.text)
        while self.peek_is(TokenType.COMMA):
            self.next_token()
            tok = self.expect_peek(
                TokenType.IDENTIFIER,
                "as parameter name after ','",
                ParseErrorKind.EXPECTED_IDENTIFIER,
            )
            params.append(tok.text)

        self.expect_peek(TokenType.RPAREN, "after parameters")
        return params

    def parse_block_statement(self) -> BlockStatement:
        """Parse statements after `{` up to and including the matching `}`."""
        open_brace = self.current
        block = BlockStatement(line=open_brace.line, col=open_brace.column)
        self.enter_nesting()
        try:
            self.next_token()
            while not self.current_is(TokenType.RBRACE):
                if self.current_is(TokenType.EOF):
                    raise ParseError(
                        ParseErrorKind.UNTERMINATED_BLOCK,
                        f"Expected '}}' to close block opened at line {open_brace.line}:{open_brace.column}, got EOF",
                        self.current.line,
                        self.current.column,
                        expected=token_type_name(TokenType.RBRACE),
                        found=token_type_name(TokenType.EOF),
                    )
                block.statements.append(self.parse_statement())
                self.next_token()
        finally:
            self.leave_nesting()

        return block

    def parse_return_statement(self) -> ReturnStatement:
        keyword = self.current
        if self.peek.kind in RETURN_TERMINATORS:
            return ReturnStatement(None, line=keyword.line, col=keyword.column)
        self.next_token()
        value = self.parse_expression(Precedence.LOWEST)
        return ReturnStatement(value, line=keyword.line, col=keyword.column)

    def parse_expression_statement(self) -> ExpressionStatement:
        start = self.current
        expr = self.parse_expression(Precedence.LOWEST)
        return ExpressionStatement(expr, line=start.line, col=start.column)

    # Expressions

    def parse_expression(self, precedence: Precedence) -> Expression:
        """Precedence climbing: fold infix operators that bind tighter than `precedence`."""
        prefix = self.prefix_parsers.get(self.current.kind)
        if prefix is None:
            raise ParseError(
                ParseErrorKind.NO_PREFIX_PARSE,
                f"No prefix parse function for {token_type_name(self.current.kind)} {self.current.text!r}",
                self.current.line,
                self.current.column,
                found=token_type_name(self.current.kind),
            )
        self.enter_nesting()
        try:
            left = prefix()
            while not self.peek_is(TokenType.SEMICOLON) and precedence < self.peek_precedence():
                self.next_token()
                left = self.parse_infix(left)
        finally:
            self.leave_nesting()

        return left

    def parse_infix(self, left: Expression) -> Expression:
        if self.current_is(TokenType.LPAREN):
            return self.parse_call_expression(left)
        if self.current.kind in BINARY_OPERATORS:
            return self.parse_binary_expression(left)
        raise AssertionError(f"Unexpected infix token: {self.current}")

    def parse_identifier(self) -> Identifier:
        tok = self.current
        return Identifier(tok.text, line=tok.line, col=tok.column)

    def parse_number_literal(self) -> NumberLiteral:
        tok = self.current
        try:
            value = float(tok.text)
        except ValueError:
            raise ParseError(
                ParseErrorKind.MALFORMED_NUMBER,
                f"Could not parse number: {tok.text!r}",
                tok.line,
                tok.column,
                text=tok.text,
            ) from None
        return NumberLiteral(value, line=tok.line, col=tok.column)

    def parse_string_literal(self) -> StringLiteral:
        tok = self.current
        return StringLiteral(tok.text, line=tok.line, col=tok.column)

    def parse_init_ger(self) -> Expression:
        """Parse `init.ger(expr)`; the wrapper is dropped and `expr` returned."""
        self.expect_peek(TokenType.LPAREN, "after init.ger")
        self.next_token()
        arg = self.parse_expression(Precedence.LOWEST)
        self.expect_peek(TokenType.RPAREN, "after init.ger argument")
        return arg

    def parse_grouped_expression(self) -> Expression:
        self.next_token()
        expr = self.parse_expression(Precedence.LOWEST)
        self.expect_peek(TokenType.RPAREN, "after expression")
        return expr

    def parse_prefix_expression(self) -> Expression:
        op = self.current
        self.next_token()
        right = self.parse_expression(Precedence.PREFIX)

        if op.kind is TokenType.MINUS:
            zero = NumberLiteral(0.0, line=op.line, col=op.column)
            return BinaryExpression(
                TokenType.MINUS, zero, right, line=op.line, col=op.column
            )
        # no logical-not node yet: `!x` yields `x`
        return right

    def parse_binary_expression(self, left: Expression) -> BinaryExpression:
        op = self.current
        precedence = self.current_precedence()
        self.next_token()
        right = self.parse_expression(precedence)
        return BinaryExpression(op.kind, left, right, line=left.line, col=left.col)

    def parse_call_expression(self, callee: Expression) -> CallExpression:
        args = self.parse_call_arguments()
        return CallExpression(callee, args, line=callee.line, col=callee.col)

    def parse_call_arguments(self) -> list[Expression]:
        args: list[Expression] = []
        if self.peek_is(TokenType.RPAREN):
            self.next_token()
            return args

        self.next_token()
        args.append(self.parse_expression(Precedence.LOWEST))
        while self.peek_is(TokenType.COMMA):
            self.next_token()
            self.next_token()
            args.append(self.parse_expression(Precedence.LOWEST))

        self.expect_peek(TokenType.RPAREN, "after arguments")
        return args


__all__ = ["Parser"]
