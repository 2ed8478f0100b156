"""
Defines the abstract syntax tree (AST) produced by the INITLANG parser.

The tree is a closed sum type: `Statement` and `Expression` are unions of the
node dataclasses below, and consumers dispatch on the concrete class. Every
node exclusively owns its children and the unique root is a `Program`.

Statements:
    ExpressionStatement, VariableDeclaration, FunctionDeclaration,
    BlockStatement, ReturnStatement

Expressions:
    NumberLiteral, StringLiteral, Identifier, BinaryExpression, CallExpression

Each node also records the `line`/`col` of its first token. Positions are
metadata only and are excluded from equality, so two trees with the same
shape compare equal wherever they came from.

Example:
    VariableDeclaration("x", NumberLiteral(5.0))
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, TypedDict, Union

from initlang.initlang_constants import TokenType


class ASTDict(TypedDict, total=False):
    """Plain-dict form of a node, suitable for JSON output or debugging."""

    kind: str
    line: int
    col: int


def _position() -> Any:
    return field(default=0, compare=False, repr=False, kw_only=True)


@dataclass(slots=True)
class NumberLiteral:
    value: float
    line: int = _position()
    col: int = _position()


@dataclass(slots=True)
class StringLiteral:
    value: str
    line: int = _position()
    col: int = _position()


@dataclass(slots=True)
class Identifier:
    name: str
    line: int = _position()
    col: int = _position()


@dataclass(slots=True)
class BinaryExpression:
    operator: TokenType
    left: Expression
    right: Expression
    line: int = _position()
    col: int = _position()


@dataclass(slots=True)
class CallExpression:
    callee: Expression
    arguments: list[Expression] = field(default_factory=list)
    line: int = _position()
    col: int = _position()


Expression = Union[
    NumberLiteral, StringLiteral, Identifier, BinaryExpression, CallExpression
]


@dataclass(slots=True)
class ExpressionStatement:
    expression: Expression
    line: int = _position()
    col: int = _position()


@dataclass(slots=True)
class VariableDeclaration:
    name: str
    value: Expression
    is_const: bool = False
    line: int = _position()
    col: int = _position()


@dataclass(slots=True)
class BlockStatement:
    statements: list[Statement] = field(default_factory=list)
    line: int = _position()
    col: int = _position()


@dataclass(slots=True)
class FunctionDeclaration:
    name: str
    parameters: list[str]
    body: BlockStatement
    line: int = _position()
    col: int = _position()


@dataclass(slots=True)
class ReturnStatement:
    value: Expression | None = None
    line: int = _position()
    col: int = _position()


Statement = Union[
    ExpressionStatement,
    VariableDeclaration,
    FunctionDeclaration,
    BlockStatement,
    ReturnStatement,
]


@dataclass(slots=True)
class Program:
    statements: list[Statement] = field(default_factory=list)


Node = Union[Program, Statement, Expression]


def to_dict(node: Node) -> ASTDict:
    """Converts a node and all of its descendants into nested dictionaries."""
    if isinstance(node, Program):
        return {
            "kind": "Program",
            "statements": [to_dict(s) for s in node.statements],
        }  # type: ignore[typeddict-unknown-key]

    fields: dict[str, Any] = {}
    match node:
        case NumberLiteral(value=value) | StringLiteral(value=value):
            fields["value"] = value
        case Identifier(name=name):
            fields["name"] = name
        case BinaryExpression(operator=op, left=left, right=right):
            fields["operator"] = op.value
            fields["left"] = to_dict(left)
            fields["right"] = to_dict(right)
        case CallExpression(callee=callee, arguments=args):
            fields["callee"] = to_dict(callee)
            fields["arguments"] = [to_dict(a) for a in args]
        case ExpressionStatement(expression=expr):
            fields["expression"] = to_dict(expr)
        case VariableDeclaration(name=name, value=value, is_const=is_const):
            fields["name"] = name
            fields["is_const"] = is_const
            fields["value"] = to_dict(value)
        case FunctionDeclaration(name=name, parameters=params, body=body):
            fields["name"] = name
            fields["parameters"] = list(params)
            fields["body"] = to_dict(body)
        case BlockStatement(statements=stmts):
            fields["statements"] = [to_dict(s) for s in stmts]
        case ReturnStatement(value=value):
            fields["value"] = to_dict(value) if value is not None else None
        case _:
            raise TypeError(f"Not an AST node: {node!r}")
    base = {"kind": type(node).__name__, "line": node.line, "col": node.col}
    return {**base, **fields}  # type: ignore[return-value]


__all__ = [
    "ASTDict",
    "BinaryExpression",
    "BlockStatement",
    "CallExpression",
    "Expression",
    "ExpressionStatement",
    "FunctionDeclaration",
    "Identifier",
    "Node",
    "NumberLiteral",
    "Program",
    "ReturnStatement",
    "Statement",
    "StringLiteral",
    "VariableDeclaration",
    "to_dict",
]
