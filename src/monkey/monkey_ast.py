"""
Defines the abstract syntax tree (AST) for the Monkey programming language.

Every syntactic construct is its own node class. The parser builds a strict tree
out of them: each child is owned by exactly one parent and nodes are never
mutated once the parse function that built them has returned.

Statements:
    LetStatement, ReturnStatement, ExpressionStatement, BlockStatement

Expressions:
    Identifier, IntegerLiteral, Boolean, PrefixExpression, InfixExpression,
    IfExpression, FunctionLiteral, CallExpression

Root:
    Program

Each node provides:
    kind (str): Stable snake_case name of the variant (e.g. "infix_expression").
    token_literal(): The literal text of the token the node was built from.
    children(): The node's direct children, in source order.
    to_dict(): A nested plain-dict form (see ASTDict) for JSON or debugging.
    str(node): The canonical rendering. Operator applications are fully
        parenthesized, so `-a * b;` renders as `((-a) * b);`.

Example:
    >>> from monkey.monkey_parser import Parser
    >>> str(Parser.from_source("a + b * c;").parse_program())
    '(a + (b * c));'
"""

from __future__ import annotations

from dataclasses import dataclass, field, fields
from typing import Any, ClassVar, TypedDict, Union

from monkey.monkey_lexer import Token


class ASTDict(TypedDict, total=False):
    """
    Serialized shape of an AST node, as produced by ``Node.to_dict()``.

    Only the keys that belong to the node's variant are present. Child nodes are
    nested ASTDicts; lists of children are lists of ASTDicts.

    Fields:
        kind (str): The node variant (e.g. "let_statement", "call_expression").
        token (str): Literal text of the originating token.
        value (Any): Literal value, nested value expression, or None.
    """

    kind: str
    token: str
    value: Any
    name: ASTDict
    operator: str
    left: ASTDict
    right: ASTDict
    expression: ASTDict
    statements: list[ASTDict]
    condition: ASTDict
    consequence: ASTDict
    alternative: ASTDict | None
    parameters: list[ASTDict]
    body: ASTDict
    function: ASTDict
    arguments: list[ASTDict]


class Node:
    """Behaviour shared by every AST node."""

    kind: ClassVar[str] = "node"

    def token_literal(self) -> str:
        token: Token = getattr(self, "token")
        return token.value

    def children(self) -> list[Node]:
        result: list[Node] = []
        for f in fields(self):  # type: ignore[arg-type]
            val = getattr(self, f.name)
            if isinstance(val, Node):
                result.append(val)
            elif isinstance(val, list):
                result.extend(v for v in val if isinstance(v, Node))
        return result

    def to_dict(self) -> ASTDict:
        d: dict[str, Any] = {"kind": self.kind}
        for f in fields(self):  # type: ignore[arg-type]
            val = getattr(self, f.name)
            if isinstance(val, Token):
                val = val.value
            elif isinstance(val, Node):
                val = val.to_dict()
            elif isinstance(val, list):
                val = [v.to_dict() if isinstance(v, Node) else v for v in val]
            d[f.name] = val
        return d  # type: ignore[return-value]


def _braced(block: BlockStatement) -> str:
    body = str(block)
    return f"{{ {body} }}" if body else "{ }"


# Statements


@dataclass
class LetStatement(Node):
    """`let <name> = <value>;`"""

    kind: ClassVar[str] = "let_statement"

    token: Token
    name: Identifier
    value: Expression

    def __str__(self) -> str:
        return f"{self.token_literal()} {self.name} = {self.value};"


@dataclass
class ReturnStatement(Node):
    """`return <value>;`"""

    kind: ClassVar[str] = "return_statement"

    token: Token
    value: Expression | None = None

    def __str__(self) -> str:
        if self.value is None:
            return f"{self.token_literal()};"
        return f"{self.token_literal()} {self.value};"


@dataclass
class ExpressionStatement(Node):
    """An expression standing on its own as a statement."""

    kind: ClassVar[str] = "expression_statement"

    expression: Expression

    def token_literal(self) -> str:
        return self.expression.token_literal()

    def __str__(self) -> str:
        return f"{self.expression};"


@dataclass
class BlockStatement(Node):
    """Statements delimited by `{` and `}`; the body of `if` and `fn`."""

    kind: ClassVar[str] = "block_statement"

    token: Token
    statements: list[Statement] = field(default_factory=list)

    def __str__(self) -> str:
        return "".join(str(s) for s in self.statements)


# Expressions


@dataclass
class Identifier(Node):
    kind: ClassVar[str] = "identifier"

    token: Token
    value: str

    def __str__(self) -> str:
        return self.value


@dataclass
class IntegerLiteral(Node):
    kind: ClassVar[str] = "integer_literal"

    token: Token
    value: int

    def __str__(self) -> str:
        return self.token.value


@dataclass
class Boolean(Node):
    kind: ClassVar[str] = "boolean"

    token: Token
    value: bool

    def __str__(self) -> str:
        return self.token.value


@dataclass
class PrefixExpression(Node):
    """`(<operator><right>)`, for `-` and `!`."""

    kind: ClassVar[str] = "prefix_expression"

    token: Token
    operator: str
    right: Expression

    def __str__(self) -> str:
        return f"({self.operator}{self.right})"


@dataclass
class InfixExpression(Node):
    """`(<left> <operator> <right>)`"""

    kind: ClassVar[str] = "infix_expression"

    token: Token
    left: Expression
    operator: str
    right: Expression

    def __str__(self) -> str:
        return f"({self.left} {self.operator} {self.right})"


@dataclass
class IfExpression(Node):
    """`if <condition> { ... }` with an optional `else { ... }`."""

    kind: ClassVar[str] = "if_expression"

    token: Token
    condition: Expression
    consequence: BlockStatement
    alternative: BlockStatement | None = None

    def __str__(self) -> str:
        out = f"if {self.condition} {_braced(self.consequence)}"
        if self.alternative is not None:
            out += f" else {_braced(self.alternative)}"
        return out


@dataclass
class FunctionLiteral(Node):
    """`fn(<parameters>) { <body> }`"""

    kind: ClassVar[str] = "function_literal"

    token: Token
    parameters: list[Identifier]
    body: BlockStatement

    def __str__(self) -> str:
        params = ", ".join(str(p) for p in self.parameters)
        return f"{self.token_literal()}({params}) {_braced(self.body)}"


@dataclass
class CallExpression(Node):
    """`<function>(<arguments>)`; ``token`` is the opening parenthesis."""

    kind: ClassVar[str] = "call_expression"

    token: Token
    function: Expression
    arguments: list[Expression] = field(default_factory=list)

    def token_literal(self) -> str:
        return self.function.token_literal()

    def __str__(self) -> str:
        args = ", ".join(str(a) for a in self.arguments)
        return f"{self.function}({args})"


# Root


@dataclass
class Program(Node):
    """The root of every parse. May hold no statements, but is never absent."""

    kind: ClassVar[str] = "program"

    statements: list[Statement] = field(default_factory=list)

    def token_literal(self) -> str:
        if not self.statements:
            return ""
        return self.statements[0].token_literal()

    def __str__(self) -> str:
        return "".join(str(s) for s in self.statements)


Statement = Union[LetStatement, ReturnStatement, ExpressionStatement, BlockStatement]
"""Every statement variant."""

Expression = Union[
    Identifier,
    IntegerLiteral,
    Boolean,
    PrefixExpression,
    InfixExpression,
    IfExpression,
    FunctionLiteral,
    CallExpression,
]
"""Every expression variant."""

STATEMENT_TYPES: tuple[type[Node], ...] = (
    LetStatement,
    ReturnStatement,
    ExpressionStatement,
    BlockStatement,
)

EXPRESSION_TYPES: tuple[type[Node], ...] = (
    Identifier,
    IntegerLiteral,
    Boolean,
    PrefixExpression,
    InfixExpression,
    IfExpression,
    FunctionLiteral,
    CallExpression,
)

NODE_TYPES: tuple[type[Node], ...] = (Program,) + STATEMENT_TYPES + EXPRESSION_TYPES
