"""
Monkey Language Parser

Parses Monkey source into an abstract syntax tree (AST).

This module implements a Pratt ("top down operator precedence") parser. It pulls
tokens from a `Lexer` on demand, always holding exactly two of them: the current
token and one token of lookahead. Statements are parsed by recursive descent;
expressions are parsed by precedence climbing over prefix and infix parse
functions registered per token type.

Supported Constructs
--------------------
- Statements:
    * `let <ident> = <expr>;`
    * `return <expr>;`
    * `<expr>;` (the trailing `;` is optional everywhere)
- Expressions:
    * Identifiers, integers, `true` / `false`
    * Prefix `-` and `!`
    * Infix `+ - * / < > == !=`, left associative
    * Grouping with `( ... )`
    * `if <cond> { ... } else { ... }`
    * `fn(<params>) { ... }`
    * Calls: `<expr>(<args>)`

Precedence, lowest to highest
-----------------------------
LOWEST < EQUALS (`==`, `!=`) < LESSGREATER (`<`, `>`) < SUM (`+`, `-`)
< PRODUCT (`*`, `/`) < PREFIX (`-x`, `!x`) < CALL (`f(x)`)

Error Handling
--------------
Parse failures are raised internally as `ParseError` and unwind to
`parse_program`, which records them in `Parser.errors` and carries on with the
next token. A bad statement is dropped; the rest of the program is still
parsed. Callers must check `errors` before trusting the returned `Program`.
Expressions nested past `MAX_NESTING_DEPTH` are reported the same way, so no
finite input can raise out of `parse_program`.

Entry Points
------------
- `Parser(lexer).parse_program()`
- `Parser.from_source(source).parse_program()`
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from enum import Enum

from monkey.monkey_ast import (
    BlockStatement,
    Boolean,
    CallExpression,
    Expression,
    ExpressionStatement,
    FunctionLiteral,
    Identifier,
    IfExpression,
    InfixExpression,
    IntegerLiteral,
    LetStatement,
    PrefixExpression,
    Program,
    ReturnStatement,
    Statement,
)
from monkey.monkey_constants import (
    ASSIGN,
    BANG,
    COMMA,
    ELSE,
    EOF,
    FALSE,
    FUNCTION,
    IDENT,
    IF,
    INT,
    INT_MAX,
    INT_MIN,
    LBRACE,
    LET,
    LPAREN,
    MAX_NESTING_DEPTH,
    MINUS,
    RBRACE,
    RETURN,
    RPAREN,
    SEMICOLON,
    TRUE,
    Precedence,
    infix_tokens,
    precedences,
)
from monkey.monkey_lexer import CharacterStream, Lexer, Token

logger = logging.getLogger(__name__)


class ParserErrorKind(Enum):
    """Every way a Monkey program can fail to parse."""

    TOKEN_UNRECOGNIZED = "TokenUnrecognized"
    IDENT_EXPECTED = "IdentExpected"
    ASSIGN_EXPECTED = "AssignExpected"
    INTEGER_PARSING_FAILED = "IntegerParsingFailed"
    BOOLEAN_PARSING_FAILED = "BooleanParsingFailed"
    GROUP_EXPRESSION_PARSING_FAILED = "GroupExpressionParsingFailed"
    INCORRECT_IF_STATEMENT = "IncorrectIfStatement"
    INCORRECT_FUNCTION_DECLARATION = "IncorrectFunctionDeclaration"


class ParseError(Exception):
    """A grammar expectation violated while parsing one statement.

    Attributes:
        kind (ParserErrorKind): Which expectation failed.
        token (Token | None): The token that was found instead, if any.

    Example:
        raise ParseError(ParserErrorKind.ASSIGN_EXPECTED, Token("INT", "5"))
    """

    def __init__(self, kind: ParserErrorKind, token: Token | None = None):
        message = kind.value if token is None else f"{kind.value}: got {token!r}"
        super().__init__(message)
        self.kind = kind
        self.token = token


PrefixParseFn = Callable[[], Expression]
InfixParseFn = Callable[[Expression], Expression]


class Parser:
    """
    Monkey Parser Class

    Turns the token stream of a `Lexer` into a `Program`. The parser is a
    single-use, single-threaded object: it owns the lexer's cursor state.

    Attributes
    ----------
    lexer : Lexer
        Source of tokens, pulled one at a time.
    curr_token : Token
        The token under examination.
    peek_token : Token
        The token after `curr_token`.
    errors : list[ParseError]
        Errors collected by `parse_program`, in the order they were hit.
    depth : int
        How many `parse_expression` calls are currently open.
    prefix_parse_fns : dict[str, PrefixParseFn]
        Token type → function parsing an expression that starts with it.
    infix_parse_fns : dict[str, InfixParseFn]
        Token type → function folding a left expression with the operator.
    """

    def __init__(self, lexer: Lexer) -> None:
        self.lexer: Lexer = lexer
        self.errors: list[ParseError] = []
        self.depth = 0

        self.prefix_parse_fns: dict[str, PrefixParseFn] = {
            IDENT: self.parse_identifier,
            INT: self.parse_integer_literal,
            TRUE: self.parse_boolean,
            FALSE: self.parse_boolean,
            MINUS: self.parse_prefix_expression,
            BANG: self.parse_prefix_expression,
            LPAREN: self.parse_grouped_expression,
            IF: self.parse_if_expression,
            FUNCTION: self.parse_function_literal,
        }

        self.infix_parse_fns: dict[str, InfixParseFn] = {
            tok_type: self.parse_infix_expression for tok_type in infix_tokens
        }
        self.infix_parse_fns[LPAREN] = self.parse_call_expression

        # Load current and lookahead
        self.curr_token: Token = Token(EOF, "")
        self.peek_token: Token = Token(EOF, "")
        self.next_token()
        self.next_token()

    @classmethod
    def from_source(cls, source: str) -> Parser:
        """Build a parser over a fresh lexer for `source`."""
        return cls(Lexer(CharacterStream(source)))

    # Token cursor

    def next_token(self) -> None:
        """Shift the lookahead into `curr_token` and pull a fresh lookahead."""
        self.curr_token = self.peek_token
        self.peek_token = self.lexer.next_token()

    def curr_token_is(self, type_: str) -> bool:
        """Check the current token's type without consuming anything."""
        return self.curr_token.type == type_

    def peek_token_is(self, type_: str) -> bool:
        """Check the lookahead's type without consuming anything."""
        return self.peek_token.type == type_

    def expect_peek(self, type_: str) -> bool:
        """Advances onto the lookahead only if it has the expected type."""
        if self.peek_token_is(type_):
            self.next_token()
            return True
        return False

    def peek_precedence(self) -> Precedence:
        """Infix binding power of the lookahead; LOWEST for non-operators."""
        return precedences.get(self.peek_token.type, Precedence.LOWEST)

    def curr_precedence(self) -> Precedence:
        """Infix binding power of the current token; LOWEST for non-operators."""
        return precedences.get(self.curr_token.type, Precedence.LOWEST)

    def has_errors(self) -> bool:
        """True once `parse_program` has recorded at least one error."""
        return bool(self.errors)

    # Statements

    def parse_program(self) -> Program:
        """Parse the whole input and return the root `Program` node.

        Statements that fail to parse are left out of the tree and their
        errors are appended to `self.errors`.
        """
        statements: list[Statement] = []
        while not self.curr_token_is(EOF):
            try:
                statements.append(self.parse_statement())
            except ParseError as e:
                logger.debug("dropping statement: %s", e)
                self.errors.append(e)
            self.next_token()
        return Program(statements)

    def parse_statement(self) -> Statement:
        if self.curr_token_is(LET):
            return self.parse_let_statement()
        if self.curr_token_is(RETURN):
            return self.parse_return_statement()
        return self.parse_expression_statement()

    def parse_let_statement(self) -> LetStatement:
        let_tok = self.curr_token

        if not self.expect_peek(IDENT):
            raise ParseError(ParserErrorKind.IDENT_EXPECTED, self.peek_token)
        name = Identifier(self.curr_token, self.curr_token.value)

        if not self.expect_peek(ASSIGN):
            raise ParseError(ParserErrorKind.ASSIGN_EXPECTED, self.peek_token)

        self.next_token()
        value = self.parse_expression(Precedence.LOWEST)

        if self.peek_token_is(SEMICOLON):
            self.next_token()

        return LetStatement(let_tok, name, value)

    def parse_return_statement(self) -> ReturnStatement:
        return_tok = self.curr_token

        self.next_token()
        value = self.parse_expression(Precedence.LOWEST)

        if self.peek_token_is(SEMICOLON):
            self.next_token()

        return ReturnStatement(return_tok, value)

    def parse_expression_statement(self) -> ExpressionStatement:
        stmt = ExpressionStatement(self.parse_expression(Precedence.LOWEST))

        if self.peek_token_is(SEMICOLON):
            self.next_token()

        return stmt

    def parse_block_statement(self, error_kind: ParserErrorKind) -> BlockStatement:
        """Parse `{ ... }` starting on the `{` and finishing on the `}`.

        Args:
            error_kind: Raised if input ends before the closing `}`.
        """
        block_tok = self.curr_token
        statements: list[Statement] = []

        self.next_token()
        while not self.curr_token_is(RBRACE):
            if self.curr_token_is(EOF):
                raise ParseError(error_kind, self.curr_token)
            statements.append(self.parse_statement())
            self.next_token()

        return BlockStatement(block_tok, statements)

    # Expressions

    def parse_expression(self, precedence: Precedence) -> Expression:
        """Parse one expression whose operators all bind tighter than `precedence`.

        Every recursive path through the parser passes through here, so the
        nesting limit is enforced in this one place. Input nested deeper than
        `MAX_NESTING_DEPTH` fails with `TokenUnrecognized` on the token where
        the limit was hit instead of exhausting the Python stack.
        """
        if self.depth >= MAX_NESTING_DEPTH:
            raise ParseError(ParserErrorKind.TOKEN_UNRECOGNIZED, self.curr_token)

        self.depth += 1
        try:
            prefix = self.prefix_parse_fns.get(self.curr_token.type)
            if prefix is None:
                raise ParseError(ParserErrorKind.TOKEN_UNRECOGNIZED, self.curr_token)
            left = prefix()

            while (
                not self.peek_token_is(SEMICOLON)
                and precedence < self.peek_precedence()
            ):
                infix = self.infix_parse_fns.get(self.peek_token.type)
                if infix is None:
                    return left

                self.next_token()
                left = infix(left)

            return left
        finally:
            self.depth -= 1

    def parse_identifier(self) -> Identifier:
        return Identifier(self.curr_token, self.curr_token.value)

    def parse_integer_literal(self) -> IntegerLiteral:
        tok = self.curr_token
        try:
            value = int(tok.value)
        except ValueError as e:
            raise ParseError(ParserErrorKind.INTEGER_PARSING_FAILED, tok) from e
        if not INT_MIN <= value <= INT_MAX:
            raise ParseError(ParserErrorKind.INTEGER_PARSING_FAILED, tok)
        return IntegerLiteral(tok, value)

    def parse_boolean(self) -> Boolean:
        tok = self.curr_token
        if tok.type not in (TRUE, FALSE):
            raise ParseError(ParserErrorKind.BOOLEAN_PARSING_FAILED, tok)
        return Boolean(tok, tok.type == TRUE)

    def parse_prefix_expression(self) -> PrefixExpression:
        op_tok = self.curr_token

        self.next_token()
        right = self.parse_expression(Precedence.PREFIX)

        return PrefixExpression(op_tok, op_tok.value, right)

    def parse_infix_expression(self, left: Expression) -> InfixExpression:
        op_tok = self.curr_token
        precedence = self.curr_precedence()

        # Same-precedence operators on the right stop the recursion, which
        # makes `a - b - c` group as `(a - b) - c`.
        self.next_token()
        right = self.parse_expression(precedence)

        return InfixExpression(op_tok, left, op_tok.value, right)

    def parse_grouped_expression(self) -> Expression:
        self.next_token()
        exp = self.parse_expression(Precedence.LOWEST)

        if not self.expect_peek(RPAREN):
            raise ParseError(
                ParserErrorKind.GROUP_EXPRESSION_PARSING_FAILED, self.peek_token
            )

        return exp

    def parse_if_expression(self) -> IfExpression:
        """Parse `if <cond> { ... }` with an optional `else { ... }`."""
        if_tok = self.curr_token

        self.next_token()
        condition = self.parse_expression(Precedence.LOWEST)

        if not self.expect_peek(LBRACE):
            raise ParseError(ParserErrorKind.INCORRECT_IF_STATEMENT, self.peek_token)
        consequence = self.parse_block_statement(ParserErrorKind.INCORRECT_IF_STATEMENT)

        alternative = None
        if self.peek_token_is(ELSE):
            self.next_token()
            if not self.expect_peek(LBRACE):
                raise ParseError(
                    ParserErrorKind.INCORRECT_IF_STATEMENT, self.peek_token
                )
            alternative = self.parse_block_statement(
                ParserErrorKind.INCORRECT_IF_STATEMENT
            )

        return IfExpression(if_tok, condition, consequence, alternative)

    def parse_function_literal(self) -> FunctionLiteral:
        """Parse `fn(<params>) { <body> }`."""
        fn_tok = self.curr_token

        if not self.expect_peek(LPAREN):
            raise ParseError(
                ParserErrorKind.INCORRECT_FUNCTION_DECLARATION, self.peek_token
            )
        parameters = self.parse_function_parameters()

        if not self.expect_peek(LBRACE):
            raise ParseError(
                ParserErrorKind.INCORRECT_FUNCTION_DECLARATION, self.peek_token
            )
        body = self.parse_block_statement(
            ParserErrorKind.INCORRECT_FUNCTION_DECLARATION
        )

        return FunctionLiteral(fn_tok, parameters, body)

    def parse_function_parameters(self) -> list[Identifier]:
        """Parse identifiers from after `(` up to and including `)`."""
        parameters: list[Identifier] = []

        self.next_token()
        while not self.curr_token_is(RPAREN):
            if self.curr_token_is(COMMA):
                self.next_token()
                if self.curr_token_is(RPAREN):
                    break
            if not self.curr_token_is(IDENT):
                raise ParseError(
                    ParserErrorKind.INCORRECT_FUNCTION_DECLARATION, self.curr_token
                )
            parameters.append(self.parse_identifier())
            self.next_token()

        return parameters

    def parse_call_expression(self, function: Expression) -> CallExpression:
        call_tok = self.curr_token
        arguments = self.parse_call_arguments()
        return CallExpression(call_tok, function, arguments)

    def parse_call_arguments(self) -> list[Expression]:
        """Parse expressions from after `(` up to and including `)`."""
        arguments: list[Expression] = []

        self.next_token()
        while not self.curr_token_is(RPAREN):
            if self.curr_token_is(COMMA):
                self.next_token()
                if self.curr_token_is(RPAREN):
                    break
            arguments.append(self.parse_expression(Precedence.LOWEST))
            self.next_token()

        return arguments


__all__ = ["ParseError", "Parser", "ParserErrorKind"]
