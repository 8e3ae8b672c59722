"""
Static language tables shared by the Monkey lexer and parser.

Contents:
    - Token type names (``IDENT``, ``INT``, ``PLUS``, ...)
    - ``token_hashmap``: single-character operators and delimiters → token type
    - ``two_char_tokens``: the two-character operators ``==`` and ``!=``
    - ``keywords``: reserved words → token type
    - ``Precedence``: binding power levels used by the Pratt parser
    - ``precedences``: token type → infix precedence
    - ``infix_tokens``: token types that continue an expression in infix position
    - ``MAX_NESTING_DEPTH``: how deeply expressions may nest before parsing fails
"""

from enum import IntEnum

# Special
ILLEGAL = "ILLEGAL"
EOF = "EOF"

# Identifiers and literals
IDENT = "IDENT"
INT = "INT"

# Operators
ASSIGN = "ASSIGN"
PLUS = "PLUS"
MINUS = "MINUS"
BANG = "BANG"
ASTERISK = "ASTERISK"
SLASH = "SLASH"
LT = "LT"
GT = "GT"
EQ = "EQ"
NOT_EQ = "NOT_EQ"

# Delimiters
COMMA = "COMMA"
SEMICOLON = "SEMICOLON"
LPAREN = "LPAREN"
RPAREN = "RPAREN"
LBRACE = "LBRACE"
RBRACE = "RBRACE"

# Keywords
FUNCTION = "FUNCTION"
LET = "LET"
TRUE = "TRUE"
FALSE = "FALSE"
IF = "IF"
ELSE = "ELSE"
RETURN = "RETURN"

# End-of-input sentinel returned by the character stream. No real character
# compares equal to the empty string.
EOF_CHAR = ""

token_hashmap: dict[str, str] = {
    "=": ASSIGN,
    "+": PLUS,
    "-": MINUS,
    "!": BANG,
    "*": ASTERISK,
    "/": SLASH,
    "<": LT,
    ">": GT,
    ",": COMMA,
    ";": SEMICOLON,
    "(": LPAREN,
    ")": RPAREN,
    "{": LBRACE,
    "}": RBRACE,
}

two_char_tokens: dict[str, str] = {
    "==": EQ,
    "!=": NOT_EQ,
}

keywords: dict[str, str] = {
    "fn": FUNCTION,
    "let": LET,
    "true": TRUE,
    "false": FALSE,
    "if": IF,
    "else": ELSE,
    "return": RETURN,
}

whitespace = " \t\r\n"

# Integer literals must fit a signed 64-bit value.
INT_MIN = -(2**63)
INT_MAX = 2**63 - 1

# Deepest expression nesting the parser accepts. Each level costs up to five
# Python frames, so this stays well inside the default recursion limit.
MAX_NESTING_DEPTH = 100


class Precedence(IntEnum):
    """Operator binding power, lowest to highest."""

    LOWEST = 1
    EQUALS = 2
    LESSGREATER = 3
    SUM = 4
    PRODUCT = 5
    PREFIX = 6
    CALL = 7


precedences: dict[str, Precedence] = {
    EQ: Precedence.EQUALS,
    NOT_EQ: Precedence.EQUALS,
    LT: Precedence.LESSGREATER,
    GT: Precedence.LESSGREATER,
    PLUS: Precedence.SUM,
    MINUS: Precedence.SUM,
    SLASH: Precedence.PRODUCT,
    ASTERISK: Precedence.PRODUCT,
    LPAREN: Precedence.CALL,
}

infix_tokens: frozenset[str] = frozenset(precedences)
