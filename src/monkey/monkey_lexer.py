"""
Lexical analyzer for the Monkey programming language.

This module provides the components that turn raw source text into tokens:

Classes:
    CharacterStream: Cursor over the source with a one-character lookahead.
    Token: Represents a single token with a type and the literal text matched.
    Lexer: Pulls tokens out of a CharacterStream, one per call.

Features:
    - Skips whitespace (space, tab, CR, LF)
    - Recognizes:
        * Identifiers and keywords (ASCII letters and ``_`` only)
        * Integer literals (digit runs, converted later by the parser)
        * Single-character operators and delimiters
        * The two-character operators ``==`` and ``!=``
    - Never raises: unknown characters come back as ``ILLEGAL`` tokens
    - ``EOF`` is returned again on every call past the end of input

Example:
    >>> lexer = Lexer(CharacterStream("let x = 5;"))
    >>> lexer.next_token()
    Token(LET, let)

Exports:
    - CharacterStream
    - Token
    - Lexer
    - tokenize
"""

from collections.abc import Callable, Iterator
from dataclasses import dataclass

from monkey.monkey_constants import (
    EOF,
    EOF_CHAR,
    IDENT,
    ILLEGAL,
    INT,
    keywords,
    token_hashmap,
    two_char_tokens,
    whitespace,
)


class CharacterStream:
    """
    Reads characters from a source string one at a time.

    The stream owns the full, immutable source and a cursor into it. Once the
    source is exhausted every read returns ``EOF_CHAR``.

    Attributes:
        source (str): The input source string.
        position (int): Index of the next character to be read.
    """

    def __init__(self, source: str, position: int = 0):
        self.source = source
        self.position = position

    def read_char(self) -> str:
        """
        Consumes and returns the next character.

        Returns:
            str: The next character, or ``EOF_CHAR`` past the end of the source.
        """
        if self.position >= len(self.source):
            return EOF_CHAR
        char = self.source[self.position]
        self.position += 1
        return char

    def peek_char(self) -> str:
        """Returns the next character without consuming it, or ``EOF_CHAR``."""
        if self.position >= len(self.source):
            return EOF_CHAR
        return self.source[self.position]


@dataclass(frozen=True, repr=False)
class Token:
    """A single lexical token in the Monkey language.

    Tokens are immutable and compare equal when both type and value match.

    Attributes:
        type (str): The token type (e.g. 'IDENT', 'INT', 'EOF').
        value (str): The literal text the token was built from.
    """

    type: str
    value: str

    @classmethod
    def from_literal(cls, literal: str) -> "Token":
        """Builds a token for a scanned word, classifying keywords by lookup.

        Args:
            literal (str): A maximal run of identifier characters.

        Returns:
            Token: A keyword token if ``literal`` is reserved, otherwise IDENT.
        """
        return cls(keywords.get(literal, IDENT), literal)

    def __repr__(self) -> str:
        return f"Token({self.type}, {self.value})"


def is_letter(ch: str) -> bool:
    """ASCII letters and underscore; digits never appear in identifiers."""
    return ("a" <= ch <= "z") or ("A" <= ch <= "Z") or ch == "_"


def is_digit(ch: str) -> bool:
    return "0" <= ch <= "9"


class Lexer:
    """Lexical analyzer for the Monkey language.

    The lexer keeps one character already read (``ch``) and pulls the rest
    from its CharacterStream on demand. Each call to ``next_token`` consumes
    exactly the characters of the token it returns; there is no backtracking.

    Attributes:
        stream (CharacterStream): The source stream to tokenize.
        ch (str): The current character, or ``EOF_CHAR`` at end of input.
    """

    def __init__(self, stream: CharacterStream) -> None:
        self.stream = stream
        self.ch: str = EOF_CHAR
        self.read_char()

    def read_char(self) -> None:
        """Advances ``ch`` to the next character of the stream."""
        self.ch = self.stream.read_char()

    def skip_whitespace(self) -> None:
        """
        Skips spaces, tabs, carriage returns and newlines.

        Leaves ``ch`` on the first non-whitespace character, or on
        ``EOF_CHAR`` if only whitespace remained.
        """
        while self.ch != EOF_CHAR and self.ch in whitespace:
            self.read_char()

    def read_while(self, predicate: Callable[[str], bool]) -> str:
        """Consumes the maximal run of characters accepted by ``predicate``."""
        chars = []
        while self.ch != EOF_CHAR and predicate(self.ch):
            chars.append(self.ch)
            self.read_char()
        return "".join(chars)

    def next_token(self) -> Token:
        """Consumes and returns the next Token from the stream.

        Returns:
            Token: The next token. At end of input this is always an EOF token
            with empty text, however many times it is requested.
        """
        self.skip_whitespace()

        ch = self.ch
        if ch == EOF_CHAR:
            return Token(EOF, "")

        # 1. Two-character operators
        pair = ch + self.stream.peek_char()
        if pair in two_char_tokens:
            self.read_char()
            self.read_char()
            return Token(two_char_tokens[pair], pair)

        # 2. Single-character operators and delimiters
        if ch in token_hashmap:
            self.read_char()
            return Token(token_hashmap[ch], ch)

        # 3. Identifier or keyword
        if is_letter(ch):
            return Token.from_literal(self.read_while(is_letter))

        # 4. Integer
        if is_digit(ch):
            return Token(INT, self.read_while(is_digit))

        # 5. Unknown character
        self.read_char()
        return Token(ILLEGAL, ch)

    def __iter__(self) -> Iterator[Token]:
        """Yields tokens up to and including the first EOF token."""
        while True:
            tok = self.next_token()
            yield tok
            if tok.type == EOF:
                return


def tokenize(source: str) -> list[Token]:
    """Lexes ``source`` into a list of tokens ending with a single EOF token."""
    return list(Lexer(CharacterStream(source)))


__all__ = ["CharacterStream", "Lexer", "Token", "tokenize"]
