"""
Lexer for the minimal C-like language.

Overview:
- This module implements a small hand-written lexical analyzer (scanner) that
    transforms an input source string into a list of `Token` objects defined
    in `tokens.py`.
- It recognizes keywords (`int`, `char`, `float`, `double`, `void`, `if`,
    `else`, `while`, `for`, `return`, `printf`), identifiers, numbers,
    single-character punctuation (`; , ( ) { } [ ]`) and single-character
    operators. Whitespace (space, tab, newline, carriage return) is consumed
    and tracked for positions but never emitted.

Examples:
    Input:  "int main() { return 0; }"
    Tokens: [KEYWORD('int'), IDENTIFIER('main'), PUNCTUATION('('), ...]

Implementation notes:
- The lexer is a stateful scanner using `self.pos` and `self.current_char`,
    with `self.line`/`self.column` tracking the 1-based position of
    `current_char`.
- Identifiers are scanned with maximal munch and then looked up in the
    `KEYWORDS` set; `printf2` is an identifier, not `printf` followed by `2`.
- Numbers are a greedy run of digits and dots. The lexer does not check how
    many dots appear, so `3.14.5` is a single NUMBER token. This leniency is
    kept on purpose; later phases decide what a malformed number means.
- Every other character becomes a one-character PUNCTUATION or OPERATOR
    token, so the lexer never fails: there is no such thing as an
    unrecognized character.
- Character classes are ASCII only; non-ASCII letters fall through to the
    OPERATOR rule.
"""

from __future__ import annotations
import logging
from typing import Iterator, List, Optional
from tokens import KEYWORDS, PUNCTUATION, Token, TokenType

logger = logging.getLogger(__name__)

WHITESPACE = frozenset(" \t\n\r")


def _is_letter(ch: str) -> bool:
    return ch.isascii() and (ch.isalpha() or ch == "_")


def _is_digit(ch: str) -> bool:
    return ch.isascii() and ch.isdigit()


class Lexer:
    def __init__(self, text: str):
        self.text = text
        self.pos = 0
        self.line = 1
        self.column = 1
        self.current_char = self.text[self.pos] if self.text else None
        # Number of whitespace characters consumed so far.
        self.skipped = 0

    def advance(self) -> None:
        """Advance to next character."""
        # Newlines reset the column and increment the line number; every other
        # character (including '\r' and '\t') moves one column to the right.
        if self.current_char == "\n":
            self.line += 1
            self.column = 1
        else:
            self.column += 1

        self.pos += 1
        if self.pos < len(self.text):
            self.current_char = self.text[self.pos]
        else:
            self.current_char = None

    def skip_whitespace(self) -> None:
        """Skip whitespace characters."""
        while self.current_char is not None and self.current_char in WHITESPACE:
            self.skipped += 1
            self.advance()

    def number(self) -> str:
        """Scan a run of digits and dots."""
        result = []
        while self.current_char is not None and (
            _is_digit(self.current_char) or self.current_char == "."
        ):
            result.append(self.current_char)
            self.advance()
        return "".join(result)

    def identifier(self) -> str:
        """Scan an identifier or keyword."""
        result = []
        while self.current_char is not None and (
            _is_letter(self.current_char) or _is_digit(self.current_char)
        ):
            result.append(self.current_char)
            self.advance()
        return "".join(result)

    def get_next_token(self) -> Optional[Token]:
        """Return the next token, or None once the input is exhausted."""
        while self.current_char is not None:
            if self.current_char in WHITESPACE:
                self.skip_whitespace()
                continue

            # Record the start position before consuming anything.
            line, column = self.line, self.column

            if _is_letter(self.current_char):
                ident = self.identifier()
                token_type = (
                    TokenType.KEYWORD if ident in KEYWORDS else TokenType.IDENTIFIER
                )
                return Token(token_type, ident, line, column)

            if _is_digit(self.current_char):
                return Token(TokenType.NUMBER, self.number(), line, column)

            char = self.current_char
            self.advance()
            token_type = (
                TokenType.PUNCTUATION if char in PUNCTUATION else TokenType.OPERATOR
            )
            return Token(token_type, char, line, column)

        return None

    def iter_tokens(self) -> Iterator[Token]:
        """Yield tokens lazily, in source order."""
        while True:
            token = self.get_next_token()
            if token is None:
                return
            yield token

    def tokenize(self) -> List[Token]:
        """Return all tokens from the input string."""
        tokens = list(self.iter_tokens())
        logger.debug(
            "tokenized %d characters into %d tokens (%d whitespace skipped)",
            len(self.text),
            len(tokens),
            self.skipped,
        )
        return tokens


def tokenize(source: str) -> List[Token]:
    """Tokenize `source` into a list of tokens. Never raises."""
    return Lexer(source).tokenize()
