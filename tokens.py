"""Token definitions for the lexer.

This module defines the `TokenType` enum for the five token kinds produced by
the lexer and a frozen `Token` dataclass that records the kind, the lexeme
and the 1-based source position where the token starts. Tokens are the
atomic units produced by the lexer and consumed by the parser.

The keyword and punctuation tables live here as plain sets so both the lexer
(classification) and the parser (dispatch) share one definition.
"""

from __future__ import annotations
from enum import Enum, auto
from dataclasses import dataclass


class TokenType(Enum):
    KEYWORD = auto()
    IDENTIFIER = auto()
    NUMBER = auto()
    OPERATOR = auto()
    PUNCTUATION = auto()

    def __str__(self) -> str:
        return self.name


KEYWORDS = frozenset(
    {
        "int",
        "char",
        "float",
        "double",
        "void",
        "if",
        "else",
        "while",
        "for",
        "return",
        "printf",
    }
)

# Keywords that can start a declaration (`type name ...`).
TYPE_KEYWORDS = frozenset({"int", "char", "float", "double", "void"})

PUNCTUATION = frozenset(";,(){}[]")


@dataclass(frozen=True)
class Token:
    type: TokenType
    lexeme: str
    line: int = 1
    column: int = 1

    def __repr__(self) -> str:
        return f"Token({self.type}, {self.lexeme!r}, {self.line}:{self.column})"

    @property
    def value(self) -> str:
        return self.lexeme

    @property
    def position(self) -> tuple[int, int]:
        return (self.line, self.column)

    def is_keyword(self, word: str) -> bool:
        return self.type == TokenType.KEYWORD and self.lexeme == word

    def is_punct(self, char: str) -> bool:
        return self.type == TokenType.PUNCTUATION and self.lexeme == char

    def is_type_keyword(self) -> bool:
        return self.type == TokenType.KEYWORD and self.lexeme in TYPE_KEYWORDS
