from lexer import Lexer
from parser import Parser


def lex(text: str):
    """Return a list of tokens for the given source text."""
    return Lexer(text).tokenize()


def parse_tokens(tokens):
    """Parse a list of tokens into a ParseResult."""
    return Parser(tokens).parse()


def parse_text(text: str):
    """Convenience: lex+parse a source text into a ParseResult."""
    return Parser(Lexer(text).tokenize()).parse()


def kinds_and_lexemes(tokens):
    """Drop positions so token streams can be compared structurally."""
    return [(t.type, t.lexeme) for t in tokens]
