"""
Parser for the minimal C-like language.

Overview and approach:
- This is a small, hand-written recursive-descent parser. Each grammar rule
    is a `parse_*` method; the grammar covers function declarations, blocks,
    `if`/`else`, `return` and generic expression statements:

        program     := declaration*
        declaration := TYPE IDENT '(' <params> ')' ( block | ';' )?
        block       := '{' statement* '}'
        statement   := if_stmt | return_stmt | expr_stmt
        if_stmt     := 'if' '(' <expr> ')' branch ( 'else' branch )?
        branch      := block | statement
        return_stmt := 'return' <expr>? ';'
        expr_stmt   := <expr> ';'

    `<params>` and `<expr>` are not parsed further; the parser keeps their raw
    token span (`ParameterListNode`, `ExpressionNode`).

Cursor and checkpoints:
- The parser holds a single index `self.pos` into the token list. A
    production that may fail takes a checkpoint with `mark()` and, when a
    `ParseError` unwinds it, the caller restores the checkpoint with
    `reset()`. A failed attempt therefore never leaves the cursor half way
    through a construct.
- After a failure the parser records the diagnostic and synchronizes: it
    skips at least one token, so every loop iteration makes progress and
    parsing terminates on any input.

Diagnostics:
- Nothing escapes `parse()`. Malformed input is reported as
    `UnexpectedToken` errors and unsupported-but-recognized input (variable
    declarations, loops, parameter lists) as `UnsupportedConstruct`
    warnings. Both are returned on the `ParseResult` together with the
    best-effort tree.
- A missing closing token that does not make the surrounding construct
    ambiguous (`;` after `return`, `)` after parameters, `}` at end of input)
    is reported without discarding the node.

Examples:
    - `int main() { return 0; }` gives
      Program -> FunctionDeclaration(main) -> Block -> [ReturnStatement]
    - `int x = 10;` at top level gives no node and one UnsupportedConstruct
      warning; the tokens through `;` are skipped. Without the `;` the skip
      stops before the next type keyword and an UnexpectedToken is added.
    - Statements nested deeper than `MAX_NESTING` are rejected with an
      error diagnostic rather than exhausting the interpreter stack.
"""

from __future__ import annotations
import logging
from dataclasses import dataclass, field
from typing import Callable, List, Optional, Sequence, Tuple
from tokens import Token, TokenType
from ast_nodes import *
from errors import (
    Diagnostic,
    ParseError,
    Severity,
    UnexpectedToken,
    UnsupportedConstruct,
)

logger = logging.getLogger(__name__)

OPENERS = {"(": ")", "[": "]", "{": "}"}
CLOSERS = {")", "]", "}"}

# Statements nested deeper than this are rejected instead of recursing further.
MAX_NESTING = 100


@dataclass
class ParseResult:
    program: ProgramNode
    diagnostics: List[Diagnostic] = field(default_factory=list)

    @property
    def errors(self) -> List[Diagnostic]:
        return [d for d in self.diagnostics if d.severity == Severity.ERROR]

    @property
    def warnings(self) -> List[Diagnostic]:
        return [d for d in self.diagnostics if d.severity == Severity.WARNING]

    @property
    def ok(self) -> bool:
        return not self.errors

    def raise_for_errors(self) -> None:
        """Raise the first error diagnostic as a `ParseError`, if any."""
        if self.errors:
            raise ParseError(self.errors[0])


class Parser:
    def __init__(self, tokens: Sequence[Token]):
        self.tokens = list(tokens)
        self.pos = 0
        self.depth = 0
        self.diagnostics: List[Diagnostic] = []

    # ------------------------------------------------------------------
    # Cursor helpers

    @property
    def current(self) -> Optional[Token]:
        return self.tokens[self.pos] if self.pos < len(self.tokens) else None

    def peek(self, offset: int = 1) -> Optional[Token]:
        """Return the token `offset` positions ahead without consuming it."""
        index = self.pos + offset
        return self.tokens[index] if index < len(self.tokens) else None

    def at_end(self) -> bool:
        return self.pos >= len(self.tokens)

    def advance(self) -> Optional[Token]:
        """Consume the current token and return it."""
        token = self.current
        if token is not None:
            self.pos += 1
        return token

    def mark(self) -> Tuple[int, int]:
        """Checkpoint the cursor and the number of recorded diagnostics."""
        return (self.pos, len(self.diagnostics))

    def reset(self, mark: Tuple[int, int]) -> None:
        """Restore a checkpoint, dropping diagnostics recorded since."""
        self.pos, count = mark
        del self.diagnostics[count:]

    def position(self) -> Tuple[int, int]:
        """Source position of the current token (or just past the last one)."""
        if self.current is not None:
            return self.current.position
        if self.tokens:
            last = self.tokens[-1]
            return (last.line, last.column + len(last.lexeme))
        return (1, 1)

    def check_punct(self, char: str) -> bool:
        return self.current is not None and self.current.is_punct(char)

    def check_keyword(self, word: str) -> bool:
        return self.current is not None and self.current.is_keyword(word)

    def match_punct(self, char: str) -> bool:
        """Check if current token is punctuation `char`, consume if true."""
        if self.check_punct(char):
            self.advance()
            return True
        return False

    def error(self, expected: str, suggestions: Tuple[str, ...] = ()) -> ParseError:
        return ParseError(
            UnexpectedToken.at(expected, self.current, self.position(), suggestions)
        )

    def expect(self, token_type: TokenType, expected: str) -> Token:
        """Expect and consume a token of the given type."""
        if self.current is not None and self.current.type == token_type:
            return self.advance()
        raise self.error(expected)

    def expect_punct(self, char: str) -> Token:
        """Expect and consume punctuation `char`."""
        if self.check_punct(char):
            return self.advance()
        raise self.error(f"'{char}'")

    def expect_closing(self, char: str, suggestion: str) -> bool:
        """Consume `char` if present, otherwise report it and carry on."""
        if self.match_punct(char):
            return True
        self.report(
            UnexpectedToken.at(
                f"'{char}'", self.current, self.position(), (suggestion,)
            )
        )
        return False

    def report(self, diagnostic: Diagnostic) -> None:
        logger.debug("parser diagnostic: %s", diagnostic)
        self.diagnostics.append(diagnostic)

    def collect_until(self, stop: Callable[[Token], bool]) -> Tuple[Token, ...]:
        """Consume tokens until `stop` holds for a token at nesting depth 0.

        `(`/`[`/`{` open a nesting level and the matching closer ends it. A
        closer at depth 0 also stops collection so that an unbalanced `)` or
        `}` is left for the enclosing rule. The stopping token is not consumed.
        """
        collected: List[Token] = []
        depth = 0
        while self.current is not None:
            token = self.current
            is_closer = token.type == TokenType.PUNCTUATION and token.lexeme in CLOSERS
            if depth == 0 and (is_closer or stop(token)):
                break
            if token.type == TokenType.PUNCTUATION:
                if token.lexeme in OPENERS:
                    depth += 1
                elif token.lexeme in CLOSERS:
                    depth -= 1
            collected.append(token)
            self.advance()
        return tuple(collected)

    def skip_construct(
        self, stop_after_body: bool = False, stop_before_type: bool = False
    ) -> Tuple[Token, ...]:
        """Skip an unsupported construct and return the skipped tokens.

        Skips through the next depth-0 `;`. With `stop_after_body` a balanced
        `{ ... }` also ends the construct (loop bodies). With `stop_before_type`
        a depth-0 type keyword ends it without being consumed (the next
        declaration after a missing `;`). A `}` at depth 0 is never consumed:
        it belongs to the enclosing block.
        """
        skipped: List[Token] = []
        depth = 0
        while self.current is not None:
            token = self.current
            if stop_before_type and depth == 0 and token.is_type_keyword():
                break
            if token.type == TokenType.PUNCTUATION:
                if token.lexeme in CLOSERS and depth == 0:
                    break
                skipped.append(self.advance())
                if token.lexeme in OPENERS:
                    depth += 1
                elif token.lexeme in CLOSERS:
                    depth -= 1
                    if depth == 0 and token.lexeme == "}" and stop_after_body:
                        break
                elif token.lexeme == ";" and depth == 0:
                    break
                continue
            skipped.append(self.advance())
        return tuple(skipped)

    def synchronize(self, top_level: bool) -> None:
        """Skip tokens after an error until a likely construct boundary.

        Always consumes at least one token. Stops after a depth-0 `;`, before
        a depth-0 `}` inside a block (after it at top level) and, at top
        level, before a type keyword that may start the next declaration.
        """
        start = self.pos
        depth = 0
        while self.current is not None:
            token = self.current
            if self.pos > start and depth == 0:
                if not top_level and token.is_punct("}"):
                    break
                if top_level and token.is_type_keyword():
                    break
            self.advance()
            if token.type != TokenType.PUNCTUATION:
                continue
            if token.lexeme in OPENERS:
                depth += 1
            elif token.lexeme in CLOSERS:
                if depth > 0:
                    depth -= 1
                    if depth == 0 and token.lexeme == "}":
                        break
                elif token.lexeme == "}":
                    break
            elif token.lexeme == ";" and depth == 0:
                break
        logger.debug("synchronized: skipped tokens %d..%d", start, self.pos)

    # ------------------------------------------------------------------
    # Declarations

    def parse_declaration(self) -> Optional[ASTNode]:
        """Parse `type name ( params ) body`; None for anything else."""
        start = self.mark()
        try:
            type_token = self.expect(TokenType.KEYWORD, "type keyword")
            name_token = self.expect(TokenType.IDENTIFIER, "declaration name")
        except ParseError as e:
            self.reset(start)
            self.report(e.diagnostic)
            self.synchronize(top_level=True)
            return None

        if not self.check_punct("("):
            # `type name` not followed by `(`: a variable declaration, which
            # this front end does not build nodes for.
            construct = (
                "variable declaration"
                if type_token.is_type_keyword()
                else f"top-level '{type_token.lexeme}' statement"
            )
            self.report(UnsupportedConstruct.at(construct, type_token.position))
            skipped = self.skip_construct(stop_before_type=True)
            if not skipped or not skipped[-1].is_punct(";"):
                self.report(
                    UnexpectedToken.at(
                        "';'",
                        self.current,
                        self.position(),
                        ("Terminate the declaration with ';'",),
                    )
                )
            return None

        return self.parse_function_declaration(type_token, name_token)

    def parse_function_declaration(
        self, type_token: Token, name_token: Token
    ) -> FunctionDeclarationNode:
        """Parse the rest of a function after `type name`."""
        open_paren = self.expect_punct("(")
        param_tokens = self.collect_until(lambda t: t.is_punct("{") or t.is_punct(";"))
        parameters = ParameterListNode(
            line=open_paren.line, column=open_paren.column, tokens=param_tokens
        )
        if param_tokens:
            self.report(
                UnsupportedConstruct.at("parameter list", param_tokens[0].position)
            )
        self.expect_closing(")", "Close the parameter list with ')'")

        body = None
        if self.check_punct("{"):
            body = self.parse_block()
        else:
            # Prototype: `int f();`
            self.match_punct(";")

        return FunctionDeclarationNode(
            line=type_token.line,
            column=type_token.column,
            func_name=name_token.lexeme,
            return_type=type_token.lexeme,
            parameters=parameters,
            body=body,
        )

    # ------------------------------------------------------------------
    # Statements

    def parse_block(self) -> BlockNode:
        """Parse a block of statements: { statement* }"""
        open_brace = self.expect_punct("{")
        statements: List[ASTNode] = []

        while not self.at_end() and not self.check_punct("}"):
            checkpoint = self.mark()
            try:
                stmt = self.parse_statement()
            except ParseError as e:
                self.reset(checkpoint)
                self.report(e.diagnostic)
                self.synchronize(top_level=False)
                continue
            if stmt is not None:
                statements.append(stmt)
            if self.pos == checkpoint[0]:
                self.advance()

        self.expect_closing("}", "Close the block with '}'")
        return BlockNode(
            line=open_brace.line, column=open_brace.column, statements=tuple(statements)
        )

    def parse_branch(self) -> BlockNode:
        """Parse an if/else branch: a block, or one statement wrapped in a block."""
        if self.check_punct("{"):
            return self.parse_block()
        if self.at_end():
            raise self.error("statement or block")
        line, column = self.current.position
        stmt = self.parse_statement()
        statements = (stmt,) if stmt is not None else ()
        return BlockNode(line=line, column=column, statements=statements)

    def parse_if_statement(self) -> IfStatementNode:
        """Parse if statement: if (expr) branch [else branch]"""
        if_token = self.advance()
        open_paren = self.expect_punct("(")
        cond_tokens = self.collect_until(lambda t: t.is_punct(";") or t.is_punct("{"))
        condition = ExpressionNode(
            line=open_paren.line, column=open_paren.column, tokens=cond_tokens
        )
        self.expect_closing(")", "Close the condition with ')'")

        then_block = self.parse_branch()

        else_block = None
        if self.check_keyword("else"):
            self.advance()
            else_block = self.parse_branch()

        return IfStatementNode(
            line=if_token.line,
            column=if_token.column,
            condition=condition,
            then_block=then_block,
            else_block=else_block,
        )

    def parse_return_statement(self) -> ReturnStatementNode:
        """Parse return statement: return expr? ;"""
        return_token = self.advance()
        expr = None
        if self.current is not None and not self.check_punct(";"):
            start = self.current
            tokens = self.collect_until(lambda t: t.is_punct(";"))
            if tokens:
                expr = ExpressionNode(line=start.line, column=start.column, tokens=tokens)
        self.expect_closing(";", "Add a semicolon ';' after the return statement")
        return ReturnStatementNode(
            line=return_token.line, column=return_token.column, expression=expr
        )

    def parse_expression_statement(self) -> ExpressionStatementNode:
        """Parse expression statement: <expr> ;"""
        start = self.current
        tokens = self.collect_until(lambda t: t.is_punct(";"))
        if not tokens:
            raise self.error("expression")
        self.match_punct(";")
        expr = ExpressionNode(line=start.line, column=start.column, tokens=tokens)
        return ExpressionStatementNode(
            line=start.line, column=start.column, expression=expr
        )

    def parse_unsupported(self, construct: str, is_loop: bool = False) -> UnsupportedNode:
        start = self.current
        self.report(UnsupportedConstruct.at(construct, start.position))
        tokens = self.skip_construct(stop_after_body=is_loop)
        return UnsupportedNode(
            line=start.line, column=start.column, construct=construct, tokens=tokens
        )

    def parse_statement(self) -> Optional[ASTNode]:
        """Parse a statement, refusing to nest deeper than `MAX_NESTING`."""
        if self.depth >= MAX_NESTING:
            raise ParseError(
                UnsupportedConstruct.at(
                    f"statements nested deeper than {MAX_NESTING} levels",
                    self.position(),
                    severity=Severity.ERROR,
                )
            )
        self.depth += 1
        try:
            return self.dispatch_statement()
        finally:
            self.depth -= 1

    def dispatch_statement(self) -> Optional[ASTNode]:
        token = self.current
        if token is None:
            return None

        if token.type == TokenType.KEYWORD:
            match token.lexeme:
                case "if":
                    return self.parse_if_statement()
                case "return":
                    return self.parse_return_statement()
                case "while" | "for":
                    return self.parse_unsupported(f"{token.lexeme} loop", is_loop=True)
                case "else":
                    raise self.error("statement", ("'else' must follow an 'if' branch",))
                case _ if token.is_type_keyword():
                    return self.parse_unsupported("variable declaration")

        if token.is_punct("{"):
            return self.parse_block()

        if token.is_punct(";"):
            # Empty statement.
            self.advance()
            return None

        return self.parse_expression_statement()

    # ------------------------------------------------------------------
    # Program

    def parse_program(self) -> ProgramNode:
        """Parse a complete program (sequence of declarations)."""
        declarations: List[ASTNode] = []

        while not self.at_end():
            start = self.pos
            node = self.parse_declaration()
            if node is not None:
                declarations.append(node)
            if self.pos == start:
                self.advance()

        return ProgramNode(line=1, column=1, declarations=tuple(declarations))

    def parse(self) -> ParseResult:
        """Parse the token list into a `ParseResult`."""
        program = self.parse_program()
        logger.debug(
            "parsed %d tokens into %d declarations with %d diagnostics",
            len(self.tokens),
            len(program.declarations),
            len(self.diagnostics),
        )
        return ParseResult(program=program, diagnostics=list(self.diagnostics))


def parse(tokens: Sequence[Token]) -> ParseResult:
    """Parse `tokens` into a `ParseResult`. Never raises."""
    return Parser(tokens).parse()
