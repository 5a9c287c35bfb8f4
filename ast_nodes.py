"""AST node definitions for the minimal C-like language.

This module defines the AST node dataclasses built by the parser. Each node
kind is its own dataclass carrying only the fields meaningful for it (e.g.
`IfStatementNode` has `condition`, `then_block` and `else_block`). The
`NodeType` enum identifies node kinds and is used by the printers and the
visualizer.

Conventions:
- All AST node dataclasses inherit from `ASTNode` which records the node
    kind (`NodeType`) and the source `line`/`column` of the first token.
- Nodes are frozen and child sequences are tuples: a tree is built once by
    the parser and is read-only afterwards.
- Every node exposes `children` (ordered child nodes) and `value` (optional
    text such as a function name), a uniform view used for traversal.
- Expressions are not parsed into operators and operands. An
    `ExpressionNode` keeps the raw token span, and `text` joins the lexemes
    with single spaces.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Iterator, Optional, Tuple
from tokens import Token


class NodeType(Enum):
    PROGRAM = auto()
    FUNC_DECL = auto()
    PARAM_LIST = auto()
    BLOCK = auto()
    IF_STMT = auto()
    RETURN_STMT = auto()
    EXPR_STMT = auto()
    EXPRESSION = auto()
    UNSUPPORTED = auto()

    def __str__(self) -> str:
        return self.name


# Base AST Node
@dataclass(frozen=True)
class ASTNode:
    type: NodeType
    line: int = 0
    column: int = 0

    @property
    def children(self) -> Tuple[ASTNode, ...]:
        return ()

    @property
    def value(self) -> Optional[str]:
        return None

    def walk(self) -> Iterator[ASTNode]:
        """Yield this node and all descendants, depth-first, in order."""
        yield self
        for child in self.children:
            yield from child.walk()


def _join(tokens: Tuple[Token, ...]) -> str:
    return " ".join(t.lexeme for t in tokens)


# Expression Nodes
@dataclass(frozen=True)
class ExpressionNode(ASTNode):
    type: NodeType = NodeType.EXPRESSION
    tokens: Tuple[Token, ...] = ()

    @property
    def text(self) -> str:
        return _join(self.tokens)

    @property
    def value(self) -> Optional[str]:
        return self.text


# Statement Nodes
@dataclass(frozen=True)
class ExpressionStatementNode(ASTNode):
    type: NodeType = NodeType.EXPR_STMT
    expression: ExpressionNode = field(default_factory=ExpressionNode)

    @property
    def children(self) -> Tuple[ASTNode, ...]:
        return (self.expression,)

    @property
    def value(self) -> Optional[str]:
        return self.expression.text


@dataclass(frozen=True)
class BlockNode(ASTNode):
    type: NodeType = NodeType.BLOCK
    statements: Tuple[ASTNode, ...] = ()

    @property
    def children(self) -> Tuple[ASTNode, ...]:
        return self.statements


@dataclass(frozen=True)
class IfStatementNode(ASTNode):
    type: NodeType = NodeType.IF_STMT
    condition: ExpressionNode = field(default_factory=ExpressionNode)
    then_block: BlockNode = field(default_factory=BlockNode)
    else_block: Optional[BlockNode] = None

    @property
    def children(self) -> Tuple[ASTNode, ...]:
        if self.else_block is None:
            return (self.condition, self.then_block)
        return (self.condition, self.then_block, self.else_block)


@dataclass(frozen=True)
class ReturnStatementNode(ASTNode):
    type: NodeType = NodeType.RETURN_STMT
    expression: Optional[ExpressionNode] = None

    @property
    def children(self) -> Tuple[ASTNode, ...]:
        return (self.expression,) if self.expression is not None else ()


@dataclass(frozen=True)
class UnsupportedNode(ASTNode):
    """A recognized statement form the parser skips (declaration, loop)."""

    type: NodeType = NodeType.UNSUPPORTED
    construct: str = ""
    tokens: Tuple[Token, ...] = ()

    @property
    def value(self) -> Optional[str]:
        return self.construct

    @property
    def text(self) -> str:
        return _join(self.tokens)


# Declaration Nodes
@dataclass(frozen=True)
class ParameterListNode(ASTNode):
    """Unstructured parameter list: the raw tokens between `(` and `)`."""

    type: NodeType = NodeType.PARAM_LIST
    tokens: Tuple[Token, ...] = ()

    @property
    def text(self) -> str:
        return _join(self.tokens)

    @property
    def value(self) -> Optional[str]:
        return self.text or None


@dataclass(frozen=True)
class FunctionDeclarationNode(ASTNode):
    type: NodeType = NodeType.FUNC_DECL
    func_name: str = ""
    return_type: str = "int"
    parameters: ParameterListNode = field(default_factory=ParameterListNode)
    body: Optional[BlockNode] = None

    @property
    def children(self) -> Tuple[ASTNode, ...]:
        return (self.body,) if self.body is not None else ()

    @property
    def value(self) -> Optional[str]:
        return self.func_name


# Program Node
@dataclass(frozen=True)
class ProgramNode(ASTNode):
    type: NodeType = NodeType.PROGRAM
    declarations: Tuple[ASTNode, ...] = ()

    @property
    def children(self) -> Tuple[ASTNode, ...]:
        return self.declarations
