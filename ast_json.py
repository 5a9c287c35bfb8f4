"""Convert tokens, AST nodes and diagnostics into JSON-serializable structures.

This module provides `ast_to_json(node)` which returns a nested structure of
dicts/lists/primitives describing the AST node, plus `tokens_to_json`,
`diagnostics_to_json` and `result_to_json` for a whole front-end run. It's
intentionally simple and conservative: it encodes the node type and key
fields, and every node carries a `children` list so generic tree viewers can
walk it without knowing the node kinds.
"""

from typing import Any, Dict, List, Optional, Sequence
from ast_nodes import *
from errors import Diagnostic, UnexpectedToken, UnsupportedConstruct
from tokens import Token


def token_to_json(token: Token) -> Dict[str, Any]:
    return {
        "type": str(token.type),
        "value": token.lexeme,
        "line": token.line,
        "column": token.column,
    }


def tokens_to_json(tokens: Sequence[Token]) -> List[Dict[str, Any]]:
    return [token_to_json(t) for t in tokens]


def ast_to_json(node: Optional[ASTNode]) -> Any:
    if node is None:
        return None

    data: Dict[str, Any] = {
        "node_type": str(node.type),
        "line": node.line,
        "column": node.column,
    }
    if node.value is not None:
        data["value"] = node.value

    if isinstance(node, FunctionDeclarationNode):
        data["func_name"] = node.func_name
        data["return_type"] = node.return_type
        data["parameters"] = tokens_to_json(node.parameters.tokens)
    elif isinstance(node, IfStatementNode):
        data["has_else"] = node.else_block is not None
    elif isinstance(node, UnsupportedNode):
        data["construct"] = node.construct
        data["tokens"] = tokens_to_json(node.tokens)
    elif isinstance(node, ExpressionNode):
        data["tokens"] = tokens_to_json(node.tokens)

    data["children"] = [ast_to_json(c) for c in node.children]
    return data


def diagnostic_to_json(diagnostic: Diagnostic) -> Dict[str, Any]:
    data: Dict[str, Any] = {
        "message": diagnostic.message,
        "line": diagnostic.line,
        "column": diagnostic.column,
        "severity": str(diagnostic.severity),
    }
    if isinstance(diagnostic, UnexpectedToken):
        data["kind"] = "UnexpectedToken"
        data["expected"] = diagnostic.expected
        data["found"] = diagnostic.found.lexeme if diagnostic.found else None
    elif isinstance(diagnostic, UnsupportedConstruct):
        data["kind"] = "UnsupportedConstruct"
        data["construct"] = diagnostic.construct
    if diagnostic.suggestions:
        data["suggestions"] = list(diagnostic.suggestions)
    return data


def diagnostics_to_json(diagnostics: Sequence[Diagnostic]) -> List[Dict[str, Any]]:
    return [diagnostic_to_json(d) for d in diagnostics]


def result_to_json(tokens: Sequence[Token], program: ProgramNode, diagnostics: Sequence[Diagnostic]) -> Dict[str, Any]:
    """Bundle a full front-end run: tokens, parse tree and errors."""
    return {
        "tokens": tokens_to_json(tokens),
        "parse_tree": ast_to_json(program),
        "errors": diagnostics_to_json(diagnostics),
    }
