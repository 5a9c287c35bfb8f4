"""Pretty-printer for tokens, the AST and diagnostics.

Provides `PrettyPrinter.print_ast(node, indent, prefix)` which renders an
AST into a readable multi-line string, `print_tokens` for the token listing
and `print_diagnostics` for parser diagnostics. The printer is intentionally
simple and intended for debugging, tests and the command-line driver rather
than for producing source code.

Examples:
    PrettyPrinter.print_ast(program_node)
    PrettyPrinter.print_tokens(tokens)
"""

from __future__ import annotations
from typing import Iterable, Optional
from ast_nodes import *
from errors import Diagnostic
from tokens import Token


class PrettyPrinter:
    @staticmethod
    def print_tokens(tokens: Iterable[Token], limit: Optional[int] = None) -> str:
        """One line per token: `Type: KEYWORD, Value: int, Line: 1, Column: 1`."""
        tokens = list(tokens)
        shown = tokens if limit is None else tokens[:limit]
        lines = [
            f"Type: {t.type}, Value: {t.lexeme}, Line: {t.line}, Column: {t.column}"
            for t in shown
        ]
        if len(shown) < len(tokens):
            lines.append(f"... and {len(tokens) - len(shown)} more")
        return "\n".join(lines)

    @staticmethod
    def print_diagnostics(diagnostics: Iterable[Diagnostic]) -> str:
        return "\n".join(str(d) for d in diagnostics)

    @staticmethod
    def print_ast(node: ASTNode, indent: int = 0, prefix: str = "") -> str:
        """Pretty print AST and return as string."""
        lines = []
        indent_str = " " * indent

        if not isinstance(node, ASTNode):
            lines.append(f"{indent_str}{prefix}{node}")
            return "\n".join(lines)

        match node:
            case ExpressionNode():
                lines.append(f"{indent_str}{prefix}Expression({node.text})")

            case ExpressionStatementNode(expression=expr):
                lines.append(f"{indent_str}{prefix}ExpressionStatement")
                lines.append(PrettyPrinter.print_ast(expr, indent + 2))

            case ReturnStatementNode(expression=expr):
                lines.append(f"{indent_str}{prefix}Return")
                if expr:
                    lines.append(PrettyPrinter.print_ast(expr, indent + 2, "expr: "))

            case IfStatementNode(condition=cond, then_block=then_b, else_block=else_b):
                lines.append(f"{indent_str}{prefix}IfStatement")
                lines.append(PrettyPrinter.print_ast(cond, indent + 4, "condition: "))
                lines.append(PrettyPrinter.print_ast(then_b, indent + 4, "then: "))
                if else_b:
                    lines.append(PrettyPrinter.print_ast(else_b, indent + 4, "else: "))

            case BlockNode(statements=stmts):
                lines.append(f"{indent_str}{prefix}Block")
                for i, stmt in enumerate(stmts):
                    lines.append(PrettyPrinter.print_ast(stmt, indent + 4, f"stmt[{i}]: "))

            case UnsupportedNode(construct=construct):
                lines.append(f"{indent_str}{prefix}Unsupported({construct}: {node.text})")

            case FunctionDeclarationNode(func_name=name, parameters=params, body=body):
                lines.append(
                    f"{indent_str}{prefix}FunctionDecl({name} -> {node.return_type}, params=[{params.text}])"
                )
                if body:
                    lines.append(PrettyPrinter.print_ast(body, indent + 4, "body: "))

            case ProgramNode(declarations=decls):
                lines.append(f"{indent_str}{prefix}Program")
                for i, decl in enumerate(decls):
                    lines.append(PrettyPrinter.print_ast(decl, indent + 4, f"decl[{i}]: "))

            case _:
                lines.append(f"{indent_str}{prefix}Unknown node type: {type(node)}")

        return "\n".join(line for line in lines if line)

    @staticmethod
    def print_surface(node: Optional[ASTNode]) -> str:
        """Return a compact, surface-syntax-like one-line representation of a node.

        Used for visualization labels where a short statement summary reads
        better than the indented tree (e.g. `return x + 1`).
        """
        if node is None:
            return ""

        match node:
            case ExpressionNode():
                return node.text
            case ExpressionStatementNode(expression=expr):
                return f"{expr.text};"
            case ReturnStatementNode(expression=expr):
                if expr:
                    return f"return {expr.text};"
                return "return;"
            case IfStatementNode(condition=cond):
                return f"if ({cond.text})"
            case UnsupportedNode(construct=construct):
                return f"<{construct}>"
            case FunctionDeclarationNode(func_name=fn, parameters=params):
                return f"{node.return_type} {fn}({params.text})"
            case BlockNode():
                return "{...}"
            case ProgramNode():
                return "<program>"
            case _:
                s = PrettyPrinter.print_ast(node)
                return " ".join(line.strip() for line in s.splitlines())
