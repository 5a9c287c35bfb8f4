"""Graphviz visualization helpers for the parse tree.

Provides `render_ast_dot(node)` which returns a `graphviz.Digraph` object
(not rendered). Optionally `write_and_render` can write the file to disk.

Node layout: every AST node is rendered as an HTML-like table node with the
node kind in bold and, when present, its value (function name, expression
text, unsupported construct) underneath. Statements and functions show
their one-line form from `PrettyPrinter.print_surface`. Node ids are
assigned in pre-order (`node_0` is the program root) so the dot source is
stable for a given tree.
Function parameter lists are shown as an extra dashed child since they are
not part of the structural tree.
"""

from typing import Optional
import html
from graphviz import Digraph
from ast_nodes import ASTNode, FunctionDeclarationNode, NodeType, UnsupportedNode
from pretty_printer import PrettyPrinter

# Background colors per node kind; kinds not listed are left white.
NODE_COLORS = {
    NodeType.PROGRAM: "#e8e8ff",
    NodeType.FUNC_DECL: "#e0f0ff",
    NodeType.BLOCK: "#f4f4f4",
    NodeType.IF_STMT: "#fff4d6",
    NodeType.RETURN_STMT: "#e6ffe6",
    NodeType.UNSUPPORTED: "#ffefef",
}

# Statement kinds labelled with their one-line surface form.
SURFACE_LABELS = {
    NodeType.FUNC_DECL,
    NodeType.IF_STMT,
    NodeType.RETURN_STMT,
    NodeType.EXPR_STMT,
}


def _node_html(kind: str, value: Optional[str], bgcolor: Optional[str]) -> str:
    bg = f' BGCOLOR="{bgcolor}"' if bgcolor else ""
    rows = f"<TR><TD{bg}><B>{html.escape(kind)}</B></TD></TR>"
    if value:
        escaped = html.escape(value)
        # Avoid empty FONT elements which some Graphviz versions reject
        if escaped.strip():
            rows += f'<TR><TD{bg}><FONT POINT-SIZE="9">{escaped}</FONT></TD></TR>'
    return f'<<TABLE BORDER="0" CELLBORDER="1" CELLSPACING="0">{rows}</TABLE>>'


def render_ast_dot(root: ASTNode, show_parameters: bool = True) -> Digraph:
    """Return a graphviz.Digraph for the tree rooted at `root`.

    The caller may call `dot.source` to inspect the dot text, or call
    `dot.render(filename, format=...)` to write files (requires Graphviz installed).
    """
    dot = Digraph(format="svg")
    dot.attr("graph", rankdir="TB")
    dot.attr("node", shape="plaintext")

    counter = 0

    def _emit(node: ASTNode) -> str:
        nonlocal counter
        node_id = f"node_{counter}"
        counter += 1

        value = node.value
        if node.type in SURFACE_LABELS:
            value = PrettyPrinter.print_surface(node)
        elif isinstance(node, UnsupportedNode):
            value = f"{node.construct}: {node.text}"
        dot.node(node_id, label=_node_html(str(node.type), value, NODE_COLORS.get(node.type)))

        if (
            show_parameters
            and isinstance(node, FunctionDeclarationNode)
            and node.parameters.tokens
        ):
            params_id = _emit(node.parameters)
            dot.edge(node_id, params_id, style="dashed", label="params")

        for child in node.children:
            dot.edge(node_id, _emit(child))
        return node_id

    _emit(root)
    return dot


def write_and_render(
    root: ASTNode,
    out_path: str,
    fmt: str = "svg",
    show_parameters: bool = True,
) -> str:
    """Write and render the tree to the given path (without extension).

    Example: write_and_render(program, 'out/ast', fmt='png') will create
    out/ast.png (requires Graphviz). Returns the rendered file path."""
    dot = render_ast_dot(root, show_parameters=show_parameters)
    dot.format = fmt
    # Note: render will append extension automatically
    return dot.render(out_path, cleanup=True)
