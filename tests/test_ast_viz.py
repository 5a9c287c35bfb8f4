"""Tests for ast_viz: ensure a Digraph is produced and contains node labels."""

from main import compile_source
from ast_viz import render_ast_dot


def test_ast_viz_dot_source():
    _, result = compile_source("int main() { if (x > 5) { y; } return 0; }")
    dot = render_ast_dot(result.program)
    src = dot.source
    assert "node_0" in src
    assert "PROGRAM" in src
    assert "FUNC_DECL" in src
    assert "main" in src
    assert "IF_STMT" in src
    # x &gt; 5 is HTML-escaped inside the label
    assert "x &gt; 5" in src
    assert "node_0 -> node_1" in src


def test_ast_viz_shows_parameters_as_dashed_child():
    _, result = compile_source("int add(int a, int b) { }")
    src = render_ast_dot(result.program).source
    assert "PARAM_LIST" in src
    assert "dashed" in src

    hidden = render_ast_dot(result.program, show_parameters=False).source
    assert "PARAM_LIST" not in hidden


def test_ast_viz_node_count_matches_tree():
    _, result = compile_source("int main() { return 0; }")
    src = render_ast_dot(result.program).source
    expected = len(list(result.program.walk()))
    assert f"node_{expected - 1}" in src
    assert f"node_{expected}" not in src


def test_ast_viz_labels_statements_with_surface_form():
    _, result = compile_source("int main() { x = 1; if (a) { return 0; } }")
    src = render_ast_dot(result.program).source
    assert "int main()" in src
    assert "x = 1;" in src
    assert "if (a)" in src
    assert "return 0;" in src
