from tests.utils import parse_text
from main import SAMPLE_PROGRAM
from ast_nodes import *
from errors import UnsupportedConstruct
from parser import parse
from lexer import tokenize


def _funcs(program_node):
    return [d for d in program_node.declarations if d.type == NodeType.FUNC_DECL]


def test_parser_parses_minimal_function():
    result = parse_text("int main() { return 0; }")
    program = result.program
    assert program.type == NodeType.PROGRAM
    assert result.diagnostics == []

    (func,) = program.declarations
    assert isinstance(func, FunctionDeclarationNode)
    assert func.value == "main"
    assert func.return_type == "int"
    assert func.children == (func.body,)

    body = func.body
    assert isinstance(body, BlockNode)
    (ret,) = body.statements
    assert isinstance(ret, ReturnStatementNode)
    assert ret.expression.text == "0"


def test_module_level_parse_matches_parser_class():
    tokens = tokenize("void f() { }")
    result = parse(tokens)
    (func,) = result.program.declarations
    assert func.func_name == "f"
    assert func.body.statements == ()


def test_parser_parses_function_and_prototype():
    src = "int foo(); int main() { return 0; }"
    funcs = _funcs(parse_text(src).program)

    names = [f.func_name for f in funcs]
    assert names == ["foo", "main"]

    foo_node = funcs[0]
    assert foo_node.body is None
    assert foo_node.children == ()
    assert funcs[1].body is not None


def test_parameters_are_kept_unstructured():
    result = parse_text("int add(int a, int b) { return a + b; }")
    (func,) = result.program.declarations
    assert func.parameters.text == "int a , int b"
    assert [t.lexeme for t in func.parameters.tokens] == ["int", "a", ",", "int", "b"]

    (warning,) = result.warnings
    assert isinstance(warning, UnsupportedConstruct)
    assert warning.construct == "parameter list"
    assert result.ok


def test_if_else_statement_shape():
    src = "int f() { if (x > 5) { y; } else { return 1; } }"
    result = parse_text(src)
    body = result.program.declarations[0].body
    (if_stmt,) = body.statements
    assert isinstance(if_stmt, IfStatementNode)
    assert if_stmt.condition.text == "x > 5"
    assert len(if_stmt.children) == 3

    (then_stmt,) = if_stmt.then_block.statements
    assert isinstance(then_stmt, ExpressionStatementNode)
    assert then_stmt.value == "y"

    (else_stmt,) = if_stmt.else_block.statements
    assert isinstance(else_stmt, ReturnStatementNode)


def test_if_without_else_has_two_children():
    body = parse_text("int f() { if (a) { b; } }").program.declarations[0].body
    (if_stmt,) = body.statements
    assert if_stmt.else_block is None
    assert if_stmt.children == (if_stmt.condition, if_stmt.then_block)


def test_nested_parentheses_in_condition():
    body = parse_text("int f() { if ((a + b) * c) { } }").program.declarations[0].body
    (if_stmt,) = body.statements
    assert if_stmt.condition.text == "( a + b ) * c"


def test_else_if_chain_wraps_single_statements():
    src = "int f() { if (a) return 1; else if (b) return 2; else return 3; }"
    result = parse_text(src)
    assert result.diagnostics == []
    (outer,) = result.program.declarations[0].body.statements

    (then_ret,) = outer.then_block.statements
    assert then_ret.expression.text == "1"

    (inner,) = outer.else_block.statements
    assert isinstance(inner, IfStatementNode)
    assert inner.condition.text == "b"
    (last,) = inner.else_block.statements
    assert last.expression.text == "3"


def test_return_without_expression():
    body = parse_text("void f() { return; }").program.declarations[0].body
    (ret,) = body.statements
    assert ret.expression is None
    assert ret.children == ()


def test_expression_statement_captures_raw_span():
    body = parse_text('int main() { printf("hi"); x = y + 1; }').program.declarations[0].body
    first, second = body.statements
    assert first.value == 'printf ( " hi " )'
    assert second.value == "x = y + 1"
    assert [t.lexeme for t in second.expression.tokens] == ["x", "=", "y", "+", "1"]


def test_nested_block_statement():
    body = parse_text("int f() { { a; } b; }").program.declarations[0].body
    inner, stmt = body.statements
    assert isinstance(inner, BlockNode)
    assert inner.statements[0].value == "a"
    assert stmt.value == "b"


def test_empty_statements_are_skipped():
    body = parse_text("int f() { ;; return 1; }").program.declarations[0].body
    assert len(body.statements) == 1


def test_top_level_variable_declaration_yields_no_node():
    result = parse_text("int x = 10; int main() { return x; }")
    funcs = _funcs(result.program)
    assert [f.func_name for f in funcs] == ["main"]
    assert len(result.program.declarations) == 1

    (warning,) = result.diagnostics
    assert isinstance(warning, UnsupportedConstruct)
    assert warning.construct == "variable declaration"
    assert warning.position == (1, 1)
    assert result.ok


def test_top_level_array_initializer_is_skipped_through_semicolon():
    result = parse_text("int xs[] = {1, 2}; int main() { }")
    assert [f.func_name for f in _funcs(result.program)] == ["main"]
    assert result.errors == []


def test_declarations_and_loops_inside_blocks_are_unsupported_nodes():
    src = "int main() { int x = 10; while (x > 0) { x = x - 1; } return x; }"
    result = parse_text(src)
    decl, loop, ret = result.program.declarations[0].body.statements

    assert isinstance(decl, UnsupportedNode)
    assert decl.construct == "variable declaration"
    assert decl.text == "int x = 10 ;"

    assert isinstance(loop, UnsupportedNode)
    assert loop.construct == "while loop"
    assert loop.text == "while ( x > 0 ) { x = x - 1 ; }"

    assert isinstance(ret, ReturnStatementNode)
    assert [w.construct for w in result.warnings] == ["variable declaration", "while loop"]
    assert result.ok


def test_for_loop_header_semicolons_do_not_end_the_loop():
    src = "int main() { for (i = 0; i < n; i++) { s = s + i; } return s; }"
    loop, ret = parse_text(src).program.declarations[0].body.statements
    assert loop.construct == "for loop"
    assert loop.tokens[-1].lexeme == "}"
    assert isinstance(ret, ReturnStatementNode)


def test_sample_program():
    result = parse_text(SAMPLE_PROGRAM)
    (main_fn,) = result.program.declarations
    assert main_fn.func_name == "main"
    decl, if_stmt, ret = main_fn.body.statements
    assert isinstance(decl, UnsupportedNode)
    assert isinstance(if_stmt, IfStatementNode)
    assert if_stmt.condition.text == "x > 5"
    (call,) = if_stmt.then_block.statements
    assert call.expression.tokens[0].lexeme == "printf"
    assert ret.expression.text == "0"
    assert result.ok
