import json
from main import main, process_program, compile_source, SAMPLE_PROGRAM, TOKEN_DUMP_LIMIT


def test_compile_source_returns_tokens_and_result():
    tokens, result = compile_source("int main() { return 0; }")
    assert len(tokens) == 9
    assert result.ok
    assert result.program.declarations[0].func_name == "main"


def test_process_program_prints_tokens_ast_and_diagnostics(capsys):
    status = process_program("int x; int main() { return 0; }", print_tokens=True)
    out = capsys.readouterr().out
    assert status == 0
    assert "Type: KEYWORD, Value: int, Line: 1, Column: 1" in out
    assert "FunctionDecl(main -> int, params=[])" in out
    assert "warning: Unsupported construct: variable declaration" in out


def test_process_program_strict_mode(capsys):
    assert process_program("int main() { return 0;", strict=True) == 1
    assert "Syntax Error" in capsys.readouterr().out
    assert process_program("int main() { return 0; }", strict=True) == 0


def test_process_program_writes_json(tmp_path):
    path = tmp_path / "out.json"
    process_program("int main() { return 0; }", print_ast=False, json_path=str(path))
    data = json.loads(path.read_text(encoding="utf-8"))
    assert data["parse_tree"]["children"][0]["value"] == "main"
    assert data["errors"] == []


def test_demo_prints_sample_tokens(capsys):
    assert main(["--demo", "--no-ast"]) == 0
    out = capsys.readouterr().out
    assert "Type: KEYWORD, Value: int, Line: 2, Column: 1" in out
    assert "Type: IDENTIFIER, Value: main, Line: 2, Column: 5" in out
    assert "AST:" not in out


def test_main_reads_file(tmp_path, capsys):
    path = tmp_path / "prog.c"
    path.write_text(SAMPLE_PROGRAM, encoding="utf-8")
    assert main(["--file", str(path)]) == 0
    assert "IfStatement" in capsys.readouterr().out


def test_main_missing_file(tmp_path, capsys):
    assert main(["--file", str(tmp_path / "missing.c")]) == 1
    assert "Failed to read file" in capsys.readouterr().out


def test_main_without_arguments_prints_help(capsys):
    assert main([]) == 0
    assert "usage" in capsys.readouterr().out.lower()


def test_token_dump_is_truncated(capsys):
    src = "int main() { " + "x; " * 30 + "}"
    tokens, _ = compile_source(src)
    process_program(src, print_tokens=True, print_ast=False)
    out = capsys.readouterr().out
    assert f"Tokens ({len(tokens)}):" in out
    assert f"... and {len(tokens) - TOKEN_DUMP_LIMIT} more" in out
    assert out.count("Type: ") == TOKEN_DUMP_LIMIT
