from __future__ import annotations
import json
import logging
from typing import List, Optional, Tuple
from lexer import Lexer
from tokens import Token
from parser import Parser, ParseResult
from errors import ParseError
from pretty_printer import PrettyPrinter
from ast_json import result_to_json
from ast_viz import write_and_render
from graphviz import CalledProcessError, ExecutableNotFound

logger = logging.getLogger(__name__)

# Token dumps longer than this are truncated.
TOKEN_DUMP_LIMIT = 50

SAMPLE_PROGRAM = """
int main() {
    int x = 10;
    if (x > 5) {
        printf("x is greater than 5\\n");
    }
    return 0;
}
"""


def lex(text: str) -> List[Token]:
    """Tokenize input string."""
    lexer = Lexer(text)
    return lexer.tokenize()


def parse_tokens(tokens: List[Token]) -> ParseResult:
    """Parse tokens into AST."""
    parser = Parser(tokens)
    return parser.parse()


def compile_source(text: str) -> Tuple[List[Token], ParseResult]:
    """Run the front end: lex, then parse. Never raises on bad input."""
    tokens = lex(text)
    return tokens, parse_tokens(tokens)


def process_program(
    text: str,
    *,
    print_tokens: bool = False,
    print_ast: bool = True,
    print_diagnostics: bool = True,
    json_path: Optional[str] = None,
    viz_path: Optional[str] = None,
    viz_format: str = "svg",
    strict: bool = False,
) -> int:
    """Process a single program: lex, parse and optionally print/export stages.

    Flags control which parts are printed. Returns a process exit status:
    1 when `strict` is set and the parser reported errors, 0 otherwise.
    """
    tokens, result = compile_source(text)

    if print_tokens:
        print(f"Tokens ({len(tokens)}):")
        print(PrettyPrinter.print_tokens(tokens, limit=TOKEN_DUMP_LIMIT))

    if print_ast:
        print("\nAST:")
        print(PrettyPrinter.print_ast(result.program))

    if print_diagnostics and result.diagnostics:
        print("\nDiagnostics:")
        print(PrettyPrinter.print_diagnostics(result.diagnostics))

    # Optionally dump tokens + parse tree + diagnostics to JSON.
    if json_path:
        export = result_to_json(tokens, result.program, result.diagnostics)
        try:
            with open(json_path, "w", encoding="utf-8") as fh:
                json.dump(export, fh, indent=2)
            print(f"Wrote parse result JSON to {json_path}")
        except OSError as e:
            logger.error("failed to write JSON to %s: %s", json_path, e)

    # Optionally render the parse tree via Graphviz.
    if viz_path:
        try:
            out = write_and_render(result.program, viz_path, fmt=viz_format)
            print(f"Wrote AST visualization to {out}")
        except (ExecutableNotFound, CalledProcessError, OSError) as e:
            logger.error("failed to render AST visualization to %s: %s", viz_path, e)

    if strict:
        try:
            result.raise_for_errors()
        except ParseError as e:
            print(f"Syntax Error: {e}")
            return 1
    return 0


def interactive_mode(
    print_tokens: bool = False,
    print_ast: bool = True,
) -> None:
    """Run interactive REPL reading programs from stdin."""
    print("\nInteractive Front-End Mode (type 'quit' to exit)")
    print("=" * 80)

    while True:
        try:
            text = input("\nEnter program: ").strip()
            if text.lower() in ("quit", "exit", "q"):
                print("Goodbye!")
                break

            if not text:
                continue

            process_program(text, print_tokens=print_tokens, print_ast=print_ast)

        except (KeyboardInterrupt, EOFError):
            print("\n\nExiting...")
            break


def build_arg_parser():
    import argparse

    parser = argparse.ArgumentParser(
        description="Tokenize and parse a C-like source file, stdin, or the sample program"
    )
    group = parser.add_mutually_exclusive_group()
    group.add_argument(
        "--file", "-f", dest="file", help="Path to source file to process"
    )
    group.add_argument(
        "--interactive",
        "-i",
        dest="interactive",
        action="store_true",
        help="Start interactive REPL mode",
    )
    group.add_argument(
        "--demo",
        dest="demo",
        action="store_true",
        help="Process the built-in sample program and print its tokens",
    )
    # printing/verbosity options
    parser.add_argument(
        "--print-tokens", dest="print_tokens", action="store_true", help="Print tokens"
    )
    parser.add_argument(
        "--no-ast", dest="print_ast", action="store_false", help="Do not print AST"
    )
    parser.set_defaults(print_tokens=False, print_ast=True)
    parser.add_argument(
        "--json", dest="json_path", help="Path to write tokens+AST+diagnostics JSON"
    )
    parser.add_argument(
        "--viz-ast",
        dest="viz_ast",
        help="Path (without extension) to write Graphviz visualization of the AST",
    )
    parser.add_argument(
        "--viz-format",
        dest="viz_format",
        default="svg",
        help="Format for Graphviz output (svg, png, pdf, etc)",
    )
    parser.add_argument(
        "--strict",
        dest="strict",
        action="store_true",
        help="Exit with status 1 when the parser reports errors",
    )
    parser.add_argument(
        "--verbose",
        "-v",
        dest="verbose",
        action="store_true",
        help="Enable debug logging from the lexer and parser",
    )
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_arg_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    if args.interactive:
        interactive_mode(print_tokens=args.print_tokens, print_ast=args.print_ast)
        return 0

    if args.demo:
        text = SAMPLE_PROGRAM
        print_tokens = True
    elif args.file:
        try:
            with open(args.file, "r", encoding="utf-8") as fh:
                text = fh.read()
        except OSError as e:
            print(f"Failed to read file {args.file}: {e}")
            return 1
        print_tokens = args.print_tokens
    else:
        parser.print_help()
        return 0

    return process_program(
        text,
        print_tokens=print_tokens,
        print_ast=args.print_ast,
        json_path=args.json_path,
        viz_path=args.viz_ast,
        viz_format=args.viz_format,
        strict=args.strict,
    )


if __name__ == "__main__":
    import sys

    sys.exit(main())
