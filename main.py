from __future__ import annotations
from typing import List, Optional
import json
from lexer import Lexer
from tokens import Token
from ast_nodes import ProgramNode
from parser import Parser
from environment import Environment
from evaluator import Evaluator
from errors import EvalError
from objects import Object
from pretty_printer import PrettyPrinter
from ast_json import ast_to_json
from ast_viz import write_and_render
from recursion import recursion_limit


def lex(text: str) -> List[Token]:
    """Tokenize input string."""
    lexer = Lexer(text)
    return lexer.tokenize()


def parse_tokens(tokens: List[Token]) -> ProgramNode:
    """Parse tokens into AST."""
    parser = Parser(tokens)
    return parser.parse()


def parse_text(text: str) -> ProgramNode:
    """Convenience: lex+parse a source text into an AST."""
    return parse_tokens(lex(text))


def run_text(
    text: str, env: Optional[Environment] = None, strict_arity: bool = False
) -> Object:
    """Lex, parse and evaluate `text`, in a fresh root environment unless given one."""
    if env is None:
        env = Environment()
    program = parse_text(text)
    return Evaluator(strict_arity=strict_arity).eval_program(program, env)


def process_program(
    text: str,
    *,
    env: Optional[Environment] = None,
    print_tokens: bool = False,
    print_ast: bool = True,
    print_tree: bool = False,
    evaluate: bool = True,
    strict_arity: bool = False,
    dump_ast_path: Optional[str] = None,
    viz_path: Optional[str] = None,
    viz_format: str = "svg",
) -> Optional[Object]:
    """Process a single program: lex, parse, evaluate and optionally print stages.

    Flags control which parts are printed; printing can be toggled separately.
    Returns the program's value, or None when evaluation was skipped or failed.
    """
    with recursion_limit():
        try:
            tokens = lex(text)
            if print_tokens:
                print(f"Tokens ({len(tokens)}):")
                for i, token in enumerate(tokens[:50]):
                    print(f"  {i:3}: {token}")
                if len(tokens) > 50:
                    print(f"  ... and {len(tokens) - 50} more")

            ast = parse_tokens(tokens)
            if print_ast:
                print("\nAST:")
                print(PrettyPrinter.render(ast))
            if print_tree:
                print("\nAST tree:")
                print(PrettyPrinter.print_ast(ast))

            if dump_ast_path:
                try:
                    with open(dump_ast_path, "w", encoding="utf-8") as fh:
                        json.dump(ast_to_json(ast), fh, indent=2)
                    print(f"Wrote AST JSON to {dump_ast_path}")
                except OSError as e:
                    print(f"Failed to write AST JSON to {dump_ast_path}: {e}")

            # Optionally render visualization via Graphviz
            if viz_path:
                try:
                    write_and_render(ast, viz_path, fmt=viz_format)
                    print(f"Wrote AST visualization to {viz_path}.{viz_format}")
                except Exception as e:
                    print(f"Failed to render AST visualization to {viz_path}: {e}")

            if not evaluate:
                return None

            if env is None:
                env = Environment()
            result = Evaluator(strict_arity=strict_arity).eval_program(ast, env)
            print(result.inspect())
            return result

        except SyntaxError as e:
            print(f"Syntax Error: {e}")
        except EvalError as e:
            print(f"Evaluation Error: {e}")
        except Exception as e:
            print(f"Unexpected error: {e}")
            import traceback

            traceback.print_exc()
    return None


def interactive_mode(
    print_tokens: bool = False,
    print_ast: bool = False,
    print_tree: bool = False,
    strict_arity: bool = False,
) -> None:
    """Run an interactive REPL reading programs from stdin.

    All inputs share one root environment, so `let` bindings persist.
    """
    print("\nInteractive Mode (type 'quit' to exit)")
    print("=" * 80)

    env = Environment()
    while True:
        try:
            text = input("\n>> ").strip()
            if text.lower() in ("quit", "exit", "q"):
                print("Goodbye!")
                break

            if not text:
                continue

            process_program(
                text,
                env=env,
                print_tokens=print_tokens,
                print_ast=print_ast,
                print_tree=print_tree,
                strict_arity=strict_arity,
            )

        except (KeyboardInterrupt, EOFError):
            print("\n\nExiting...")
            break


if __name__ == "__main__":
    import argparse
    import sys

    parser = argparse.ArgumentParser(
        description="Run the interpreter on a file or interactively from stdin"
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
    # printing/verbosity options
    parser.add_argument(
        "--print-tokens", dest="print_tokens", action="store_true", help="Print tokens"
    )
    parser.add_argument(
        "--no-ast",
        dest="print_ast",
        action="store_false",
        help="Do not print the canonical AST",
    )
    parser.add_argument(
        "--print-tree",
        dest="print_tree",
        action="store_true",
        help="Print the AST as an indented debugging tree",
    )
    parser.add_argument(
        "--no-eval",
        dest="evaluate",
        action="store_false",
        help="Stop after parsing; do not evaluate the program",
    )
    parser.add_argument(
        "--strict-arity",
        dest="strict_arity",
        action="store_true",
        help="Fail calls whose argument count differs from the parameter count",
    )
    parser.set_defaults(
        print_tokens=False,
        print_ast=True,
        print_tree=False,
        evaluate=True,
        strict_arity=False,
    )
    parser.add_argument(
        "--dump-ast", dest="dump_ast", help="Path to write the AST as JSON"
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

    args = parser.parse_args()

    if args.interactive:
        interactive_mode(
            print_tokens=args.print_tokens,
            print_tree=args.print_tree,
            strict_arity=args.strict_arity,
        )
    elif args.file:
        try:
            with open(args.file, "r", encoding="utf-8") as fh:
                text = fh.read()
        except OSError as e:
            print(f"Failed to read file {args.file}: {e}")
            sys.exit(1)

        result = process_program(
            text,
            print_tokens=args.print_tokens,
            print_ast=args.print_ast,
            print_tree=args.print_tree,
            evaluate=args.evaluate,
            strict_arity=args.strict_arity,
            dump_ast_path=args.dump_ast,
            viz_path=args.viz_ast,
            viz_format=args.viz_format,
        )
        if result is None and args.evaluate:
            sys.exit(1)
    else:
        parser.print_help()
