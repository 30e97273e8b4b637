"""
Monkey CLI Entrypoint.

This module provides the command-line interface for running Monkey source code.

Features:
    - Read source from `.monkey` files or inline strings.
    - Lex, parse, and evaluate; print the program's final value.
    - Optionally dump the token stream or the AST (as JSON) before evaluating.
    - Launch an interactive REPL.

Example usage:
    monkey hello.monkey
    monkey -s "let x = 5; x * 2"
    monkey -s "a + b * c" --ast
    monkey --repl --verbose

Exit status:
    0 on success, 1 if the source had syntax errors or evaluated to an error value.
"""

import argparse
import json
import sys

from monkey.monkey_evaluator import Evaluator
from monkey.monkey_lexer import CharacterStream, Lexer
from monkey.monkey_object import NULL, Environment, Error
from monkey.monkey_parser import Parser


def run_monkey(
    source: str,
    is_string: bool = False,
    show_tokens: bool = False,
    show_ast: bool = False,
    pretty: bool = False,
) -> int:
    """
    Run the Monkey toolchain: lex, parse, evaluate, and print the result.

    Args:
        source (str): Monkey source code or path to a `.monkey` file.
        is_string (bool): If True, treats `source` as raw code instead of a file path.
        show_tokens (bool): Print every token before parsing.
        show_ast (bool): Print the parsed program as JSON before evaluating.
        pretty (bool): Print banners around each section of output.

    Returns:
        int: Process exit status.

    Raises:
        ValueError: If `is_string` is False and the source does not end with '.monkey'.
    """
    if not is_string and not source.endswith(".monkey"):
        raise ValueError("Only .monkey files are supported.")
    # 1. Read source
    if not is_string:
        with open(source, encoding="utf-8") as f:
            source = f.read()

    banner = "=" * 20

    # 2. Lexing
    tokens = list(Lexer(CharacterStream(source)))
    if show_tokens:
        if pretty:
            print(f"{banner}\nTokens\n{banner}")
        for tok in tokens:
            print(tok)

    # 3. Parsing
    parser = Parser(tokens)
    program = parser.parse_program()
    if parser.errors:
        print("[error] >>> parser errors:", file=sys.stderr)
        for msg in parser.errors:
            print(f"\t{msg}", file=sys.stderr)
        return 1

    if show_ast:
        if pretty:
            print(f"{banner}\nAST\n{banner}")
        print(json.dumps(program.to_dict(), indent=2))

    # 4. Evaluation
    result = Evaluator().evaluate(program, Environment())

    # 5. Output result
    if pretty:
        print("<<< OUTPUT >>>")
    if isinstance(result, Error):
        print(f"[error] >>> {result.message}", file=sys.stderr)
        return 1
    if result is not NULL:
        print(result.inspect())
    return 0


def main() -> None:
    """
    Entry point for the Monkey CLI.

    - Launches the REPL if no arguments are passed or `--repl` is specified.
    - Otherwise runs `run_monkey` and exits with its status.
    """
    if len(sys.argv) == 1:
        # No args passed: open REPL instead
        from monkey.monkey_repl import start_repl

        start_repl()
        return
    parser = argparse.ArgumentParser(prog="monkey")
    parser.add_argument("source", nargs="?", help="Filename or raw source (with -s)")
    parser.add_argument(
        "-s", "--string", action="store_true", help="Interpret source as literal string"
    )
    parser.add_argument(
        "--tokens", action="store_true", help="Print the token stream before parsing"
    )
    parser.add_argument(
        "--ast", action="store_true", help="Print the parsed AST as JSON"
    )
    parser.add_argument(
        "-p", "--pretty", action="store_true", help="Show output with banners"
    )
    parser.add_argument(
        "--repl",
        action="store_true",
        help="Launch interactive REPL",
    )
    parser.add_argument(
        "--verbose", action="store_true", help="Echo the parsed AST in the REPL"
    )

    args = parser.parse_args()

    if args.repl or args.source is None:
        from monkey.monkey_repl import start_repl

        start_repl(verbose=args.verbose, show_tokens=args.tokens)
    else:
        sys.exit(
            run_monkey(
                source=args.source,
                is_string=args.string,
                show_tokens=args.tokens,
                show_ast=args.ast,
                pretty=args.pretty,
            )
        )


if __name__ == "__main__":
    main()
