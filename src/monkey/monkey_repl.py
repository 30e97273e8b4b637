import io
import traceback

from monkey.monkey_ast import Program
from monkey.monkey_evaluator import Evaluator
from monkey.monkey_constants import TokenKind
from monkey.monkey_lexer import Token, tokenize
from monkey.monkey_object import NULL, Environment
from monkey.monkey_parser import Parser

PROMPT = ">> "
CONTINUATION_PROMPT = ".. "


def print_traceback() -> None:
    buf = io.StringIO()
    traceback.print_exc(file=buf)
    print("[error] >>>")
    print(buf.getvalue())


def print_parser_errors(errors: list[str]) -> None:
    print("[error] >>> parser errors:")
    for msg in errors:
        print(f"\t{msg}")


def read_source() -> str | None:
    """Read one logical input, continuing across lines while braces are open.

    Returns None when the user asks to leave.
    """
    src_lines: list[str] = []
    brace_count = 0
    while True:
        line = input(PROMPT if not src_lines else CONTINUATION_PROMPT)
        if line.strip() in ("exit", "quit") and not src_lines:
            return None
        src_lines.append(line)
        for tok in tokenize(line):
            if tok.type == TokenKind.LBRACE:
                brace_count += 1
            elif tok.type == TokenKind.RBRACE:
                brace_count -= 1
        if brace_count <= 0:
            break
    return "\n".join(src_lines).strip()


def start_repl(verbose: bool = False, show_tokens: bool = False) -> None:
    print("Monkey REPL. Type 'exit' or 'quit' to leave.")
    env = Environment()
    evaluator = Evaluator()

    while True:
        try:
            src = read_source()
            if src is None:
                print("Exiting Monkey REPL.")
                return
            if not src or src.startswith("#"):
                continue
            if src.lower() == "verbose-mode":
                verbose = not verbose
                print(f"[mode] >>> Verbose mode {'ON' if verbose else 'OFF'}")
                continue
            if src.lower() == "tokens-mode":
                show_tokens = not show_tokens
                print(f"[mode] >>> Token display {'ON' if show_tokens else 'OFF'}")
                continue

            tokens: list[Token] = tokenize(src)
            if show_tokens:
                print(f"[tokens] >>> {tokens}")

            parser = Parser(tokens)
            program: Program = parser.parse_program()
            if parser.errors:
                print_parser_errors(parser.errors)
                continue
            if verbose:
                print(f"[ast] >>> {program}")

            try:
                result = evaluator.evaluate(program, env)
            except Exception:
                print_traceback()
                continue

            if result is not NULL:
                print(result.inspect())

        except (KeyboardInterrupt, EOFError):
            print("\nExiting Monkey REPL.")
            break


def main() -> None:
    start_repl()


if __name__ == "__main__":
    main()
