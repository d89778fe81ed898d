"""
Tranquility Checker

This is the command line entry point for the Tranquility front end.

Workflow:
1. The source file is read from the path given on the command line.
2. The Lexer tokenizes the source code into positioned tokens.
3. The Parser builds the AST, resolving names against nested scopes and
   checking operand types, arity and loop termination as it goes.
4. Every diagnostic found is printed as ``path:line:column: message``.

Set ``TRANQDEBUG`` to also print the token stream and the AST.
"""
import os
import sys

from tranquility.analysis import check
from tranquility.lexer import tokenize


def print_usage():
    """
    Print usage.
    """
    print()
    print("Tranquility Checker")
    print()
    print("Usage:")
    print("    tranq <script.tranq>")
    print("    tranq --tokens <script.tranq>")
    print("    tranq --server")
    print()
    print("Arguments:")
    print("    <script.tranq>")
    print("        Path to a Tranquility source file (.t or .tranq) to check.")
    print()
    print("Options:")
    print("    --tokens")
    print("        Print the token stream instead of checking the file.")
    print("    --server")
    print("        Start the language server on stdin/stdout.")
    print("    -h, --help")
    print("        Show this help message and exit.")


def debug_print_tokens_ast(tokens, ast):
    """
    Print tokenized source and AST
    """
    print("\nTokens:\n")
    for token in tokens:
        print(f"    {token!r}")
    print("\nAST:\n")
    print(ast)
    print(" ")


def read_source(script_name: str) -> str:
    with open(script_name, "r", encoding="utf-8", newline="") as f:
        return f.read()


def check_script(script_name: str) -> int:
    """
    Check a Tranquility script and print its diagnostics.

    Returns:
        int: 1 if any error was found, otherwise 0.
    """
    try:
        code = read_source(script_name)
    except OSError as e:
        print(f"{type(e).__name__}: {e}")
        return 1

    result = check(code)
    if os.environ.get('TRANQDEBUG'):
        debug_print_tokens_ast(result.tokens, result.ast)

    for diagnostic in result.diagnostics:
        print(f"{script_name}:{diagnostic}")
    return 1 if result.errors else 0


def print_tokens(script_name: str) -> int:
    """
    Print the token stream of a script.
    """
    try:
        code = read_source(script_name)
    except OSError as e:
        print(f"{type(e).__name__}: {e}")
        return 1
    for token in tokenize(code):
        print(f"{token.line + 1}:{token.column + 1}\t{token.kind}\t{token.text!r}")
    return 0


def main(argv=None) -> int:
    """
    Entry point for the CLI.

    Behaviour:
    - One argument equal to ``-h`` or ``--help``: print usage and exit.
    - ``--server``: run the language server until the client disconnects.
    - ``--tokens <path>``: print the tokens of a file.
    - One argument that is not an option: check the file at that path.
    - Any other pattern: print usage and return a non-zero exit code.
    """
    if argv is None:
        argv = sys.argv
    args = argv[1:]
    if len(args) == 1 and args[0] in ('-h', '--help'):
        print_usage()
        return 0
    if args == ['--server']:
        from tranquility.server import main as serve
        serve()
        return 0
    if len(args) == 2 and args[0] == '--tokens':
        return print_tokens(args[1])
    if len(args) == 1 and not args[0].startswith('-'):
        return check_script(args[0])
    print_usage()
    return 1


if __name__ == "__main__":
    sys.exit(main(sys.argv))
