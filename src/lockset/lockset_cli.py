"""
Lockset CLI Entrypoint.

This module provides the command-line interface for parsing Lockset source code.

Features:
    - Read source from `.lks` files or inline strings.
    - Lex and parse into a Program AST, then render it as canonical source or JSON.
    - Output to console or file.
    - Report syntax errors on stderr and exit with status 1.
    - Launch an interactive REPL.

Example usage:
    lockset hello.lks
    lockset -s "lock x = 1;" -f json
    lockset hello.lks -o hello.fmt.lks
    lockset --repl --verbose

Functions:
    run_lockset(source: str, is_string: bool = False, fmt: str = "source", out: str | None = None,
                indent: int | None = 2) -> str:
        Executes the full pipeline (lex → parse → render → output).

    main(argv: list[str] | None = None) -> int:
        Parses CLI arguments and invokes the appropriate action (REPL or render).
"""

import argparse
import sys

from lockset.lockset_emit import TARGETS, Renderer
from lockset.lockset_parser import Parser


def run_lockset(
    source: str,
    is_string: bool = False,
    fmt: str = "source",
    out: str | None = None,
    indent: int | None = 2,
) -> str:
    """
    Run the Lockset toolchain: lex, parse, render, and print or write the result.

    Args:
        source (str): The Lockset source code or path to a `.lks` file.
        is_string (bool): If True, treats `source` as raw code instead of a file path.
        fmt (str): Render target ('source', 'lockset' or 'json'). Defaults to 'source'.
        out (str | None): Optional path to write the rendered output. If None, prints to stdout.
        indent (int | None): JSON indentation. Defaults to 2.

    Returns:
        str: The rendered text.

    Raises:
        ValueError: If `is_string` is False and the source does not end with '.lks'.
        SyntaxError: If the source cannot be lexed or parsed.
    """
    if not is_string and not source.endswith(".lks"):
        raise ValueError("Only .lks files are supported.")
    # 1. Read source
    if not is_string:
        with open(source, encoding="utf-8") as f:
            source = f.read()

    # 2. Lex + parse
    program = Parser().parse(source)

    # 3. Render
    text = Renderer(fmt, json_indent=indent).render(program)

    # 4. Output
    if out:
        with open(out, "w", encoding="utf-8") as f:
            f.write(text + "\n")
    else:
        print(text)
    return text


def main(argv: list[str] | None = None) -> int:
    """
    Entry point for the Lockset CLI.

    Parses command-line arguments and dispatches to the appropriate mode:
    - Launches the REPL if no arguments are passed or `--repl` is specified.
    - Otherwise, parses the source and renders it.

    Supported flags:
        - `-s`, `--string`: Interpret source as a raw string instead of a file path.
        - `-f`, `--format`: Render target ('source', 'lockset' or 'json'), default is 'source'.
        - `-o`, `--out`: Write rendered output to a file.
        - `--indent`: JSON indentation (0 or negative for a single line).
        - `--repl`: Launch the interactive REPL.
        - `--verbose`: Verbose REPL mode (also prints the JSON tree).

    Returns:
        int: Process exit status; 1 when the source fails to parse.
    """
    args_list = sys.argv[1:] if argv is None else argv
    if not args_list:
        # No args passed: open REPL instead
        from lockset.lockset_repl import start_repl

        start_repl()
        return 0

    parser = argparse.ArgumentParser(prog="lockset")
    parser.add_argument("source", nargs="?", help="Filename or raw source (with -s)")
    parser.add_argument(
        "-s", "--string", action="store_true", help="Interpret source as literal string"
    )
    parser.add_argument(
        "-f",
        "--format",
        dest="fmt",
        choices=TARGETS,
        default="source",
        help="Output format (default: source)",
    )
    parser.add_argument("-o", "--out", metavar="OUTFILE", help="Output to file")
    parser.add_argument(
        "--indent", type=int, default=2, help="JSON indentation (default: 2)"
    )
    parser.add_argument(
        "--repl",
        action="store_true",
        help="Launch interactive REPL instead of rendering",
    )
    parser.add_argument(
        "--verbose", action="store_true", help="Verbose REPL mode (if --repl)"
    )

    args = parser.parse_args(args_list)

    if args.repl or args.source is None:
        from lockset.lockset_repl import start_repl

        start_repl(fmt=args.fmt, verbose=args.verbose)
        return 0

    try:
        run_lockset(
            source=args.source,
            is_string=args.string,
            fmt=args.fmt,
            out=args.out,
            indent=args.indent if args.indent > 0 else None,
        )
    except SyntaxError as e:
        print(f"[error] >>> {e}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
