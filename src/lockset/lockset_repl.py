"""
Interactive read-parse-print loop for the Lockset language.

Each entry is parsed as a complete program and echoed back in the selected
format. Input continues on `... ` prompts while braces are unbalanced.

Commands:
    exit, quit      Leave the REPL.
    verbose-mode    Toggle printing the JSON tree after the rendered output.
"""

import io
import json
import traceback

from lockset.lockset_emit import Renderer
from lockset.lockset_parser import Parser


def print_traceback() -> None:
    buf = io.StringIO()
    traceback.print_exc(file=buf)
    print("[error] >>>")
    print(buf.getvalue())


def read_entry() -> str | None:
    """Read one entry, continuing while braces are open. None means quit."""
    src_lines: list[str] = []
    brace_count = 0
    while True:
        prompt = ">>> " if not src_lines else "... "
        line = input(prompt)
        if line.strip() in ("exit", "quit") and not src_lines:
            return None
        src_lines.append(line)
        brace_count += line.count("{") - line.count("}")
        if brace_count <= 0:
            return "\n".join(src_lines).strip()


def start_repl(fmt: str = "source", verbose: bool = False) -> None:
    print(f"Lockset REPL [format={fmt}]. Type 'exit' or 'quit' to leave.")
    parser = Parser()

    while True:
        try:
            src = read_entry()
            if src is None:
                print("Exiting Lockset REPL.")
                return
            if not src or src.startswith("#"):
                continue
            if src.lower() == "verbose-mode":
                verbose = not verbose
                print(f"[mode] >>> Verbose mode {'ON' if verbose else 'OFF'}")
                continue

            try:
                program = parser.parse(src)
            except SyntaxError as e:
                print(f"[error] >>> {e}")
                continue

            if not program.body:
                continue

            print(Renderer(fmt).render(program))
            if verbose:
                print("[ast] >>>")
                print(json.dumps(program.to_dict(), indent=2))

        except (EOFError, KeyboardInterrupt):
            print("\nExiting Lockset REPL.")
            return
        except Exception:
            print_traceback()


if __name__ == "__main__":  # pragma: no cover
    start_repl()
