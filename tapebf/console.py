from __future__ import annotations

import argparse
import sys
from typing import Callable, List, Optional

from pydantic import ValidationError

from .cli import configure_logging
from .config import (
    CONSOLE_BUFFER_SIZE,
    CONSOLE_TAPE_CAPACITY,
    CONSOLE_VIEW_END,
    CONSOLE_VIEW_START,
    RESET_KEYWORD,
)
from .environment import BrainfuckEnvironment
from .tape import TapeStore


def format_tape(tape: TapeStore, start: int = CONSOLE_VIEW_START, end: int = CONSOLE_VIEW_END) -> str:
    """Render cells ``start..end`` (inclusive), bracketing the cursor cell."""
    parts: List[str] = []
    for offset, value in enumerate(tape.view(start, end + 1)):
        absolute = start + offset
        cell_repr = f"{absolute}:{value}"
        if absolute == tape.cursor:
            parts.append(f"[{cell_repr}]")
        else:
            parts.append(f" {cell_repr} ")
    line = "TAPE: " + " ".join(parts)
    if not tape.in_bounds():
        line += f" (cursor out of range at {tape.cursor})"
    return line


def prompt_line(prompt: str) -> str:
    """Read one console line from the same byte stream that `,` consumes."""
    print(prompt, end="", flush=True)
    stream = getattr(sys.stdin, "buffer", sys.stdin)
    line = stream.readline()
    if not line:
        raise EOFError
    if isinstance(line, bytes):
        line = line.decode("latin-1")
    return line.rstrip("\r\n")


def read_command(
    environment: BrainfuckEnvironment,
    prompt: Callable[[str], str],
    buffer_size: int = CONSOLE_BUFFER_SIZE,
) -> Optional[str]:
    """Collect lines until a blank line or a full buffer.

    Returns the buffered code, ``""`` after a reset, or ``None`` at end of input.
    """
    buffer = ""
    while True:
        try:
            line = prompt("COMMAND ")
        except EOFError:
            return buffer or None
        if line == RESET_KEYWORD:
            environment.reset()
            print("CONSOLE: Environment reset.")
            return ""
        if not line:
            return buffer
        buffer += (line + "\n")[: buffer_size - len(buffer)]
        if len(buffer) >= buffer_size:
            return buffer


def run_console(
    environment: BrainfuckEnvironment,
    *,
    prompt: Callable[[str], str] = prompt_line,
    buffer_size: int = CONSOLE_BUFFER_SIZE,
    dump: bool = False,
) -> None:
    print("== TAPEBF CONSOLE ==")
    print(f"# Enter {RESET_KEYWORD} to reinitialize the brainfuck environment.")
    print("# Other inputs will be interpreted as brainfuck code.")
    while True:
        code = read_command(environment, prompt, buffer_size)
        if code is None:
            print()
            break
        if not code:
            continue
        print("OUTPUT: ", end="", flush=True)
        environment.interpret(code)
        print()
        if dump:
            print(format_tape(environment.tape))


def main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(prog="tapebf-console", description="Interactive brainfuck console")
    parser.add_argument(
        "--memory",
        type=int,
        default=CONSOLE_TAPE_CAPACITY,
        help=f"Number of cells on the tape (default: {CONSOLE_TAPE_CAPACITY})",
    )
    parser.add_argument("--cell-type", default="int32", help="Cell width (default: int32)")
    parser.add_argument(
        "--buffer-size",
        type=int,
        default=CONSOLE_BUFFER_SIZE,
        help=f"Maximum characters buffered per command (default: {CONSOLE_BUFFER_SIZE})",
    )
    parser.add_argument(
        "--dump",
        action="store_true",
        help=f"Print tape cells {CONSOLE_VIEW_START}..{CONSOLE_VIEW_END} after every command",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable diagnostic logging")
    args = parser.parse_args(argv)

    if args.buffer_size <= 0:
        print("Buffer size must be a positive integer.", file=sys.stderr)
        return 1

    configure_logging(args.verbose)

    try:
        environment = BrainfuckEnvironment(args.memory, args.cell_type)
    except ValidationError as exc:
        print(f"Invalid configuration: {exc}", file=sys.stderr)
        return 1

    run_console(environment, buffer_size=args.buffer_size, dump=args.dump)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
