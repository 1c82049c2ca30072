from __future__ import annotations

import argparse
import logging
import re
import sys
from pathlib import Path
from typing import List, NoReturn, Optional

from pydantic import ValidationError

from .environment import BrainfuckEnvironment, Status

logger = logging.getLogger(__name__)

_MEMORY_SIZE = re.compile(r"[0-9]+")


class UsageError(Exception):
    pass


class _ArgumentParser(argparse.ArgumentParser):
    def error(self, message: str) -> NoReturn:
        raise UsageError(message)


def _parse_memory_size(text: str) -> int:
    size = int(text) if _MEMORY_SIZE.fullmatch(text) else 0
    if size <= 0:
        raise UsageError("You must supply a valid positive integer for the size of memory allocated.")
    return size


def _read_source(path: str) -> str:
    source_path = Path(path)
    if not source_path.is_file():
        raise FileNotFoundError(f"Invalid brainfuck source file: {path}")
    return source_path.read_bytes().decode("latin-1")


def _write_output(path: str, data: str) -> None:
    output_path = Path(path)
    output_path.write_text(data, encoding="utf-8")


def configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        stream=sys.stderr,
    )


def build_parser() -> argparse.ArgumentParser:
    parser = _ArgumentParser(
        prog="tapebf-translate",
        description="Translate a brainfuck source file into a C program",
    )
    parser.add_argument("memsize", help="Number of cells allocated to the tape")
    parser.add_argument("source", help="Path to the brainfuck source file")
    parser.add_argument("dest", help="Destination path for the generated C file")
    parser.add_argument(
        "--cell-type",
        default="int32",
        help="Cell width, e.g. int8, uint8, int32 or a C spelling such as 'unsigned char' (default: int32)",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Report progress on stderr")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    try:
        args = parser.parse_args(argv)
        memsize = _parse_memory_size(args.memsize)
    except UsageError as exc:
        print(str(exc), file=sys.stderr)
        print("Follow this format in command line: tapebf-translate memsize bfsrc cdest", file=sys.stderr)
        return 1

    configure_logging(args.verbose)

    try:
        environment = BrainfuckEnvironment(memsize, args.cell_type)
    except ValidationError as exc:
        print(f"Invalid configuration: {exc}", file=sys.stderr)
        return 1

    logger.info("Reading brainfuck source file ...")
    try:
        source_text = _read_source(args.source)
    except OSError as exc:
        print(str(exc), file=sys.stderr)
        return 1
    logger.info("Source file size: %d.", len(source_text))
    logger.debug("Content read:\n%s", source_text)

    logger.info("Translating brainfuck code to C code ...")
    c_code, status = environment.translate(source_text)
    logger.debug("Translated C code:\n%s", c_code)

    logger.info("Writing into C destination file ...")
    try:
        _write_output(args.dest, c_code)
    except OSError as exc:
        print(f"Unable to create C destination file: {exc}", file=sys.stderr)
        return 1

    if status is not Status.OK:
        print("Syntax error: unenclosed loop detected in source file.", file=sys.stderr)
        return 1

    logger.info("Operation complete.")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
