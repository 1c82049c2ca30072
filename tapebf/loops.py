from __future__ import annotations

from typing import Sequence


class LoopSyntaxError(Exception):
    """Raised when a '[' or ']' has no structural partner."""

    def __init__(self, missing: str) -> None:
        super().__init__(f"Syntax error: unenclosed loop detected. Missing '{missing}'.")
        self.missing = missing


def find_forward_match(code: Sequence[str], open_index: int) -> int:
    """Return the index of the ']' closing the '[' at ``open_index``."""
    depth = 1
    index = open_index + 1
    while index < len(code):
        char = code[index]
        if char == "[":
            depth += 1
        elif char == "]":
            depth -= 1
            if depth == 0:
                return index
        index += 1
    raise LoopSyntaxError("]")


def find_backward_match(code: Sequence[str], close_index: int) -> int:
    """Return the index of the '[' opening the ']' at ``close_index``."""
    depth = 1
    index = close_index - 1
    while index >= 0:
        char = code[index]
        if char == "]":
            depth += 1
        elif char == "[":
            depth -= 1
            if depth == 0:
                return index
        index -= 1
    raise LoopSyntaxError("[")


__all__ = ["LoopSyntaxError", "find_backward_match", "find_forward_match"]
