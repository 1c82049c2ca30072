from __future__ import annotations

from enum import Enum
from typing import FrozenSet, Optional


class Instruction(str, Enum):
    RIGHT = ">"
    LEFT = "<"
    INCREMENT = "+"
    DECREMENT = "-"
    OUTPUT_CHAR = "."
    OUTPUT_NUMBER = ":"
    INPUT = ","
    LOOP_START = "["
    LOOP_END = "]"


# ':' is an interpreter-only extension and has no translation.
INTERPRETER_DIALECT: FrozenSet[Instruction] = frozenset(Instruction)
TRANSLATOR_DIALECT: FrozenSet[Instruction] = INTERPRETER_DIALECT - {Instruction.OUTPUT_NUMBER}

MOVES = frozenset({Instruction.RIGHT.value, Instruction.LEFT.value})
ARITHMETIC = frozenset({Instruction.INCREMENT.value, Instruction.DECREMENT.value})


def decode(char: str, dialect: FrozenSet[Instruction]) -> Optional[Instruction]:
    try:
        instruction = Instruction(char)
    except ValueError:
        return None
    return instruction if instruction in dialect else None


__all__ = [
    "ARITHMETIC",
    "INTERPRETER_DIALECT",
    "Instruction",
    "MOVES",
    "TRANSLATOR_DIALECT",
    "decode",
]
