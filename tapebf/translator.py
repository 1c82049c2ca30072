from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Callable, Dict, List, Optional

from .cells import CellType
from .instructions import ARITHMETIC, MOVES, TRANSLATOR_DIALECT, Instruction, decode

logger = logging.getLogger(__name__)

INDENT = "\t"

PROLOGUE = """\
#include <stdio.h>
#include <stdlib.h>
#include <stddef.h>
#include <stdint.h>

static int read_cell(void) {{
{indent}int c = getchar();
{indent}return c == EOF ? 0 : c;
}}

int main(void) {{

{indent}{ctype} *tape = ({ctype} *)calloc({capacity}, sizeof({ctype}));
{indent}ptrdiff_t i = 0;

"""


@dataclass
class TranslationResult:
    code: str
    depth: int

    @property
    def balanced(self) -> bool:
        return self.depth == 0


@dataclass
class TranslationState:
    output: List[str] = field(default_factory=list)
    # Body statements live one level inside main().
    depth: int = 1

    def emit_line(self, text: str) -> None:
        self.output.append(INDENT * max(self.depth, 0) + text + "\n")

    def emit_blank(self) -> None:
        self.output.append("\n")


def _collate(code: str, index: int, symbols: frozenset) -> tuple[int, int]:
    """Sum a run of ``symbols`` starting at ``index``; return (net, next_index)."""
    net = 0
    length = len(code)
    while index < length and code[index] in symbols:
        net += 1 if code[index] in "+>" else -1
        index += 1
    return net, index


def _adjustment(target: str, amount: int) -> Optional[str]:
    if amount == 0:
        return None
    if amount == 1:
        return f"{target}++;"
    if amount == -1:
        return f"{target}--;"
    if amount > 0:
        return f"{target} += {amount};"
    return f"{target} -= {-amount};"


class CTranslator:
    """Lowers an instruction stream into a self-contained C program.

    Consecutive ``>``/``<`` and ``+``/``-`` characters are collated into one
    statement each. Brackets only drive the indentation counter; the stream
    is reported unbalanced when the counter does not return to its starting
    level after the last character.
    """

    def __init__(self, capacity: int, cell_type: CellType = CellType.INT32) -> None:
        if capacity <= 0:
            raise ValueError("Tape capacity must be a positive integer.")
        self.capacity = capacity
        self.cell_type = cell_type
        self._handlers: Dict[Instruction, Callable[[str, int, TranslationState], int]] = {
            Instruction.RIGHT: self._emit_moves,
            Instruction.LEFT: self._emit_moves,
            Instruction.INCREMENT: self._emit_arithmetic,
            Instruction.DECREMENT: self._emit_arithmetic,
            Instruction.OUTPUT_CHAR: self._emit_output,
            Instruction.INPUT: self._emit_input,
            Instruction.LOOP_START: self._emit_loop_start,
            Instruction.LOOP_END: self._emit_loop_end,
        }

    def translate(self, code: str) -> TranslationResult:
        state = TranslationState()
        self._emit_prologue(state)
        index = 0
        length = len(code)
        while index < length:
            instruction = decode(code[index], TRANSLATOR_DIALECT)
            if instruction is None:
                index += 1
                continue
            index = self._handlers[instruction](code, index, state)
        self._emit_epilogue(state)
        residual = state.depth
        if residual:
            logger.debug("Translation finished with residual nesting depth %d", residual)
        return TranslationResult(code="".join(state.output), depth=residual)

    # --- Helpers ---

    def _emit_prologue(self, state: TranslationState) -> None:
        state.output.append(
            PROLOGUE.format(
                indent=INDENT,
                ctype=self.cell_type.c_type,
                capacity=self.capacity,
            )
        )

    def _emit_epilogue(self, state: TranslationState) -> None:
        state.emit_blank()
        state.emit_line("free(tape);")
        state.emit_line("getchar();")
        state.emit_blank()
        state.emit_line("return 0;")
        state.depth -= 1
        state.emit_line("}")

    def _cell_statement(self, delta: int) -> Optional[str]:
        # The net change only matters modulo the cell width.
        modulus = 1 << self.cell_type.bits
        delta %= modulus
        if delta > modulus // 2:
            delta -= modulus
        return _adjustment("tape[i]", delta)

    def _emit_moves(self, code: str, index: int, state: TranslationState) -> int:
        offset, index = _collate(code, index, MOVES)
        statements = [_adjustment("i", offset)]
        if index < len(code) and code[index] in ARITHMETIC:
            delta, index = _collate(code, index, ARITHMETIC)
            statements.append(self._cell_statement(delta))
        line = " ".join(statement for statement in statements if statement)
        if line:
            state.emit_line(line)
        return index

    def _emit_arithmetic(self, code: str, index: int, state: TranslationState) -> int:
        delta, index = _collate(code, index, ARITHMETIC)
        statement = self._cell_statement(delta)
        if statement:
            state.emit_line(statement)
        return index

    def _emit_output(self, code: str, index: int, state: TranslationState) -> int:
        state.emit_line("putchar((unsigned char)tape[i]);")
        return index + 1

    def _emit_input(self, code: str, index: int, state: TranslationState) -> int:
        state.emit_line("tape[i] = read_cell();")
        return index + 1

    def _emit_loop_start(self, code: str, index: int, state: TranslationState) -> int:
        state.emit_line("while (tape[i] != 0) {")
        state.depth += 1
        return index + 1

    def _emit_loop_end(self, code: str, index: int, state: TranslationState) -> int:
        state.depth -= 1
        state.emit_line("}")
        return index + 1


__all__ = ["CTranslator", "TranslationResult", "TranslationState"]
