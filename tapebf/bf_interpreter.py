from __future__ import annotations

import sys
from dataclasses import dataclass, field
from typing import Callable, Dict, Iterable, Iterator, List, Optional

from .instructions import INTERPRETER_DIALECT, Instruction, decode
from .loops import find_backward_match, find_forward_match
from .tape import AccessIntent, AccessViolation, TapeStore


def read_stdin_char() -> int:
    """Read one byte of standard input; 0 at end of input."""
    stream = getattr(sys.stdin, "buffer", sys.stdin)
    data = stream.read(1)
    if not data:
        return 0
    if isinstance(data, bytes):
        return data[0]
    return ord(data) & 0xFF


@dataclass
class ExecutionState:
    step: int
    pc: int
    command: Optional[str]
    pointer: int


@dataclass
class TapeInterpreter:
    """Executes instruction streams against a live :class:`TapeStore`.

    Loop brackets are matched by rescanning the stream every time a boundary
    is crossed, so a malformed loop is reported at the first crossing of the
    offending bracket and not before.
    """

    tape: TapeStore
    write: Callable[[str], object]
    read: Callable[[], int] = read_stdin_char

    _handlers: Dict[Instruction, Callable[[List[str], int], int]] = field(
        init=False, repr=False
    )
    _input_iter: Optional[Iterator[int]] = field(init=False, repr=False, default=None)

    def __post_init__(self) -> None:
        self._handlers = {
            Instruction.RIGHT: self._move_right,
            Instruction.LEFT: self._move_left,
            Instruction.INCREMENT: self._increment,
            Instruction.DECREMENT: self._decrement,
            Instruction.OUTPUT_CHAR: self._output_char,
            Instruction.OUTPUT_NUMBER: self._output_number,
            Instruction.INPUT: self._input,
            Instruction.LOOP_START: self._loop_start,
            Instruction.LOOP_END: self._loop_end,
        }

    def run(self, code: str, input_data: Optional[Iterable[int]] = None) -> None:
        for _ in self.step(code, input_data=input_data):
            pass

    def step(
        self,
        code: str,
        input_data: Optional[Iterable[int]] = None,
    ) -> Iterator[ExecutionState]:
        code_chars = list(code)
        self._input_iter = iter(input_data) if input_data is not None else None
        pc = 0
        steps = 0
        code_length = len(code_chars)

        while pc < code_length:
            command = code_chars[pc]
            instruction = decode(command, INTERPRETER_DIALECT)
            if instruction is None:
                pc += 1
            else:
                pc = self._handlers[instruction](code_chars, pc)
            steps += 1
            yield ExecutionState(step=steps, pc=pc, command=command, pointer=self.tape.cursor)

        yield ExecutionState(step=steps, pc=pc, command=None, pointer=self.tape.cursor)

    def _require(self, intent: AccessIntent) -> None:
        if not self.tape.in_bounds():
            raise AccessViolation(intent, self.tape.cursor)

    def _next_input(self) -> int:
        if self._input_iter is None:
            return self.read()
        try:
            return next(self._input_iter)
        except StopIteration:
            return 0

    def _move_right(self, code: List[str], pc: int) -> int:
        self.tape.move(1)
        return pc + 1

    def _move_left(self, code: List[str], pc: int) -> int:
        self.tape.move(-1)
        return pc + 1

    def _increment(self, code: List[str], pc: int) -> int:
        self._require(AccessIntent.WRITE)
        self.tape.write(self.tape.read() + 1)
        return pc + 1

    def _decrement(self, code: List[str], pc: int) -> int:
        self._require(AccessIntent.WRITE)
        self.tape.write(self.tape.read() - 1)
        return pc + 1

    def _output_char(self, code: List[str], pc: int) -> int:
        self._require(AccessIntent.READ)
        self.write(chr(self.tape.read() & 0xFF))
        return pc + 1

    def _output_number(self, code: List[str], pc: int) -> int:
        self._require(AccessIntent.READ)
        self.write(str(self.tape.read()))
        return pc + 1

    def _input(self, code: List[str], pc: int) -> int:
        self._require(AccessIntent.WRITE)
        self.tape.write(self._next_input())
        return pc + 1

    def _loop_start(self, code: List[str], pc: int) -> int:
        self._require(AccessIntent.READ)
        close_index = find_forward_match(code, pc)
        if self.tape.read() == 0:
            return close_index + 1
        return pc + 1

    def _loop_end(self, code: List[str], pc: int) -> int:
        return find_backward_match(code, pc)


__all__ = [
    "ExecutionState",
    "TapeInterpreter",
    "read_stdin_char",
]
