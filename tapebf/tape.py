from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import List

from .cells import CellType


class AccessIntent(str, Enum):
    READ = "read from"
    WRITE = "write to"


class AccessViolation(IndexError):
    """Raised when a cell is read or written while the cursor is off the tape."""

    def __init__(self, intent: AccessIntent, address: int) -> None:
        super().__init__(f"Access violation: attempt to {intent.value} an out-of-range address.")
        self.intent = intent
        self.address = address


@dataclass
class TapeStore:
    """Fixed-length, zero-initialised cell array with an unclamped cursor.

    Moving the cursor never fails; only reads and writes are checked against
    the valid address range ``[0, capacity - 1]``.
    """

    capacity: int
    cell_type: CellType = CellType.INT32

    cells: List[int] = field(init=False, repr=False)
    cursor: int = field(init=False, repr=False)

    def __post_init__(self) -> None:
        if self.capacity <= 0:
            raise ValueError("Tape capacity must be a positive integer.")
        self.reset()

    def reset(self) -> None:
        self.cells = [0] * self.capacity
        self.cursor = 0

    def in_bounds(self) -> bool:
        return 0 <= self.cursor < self.capacity

    def move(self, delta: int) -> None:
        self.cursor += delta

    def read(self) -> int:
        if not self.in_bounds():
            raise AccessViolation(AccessIntent.READ, self.cursor)
        return self.cells[self.cursor]

    def write(self, value: int) -> None:
        if not self.in_bounds():
            raise AccessViolation(AccessIntent.WRITE, self.cursor)
        self.cells[self.cursor] = self.cell_type.wrap(value)

    def view(self, start: int, stop: int) -> List[int]:
        start = max(0, start)
        stop = min(self.capacity, stop)
        return self.cells[start:stop].copy()


__all__ = ["AccessIntent", "AccessViolation", "TapeStore"]
