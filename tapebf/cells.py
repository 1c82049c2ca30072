from __future__ import annotations

from enum import Enum
from typing import Dict


class CellType(str, Enum):
    INT8 = "int8"
    UINT8 = "uint8"
    INT16 = "int16"
    UINT16 = "uint16"
    INT32 = "int32"
    UINT32 = "uint32"
    INT64 = "int64"
    UINT64 = "uint64"

    @property
    def signed(self) -> bool:
        return not self.value.startswith("u")

    @property
    def bits(self) -> int:
        return int(self.value.lstrip("uint"))

    @property
    def minimum(self) -> int:
        return -(1 << (self.bits - 1)) if self.signed else 0

    @property
    def maximum(self) -> int:
        if self.signed:
            return (1 << (self.bits - 1)) - 1
        return (1 << self.bits) - 1

    @property
    def c_type(self) -> str:
        return f"{self.value}_t"

    def wrap(self, value: int) -> int:
        """Reduce ``value`` into this width the way fixed-size integers overflow."""
        mask = (1 << self.bits) - 1
        value &= mask
        if self.signed and value > self.maximum:
            value -= 1 << self.bits
        return value

    @classmethod
    def parse(cls, text: str) -> "CellType":
        normalized = " ".join(text.lower().split())
        try:
            return cls(normalized)
        except ValueError:
            pass
        try:
            return _C_SPELLINGS[normalized]
        except KeyError:
            choices = ", ".join(member.value for member in cls)
            raise ValueError(f"unknown cell type {text!r} (expected one of: {choices})") from None


_C_SPELLINGS: Dict[str, CellType] = {
    "char": CellType.INT8,
    "signed char": CellType.INT8,
    "unsigned char": CellType.UINT8,
    "short": CellType.INT16,
    "unsigned short": CellType.UINT16,
    "int": CellType.INT32,
    "unsigned": CellType.UINT32,
    "unsigned int": CellType.UINT32,
    "long": CellType.INT64,
    "unsigned long": CellType.UINT64,
    "long long": CellType.INT64,
    "unsigned long long": CellType.UINT64,
}


__all__ = ["CellType"]
