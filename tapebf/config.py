from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field, field_validator

from .cells import CellType

DEFAULT_CELL_TYPE = CellType.INT32
CONSOLE_TAPE_CAPACITY = 1024
CONSOLE_BUFFER_SIZE = 1024
CONSOLE_VIEW_START = 0
CONSOLE_VIEW_END = 15
RESET_KEYWORD = "reset"


class EnvironmentConfig(BaseModel):
    capacity: int = Field(gt=0)
    cell_type: CellType = DEFAULT_CELL_TYPE

    @field_validator("cell_type", mode="before")
    @classmethod
    def validate_cell_type(cls, value: Any) -> Any:
        if isinstance(value, str) and not isinstance(value, CellType):
            return CellType.parse(value)
        return value


__all__ = [
    "CONSOLE_BUFFER_SIZE",
    "CONSOLE_TAPE_CAPACITY",
    "CONSOLE_VIEW_END",
    "CONSOLE_VIEW_START",
    "DEFAULT_CELL_TYPE",
    "EnvironmentConfig",
    "RESET_KEYWORD",
]
