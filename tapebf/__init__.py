from .bf_interpreter import ExecutionState, TapeInterpreter
from .cells import CellType
from .config import EnvironmentConfig
from .environment import BrainfuckEnvironment, Status
from .loops import LoopSyntaxError, find_backward_match, find_forward_match
from .tape import AccessIntent, AccessViolation, TapeStore
from .translator import CTranslator, TranslationResult

__all__ = [
    "AccessIntent",
    "AccessViolation",
    "BrainfuckEnvironment",
    "CTranslator",
    "CellType",
    "EnvironmentConfig",
    "ExecutionState",
    "LoopSyntaxError",
    "Status",
    "TapeInterpreter",
    "TapeStore",
    "TranslationResult",
    "find_backward_match",
    "find_forward_match",
]
