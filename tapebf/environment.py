from __future__ import annotations

import io
import logging
import sys
from enum import IntEnum
from typing import IO, Callable, Iterable, Optional, TextIO, Tuple, Union

from .bf_interpreter import TapeInterpreter, read_stdin_char
from .cells import CellType
from .config import DEFAULT_CELL_TYPE, EnvironmentConfig
from .loops import LoopSyntaxError
from .tape import AccessViolation, TapeStore
from .translator import CTranslator

logger = logging.getLogger(__name__)


class Status(IntEnum):
    OK = 0
    SYNTAX_ERROR = 1
    ACCESS_VIOLATION = 2


class BrainfuckEnvironment:
    """One tape, one cursor, and the two engines that work against them.

    Tape contents and cursor position persist across :meth:`interpret`
    calls until :meth:`reset` is called.
    """

    def __init__(
        self,
        capacity: int,
        cell_type: Union[CellType, str] = DEFAULT_CELL_TYPE,
        *,
        output: Optional[IO] = None,
        errors: Optional[TextIO] = None,
        input_reader: Optional[Callable[[], int]] = None,
    ) -> None:
        self.config = EnvironmentConfig(capacity=capacity, cell_type=cell_type)
        self._output = output
        self._errors = errors
        self._tape = TapeStore(self.config.capacity, self.config.cell_type)
        self.interpreter = TapeInterpreter(
            self._tape,
            write=self._write_output,
            read=input_reader or read_stdin_char,
        )
        self.translator = CTranslator(self.config.capacity, self.config.cell_type)

    @property
    def tape(self) -> TapeStore:
        return self._tape

    @property
    def output(self) -> IO:
        return self._output if self._output is not None else sys.stdout

    @property
    def errors(self) -> TextIO:
        return self._errors if self._errors is not None else sys.stderr

    def _write_output(self, text: str) -> None:
        stream = self.output
        # Every cell is emitted as exactly one byte, whatever the text encoding.
        data = text.encode("latin-1")
        if isinstance(stream, (io.RawIOBase, io.BufferedIOBase)):
            stream.write(data)
            return
        binary = getattr(stream, "buffer", None)
        if binary is None:
            stream.write(text)
            return
        stream.flush()
        binary.write(data)

    def interpret(self, source: str, input_data: Optional[Iterable[int]] = None) -> Status:
        logger.debug("Interpreting %d characters", len(source))
        try:
            self.interpreter.run(source, input_data=input_data)
        except LoopSyntaxError as exc:
            return self._fail(Status.SYNTAX_ERROR, exc)
        except AccessViolation as exc:
            logger.debug("Access violation at address %d", exc.address)
            return self._fail(Status.ACCESS_VIOLATION, exc)
        finally:
            self.output.flush()
        return Status.OK

    def translate(self, source: str) -> Tuple[str, Status]:
        result = self.translator.translate(source)
        if not result.balanced:
            return result.code, Status.SYNTAX_ERROR
        return result.code, Status.OK

    def reset(self) -> None:
        self._tape.reset()

    def _fail(self, status: Status, exc: Exception) -> Status:
        print(str(exc), file=self.errors)
        return status


__all__ = ["BrainfuckEnvironment", "Status"]
