import io
import unittest
from contextlib import redirect_stderr, redirect_stdout
from typing import Callable, Iterable
from unittest import mock

from tapebf import BrainfuckEnvironment
from tapebf.console import format_tape, main as console_main, prompt_line, read_command, run_console


def scripted(lines: Iterable[str]) -> Callable[[str], str]:
    remaining = iter(lines)

    def prompt(_: str) -> str:
        try:
            return next(remaining)
        except StopIteration:
            raise EOFError from None

    return prompt


class ConsoleSessionTests(unittest.TestCase):
    def run_session(self, lines, environment=None, **kwargs) -> str:
        environment = environment or BrainfuckEnvironment(16, errors=io.StringIO())
        buffer = io.StringIO()
        with redirect_stdout(buffer):
            run_console(environment, prompt=scripted(lines), **kwargs)
        return buffer.getvalue()

    def test_blank_line_dispatches_buffer(self) -> None:
        output = self.run_session(["++++:", ""])
        self.assertIn("OUTPUT: 4\n", output)

    def test_lines_are_concatenated(self) -> None:
        output = self.run_session(["++", "++:", ""])
        self.assertIn("OUTPUT: 4\n", output)

    def test_state_persists_between_commands(self) -> None:
        output = self.run_session(["+++", "", ":", ""])
        self.assertIn("OUTPUT: 3\n", output)

    def test_reset_keyword(self) -> None:
        environment = BrainfuckEnvironment(16, errors=io.StringIO())
        output = self.run_session(["+++>", "", "reset", ":", ""], environment)
        self.assertIn("CONSOLE: Environment reset.", output)
        self.assertIn("OUTPUT: 0\n", output)
        self.assertEqual(environment.tape.cursor, 0)

    def test_reset_discards_buffered_code(self) -> None:
        output = self.run_session(["+++", "reset", ":", ""])
        self.assertIn("OUTPUT: 0\n", output)
        self.assertEqual(output.count("OUTPUT:"), 1)

    def test_end_of_input_runs_pending_code(self) -> None:
        output = self.run_session(["++:"])
        self.assertIn("OUTPUT: 2\n", output)

    def test_dump_prints_tape_view(self) -> None:
        output = self.run_session([">++", ""], dump=True)
        self.assertIn("TAPE:  0:0  [1:2]", output)

    def test_error_does_not_stop_console(self) -> None:
        errors = io.StringIO()
        environment = BrainfuckEnvironment(16, errors=errors)
        output = self.run_session(["[", "", "+:", ""], environment)
        self.assertIn("Missing ']'", errors.getvalue())
        self.assertIn("OUTPUT: 1\n", output)


class ReadCommandTests(unittest.TestCase):
    def test_buffer_limit_dispatches_early(self) -> None:
        environment = BrainfuckEnvironment(4)
        code = read_command(environment, scripted(["+++++", "never read"]), buffer_size=3)
        self.assertEqual(code, "+++")

    def test_end_of_input_without_code(self) -> None:
        environment = BrainfuckEnvironment(4)
        self.assertIsNone(read_command(environment, scripted([])))

    def test_prompt_line_reads_bytes_from_stdin(self) -> None:
        stdin = io.TextIOWrapper(io.BytesIO(b"++\xe9\r\n"), encoding="utf-8")
        buffer = io.StringIO()
        with mock.patch("sys.stdin", stdin), redirect_stdout(buffer):
            self.assertEqual(prompt_line("COMMAND "), "++\u00e9")
            with self.assertRaises(EOFError):
                prompt_line("COMMAND ")
        self.assertEqual(buffer.getvalue(), "COMMAND COMMAND ")


class FormatTapeTests(unittest.TestCase):
    def test_marks_cursor_cell(self) -> None:
        environment = BrainfuckEnvironment(20)
        rendered = format_tape(environment.tape)
        self.assertTrue(rendered.startswith("TAPE: [0:0]"))
        self.assertIn(" 15:0 ", rendered)
        self.assertNotIn("16:", rendered)

    def test_view_is_clipped_to_capacity(self) -> None:
        environment = BrainfuckEnvironment(2)
        self.assertEqual(format_tape(environment.tape), "TAPE: [0:0]  1:0 ")

    def test_reports_out_of_range_cursor(self) -> None:
        environment = BrainfuckEnvironment(2)
        environment.tape.move(-1)
        self.assertIn("cursor out of range at -1", format_tape(environment.tape))


class ConsoleMainTests(unittest.TestCase):
    def test_rejects_bad_memory(self) -> None:
        buffer = io.StringIO()
        with redirect_stderr(buffer):
            exit_code = console_main(["--memory", "0"])
        self.assertEqual(exit_code, 1)
        self.assertIn("Invalid configuration", buffer.getvalue())

    def test_rejects_bad_buffer_size(self) -> None:
        buffer = io.StringIO()
        with redirect_stderr(buffer):
            exit_code = console_main(["--buffer-size", "0"])
        self.assertEqual(exit_code, 1)


if __name__ == "__main__":
    unittest.main()
