"""
Front end tests for bfrun.

main() takes argv plus binary stdin/stdout streams so the runs stay in
memory.
"""
import io
import logging
import os
import sys
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

import pytest
import bfrun
from bfvm.log_setup import setup_logging


def _run(argv, stdin: bytes = b""):
    out = io.BytesIO()
    status = bfrun.main(argv, stdin=io.BytesIO(stdin), stdout=out)
    return status, out.getvalue()


class TestEmbeddedPrograms:
    def test_default_is_hello_world(self):
        status, out = _run([])
        assert status == 0
        assert out == b"Hello World!\n"

    def test_cat(self):
        status, out = _run(["--program", "cat"], stdin=b"line one\nline two\n")
        assert status == 0
        assert out == b"line one\nline two\n"

    def test_dump(self):
        status, out = _run(["--program", "cat", "--dump"])
        assert status == 0
        assert out == b",+[-.,+]\n"

    def test_unknown_program_rejected(self):
        with pytest.raises(SystemExit) as exc:
            _run(["--program", "nope"])
        assert exc.value.code == 2

    def test_version(self, capsys):
        with pytest.raises(SystemExit) as exc:
            _run(["--version"])
        assert exc.value.code == 0
        assert "bfrun" in capsys.readouterr().out


class TestExitStatus:
    def test_machine_fault_exits_1(self, monkeypatch):
        monkeypatch.setitem(bfrun.EMBEDDED_PROGRAMS, "broken", {
            "source": "+.]",
            "description": "unmatched bracket",
        })
        status, out = _run(["--program", "broken", "-q"])
        assert status == 1
        # Output produced before the fault is still written
        assert out == b"\x01"

    def test_underflow_exits_1(self, monkeypatch):
        monkeypatch.setitem(bfrun.EMBEDDED_PROGRAMS, "left", {
            "source": "<",
            "description": "tape underflow",
        })
        status, _ = _run(["--program", "left", "-q"])
        assert status == 1


class TestRepeatedRuns:
    def test_second_run_honours_log_file(self, tmp_path):
        """Logging options apply on every main() call, not just the first."""
        log_file = tmp_path / "run.log"
        try:
            assert _run([])[0] == 0
            status, out = _run(["--log-file", str(log_file), "-q"])
            assert status == 0
            assert out == b"Hello World!\n"

            logger = logging.getLogger("bfvm")
            for handler in logger.handlers:
                handler.flush()
            assert log_file.exists()
            assert "Running 'hello'" in log_file.read_text(encoding="utf-8")
            assert len(logger.handlers) == 2
        finally:
            logger = logging.getLogger("bfvm")
            for handler in list(logger.handlers):
                handler.close()
                logger.removeHandler(handler)

    def test_console_level_follows_flags(self):
        logger = logging.getLogger("bfvm")
        try:
            _run(["-v"])
            assert logger.handlers[-1].level == logging.DEBUG
            _run(["-q"])
            assert len(logger.handlers) == 1
            assert logger.handlers[-1].level == logging.ERROR
        finally:
            for handler in list(logger.handlers):
                logger.removeHandler(handler)


class TestLogSetup:
    def test_file_handler_and_idempotence(self, tmp_path):
        log_file = tmp_path / "logs" / "run.log"
        logger = setup_logging("bfvm.test_setup", log_file=log_file)
        try:
            assert len(logger.handlers) == 2
            again = setup_logging("bfvm.test_setup", log_file=log_file)
            assert again is logger
            assert len(logger.handlers) == 2

            logger.debug("machine says hi")
            for handler in logger.handlers:
                handler.flush()
            text = log_file.read_text(encoding="utf-8")
            assert "machine says hi" in text
            assert "DEBUG" in text
        finally:
            for handler in list(logger.handlers):
                handler.close()
                logger.removeHandler(handler)

    def test_console_only(self):
        logger = setup_logging("bfvm.test_console", console_level=logging.ERROR)
        try:
            assert len(logger.handlers) == 1
            assert logger.handlers[0].level == logging.ERROR
        finally:
            for handler in list(logger.handlers):
                logger.removeHandler(handler)
