"""
bfvm — a small Brainfuck virtual machine
=========================================
Runs programs in the eight-instruction Brainfuck language on an unbounded,
sparse data tape.

Architecture:
    ┌──────────┐    ┌──────────┐    ┌──────────────────────────────┐
    │ Source   │───>│  Loader  │───>│  Machine                     │
    │ (chars)  │    │ (insts)  │    │  step/run · DataMemory · I/O │
    └──────────┘    └──────────┘    └──────────────────────────────┘

    - loader.py:    character → Instruction mapping, comments dropped
    - memory.py:    default-zero sparse tape
    - channels.py:  byte source / byte sink (streams or in-memory buffers)
    - machine.py:   fetch-decode-execute loop with lazy bracket matching
    - errors.py:    fatal MachineError hierarchy
"""

__version__ = "0.1.0"

from .loader import Instruction, Program, parse_program, format_program
from .memory import DataMemory
from .channels import BufferSink, BufferSource, StreamSink, StreamSource
from .machine import Machine
from .errors import (
    MachineError, InputError, OutputError, UnmatchedBracketError, TapeUnderflowError,
)


def run_source(source, stdin: bytes = b"") -> bytes:
    """Run a program against in-memory input and return everything it printed.

    Args:
        source: Program text (any iterable of characters).
        stdin: Bytes the program's ',' instructions will read.

    Returns:
        The output bytes. Fatal errors propagate as MachineError.
    """
    sink = BufferSink()
    Machine(source, stdin=BufferSource(stdin), stdout=sink).run()
    return sink.output
