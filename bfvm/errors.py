"""
Fatal machine errors.

Every condition that stops a Brainfuck machine for good raises a subclass
of MachineError. Nothing in the engine catches these; the front end turns
them into an exit status.
"""

from __future__ import annotations
from typing import Optional


class MachineError(Exception):
    """Base class for unrecoverable machine faults."""
    def __init__(self, message: str, inst_ptr: Optional[int] = None):
        self.inst_ptr = inst_ptr
        super().__init__(f"@{inst_ptr}: {message}" if inst_ptr is not None else message)


class InputError(MachineError):
    """Reading from the input channel failed (end-of-stream is not a failure)."""


class OutputError(MachineError):
    """Writing to the output channel failed or wrote short."""


class UnmatchedBracketError(MachineError):
    """A '[' or ']' executed without a counterpart on the tape."""


class TapeUnderflowError(MachineError):
    """The data pointer was moved left of address 0."""
