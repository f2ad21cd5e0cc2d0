"""
Program loader — Brainfuck source text to an instruction tuple.

Each of the eight command characters maps to one Instruction. Every other
character is a comment and is dropped outright, so it takes no slot on the
instruction tape. Bracket balance is NOT checked here; the machine finds
unmatched brackets only when it executes them.
"""

from __future__ import annotations
import enum
import logging
from typing import Dict, Iterable, Tuple

log = logging.getLogger(__name__)


class Instruction(enum.Enum):
    """The eight Brainfuck commands. The value is the source character."""
    INC_PTR = ">"
    DEC_PTR = "<"
    INC_DATA = "+"
    DEC_DATA = "-"
    INPUT = ","
    OUTPUT = "."
    FORWARD = "["
    BACK = "]"

    def __repr__(self):
        return f"Instruction.{self.name}"


Program = Tuple[Instruction, ...]

COMMANDS: Dict[str, Instruction] = {inst.value: inst for inst in Instruction}


def parse_program(chars: Iterable[str]) -> Program:
    """Decode program text into instructions, skipping comment characters.

    Args:
        chars: Any iterable of characters: a str, a file opened in text
            mode, a generator.

    Returns:
        Tuple of Instructions in source order. Empty input (or input with
        no command characters) gives an empty tuple.
    """
    program = tuple(COMMANDS[c] for c in chars if c in COMMANDS)
    log.debug("Loaded %d instructions", len(program))
    return program


def format_program(program: Iterable[Instruction]) -> str:
    """Canonical source text for a program (comments stripped)."""
    return "".join(inst.value for inst in program)
