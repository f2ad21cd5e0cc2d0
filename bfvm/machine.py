"""
bfvm — Brainfuck execution engine

Execution model (one call to step()):
  1. Fetch the instruction at inst_ptr
  2. Past the end of the program → terminated = True, nothing else happens
  3. Otherwise dispatch to the handler for that instruction
  4. The handler updates data_ptr / memory / depth and leaves inst_ptr on
     the next instruction to fetch

There is no halt instruction and no cycle budget: run() steps until the
instruction pointer walks off the end of the tape, however long that takes.

Loops are matched lazily. '[' on a zero cell and ']' on a non-zero cell scan
the instruction tape for their partner at the moment they execute, using the
current nesting depth to skip over inner loops. A program with unbalanced
brackets loads fine and only faults if control actually reaches the bad
bracket.
"""

from __future__ import annotations
import logging
from typing import Callable, Dict, Iterable

from .channels import as_sink, as_source
from .config import EOF_VALUE, OUTPUT_MASK
from .errors import InputError, OutputError, TapeUnderflowError, UnmatchedBracketError
from .loader import Instruction, Program, parse_program
from .memory import DataMemory

log = logging.getLogger(__name__)


class Machine:
    """One Brainfuck machine: program, data tape, pointers and I/O channels.

    Usage:
        vm = Machine.from_str(HELLO_WORLD, stdout=BufferSink())
        vm.run()
        print(vm.stdout.output)  # b"Hello World!\\n"

    A Machine is not thread-safe; give each thread its own instance.
    """

    def __init__(self, source: Iterable[str] = "", stdin=None, stdout=None):
        self.program: Program = parse_program(source)
        self.memory = DataMemory()
        self.stdin = as_source(stdin)
        self.stdout = as_sink(stdout)

        self.terminated: bool = False
        self.depth: int = 0
        self.data_ptr: int = 0
        self.inst_ptr: int = 0
        self.steps: int = 0

        self._dispatch = self._build_dispatch()

        log.debug("Machine ready: %d instructions, %d loop brackets",
                  len(self.program),
                  sum(1 for inst in self.program
                      if inst in (Instruction.FORWARD, Instruction.BACK)))

    @classmethod
    def from_str(cls, text: str, stdin=None, stdout=None) -> "Machine":
        return cls(text, stdin=stdin, stdout=stdout)

    @classmethod
    def from_chars(cls, chars: Iterable[str], stdin=None, stdout=None) -> "Machine":
        """Build a machine from any character iterator (generator, text file, ...)."""
        return cls(chars, stdin=stdin, stdout=stdout)

    # ══════════════════════════════════════════════
    # Execution
    # ══════════════════════════════════════════════

    def step(self):
        """Execute the instruction at inst_ptr, or mark the machine terminated.

        Raises a MachineError subclass on any fatal condition; the state is
        left exactly as it was before the faulting instruction.
        """
        if not 0 <= self.inst_ptr < len(self.program):
            self.terminated = True
            return
        self._dispatch[self.program[self.inst_ptr]]()
        self.steps += 1

    def run(self) -> int:
        """Step until terminated. Returns the number of instructions executed."""
        start = self.steps
        log.debug("Run started at inst_ptr=%d", self.inst_ptr)
        while not self.terminated:
            self.step()
        log.debug("Run finished: %d instructions executed", self.steps - start)
        return self.steps - start

    @property
    def cell(self) -> int:
        """Value of the cell under the data pointer."""
        return self.memory.read(self.data_ptr)

    def reset(self):
        """Back to power-on state. The program is kept; memory is wiped."""
        self.memory.clear()
        self.terminated = False
        self.depth = 0
        self.data_ptr = 0
        self.inst_ptr = 0
        self.steps = 0

    # ══════════════════════════════════════════════
    # Instruction handlers
    # ══════════════════════════════════════════════

    def _build_dispatch(self) -> Dict[Instruction, Callable[[], None]]:
        return {
            Instruction.INC_PTR:  self._op_inc_ptr,
            Instruction.DEC_PTR:  self._op_dec_ptr,
            Instruction.INC_DATA: self._op_inc_data,
            Instruction.DEC_DATA: self._op_dec_data,
            Instruction.INPUT:    self._op_input,
            Instruction.OUTPUT:   self._op_output,
            Instruction.FORWARD:  self._op_forward,
            Instruction.BACK:     self._op_back,
        }

    # ── Pointer movement ──

    def _op_inc_ptr(self):
        self.data_ptr += 1
        self.inst_ptr += 1

    def _op_dec_ptr(self):
        if self.data_ptr == 0:
            raise TapeUnderflowError("Data pointer moved left of address 0", self.inst_ptr)
        self.data_ptr -= 1
        self.inst_ptr += 1

    # ── Cell arithmetic ──

    def _op_inc_data(self):
        self.memory.add(self.data_ptr, 1)
        self.inst_ptr += 1

    def _op_dec_data(self):
        self.memory.add(self.data_ptr, -1)
        self.inst_ptr += 1

    # ── I/O ──

    def _op_input(self):
        try:
            byte = self.stdin.read_byte()
        except InputError as e:
            raise InputError(str(e), self.inst_ptr) from e
        if byte is None:
            log.debug("End of input at inst_ptr=%d", self.inst_ptr)
            value = EOF_VALUE
        else:
            value = byte & 0xFF
        self.memory.write(self.data_ptr, value)
        self.inst_ptr += 1

    def _op_output(self):
        try:
            self.stdout.write_byte(self.cell & OUTPUT_MASK)
        except OutputError as e:
            raise OutputError(str(e), self.inst_ptr) from e
        self.inst_ptr += 1

    # ── Loops ──

    def _op_forward(self):
        """Jump past the matching ']' on a zero cell, else enter the body.

        Entering also scans forward for the closing ']' so an unclosable loop
        faults here. That scan is O(program length) on every loop entry.
        """
        if self.cell == 0:
            self.inst_ptr = self._find_matching_back()
        else:
            # Entering the body: the loop must be closable
            self._find_matching_back()
            self.depth += 1
        self.inst_ptr += 1

    def _op_back(self):
        if self.cell != 0:
            self.inst_ptr = self._find_matching_forward()
        else:
            if self.depth == 0:
                raise UnmatchedBracketError("']' with no open loop", self.inst_ptr)
            self.depth -= 1
        self.inst_ptr += 1

    # ══════════════════════════════════════════════
    # Bracket matching
    # ══════════════════════════════════════════════

    def _find_matching_forward(self) -> int:
        """Index of the '[' matching the ']' at inst_ptr (search backward)."""
        cur_depth = self.depth
        for i in range(self.inst_ptr - 1, -1, -1):
            inst = self.program[i]
            if inst is Instruction.FORWARD:
                if cur_depth == self.depth:
                    return i
                cur_depth -= 1
            elif inst is Instruction.BACK:
                cur_depth += 1
        raise UnmatchedBracketError("No '[' matches this ']'", self.inst_ptr)

    def _find_matching_back(self) -> int:
        """Index of the ']' matching the '[' at inst_ptr (search forward)."""
        cur_depth = self.depth
        for i in range(self.inst_ptr + 1, len(self.program)):
            inst = self.program[i]
            if inst is Instruction.BACK:
                if cur_depth == self.depth:
                    return i
                cur_depth -= 1
            elif inst is Instruction.FORWARD:
                cur_depth += 1
        raise UnmatchedBracketError("No ']' matches this '['", self.inst_ptr)

    def __repr__(self):
        return (f"Machine(ip={self.inst_ptr}/{len(self.program)} dp={self.data_ptr} "
                f"cell={self.cell} depth={self.depth} terminated={self.terminated})")
