"""
Sparse data tape.

Addresses run from 0 upward with no upper bound. A cell that was never
touched reads as 0 and stays unmaterialized; only writes and
read-modify-write accesses create an entry.
"""

from typing import Dict, Iterator


class DataMemory:
    """Default-zero mapping from tape address to cell value.

    Cell values are plain Python ints. Nothing here wraps or clamps them;
    truncation to a byte happens on output only.
    """

    def __init__(self):
        self._cells: Dict[int, int] = {}

    # --- Core read/write ---

    def read(self, addr: int) -> int:
        """Value at addr, 0 if never written. Does not materialize the cell."""
        return self._cells.get(addr, 0)

    def write(self, addr: int, value: int):
        self._cells[addr] = value

    def add(self, addr: int, delta: int) -> int:
        """Add delta to the cell at addr (materializing it) and return the new value."""
        value = self._cells.get(addr, 0) + delta
        self._cells[addr] = value
        return value

    # --- Inspection ---

    def __contains__(self, addr: int) -> bool:
        """True once the cell at addr has been materialized."""
        return addr in self._cells

    def __len__(self) -> int:
        return len(self._cells)

    def __iter__(self) -> Iterator[int]:
        return iter(sorted(self._cells))

    def snapshot(self) -> Dict[int, int]:
        """Copy of every materialized cell, for later comparison."""
        return dict(self._cells)

    def clear(self):
        self._cells.clear()
