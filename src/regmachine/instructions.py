"""Instruction set for the register machine.

The machine has exactly three instructions:

    INC R<r>, <l>           Increment register r, jump to label l
    DEB R<r>, <l1>, <l2>    If register r is nonzero, decrement it and jump
                            to l1; otherwise jump to l2
    HALT                    Stop execution

Instructions are immutable values. A program is a plain list of them and a
label is an index into that list.
"""

from dataclasses import dataclass
from typing import List, Union


# Fixed-width bounds for register identifiers and labels (64-bit unsigned).
# Register values themselves are unbounded.
REGISTER_MAX = 2**64 - 1
LABEL_MAX = 2**64 - 1


@dataclass(frozen=True)
class Increment:
    """INC r, l - add one to register ``register`` and jump to ``next_label``."""
    register: int
    next_label: int

    def __str__(self) -> str:
        return f"INC R{self.register}, {self.next_label}"


@dataclass(frozen=True)
class DecrementOrBranch:
    """DEB r, l1, l2 - decrement-or-branch.

    Attributes:
        register: Register tested (and decremented when nonzero)
        nonzero_label: Jump target after a successful decrement
        zero_label: Jump target when the register already holds zero
    """
    register: int
    nonzero_label: int
    zero_label: int

    def __str__(self) -> str:
        return f"DEB R{self.register}, {self.nonzero_label}, {self.zero_label}"


@dataclass(frozen=True)
class Halt:
    """HALT - stop and return the current state."""

    def __str__(self) -> str:
        return "HALT"


HALT = Halt()

Instruction = Union[Increment, DecrementOrBranch, Halt]
Program = List[Instruction]
