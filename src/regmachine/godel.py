"""Gödel numbering of register machine programs.

A program becomes a single natural number in two stages:

    Program  <->  Gödel list (one natural per instruction)  <->  natural

Instruction encoding (one list element each):

    HALT                      <->  0
    INC R<r>, l               <->  pair1(2r, l)
    DEB R<r>, l1, l2          <->  pair1(2r + 1, pair2(l1, l2))

The low bit of pair1's first component tags the instruction kind; since
pair1 is never zero, zero is free for HALT.

List encoding folds pair1 from the right starting at 0:

    [a0, a1, ..., ak]  <->  pair1(a0, pair1(a1, ... pair1(ak, 0)))

so the empty list is 0. Both stages are bijections, and any two conforming
implementations produce identical numbers for identical programs.

Register ids and labels are fixed-width (see ``REGISTER_MAX`` and
``LABEL_MAX``). Decoding a value past those bounds raises
ConversionOverflow rather than truncating.
"""

from typing import Iterable, List, Optional, Sequence

from .errors import ConversionOverflow
from .instructions import (
    HALT,
    LABEL_MAX,
    REGISTER_MAX,
    DecrementOrBranch,
    Halt,
    Increment,
    Instruction,
    Program,
)
from .pairing import pair1, pair2, unpair1, unpair2


# =============================================================================
# List <-> Gödel number
# =============================================================================

def encode_list_to_godel_number(values: Sequence[int]) -> int:
    """Encode a list of naturals as a single natural.

    Args:
        values: Non-negative integers, in order

    Returns:
        The Gödel number of the list (0 for the empty list)
    """
    acc = 0
    for value in reversed(values):
        acc = pair1(value, acc)
    return acc


def decode_godel_number_to_list(n: int) -> List[int]:
    """Decode a natural back into the list it encodes.

    Every natural decodes to exactly one list. The loop terminates because
    unpair1(n) always yields a tail strictly smaller than n.

    Args:
        n: Non-negative integer

    Returns:
        The decoded list of naturals

    Raises:
        ValueError: If n is negative
    """
    if n < 0:
        raise ValueError(f"Gödel number must be non-negative, got {n}")

    values = []
    while n != 0:
        head, n = unpair1(n)
        values.append(head)
    return values


# =============================================================================
# Instruction <-> natural
# =============================================================================

def encode_instruction(instruction: Instruction) -> int:
    """Encode one instruction as a list element."""
    if isinstance(instruction, Halt):
        return 0
    if isinstance(instruction, Increment):
        return pair1(2 * instruction.register, instruction.next_label)
    if isinstance(instruction, DecrementOrBranch):
        return pair1(
            2 * instruction.register + 1,
            pair2(instruction.nonzero_label, instruction.zero_label),
        )
    raise TypeError(f"Not an instruction: {instruction!r}")


def _checked(field: str, value: int, limit: int, index: Optional[int]) -> int:
    if value > limit:
        raise ConversionOverflow(field, value, limit, index=index)
    return value


def decode_instruction(element: int, index: Optional[int] = None) -> Instruction:
    """Decode one list element into an instruction.

    Args:
        element: Non-negative integer
        index: Position of the element in its list, reported on overflow

    Returns:
        The decoded instruction

    Raises:
        ConversionOverflow: If the register id or a label exceeds its bound
        ValueError: If element is negative
    """
    if element < 0:
        raise ValueError(f"Instruction code must be non-negative, got {element}")
    if element == 0:
        return HALT

    y, z = unpair1(element)
    if y % 2 == 0:
        return Increment(
            _checked("register", y // 2, REGISTER_MAX, index),
            _checked("next_label", z, LABEL_MAX, index),
        )

    j, k = unpair2(z)
    return DecrementOrBranch(
        _checked("register", (y - 1) // 2, REGISTER_MAX, index),
        _checked("nonzero_label", j, LABEL_MAX, index),
        _checked("zero_label", k, LABEL_MAX, index),
    )


# =============================================================================
# Program <-> Gödel list
# =============================================================================

def encode_program_to_list(program: Iterable[Instruction]) -> List[int]:
    """Encode a program as its Gödel list, one element per instruction."""
    return [encode_instruction(instruction) for instruction in program]


def decode_list_to_program(values: Iterable[int]) -> Program:
    """Decode a Gödel list into a program.

    The whole list is decoded before anything is returned, so an overflow
    in any element leaves the caller with no partial program.

    Raises:
        ConversionOverflow: If any element implies an out-of-range register
            id or label; ``index`` names the element
    """
    return [decode_instruction(element, index=i) for i, element in enumerate(values)]


def encode_program_to_godel_number(program: Iterable[Instruction]) -> int:
    """Encode a program directly as a single natural."""
    return encode_list_to_godel_number(encode_program_to_list(program))


def decode_godel_number_to_program(n: int) -> Program:
    """Decode a single natural directly into a program."""
    return decode_list_to_program(decode_godel_number_to_list(n))
