"""regmachine: Register Machine with Gödel Numbering.

This package implements a minimal register (counter) machine and a bijective
numbering that turns every program into a single natural number and every
natural number back into a program.

Instruction Set:
    INC R<r>, l          increment register r, jump to l
    DEB R<r>, l1, l2     decrement r and jump to l1, or jump to l2 if r is 0
    HALT                 stop

Encoding:
    Program -> Gödel list -> Gödel number, built from the pairing function
    pair1(x, y) = 2**x * (2y + 1). All values are unbounded Python ints.

Modules:
    instructions: Instruction value types and fixed-width bounds
    state: MachineState (label + registers, absent registers read as zero)
    pairing: pair1/pair2 and their inverses
    godel: List and program codecs
    machine: run() evaluator and the RegisterMachine tracing runner
    assembler: Text assembly format
    errors: ConversionOverflow, AssemblyError, StepLimitExceeded
"""

__version__ = "0.1.0"
__author__ = "regmachine Project"

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
from .state import MachineState, create_initial_state
from .pairing import pair1, pair2, unpair1, unpair2
from .godel import (
    decode_godel_number_to_list,
    decode_godel_number_to_program,
    decode_instruction,
    decode_list_to_program,
    encode_instruction,
    encode_list_to_godel_number,
    encode_program_to_godel_number,
    encode_program_to_list,
)
from .machine import RegisterMachine, run
from .assembler import assemble, disassemble
from .errors import AssemblyError, ConversionOverflow, StepLimitExceeded

__all__ = [
    "HALT",
    "LABEL_MAX",
    "REGISTER_MAX",
    "DecrementOrBranch",
    "Halt",
    "Increment",
    "Instruction",
    "Program",
    "MachineState",
    "create_initial_state",
    "pair1",
    "pair2",
    "unpair1",
    "unpair2",
    "decode_godel_number_to_list",
    "decode_godel_number_to_program",
    "decode_instruction",
    "decode_list_to_program",
    "encode_instruction",
    "encode_list_to_godel_number",
    "encode_program_to_godel_number",
    "encode_program_to_list",
    "RegisterMachine",
    "run",
    "assemble",
    "disassemble",
    "AssemblyError",
    "ConversionOverflow",
    "StepLimitExceeded",
]
