"""Text assembly format for register machine programs.

Syntax (mnemonics are case-insensitive):

    INC R<r>, <target>                  Increment
    DEB R<r>, <nonzero>, <zero>         Decrement or branch
    HALT                                Halt
    name:                               Label for the next instruction

Targets are decimal instruction indices or label names. Comments start with
``;`` or ``#``. Numeric targets may point past the end of the program: that
is how a program stops without an explicit HALT.

Example (move R1 into R0):

    loop:
        DEB R1, add, done
    add:
        INC R0, loop
    done:
        HALT
"""

import re
from dataclasses import dataclass
from typing import Dict, List, Optional, Sequence, Tuple

from .errors import AssemblyError
from .instructions import HALT, DecrementOrBranch, Increment, Instruction, Program


_INC_RE = re.compile(r'^INC\s+R(\d+)\s*,\s*(\S+)$')
_DEB_RE = re.compile(r'^DEB\s+R(\d+)\s*,\s*(\S+)\s*,\s*(\S+)$')


@dataclass
class DecodeResult:
    """Result of decoding one line of assembly.

    Attributes:
        instruction: Decoded instruction (None when invalid)
        valid: Whether decode succeeded
        error: Error message if decode failed
        raw_instruction: Original instruction string
    """
    instruction: Optional[Instruction]
    valid: bool
    error: Optional[str] = None
    raw_instruction: str = ""


class InstructionDecoder:
    """Rule-based decoder from assembly text to instructions.

    Attributes:
        labels: Dictionary mapping label names to instruction indices
    """

    def __init__(self, labels: Optional[Dict[str, int]] = None):
        self.labels: Dict[str, int] = {}
        self.set_labels(labels or {})

    def set_labels(self, labels: Dict[str, int]) -> None:
        """Set label-to-index mapping for jump resolution.

        Args:
            labels: Dictionary mapping label names to instruction indices
        """
        self.labels = {name.upper(): index for name, index in labels.items()}

    def decode(self, instruction: str) -> DecodeResult:
        """Decode an instruction line.

        Args:
            instruction: Assembly instruction (e.g. "DEB R1, 2, loop")

        Returns:
            DecodeResult; malformed text yields valid=False rather than
            raising
        """
        raw = instruction
        instr = re.sub(r'\s+', ' ', instruction.strip().upper())

        if not instr:
            return DecodeResult(None, False, error="Empty instruction", raw_instruction=raw)

        if instr == "HALT":
            return DecodeResult(HALT, True, raw_instruction=raw)

        inc_match = _INC_RE.match(instr)
        if inc_match:
            target = self._resolve_address(inc_match.group(2))
            if target is None:
                return self._unknown_label(inc_match.group(2), raw)
            return DecodeResult(
                Increment(int(inc_match.group(1)), target),
                True,
                raw_instruction=raw
            )

        deb_match = _DEB_RE.match(instr)
        if deb_match:
            nonzero = self._resolve_address(deb_match.group(2))
            if nonzero is None:
                return self._unknown_label(deb_match.group(2), raw)
            zero = self._resolve_address(deb_match.group(3))
            if zero is None:
                return self._unknown_label(deb_match.group(3), raw)
            return DecodeResult(
                DecrementOrBranch(int(deb_match.group(1)), nonzero, zero),
                True,
                raw_instruction=raw
            )

        return DecodeResult(
            None,
            False,
            error=f"Unknown instruction format: {instruction.strip()}",
            raw_instruction=raw
        )

    def _unknown_label(self, target: str, raw: str) -> DecodeResult:
        return DecodeResult(None, False, error=f"Unknown label: {target}", raw_instruction=raw)

    def _resolve_address(self, target: str) -> Optional[int]:
        """Resolve a jump target to an instruction index.

        Args:
            target: Label name or decimal index (already upper-cased)

        Returns:
            Index, or None if unresolvable
        """
        if target.isdecimal():
            return int(target)
        return self.labels.get(target.upper())


def parse_program(source: str) -> Tuple[List[str], Dict[str, int]]:
    """Split assembly source into instruction lines and labels.

    Handles:
        - Labels (lines ending with :)
        - Comments (starting with ; or #)
        - Blank lines

    Args:
        source: Assembly source code

    Returns:
        Tuple of (list of instruction strings, label-to-index dict)

    Raises:
        AssemblyError: On an empty, numeric or repeated label
    """
    instructions = []
    labels = {}
    seen = set()

    for line in source.split("\n"):
        line = re.sub(r'[;#].*$', '', line).strip()

        if not line:
            continue

        if line.endswith(":"):
            name = line[:-1].strip()
            index = len(instructions)
            if not name:
                raise AssemblyError(index, line, "Empty label")
            if name.isdecimal():
                raise AssemblyError(index, line, f"Numeric label: {name}")
            # Labels resolve case-insensitively.
            if name.upper() in seen:
                raise AssemblyError(index, line, f"Duplicate label: {name}")
            seen.add(name.upper())
            labels[name] = index
        else:
            instructions.append(line)

    return instructions, labels


def assemble(source: str) -> Program:
    """Assemble source text into a program.

    Raises:
        AssemblyError: On the first line that does not decode
    """
    lines, labels = parse_program(source)
    decoder = InstructionDecoder(labels)

    program = []
    for index, line in enumerate(lines):
        result = decoder.decode(line)
        if not result.valid:
            raise AssemblyError(index, line, result.error)
        program.append(result.instruction)
    return program


def disassemble(program: Sequence[Instruction]) -> str:
    """Render a program as assembly text with numeric targets."""
    return "\n".join(str(instruction) for instruction in program)
