"""MachineState: register state representation for the register machine.

State Components:
    - Label: index of the next instruction to execute
    - Registers: mapping from register id to a non-negative integer value

Registers missing from the mapping read as zero, so a state only holds the
registers a program has actually touched. Values are Python ints and are
never clamped: register machines need unbounded registers.

The evaluator copies the caller's state on entry and only ever mutates its
own copy, so a state passed to ``run`` is never observed to change.
"""

from dataclasses import dataclass, field
from typing import Dict, Mapping, Optional


@dataclass
class MachineState:
    """Register machine state.

    Attributes:
        label: Current label (instruction index, may lie past the program end)
        registers: Dictionary mapping register ids to their values
    """
    label: int = 0
    registers: Dict[int, int] = field(default_factory=dict)

    def copy(self) -> "MachineState":
        """Return an independent copy of this state."""
        # Values are ints, so a shallow dict copy is a full copy.
        return MachineState(label=self.label, registers=dict(self.registers))

    def snapshot(self) -> dict:
        """Create a plain-dict snapshot of the state for tracing.

        Returns:
            Dictionary with "label" and a copy of "registers"
        """
        return {
            "label": self.label,
            "registers": dict(self.registers),
        }

    def validate(self) -> bool:
        """Validate state integrity.

        Checks:
            - Label is a non-negative int
            - Register ids and values are non-negative ints

        Returns:
            True if state is valid, False otherwise
        """
        if not isinstance(self.label, int) or self.label < 0:
            return False

        for reg, value in self.registers.items():
            if not isinstance(reg, int) or reg < 0:
                return False
            if not isinstance(value, int) or value < 0:
                return False

        return True

    def get_register(self, reg: int) -> int:
        """Get the value of a register, reading absent registers as zero."""
        return self.registers.get(reg, 0)

    def increment_register(self, reg: int) -> None:
        """Add one to a register, creating it if absent."""
        self.registers[reg] = self.registers.get(reg, 0) + 1

    def decrement_register(self, reg: int) -> bool:
        """Subtract one from a nonzero register.

        A zero (or absent) register is left at zero and materialised in the
        mapping.

        Returns:
            True if the register was decremented, False if it held zero
        """
        value = self.registers.get(reg, 0)
        if value == 0:
            self.registers[reg] = 0
            return False
        self.registers[reg] = value - 1
        return True

    def jump(self, label: int) -> None:
        """Set the current label."""
        self.label = label

    def dump_registers(self) -> Dict[int, int]:
        """Get a copy of all register values.

        Returns:
            Dictionary of register ids to values
        """
        return dict(self.registers)

    def __str__(self) -> str:
        """Human-readable state representation."""
        regs = " ".join(f"R{k}={v}" for k, v in sorted(self.registers.items()))
        return f"L={self.label} {regs}".rstrip()


def create_initial_state(registers: Optional[Mapping[int, int]] = None, label: int = 0) -> MachineState:
    """Create a machine state from initial register values.

    Args:
        registers: Optional mapping of register ids to starting values
        label: Starting label (default 0)

    Returns:
        Fresh MachineState owning its own register dict
    """
    return MachineState(label=label, registers=dict(registers or {}))
