"""Register machine evaluator and stepwise runner.

Two entry points share one instruction semantics (``execute_instruction``):

    run(program, state)   Pure evaluator. Copies the state, executes until
                          HALT or until the label falls off the end of the
                          program, and returns the final state. No step
                          limit: a looping program never returns.

    RegisterMachine       Stateful runner for callers that want an
                          execution trace, a summary, or a step budget.

Both stopping conditions (an explicit HALT and a label >= len(program))
produce a final state of the same shape; the core does not tell them apart.
"""

from dataclasses import dataclass
from typing import Dict, List, Optional, Sequence

from .assembler import assemble
from .errors import StepLimitExceeded
from .godel import decode_godel_number_to_program
from .instructions import DecrementOrBranch, Halt, Increment, Instruction, Program
from .state import MachineState, create_initial_state


END_OF_PROGRAM = "<END OF PROGRAM>"

# Default for run(max_steps=...): fall back to the instance budget.
_INSTANCE_BUDGET = object()


def execute_instruction(instruction: Instruction, state: MachineState) -> bool:
    """Execute one instruction against ``state`` in place.

    Args:
        instruction: Instruction at the current label
        state: Working state, mutated in place

    Returns:
        False if the instruction was HALT, True otherwise
    """
    if isinstance(instruction, Increment):
        state.increment_register(instruction.register)
        state.jump(instruction.next_label)
    elif isinstance(instruction, DecrementOrBranch):
        if state.decrement_register(instruction.register):
            state.jump(instruction.nonzero_label)
        else:
            state.jump(instruction.zero_label)
    elif isinstance(instruction, Halt):
        return False
    else:
        raise TypeError(f"Not an instruction: {instruction!r}")
    return True


def run(program: Sequence[Instruction], state: MachineState) -> MachineState:
    """Run a program from an initial state until it stops.

    Args:
        program: Instructions, indexed by label
        state: Initial state (left untouched)

    Returns:
        The final state. On HALT the label still points at the HALT
        instruction; if the label runs past the program it is returned as-is.
    """
    working = state.copy()
    while working.label < len(program):
        if not execute_instruction(program[working.label], working):
            break
    return working


@dataclass
class ExecutionTraceEntry:
    """Single entry in the execution trace.

    Attributes:
        step: Step number (0-indexed)
        label: Label the instruction was fetched from
        instruction: Instruction text, or END_OF_PROGRAM
        pre_state: State snapshot before execution
        post_state: State snapshot after execution
    """
    step: int
    label: int
    instruction: str
    pre_state: dict
    post_state: dict


class RegisterMachine:
    """Stepwise register machine runner with execution trace.

    Attributes:
        program: Loaded program
        state: Current machine state
        trace: List of execution trace entries (empty when tracing is off)
        max_steps: Default step budget for run() (None for unbounded)
        record_trace: Whether step() appends to the trace
    """

    def __init__(self, max_steps: Optional[int] = None, record_trace: bool = True):
        """Initialize the runner.

        Args:
            max_steps: Default step budget for run(); None runs until the
                machine stops on its own
            record_trace: Keep a trace entry for every step
        """
        self.program: Program = []
        self.state: Optional[MachineState] = None
        self.trace: List[ExecutionTraceEntry] = []
        self.max_steps = max_steps
        self.record_trace = record_trace
        self._halted = False
        self._steps = 0

    def load_program(self, source: str, registers: Optional[Dict[int, int]] = None) -> None:
        """Load a program from assembly source.

        Raises:
            AssemblyError: If the source contains an invalid instruction
        """
        self.load_instructions(assemble(source), registers)

    def load_godel_number(self, n: int, registers: Optional[Dict[int, int]] = None) -> None:
        """Load the program encoded by a Gödel number.

        Raises:
            ConversionOverflow: If the number decodes to an out-of-range
                register id or label
        """
        self.load_instructions(decode_godel_number_to_program(n), registers)

    def load_instructions(self, program: Sequence[Instruction], registers: Optional[Dict[int, int]] = None) -> None:
        """Load a program and reset the machine to label 0.

        Args:
            program: Instructions to run
            registers: Optional initial register values

        Raises:
            ValueError: If a register id or value is negative
        """
        self.program = list(program)
        self.set_state(create_initial_state(registers))

    def set_state(self, state: MachineState) -> None:
        """Replace the current state with a copy of ``state``.

        Raises:
            ValueError: If the label or a register id or value is not a
                non-negative int
        """
        if not state.validate():
            raise ValueError(f"Invalid machine state: {state.label}, {state.registers}")
        self.state = state.copy()
        self.trace = []
        self._halted = False
        self._steps = 0

    def step(self) -> ExecutionTraceEntry:
        """Execute a single instruction.

        Returns:
            ExecutionTraceEntry describing the step

        Raises:
            RuntimeError: If no program loaded or machine halted
        """
        if self.state is None:
            raise RuntimeError("No program loaded")

        if self._halted:
            raise RuntimeError("Machine is halted")

        number = self._steps
        label = self.state.label
        pre_state = self.state.snapshot()

        if label >= len(self.program):
            self._halted = True
            text = END_OF_PROGRAM
        else:
            instruction = self.program[label]
            text = str(instruction)
            if not execute_instruction(instruction, self.state):
                self._halted = True
            else:
                self._steps += 1

        entry = ExecutionTraceEntry(
            step=number,
            label=label,
            instruction=text,
            pre_state=pre_state,
            post_state=self.state.snapshot(),
        )
        if self.record_trace:
            self.trace.append(entry)
        return entry

    def run(self, max_steps=_INSTANCE_BUDGET) -> List[ExecutionTraceEntry]:
        """Run until the machine stops or the step budget runs out.

        Args:
            max_steps: Step budget for this run. None runs unbounded; when
                omitted, the instance budget applies

        Returns:
            Complete execution trace

        Raises:
            StepLimitExceeded: If the budget ran out first
        """
        if self.state is None:
            raise RuntimeError("No program loaded")

        limit = self.max_steps if max_steps is _INSTANCE_BUDGET else max_steps

        while not self._halted:
            if limit is not None and self._steps >= limit and not self._stops_next():
                raise StepLimitExceeded(limit)
            self.step()

        return self.trace

    def _stops_next(self) -> bool:
        label = self.state.label
        return label >= len(self.program) or isinstance(self.program[label], Halt)

    def get_register(self, reg: int) -> int:
        """Get value of a register (zero if never touched)."""
        if self.state is None:
            raise RuntimeError("No program loaded")
        return self.state.get_register(reg)

    def dump_registers(self) -> Dict[int, int]:
        """Get all register values."""
        if self.state is None:
            raise RuntimeError("No program loaded")
        return self.state.dump_registers()

    def get_label(self) -> int:
        if self.state is None:
            raise RuntimeError("No program loaded")
        return self.state.label

    def get_step_count(self) -> int:
        """Number of INC/DEB instructions executed so far."""
        return self._steps

    def is_halted(self) -> bool:
        if self.state is None:
            return True
        return self._halted

    def get_trace(self) -> List[ExecutionTraceEntry]:
        return self.trace

    def print_trace(self) -> None:
        """Print execution trace in human-readable format."""
        print("=" * 70)
        print("REGISTER MACHINE EXECUTION TRACE")
        print("=" * 70)

        for entry in self.trace:
            print(f"\n[Step {entry.step}] L{entry.label}: {entry.instruction}")

            pre_regs = entry.pre_state["registers"]
            post_regs = entry.post_state["registers"]
            changes = []
            for reg in sorted(set(pre_regs) | set(post_regs)):
                before = pre_regs.get(reg, 0)
                after = post_regs.get(reg, 0)
                if before != after:
                    changes.append(f"R{reg}: {before} → {after}")
            if changes:
                print(f"  Changes: {', '.join(changes)}")

            if entry.pre_state["label"] != entry.post_state["label"]:
                print(f"  Label: {entry.pre_state['label']} → {entry.post_state['label']}")

        print("\n" + "=" * 70)
        print("FINAL STATE")
        print("=" * 70)
        if self.state:
            print(f"  Registers: {self.dump_registers()}")
            print(f"  Label: {self.get_label()}")
            print(f"  Steps: {self.get_step_count()}")
            print(f"  Halted: {self.is_halted()}")

    def get_summary(self) -> Dict:
        """Get execution summary.

        Returns:
            Dictionary with execution statistics and final state
        """
        return {
            "steps": self.get_step_count(),
            "halted": self.is_halted(),
            "registers": self.dump_registers() if self.state else {},
            "label": self.get_label() if self.state else 0,
            "program_length": len(self.program),
            "trace_length": len(self.trace),
        }
