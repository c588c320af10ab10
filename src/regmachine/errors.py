"""Exceptions raised by regmachine."""

from typing import Optional


class ConversionOverflow(OverflowError):
    """A decoded register id or label does not fit its fixed-width type.

    Attributes:
        index: Position of the offending element in the Gödel list
            (None when a single element was decoded on its own)
        field: Which instruction field overflowed ("register",
            "next_label", "nonzero_label" or "zero_label")
        value: The decoded value
        limit: Largest representable value for the field
    """

    def __init__(self, field: str, value: int, limit: int, index: Optional[int] = None):
        self.index = index
        self.field = field
        self.value = value
        self.limit = limit
        where = f"element {index}" if index is not None else "element"
        super().__init__(
            f"{where}: {field} value {value} exceeds maximum {limit}"
        )


class AssemblyError(ValueError):
    """Assembly source contains a line that cannot be decoded."""

    def __init__(self, index: int, line: str, reason: str):
        self.index = index
        self.line = line
        self.reason = reason
        super().__init__(f"instruction {index} ({line!r}): {reason}")


class StepLimitExceeded(RuntimeError):
    """The caller-imposed step budget ran out before the machine stopped."""

    def __init__(self, max_steps: int):
        self.max_steps = max_steps
        super().__init__(f"Max steps ({max_steps}) exceeded")
