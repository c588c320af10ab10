"""Tests for the Gödel list and program codecs."""

import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

import pytest
from hypothesis import given, strategies as st

from regmachine import godel
from regmachine.errors import ConversionOverflow
from regmachine.godel import (
    decode_godel_number_to_list,
    decode_godel_number_to_program,
    decode_instruction,
    decode_list_to_program,
    encode_instruction,
    encode_list_to_godel_number,
    encode_program_to_godel_number,
    encode_program_to_list,
)
from regmachine.instructions import (
    HALT,
    LABEL_MAX,
    DecrementOrBranch,
    Halt,
    Increment,
)


EXAMPLE_NUMBER = 2**46 * 20483
EXAMPLE_LIST = [46, 0, 10, 1]
EXAMPLE_PROGRAM = [
    DecrementOrBranch(0, 2, 1),
    HALT,
    DecrementOrBranch(0, 0, 1),
    Increment(0, 0),
]


def instructions(max_register, max_label, max_branch_label):
    """Strategy for instructions with bounded fields.

    ``max_branch_label`` bounds the nonzero label of DEB, which becomes an
    exponent inside pair2.
    """
    registers = st.integers(min_value=0, max_value=max_register)
    labels = st.integers(min_value=0, max_value=max_label)
    return st.one_of(
        st.just(HALT),
        st.builds(Increment, registers, labels),
        st.builds(
            DecrementOrBranch,
            registers,
            st.integers(min_value=0, max_value=max_branch_label),
            labels,
        ),
    )


class TestListCodec:
    """Natural <-> list of naturals."""

    def test_decode_example(self):
        assert decode_godel_number_to_list(EXAMPLE_NUMBER) == EXAMPLE_LIST

    def test_encode_example(self):
        assert encode_list_to_godel_number(EXAMPLE_LIST) == EXAMPLE_NUMBER

    def test_empty_list_is_zero(self):
        assert encode_list_to_godel_number([]) == 0
        assert decode_godel_number_to_list(0) == []

    @pytest.mark.parametrize("values, number", [
        ([0], 1),
        ([1], 2),
        ([0, 0], 3),
        ([2], 4),
        ([0, 1], 5),
        ([0, 0, 0], 7),
    ])
    def test_small_lists(self, values, number):
        assert encode_list_to_godel_number(values) == number
        assert decode_godel_number_to_list(number) == values

    def test_negative_number_rejected(self):
        with pytest.raises(ValueError):
            decode_godel_number_to_list(-1)

    def test_every_small_number_round_trips(self):
        for n in range(2048):
            assert encode_list_to_godel_number(decode_godel_number_to_list(n)) == n

    @given(st.lists(st.integers(min_value=0, max_value=64), max_size=20))
    def test_list_round_trip(self, values):
        assert decode_godel_number_to_list(encode_list_to_godel_number(values)) == values

    @given(st.integers(min_value=0, max_value=2**256))
    def test_number_round_trip(self, n):
        assert encode_list_to_godel_number(decode_godel_number_to_list(n)) == n


class TestInstructionCodec:
    """Instruction <-> natural."""

    def test_halt_is_zero(self):
        assert encode_instruction(HALT) == 0
        assert decode_instruction(0) == HALT
        assert isinstance(decode_instruction(0), Halt)

    def test_increment(self):
        assert encode_instruction(Increment(0, 0)) == 1
        assert encode_instruction(Increment(1, 3)) == 28
        assert decode_instruction(28) == Increment(1, 3)

    def test_decrement_or_branch(self):
        assert encode_instruction(DecrementOrBranch(0, 2, 1)) == 46
        assert encode_instruction(DecrementOrBranch(0, 0, 1)) == 10
        assert decode_instruction(46) == DecrementOrBranch(0, 2, 1)

    def test_only_halt_encodes_to_zero(self):
        for r in range(4):
            for l1 in range(4):
                assert encode_instruction(Increment(r, l1)) != 0
                for l2 in range(4):
                    assert encode_instruction(DecrementOrBranch(r, l1, l2)) != 0

    def test_kind_tagged_by_parity(self):
        """Even exponent means INC, odd exponent means DEB."""
        for n in range(1, 512):
            instruction = decode_instruction(n)
            exponent = (n & -n).bit_length() - 1
            if exponent % 2 == 0:
                assert isinstance(instruction, Increment)
            else:
                assert isinstance(instruction, DecrementOrBranch)

    def test_not_an_instruction(self):
        with pytest.raises(TypeError):
            encode_instruction("HALT")

    def test_negative_element_rejected(self):
        with pytest.raises(ValueError):
            decode_instruction(-5)


class TestProgramCodec:
    """Program <-> Gödel list <-> Gödel number."""

    def test_decode_example_list(self):
        assert decode_list_to_program(EXAMPLE_LIST) == EXAMPLE_PROGRAM

    def test_encode_example_program(self):
        assert encode_program_to_list(EXAMPLE_PROGRAM) == EXAMPLE_LIST

    def test_example_number(self):
        assert encode_program_to_godel_number(EXAMPLE_PROGRAM) == EXAMPLE_NUMBER
        assert decode_godel_number_to_program(EXAMPLE_NUMBER) == EXAMPLE_PROGRAM

    def test_empty_program(self):
        assert encode_program_to_list([]) == []
        assert decode_godel_number_to_program(0) == []

    def test_out_of_range_labels_survive(self):
        """Labels need not point inside the program."""
        program = [Increment(0, 10**6), DecrementOrBranch(3, 500, 10**9)]
        assert decode_list_to_program(encode_program_to_list(program)) == program

    def test_max_label_decodes(self):
        program = [Increment(0, LABEL_MAX), DecrementOrBranch(2, 0, LABEL_MAX)]
        assert decode_list_to_program(encode_program_to_list(program)) == program

    @given(st.lists(instructions(1000, LABEL_MAX, 1000), max_size=12))
    def test_program_list_round_trip(self, program):
        assert decode_list_to_program(encode_program_to_list(program)) == program

    @given(st.lists(instructions(2, 3, 3), max_size=6))
    def test_program_number_round_trip(self, program):
        n = encode_program_to_godel_number(program)
        assert decode_godel_number_to_program(n) == program

    @given(st.integers(min_value=0, max_value=2**64))
    def test_every_number_is_a_program(self, n):
        program = decode_godel_number_to_program(n)
        assert encode_program_to_godel_number(program) == n


class TestConversionOverflow:
    """Register ids and labels past their fixed width must not be truncated."""

    def test_next_label_overflow(self):
        element = encode_instruction(Increment(0, LABEL_MAX + 1))
        with pytest.raises(ConversionOverflow) as exc_info:
            decode_instruction(element)
        error = exc_info.value
        assert error.field == "next_label"
        assert error.value == LABEL_MAX + 1
        assert error.limit == LABEL_MAX
        assert error.index is None

    def test_zero_label_overflow(self):
        element = encode_instruction(DecrementOrBranch(0, 0, LABEL_MAX + 1))
        with pytest.raises(ConversionOverflow) as exc_info:
            decode_instruction(element)
        assert exc_info.value.field == "zero_label"

    def test_nonzero_label_overflow(self, monkeypatch):
        monkeypatch.setattr(godel, "LABEL_MAX", 5)
        element = encode_instruction(DecrementOrBranch(0, 6, 0))
        with pytest.raises(ConversionOverflow) as exc_info:
            decode_instruction(element)
        assert exc_info.value.field == "nonzero_label"
        assert exc_info.value.value == 6

    def test_register_overflow(self, monkeypatch):
        monkeypatch.setattr(godel, "REGISTER_MAX", 3)
        assert decode_instruction(encode_instruction(Increment(3, 0))) == Increment(3, 0)
        with pytest.raises(ConversionOverflow) as exc_info:
            decode_instruction(encode_instruction(Increment(4, 0)))
        assert exc_info.value.field == "register"
        assert exc_info.value.value == 4

    def test_is_an_overflow_error(self):
        element = encode_instruction(Increment(0, LABEL_MAX + 1))
        with pytest.raises(OverflowError):
            decode_instruction(element)

    def test_list_reports_element_index(self):
        values = [0, 1, encode_instruction(Increment(0, LABEL_MAX + 1)), 0]
        original = list(values)
        with pytest.raises(ConversionOverflow) as exc_info:
            decode_list_to_program(values)
        assert exc_info.value.index == 2
        assert "element 2" in str(exc_info.value)
        assert values == original
