"""Tests for the command line interface."""

import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

import pytest
from regmachine.cli import EXIT_INPUT_ERROR, EXIT_OK, EXIT_STEP_LIMIT, main


PROGRAMS_DIR = Path(__file__).parent.parent / "programs"
EXAMPLE_NUMBER = "1441362986991091712"


class TestRunCommand:

    def test_run_program_file_quiet(self, capsys):
        code = main([
            "run", "--program", str(PROGRAMS_DIR / "add.rm"),
            "--register", "1=3", "--register", "R2=4", "--quiet",
        ])
        assert code == EXIT_OK
        assert capsys.readouterr().out.strip() == "R0=7"

    def test_run_inline_summary(self, capsys):
        code = main(["run", "--inline", "DEB R1, 1, 2; INC R0, 0; HALT", "-r", "1=5"])
        out = capsys.readouterr().out
        assert code == EXIT_OK
        assert "Halted: True" in out
        assert "Label: 2" in out
        assert "Registers: {1: 0, 0: 5}" in out

    def test_run_godel_number(self, capsys):
        code = main(["run", "--godel", EXAMPLE_NUMBER, "-r", "0=3", "--quiet"])
        assert code == EXIT_OK
        assert capsys.readouterr().out == ""

    def test_run_trace(self, capsys):
        code = main(["run", "--inline", "INC R0, 1; HALT", "--trace"])
        out = capsys.readouterr().out
        assert code == EXIT_OK
        assert "[Step 0] L0: INC R0, 1" in out

    def test_start_label(self, capsys):
        code = main(["run", "--inline", "INC R0, 1; INC R1, 2; HALT", "--label", "1", "-q"])
        assert code == EXIT_OK
        assert capsys.readouterr().out.strip() == "R1=1"

    def test_step_limit(self, capsys):
        code = main(["run", "--inline", "INC R0, 0", "--max-steps", "5"])
        out = capsys.readouterr().out
        assert code == EXIT_STEP_LIMIT
        assert "Max steps (5) exceeded" in out
        assert "Registers: {0: 5}" in out

    def test_assembly_error(self, capsys):
        code = main(["run", "--inline", "JMP 0"])
        assert code == EXIT_INPUT_ERROR
        assert capsys.readouterr().out.startswith("Error:")

    def test_missing_file(self, tmp_path, capsys):
        code = main(["run", "--program", str(tmp_path / "missing.rm")])
        assert code == EXIT_INPUT_ERROR
        assert "Error:" in capsys.readouterr().out

    def test_bad_register_argument(self):
        with pytest.raises(SystemExit):
            main(["run", "--inline", "HALT", "--register", "nope"])

    @pytest.mark.parametrize("assignment", ["RR1=5", "1=-3", "-1=2", "R=4"])
    def test_malformed_register_rejected(self, assignment):
        with pytest.raises(SystemExit):
            main(["run", "--inline", "HALT", "--register", assignment])

    def test_lowercase_register_prefix(self, capsys):
        code = main(["run", "--inline", "INC R1, 1; HALT", "--register", "r1=4", "-q"])
        assert code == EXIT_OK
        assert capsys.readouterr().out.strip() == "R1=5"


class TestEncodeCommand:

    def test_encode_inline(self, capsys):
        code = main(["encode", "--inline", "DEB R0, 2, 1; HALT; DEB R0, 0, 1; INC R0, 0"])
        out = capsys.readouterr().out
        assert code == EXIT_OK
        assert "List: [46, 0, 10, 1]" in out
        assert f"Number: {EXAMPLE_NUMBER}" in out

    def test_encode_file(self, capsys):
        code = main(["encode", "--program", str(PROGRAMS_DIR / "divide_by_3.rm")])
        assert code == EXIT_OK
        assert "List: [" in capsys.readouterr().out


class TestDecodeCommand:

    def test_decode_number(self, capsys):
        code = main(["decode", EXAMPLE_NUMBER])
        out = capsys.readouterr().out
        assert code == EXIT_OK
        assert "List: [46, 0, 10, 1]" in out
        assert "0: DEB R0, 2, 1" in out
        assert "1: HALT" in out
        assert "3: INC R0, 0" in out

    def test_decode_list(self, capsys):
        code = main(["decode", "--list", "46,0,10,1"])
        out = capsys.readouterr().out
        assert code == EXIT_OK
        assert "2: DEB R0, 0, 1" in out

    def test_decode_overflow(self, capsys):
        code = main(["decode", "--list", f"0,{2**65 + 1}"])
        out = capsys.readouterr().out
        assert code == EXIT_INPUT_ERROR
        assert "Error: element 1: next_label" in out

    def test_decode_needs_exactly_one_source(self):
        with pytest.raises(SystemExit):
            main(["decode"])
        with pytest.raises(SystemExit):
            main(["decode", "5", "--list", "1"])
