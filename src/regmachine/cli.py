"""regmachine Command Line Interface.

Run register machine programs and convert them to and from Gödel numbers.

Usage:
    regmachine run --program programs/add.rm --register 1=3 --register 2=4
    regmachine run --godel 1441362986991091712 --register 0=3 --trace
    regmachine encode --inline "DEB R1, 1, 2; INC R0, 0; HALT"
    regmachine decode 1441362986991091712
    regmachine decode --list 46,0,10,1
"""

import argparse
import sys
from pathlib import Path
from typing import Dict, List, Optional

from .assembler import assemble
from .errors import AssemblyError, ConversionOverflow, StepLimitExceeded
from .godel import (
    decode_godel_number_to_list,
    decode_list_to_program,
    encode_list_to_godel_number,
    encode_program_to_list,
)
from .machine import RegisterMachine


DEFAULT_MAX_STEPS = 1_000_000

EXIT_OK = 0
EXIT_STEP_LIMIT = 1
EXIT_INPUT_ERROR = 2


def _natural(text: str) -> int:
    value = int(text)
    if value < 0:
        raise argparse.ArgumentTypeError(f"expected a non-negative integer, got {text}")
    return value


def _register_assignment(text: str) -> tuple:
    """Parse R=V (the leading 'R' is optional)."""
    reg, sep, value = text.partition("=")
    if not sep:
        raise argparse.ArgumentTypeError(f"expected R=V, got {text!r}")
    reg = reg.strip().upper()
    if reg.startswith("R"):
        reg = reg[1:]
    try:
        return _natural(reg), _natural(value.strip())
    except ValueError:
        raise argparse.ArgumentTypeError(f"expected R=V with naturals, got {text!r}")


def _natural_list(text: str) -> List[int]:
    try:
        return [_natural(part.strip()) for part in text.split(",") if part.strip()]
    except ValueError:
        raise argparse.ArgumentTypeError(f"expected comma-separated naturals, got {text!r}")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="regmachine",
        description="Register machine with Gödel numbering",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
    # Add R1 into R0 and print the final registers
    regmachine run --inline "DEB R1, 1, 2; INC R0, 0; HALT" --register 1=5

    # Run the program encoded by a Gödel number with a full trace
    regmachine run --godel 1441362986991091712 --register 0=3 --trace

    # Gödel number of a program
    regmachine encode --program programs/add.rm
        """
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    run_parser = subparsers.add_parser("run", help="Execute a program")
    source = run_parser.add_mutually_exclusive_group(required=True)
    source.add_argument("--program", "-p", type=str, help="Path to assembly program file")
    source.add_argument("--inline", "-i", type=str, help="Inline assembly (separate instructions with ;)")
    source.add_argument("--godel", "-g", type=_natural, help="Gödel number of the program")
    run_parser.add_argument(
        "--register", "-r",
        type=_register_assignment,
        action="append",
        default=[],
        metavar="R=V",
        help="Initial register value (repeatable)"
    )
    run_parser.add_argument("--label", type=_natural, default=0, help="Starting label. Default: 0")
    run_parser.add_argument(
        "--max-steps",
        type=_natural,
        default=DEFAULT_MAX_STEPS,
        help=f"Step budget, 0 for unbounded. Default: {DEFAULT_MAX_STEPS}"
    )
    output = run_parser.add_mutually_exclusive_group()
    output.add_argument("--trace", "-t", action="store_true", help="Print full execution trace")
    output.add_argument("--quiet", "-q", action="store_true", help="Minimal output (nonzero registers only)")

    encode_parser = subparsers.add_parser("encode", help="Print the Gödel list and number of a program")
    source = encode_parser.add_mutually_exclusive_group(required=True)
    source.add_argument("--program", "-p", type=str, help="Path to assembly program file")
    source.add_argument("--inline", "-i", type=str, help="Inline assembly (separate instructions with ;)")

    decode_parser = subparsers.add_parser("decode", help="Print the program encoded by a Gödel number or list")
    decode_parser.add_argument("number", nargs="?", type=_natural, help="Gödel number")
    decode_parser.add_argument("--list", "-l", type=_natural_list, dest="values", help="Gödel list, comma separated")

    return parser


def _read_source(args: argparse.Namespace) -> str:
    if args.program:
        return Path(args.program).read_text()
    return args.inline.replace(";", "\n")


def _cmd_run(args: argparse.Namespace) -> int:
    registers: Dict[int, int] = dict(args.register)
    machine = RegisterMachine(
        max_steps=args.max_steps or None,
        record_trace=args.trace
    )

    if args.godel is not None:
        machine.load_godel_number(args.godel, registers)
    else:
        machine.load_program(_read_source(args), registers)
    machine.state.jump(args.label)

    status = EXIT_OK
    try:
        machine.run()
    except StepLimitExceeded as e:
        print(f"Execution stopped: {e}")
        status = EXIT_STEP_LIMIT

    if args.trace:
        machine.print_trace()
    elif not args.quiet:
        summary = machine.get_summary()
        print(f"Steps: {summary['steps']}")
        print(f"Halted: {summary['halted']}")
        print(f"Label: {summary['label']}")
        print(f"Registers: {summary['registers']}")
    else:
        regs = machine.dump_registers()
        for reg in sorted(regs):
            if regs[reg] != 0:
                print(f"R{reg}={regs[reg]}")

    return status


def _cmd_encode(args: argparse.Namespace) -> int:
    values = encode_program_to_list(assemble(_read_source(args)))
    print(f"List: {values}")
    print(f"Number: {encode_list_to_godel_number(values)}")
    return EXIT_OK


def _cmd_decode(args: argparse.Namespace) -> int:
    if args.values is not None:
        values = args.values
    else:
        values = decode_godel_number_to_list(args.number)
    print(f"List: {values}")
    print("Program:")
    for index, instruction in enumerate(decode_list_to_program(values)):
        print(f"  {index}: {instruction}")
    return EXIT_OK


COMMANDS = {
    "run": _cmd_run,
    "encode": _cmd_encode,
    "decode": _cmd_decode,
}


def main(argv: Optional[List[str]] = None) -> int:
    # Gödel numbers easily run past the default int <-> str digit limit.
    if hasattr(sys, "set_int_max_str_digits"):
        sys.set_int_max_str_digits(0)

    parser = build_parser()
    args = parser.parse_args(argv)

    if args.command == "decode" and (args.number is None) == (args.values is None):
        parser.error("decode takes exactly one of NUMBER or --list")

    try:
        return COMMANDS[args.command](args)
    except (AssemblyError, ConversionOverflow) as e:
        print(f"Error: {e}")
        return EXIT_INPUT_ERROR
    except OSError as e:
        print(f"Error: cannot read program file: {e}")
        return EXIT_INPUT_ERROR


if __name__ == "__main__":
    sys.exit(main())
