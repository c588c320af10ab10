"""regmachine Interactive Demo.

A Gradio web interface for running register machine programs and for
converting programs to and from Gödel numbers.

Usage:
    cd /path/to/regmachine
    python demo/gradio_app.py

Features:
    - Write or load register machine programs
    - Set initial register values
    - See step-by-step execution trace
    - Encode a program as a Gödel list and number, or decode one back
"""

import sys
from pathlib import Path

# Add src to path
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

import gradio as gr
from regmachine import (
    AssemblyError,
    ConversionOverflow,
    RegisterMachine,
    StepLimitExceeded,
    assemble,
    decode_godel_number_to_list,
    decode_list_to_program,
    disassemble,
    encode_list_to_godel_number,
    encode_program_to_list,
)


if hasattr(sys, "set_int_max_str_digits"):
    sys.set_int_max_str_digits(0)


# =============================================================================
# Example Programs
# =============================================================================

EXAMPLE_PROGRAMS = {
    "Add R1 + R2": ("""move_r1:
    DEB R1, inc_r1, move_r2
inc_r1:
    INC R0, move_r1
move_r2:
    DEB R2, inc_r2, done
inc_r2:
    INC R0, move_r2
done:
    HALT            ; R0 = R1 + R2""", "1=3, 2=4"),

    "Multiply R1 x R2": ("""outer:
    DEB R1, inner, done
inner:
    DEB R2, add, restore
add:
    INC R0, keep
keep:
    INC R3, inner
restore:
    DEB R3, back, outer
back:
    INC R2, restore
done:
    HALT            ; R0 = R1 * R2""", "1=7, 2=6"),

    "Divide R1 by 3": ("""    DEB R1, 2, 1
    HALT
    DEB R1, 3, 4
    DEB R1, 5, 4
    HALT
    INC R0, 0       ; R0 = R1 // 3""", "1=7"),

    "Custom": ("", ""),
}


# =============================================================================
# Execution Functions
# =============================================================================

def parse_registers(text: str) -> dict:
    """Parse "1=3, 2=4" (a leading R on the register is optional)."""
    registers = {}
    for item in text.replace(";", ",").split(","):
        item = item.strip()
        if not item:
            continue
        reg, _, value = item.partition("=")
        reg = reg.strip().upper()
        if reg.startswith("R"):
            reg = reg[1:]
        registers[int(reg)] = int(value)
    return registers


def run_program(program: str, registers_text: str, max_steps: int) -> tuple:
    """Execute a program and return results.

    Args:
        program: Assembly source code
        registers_text: Initial registers, e.g. "1=3, 2=4"
        max_steps: Step budget

    Returns:
        Tuple of (summary_text, trace_text, registers_text)
    """
    if not program.strip():
        return "Error: No program provided", "", ""

    try:
        registers = parse_registers(registers_text)
    except ValueError as e:
        return f"Error: Invalid registers: {e}", "", ""

    machine = RegisterMachine(max_steps=int(max_steps))
    try:
        machine.load_program(program, registers)
    except AssemblyError as e:
        return f"Error: {e}", "", ""
    except ValueError as e:
        return f"Error: Invalid registers: {e}", "", ""

    try:
        trace = machine.run()
    except StepLimitExceeded as e:
        error_msg = str(e)
        trace = machine.get_trace()
    else:
        error_msg = None

    summary = machine.get_summary()
    summary_lines = [
        "EXECUTION SUMMARY",
        "=" * 40,
        f"Steps: {summary['steps']}",
        f"Halted: {'Yes' if summary['halted'] else 'No'}",
        f"Final label: {summary['label']}",
    ]
    if error_msg:
        summary_lines.append(f"\nRuntime: {error_msg}")
    summary_text = "\n".join(summary_lines)

    trace_lines = [
        "EXECUTION TRACE",
        "=" * 60,
    ]
    for entry in trace[:100]:  # Limit to 100 entries
        trace_lines.append(f"\n--- Step {entry.step} (L{entry.label}) ---")
        trace_lines.append(f"Instruction: {entry.instruction}")

        pre_regs = entry.pre_state['registers']
        post_regs = entry.post_state['registers']
        changes = []
        for reg in sorted(set(pre_regs) | set(post_regs)):
            if pre_regs.get(reg, 0) != post_regs.get(reg, 0):
                changes.append(f"R{reg}: {pre_regs.get(reg, 0)} -> {post_regs.get(reg, 0)}")
        if changes:
            trace_lines.append(f"Changes:     {', '.join(changes)}")

    if len(trace) > 100:
        trace_lines.append(f"\n... ({len(trace) - 100} more entries)")

    trace_text = "\n".join(trace_lines)

    regs = machine.dump_registers()
    reg_lines = [
        "FINAL REGISTERS",
        "=" * 30,
    ]
    for reg in sorted(regs):
        marker = " *" if regs[reg] != 0 else ""
        reg_lines.append(f"  R{reg}: {regs[reg]:>10}{marker}")

    return summary_text, trace_text, "\n".join(reg_lines)


def encode_program(program: str) -> tuple:
    """Return (Gödel list, Gödel number) text for a program."""
    try:
        values = encode_program_to_list(assemble(program))
    except AssemblyError as e:
        return f"Error: {e}", ""
    return ", ".join(str(v) for v in values), str(encode_list_to_godel_number(values))


def decode_number(number: str) -> tuple:
    """Return (Gödel list, program listing) text for a Gödel number."""
    try:
        n = int(number.strip())
    except ValueError:
        return "Error: Not an integer", ""
    if n < 0:
        return "Error: Gödel numbers are non-negative", ""

    values = decode_godel_number_to_list(n)
    try:
        program = decode_list_to_program(values)
    except ConversionOverflow as e:
        return ", ".join(str(v) for v in values), f"Error: {e}"
    return ", ".join(str(v) for v in values), disassemble(program)


def load_example(example_name: str) -> tuple:
    """Load an example program and its initial registers."""
    return EXAMPLE_PROGRAMS.get(example_name, ("", ""))


# =============================================================================
# Gradio Interface
# =============================================================================

def create_demo():
    """Create and return the Gradio demo interface."""

    with gr.Blocks(title="regmachine Demo", theme=gr.themes.Soft()) as demo:
        gr.Markdown("""
        # regmachine: Register Machine with Gödel Numbering

        Three instructions (`INC`, `DEB`, `HALT`), unbounded registers, and a
        bijection between programs and natural numbers.
        """)

        with gr.Tab("Run"):
            with gr.Row():
                with gr.Column(scale=2):
                    gr.Markdown("### Program")

                    example_dropdown = gr.Dropdown(
                        choices=list(EXAMPLE_PROGRAMS.keys()),
                        value="Add R1 + R2",
                        label="Load Example"
                    )

                    program_input = gr.Textbox(
                        value=EXAMPLE_PROGRAMS["Add R1 + R2"][0],
                        label="Source Code",
                        lines=15,
                        placeholder="Enter register machine code here..."
                    )

                    registers_input = gr.Textbox(
                        value=EXAMPLE_PROGRAMS["Add R1 + R2"][1],
                        label="Initial Registers",
                        placeholder="1=3, 2=4"
                    )

                    max_steps = gr.Slider(
                        minimum=100,
                        maximum=1000000,
                        value=10000,
                        step=100,
                        label="Max Steps"
                    )

                    run_button = gr.Button("Run Program", variant="primary")

                with gr.Column(scale=3):
                    with gr.Row():
                        summary_output = gr.Textbox(
                            label="Summary",
                            lines=10,
                            interactive=False
                        )
                        registers_output = gr.Textbox(
                            label="Final Registers",
                            lines=10,
                            interactive=False
                        )

                    trace_output = gr.Textbox(
                        label="Execution Trace",
                        lines=20,
                        interactive=False
                    )

        with gr.Tab("Gödel Numbering"):
            with gr.Row():
                with gr.Column():
                    encode_input = gr.Textbox(label="Program", lines=10)
                    encode_button = gr.Button("Encode", variant="primary")
                    encode_list_output = gr.Textbox(label="Gödel List", interactive=False)
                    encode_number_output = gr.Textbox(label="Gödel Number", lines=3, interactive=False)
                with gr.Column():
                    decode_input = gr.Textbox(label="Gödel Number", value="1441362986991091712")
                    decode_button = gr.Button("Decode", variant="primary")
                    decode_list_output = gr.Textbox(label="Gödel List", interactive=False)
                    decode_program_output = gr.Textbox(label="Program", lines=10, interactive=False)

        with gr.Accordion("Instruction Reference", open=False):
            gr.Markdown("""
            | Instruction | Description | Gödel element |
            |-------------|-------------|---------------|
            | `INC Rr, l` | Increment Rr, jump to l | `2^(2r) * (2l + 1)` |
            | `DEB Rr, l1, l2` | If Rr > 0: decrement, jump to l1; else jump to l2 | `2^(2r+1) * (2 * pair2(l1, l2) + 1)` |
            | `HALT` | Stop execution | `0` |

            **Registers**: R0, R1, ... unbounded non-negative integers, absent registers read as 0
            **Labels**: Use `name:` to define, or jump to a numeric index
            **Lists**: `[a0, ..., ak]` encodes as `pair1(a0, pair1(a1, ... pair1(ak, 0)))`
            """)

        example_dropdown.change(
            fn=load_example,
            inputs=[example_dropdown],
            outputs=[program_input, registers_input]
        )

        run_button.click(
            fn=run_program,
            inputs=[program_input, registers_input, max_steps],
            outputs=[summary_output, trace_output, registers_output]
        )

        encode_button.click(
            fn=encode_program,
            inputs=[encode_input],
            outputs=[encode_list_output, encode_number_output]
        )

        decode_button.click(
            fn=decode_number,
            inputs=[decode_input],
            outputs=[decode_list_output, decode_program_output]
        )

    return demo


# =============================================================================
# Main
# =============================================================================

if __name__ == "__main__":
    demo = create_demo()
    demo.launch(
        share=False,
        server_name="0.0.0.0",
        server_port=7861,
        show_error=True
    )
