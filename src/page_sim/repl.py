"""Interactive REPL (Read-Eval-Print Loop) for the simulator.

The REPL is the thin I/O wrapper around the shell:

    1. **Read** — display a prompt and read user input.
    2. **Eval** — pass the command to ``shell.execute()``.
    3. **Print** — display the result.
    4. **Loop** — repeat until the shell returns the exit sentinel.

The helper functions (``build_prompt``, ``format_banner``) are pure and
testable.  The ``run()`` function is the I/O entrypoint.
"""

from page_sim.shell import Shell

_BANNER_WIDTH = 38


def format_banner() -> str:
    """Return the greeting printed when the REPL starts."""
    border = "=" * _BANNER_WIDTH
    return (
        f"\n  {border}\n          page-sim v0.1.0\n"
        f"     Page replacement simulator\n  {border}\n\n"
        "Type 'help' for commands, 'exit' to quit.\n"
    )


def build_prompt(shell: Shell) -> str:
    """Build the prompt string showing the selected policy and frames.

    Returns:
        A prompt such as ``FIFO/3 $ ``.

    """
    return f"{shell.config.policy}/{shell.config.frames} $ "


def run() -> None:
    """Run the interactive REPL until ``exit``, Ctrl+D, or Ctrl+C."""
    shell = Shell()
    print(format_banner())  # noqa: T201

    try:
        while True:
            try:
                command = input(build_prompt(shell))
            except EOFError:
                # Ctrl+D: graceful exit
                print()  # noqa: T201
                break

            result = shell.execute(command)
            if result == Shell.EXIT_SENTINEL:
                break
            if result:
                print(result)  # noqa: T201

    except KeyboardInterrupt:
        # Ctrl+C: graceful exit
        print("\nInterrupted.")  # noqa: T201
