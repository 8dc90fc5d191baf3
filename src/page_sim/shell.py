"""The shell — command interpreter for the simulator.

The shell reads a command string, splits it into a command name and
arguments, dispatches to the matching handler, and returns a string.
It holds the current configuration (frames, reference string, policy)
and the trace of the last run, so a session looks like::

    load scenario2
    policy lru
    run
    step 5
    trace

Design choices:
    - **Returns strings, not prints.**  The shell is fully testable;
      the REPL decides how to display output.
    - **Command dispatch via a dict.**  Adding a command means writing
      a method and adding one dict entry.
    - **Errors become ``Error: ...`` strings.**  A bad frame count or an
      unknown policy never escapes to the caller.
"""

from collections.abc import Callable
from typing import TypeAlias

from page_sim.config import InvalidConfigurationError, SimulationConfig, parse_frames
from page_sim.engine import ReplacementEngine, SimulationTrace, StepIndexError, compare_policies
from page_sim.policies import Policy, UnknownPolicyError
from page_sim.scenarios import get_scenario, list_scenarios
from page_sim.trace import format_comparison, format_frames, format_step, format_trace

# Type alias for a command handler: takes a list of args, returns output.
_Handler: TypeAlias = Callable[[list[str]], str]


class Shell:
    """Command interpreter over a replacement engine."""

    EXIT_SENTINEL = "__EXIT__"

    def __init__(
        self,
        *,
        engine: ReplacementEngine | None = None,
        config: SimulationConfig | None = None,
    ) -> None:
        """Create a shell.

        Args:
            engine: Engine to run simulations on (a fresh one if omitted).
            config: Starting configuration (defaults if omitted).

        """
        self._engine = engine if engine is not None else ReplacementEngine()
        self._config = config if config is not None else SimulationConfig()
        self._trace: SimulationTrace | None = None

        # Command dispatch table: maps command names to handler methods.
        self._commands: dict[str, _Handler] = {
            "help": self._cmd_help,
            "policies": self._cmd_policies,
            "scenarios": self._cmd_scenarios,
            "load": self._cmd_load,
            "frames": self._cmd_frames,
            "refs": self._cmd_refs,
            "policy": self._cmd_policy,
            "config": self._cmd_config,
            "run": self._cmd_run,
            "step": self._cmd_step,
            "trace": self._cmd_trace,
            "compare": self._cmd_compare,
            "log": self._cmd_log,
            "exit": self._cmd_exit,
        }

    @property
    def config(self) -> SimulationConfig:
        """Return the current configuration."""
        return self._config

    @property
    def trace(self) -> SimulationTrace | None:
        """Return the trace of the last run, if any."""
        return self._trace

    def execute(self, command: str) -> str:
        """Parse and execute a single command.

        Args:
            command: The raw command string (e.g. "frames 4").

        Returns:
            The command output, or an error message.

        """
        parts = command.split()
        if not parts:
            return ""
        name, args = parts[0].lower(), parts[1:]
        handler = self._commands.get(name)
        if handler is None:
            return f"Unknown command: {name}"
        try:
            return handler(args)
        except (InvalidConfigurationError, UnknownPolicyError) as e:
            return f"Error: {e}"

    def _set_config(self, config: SimulationConfig) -> None:
        # A new configuration invalidates the previous run.
        self._config = config
        self._trace = None

    def _cmd_help(self, _args: list[str]) -> str:
        """List available commands."""
        return "Available commands: " + ", ".join(sorted(self._commands))

    def _cmd_policies(self, _args: list[str]) -> str:
        """Describe each replacement policy."""
        return "\n".join(f"{p}: {p.description}" for p in Policy)

    def _cmd_scenarios(self, _args: list[str]) -> str:
        """List preset scenarios."""
        lines = ["KEY        FRAMES  NAME"]
        lines.extend(f"{s.key:<10} {s.frames:<7} {s.name}" for s in list_scenarios())
        return "\n".join(lines)

    def _cmd_load(self, args: list[str]) -> str:
        """Load a preset scenario, keeping the current policy."""
        if not args:
            return "Usage: load <scenario>"
        scenario = get_scenario(args[0])
        self._set_config(scenario.to_config(self._config.policy))
        return f"Loaded {scenario.name}: {scenario.description}"

    def _cmd_frames(self, args: list[str]) -> str:
        """Set the number of frames."""
        if not args:
            return "Usage: frames <count>"
        self._set_config(self._config.with_frames(parse_frames(args[0])))
        return f"Frames set to {self._config.frames}"

    def _cmd_refs(self, args: list[str]) -> str:
        """Set the reference string."""
        if not args:
            return "Usage: refs <page>[, <page> ...]"
        self._set_config(self._config.with_references(" ".join(args)))
        return f"Reference string set ({len(self._config.references)} references)"

    def _cmd_policy(self, args: list[str]) -> str:
        """Select the replacement policy."""
        if not args:
            return f"Current policy: {self._config.policy}"
        self._set_config(self._config.with_policy(args[0]))
        return f"Policy set to {self._config.policy}"

    def _cmd_config(self, _args: list[str]) -> str:
        """Show the current configuration."""
        refs = ", ".join(str(p) for p in self._config.references) or "(none)"
        return "\n".join(
            [
                f"Policy: {self._config.policy}",
                f"Frames: {self._config.frames}",
                f"References: {refs}",
            ]
        )

    def _cmd_run(self, _args: list[str]) -> str:
        """Run the current configuration and show totals."""
        self._trace = self._engine.run(
            capacity=self._config.frames,
            references=self._config.references,
            policy=self._config.policy,
        )
        result = self._trace.result
        return "\n".join(
            [
                f"{self._trace.policy}: {result.total_references} references, "
                f"{result.page_faults} faults, {result.page_hits} hits",
                f"Hit rate: {result.hit_rate:.2f}%  Fault rate: {result.fault_rate:.2f}%",
            ]
        )

    def _cmd_step(self, args: list[str]) -> str:
        """Show one step of the last run (numbered from 1)."""
        if self._trace is None:
            return "Error: no simulation has been run"
        if not args:
            return "Usage: step <number>"
        try:
            number = int(args[0])
        except ValueError:
            return f"Error: invalid step number {args[0]!r}"
        try:
            step = self._trace[number - 1]
        except StepIndexError:
            return f"Error: no step {number} (trace has {self._trace.total_steps} steps)"
        utilization = step.frame_utilization(self._trace.capacity)
        return f"{format_step(step)}\n  Utilization: {utilization}%"

    def _cmd_trace(self, _args: list[str]) -> str:
        """Print the full execution trace of the last run."""
        if self._trace is None or self._trace.total_steps == 0:
            return "No simulation data to export"
        return format_trace(self._trace)

    def _cmd_compare(self, _args: list[str]) -> str:
        """Run every policy on the current configuration and tabulate."""
        traces = compare_policies(
            self._config.frames,
            self._config.references,
            engine=self._engine,
        )
        final = {p: format_frames(t.steps[-1].memory_after) for p, t in traces.items() if t.steps}
        lines = [format_comparison(traces)]
        lines.extend(f"{p} final frames: {frames}" for p, frames in final.items())
        return "\n".join(lines)

    def _cmd_log(self, _args: list[str]) -> str:
        """Show engine log entries."""
        logger = self._engine.logger
        if not logger.entries:
            return "No log entries."
        lines = [str(e) for e in logger.entries]
        if logger.dropped:
            lines.insert(0, f"({logger.dropped} older entries dropped)")
        return "\n".join(lines)

    def _cmd_exit(self, _args: list[str]) -> str:
        """Signal the REPL to stop."""
        return self.EXIT_SENTINEL
