"""Replacement engine — run one policy over a reference string.

The engine is the heart of the simulator.  Given a frame count, a
reference string, and a policy, it walks the references once and
records what happened at every step:

    1. Snapshot the frame set (``before``).
    2. **Hit** — the page is resident; the policy notes the access.
    3. **Fault** — the page is not resident:
       - a free frame remains → load the page into it;
       - every frame is full → the policy picks a victim and the new
         page takes its place.
    4. Snapshot the frame set again (``after``) and emit a step record.

Totals (hits, faults, rates) are derived from the step records once the
pass is over.  The engine keeps no state between runs: each call builds
a fresh policy object, so the same engine can serve several runs side by
side.
"""

from collections.abc import Iterator, Mapping, Sequence
from dataclasses import dataclass
from enum import StrEnum

from page_sim.config import InvalidConfigurationError, coerce_references, validate_capacity
from page_sim.logging import Logger, LogLevel
from page_sim.policies import PageId, Policy, UnknownPolicyError, create_policy, parse_policy

_SOURCE = "engine"


class StepIndexError(IndexError):
    """Raise when a step index lies outside the recorded trace."""


class StepKind(StrEnum):
    """What happened to the referenced page at one step."""

    HIT = "hit"
    LOAD = "load"
    REPLACE = "replace"


@dataclass(frozen=True)
class StepRecord:
    """The outcome of processing one page reference.

    Attributes:
        step: 1-based position of the reference in the string.
        page: The page that was referenced.
        policy: The policy that was running.
        kind: Hit, load into a free frame, or replacement.
        memory_before: Resident pages before the reference.
        memory_after: Resident pages after the reference.
        action: Human-readable description of what happened.
        victim: The evicted page, or ``None`` if nothing was evicted.

    """

    step: int
    page: PageId
    policy: Policy
    kind: StepKind
    memory_before: tuple[PageId, ...]
    memory_after: tuple[PageId, ...]
    action: str
    victim: PageId | None = None

    @property
    def page_fault(self) -> bool:
        """Return True if the page was not resident when referenced."""
        return self.kind is not StepKind.HIT

    def frame_utilization(self, capacity: int) -> int:
        """Return the percentage of frames in use after this step."""
        return round(len(self.memory_after) / capacity * 100)


@dataclass(frozen=True)
class SimulationResult:
    """Aggregate statistics for one run.

    Rates are percentages rounded to two decimals, and 0.0 for an
    empty reference string.
    """

    total_references: int
    page_faults: int
    page_hits: int
    frame_utilization: int = 0

    @property
    def hit_rate(self) -> float:
        """Return hits as a percentage of all references."""
        return _percentage(self.page_hits, self.total_references)

    @property
    def fault_rate(self) -> float:
        """Return faults as a percentage of all references."""
        return _percentage(self.page_faults, self.total_references)


def _percentage(part: int, whole: int) -> float:
    if whole == 0:
        return 0.0
    return round(part / whole * 100, 2)


@dataclass(frozen=True)
class SimulationTrace:
    """The full, immutable record of one run.

    Steps are stored in a tuple so any step can be fetched by index in
    constant time, which is what "jump to step N" navigation needs.
    """

    policy: Policy
    capacity: int
    references: tuple[PageId, ...]
    steps: tuple[StepRecord, ...]
    result: SimulationResult

    def __len__(self) -> int:
        """Return the number of recorded steps."""
        return len(self.steps)

    def __iter__(self) -> Iterator[StepRecord]:
        """Iterate over the steps in order."""
        return iter(self.steps)

    def __getitem__(self, index: int) -> StepRecord:
        """Return the step at a 0-based index.

        Raises:
            StepIndexError: If the index is outside ``[0, len(trace))``.

        """
        if not 0 <= index < len(self.steps):
            msg = f"No such step: index {index} (trace has {len(self.steps)} steps)"
            raise StepIndexError(msg)
        return self.steps[index]

    @property
    def total_steps(self) -> int:
        """Return the number of recorded steps."""
        return len(self.steps)

    def get_step(self, index: int) -> StepRecord | None:
        """Return the step at a 0-based index, or ``None`` if there is none."""
        try:
            return self[index]
        except StepIndexError:
            return None


class ReplacementEngine:
    """Run replacement policies and record step-by-step traces."""

    def __init__(self, *, logger: Logger | None = None) -> None:
        """Create an engine.

        Args:
            logger: Where run events go.  A private logger is made if omitted.

        """
        self._logger = logger if logger is not None else Logger()

    @property
    def logger(self) -> Logger:
        """Return the logger this engine writes to."""
        return self._logger

    def run(
        self,
        *,
        capacity: int,
        references: Sequence[PageId] | str,
        policy: Policy | str,
    ) -> SimulationTrace:
        """Simulate one policy over a reference string.

        Args:
            capacity: Number of memory frames (at least 1).
            references: Pages in reference order, or their textual form.
            policy: Which policy to run (name matching ignores case).

        Returns:
            The complete trace with per-step records and totals.

        Raises:
            InvalidConfigurationError: Bad frame count or page token.
            UnknownPolicyError: Unrecognised policy name.

        """
        try:
            capacity = validate_capacity(capacity)
            pages = coerce_references(references)
            selected = parse_policy(policy)
        except (InvalidConfigurationError, UnknownPolicyError) as e:
            self._logger.log(LogLevel.WARNING, f"Rejected run: {e}", source=_SOURCE)
            raise

        self._logger.log(
            LogLevel.INFO,
            f"{selected} run started: {capacity} frames, {len(pages)} references",
            source=_SOURCE,
        )

        state = create_policy(selected, references=pages)
        steps: list[StepRecord] = []
        hits = 0
        faults = 0

        for position, page in enumerate(pages):
            before = state.frames
            victim: PageId | None = None
            if state.contains(page):
                hits += 1
                state.record_access(page, position=position)
                kind = StepKind.HIT
                action = state.describe_hit(page)
            else:
                faults += 1
                if len(before) < capacity:
                    state.add_page(page, position=position)
                    kind = StepKind.LOAD
                    action = f"Load: Page {page} loaded into empty frame"
                else:
                    victim = state.replace(page, position=position)
                    kind = StepKind.REPLACE
                    action = state.describe_replacement(victim, page)
                    self._logger.log(
                        LogLevel.DEBUG,
                        f"step {position + 1}: evicted page {victim} for page {page}",
                        source=_SOURCE,
                    )
            steps.append(
                StepRecord(
                    step=position + 1,
                    page=page,
                    policy=selected,
                    kind=kind,
                    memory_before=before,
                    memory_after=state.frames,
                    action=action,
                    victim=victim,
                )
            )

        result = SimulationResult(
            total_references=len(pages),
            page_faults=faults,
            page_hits=hits,
            frame_utilization=round(len(state.frames) / capacity * 100),
        )
        self._logger.log(
            LogLevel.INFO,
            f"{selected} run finished: {faults} faults, {hits} hits "
            f"({result.hit_rate:.2f}% hit rate)",
            source=_SOURCE,
        )
        return SimulationTrace(
            policy=selected,
            capacity=capacity,
            references=pages,
            steps=tuple(steps),
            result=result,
        )


def simulate(
    capacity: int,
    references: Sequence[PageId] | str,
    policy: Policy | str,
) -> SimulationTrace:
    """Run one simulation with a throwaway engine."""
    return ReplacementEngine().run(capacity=capacity, references=references, policy=policy)


def compare_policies(
    capacity: int,
    references: Sequence[PageId] | str,
    *,
    policies: Sequence[Policy | str] | None = None,
    engine: ReplacementEngine | None = None,
) -> Mapping[Policy, SimulationTrace]:
    """Run several policies over the same input, each in its own pass.

    Args:
        capacity: Number of memory frames.
        references: The shared reference string.
        policies: Which policies to run (all four by default).
        engine: Engine to use; a fresh one if omitted.

    Returns:
        A mapping from policy to its trace, in the order requested.

    """
    engine = engine if engine is not None else ReplacementEngine()
    selected = [parse_policy(p) for p in policies] if policies is not None else list(Policy)
    pages = coerce_references(references)
    return {
        policy: engine.run(capacity=capacity, references=pages, policy=policy)
        for policy in selected
    }
