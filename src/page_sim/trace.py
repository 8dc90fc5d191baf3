"""Trace export — turn a finished run into text or JSON-ready data.

Everything here reads a ``SimulationTrace`` and never re-runs the
simulation.  Padding frames out to the configured width (with empty
slots) is a display concern, so it lives here rather than in the
engine.
"""

from collections.abc import Mapping
from datetime import datetime

from page_sim.engine import SimulationTrace, StepRecord
from page_sim.policies import PageId, Policy

_RULE = "=" * 37


def format_frames(frames: tuple[PageId, ...]) -> str:
    """Render a frame set as ``[1, 2, 3]``, or ``[empty]`` if nothing is resident."""
    if not frames:
        return "[empty]"
    return "[" + ", ".join(str(p) for p in frames) + "]"


def pad_frames(frames: tuple[PageId, ...], capacity: int) -> list[PageId | None]:
    """Return the frames padded with ``None`` up to ``capacity`` slots."""
    return [*frames, *([None] * (capacity - len(frames)))]


def format_step(step: StepRecord) -> str:
    """Render one step as the indented block used in trace exports."""
    return "\n".join(
        [
            f"Step {step.step}: Page Reference = {step.page}",
            f"  Memory Before: {format_frames(step.memory_before)}",
            f"  Memory After:  {format_frames(step.memory_after)}",
            f"  Action: {step.action}",
            f"  Fault: {'YES' if step.page_fault else 'NO'}",
        ]
    )


def format_summary(trace: SimulationTrace) -> str:
    """Render the summary statistics block."""
    result = trace.result
    return "\n".join(
        [
            "SUMMARY STATISTICS:",
            _RULE,
            f"Total Page Faults: {result.page_faults}",
            f"Total Page Hits: {result.page_hits}",
            f"Hit Rate: {result.hit_rate:.2f}%",
            f"Fault Rate: {result.fault_rate:.2f}%",
        ]
    )


def format_trace(trace: SimulationTrace) -> str:
    """Render a complete execution trace as plain text.

    The layout is a header (policy, frames, reference string), one
    block per step, then the summary statistics.
    """
    header = [
        "OS MEMORY SIMULATOR - EXECUTION TRACE",
        _RULE,
        f"Algorithm: {trace.policy}",
        f"Frames: {trace.capacity}",
        f"Reference String: {', '.join(str(p) for p in trace.references)}",
        f"Total References: {len(trace.references)}",
        "",
        "DETAILED TRACE:",
        _RULE,
        "",
    ]
    body = [format_step(step) + "\n" for step in trace]
    return "\n".join([*header, *body, format_summary(trace)]) + "\n"


def trace_filename(policy: Policy, *, when: datetime | None = None) -> str:
    """Return a download filename such as ``os-simulator-trace-LRU-1700000000000.txt``."""
    moment = when if when is not None else datetime.now()
    millis = int(moment.timestamp() * 1000)
    return f"os-simulator-trace-{policy}-{millis}.txt"


def format_comparison(traces: Mapping[Policy, SimulationTrace]) -> str:
    """Render a side-by-side table of totals for several runs."""
    lines = ["POLICY    FAULTS  HITS  HIT RATE  FAULT RATE"]
    for policy, trace in traces.items():
        r = trace.result
        lines.append(
            f"{policy!s:<9} {r.page_faults:>6} {r.page_hits:>5} "
            f"{r.hit_rate:>7.2f}% {r.fault_rate:>9.2f}%"
        )
    return "\n".join(lines)


def step_to_dict(step: StepRecord) -> dict[str, object]:
    """Return a JSON-ready mapping for one step."""
    return {
        "step": step.step,
        "page": step.page,
        "kind": str(step.kind),
        "memory_before": list(step.memory_before),
        "memory_after": list(step.memory_after),
        "action": step.action,
        "page_fault": step.page_fault,
        "victim": step.victim,
    }


def trace_to_dict(trace: SimulationTrace) -> dict[str, object]:
    """Return a JSON-ready mapping for a whole run."""
    result = trace.result
    return {
        "policy": str(trace.policy),
        "frames": trace.capacity,
        "references": list(trace.references),
        "steps": [step_to_dict(step) for step in trace],
        "result": {
            "total_references": result.total_references,
            "page_faults": result.page_faults,
            "page_hits": result.page_hits,
            "hit_rate": result.hit_rate,
            "fault_rate": result.fault_rate,
            "frame_utilization": result.frame_utilization,
        },
    }
