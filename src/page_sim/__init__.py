"""Page replacement simulator — FIFO, LRU, Optimal, and Clock.

Re-exports public symbols so callers can write::

    from page_sim import ReplacementEngine, Policy
"""

from page_sim.config import (
    InvalidConfigurationError,
    SimulationConfig,
    parse_reference_string,
)
from page_sim.engine import (
    ReplacementEngine,
    SimulationResult,
    SimulationTrace,
    StepIndexError,
    StepKind,
    StepRecord,
    compare_policies,
    simulate,
)
from page_sim.policies import (
    ClockPolicy,
    FIFOPolicy,
    LRUPolicy,
    OptimalPolicy,
    Policy,
    ReplacementPolicy,
    UnknownPolicyError,
    parse_policy,
)

__all__ = [
    "ClockPolicy",
    "FIFOPolicy",
    "InvalidConfigurationError",
    "LRUPolicy",
    "OptimalPolicy",
    "Policy",
    "ReplacementEngine",
    "ReplacementPolicy",
    "SimulationConfig",
    "SimulationResult",
    "SimulationTrace",
    "StepIndexError",
    "StepKind",
    "StepRecord",
    "UnknownPolicyError",
    "compare_policies",
    "parse_policy",
    "parse_reference_string",
    "simulate",
]
