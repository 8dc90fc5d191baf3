"""Preset workloads for demonstrations.

Each scenario pairs a frame count with a reference string chosen to
show off a particular behaviour, from a working set that fits
comfortably in memory to one that thrashes.
"""

from dataclasses import dataclass

from page_sim.config import InvalidConfigurationError, SimulationConfig
from page_sim.policies import Policy


@dataclass(frozen=True)
class Scenario:
    """A named, ready-to-run workload.

    Attributes:
        key: Short identifier used on the command line (``scenario2``).
        name: Display name.
        frames: Number of memory frames.
        references: The page reference string.
        description: What the scenario demonstrates.

    """

    key: str
    name: str
    frames: int
    references: tuple[int, ...]
    description: str

    def to_config(self, policy: Policy | str = Policy.FIFO) -> SimulationConfig:
        """Return a run configuration for this scenario."""
        return SimulationConfig(frames=self.frames, references=self.references, policy=policy)


PRESET_SCENARIOS: dict[str, Scenario] = {
    s.key: s
    for s in (
        Scenario(
            key="scenario1",
            name="Light Load",
            frames=3,
            references=(1, 2, 3, 1, 2, 3),
            description="Simple repeating pattern with no page faults after initial load",
        ),
        Scenario(
            key="scenario2",
            name="Normal Load",
            frames=3,
            references=(7, 0, 1, 2, 0, 3, 0, 4, 2, 3, 0, 3, 2, 1, 2, 0, 1, 7, 0, 1),
            description="Standard workload with mixed references",
        ),
        Scenario(
            key="scenario3",
            name="Heavy Load",
            frames=4,
            references=(1, 2, 3, 4, 5) * 4,
            description="High contention with working set larger than memory",
        ),
        Scenario(
            key="scenario4",
            name="Worst Case (Thrashing)",
            frames=3,
            references=(1, 2, 3, 4) * 5,
            description="Thrashing scenario where working set exceeds memory capacity",
        ),
    )
}


def list_scenarios() -> list[Scenario]:
    """Return every preset in key order."""
    return [PRESET_SCENARIOS[key] for key in sorted(PRESET_SCENARIOS)]


def get_scenario(key: str) -> Scenario:
    """Look up a preset by key.

    Raises:
        InvalidConfigurationError: If no preset has that key.

    """
    scenario = PRESET_SCENARIOS.get(key.strip().lower())
    if scenario is None:
        known = ", ".join(sorted(PRESET_SCENARIOS))
        msg = f"Unknown scenario {key!r} (expected one of: {known})"
        raise InvalidConfigurationError(msg)
    return scenario
