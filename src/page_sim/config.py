"""Simulation configuration — frame count, reference string, and policy.

A run is fully described by three values: how many frames memory has,
which pages are referenced (in order), and which replacement policy
decides evictions.  ``SimulationConfig`` bundles them into one
immutable record and validates them before anything is simulated.

Reference strings typed by a user arrive as text such as
``"7, 0, 1, 2"`` or ``"7 0 1 2"``; ``parse_reference_string`` turns
that into a tuple of integers.
"""

import dataclasses
import re
from collections.abc import Sequence
from dataclasses import dataclass

from page_sim.policies import PageId, Policy, parse_policy

DEFAULT_FRAMES = 3
DEFAULT_POLICY = Policy.FIFO

_DELIMITERS = re.compile(r"[,\s]+")


class InvalidConfigurationError(ValueError):
    """Raise when a frame count or reference string is unusable."""


def validate_capacity(frames: object) -> int:
    """Check that a frame count is a positive integer.

    Args:
        frames: The proposed number of frames.

    Returns:
        The frame count, unchanged.

    Raises:
        InvalidConfigurationError: If it is not an integer of at least 1.

    """
    if isinstance(frames, bool) or not isinstance(frames, int):
        msg = f"Frame count must be an integer, got {frames!r}"
        raise InvalidConfigurationError(msg)
    if frames < 1:
        msg = f"Frame count must be at least 1, got {frames}"
        raise InvalidConfigurationError(msg)
    return frames


def parse_frames(text: str) -> int:
    """Parse a frame count typed as text."""
    try:
        frames = int(text.strip())
    except ValueError:
        msg = f"Frame count must be an integer, got {text!r}"
        raise InvalidConfigurationError(msg) from None
    return validate_capacity(frames)


def parse_reference_string(text: str) -> tuple[int, ...]:
    """Split a comma- and/or whitespace-delimited reference string.

    Args:
        text: Page numbers such as ``"1, 2, 3"`` or ``"1 2 3"``.

    Returns:
        The page numbers in order.  Blank text gives an empty tuple.

    Raises:
        InvalidConfigurationError: If any token is not an integer.

    """
    pages: list[int] = []
    for token in _DELIMITERS.split(text.strip()):
        if not token:
            continue
        try:
            pages.append(int(token))
        except ValueError:
            msg = f"Invalid page reference {token!r} in {text!r}"
            raise InvalidConfigurationError(msg) from None
    return tuple(pages)


def coerce_references(references: Sequence[PageId] | str) -> tuple[PageId, ...]:
    """Accept either parsed references or their textual form."""
    if isinstance(references, str):
        return parse_reference_string(references)
    return tuple(references)


@dataclass(frozen=True)
class SimulationConfig:
    """One complete, validated set of run parameters.

    Attributes:
        frames: Number of memory frames (at least 1).
        references: The page reference string.
        policy: The replacement policy to run.

    """

    frames: int = DEFAULT_FRAMES
    references: tuple[PageId, ...] = ()
    policy: Policy = DEFAULT_POLICY

    def __post_init__(self) -> None:
        """Validate fields and normalise references to a tuple."""
        validate_capacity(self.frames)
        object.__setattr__(self, "references", coerce_references(self.references))
        object.__setattr__(self, "policy", parse_policy(self.policy))

    @classmethod
    def from_text(
        cls,
        *,
        frames: int | str = DEFAULT_FRAMES,
        references: Sequence[PageId] | str = "",
        policy: Policy | str = DEFAULT_POLICY,
    ) -> "SimulationConfig":
        """Build a config from user-supplied values.

        The frame count may be typed text and the references may be
        either a parsed sequence or their comma/whitespace form.

        Raises:
            InvalidConfigurationError: For a bad frame count or page token.
            UnknownPolicyError: For an unrecognised policy name.

        """
        count = parse_frames(frames) if isinstance(frames, str) else frames
        return cls(
            frames=count,
            references=coerce_references(references),
            policy=parse_policy(policy),
        )

    def with_frames(self, frames: int) -> "SimulationConfig":
        """Return a copy with a different frame count."""
        return dataclasses.replace(self, frames=frames)

    def with_references(self, references: Sequence[PageId] | str) -> "SimulationConfig":
        """Return a copy with a different reference string."""
        return dataclasses.replace(self, references=coerce_references(references))

    def with_policy(self, policy: Policy | str) -> "SimulationConfig":
        """Return a copy with a different policy."""
        return dataclasses.replace(self, policy=parse_policy(policy))
