"""Page replacement policies — who gets evicted when every frame is full.

A reference to a page that is not resident is a **page fault**.  While
free frames remain, the page is simply loaded.  Once the frame set is
full, the policy must choose a **victim** to make room:

    - **FIFO** — evict the page that has been resident longest.  Simple,
      but can suffer from Belady's anomaly (more frames → more faults
      for some patterns).
    - **LRU** — evict the page whose last access is oldest.  Each page
      carries the index of its most recent reference.
    - **Optimal** — evict the page whose next use lies furthest in the
      future (or never comes).  Needs the whole reference string up
      front, so it is a yardstick rather than something a real OS can
      run.
    - **Clock** — second-chance approximation of LRU.  Frames form a
      ring with one reference bit each; the hand clears set bits as it
      sweeps and evicts the first page whose bit is already clear.

Each policy object owns the frame set and bookkeeping for exactly one
run (Strategy pattern).  The engine drives them through the shared
``ReplacementPolicy`` interface and never looks inside.

Ties are always resolved by position in the current frame set: the
first qualifying page wins.
"""

import math
from collections.abc import Hashable, Sequence
from enum import StrEnum
from typing import Protocol, TypeAlias

# Pages are compared by equality and hash, so 1, 1.0 and True name the same page.
PageId: TypeAlias = Hashable


class UnknownPolicyError(ValueError):
    """Raise when a policy selector does not name a known policy."""


class Policy(StrEnum):
    """The four replacement policies the engine can run."""

    FIFO = "FIFO"
    LRU = "LRU"
    OPTIMAL = "OPTIMAL"
    CLOCK = "CLOCK"

    @property
    def description(self) -> str:
        """Return a short teaching description of this policy."""
        return POLICY_DESCRIPTIONS[self]


POLICY_DESCRIPTIONS: dict[Policy, str] = {
    Policy.FIFO: (
        "First In First Out - The simplest page replacement algorithm. Pages are "
        "replaced in the order they were loaded into memory. Suffers from "
        "Belady's anomaly."
    ),
    Policy.LRU: (
        "Least Recently Used - Replaces the page that has not been used for the "
        "longest time. Provides better performance than FIFO but requires "
        "tracking access times."
    ),
    Policy.OPTIMAL: (
        "Optimal Page Replacement - Replaces the page that will not be used for "
        "the longest time in the future. Theoretical best but impossible to "
        "implement (requires future knowledge)."
    ),
    Policy.CLOCK: (
        "Clock Algorithm - Similar to LRU but uses reference bits and a clock "
        "pointer for efficient implementation. Practical alternative to full "
        "LRU tracking."
    ),
}


def parse_policy(selector: Policy | str) -> Policy:
    """Resolve a policy selector, ignoring case and surrounding spaces.

    Args:
        selector: A ``Policy`` member or its name (``"lru"``, ``"Clock"``...).

    Returns:
        The matching ``Policy``.

    Raises:
        UnknownPolicyError: If the selector names no known policy.

    """
    if isinstance(selector, Policy):
        return selector
    if isinstance(selector, str):
        name = selector.strip().upper()
        if name in Policy.__members__:
            return Policy[name]
    known = ", ".join(p.value for p in Policy)
    msg = f"Unknown policy {selector!r} (expected one of: {known})"
    raise UnknownPolicyError(msg)


# ---------------------------------------------------------------------------
# Replacement Policy Protocol (Strategy pattern)
# ---------------------------------------------------------------------------


class ReplacementPolicy(Protocol):
    """Interface the engine uses to drive one policy through one run."""

    @property
    def frames(self) -> tuple[PageId, ...]:
        """Return a snapshot of the resident pages in frame-set order."""
        ...

    def contains(self, page: PageId) -> bool:
        """Check whether a page is resident."""
        ...

    def record_access(self, page: PageId, *, position: int) -> None:
        """Record a hit on a resident page at the given reference position."""
        ...

    def add_page(self, page: PageId, *, position: int) -> None:
        """Load a page into a free frame."""
        ...

    def replace(self, page: PageId, *, position: int) -> PageId:
        """Evict a victim, load ``page`` in its place, and return the victim."""
        ...

    def describe_hit(self, page: PageId) -> str:
        """Return the action text for a hit."""
        ...

    def describe_replacement(self, victim: PageId, page: PageId) -> str:
        """Return the action text for a replacement."""
        ...


class _FrameSetPolicy:
    """Frame-set bookkeeping shared by every policy."""

    def __init__(self) -> None:
        self._frames: list[PageId] = []

    @property
    def frames(self) -> tuple[PageId, ...]:
        """Return a snapshot of the resident pages in frame-set order."""
        return tuple(self._frames)

    def contains(self, page: PageId) -> bool:
        """Check whether a page is resident."""
        return page in self._frames

    def record_access(self, page: PageId, *, position: int) -> None:  # noqa: ARG002
        """Ignore hits; only recency-aware policies override this."""

    def add_page(self, page: PageId, *, position: int) -> None:  # noqa: ARG002
        """Load a page into the next free frame (the tail)."""
        self._frames.append(page)

    def select_victim(self, *, position: int) -> PageId:
        """Choose the page to evict; each policy supplies its own rule."""
        raise NotImplementedError

    def replace(self, page: PageId, *, position: int) -> PageId:
        """Evict the victim and append the new page at the tail."""
        victim = self.select_victim(position=position)
        self._frames.remove(victim)
        self._frames.append(page)
        return victim

    def describe_hit(self, page: PageId) -> str:
        """Return the action text for a hit."""
        return f"Hit: Page {page} already in memory"

    def describe_replacement(self, victim: PageId, page: PageId) -> str:
        """Return the action text for a replacement."""
        return f"Fault: Replace page {victim} with page {page}"

    def _require_frames(self) -> None:
        if not self._frames:
            msg = "No pages to evict"
            raise IndexError(msg)


# ---------------------------------------------------------------------------
# FIFO Policy
# ---------------------------------------------------------------------------


class FIFOPolicy(_FrameSetPolicy):
    """First In, First Out — evict the oldest loaded page.

    The frame set doubles as the queue: new pages join the tail and the
    head is always the oldest.  Hits change nothing.
    """

    def select_victim(self, *, position: int) -> PageId:  # noqa: ARG002
        """Return the oldest page (head of the queue).

        Raises:
            IndexError: If no pages are resident.

        """
        self._require_frames()
        return self._frames[0]


# ---------------------------------------------------------------------------
# LRU Policy
# ---------------------------------------------------------------------------


class LRUPolicy(_FrameSetPolicy):
    """Least Recently Used — evict the page accessed longest ago.

    Keeps a map of page → index of its last reference.  The frame set
    is not reordered on a hit; the victim is found by scanning it for
    the smallest access index.
    """

    def __init__(self) -> None:
        """Create an empty LRU policy."""
        super().__init__()
        self._last_access: dict[PageId, int] = {}

    @property
    def last_access(self) -> dict[PageId, int]:
        """Return a copy of the page → last-access-position map."""
        return dict(self._last_access)

    def record_access(self, page: PageId, *, position: int) -> None:
        """Mark the page as used at ``position``."""
        self._last_access[page] = position

    def add_page(self, page: PageId, *, position: int) -> None:
        """Load a page and stamp its access position."""
        super().add_page(page, position=position)
        self._last_access[page] = position

    def select_victim(self, *, position: int) -> PageId:  # noqa: ARG002
        """Return the resident page with the oldest access.

        Raises:
            IndexError: If no pages are resident.

        """
        self._require_frames()
        victim = self._frames[0]
        for page in self._frames[1:]:
            if self._last_access[page] < self._last_access[victim]:
                victim = page
        return victim

    def replace(self, page: PageId, *, position: int) -> PageId:
        """Evict the least recently used page and load ``page``."""
        victim = super().replace(page, position=position)
        del self._last_access[victim]
        self._last_access[page] = position
        return victim

    def describe_hit(self, page: PageId) -> str:
        """Return the action text for a hit."""
        return f"Hit: Page {page} marked as recently used"

    def describe_replacement(self, victim: PageId, page: PageId) -> str:
        """Return the action text for a replacement."""
        return f"Fault: Replace LRU page {victim} with page {page}"


# ---------------------------------------------------------------------------
# Optimal Policy
# ---------------------------------------------------------------------------


class OptimalPolicy(_FrameSetPolicy):
    """Belady's optimal policy — evict the page needed furthest in the future.

    Holds the full reference string so it can look ahead.  No state is
    carried between faults; the next-use distances are recomputed each
    time a victim is needed.
    """

    def __init__(self, *, references: Sequence[PageId]) -> None:
        """Create an Optimal policy over a known reference string.

        Args:
            references: The whole reference string for this run.

        """
        super().__init__()
        self._references = tuple(references)

    def next_use(self, page: PageId, *, position: int) -> float:
        """Return the index of the next reference to ``page`` after ``position``.

        Pages that are never referenced again get ``math.inf``.
        """
        try:
            return self._references.index(page, position + 1)
        except ValueError:
            return math.inf

    def select_victim(self, *, position: int) -> PageId:
        """Return the page whose next use is furthest away.

        Raises:
            IndexError: If no pages are resident.

        """
        self._require_frames()
        victim = self._frames[0]
        furthest = self.next_use(victim, position=position)
        for page in self._frames[1:]:
            distance = self.next_use(page, position=position)
            if distance > furthest:
                victim, furthest = page, distance
        return victim


# ---------------------------------------------------------------------------
# Clock Policy
# ---------------------------------------------------------------------------


class ClockPolicy(_FrameSetPolicy):
    """Second Chance (Clock) — approximate LRU with reference bits.

    The frame set is a ring of fixed slots.  The hand sweeps from its
    current slot:
    - ref bit = 1 → clear it, advance (second chance)
    - ref bit = 0 → evict this page; the new page takes over the slot

    Loaded and replacing pages start with their bit set.
    """

    def __init__(self) -> None:
        """Create an empty clock policy."""
        super().__init__()
        self._ref_bits: dict[PageId, int] = {}
        self._hand: int = 0

    @property
    def hand(self) -> int:
        """Return the slot index the clock hand points at."""
        return self._hand

    @property
    def reference_bits(self) -> dict[PageId, int]:
        """Return a copy of the page → reference bit map."""
        return dict(self._ref_bits)

    def record_access(self, page: PageId, *, position: int) -> None:  # noqa: ARG002
        """Set the reference bit for this page."""
        self._ref_bits[page] = 1

    def add_page(self, page: PageId, *, position: int) -> None:
        """Load a page into the next free slot with its bit set."""
        super().add_page(page, position=position)
        self._ref_bits[page] = 1

    def select_victim(self, *, position: int) -> PageId:  # noqa: ARG002
        """Sweep the hand, clearing bits, until an unreferenced page is found.

        Leaves the hand pointing at the victim's slot.

        Raises:
            IndexError: If no pages are resident.

        """
        self._require_frames()
        while self._ref_bits[self._frames[self._hand]] == 1:
            self._ref_bits[self._frames[self._hand]] = 0
            self._hand = (self._hand + 1) % len(self._frames)
        return self._frames[self._hand]

    def replace(self, page: PageId, *, position: int) -> PageId:
        """Overwrite the victim's slot in place and move the hand past it."""
        victim = self.select_victim(position=position)
        self._frames[self._hand] = page
        del self._ref_bits[victim]
        self._ref_bits[page] = 1
        self._hand = (self._hand + 1) % len(self._frames)
        return victim

    def describe_hit(self, page: PageId) -> str:
        """Return the action text for a hit."""
        return f"Hit: Page {page} reference bit set to 1"

    def describe_replacement(self, victim: PageId, page: PageId) -> str:
        """Return the action text for a replacement."""
        return f"Fault: Replace page {victim} (ref bit=0) with page {page}"


def create_policy(policy: Policy, *, references: Sequence[PageId]) -> ReplacementPolicy:
    """Build fresh policy state for one run.

    Args:
        policy: Which policy to run.
        references: The run's reference string (only Optimal looks at it).

    Returns:
        A new, empty policy object.

    """
    match policy:
        case Policy.FIFO:
            return FIFOPolicy()
        case Policy.LRU:
            return LRUPolicy()
        case Policy.OPTIMAL:
            return OptimalPolicy(references=references)
        case Policy.CLOCK:
            return ClockPolicy()
