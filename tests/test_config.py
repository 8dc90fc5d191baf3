"""Tests for simulation configuration and reference-string parsing."""

import pytest

from page_sim.config import (
    DEFAULT_FRAMES,
    InvalidConfigurationError,
    SimulationConfig,
    parse_frames,
    parse_reference_string,
    validate_capacity,
)
from page_sim.policies import Policy, UnknownPolicyError


class TestParseReferenceString:
    """Verify parsing of typed reference strings."""

    @pytest.mark.parametrize("text", ["1, 2, 3", "1 2 3", "1,2 ,3", " 1,\t2\n3 ", "1,,2,3"])
    def test_delimiters(self, text: str) -> None:
        """Commas and any whitespace should both separate pages."""
        assert parse_reference_string(text) == (1, 2, 3)

    def test_blank_is_empty(self) -> None:
        """Blank text should parse to an empty reference string."""
        assert parse_reference_string("   ") == ()

    def test_negative_numbers(self) -> None:
        """Integers with a sign should parse."""
        assert parse_reference_string("-1, 2") == (-1, 2)

    @pytest.mark.parametrize("text", ["1, a, 3", "1.5", "1;2"])
    def test_bad_token_raises(self, text: str) -> None:
        """Any non-integer token should be rejected."""
        with pytest.raises(InvalidConfigurationError, match="Invalid page reference"):
            parse_reference_string(text)


class TestCapacity:
    """Verify frame-count validation."""

    def test_accepts_one(self) -> None:
        """A single frame is a valid configuration."""
        assert validate_capacity(1) == 1

    @pytest.mark.parametrize("frames", [0, -3])
    def test_rejects_non_positive(self, frames: int) -> None:
        """Zero or negative frame counts should be rejected."""
        with pytest.raises(InvalidConfigurationError, match="at least 1"):
            validate_capacity(frames)

    @pytest.mark.parametrize("frames", [False, 2.5, "4", None])
    def test_rejects_non_integer(self, frames: object) -> None:
        """Anything that is not a plain int should be rejected."""
        with pytest.raises(InvalidConfigurationError, match="must be an integer"):
            validate_capacity(frames)

    def test_parse_frames(self) -> None:
        """Typed frame counts should parse and validate."""
        expected = 4
        assert parse_frames(" 4 ") == expected
        with pytest.raises(InvalidConfigurationError):
            parse_frames("four")
        with pytest.raises(InvalidConfigurationError):
            parse_frames("0")


class TestSimulationConfig:
    """Verify the configuration record."""

    def test_defaults(self) -> None:
        """A bare config uses three frames, no references, and FIFO."""
        config = SimulationConfig()
        assert config.frames == DEFAULT_FRAMES
        assert config.references == ()
        assert config.policy is Policy.FIFO

    def test_references_normalised_to_tuple(self) -> None:
        """A list of references should be stored as a tuple."""
        config = SimulationConfig(references=[1, 2])  # type: ignore[arg-type]
        assert config.references == (1, 2)

    def test_policy_name_normalised(self) -> None:
        """A policy name should be stored as a Policy member."""
        config = SimulationConfig(policy="optimal")  # type: ignore[arg-type]
        assert config.policy is Policy.OPTIMAL

    def test_invalid_frames_rejected(self) -> None:
        """Constructing with zero frames should fail."""
        with pytest.raises(InvalidConfigurationError):
            SimulationConfig(frames=0)

    def test_from_text(self) -> None:
        """Typed values should be parsed into a config."""
        config = SimulationConfig.from_text(frames="4", references="7, 0 1", policy="clock")
        expected_frames = 4
        assert config.frames == expected_frames
        assert config.references == (7, 0, 1)
        assert config.policy is Policy.CLOCK

    def test_from_text_accepts_parsed_references(self) -> None:
        """from_text should also accept an already-parsed sequence."""
        config = SimulationConfig.from_text(references=[3, 4])
        assert config.references == (3, 4)

    def test_from_text_unknown_policy(self) -> None:
        """An unknown policy name should raise UnknownPolicyError."""
        with pytest.raises(UnknownPolicyError):
            SimulationConfig.from_text(policy="mru")

    def test_with_helpers_return_copies(self) -> None:
        """with_* helpers should leave the original untouched."""
        original = SimulationConfig()
        changed = original.with_frames(5).with_references("1 2").with_policy("lru")
        expected_frames = 5
        assert changed.frames == expected_frames
        assert changed.references == (1, 2)
        assert changed.policy is Policy.LRU
        assert original == SimulationConfig()

    def test_with_frames_validates(self) -> None:
        """with_frames should reject an invalid count."""
        with pytest.raises(InvalidConfigurationError):
            SimulationConfig().with_frames(0)
