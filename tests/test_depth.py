"""Tests for depth specifier parsing and resolution."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from asciidoctor_chunker.depth import is_terminal, max_level_for, parse_depth
from asciidoctor_chunker.exceptions import ConfigError, DepthSpecError
from asciidoctor_chunker.schemas import DepthPolicy


class TestParseDepth:
    """Tests for parse_depth function."""

    def test_bare_number_sets_default(self) -> None:
        """A bare number becomes the default level."""
        policy = parse_depth("3")
        assert policy.default == 3
        assert policy.overrides == {}

    def test_default_is_one_without_bare_number(self) -> None:
        """Default stays 1 when only overrides are given."""
        policy = parse_depth("2:4")
        assert policy.default == 1
        assert policy.overrides == {2: 4}

    def test_ranges_expand_to_each_chapter(self) -> None:
        """A range sets the level for every chapter in it."""
        policy = parse_depth("2,1:1,3-5:3")
        assert policy.default == 2
        assert policy.overrides == {1: 1, 3: 3, 4: 3, 5: 3}

    def test_later_terms_override_earlier(self) -> None:
        """Later terms win over earlier ones."""
        policy = parse_depth("1-3:2,2:4,5,6")
        assert policy.default == 6
        assert policy.overrides == {1: 2, 2: 4, 3: 2}

    def test_whitespace_is_ignored(self) -> None:
        """Whitespace inside terms is stripped."""
        policy = parse_depth(" 2 , 1 - 2 : 3 ")
        assert policy.default == 2
        assert policy.overrides == {1: 3, 2: 3}

    def test_chapter_scoped_flag_is_kept(self) -> None:
        """The chapter_scoped flag is carried into the policy."""
        assert parse_depth("2", chapter_scoped=True).chapter_scoped

    @pytest.mark.parametrize("spec", ["", "a", "1:", ":2", "1-:2", "1:2:3", "2;3"])
    def test_rejects_malformed_terms(self, spec: str) -> None:
        """Malformed terms raise DepthSpecError."""
        with pytest.raises(DepthSpecError):
            parse_depth(spec)

    def test_rejects_backwards_range(self) -> None:
        """A range whose end precedes its start is rejected."""
        with pytest.raises(DepthSpecError, match="backwards"):
            parse_depth("5-3:2")

    def test_rejects_zero_levels(self) -> None:
        """Levels below 1 are rejected as configuration errors."""
        with pytest.raises(ConfigError):
            parse_depth("0")
        with pytest.raises(DepthSpecError):
            parse_depth("2:0")


class TestDepthPolicy:
    """Tests for DepthPolicy model."""

    def test_resolve_uses_override(self) -> None:
        """Returns the override when one exists for the key."""
        policy = DepthPolicy(default=1, overrides={2: 4})
        assert policy.resolve(2) == 4
        assert policy.resolve(3) == 1

    def test_is_frozen(self) -> None:
        """Policies cannot be mutated after construction."""
        policy = DepthPolicy()
        with pytest.raises(ValidationError):
            policy.default = 3  # type: ignore[misc]


class TestMaxLevelFor:
    """Tests for max_level_for function."""

    def test_flat_keying_uses_position(self) -> None:
        """By default the sibling position is the lookup key."""
        policy = DepthPolicy(default=1, overrides={2: 4})
        assert max_level_for(policy, chapter=5, position=2) == 4
        assert max_level_for(policy, chapter=2, position=1) == 1

    def test_chapter_scoped_uses_chapter(self) -> None:
        """With chapter scoping the chapter number is the lookup key."""
        policy = DepthPolicy(default=1, overrides={2: 4}, chapter_scoped=True)
        assert max_level_for(policy, chapter=2, position=1) == 4
        assert max_level_for(policy, chapter=5, position=2) == 1


class TestIsTerminal:
    """Tests for is_terminal function."""

    def test_flat_keying_requires_exact_level(self) -> None:
        """Only an exact level match is terminal under flat keying."""
        policy = DepthPolicy()
        assert is_terminal(policy, 2, 2)
        assert not is_terminal(policy, 3, 2)

    def test_chapter_scoped_stops_at_or_below_level(self) -> None:
        """Any level at or beyond the limit is terminal when chapter scoped."""
        policy = DepthPolicy(chapter_scoped=True)
        assert is_terminal(policy, 2, 2)
        assert is_terminal(policy, 3, 2)
        assert not is_terminal(policy, 1, 2)
