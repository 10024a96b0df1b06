"""Tests for transformation helper functions."""

import pytest

from rtu_poller.domain.helpers.transformations import (
    INTERPRETERS,
    apply_mask,
    interpret_home_away,
    interpret_mask_12bit,
    interpret_raw,
)
from rtu_poller.domain.value_objects import OccupancyState


class TestApplyMask:
    """Test apply_mask function."""

    def test_mask_12bit(self):
        """Test masking to the low 12 bits."""
        assert apply_mask(0xFFFF, 0x0FFF) == 0x0FFF
        assert apply_mask(0xF123, 0x0FFF) == 0x0123

    def test_mask_single_bit(self):
        """Test masking to bit 0."""
        assert apply_mask(0x0002, 0x01) == 0
        assert apply_mask(0x0003, 0x01) == 1

    def test_zero_mask(self):
        """Test zero mask clears everything."""
        assert apply_mask(0xFFFF, 0) == 0


class TestInterpretRaw:
    """Test the raw interpreter."""

    @pytest.mark.parametrize("word", [0, 1, 42, 0x7FFF, 0x8000, 0xFFFF])
    def test_returns_word_unchanged(self, word):
        """Test raw values are reported as-is, unsigned."""
        assert interpret_raw([word]) == word

    def test_uses_first_word(self):
        """Test only the first word is used."""
        assert interpret_raw([7, 9]) == 7


class TestInterpretMask12Bit:
    """Test the 12-bit mask interpreter."""

    def test_all_ones(self):
        """Test 0xFFFF is reported as 0x0FFF."""
        assert interpret_mask_12bit([0xFFFF]) == 0x0FFF

    def test_upper_nibble_ignored(self):
        """Test the upper four bits never reach the value."""
        assert interpret_mask_12bit([0xA0FA]) == 250
        assert interpret_mask_12bit([0x00FA]) == 250

    @pytest.mark.parametrize("word", [0x0000, 0x0FFF, 0x1000, 0xF000, 0xFFFF])
    def test_result_bounded(self, word):
        """Test results always fit in 12 bits."""
        assert 0 <= interpret_mask_12bit([word]) <= 0x0FFF

    def test_no_scaling(self):
        """Test no scaling factor is applied."""
        assert interpret_mask_12bit([215]) == 215


class TestInterpretHomeAway:
    """Test the home/away interpreter."""

    def test_zero_is_home(self):
        """Test 0 maps to home."""
        assert interpret_home_away([0]) is OccupancyState.HOME

    def test_one_is_away(self):
        """Test 1 maps to away."""
        assert interpret_home_away([1]) is OccupancyState.AWAY

    @pytest.mark.parametrize("word", [0x0003, 0x00FF, 0x8001, 0xFFFF])
    def test_odd_words_are_away(self, word):
        """Test the mask is applied before the comparison."""
        assert interpret_home_away([word]) is OccupancyState.AWAY

    @pytest.mark.parametrize("word", [0x0002, 0x0100, 0x8000, 0xFFFE])
    def test_even_words_are_home(self, word):
        """Test upper bits never make a reading away."""
        assert interpret_home_away([word]) is OccupancyState.HOME

    def test_string_form(self):
        """Test the reported value prints as a plain word."""
        assert str(interpret_home_away([0])) == "home"
        assert str(interpret_home_away([1])) == "away"
        assert interpret_home_away([1]) == "away"


class TestInterpreterRegistry:
    """Test the name to interpreter registry."""

    def test_known_names(self):
        """Test the registry exposes the built-in interpreters."""
        assert INTERPRETERS == {
            "raw": interpret_raw,
            "mask_12bit": interpret_mask_12bit,
            "home_away": interpret_home_away,
        }

    def test_all_interpreters_are_total(self):
        """Test every interpreter accepts the full 16-bit range edges."""
        for interpret in INTERPRETERS.values():
            interpret([0x0000])
            interpret([0xFFFF])
