"""Test module for the option sets in svgcore.consts

The tests are run using pytest.
"""

import pytest

from svgcore.consts import DEFAULT_FLATNESS_TOLERANCE, DEFAULT_MITER_LIMIT, FlattenOptions, StrokeStyle


class TestFlattenOptions:
    """Test class for FlattenOptions."""

    def test_defaults(self):
        """Adaptive flattening by default."""
        options = FlattenOptions()
        assert options.tolerance == DEFAULT_FLATNESS_TOLERANCE
        assert options.steps is None

    @pytest.mark.parametrize("kwargs", [{"tolerance": 0.0}, {"tolerance": -1.0}, {"steps": 0}])
    def test_invalid(self, kwargs):
        """Non-positive tolerance or step count is rejected."""
        with pytest.raises(ValueError):
            FlattenOptions(**kwargs)

    def test_dict_round_trip(self):
        """Test conversion to and from a dictionary."""
        options = FlattenOptions(tolerance=0.5, steps=8)
        assert FlattenOptions.from_dict(options.to_dict()) == options
        assert FlattenOptions.from_dict({}) == FlattenOptions()


class TestStrokeStyle:
    """Test class for StrokeStyle."""

    def test_derived_values(self):
        """Half width and miter distance."""
        style = StrokeStyle(width=3.0)
        assert style.miter_limit == DEFAULT_MITER_LIMIT
        assert style.half_width == 1.5
        assert style.miter_distance == 6.0

    def test_invalid_miter_limit(self):
        """A miter limit below 1 is rejected."""
        with pytest.raises(ValueError):
            StrokeStyle(miter_limit=0.99)

    def test_dict_round_trip(self):
        """Test conversion to and from a dictionary."""
        style = StrokeStyle(width=2.0, miter_limit=10.0)
        assert StrokeStyle.from_dict(style.to_dict()) == style
