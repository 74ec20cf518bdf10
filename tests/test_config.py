"""Tests for BarnesHutConfig."""

import pytest

from gravity_tree.config import BarnesHutConfig
from gravity_tree.validation import InvalidConfigError


class TestConfigDefaults:
    """Tests for default configuration values."""

    def test_defaults(self):
        """Defaults match the documented values."""
        config = BarnesHutConfig()
        assert config.theta == 0.5
        assert config.gravitational_constant == 1.0
        assert config.min_quadrant_size == 1e-6
        assert config.bounding_margin == 1.1
        assert config.min_distance == 1e-3
        assert config.max_depth == 64

    def test_instances_independent(self):
        """Changing one config leaves fresh configs at the defaults."""
        config = BarnesHutConfig()
        config.theta = 0.9
        assert BarnesHutConfig().theta == 0.5


class TestConfigValidation:
    """Tests that invalid values fail fast."""

    @pytest.mark.parametrize("theta", [0.0, -1.0])
    def test_invalid_theta(self, theta):
        """Non-positive theta raises."""
        with pytest.raises(InvalidConfigError, match="theta"):
            BarnesHutConfig(theta=theta)

    def test_invalid_gravitational_constant(self):
        """Non-positive G raises."""
        with pytest.raises(InvalidConfigError, match="gravitational_constant"):
            BarnesHutConfig(gravitational_constant=0.0)

    def test_invalid_min_quadrant_size(self):
        """Non-positive minimum quadrant size raises."""
        with pytest.raises(InvalidConfigError, match="min_quadrant_size"):
            BarnesHutConfig(min_quadrant_size=-1.0)

    def test_invalid_margin(self):
        """Margin below one raises."""
        with pytest.raises(InvalidConfigError, match="bounding_margin"):
            BarnesHutConfig(bounding_margin=0.5)
        with pytest.raises(InvalidConfigError, match="bounding_margin"):
            BarnesHutConfig(bounding_margin=1.0)

    def test_invalid_min_distance(self):
        """Non-positive distance floor raises."""
        with pytest.raises(InvalidConfigError, match="min_distance"):
            BarnesHutConfig(min_distance=0.0)

    def test_invalid_max_depth(self):
        """max_depth below one raises."""
        with pytest.raises(InvalidConfigError, match="max_depth"):
            BarnesHutConfig(max_depth=0)

    def test_setter_validates(self):
        """Property setters validate too."""
        config = BarnesHutConfig()
        config.theta = 0.8
        assert config.theta == 0.8
        with pytest.raises(InvalidConfigError):
            config.theta = 0.0
        assert config.theta == 0.8


class TestConfigHelpers:
    """Tests for copy/as_dict/repr."""

    def test_copy_with_overrides(self):
        """copy() replaces only the given fields."""
        config = BarnesHutConfig(theta=0.3, gravitational_constant=2.0)
        other = config.copy(theta=0.9)
        assert other.theta == 0.9
        assert other.gravitational_constant == 2.0
        assert config.theta == 0.3

    def test_copy_validates(self):
        """copy() rejects invalid overrides."""
        with pytest.raises(InvalidConfigError):
            BarnesHutConfig().copy(min_distance=-1.0)

    def test_repr(self):
        """repr lists every field."""
        text = repr(BarnesHutConfig())
        assert text.startswith("BarnesHutConfig(")
        assert "theta=0.5" in text
        assert "max_depth=64" in text
