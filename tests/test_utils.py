"""
Tests for the utils module.
"""

import unittest

from plant_simulator.utils import (
    ceil_int,
    clamp,
    percentage_to_fraction,
    round_half_up,
    truncating_div,
)


class TestRounding(unittest.TestCase):
    """Test integer conversions."""

    def test_round_half_up(self):
        """Test halves round towards positive infinity."""
        self.assertEqual(round_half_up(0.5), 1)
        self.assertEqual(round_half_up(2.5), 3)
        self.assertEqual(round_half_up(-0.5), 0)
        self.assertEqual(round_half_up(-1.5), -1)
        self.assertEqual(round_half_up(1.4), 1)
        self.assertEqual(round_half_up(100), 100)

    def test_ceil_int(self):
        """Test ceiling."""
        self.assertEqual(ceil_int(1.2), 2)
        self.assertEqual(ceil_int(3), 3)
        self.assertEqual(ceil_int(-0.5), 0)

    def test_truncating_div(self):
        """Test division rounds towards zero."""
        self.assertEqual(truncating_div(7, 2), 3)
        self.assertEqual(truncating_div(-7, 2), -3)
        self.assertEqual(truncating_div(-1, 2), 0)
        self.assertEqual(truncating_div(300, 400), 0)
        self.assertEqual(truncating_div(400, 400), 1)

    def test_truncating_div_by_zero(self):
        """Test dividing by zero raises."""
        with self.assertRaises(ZeroDivisionError):
            truncating_div(1, 0)


class TestHelpers(unittest.TestCase):
    """Test small helpers."""

    def test_percentage_to_fraction(self):
        """Test percentage conversion keeps fractions."""
        self.assertAlmostEqual(percentage_to_fraction(50), 0.5)
        self.assertAlmostEqual(percentage_to_fraction(100), 1.0)
        self.assertAlmostEqual(percentage_to_fraction(0), 0.0)

    def test_clamp(self):
        """Test clamping."""
        self.assertEqual(clamp(5, 0, 10), 5)
        self.assertEqual(clamp(-5, 0, 10), 0)
        self.assertEqual(clamp(50, 0, 10), 10)


if __name__ == "__main__":
    unittest.main()
