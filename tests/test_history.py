"""
Tests for the history module.
"""

import unittest
import numpy as np

from plant_simulator.history import CHANNELS, PlantHistory
from plant_simulator.plant import Plant, create_plant


class TestPlantHistory(unittest.TestCase):
    """Test per-tick recording."""

    def setUp(self):
        self.plant = create_plant("Homer", seed=0)
        self.history = PlantHistory(self.plant)

    def run_ticks(self, n):
        for _ in range(n):
            self.plant.step()
            self.history.record()

    def test_empty(self):
        """Test an empty history."""
        self.assertEqual(len(self.history), 0)
        self.assertEqual(self.history.as_array().shape, (0, len(CHANNELS)))
        self.assertEqual(self.history.summary(), {})
        with self.assertRaises(ValueError):
            self.history.peak("reactor_temperature")

    def test_record(self):
        """Test one row per tick."""
        self.run_ticks(3)
        self.assertEqual(len(self.history), 3)
        self.assertEqual(self.history.as_array().shape, (3, len(CHANNELS)))
        np.testing.assert_array_equal(self.history.column("tick"), [1, 2, 3])

    def test_reactor_temperature_trajectory(self):
        """Test the reactor heats by 100 per tick at full rod."""
        self.run_ticks(3)
        np.testing.assert_array_equal(
            self.history.column("reactor_temperature"), [100, 200, 300]
        )
        self.assertEqual(self.history.peak("reactor_temperature"), 300)

    def test_summary(self):
        """Test the summary covers every channel but the tick."""
        self.run_ticks(2)
        summary = self.history.summary()
        self.assertNotIn("tick", summary)
        self.assertEqual(set(summary), set(CHANNELS) - {"tick"})
        self.assertAlmostEqual(summary["reactor_temperature"]["mean"], 150.0)

    def test_unknown_channel(self):
        """Test unknown channels are rejected."""
        with self.assertRaises(ValueError):
            self.history.column("turbine_speed")

    def test_needs_reactor_and_condenser(self):
        """Test an incomplete plant cannot be recorded."""
        with self.assertRaises(ValueError):
            PlantHistory(Plant("Marge"))


if __name__ == "__main__":
    unittest.main()
