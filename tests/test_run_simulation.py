"""
Tests for the example simulation driver.
"""

import unittest
import contextlib
import importlib.util
import io
import os

from plant_simulator.config import PlantConfig
from plant_simulator.constants import PlantConstants
from plant_simulator.plant import create_plant

EXAMPLE_PATH = os.path.join(
    os.path.dirname(os.path.dirname(os.path.abspath(__file__))),
    "examples",
    "run_simulation.py",
)


def load_example():
    spec = importlib.util.spec_from_file_location("run_simulation", EXAMPLE_PATH)
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)
    return module


class TestRunSimulation(unittest.TestCase):
    """Test the scripted scenarios."""

    def setUp(self):
        self.example = load_example()
        config = PlantConfig(plant=PlantConstants(pipe_random_failure_chance=1.0))
        self.plant = create_plant("Homer", config=config, seed=0)

    def run_quietly(self, func, *args):
        out = io.StringIO()
        with contextlib.redirect_stdout(out):
            history = func(*args)
        return history, out.getvalue()

    def test_first_tick_failures_reported(self):
        """Test failures on the first tick are printed."""
        _, output = self.run_quietly(
            self.example.run_steady_operation, self.plant, 3, 100, 0
        )
        self.assertIn("tick    1: reactor_outlet_pipe FAILED", output)
        self.assertIn("tick    1: condenser_inlet_pipe FAILED", output)

    def test_loss_of_feedwater_runs_fixed_ticks(self):
        """Test the scenario records exactly the requested ticks."""
        history, output = self.run_quietly(
            self.example.run_loss_of_feedwater, self.plant, 4
        )
        self.assertEqual(len(history), 4)
        self.assertEqual(self.plant.time_steps_used, 4)
        self.assertIn("tick    1:", output)


if __name__ == "__main__":
    unittest.main()
