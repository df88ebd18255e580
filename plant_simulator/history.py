"""
Plant History Recording

Keeps one row of plant state per tick so a display or scorer can read back
trajectories as numpy arrays.
"""

from typing import Dict, List, Tuple

import numpy as np

from .plant import Plant

CHANNELS: Tuple[str, ...] = (
    "tick",
    "reactor_temperature",
    "reactor_pressure",
    "reactor_water_volume",
    "reactor_steam_volume",
    "reactor_health",
    "rod_percentage",
    "condenser_temperature",
    "condenser_pressure",
    "condenser_water_volume",
    "condenser_steam_volume",
    "condenser_health",
)


class PlantHistory:
    """
    Per-tick record of a plant's reactor and condenser state.

    Example:
        history = PlantHistory(plant)
        for _ in range(10):
            plant.step()
            history.record()
        peak = history.peak("reactor_temperature")
    """

    def __init__(self, plant: Plant):
        if plant.reactor is None or plant.condenser is None:
            raise ValueError("PlantHistory needs a plant with a reactor and a condenser")
        self.plant = plant
        self._rows: List[Tuple[int, ...]] = []

    def __len__(self) -> int:
        return len(self._rows)

    def record(self) -> None:
        """Append the plant's current state."""
        r, c = self.plant.reactor, self.plant.condenser
        self._rows.append((
            self.plant.time_steps_used,
            r.temperature,
            r.pressure,
            r.water_volume,
            r.steam_volume,
            r.health,
            r.percentage_lowered,
            c.temperature,
            c.pressure,
            c.water_volume,
            c.steam_volume,
            c.health,
        ))

    def as_array(self) -> np.ndarray:
        """All recorded rows, shape (ticks, len(CHANNELS))."""
        if not self._rows:
            return np.zeros((0, len(CHANNELS)), dtype=np.int64)
        return np.array(self._rows, dtype=np.int64)

    def column(self, name: str) -> np.ndarray:
        """One channel over all recorded ticks."""
        if name not in CHANNELS:
            raise ValueError(f"Unknown history channel '{name}'")
        return self.as_array()[:, CHANNELS.index(name)]

    def peak(self, name: str) -> int:
        """Largest recorded value of a channel."""
        values = self.column(name)
        if values.size == 0:
            raise ValueError("No ticks recorded")
        return int(np.max(values))

    def summary(self) -> Dict[str, Dict[str, float]]:
        """Min, max and mean of every channel except the tick counter."""
        data = self.as_array()
        if data.shape[0] == 0:
            return {}
        return {
            name: {
                "min": float(np.min(data[:, i])),
                "max": float(np.max(data[:, i])),
                "mean": float(np.mean(data[:, i])),
            }
            for i, name in enumerate(CHANNELS)
            if name != "tick"
        }
