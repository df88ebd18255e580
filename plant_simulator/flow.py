"""
Flow Value Type

A Flow is the fluid moving between two connected components during one
tick. It is produced by a component's ``flow_out`` accessor after that
component has been updated for the tick, and consumed straight away by
the component downstream of it.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class Flow:
    """
    Snapshot of fluid leaving a component during a tick.

    Attributes:
        volume: Amount of fluid moving this tick
        temperature: Temperature of that fluid [C]
    """

    volume: int = 0
    temperature: int = 0

    def blocked(self) -> "Flow":
        """Same temperature, nothing moving."""
        return Flow(volume=0, temperature=self.temperature)

    def limited_to(self, max_volume: int) -> "Flow":
        """Flow with its volume capped at max_volume."""
        if self.volume <= max_volume:
            return self
        return Flow(volume=max_volume, temperature=self.temperature)
