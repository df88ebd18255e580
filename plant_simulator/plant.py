"""
Plant Orchestration

The Plant owns every component and advances them once per tick in flow
order: the reactor first, then the routing components, then the condenser.
Each consumer therefore reads its producer's output for the current tick.

Components are filed under their ComponentKind tag as they are added, so
the typed views are always current.
"""

import logging
from dataclasses import dataclass
from typing import Any, Dict, Iterable, List, Optional

import numpy as np

from .components import ComponentKind, ConnectorPipe, PlantComponent, Valve
from .condenser import Condenser, CondenserTickInput
from .config import PlantConfig
from .reactor import Reactor, ReactorTickInput
from .utils import clamp, is_whole_number

logger = logging.getLogger(__name__)

ROUTING_KINDS = (ComponentKind.CONNECTOR_PIPE, ComponentKind.VALVE)


@dataclass(frozen=True)
class TickInputs:
    """
    Operator commands for one tick.

    Attributes:
        control_rod_percentage: New rod insertion, or None to leave it
        water_pumped_in: Water requested from the condenser into the reactor.
            More than the condenser holds is clamped to what it holds.
    """

    control_rod_percentage: Optional[int] = None
    water_pumped_in: int = 0

    def validate(self) -> None:
        p = self.control_rod_percentage
        if p is not None and not is_whole_number(p):
            raise ValueError(f"control_rod_percentage must be an integer, got {p!r}")
        if p is not None and (p < 0 or p > 100):
            raise ValueError(
                f"control_rod_percentage not in range [0..100], got {p}"
            )
        if self.water_pumped_in < 0:
            raise ValueError(
                f"water_pumped_in must be non-negative, got {self.water_pumped_in}"
            )


class Plant:
    """
    A running plant: its components plus the game session bookkeeping.

    Attributes:
        operator_name: Name of the player operating the plant
        score: Current score, maintained by the external scorer
        is_paused: A paused plant does not advance
        being_repaired: Components in repair, maintained by the external
            repair scheduler
        high_scores: High-score table, maintained externally
        max_steam_flow_rate: Most steam moved to the condenser per tick
    """

    def __init__(
        self,
        operator_name: str,
        components: Iterable[PlantComponent] = (),
        config: Optional[PlantConfig] = None,
    ):
        self.config = config or PlantConfig()
        self.operator_name = operator_name
        self.score = 0
        self.is_paused = False
        self.being_repaired: List[PlantComponent] = []
        self.high_scores: List[Any] = []
        self.max_steam_flow_rate = self.config.plant.max_steam_flow_rate

        self._time_steps_used = 0
        self._components: List[PlantComponent] = []
        self._failed: List[PlantComponent] = []
        self._by_kind: Dict[ComponentKind, List[PlantComponent]] = {
            kind: [] for kind in ComponentKind
        }

        for component in components:
            self.add_component(component)
        logger.info(
            "Plant for %s built with %d components", operator_name, len(self._components)
        )

    # ---------------- Components ----------------

    def add_component(self, component: PlantComponent) -> None:
        """
        Add a component and file it under its kind.

        Raises:
            ValueError: if the component is already in the plant, or it is a
                second reactor or condenser
        """
        if component in self._components:
            raise ValueError(f"{component.name} is already part of the plant")
        if component.kind in (ComponentKind.REACTOR, ComponentKind.CONDENSER):
            if self._by_kind[component.kind]:
                raise ValueError(f"A plant holds at most one {component.kind.value}")
        self._components.append(component)
        self._by_kind[component.kind].append(component)

    @property
    def components(self) -> List[PlantComponent]:
        return list(self._components)

    @property
    def reactor(self) -> Optional[Reactor]:
        found = self._by_kind[ComponentKind.REACTOR]
        return found[0] if found else None

    @property
    def condenser(self) -> Optional[Condenser]:
        found = self._by_kind[ComponentKind.CONDENSER]
        return found[0] if found else None

    @property
    def valves(self) -> List[Valve]:
        return list(self._by_kind[ComponentKind.VALVE])

    @property
    def connector_pipes(self) -> List[ConnectorPipe]:
        return list(self._by_kind[ComponentKind.CONNECTOR_PIPE])

    def routing_order(self) -> List[PlantComponent]:
        """
        Pipes and valves ordered so each comes after the router feeding it.

        Raises:
            ValueError: if the routers' inputs form a cycle
        """
        pending = [c for c in self._components if c.kind in ROUTING_KINDS]
        ordered: List[PlantComponent] = []
        while pending:
            ready = [
                c for c in pending
                if c.input is None or c.input not in pending
            ]
            if not ready:
                names = ", ".join(c.name for c in pending)
                raise ValueError(f"Routing components form a cycle: {names}")
            ordered.extend(ready)
            pending = [c for c in pending if c not in ready]
        return ordered

    # ---------------- Failures ----------------

    @property
    def failed_components(self) -> List[PlantComponent]:
        return list(self._failed)

    def add_failed_component(self, failed_component: PlantComponent) -> bool:
        """
        Register a failed component unless it is already registered.

        Returns:
            True if the component was newly registered
        """
        if failed_component in self._failed:
            return False
        self._failed.append(failed_component)
        logger.info("%s registered as failed", failed_component.name)
        return True

    # ---------------- Time ----------------

    @property
    def time_steps_used(self) -> int:
        return self._time_steps_used

    def update_time_steps_used(self, n: int) -> None:
        """Advance the step counter; non-positive increments are ignored."""
        if n > 0:
            self._time_steps_used += n

    # ---------------- Tick ----------------

    def step(self, inputs: Optional[TickInputs] = None) -> List[PlantComponent]:
        """
        Advance every component by one tick.

        Inputs are validated before any component is touched, so a rejected
        command leaves the plant exactly as it was.

        Args:
            inputs: Operator commands for this tick

        Returns:
            Components newly registered as failed during this tick

        Raises:
            ValueError: on invalid inputs, or a plant without a reactor or
                condenser
        """
        inputs = inputs or TickInputs()
        inputs.validate()
        if self.is_paused:
            return []
        reactor, condenser = self.reactor, self.condenser
        if reactor is None or condenser is None:
            raise ValueError("A plant needs a reactor and a condenser to run")
        routers = self.routing_order()

        if inputs.control_rod_percentage is not None:
            reactor.set_percentage_lowered(inputs.control_rod_percentage)

        water = clamp(inputs.water_pumped_in, 0, condenser.water_volume)
        reactor.update_state(ReactorTickInput(water_pumped_in=water))

        for component in routers:
            component.update_state()

        inbound = condenser.inbound_flow().limited_to(self.max_steam_flow_rate)
        steam = clamp(inbound.volume, 0, reactor.steam_volume)
        reactor.release_steam(steam)
        condenser.update_state(CondenserTickInput(steam_in=steam, water_pumped_out=water))

        newly_failed = [
            component
            for component in self._components
            if component.check_failure() and self.add_failed_component(component)
        ]
        self.update_time_steps_used(1)
        logger.debug("Tick %d complete", self._time_steps_used)
        return newly_failed

    def snapshot(self) -> Dict[str, Any]:
        """Read-only view of the plant state for display and scoring."""
        state: Dict[str, Any] = {
            "operator_name": self.operator_name,
            "time_steps_used": self._time_steps_used,
            "score": self.score,
            "failed_components": [c.name for c in self._failed],
        }
        reactor = self.reactor
        if reactor is not None:
            state["reactor"] = {
                "temperature": reactor.temperature,
                "pressure": reactor.pressure,
                "water_volume": reactor.water_volume,
                "steam_volume": reactor.steam_volume,
                "health": reactor.health,
                "operational": reactor.operational,
                "pressurized": reactor.pressurized,
                "percentage_lowered": reactor.percentage_lowered,
            }
        condenser = self.condenser
        if condenser is not None:
            state["condenser"] = {
                "temperature": condenser.temperature,
                "pressure": condenser.pressure,
                "water_volume": condenser.water_volume,
                "steam_volume": condenser.steam_volume,
                "health": condenser.health,
                "operational": condenser.operational,
                "pressurized": condenser.pressurized,
            }
        state["valves"] = {v.name: v.is_open for v in self.valves}
        return state


def create_plant(
    operator_name: str,
    config: Optional[PlantConfig] = None,
    seed: Optional[int] = None,
) -> Plant:
    """
    Factory function for the standard plant layout.

    reactor -> pipe -> valve -> pipe -> condenser

    Args:
        operator_name: Name of the player
        config: Constants to build with; defaults if None
        seed: Seed for the random-failure generator shared by all components

    Returns:
        Configured Plant
    """
    config = config or PlantConfig()
    rng = np.random.default_rng(seed)

    reactor = Reactor(config.reactor, rng=rng)
    pipe_in = ConnectorPipe(
        name="reactor_outlet_pipe", input=reactor,
        random_failure_chance=config.plant.pipe_random_failure_chance, rng=rng,
    )
    valve = Valve(
        name="steam_valve", input=pipe_in,
        random_failure_chance=config.plant.valve_random_failure_chance, rng=rng,
    )
    pipe_out = ConnectorPipe(
        name="condenser_inlet_pipe", input=valve,
        random_failure_chance=config.plant.pipe_random_failure_chance, rng=rng,
    )
    condenser = Condenser(config.condenser, input=pipe_out, rng=rng)

    return Plant(
        operator_name,
        components=[reactor, pipe_in, valve, pipe_out, condenser],
        config=config,
    )
