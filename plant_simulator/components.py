"""
Plant Component Base and Flow Routers

Every physical unit of the plant derives from PlantComponent, which carries
the bookkeeping shared by all of them: health, the operational and
pressurized flags, the random-failure propensity and the upstream
component feeding its input Flow.

Components are tagged with a ComponentKind at class level. The Plant files
each component under its tag when the component is added, so no caller
ever needs to inspect a component's type.
"""

import enum
import logging
from typing import Optional

import numpy as np

from .flow import Flow

logger = logging.getLogger(__name__)

DEFAULT_MAX_HEALTH = 100


class ComponentKind(enum.Enum):
    """Closed set of component variants a plant can hold."""

    REACTOR = "reactor"
    CONDENSER = "condenser"
    CONNECTOR_PIPE = "connector_pipe"
    VALVE = "valve"


class PlantComponent:
    """
    Base class for physical plant units.

    Attributes:
        name: Label used in logs and snapshots
        input: Upstream component supplying this component's input Flow
        health: Wear indicator in [0, max_health]
        operational: Whether the component takes part in plant function.
            Once False it stays False; only an external repair restores it.
        pressurized: Whether the component holds pressure
        random_failure_chance: Per-tick probability of a random failure.
            0 means the component never fails randomly.
    """

    kind: ComponentKind

    def __init__(
        self,
        name: Optional[str] = None,
        input: Optional["PlantComponent"] = None,
        random_failure_chance: float = 0.0,
        operational: bool = True,
        pressurized: bool = False,
        max_health: int = DEFAULT_MAX_HEALTH,
        rng: Optional[np.random.Generator] = None,
    ):
        if not 0.0 <= random_failure_chance <= 1.0:
            raise ValueError(
                f"random_failure_chance must be in [0, 1], got {random_failure_chance}"
            )
        self.name = name or self.kind.value
        self.input = input
        self.random_failure_chance = random_failure_chance
        self._operational = operational
        self._pressurized = pressurized
        self._max_health = max_health
        self._health = max_health
        self._rng = rng if rng is not None else np.random.default_rng()

    def __repr__(self) -> str:
        return f"{type(self).__name__}(name={self.name!r}, health={self._health})"

    @property
    def health(self) -> int:
        return self._health

    @property
    def max_health(self) -> int:
        return self._max_health

    @property
    def operational(self) -> bool:
        return self._operational

    @property
    def pressurized(self) -> bool:
        return self._pressurized

    @property
    def never_randomly_fails(self) -> bool:
        return self.random_failure_chance == 0.0

    @property
    def flow_out(self) -> Flow:
        """Flow leaving this component, consistent with its state this tick."""
        raise NotImplementedError

    def update_state(self, *args, **kwargs) -> None:
        """Advance the component's physical state by one tick."""
        raise NotImplementedError

    def check_failure(self) -> bool:
        """
        Check whether this component has failed.

        A component has failed when its health is exhausted, when it was
        already taken out of operation, or when its random-failure roll
        succeeds. Components that never fail randomly do not roll at all.

        Returns:
            True if the component has failed
        """
        if self._health <= 0 or not self._operational:
            return True
        if self.never_randomly_fails:
            return False
        if self._rng.random() < self.random_failure_chance:
            logger.info("%s failed randomly", self.name)
            self._operational = False
            return True
        return False

    def _damage(self, amount: int, fails_on_terminal_damage: bool) -> None:
        """
        Apply one damage penalty.

        Health never drops below 0. When fails_on_terminal_damage is set,
        reaching 0 takes the component out of operation for good.
        """
        self._health = max(0, self._health - amount)
        logger.warning("%s damaged: health now %d", self.name, self._health)
        if self._health <= 0 and fails_on_terminal_damage and self._operational:
            self._operational = False
            logger.info("%s is no longer operational", self.name)


class ConnectorPipe(PlantComponent):
    """
    Passive router forwarding its upstream Flow unchanged.

    A blocked or non-operational pipe passes no volume.
    """

    kind = ComponentKind.CONNECTOR_PIPE

    def __init__(self, name: Optional[str] = None, input: Optional[PlantComponent] = None,
                 random_failure_chance: float = 0.0, blocked: bool = False,
                 rng: Optional[np.random.Generator] = None):
        super().__init__(
            name=name,
            input=input,
            random_failure_chance=random_failure_chance,
            rng=rng,
        )
        self.blocked = blocked
        self._flow = Flow()

    @property
    def flow_out(self) -> Flow:
        return self._flow

    def _passes_flow(self) -> bool:
        return self._operational and not self.blocked

    def update_state(self) -> None:
        """Resolve this tick's Flow from the upstream component."""
        if self.input is None:
            self._flow = Flow()
            return
        upstream = self.input.flow_out
        self._flow = upstream if self._passes_flow() else upstream.blocked()


class Valve(ConnectorPipe):
    """Operator-controlled router; a closed valve passes no volume."""

    kind = ComponentKind.VALVE

    def __init__(self, name: Optional[str] = None, input: Optional[PlantComponent] = None,
                 random_failure_chance: float = 0.0, open: bool = True,
                 rng: Optional[np.random.Generator] = None):
        super().__init__(
            name=name,
            input=input,
            random_failure_chance=random_failure_chance,
            rng=rng,
        )
        self._open = open

    @property
    def is_open(self) -> bool:
        return self._open

    def set_open(self, open: bool) -> None:
        self._open = bool(open)

    def _passes_flow(self) -> bool:
        return super()._passes_flow() and self._open
