"""
Reactor Model

The reactor is the flow source of the plant. Each tick it heats up
according to how far its control rod is lowered, is cooled by the water
pumped into it, takes damage when running too hot or at too high a
pressure, and boils water off into steam.
"""

import logging
from dataclasses import dataclass
from typing import Optional

import numpy as np

from .components import ComponentKind, PlantComponent
from .constants import ReactorConstants
from .flow import Flow
from .utils import is_whole_number, percentage_to_fraction, round_half_up

logger = logging.getLogger(__name__)


class ControlRod:
    """
    Control rod owned by a single Reactor.

    0% lowered means fully withdrawn, 100% means fully inserted and
    maximum heating.
    """

    def __init__(self, percentage_lowered: int = 100):
        self._percentage_lowered = 0
        self.set_percentage_lowered(percentage_lowered)

    @property
    def percentage_lowered(self) -> int:
        return self._percentage_lowered

    def set_percentage_lowered(self, percentage_lowered: int) -> None:
        """
        Set the insertion percentage.

        Raises:
            ValueError: if percentage_lowered is not an integer or is outside
                [0, 100]. The stored value is left unchanged.
        """
        if not is_whole_number(percentage_lowered):
            raise ValueError(
                f"ControlRod: percentage_lowered must be an integer, got {percentage_lowered!r}"
            )
        if percentage_lowered < 0 or percentage_lowered > 100:
            raise ValueError(
                "ControlRod: percentage_lowered not in range [0..100], "
                f"got {percentage_lowered}"
            )
        self._percentage_lowered = int(percentage_lowered)


@dataclass(frozen=True)
class ReactorTickInput:
    """
    Everything fed into the reactor for one tick.

    Attributes:
        water_pumped_in: Water added this tick. It is the only source of
            the cooling effect, and only counts for the tick it arrives in.
    """

    water_pumped_in: int = 0

    def __post_init__(self):
        if self.water_pumped_in < 0:
            raise ValueError(
                f"water_pumped_in must be non-negative, got {self.water_pumped_in}"
            )


class Reactor(PlantComponent):
    """
    Heat source of the plant.

    The per-tick update runs three steps in a fixed order:

    1. update the temperature from rod heating minus water cooldown
    2. apply damage for over-temperature and over-pressure
    3. evaporate water into steam when above boiling point

    Attributes:
        constants: ReactorConstants in force for this reactor
        temperature: Core temperature [C]
        pressure: Core pressure
        water_volume: Water held in the reactor
        steam_volume: Steam held in the reactor
    """

    kind = ComponentKind.REACTOR

    def __init__(
        self,
        constants: Optional[ReactorConstants] = None,
        name: Optional[str] = None,
        rng: Optional[np.random.Generator] = None,
    ):
        self.constants = constants or ReactorConstants()
        c = self.constants
        super().__init__(
            name=name,
            random_failure_chance=c.random_failure_chance,
            operational=True,
            pressurized=True,
            max_health=c.max_health,
            rng=rng,
        )
        self._control_rod = ControlRod(c.default_rod_percentage)
        self.temperature = c.default_temperature
        self.pressure = c.default_pressure
        self.water_volume = c.default_water_volume
        self.steam_volume = c.default_steam_volume

    # ---------------- Accessors ----------------

    @property
    def max_temperature(self) -> int:
        return self.constants.max_temperature

    @property
    def max_pressure(self) -> int:
        return self.constants.max_pressure

    @property
    def min_safe_water_volume(self) -> int:
        return self.constants.min_safe_water_volume

    @property
    def percentage_lowered(self) -> int:
        return self._control_rod.percentage_lowered

    def set_percentage_lowered(self, percentage_lowered: int) -> None:
        self._control_rod.set_percentage_lowered(percentage_lowered)

    @property
    def flow_out(self) -> Flow:
        return Flow(volume=self.steam_volume, temperature=self.temperature)

    def release_steam(self, amount: int) -> None:
        """
        Remove steam that left through the reactor outlet this tick.

        Args:
            amount: Steam leaving the reactor, in [0, steam_volume]
        """
        if amount < 0 or amount > self.steam_volume:
            raise ValueError(
                f"{self.name}: cannot release {amount} steam, "
                f"{self.steam_volume} available"
            )
        self.steam_volume -= amount

    # ---------------- Step functions ----------------

    def update_state(self, inputs: Optional[ReactorTickInput] = None) -> None:
        """
        Advance the reactor by one tick.

        Args:
            inputs: Volumes fed in this tick. None means nothing was pumped.
        """
        inputs = inputs or ReactorTickInput()
        self.water_volume += inputs.water_pumped_in
        self.update_temperature(inputs.water_pumped_in)
        self.check_if_damaging()
        self.evaporate_water()
        logger.debug(
            "%s: T=%d P=%d water=%d steam=%d health=%d",
            self.name, self.temperature, self.pressure,
            self.water_volume, self.steam_volume, self._health,
        )

    def update_temperature(self, water_pumped_in: int = 0) -> None:
        change_in_temp = (
            self.heating(self.percentage_lowered) - self.cooldown(water_pumped_in)
        )
        self.temperature += change_in_temp

    def heating(self, lowered_percentage: int) -> int:
        """
        Temperature increase for this tick from the control rod.

        With no more than the minimum safe amount of water in the core, the
        maximum heating per step is multiplied by unsafe_heating_multiplier
        before scaling by the rod position.

        Args:
            lowered_percentage: Rod insertion, already validated to [0, 100]

        Returns:
            Temperature increase [C]
        """
        c = self.constants
        max_heating = c.max_heating_per_step
        if self.water_volume <= c.min_safe_water_volume:
            max_heating *= c.unsafe_heating_multiplier
        return round_half_up(max_heating * percentage_to_fraction(lowered_percentage))

    def cooldown(self, pumped_in: int) -> int:
        """
        Temperature decrease for this tick.

        Args:
            pumped_in: Water pumped in during this tick only

        Returns:
            Temperature decrease [C]
        """
        return round_half_up(pumped_in * self.constants.cool_multiplier)

    def evaporate_water(self) -> None:
        """Boil water off into steam; nothing happens at or below boiling point."""
        c = self.constants
        if self.temperature <= c.boiling_point:
            return
        water_evaporated = round_half_up(self.temperature * c.evap_multiplier)
        steam_created = water_evaporated * c.water_steam_ratio
        self.water_volume -= water_evaporated
        self.steam_volume += steam_created

    def check_if_damaging(self) -> None:
        """Each exceeded limit costs one damage penalty."""
        c = self.constants
        if self.temperature > c.max_temperature:
            self._damage(c.health_change_when_damaging, c.fails_on_terminal_damage)
        if self.pressure > c.max_pressure:
            self._damage(c.health_change_when_damaging, c.fails_on_terminal_damage)
