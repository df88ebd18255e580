"""
Condenser Model

The condenser is the flow sink of the plant. It takes in the steam routed
from the reactor, is heated by it and cooled by a coolant loop that is
always running at full, condenses steam back into water and derives its
pressure from the steam it still holds.

The model is not physically accurate, but it gives a reasonable picture of
steam condensing.
"""

import logging
from dataclasses import dataclass
from typing import Optional

import numpy as np

from .components import ComponentKind, PlantComponent
from .constants import CondenserConstants
from .flow import Flow
from .utils import ceil_int, round_half_up, truncating_div

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CondenserTickInput:
    """
    Everything fed into or drawn from the condenser for one tick.

    Attributes:
        steam_in: Steam routed in this tick; also the amount that counts as
            freshly arrived for heating
        water_pumped_out: Water drawn off by the feed pump this tick
    """

    steam_in: int = 0
    water_pumped_out: int = 0

    def __post_init__(self):
        if self.steam_in < 0:
            raise ValueError(f"steam_in must be non-negative, got {self.steam_in}")
        if self.water_pumped_out < 0:
            raise ValueError(
                f"water_pumped_out must be non-negative, got {self.water_pumped_out}"
            )


class Condenser(PlantComponent):
    """
    Steam-to-water heat exchanger.

    The per-tick update runs four steps in a fixed order:

    1. update the temperature from inbound steam heating minus coolant cooldown
    2. condense steam into water, conserving mass exactly
    3. recompute the pressure from the remaining steam
    4. apply damage for over-temperature and over-pressure

    Attributes:
        constants: CondenserConstants in force for this condenser
        temperature: Condenser temperature [C]
        pressure: Condenser pressure, a pure function of steam volume
        water_volume: Water held in the condenser
        steam_volume: Steam held in the condenser
        steam_in: Steam routed in during the last tick
    """

    kind = ComponentKind.CONDENSER

    def __init__(
        self,
        constants: Optional[CondenserConstants] = None,
        name: Optional[str] = None,
        input: Optional[PlantComponent] = None,
        rng: Optional[np.random.Generator] = None,
    ):
        self.constants = constants or CondenserConstants()
        c = self.constants
        super().__init__(
            name=name,
            input=input,
            random_failure_chance=c.random_failure_chance,
            operational=True,
            pressurized=True,
            max_health=c.max_health,
            rng=rng,
        )
        self.temperature = c.default_temperature
        self.pressure = c.default_pressure
        self.water_volume = c.default_water_volume
        self.steam_volume = c.default_steam_volume
        self.steam_in = 0

    @property
    def max_temperature(self) -> int:
        return self.constants.max_temperature

    @property
    def max_pressure(self) -> int:
        return self.constants.max_pressure

    @property
    def flow_out(self) -> Flow:
        """Water available to the feed pump."""
        return Flow(volume=self.water_volume, temperature=self.temperature)

    def inbound_flow(self) -> Flow:
        """
        Flow arriving from upstream this tick.

        Without an upstream component nothing arrives, at the condenser's
        own temperature.
        """
        if self.input is None:
            return Flow(volume=0, temperature=self.temperature)
        return self.input.flow_out

    def update_state(self, inputs: Optional[CondenserTickInput] = None) -> None:
        """
        Advance the condenser by one tick.

        Must run after every component upstream of it has been updated for
        the same tick.

        Args:
            inputs: Volumes routed in and drawn off this tick
        """
        inputs = inputs or CondenserTickInput()
        if inputs.water_pumped_out > self.water_volume:
            raise ValueError(
                f"{self.name}: cannot pump out {inputs.water_pumped_out} water, "
                f"{self.water_volume} available"
            )
        self.steam_in = inputs.steam_in
        self.steam_volume += inputs.steam_in
        self.water_volume -= inputs.water_pumped_out

        self.update_temperature()
        self.condense_steam()
        self.update_pressure()
        self.check_if_damaging()
        logger.debug(
            "%s: T=%d P=%d water=%d steam=%d health=%d",
            self.name, self.temperature, self.pressure,
            self.water_volume, self.steam_volume, self._health,
        )

    def update_temperature(self) -> None:
        steam_temperature = self.inbound_flow().temperature
        change_in_temp = self.heating(steam_temperature, self.steam_in) - self.cooldown()
        self.temperature += change_in_temp

    def heating(self, steam_temperature: int, steam_volume_in: int) -> int:
        """
        Temperature increase from the steam that came in this tick.

        The temperature difference is scaled by the share of held steam that
        is freshly arrived. With truncate_heating_fraction set, the share of
        older steam is an integer division, so it is 0 whenever any steam is
        old and the full temperature difference is applied.

        Args:
            steam_temperature: Temperature of the inbound steam
            steam_volume_in: Steam routed in this tick

        Returns:
            Temperature increase [C]
        """
        temp_diff = steam_temperature - self.temperature
        if self.steam_volume < 1:
            return 0
        if steam_volume_in == 0:
            return 0
        old_steam = self.steam_volume - steam_volume_in
        if self.constants.truncate_heating_fraction:
            return temp_diff * (1 - truncating_div(old_steam, self.steam_volume))
        return round_half_up(temp_diff * (1 - old_steam / self.steam_volume))

    def cooldown(self) -> int:
        """
        Temperature decrease from the coolant loop.

        The loop is always on full, but never cools the condenser below the
        coolant temperature.
        """
        c = self.constants
        potential_new_temp = self.temperature - c.cooldown_per_step
        if potential_new_temp > c.coolant_temperature:
            return c.cooldown_per_step
        return self.temperature - c.coolant_temperature

    def condense_steam(self) -> None:
        """
        Turn steam back into water.

        Water created is rounded up from the capped steam amount, then the
        steam removed is recomputed from it so water gained and steam lost
        balance exactly.
        """
        c = self.constants
        if self.temperature < c.max_temperature:
            steam_condensed = ceil_int((c.max_temperature - self.temperature) * c.cond_multiplier)
        else:
            steam_condensed = 0

        if steam_condensed > self.steam_volume:
            steam_condensed = self.steam_volume
        water_created = ceil_int(steam_condensed / c.water_steam_ratio)
        steam_condensed = water_created * c.water_steam_ratio

        self.steam_volume -= steam_condensed
        self.water_volume += water_created

    def update_pressure(self) -> None:
        """Pressure follows the steam volume; it does not accumulate."""
        self.pressure = round_half_up(self.steam_volume * self.constants.vol_to_pressure_multiplier)

    def check_if_damaging(self) -> None:
        """Each exceeded limit costs one damage penalty."""
        c = self.constants
        if self.temperature > c.max_temperature:
            self._damage(c.health_change_when_damaging, c.fails_on_terminal_damage)
        if self.pressure > c.max_pressure:
            self._damage(c.health_change_when_damaging, c.fails_on_terminal_damage)
