"""
Plant Constants for the Operator-Training Simulator

This module holds the tunable numbers of every plant component. Each
component reads its constants from one frozen dataclass so that a plant
variant can be built by swapping a configuration, never by editing code.

The arithmetic these numbers feed is a deliberately simplified model of a
boiling water plant, not a thermodynamic one.
"""

from dataclasses import dataclass


def _check_non_negative(owner: str, **values: float) -> None:
    for name, value in values.items():
        if value < 0:
            raise ValueError(f"{owner}: {name} must be non-negative, got {value}")


def _check_probability(owner: str, value: float) -> None:
    if not 0.0 <= value <= 1.0:
        raise ValueError(
            f"{owner}: random_failure_chance must be in [0, 1], got {value}"
        )


@dataclass(frozen=True)
class ReactorConstants:
    """Constants governing the reactor step functions."""

    # Initial state
    default_temperature: int = 0
    default_pressure: int = 0
    default_water_volume: int = 8000
    default_steam_volume: int = 0
    default_rod_percentage: int = 100

    # 2865C is the melting point of uranium oxide
    max_temperature: int = 2865
    max_pressure: int = 500
    max_health: int = 100
    health_change_when_damaging: int = 10

    # Maximum temperature increase in one step [C]
    max_heating_per_step: int = 100
    min_safe_water_volume: int = 2000
    unsafe_heating_multiplier: int = 2

    # 1:2 water to steam
    water_steam_ratio: int = 2
    boiling_point: int = 100

    # Temperature to water evaporated
    evap_multiplier: float = 0.5
    # Water pumped in to temperature decrease
    cool_multiplier: float = 0.1

    random_failure_chance: float = 0.0
    fails_on_terminal_damage: bool = True

    def __post_init__(self):
        _check_non_negative(
            "ReactorConstants",
            default_temperature=self.default_temperature,
            default_water_volume=self.default_water_volume,
            default_steam_volume=self.default_steam_volume,
            max_heating_per_step=self.max_heating_per_step,
            min_safe_water_volume=self.min_safe_water_volume,
            unsafe_heating_multiplier=self.unsafe_heating_multiplier,
            health_change_when_damaging=self.health_change_when_damaging,
            evap_multiplier=self.evap_multiplier,
            cool_multiplier=self.cool_multiplier,
        )
        if self.max_health <= 0:
            raise ValueError(
                f"ReactorConstants: max_health must be positive, got {self.max_health}"
            )
        if self.water_steam_ratio < 1:
            raise ValueError(
                "ReactorConstants: water_steam_ratio must be at least 1, "
                f"got {self.water_steam_ratio}"
            )
        if not 0 <= self.default_rod_percentage <= 100:
            raise ValueError(
                "ReactorConstants: default_rod_percentage not in range [0..100], "
                f"got {self.default_rod_percentage}"
            )
        _check_probability("ReactorConstants", self.random_failure_chance)


@dataclass(frozen=True)
class CondenserConstants:
    """
    Constants governing the condenser step functions.

    Two behaviours are switchable:

    - fails_on_terminal_damage: whether reaching zero health takes the
      condenser out of operation. The standard condenser keeps running
      regardless of its health.
    - truncate_heating_fraction: whether the "fraction of freshly arrived
      steam" term of the heating calculation uses integer division. With
      truncation the fraction collapses to 0 whenever the inflow is smaller
      than the steam already held.
    """

    default_temperature: int = 50
    default_pressure: int = 0
    default_water_volume: int = 2000
    default_steam_volume: int = 0

    max_temperature: int = 2000
    max_pressure: int = 2000
    max_health: int = 100
    health_change_when_damaging: int = 10

    # Temperature of the coolant coming in
    coolant_temperature: int = 20
    # The coolant pump is always on full
    cooldown_per_step: int = 200

    water_steam_ratio: int = 2
    # Temperature to steam condensed
    cond_multiplier: float = 0.8
    vol_to_pressure_multiplier: float = 0.15

    random_failure_chance: float = 0.0
    fails_on_terminal_damage: bool = False
    truncate_heating_fraction: bool = True

    def __post_init__(self):
        _check_non_negative(
            "CondenserConstants",
            default_temperature=self.default_temperature,
            default_water_volume=self.default_water_volume,
            default_steam_volume=self.default_steam_volume,
            coolant_temperature=self.coolant_temperature,
            cooldown_per_step=self.cooldown_per_step,
            health_change_when_damaging=self.health_change_when_damaging,
            cond_multiplier=self.cond_multiplier,
            vol_to_pressure_multiplier=self.vol_to_pressure_multiplier,
        )
        if self.max_health <= 0:
            raise ValueError(
                f"CondenserConstants: max_health must be positive, got {self.max_health}"
            )
        if self.water_steam_ratio < 1:
            raise ValueError(
                "CondenserConstants: water_steam_ratio must be at least 1, "
                f"got {self.water_steam_ratio}"
            )
        _check_probability("CondenserConstants", self.random_failure_chance)


@dataclass(frozen=True)
class PlantConstants:
    """Plant-wide limits."""

    # Maximum steam moved from reactor to condenser in one step
    max_steam_flow_rate: int = 800
    pipe_random_failure_chance: float = 0.0
    valve_random_failure_chance: float = 0.0

    def __post_init__(self):
        _check_non_negative(
            "PlantConstants",
            max_steam_flow_rate=self.max_steam_flow_rate,
        )
        _check_probability("PlantConstants", self.pipe_random_failure_chance)
        _check_probability("PlantConstants", self.valve_random_failure_chance)
