"""
Plant Configuration

Groups the constants of every component into one PlantConfig and reads it
from YAML. A configuration file only needs the values it changes:

    reactor:
      max_temperature: 3000
    condenser:
      fails_on_terminal_damage: true
    plant:
      max_steam_flow_rate: 600
"""

from dataclasses import dataclass, field, fields
from typing import Any, Dict, Mapping, Optional, Type, TypeVar
import os

import yaml

from .constants import CondenserConstants, PlantConstants, ReactorConstants

T = TypeVar("T")


@dataclass(frozen=True)
class PlantConfig:
    """Complete set of constants for one plant."""

    reactor: ReactorConstants = field(default_factory=ReactorConstants)
    condenser: CondenserConstants = field(default_factory=CondenserConstants)
    plant: PlantConstants = field(default_factory=PlantConstants)

    def to_dict(self) -> Dict[str, Dict[str, Any]]:
        return {
            section.name: {
                f.name: getattr(getattr(self, section.name), f.name)
                for f in fields(getattr(self, section.name))
            }
            for section in fields(self)
        }


def _build_section(cls: Type[T], section: str, values: Optional[Mapping[str, Any]]) -> T:
    if values is None:
        return cls()
    if not isinstance(values, Mapping):
        raise ValueError(f"Config section '{section}' must be a mapping")
    known = {f.name for f in fields(cls)}
    unknown = sorted(set(values) - known)
    if unknown:
        raise ValueError(f"Unknown key(s) in config section '{section}': {', '.join(unknown)}")
    return cls(**values)


def config_from_dict(data: Optional[Mapping[str, Any]]) -> PlantConfig:
    """
    Build a PlantConfig from a nested mapping.

    Args:
        data: Mapping with optional 'reactor', 'condenser' and 'plant'
            sections. None gives the default configuration.

    Returns:
        PlantConfig with the given values over the defaults

    Raises:
        ValueError: on unknown sections or keys, or invalid values
    """
    if data is None:
        return PlantConfig()
    if not isinstance(data, Mapping):
        raise ValueError("Plant config must be a mapping of sections")

    sections = {
        "reactor": ReactorConstants,
        "condenser": CondenserConstants,
        "plant": PlantConstants,
    }
    unknown = sorted(set(data) - set(sections))
    if unknown:
        raise ValueError(f"Unknown config section(s): {', '.join(unknown)}")

    return PlantConfig(**{
        name: _build_section(cls, name, data.get(name))
        for name, cls in sections.items()
    })


def load_config(path: str) -> PlantConfig:
    """
    Read a PlantConfig from a YAML file.

    An empty file gives the default configuration.
    """
    if not os.path.exists(path):
        raise FileNotFoundError(f"Plant config not found: {path}")
    with open(path, "r") as f:
        data = yaml.safe_load(f)
    return config_from_dict(data)
