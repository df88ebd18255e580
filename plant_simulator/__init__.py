"""
Nuclear Plant Simulator Package

Physical component engine for an operator-training simulator: a reactor,
a condenser and the pipes and valves between them, advanced one discrete
tick at a time.

Modules:
    - constants: Tunable numbers of every component
    - config: PlantConfig and YAML loading
    - flow: Flow value passed between connected components
    - components: PlantComponent base, pipes and valves
    - reactor: Reactor and its control rod
    - condenser: Condenser
    - plant: Plant orchestration and the standard plant factory
    - history: Per-tick state recording
"""

import logging

from .constants import ReactorConstants, CondenserConstants, PlantConstants
from .config import PlantConfig, config_from_dict, load_config
from .flow import Flow
from .components import ComponentKind, PlantComponent, ConnectorPipe, Valve
from .reactor import ControlRod, Reactor, ReactorTickInput
from .condenser import Condenser, CondenserTickInput
from .plant import Plant, TickInputs, create_plant
from .history import PlantHistory

logging.getLogger(__name__).addHandler(logging.NullHandler())

__version__ = "1.0.0"

__all__ = [
    "ReactorConstants",
    "CondenserConstants",
    "PlantConstants",
    "PlantConfig",
    "config_from_dict",
    "load_config",
    "Flow",
    "ComponentKind",
    "PlantComponent",
    "ConnectorPipe",
    "Valve",
    "ControlRod",
    "Reactor",
    "ReactorTickInput",
    "Condenser",
    "CondenserTickInput",
    "Plant",
    "TickInputs",
    "create_plant",
    "PlantHistory",
]
