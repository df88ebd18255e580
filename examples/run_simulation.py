#!/usr/bin/env python3
"""
Example Plant Simulation

This script shows how a driver uses the plant_simulator package: it builds
the standard plant, runs a scripted operator scenario one tick at a time
and prints the resulting state.

Usage:
    python run_simulation.py [--ticks N] [--rod PERCENT] [--pump WATER]

Example:
    python run_simulation.py --ticks 50 --rod 80 --pump 150
"""

import argparse
import logging
import sys
import os
from typing import List

# Add parent directory to path for importing plant_simulator
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from plant_simulator.config import PlantConfig, load_config
from plant_simulator.history import PlantHistory
from plant_simulator.plant import Plant, TickInputs, create_plant


def run_commands(plant: Plant, commands: List[TickInputs]) -> PlantHistory:
    """Step the plant once per command, reporting every failure."""
    history = PlantHistory(plant)
    for command in commands:
        failed = plant.step(command)
        history.record()
        for component in failed:
            print(f"  tick {plant.time_steps_used:>4}: {component.name} FAILED")
    return history


def run_steady_operation(plant: Plant, ticks: int, rod: int, pump: int) -> PlantHistory:
    """
    Hold the rod and feed pump at fixed settings.

    Args:
        plant: Plant to drive
        ticks: Number of ticks to run
        rod: Control rod percentage
        pump: Water pumped into the reactor per tick
    """
    commands = [TickInputs(control_rod_percentage=rod, water_pumped_in=pump)]
    commands += [TickInputs(water_pumped_in=pump)] * (ticks - 1)
    return run_commands(plant, commands)


def run_loss_of_feedwater(plant: Plant, ticks: int) -> PlantHistory:
    """
    Run the rods fully in with the feed pump off for a fixed number of ticks.
    """
    commands = [TickInputs(control_rod_percentage=100)]
    commands += [TickInputs()] * (ticks - 1)
    return run_commands(plant, commands)


def print_summary(plant: Plant, history: PlantHistory):
    """Print formatted plant state."""
    state = plant.snapshot()

    print("=" * 70)
    print("           PLANT STATE SUMMARY")
    print("=" * 70)
    print(f"  Operator:               {state['operator_name']:>10}")
    print(f"  Time steps used:        {state['time_steps_used']:>10d}")

    for section in ("reactor", "condenser"):
        print(f"\n{section.upper():^70}")
        print("-" * 70)
        s = state[section]
        print(f"  Temperature:            {s['temperature']:>10d} C")
        print(f"  Pressure:               {s['pressure']:>10d}")
        print(f"  Water volume:           {s['water_volume']:>10d}")
        print(f"  Steam volume:           {s['steam_volume']:>10d}")
        print(f"  Health:                 {s['health']:>10d}")
        print(f"  Operational:            {str(s['operational']):>10}")

    print(f"\n{'PEAKS':^70}")
    print("-" * 70)
    print(f"  Reactor temperature:    {history.peak('reactor_temperature'):>10d} C")
    print(f"  Condenser temperature:  {history.peak('condenser_temperature'):>10d} C")
    print(f"  Condenser pressure:     {history.peak('condenser_pressure'):>10d}")

    failed = state["failed_components"]
    print(f"\n  Failed components:      {', '.join(failed) if failed else 'none'}")
    print("\n" + "=" * 70)


def main():
    """Main entry point."""
    parser = argparse.ArgumentParser(
        description="Nuclear Plant Simulation",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s                            # Steady operation with defaults
  %(prog)s --ticks 100 --rod 60 --pump 200
  %(prog)s --scenario loss-of-feedwater
        """
    )

    parser.add_argument("--ticks", type=int, default=50,
                        help="Number of ticks to simulate (default: 50)")
    parser.add_argument("--rod", type=int, default=100,
                        help="Control rod percentage lowered (default: 100, range: 0-100)")
    parser.add_argument("--pump", type=int, default=150,
                        help="Water pumped into the reactor per tick (default: 150)")
    parser.add_argument("--scenario", choices=["steady", "loss-of-feedwater"],
                        default="steady", help="Scenario to run")
    parser.add_argument("--config", type=str, help="YAML plant configuration file")
    parser.add_argument("--seed", type=int, help="Seed for random failures")
    parser.add_argument("--verbose", action="store_true", help="Log every tick")

    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    if not 0 <= args.rod <= 100:
        print(f"Error: Rod percentage must be between 0-100, got {args.rod}")
        sys.exit(1)
    if args.ticks < 1:
        print(f"Error: Need at least one tick, got {args.ticks}")
        sys.exit(1)

    config = load_config(args.config) if args.config else PlantConfig()
    plant = create_plant("operator", config=config, seed=args.seed)

    try:
        if args.scenario == "loss-of-feedwater":
            history = run_loss_of_feedwater(plant, args.ticks)
        else:
            history = run_steady_operation(plant, args.ticks, args.rod, args.pump)
    except ValueError as e:
        print(f"\nError during simulation: {e}")
        raise

    print_summary(plant, history)


if __name__ == "__main__":
    main()
