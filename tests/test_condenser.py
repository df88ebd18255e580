"""
Tests for the condenser module.
"""

import unittest

from plant_simulator.condenser import Condenser, CondenserTickInput
from plant_simulator.constants import CondenserConstants, ReactorConstants
from plant_simulator.reactor import Reactor


def steam_source(temperature: int, steam_volume: int) -> Reactor:
    """Upstream component offering steam at a fixed temperature."""
    return Reactor(ReactorConstants(
        default_temperature=temperature,
        default_steam_volume=steam_volume,
        default_rod_percentage=0,
    ))


class TestCondenserInitialization(unittest.TestCase):
    """Test condenser defaults."""

    def setUp(self):
        self.condenser = Condenser()

    def test_defaults(self):
        """Test default state."""
        self.assertEqual(self.condenser.temperature, 50)
        self.assertEqual(self.condenser.pressure, 0)
        self.assertEqual(self.condenser.water_volume, 2000)
        self.assertEqual(self.condenser.steam_volume, 0)
        self.assertEqual(self.condenser.health, 100)
        self.assertEqual(self.condenser.max_temperature, 2000)
        self.assertEqual(self.condenser.max_pressure, 2000)

    def test_inbound_flow_without_upstream(self):
        """Test a disconnected condenser receives nothing."""
        flow = self.condenser.inbound_flow()
        self.assertEqual(flow.volume, 0)
        self.assertEqual(flow.temperature, 50)


class TestCondenserScenario(unittest.TestCase):
    """100 units of steam at 100 degrees into a cold condenser."""

    def test_single_tick(self):
        """Test one tick of steam arriving."""
        condenser = Condenser(input=steam_source(temperature=100, steam_volume=100))
        condenser.update_state(CondenserTickInput(steam_in=100))

        self.assertEqual(condenser.steam_in, 100)
        self.assertEqual(condenser.temperature, 70)
        self.assertEqual(condenser.steam_volume, 0)
        self.assertEqual(condenser.water_volume, 2050)
        self.assertEqual(condenser.pressure, 0)
        self.assertEqual(condenser.health, 100)


class TestCondenserHeating(unittest.TestCase):
    """Test heating from inbound steam."""

    def setUp(self):
        self.condenser = Condenser()

    def test_no_steam_held(self):
        """Test no heating without any steam held."""
        self.assertEqual(self.condenser.heating(500, 100), 0)

    def test_no_steam_in(self):
        """Test no heating without inflow."""
        self.condenser.steam_volume = 400
        self.assertEqual(self.condenser.heating(500, 0), 0)

    def test_only_fresh_steam(self):
        """Test all-fresh steam applies the full temperature difference."""
        self.condenser.steam_volume = 100
        self.assertEqual(self.condenser.heating(100, 100), 50)

    def test_truncated_fraction(self):
        """
        Test the integer-division heating fraction.

        300 of 400 units are old steam; 300 // 400 truncates to 0 so the
        full temperature difference is applied instead of a quarter of it.
        """
        self.condenser.steam_volume = 400
        self.assertEqual(self.condenser.heating(100, 100), 50)

    def test_fractional_heating(self):
        """Test the untruncated fraction when truncation is switched off."""
        condenser = Condenser(CondenserConstants(truncate_heating_fraction=False))
        condenser.steam_volume = 400
        # 50 * (1 - 300/400) = 12.5, rounded half up
        self.assertEqual(condenser.heating(100, 100), 13)


class TestCondenserCooldown(unittest.TestCase):
    """Test the coolant loop."""

    def test_full_cooldown(self):
        """Test the fixed amount applies when well above coolant."""
        condenser = Condenser(CondenserConstants(default_temperature=500))
        self.assertEqual(condenser.cooldown(), 200)

    def test_clamped_to_coolant(self):
        """Test cooling stops at coolant temperature."""
        condenser = Condenser()
        self.assertEqual(condenser.cooldown(), 30)

    def test_never_below_coolant(self):
        """Test no temperature is cooled below coolant in one tick."""
        condenser = Condenser()
        coolant = condenser.constants.coolant_temperature
        for temperature in range(coolant, 1500, 7):
            condenser.temperature = temperature
            self.assertGreaterEqual(temperature - condenser.cooldown(), coolant)


class TestCondenserCondensation(unittest.TestCase):
    """Test steam condensing into water."""

    def assert_mass_balance(self, condenser):
        water_before = condenser.water_volume
        steam_before = condenser.steam_volume
        condenser.condense_steam()
        water_gained = condenser.water_volume - water_before
        steam_lost = steam_before - condenser.steam_volume
        self.assertEqual(steam_lost % 2, 0)
        self.assertEqual(water_gained, steam_lost // 2)
        return water_gained

    def test_mass_balance(self):
        """Test water gained is exactly half the steam lost."""
        for steam in (0, 2, 100, 999, 1000, 3000):
            condenser = Condenser()
            condenser.temperature = 70
            condenser.steam_volume = steam
            self.assert_mass_balance(condenser)

    def test_limited_by_temperature(self):
        """Test a hot condenser condenses less than it holds."""
        condenser = Condenser()
        condenser.temperature = 70
        condenser.steam_volume = 3000
        # ceil((2000 - 70) * 0.8) = 1544
        self.assertEqual(self.assert_mass_balance(condenser), 772)
        self.assertEqual(condenser.steam_volume, 1456)

    def test_none_at_max_temperature(self):
        """Test nothing condenses at max temperature."""
        condenser = Condenser()
        condenser.temperature = 2000
        condenser.steam_volume = 500
        condenser.condense_steam()
        self.assertEqual(condenser.steam_volume, 500)
        self.assertEqual(condenser.water_volume, 2000)


class TestCondenserPressure(unittest.TestCase):
    """Test pressure derivation."""

    def test_pressure_from_steam(self):
        """Test pressure follows steam volume without accumulating."""
        condenser = Condenser()
        condenser.steam_volume = 1000
        condenser.update_pressure()
        self.assertEqual(condenser.pressure, 150)
        condenser.update_pressure()
        self.assertEqual(condenser.pressure, 150)
        condenser.steam_volume = 0
        condenser.update_pressure()
        self.assertEqual(condenser.pressure, 0)


class TestCondenserDamage(unittest.TestCase):
    """Test damage and failure."""

    def test_both_conditions_apply_twice(self):
        """Test temperature and pressure both exceeded costs two penalties."""
        condenser = Condenser()
        condenser.temperature = 2100
        condenser.pressure = 2100
        condenser.check_if_damaging()
        self.assertEqual(condenser.health, 80)

    def test_stays_operational_by_default(self):
        """Test the standard condenser keeps running at zero health."""
        condenser = Condenser(CondenserConstants(max_health=10))
        condenser.temperature = 2100
        condenser.pressure = 2100
        condenser.check_if_damaging()
        self.assertEqual(condenser.health, 0)
        self.assertTrue(condenser.operational)
        self.assertTrue(condenser.check_failure())

    def test_fails_when_configured(self):
        """Test terminal damage takes the condenser out when configured."""
        condenser = Condenser(CondenserConstants(max_health=10, fails_on_terminal_damage=True))
        condenser.temperature = 2100
        condenser.pressure = 2100
        condenser.check_if_damaging()
        self.assertFalse(condenser.operational)


class TestCondenserTickInput(unittest.TestCase):
    """Test per-tick input validation."""

    def test_negative_values_rejected(self):
        """Test negative volumes are invalid."""
        with self.assertRaises(ValueError):
            CondenserTickInput(steam_in=-1)
        with self.assertRaises(ValueError):
            CondenserTickInput(water_pumped_out=-1)

    def test_pumping_out_too_much(self):
        """Test drawing more water than held fails unchanged."""
        condenser = Condenser()
        with self.assertRaises(ValueError):
            condenser.update_state(CondenserTickInput(steam_in=100, water_pumped_out=2001))
        self.assertEqual(condenser.water_volume, 2000)
        self.assertEqual(condenser.steam_volume, 0)
        self.assertEqual(condenser.temperature, 50)

    def test_water_pumped_out(self):
        """Test water drawn off is removed."""
        condenser = Condenser()
        condenser.update_state(CondenserTickInput(water_pumped_out=500))
        self.assertEqual(condenser.water_volume, 1500)


if __name__ == "__main__":
    unittest.main()
