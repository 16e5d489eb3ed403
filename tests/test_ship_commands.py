"""Tests for operator commands on a single ship.

Every command either fully succeeds or raises DomainError without changing
the ship.
"""

import math

import pytest

from shipsim.engine.world import World
from shipsim.models import DomainError, Island, ShipState, create_ship
from shipsim.utils.navigation import Point


def create_basic_world():
    """Create a world with one island and a cruiser and a tanker."""
    world = World()
    world.add_island(Island(name="Exxon", position=Point(0, 0), fuel=500.0, dock_radius=1.0))
    world.add_island(Island(name="Bermuda", position=Point(20, 0), fuel=0.0))
    world.add_ship(create_ship("Ajax", "Cruiser", Point(0, 10)))
    world.add_ship(create_ship("Valdez", "Tanker", Point(0, 0.5)))
    return world


def set_goal(ship, world, mode):
    """Give ship a manual course, a position goal or an island goal."""
    if mode == "course":
        ship.set_course_and_speed(30.0, 10.0)
    elif mode == "position":
        ship.set_destination_position_and_speed(Point(10, 10), 5.0)
    else:
        ship.set_destination_island_and_speed(world.get_island("Bermuda"), 5.0)


class TestCourseAndDestinations:
    """Manual course, position goal and island goal are mutually exclusive."""

    def setup_method(self):
        self.world = create_basic_world()
        self.ajax = self.world.get_ship("Ajax")
        self.exxon = self.world.get_island("Exxon")

    def test_set_course(self):
        self.ajax.set_course_and_speed(90.0, 10.0)
        assert self.ajax.state is ShipState.MOVING_ON_COURSE
        assert self.ajax.heading == 90.0
        assert self.ajax.speed == 10.0

    def test_invalid_heading(self):
        with pytest.raises(DomainError, match="Invalid heading!"):
            self.ajax.set_course_and_speed(360.0, 10.0)
        assert self.ajax.state is ShipState.STOPPED

    def test_negative_speed(self):
        with pytest.raises(DomainError, match="Negative speed!"):
            self.ajax.set_course_and_speed(90.0, -1.0)

    def test_too_fast(self):
        with pytest.raises(DomainError, match="Ship cannot go that fast!"):
            self.ajax.set_course_and_speed(90.0, 20.5)
        assert self.ajax.speed == 0.0

    def test_zero_speed_course_allowed(self):
        self.ajax.set_course_and_speed(45.0, 0.0)
        assert self.ajax.state is ShipState.MOVING_ON_COURSE

    def test_zero_speed_destination_rejected(self):
        with pytest.raises(DomainError, match="Cannot travel at zero speed!"):
            self.ajax.set_destination_position_and_speed(Point(5, 5), 0.0)

    def test_goals_replace_each_other(self):
        self.ajax.set_course_and_speed(90.0, 10.0)

        self.ajax.set_destination_position_and_speed(Point(10, 10), 5.0)
        assert self.ajax.state is ShipState.MOVING_TO_POSITION
        assert self.ajax.destination_point == Point(10, 10)
        assert self.ajax.destination_island is None
        assert self.ajax.heading == pytest.approx(90.0)

        self.ajax.set_destination_island_and_speed(self.exxon, 5.0)
        assert self.ajax.state is ShipState.MOVING_TO_ISLAND
        assert self.ajax.destination_island is self.exxon
        assert self.ajax.destination_point is None
        assert self.ajax.heading == pytest.approx(180.0)

        self.ajax.set_course_and_speed(0.0, 5.0)
        assert self.ajax.destination_point is None
        assert self.ajax.destination_island is None

    @pytest.mark.parametrize(
        "first, second",
        [
            ("course", "position"),
            ("course", "island"),
            ("position", "course"),
            ("position", "island"),
            ("island", "course"),
            ("island", "position"),
        ],
    )
    def test_each_goal_clears_the_others(self, first, second):
        set_goal(self.ajax, self.world, first)
        set_goal(self.ajax, self.world, second)

        bermuda = self.world.get_island("Bermuda")
        if second == "course":
            assert self.ajax.state is ShipState.MOVING_ON_COURSE
            assert self.ajax.heading == 30.0
            assert self.ajax.speed == 10.0
            assert self.ajax.destination_point is None
            assert self.ajax.destination_island is None
        elif second == "position":
            assert self.ajax.state is ShipState.MOVING_TO_POSITION
            assert self.ajax.destination_point == Point(10, 10)
            assert self.ajax.destination_island is None
        else:
            assert self.ajax.state is ShipState.MOVING_TO_ISLAND
            assert self.ajax.destination_island is bermuda
            assert self.ajax.destination_point is None
        assert self.ajax.goal_position() == {
            "course": None,
            "position": Point(10, 10),
            "island": bermuda.position,
        }[second]

    def test_destination_must_be_island(self):
        with pytest.raises(DomainError, match="Unknown island!"):
            self.ajax.set_destination_island_and_speed(self.world.get_ship("Valdez"), 5.0)

    def test_stop_keeps_heading(self):
        self.ajax.set_course_and_speed(45.0, 10.0)
        self.ajax.stop()
        assert self.ajax.state is ShipState.STOPPED
        assert self.ajax.speed == 0.0
        assert self.ajax.heading == 45.0


class TestDocking:
    """Tests for dock, refuel and leaving port."""

    def setup_method(self):
        self.world = create_basic_world()
        self.valdez = self.world.get_ship("Valdez")
        self.exxon = self.world.get_island("Exxon")
        self.bermuda = self.world.get_island("Bermuda")

    def test_dock_within_radius_snaps_to_island(self):
        self.valdez.dock(self.exxon)
        assert self.valdez.is_docked()
        assert self.valdez.docked_at is self.exxon
        assert self.valdez.position == self.exxon.position

    def test_dock_radius_boundary_is_inclusive(self):
        ship = create_ship("Edge", "Cruiser", Point(0, 1.0))
        self.world.add_ship(ship)
        ship.dock(self.exxon)
        assert ship.is_docked()

    def test_dock_too_far(self):
        ship = create_ship("Edge", "Cruiser", Point(0, 1.0001))
        self.world.add_ship(ship)
        with pytest.raises(DomainError, match="Can't dock, too far!"):
            ship.dock(self.exxon)
        assert ship.state is ShipState.STOPPED

    def test_already_docked(self):
        self.valdez.dock(self.exxon)
        with pytest.raises(DomainError, match="Ship is already docked!"):
            self.valdez.dock(self.exxon)

    def test_refuel_requires_docking(self):
        with pytest.raises(DomainError, match="Must be docked to refuel!"):
            self.valdez.refuel()

    def test_refuel_tops_up_from_island(self):
        self.valdez.fuel = 40.0
        self.valdez.dock(self.exxon)
        taken = self.valdez.refuel()
        assert taken == pytest.approx(60.0)
        assert self.valdez.fuel == 100.0
        assert self.exxon.fuel == pytest.approx(440.0)

    def test_refuel_limited_by_island_supply(self):
        self.exxon.fuel = 10.0
        self.valdez.fuel = 40.0
        self.valdez.dock(self.exxon)
        assert self.valdez.refuel() == pytest.approx(10.0)
        assert self.valdez.fuel == pytest.approx(50.0)
        assert self.exxon.fuel == 0.0

    def test_refuel_at_empty_island(self):
        ship = create_ship("Dry", "Cruiser", Point(20, 0))
        self.world.add_ship(ship)
        ship.fuel = 500.0
        ship.dock(self.bermuda)
        with pytest.raises(DomainError, match="No fuel available!"):
            ship.refuel()
        assert ship.fuel == 500.0

    def test_refuel_with_full_tank_at_empty_island(self):
        ship = create_ship("Full", "Cruiser", Point(20, 0))
        self.world.add_ship(ship)
        ship.dock(self.bermuda)
        assert ship.refuel() == 0.0

    def test_course_from_dock_departs(self):
        self.valdez.dock(self.exxon)
        self.valdez.set_course_and_speed(90.0, 5.0)
        assert self.valdez.docked_at is None
        assert self.valdez.state is ShipState.MOVING_ON_COURSE

    def test_stop_while_docked_stays_docked(self):
        self.valdez.dock(self.exxon)
        self.valdez.stop()
        assert self.valdez.is_docked()
        assert self.valdez.docked_at is self.exxon


class TestAttackCommands:
    """Acceptance checks for attack and stop_attack."""

    def setup_method(self):
        self.world = create_basic_world()
        self.ajax = self.world.get_ship("Ajax")
        self.valdez = self.world.get_ship("Valdez")

    def test_attack_sets_target(self):
        self.ajax.attack(self.valdez)
        assert self.ajax.is_attacking()
        assert self.ajax.weapons.target_name == "Valdez"

    def test_unarmed_ship_cannot_attack(self):
        with pytest.raises(DomainError, match="Ship cannot attack!"):
            self.valdez.attack(self.ajax)

    def test_cannot_attack_self(self):
        with pytest.raises(DomainError, match="Ship may not attack itself!"):
            self.ajax.attack(self.ajax)

    def test_cannot_attack_twice(self):
        self.ajax.attack(self.valdez)
        with pytest.raises(DomainError, match="Already attacking this target!"):
            self.ajax.attack(self.valdez)

    def test_target_must_be_afloat(self):
        self.valdez.state = ShipState.SUNK
        with pytest.raises(DomainError, match="Target is not afloat!"):
            self.ajax.attack(self.valdez)
        assert not self.ajax.is_attacking()

    def test_attack_out_of_range_is_accepted(self):
        far = create_ship("Far", "Cruiser", Point(500, 500))
        self.world.add_ship(far)
        self.ajax.attack(far)
        assert self.ajax.weapons.target_name == "Far"

    def test_stop_attack(self):
        self.ajax.attack(self.valdez)
        self.ajax.stop_attack()
        assert not self.ajax.is_attacking()

    def test_stop_attack_when_idle(self):
        with pytest.raises(DomainError, match="Was not attacking!"):
            self.ajax.stop_attack()


class TestDisabledShips:
    """Sunk ships reject everything; dead ships can only dock and refuel."""

    def setup_method(self):
        self.world = create_basic_world()
        self.ajax = self.world.get_ship("Ajax")
        self.exxon = self.world.get_island("Exxon")

    def test_sunk_ship_rejects_commands(self):
        self.ajax.state = ShipState.SUNK
        with pytest.raises(DomainError, match="Ship is sunk!"):
            self.ajax.set_course_and_speed(0.0, 1.0)
        with pytest.raises(DomainError, match="Ship is sunk!"):
            self.ajax.stop()
        with pytest.raises(DomainError, match="Ship is sunk!"):
            self.ajax.refuel()
        with pytest.raises(DomainError, match="Ship is sunk!"):
            self.ajax.dock(self.exxon)

    def test_dead_ship_cannot_move(self):
        self.ajax.state = ShipState.DEAD_IN_THE_WATER
        self.ajax.fuel = 0.0
        with pytest.raises(DomainError, match="Ship cannot move!"):
            self.ajax.set_course_and_speed(0.0, 1.0)
        with pytest.raises(DomainError, match="Ship cannot move!"):
            self.ajax.set_destination_island_and_speed(self.exxon, 1.0)

    def test_dead_ship_can_dock_and_refuel(self):
        ship = create_ship("Drifter", "Cruiser", Point(0.5, 0))
        self.world.add_ship(ship)
        ship.state = ShipState.DEAD_IN_THE_WATER
        ship.fuel = 0.0

        ship.dock(self.exxon)
        ship.refuel()

        assert ship.fuel == pytest.approx(500.0)
        ship.set_course_and_speed(90.0, 10.0)
        assert ship.state is ShipState.MOVING_ON_COURSE


def test_unlimited_island_refuel():
    world = World()
    island = Island(name="Exxon", position=Point(0, 0))
    world.add_island(island)
    ship = create_ship("Ajax", "Cruiser", Point(0, 0))
    world.add_ship(ship)
    ship.fuel = 1.0
    ship.dock(island)
    assert ship.refuel() == pytest.approx(999.0)
    assert math.isinf(island.fuel)
