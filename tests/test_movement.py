"""Tests for ship movement, fuel burn and arrival across ticks."""

import math

import pytest

from shipsim.engine.world import World
from shipsim.models import EventKind, Island, ShipState, create_ship
from shipsim.utils.navigation import Point


def create_harbor_world():
    """Exxon at the origin with unlimited fuel and a generous dock radius."""
    world = World()
    world.add_island(Island(name="Exxon", position=Point(0, 0), fuel=math.inf, dock_radius=5.0))
    return world


def test_tanker_sails_to_island_docks_and_refuels():
    """Bob sails 10 nm at 5 knots, docks on the second tick, then refuels."""
    world = create_harbor_world()
    bob = create_ship("Bob", "Tanker", Point(10, 0))
    world.add_ship(bob)
    exxon = world.get_island("Exxon")

    bob.set_destination_island_and_speed(exxon, 5.0)
    assert bob.heading == pytest.approx(270.0)

    world.advance_tick()
    assert bob.position.x == pytest.approx(5.0)
    assert bob.state is ShipState.MOVING_TO_ISLAND

    results = world.advance_tick()
    assert bob.position == Point(0, 0)
    assert bob.state is ShipState.DOCKED
    assert bob.docked_at is exxon
    assert bob.speed == 0.0
    assert [e.kind for e in results.events] == [EventKind.ARRIVED, EventKind.DOCKED]

    fuel_before = bob.fuel
    assert fuel_before == pytest.approx(80.0)
    bob.refuel()
    assert bob.fuel > fuel_before
    assert bob.fuel == 100.0


class TestCourse:
    """Tests for sailing on a fixed course."""

    def setup_method(self):
        self.world = World()
        self.ajax = create_ship("Ajax", "Cruiser", Point(0, 0))
        self.world.add_ship(self.ajax)

    def test_moves_speed_times_tick(self):
        self.ajax.set_course_and_speed(90.0, 10.0)
        self.world.advance_tick()
        assert self.ajax.position.x == pytest.approx(10.0)
        assert self.ajax.position.y == pytest.approx(0.0, abs=1e-9)
        assert self.ajax.fuel == pytest.approx(900.0)

    def test_keeps_going_until_stopped(self):
        self.ajax.set_course_and_speed(0.0, 5.0)
        for _ in range(3):
            self.world.advance_tick()
        assert self.ajax.position.y == pytest.approx(15.0)
        self.ajax.stop()
        self.world.advance_tick()
        assert self.ajax.position.y == pytest.approx(15.0)

    def test_stopped_ship_burns_no_fuel(self):
        self.world.advance_tick()
        assert self.ajax.fuel == 1000.0
        assert self.ajax.position == Point(0, 0)


class TestPositionGoal:
    """Tests for sailing to a point."""

    def setup_method(self):
        self.world = World()
        self.ajax = create_ship("Ajax", "Cruiser", Point(0, 0))
        self.world.add_ship(self.ajax)

    @pytest.mark.parametrize(
        "speed,ticks",
        [(5.0, 2), (3.0, 4), (10.0, 1), (20.0, 1)],
    )
    def test_arrival_tick_count(self, speed, ticks):
        """10 nm away arrives after ceil(10 / speed) ticks."""
        self.ajax.set_destination_position_and_speed(Point(0, 10), speed)
        for _ in range(ticks - 1):
            self.world.advance_tick()
            assert self.ajax.state is ShipState.MOVING_TO_POSITION
        results = self.world.advance_tick()
        assert self.ajax.position == Point(0, 10)
        assert self.ajax.state is ShipState.STOPPED
        assert results.events_of_kind(EventKind.ARRIVED)

    def test_fuel_burn_matches_distance_sailed(self):
        self.ajax.set_destination_position_and_speed(Point(0, 7), 5.0)
        self.world.advance_tick()
        self.world.advance_tick()
        # 7 nm at 10 tons per nm
        assert self.ajax.fuel == pytest.approx(930.0)

    def test_island_position_goal_does_not_dock(self):
        self.world.add_island(Island(name="Rock", position=Point(0, 5)))
        self.ajax.set_destination_position_and_speed(Point(0, 5), 10.0)
        self.world.advance_tick()
        assert self.ajax.state is ShipState.STOPPED
        assert self.ajax.docked_at is None


class TestFuel:
    """Tests for running out of fuel."""

    def setup_method(self):
        self.world = World()
        self.tanker = create_ship("Valdez", "Tanker", Point(0, 0))
        self.world.add_ship(self.tanker)

    def test_runs_dry_after_exact_range(self):
        """100 tons at 2 tons/nm is 50 nm: five ticks at 10 knots."""
        self.tanker.set_course_and_speed(0.0, 10.0)
        for _ in range(4):
            self.world.advance_tick()
        assert self.tanker.state is ShipState.MOVING_ON_COURSE

        results = self.world.advance_tick()
        assert self.tanker.position.y == pytest.approx(50.0)
        assert self.tanker.fuel == 0.0
        assert self.tanker.state is ShipState.DEAD_IN_THE_WATER
        assert self.tanker.speed == 0.0
        assert results.events_of_kind(EventKind.OUT_OF_FUEL)

    def test_partial_move_on_short_fuel(self):
        self.tanker.fuel = 10.0
        self.tanker.set_destination_position_and_speed(Point(0, 40), 10.0)
        self.world.advance_tick()
        assert self.tanker.position.y == pytest.approx(5.0)
        assert self.tanker.fuel == 0.0
        assert self.tanker.state is ShipState.DEAD_IN_THE_WATER
        assert self.tanker.destination_point is None

    def test_dead_ship_does_not_move(self):
        self.tanker.fuel = 10.0
        self.tanker.set_course_and_speed(0.0, 10.0)
        self.world.advance_tick()
        position = self.tanker.position
        self.world.advance_tick()
        assert self.tanker.position == position

    def test_arrival_with_exact_fuel(self):
        self.tanker.fuel = 20.0
        self.tanker.set_destination_position_and_speed(Point(0, 10), 10.0)
        self.world.advance_tick()
        assert self.tanker.position == Point(0, 10)
        assert self.tanker.state is ShipState.STOPPED
        assert self.tanker.fuel == 0.0


def test_island_goal_reaches_island_outside_dock_radius_start():
    """A ship docks at any island it was sent to, whatever the dock radius."""
    world = World()
    island = Island(name="Tiny", position=Point(0, 3), dock_radius=0.0)
    world.add_island(island)
    ship = create_ship("Ajax", "Cruiser", Point(0, 0))
    world.add_ship(ship)

    ship.set_destination_island_and_speed(island, 2.0)
    world.advance_tick()
    world.advance_tick()

    assert ship.docked_at is island
    assert ship.position == island.position
