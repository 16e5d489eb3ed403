"""Tests for the operator controller."""

import json
import logging
import tempfile
from pathlib import Path

from shipsim.engine.world_setup import create_default_world
from shipsim.models import ShipState
from shipsim.interface.controller import Controller
from shipsim.utils.navigation import Point


class TestController:
    """Commands through the controller with captured output."""

    def setup_method(self):
        self.world = create_default_world()
        self.output = []
        self.controller = Controller(self.world, write=self.output.append)

    def run(self, *lines):
        for line in lines:
            self.controller.execute_line(line)

    def test_ship_command(self):
        self.run("Ajax course 90 10")
        assert self.world.get_ship("Ajax").state is ShipState.MOVING_ON_COURSE
        assert self.output == []

    def test_usage_errors_are_reported(self):
        self.run("fly", "Ajax course abc 10", "size x")
        assert self.output == [
            "Unrecognized command!",
            "Expected a double!",
            "Expected an integer!",
        ]

    def test_heading_and_speed_checks(self):
        self.run("Ajax course 400 10", "Ajax course 90 -1", "Ajax course 90 30")
        assert self.output == [
            "Invalid heading entered!",
            "Negative speed entered!",
            "Ship cannot go that fast!",
        ]
        assert self.world.get_ship("Ajax").state is ShipState.STOPPED

    def test_domain_errors_are_reported(self):
        self.run(
            "Ajax attack Ajax",
            "Valdez attack Ajax",
            "Ajax destination Nowhere 10",
            "Ajax attack Exxon",
            "Ajax refuel",
        )
        assert self.output == [
            "Ship may not attack itself!",
            "Ship cannot attack!",
            "Island not found!",
            "Ship not found!",
            "Must be docked to refuel!",
        ]

    def test_create(self):
        self.run("create Bob Tanker 1 2")
        assert self.world.get_ship("Bob").type_name == "Tanker"

    def test_create_name_checks(self):
        self.run("create X Cruiser 0 0", "create Ajax Cruiser 0 0", "create Bob Submarine 0 0")
        assert self.output == [
            "Name is too short!",
            "Name is invalid!",
            "Trying to create ship of unknown type!",
        ]
        assert not self.world.is_name_in_use("Bob")

    def test_go_prints_events(self):
        self.run("Xerxes attack Ajax", "go")
        assert self.world.time == 1
        assert "Xerxes fires at Ajax" in self.output

    def test_events_printed_once_and_not_logged(self, caplog):
        with caplog.at_level(logging.INFO, logger="shipsim"):
            self.run("Xerxes attack Ajax", "go")
        assert self.output.count("Xerxes fires at Ajax") == 1
        assert [record for record in caplog.records if record.levelno >= logging.INFO] == []

    def test_status(self):
        self.run("status")
        assert self.output == [self.world.describe()]

    def test_map_view_lifecycle(self):
        self.run("zoom 2")
        assert self.output == ["Map view is not open!"]

        self.run("open_map_view", "open_map_view")
        assert self.output[-1] == "Map view is already open!"

        self.run("size 12", "show")
        assert self.output[-1].startswith("Display size: 12, scale: 2")

        self.run("default", "show")
        assert self.output[-1].startswith("Display size: 25, scale: 2")

        self.run("close_map_view")
        assert self.controller.map_view is None
        assert self.world.observers == []

    def test_views_draw_in_opening_order(self):
        self.run("open_sailing_view", "open_map_view", "open_bridge_view Ajax", "show")
        assert self.output[0].startswith("----- Sailing Data -----")
        assert self.output[1].startswith("Display size")
        assert self.output[2].startswith("Bridge view from Ajax")

    def test_bridge_view_errors(self):
        self.run("open_bridge_view Nobody", "close_bridge_view Ajax")
        assert self.output == ["Ship not found!", "Bridge view for that ship is not open!"]

    def test_sailing_view_errors(self):
        self.run("close_sailing_view", "open_sailing_view", "open_sailing_view")
        assert self.output == ["Sailing data view is not open!", "Sailing data view is already open!"]

    def test_quit(self):
        self.run("open_map_view")
        assert self.controller.execute_line("quit") is False
        assert self.output[-1] == "Done"
        assert self.world.observers == []

    def test_save_and_load(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            path = str(Path(tmpdir) / "world.json")
            self.run(f"save {path}", "Ajax course 0 10", "go", f"load {path}")

        assert self.world.time == 0
        assert self.world.get_ship("Ajax").state is ShipState.STOPPED
        assert self.output[-1] == f"World loaded from {path} (time 0)"

    def test_load_missing_file(self):
        self.run("load /nonexistent/world.json")
        assert self.output[0].startswith("Error loading world:")


class TestRun:
    """The read-eval loop."""

    def test_run_until_quit(self):
        world = create_default_world()
        output = []
        lines = iter(["go", "go", "quit", "go"])
        prompts = []

        def read(prompt):
            prompts.append(prompt)
            return next(lines)

        Controller(world, write=output.append).run(read)

        assert world.time == 2
        assert prompts[0] == "\nTime 0: Enter command: "
        assert prompts[-1] == "\nTime 2: Enter command: "
        assert output[-1] == "Done"

    def test_end_of_input_quits(self):
        world = create_default_world()
        output = []

        def read(prompt):
            raise EOFError

        Controller(world, write=output.append).run(read)
        assert output == ["Done"]

    def test_quit_not_shadowed_by_ship_name(self):
        world = create_default_world()
        output = []
        controller = Controller(world, write=output.append)
        controller.execute_line("create quit Cruiser 0 0")
        assert controller.execute_line("quit") is False

    def test_malformed_save_file_keeps_session(self):
        world = create_default_world()
        output = []

        with tempfile.TemporaryDirectory() as tmpdir:
            path = Path(tmpdir) / "world.json"
            path.write_text(json.dumps({"time": 3, "islands": [{"x": 1.0, "y": 2.0}], "ships": []}))
            lines = iter([f"load {path}", "status", "quit"])
            Controller(world, write=output.append).run(lambda prompt: next(lines))

        assert output[0].startswith("Error loading world: Malformed island record")
        assert output[1] == world.describe()
        assert output[-1] == "Done"
        assert world.time == 0

    def test_failed_load_leaves_world_unchanged(self):
        world = create_default_world()
        output = []
        controller = Controller(world, write=output.append)

        with tempfile.TemporaryDirectory() as tmpdir:
            path = Path(tmpdir) / "world.json"
            controller.execute_line(f"save {path}")
            record = json.loads(path.read_text())
            for ship_record in record["ships"]:
                if ship_record["name"] == "Ajax":
                    ship_record["x"] = 99.0
                if ship_record["name"] == "Xerxes":
                    ship_record["docked_at"] = "Atlantis"
            path.write_text(json.dumps(record))
            controller.execute_line(f"load {path}")

        assert output[-1] == "Error loading world: Island not found!"
        assert world.get_ship("Ajax").position == Point(15, 15)
        assert world.time == 0
