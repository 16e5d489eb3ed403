"""Textual TUI application for the ship simulation.

This module provides a Terminal User Interface using the Textual framework.
It shows a live map and sailing data table beside a terminal panel where the
operator types the same commands the text REPL accepts.
"""

from typing import TYPE_CHECKING

from rich.text import Text
from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.containers import Container, Horizontal, VerticalScroll
from textual.widgets import Footer, Header, Input, RichLog, Static

from .controller import Controller
from .views import MapView, SailingView

if TYPE_CHECKING:
    from ..engine.world import World


class MapPanel(Static):
    """Widget showing a map view that follows the world."""

    def __init__(self, *args, **kwargs):
        """Initialize map panel."""
        super().__init__(*args, **kwargs)
        self.view = MapView()
        self.border_title = "Map"

    def on_world_changed(self, world: "World") -> None:
        self.view.on_world_changed(world)
        self.update(Text(self.view.draw()))


class SailingPanel(Static):
    """Widget showing fuel, course and speed of every ship."""

    def __init__(self, *args, **kwargs):
        """Initialize sailing panel."""
        super().__init__(*args, **kwargs)
        self.view = SailingView()

    def on_world_changed(self, world: "World") -> None:
        self.view.on_world_changed(world)
        self.update(Text(self.view.draw()))


class TerminalPanel(RichLog):
    """Scrolling log of entered commands and what the controller printed."""

    def __init__(self, *args, **kwargs):
        super().__init__(*args, markup=False, wrap=True, **kwargs)

    def show_command(self, command: str) -> None:
        """Echo the command that was entered."""
        self.write(Text.assemble(("> ", "bold cyan"), command))

    def show_output(self, message: str) -> None:
        """Show controller output verbatim (no markup interpretation)."""
        self.write(Text(message))


class ShipSimTUI(App):
    """Ship simulation TUI application."""

    ENABLE_COMMAND_PALETTE = False

    # Largest map: 5 label columns + 2 per cell for 30 cells, plus border and padding
    CSS = """
    #charts {
        height: 34;
    }

    MapPanel {
        width: 69;
        border: round green;
        padding: 0 1;
    }

    #sailing_container {
        width: 1fr;
        border: round blue;
    }

    #log_container {
        height: 1fr;
        border: round $accent;
    }

    TerminalPanel {
        height: 1fr;
        scrollbar-size-vertical: 1;
    }

    #command_input {
        dock: bottom;
        height: 1;
        border: none;
        padding: 0 1;
    }
    """

    BINDINGS = [
        Binding("ctrl+c", "quit", "Quit", show=True),
        Binding("ctrl+g", "advance", "Go", show=True),
    ]

    def __init__(self, world: "World", *args, **kwargs):
        """Initialize the TUI app.

        Args:
            world: World to display and command
        """
        super().__init__(*args, **kwargs)
        self.world = world
        self.map_panel = MapPanel()
        self.sailing_panel = SailingPanel()
        self.terminal_panel = TerminalPanel()
        self.controller = Controller(world, write=self.terminal_panel.show_output)

    def compose(self) -> ComposeResult:
        """Create child widgets."""
        yield Header()

        with Horizontal(id="charts"):
            yield self.map_panel
            sailing_container = VerticalScroll(id="sailing_container")
            sailing_container.border_title = "Sailing Data"
            with sailing_container:
                yield self.sailing_panel

        log_container = Container(id="log_container")
        log_container.border_title = "Bridge Log"
        with log_container:
            yield self.terminal_panel
            yield Input(placeholder="Ajax course 90 10, go, status, quit ...", id="command_input")

        yield Footer()

    def on_mount(self) -> None:
        """Attach the panels to the world and focus the input."""
        self.world.attach(self.map_panel)
        self.world.attach(self.sailing_panel)
        self.title = f"Time {self.world.time}"
        self.terminal_panel.write("Type commands as in the text interface, 'quit' to exit")
        self.query_one("#command_input", Input).focus()

    def on_unmount(self) -> None:
        """Detach the panels so the world no longer calls into dead widgets."""
        for panel in (self.map_panel, self.sailing_panel):
            if panel in self.world.observers:
                self.world.detach(panel)

    def on_input_submitted(self, event: Input.Submitted) -> None:
        """Run the submitted line through the controller."""
        line = event.value.strip()
        event.input.value = ""
        if not line:
            return

        self.terminal_panel.show_command(line)
        if not self.controller.execute_line(line):
            self.exit()
            return
        self.title = f"Time {self.world.time}"

    def action_advance(self) -> None:
        """Advance one tick (same as typing 'go')."""
        self.terminal_panel.show_command("go")
        self.controller.execute_line("go")
        self.title = f"Time {self.world.time}"
