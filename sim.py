#!/usr/bin/env python3
"""Ship simulation - Main entry point.

A world of ships and islands advanced one hour at a time by operator
commands, with map, sailing data and bridge views.
"""

import argparse
import logging
import sys

from shipsim.analysis.voyage_logger import VoyageLogger
from shipsim.engine.world import World
from shipsim.engine.world_setup import create_default_world
from shipsim.interface.controller import Controller
from shipsim.utils.serialization import load_world, save_world


def main():
    """Main entry point."""
    parser = argparse.ArgumentParser(
        description="Ship simulation - ships, islands, fuel and combat",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s                          # Standard world, text interface
  %(prog)s --tui                    # Terminal user interface (TUI)
  %(prog)s --empty                  # Start with no islands or ships
  %(prog)s --load world.json        # Load saved world
  %(prog)s --save world.json        # Save world on quit
  %(prog)s --log-dir logs           # Write a per-tick voyage log
        """,
    )
    parser.add_argument("--load", type=str, metavar="FILE", help="Load world from JSON file")
    parser.add_argument(
        "--save",
        type=str,
        metavar="FILE",
        help="Save world to JSON file when the session ends",
    )
    parser.add_argument(
        "--empty",
        action="store_true",
        help="Start with an empty world instead of the standard islands and ships",
    )
    parser.add_argument(
        "--tui",
        action="store_true",
        help="Use terminal user interface (TUI) instead of basic text mode",
    )
    parser.add_argument("--debug", action="store_true", help="Enable debug logging")
    parser.add_argument(
        "--log-dir",
        type=str,
        metavar="DIR",
        default=None,
        help="Directory for the JSONL voyage log (default: no voyage log)",
    )

    args = parser.parse_args()

    # DEBUG adds ship events, command acknowledgements and world changes
    log_level = logging.DEBUG if args.debug else logging.INFO
    logging.basicConfig(
        level=log_level,
        format="[%(levelname)s] %(message)s",
        handlers=[logging.StreamHandler(sys.stdout)],
    )

    # Initialize world
    if args.load:
        print(f"Loading world from {args.load}...")
        try:
            world = load_world(args.load)
            print(f"World loaded successfully (time {world.time})")
        except FileNotFoundError:
            print(f"Error: File {args.load} not found.")
            sys.exit(1)
        except Exception as e:
            print(f"Error loading world: {e}")
            sys.exit(1)
    elif args.empty:
        world = World()
    else:
        world = create_default_world()

    voyage_logger = None
    if args.log_dir:
        voyage_logger = VoyageLogger(args.log_dir)
        world.attach(voyage_logger)

    try:
        if args.tui:
            from shipsim.interface.tui_app import ShipSimTUI

            # Log lines would draw over the TUI
            logging.getLogger("shipsim").setLevel(logging.WARNING)
            ShipSimTUI(world).run(mouse=False)
        else:
            Controller(world).run()
    except KeyboardInterrupt:
        print("\n\nSession interrupted by user. Exiting...")
    finally:
        if voyage_logger is not None:
            world.detach(voyage_logger)
            voyage_logger.close()

    # Save if requested
    if args.save:
        print(f"\nSaving world to {args.save}...")
        try:
            save_world(world, args.save)
            print("World saved successfully!")
        except OSError as e:
            print(f"Error saving world: {e}")


if __name__ == "__main__":
    main()
