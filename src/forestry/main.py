#!/usr/bin/env python
"""
Forestry Simulation

Interactive entry point. Each forest named on the command line is initialized
from ``<name>.csv`` and handed to a text menu where trees can be printed,
added, cut, grown and reaped, and the forest saved or replaced by a saved one.
Forests are visited in command-line order; (N)ext moves on and e(X)it stops.
"""
import argparse
import random
import sys
from pathlib import Path
from typing import Callable, List, Optional

from rich.console import Console

from .config_loader import ForestrySettings, load_settings
from .exceptions import ForestryError
from .forest import Forest, ReapPolicy
from .logging_config import get_logger, setup_logging
from .persistence import ForestStore
from .readers import read_forest

MENU_PROMPT = "(P)rint, (A)dd, (C)ut, (G)row, (R)eap, (S)ave, (L)oad, (N)ext, e(X)it : "

logger = get_logger(__name__)


class ForestryShell:
    """Text menu driving one forest at a time.

    Args:
        settings: Resolved settings for the run
        console: Console to print to. Defaults to stdout.
        input_func: Callable returning one line of user input for a prompt.
            Defaults to the console's input.
        rng: Random number generator shared by every forest in the run
    """

    def __init__(self, settings: ForestrySettings, console: Optional[Console] = None,
                 input_func: Optional[Callable[[str], str]] = None,
                 rng: Optional[random.Random] = None):
        self.settings = settings
        self.console = console or Console()
        self.input_func = input_func or self.console.input
        self.rng = rng
        self.store = ForestStore(settings.storage.save_dir, settings.storage.forest_suffix)
        self.forest: Optional[Forest] = None

    def say(self, text: str = "") -> None:
        self.console.print(text, markup=False, highlight=False, emoji=False,
                           soft_wrap=True)

    def ask(self, prompt: str) -> str:
        # EOFError propagates to run(), which treats it as exit
        return self.input_func(prompt).strip()

    def new_forest(self, name: Optional[str] = None) -> Forest:
        return Forest(
            name,
            rng=self.rng,
            bounds=self.settings.random_tree,
            reap_policy=self.settings.reap_policy,
        )

    def csv_path(self, name: str) -> Path:
        storage = self.settings.storage
        return storage.data_dir / f"{name}{storage.csv_suffix}"

    def run(self, forest_names: List[str]) -> int:
        """Visit each named forest in turn until they run out or the user exits."""
        self.say("Welcome to the Forestry Simulation")
        self.say("----------------------------------")

        for name in forest_names:
            path = self.csv_path(name)
            if not path.exists():
                self.say(f"Error opening {path.name}")
                continue

            self.say(f"Initializing from {name}")
            self.say()
            self.forest = self.new_forest(name)
            try:
                read_forest(path, self.forest)
            except ForestryError as e:
                self.say(f"Error opening/reading {path.name}")
                logger.error(str(e))
                continue

            try:
                choice = self.menu_loop()
            except EOFError:
                choice = 'X'
            if choice == 'X':
                break

        self.say()
        self.say("Exiting the Forestry Simulation")
        self.say()
        return 0

    def menu_loop(self) -> str:
        """Run menu commands on the current forest until (N)ext or e(X)it.

        Returns:
            'N' or 'X'
        """
        while True:
            reply = self.ask(MENU_PROMPT)
            if not reply:
                continue
            choice = reply[0].upper()

            if choice == 'P':
                self.forest.print(self.console)
            elif choice == 'A':
                self.forest.add_tree()
            elif choice == 'C':
                self.cut()
            elif choice == 'G':
                self.forest.simulate_yearly_growth()
            elif choice == 'R':
                self.reap()
            elif choice == 'S':
                self.save()
            elif choice == 'L':
                self.load()
            elif choice == 'N':
                self.say("Moving to the next forest")
                return choice
            elif choice == 'X':
                return choice
            else:
                self.say("Invalid menu option, try again")
                self.say()

    def cut(self) -> None:
        """Prompt for a tree number and cut it, re-prompting on bad input."""
        while True:
            reply = self.ask("Tree number to cut down: ")
            try:
                tree_number = int(reply)
            except ValueError:
                self.say("That is not an integer")
                continue

            if self.forest.cut_tree(tree_number):
                self.say()
            else:
                self.say(f"Tree number {tree_number} does not exist")
            if tree_number >= 0:
                return

    def reap(self) -> None:
        """Prompt for a height and reap every tree above it."""
        while True:
            reply = self.ask("Height to reap from: ")
            try:
                height = float(reply)
            except ValueError:
                self.say("That is not a number")
                continue
            if height < 0:
                self.say("Height to reap from must not be negative")
                continue
            break

        for event in self.forest.reap(height):
            for line in event.format_lines():
                self.say(line)
        self.say()

    def save(self) -> None:
        if not self.store.save(self.forest):
            self.say(f"Error saving to {self.store.path_for(self.forest.name).name}")

    def load(self) -> None:
        """Replace the current forest with a saved one, keeping it on failure."""
        name = self.ask("Enter forest name: ")
        loaded = self.store.load(
            name,
            rng=self.rng,
            bounds=self.settings.random_tree,
            reap_policy=self.settings.reap_policy,
        )
        if loaded is None:
            self.say(f"Error opening/reading {self.store.path_for(name).name}")
            self.say("Old forest retained")
            return
        self.forest = loaded
        self.say("Forest loaded successfully.")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="forestry",
        description="Forestry Simulation",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  forestry Montane                   # Load Montane.csv and open the menu
  forestry Montane Coastal           # Visit two forests in turn
  forestry --policy legacy Montane   # Reap with the legacy scan
        """
    )

    parser.add_argument(
        "forests",
        nargs="*",
        help="Forest names; each is initialized from <name>.csv"
    )

    parser.add_argument(
        "--config",
        type=Path,
        help="YAML or JSON settings file"
    )

    parser.add_argument(
        "--data-dir",
        type=Path,
        help="Directory holding the forest CSV files"
    )

    parser.add_argument(
        "--save-dir",
        type=Path,
        help="Directory forests are saved to and loaded from"
    )

    parser.add_argument(
        "--policy",
        choices=[policy.value for policy in ReapPolicy],
        help="Reap policy (default: from settings, in_place)"
    )

    parser.add_argument(
        "--seed",
        type=int,
        help="Seed for random trees"
    )

    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Enable verbose logging"
    )

    return parser


def main(argv: Optional[List[str]] = None, console: Optional[Console] = None,
         input_func: Optional[Callable[[str], str]] = None) -> int:
    """Main entry point for the forestry simulation."""
    args = build_parser().parse_args(argv)
    console = console or Console()

    try:
        settings = load_settings(args.config)
    except ForestryError as e:
        console.print(f"Error loading settings: {e}", markup=False, highlight=False)
        return 1

    if args.data_dir is not None:
        settings.storage.data_dir = args.data_dir
    if args.save_dir is not None:
        settings.storage.save_dir = args.save_dir
    if args.policy is not None:
        settings.reap_policy = ReapPolicy.from_value(args.policy)

    setup_logging("DEBUG" if args.verbose else settings.log_level)

    rng = random.Random(args.seed) if args.seed is not None else None
    shell = ForestryShell(settings, console=console, input_func=input_func, rng=rng)
    return shell.run(args.forests)


if __name__ == "__main__":
    sys.exit(main())
