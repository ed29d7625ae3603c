"""
Forest class managing an ordered collection of trees.
Handles adding, cutting, yearly growth, reaping and the forest report.

A tree's position in the collection is its "tree number". Numbers are not
stable: cutting a tree shifts every later tree down by one.
"""
import random
from dataclasses import dataclass
from enum import Enum
from typing import List, Optional, TYPE_CHECKING

from rich.console import Console

from .logging_config import get_logger, log_growth_summary, log_reap_summary
from .tree import RandomTreeBounds, Tree

if TYPE_CHECKING:
    from .persistence import ForestStore

__all__ = ['Forest', 'ReapEvent', 'ReapPolicy']


class ReapPolicy(str, Enum):
    """How Forest.reap() replaces tall trees.

    IN_PLACE: every tree taller than the threshold at the start of the pass
        is replaced at its own position.
    LEGACY: forward scan that appends the replacement and removes the tall
        tree by index. The tree that slides into the vacated slot is skipped
        and appended replacements can be reaped again later in the pass.
    """
    IN_PLACE = "in_place"
    LEGACY = "legacy"

    @classmethod
    def from_value(cls, value) -> "ReapPolicy":
        if isinstance(value, cls):
            return value
        return cls(str(value).strip().lower())


@dataclass
class ReapEvent:
    """Record of one tall tree being replaced.

    Attributes:
        index: Position of the reaped tree when it was reaped
        reaped: The tree that was removed
        replacement: The random tree that took its place
    """
    index: int
    reaped: Tree
    replacement: Tree

    @staticmethod
    def _format_stats(tree: Tree) -> str:
        return "%-7s %5d  %6.2f'  %4.1f%%" % (
            tree.species, tree.year_planting, tree.height, tree.growth_rate
        )

    def format_lines(self) -> List[str]:
        """The two report lines for this event: old stats, then new stats."""
        return [
            "Reaping the tall tree  " + self._format_stats(self.reaped),
            "Replaced with new tree " + self._format_stats(self.replacement),
        ]


class Forest:
    def __init__(self, name: Optional[str] = None, trees: Optional[List[Tree]] = None,
                 rng: Optional[random.Random] = None,
                 bounds: Optional[RandomTreeBounds] = None,
                 reap_policy: ReapPolicy = ReapPolicy.IN_PLACE):
        """Initialize a forest.

        Args:
            name: Forest name, also the key it is saved under. None for an
                anonymous forest.
            trees: Initial trees. The list is copied; the forest owns its own.
            rng: Random number generator for new random trees
            bounds: Ranges for new random trees
            reap_policy: Default policy used by reap()
        """
        self.name = name
        self.trees: List[Tree] = list(trees) if trees is not None else []
        self.rng = rng
        self.bounds = bounds or RandomTreeBounds()
        self.reap_policy = ReapPolicy.from_value(reap_policy)

        self.logger = get_logger(__name__)

    def __len__(self) -> int:
        return len(self.trees)

    def __iter__(self):
        return iter(self.trees)

    def __repr__(self) -> str:
        return f"Forest(name={self.name!r}, trees={len(self.trees)})"

    def _make_random_tree(self) -> Tree:
        return Tree.make_random_tree(rng=self.rng, bounds=self.bounds)

    def add_tree(self, tree: Optional[Tree] = None) -> Tree:
        """Append a tree to the forest.

        Args:
            tree: Tree to append unchanged. If None, a random tree is created.

        Returns:
            The tree that was appended
        """
        if tree is None:
            tree = self._make_random_tree()
        self.trees.append(tree)
        self.logger.debug(f"Added tree #{len(self.trees) - 1} to forest {self.name!r}: {tree}")
        return tree

    def cut_tree(self, tree_number: int) -> bool:
        """Remove the tree at a position.

        Args:
            tree_number: Position of the tree to remove

        Returns:
            True if a tree was removed, False if no tree has that number
        """
        if 0 <= tree_number < len(self.trees):
            removed = self.trees.pop(tree_number)
            self.logger.debug(f"Cut tree #{tree_number} from forest {self.name!r}: {removed}")
            return True

        self.logger.warning(f"Tree number {tree_number} does not exist")
        return False

    def simulate_yearly_growth(self) -> None:
        """Grow every tree in the forest by one year."""
        before = self.calculate_average_height()
        for tree in self.trees:
            tree.grow()
        log_growth_summary(self.logger, self.name, len(self.trees), before,
                           self.calculate_average_height())

    def reap(self, height_to_reap: float,
             policy: Optional[ReapPolicy] = None) -> List[ReapEvent]:
        """Replace trees taller than a height with new random trees.

        Args:
            height_to_reap: Trees strictly taller than this are reaped
            policy: Replacement policy. Defaults to the forest's reap_policy.

        Returns:
            One ReapEvent per replacement, in the order they happened
        """
        policy = ReapPolicy.from_value(policy) if policy is not None else self.reap_policy
        if policy is ReapPolicy.LEGACY:
            events = self._reap_legacy(height_to_reap)
        else:
            events = self._reap_in_place(height_to_reap)

        log_reap_summary(self.logger, self.name, events, height_to_reap)
        return events

    def _reap_in_place(self, height_to_reap: float) -> List[ReapEvent]:
        # Select against heights at the start of the pass
        tall = [index for index, tree in enumerate(self.trees) if tree.height > height_to_reap]

        events = []
        for index in tall:
            replacement = self._make_random_tree()
            events.append(ReapEvent(index, self.trees[index], replacement))
            self.trees[index] = replacement
        return events

    def _reap_legacy(self, height_to_reap: float) -> List[ReapEvent]:
        events = []
        index = 0
        while index < len(self.trees):
            tree = self.trees[index]
            if tree.height > height_to_reap:
                replacement = self.add_tree()
                del self.trees[index]
                events.append(ReapEvent(index, tree, replacement))
            index += 1
        return events

    def calculate_average_height(self) -> float:
        """Mean height of all trees, or 0 for an empty forest."""
        if not self.trees:
            return 0.0
        return sum(tree.height for tree in self.trees) / len(self.trees)

    def format_report(self) -> str:
        """Build the forest report: name, numbered tree list and summary line."""
        lines = ["", f"Forest name: {self.name}"]
        for index, tree in enumerate(self.trees):
            lines.append("%4d %s" % (index, tree))
        lines.append("There are %d trees, with an average height of %.2f" % (
            len(self.trees), self.calculate_average_height()
        ))
        lines.append("")
        return "\n".join(lines) + "\n"

    def print(self, console: Optional[Console] = None) -> None:
        """Print the forest report to a rich console (stdout by default)."""
        console = console or Console()
        console.print(self.format_report(), end="", markup=False, highlight=False,
                      emoji=False, soft_wrap=True)

    def save(self, store: Optional['ForestStore'] = None) -> bool:
        """Save this forest under its name. See ForestStore.save()."""
        from .persistence import ForestStore
        return (store or ForestStore()).save(self)

    @classmethod
    def load(cls, name: str, store: Optional['ForestStore'] = None) -> Optional['Forest']:
        """Load a saved forest by name. See ForestStore.load()."""
        from .persistence import ForestStore
        return (store or ForestStore()).load(name)
