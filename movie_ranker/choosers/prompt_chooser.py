"""
Prompt chooser implementation.

Asks a human on the terminal which of two items they preferred.
"""

from collections.abc import Callable

from typing_extensions import override

from ..interfaces import Chooser
from ..models import Item


class PromptChooser(Chooser):
    """Interactive chooser reading "1" or "2" from an input function."""

    def __init__(
        self,
        input_fn: Callable[[str], str] | None = None,
        output_fn: Callable[[str], None] | None = None,
        score_of: Callable[[Item], int] | None = None,
    ):
        """
        Initialize prompt chooser.

        Args:
            input_fn: Reads one answer line (defaults to builtin input)
            output_fn: Writes one line (defaults to builtin print)
            score_of: Optional lookup shown next to each item
        """
        self.input_fn = input_fn or input
        self.output_fn = output_fn or print
        self.score_of = score_of

    def _describe(self, item: Item) -> str:
        text = f"{item.label} ({item.kind.value})"
        if self.score_of is not None:
            text += f" [{self.score_of(item)}]"
        return text

    @override
    def choose(self, pair: tuple[Item, Item]) -> Item:
        first, second = pair
        self.output_fn("Which did you prefer?")
        self.output_fn(f"  1) {self._describe(first)}")
        self.output_fn(f"  2) {self._describe(second)}")
        while True:
            answer = self.input_fn("> ").strip()
            if answer == "1":
                return first
            if answer == "2":
                return second
            self.output_fn("Please answer 1 or 2")
