"""
Cooking Mode Service

Turns a recipe's free-text instructions into discrete steps and tracks
a cook's position in them.

Segmenting rules:
- Split on runs of newlines (blank lines collapse)
- Trim each piece and drop empty ones
- Strip one leading ordinal marker such as "1. " or "2)"

A CookingSession holds the consumer-side state for one cooking run: the
current step and the set of steps marked complete. Completion is a
toggle and is independent of navigation, so a cook can tick off steps
in any order. Sessions are never persisted.
"""

import re

from rotisserie.exceptions import StepOutOfRange

_LINE_BREAKS = re.compile(r"(?:\r?\n)+")
_ORDINAL_MARKER = re.compile(r"^\d+[.)]\s*")


def segment_instructions(text: str) -> list[str]:
    """
    Split instructions into an ordered list of steps.

    >>> segment_instructions("1. Mix\\n2) Bake\\n\\nServe")
    ['Mix', 'Bake', 'Serve']

    Empty or blank input yields an empty list.
    """
    if not text:
        return []

    steps = []
    for piece in _LINE_BREAKS.split(text):
        piece = piece.strip()
        if piece:
            steps.append(_ORDINAL_MARKER.sub("", piece, count=1))
    return steps


class CookingSession:
    """
    Step-through state for cooking one recipe.

    Attributes:
        recipe_id: Id of the recipe being cooked
        recipe_name: Name of the recipe being cooked
        steps: Segmented instructions
        current_step: Index of the step on screen, always within
            [0, total_steps - 1] (0 when there are no steps)
        completed_steps: Indices the cook has marked done
    """

    def __init__(self, recipe_id: str, recipe_name: str, instructions: str):
        """
        Initialize a session from a recipe's instructions.

        Args:
            recipe_id: The recipe id
            recipe_name: The recipe name
            instructions: Free-text instructions to segment
        """
        self.recipe_id = recipe_id
        self.recipe_name = recipe_name
        self.steps = segment_instructions(instructions)
        self.current_step = 0
        self.completed_steps: set[int] = set()

    @property
    def total_steps(self) -> int:
        return len(self.steps)

    @property
    def current_instruction(self) -> str | None:
        """Text of the current step, or None for a recipe with no steps."""
        if not self.steps:
            return None
        return self.steps[self.current_step]

    @property
    def progress(self) -> float:
        """Fraction of the way through the steps; 0.0 when there are none."""
        if not self.steps:
            return 0.0
        return (self.current_step + 1) / len(self.steps)

    @property
    def completed_count(self) -> int:
        return len(self.completed_steps)

    def next_step(self) -> int:
        """Advance one step; stays put on the last step."""
        if self.current_step < self.total_steps - 1:
            self.current_step += 1
        return self.current_step

    def previous_step(self) -> int:
        """Go back one step; stays put on the first step."""
        if self.current_step > 0:
            self.current_step -= 1
        return self.current_step

    def go_to_step(self, index: int) -> int:
        """Jump straight to a step."""
        self._check_index(index)
        self.current_step = index
        return self.current_step

    def toggle_step(self, index: int) -> bool:
        """
        Flip a step between done and not done.

        Returns:
            True if the step is now complete
        """
        self._check_index(index)
        if index in self.completed_steps:
            self.completed_steps.discard(index)
            return False
        self.completed_steps.add(index)
        return True

    def _check_index(self, index: int) -> None:
        if not 0 <= index < self.total_steps:
            raise StepOutOfRange(index, self.total_steps)
