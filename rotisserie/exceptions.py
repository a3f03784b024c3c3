"""
Exception classes raised by the repositories and cooking services.

Exception Hierarchy:
    RotisserieError
    ├── RecipeValidationError
    ├── RecipeNotPersistedError
    ├── InvalidPatternError
    └── StepOutOfRange

"Not found" is not an exception: repositories return None (or False for
deletes) so callers can tell an absent row from a failure.
"""


class RotisserieError(Exception):
    """Base exception for all application errors."""

    pass


class RecipeValidationError(RotisserieError):
    """Raised when recipe data breaks a data model rule the core checks itself."""

    pass


class RecipeNotPersistedError(RotisserieError):
    """Raised when the recipe insert produced no row. Not retried."""

    def __init__(self, name: str):
        self.name = name
        super().__init__(f"Recipe '{name}' was not persisted")


class InvalidPatternError(RotisserieError):
    """Raised when a bulk delete pattern is too short to be safe."""

    def __init__(self, pattern: str, min_length: int):
        self.pattern = pattern
        self.min_length = min_length
        super().__init__(
            f"Pattern must be at least {min_length} characters, got {len(pattern)}"
        )


class StepOutOfRange(RotisserieError):
    """Raised when cooking navigation targets a step that does not exist."""

    def __init__(self, index: int, step_count: int):
        self.index = index
        self.step_count = step_count
        super().__init__(f"Step {index} is out of range for {step_count} step(s)")
