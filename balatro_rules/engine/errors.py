"""
Error types raised by the rules engine.
Every failure is raised before game state is mutated, so callers can reject
the action and carry on.
"""


class BalatroError(Exception):
    """Base class for all rules engine errors."""


class ArithmeticOverflowError(BalatroError, ArithmeticError):
    """A score or target computation left the representable range."""

    def __init__(self, operation: str):
        super().__init__(f"Arithmetic operation {operation} overflowed")
        self.operation = operation


# Resource exhaustion

class ResourceExhaustedError(BalatroError):
    """An action needed a resource (cards, hands, discards) that ran out."""


class InsufficientCardsError(ResourceExhaustedError):
    def __init__(self, requested: int, available: int):
        super().__init__(
            f"Cannot draw {requested} cards, only {available} left in deck"
        )
        self.requested = requested
        self.available = available


class HandsExhaustedError(ResourceExhaustedError):
    def __init__(self):
        super().__init__("Attempted to play hand but no hands remaining")


class DiscardsExhaustedError(ResourceExhaustedError):
    def __init__(self):
        super().__init__("Attempted to discard hand but no discards remaining")


# Invalid input

class InvalidInputError(BalatroError, ValueError):
    """Input from the player or UI was rejected."""


class MalformedCardError(InvalidInputError):
    def __init__(self, text: str, reason: str):
        super().__init__(f"Malformed card {text!r}: {reason}")
        self.text = text


class InvalidIndexError(InvalidInputError):
    def __init__(self, index, size: int):
        super().__init__(f"Index {index!r} is out of bounds for {size} cards")
        self.index = index
        self.size = size


class SelectionLimitError(InvalidInputError):
    def __init__(self, attempted: int, limit: int):
        super().__init__(f"Cannot select {attempted} cards, limit is {limit}")
        self.attempted = attempted
        self.limit = limit


# Everything else

class AnteExceededError(BalatroError):
    """Ante is beyond the last computable ante (endless mode is unsupported)."""

    def __init__(self, ante: int):
        super().__init__(f"Current ante has crossed maximum computable ante: {ante}")
        self.ante = ante


class EmptyHandError(BalatroError):
    def __init__(self):
        super().__init__("Attempted to score a hand with no cards")


class DeckLockError(BalatroError):
    """The deck lock could not be acquired. Indicates a concurrency bug."""


class RoundStateError(BalatroError):
    """An action was attempted in a round or run state that does not allow it."""
