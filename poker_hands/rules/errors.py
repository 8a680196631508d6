"""Hand validation errors.

All errors derive from HandValidationError, which is a ValueError, so
callers can catch either.
"""


class HandValidationError(ValueError):
    """Raised when a hand cannot be classified."""

    pass


class InvalidHandSize(HandValidationError):
    """Raised when a hand does not hold exactly five cards."""

    pass


class InvalidRank(HandValidationError):
    """Raised when a card rank is not an integer in 1-13."""

    pass


class InvalidSuit(HandValidationError):
    """Raised when a card suit is not club, spade, diamond or heart."""

    pass


class DuplicateCard(HandValidationError):
    """Raised when the same rank and suit appear twice in one hand."""

    pass
