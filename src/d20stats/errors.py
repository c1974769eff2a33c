"""Exceptions raised by d20stats.

Data-quality problems in a character never raise; they are reported through
the validation result of a snapshot. These exceptions cover contract
violations and unreadable rule data.
"""


class D20StatsError(Exception):
    """Base class for all d20stats errors."""

    pass


class InvalidTransitionError(D20StatsError):
    """Raised when an epic advancement is requested with an invalid target level."""

    pass


class RulesLoadError(D20StatsError):
    """Raised when rule data cannot be read or parsed."""

    pass


class RulesValidationError(D20StatsError):
    """Raised when rule data is readable but malformed."""

    pass
