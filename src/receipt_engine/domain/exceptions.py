"""Domain-level exceptions.

All rule violations are expressed as subclasses of DomainException so
the CLI layer can catch them uniformly and display user-friendly messages.
The render core itself never lets these escape: it falls back to the
error receipt instead.
"""


class DomainException(Exception):
    """Base class for all domain errors."""


class ValidationError(DomainException):
    """Input data (an order snapshot or an import payload) is invalid."""


class DesignError(DomainException):
    """A design element carries a payload that cannot be rendered."""


class EntityNotFoundError(DomainException):
    """A requested design or order does not exist."""
