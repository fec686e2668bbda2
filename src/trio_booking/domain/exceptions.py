"""Domain-level exceptions.

Every rule violation is a subclass of DomainException so the CLI layer
can catch them uniformly and display user-friendly messages.
"""


class DomainException(Exception):
    """Base class for all domain errors."""


class InvalidInput(DomainException):
    """A pricing input is out of range (negative price, zero days, ...)."""


class ValidationError(DomainException):
    """A booking or extension lifecycle rule was violated."""


class EntityNotFoundError(DomainException):
    """A requested entity does not exist."""
