"""Domain-level exceptions.

All business rule violations are expressed as subclasses of DomainException
so the CLI layer can catch them uniformly and display user-friendly messages.
"""


class DomainException(Exception):
    """Base class for all domain errors."""


class ValidationError(DomainException):
    """A command payload or business rule was invalid."""


class EntityNotFoundError(DomainException):
    """A requested entity does not exist."""


class StorageError(DomainException):
    """The cart store could not be read or written."""


class CartContextError(RuntimeError):
    """A cart operation was invoked without a cart service in scope.

    Signals a wiring defect. It is not a DomainException, so the CLI
    lets it propagate instead of printing a friendly message.
    """
