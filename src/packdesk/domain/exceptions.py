"""Domain-level exceptions.

All business rule violations are expressed as subclasses of DomainException
so the CLI layer can catch them uniformly and display user-friendly messages.

Insufficient stock is *not* an exception: the fulfillment committer records
it as a result entry so one short product never aborts a whole batch.
"""


class DomainException(Exception):
    """Base class for all domain errors."""


class ValidationError(DomainException):
    """A business rule or invariant was violated."""


class EntityNotFoundError(DomainException):
    """A requested entity does not exist."""


class RepositoryError(DomainException):
    """The document store could not read or write a record."""

