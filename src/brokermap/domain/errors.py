"""Shared domain error messages and error types."""


class DomainError(ValueError):
    """Base class for domain-level errors.

    Subclasses provide semantic categories while preserving ValueError
    compatibility for existing error handling.
    """


class ValidationError(DomainError):
    """Invalid input or failed validation in domain logic."""


class NotFoundError(DomainError):
    """Requested domain entity does not exist."""


class ConflictError(DomainError):
    """Domain conflict, such as uniqueness violations or a run already in progress."""


class ParseError(DomainError):
    """Input file could not be read as CSV."""


class ImportFailedError(DomainError):
    """Saving the mapping or checking the activities failed."""


def account_not_found(account_id: int) -> str:
    """Return message for missing account."""
    return f"Account {account_id} not found"


def duplicate_account_name(name: str) -> str:
    """Return message for duplicate account name."""
    return f"Account with name '{name}' already exists"


def ambiguous_activity_pattern(pattern: str, first: str, second: str) -> str:
    """Return message when one raw pattern is mapped to two activity types."""
    return f"Activity value '{pattern}' is mapped to both {first} and {second}"
