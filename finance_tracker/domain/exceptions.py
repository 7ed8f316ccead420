"""Domain-specific exceptions"""


class DomainException(Exception):
    """Base exception for domain layer"""

    pass


class LedgerValidationError(DomainException):
    """Request data is malformed or invalid; nothing was written"""

    pass


class InvalidAmountError(LedgerValidationError):
    """Monetary amount is negative, zero where not allowed, or not finite"""

    pass


class InvalidMonthError(LedgerValidationError):
    """Month number outside 1-12"""

    pass


class InvalidDateError(LedgerValidationError):
    """Date falls outside the supported calendar (years 1-9999)"""

    pass


class CardNotFoundError(DomainException):
    """No card with the given id"""

    pass


class TransactionNotFoundError(DomainException):
    """No transaction with the given id"""

    pass


class StoreUnavailableError(DomainException):
    """Persistence layer failed; the request was not applied"""

    pass
