"""Domain-specific exceptions"""


class DomainException(Exception):
    """Base exception for domain layer"""

    pass


class ParseError(DomainException, ValueError):
    """A date key or timestamp does not have the expected format"""

    pass


class InvalidTransactionDataError(DomainException):
    """Transaction data is malformed or violates the group/direction convention"""

    pass


class InvalidCollectionDataError(DomainException):
    """Collection record is malformed or names an unknown source"""

    pass
