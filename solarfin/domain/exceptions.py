"""Domain-specific exceptions"""


class DomainException(Exception):
    """Base exception for domain layer"""

    pass


class InvalidRecordError(DomainException):
    """Record is malformed (bad date, unknown frequency, non-positive installments)"""

    pass


class OwnerMismatchError(DomainException):
    """Records from more than one owner were passed to a single computation"""

    pass


class DateOutOfRangeError(InvalidRecordError):
    """A derived date falls outside the representable calendar"""

    pass
