"""Domain-specific exceptions"""


class DomainException(Exception):
    """Base exception for domain layer"""

    pass


class ProviderUnavailableError(DomainException):
    """An upstream provider (indexer, price feed) failed or is unreachable"""

    def __init__(self, provider: str, message: str):
        super().__init__(message)
        self.provider = provider


class MalformedProviderDataError(ProviderUnavailableError):
    """Provider answered, but nothing usable could be read from the body"""

    pass


class InvalidInputError(DomainException):
    """Caller supplied a value the core refuses to work with"""

    pass


class InvalidAddressError(InvalidInputError):
    """Wallet address is not a 0x-prefixed 40 hex character string"""

    pass
