"""Custom exception classes for HostNote."""


class HostNoteException(Exception):
    """
    Base exception class for all HostNote errors.
    """
    pass


class ConfigurationError(HostNoteException):
    """
    Raised when required configuration is missing or malformed at startup.
    """
    pass


class InvalidInputError(HostNoteException):
    """
    Raised for a bad filename, bad public id or unusable content.
    """
    pass


class PayloadTooLargeError(InvalidInputError):
    """
    Raised when file content exceeds the maximum plaintext size.
    """
    pass


class UnauthorizedError(HostNoteException):
    """
    Raised when a request carries no trusted identity.
    """
    pass


class NotFoundError(HostNoteException):
    """
    Raised when a file or public link does not exist.
    """
    pass


class ConflictError(HostNoteException):
    """
    Raised when a rename target already exists.
    """
    pass


class AuthenticationError(HostNoteException):
    """
    Raised when a ciphertext blob fails tag verification.

    Signals tampering or a wrong key. Never treated as NotFoundError inside the core.
    """
    pass


class InternalError(HostNoteException):
    """
    Raised when an unexpected storage I/O failure occurs.
    """
    pass
