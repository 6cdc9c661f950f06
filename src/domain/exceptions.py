# src/domain/exceptions.py


class ConfigurationInvalidError(ValueError):
    """Raised when mock data generation parameters are inconsistent."""


class StorageNotImplementedError(NotImplementedError):
    """Raised by storage backends that have no working implementation yet."""
