"""fedimigrate error types.

All custom exceptions inherit from FedimigrateError to allow
catching any fedimigrate-specific error.
"""


class FedimigrateError(Exception):
    """Base exception for all fedimigrate errors."""

    pass


class ConfigurationError(FedimigrateError):
    """Invalid configuration."""

    pass


class VersionError(ConfigurationError):
    """A version string could not be parsed."""

    def __init__(self, message: str, value: object) -> None:
        super().__init__(message)
        self.value = value


class StorageError(FedimigrateError):
    """Key-value store operation failed."""

    def __init__(self, message: str, retryable: bool = True) -> None:
        super().__init__(message)
        self.retryable = retryable
