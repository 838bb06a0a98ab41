class CommitDigestError(Exception):
    """Base exception for Commit Digest errors."""


class ConfigError(CommitDigestError):
    """Raised when the configuration cannot be loaded."""


class InvalidConfigLineError(ConfigError):
    """Raised when a config file line is not in KEY=VALUE form."""


class UnknownConfigKeyError(ConfigError):
    """Raised when a config file names a key we do not know."""


class InvalidConfigValueError(ConfigError):
    """Raised when a configuration value fails validation."""


class BackendError(CommitDigestError):
    """Base exception for failed text-generation requests."""


class BackendTransportError(BackendError):
    """Raised when the request never produced an HTTP response."""


class BackendStatusError(BackendError):
    """Raised when the backend answers with a non-success status."""

    def __init__(self, status_code: int, message: str = "") -> None:
        self.status_code = status_code
        super().__init__(message or f"Unexpected status code: {status_code}")


class BackendDecodeError(BackendError):
    """Raised when the response body is not a valid generate envelope."""


class EmptyBackendResponseError(BackendError):
    """Raised when the backend returned no generated text."""


class ReductionDidNotConvergeError(CommitDigestError):
    """Raised when summarizing rounds stop shrinking the diff."""
