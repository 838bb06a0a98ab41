def test_custom_exceptions_inheritance():
    """Test that custom exceptions inherit from base exception."""
    from commit_digest.errors import (
        BackendDecodeError,
        BackendError,
        BackendStatusError,
        BackendTransportError,
        CommitDigestError,
        ConfigError,
        EmptyBackendResponseError,
        InvalidConfigLineError,
        InvalidConfigValueError,
        ReductionDidNotConvergeError,
        UnknownConfigKeyError,
    )

    for error in (InvalidConfigLineError, UnknownConfigKeyError, InvalidConfigValueError):
        assert issubclass(error, ConfigError)
    for error in (
        BackendTransportError,
        BackendStatusError,
        BackendDecodeError,
        EmptyBackendResponseError,
    ):
        assert issubclass(error, BackendError)
    for error in (ConfigError, BackendError, ReductionDidNotConvergeError):
        assert issubclass(error, CommitDigestError)
    assert issubclass(CommitDigestError, Exception)


def test_status_error_keeps_status_code():
    from commit_digest.errors import BackendStatusError

    error = BackendStatusError(503)

    assert error.status_code == 503
    assert str(error) == "Unexpected status code: 503"
