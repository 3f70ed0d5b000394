"""Errors raised by the NDB client."""


class NdbError(Exception):
    """Base class for NDB client errors."""


class NdbConfigurationError(NdbError):
    """The client cannot be built from the given access key or entry point."""


class NdbEncodeError(NdbError):
    """A request path, query or payload could not be encoded."""


class NdbCancelledError(NdbError):
    """The call context was cancelled or its deadline passed."""


class NdbDecodeError(NdbError):
    """A response body did not match the expected model."""
