"""
Exception hierarchy for the stargazer exporter.
Every error is fatal: nothing in the tool retries or resumes.
"""


class StargazerError(RuntimeError):
    """Base class for all failures raised by the exporter."""


class ConfigError(StargazerError):
    """Missing credentials or malformed user input, raised before any network call."""


class TransportError(StargazerError):
    """Network-level failure (DNS, connection, TLS, timeout)."""


class RemoteError(StargazerError):
    def __init__(self, message, *, status, url):
        super().__init__(message)
        self.status = status
        self.url = url


class ParseError(StargazerError):
    """The response body does not match the expected GraphQL envelope."""


class StageError(StargazerError):
    """Wraps a failure with the stage it happened in ("fetching stargazers", ...)."""

    def __init__(self, stage, cause):
        super().__init__(f"{stage}: {cause}")
        self.stage = stage
        self.cause = cause
