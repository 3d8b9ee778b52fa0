from enum import Enum


class DownpourError(Exception):
    """Base class for errors that abort a run before any request is sent."""


class ConfigurationError(DownpourError):
    pass


class MissingTarget(ConfigurationError):
    def __init__(self, message: str = "no URL provided. Use -u, -f, or a command-line argument"):
        super().__init__(message)


class ResolutionError(DownpourError):
    """The target list could not be built (unreadable or empty URL file)."""


class FailureKind(str, Enum):
    # Per-request failures; recorded on the Result, never raised.
    CONNECTION = "connection"
    BODY_READ = "body_read"
