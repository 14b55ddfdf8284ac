class SharedKeyError(Exception):
    """Base class for errors raised by sharedkey."""


class ConfigError(SharedKeyError):
    """A profile or connection string is missing required settings."""


class InvalidAccountKeyError(SharedKeyError):
    """The account key is not valid base64."""
