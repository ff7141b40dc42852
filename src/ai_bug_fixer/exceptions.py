"""Custom exceptions for the AI bug fixer."""


class BugFixerError(Exception):
    """Base exception for AI bug fixer errors."""

    pass


class NoInputError(BugFixerError):
    """Raised when neither the selection nor the clipboard holds any text."""

    pass


class MissingCredentialError(BugFixerError):
    """Raised when the completion endpoint credential is not configured."""

    pass


class UpstreamRequestError(BugFixerError):
    """Raised when a call to the completion or search endpoint fails."""

    def __init__(self, source: str, message: str):
        super().__init__(message)
        self.source = source
        self.message = message
