"""Daybook exception types"""


class JournalError(Exception):
    """Base class of all journal failures"""


class ConfigurationError(JournalError):
    """The settings could not be read or are inconsistent"""


class InjectionError(JournalError):
    """Applying generated content to a document failed"""

    NO_EDITS = "No edits included"
    EDIT_FAILED = "Failed to applied edit"

    def __init__(self, message: str, uri: str | None = None):
        super().__init__(message)
        self.message = message
        self.uri = uri


class InputCancelled(Exception):
    """
    The user aborted an input prompt.

    Not a JournalError. Callers filter it out with ``is_cancellation`` before
    logging.
    """

    def __str__(self) -> str:
        return "cancel"


def is_cancellation(error: BaseException | str | None) -> bool:
    """True for the cancel marker, in exception or legacy string form"""
    return isinstance(error, InputCancelled) or error == "cancel"
