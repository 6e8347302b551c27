"""Errors raised by journal sessions."""


class JournalError(Exception):
    """Base class for journal errors."""


class PermissionDenied(JournalError):
    """Actor is not invited, or the bot cannot use the chat."""


class InvalidCeilingValue(JournalError, ValueError):
    """Evidence count outside of the supported range."""

    def __init__(self, value: object) -> None:
        super().__init__(f"Invalid evidence count: {value!r} (expected 1, 2 or 3)")
        self.value = value


class RenderDispatchFailed(JournalError):
    """The journal could not be shown or updated."""


class StateUsedBeforeInit(JournalError, RuntimeError):
    """Session state was used before the session finished starting."""
