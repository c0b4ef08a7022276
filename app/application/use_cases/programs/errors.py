"""Errors raised by program related use cases."""


class ProgramNotFoundError(LookupError):
    """Raised when a program identifier does not exist."""


class SessionNotFoundError(LookupError):
    """Raised when a program session identifier does not exist."""


__all__ = ["ProgramNotFoundError", "SessionNotFoundError"]
