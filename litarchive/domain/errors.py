"""
Typed failures raised by the publication core.

Every error carries a stable ``code`` so the HTTP boundary can render it
without inspecting the exception type.
"""

from __future__ import annotations


class PublicationError(Exception):
    """Base class for all publication-core failures."""

    code = "error"

    def __init__(self, message: str = "") -> None:
        super().__init__(message or self.__class__.__name__)
        self.message = message or self.__class__.__name__


class ConflictError(PublicationError):
    """A slug is already taken in its namespace."""

    code = "conflict"


class IllegalTransitionError(PublicationError):
    """A status change outside the transition graph, or a lost compare-and-set."""

    code = "illegal_transition"


class Unauthenticated(PublicationError):
    """No caller identity was supplied."""

    code = "login_required"


class Unauthorized(PublicationError):
    """The caller is known but lacks the required role or ownership."""

    code = "forbidden"


class NotFound(PublicationError):
    code = "not_found"


class InvalidInput(PublicationError, ValueError):
    code = "invalid_input"
