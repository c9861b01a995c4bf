"""Errors raised by the roster core.

Domain failures (unknown team, wrong access code, unknown match) are never raised;
they come back as outcomes. These exceptions mark misuse of the core itself.
"""


class RosterError(Exception):
    """Base class for programming-level misuse of the roster core."""


class HubNotConfiguredError(RosterError):
    """Raised when a route asks for the hub before the app has created one."""


class UnroutableRequestError(RosterError):
    """Raised when a request model has no registered handler."""
