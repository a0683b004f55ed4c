"""
Engine errors.

Only programmer errors are raised. Rule violations (wrong phase, card not
in the expected zone, not enough foundations) are reported through return
values so a UI can explain why an action did not happen.
"""


class EngineError(Exception):
    """Base class for misuse of the engine API."""


class GameAlreadyStartedError(EngineError):
    """start_game() was called on a game that is not in setup."""


class UnknownPlayerError(EngineError):
    """A player id other than 1 or 2 was passed to the engine."""


class ZoneInvariantError(EngineError):
    """A card was added to a zone that already holds it."""


class InvalidCardError(EngineError):
    """An operation was used on a card variant that does not support it."""
