"""Error taxonomy shared by the pipeline, the relay, and the server boundary."""

from __future__ import annotations


class PinboardError(Exception):
    """Base class for every failure the core reports to its caller.

    The message is always safe to show to an end user.
    """

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class InvalidInputError(PinboardError):
    """The caller supplied a malformed board reference."""


class BadRequestError(InvalidInputError):
    """The relay target is malformed or not on the allow-listed host."""


class UpstreamError(PinboardError):
    """Pinterest answered with an error, a malformed body, or not at all."""


class EmptyResultError(PinboardError):
    """The request was well formed but no usable pins remained."""
