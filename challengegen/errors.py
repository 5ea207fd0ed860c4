# challengegen/errors.py
from typing import Optional


class ChallengeGenerationError(Exception):
    """Base class for every failure the generation pipeline can report."""


class TransportError(ChallengeGenerationError):
    """Network failure, timeout or non-success status from the generative endpoint."""

    def __init__(self, message: str, status_code: Optional[int] = None, body: str = ""):
        super().__init__(message)
        self.status_code = status_code
        self.body = body


class EmptyResponseError(ChallengeGenerationError):
    """The endpoint answered with a well-formed envelope holding no text."""


class ParseError(ChallengeGenerationError):
    """Model output could not be decoded into a challenge."""

    def __init__(self, message: str, raw_text: str):
        super().__init__(message)
        self.raw_text = raw_text


class PublishError(ChallengeGenerationError):
    """An accepted challenge could not be handed to the persistence queue."""
