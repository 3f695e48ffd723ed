"""
Service Exceptions

Fatal and configuration errors. Rejected guesses are not exceptions; they are
reported through GuessOutcome.
"""


class WordleServiceError(Exception):
    """Base class for all service errors."""


class WordSourceExhaustedError(WordleServiceError):
    """No words could be loaded from any word source."""


class WordServiceNotInitializedError(WordleServiceError):
    """The word service was used before initialize() completed."""
