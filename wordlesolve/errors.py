"""Exceptions raised by the solver and its collaborators."""


class WordleError(Exception):
    """Base class for all solver errors."""


class NoCandidatesError(WordleError, ValueError):
    """No vocabulary word satisfies the accumulated feedback."""

    def __init__(self, message: str = "No words match those constraints."):
        super().__init__(message)


class ConstraintParseError(WordleError, ValueError):
    """A feedback row could not be turned into a constraint."""


class VocabularyError(WordleError):
    """The word list could not be loaded."""


class VocabularyUnreadable(VocabularyError):
    """The word list file could not be opened or decoded."""


class VocabularyLengthMismatch(VocabularyError):
    """A line of the word list differs in length from the first line."""

    def __init__(self, path: str, line: str, length: int, expected: int):
        self.path = path
        self.line = line
        self.length = length
        self.expected = expected
        super().__init__(
            f"Some lines in {path} contain {length} characters while others "
            f"contain {expected} characters (e.g. {line!r})."
        )


class CacheCorrupt(WordleError):
    """The persisted first-guess cache could not be parsed."""
