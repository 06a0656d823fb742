"""Exceptions raised by the name matching system."""


class NameMatchError(ValueError):
    """Base class for invalid batch input."""


class LengthMismatchError(NameMatchError):
    """The two sequences of names differ in length."""


class VocabularyMismatchError(NameMatchError):
    """The token frequency vocabulary is malformed."""
