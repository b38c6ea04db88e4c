from __future__ import annotations


class ChiralDBError(Exception):
    """Base class for every error raised by chiral_db."""


class ConfigurationError(ChiralDBError):
    """Malformed or missing document specification."""


class UnsupportedSourceError(ChiralDBError):
    """A known source kind that has no loader yet."""


class GenerationError(ChiralDBError):
    """A structure could not be turned into a fingerprint of the expected width."""


class LengthMismatchError(ChiralDBError, ValueError):
    pass


class IndexOutOfRangeError(ChiralDBError, IndexError):
    pass


class DocumentNotFoundError(ChiralDBError, KeyError):
    def __init__(self, name: str):
        super().__init__(name)
        self.name = name

    def __str__(self) -> str:
        return f"Unknown fingerprint document: {self.name!r}"


class InvalidFingerprintError(ChiralDBError, ValueError):
    """Fingerprint words that are not integers in [0, 2**32)."""
