"""
Custom exceptions for vocabulary storage, context resolution and snapshots.
"""


class VocabularyStoreError(Exception):
    """Base exception for all vocabulary store errors."""
    pass


class PersistenceException(VocabularyStoreError):
    """
    Error executing a query or update against the triple store.

    Wraps whatever the underlying store raised (parse errors, endpoint
    failures, ...). The original exception is chained as ``__cause__``.
    """
    pass


class NotFoundException(VocabularyStoreError):
    """Target of an operation (vocabulary, snapshot, workspace) does not exist."""

    @classmethod
    def create(cls, resource_name: str, identifier) -> "NotFoundException":
        return cls(f"{resource_name} with id {identifier} not found.")


class AmbiguousVocabularyContextException(VocabularyStoreError):
    """
    Repository context of a vocabulary cannot be determined.

    Raised when several non-derived repository contexts contain the same
    vocabulary, or a single context contains several vocabularies.
    """
    pass


class UnsupportedOperationException(VocabularyStoreError):
    """Operation is not supported for the given target."""
    pass


class UnsupportedAssetOperationException(UnsupportedOperationException):
    """Operation is not supported for the given asset type."""
    pass


class ConfigurationError(VocabularyStoreError):
    """
    Error in configuration.

    Raised when:
    - A configuration value is out of its valid range
    - An enumerated value (e.g., relationship strategy) is unknown
    """
    pass
