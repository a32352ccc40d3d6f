"""
Repository Access Module

This module provides access to the RDF triple store holding vocabularies as
named graphs, together with the shared data model IRIs, exceptions and
configuration.

Public Interface:
- TripleStore: Parameterized SPARQL queries and updates with transactions
- Configuration, load_configuration: Configuration tree and its loader
- DeferredGraphDropper: Periodic batched dropping of removed contexts

Private Components:
- namespaces: IRIs of the data-description and workspace ontologies
- patterns: Reusable SPARQL graph patterns
"""

from .config import Configuration, RelationshipStrategy, load_configuration
from .drop_queue import DeferredGraphDropper
from .exceptions import (
    AmbiguousVocabularyContextException,
    ConfigurationError,
    NotFoundException,
    PersistenceException,
    UnsupportedAssetOperationException,
    UnsupportedOperationException,
    VocabularyStoreError,
)
from .store import TripleStore

__all__ = [
    "TripleStore",
    "Configuration",
    "RelationshipStrategy",
    "load_configuration",
    "DeferredGraphDropper",
    "VocabularyStoreError",
    "PersistenceException",
    "NotFoundException",
    "AmbiguousVocabularyContextException",
    "UnsupportedOperationException",
    "UnsupportedAssetOperationException",
    "ConfigurationError",
]
