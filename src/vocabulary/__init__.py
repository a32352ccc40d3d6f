"""
Vocabulary Module

This module provides persistence of SKOS vocabularies and their terms stored
as named graphs, and a facade for context resolution, relationship resolution
and snapshot management.

Public Interface:
- VocabularyService: High-level service for all vocabulary operations

Private Components:
- VocabularyDao, SnapshotDao: Data access
- Domain models: Vocabulary, Term
"""

from .domain import Term, Vocabulary
from .service import VocabularyService

__all__ = ["VocabularyService", "Vocabulary", "Term"]
