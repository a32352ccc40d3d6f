"""
Snapshot Module

This module creates and removes snapshots of vocabularies. A snapshot is an
immutable copy of a vocabulary stored in its own repository context. Related
vocabularies are snapshotted and removed together with the vocabulary.

Public Interface:
- CascadingSnapshotCreator: Creates a timestamp-consistent set of snapshots
- CascadingVocabularySnapshotRemover: Removes such a set

Private Components:
- queries: SPARQL templates of snapshot operations
"""

from .creator import CascadingSnapshotCreator, SnapshotCreator, format_timestamp
from .domain import Snapshot
from .remover import CascadingVocabularySnapshotRemover

__all__ = [
    "Snapshot",
    "SnapshotCreator",
    "CascadingSnapshotCreator",
    "CascadingVocabularySnapshotRemover",
    "format_timestamp",
]
