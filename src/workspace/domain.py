"""
Domain models for the workspace module.

A workspace groups working copies of vocabularies. Each working copy lives in
its own vocabulary context, optionally accompanied by a change tracking
context holding records of changes made to the copy.
"""

from dataclasses import dataclass, field
from typing import Dict, Optional, Set

from rdflib import URIRef


@dataclass
class Workspace:
    """Workspace (metadata context) referencing vocabulary contexts."""

    uri: URIRef
    label: Optional[str] = None


@dataclass(frozen=True)
class VocabularyInfo:
    """Working copy of a vocabulary in a workspace."""

    vocabulary: URIRef
    context: URIRef
    change_tracking_context: Optional[URIRef] = None


@dataclass
class WorkspaceMetadata:
    """Vocabularies edited in a workspace and the contexts of their working copies."""

    workspace: URIRef
    vocabularies: Dict[URIRef, VocabularyInfo] = field(default_factory=dict)  # vocabulary -> info

    def get_vocabulary_info(self, vocabulary: URIRef) -> Optional[VocabularyInfo]:
        return self.vocabularies.get(URIRef(vocabulary))

    def get_vocabulary_context(self, vocabulary: URIRef) -> Optional[URIRef]:
        """Context of the working copy of the vocabulary, None if it is not edited in the workspace."""
        info = self.get_vocabulary_info(vocabulary)
        return info.context if info is not None else None

    def get_vocabulary_contexts(self) -> Set[URIRef]:
        return {info.context for info in self.vocabularies.values()}

    def get_change_tracking_contexts(self) -> Set[URIRef]:
        return {info.change_tracking_context for info in self.vocabularies.values()
                if info.change_tracking_context is not None}
