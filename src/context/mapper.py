"""
Vocabulary context mapping.

Maps vocabularies to the repository contexts (named graphs) that contain
them. Three layers are available:

- DefaultVocabularyContextMapper queries the store on every call
- CachingVocabularyContextMapper keeps an in-memory map reloaded on demand
- WorkspaceVocabularyContextMapper overlays working copies of the workspace
  currently open for editing
"""

import logging
import threading
from abc import ABC, abstractmethod
from collections import defaultdict
from dataclasses import dataclass, field
from typing import Callable, Dict, List, Mapping, Optional, Set, Tuple, Union

from rdflib import RDF, URIRef

from repository.exceptions import AmbiguousVocabularyContextException
from repository.namespaces import DERIVED_FROM, VOCABULARY
from repository.store import TripleStore


logger = logging.getLogger(__name__)

# (candidate context, ancestor it is derived from or None)
Candidate = Tuple[URIRef, Optional[URIRef]]

CANDIDATE_CONTEXTS_QUERY = """
SELECT DISTINCT ?g ?ancestor WHERE {
    GRAPH ?g {
        ?vocabulary ?type ?vocabularyType .
        OPTIONAL { ?g ?derivedFrom ?ancestor . }
    }
}
"""

DERIVATIONS_QUERY = """
SELECT DISTINCT ?g ?ancestor WHERE {
    GRAPH ?g { ?g ?derivedFrom ?ancestor . }
}
"""

VOCABULARIES_IN_CONTEXT_QUERY = """
SELECT DISTINCT ?v WHERE {
    GRAPH ?context { ?v ?type ?vocabularyType . }
}
"""

ALL_VOCABULARY_CONTEXTS_QUERY = """
SELECT DISTINCT ?v ?g ?ancestor WHERE {
    GRAPH ?g {
        ?v ?type ?vocabularyType .
        OPTIONAL { ?g ?derivedFrom ?ancestor . }
    }
}
"""


def vocabulary_identifier(vocabulary) -> URIRef:
    """Identifier of a vocabulary given as an IRI or an object with a uri attribute."""
    if isinstance(vocabulary, URIRef):
        return vocabulary
    uri = getattr(vocabulary, "uri", None)
    if uri is not None:
        return URIRef(uri)
    if isinstance(vocabulary, str):
        return URIRef(vocabulary)
    raise ValueError(f"Cannot determine vocabulary identifier of {vocabulary!r}")


def select_canonical_context(vocabulary: URIRef, candidates: List[Candidate],
                             load_derivations: Callable[[], Mapping[URIRef, Set[URIRef]]]) -> URIRef:
    """
    Select the canonical context of a vocabulary among candidate contexts.

    Args:
        vocabulary: Vocabulary identifier
        candidates: Contexts containing the vocabulary with their ancestors
        load_derivations: Supplier of the context -> ancestors map, used only
            when every candidate is derived from another context

    Returns:
        Canonical context identifier, the vocabulary identifier itself if no
        context contains the vocabulary

    Raises:
        AmbiguousVocabularyContextException: If the canonical context cannot be determined
    """
    ancestors: Dict[URIRef, Set[URIRef]] = {}
    for context, ancestor in candidates:
        ancestors.setdefault(context, set())
        if ancestor is not None:
            ancestors[context].add(ancestor)

    if not ancestors:
        return vocabulary
    if len(ancestors) == 1:
        return next(iter(ancestors))

    canonical = [context for context, derived in ancestors.items() if not derived]
    if len(canonical) == 1:
        return canonical[0]
    if canonical:
        raise AmbiguousVocabularyContextException(
            f"Multiple repository contexts found for vocabulary {vocabulary}: {sorted(canonical)}")

    derivations = load_derivations()
    roots = {_derivation_root(vocabulary, context, derivations) for context in ancestors}
    if len(roots) != 1:
        raise AmbiguousVocabularyContextException(
            f"Working copies of vocabulary {vocabulary} derive from different contexts: {sorted(roots)}")
    return roots.pop()


def _derivation_root(vocabulary: URIRef, context: URIRef,
                     derivations: Mapping[URIRef, Set[URIRef]]) -> URIRef:
    visited = {context}
    current = context
    while derivations.get(current):
        parents = derivations[current]
        if len(parents) > 1:
            raise AmbiguousVocabularyContextException(
                f"Context {current} of vocabulary {vocabulary} derives from multiple contexts.")
        current = next(iter(parents))
        if current in visited:
            raise AmbiguousVocabularyContextException(
                f"Derivation cycle detected at context {current} of vocabulary {vocabulary}.")
        visited.add(current)
    return current


class VocabularyContextMapper(ABC):
    """Maps vocabularies to repository contexts in which they are stored."""

    @abstractmethod
    def get_vocabulary_context(self, vocabulary: Union[URIRef, object]) -> URIRef:
        """
        Get identifier of the repository context of the vocabulary.

        Args:
            vocabulary: Vocabulary or its identifier

        Returns:
            Repository context identifier

        Raises:
            AmbiguousVocabularyContextException: If no unique canonical context exists
        """
        pass

    @abstractmethod
    def get_vocabulary_in_context(self, context: URIRef) -> Optional[URIRef]:
        """
        Get identifier of the vocabulary stored in the repository context.

        Returns:
            Vocabulary identifier, None if the context contains no vocabulary

        Raises:
            AmbiguousVocabularyContextException: If the context contains multiple vocabularies
        """
        pass

    def load(self) -> None:
        """Reload mapping data. No-op for mappers without a cache."""
        pass


class DefaultVocabularyContextMapper(VocabularyContextMapper):
    """Resolves vocabulary contexts by querying the store on every call."""

    def __init__(self, store: TripleStore):
        self.store = store

    def get_vocabulary_context(self, vocabulary) -> URIRef:
        uri = vocabulary_identifier(vocabulary)
        rows = self.store.select(CANDIDATE_CONTEXTS_QUERY, vocabulary=uri,
                                 type=RDF.type, vocabularyType=VOCABULARY, derivedFrom=DERIVED_FROM)
        candidates = [(row.g, row.ancestor) for row in rows]
        context = select_canonical_context(uri, candidates, self._load_derivations)
        logger.debug(f"Vocabulary {uri} resolved to context {context}")
        return context

    def get_vocabulary_in_context(self, context: URIRef) -> Optional[URIRef]:
        vocabularies = self.store.select_values(VOCABULARIES_IN_CONTEXT_QUERY, context=URIRef(context),
                                                type=RDF.type, vocabularyType=VOCABULARY)
        if not vocabularies:
            return None
        if len(vocabularies) > 1:
            raise AmbiguousVocabularyContextException(
                f"Multiple vocabularies found in context {context}: {sorted(vocabularies)}")
        return vocabularies[0]

    def _load_derivations(self) -> Dict[URIRef, Set[URIRef]]:
        derivations: Dict[URIRef, Set[URIRef]] = defaultdict(set)
        for row in self.store.select(DERIVATIONS_QUERY, derivedFrom=DERIVED_FROM):
            derivations[row.g].add(row.ancestor)
        return derivations


@dataclass(frozen=True)
class _ContextCache:
    """Immutable snapshot of vocabulary contexts as loaded from the store."""

    candidates: Dict[URIRef, List[Candidate]] = field(default_factory=dict)
    vocabularies: Dict[URIRef, List[URIRef]] = field(default_factory=dict)   # context -> vocabularies
    derivations: Dict[URIRef, Set[URIRef]] = field(default_factory=dict)


class CachingVocabularyContextMapper(DefaultVocabularyContextMapper):
    """
    Caches vocabulary contexts in memory.

    The cache is populated by load(), which replaces it as a whole. It is not
    refreshed automatically, callers invoke load() when a vocabulary is
    created or removed.
    """

    def __init__(self, store: TripleStore):
        super().__init__(store)
        self._cache: Optional[_ContextCache] = None
        self._lock = threading.Lock()

    def load(self) -> None:
        """Load vocabulary contexts from the store, replacing the current cache."""
        with self._lock:
            logger.info("Loading vocabulary contexts.")
            candidates: Dict[URIRef, List[Candidate]] = defaultdict(list)
            vocabularies: Dict[URIRef, List[URIRef]] = defaultdict(list)
            derivations: Dict[URIRef, Set[URIRef]] = defaultdict(set)
            rows = self.store.select(ALL_VOCABULARY_CONTEXTS_QUERY, type=RDF.type,
                                     vocabularyType=VOCABULARY, derivedFrom=DERIVED_FROM)
            for row in rows:
                candidates[row.v].append((row.g, row.ancestor))
                if row.v not in vocabularies[row.g]:
                    vocabularies[row.g].append(row.v)
            derivations.update(self._load_derivations())
            self._cache = _ContextCache(dict(candidates), dict(vocabularies), dict(derivations))
            logger.debug(f"Loaded contexts of {len(candidates)} vocabularies.")

    def get_vocabulary_context(self, vocabulary) -> URIRef:
        uri = vocabulary_identifier(vocabulary)
        cache = self._get_cache()
        return select_canonical_context(uri, cache.candidates.get(uri, []), lambda: cache.derivations)

    def get_vocabulary_in_context(self, context: URIRef) -> Optional[URIRef]:
        vocabularies = self._get_cache().vocabularies.get(URIRef(context), [])
        if not vocabularies:
            return None
        if len(vocabularies) > 1:
            raise AmbiguousVocabularyContextException(
                f"Multiple vocabularies found in context {context}: {sorted(vocabularies)}")
        return vocabularies[0]

    def _get_cache(self) -> _ContextCache:
        cache = self._cache
        if cache is None:
            self.load()
            cache = self._cache
        return cache


class WorkspaceVocabularyContextMapper(VocabularyContextMapper):
    """
    Prefers working copies of vocabularies edited in the current workspace.

    Vocabularies without a working copy are resolved by the delegate.
    """

    def __init__(self, delegate: VocabularyContextMapper, metadata_provider):
        """
        Args:
            delegate: Mapper used for vocabularies not edited in the current workspace
            metadata_provider: Provider of current workspace metadata, see
                workspace.metadata.CachingWorkspaceMetadataProvider
        """
        self.delegate = delegate
        self.metadata_provider = metadata_provider

    def get_vocabulary_context(self, vocabulary) -> URIRef:
        uri = vocabulary_identifier(vocabulary)
        metadata = self.metadata_provider.get_current_workspace_metadata()
        if metadata is not None:
            context = metadata.get_vocabulary_context(uri)
            if context is not None:
                logger.debug(f"Vocabulary {uri} resolved to working copy context {context}")
                return context
        return self.delegate.get_vocabulary_context(uri)

    def get_vocabulary_in_context(self, context: URIRef) -> Optional[URIRef]:
        return self.delegate.get_vocabulary_in_context(context)

    def load(self) -> None:
        self.delegate.load()
