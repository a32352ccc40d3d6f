"""
Vocabulary relationship resolvers.

A resolver computes the set of vocabularies related to a vocabulary. The
result always contains the vocabulary itself.
"""

import logging
from abc import ABC, abstractmethod
from collections import deque
from typing import Iterable, List, Optional, Set

from rdflib import RDF, URIRef

from repository.namespaces import (
    IMPORTS_VOCABULARY,
    ONTOGRAPHER_ACTIVE,
    ONTOGRAPHER_IRI,
    ONTOGRAPHER_LINK,
    ONTOGRAPHER_SOURCE,
    ONTOGRAPHER_TARGET,
    TERM,
)
from repository.patterns import MEMBERSHIP_PARAMETERS, term_in_vocabulary
from repository.store import TripleStore


logger = logging.getLogger(__name__)


class VocabularyRelationshipResolver(ABC):
    """Resolves vocabularies related to a vocabulary."""

    @abstractmethod
    def get_related_vocabularies(self, vocabulary: URIRef,
                                 edge_kinds: Optional[Iterable[URIRef]] = None) -> Set[URIRef]:
        """
        Get vocabularies related to the specified vocabulary.

        Args:
            vocabulary: Vocabulary identifier
            edge_kinds: Term relationships to follow instead of the configured ones

        Returns:
            Identifiers of related vocabularies, including the vocabulary itself
        """
        pass


class SkosVocabularyRelationshipResolver(VocabularyRelationshipResolver):
    """
    Single hop over SKOS relationships between terms.

    A vocabulary is related if one of its terms is the object of a followed
    relationship from a term of the origin vocabulary.
    """

    QUERY = f"""
    SELECT DISTINCT ?related WHERE {{
        {term_in_vocabulary("?term", "?vocabulary", "?sourceGlossary")}
        ?term ?relationship ?target .
        FILTER (?relationship IN (?edges))
        {term_in_vocabulary("?target", "?related", "?targetGlossary")}
        FILTER (?related != ?vocabulary)
    }}
    """

    def __init__(self, store: TripleStore, edge_kinds: Iterable[URIRef]):
        self.store = store
        self.edge_kinds = frozenset(edge_kinds)

    def get_related_vocabularies(self, vocabulary: URIRef,
                                 edge_kinds: Optional[Iterable[URIRef]] = None) -> Set[URIRef]:
        edges = self.edge_kinds if edge_kinds is None else frozenset(edge_kinds)
        result = {URIRef(vocabulary)}
        if not edges:
            return result
        result.update(self.store.select_values(self.QUERY, vocabulary=URIRef(vocabulary),
                                               edges=edges, **MEMBERSHIP_PARAMETERS))
        return result


class RecursiveVocabularyRelationshipResolver(VocabularyRelationshipResolver):
    """
    Transitive closure over term relationships and vocabulary imports.

    Vocabularies classifying terms of the origin vocabulary (providing types
    of its terms) are included in the result but not traversed further, as
    they tend to be connected to many unrelated vocabularies.
    """

    IMPORTS_QUERY = """
    SELECT DISTINCT ?imported WHERE {
        ?vocabulary ?importsVocabulary ?imported .
    }
    """

    CLASSIFICATION_QUERY = f"""
    SELECT DISTINCT ?typeVocabulary WHERE {{
        {term_in_vocabulary("?term", "?vocabulary", "?termGlossary")}
        ?term ?type ?termType .
        ?termType ?type ?conceptType .
        {term_in_vocabulary("?termType", "?typeVocabulary", "?typeGlossary")}
        FILTER (?typeVocabulary != ?vocabulary)
    }}
    """

    def __init__(self, store: TripleStore, edge_kinds: Iterable[URIRef],
                 resolvers: Optional[List[VocabularyRelationshipResolver]] = None):
        """
        Initialize the resolver.

        Args:
            store: Triple store
            edge_kinds: Term relationships followed in every step
            resolvers: Additional resolvers consulted in every step
        """
        self.store = store
        self.edge_kinds = frozenset(edge_kinds)
        self.skos = SkosVocabularyRelationshipResolver(store, self.edge_kinds)
        self.resolvers = list(resolvers or [])

    def get_related_vocabularies(self, vocabulary: URIRef,
                                 edge_kinds: Optional[Iterable[URIRef]] = None) -> Set[URIRef]:
        origin = URIRef(vocabulary)
        edges = self.edge_kinds if edge_kinds is None else frozenset(edge_kinds)
        skip_recursion = self._classification_vocabularies(origin)

        result = {origin}
        to_process = deque([origin])
        while to_process:
            current = to_process.popleft()
            neighbours = self.skos.get_related_vocabularies(current, edges)
            neighbours.update(self._imported_vocabularies(current))
            for resolver in self.resolvers:
                neighbours.update(resolver.get_related_vocabularies(current))
            for neighbour in neighbours - result:
                result.add(neighbour)
                if neighbour not in skip_recursion:
                    to_process.append(neighbour)

        logger.debug(f"Vocabulary {origin} is related to {len(result) - 1} other vocabularies")
        return result

    def _imported_vocabularies(self, vocabulary: URIRef) -> Set[URIRef]:
        return set(self.store.select_values(self.IMPORTS_QUERY, vocabulary=vocabulary,
                                            importsVocabulary=IMPORTS_VOCABULARY))

    def _classification_vocabularies(self, vocabulary: URIRef) -> Set[URIRef]:
        return set(self.store.select_values(self.CLASSIFICATION_QUERY, vocabulary=vocabulary,
                                            type=RDF.type, conceptType=TERM, **MEMBERSHIP_PARAMETERS))


class OntoGrapherVocabularyRelationshipResolver(VocabularyRelationshipResolver):
    """
    Relationships based on links between terms created in OntoGrapher.

    An active link connects its source and target terms and, if it names a
    relation term, that term as well. Vocabularies of all connected terms are
    related. Only a single link layer is considered.
    """

    QUERY = f"""
    SELECT DISTINCT ?linkVocabulary ?sourceVocabulary ?targetVocabulary WHERE {{
        ?link ?type ?linkType ;
            ?isActive ?active ;
            ?hasSource ?source ;
            ?hasTarget ?target .
        FILTER (STR(?active) = "true")
        OPTIONAL {{
            ?link ?hasIri ?linkIri .
            {term_in_vocabulary("?linkIri", "?linkVocabulary", "?linkGlossary")}
        }}
        {term_in_vocabulary("?source", "?sourceVocabulary", "?sourceGlossary")}
        {term_in_vocabulary("?target", "?targetVocabulary", "?targetGlossary")}
        FILTER (?linkVocabulary = ?vocabulary || ?sourceVocabulary = ?vocabulary || ?targetVocabulary = ?vocabulary)
    }}
    """

    def __init__(self, store: TripleStore):
        self.store = store

    def get_related_vocabularies(self, vocabulary: URIRef,
                                 edge_kinds: Optional[Iterable[URIRef]] = None) -> Set[URIRef]:
        # Links are untyped, edge kinds do not apply
        origin = URIRef(vocabulary)
        rows = self.store.select(self.QUERY, vocabulary=origin, type=RDF.type, linkType=ONTOGRAPHER_LINK,
                                 isActive=ONTOGRAPHER_ACTIVE, hasSource=ONTOGRAPHER_SOURCE,
                                 hasTarget=ONTOGRAPHER_TARGET, hasIri=ONTOGRAPHER_IRI,
                                 **MEMBERSHIP_PARAMETERS)
        result = {origin}
        for row in rows:
            result.update(value for value in row if value is not None)
        return result
