"""
Data access objects for vocabularies and snapshots.

Writes go to the repository context of the vocabulary as described by
DescriptorFactory. Reads are evaluated against the union of all contexts.
"""

import logging
from datetime import datetime, timezone
from typing import Dict, List, Optional, Tuple

from rdflib import RDF, Literal, URIRef
from rdflib.namespace import DCTERMS, SKOS
from rdflib.term import Node

from context.descriptor import DescriptorFactory
from repository.drop_queue import DeferredGraphDropper
from repository.exceptions import NotFoundException
from repository.namespaces import (
    DESCRIBES_DOCUMENT,
    DOCUMENT,
    GLOSSARY,
    HAS_GLOSSARY,
    HAS_MODEL,
    HAS_SNAPSHOT_CREATED,
    IMPORTS_VOCABULARY,
    IS_TERM_FROM_VOCABULARY,
    IS_VERSION_OF,
    MODEL,
    SNAPSHOT_TYPES,
    TERM,
    VOCABULARY,
)
from repository.store import TripleStore
from snapshot.domain import Snapshot
from snapshot.queries import SNAPSHOT_QUERY, SNAPSHOTS_QUERY, VERSION_VALID_AT_QUERY

from .domain import Term, Vocabulary


logger = logging.getLogger(__name__)

VOCABULARY_QUERY = """
SELECT ?p ?o WHERE {
    GRAPH ?context { ?vocabulary ?p ?o . }
}
"""


class VocabularyDao:
    """Persistence of vocabularies and their terms."""

    def __init__(self, store: TripleStore, descriptor_factory: DescriptorFactory,
                 dropper: Optional[DeferredGraphDropper] = None):
        self.store = store
        self.descriptor_factory = descriptor_factory
        self.dropper = dropper

    def persist(self, vocabulary: Vocabulary, context: Optional[URIRef] = None) -> URIRef:
        """
        Persist a vocabulary with its glossary, model and document.

        Args:
            vocabulary: Vocabulary to persist
            context: Target repository context. Defaults to the context resolved
                for the vocabulary (its own identifier for a new vocabulary).

        Returns:
            Repository context the vocabulary was stored in
        """
        if context is None:
            descriptor = self.descriptor_factory.vocabulary_descriptor(vocabulary)
            context = descriptor.context
        uri = vocabulary.uri
        triples: List[Tuple[Node, Node, Node]] = [(uri, RDF.type, VOCABULARY)]
        triples += [(uri, RDF.type, t) for t in sorted(vocabulary.types)]
        triples += [(uri, DCTERMS.title, Literal(text, lang=lang)) for lang, text in vocabulary.label.items()]
        if vocabulary.primary_language:
            triples.append((uri, DCTERMS.language, Literal(vocabulary.primary_language)))
        triples += [(uri, HAS_GLOSSARY, vocabulary.glossary), (vocabulary.glossary, RDF.type, GLOSSARY),
                    (vocabulary.glossary, RDF.type, SKOS.ConceptScheme)]
        if vocabulary.model is not None:
            triples += [(uri, HAS_MODEL, vocabulary.model), (vocabulary.model, RDF.type, MODEL)]
        if vocabulary.document is not None:
            triples += [(uri, DESCRIBES_DOCUMENT, vocabulary.document), (vocabulary.document, RDF.type, DOCUMENT)]
        triples += [(uri, IMPORTS_VOCABULARY, imported) for imported in sorted(vocabulary.imported_vocabularies)]

        self.store.insert(context, triples)
        logger.info(f"Persisted vocabulary {uri} in context {context}")
        return context

    def persist_term(self, term: Term, vocabulary: Vocabulary) -> None:
        """Persist a term into the context of its vocabulary."""
        descriptor = self.descriptor_factory.term_descriptor(vocabulary)
        glossary = term.glossary or vocabulary.glossary
        uri = term.uri
        triples: List[Tuple[Node, Node, Node]] = [
            (uri, RDF.type, TERM),
            (uri, IS_TERM_FROM_VOCABULARY, vocabulary.uri),
            (uri, SKOS.inScheme, glossary),
        ]
        triples += [(uri, SKOS.prefLabel, Literal(text, lang=lang)) for lang, text in term.label.items()]
        triples += [(uri, SKOS.definition, Literal(text, lang=lang)) for lang, text in term.definition.items()]
        triples += [(uri, SKOS.broader, parent) for parent in term.parent_terms]
        triples += [(uri, SKOS.relatedMatch, other) for other in term.related_match]
        triples += [(uri, SKOS.exactMatch, other) for other in term.exact_match]
        if term.top_concept:
            triples.append((glossary, SKOS.hasTopConcept, uri))
        self.store.insert(descriptor.context, triples)
        logger.debug(f"Persisted term {uri} in context {descriptor.context}")

    def find(self, uri: URIRef) -> Optional[Vocabulary]:
        """Find vocabulary by identifier. Returns None if it does not exist."""
        uri = URIRef(uri)
        if not self.exists(uri):
            return None
        context = self.descriptor_factory.vocabulary_descriptor(uri).context
        rows = self.store.select(VOCABULARY_QUERY, context=context, vocabulary=uri)
        values: Dict[URIRef, List[Node]] = {}
        for row in rows:
            values.setdefault(row.p, []).append(row.o)
        glossary = values.get(HAS_GLOSSARY, [None])[0]
        language = values.get(DCTERMS.language, [None])[0]
        return Vocabulary(
            uri=uri,
            glossary=glossary,
            label={value.language or "": str(value) for value in values.get(DCTERMS.title, [])},
            model=values.get(HAS_MODEL, [None])[0],
            document=values.get(DESCRIBES_DOCUMENT, [None])[0],
            imported_vocabularies=set(values.get(IMPORTS_VOCABULARY, [])),
            primary_language=str(language) if language is not None else None,
            types={t for t in values.get(RDF.type, []) if t != VOCABULARY},
        )

    def exists(self, uri: URIRef) -> bool:
        return self.store.ask("ASK { ?vocabulary a ?type . }", vocabulary=URIRef(uri), type=VOCABULARY)

    def is_snapshot(self, uri: URIRef) -> bool:
        return self.store.ask("ASK { ?vocabulary a ?type . FILTER (?type IN (?snapshotTypes)) }",
                              vocabulary=URIRef(uri), snapshotTypes=SNAPSHOT_TYPES)

    def remove(self, vocabulary) -> None:
        """
        Remove the vocabulary by dropping its repository context.

        The context is dropped immediately, or queued for a deferred drop if a
        dropper is configured.
        """
        uri = URIRef(getattr(vocabulary, "uri", vocabulary))
        if not self.exists(uri):
            raise NotFoundException.create("Vocabulary", uri)
        context = self.descriptor_factory.vocabulary_descriptor(uri).context
        if self.dropper is not None:
            self.dropper.enqueue(context)
        else:
            self.store.drop_graph(context)
        logger.info(f"Removed vocabulary {uri} (context {context})")


class SnapshotDao:
    """Lookup of snapshots of assets."""

    def __init__(self, store: TripleStore):
        self.store = store

    def find(self, uri: URIRef) -> Optional[Snapshot]:
        """Find snapshot by identifier."""
        rows = self.store.select(SNAPSHOT_QUERY, snapshot=URIRef(uri), **self._parameters())
        if not rows:
            return None
        row = rows[0]
        return Snapshot(uri=URIRef(uri), created=row.created.toPython(), version_of=row.versionOf, kind=row.kind)

    def find_snapshots(self, asset: URIRef) -> List[Snapshot]:
        """Find all snapshots of the asset, newest first."""
        rows = self.store.select(SNAPSHOTS_QUERY, asset=URIRef(asset), **self._parameters())
        return [Snapshot(uri=row.snapshot, created=row.created.toPython(), version_of=URIRef(asset), kind=row.kind)
                for row in rows]

    def find_version_valid_at(self, asset: URIRef, at: datetime) -> Optional[Snapshot]:
        """
        Find the snapshot of the asset valid at the specified time.

        That is the newest snapshot created at or before the time.
        """
        if at.tzinfo is None:
            at = at.replace(tzinfo=timezone.utc)
        rows = self.store.select(VERSION_VALID_AT_QUERY, asset=URIRef(asset), at=Literal(at), **self._parameters())
        if not rows:
            return None
        row = rows[0]
        return Snapshot(uri=row.snapshot, created=row.created.toPython(), version_of=URIRef(asset), kind=row.kind)

    @staticmethod
    def _parameters() -> dict:
        return dict(isVersionOf=IS_VERSION_OF, hasCreated=HAS_SNAPSHOT_CREATED, snapshotTypes=SNAPSHOT_TYPES)
