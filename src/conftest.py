"""
Shared pytest fixtures.

Provides an in-memory triple store and a builder of vocabulary test data.
"""

from typing import Iterable, Optional

import pytest
from rdflib import RDF, Literal, URIRef
from rdflib.namespace import DCTERMS, SKOS

from repository.namespaces import (
    DERIVED_FROM,
    DESCRIBES_DOCUMENT,
    DOCUMENT,
    GLOSSARY,
    HAS_GLOSSARY,
    HAS_MODEL,
    IMPORTS_VOCABULARY,
    IS_TERM_FROM_VOCABULARY,
    MODEL,
    TERM,
    VOCABULARY,
)
from repository.store import TripleStore


BASE = "http://example.org/"


class VocabularyDataBuilder:
    """Writes vocabularies and terms into the store."""

    def __init__(self, store: TripleStore):
        self.store = store

    @staticmethod
    def vocabulary_uri(name: str) -> URIRef:
        return URIRef(f"{BASE}vocabulary/{name}")

    @staticmethod
    def glossary_uri(vocabulary: URIRef) -> URIRef:
        return URIRef(f"{vocabulary}/glosář")

    @staticmethod
    def model_uri(vocabulary: URIRef) -> URIRef:
        return URIRef(f"{vocabulary}/model")

    def vocabulary(self, name: str, context: Optional[URIRef] = None, imports: Iterable[URIRef] = (),
                   derived_from: Optional[URIRef] = None, document: bool = True) -> URIRef:
        """Create a vocabulary with glossary, model and document. Returns the vocabulary IRI."""
        uri = self.vocabulary_uri(name)
        context = context or uri
        glossary = self.glossary_uri(uri)
        model = self.model_uri(uri)
        triples = [
            (uri, RDF.type, VOCABULARY),
            (uri, DCTERMS.title, Literal(f"Vocabulary {name}", lang="en")),
            (uri, HAS_GLOSSARY, glossary),
            (uri, HAS_MODEL, model),
            (glossary, RDF.type, GLOSSARY),
            (glossary, RDF.type, SKOS.ConceptScheme),
            (model, RDF.type, MODEL),
        ]
        if document:
            doc = URIRef(f"{uri}/dokument")
            triples += [(uri, DESCRIBES_DOCUMENT, doc), (doc, RDF.type, DOCUMENT)]
        triples += [(uri, IMPORTS_VOCABULARY, imported) for imported in imports]
        if derived_from is not None:
            triples.append((context, DERIVED_FROM, derived_from))
        self.store.insert(context, triples)
        return uri

    def term(self, vocabulary: URIRef, name: str, context: Optional[URIRef] = None,
             explicit_membership: bool = True, top: bool = False, **relations) -> URIRef:
        """
        Create a term of the vocabulary.

        Keyword arguments name SKOS properties (e.g. relatedMatch=[...]) linking
        the term to other terms.
        """
        uri = URIRef(f"{vocabulary}/pojem/{name}")
        glossary = self.glossary_uri(vocabulary)
        triples = [
            (uri, RDF.type, TERM),
            (uri, SKOS.prefLabel, Literal(name, lang="en")),
            (uri, SKOS.inScheme, glossary),
        ]
        if explicit_membership:
            triples.append((uri, IS_TERM_FROM_VOCABULARY, vocabulary))
        if top:
            triples.append((glossary, SKOS.hasTopConcept, uri))
        for prop, targets in relations.items():
            triples += [(uri, SKOS[prop], target) for target in targets]
        self.store.insert(context or vocabulary, triples)
        return uri


@pytest.fixture
def store():
    """Empty in-memory triple store."""
    return TripleStore()


@pytest.fixture
def data(store):
    return VocabularyDataBuilder(store)
