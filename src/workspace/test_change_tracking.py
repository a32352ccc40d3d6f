"""
Unit tests for change tracking context resolution.
"""

import pytest
from rdflib import URIRef

from repository.exceptions import NotFoundException
from vocabulary.domain import Term, Vocabulary

from .change_tracking import ChangeTrackingContextResolver


def test_vocabulary_changes_are_tracked_in_vocabulary_extension(store):
    vocabulary = Vocabulary(uri=URIRef("http://example.org/vocabulary/a"),
                            glossary=URIRef("http://example.org/vocabulary/a/glosář"))

    context = ChangeTrackingContextResolver(store).resolve_change_tracking_context(vocabulary)

    assert context == URIRef("http://example.org/vocabulary/a/zmeny")


def test_term_changes_are_tracked_in_context_of_glossary_vocabulary(store, data):
    vocabulary = data.vocabulary("a")
    term = Term(uri=URIRef(f"{vocabulary}/pojem/t"), glossary=data.glossary_uri(vocabulary))

    context = ChangeTrackingContextResolver(store, "/changes").resolve_change_tracking_context(term)

    assert context == URIRef(f"{vocabulary}/changes")


def test_term_changes_use_explicit_vocabulary(store):
    vocabulary = URIRef("http://example.org/vocabulary/a")
    term = Term(uri=URIRef(f"{vocabulary}/pojem/t"), vocabulary=vocabulary)

    assert ChangeTrackingContextResolver(store).resolve_change_tracking_context(term) == URIRef(f"{vocabulary}/zmeny")


def test_term_vocabulary_is_looked_up_by_membership(store, data):
    vocabulary = data.vocabulary("a")
    term = Term(uri=data.term(vocabulary, "t"))

    assert ChangeTrackingContextResolver(store).resolve_change_tracking_context(term) == URIRef(f"{vocabulary}/zmeny")


def test_term_without_vocabulary_raises_not_found(store):
    with pytest.raises(NotFoundException):
        ChangeTrackingContextResolver(store).resolve_change_tracking_context(
            Term(uri=URIRef("http://example.org/orphan")))


def test_plain_iri_is_accepted(store):
    context = ChangeTrackingContextResolver(store).resolve_change_tracking_context(
        URIRef("http://example.org/document"))

    assert context == URIRef("http://example.org/document/zmeny")
