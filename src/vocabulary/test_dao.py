"""
Unit tests for vocabulary and snapshot data access.

HOW TO RUN:
From the src directory, run:
    python -m pytest vocabulary/test_dao.py -v
"""

from datetime import datetime, timezone
from unittest.mock import Mock

import pytest
from rdflib import URIRef
from rdflib.namespace import SKOS

from context.descriptor import DescriptorFactory
from context.mapper import DefaultVocabularyContextMapper
from relationship.resolver import RecursiveVocabularyRelationshipResolver
from repository.exceptions import NotFoundException
from repository.namespaces import IS_TERM_FROM_VOCABULARY, SNAPSHOT_CASCADE_RELATIONSHIPS, VOCABULARY_SNAPSHOT
from snapshot.creator import CascadingSnapshotCreator

from .dao import SnapshotDao, VocabularyDao
from .domain import Term, Vocabulary


VOCABULARY_URI = URIRef("http://example.org/vocabulary/a")
CONTEXT = URIRef("http://example.org/context/a")


def create_vocabulary(**kwargs) -> Vocabulary:
    defaults = dict(
        uri=VOCABULARY_URI,
        glossary=URIRef(f"{VOCABULARY_URI}/glosář"),
        label={"cs": "Slovník A", "en": "Vocabulary A"},
        model=URIRef(f"{VOCABULARY_URI}/model"),
        document=URIRef(f"{VOCABULARY_URI}/dokument"),
        primary_language="cs",
    )
    defaults.update(kwargs)
    return Vocabulary(**defaults)


@pytest.fixture
def dao(store):
    return VocabularyDao(store, DescriptorFactory(DefaultVocabularyContextMapper(store)))


class TestVocabularyDao:

    def test_new_vocabulary_is_persisted_in_its_own_context(self, store, dao):
        context = dao.persist(create_vocabulary())

        assert context == VOCABULARY_URI
        assert store.contains_graph(VOCABULARY_URI)

    def test_persisted_vocabulary_is_found(self, dao):
        imported = URIRef("http://example.org/vocabulary/b")
        vocabulary = create_vocabulary(imported_vocabularies={imported})
        dao.persist(vocabulary, CONTEXT)

        assert dao.find(VOCABULARY_URI) == vocabulary

    def test_find_returns_none_for_unknown_vocabulary(self, dao):
        assert dao.find(VOCABULARY_URI) is None
        assert not dao.exists(VOCABULARY_URI)

    def test_existing_vocabulary_is_updated_in_its_context(self, store, dao):
        dao.persist(create_vocabulary(), CONTEXT)

        context = dao.persist(create_vocabulary(label={"en": "Renamed"}))

        assert context == CONTEXT
        assert not store.contains_graph(VOCABULARY_URI)

    def test_term_is_persisted_in_vocabulary_context(self, store, dao):
        vocabulary = create_vocabulary()
        dao.persist(vocabulary, CONTEXT)
        term = Term(uri=URIRef(f"{VOCABULARY_URI}/pojem/t"), label={"en": "term"},
                    exact_match=[URIRef("http://example.org/vocabulary/b/pojem/x")], top_concept=True)

        dao.persist_term(term, vocabulary)

        assert store.ask("ASK { GRAPH ?context { ?term ?inVocabulary ?vocabulary ; ?inScheme ?glossary . "
                         "?glossary ?hasTopConcept ?term . } }",
                         context=CONTEXT, term=term.uri, inVocabulary=IS_TERM_FROM_VOCABULARY,
                         vocabulary=VOCABULARY_URI, inScheme=SKOS.inScheme, glossary=vocabulary.glossary,
                         hasTopConcept=SKOS.hasTopConcept)

    def test_remove_drops_vocabulary_context(self, store, dao):
        dao.persist(create_vocabulary(), CONTEXT)

        dao.remove(VOCABULARY_URI)

        assert not store.contains_graph(CONTEXT)
        assert not dao.exists(VOCABULARY_URI)

    def test_remove_with_dropper_enqueues_context(self, store):
        dropper = Mock()
        dao = VocabularyDao(store, DescriptorFactory(DefaultVocabularyContextMapper(store)), dropper)
        dao.persist(create_vocabulary(), CONTEXT)

        dao.remove(create_vocabulary())

        dropper.enqueue.assert_called_once_with(CONTEXT)
        assert store.contains_graph(CONTEXT)

    def test_remove_unknown_vocabulary_raises_not_found(self, dao):
        with pytest.raises(NotFoundException):
            dao.remove(VOCABULARY_URI)


class TestSnapshotDao:
    FIRST = datetime(2024, 1, 2, 3, 4, 5, tzinfo=timezone.utc)
    SECOND = datetime(2024, 3, 4, 5, 6, 7, tzinfo=timezone.utc)

    @pytest.fixture
    def snapshots(self, store, data):
        vocabulary = data.vocabulary("a")
        resolver = RecursiveVocabularyRelationshipResolver(store, SNAPSHOT_CASCADE_RELATIONSHIPS)
        mapper = DefaultVocabularyContextMapper(store)
        return vocabulary, [CascadingSnapshotCreator(store, mapper, resolver, timestamp=t).create_snapshot(vocabulary)
                            for t in (self.FIRST, self.SECOND)]

    def test_find_snapshot(self, store, snapshots):
        vocabulary, (first, _) = snapshots

        found = SnapshotDao(store).find(first.uri)

        assert found == first
        assert found.kind == VOCABULARY_SNAPSHOT

    def test_find_returns_none_for_live_vocabulary(self, store, snapshots):
        vocabulary, _ = snapshots

        assert SnapshotDao(store).find(vocabulary) is None

    def test_find_snapshots_newest_first(self, store, snapshots):
        vocabulary, (first, second) = snapshots

        assert [s.uri for s in SnapshotDao(store).find_snapshots(vocabulary)] == [second.uri, first.uri]

    def test_find_version_valid_at(self, store, snapshots):
        vocabulary, (first, second) = snapshots
        dao = SnapshotDao(store)

        assert dao.find_version_valid_at(vocabulary, datetime(2024, 2, 1, tzinfo=timezone.utc)).uri == first.uri
        assert dao.find_version_valid_at(vocabulary, self.SECOND).uri == second.uri
        assert dao.find_version_valid_at(vocabulary, datetime(2023, 1, 1, tzinfo=timezone.utc)) is None

    def test_vocabulary_dao_recognizes_snapshots(self, dao, snapshots):
        vocabulary, (first, _) = snapshots

        assert dao.is_snapshot(first.uri)
        assert not dao.is_snapshot(vocabulary)

    def test_naive_time_is_treated_as_utc(self, store, snapshots):
        vocabulary, (first, _) = snapshots

        assert SnapshotDao(store).find_version_valid_at(vocabulary, datetime(2024, 1, 2, 3, 4, 5)).uri == first.uri
