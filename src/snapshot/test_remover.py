"""
Unit tests for cascading snapshot removal.
"""

from datetime import datetime, timezone
from unittest.mock import Mock

import pytest
from rdflib import URIRef

from context.mapper import DefaultVocabularyContextMapper
from relationship.resolver import RecursiveVocabularyRelationshipResolver
from repository.exceptions import (
    NotFoundException,
    UnsupportedAssetOperationException,
    UnsupportedOperationException,
)
from repository.namespaces import SNAPSHOT_CASCADE_RELATIONSHIPS, TERM_SNAPSHOT

from .creator import CascadingSnapshotCreator
from .domain import Snapshot
from .remover import CascadingVocabularySnapshotRemover


FIRST = datetime(2024, 1, 2, 3, 4, 5, tzinfo=timezone.utc)
SECOND = datetime(2024, 2, 3, 4, 5, 6, tzinfo=timezone.utc)


@pytest.fixture
def resolver(store):
    return RecursiveVocabularyRelationshipResolver(store, SNAPSHOT_CASCADE_RELATIONSHIPS)


@pytest.fixture
def remover(store, resolver):
    return CascadingVocabularySnapshotRemover(store, resolver)


def create_snapshot(store, resolver, vocabulary, timestamp=FIRST):
    creator = CascadingSnapshotCreator(store, DefaultVocabularyContextMapper(store), resolver, timestamp=timestamp)
    return creator, creator.create_snapshot(vocabulary)


def test_removes_snapshot_with_cascade(store, resolver, remover, data):
    b = data.vocabulary("b")
    a = data.vocabulary("a", imports=[b])
    creator, snapshot = create_snapshot(store, resolver, a)

    remover.remove_snapshot(snapshot)

    assert not store.contains_graph(creator.snapshot_identifier(a))
    assert not store.contains_graph(creator.snapshot_identifier(b))
    assert store.contains_graph(a)
    assert store.contains_graph(b)


def test_keeps_snapshots_created_at_different_time(store, resolver, remover, data):
    a = data.vocabulary("a")
    _, first = create_snapshot(store, resolver, a, FIRST)
    second_creator, _ = create_snapshot(store, resolver, a, SECOND)

    remover.remove_snapshot(first)

    assert not store.contains_graph(first.uri)
    assert store.contains_graph(second_creator.snapshot_identifier(a))


def test_skips_related_vocabularies_without_matching_snapshot(store, resolver, remover, data):
    a = data.vocabulary("a")
    only_origin = Mock()
    only_origin.get_related_vocabularies.side_effect = lambda v, edges=None: {v}
    _, snapshot = create_snapshot(store, only_origin, a)
    data.vocabulary("a", imports=[data.vocabulary("b")])

    remover.remove_snapshot(snapshot)

    assert not store.contains_graph(snapshot.uri)


def test_non_vocabulary_snapshot_kind_is_unsupported(remover):
    snapshot = Snapshot(URIRef("http://example.org/term/version/x"), FIRST,
                        URIRef("http://example.org/term"), TERM_SNAPSHOT)

    with pytest.raises(UnsupportedAssetOperationException):
        remover.remove_snapshot(snapshot)


def test_missing_snapshot_raises_not_found(remover):
    uri = URIRef("http://example.org/vocabulary/a/version/20240102T030405Z")

    with pytest.raises(NotFoundException):
        remover.remove_snapshot(Snapshot(uri, FIRST, URIRef("http://example.org/vocabulary/a")))


def test_live_vocabulary_is_not_removed(store, remover, data):
    a = data.vocabulary("a")

    with pytest.raises(UnsupportedOperationException):
        remover.remove_snapshot(Snapshot(a, FIRST, a))

    assert store.contains_graph(a)
