"""
Unit tests for workspace data access and metadata caching.

HOW TO RUN:
From the src directory, run:
    python -m pytest workspace/test_metadata.py -v
"""

from unittest.mock import Mock

import pytest
from rdflib import RDF, Literal, URIRef
from rdflib.namespace import DCTERMS

from repository.exceptions import AmbiguousVocabularyContextException, NotFoundException
from repository.namespaces import HAS_CHANGE_TRACKING_CONTEXT, REFERS_TO_CONTEXT, WORKSPACE

from .dao import WorkspaceDao
from .domain import VocabularyInfo, Workspace, WorkspaceMetadata
from .metadata import CachingWorkspaceMetadataProvider, WorkspaceStore


WORKSPACE_URI = URIRef("http://example.org/workspace/1")
WORKING_COPY = URIRef("http://example.org/context/working-copy-a")
CHANGES = URIRef("http://example.org/context/working-copy-a/zmeny")


def create_workspace(store, contexts=(), label="Workspace 1", change_tracking=None):
    triples = [(WORKSPACE_URI, RDF.type, WORKSPACE)]
    if label is not None:
        triples.append((WORKSPACE_URI, DCTERMS.title, Literal(label)))
    for ctx in contexts:
        triples.append((WORKSPACE_URI, REFERS_TO_CONTEXT, ctx))
        if change_tracking is not None:
            triples.append((ctx, HAS_CHANGE_TRACKING_CONTEXT, change_tracking))
    store.insert(WORKSPACE_URI, triples)


class TestWorkspaceDao:

    def test_find_returns_workspace_with_label(self, store):
        create_workspace(store)

        workspace = WorkspaceDao(store).find(WORKSPACE_URI)

        assert workspace == Workspace(WORKSPACE_URI, "Workspace 1")

    def test_find_returns_workspace_without_label(self, store):
        create_workspace(store, label=None)

        assert WorkspaceDao(store).find(WORKSPACE_URI) == Workspace(WORKSPACE_URI, None)

    def test_find_returns_none_for_unknown_workspace(self, store):
        dao = WorkspaceDao(store)

        assert dao.find(WORKSPACE_URI) is None
        assert not dao.exists(WORKSPACE_URI)

    def test_loads_vocabulary_working_copies(self, store, data):
        vocabulary = data.vocabulary("a", context=WORKING_COPY)
        create_workspace(store, [WORKING_COPY], change_tracking=CHANGES)

        infos = WorkspaceDao(store).find_workspace_vocabulary_metadata(WORKSPACE_URI)

        assert infos == [VocabularyInfo(vocabulary, WORKING_COPY, CHANGES)]

    def test_multiple_working_copies_of_vocabulary_are_ambiguous(self, store, data):
        other = URIRef("http://example.org/context/working-copy-b")
        data.vocabulary("a", context=WORKING_COPY)
        data.vocabulary("a", context=other)
        create_workspace(store, [WORKING_COPY, other])

        with pytest.raises(AmbiguousVocabularyContextException):
            WorkspaceDao(store).find_workspace_vocabulary_metadata(WORKSPACE_URI)


class TestWorkspaceMetadata:

    def test_lookups(self):
        vocabulary = URIRef("http://example.org/vocabulary/a")
        metadata = WorkspaceMetadata(WORKSPACE_URI, {vocabulary: VocabularyInfo(vocabulary, WORKING_COPY, CHANGES)})

        assert metadata.get_vocabulary_context(vocabulary) == WORKING_COPY
        assert metadata.get_vocabulary_context(URIRef("http://example.org/vocabulary/b")) is None
        assert metadata.get_vocabulary_contexts() == {WORKING_COPY}
        assert metadata.get_change_tracking_contexts() == {CHANGES}


class TestCachingWorkspaceMetadataProvider:

    @pytest.fixture
    def dao(self):
        dao = Mock()
        dao.find.return_value = Workspace(WORKSPACE_URI, "Workspace 1")
        dao.find_workspace_vocabulary_metadata.return_value = [
            VocabularyInfo(URIRef("http://example.org/vocabulary/a"), WORKING_COPY)
        ]
        return dao

    def test_metadata_are_loaded_once(self, dao):
        provider = CachingWorkspaceMetadataProvider(dao, WorkspaceStore())

        first = provider.get_workspace_metadata(WORKSPACE_URI)
        second = provider.get_workspace_metadata(WORKSPACE_URI)

        assert first is second
        dao.find_workspace_vocabulary_metadata.assert_called_once_with(WORKSPACE_URI)

    def test_load_workspace_replaces_cached_metadata(self, dao):
        provider = CachingWorkspaceMetadataProvider(dao, WorkspaceStore())
        first = provider.get_workspace_metadata(WORKSPACE_URI)

        reloaded = provider.load_workspace(provider.get_workspace(WORKSPACE_URI))

        assert reloaded is not first
        assert provider.get_workspace_metadata(WORKSPACE_URI) is reloaded

    def test_unknown_workspace_raises_not_found(self, dao):
        dao.find.return_value = None
        provider = CachingWorkspaceMetadataProvider(dao, WorkspaceStore())

        with pytest.raises(NotFoundException):
            provider.get_workspace_metadata(WORKSPACE_URI)

    def test_no_current_metadata_without_open_workspace(self, dao):
        provider = CachingWorkspaceMetadataProvider(dao, WorkspaceStore())

        assert provider.get_current_workspace() is None
        assert provider.get_current_workspace_metadata() is None

    def test_current_metadata_follow_workspace_store(self, dao):
        workspace_store = WorkspaceStore()
        provider = CachingWorkspaceMetadataProvider(dao, workspace_store)
        workspace_store.set_current_workspace(WORKSPACE_URI)

        assert provider.get_current_workspace().uri == WORKSPACE_URI
        assert provider.get_current_workspace_metadata().get_vocabulary_contexts() == {WORKING_COPY}

    def test_evict_forces_reload(self, dao):
        provider = CachingWorkspaceMetadataProvider(dao, WorkspaceStore())
        provider.get_workspace_metadata(WORKSPACE_URI)

        provider.evict(WORKSPACE_URI)
        provider.get_workspace_metadata(WORKSPACE_URI)

        assert dao.find_workspace_vocabulary_metadata.call_count == 2

    def test_initialized_metadata_are_not_loaded(self, dao):
        provider = CachingWorkspaceMetadataProvider(dao, WorkspaceStore())
        workspace = Workspace(URIRef("urn:uuid:session"))

        metadata = provider.init_workspace_metadata(workspace)

        assert provider.get_workspace_metadata(workspace.uri) is metadata
        dao.find.assert_not_called()


def test_metadata_of_untitled_workspace_are_loaded(store, data):
    vocabulary = data.vocabulary("a", context=WORKING_COPY)
    create_workspace(store, [WORKING_COPY], label=None)
    provider = CachingWorkspaceMetadataProvider(WorkspaceDao(store), WorkspaceStore())

    metadata = provider.get_or_load(WORKSPACE_URI)

    assert metadata.get_vocabulary_context(vocabulary) == WORKING_COPY
