"""
Unit tests for the workspace service.
"""

import pytest
from rdflib import RDF, URIRef

from context import create_context_mapper
from context.mapper import DefaultVocabularyContextMapper
from repository.config import Configuration
from repository.exceptions import NotFoundException
from repository.namespaces import REFERS_TO_CONTEXT, WORKSPACE

from .dao import WorkspaceDao
from .metadata import CachingWorkspaceMetadataProvider, WorkspaceStore
from .service import WorkspaceService


CANONICAL = URIRef("http://example.org/context/a")
WORKING_COPY = URIRef("http://example.org/context/working-copy-a")
WORKSPACE_URI = URIRef("http://example.org/workspace/1")


@pytest.fixture
def workspace_store():
    return WorkspaceStore()


@pytest.fixture
def provider(store, workspace_store):
    return CachingWorkspaceMetadataProvider(WorkspaceDao(store), workspace_store)


@pytest.fixture
def service(store, provider, workspace_store):
    return WorkspaceService(DefaultVocabularyContextMapper(store), provider, workspace_store)


@pytest.fixture
def vocabulary(data):
    data.vocabulary("a", context=CANONICAL)
    return data.vocabulary("a", context=WORKING_COPY, derived_from=CANONICAL)


def test_open_for_editing_overrides_vocabulary_context(store, provider, service, vocabulary):
    mapper = create_context_mapper(Configuration(), store, provider)
    assert mapper.get_vocabulary_context(vocabulary) == CANONICAL

    metadata = service.open_for_editing([WORKING_COPY])

    assert metadata.get_vocabulary_context(vocabulary) == WORKING_COPY
    assert service.get_currently_edited_contexts() == {WORKING_COPY}
    assert mapper.get_vocabulary_context(vocabulary) == WORKING_COPY


def test_open_for_editing_unknown_context_raises_not_found(service, workspace_store):
    with pytest.raises(NotFoundException):
        service.open_for_editing([URIRef("http://example.org/context/empty")])

    assert workspace_store.get_current_workspace() is None


def test_reopening_replaces_previous_editing_session(service, vocabulary, data):
    other_context = URIRef("http://example.org/context/working-copy-b")
    other = data.vocabulary("b", context=other_context)
    service.open_for_editing([WORKING_COPY])

    metadata = service.open_for_editing([other_context])

    assert set(metadata.vocabularies) == {other}
    assert service.get_currently_edited_contexts() == {other_context}


def test_open_workspace_loads_metadata(store, service, vocabulary):
    store.insert(WORKSPACE_URI, [(WORKSPACE_URI, RDF.type, WORKSPACE),
                                 (WORKSPACE_URI, REFERS_TO_CONTEXT, WORKING_COPY)])

    workspace = service.open_workspace(WORKSPACE_URI)

    assert workspace.uri == WORKSPACE_URI
    assert service.get_current_workspace().uri == WORKSPACE_URI
    assert service.get_currently_edited_contexts() == {WORKING_COPY}


def test_open_unknown_workspace_raises_not_found(service):
    with pytest.raises(NotFoundException):
        service.open_workspace(WORKSPACE_URI)


def test_close_workspace_restores_canonical_contexts(store, provider, service, vocabulary):
    mapper = create_context_mapper(Configuration(), store, provider)
    service.open_for_editing([WORKING_COPY])

    service.close_workspace()

    assert service.get_current_workspace() is None
    assert service.get_currently_edited_contexts() == set()
    assert mapper.get_vocabulary_context(vocabulary) == CANONICAL
