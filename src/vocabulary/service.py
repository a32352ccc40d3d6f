"""
Vocabulary service.

High-level facade over vocabulary persistence, context resolution,
relationship resolution and snapshot management.
"""

import logging
from datetime import datetime
from typing import Iterable, List, Optional, Set, Union

from rdflib import URIRef

from context import DescriptorFactory, VocabularyContextMapper, create_context_mapper
from context.mapper import vocabulary_identifier
from relationship import VocabularyRelationshipResolver, create_relationship_resolver
from repository.config import Configuration
from repository.drop_queue import DeferredGraphDropper
from repository.exceptions import NotFoundException, UnsupportedOperationException
from repository.store import TripleStore
from snapshot import CascadingSnapshotCreator, CascadingVocabularySnapshotRemover, Snapshot

from .dao import SnapshotDao, VocabularyDao
from .domain import Term, Vocabulary


logger = logging.getLogger(__name__)


class VocabularyService:
    """
    High-level service for vocabulary operations.

    The caching context mapper is reloaded explicitly whenever the set of
    vocabulary contexts changes (vocabulary or snapshot created or removed).
    """

    def __init__(self, store: TripleStore, context_mapper: VocabularyContextMapper,
                 resolver: VocabularyRelationshipResolver, config: Optional[Configuration] = None,
                 dropper: Optional[DeferredGraphDropper] = None):
        """
        Initialize the service.

        Args:
            store: Triple store
            context_mapper: Vocabulary context mapper
            resolver: Relationship resolver used for cascading snapshot operations
            config: Configuration, defaults are used if not provided
            dropper: Deferred dropper of removed vocabulary contexts. Contexts
                are dropped immediately if not provided.
        """
        self.store = store
        self.config = config or Configuration()
        self.context_mapper = context_mapper
        self.resolver = resolver
        self.dropper = dropper
        if dropper is not None and dropper.on_flush is None:
            dropper.on_flush = self.context_mapper.load
        self.descriptor_factory = DescriptorFactory(context_mapper)
        self.vocabulary_dao = VocabularyDao(store, self.descriptor_factory, dropper)
        self.snapshot_dao = SnapshotDao(store)

    @classmethod
    def from_config(cls, config: Configuration, store: Optional[TripleStore] = None,
                    workspace_metadata_provider=None, deferred_drop: bool = False) -> "VocabularyService":
        """
        Create the service with collaborators selected by configuration.

        Args:
            config: Configuration
            store: Triple store, created from configuration if not provided
            workspace_metadata_provider: Optional provider of current workspace metadata
            deferred_drop: Whether removed vocabulary contexts are dropped periodically
        """
        store = store or TripleStore.from_config(config.repository)
        mapper = create_context_mapper(config, store, workspace_metadata_provider)
        resolver = create_relationship_resolver(store, config)
        dropper = DeferredGraphDropper(store, config.repository.drop_interval) if deferred_drop else None
        return cls(store, mapper, resolver, config, dropper)

    # Vocabularies

    def persist(self, vocabulary: Vocabulary, context: Optional[URIRef] = None) -> URIRef:
        """Persist vocabulary and notify the context mapper."""
        context = self.vocabulary_dao.persist(vocabulary, context)
        self.context_mapper.load()
        return context

    def persist_term(self, term: Term, vocabulary: Vocabulary) -> None:
        self.vocabulary_dao.persist_term(term, vocabulary)

    def find(self, uri: URIRef) -> Optional[Vocabulary]:
        return self.vocabulary_dao.find(uri)

    def find_required(self, uri: URIRef) -> Vocabulary:
        vocabulary = self.vocabulary_dao.find(uri)
        if vocabulary is None:
            raise NotFoundException.create("Vocabulary", uri)
        return vocabulary

    def exists(self, uri: URIRef) -> bool:
        return self.vocabulary_dao.exists(uri)

    def remove(self, vocabulary) -> None:
        """Remove vocabulary. With deferred dropping, the mapper is reloaded after the drop."""
        self.vocabulary_dao.remove(vocabulary)
        if self.dropper is None:
            self.context_mapper.load()

    def get_vocabulary_context(self, vocabulary) -> URIRef:
        return self.context_mapper.get_vocabulary_context(vocabulary)

    def get_vocabulary_in_context(self, context: URIRef) -> Optional[URIRef]:
        return self.context_mapper.get_vocabulary_in_context(context)

    def get_related_vocabularies(self, vocabulary, edge_kinds: Optional[Iterable[URIRef]] = None) -> Set[URIRef]:
        return self.resolver.get_related_vocabularies(vocabulary_identifier(vocabulary), edge_kinds)

    # Snapshots

    def create_snapshot(self, vocabulary) -> Snapshot:
        """
        Create snapshot of the vocabulary and all vocabularies related to it.

        Raises:
            NotFoundException: If the vocabulary does not exist
        """
        uri = vocabulary_identifier(vocabulary)
        if not self.vocabulary_dao.exists(uri):
            raise NotFoundException.create("Vocabulary", uri)
        creator = CascadingSnapshotCreator(self.store, self.context_mapper, self.resolver,
                                           separator=self.config.namespace.snapshot_separator,
                                           cascade_edges=self.config.relationships.cascade_edge_uris())
        snapshot = creator.create_snapshot(uri)
        self.context_mapper.load()
        return snapshot

    def remove_snapshot(self, snapshot: Union[Snapshot, URIRef]) -> None:
        """
        Remove the snapshot and snapshots of related vocabularies created with it.

        Raises:
            NotFoundException: If the snapshot does not exist
            UnsupportedOperationException: If the target is not a vocabulary snapshot
        """
        if not isinstance(snapshot, Snapshot):
            found = self.snapshot_dao.find(snapshot)
            if found is None and self.vocabulary_dao.exists(snapshot):
                raise UnsupportedOperationException(f"Vocabulary {snapshot} is not a snapshot.")
            snapshot = found or self.find_snapshot_required(snapshot)
        remover = CascadingVocabularySnapshotRemover(self.store, self.resolver,
                                                     cascade_edges=self.config.relationships.cascade_edge_uris())
        remover.remove_snapshot(snapshot)
        self.context_mapper.load()

    def find_snapshot(self, uri: URIRef) -> Optional[Snapshot]:
        return self.snapshot_dao.find(uri)

    def find_snapshot_required(self, uri: URIRef) -> Snapshot:
        snapshot = self.snapshot_dao.find(uri)
        if snapshot is None:
            raise NotFoundException.create("Snapshot", uri)
        return snapshot

    def find_snapshots(self, asset) -> List[Snapshot]:
        return self.snapshot_dao.find_snapshots(vocabulary_identifier(asset))

    def find_version_valid_at(self, asset, at: datetime) -> Optional[Snapshot]:
        return self.snapshot_dao.find_version_valid_at(vocabulary_identifier(asset), at)

    def close(self) -> None:
        """Drop contexts still queued for removal."""
        if self.dropper is not None:
            self.dropper.stop()
