"""
Cascading snapshot removal.

Removing a vocabulary snapshot removes also snapshots of related vocabularies
created by the same cascading operation, i.e., having the same creation time.
"""

import logging
from typing import List

from rdflib import URIRef

from relationship.resolver import VocabularyRelationshipResolver
from repository.exceptions import NotFoundException, UnsupportedAssetOperationException, UnsupportedOperationException
from repository.namespaces import (
    HAS_SNAPSHOT_CREATED,
    IS_SNAPSHOT_OF_VOCABULARY,
    SNAPSHOT_CASCADE_RELATIONSHIPS,
    VOCABULARY_SNAPSHOT,
)
from repository.store import TripleStore

from .domain import Snapshot
from .queries import VOCABULARY_SNAPSHOT_GRAPHS_QUERY


logger = logging.getLogger(__name__)

SNAPSHOT_DETAIL_QUERY = """
SELECT ?type ?liveVocabulary ?created WHERE {
    ?snapshot a ?type .
    OPTIONAL { ?snapshot ?isSnapshotOfVocabulary ?liveVocabulary . }
    OPTIONAL { ?snapshot ?hasCreated ?created . }
}
"""


class CascadingVocabularySnapshotRemover:
    """Removes a vocabulary snapshot together with snapshots of related vocabularies."""

    def __init__(self, store: TripleStore, resolver: VocabularyRelationshipResolver,
                 cascade_edges=SNAPSHOT_CASCADE_RELATIONSHIPS):
        self.store = store
        self.resolver = resolver
        self.cascade_edges = frozenset(cascade_edges)

    def remove_snapshot(self, snapshot: Snapshot) -> None:
        """
        Remove the snapshot and all snapshots created with it.

        Args:
            snapshot: Vocabulary snapshot to remove

        Raises:
            UnsupportedAssetOperationException: If the snapshot is not a vocabulary snapshot
            NotFoundException: If the snapshot does not exist
            UnsupportedOperationException: If the resource is not a snapshot
        """
        if not snapshot.is_vocabulary_snapshot():
            raise UnsupportedAssetOperationException(
                f"Removal of snapshots of type {snapshot.kind} is not supported.")
        logger.info(f"Removing snapshot {snapshot.uri}")

        rows = self.store.select(SNAPSHOT_DETAIL_QUERY, snapshot=snapshot.uri,
                                 isSnapshotOfVocabulary=IS_SNAPSHOT_OF_VOCABULARY,
                                 hasCreated=HAS_SNAPSHOT_CREATED)
        if not rows:
            raise NotFoundException.create("Snapshot", snapshot.uri)
        if not any(row.type == VOCABULARY_SNAPSHOT for row in rows):
            raise UnsupportedOperationException(f"Resource {snapshot.uri} is not a vocabulary snapshot.")

        live = next((row.liveVocabulary for row in rows if row.liveVocabulary is not None), snapshot.version_of)
        created = next((row.created for row in rows if row.created is not None), None)
        if created is None:
            raise UnsupportedOperationException(f"Snapshot {snapshot.uri} has no creation time.")

        cascade = set(self.resolver.get_related_vocabularies(live, self.cascade_edges))
        cascade.add(live)

        with self.store.transaction():
            for vocabulary in sorted(cascade):
                graphs = self._snapshot_graphs(vocabulary, created)
                if not graphs:
                    logger.warning(f"No snapshot of vocabulary {vocabulary} created at {created} found, skipping.")
                    continue
                for graph in graphs:
                    logger.debug(f"Dropping snapshot context {graph}")
                    self.store.drop_graph(graph)

    def _snapshot_graphs(self, vocabulary: URIRef, created) -> List[URIRef]:
        return self.store.select_values(VOCABULARY_SNAPSHOT_GRAPHS_QUERY, vocabulary=vocabulary,
                                        created=created, vocabularySnapshot=VOCABULARY_SNAPSHOT,
                                        isSnapshotOfVocabulary=IS_SNAPSHOT_OF_VOCABULARY,
                                        hasCreated=HAS_SNAPSHOT_CREATED)
