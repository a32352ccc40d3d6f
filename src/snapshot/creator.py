"""
Cascading snapshot creation.

A snapshot of a vocabulary is created together with snapshots of all
vocabularies related to it, so that references between them point to the
snapshots as well. All snapshots created by one operation share a timestamp.
"""

import logging
from datetime import datetime, timezone
from typing import Optional, Set

from rdflib import Literal, URIRef
from rdflib.namespace import SKOS

from context.mapper import VocabularyContextMapper, vocabulary_identifier
from relationship.resolver import VocabularyRelationshipResolver
from repository.namespaces import (
    DESCRIBES_DOCUMENT,
    GLOSSARY_SNAPSHOT,
    HAS_GLOSSARY,
    HAS_MODEL,
    HAS_SNAPSHOT_CREATED,
    IMPORTS_VOCABULARY,
    IS_SNAPSHOT_OF_GLOSSARY,
    IS_SNAPSHOT_OF_MODEL,
    IS_SNAPSHOT_OF_TERM,
    IS_SNAPSHOT_OF_VOCABULARY,
    IS_VERSION_OF,
    MODEL_SNAPSHOT,
    SNAPSHOT,
    SNAPSHOT_CASCADE_RELATIONSHIPS,
    TERM_SNAPSHOT,
    VOCABULARY_SNAPSHOT,
)
from repository.patterns import MEMBERSHIP_PARAMETERS
from repository.store import TripleStore

from .domain import Snapshot
from .queries import ASSET_SNAPSHOT_UPDATE, TERM_SNAPSHOT_UPDATE, VOCABULARY_SNAPSHOT_UPDATE


logger = logging.getLogger(__name__)

TIMESTAMP_FORMAT = "%Y%m%dT%H%M%SZ"


def format_timestamp(timestamp: datetime) -> str:
    """Format timestamp for use in snapshot identifiers (UTC, second precision)."""
    return timestamp.astimezone(timezone.utc).strftime(TIMESTAMP_FORMAT)


class SnapshotCreator:
    """
    Base of snapshot creators.

    The timestamp, and thus the identifier suffix of all created snapshots,
    is fixed when the creator is constructed. A creator is meant to be used
    for a single operation.
    """

    def __init__(self, separator: str = "/version", timestamp: Optional[datetime] = None):
        """
        Initialize the creator.

        Args:
            separator: Separator of the original identifier and snapshot timestamp
            timestamp: Snapshot timestamp, defaults to the current time
        """
        if timestamp is None:
            timestamp = datetime.now(timezone.utc)
        self.timestamp = timestamp.astimezone(timezone.utc).replace(microsecond=0)
        self.separator = separator

    @property
    def suffix(self) -> str:
        return f"{self.separator}/{format_timestamp(self.timestamp)}"

    def snapshot_identifier(self, uri: URIRef) -> URIRef:
        return URIRef(f"{uri}{self.suffix}")

    def create_snapshot(self, asset) -> Snapshot:
        raise NotImplementedError


class CascadingSnapshotCreator(SnapshotCreator):
    """Creates snapshots of a vocabulary and all vocabularies related to it."""

    def __init__(self, store: TripleStore, context_mapper: VocabularyContextMapper,
                 resolver: VocabularyRelationshipResolver, separator: str = "/version",
                 cascade_edges=SNAPSHOT_CASCADE_RELATIONSHIPS, timestamp: Optional[datetime] = None):
        super().__init__(separator, timestamp)
        self.store = store
        self.context_mapper = context_mapper
        self.resolver = resolver
        self.cascade_edges = frozenset(cascade_edges)

    def create_snapshot(self, vocabulary) -> Snapshot:
        """
        Create snapshot of the vocabulary and all related vocabularies.

        Args:
            vocabulary: Vocabulary or its identifier

        Returns:
            Snapshot of the specified vocabulary
        """
        origin = vocabulary_identifier(vocabulary)
        logger.info(f"Creating snapshot of vocabulary {origin} with suffix {self.suffix}")
        cascade = self.resolve_cascade(origin)
        logger.debug(f"Snapshot cascade of {origin}: {sorted(cascade)}")

        with self.store.transaction():
            for uri in sorted(cascade):
                self._snapshot_vocabulary(uri, cascade)

        snapshot = Snapshot(uri=self.snapshot_identifier(origin), created=self.timestamp,
                            version_of=origin, kind=VOCABULARY_SNAPSHOT)
        logger.info(f"Created snapshot {snapshot.uri} ({len(cascade)} vocabularies)")
        return snapshot

    def resolve_cascade(self, origin: URIRef) -> Set[URIRef]:
        cascade = set(self.resolver.get_related_vocabularies(origin, self.cascade_edges))
        cascade.add(origin)
        return cascade

    def _snapshot_vocabulary(self, vocabulary: URIRef, cascade: Set[URIRef]) -> None:
        source = self.context_mapper.get_vocabulary_context(vocabulary)
        target = self.snapshot_identifier(vocabulary)
        logger.debug(f"Creating snapshot of vocabulary {vocabulary} from context {source} in {target}")
        common = dict(
            source=source,
            target=target,
            vocabulary=vocabulary,
            suffix=self.suffix,
            created=Literal(self.timestamp),
            cascaded=cascade,
            snapshotType=SNAPSHOT,
            isVersionOf=IS_VERSION_OF,
            hasCreated=HAS_SNAPSHOT_CREATED,
        )
        self.store.update(VOCABULARY_SNAPSHOT_UPDATE, vocabularySnapshot=VOCABULARY_SNAPSHOT,
                          isSnapshotOfVocabulary=IS_SNAPSHOT_OF_VOCABULARY,
                          describesDocument=DESCRIBES_DOCUMENT, hasGlossary=HAS_GLOSSARY,
                          hasModel=HAS_MODEL, importsVocabulary=IMPORTS_VOCABULARY, **common)
        self.store.update(ASSET_SNAPSHOT_UPDATE, hasAsset=HAS_GLOSSARY, assetSnapshotType=GLOSSARY_SNAPSHOT,
                          isSnapshotOfAsset=IS_SNAPSHOT_OF_GLOSSARY, hasTopConcept=SKOS.hasTopConcept, **common)
        self.store.update(ASSET_SNAPSHOT_UPDATE, hasAsset=HAS_MODEL, assetSnapshotType=MODEL_SNAPSHOT,
                          isSnapshotOfAsset=IS_SNAPSHOT_OF_MODEL, hasTopConcept=SKOS.hasTopConcept, **common)
        self.store.update(TERM_SNAPSHOT_UPDATE, termSnapshotType=TERM_SNAPSHOT,
                          isSnapshotOfTerm=IS_SNAPSHOT_OF_TERM, **MEMBERSHIP_PARAMETERS, **common)
