"""
Domain models for the snapshot module.
"""

from dataclasses import dataclass
from datetime import datetime

from rdflib import URIRef

from repository.namespaces import VOCABULARY_SNAPSHOT


@dataclass(frozen=True)
class Snapshot:
    """Immutable timestamped version of an asset."""

    uri: URIRef
    created: datetime
    version_of: URIRef                  # original asset
    kind: URIRef = VOCABULARY_SNAPSHOT  # pdp:verze-slovníku, pdp:verze-pojmu, ...

    def is_vocabulary_snapshot(self) -> bool:
        return self.kind == VOCABULARY_SNAPSHOT
