"""
Workspace data access.
"""

import logging
from typing import List, Optional

from rdflib import URIRef
from rdflib.namespace import DCTERMS

from repository.exceptions import AmbiguousVocabularyContextException
from repository.namespaces import (
    HAS_CHANGE_TRACKING_CONTEXT,
    REFERS_TO_CONTEXT,
    VOCABULARY,
    WORKSPACE,
)
from repository.store import TripleStore

from .domain import VocabularyInfo, Workspace


logger = logging.getLogger(__name__)

WORKSPACE_LABEL_QUERY = """
SELECT ?label WHERE {
    GRAPH ?workspace { ?workspace ?title ?label . }
}
"""

# Vocabulary contexts are typed and linked to their change tracking contexts
# in the workspace context, vocabularies are found in the vocabulary contexts.
WORKSPACE_VOCABULARIES_QUERY = """
SELECT DISTINCT ?vocabulary ?context ?changeTrackingContext WHERE {
    GRAPH ?workspace {
        ?workspace ?refersTo ?context .
        OPTIONAL { ?context ?hasChangeTrackingContext ?changeTrackingContext . }
    }
    GRAPH ?context {
        ?vocabulary a ?vocabularyType .
    }
}
"""


class WorkspaceDao:
    """Loads workspaces and metadata of vocabularies edited in them."""

    def __init__(self, store: TripleStore):
        self.store = store

    def exists(self, workspace: URIRef) -> bool:
        return self.store.ask("ASK { GRAPH ?workspace { ?workspace a ?workspaceType . } }",
                              workspace=URIRef(workspace), workspaceType=WORKSPACE)

    def find(self, workspace: URIRef) -> Optional[Workspace]:
        if not self.exists(workspace):
            return None
        labels = [str(label) for label in self.store.select_values(WORKSPACE_LABEL_QUERY, workspace=URIRef(workspace),
                                                                   title=DCTERMS.title)]
        return Workspace(uri=URIRef(workspace), label=labels[0] if labels else None)

    def find_workspace_vocabulary_metadata(self, workspace: URIRef) -> List[VocabularyInfo]:
        """
        Load info about working copies of vocabularies in the workspace.

        Raises:
            AmbiguousVocabularyContextException: If a vocabulary has multiple working copies in the workspace
        """
        rows = self.store.select(WORKSPACE_VOCABULARIES_QUERY, workspace=URIRef(workspace),
                                 refersTo=REFERS_TO_CONTEXT, hasChangeTrackingContext=HAS_CHANGE_TRACKING_CONTEXT,
                                 vocabularyType=VOCABULARY)
        result = {}
        for row in rows:
            existing = result.get(row.vocabulary)
            if existing is not None and existing.context != row.context:
                raise AmbiguousVocabularyContextException(
                    f"Vocabulary {row.vocabulary} has multiple working copies in workspace {workspace}.")
            result[row.vocabulary] = VocabularyInfo(row.vocabulary, row.context, row.changeTrackingContext)
        logger.debug(f"Workspace {workspace} contains {len(result)} vocabularies")
        return list(result.values())
