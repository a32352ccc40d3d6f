"""
Workspace service.

In some deployments, users edit only a specific set of vocabularies, more
precisely working copies of them stored in dedicated contexts. This service
manages which workspace, or which set of contexts, is open for editing.
"""

import logging
import uuid
from typing import Iterable, Optional, Set

from rdflib import URIRef

from context.mapper import VocabularyContextMapper
from repository.exceptions import NotFoundException

from .domain import VocabularyInfo, Workspace, WorkspaceMetadata
from .metadata import CachingWorkspaceMetadataProvider, WorkspaceStore


logger = logging.getLogger(__name__)


class WorkspaceService:
    """
    Opens and closes workspaces.

    The context mapper is used to find vocabularies in explicitly opened
    contexts. It must not be the workspace-aware mapper itself.
    """

    def __init__(self, context_mapper: VocabularyContextMapper,
                 metadata_provider: CachingWorkspaceMetadataProvider, workspace_store: WorkspaceStore):
        self.context_mapper = context_mapper
        self.metadata_provider = metadata_provider
        self.workspace_store = workspace_store
        self._editing_session: Optional[URIRef] = None

    def open_workspace(self, workspace: URIRef) -> Workspace:
        """
        Open the workspace with the specified identifier, reloading its metadata.

        Raises:
            NotFoundException: If the workspace does not exist
        """
        logger.info(f"Opening workspace {workspace}")
        ws = self.metadata_provider.get_workspace(workspace)
        self._evict_editing_session()
        self.metadata_provider.load_workspace(ws)
        self.workspace_store.set_current_workspace(ws.uri)
        return ws

    def open_for_editing(self, contexts: Iterable[URIRef]) -> WorkspaceMetadata:
        """
        Open the specified contexts for editing.

        The contexts are expected to contain working copies of vocabularies and
        override contexts of these vocabularies. Previously opened contexts are
        replaced.

        Raises:
            NotFoundException: If a context does not contain a vocabulary
        """
        contexts = [URIRef(ctx) for ctx in contexts]
        logger.debug(f"Opening the following vocabulary contexts for editing: {contexts}")
        vocabularies = {}
        for ctx in contexts:
            vocabulary = self.context_mapper.get_vocabulary_in_context(ctx)
            if vocabulary is None:
                raise NotFoundException(f"No vocabulary found in context {ctx}")
            logger.debug(f"Registering working context {ctx} for vocabulary {vocabulary}.")
            vocabularies[vocabulary] = VocabularyInfo(vocabulary, ctx)

        workspace = Workspace(URIRef(f"urn:uuid:{uuid.uuid4()}"), label="Editing session")
        self._evict_editing_session()
        metadata = self.metadata_provider.init_workspace_metadata(workspace,
                                                                  WorkspaceMetadata(workspace.uri, vocabularies))
        self.workspace_store.set_current_workspace(workspace.uri)
        self._editing_session = workspace.uri
        return metadata

    def get_currently_edited_contexts(self) -> Set[URIRef]:
        metadata = self.metadata_provider.get_current_workspace_metadata()
        return metadata.get_vocabulary_contexts() if metadata is not None else set()

    def get_current_workspace(self) -> Optional[Workspace]:
        return self.metadata_provider.get_current_workspace()

    def close_workspace(self) -> None:
        current = self.workspace_store.get_current_workspace()
        if current is not None:
            logger.info(f"Closing workspace {current}")
        self._evict_editing_session()
        self.workspace_store.clear()

    def _evict_editing_session(self) -> None:
        # Editing sessions exist only in memory
        if self._editing_session is not None:
            self.metadata_provider.evict(self._editing_session)
            self._editing_session = None
