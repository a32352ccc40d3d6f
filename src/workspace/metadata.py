"""
Workspace metadata caching.

Metadata of a workspace (which vocabularies are edited in it and in which
contexts) are loaded by a single query on first access and then served from
memory until the workspace is reloaded or evicted.
"""

import logging
import threading
from typing import Dict, Optional

from rdflib import URIRef

from repository.exceptions import NotFoundException

from .dao import WorkspaceDao
from .domain import Workspace, WorkspaceMetadata


logger = logging.getLogger(__name__)


class WorkspaceStore:
    """Holds identifier of the workspace currently open for editing."""

    def __init__(self):
        self._current: Optional[URIRef] = None

    def get_current_workspace(self) -> Optional[URIRef]:
        return self._current

    def set_current_workspace(self, workspace: URIRef) -> None:
        self._current = URIRef(workspace)

    def clear(self) -> None:
        self._current = None


class CachingWorkspaceMetadataProvider:
    """Provides workspace metadata, caching them per workspace."""

    def __init__(self, workspace_dao: WorkspaceDao, workspace_store: WorkspaceStore):
        self.workspace_dao = workspace_dao
        self.workspace_store = workspace_store
        self._workspaces: Dict[URIRef, Workspace] = {}
        self._metadata: Dict[URIRef, WorkspaceMetadata] = {}
        self._lock = threading.Lock()

    def get_workspace(self, workspace: URIRef) -> Workspace:
        """
        Get workspace with the specified identifier.

        Raises:
            NotFoundException: If the workspace does not exist
        """
        workspace = URIRef(workspace)
        cached = self._workspaces.get(workspace)
        if cached is not None:
            return cached
        found = self.workspace_dao.find(workspace)
        if found is None:
            raise NotFoundException.create("Workspace", workspace)
        self._workspaces[workspace] = found
        return found

    def get_or_load(self, workspace: URIRef) -> WorkspaceMetadata:
        """Get metadata of the workspace, loading them on first access."""
        workspace = URIRef(workspace)
        metadata = self._metadata.get(workspace)
        if metadata is not None:
            return metadata
        return self.load_workspace(self.get_workspace(workspace))

    get_workspace_metadata = get_or_load

    def load_workspace(self, workspace: Workspace) -> WorkspaceMetadata:
        """Load metadata of the workspace, replacing any cached ones."""
        logger.info(f"Loading metadata of workspace {workspace.uri}")
        vocabularies = self.workspace_dao.find_workspace_vocabulary_metadata(workspace.uri)
        metadata = WorkspaceMetadata(workspace.uri, {info.vocabulary: info for info in vocabularies})
        with self._lock:
            self._workspaces[workspace.uri] = workspace
            self._metadata[workspace.uri] = metadata
        return metadata

    def init_workspace_metadata(self, workspace: Workspace, metadata: Optional[WorkspaceMetadata] = None) -> WorkspaceMetadata:
        """Register metadata of a workspace without loading them from the repository."""
        if metadata is None:
            metadata = WorkspaceMetadata(workspace.uri)
        with self._lock:
            self._workspaces[workspace.uri] = workspace
            self._metadata[workspace.uri] = metadata
        return metadata

    def evict(self, workspace: URIRef) -> None:
        with self._lock:
            self._workspaces.pop(URIRef(workspace), None)
            self._metadata.pop(URIRef(workspace), None)

    def get_current_workspace(self) -> Optional[Workspace]:
        current = self.workspace_store.get_current_workspace()
        return self.get_workspace(current) if current is not None else None

    def get_current_workspace_metadata(self) -> Optional[WorkspaceMetadata]:
        """Metadata of the workspace currently open for editing, None if there is none."""
        current = self.workspace_store.get_current_workspace()
        return self.get_or_load(current) if current is not None else None
