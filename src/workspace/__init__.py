"""
Workspace Module

This module manages workspaces, i.e., sets of vocabulary working copies open
for editing, and caches their metadata for the workspace-aware context mapper.

Public Interface:
- WorkspaceService: Opening and closing workspaces
- CachingWorkspaceMetadataProvider: Cached workspace metadata
- ChangeTrackingContextResolver: Change tracking context of changed assets

Private Components:
- WorkspaceDao: Workspace queries
- WorkspaceStore: Current workspace holder
- Domain models: Workspace, WorkspaceMetadata, VocabularyInfo
"""

from .change_tracking import ChangeTrackingContextResolver
from .dao import WorkspaceDao
from .domain import VocabularyInfo, Workspace, WorkspaceMetadata
from .metadata import CachingWorkspaceMetadataProvider, WorkspaceStore
from .service import WorkspaceService

__all__ = [
    "WorkspaceService",
    "CachingWorkspaceMetadataProvider",
    "ChangeTrackingContextResolver",
    "WorkspaceDao",
    "WorkspaceStore",
    "Workspace",
    "WorkspaceMetadata",
    "VocabularyInfo",
]
