"""
Vocabulary Context Module

This module resolves which repository context (named graph) holds a
vocabulary, taking working copies of the current workspace into account.

Public Interface:
- create_context_mapper: Builds the configured mapper stack
- DescriptorFactory: Per-attribute context descriptors for persistence

Private Components:
- DefaultVocabularyContextMapper, CachingVocabularyContextMapper,
  WorkspaceVocabularyContextMapper: Mapper layers
"""

import logging
from typing import Optional

from repository.config import Configuration
from repository.store import TripleStore

from .descriptor import DescriptorFactory, EntityDescriptor
from .mapper import (
    CachingVocabularyContextMapper,
    DefaultVocabularyContextMapper,
    VocabularyContextMapper,
    WorkspaceVocabularyContextMapper,
)


logger = logging.getLogger(__name__)


def create_context_mapper(config: Configuration, store: TripleStore,
                          workspace_metadata_provider=None) -> VocabularyContextMapper:
    """
    Create vocabulary context mapper according to configuration.

    Args:
        config: Configuration
        store: Triple store
        workspace_metadata_provider: Optional provider of current workspace
            metadata. When given, working copies of the current workspace
            take precedence.

    Returns:
        Vocabulary context mapper
    """
    if config.context.cache_enabled:
        mapper: VocabularyContextMapper = CachingVocabularyContextMapper(store)
    else:
        mapper = DefaultVocabularyContextMapper(store)
    logger.debug(f"Using {type(mapper).__name__}")
    if workspace_metadata_provider is not None:
        mapper = WorkspaceVocabularyContextMapper(mapper, workspace_metadata_provider)
    return mapper


__all__ = [
    "create_context_mapper",
    "VocabularyContextMapper",
    "DefaultVocabularyContextMapper",
    "CachingVocabularyContextMapper",
    "WorkspaceVocabularyContextMapper",
    "DescriptorFactory",
    "EntityDescriptor",
]
