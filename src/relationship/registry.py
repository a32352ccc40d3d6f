"""
Registry of vocabulary relationship resolution strategies.

Maps strategy names to factories of resolvers, so that the strategy can be
selected by configuration.
"""

import logging
from typing import Callable, Dict, List

from repository.config import Configuration, RelationshipStrategy
from repository.exceptions import ConfigurationError
from repository.store import TripleStore

from .resolver import (
    OntoGrapherVocabularyRelationshipResolver,
    RecursiveVocabularyRelationshipResolver,
    SkosVocabularyRelationshipResolver,
    VocabularyRelationshipResolver,
)


logger = logging.getLogger(__name__)

ResolverFactory = Callable[[TripleStore, Configuration], VocabularyRelationshipResolver]


class ResolverRegistry:
    """Registry for relationship resolver factories."""

    def __init__(self):
        self._factories: Dict[str, ResolverFactory] = {}
        self._register_default_factories()

    def _register_default_factories(self):
        """Register the built-in strategies."""
        self.register(RelationshipStrategy.SKOS,
                      lambda store, config: SkosVocabularyRelationshipResolver(
                          store, config.relationships.skos_edge_uris()))
        self.register(RelationshipStrategy.RECURSIVE,
                      lambda store, config: RecursiveVocabularyRelationshipResolver(
                          store, config.relationships.cascade_edge_uris()))
        self.register(RelationshipStrategy.ONTOGRAPHER,
                      lambda store, config: OntoGrapherVocabularyRelationshipResolver(store))

    def register(self, strategy: str, factory: ResolverFactory):
        """
        Register a resolver factory for a strategy.

        Args:
            strategy: Strategy name
            factory: Callable creating the resolver from store and configuration
        """
        self._factories[self._key(strategy)] = factory

    def has_strategy(self, strategy: str) -> bool:
        return self._key(strategy) in self._factories

    def get_available_strategies(self) -> List[str]:
        return sorted(self._factories)

    def create(self, strategy: str, store: TripleStore, config: Configuration) -> VocabularyRelationshipResolver:
        """
        Create a resolver for the strategy.

        Raises:
            ConfigurationError: If the strategy is not registered
        """
        key = self._key(strategy)
        if key not in self._factories:
            raise ConfigurationError(f"Unknown relationship strategy: {key}. "
                                     f"Available: {self.get_available_strategies()}")
        resolver = self._factories[key](store, config)
        logger.debug(f"Created {type(resolver).__name__} for strategy '{key}'")
        return resolver

    @staticmethod
    def _key(strategy) -> str:
        return strategy.value if isinstance(strategy, RelationshipStrategy) else str(strategy)


# Global registry instance
_registry = ResolverRegistry()


def get_registry() -> ResolverRegistry:
    """Get the global resolver registry."""
    return _registry


def create_relationship_resolver(store: TripleStore, config: Configuration) -> VocabularyRelationshipResolver:
    """Create the resolver selected by configuration."""
    return _registry.create(config.relationships.strategy, store, config)
