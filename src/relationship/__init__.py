"""
Vocabulary Relationship Module

This module computes the set of vocabularies related to a vocabulary through
SKOS relationships of their terms, vocabulary imports or OntoGrapher links.

Public Interface:
- create_relationship_resolver: Resolver of the configured strategy
- VocabularyRelationshipResolver: Resolver interface

Private Components:
- ResolverRegistry: Strategy name -> resolver factory
- Skos, Recursive and OntoGrapher resolver strategies
"""

from .registry import ResolverRegistry, create_relationship_resolver, get_registry
from .resolver import (
    OntoGrapherVocabularyRelationshipResolver,
    RecursiveVocabularyRelationshipResolver,
    SkosVocabularyRelationshipResolver,
    VocabularyRelationshipResolver,
)

__all__ = [
    "create_relationship_resolver",
    "get_registry",
    "ResolverRegistry",
    "VocabularyRelationshipResolver",
    "SkosVocabularyRelationshipResolver",
    "RecursiveVocabularyRelationshipResolver",
    "OntoGrapherVocabularyRelationshipResolver",
]
