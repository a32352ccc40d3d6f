"""
Configuration of the vocabulary store.

Configuration is a tree of pydantic models with sensible defaults. Values can
be overridden through environment variables (optionally loaded from a .env
file) using load_configuration().
"""

import logging
import os
from enum import Enum
from typing import Any, Dict, FrozenSet, List, Optional

from dotenv import load_dotenv
from pydantic import BaseModel, Field, ValidationError, field_validator
from rdflib import URIRef
from rdflib.namespace import SKOS

from .exceptions import ConfigurationError
from .namespaces import DIRECT_SKOS_RELATIONSHIPS, SNAPSHOT_CASCADE_RELATIONSHIPS


logger = logging.getLogger(__name__)

ENV_PREFIX = "VOCABULARY_"


class RelationshipStrategy(str, Enum):
    """Available vocabulary relationship resolution strategies."""
    SKOS = "skos"                 # Single hop over SKOS mapping properties
    RECURSIVE = "recursive"       # Transitive closure over SKOS mappings and imports
    ONTOGRAPHER = "ontographer"   # Links created in OntoGrapher


def _expand_edge(edge: str) -> str:
    edge = edge.strip()
    if edge.startswith("skos:"):
        return str(SKOS[edge[len("skos:"):]])
    return edge


def _parse_edges(value: Any) -> Any:
    if isinstance(value, str):
        value = [item for item in value.split(",") if item.strip()]
    if isinstance(value, (list, tuple, set, frozenset)):
        return sorted(_expand_edge(str(item)) for item in value)
    return value


class RepositoryConfig(BaseModel):
    """Triple store connection settings. No endpoints means an in-memory store."""

    query_endpoint: Optional[str] = Field(default=None, description="SPARQL query endpoint URL")
    update_endpoint: Optional[str] = Field(default=None, description="SPARQL update endpoint URL")
    username: Optional[str] = Field(default=None, description="Endpoint user name")
    password: Optional[str] = Field(default=None, description="Endpoint password")
    drop_interval: float = Field(default=30.0, gt=0, description="Seconds between deferred graph drops")

    @property
    def is_remote(self) -> bool:
        return bool(self.query_endpoint)


class NamespaceConfig(BaseModel):
    snapshot_separator: str = Field(default="/version",
                                    description="Separator of snapshot timestamp and original asset identifier")

    @field_validator("snapshot_separator")
    @classmethod
    def validate_separator(cls, value: str) -> str:
        if not value or any(c.isspace() for c in value):
            raise ValueError("Snapshot separator must be a non-empty string without whitespace")
        return value


class ChangeTrackingConfig(BaseModel):
    context_extension: str = Field(default="/zmeny",
                                   description="Extension appended to a vocabulary IRI to get its change tracking context")


class ContextConfig(BaseModel):
    cache_enabled: bool = Field(default=True, description="Whether vocabulary contexts are cached in memory")


class RelationshipsConfig(BaseModel):
    strategy: RelationshipStrategy = Field(default=RelationshipStrategy.RECURSIVE,
                                           description="Vocabulary relationship resolution strategy")
    skos_edges: List[str] = Field(default_factory=lambda: sorted(str(e) for e in DIRECT_SKOS_RELATIONSHIPS),
                                  description="Term relationships followed by the direct SKOS strategy")
    cascade_edges: List[str] = Field(default_factory=lambda: sorted(str(e) for e in SNAPSHOT_CASCADE_RELATIONSHIPS),
                                     description="Term relationships followed when cascading snapshot operations")

    @field_validator("skos_edges", "cascade_edges", mode="before")
    @classmethod
    def parse_edges(cls, value: Any) -> Any:
        return _parse_edges(value)

    def skos_edge_uris(self) -> FrozenSet[URIRef]:
        return frozenset(URIRef(e) for e in self.skos_edges)

    def cascade_edge_uris(self) -> FrozenSet[URIRef]:
        return frozenset(URIRef(e) for e in self.cascade_edges)


class Configuration(BaseModel):
    """Root configuration."""

    repository: RepositoryConfig = Field(default_factory=RepositoryConfig)
    namespace: NamespaceConfig = Field(default_factory=NamespaceConfig)
    changetracking: ChangeTrackingConfig = Field(default_factory=ChangeTrackingConfig)
    context: ContextConfig = Field(default_factory=ContextConfig)
    relationships: RelationshipsConfig = Field(default_factory=RelationshipsConfig)


# Environment variable (without prefix) -> (section, option)
_ENV_OPTIONS = {
    "REPOSITORY_QUERY_ENDPOINT": ("repository", "query_endpoint"),
    "REPOSITORY_UPDATE_ENDPOINT": ("repository", "update_endpoint"),
    "REPOSITORY_USERNAME": ("repository", "username"),
    "REPOSITORY_PASSWORD": ("repository", "password"),
    "DROP_INTERVAL": ("repository", "drop_interval"),
    "SNAPSHOT_SEPARATOR": ("namespace", "snapshot_separator"),
    "CHANGETRACKING_EXTENSION": ("changetracking", "context_extension"),
    "CONTEXT_CACHE": ("context", "cache_enabled"),
    "RELATIONSHIP_STRATEGY": ("relationships", "strategy"),
    "SKOS_EDGES": ("relationships", "skos_edges"),
    "CASCADE_EDGES": ("relationships", "cascade_edges"),
}


def load_configuration(env_file: Optional[str] = None,
                       environ: Optional[Dict[str, str]] = None) -> Configuration:
    """
    Build configuration from environment variables.

    Args:
        env_file: Optional path to a .env file loaded before reading the environment
        environ: Environment mapping to read instead of os.environ

    Returns:
        Validated Configuration

    Raises:
        ConfigurationError: If a configured value is invalid
    """
    if environ is None:
        load_dotenv(env_file)
        environ = dict(os.environ)

    data: Dict[str, Dict[str, Any]] = {}
    for name, (section, option) in _ENV_OPTIONS.items():
        value = environ.get(ENV_PREFIX + name)
        if value is not None and value != "":
            data.setdefault(section, {})[option] = value

    try:
        config = Configuration.model_validate(data)
    except ValidationError as e:
        raise ConfigurationError(f"Invalid configuration: {e}") from e

    logger.debug(f"Loaded configuration: strategy={config.relationships.strategy.value}, "
                 f"cache_enabled={config.context.cache_enabled}, remote={config.repository.is_remote}")
    return config
