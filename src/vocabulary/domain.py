"""
Domain models for the vocabulary module.

These models represent vocabularies and their terms.
"""

from dataclasses import dataclass, field
from typing import Dict, List, Optional, Set

from rdflib import URIRef

from repository.namespaces import SNAPSHOT_TYPES


@dataclass
class Vocabulary:
    """A SKOS vocabulary with its glossary, model and documentation."""

    uri: URIRef
    glossary: URIRef                                     # concept scheme holding the terms
    label: Dict[str, str] = field(default_factory=dict)  # language -> title
    model: Optional[URIRef] = None
    document: Optional[URIRef] = None
    imported_vocabularies: Set[URIRef] = field(default_factory=set)
    primary_language: Optional[str] = None
    types: Set[URIRef] = field(default_factory=set)      # additional rdf:type values

    def is_snapshot(self) -> bool:
        return any(t in self.types for t in SNAPSHOT_TYPES)


@dataclass
class Term:
    """A SKOS concept belonging to exactly one vocabulary."""

    uri: URIRef
    vocabulary: Optional[URIRef] = None                         # resolved from glossary if unknown
    label: Dict[str, str] = field(default_factory=dict)        # language -> prefLabel
    definition: Dict[str, str] = field(default_factory=dict)   # language -> definition
    glossary: Optional[URIRef] = None
    parent_terms: List[URIRef] = field(default_factory=list)   # skos:broader
    related_match: List[URIRef] = field(default_factory=list)
    exact_match: List[URIRef] = field(default_factory=list)
    top_concept: bool = False                                   # glossary top concept

