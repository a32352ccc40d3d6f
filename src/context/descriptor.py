"""
Entity descriptors.

A descriptor tells in which repository context an entity and each of its
referenced attributes are stored. Descriptors are plain values built by
DescriptorFactory from the vocabulary context mapping.
"""

from dataclasses import dataclass, field
from typing import Dict, Optional

from rdflib import URIRef
from rdflib.namespace import SKOS

from repository.namespaces import DESCRIBES_DOCUMENT, HAS_GLOSSARY, HAS_MODEL, IS_TERM_FROM_VOCABULARY

from .mapper import VocabularyContextMapper, vocabulary_identifier


@dataclass(frozen=True)
class EntityDescriptor:
    """Repository context of an entity and of its attribute values."""

    context: Optional[URIRef]
    attributes: Dict[URIRef, "EntityDescriptor"] = field(default_factory=dict)

    def attribute_context(self, attribute: URIRef) -> Optional[URIRef]:
        """Context of values of the attribute. Defaults to the entity context."""
        descriptor = self.attributes.get(attribute)
        return descriptor.context if descriptor is not None else self.context


class DescriptorFactory:
    """Builds entity descriptors of vocabulary assets."""

    def __init__(self, context_mapper: VocabularyContextMapper):
        self.context_mapper = context_mapper

    def asset_descriptor(self, vocabulary) -> EntityDescriptor:
        """Descriptor of any asset stored in the context of the vocabulary."""
        return EntityDescriptor(self._context(vocabulary))

    def vocabulary_descriptor(self, vocabulary) -> EntityDescriptor:
        """Vocabulary descriptor, with glossary, model and document stored in the vocabulary context."""
        context = self._context(vocabulary)
        nested = EntityDescriptor(context)
        return EntityDescriptor(context, {
            HAS_GLOSSARY: nested,
            HAS_MODEL: nested,
            DESCRIBES_DOCUMENT: nested,
        })

    def glossary_descriptor(self, vocabulary) -> EntityDescriptor:
        return self.asset_descriptor(vocabulary)

    def document_descriptor(self, vocabulary) -> EntityDescriptor:
        return self.asset_descriptor(vocabulary)

    def term_descriptor(self, vocabulary) -> EntityDescriptor:
        """
        Descriptor of a term of the vocabulary.

        Parent terms may come from other vocabularies, so their context is left
        unspecified (None) and they are looked up across all contexts.
        """
        context = self._context(vocabulary)
        return EntityDescriptor(context, {
            IS_TERM_FROM_VOCABULARY: EntityDescriptor(context),
            SKOS.inScheme: EntityDescriptor(context),
            SKOS.broader: EntityDescriptor(None),
        })

    def _context(self, vocabulary) -> URIRef:
        return self.context_mapper.get_vocabulary_context(vocabulary_identifier(vocabulary))
