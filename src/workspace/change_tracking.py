"""
Resolution of change tracking contexts.

Each vocabulary has its own change tracking context, so changes of the
vocabulary and all its terms are stored in one context.
"""

from rdflib import URIRef

from repository.exceptions import NotFoundException
from repository.namespaces import HAS_GLOSSARY, IS_TERM_FROM_VOCABULARY
from repository.store import TripleStore
from vocabulary.domain import Term


class ChangeTrackingContextResolver:
    """Determines the repository context into which change records of an asset are stored."""

    def __init__(self, store: TripleStore, context_extension: str = "/zmeny"):
        self.store = store
        self.context_extension = context_extension

    def resolve_change_tracking_context(self, asset) -> URIRef:
        """
        Resolve change tracking context of the changed asset.

        Args:
            asset: Vocabulary, term or another asset with a uri attribute (or an IRI)

        Returns:
            Identifier of the change tracking context
        """
        if isinstance(asset, Term):
            return URIRef(f"{self._term_vocabulary(asset)}{self.context_extension}")
        return URIRef(f"{getattr(asset, 'uri', asset)}{self.context_extension}")

    def _term_vocabulary(self, term: Term) -> URIRef:
        if term.glossary is not None:
            vocabularies = self.store.select_values("SELECT DISTINCT ?v WHERE { ?v ?hasGlossary ?glossary . }",
                                                    hasGlossary=HAS_GLOSSARY, glossary=term.glossary)
        elif term.vocabulary is not None:
            return term.vocabulary
        else:
            vocabularies = self.store.select_values("SELECT DISTINCT ?v WHERE { ?term ?inVocabulary ?v . }",
                                                    inVocabulary=IS_TERM_FROM_VOCABULARY, term=term.uri)
        if not vocabularies:
            raise NotFoundException(f"Vocabulary of term {term.uri} not found.")
        return vocabularies[0]
