"""
Reusable SPARQL graph patterns.

Patterns are plain strings with ?variables. Namespace IRIs are bound as
query parameters by TripleStore (see bind_parameters).
"""

from rdflib.namespace import SKOS

from .namespaces import HAS_GLOSSARY, IS_TERM_FROM_VOCABULARY


# Parameters referenced by the patterns below
MEMBERSHIP_PARAMETERS = {
    "isTermFromVocabulary": IS_TERM_FROM_VOCABULARY,
    "inScheme": SKOS.inScheme,
    "hasGlossary": HAS_GLOSSARY,
}


def term_in_vocabulary(term: str, vocabulary: str, glossary: str = "?_glossary") -> str:
    """
    Pattern matching a term belonging to a vocabulary.

    A term belongs to a vocabulary when it is explicitly declared to be a term
    from the vocabulary, or when it is in the scheme of the vocabulary's glossary.

    Args:
        term: Variable (or IRI) of the term
        vocabulary: Variable (or IRI) of the vocabulary
        glossary: Helper variable for the glossary, must be unique within the query

    Returns:
        SPARQL group graph pattern
    """
    return (
        f"{{ {term} ?isTermFromVocabulary {vocabulary} . }} "
        f"UNION "
        f"{{ {term} ?inScheme {glossary} . {vocabulary} ?hasGlossary {glossary} . }}"
    )
