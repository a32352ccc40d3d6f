"""
Namespaces and IRIs of the vocabulary data model.

Vocabularies, glossaries, terms and snapshots are described using the
data-description ontology (popis-dat), working copies and workspaces using
the workspace ontology (pracovní-prostor). OntoGrapher links are described
using the OntoGrapher application ontology.
"""

from rdflib import Namespace
from rdflib.namespace import SKOS


POPIS_DAT = Namespace("http://onto.fel.cvut.cz/ontologies/slovník/agendový/popis-dat/pojem/")
PRACOVNI_PROSTOR = Namespace("https://slovník.gov.cz/datový/pracovní-prostor/pojem/")
ONTOGRAPHER = Namespace("http://onto.fel.cvut.cz/ontologies/application/ontoGrapher/")

# Assets
VOCABULARY = POPIS_DAT["slovník"]
GLOSSARY = POPIS_DAT["glosář"]
MODEL = POPIS_DAT["model"]
DOCUMENT = POPIS_DAT["dokument"]
TERM = SKOS.Concept

HAS_GLOSSARY = POPIS_DAT["má-glosář"]
HAS_MODEL = POPIS_DAT["má-model"]
DESCRIBES_DOCUMENT = POPIS_DAT["popisuje-dokument"]
IMPORTS_VOCABULARY = POPIS_DAT["importuje-slovník"]
IS_TERM_FROM_VOCABULARY = POPIS_DAT["je-pojmem-ze-slovníku"]

# Snapshots
SNAPSHOT = POPIS_DAT["verze-objektu"]
VOCABULARY_SNAPSHOT = POPIS_DAT["verze-slovníku"]
GLOSSARY_SNAPSHOT = POPIS_DAT["verze-glosáře"]
MODEL_SNAPSHOT = POPIS_DAT["verze-modelu"]
TERM_SNAPSHOT = POPIS_DAT["verze-pojmu"]

IS_VERSION_OF = POPIS_DAT["je-verzí"]
IS_SNAPSHOT_OF_VOCABULARY = POPIS_DAT["je-verzí-slovníku"]
IS_SNAPSHOT_OF_GLOSSARY = POPIS_DAT["je-verzí-glosáře"]
IS_SNAPSHOT_OF_MODEL = POPIS_DAT["je-verzí-modelu"]
IS_SNAPSHOT_OF_TERM = POPIS_DAT["je-verzí-pojmu"]
HAS_SNAPSHOT_CREATED = POPIS_DAT["má-datum-a-čas-vytvoření-verze"]

SNAPSHOT_TYPES = (VOCABULARY_SNAPSHOT, GLOSSARY_SNAPSHOT, MODEL_SNAPSHOT, TERM_SNAPSHOT)

# Workspaces and working copies
WORKSPACE = PRACOVNI_PROSTOR["metadatový-kontext"]
VOCABULARY_CONTEXT = PRACOVNI_PROSTOR["slovníkový-kontext"]
CHANGE_TRACKING_CONTEXT = PRACOVNI_PROSTOR["kontext-sledování-změn"]
REFERS_TO_CONTEXT = PRACOVNI_PROSTOR["odkazuje-na-kontext"]
HAS_CHANGE_TRACKING_CONTEXT = PRACOVNI_PROSTOR["má-kontext-sledování-změn"]
DERIVED_FROM = PRACOVNI_PROSTOR["vychází-z-verze"]

# OntoGrapher links
ONTOGRAPHER_LINK = ONTOGRAPHER["link"]
ONTOGRAPHER_ACTIVE = ONTOGRAPHER["active"]
ONTOGRAPHER_IRI = ONTOGRAPHER["iri"]
ONTOGRAPHER_SOURCE = ONTOGRAPHER["source"]
ONTOGRAPHER_TARGET = ONTOGRAPHER["target"]

# SKOS relationships between concepts from different concept schemes (glossaries)
SKOS_CONCEPT_MATCH_RELATIONSHIPS = frozenset({
    SKOS.broadMatch, SKOS.narrowMatch, SKOS.exactMatch, SKOS.relatedMatch
})

# Single-hop mapping edges followed by the direct SKOS strategy
DIRECT_SKOS_RELATIONSHIPS = frozenset({SKOS.relatedMatch, SKOS.exactMatch})

# Edges followed when cascading snapshot operations
SNAPSHOT_CASCADE_RELATIONSHIPS = SKOS_CONCEPT_MATCH_RELATIONSHIPS | {SKOS.broader, SKOS.narrower}
