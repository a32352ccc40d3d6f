"""
SPARQL templates of snapshot operations.

Snapshot IRIs are derived from the original IRIs by appending the snapshot
suffix (?suffix). References to assets that are snapshotted together (the
cascade, ?cascaded) are rewritten to their snapshot IRIs as well.
"""

from repository.patterns import term_in_vocabulary


VOCABULARY_SNAPSHOT_UPDATE = """
INSERT {
    GRAPH ?target {
        ?snapshot ?p ?object .
        ?snapshot a ?vocabularySnapshot, ?snapshotType ;
            ?isVersionOf ?vocabulary ;
            ?isSnapshotOfVocabulary ?vocabulary ;
            ?hasCreated ?created .
    }
} WHERE {
    GRAPH ?source {
        ?vocabulary ?p ?o .
        FILTER (!sameTerm(?p, ?describesDocument))
    }
    BIND (IRI(CONCAT(STR(?vocabulary), ?suffix)) AS ?snapshot)
    BIND (IF(?p IN (?hasGlossary, ?hasModel) || (sameTerm(?p, ?importsVocabulary) && ?o IN (?cascaded)),
             IRI(CONCAT(STR(?o), ?suffix)), ?o) AS ?object)
}
"""

# Glossary or model of the vocabulary, selected by ?hasAsset
ASSET_SNAPSHOT_UPDATE = """
INSERT {
    GRAPH ?target {
        ?assetSnapshot ?p ?object .
        ?assetSnapshot a ?assetSnapshotType, ?snapshotType ;
            ?isVersionOf ?asset ;
            ?isSnapshotOfAsset ?asset ;
            ?hasCreated ?created .
    }
} WHERE {
    GRAPH ?source {
        ?vocabulary ?hasAsset ?asset .
        ?asset ?p ?o .
    }
    BIND (IRI(CONCAT(STR(?asset), ?suffix)) AS ?assetSnapshot)
    BIND (IF(sameTerm(?p, ?hasTopConcept), IRI(CONCAT(STR(?o), ?suffix)), ?o) AS ?object)
}
"""

TERM_SNAPSHOT_UPDATE = f"""
INSERT {{
    GRAPH ?target {{
        ?termSnapshot ?p ?object .
        ?termSnapshot a ?termSnapshotType, ?snapshotType ;
            ?isVersionOf ?term ;
            ?isSnapshotOfTerm ?term ;
            ?hasCreated ?created .
    }}
}} WHERE {{
    GRAPH ?source {{
        ?vocabulary ?hasGlossary ?glossary .
        {{ ?term ?isTermFromVocabulary ?vocabulary . }} UNION {{ ?term ?inScheme ?glossary . }}
        ?term ?p ?o .
    }}
    OPTIONAL {{
        {term_in_vocabulary("?o", "?targetVocabulary", "?targetGlossary")}
        FILTER (?targetVocabulary IN (?cascaded))
    }}
    BIND (IRI(CONCAT(STR(?term), ?suffix)) AS ?termSnapshot)
    BIND (IF(BOUND(?targetVocabulary) || sameTerm(?o, ?vocabulary) || sameTerm(?o, ?glossary),
             IRI(CONCAT(STR(?o), ?suffix)), ?o) AS ?object)
}}
"""

VOCABULARY_SNAPSHOT_GRAPHS_QUERY = """
SELECT DISTINCT ?g WHERE {
    GRAPH ?g {
        ?snapshot a ?vocabularySnapshot ;
            ?isSnapshotOfVocabulary ?vocabulary ;
            ?hasCreated ?created .
    }
}
"""

SNAPSHOT_QUERY = """
SELECT ?created ?versionOf ?kind WHERE {
    ?snapshot ?hasCreated ?created ;
        ?isVersionOf ?versionOf ;
        a ?kind .
    FILTER (?kind IN (?snapshotTypes))
}
"""

SNAPSHOTS_QUERY = """
SELECT DISTINCT ?snapshot ?created ?kind WHERE {
    ?snapshot ?isVersionOf ?asset ;
        ?hasCreated ?created ;
        a ?kind .
    FILTER (?kind IN (?snapshotTypes))
} ORDER BY DESC(?created)
"""

VERSION_VALID_AT_QUERY = """
SELECT ?snapshot ?created ?kind WHERE {
    ?snapshot ?isVersionOf ?asset ;
        ?hasCreated ?created ;
        a ?kind .
    FILTER (?kind IN (?snapshotTypes))
    FILTER (?created <= ?at)
} ORDER BY DESC(?created) LIMIT 1
"""
