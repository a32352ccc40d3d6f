"""
Triple store access for vocabulary data.

The store wraps an rdflib Dataset, either in memory or backed by a remote
SPARQL endpoint (SPARQLUpdateStore), and provides parameterized SPARQL
queries and updates against named graphs together with a transaction
boundary that commits buffered updates as a single update request.
"""

import logging
import re
import threading
from contextlib import contextmanager
from datetime import datetime
from typing import Any, Iterable, Iterator, List, Mapping, Optional, Tuple

from rdflib import Dataset, Literal, URIRef
from rdflib.plugins.stores.sparqlstore import SPARQLUpdateStore
from rdflib.query import ResultRow
from rdflib.term import Node

from .config import RepositoryConfig
from .exceptions import PersistenceException


logger = logging.getLogger(__name__)


def to_sparql(value: Any) -> str:
    """Serialize a parameter value into SPARQL syntax."""
    if isinstance(value, Node):
        return value.n3()
    if isinstance(value, (list, tuple, set, frozenset)):
        return ", ".join(sorted(to_sparql(item) for item in value))
    if isinstance(value, (bool, int, float, datetime)):
        return Literal(value).n3()
    return Literal(str(value)).n3()


def bind_parameters(sparql: str, parameters: Optional[Mapping[str, Any]] = None) -> str:
    """
    Replace query variables with parameter values.

    Every occurrence of ?name (or $name) is replaced by the serialized value.
    Collections are serialized as comma-separated lists, suitable for IN (...).
    All parameters are substituted in a single pass, so serialized values are
    never scanned for further variables.

    Args:
        sparql: Query or update string
        parameters: Variable name (without ?) -> value

    Returns:
        Query string with bound parameters
    """
    if not parameters:
        return sparql
    serialized = {name: to_sparql(value) for name, value in parameters.items()}
    names = "|".join(re.escape(name) for name in sorted(serialized, key=len, reverse=True))
    pattern = re.compile(r"(?<![\w?$])[?$](" + names + r")\b")
    return pattern.sub(lambda match: serialized[match.group(1)], sparql)


class TripleStore:
    """
    Named-graph triple store.

    Queries without a GRAPH clause are evaluated against the union of all
    graphs. Updates issued inside transaction() are buffered per thread and
    executed as one request on commit.
    """

    def __init__(self, dataset: Optional[Dataset] = None):
        """
        Initialize the store.

        Args:
            dataset: Dataset to wrap. If None, an empty in-memory dataset is created.
        """
        self.dataset = dataset if dataset is not None else Dataset(default_union=True)
        self.remote = isinstance(self.dataset.store, SPARQLUpdateStore)
        self._local = threading.local()

    @classmethod
    def connect(cls, query_endpoint: str, update_endpoint: Optional[str] = None,
                username: Optional[str] = None, password: Optional[str] = None) -> "TripleStore":
        """Connect to a remote SPARQL endpoint."""
        auth = (username, password) if username else None
        store = SPARQLUpdateStore(query_endpoint=query_endpoint,
                                  update_endpoint=update_endpoint or query_endpoint,
                                  auth=auth)
        logger.info(f"Connected to SPARQL endpoint {query_endpoint}")
        return cls(Dataset(store=store, default_union=True))

    @classmethod
    def from_config(cls, config: RepositoryConfig) -> "TripleStore":
        if config.is_remote:
            return cls.connect(config.query_endpoint, config.update_endpoint, config.username, config.password)
        return cls()

    # Queries

    def select(self, sparql: str, **parameters) -> List[ResultRow]:
        """Execute a SELECT query and return all result rows."""
        query = bind_parameters(sparql, parameters)
        try:
            return list(self.dataset.query(query))
        except Exception as e:
            raise PersistenceException(f"Query execution failed: {e}") from e

    def select_values(self, sparql: str, **parameters) -> List[Node]:
        """Execute a single-variable SELECT query and return the bound values."""
        return [row[0] for row in self.select(sparql, **parameters) if row[0] is not None]

    def ask(self, sparql: str, **parameters) -> bool:
        """Execute an ASK query."""
        query = bind_parameters(sparql, parameters)
        try:
            return bool(self.dataset.query(query).askAnswer)
        except Exception as e:
            raise PersistenceException(f"Query execution failed: {e}") from e

    # Updates

    def update(self, sparql: str, **parameters) -> None:
        """
        Execute a SPARQL update.

        Inside a transaction, the update is buffered until commit.
        """
        request = bind_parameters(sparql, parameters)
        pending = self._pending()
        if pending is not None:
            pending.append(request)
            return
        self._execute(request)

    def insert(self, context: URIRef, triples: Iterable[Tuple[Node, Node, Node]]) -> None:
        """Insert triples into the specified named graph."""
        statements = " ".join(f"{s.n3()} {p.n3()} {o.n3()} ." for s, p, o in triples)
        if not statements:
            return
        self.update(f"INSERT DATA {{ GRAPH {URIRef(context).n3()} {{ {statements} }} }}")

    def drop_graph(self, context: URIRef) -> None:
        """Drop a named graph. Dropping a graph that does not exist is a no-op."""
        self.update("DROP SILENT GRAPH ?context", context=URIRef(context))

    def contains_graph(self, context: URIRef) -> bool:
        """Check whether a named graph contains at least one statement."""
        return self.ask("ASK { GRAPH ?context { ?s ?p ?o . } }", context=URIRef(context))

    def load(self, source: str, format: Optional[str] = None) -> None:
        """Load RDF quads (TriG, N-Quads) into the store."""
        try:
            self.dataset.parse(source, format=format)
        except Exception as e:
            raise PersistenceException(f"Failed to load data from {source}: {e}") from e

    # Transactions

    def in_transaction(self) -> bool:
        return self._pending() is not None

    @contextmanager
    def transaction(self) -> Iterator["TripleStore"]:
        """
        Transaction boundary.

        Updates issued within the block are executed on exit as a single
        update request. Nested blocks join the outer transaction. When the
        block raises, buffered updates are discarded.
        """
        if self.in_transaction():
            yield self
            return
        self._local.pending = []
        try:
            yield self
            pending = self._local.pending
            self._local.pending = None
            if pending:
                self._commit(pending)
        finally:
            self._local.pending = None

    def _pending(self) -> Optional[List[str]]:
        return getattr(self._local, "pending", None)

    def _commit(self, requests: List[str]) -> None:
        logger.debug(f"Committing transaction with {len(requests)} update(s).")
        request = " ;\n".join(requests)
        if self.remote:
            # One request, atomicity is up to the endpoint
            self._execute(request)
            return
        backup = list(self.dataset.quads((None, None, None, None)))
        try:
            self._execute(request)
        except PersistenceException:
            logger.error("Transaction commit failed, restoring previous dataset state.")
            self._restore(backup)
            raise

    def _restore(self, quads: List[Tuple[Node, Node, Node, Optional[Node]]]) -> None:
        self.dataset.remove((None, None, None, None))
        default = self.dataset.default_context
        self.dataset.addN((s, p, o, self.dataset.graph(g) if g is not None else default)
                          for s, p, o, g in quads)

    def _execute(self, request: str) -> None:
        try:
            self.dataset.update(request)
        except Exception as e:
            raise PersistenceException(f"Update execution failed: {e}") from e
