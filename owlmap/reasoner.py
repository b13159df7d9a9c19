"""Reasoning session and inference materialization (owlrl).

A ReasoningSession computes the deductive closure of an ontology on a
private copy, so the ontology itself only changes when inferred axioms are
explicitly materialized through an InferredOntologyGenerator. The session
subscribes to the ontology manager and marks its entailments stale whenever
the ontology changes, re-realizing on the next query.
"""

from __future__ import annotations

import logging
from typing import Iterable

import owlrl
from rdflib import Graph, RDF, RDFS, URIRef
from rdflib.term import Node

from .errors import ReasonerError
from .ontology import OntologyManager
from .types import AxiomRef


logger = logging.getLogger(__name__)


_SEMANTICS = {
    "rdfs": owlrl.RDFS_Semantics,
    "owlrl": owlrl.OWLRL_Semantics,
    "rdfs_owlrl": owlrl.RDFS_OWLRL_Semantics,
}

# Vocabulary namespaces whose terms are never materialized
_BUILTIN_NAMESPACES = (
    "http://www.w3.org/1999/02/22-rdf-syntax-ns#",
    "http://www.w3.org/2000/01/rdf-schema#",
    "http://www.w3.org/2002/07/owl#",
    "http://www.w3.org/2001/XMLSchema#",
)


def is_builtin(term: Node) -> bool:
    return isinstance(term, URIRef) and str(term).startswith(_BUILTIN_NAMESPACES)


# ---------------------------------------------------------------------------
# Reasoning session
# ---------------------------------------------------------------------------

class ReasoningSession:
    """Non-buffering reasoner attached to one ontology."""

    def __init__(self, ontology: Graph, reasoning: str = "rdfs"):
        if reasoning not in _SEMANTICS:
            raise ReasonerError(f"Unsupported reasoning profile '{reasoning}'")
        self.ontology = ontology
        self.reasoning = reasoning
        self._entailments: frozenset[AxiomRef] = frozenset()
        self._realized = False
        self._prepared = False
        self.changes_seen = 0

    @property
    def is_realized(self) -> bool:
        return self._realized

    def prepare(self) -> None:
        """Reset the session for a new run against the current ontology state."""
        self._entailments = frozenset()
        self._realized = False
        self._prepared = True
        self.changes_seen = 0

    def realize(self) -> None:
        """Compute every entailment of the ontology."""
        if not self._prepared:
            raise ReasonerError("Reasoner must be prepared before it is realized")
        closure = Graph()
        for triple in self.ontology:
            closure.add(triple)
        try:
            owlrl.DeductiveClosure(
                _SEMANTICS[self.reasoning],
                improved_datatypes=False,
                axiomatic_triples=False,
                datatype_axioms=False,
            ).expand(closure)
        except Exception as e:
            raise ReasonerError(f"Closure computation failed: {e}") from e
        self._entailments = frozenset(t for t in closure if t not in self.ontology)
        self._realized = True
        logger.debug("Realized %d entailments (%s)", len(self._entailments), self.reasoning)

    def entailments(self) -> frozenset[AxiomRef]:
        """Axioms entailed by, but not asserted in, the ontology."""
        if not self._realized:
            self.realize()
        return self._entailments

    def is_entailed(self, axiom: AxiomRef) -> bool:
        return axiom in self.ontology or axiom in self.entailments()

    def instances_of(self, cls: URIRef) -> set[Node]:
        """Asserted and inferred instances of a class."""
        inferred = {s for s, p, o in self.entailments() if p == RDF.type and o == cls}
        return set(self.ontology.subjects(RDF.type, cls)) | inferred

    # -- change listener ---------------------------------------------------

    def on_axioms_added(self, ontology: Graph, axioms: set[AxiomRef]) -> None:
        self._track(ontology, axioms)

    def on_axioms_removed(self, ontology: Graph, axioms: set[AxiomRef]) -> None:
        self._track(ontology, axioms)

    def _track(self, ontology: Graph, axioms: set[AxiomRef]) -> None:
        if ontology is not self.ontology:
            return
        self.changes_seen += len(axioms)
        self._realized = False

    def __repr__(self) -> str:
        state = "realized" if self._realized else "stale"
        return f"ReasoningSession({self.reasoning}, {state})"


# ---------------------------------------------------------------------------
# Inferred axiom generators
# ---------------------------------------------------------------------------

class InferredAxiomGenerator:
    """Selects one kind of inferred axiom from a realized session."""

    name = ""

    def create_axioms(self, owl_manager: OntologyManager, reasoner: ReasoningSession) -> set[AxiomRef]:
        return {axiom for axiom in reasoner.entailments() if self.accepts(axiom)}

    def accepts(self, axiom: AxiomRef) -> bool:
        raise NotImplementedError


class ClassAssertionAxiomGenerator(InferredAxiomGenerator):
    """Inferred rdf:type assertions of individuals to user classes."""

    name = "class_assertions"

    def accepts(self, axiom: AxiomRef) -> bool:
        s, p, o = axiom
        return p == RDF.type and isinstance(o, URIRef) and not is_builtin(o)


class SubClassAxiomGenerator(InferredAxiomGenerator):
    """Inferred (non-reflexive) rdfs:subClassOf axioms between user classes."""

    name = "subclasses"

    def accepts(self, axiom: AxiomRef) -> bool:
        s, p, o = axiom
        return (
            p == RDFS.subClassOf
            and s != o
            and not is_builtin(s)
            and not is_builtin(o)
        )


class PropertyAssertionAxiomGenerator(InferredAxiomGenerator):
    """Inferred assertions of user-defined properties."""

    name = "property_assertions"

    def accepts(self, axiom: AxiomRef) -> bool:
        s, p, o = axiom
        return isinstance(s, URIRef) and not is_builtin(p)


GENERATORS: dict[str, type[InferredAxiomGenerator]] = {
    cls.name: cls
    for cls in (
        ClassAssertionAxiomGenerator,
        SubClassAxiomGenerator,
        PropertyAssertionAxiomGenerator,
    )
}


class InferredOntologyGenerator:
    """Materializes the axioms produced by a set of generators into an ontology."""

    def __init__(
        self,
        reasoner: ReasoningSession,
        generators: Iterable[InferredAxiomGenerator] | None = None,
    ):
        self.reasoner = reasoner
        if generators is None:
            generators = [cls() for cls in GENERATORS.values()]
        self._generators = list(generators)

    @classmethod
    def from_names(cls, reasoner: ReasoningSession, names: Iterable[str]) -> InferredOntologyGenerator:
        return cls(reasoner, [GENERATORS[name]() for name in names])

    @property
    def axiom_generators(self) -> list[InferredAxiomGenerator]:
        return list(self._generators)

    def fill_ontology(self, owl_manager: OntologyManager, ontology: Graph) -> set[AxiomRef]:
        """Add every generated axiom to the ontology.

        All generators run before anything is added. Returns the axioms that
        were newly added.
        """
        axioms: set[AxiomRef] = set()
        for generator in self._generators:
            axioms |= generator.create_axioms(owl_manager, self.reasoner)
        return owl_manager.add_axioms(ontology, axioms)
