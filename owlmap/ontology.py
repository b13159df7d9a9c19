"""Ontology store — axiom edits against rdflib graphs, with change subscriptions.

An ontology is an rdflib Graph; an axiom is one of its triples. All edits
made during a mapping run go through an OntologyManager so that subscribers
(the reasoning session) see every change as it happens.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Iterable, Protocol

from rdflib import Graph
from rdflib.term import Node

from .errors import OntologyStoreError
from .types import AxiomRef


logger = logging.getLogger(__name__)


class ChangeListener(Protocol):
    """Receives ontology change notifications."""

    def on_axioms_added(self, ontology: Graph, axioms: set[AxiomRef]) -> None: ...

    def on_axioms_removed(self, ontology: Graph, axioms: set[AxiomRef]) -> None: ...


@dataclass
class ChangeSubscription:
    """Handle returned by OntologyManager.subscribe()."""
    manager: OntologyManager
    listener: ChangeListener
    active: bool = True

    def unsubscribe(self) -> None:
        if self.active:
            self.manager._listeners.remove(self.listener)
            self.active = False

    def __enter__(self) -> ChangeSubscription:
        return self

    def __exit__(self, *exc_info) -> None:
        self.unsubscribe()


@dataclass
class OntologyManager:
    """Applies axiom edits to ontologies and notifies subscribed listeners."""

    _listeners: list[ChangeListener] = field(default_factory=list)

    def subscribe(self, listener: ChangeListener) -> ChangeSubscription:
        self._listeners.append(listener)
        return ChangeSubscription(manager=self, listener=listener)

    @property
    def listeners(self) -> list[ChangeListener]:
        return list(self._listeners)

    def add_axioms(self, ontology: Graph, axioms: Iterable[AxiomRef]) -> set[AxiomRef]:
        """Add axioms to the ontology.

        Returns the axioms that were not already present. Only those are
        reported to listeners.
        """
        checked = [_check_axiom(axiom) for axiom in axioms]
        added: set[AxiomRef] = set()
        for axiom in checked:
            if axiom in ontology:
                continue
            ontology.add(axiom)
            added.add(axiom)
        if added:
            logger.debug("Added %d axioms to %s", len(added), ontology.identifier)
            for listener in list(self._listeners):
                listener.on_axioms_added(ontology, added)
        return added

    def add_axiom(self, ontology: Graph, axiom: AxiomRef) -> set[AxiomRef]:
        return self.add_axioms(ontology, [axiom])

    def remove_axioms(self, ontology: Graph, axioms: Iterable[AxiomRef]) -> set[AxiomRef]:
        """Remove axioms from the ontology. Returns the axioms actually removed."""
        checked = [_check_axiom(axiom) for axiom in axioms]
        removed: set[AxiomRef] = set()
        for axiom in checked:
            if axiom not in ontology:
                continue
            ontology.remove(axiom)
            removed.add(axiom)
        if removed:
            logger.debug("Removed %d axioms from %s", len(removed), ontology.identifier)
            for listener in list(self._listeners):
                listener.on_axioms_removed(ontology, removed)
        return removed


def _check_axiom(axiom) -> AxiomRef:
    if not isinstance(axiom, tuple) or len(axiom) != 3:
        raise OntologyStoreError(f"Not an axiom (expected a triple): {axiom!r}")
    for term in axiom:
        if not isinstance(term, Node):
            raise OntologyStoreError(
                f"Axiom {axiom!r} contains a non-RDF term: {term!r}"
            )
    return axiom
