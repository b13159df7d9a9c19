"""Tests for the ontology manager and change subscriptions."""

import sys, os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

import pytest
from rdflib import Graph, Literal, Namespace, RDF

from owlmap.errors import OntologyStoreError
from owlmap.ontology import OntologyManager


EX = Namespace("http://example.org/ex#")


class RecordingListener:
    def __init__(self):
        self.added = []
        self.removed = []

    def on_axioms_added(self, ontology, axioms):
        self.added.append(set(axioms))

    def on_axioms_removed(self, ontology, axioms):
        self.removed.append(set(axioms))


class TestAddAxioms:
    def test_returns_newly_added(self):
        g = Graph()
        g.add((EX.a, RDF.type, EX.Thing))
        manager = OntologyManager()
        added = manager.add_axioms(g, [(EX.a, RDF.type, EX.Thing), (EX.b, RDF.type, EX.Thing)])
        assert added == {(EX.b, RDF.type, EX.Thing)}
        assert len(g) == 2

    def test_single_axiom(self):
        g = Graph()
        added = OntologyManager().add_axiom(g, (EX.a, EX.name, Literal("A")))
        assert (EX.a, EX.name, Literal("A")) in g
        assert len(added) == 1

    def test_rejects_non_triples(self):
        with pytest.raises(OntologyStoreError, match="expected a triple"):
            OntologyManager().add_axioms(Graph(), [(EX.a, RDF.type)])

    def test_rejects_non_rdf_terms(self):
        g = Graph()
        with pytest.raises(OntologyStoreError, match="non-RDF term"):
            OntologyManager().add_axioms(g, [(EX.a, RDF.type, EX.Thing), (EX.a, EX.age, 42)])
        # validated before anything is added
        assert len(g) == 0


class TestRemoveAxioms:
    def test_returns_actually_removed(self):
        g = Graph()
        g.add((EX.a, RDF.type, EX.Thing))
        removed = OntologyManager().remove_axioms(
            g, [(EX.a, RDF.type, EX.Thing), (EX.b, RDF.type, EX.Thing)]
        )
        assert removed == {(EX.a, RDF.type, EX.Thing)}
        assert len(g) == 0

    def test_empty(self):
        assert OntologyManager().remove_axioms(Graph(), []) == set()


class TestSubscriptions:
    def test_listener_sees_only_new_axioms(self):
        g = Graph()
        g.add((EX.a, RDF.type, EX.Thing))
        manager = OntologyManager()
        listener = RecordingListener()
        manager.subscribe(listener)
        manager.add_axioms(g, [(EX.a, RDF.type, EX.Thing), (EX.b, RDF.type, EX.Thing)])
        assert listener.added == [{(EX.b, RDF.type, EX.Thing)}]

    def test_no_notification_without_change(self):
        g = Graph()
        g.add((EX.a, RDF.type, EX.Thing))
        manager = OntologyManager()
        listener = RecordingListener()
        manager.subscribe(listener)
        manager.add_axioms(g, [(EX.a, RDF.type, EX.Thing)])
        manager.remove_axioms(g, [(EX.z, RDF.type, EX.Thing)])
        assert listener.added == []
        assert listener.removed == []

    def test_removal_notified(self):
        g = Graph()
        manager = OntologyManager()
        listener = RecordingListener()
        manager.subscribe(listener)
        manager.add_axioms(g, [(EX.a, RDF.type, EX.Thing)])
        manager.remove_axioms(g, [(EX.a, RDF.type, EX.Thing)])
        assert listener.removed == [{(EX.a, RDF.type, EX.Thing)}]

    def test_unsubscribe(self):
        manager = OntologyManager()
        listener = RecordingListener()
        subscription = manager.subscribe(listener)
        subscription.unsubscribe()
        subscription.unsubscribe()
        manager.add_axioms(Graph(), [(EX.a, RDF.type, EX.Thing)])
        assert listener.added == []
        assert manager.listeners == []

    def test_context_manager_tears_down(self):
        manager = OntologyManager()
        listener = RecordingListener()
        with pytest.raises(RuntimeError):
            with manager.subscribe(listener):
                assert manager.listeners == [listener]
                raise RuntimeError("boom")
        assert manager.listeners == []
