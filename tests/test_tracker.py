"""Tests for the change tracker."""

import sys, os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

from rdflib import Graph, Namespace, RDF

from owlmap.ontology import OntologyManager
from owlmap.tracker import ChangeTracker


EX = Namespace("http://example.org/ex#")


class TestChangeTracker:
    def test_starts_empty(self):
        assert len(ChangeTracker()) == 0

    def test_undo_removes_recorded(self):
        g = Graph()
        g.add((EX.keep, RDF.type, EX.Thing))
        manager = OntologyManager()
        tracker = ChangeTracker()
        tracker.record(manager.add_axioms(g, [(EX.a, RDF.type, EX.Thing)]))
        removed = tracker.undo(manager, g)
        assert removed == {(EX.a, RDF.type, EX.Thing)}
        assert set(g) == {(EX.keep, RDF.type, EX.Thing)}

    def test_second_undo_is_noop(self):
        g = Graph()
        manager = OntologyManager()
        tracker = ChangeTracker()
        tracker.record(manager.add_axioms(g, [(EX.a, RDF.type, EX.Thing)]))
        tracker.undo(manager, g)
        g.add((EX.a, RDF.type, EX.Thing))
        assert tracker.undo(manager, g) == set()
        assert (EX.a, RDF.type, EX.Thing) in g

    def test_undo_empty_never_raises(self):
        assert ChangeTracker().undo(OntologyManager(), Graph()) == set()

    def test_record_replaces(self):
        tracker = ChangeTracker()
        tracker.record([(EX.a, RDF.type, EX.Thing)])
        tracker.record([(EX.b, RDF.type, EX.Thing)])
        assert tracker.changes == frozenset({(EX.b, RDF.type, EX.Thing)})
