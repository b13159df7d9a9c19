"""Change tracker — the axiom set of the most recent mapping run."""

from __future__ import annotations

import logging
from typing import Iterable

from rdflib import Graph

from .ontology import OntologyManager
from .types import AxiomRef


logger = logging.getLogger(__name__)


class ChangeTracker:
    """Holds the axioms added by the last run so they can be removed as a unit.

    Recording a new run replaces the previous record. undo() removes the
    recorded axioms and clears the record, so a second undo() is a no-op.
    """

    def __init__(self) -> None:
        self._changes: frozenset[AxiomRef] = frozenset()

    @property
    def changes(self) -> frozenset[AxiomRef]:
        return self._changes

    def record(self, axioms: Iterable[AxiomRef]) -> None:
        self._changes = frozenset(axioms)

    def clear(self) -> None:
        self._changes = frozenset()

    def undo(self, owl_manager: OntologyManager, ontology: Graph) -> set[AxiomRef]:
        """Remove the recorded axioms from the ontology. Returns those removed."""
        if not self._changes:
            return set()
        removed = owl_manager.remove_axioms(ontology, self._changes)
        logger.debug("Undo removed %d of %d recorded axioms", len(removed), len(self._changes))
        self.clear()
        return removed

    def __len__(self) -> int:
        return len(self._changes)

    def __repr__(self) -> str:
        return f"ChangeTracker({len(self._changes)} axioms)"
