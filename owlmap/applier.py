"""Rule applier interface.

A rule applier interprets one rule node at a time and turns it into ontology
edits. The orchestrator constructs one applier per run from a
MappingEnvironment and then calls apply_rule() for each selected rule.

Subclasses implement apply_rule(). Problems with a rule are reported by
raising MappingRuleError, tagged lethal (abort the run) or non-lethal (log a
warning and continue).
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Iterable, Iterator

from lxml import etree
from rdflib import Graph

from .context import EvaluationContext
from .ontology import OntologyManager
from .reasoner import ReasoningSession
from .types import AxiomRef, MappingParameters


@dataclass(frozen=True)
class MappingEnvironment:
    """Everything a rule applier may read or edit during one run."""
    owl_manager: OntologyManager
    ontology: Graph
    data: etree._Element
    context: EvaluationContext
    parameters: MappingParameters
    reasoner: ReasoningSession
    reference_names: list[str] = field(default_factory=list)


class RuleApplier:
    """Abstract interface for rule appliers.

    Edits must go through add_axioms() so that changes_added() reports
    exactly the axioms this applier introduced.
    """

    def __init__(self, environment: MappingEnvironment):
        self.environment = environment
        self._axioms_added: set[AxiomRef] = set()

    def apply_rule(self, rule: etree._Element) -> None:
        """Interpret one rule node."""
        raise NotImplementedError

    def changes_added(self) -> set[AxiomRef]:
        """Axioms newly added to the ontology by this applier."""
        return set(self._axioms_added)

    # -----------------------------------------------------------------------
    # Helpers for subclasses
    # -----------------------------------------------------------------------

    def add_axioms(self, axioms: Iterable[AxiomRef]) -> set[AxiomRef]:
        env = self.environment
        added = env.owl_manager.add_axioms(env.ontology, axioms)
        self._axioms_added |= added
        return added

    def rule_string(self, rule: etree._Element, path: str) -> str:
        return self.environment.context.rules.find_string(rule, path)

    def data_string(self, node: Any, path: str) -> str:
        return self.environment.context.data.find_string(node, path)

    def data_nodes(self, path: str, node: Any = None) -> Iterator[Any]:
        if node is None:
            node = self.environment.data
        return self.environment.context.data.find_iterator(node, path)

    @staticmethod
    def rule_name(rule: etree._Element) -> str:
        return etree.QName(rule).localname
