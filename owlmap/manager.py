"""Mapping orchestrator — drives one ruleset over one data document.

A mapping pass:

  1. Setup: import namespaces, extract parameters, collect reference names
  2. Attach a reasoning session and subscribe it to ontology changes
  3. Construct the rule applier
  4. Apply each selected rule in document order, classifying failures
  5. Realize entailments and materialize inferred axioms
  6. Record the run's axioms for undo()

Any fatal failure stops the pass and is raised as a single MapError.
Non-lethal failures are logged as warnings and the pass continues.
"""

from __future__ import annotations

import logging
from typing import Any, Callable

from rdflib import Graph, RDF, RDFS, URIRef

from .applier import MappingEnvironment, RuleApplier
from .classifier import classify
from .config import MapperSettings
from .context import (
    EvaluationContext,
    extract_parameters,
    find_reference_names,
    import_namespaces,
    select_rules,
)
from .errors import MapError
from .ontology import OntologyManager
from .reasoner import InferredOntologyGenerator, ReasoningSession
from .tracker import ChangeTracker
from .types import AxiomRef, Failure, RunState
from .xpath import document_root


logger = logging.getLogger(__name__)

SWRL_IMP = URIRef("http://www.w3.org/2003/11/swrl#Imp")
SWRL_BODY = URIRef("http://www.w3.org/2003/11/swrl#body")
SWRL_HEAD = URIRef("http://www.w3.org/2003/11/swrl#head")


class MapperManager:
    """Handles the rules, the data and the rule applier for mapping runs.

    All per-run state lives in a RunState and an EvaluationContext created
    by map(); the only state kept between runs is the change tracker that
    undo() consumes.
    """

    def __init__(
        self,
        applier_factory: Callable[[MappingEnvironment], RuleApplier],
        settings: MapperSettings | None = None,
        observer: Callable[[str], None] | None = None,
    ):
        self.applier_factory = applier_factory
        self.settings = settings or MapperSettings()
        self.observer = observer
        self.tracker = ChangeTracker()

    @property
    def last_changes(self) -> frozenset[AxiomRef]:
        return self.tracker.changes

    # -----------------------------------------------------------------------
    # Mapping pass
    # -----------------------------------------------------------------------

    def map(
        self,
        owl_manager: OntologyManager,
        rules: Any,
        ontology: Graph,
        data: Any,
    ) -> Graph:
        """Apply the ruleset to the data, extending the ontology in place."""
        state = RunState()
        self._emit("Beginning ruleset mapping ...")

        try:
            rules_root = document_root(rules)
            data_root = document_root(data)
            context = EvaluationContext.create(self.settings.rules_namespace)
            import_namespaces(context, rules_root)
            parameters = extract_parameters(context, rules_root)
            reference_names = find_reference_names(context, rules_root)
            reasoner = ReasoningSession(ontology, self.settings.reasoning)
            reasoner.prepare()
        except Exception as e:
            raise self._abort(classify(e).escalated(), state) from e

        with owl_manager.subscribe(reasoner):
            try:
                environment = MappingEnvironment(
                    owl_manager=owl_manager,
                    ontology=ontology,
                    data=data_root,
                    context=context,
                    parameters=parameters,
                    reasoner=reasoner,
                    reference_names=reference_names,
                )
                applier = self.applier_factory(environment)
            except Exception as e:
                raise self._abort(classify(e).escalated(), state) from e

            state.remaining_rules = select_rules(context, rules_root)
            try:
                self.process_rules(applier, state)
            except MapError:
                self._record_aborted_run(applier, owl_manager, ontology)
                raise

            inferred: set[AxiomRef] = set()
            try:
                inferred = self._materialize(owl_manager, ontology, reasoner)
                self._log_swrl_rules(ontology)
            except Exception as e:
                self._record_aborted_run(applier, owl_manager, ontology, inferred)
                raise self._abort(classify(e).escalated(), state) from e

        state.accumulated_changes = applier.changes_added() | inferred
        self.tracker.record(state.accumulated_changes)
        self._emit("Ruleset mapping successfully completed.")
        return ontology

    def process_rules(self, applier: RuleApplier, state: RunState) -> None:
        """Apply the rules remaining in the run state, handling failures."""
        while not state.abort_requested:
            try:
                rule = next(state.remaining_rules, None)
                if rule is None:
                    break
                state.rules_applied += 1
                applier.apply_rule(rule)
            except Exception as e:
                self._handle_failure(classify(e), state)

    def undo(self, owl_manager: OntologyManager, ontology: Graph) -> None:
        """Remove every axiom added by the most recent mapping run."""
        self.tracker.undo(owl_manager, ontology)

    # -----------------------------------------------------------------------
    # Internals
    # -----------------------------------------------------------------------

    def _materialize(
        self,
        owl_manager: OntologyManager,
        ontology: Graph,
        reasoner: ReasoningSession,
    ) -> set[AxiomRef]:
        reasoner.realize()
        generator = InferredOntologyGenerator.from_names(
            reasoner, self.settings.axiom_generators
        )
        return generator.fill_ontology(owl_manager, ontology)

    def _log_swrl_rules(self, ontology: Graph) -> None:
        for rule in sorted(set(ontology.subjects(RDF.type, SWRL_IMP)), key=str):
            self._emit(f"Processing SWRL rule: {render_swrl_rule(ontology, rule)} ...")

    def _record_aborted_run(
        self,
        applier: RuleApplier,
        owl_manager: OntologyManager,
        ontology: Graph,
        inferred: set[AxiomRef] | frozenset[AxiomRef] = frozenset(),
    ) -> None:
        self.tracker.record(applier.changes_added() | inferred)
        if self.settings.rollback_on_abort:
            self.tracker.undo(owl_manager, ontology)

    def _handle_failure(self, failure: Failure, state: RunState) -> None:
        """Report a failure; abort the run unless it is only a warning."""
        if not failure.is_fatal:
            self._emit_line(failure.line(self.settings.log_tag), logging.WARNING)
            return
        state.abort_requested = True
        raise self._abort(failure, state) from failure.exception

    def _abort(self, failure: Failure, state: RunState) -> MapError:
        """Report a fatal failure and build the unified error for it."""
        line = failure.line(self.settings.log_tag)
        self._emit_line(line, logging.ERROR)
        logger.debug("Run aborted after %d rule(s)", state.rules_applied)
        # cleared so the next map() call is not blocked
        state.abort_requested = False
        return MapError(line, failure=failure)

    def _emit(self, message: str, level: int = logging.INFO) -> None:
        self._emit_line(f"{self.settings.log_tag} {message}", level)

    def _emit_line(self, line: str, level: int) -> None:
        logger.log(level, line)
        if self.observer is not None:
            self.observer(line)


def render_swrl_rule(ontology: Graph, rule: URIRef) -> str:
    """Short human-readable rendering of an swrl:Imp resource."""
    label = ontology.value(rule, RDFS.label)
    name = str(label) if label is not None else rule.n3(ontology.namespace_manager)
    body = _count_atoms(ontology, ontology.value(rule, SWRL_BODY))
    head = _count_atoms(ontology, ontology.value(rule, SWRL_HEAD))
    return f"{name} ({body} body atoms -> {head} head atoms)"


def _count_atoms(ontology: Graph, atom_list) -> str:
    if atom_list is None:
        return "0"
    try:
        return str(len(list(ontology.items(atom_list))))
    except ValueError:
        # malformed rdf:List, e.g. a cyclic rdf:rest
        return "?"
