"""Settings for a MapperManager."""

from __future__ import annotations

from dataclasses import dataclass, field

from .types import LOG_TAG, RULES_NAMESPACE


REASONING_PROFILES = ("rdfs", "owlrl", "rdfs_owlrl")

AXIOM_GENERATORS = ("class_assertions", "subclasses", "property_assertions")


@dataclass(frozen=True)
class MapperSettings:
    """Orchestrator configuration.

    reasoning selects the owlrl closure used for materialization:
      rdfs        — RDFS entailment
      owlrl       — OWL 2 RL entailment
      rdfs_owlrl  — both combined

    rollback_on_abort makes a fatal failure during the rule loop remove the
    run's partial edits before MapError is raised. Off by default: partial
    edits stay in the ontology and are only recorded for an explicit undo().
    """
    rules_namespace: str = RULES_NAMESPACE
    log_tag: str = LOG_TAG
    reasoning: str = "rdfs"
    axiom_generators: tuple[str, ...] = field(default=AXIOM_GENERATORS)
    rollback_on_abort: bool = False

    def __post_init__(self) -> None:
        if self.reasoning not in REASONING_PROFILES:
            raise ValueError(
                f"Unknown reasoning profile '{self.reasoning}', "
                f"expected one of {', '.join(REASONING_PROFILES)}"
            )
        for name in self.axiom_generators:
            if name not in AXIOM_GENERATORS:
                raise ValueError(f"Unknown axiom generator '{name}'")
