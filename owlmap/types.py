"""Core value types shared by the mapping orchestrator and rule appliers."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Iterator, Tuple

from rdflib.term import Node


# ---------------------------------------------------------------------------
# Constants
# ---------------------------------------------------------------------------

RULES_NAMESPACE = "http://www.fri.uni-lj.si/xml2owl"

# Prefix under which the rules namespace is bound for rule-document paths
RULES_PREFIX = "x2o"

LOG_TAG = "[XML2OWL]"


# ---------------------------------------------------------------------------
# AxiomRef — one unit of ontology change
# ---------------------------------------------------------------------------

AxiomRef = Tuple[Node, Node, Node]


# ---------------------------------------------------------------------------
# NamespaceBinding
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class NamespaceBinding:
    """A (prefix, URI) pair declared in the rule document."""
    prefix: str
    uri: str

    def __repr__(self) -> str:
        return f"xmlns:{self.prefix}={self.uri}"


# ---------------------------------------------------------------------------
# MappingParameters — global directives of a rule document
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class MappingParameters:
    """Global directives read once per run from the rule document root.

    Shared read-only with the rule applier.
    """
    query_language: str = ""
    expression_language: str = ""
    strict: bool = False


# ---------------------------------------------------------------------------
# Failure — tagged classification of an error raised during a run
# ---------------------------------------------------------------------------

class FailureSeverity(Enum):
    FATAL = "fatal"
    WARNING = "warning"


class FailureCategory(Enum):
    """Category label printed in front of a failure message."""
    PATH_EVALUATION = "XPath exception"
    ONTOLOGY = "OWL exception"
    MAPPING = "XML2OWL mapping exception"
    MAPPING_WARNING = "XML2OWL mapping warning"
    UNIFIED = ""
    UNRECOGNISED = "Unrecognised exception"


@dataclass(frozen=True)
class Failure:
    """A classified failure: Fatal(reason) or Warning(reason)."""
    severity: FailureSeverity
    category: FailureCategory
    message: str
    exception: BaseException | None = field(default=None, compare=False)
    label: str = ""

    @property
    def is_fatal(self) -> bool:
        return self.severity == FailureSeverity.FATAL

    def escalated(self) -> Failure:
        """The same failure, forced to fatal severity."""
        if self.is_fatal:
            return self
        return Failure(
            severity=FailureSeverity.FATAL,
            category=self.category,
            message=self.message,
            exception=self.exception,
            label=self.label,
        )

    def line(self, tag: str = LOG_TAG) -> str:
        """Format the single diagnostic line for this failure."""
        label = self.label or self.category.value
        if not label:
            return f"{tag} {self.message}"
        return f"{tag} {label}: {self.message}"

    def __repr__(self) -> str:
        return f"{self.severity.value.capitalize()}({self.message})"


# ---------------------------------------------------------------------------
# RunState — transient state of one map() call
# ---------------------------------------------------------------------------

@dataclass
class RunState:
    """Per-run state threaded explicitly through the rule loop."""
    abort_requested: bool = False
    remaining_rules: Iterator = field(default_factory=lambda: iter(()))
    accumulated_changes: set = field(default_factory=set)
    rules_applied: int = 0
