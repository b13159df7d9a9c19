"""Error taxonomy for mapping runs.

  PathEvaluationError — malformed path expressions or evaluation backend failures
  OntologyStoreError  — the ontology store rejected an edit
  ReasonerError       — the reasoning session failed or was misused
  MappingRuleError    — a rule-level problem, tagged lethal or non-lethal by its raiser
  MapError            — the single unified error raised to callers of map()
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .types import Failure


class Xml2OwlError(Exception):
    """Base class for all errors raised by owlmap."""


class PathEvaluationError(Xml2OwlError):
    """An XPath expression could not be compiled or evaluated."""

    def __init__(self, message: str, path: str = ""):
        super().__init__(message)
        self.path = path


class OntologyStoreError(Xml2OwlError):
    """The ontology store could not apply an edit."""


class ReasonerError(Xml2OwlError):
    """The reasoning session failed."""


class MappingRuleError(Xml2OwlError):
    """A problem applying one rule.

    Lethal errors abort the whole run; non-lethal errors are logged as
    warnings and the run continues with the next rule.
    """

    def __init__(self, message: str, lethal: bool = True):
        super().__init__(message)
        self.lethal = lethal

    def __repr__(self) -> str:
        kind = "lethal" if self.lethal else "non-lethal"
        return f"MappingRuleError({self.args[0]!r}, {kind})"


class MapError(Xml2OwlError):
    """A mapping run failed. Carries the classified failure that caused it."""

    def __init__(self, message: str, failure: Failure | None = None):
        super().__init__(message)
        self.failure = failure
