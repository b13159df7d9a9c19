"""Failure classification.

Every error surfaced during a mapping run is turned into a Failure:

  origin                                   category                     severity
  ---------------------------------------  ---------------------------  --------
  path evaluation                          XPath exception              fatal
  ontology store / reasoner / rdflib       OWL exception                fatal
  MappingRuleError(lethal=True)            XML2OWL mapping exception    fatal
  MappingRuleError(lethal=False)           XML2OWL mapping warning      warning
  MapError                                 (none)                       fatal
  anything else                            Unrecognised exception       fatal
"""

from __future__ import annotations

from lxml import etree
from rdflib.exceptions import Error as RdflibError

from .errors import (
    MapError,
    MappingRuleError,
    OntologyStoreError,
    PathEvaluationError,
    ReasonerError,
)
from .types import Failure, FailureCategory, FailureSeverity


def classify(exception: BaseException) -> Failure:
    """Classify an exception raised while mapping."""
    message = str(exception)

    if isinstance(exception, (PathEvaluationError, etree.XPathError)):
        return _fatal(FailureCategory.PATH_EVALUATION, message, exception)

    if isinstance(exception, (OntologyStoreError, ReasonerError, RdflibError)):
        return _fatal(FailureCategory.ONTOLOGY, message, exception)

    if isinstance(exception, MappingRuleError):
        if exception.lethal:
            return _fatal(FailureCategory.MAPPING, message, exception)
        return Failure(
            severity=FailureSeverity.WARNING,
            category=FailureCategory.MAPPING_WARNING,
            message=message,
            exception=exception,
        )

    if isinstance(exception, MapError):
        return _fatal(FailureCategory.UNIFIED, message, exception)

    kind = type(exception)
    return Failure(
        severity=FailureSeverity.FATAL,
        category=FailureCategory.UNRECOGNISED,
        message=message,
        exception=exception,
        label=f"Unrecognised exception of type {kind.__module__}.{kind.__qualname__}",
    )


def _fatal(category: FailureCategory, message: str, exception: BaseException) -> Failure:
    return Failure(
        severity=FailureSeverity.FATAL,
        category=category,
        message=message,
        exception=exception,
    )
