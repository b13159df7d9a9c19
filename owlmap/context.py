"""Evaluation context and setup phase of a mapping run.

Before any rule executes, the rule document is read once to:

  1. import its namespace declarations into the data evaluator
  2. extract the global mapping parameters
  3. collect every declared reference name

The rule sequencer then yields the rule nodes to execute, in document order.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Iterator

from .types import RULES_NAMESPACE, RULES_PREFIX, MappingParameters, NamespaceBinding
from .xpath import XPathEvaluator


NAMESPACES_PATH = f"{RULES_PREFIX}:namespaces/{RULES_PREFIX}:namespace"

REFERENCE_NAMES_PATH = "//@referenceName"

# Immediate children of the rule root that are executable rules
RULE_SELECTOR = (
    f"{RULES_PREFIX}:*[local-name() = 'prefixIRI'"
    f" or starts-with(local-name(), 'mapTo')"
    f" or local-name() = 'collectOWLIndividuals']"
)


@dataclass
class EvaluationContext:
    """The two path-evaluation scopes of a run.

    rules — bound to the rules namespace, reads rule-document structure
    data  — starts empty, extended with the rule document's namespace declarations
    """
    rules: XPathEvaluator
    data: XPathEvaluator

    @classmethod
    def create(cls, rules_namespace: str = RULES_NAMESPACE) -> EvaluationContext:
        return cls(
            rules=XPathEvaluator({RULES_PREFIX: rules_namespace}),
            data=XPathEvaluator(),
        )


def import_namespaces(context: EvaluationContext, rules: Any) -> list[NamespaceBinding]:
    """Bind every namespace declared under the rule document's namespaces section.

    A prefix declared twice keeps the last URI.
    """
    imported: list[NamespaceBinding] = []
    for node in context.rules.find_iterator(rules, NAMESPACES_PATH):
        prefix = context.rules.find_string(node, "@prefix")
        uri = context.rules.find_string(node, "@name")
        context.data.add_namespace(prefix, uri)
        imported.append(NamespaceBinding(prefix=prefix, uri=uri))
    return imported


def parse_flag(value: str) -> bool:
    """Permissive boolean parsing: only the exact string "true" is True."""
    return value == "true"


def extract_parameters(context: EvaluationContext, rules: Any) -> MappingParameters:
    """Read the global directives from the rule document root."""
    return MappingParameters(
        query_language=context.rules.find_string(rules, "@queryLanguage"),
        expression_language=context.rules.find_string(rules, "@expressionLanguage"),
        strict=parse_flag(context.rules.find_string(rules, "@strict")),
    )


def find_reference_names(context: EvaluationContext, rules: Any) -> list[str]:
    """Every referenceName attribute value in the document, in document order."""
    return [str(value) for value in context.rules.find_iterator(rules, REFERENCE_NAMES_PATH)]


def select_rules(context: EvaluationContext, rules: Any) -> Iterator[Any]:
    """Yield the rule nodes to execute, in document order."""
    yield from context.rules.find_iterator(rules, RULE_SELECTOR)
