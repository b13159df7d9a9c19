"""Library Catalog — rule applier.

Interprets the catalog rules:

  prefixIRI               — declare an IRI prefix for later rules
  mapToOWLSubClass        — assert a subclass axiom
  mapToOWLClass           — one individual of a class per selected data node
  mapToOWLObjectProperty  — link two individuals
  mapToOWLDataProperty    — attach a literal to an individual
  collectOWLIndividuals   — gather (inferred) instances of a class under a reference name

A data node without a usable name is a warning, or lethal when the rule
document is strict. Undeclared prefixes are always lethal.
"""

import sys, os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), "../.."))

from lxml import etree
from rdflib import Literal, OWL, RDF, RDFS, URIRef

from owlmap.applier import MappingEnvironment, RuleApplier
from owlmap.errors import MappingRuleError


class CatalogRuleApplier(RuleApplier):
    """Rule applier for the library catalog rules."""

    def __init__(self, environment: MappingEnvironment):
        super().__init__(environment)
        self.prefixes: dict[str, str] = {}
        self.collections: dict[str, set] = {}
        self.applied: list[str] = []

    def apply_rule(self, rule: etree._Element) -> None:
        name = self.rule_name(rule)
        self.applied.append(name)
        handler = getattr(self, f"_{name}", None)
        if handler is None:
            raise MappingRuleError(f"Unsupported rule '{name}' skipped", lethal=False)
        handler(rule)

    # -----------------------------------------------------------------------
    # Rules
    # -----------------------------------------------------------------------

    def _prefixIRI(self, rule: etree._Element) -> None:
        prefix = self.rule_string(rule, "@prefix")
        iri = self.rule_string(rule, "@iri")
        self.prefixes[prefix] = iri
        self.environment.ontology.bind(prefix, iri)

    def _mapToOWLSubClass(self, rule: etree._Element) -> None:
        sub = self.resolve(self.rule_string(rule, "@sub"))
        sup = self.resolve(self.rule_string(rule, "@super"))
        self.add_axioms([
            (sub, RDF.type, OWL.Class),
            (sup, RDF.type, OWL.Class),
            (sub, RDFS.subClassOf, sup),
        ])

    def _mapToOWLClass(self, rule: etree._Element) -> None:
        cls = self.resolve(self.rule_string(rule, "@class"))
        name_path = self.rule_string(rule, "@name")
        axioms = [(cls, RDF.type, OWL.Class)]
        unnamed = 0
        for node in self.data_nodes(self.rule_string(rule, "@select")):
            name = self.data_string(node, name_path)
            if not name:
                unnamed += 1
                continue
            axioms.append((self.individual(cls, name), RDF.type, cls))
        self.add_axioms(axioms)
        self._check_unnamed(unnamed, cls)

    def _mapToOWLObjectProperty(self, rule: etree._Element) -> None:
        prop = self.resolve(self.rule_string(rule, "@property"))
        subject_path = self.rule_string(rule, "@subject")
        object_path = self.rule_string(rule, "@object")
        axioms = [(prop, RDF.type, OWL.ObjectProperty)]
        unnamed = 0
        for node in self.data_nodes(self.rule_string(rule, "@select")):
            subject = self.data_string(node, subject_path)
            target = self.data_string(node, object_path)
            if not subject or not target:
                unnamed += 1
                continue
            axioms.append((self.individual(prop, subject), prop, self.individual(prop, target)))
        self.add_axioms(axioms)
        self._check_unnamed(unnamed, prop)

    def _mapToOWLDataProperty(self, rule: etree._Element) -> None:
        prop = self.resolve(self.rule_string(rule, "@property"))
        subject_path = self.rule_string(rule, "@subject")
        value_path = self.rule_string(rule, "@value")
        axioms = [(prop, RDF.type, OWL.DatatypeProperty)]
        unnamed = 0
        for node in self.data_nodes(self.rule_string(rule, "@select")):
            subject = self.data_string(node, subject_path)
            if not subject:
                unnamed += 1
                continue
            value = self.data_string(node, value_path)
            axioms.append((self.individual(prop, subject), prop, Literal(value)))
        self.add_axioms(axioms)
        self._check_unnamed(unnamed, prop)

    def _collectOWLIndividuals(self, rule: etree._Element) -> None:
        cls = self.resolve(self.rule_string(rule, "@class"))
        reference = self.rule_string(rule, "@referenceName")
        if reference not in self.environment.reference_names:
            raise MappingRuleError(f"Unknown reference name '{reference}'")
        self.collections[reference] = self.environment.reasoner.instances_of(cls)

    # -----------------------------------------------------------------------
    # Naming
    # -----------------------------------------------------------------------

    def resolve(self, qname: str) -> URIRef:
        """Expand prefix:local using the prefixes declared by prefixIRI rules."""
        prefix, sep, local = qname.partition(":")
        if not sep or prefix not in self.prefixes:
            raise MappingRuleError(f"Undeclared prefix in '{qname}'", lethal=True)
        return URIRef(self.prefixes[prefix] + local)

    def individual(self, term: URIRef, name: str) -> URIRef:
        """Individuals share the namespace of the class or property that names them."""
        base = str(term)
        cut = max(base.rfind("#"), base.rfind("/"))
        return URIRef(base[:cut + 1] + name)

    def _check_unnamed(self, unnamed: int, term: URIRef) -> None:
        if unnamed:
            raise MappingRuleError(
                f"{unnamed} data node(s) for {term} have no name",
                lethal=self.environment.parameters.strict,
            )
