"""owlmap — XML to OWL ruleset mapping.

A declarative rule document is applied to an XML data document to build or
update an ontology (an rdflib graph), after which a reasoner materializes the
inferred facts. This package implements the mapping orchestrator and the
collaborators it drives:

- Path evaluation: XPath over the rule and data documents (lxml)
- Evaluation context: namespaces, mapping parameters, reference names, rule selection
- Ontology store: axiom add/remove with change subscriptions (rdflib)
- Reasoning: deductive closure and inferred-axiom generators (owlrl)
- Failure classification: fatal vs. warning, one log line per failure
- Change tracking: the exact axiom set of a run, for undo

The orchestrator (owlmap.manager.MapperManager) composes these into a single
mapping pass:

  setup           — namespaces, parameters, reference names
  rule loop       — apply each selected rule, classify failures, abort on fatal
  materialization — realize entailments and add inferred axioms
  tracking        — record the run's axioms so undo() can remove them

The per-rule interpreter is not part of the package: implementations subclass
owlmap.applier.RuleApplier (see case_studies/library_catalog for an example).
"""
