"""Tests for failure classification and failure line formatting."""

import sys, os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

import pytest
from lxml import etree
from rdflib.exceptions import ParserError

from owlmap.classifier import classify
from owlmap.errors import (
    MapError,
    MappingRuleError,
    OntologyStoreError,
    PathEvaluationError,
    ReasonerError,
)
from owlmap.types import Failure, FailureCategory, FailureSeverity


class TestClassification:
    def test_path_evaluation_is_fatal(self):
        failure = classify(PathEvaluationError("bad path"))
        assert failure.is_fatal
        assert failure.category == FailureCategory.PATH_EVALUATION

    def test_raw_lxml_error_is_path_evaluation(self):
        with pytest.raises(etree.XPathError) as info:
            etree.fromstring("<a/>").xpath("///[")
        failure = classify(info.value)
        assert failure.category == FailureCategory.PATH_EVALUATION
        assert failure.is_fatal

    @pytest.mark.parametrize("error", [
        OntologyStoreError("store"),
        ReasonerError("reasoner"),
        ParserError("rdflib"),
    ])
    def test_ontology_errors_are_fatal(self, error):
        failure = classify(error)
        assert failure.is_fatal
        assert failure.category == FailureCategory.ONTOLOGY

    def test_lethal_mapping_error(self):
        failure = classify(MappingRuleError("no such class", lethal=True))
        assert failure.severity == FailureSeverity.FATAL
        assert failure.category == FailureCategory.MAPPING

    def test_mapping_error_defaults_to_lethal(self):
        assert classify(MappingRuleError("x")).is_fatal

    def test_non_lethal_mapping_error_is_warning(self):
        failure = classify(MappingRuleError("empty name", lethal=False))
        assert failure.severity == FailureSeverity.WARNING
        assert failure.category == FailureCategory.MAPPING_WARNING
        assert not failure.is_fatal

    def test_unified_error(self):
        failure = classify(MapError("[XML2OWL] earlier"))
        assert failure.is_fatal
        assert failure.category == FailureCategory.UNIFIED

    def test_unrecognised_error_is_fatal(self):
        failure = classify(KeyError("k"))
        assert failure.is_fatal
        assert failure.category == FailureCategory.UNRECOGNISED
        assert "builtins.KeyError" in failure.label

    def test_exception_kept(self):
        error = MappingRuleError("x", lethal=False)
        assert classify(error).exception is error


class TestFailureLine:
    def test_fatal_line(self):
        line = classify(MappingRuleError("no such class")).line()
        assert line == "[XML2OWL] XML2OWL mapping exception: no such class"

    def test_warning_line(self):
        line = classify(MappingRuleError("empty name", lethal=False)).line()
        assert line == "[XML2OWL] XML2OWL mapping warning: empty name"

    def test_path_line(self):
        assert classify(PathEvaluationError("bad")).line() == "[XML2OWL] XPath exception: bad"

    def test_ontology_line(self):
        assert classify(OntologyStoreError("bad")).line() == "[XML2OWL] OWL exception: bad"

    def test_unrecognised_line(self):
        line = classify(ValueError("odd")).line()
        assert line == "[XML2OWL] Unrecognised exception of type builtins.ValueError: odd"

    def test_unified_line_has_no_label(self):
        assert classify(MapError("failed")).line() == "[XML2OWL] failed"

    def test_custom_tag(self):
        line = classify(PathEvaluationError("bad")).line(tag="[MAP]")
        assert line.startswith("[MAP] XPath exception")


class TestEscalation:
    def test_warning_escalates_to_fatal(self):
        warning = classify(MappingRuleError("w", lethal=False))
        fatal = warning.escalated()
        assert fatal.is_fatal
        assert fatal.category == warning.category
        assert fatal.message == "w"

    def test_fatal_unchanged(self):
        failure = Failure(FailureSeverity.FATAL, FailureCategory.MAPPING, "m")
        assert failure.escalated() is failure
