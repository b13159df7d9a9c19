"""Tests for the XPath evaluator."""

import sys, os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

import pytest
from lxml import etree

from owlmap.errors import PathEvaluationError
from owlmap.xpath import XPathEvaluator, document_root


NS = "http://example.org/shop"


def _doc():
    return etree.fromstring(
        f'<s:shop xmlns:s="{NS}" name="corner">'
        f'<s:item sku="a1">Apple</s:item>'
        f'<s:item sku="b2">Bread</s:item>'
        f'</s:shop>'
    )


class TestFindString:
    def test_attribute_value(self):
        ev = XPathEvaluator()
        assert ev.find_string(_doc(), "@name") == "corner"

    def test_missing_attribute_is_empty(self):
        ev = XPathEvaluator()
        assert ev.find_string(_doc(), "@missing") == ""

    def test_element_text(self):
        ev = XPathEvaluator({"s": NS})
        assert ev.find_string(_doc(), "s:item") == "Apple"

    def test_first_of_many(self):
        ev = XPathEvaluator({"s": NS})
        assert ev.find_string(_doc(), "s:item/@sku") == "a1"

    def test_number_result(self):
        ev = XPathEvaluator({"s": NS})
        assert ev.find_string(_doc(), "count(s:item)") == "2"

    def test_boolean_result(self):
        ev = XPathEvaluator({"s": NS})
        assert ev.find_string(_doc(), "boolean(s:item)") == "true"

    def test_string_function(self):
        ev = XPathEvaluator()
        assert ev.find_string(_doc(), "concat(@name, '!')") == "corner!"

    def test_comment_node(self):
        ev = XPathEvaluator()
        assert ev.find_string(etree.fromstring("<r><!--hello--></r>"), "comment()") == "hello"

    def test_processing_instruction_node(self):
        ev = XPathEvaluator()
        doc = etree.fromstring("<r><?render mode=fast?></r>")
        assert ev.find_string(doc, "processing-instruction()") == "mode=fast"

    def test_empty_comment(self):
        ev = XPathEvaluator()
        assert ev.find_string(etree.fromstring("<r><!----></r>"), "comment()") == ""


class TestFindIterator:
    def test_document_order(self):
        ev = XPathEvaluator({"s": NS})
        skus = [ev.find_string(n, "@sku") for n in ev.find_iterator(_doc(), "s:item")]
        assert skus == ["a1", "b2"]

    def test_empty(self):
        ev = XPathEvaluator({"s": NS})
        assert list(ev.find_iterator(_doc(), "s:nothing")) == []

    def test_scalar_result_wrapped(self):
        ev = XPathEvaluator({"s": NS})
        assert list(ev.find_iterator(_doc(), "count(s:item)")) == [2.0]


class TestNamespaces:
    def test_unbound_prefix_raises(self):
        ev = XPathEvaluator()
        with pytest.raises(PathEvaluationError):
            ev.find_string(_doc(), "s:item")

    def test_add_namespace(self):
        ev = XPathEvaluator()
        ev.add_namespace("s", NS)
        assert ev.find_string(_doc(), "s:item/@sku") == "a1"

    def test_rebinding_replaces(self):
        ev = XPathEvaluator()
        ev.add_namespace("s", "http://example.org/other")
        ev.add_namespace("s", NS)
        assert ev.namespaces["s"] == NS

    def test_empty_prefix_rejected(self):
        ev = XPathEvaluator()
        with pytest.raises(PathEvaluationError, match="non-empty prefix"):
            ev.add_namespace("", NS)

    def test_namespaces_is_a_copy(self):
        ev = XPathEvaluator({"s": NS})
        ev.namespaces["t"] = "x"
        assert "t" not in ev.namespaces


class TestErrors:
    def test_malformed_expression(self):
        ev = XPathEvaluator()
        with pytest.raises(PathEvaluationError) as info:
            ev.find_string(_doc(), "///[")
        assert info.value.path == "///["
        assert isinstance(info.value.__cause__, etree.XPathError)


class TestDocumentRoot:
    def test_element(self):
        doc = _doc()
        assert document_root(doc) is doc

    def test_element_tree(self):
        doc = _doc()
        assert document_root(doc.getroottree()) is doc

    def test_rejects_other_types(self):
        with pytest.raises(PathEvaluationError):
            document_root("<shop/>")
