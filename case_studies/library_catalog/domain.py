"""Library Catalog — rule and data documents.

A small library export (books, journals, authors) is mapped into a catalog
ontology. Books and journals are both publications; the reasoner infers the
Publication membership that no rule asserts directly.
"""

import sys, os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), "../.."))

from lxml import etree
from rdflib import Namespace

from owlmap.types import RULES_NAMESPACE


CAT = Namespace("http://example.org/catalog#")
LIB_NS = "http://example.org/library-data"


DATA_XML = f"""
<lib:library xmlns:lib="{LIB_NS}">
  <lib:book isbn="b1">
    <lib:title>Dune</lib:title>
    <lib:author id="herbert"/>
  </lib:book>
  <lib:book isbn="b2">
    <lib:title>Neuromancer</lib:title>
    <lib:author id="gibson"/>
  </lib:book>
  <lib:journal issn="j1">
    <lib:title>Nature</lib:title>
  </lib:journal>
</lib:library>
"""

# A book without an ISBN cannot be named as an individual
INCOMPLETE_BOOK_XML = """
  <lib:book>
    <lib:title>Untitled Draft</lib:title>
  </lib:book>
"""


CORE_RULES = """
  <x2o:prefixIRI prefix="cat" iri="http://example.org/catalog#"/>
  <x2o:mapToOWLSubClass sub="cat:Book" super="cat:Publication"/>
  <x2o:mapToOWLSubClass sub="cat:Journal" super="cat:Publication"/>
  <x2o:mapToOWLClass class="cat:Book" select="//lib:book" name="@isbn" referenceName="books"/>
  <x2o:mapToOWLClass class="cat:Journal" select="//lib:journal" name="@issn" referenceName="journals"/>
  <x2o:mapToOWLClass class="cat:Author" select="//lib:author" name="@id"/>
  <x2o:mapToOWLObjectProperty property="cat:writtenBy" select="//lib:book[@isbn]"
      subject="@isbn" object="lib:author/@id"/>
  <x2o:mapToOWLDataProperty property="cat:title" select="//lib:book[@isbn] | //lib:journal"
      subject="@isbn | @issn" value="lib:title"/>
"""

COLLECT_RULES = """
  <x2o:collectOWLIndividuals class="cat:Publication" referenceName="publications"/>
"""


def rules_xml(strict: str = "false", extra_rules: str = "") -> str:
    return f"""
<x2o:rules xmlns:x2o="{RULES_NAMESPACE}"
    queryLanguage="xpath" expressionLanguage="xpath" strict="{strict}">
  <x2o:namespaces>
    <x2o:namespace prefix="lib" name="{LIB_NS}"/>
  </x2o:namespaces>
{CORE_RULES}{extra_rules}{COLLECT_RULES}
</x2o:rules>
"""


def build_documents(
    strict: str = "false",
    extra_rules: str = "",
    incomplete: bool = False,
) -> tuple[etree._Element, etree._Element]:
    """Parse the catalog rule document and the library data document."""
    data = DATA_XML
    if incomplete:
        data = data.replace("</lib:library>", INCOMPLETE_BOOK_XML + "</lib:library>")
    rules = etree.fromstring(rules_xml(strict, extra_rules).strip())
    return rules, etree.fromstring(data.strip())
