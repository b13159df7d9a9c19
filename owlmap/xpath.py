"""XPath evaluation over rule and data documents (lxml)."""

from __future__ import annotations

from typing import Any, Iterator, Mapping

from lxml import etree

from .errors import PathEvaluationError


def document_root(document: Any) -> etree._Element:
    """Return the root element of a parsed document or element."""
    if isinstance(document, etree._ElementTree):
        return document.getroot()
    if isinstance(document, etree._Element):
        return document
    raise PathEvaluationError(
        f"Expected an lxml element or element tree, got {type(document).__name__}"
    )


class XPathEvaluator:
    """Evaluates XPath 1.0 expressions against a context node.

    Holds its own prefix → URI table. Prefixes are added with
    add_namespace(); a later declaration of the same prefix replaces the
    earlier one.
    """

    def __init__(self, namespaces: Mapping[str, str] | None = None):
        self._namespaces: dict[str, str] = {}
        for prefix, uri in (namespaces or {}).items():
            self.add_namespace(prefix, uri)

    @property
    def namespaces(self) -> Mapping[str, str]:
        return dict(self._namespaces)

    def add_namespace(self, prefix: str, uri: str) -> None:
        if not prefix:
            raise PathEvaluationError(
                f"Cannot bind default namespace '{uri}': "
                f"XPath 1.0 expressions need a non-empty prefix"
            )
        self._namespaces[prefix] = uri

    def evaluate(self, node: Any, path: str) -> Any:
        """Evaluate path with node as the context node and return the raw result."""
        try:
            return node.xpath(path, namespaces=self._namespaces)
        except etree.XPathError as e:
            raise PathEvaluationError(f"{e} in '{path}'", path=path) from e

    def find_string(self, node: Any, path: str) -> str:
        """Evaluate path and return the string value of its first result.

        An empty node-set yields the empty string.
        """
        result = self.evaluate(node, path)
        if isinstance(result, list):
            if not result:
                return ""
            return _string_value(result[0])
        if isinstance(result, bool):
            return "true" if result else "false"
        if isinstance(result, float):
            return _number_string(result)
        return str(result)

    def find_iterator(self, node: Any, path: str) -> Iterator[Any]:
        """Evaluate path and iterate over the resulting items in document order."""
        result = self.evaluate(node, path)
        if isinstance(result, list):
            return iter(result)
        return iter([result])

    def __repr__(self) -> str:
        bound = ", ".join(f"{p}={u}" for p, u in self._namespaces.items())
        return f"XPathEvaluator({bound})"


def _string_value(item: Any) -> str:
    # comments and PIs are _Element subclasses that itertext() rejects
    if isinstance(item, (etree._Comment, etree._ProcessingInstruction)):
        return item.text or ""
    if isinstance(item, etree._Element):
        return "".join(item.itertext())
    return str(item)


def _number_string(value: float) -> str:
    if value.is_integer():
        return str(int(value))
    return str(value)
