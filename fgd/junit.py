from __future__ import annotations

import re
from pathlib import Path
from xml.etree.ElementTree import Element

from defusedxml import ElementTree as SafeET


_INT_RE = re.compile(r"[+-]?[0-9]+")


class UnsupportedReportError(ValueError):
    pass


def _local_name(tag: str) -> str:
    # ElementTree spells namespaced tags as "{uri}name".
    if tag.startswith("{"):
        return tag.split("}", 1)[1]
    return tag


def parse_tests_attr(el: Element) -> int:
    """Return the `tests` attribute as an int; absent, blank or malformed -> 0."""
    raw = (el.get("tests") or "").strip()
    if not raw or not _INT_RE.fullmatch(raw):
        return 0
    return int(raw)


def count_executed_tests(root: Element) -> int:
    """Executed-test count for a `<testsuite>` or `<testsuites>` root element.

    A `<testsuites>` collection uses its own positive `tests` attribute when it
    declares one, otherwise the sum over every descendant `<testsuite>`.
    """
    tag = _local_name(root.tag)
    if tag.lower() == "testsuite":
        return parse_tests_attr(root)
    if tag.lower() == "testsuites":
        declared = parse_tests_attr(root)
        if declared > 0:
            return declared
        return sum(
            parse_tests_attr(el)
            for el in root.iter()
            if el is not root and _local_name(el.tag) == "testsuite"
        )
    raise UnsupportedReportError(f"Unsupported JUnit root element: {tag}")


def parse_junit_tests(path: Path) -> int:
    """Parse a JUnit XML report and return its executed-test count.

    DOCTYPE declarations and entity definitions are rejected, so a hostile report
    raises instead of expanding. Every failure propagates to the caller.
    """
    with Path(path).open("rb") as f:
        tree = SafeET.parse(f, forbid_dtd=True, forbid_entities=True, forbid_external=True)
    return count_executed_tests(tree.getroot())
