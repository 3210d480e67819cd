"""Declarative HTML field extraction shared by every retailer.

Each chain describes its markup as a ``SelectorTable`` (field name ->
``FieldRule``); the functions here interpret those tables. A missing node
never raises, it just yields ``None`` for that field.
"""

import re
from dataclasses import dataclass

from selectolax.parser import HTMLParser, Node


_NUMBER_RE = re.compile(r"\d+(?:\.\d+)?")
_DISTANCE_UNITS_RE = re.compile(r"\b(miles?|mi)\b", re.IGNORECASE)


@dataclass(frozen=True)
class FieldRule:
    """Where a field lives: first node matching *selector*, its text or *attribute*.

    Without a selector the rule reads the node it is applied to.
    """

    selector: str | None = None
    attribute: str | None = None


SelectorTable = dict[str, FieldRule]


def parse_document(html: str) -> HTMLParser:
    return HTMLParser(html)


def select_nodes(root: HTMLParser | Node, selector: str) -> list[Node]:
    return list(root.css(selector))


def extract_field(root: HTMLParser | Node, rule: FieldRule) -> str | None:
    """Return the stripped value described by *rule*, or None when absent/empty."""
    if rule.selector is None:
        node = root
    else:
        node = root.css_first(rule.selector)
    if node is None:
        return None
    if rule.attribute:
        value = node.attributes.get(rule.attribute)
    else:
        value = node.text(deep=True)
    if value is None:
        return None
    value = value.strip()
    return value or None


def extract_fields(
    root: HTMLParser | Node, table: SelectorTable
) -> dict[str, str | None]:
    return {field: extract_field(root, rule) for field, rule in table.items()}


def _first_number(text: str) -> float | None:
    match = _NUMBER_RE.search(text)
    if not match:
        return None
    try:
        return float(match.group(0))
    except ValueError:
        return None


def parse_price(text: str | None) -> float | None:
    """Parse a price like '$1,299.99' or '4.99 USD' into a float."""
    if not text:
        return None
    cleaned = text.replace("\xa0", " ").replace(",", "")
    return _first_number(cleaned)


def parse_distance(text: str | None) -> float | None:
    """Parse a distance like '1.2 miles' or '0.5mi' into a float (miles)."""
    if not text:
        return None
    cleaned = _DISTANCE_UNITS_RE.sub("", text.replace("\xa0", " "))
    return _first_number(cleaned.replace(",", ""))


def parse_quantity(text: str | None) -> int | None:
    """Parse a count like '12 left' into an int."""
    if not text:
        return None
    match = re.search(r"\d+", text.replace(",", ""))
    return int(match.group(0)) if match else None
