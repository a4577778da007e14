"""Extended query syntax.

A query is a set of OR groups separated by `|`; inside a group,
whitespace-separated terms must all match. Terms may carry an operator:

    =term     exact match
    'term     contains
    !term     does not contain
    ^term     starts with
    !^term    does not start with
    term$     ends with
    !term$    does not end with

Anything else is a fuzzy term.
"""

from dataclasses import dataclass
from enum import Enum


class TermKind(str, Enum):
    FUZZY = "fuzzy"
    EXACT = "exact"
    INCLUDE = "include"
    INVERSE_INCLUDE = "inverse-include"
    PREFIX = "prefix"
    INVERSE_PREFIX = "inverse-prefix"
    SUFFIX = "suffix"
    INVERSE_SUFFIX = "inverse-suffix"


@dataclass(frozen=True)
class Term:
    kind: TermKind
    text: str  # lowercased, operator characters stripped

    @property
    def is_inverse(self) -> bool:
        return self.kind in (
            TermKind.INVERSE_INCLUDE,
            TermKind.INVERSE_PREFIX,
            TermKind.INVERSE_SUFFIX,
        )


def parse_term(raw: str) -> Term:
    text = raw.lower()

    if text.startswith("!^") and len(text) > 2:
        return Term(TermKind.INVERSE_PREFIX, text[2:])
    if text.startswith("!") and text.endswith("$") and len(text) > 2:
        return Term(TermKind.INVERSE_SUFFIX, text[1:-1])
    if text.startswith("!") and len(text) > 1:
        return Term(TermKind.INVERSE_INCLUDE, text[1:])
    if text.startswith("=") and len(text) > 1:
        return Term(TermKind.EXACT, text[1:])
    if text.startswith("'") and len(text) > 1:
        return Term(TermKind.INCLUDE, text[1:])
    if text.startswith("^") and len(text) > 1:
        return Term(TermKind.PREFIX, text[1:])
    if text.endswith("$") and len(text) > 1:
        return Term(TermKind.SUFFIX, text[:-1])
    return Term(TermKind.FUZZY, text)


def parse_query(query: str) -> list[list[Term]]:
    """Split a query into OR groups of AND terms. Empty groups are dropped."""
    groups = []
    for part in query.split("|"):
        terms = [parse_term(raw) for raw in part.split()]
        if terms:
            groups.append(terms)
    return groups


def match_operator(term: Term, value: str) -> bool:
    """Evaluate a non-fuzzy term against a lowercased field value."""
    if term.kind is TermKind.EXACT:
        return value == term.text
    if term.kind is TermKind.INCLUDE:
        return term.text in value
    if term.kind is TermKind.INVERSE_INCLUDE:
        return term.text not in value
    if term.kind is TermKind.PREFIX:
        return value.startswith(term.text)
    if term.kind is TermKind.INVERSE_PREFIX:
        return not value.startswith(term.text)
    if term.kind is TermKind.SUFFIX:
        return value.endswith(term.text)
    if term.kind is TermKind.INVERSE_SUFFIX:
        return not value.endswith(term.text)
    raise ValueError(f"Not an operator term: {term.kind}")
