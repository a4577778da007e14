"""Fuzzy index over (interface, method) pairs.

Each field is scored separately against the whole query expression. The
query is the pattern: a term scores `1 - partial_ratio / 100` against a field at
least as long as itself and `1 - ratio / 100` against a shorter one (0 is
exact, 1 is unrelated). A term matches when that distance is within the
threshold. Field distances are combined Fuse-style: the product of
`distance ** weight` over matching fields, so a good method match outranks an
equally good interface match. Equal scores are ordered by how close the whole
query is to a field.
"""

import logging
from dataclasses import dataclass

from thefuzz import fuzz

from steam_api_browser.catalog.models import Catalog, SearchEntry, iter_entries
from steam_api_browser.config import FUZZY_THRESHOLD
from steam_api_browser.search.extended import Term, TermKind, match_operator, parse_query

logger = logging.getLogger(__name__)

FIELD_WEIGHTS = {"interface": 0.3, "method": 0.7}

# stands in for a perfect match so the weight still orders the fields
PERFECT_SCORE = 0.001


@dataclass(frozen=True)
class SearchResult:
    entry: SearchEntry
    score: float
    closeness: int = 0  # best full ratio of the query to a field, breaks score ties


class FuzzyIndex:
    """Immutable ranked-search index built once per catalog."""

    def __init__(self, entries: list[SearchEntry], threshold: float = FUZZY_THRESHOLD):
        self._entries = tuple(entries)
        self._lowered = tuple(
            {name: getattr(entry, name).lower() for name in FIELD_WEIGHTS}
            for entry in self._entries
        )
        self.threshold = threshold

    @classmethod
    def from_catalog(cls, catalog: Catalog, threshold: float = FUZZY_THRESHOLD) -> "FuzzyIndex":
        index = cls(iter_entries(catalog), threshold=threshold)
        logger.debug("Built fuzzy index over %d methods", len(index))
        return index

    def __len__(self) -> int:
        return len(self._entries)

    @property
    def entries(self) -> tuple[SearchEntry, ...]:
        return self._entries

    def search(self, query: str) -> list[SearchEntry]:
        """Return matching entries, best match first."""
        return [result.entry for result in self.search_scored(query)]

    def search_scored(self, query: str) -> list[SearchResult]:
        groups = parse_query(query)
        if not groups:
            return []

        text = query.strip().lower()
        results = []
        for entry, fields in zip(self._entries, self._lowered):
            score = self._score_entry(groups, fields)
            if score is not None:
                closeness = max(fuzz.ratio(text, value) for value in fields.values())
                results.append(SearchResult(entry=entry, score=score, closeness=closeness))

        # an exact name beats one that merely contains the query; remaining ties keep catalog order
        results.sort(key=lambda r: (r.score, -r.closeness))
        return results

    def field_distance(self, query: str, value: str) -> float | None:
        """Distance of one field value to a query, or None if it does not match."""
        return self._expression_distance(parse_query(query), value.lower())

    def _score_entry(self, groups: list[list[Term]], fields: dict[str, str]) -> float | None:
        total = 1.0
        matched = False
        for name, weight in FIELD_WEIGHTS.items():
            distance = self._expression_distance(groups, fields[name])
            if distance is None:
                continue
            matched = True
            total *= max(distance, PERFECT_SCORE) ** weight
        return total if matched else None

    def _expression_distance(self, groups: list[list[Term]], value: str) -> float | None:
        best = None
        for terms in groups:
            distances = []
            for term in terms:
                distance = self._term_distance(term, value)
                if distance is None:
                    break
                distances.append(distance)
            else:
                group_distance = sum(distances) / len(distances)
                if best is None or group_distance < best:
                    best = group_distance
        return best

    def _term_distance(self, term: Term, value: str) -> float | None:
        if term.kind is not TermKind.FUZZY:
            return 0.0 if match_operator(term, value) else None

        # the query is the pattern: a field shorter than the query is compared whole
        if len(term.text) > len(value):
            similarity = fuzz.ratio(term.text, value)
        else:
            similarity = fuzz.partial_ratio(term.text, value)
        distance = 1 - similarity / 100
        return distance if distance <= self.threshold else None
