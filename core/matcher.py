import math
from dataclasses import dataclass, field
from typing import List, Sequence

from utils.helpers import normalize_text

MODES = ("any", "all")


@dataclass
class TermSpec:
    """Normalized search terms.

    A page matches when it contains every required term and, if optional
    terms exist, at least one of them. The any/all form maps onto the same
    predicate: "all" fills ``required``, "any" fills ``optional``.
    """

    required: List[str] = field(default_factory=list)
    optional: List[str] = field(default_factory=list)
    # only the required/optional form reorders the downloaded document
    reorder_download: bool = True

    @classmethod
    def from_split(cls, required: Sequence[str], optional: Sequence[str]) -> "TermSpec":
        return cls(required=list(required), optional=list(optional), reorder_download=True)

    @classmethod
    def from_mode(cls, terms: Sequence[str], mode: str = "any") -> "TermSpec":
        if mode not in MODES:
            raise ValueError(f"Unknown mode: {mode!r}")
        if mode == "all":
            return cls(required=list(terms), optional=[], reorder_download=False)
        return cls(required=[], optional=list(terms), reorder_download=False)

    @property
    def all_terms(self) -> List[str]:
        return self.required + self.optional

    @property
    def is_empty(self) -> bool:
        return not self.required and not self.optional


@dataclass
class MatchResult:
    page_index: int
    offset: float = math.inf

    @property
    def page_number(self) -> int:
        return self.page_index + 1


def page_matches(text: str, spec: TermSpec) -> bool:
    """Decide whether normalized page text satisfies the term spec.

    Containment is plain substring search, so "cat" matches "category".
    Both lists empty means a trivial match; callers reject that earlier.
    """
    has_required = not spec.required or all(term in text for term in spec.required)
    has_optional = not spec.optional or any(term in text for term in spec.optional)
    return has_required and has_optional


def find_matches(page_texts: Sequence[str], spec: TermSpec) -> List[int]:
    """Return 0-based indices of matching pages in document order."""
    matches = []
    for index, raw in enumerate(page_texts):
        if page_matches(normalize_text(raw), spec):
            matches.append(index)
    return matches


def earliest_offset(raw_text: str, spec: TermSpec) -> float:
    """Smallest first-occurrence index of any term in the raw page text.

    Uses a plain lowercase scan, not ``normalize_text``, so a page can match
    and still report ``math.inf`` here.
    """
    lowered = raw_text.lower()
    earliest = math.inf
    for term in spec.all_terms:
        position = lowered.find(term)
        if position != -1 and position < earliest:
            earliest = position
    return earliest


def order_matches(indices: Sequence[int], page_texts: Sequence[str], spec: TermSpec) -> List[MatchResult]:
    results = [MatchResult(index, earliest_offset(page_texts[index], spec)) for index in indices]
    # sorted() is stable: equal offsets keep their input order
    return sorted(results, key=lambda result: result.offset)
