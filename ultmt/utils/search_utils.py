import re
from typing import Callable, List, Sequence, TypeVar

from Levenshtein import distance as levenshtein_distance

from ultmt.constants.roster import MIN_SEARCH_LENGTH

T = TypeVar("T")


def build_prefix_clauses(term: str, fields: Sequence[str]) -> List[dict]:
    """
    One case-insensitive prefix match per field for every token long enough to
    search on. Shorter tokens add nothing.
    """
    clauses = []
    for token in term.split():
        if len(token) < MIN_SEARCH_LENGTH:
            continue
        pattern = re.compile(f"^{re.escape(token)}", re.IGNORECASE)
        clauses.extend({field: pattern} for field in fields)
    return clauses


def rank_by_distance(term: str, results: List[T], labels: Callable[[T], Sequence[str]]) -> List[T]:
    """
    Reorder multi word search results by the summed edit distance between the
    term and each label. Single word terms and single results keep store order.
    """
    if len(term.split()) < 2 or len(results) < 2:
        return results

    def score(result: T) -> int:
        return sum(levenshtein_distance(term, label) for label in labels(result))

    return sorted(results, key=score)
