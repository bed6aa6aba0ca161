"""Normalized edit-distance similarity between short strings.

Place names coming out of the proposal step rarely match the search
service verbatim ("Museum" vs "Museu"), so name matching relies on a
normalized Levenshtein similarity. Substitution, insertion and deletion
each cost 1.
"""

from __future__ import annotations

import re
from typing import List

from rapidfuzz.distance import Levenshtein

# Names are split on whitespace and parentheses, e.g. "Belém Tower (Torre de Belém)"
_TOKEN_SPLIT = re.compile(r"[\s()]+")

MIN_TOKEN_LENGTH = 3


def edit_distance(a: str, b: str) -> int:
    """Return the Levenshtein distance between ``a`` and ``b``."""
    return Levenshtein.distance(a, b)


def similarity(a: str, b: str) -> float:
    """Compute the normalized Levenshtein similarity of two strings.

    Parameters
    ----------
    a, b:
        Strings to compare. Comparison is case-sensitive; callers fold
        case beforehand.

    Returns
    -------
    float
        ``1.0`` when the strings are equal, ``0.0`` when either one is
        empty, otherwise ``1 - distance / max(len(a), len(b))``.
    """
    if a == b:
        return 1.0
    if not a or not b:
        return 0.0
    return 1.0 - edit_distance(a, b) / max(len(a), len(b))


def tokenize(name: str) -> List[str]:
    """Split a name into tokens, dropping tokens of two characters or less."""
    return [t for t in _TOKEN_SPLIT.split(name) if len(t) >= MIN_TOKEN_LENGTH]
