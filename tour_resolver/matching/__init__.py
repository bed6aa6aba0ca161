"""Matching - pure scoring and selection of search candidates."""

from .resolver import CandidateResolver
from .scoring import ConfidenceScorer, ScoringWeights
from .similarity import edit_distance, similarity, tokenize

__all__ = [
    "CandidateResolver",
    "ConfidenceScorer",
    "ScoringWeights",
    "edit_distance",
    "similarity",
    "tokenize",
]
