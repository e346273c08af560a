"""Matching package: tokenizer, edit distance, bound, scorer and engine.

All modules are pure and side-effect free apart from logging; record
retrieval lives in :mod:`lsm.sources`.
"""

from .tokenizer import DEFAULT_SEPARATORS, tokenize
from .distance import DistanceBackend, levenshtein_distance, get_distance_function
from .similarity import max_similarity, normalized_similarity
from .scoring import MatchMode, MatchConfig, PairScore, score_pair, score_units
from .extraction import ValueKind, classify_value, extract_output_value
from .matching_engine import (
    ScanState,
    FieldErrorPolicy,
    MatchResult,
    ScanStats,
    ResultSet,
    MatchingEngine,
    run_match,
)

__all__ = [
    "DEFAULT_SEPARATORS",
    "tokenize",
    "DistanceBackend",
    "levenshtein_distance",
    "get_distance_function",
    "max_similarity",
    "normalized_similarity",
    "MatchMode",
    "MatchConfig",
    "PairScore",
    "score_pair",
    "score_units",
    "ValueKind",
    "classify_value",
    "extract_output_value",
    "ScanState",
    "FieldErrorPolicy",
    "MatchResult",
    "ScanStats",
    "ResultSet",
    "MatchingEngine",
    "run_match",
]
