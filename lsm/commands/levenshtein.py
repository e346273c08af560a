"""The ``levenshtein`` command: fuzzy-match a term against a collection.

Request document::

    {
        "levenshtein": "<collection>",
        "sourceTerm": "kitten",
        "threshold": 0.5,
        "word": true,
        "sentence": false,
        "separators": " .,;:",
        "field": "word",
        "limit": 10,              # optional
        "outputField": "id"       # optional
    }

Response document: ``{"results": [...], "hits": n, "level": "word"}``.
"""
from __future__ import annotations
import logging
from typing import Any, Dict, Mapping

from ..errors import ConfigurationError
from ..match import DistanceBackend, FieldErrorPolicy, MatchConfig, MatchMode, MatchingEngine
from ..sources import CandidateSource
from .base import Command

logger = logging.getLogger(__name__)

_MISSING = object()


def _required(request: Mapping[str, Any], key: str, expected: type | tuple, type_name: str) -> Any:
    value = request.get(key, _MISSING)
    if value is _MISSING:
        raise ConfigurationError(f"missing required field '{key}'")
    # bool is an int subclass; never accept it as a number
    if not isinstance(value, expected) or (expected is not bool and isinstance(value, bool)):
        raise ConfigurationError(f"field '{key}' must be {type_name}, got {type(value).__name__}")
    return value


def _optional(request: Mapping[str, Any], key: str, expected: type | tuple, type_name: str) -> Any:
    if key not in request:
        return None
    return _required(request, key, expected, type_name)


def parse_request(request: Mapping[str, Any]) -> MatchConfig:
    """Map a command document onto a MatchConfig.

    Raises:
        ConfigurationError: If a required field is missing or has the wrong type
    """
    source_term = _required(request, "sourceTerm", str, "a string")
    threshold = _required(request, "threshold", (int, float), "a number")
    is_word = _required(request, "word", bool, "a boolean")
    is_sentence = _required(request, "sentence", bool, "a boolean")
    separators = _required(request, "separators", str, "a string")
    field = _required(request, "field", str, "a string")
    limit = _optional(request, "limit", (int, float), "an integer")
    # JSON encoders may emit integral limits as 5.0
    if isinstance(limit, float):
        if not limit.is_integer():
            raise ConfigurationError(f"field 'limit' must be an integer, got {limit}")
        limit = int(limit)
    output_field = _optional(request, "outputField", str, "a string")

    if not (is_word or is_sentence):
        raise ConfigurationError("one of 'word' or 'sentence' must be true")

    return MatchConfig(
        source_term=source_term,
        threshold=float(threshold),
        field=field,
        mode=MatchMode.SENTENCE if is_sentence else MatchMode.WORD,
        separators=separators,
        limit=limit,
        output_field=output_field,
    )


class LevenshteinCommand(Command):
    name = "levenshtein"

    def __init__(
        self,
        distance_backend: DistanceBackend | str = DistanceBackend.NATIVE,
        on_field_error: FieldErrorPolicy | str = FieldErrorPolicy.ABORT,
        progress_enabled: bool = False,
        progress_interval: int = 1000,
    ):
        self.distance_backend = DistanceBackend(distance_backend)
        self.on_field_error = FieldErrorPolicy(on_field_error)
        self.progress_enabled = progress_enabled
        self.progress_interval = progress_interval

    def help(self) -> str:
        return "Find matches in a collection using the Levenshtein distance and the provided threshold."

    def run(self, request: Mapping[str, Any], source: CandidateSource) -> Dict[str, Any]:
        config = parse_request(request)
        engine = MatchingEngine(
            config,
            distance_backend=self.distance_backend,
            on_field_error=self.on_field_error,
            progress_enabled=self.progress_enabled,
            progress_interval=self.progress_interval,
        )
        return engine.run(source).to_dict()


__all__ = ["LevenshteinCommand", "parse_request"]
