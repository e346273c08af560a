"""Streaming matching engine.

This module provides the engine that scans a candidate source one record at
a time, scores each record against the source term and accumulates the
records that meet the threshold. Results keep scan order; nothing is
re-ranked. When a limit is configured the scan stops on the very iteration
that produced the last allowed hit, so no further candidate is pulled.
"""

from __future__ import annotations
import time
import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Iterable, List, Mapping

from ..errors import CandidateAccessError
from ..utils.logging_helpers import log_progress, format_summary
from .distance import DistanceBackend, get_distance_function
from .extraction import extract_output_value
from .scoring import MatchConfig, MatchMode, comparison_units, score_units

logger = logging.getLogger(__name__)


class ScanState(str, Enum):
    SCANNING = "scanning"
    LIMITED = "limited"
    EXHAUSTED = "exhausted"


class FieldErrorPolicy(str, Enum):
    ABORT = "abort"
    SKIP = "skip"


@dataclass
class MatchResult:
    """One accepted candidate."""
    value: Any
    score: float
    distance: int
    has_value: bool = True

    def to_dict(self) -> Dict[str, Any]:
        out: Dict[str, Any] = {}
        if self.has_value:
            out["match"] = self.value
        out["score"] = self.score
        out["distance"] = self.distance
        return out


@dataclass
class ScanStats:
    scanned: int = 0
    pruned: int = 0
    compared: int = 0
    accepted: int = 0
    field_errors: int = 0
    duration_seconds: float = 0.0


@dataclass
class ResultSet:
    """Final output of one scan.

    ``hit_count`` always equals ``len(results)``; it is carried separately
    for consumers that drop the result bodies.
    """
    results: List[MatchResult]
    hit_count: int
    mode: MatchMode
    stats: ScanStats = field(default_factory=ScanStats)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "results": [r.to_dict() for r in self.results],
            "hits": self.hit_count,
            "level": self.mode.value,
        }


class MatchingEngine:
    """Single-stream fuzzy matcher.

    The engine:
    1. Prepares the source units once (tokenizing in sentence mode)
    2. Pulls candidates from the source one at a time
    3. Scores each candidate (bound pre-filter, then edit distance)
    4. Appends accepted candidates in scan order
    5. Stops as soon as the limit is reached, or when the source ends

    Example usage:
        config = MatchConfig(source_term="kitten", threshold=0.5, field="word")
        engine = MatchingEngine(config)
        result_set = engine.run([{"word": "sitting"}, {"word": "mitten"}])
    """

    def __init__(
        self,
        config: MatchConfig,
        distance_backend: DistanceBackend | str = DistanceBackend.NATIVE,
        on_field_error: FieldErrorPolicy | str = FieldErrorPolicy.ABORT,
        progress_enabled: bool = False,
        progress_interval: int = 1000,
    ):
        """Initialize the matching engine.

        Args:
            config: Request configuration
            distance_backend: Edit distance implementation (default: native DP)
            on_field_error: ABORT propagates CandidateAccessError (default);
                SKIP logs and skips the offending candidate
            progress_enabled: Enable periodic progress logging
            progress_interval: Log progress every N scanned candidates
        """
        self.config = config
        self.distance_fn = get_distance_function(distance_backend)
        self.on_field_error = FieldErrorPolicy(on_field_error)
        self.progress_enabled = progress_enabled
        self.progress_interval = max(1, progress_interval)

        self.source_units = comparison_units(config.source_term, config)
        self.state = ScanState.SCANNING
        self.stats = ScanStats()

    def run(self, source: Iterable[Mapping[str, Any]]) -> ResultSet:
        """Scan ``source`` and return every candidate meeting the threshold.

        Args:
            source: Candidate records (already filtered for duplicates and
                match predicate by the source)

        Returns:
            ResultSet in scan order

        Raises:
            CandidateAccessError: Comparison field missing or not text, when
                the policy is ABORT
        """
        cfg = self.config
        start = time.time()
        self.state = ScanState.SCANNING
        self.stats = stats = ScanStats()
        results: List[MatchResult] = []
        count = 0
        debug_logging = logger.isEnabledFor(logging.DEBUG)

        if cfg.has_limit and cfg.limit == 0:
            self.state = ScanState.LIMITED
            return self._finish(results, count, start)

        for record in source:
            stats.scanned += 1

            try:
                text = self._comparison_text(record, stats.scanned)
            except CandidateAccessError as e:
                if self.on_field_error is FieldErrorPolicy.ABORT:
                    raise
                stats.field_errors += 1
                logger.warning(f"[match] Skipping candidate: {e}")
                continue

            pair = score_units(
                self.source_units,
                comparison_units(text, cfg),
                cfg.threshold,
                self.distance_fn,
            )
            if pair.pruned:
                stats.pruned += 1
            else:
                stats.compared += 1

            if pair.score >= cfg.threshold:
                results.append(self._build_result(record, pair.score, pair.distance))
                count += 1
                if debug_logging:
                    logger.debug(
                        f"[match] hit #{count} candidate={stats.scanned} "
                        f"score={pair.score:.4f} distance={pair.distance}"
                    )

                if cfg.has_limit and count == cfg.limit:
                    self.state = ScanState.LIMITED
                    break

            if self.progress_enabled and stats.scanned % self.progress_interval == 0:
                log_progress(
                    processed=stats.scanned,
                    total=None,
                    accepted=count,
                    pruned=stats.pruned,
                    elapsed_seconds=time.time() - start,
                )
        else:
            self.state = ScanState.EXHAUSTED

        return self._finish(results, count, start)

    def _comparison_text(self, record: Mapping[str, Any], position: int) -> str:
        name = self.config.field
        try:
            value = record[name]
        except (KeyError, TypeError, IndexError):
            raise CandidateAccessError(name, "is missing", position) from None
        if not isinstance(value, str):
            raise CandidateAccessError(name, f"is not text ({type(value).__name__})", position)
        return value

    def _build_result(self, record: Mapping[str, Any], score: float, distance: int) -> MatchResult:
        if self.config.output_field is None:
            return MatchResult(value=record, score=score, distance=distance)
        present, value = extract_output_value(record, self.config.output_field)
        return MatchResult(value=value, score=score, distance=distance, has_value=present)

    def _finish(self, results: List[MatchResult], count: int, start: float) -> ResultSet:
        stats = self.stats
        stats.accepted = count
        stats.duration_seconds = time.time() - start
        logger.info(format_summary(
            hits=count,
            scanned=stats.scanned,
            pruned=stats.pruned,
            compared=stats.compared,
            duration_seconds=stats.duration_seconds,
            stopped_by_limit=self.state is ScanState.LIMITED,
        ))
        if stats.field_errors:
            logger.info(f"  Skipped {stats.field_errors} candidate(s) with unusable '{self.config.field}' field")
        return ResultSet(results=results, hit_count=count, mode=self.config.mode, stats=stats)


def run_match(
    config: MatchConfig,
    source: Iterable[Mapping[str, Any]],
    distance_backend: DistanceBackend | str = DistanceBackend.NATIVE,
    on_field_error: FieldErrorPolicy | str = FieldErrorPolicy.ABORT,
) -> ResultSet:
    """Convenience wrapper: build an engine and run one scan."""
    engine = MatchingEngine(config, distance_backend=distance_backend, on_field_error=on_field_error)
    return engine.run(source)


__all__ = [
    "ScanState",
    "FieldErrorPolicy",
    "MatchResult",
    "ScanStats",
    "ResultSet",
    "MatchingEngine",
    "run_match",
]
