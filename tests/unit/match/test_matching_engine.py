"""Unit tests for the streaming MatchingEngine."""

import logging

import pytest

from lsm.errors import CandidateAccessError
from lsm.match import (
    FieldErrorPolicy,
    MatchConfig,
    MatchMode,
    MatchingEngine,
    ScanState,
    run_match,
)
from tests.mocks.counting_source import CountingSource


def test_word_mode_kitten_scenario(kitten_config, kitten_pool):
    result_set = MatchingEngine(kitten_config).run(kitten_pool)

    assert result_set.hit_count == 2
    assert len(result_set.results) == 2
    assert result_set.mode is MatchMode.WORD

    sitting, mitten = result_set.results
    # Scan order is kept, not sorted by score
    assert sitting.value == {'id': 1, 'word': 'sitting'}
    assert sitting.distance == 3
    assert sitting.score == pytest.approx(0.571, abs=1e-3)
    assert mitten.value == {'id': 2, 'word': 'mitten'}
    assert mitten.distance == 1
    assert mitten.score == pytest.approx(0.833, abs=1e-3)


def test_xyz_is_pruned_not_compared(kitten_config, kitten_pool):
    engine = MatchingEngine(kitten_config)
    result_set = engine.run(kitten_pool)

    assert result_set.stats.scanned == 3
    assert result_set.stats.pruned == 1
    assert result_set.stats.compared == 2
    assert engine.state is ScanState.EXHAUSTED


def test_sentence_mode_scenario():
    config = MatchConfig(
        source_term='the quick fox',
        threshold=0.6,
        field='text',
        mode=MatchMode.SENTENCE,
        separators=' ',
    )
    engine = MatchingEngine(config)
    assert engine.source_units == ['the', 'quick', 'fox']

    result_set = engine.run([{'text': 'the quick brown fox'}])

    assert result_set.hit_count == 1
    assert result_set.mode is MatchMode.SENTENCE
    hit = result_set.results[0]
    assert hit.distance == 1
    assert hit.score == pytest.approx(0.75)


def test_limit_stops_scan_after_first_hit(kitten_pool):
    config = MatchConfig(source_term='kitten', threshold=0.5, field='word', limit=1)
    source = CountingSource(kitten_pool)
    engine = MatchingEngine(config)

    result_set = engine.run(source)

    assert result_set.hit_count == 1
    assert [r.value['word'] for r in result_set.results] == ['sitting']
    assert engine.state is ScanState.LIMITED
    # Only the first record was pulled and scored
    assert source.pulls == 1
    assert source.scored == [0]


def test_limit_returns_first_k_qualifying_in_scan_order():
    pool = [{'w': w} for w in ['mitten', 'zzzzzzzzzz', 'kitten', 'bitten', 'sitten', 'kitte']]
    config = MatchConfig(source_term='kitten', threshold=0.8, field='w', limit=2)
    source = CountingSource(pool)

    result_set = MatchingEngine(config).run(source)

    assert [r.value['w'] for r in result_set.results] == ['mitten', 'kitten']
    assert result_set.hit_count == len(result_set.results) == 2
    assert source.pulls == 3


def test_limit_larger_than_hits_exhausts_source(kitten_pool):
    config = MatchConfig(source_term='kitten', threshold=0.5, field='word', limit=10)
    source = CountingSource(kitten_pool)
    engine = MatchingEngine(config)

    result_set = engine.run(source)

    assert result_set.hit_count == 2
    assert source.pulls == 3
    assert engine.state is ScanState.EXHAUSTED


def test_limit_zero_pulls_nothing(kitten_pool):
    config = MatchConfig(source_term='kitten', threshold=0.5, field='word', limit=0)
    source = CountingSource(kitten_pool)
    engine = MatchingEngine(config)

    result_set = engine.run(source)

    assert result_set.hit_count == 0
    assert source.pulls == 0
    assert engine.state is ScanState.LIMITED


def test_threshold_inclusive_on_final_score():
    config = MatchConfig(source_term='abcd', threshold=0.75, field='w')
    result_set = MatchingEngine(config).run([{'w': 'abce'}, {'w': 'abc'}])

    # 'abce' scores exactly 0.75 and is kept; 'abc' is pruned by the bound (0.75 is not > 0.75)
    assert [r.value['w'] for r in result_set.results] == ['abce']
    assert result_set.results[0].score == 0.75


def test_threshold_boundaries_at_decimal_thresholds():
    # 1 - 4/5 must compare equal to the literal 0.2
    config = MatchConfig(source_term='abcde', threshold=0.2, field='w')
    result_set = MatchingEngine(config).run([{'w': 'axyzw'}])
    assert result_set.hit_count == 1
    assert result_set.results[0].score == 0.2
    assert result_set.results[0].distance == 4

    # bound 3/10 is not > 0.3, so 'abc' never reaches the distance step
    config = MatchConfig(source_term='abcdefghij', threshold=0.3, field='w')
    engine = MatchingEngine(config)
    result_set = engine.run([{'w': 'abc'}])
    assert result_set.hit_count == 0
    assert engine.stats.pruned == 1


def test_zero_threshold_accepts_pruned_candidates():
    config = MatchConfig(source_term='abc', threshold=0.0, field='w')
    result_set = MatchingEngine(config).run([{'w': ''}])

    # bound 0.0 <= 0.0 prunes to score 0, which still satisfies score >= 0
    assert result_set.hit_count == 1
    assert (result_set.results[0].score, result_set.results[0].distance) == (0.0, 0)


def test_output_field_extraction(kitten_pool):
    config = MatchConfig(source_term='kitten', threshold=0.5, field='word', output_field='id')
    result_set = MatchingEngine(config).run(kitten_pool)

    assert [r.value for r in result_set.results] == [1, 2]
    assert result_set.to_dict()['results'][0] == {'match': 1, 'score': pytest.approx(4 / 7), 'distance': 3}


def test_unsupported_output_kind_is_omitted():
    config = MatchConfig(source_term='kitten', threshold=0.5, field='word', output_field='blob')
    result_set = MatchingEngine(config).run([
        {'word': 'kitten', 'blob': b'\x00\x01'},
        {'word': 'mitten'},
    ])

    encoded = result_set.to_dict()
    assert encoded['hits'] == 2
    for result in encoded['results']:
        assert 'match' not in result
        assert set(result) == {'score', 'distance'}


def test_to_dict_wire_shape(kitten_config, kitten_pool):
    encoded = MatchingEngine(kitten_config).run(kitten_pool).to_dict()

    assert set(encoded) == {'results', 'hits', 'level'}
    assert encoded['hits'] == 2
    assert encoded['level'] == 'word'
    assert encoded['results'][1]['match'] == {'id': 2, 'word': 'mitten'}


class TestFieldErrors:

    def test_missing_field_aborts_scan(self):
        config = MatchConfig(source_term='kitten', threshold=0.5, field='word')
        source = CountingSource([{'word': 'mitten'}, {'other': 'x'}, {'word': 'kitten'}])

        with pytest.raises(CandidateAccessError) as exc_info:
            MatchingEngine(config).run(source)

        assert exc_info.value.field == 'word'
        assert exc_info.value.position == 2
        assert source.pulls == 2

    def test_non_text_field_aborts_scan(self):
        config = MatchConfig(source_term='kitten', threshold=0.5, field='word')
        with pytest.raises(CandidateAccessError, match='not text'):
            MatchingEngine(config).run([{'word': 42}])

    def test_skip_policy_continues(self, caplog):
        config = MatchConfig(source_term='kitten', threshold=0.5, field='word')
        engine = MatchingEngine(config, on_field_error=FieldErrorPolicy.SKIP)

        with caplog.at_level(logging.WARNING, logger='lsm.match.matching_engine'):
            result_set = engine.run([{'word': None}, {'word': 'mitten'}, {}])

        assert result_set.hit_count == 1
        assert result_set.stats.field_errors == 2
        assert engine.state is ScanState.EXHAUSTED
        assert 'Skipping candidate' in caplog.text


def test_rapidfuzz_backend_gives_same_results(kitten_config, kitten_pool):
    native = MatchingEngine(kitten_config).run(kitten_pool).to_dict()
    fast = MatchingEngine(kitten_config, distance_backend='rapidfuzz').run(kitten_pool).to_dict()
    assert native == fast


def test_engine_is_reusable_across_scans(kitten_config, kitten_pool):
    engine = MatchingEngine(kitten_config)
    first = engine.run(kitten_pool)
    second = engine.run(kitten_pool[:1])

    assert first.hit_count == 2
    assert second.hit_count == 1
    assert second.stats.scanned == 1


def test_empty_source():
    config = MatchConfig(source_term='kitten', threshold=0.5, field='word')
    result_set = run_match(config, [])
    assert result_set.hit_count == 0
    assert result_set.results == []


def test_progress_logging(kitten_config, kitten_pool, caplog):
    engine = MatchingEngine(kitten_config, progress_enabled=True, progress_interval=1)
    with caplog.at_level(logging.INFO):
        engine.run(kitten_pool)
    assert 'candidates scanned' in caplog.text
    assert '2 hits' in caplog.text
