"""Unit tests for delimiter-based tokenization."""

from lsm.match.tokenizer import DEFAULT_SEPARATORS, tokenize


def test_runs_of_separators_produce_no_empty_tokens():
    assert tokenize("a,b;;c", ",;") == ["a", "b", "c"]


def test_empty_string_yields_no_tokens():
    assert tokenize("", ",;") == []


def test_text_without_separators_is_one_token():
    assert tokenize("abc", ",;") == ["abc"]


def test_leading_and_trailing_separators_ignored():
    assert tokenize(";;a b,", " ,;") == ["a", "b"]


def test_only_separators_yields_no_tokens():
    assert tokenize(" ,, ;", " ,;") == []


def test_default_separators():
    assert DEFAULT_SEPARATORS == " .,;:"
    assert tokenize("the quick. brown: fox;") == ["the", "quick", "brown", "fox"]


def test_regex_metacharacters_are_literal():
    assert tokenize("a]b^c-d\\e", "]^-\\") == ["a", "b", "c", "d", "e"]
    # '-' must not form a range between neighbours
    assert tokenize("a-b", "a-") == ["b"]


def test_empty_separator_set_keeps_text_whole():
    assert tokenize("a b", "") == ["a b"]


def test_tokenize_is_restartable():
    first = tokenize("x y z", " ")
    second = tokenize("x y z", " ")
    assert first == second == ["x", "y", "z"]
    first.append("mutated")
    assert tokenize("x y z", " ") == ["x", "y", "z"]
