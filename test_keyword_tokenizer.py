"""
Tests for the spaCy keyword tokenizer
"""

import pytest

from table_ilp_solver.config import TableParams
from table_ilp_solver.models import Table
from table_ilp_solver.services import KeywordTokenizer, TableInterface


@pytest.fixture(scope="module")
def keyword_tokenizer():
    return KeywordTokenizer()


def test_stop_words_and_punctuation_dropped(keyword_tokenizer):
    tokens = keyword_tokenizer.stemmed_keyword_tokenize("How many legs does a cat have?")

    assert tokens == ["leg", "cat"]


def test_numbers_kept(keyword_tokenizer):
    assert keyword_tokenizer.stemmed_keyword_tokenize("4") == ["4"]


def test_empty_text(keyword_tokenizer):
    assert keyword_tokenizer.stemmed_keyword_tokenize("") == []
    assert keyword_tokenizer.stemmed_keyword_tokenize("the of and") == []


def test_results_are_memoized(keyword_tokenizer):
    keyword_tokenizer.clear_cache()

    first = keyword_tokenizer.stemmed_keyword_tokenize("Cats eat fish")
    first.append("mutated")
    second = keyword_tokenizer.stemmed_keyword_tokenize("Cats eat fish")

    assert keyword_tokenizer.get_cache_size() == 1
    assert "mutated" not in second


def test_cat_question_ranks_legs_table_first(keyword_tokenizer):
    tables = [
        Table.from_rows("animals.csv", [["Animal", "Legs"], ["cat", "4"], ["bird", "2"]], keyword_tokenizer),
        Table.from_rows("planets.csv", [["Planet", "Moons"], ["earth", "1"], ["mars", "2"]], keyword_tokenizer),
        Table.from_rows("food.csv", [["Animal", "Food"], ["cat", "fish"], ["cow", "grass"]], keyword_tokenizer),
    ]
    interface = TableInterface(tables, keyword_tokenizer, TableParams(max_tables_per_question=1))

    table_ids = interface.get_table_ids_for_question("How many legs does a cat have?")

    assert [t for t, _ in table_ids] == [0]
    assert table_ids[0][1] > 0
