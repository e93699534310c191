"""
Tests for corpus-wide imagery-word associations
"""

import copy

import pytest

from poem_models import Occurrence, Poem
from poem_parser import parse_poems
from word_associations import (
    analyze_imagery_word_associations,
    attach_word_associations,
    count_clause_frequencies,
)


@pytest.fixture
def poems():
    return [
        Poem(id="p1", title="p1", content="明月照松间，明月照高楼"),
        Poem(id="p2", title="p2", content="明月几时有"),
        Poem(id="p3", title="p3", content="照影"),
    ]


class TestClauseFrequencies:

    def test_counts_clauses_and_their_characters(self, poems):
        frequencies = count_clause_frequencies(poems)
        assert frequencies["明月照松间"] == 1
        assert frequencies["明"] == 3
        assert frequencies["照"] == 3
        assert frequencies["松"] == 1

    def test_single_character_clause_counts_once(self):
        frequencies = count_clause_frequencies([Poem("a", "a", "月，月")])
        assert frequencies["月"] == 2


class TestAnalyzeAssociations:

    def test_counts_and_strength(self, poems):
        result = analyze_imagery_word_associations(poems)
        by_imagery = {entry.imagery: entry.associations for entry in result}

        moon = by_imagery["月"]
        assert [a.word for a in moon] == ["明", "照"]
        assert moon[0].count == 3
        assert moon[0].strength == pytest.approx(1.0)
        assert moon[1].count == 2
        assert moon[1].strength == pytest.approx(2 / 3)

    def test_occurrences_keep_every_clause(self, poems):
        result = analyze_imagery_word_associations(poems)
        bright = result[0].associations[0]
        assert bright.occurrences == [
            Occurrence("p1", "明月照松间"),
            Occurrence("p1", "明月照高楼"),
            Occurrence("p2", "明月几时有"),
        ]

    def test_imagery_kept_even_without_strong_associations(self, poems):
        result = analyze_imagery_word_associations(poems)
        assert [entry.imagery for entry in result] == ["月", "松"]
        assert result[1].associations == []

    def test_no_common_word_filter(self):
        poems = [Poem("a", "a", "月在天，月在天")]
        result = analyze_imagery_word_associations(poems)
        assert {a.word for a in result[0].associations} == {"在", "天"}

    def test_strength_bounded(self):
        poems = parse_poems(
            "1.静夜思\n床前明月光，疑是地上霜。\n举头望明月，低头思故乡。\n"
            "2.月下独酌\n花间一壶酒，独酌无相亲。\n举杯邀明月，对影成三人。\n"
            "3.春晓\n春眠不觉晓，处处闻啼鸟。\n夜来风雨声，花落知多少。\n"
        )
        result = analyze_imagery_word_associations(poems)
        assert result
        for entry in result:
            for association in entry.associations:
                assert 0 < association.strength <= 1
                assert association.count >= 2

    def test_empty_corpus(self):
        assert analyze_imagery_word_associations([]) == []


class TestAttachAssociations:

    def test_each_poem_gets_its_own_view(self, poems):
        enriched = attach_word_associations(poems)

        first = {a.word: a for a in enriched[0].word_associations}
        assert set(first) == {"明", "照"}
        assert first["明"].count == 2
        assert all(occ.poem_id == "p1" for occ in first["明"].occurrences)

        second = enriched[1].word_associations
        assert [(a.word, a.count) for a in second] == [("明", 1)]

        assert enriched[2].word_associations == []

    def test_input_poems_untouched(self, poems):
        before = copy.deepcopy(poems)
        attach_word_associations(poems)
        assert poems == before

    def test_views_are_independent_of_corpus_associations(self, poems):
        associations = analyze_imagery_word_associations(poems)
        enriched = attach_word_associations(poems, associations)

        enriched[0].word_associations[0].occurrences.clear()
        moon = next(entry for entry in associations if entry.imagery == "月")
        assert all(a.occurrences for a in moon.associations)

    def test_poems_sharing_an_id_get_separate_lists(self):
        poems = [
            Poem(id="同题", title="同题", content="明月照松间"),
            Poem(id="同题", title="同题", content="明月照松间"),
        ]
        enriched = attach_word_associations(poems)

        assert enriched[0].word_associations == enriched[1].word_associations
        assert enriched[0].word_associations[0] is not enriched[1].word_associations[0]

    def test_large_corpus_keeps_per_poem_counts(self):
        poems = [
            Poem(id=f"p{i}", title=f"p{i}", content="明月照松间，明月照高楼")
            for i in range(200)
        ]
        enriched = attach_word_associations(poems)

        for poem in enriched:
            bright = next(a for a in poem.word_associations if a.word == "明")
            # two clauses via 月, one via 松
            assert bright.count == 3
            assert {occ.poem_id for occ in bright.occurrences} == {poem.id}
