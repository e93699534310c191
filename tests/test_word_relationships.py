"""
Tests for per-poem word relationships
"""

from word_relationships import WordRelationship, extract_word_relationships, merge_word_relationships


def _as_dict(relationships):
    return {(r.imagery, r.word): r.count for r in relationships}


class TestExtractWordRelationships:
    """Sentence-scoped co-occurrence with common words"""

    def test_counts_sentences_not_repetitions(self):
        text = "明月清风。明明月照人\n月落"
        result = extract_word_relationships(text, ["月"])
        assert _as_dict(result) == {("月", "明"): 2, ("月", "清"): 1, ("月", "落"): 1}
        assert result[0] == WordRelationship("月", "明", 2)

    def test_only_common_words_count(self):
        result = extract_word_relationships("明月照松间", ["月", "松"])
        assert _as_dict(result) == {("月", "明"): 1, ("松", "明"): 1}

    def test_sentence_without_imagery_contributes_nothing(self):
        result = extract_word_relationships("清风落叶。明月", ["月"])
        assert _as_dict(result) == {("月", "明"): 1}

    def test_imagery_outside_lexicon_is_ignored(self):
        assert extract_word_relationships("猫落", ["猫"]) == []

    def test_imagery_never_pairs_with_itself(self):
        result = extract_word_relationships("月月明", ["月"], common_words={"月", "明"})
        assert _as_dict(result) == {("月", "明"): 1}

    def test_blank_inputs(self):
        assert extract_word_relationships("", ["月"]) == []
        assert extract_word_relationships("   ", ["月"]) == []
        assert extract_word_relationships("明月", []) == []

    def test_sorted_by_count_descending(self):
        text = "明月落。明月落。月清"
        counts = [r.count for r in extract_word_relationships(text, ["月"])]
        assert counts == sorted(counts, reverse=True)


class TestMergeWordRelationships:
    """Corpus-wide merge"""

    def test_counts_are_summed(self):
        merged = merge_word_relationships([
            [WordRelationship("月", "明", 1), WordRelationship("山", "青", 2)],
            [WordRelationship("月", "明", 3)],
        ])
        assert merged == [WordRelationship("月", "明", 4), WordRelationship("山", "青", 2)]

    def test_empty(self):
        assert merge_word_relationships([]) == []
