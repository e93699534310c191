"""
Word Relationships for the Poem Imagery Pipeline

PURPOSE:
This module computes SENTENCE-SCOPED CO-OCCURRENCE between imagery terms
and common words within a single poem. It counts which common characters
share a sentence with an imagery term. It does NOT infer syntax or meaning.

============================================================
SIGNAL DEFINITION (DOCUMENTED)
============================================================

For each (imagery, word) pair:
- count = number of sentences where BOTH appear

Rules:
1. Sentences are split on 。！？ and newlines
2. Only imagery terms present in the imagery lexicon are considered
3. Sentences without any considered imagery term contribute nothing
4. Words are single characters; each distinct character of a sentence
   counts once per sentence (set semantics)
5. A word must be in the common-word lexicon, non-blank, and different
   from the imagery term itself

Counts from several poems merge additively on (imagery, word).
"""

from dataclasses import dataclass

from dict.common_word_dictionary import COMMON_WORDS
from dict.imagery_dictionary import NATURAL_IMAGERY
from text_utils import split_sentences, unique_characters


@dataclass
class WordRelationship:
    """Sentence-level co-occurrence tally of an imagery term and a common word."""
    imagery: str
    word: str
    count: int


def extract_word_relationships(
    text: str,
    imagery_words: list[str],
    lexicon=NATURAL_IMAGERY,
    common_words=COMMON_WORDS,
) -> list[WordRelationship]:
    """
    Tally sentence-level co-occurrence of imagery terms and common words.

    Args:
        text: Poem content
        imagery_words: Imagery terms to look for (usually the poem's own);
                       terms outside the lexicon are ignored

    Returns:
        WordRelationship list sorted by count descending
    """
    if not text or not text.strip() or not imagery_words:
        return []

    lexicon_terms = set(lexicon)
    considered = [word for word in dict.fromkeys(imagery_words) if word in lexicon_terms]

    # imagery -> word -> count, in first-seen order
    relationships: dict[str, dict[str, int]] = {imagery: {} for imagery in considered}

    for sentence in split_sentences(text):
        present = [imagery for imagery in considered if imagery in sentence]
        if not present:
            continue

        characters = unique_characters(sentence)
        for imagery in present:
            word_counts = relationships[imagery]
            for char in characters:
                if char != imagery and char.strip() and char in common_words:
                    word_counts[char] = word_counts.get(char, 0) + 1

    result = [
        WordRelationship(imagery=imagery, word=word, count=count)
        for imagery, word_counts in relationships.items()
        for word, count in word_counts.items()
    ]
    return sorted(result, key=lambda rel: -rel.count)


def merge_word_relationships(groups) -> list[WordRelationship]:
    """
    Merge relationship lists by summing counts on (imagery, word).

    Returns:
        Merged list sorted by count descending, ties in first-seen order
    """
    merged: dict[tuple[str, str], int] = {}
    for relationships in groups:
        for rel in relationships:
            key = (rel.imagery, rel.word)
            merged[key] = merged.get(key, 0) + rel.count

    result = [
        WordRelationship(imagery=imagery, word=word, count=count)
        for (imagery, word), count in merged.items()
    ]
    return sorted(result, key=lambda rel: -rel.count)
