"""
Imagery-Word Associations for the Poem Imagery Pipeline

PURPOSE:
This module computes CORPUS-WIDE ASSOCIATIONS between imagery terms and
the characters that share a clause with them, normalised by how common
each character is in the corpus. Every observation keeps its provenance
(poem id + clause) so consumers can show the evidence.

============================================================
HOW THIS DIFFERS FROM word_relationships.py
============================================================

word_relationships.py (per poem):
- sentences split on 。！？ and newlines
- caller-supplied imagery terms
- only common-word characters count

This module (whole corpus):
- clauses split on ，。！？；： and whitespace
- the full imagery lexicon
- ANY non-blank character counts
- strength normalisation and provenance

The two passes are kept apart and produce different shapes.

============================================================
SIGNAL DEFINITIONS (DOCUMENTED)
============================================================

1. CLAUSE FREQUENCY of a token
   - Number of clauses in the corpus containing the token
   - Tokens are whole clauses and the distinct characters of each clause

2. COUNT of (imagery, word)
   - Number of clauses where BOTH appear (word is a single character)

3. STRENGTH
   - Formula: count / clause_frequency(word)
   - Recomputed on every increment
   - Range: (0.0, 1.0], since every counted clause also adds to the
     word's clause frequency

4. OCCURRENCES
   - One {poem_id, sentence} record per counted clause, never de-duplicated

Only associations with count >= MIN_ASSOCIATION_COUNT are reported,
sorted by strength descending.

============================================================
STORAGE
============================================================

Association data is stored per run_id in:
- JSON artifact: data/imagery_associations/{corpus_name}/{run_id}.imagery_associations.json
"""

import os
import json
from dataclasses import dataclass, field, asdict, replace
from typing import Optional
from dotenv import load_dotenv

from dict.imagery_dictionary import IMAGERY_DICTIONARY_VERSION, NATURAL_IMAGERY
from poem_models import Occurrence, Poem, WordAssociation
from text_utils import split_clauses, unique_characters
load_dotenv()

# --------------------------------------------------
# Configuration
# --------------------------------------------------

# MIN_ASSOCIATION_COUNT: Minimum shared clauses for an association to be reported
MIN_ASSOCIATION_COUNT = 2

IMAGERY_ASSOCIATIONS_DIR = os.getenv(
    "IMAGERY_ASSOCIATIONS_DIR",
    "data/imagery_associations"
)


# --------------------------------------------------
# Data Structures
# --------------------------------------------------

@dataclass
class ImageryWordAssociation:
    """All reported associations of one imagery term."""
    imagery: str
    associations: list[WordAssociation] = field(default_factory=list)


# --------------------------------------------------
# Signal Computation
# --------------------------------------------------

def count_clause_frequencies(poems: list[Poem]) -> dict[str, int]:
    """
    Count, for every token, the number of clauses containing it.

    A clause contributes once for itself and once for each of its
    distinct characters (a one-character clause counts once).
    """
    frequencies: dict[str, int] = {}
    for poem in poems:
        for clause in split_clauses(poem.content):
            tokens = dict.fromkeys([clause, *clause])
            for token in tokens:
                frequencies[token] = frequencies.get(token, 0) + 1
    return frequencies


def analyze_imagery_word_associations(
    poems: list[Poem],
    lexicon=NATURAL_IMAGERY,
    min_count: int = MIN_ASSOCIATION_COUNT,
) -> list[ImageryWordAssociation]:
    """
    Compute corpus-wide imagery-word associations.

    Returns:
        One entry per imagery term seen in any clause (first-seen order),
        each listing associations with count >= min_count by strength descending.
    """
    frequencies = count_clause_frequencies(poems)
    terms = list(dict.fromkeys(lexicon))

    # imagery -> word -> association, in first-seen order
    co_occurrences: dict[str, dict[str, WordAssociation]] = {}

    for poem in poems:
        for clause in split_clauses(poem.content):
            present = [imagery for imagery in terms if imagery in clause]
            if not present:
                continue

            characters = unique_characters(clause)
            for imagery in present:
                word_map = co_occurrences.setdefault(imagery, {})
                for char in characters:
                    if char == imagery or not char.strip():
                        continue

                    association = word_map.get(char)
                    if association is None:
                        association = WordAssociation(word=char, count=0, strength=0.0)
                        word_map[char] = association

                    association.count += 1
                    association.strength = association.count / (frequencies.get(char) or 1)
                    association.occurrences.append(Occurrence(poem_id=poem.id, sentence=clause))

    results = []
    for imagery, word_map in co_occurrences.items():
        kept = [a for a in word_map.values() if a.count >= min_count]
        kept.sort(key=lambda a: -a.strength)
        results.append(ImageryWordAssociation(imagery=imagery, associations=kept))

    return results


def attach_word_associations(
    poems: list[Poem],
    associations: Optional[list[ImageryWordAssociation]] = None,
) -> list[Poem]:
    """
    Return copies of the poems with word_associations filled in.

    Each poem receives the corpus associations observed in that poem,
    merged by word:
    - count: occurrences recorded in this poem
    - strength: highest corpus strength of the word
    - occurrences: only this poem's records

    The input poems are not modified.
    """
    if associations is None:
        associations = analyze_imagery_word_associations(poems)

    # poem_id -> word -> merged association, built in one pass over all occurrences
    by_poem: dict[str, dict[str, WordAssociation]] = {}
    for entry in associations:
        for association in entry.associations:
            for occ in association.occurrences:
                merged = by_poem.setdefault(occ.poem_id, {})
                local = merged.get(association.word)
                if local is None:
                    local = WordAssociation(word=association.word, count=0, strength=association.strength)
                    merged[association.word] = local
                local.count += 1
                local.strength = max(local.strength, association.strength)
                local.occurrences.append(Occurrence(occ.poem_id, occ.sentence))

    enriched = []
    for poem in poems:
        merged = by_poem.get(poem.id, {})
        word_associations = [
            replace(a, occurrences=list(a.occurrences))
            for a in sorted(merged.values(), key=lambda a: -a.strength)
        ]
        enriched.append(replace(poem, word_associations=word_associations))

    return enriched


# --------------------------------------------------
# Persistence
# --------------------------------------------------

def save_word_associations(
    associations: list[ImageryWordAssociation],
    corpus_name: str,
    run_id: str,
) -> str:
    """
    Save imagery-word associations as a JSON artifact.

    Path: data/imagery_associations/{corpus_name}/{run_id}.imagery_associations.json
    """
    output_dir = os.path.join(IMAGERY_ASSOCIATIONS_DIR, corpus_name)
    os.makedirs(output_dir, exist_ok=True)

    output_file = os.path.join(output_dir, f"{run_id}.imagery_associations.json")

    artifact = {
        "corpus_name": corpus_name,
        "run_id": run_id,
        "imagery_dictionary_version": IMAGERY_DICTIONARY_VERSION,
        "min_association_count": MIN_ASSOCIATION_COUNT,
        "associations": [asdict(entry) for entry in associations],
    }

    with open(output_file, 'w', encoding='utf-8') as f:
        json.dump(artifact, f, indent=2, ensure_ascii=False)

    return output_file


# --------------------------------------------------
# Pipeline Integration
# --------------------------------------------------

def generate_word_associations(
    poems: list[Poem],
    corpus_name: str,
    run_id: str,
) -> Optional[tuple[list[Poem], str]]:
    """
    Compute, save and attach imagery-word associations.

    NON-BLOCKING: failures are logged but do not halt the pipeline.

    Returns:
        (enriched poems, artifact path), or None if generation failed
    """
    try:
        print(f"\n[Associations] Scanning {len(poems)} poems for imagery-word associations...")

        associations = analyze_imagery_word_associations(poems)
        output_path = save_word_associations(associations, corpus_name, run_id)
        enriched = attach_word_associations(poems, associations)

        reported = sum(len(entry.associations) for entry in associations)
        print(f"[Associations] {len(associations)} imagery terms, "
              f"{reported} associations with count >= {MIN_ASSOCIATION_COUNT}")
        print(f"[Associations] Saved to: {output_path}")

        strongest = sorted(
            ((entry.imagery, a) for entry in associations for a in entry.associations),
            key=lambda pair: (-pair[1].strength, -pair[1].count),
        )
        if strongest:
            print("[Associations] Top 5 associations by strength:")
            for imagery, association in strongest[:5]:
                print(f"  - {imagery} | {association.word}: "
                      f"strength={association.strength:.3f} (count={association.count})")

        return enriched, output_path

    except Exception as e:
        print(f"[Associations] ⚠️ Failed to generate associations: {e}")
        return None
