"""
Global Imagery Statistics for the Poem Imagery Pipeline

PURPOSE:
This module combines per-poem imagery counts into CORPUS-WIDE VIEWS:
a co-occurrence network, a timeline, category rollups, top imagery pairs,
merged word relationships and an imagery-word network.

Every view is recomputed from scratch on each call. Nothing is cached and
the input poems are never modified.

============================================================
SIGNAL DEFINITIONS (DOCUMENTED)
============================================================

1. GLOBAL FREQUENCY of a term
   - Sum of the term's per-poem counts

2. CO-OCCURRENCE of terms (A, B), A != B
   - Number of poems where BOTH appear (presence, not frequency)
   - Symmetric: co(A, B) == co(B, A)

3. NETWORK LINKS
   - Ordered pairs with co-occurrence > CO_OCCURRENCE_LINK_RATIO * max
   - normalized = co-occurrence / max
   - width = 1 + normalized * 5, opacity = 0.3 + normalized * 0.7

4. TIMELINE
   - Poems grouped in document order, TIMELINE_PERIOD_SIZE per period
     (the last period may be shorter)
   - One count per period per term; all-zero terms are dropped

5. CATEGORY ANALYSIS
   - Each term counts toward BOTH "main" and "main/sub" rollups

6. TOP PAIRS
   - Unordered pairs (A < B) with co-occurrence > 0,
     count descending, at most TOP_PAIRS_LIMIT

7. IMAGERY-WORD NETWORK
   - Per poem: the poem's imagery terms x the poem's word_associations
   - count = number of poems with the pair; kept if count >= MIN_IMAGERY_WORD_PAIR_COUNT
   - width = min(count * 2, IMAGERY_WORD_LINK_MAX_WIDTH)

============================================================
STORAGE
============================================================

Statistics are stored per run_id in:
- JSON artifact: data/imagery_stats/{corpus_name}/{run_id}.imagery_stats.json
"""

import os
import json
from dataclasses import dataclass, field, asdict
from typing import Optional
from dotenv import load_dotenv

from dict.common_word_dictionary import COMMON_WORD_DICTIONARY_VERSION
from dict.imagery_dictionary import IMAGERY_CATEGORIES, IMAGERY_DICTIONARY_VERSION, NATURAL_IMAGERY
from imagery_extraction import get_imagery_category
from poem_models import Occurrence, Poem
from word_relationships import WordRelationship, extract_word_relationships, merge_word_relationships
load_dotenv()

# --------------------------------------------------
# Configuration: Thresholds
# --------------------------------------------------

# Poems per timeline period
TIMELINE_PERIOD_SIZE = 5

# Links must exceed this share of the strongest co-occurrence
CO_OCCURRENCE_LINK_RATIO = 0.2

TOP_PAIRS_LIMIT = 10

# Imagery-word pairs seen in fewer poems are dropped
MIN_IMAGERY_WORD_PAIR_COUNT = 2

# Link styling
CO_OCCURRENCE_LINK_BASE_WIDTH = 1
CO_OCCURRENCE_LINK_WIDTH_SCALE = 5
CO_OCCURRENCE_LINK_BASE_OPACITY = 0.3
IMAGERY_WORD_LINK_MAX_WIDTH = 10
IMAGERY_WORD_LINK_COLOR = "#6366f1"
IMAGERY_WORD_NODE_CATEGORY = "default"


# --------------------------------------------------
# Configuration: Paths
# --------------------------------------------------

IMAGERY_STATS_DIR = os.getenv(
    "IMAGERY_STATS_DIR",
    "data/imagery_stats"
)


# --------------------------------------------------
# Data Structures
# --------------------------------------------------

@dataclass
class LineStyle:
    width: float
    color: str


@dataclass
class NetworkNode:
    name: str
    value: int
    category: str


@dataclass
class NetworkLink:
    source: str
    target: str
    value: int
    line_style: LineStyle


@dataclass
class NetworkCategory:
    name: str


@dataclass
class CoOccurrenceNetwork:
    nodes: list[NetworkNode] = field(default_factory=list)
    links: list[NetworkLink] = field(default_factory=list)
    categories: list[NetworkCategory] = field(default_factory=list)


@dataclass
class TimelineEntry:
    """Per-period counts of one imagery term."""
    imagery: str
    counts: list[int]


@dataclass
class CategoryBreakdown:
    """Term counts under one category path ("main" or "main/sub")."""
    category: str
    imagery_count: dict[str, int] = field(default_factory=dict)


@dataclass
class ImageryPair:
    """Unordered imagery pair, stored as [smaller, larger]."""
    pair: list[str]
    count: int


@dataclass
class ImageryWordPair:
    """An imagery term paired with an associated word across poems."""
    imagery: str
    word: str
    count: int
    occurrences: list[Occurrence] = field(default_factory=list)


@dataclass
class ImageryWordNetwork:
    nodes: list[NetworkNode] = field(default_factory=list)
    links: list[NetworkLink] = field(default_factory=list)


@dataclass
class GlobalStats:
    """
    Corpus-wide imagery statistics.

    This is a DERIVED view. It is rebuilt from the poems on every call.
    """
    co_occurrence_network: CoOccurrenceNetwork = field(default_factory=CoOccurrenceNetwork)
    timeline: list[TimelineEntry] = field(default_factory=list)
    category_analysis: list[CategoryBreakdown] = field(default_factory=list)
    top_pairs: list[ImageryPair] = field(default_factory=list)
    word_relationships: list[WordRelationship] = field(default_factory=list)
    imagery_word_network: ImageryWordNetwork = field(default_factory=ImageryWordNetwork)


# --------------------------------------------------
# Helper Functions
# --------------------------------------------------

def _poem_term_counts(poem: Poem, lexicon_terms: set[str]) -> dict[str, int]:
    """Lexicon-restricted {term: count} of a poem (unknown terms ignored)."""
    counts: dict[str, int] = {}
    for item in poem.imagery:
        if item.word in lexicon_terms and item.count > 0:
            counts[item.word] = counts.get(item.word, 0) + item.count
    return counts


def _co_occurrence_line_style(normalized: float) -> LineStyle:
    opacity = CO_OCCURRENCE_LINK_BASE_OPACITY + normalized * (1 - CO_OCCURRENCE_LINK_BASE_OPACITY)
    return LineStyle(
        width=CO_OCCURRENCE_LINK_BASE_WIDTH + normalized * CO_OCCURRENCE_LINK_WIDTH_SCALE,
        color=f"rgba(128, 128, 128, {opacity})",
    )


def _first_sentence_with(content: str, imagery: str, word: str) -> Optional[str]:
    for sentence in content.split("。"):
        if imagery in sentence and word in sentence:
            return sentence + "。"
    return None


# --------------------------------------------------
# Signal Computation
# --------------------------------------------------

def build_co_occurrence_matrix(
    poems: list[Poem],
    lexicon=NATURAL_IMAGERY,
) -> dict[str, dict[str, int]]:
    """
    Count, for each ordered pair of distinct terms, the poems containing both.

    Returns a sparse matrix: missing entries are 0.
    """
    lexicon_terms = set(lexicon)
    matrix: dict[str, dict[str, int]] = {}

    for poem in poems:
        present = list(_poem_term_counts(poem, lexicon_terms))
        for word_a in present:
            row = matrix.setdefault(word_a, {})
            for word_b in present:
                if word_a != word_b:
                    row[word_b] = row.get(word_b, 0) + 1

    return matrix


def find_imagery_word_pairs(
    poems: list[Poem],
    min_count: int = MIN_IMAGERY_WORD_PAIR_COUNT,
) -> list[ImageryWordPair]:
    """
    Pair each poem's imagery terms with that poem's associated words.

    Uses the word_associations already attached to each poem. A pair's
    count is the number of poems holding it; pairs below min_count are dropped.
    """
    pairs: dict[tuple[str, str], ImageryWordPair] = {}

    for poem in poems:
        imagery_words = list(dict.fromkeys(item.word for item in poem.imagery))
        associated_words = list(dict.fromkeys(a.word for a in poem.word_associations))

        for imagery in imagery_words:
            for word in associated_words:
                pair = pairs.get((imagery, word))
                if pair is None:
                    pair = ImageryWordPair(imagery=imagery, word=word, count=0)
                    pairs[(imagery, word)] = pair

                pair.count += 1
                sentence = _first_sentence_with(poem.content, imagery, word)
                if sentence is not None:
                    pair.occurrences.append(Occurrence(poem_id=poem.id, sentence=sentence))

    return [pair for pair in pairs.values() if pair.count >= min_count]


def _build_imagery_word_network(pairs: list[ImageryWordPair]) -> ImageryWordNetwork:
    node_values: dict[str, int] = {}
    links = []

    for pair in pairs:
        node_values[pair.imagery] = node_values.get(pair.imagery, 0) + pair.count
        if pair.word != pair.imagery:
            node_values[pair.word] = node_values.get(pair.word, 0) + pair.count
        links.append(NetworkLink(
            source=pair.imagery,
            target=pair.word,
            value=pair.count,
            line_style=LineStyle(
                width=min(pair.count * 2, IMAGERY_WORD_LINK_MAX_WIDTH),
                color=IMAGERY_WORD_LINK_COLOR,
            ),
        ))

    nodes = [
        NetworkNode(name=name, value=value, category=IMAGERY_WORD_NODE_CATEGORY)
        for name, value in node_values.items()
    ]
    return ImageryWordNetwork(nodes=nodes, links=links)


# --------------------------------------------------
# Main Computation
# --------------------------------------------------

def calculate_global_stats(
    poems: list[Poem],
    lexicon=NATURAL_IMAGERY,
    categories: dict = IMAGERY_CATEGORIES,
) -> GlobalStats:
    """
    Build every corpus-wide view over the poems.

    Returns an all-empty GlobalStats for an empty corpus.
    """
    if not poems:
        return GlobalStats()

    terms = list(dict.fromkeys(lexicon))
    lexicon_terms = set(terms)
    poem_counts = [_poem_term_counts(poem, lexicon_terms) for poem in poems]

    # 1. Frequency pass with category rollups
    global_frequency = {term: 0 for term in terms}
    category_stats: dict[str, dict[str, int]] = {}
    for main_category, subcategories in categories.items():
        category_stats[main_category] = {}
        for subcategory in subcategories:
            category_stats[f"{main_category}/{subcategory}"] = {}

    for counts in poem_counts:
        for word, count in counts.items():
            global_frequency[word] += count
            main_category, subcategory = get_imagery_category(word, categories)
            for path in (main_category, f"{main_category}/{subcategory}"):
                rollup = category_stats.get(path)
                if rollup is not None:
                    rollup[word] = rollup.get(word, 0) + count

    # 2. Word relationships, merged across poems
    per_poem_relationships = []
    for poem, counts in zip(poems, poem_counts):
        if not poem.content or not counts:
            continue
        per_poem_relationships.append(
            extract_word_relationships(poem.content, list(counts), lexicon=terms)
        )
    word_relationships = merge_word_relationships(per_poem_relationships)

    # 3. Co-occurrence network
    matrix = build_co_occurrence_matrix(poems, terms)
    max_co_occurrence = max((v for row in matrix.values() for v in row.values()), default=0)
    threshold = max_co_occurrence * CO_OCCURRENCE_LINK_RATIO if max_co_occurrence > 0 else 0

    nodes = [
        NetworkNode(name=term, value=value, category=get_imagery_category(term, categories)[0])
        for term, value in global_frequency.items()
        if value > 0
    ]

    links = []
    for source in terms:
        row = matrix.get(source)
        if not row:
            continue
        for target in terms:
            value = row.get(target, 0)
            if value > threshold:
                normalized = value / max_co_occurrence
                links.append(NetworkLink(
                    source=source,
                    target=target,
                    value=value,
                    line_style=_co_occurrence_line_style(normalized),
                ))

    network = CoOccurrenceNetwork(
        nodes=nodes,
        links=links,
        categories=[NetworkCategory(name=name) for name in categories],
    )

    # 4. Timeline
    period_count = (len(poems) + TIMELINE_PERIOD_SIZE - 1) // TIMELINE_PERIOD_SIZE
    timeline = []
    for term in terms:
        if global_frequency[term] == 0:
            continue
        period_counts = [0] * period_count
        for index, counts in enumerate(poem_counts):
            period_counts[index // TIMELINE_PERIOD_SIZE] += counts.get(term, 0)
        if any(period_counts):
            timeline.append(TimelineEntry(imagery=term, counts=period_counts))

    # 5. Category analysis
    category_analysis = [
        CategoryBreakdown(category=path, imagery_count=dict(rollup))
        for path, rollup in category_stats.items()
    ]

    # 6. Top pairs (each unordered pair once)
    top_pairs = []
    for source in terms:
        row = matrix.get(source)
        if not row:
            continue
        for target in terms:
            value = row.get(target, 0)
            if source < target and value > 0:
                top_pairs.append(ImageryPair(pair=[source, target], count=value))
    top_pairs.sort(key=lambda p: -p.count)

    # 7. Imagery-word network
    imagery_word_network = _build_imagery_word_network(find_imagery_word_pairs(poems))

    return GlobalStats(
        co_occurrence_network=network,
        timeline=timeline,
        category_analysis=category_analysis,
        top_pairs=top_pairs[:TOP_PAIRS_LIMIT],
        word_relationships=word_relationships,
        imagery_word_network=imagery_word_network,
    )


# --------------------------------------------------
# Persistence
# --------------------------------------------------

def save_global_stats(
    stats: GlobalStats,
    corpus_name: str,
    run_id: str,
    total_poems: int,
) -> str:
    """
    Save global statistics as a JSON artifact.

    Path: data/imagery_stats/{corpus_name}/{run_id}.imagery_stats.json
    """
    output_dir = os.path.join(IMAGERY_STATS_DIR, corpus_name)
    os.makedirs(output_dir, exist_ok=True)

    output_file = os.path.join(output_dir, f"{run_id}.imagery_stats.json")

    artifact = {
        "corpus_name": corpus_name,
        "run_id": run_id,
        "imagery_dictionary_version": IMAGERY_DICTIONARY_VERSION,
        "common_word_dictionary_version": COMMON_WORD_DICTIONARY_VERSION,
        "config": {
            "timeline_period_size": TIMELINE_PERIOD_SIZE,
            "co_occurrence_link_ratio": CO_OCCURRENCE_LINK_RATIO,
            "top_pairs_limit": TOP_PAIRS_LIMIT,
            "min_imagery_word_pair_count": MIN_IMAGERY_WORD_PAIR_COUNT,
        },
        "total_poems": total_poems,
        "stats": asdict(stats),
    }

    with open(output_file, 'w', encoding='utf-8') as f:
        json.dump(artifact, f, indent=2, ensure_ascii=False)

    return output_file


# --------------------------------------------------
# Pipeline Integration
# --------------------------------------------------

def generate_global_stats(
    poems: list[Poem],
    corpus_name: str,
    run_id: str,
) -> Optional[str]:
    """
    Compute and save global statistics.

    This is the main entry point for pipeline integration.
    NON-BLOCKING: failures are logged but do not halt the pipeline.

    Returns:
        Path to saved artifact, or None if generation failed
    """
    try:
        print(f"\n[Global Stats] Aggregating imagery statistics over {len(poems)} poems...")

        stats = calculate_global_stats(poems)
        output_path = save_global_stats(stats, corpus_name, run_id, total_poems=len(poems))

        network = stats.co_occurrence_network
        print(f"[Global Stats] {len(network.nodes)} imagery terms found, "
              f"{len(network.links)} co-occurrence links above threshold")
        print(f"[Global Stats] {len(stats.timeline)} timeline series, "
              f"{len(stats.word_relationships)} word relationships, "
              f"{len(stats.imagery_word_network.links)} imagery-word links")
        print(f"[Global Stats] Saved to: {output_path}")

        if network.nodes:
            print("[Global Stats] Top 5 imagery by frequency:")
            for node in sorted(network.nodes, key=lambda n: -n.value)[:5]:
                print(f"  - {node.name}: {node.value} ({node.category})")

        if stats.top_pairs:
            print("[Global Stats] Top 5 imagery pairs by co-occurrence:")
            for pair in stats.top_pairs[:5]:
                print(f"  - {pair.pair[0]} | {pair.pair[1]}: {pair.count} poems")

        return output_path

    except Exception as e:
        print(f"[Global Stats] ⚠️ Failed to generate statistics: {e}")
        return None
