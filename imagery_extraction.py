"""
Imagery Extraction for the Poem Imagery Pipeline

PURPOSE:
This module extracts LEXICAL SIGNALS for natural-imagery terms from poem
text. It records WHICH lexicon terms appear and HOW OFTEN. It does NOT
interpret what the imagery means in the poem.

============================================================
MATCHING RULES (DOCUMENTED)
============================================================

1. Every lexicon term is matched as a literal substring
2. Matches of one term are non-overlapping and sequential
   ("月月月" holds three "月", "江江" holds one "江江")
3. NO word boundaries, NO longest-match preference:
   if the lexicon holds both "星" and "北极星", the text "北极星"
   counts once for each of them
4. Only terms with count > 0 are reported
5. Deterministic: results sort by count descending, ties keep
   lexicon order

============================================================
CATEGORY LOOKUP
============================================================

Each term maps to (main category, subcategory) through the static
taxonomy. Terms outside the taxonomy fall back to ("其他", "未分类").
"""

import re
from collections import defaultdict

from dict.imagery_dictionary import (
    IMAGERY_CATEGORIES,
    IMAGERY_DICTIONARY_VERSION,
    NATURAL_IMAGERY,
    UNCATEGORIZED_MAIN,
    UNCATEGORIZED_SUB,
)
from poem_models import ImageryCount


# --------------------------------------------------
# Term Matching
# --------------------------------------------------

def _compile_imagery_patterns(lexicon) -> list[tuple[str, re.Pattern]]:
    """Compile one literal pattern per distinct lexicon term, in lexicon order."""
    return [(term, re.compile(re.escape(term))) for term in dict.fromkeys(lexicon) if term]


def extract_imagery(text: str, lexicon=NATURAL_IMAGERY) -> list[ImageryCount]:
    """
    Count every lexicon term in text.

    Returns:
        ImageryCount list (count > 0 only), count descending,
        ties in lexicon order.
    """
    if not text:
        return []

    counts = []
    for term, pattern in _compile_imagery_patterns(lexicon):
        found = len(pattern.findall(text))
        if found > 0:
            counts.append(ImageryCount(word=term, count=found))

    # sorted() is stable, so equal counts keep lexicon order
    return sorted(counts, key=lambda item: -item.count)


# --------------------------------------------------
# Category Lookup
# --------------------------------------------------

def get_imagery_category(imagery: str, categories: dict = IMAGERY_CATEGORIES) -> tuple[str, str]:
    """
    Return (main_category, subcategory) for a term.

    The first taxonomy path listing the term wins.
    """
    for main_category, subcategories in categories.items():
        for subcategory, terms in subcategories.items():
            if imagery in terms:
                return main_category, subcategory
    return UNCATEGORIZED_MAIN, UNCATEGORIZED_SUB


# --------------------------------------------------
# Dictionary Management Utilities
# --------------------------------------------------

def get_lexicon_info() -> dict:
    """
    Get information about the current imagery lexicon.

    Useful for documentation and debugging.
    """
    categories = defaultdict(list)
    for term in NATURAL_IMAGERY:
        main_category, subcategory = get_imagery_category(term)
        categories[f"{main_category}/{subcategory}"].append(term)

    return {
        "version": IMAGERY_DICTIONARY_VERSION,
        "total_terms": len(NATURAL_IMAGERY),
        "multi_character_terms": sum(1 for term in NATURAL_IMAGERY if len(term) > 1),
        "categories": dict(categories),
    }


def list_imagery_by_category(main_category: str) -> list[tuple[str, list[str]]]:
    """
    List the subcategories of a main category with their terms.

    Returns list of (subcategory, terms) tuples; empty for unknown categories.
    """
    subcategories = IMAGERY_CATEGORIES.get(main_category, {})
    return [(subcategory, list(terms)) for subcategory, terms in subcategories.items()]


# --------------------------------------------------
# Standalone Execution
# --------------------------------------------------

if __name__ == "__main__":
    import sys

    if len(sys.argv) < 2:
        print("Usage: python imagery_extraction.py <text>")
        print("\nCounts natural-imagery terms in the given text.")
        print("\nExample:")
        print('  python imagery_extraction.py "举头望明月，低头思故乡"')
        print("\nLexicon Info:")
        info = get_lexicon_info()
        print(f"  Version: {info['version']}")
        print(f"  Terms: {info['total_terms']} ({info['multi_character_terms']} multi-character)")
        print(f"  Categories: {list(info['categories'].keys())}")
        sys.exit(1)

    for item in extract_imagery(sys.argv[1]):
        main_category, subcategory = get_imagery_category(item.word)
        print(f"  - {item.word}: {item.count} ({main_category}/{subcategory})")
